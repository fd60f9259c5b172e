import numpy as np
import pytest

from lielib import kinematics, se3, so3


@pytest.fixture
def rotation():
    return so3.Rotation(np.array([0.3, -0.2, 0.5]))


def test_drdt_round_trips_through_angular_velocity(rotation):
    omega = np.array([0.1, 0.7, -0.4])
    r_dot = kinematics.drdt(omega, rotation)
    np.testing.assert_allclose(
        kinematics.angular_vel_from_rotation(r_dot, rotation), omega, atol=1e-12
    )


def test_drdt_accepts_plain_matrix(rotation):
    omega = np.array([0.2, 0.0, 0.3])
    np.testing.assert_allclose(
        kinematics.drdt(omega, rotation.matrix), kinematics.drdt(omega, rotation)
    )


def test_rotation_correction_keeps_exact_rotation(rotation):
    np.testing.assert_allclose(
        kinematics.rotation_correction(rotation.matrix), rotation.matrix, atol=1e-12
    )


def test_rotation_correction_restores_orthogonality(rotation):
    noisy = rotation.matrix + 0.01 * np.array(
        [[0.3, -0.1, 0.2], [0.5, 0.1, -0.4], [-0.2, 0.6, 0.1]]
    )
    corrected = kinematics.rotation_correction(noisy)
    np.testing.assert_allclose(corrected @ corrected.T, np.eye(3), atol=1e-12)
    assert np.linalg.det(corrected) == pytest.approx(1.0)


def test_rotation_correction_of_singular_matrix_raises():
    with pytest.raises(np.linalg.LinAlgError):
        kinematics.rotation_correction(np.zeros((3, 3)))


def test_angular_velocity_corrects_scaled_rotation(rotation):
    omega = np.array([0.5, -0.3, 0.2])
    r_dot = kinematics.drdt(omega, rotation)
    scaled = 1.01 * rotation.matrix
    np.testing.assert_allclose(
        kinematics.angular_vel_from_rotation(r_dot, scaled), omega, atol=1e-12
    )


def test_axis_angle_rate_round_trip():
    phi = np.array([0.4, 0.1, -0.6])
    omega = np.array([1.0, -0.5, 0.25])
    phi_dot = kinematics.dphi_dt(phi, omega)
    np.testing.assert_allclose(
        kinematics.angular_vel_from_axis_angle(phi_dot, phi), omega, atol=1e-12
    )


def test_compute_twist_inverts_dt_dt():
    pose = se3.Pose.from_axis_angle([0.2, 0.3, -0.1], [1.0, 2.0, 3.0])
    twist = np.array([0.3, -0.2, 0.1, 0.3, -0.2, 0.1])
    t_dot = kinematics.dt_dt(twist, pose.matrix)
    np.testing.assert_allclose(
        kinematics.compute_twist(t_dot, pose.inverse()), twist, atol=1e-12
    )


def test_convert_twist_frame_round_trip():
    pose = se3.Pose.from_axis_angle([0.1, -0.4, 0.3], [0.5, -1.0, 2.0])
    twist = np.array([1.0, 0.5, -0.2, 0.3, 0.1, -0.6])
    in_space = kinematics.convert_twist_frame(pose.adjoint(), twist)
    back = kinematics.convert_twist_frame(pose.adjoint_inv(), in_space)
    np.testing.assert_allclose(back, twist, atol=1e-12)


def test_p_dot_without_rotation_is_linear_velocity():
    twist = np.array([1.0, 2.0, 3.0, 0.0, 0.0, 0.0])
    np.testing.assert_allclose(kinematics.p_dot(twist, [4.0, 5.0, 6.0]), [1.0, 2.0, 3.0])


def test_p_dot_rotation_part_is_cross_product():
    omega = np.array([0.3, -0.7, 0.2])
    p = np.array([1.0, 0.5, -2.0])
    twist = np.concatenate([np.zeros(3), omega])
    np.testing.assert_allclose(kinematics.p_dot(twist, p), np.cross(omega, p))


def test_p_dot_rejects_short_twist():
    with pytest.raises(ValueError):
        kinematics.p_dot([1.0, 2.0, 3.0], [0.0, 0.0, 0.0])