import numpy as np
import pytest

from lielib import se3, so3, uncertainty


def _diag_sum(m):
    return float(np.diagonal(m).sum())


@pytest.fixture
def rotation():
    return so3.Rotation(np.array([0.4, -0.3, 0.2]))


@pytest.fixture
def spd6():
    a = np.arange(36, dtype=float).reshape(6, 6) / 50.0
    return a @ a.T + 0.1 * np.eye(6)


def test_bracket_single_diagonal_sum_invariant():
    a = np.array([[1.0, 2.0, 0.5], [0.3, -1.0, 4.0], [2.0, 1.0, 3.0]])
    assert _diag_sum(uncertainty.bracket_single(a)) == pytest.approx(-2.0 * _diag_sum(a))


def test_bracket_single_off_diagonal_unchanged():
    a = np.array([[1.0, 2.0, 0.5], [0.3, -1.0, 4.0], [2.0, 1.0, 3.0]])
    result = uncertainty.bracket_single(a)
    mask = ~np.eye(3, dtype=bool)
    np.testing.assert_allclose(result[mask], a[mask])


def test_bracket_double_with_zero_is_zero():
    b = np.array([[1.0, 0.2, 0.0], [0.2, 2.0, 0.1], [0.0, 0.1, 3.0]])
    np.testing.assert_allclose(uncertainty.bracket_double(np.zeros((3, 3)), b), np.zeros((3, 3)))


def test_bracket_rejects_wrong_shape():
    with pytest.raises(ValueError):
        uncertainty.bracket_single(np.eye(2))


def test_merge_with_zero_first_covariance_and_identity_pose(spd6):
    identity = se3.Pose.from_axis_angle(np.zeros(3), np.zeros(3))
    merged = uncertainty.merge_poses_cov(identity, np.zeros((6, 6)), spd6)
    np.testing.assert_allclose(merged, spd6, atol=1e-12)


def test_merge_of_zero_covariances_is_zero():
    pose = se3.Pose.from_axis_angle([0.1, 0.2, 0.3], [1.0, -1.0, 0.5])
    merged = uncertainty.merge_poses_cov(pose, np.zeros((6, 6)), np.zeros((6, 6)))
    np.testing.assert_allclose(merged, np.zeros((6, 6)))


def test_merge_without_second_covariance_is_first(spd6):
    pose = se3.Pose.from_axis_angle([0.1, 0.2, 0.3], [1.0, -1.0, 0.5])
    merged = uncertainty.merge_poses_cov(pose, spd6, np.zeros((6, 6)))
    np.testing.assert_allclose(merged, spd6, atol=1e-12)


def test_rotate_vector_without_noise(rotation):
    x = np.array([1.0, 2.0, -0.5])
    np.testing.assert_allclose(
        uncertainty.rotate_vector(rotation, np.zeros((3, 3)), x), rotation.matrix @ x
    )


def test_rotate_vector_isotropic_noise_shrinks_mean(rotation):
    x = np.array([1.0, 2.0, -0.5])
    result = uncertainty.rotate_vector(rotation, 0.05 * np.eye(3), x)
    expected_direction = rotation.matrix @ x
    np.testing.assert_allclose(np.cross(result, expected_direction), np.zeros(3), atol=1e-12)
    assert np.linalg.norm(result) < np.linalg.norm(x)
    assert np.dot(result, expected_direction) > 0


def test_left_random_r_with_zero_noise(rotation):
    sample = uncertainty.left_random_r(rotation, np.zeros(3))
    np.testing.assert_allclose(sample.matrix, rotation.matrix, atol=1e-12)


def test_left_random_r_stays_orthogonal(rotation):
    sample = uncertainty.left_random_r(rotation, np.array([0.05, -0.02, 0.1]))
    m = sample.matrix
    np.testing.assert_allclose(m @ m.T, np.eye(3), atol=1e-12)


def test_update_r_mean_composes(rotation):
    other = so3.Rotation(np.array([-0.1, 0.5, 0.3]))
    updated = uncertainty.update_r_mean(rotation, other)
    np.testing.assert_allclose(updated.matrix, rotation.matrix @ other.matrix)


def test_update_r_covariance_keeps_spectrum(rotation):
    cov = np.diag([0.1, 0.2, 0.3])
    updated = uncertainty.update_r_covariance(rotation, cov)
    np.testing.assert_allclose(np.linalg.eigvalsh(updated), [0.1, 0.2, 0.3], atol=1e-12)
    np.testing.assert_allclose(updated, updated.T, atol=1e-12)


def test_update_t_mean_composes():
    a = se3.Pose.from_axis_angle([0.1, 0.0, 0.2], [1.0, 2.0, 3.0])
    b = se3.Pose.from_axis_angle([0.0, -0.3, 0.1], [-1.0, 0.5, 0.0])
    np.testing.assert_allclose(uncertainty.update_t_mean(a, b).matrix, a.matrix @ b.matrix)


def test_update_t_covariance_identity_pose(spd6):
    identity = se3.Pose.from_axis_angle(np.zeros(3), np.zeros(3))
    np.testing.assert_allclose(uncertainty.update_t_covariance(identity, spd6), spd6)


def test_update_t_covariance_pure_rotation_keeps_diagonal_sum(spd6):
    pose = se3.Pose.from_axis_angle([0.3, -0.2, 0.1], np.zeros(3))
    updated = uncertainty.update_t_covariance(pose, spd6)
    assert _diag_sum(updated) == pytest.approx(_diag_sum(spd6))
    np.testing.assert_allclose(updated, updated.T, atol=1e-12)