"""Rotation and pose kinematics built on SO(3) and SE(3)."""

from __future__ import annotations

import numpy as np

from lielib import se3, so3

__all__ = [
    "angular_vel_from_axis_angle",
    "angular_vel_from_rotation",
    "compute_twist",
    "convert_twist_frame",
    "dphi_dt",
    "drdt",
    "dt_dt",
    "p_dot",
    "rotation_correction",
]

_ORTHOGONALITY_TOLERANCE = 1e-4


def _vector(v, n: int) -> np.ndarray:
    arr = np.asarray(v, dtype=float)
    if arr.shape != (n,):
        raise ValueError(f"expected a {n}-vector, got shape {arr.shape}")
    return arr


def _matrix(m, n: int) -> np.ndarray:
    arr = np.asarray(m, dtype=float)
    if arr.shape != (n, n):
        raise ValueError(f"expected a {n}x{n} matrix, got shape {arr.shape}")
    return arr


def _rotation_matrix(rotation) -> np.ndarray:
    if isinstance(rotation, so3.Rotation):
        return rotation.matrix
    return _matrix(rotation, 3)


def _is_approx(a: np.ndarray, b: np.ndarray, precision: float) -> bool:
    """Relative Frobenius-norm comparison of two matrices."""
    limit = precision * min(np.linalg.norm(a), np.linalg.norm(b))
    return bool(np.linalg.norm(a - b) <= limit)


def drdt(ang_vel, rotation) -> np.ndarray:
    """Time derivative of a rotation matrix under an angular velocity."""
    return so3.skew_symmetric(_vector(ang_vel, 3)) @ _rotation_matrix(rotation)


def rotation_correction(c) -> np.ndarray:
    """Project a near-rotation matrix back onto SO(3) as (C C^T)^(-1/2) C.

    Raises numpy.linalg.LinAlgError when the decomposition fails or the
    square root of C C^T is singular.
    """
    m = _matrix(c, 3)
    eigenvalues, eigenvectors = np.linalg.eigh(m @ m.T)
    with np.errstate(invalid="ignore"):
        sqrt_values = np.sqrt(eigenvalues)
    sqrt_a = eigenvectors @ np.diag(sqrt_values) @ eigenvectors.T
    return np.linalg.inv(sqrt_a) @ m


def angular_vel_from_rotation(r_dot, rotation) -> np.ndarray:
    """Angular velocity from dR/dt and R, correcting R first if it is not orthogonal."""
    c = _rotation_matrix(rotation)
    if not _is_approx(np.eye(3), c.T @ c, _ORTHOGONALITY_TOLERANCE):
        c = rotation_correction(c)
    return so3.unhat(_rotation_matrix(r_dot) @ c.T)


def dphi_dt(phi, ang_vel) -> np.ndarray:
    """Time derivative of an axis-angle vector under an angular velocity."""
    return so3.left_jacobian_inv(phi) @ _vector(ang_vel, 3)


def angular_vel_from_axis_angle(phi_dot, phi) -> np.ndarray:
    """Angular velocity J(phi) @ dphi/dt."""
    return so3.left_jacobian(phi) @ _vector(phi_dot, 3)


def compute_twist(t_dot, t_inv) -> np.ndarray:
    """Twist 6-vector of dT/dt @ T^-1."""
    return se3.unhat_6d(_matrix(t_dot, 4) @ _matrix(t_inv, 4))


def dt_dt(twist, transform) -> np.ndarray:
    """Time derivative of a pose matrix under a twist."""
    return se3.skew_symmetric(twist) @ _matrix(transform, 4)


def convert_twist_frame(ad_tsb, twist_b) -> np.ndarray:
    """Express a body twist in the space frame through the adjoint of T_sb."""
    return _matrix(ad_tsb, 6) @ _vector(twist_b, 6)


def p_dot(twist, p) -> np.ndarray:
    """Time derivative of the translation part of a pose under a twist [v, omega]."""
    t = _vector(twist, 6)
    v, omega = t[:3], t[3:]
    return v - so3.skew_symmetric(_vector(p, 3)) @ omega