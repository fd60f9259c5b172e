"""The rotation group SO(3) and its Lie algebra so(3)."""

from __future__ import annotations

import numpy as np

__all__ = [
    "Rotation",
    "drp_dphi",
    "drp_dr",
    "exp_map",
    "j_jt",
    "j_jt_inv",
    "left_distance",
    "left_jacobian",
    "left_jacobian_inv",
    "log_map",
    "right_distance",
    "right_jacobian",
    "right_jacobian_inv",
    "skew_symmetric",
    "so3_to_angle",
    "unhat",
]

_I3 = np.eye(3)


def _vec3(v) -> np.ndarray:
    arr = np.asarray(v, dtype=float)
    if arr.shape != (3,):
        raise ValueError(f"expected a 3-vector, got shape {arr.shape}")
    return arr


def _mat3(m) -> np.ndarray:
    arr = np.asarray(m, dtype=float)
    if arr.shape != (3, 3):
        raise ValueError(f"expected a 3x3 matrix, got shape {arr.shape}")
    return arr


def _diag_sum(m: np.ndarray) -> np.float64:
    """Sum of the diagonal entries of a square matrix."""
    return np.float64(np.diagonal(m).sum())


def _angle_and_axis(phi) -> tuple[np.float64, np.ndarray]:
    """Split a rotation vector into its norm and unit direction (zero stays zero)."""
    v = _vec3(phi)
    angle = np.float64(np.linalg.norm(v))
    axis = v / angle if angle > 0 else v.copy()
    return angle, axis


def so3_to_angle(matrix) -> float:
    """Return the rotation angle of an SO(3) matrix, in [0, pi]."""
    m = _mat3(matrix)
    with np.errstate(invalid="ignore"):
        return float(np.arccos((_diag_sum(m) - 1.0) / 2.0))


def unhat(matrix) -> np.ndarray:
    """Return the 3-vector of an so(3) skew-symmetric matrix."""
    m = _mat3(matrix)
    return np.array([m[2, 1], m[0, 2], m[1, 0]], dtype=float)


def skew_symmetric(vec) -> np.ndarray:
    """Return the so(3) hat matrix of a 3-vector."""
    x, y, z = _vec3(vec)
    return np.array([[0.0, -z, y], [z, 0.0, -x], [-y, x, 0.0]], dtype=float)


def exp_map(phi) -> np.ndarray:
    """Map an axis-angle vector to its SO(3) rotation matrix."""
    angle, a = _angle_and_axis(phi)
    return (
        np.cos(angle) * _I3
        + (1.0 - np.cos(angle)) * np.outer(a, a)
        + np.sin(angle) * skew_symmetric(a)
    )


def log_map(rotation) -> np.ndarray:
    """Map an SO(3) matrix to its axis-angle vector."""
    r = _mat3(rotation)
    angle = np.float64(so3_to_angle(r))
    tr = _diag_sum(r)
    with np.errstate(invalid="ignore", divide="ignore"):
        sin_theta = 0.5 * np.sqrt((3.0 - tr) * (1.0 + tr))
        return (angle * unhat(r - r.T)) / (2.0 * sin_theta)


def left_jacobian(phi) -> np.ndarray:
    """Left Jacobian of SO(3)."""
    angle, a = _angle_and_axis(phi)
    with np.errstate(invalid="ignore", divide="ignore"):
        sinc = np.sin(angle) / angle
        return (
            sinc * _I3
            + (1.0 - sinc) * np.outer(a, a)
            + skew_symmetric(a) * (1.0 - np.cos(angle)) / angle
        )


def left_jacobian_inv(phi) -> np.ndarray:
    """Inverse of the left Jacobian of SO(3)."""
    angle, a = _angle_and_axis(phi)
    half = 0.5 * angle
    with np.errstate(invalid="ignore", divide="ignore"):
        cot_term = half / np.tan(half)
        return cot_term * _I3 + (1.0 - cot_term) * np.outer(a, a) - half * skew_symmetric(a)


def right_jacobian(phi) -> np.ndarray:
    """Right Jacobian of SO(3)."""
    angle, a = _angle_and_axis(phi)
    with np.errstate(invalid="ignore", divide="ignore"):
        sinc = np.sin(angle) / angle
        return (
            sinc * _I3
            + (1.0 - sinc) * np.outer(a, a)
            - skew_symmetric(a) * (1.0 - np.cos(angle)) / angle
        )


def right_jacobian_inv(phi) -> np.ndarray:
    """Inverse of the right Jacobian of SO(3)."""
    angle, a = _angle_and_axis(phi)
    half = 0.5 * angle
    with np.errstate(invalid="ignore", divide="ignore"):
        cot_term = half / np.tan(half)
        return cot_term * _I3 + (1.0 - cot_term) * np.outer(a, a) + half * skew_symmetric(a)


def _gamma(angle: np.float64) -> np.float64:
    with np.errstate(invalid="ignore", divide="ignore"):
        return 2.0 * (1.0 - np.cos(angle)) / angle**2


def j_jt(phi) -> np.ndarray:
    """Return J @ J.T for the left Jacobian J."""
    angle, a = _angle_and_axis(phi)
    gamma = _gamma(angle)
    return gamma * _I3 + (1.0 - gamma) * np.outer(a, a)


def j_jt_inv(phi) -> np.ndarray:
    """Return the inverse of J @ J.T for the left Jacobian J."""
    angle, a = _angle_and_axis(phi)
    with np.errstate(invalid="ignore", divide="ignore"):
        inv_gamma = 1.0 / _gamma(angle)
    return inv_gamma * _I3 + (1.0 - inv_gamma) * np.outer(a, a)


class Rotation:
    """An element of SO(3), built from an axis-angle vector or a 3x3 matrix.

    Without a value both the vector and the matrix are zero.
    """

    def __init__(self, value=None):
        if value is None:
            self._vector = np.zeros(3)
            self._matrix = np.zeros((3, 3))
            return
        arr = np.asarray(value, dtype=float)
        if arr.shape == (3,):
            self._vector = arr.copy()
            self._matrix = exp_map(arr)
        elif arr.shape == (3, 3):
            self._matrix = arr.copy()
            self._vector = log_map(arr)
        else:
            raise ValueError(
                f"expected a 3-vector or a 3x3 matrix, got shape {arr.shape}"
            )

    def __repr__(self) -> str:
        return f"Rotation(vector={self._vector.tolist()!r})"

    @property
    def matrix(self) -> np.ndarray:
        """The 3x3 rotation matrix."""
        return self._matrix.copy()

    @property
    def vector(self) -> np.ndarray:
        """The axis-angle rotation vector."""
        return self._vector.copy()

    def __mul__(self, other):
        if not isinstance(other, Rotation):
            return NotImplemented
        return Rotation(self._matrix @ other._matrix)

    def transpose(self) -> Rotation:
        """Return the rotation built from the transposed matrix."""
        return Rotation(self._matrix.T)

    def inverse(self) -> Rotation:
        """Return the inverse rotation."""
        return self.transpose()

    def __getitem__(self, index):
        return float(self._matrix[index])


def _as_matrix(rotation) -> np.ndarray:
    if isinstance(rotation, Rotation):
        return rotation.matrix
    return _mat3(rotation)


def drp_dphi(rotation, p) -> np.ndarray:
    """Derivative of R*p with respect to the axis-angle vector of R."""
    r = _as_matrix(rotation)
    jl = left_jacobian(log_map(r))
    return -skew_symmetric(r @ _vec3(p)) @ jl


def drp_dr(rotation, p) -> np.ndarray:
    """Derivative of R*p with respect to a left perturbation of R."""
    r = _as_matrix(rotation)
    return -skew_symmetric(r @ _vec3(p))


def left_distance(r1, r2) -> np.ndarray:
    """Left difference log(R1 @ R2.T) between two rotations."""
    return log_map(_as_matrix(r1) @ _as_matrix(r2).T)


def right_distance(r1, r2) -> np.ndarray:
    """Right difference log(R1.T @ R2) between two rotations."""
    return log_map(_as_matrix(r1).T @ _as_matrix(r2))