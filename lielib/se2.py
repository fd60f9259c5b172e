"""The planar rigid-motion group SE(2) and its Lie algebra se(2)."""

from __future__ import annotations

import math

import numpy as np

from lielib import so2

__all__ = [
    "Pose",
    "exp_map",
    "log_map",
    "skew_symmetric",
    "unhat",
]

_I2 = np.eye(2)


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


def _v_coefficients(angle: np.float64) -> tuple[np.float64, np.float64]:
    """Coefficients a, b of V = a*I + b*hat(1); they are NaN at a zero angle."""
    with np.errstate(invalid="ignore", divide="ignore"):
        return np.sin(angle) / angle, (1.0 - np.cos(angle)) / angle


def skew_symmetric(angular_vel: float, linear_vel) -> np.ndarray:
    """Return the se(2) hat matrix of an angular and a linear velocity."""
    tau_hat = np.zeros((3, 3))
    tau_hat[:2, :2] = so2.skew_symmetric(float(angular_vel))
    tau_hat[:2, 2] = _vector(linear_vel, 2)
    return tau_hat


def unhat(tau_hat) -> np.ndarray:
    """Return the twist [vx, vy, w] of an se(2) hat matrix."""
    m = _matrix(tau_hat, 3)
    return np.array([m[0, 2], m[1, 2], so2.unhat(m[:2, :2])], dtype=float)


def exp_map(tau) -> np.ndarray:
    """Map a twist [vx, vy, w] to its 3x3 SE(2) matrix."""
    t = _vector(tau, 3)
    angle = np.float64(t[2])
    a, b = _v_coefficients(angle)
    v = a * _I2 + so2.skew_symmetric(1.0) * b
    result = np.eye(3)
    result[:2, :2] = so2.exp_map(float(angle))
    result[:2, 2] = v @ t[:2]
    return result


def log_map(transform) -> np.ndarray:
    """Map a 3x3 SE(2) matrix to a twist [vx, vy, w].

    The V matrix is evaluated at the sine stored in the rotation block.
    """
    m = _matrix(transform, 3)
    rotation = m[:2, :2]
    translation = m[:2, 2]
    a, b = _v_coefficients(np.float64(so2.unhat(rotation)))
    with np.errstate(invalid="ignore", divide="ignore"):
        v_inv = np.array([[a, b], [-b, a]]) / (a * a + b * b)
        linear = v_inv @ translation
    return np.array([linear[0], linear[1], so2.log_map(rotation)], dtype=float)


class Pose:
    """An element of SE(2), held as its 3x3 homogeneous matrix."""

    def __init__(self, matrix=None):
        if matrix is None:
            m = np.eye(3)
        else:
            m = _matrix(matrix, 3).copy()
        self._matrix = m
        self._rotation = m[:2, :2].copy()
        self._translation = m[:2, 2].copy()

    @classmethod
    def from_twist(cls, twist) -> Pose:
        """Build the pose reached by the exponential of a twist."""
        return cls(exp_map(twist))

    @classmethod
    def from_rotation(cls, rotation, translation) -> Pose:
        """Build a pose from an angle, a 2x2 matrix or an SO(2) rotation, and a translation."""
        if isinstance(rotation, so2.Rotation):
            r = rotation.matrix
        else:
            arr = np.asarray(rotation, dtype=float)
            r = so2.exp_map(float(arr)) if arr.ndim == 0 else _matrix(arr, 2)
        m = np.eye(3)
        m[:2, :2] = r
        m[:2, 2] = _vector(translation, 2)
        return cls(m)

    def __repr__(self) -> str:
        return f"Pose(matrix={self._matrix.tolist()!r})"

    def __mul__(self, other):
        if not isinstance(other, Pose):
            return NotImplemented
        m = np.eye(3)
        m[:2, :2] = self._rotation @ other._rotation
        m[:2, 2] = self._translation + self._rotation @ other._translation
        return Pose(m)

    def inverse(self) -> np.ndarray:
        """Return the inverse transform as a 3x3 matrix."""
        m = np.eye(3)
        m[:2, :2] = self._rotation.T
        m[:2, 2] = -self._rotation.T @ self._translation
        return m

    def adjoint(self) -> np.ndarray:
        """Return the 3x3 adjoint matrix."""
        m = np.eye(3)
        m[:2, :2] = self._rotation
        m[:2, 2] = -so2.skew_symmetric(1.0) @ self._translation
        return m

    @property
    def matrix(self) -> np.ndarray:
        """The 3x3 homogeneous matrix."""
        return self._matrix.copy()

    @property
    def rotation(self) -> np.ndarray:
        """The 2x2 rotation block."""
        return self._rotation.copy()

    @property
    def translation(self) -> np.ndarray:
        """The translation 2-vector."""
        return self._translation.copy()

    @property
    def angle(self) -> float:
        """The rotation angle taken from the cosine entry, in [0, pi]."""
        with np.errstate(invalid="ignore"):
            return float(np.arccos(self._rotation[0, 0]))

    @property
    def translation_pair(self) -> tuple[float, float]:
        """The translation as an (x, y) tuple."""
        return float(self._translation[0]), float(self._translation[1])


_ = math  # math kept for scalar helpers used by callers of this module