"""The planar rotation group SO(2) and its Lie algebra so(2)."""

from __future__ import annotations

import math

import numpy as np

__all__ = [
    "Rotation",
    "exp_map",
    "log_map",
    "product_log_map",
    "skew_symmetric",
    "unhat",
]


def unhat(theta_hat) -> float:
    """Return the angle stored in a 2x2 skew-symmetric matrix."""
    return float(np.asarray(theta_hat, dtype=float)[1, 0])


def skew_symmetric(theta: float) -> np.ndarray:
    """Return the so(2) hat matrix of an angle."""
    return np.array([[0.0, -theta], [theta, 0.0]], dtype=float)


def exp_map(theta: float) -> np.ndarray:
    """Map an angle to its 2x2 rotation matrix."""
    c, s = math.cos(theta), math.sin(theta)
    return np.array([[c, -s], [s, c]], dtype=float)


def log_map(rotation) -> float:
    """Map a 2x2 rotation matrix to its angle in (-pi, pi]."""
    r = np.asarray(rotation, dtype=float)
    return math.atan2(r[1, 0], r[0, 0])


def product_log_map(r1, r2) -> float:
    """Return the sum of the angles of two rotation matrices."""
    return log_map(r1) + log_map(r2)


class Rotation:
    """An element of SO(2), built from an angle or from a 2x2 matrix."""

    def __init__(self, value=0.0):
        arr = np.asarray(value, dtype=float)
        if arr.ndim == 0:
            self._theta = float(arr)
            self._matrix = exp_map(self._theta)
        elif arr.shape == (2, 2):
            self._theta = log_map(arr)
            self._matrix = arr.copy()
        else:
            raise ValueError(f"expected an angle or a 2x2 matrix, got shape {arr.shape}")

    def __repr__(self) -> str:
        return f"Rotation(theta={self._theta!r})"

    @property
    def theta(self) -> float:
        """The rotation angle."""
        return self._theta

    @property
    def matrix(self) -> np.ndarray:
        """The 2x2 rotation matrix."""
        return self._matrix.copy()

    def inverse(self) -> Rotation:
        """Return the inverse rotation."""
        return Rotation(self._matrix.T)

    def jrv_r(self, other: Rotation, v) -> np.ndarray:
        """Jacobian of R*v with respect to R, evaluated at ``other``."""
        return other._matrix @ skew_symmetric(1.0) @ np.asarray(v, dtype=float)

    def jrv_v(self) -> np.ndarray:
        """Jacobian of R*v with respect to v."""
        return self._matrix.copy()

    def adjoint(self) -> float:
        """Adjoint of an SO(2) element."""
        return 1.0

    def jrinv_r(self) -> float:
        """Jacobian of R^-1 with respect to R."""
        return -1.0

    def jqr_q(self) -> float:
        """Jacobian of Q*R with respect to Q."""
        return 1.0

    def jqr_r(self) -> float:
        """Jacobian of Q*R with respect to R."""
        return 1.0

    def right_jacobian(self) -> float:
        """Right Jacobian of SO(2)."""
        return 1.0

    def left_jacobian(self) -> float:
        """Left Jacobian of SO(2)."""
        return 1.0

    def jrtheta_r(self) -> float:
        """Jacobian of R (+) theta with respect to R."""
        return 1.0

    def jrtheta_theta(self) -> float:
        """Jacobian of R (+) theta with respect to theta."""
        return 1.0

    def jqminusr_q(self) -> float:
        """Jacobian of Q (-) R with respect to Q."""
        return 1.0

    def jqminusr_r(self) -> float:
        """Jacobian of Q (-) R with respect to R."""
        return -1.0

    def __mul__(self, other):
        if not isinstance(other, Rotation):
            return NotImplemented
        return Rotation(self._theta + other._theta)

    def __sub__(self, other):
        if not isinstance(other, Rotation):
            return NotImplemented
        return self._theta - other._theta