"""The rigid-motion group SE(3) and its Lie algebra se(3)."""

from __future__ import annotations

import numpy as np

from lielib import so3

__all__ = [
    "Pose",
    "exp_map",
    "left_jacobian",
    "left_jacobian_inv",
    "left_perturb_derivative",
    "left_q",
    "lie_algebra_4d",
    "pose_jacobian",
    "right_jacobian",
    "right_jacobian_inv",
    "right_q",
    "skew_symmetric",
    "unhat_6d",
]


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


def lie_algebra_4d(p) -> np.ndarray:
    """Return the 4x6 operator of a homogeneous point used in pose derivatives."""
    v = _vector(p, 4)
    result = np.zeros((4, 6))
    result[:3, :3] = v[3] * np.eye(3)
    result[:3, 3:] = -so3.skew_symmetric(v[:3])
    return result


def skew_symmetric(eksi) -> np.ndarray:
    """Return the 4x4 hat matrix of a 6-vector.

    Both the rotation block and the translation column are built from the
    first three components.
    """
    rot = _vector(eksi, 6)[:3]
    result = np.zeros((4, 4))
    result[:3, :3] = so3.skew_symmetric(rot)
    result[:3, 3] = rot
    return result


def unhat_6d(eksi_hat) -> np.ndarray:
    """Return the 6-vector [rotation, translation] of a 4x4 hat matrix."""
    m = _matrix(eksi_hat, 4)
    return np.concatenate([so3.unhat(m[:3, :3]), m[:3, 3]])


def exp_map(eksi) -> np.ndarray:
    """Map a 6-vector to a 4x4 SE(3) matrix."""
    e = _vector(eksi, 6)
    phi = np.float64(np.linalg.norm(e[:3]))
    h = skew_symmetric(e)
    h2 = h @ h
    with np.errstate(invalid="ignore", divide="ignore"):
        return (
            np.eye(4)
            + h
            + ((1.0 - np.cos(phi)) / phi**2) * h2
            + ((phi - np.sin(phi)) / phi**3) * (h2 @ h)
        )


def left_q(eksi) -> np.ndarray:
    """Return the 3x3 Q block of the left SE(3) Jacobian."""
    e = _vector(eksi, 6)
    rot, p = e[:3], e[3:]
    p_hat = so3.skew_symmetric(p)
    phi_hat = so3.skew_symmetric(rot)
    phi = np.float64(np.linalg.norm(rot))

    with np.errstate(invalid="ignore", divide="ignore"):
        c2 = (phi - np.sin(phi)) / phi**3
        c3 = (phi**2 + 2.0 * np.cos(phi) - 2.0) / (2.0 * phi**4)
        c4 = ((2.0 * phi - 3.0 * np.sin(phi) + phi * np.cos(phi)) / 2.0) * phi**5

        second = c2 * (phi_hat @ p_hat + p_hat @ phi_hat + phi_hat @ p_hat @ phi_hat)
        third = c3 * (
            phi_hat @ phi_hat @ p_hat
            + p_hat @ phi_hat @ phi_hat
            - 3.0 * phi_hat @ p_hat @ phi_hat
        )
        fourth = c4 * (
            phi_hat @ p_hat @ phi_hat @ phi_hat + phi_hat @ phi_hat @ p_hat @ phi_hat
        )
        return 0.5 * phi_hat + second + third + fourth


def right_q(eksi) -> np.ndarray:
    """Return the Q block of the right Jacobian, which is left_q(-eksi)."""
    return left_q(-_vector(eksi, 6))


def _block_upper(diag: np.ndarray, upper: np.ndarray) -> np.ndarray:
    result = np.zeros((6, 6))
    result[:3, :3] = diag
    result[:3, 3:] = upper
    result[3:, 3:] = diag
    return result


def left_jacobian(eksi) -> np.ndarray:
    """Left Jacobian of SE(3), 6x6."""
    e = _vector(eksi, 6)
    return _block_upper(so3.left_jacobian(e[:3]), left_q(e))


def right_jacobian(eksi) -> np.ndarray:
    """Right Jacobian of SE(3), 6x6."""
    e = _vector(eksi, 6)
    return _block_upper(so3.right_jacobian(e[:3]), right_q(e))


def left_jacobian_inv(eksi) -> np.ndarray:
    """Inverse of the left Jacobian of SE(3)."""
    e = _vector(eksi, 6)
    j_inv = so3.left_jacobian_inv(e[:3])
    return _block_upper(j_inv, -j_inv @ left_q(e) @ j_inv)


def right_jacobian_inv(eksi) -> np.ndarray:
    """Inverse of the right Jacobian of SE(3)."""
    e = _vector(eksi, 6)
    j_inv = so3.right_jacobian_inv(e[:3])
    return _block_upper(j_inv, -j_inv @ right_q(e) @ j_inv)


class Pose:
    """An element of SE(3), held as its 4x4 homogeneous matrix."""

    def __init__(self, matrix):
        m = _matrix(matrix, 4).copy()
        r = m[:3, :3].copy()
        self._matrix = m
        self._rotation = so3.Rotation(r)
        self._axis_angle = so3.log_map(r)
        self._translation = m[:3, 3].copy()

    @classmethod
    def _assemble(cls, rotation: so3.Rotation, axis_angle, trans) -> Pose:
        t = _vector(trans, 3)
        m = np.zeros((4, 4))
        m[:3, :3] = rotation.matrix
        m[:3, 3] = t
        m[3, 3] = 1.0
        pose = cls.__new__(cls)
        pose._matrix = m
        pose._rotation = rotation
        pose._axis_angle = np.asarray(axis_angle, dtype=float).copy()
        pose._translation = t.copy()
        return pose

    @classmethod
    def from_axis_angle(cls, rot, trans) -> Pose:
        """Build a pose from an axis-angle vector and a translation."""
        r = _vector(rot, 3)
        return cls._assemble(so3.Rotation(r), r, trans)

    @classmethod
    def from_rotation(cls, rotation, trans) -> Pose:
        """Build a pose from an SO(3) rotation or a 3x3 matrix, and a translation."""
        if not isinstance(rotation, so3.Rotation):
            rotation = so3.Rotation(_matrix(rotation, 3))
        return cls._assemble(rotation, so3.log_map(rotation.matrix), trans)

    def __repr__(self) -> str:
        return f"Pose(matrix={self._matrix.tolist()!r})"

    def __mul__(self, other):
        if not isinstance(other, Pose):
            return NotImplemented
        return Pose(self._matrix @ other._matrix)

    @property
    def matrix(self) -> np.ndarray:
        """The 4x4 homogeneous matrix."""
        return self._matrix.copy()

    @property
    def rotation(self) -> so3.Rotation:
        """The rotation part as an SO(3) element."""
        return self._rotation

    @property
    def translation(self) -> np.ndarray:
        """The translation 3-vector."""
        return self._translation.copy()

    @property
    def axis_angle(self) -> np.ndarray:
        """The axis-angle vector of the rotation."""
        return self._axis_angle.copy()

    @property
    def pose_vector(self) -> np.ndarray:
        """The 6-vector [translation, axis-angle]."""
        return np.concatenate([self._translation, self._axis_angle])

    def inverse(self) -> np.ndarray:
        """Return the inverse transform as a 4x4 matrix."""
        c = self._rotation.matrix
        m = np.zeros((4, 4))
        m[:3, :3] = c.T
        m[:3, 3] = -c.T @ self._translation
        m[3, 3] = 1.0
        return m

    def adjoint(self) -> np.ndarray:
        """Return the 6x6 adjoint matrix."""
        c = self._rotation.matrix
        return _block_upper(c, so3.skew_symmetric(self._translation) @ c)

    def adjoint_inv(self) -> np.ndarray:
        """Return the inverse of the 6x6 adjoint matrix."""
        ct = self._rotation.matrix.T
        return _block_upper(ct, -ct @ so3.skew_symmetric(self._translation))


def pose_jacobian(pose: Pose, p) -> np.ndarray:
    """Derivative of T*p with respect to the pose vector of T, 4x6."""
    tp = pose.matrix @ _vector(p, 4)
    return lie_algebra_4d(tp) @ left_jacobian(pose.pose_vector)


def left_perturb_derivative(pose: Pose, p) -> np.ndarray:
    """Derivative of T*p with respect to a left perturbation of T, 4x6."""
    return lie_algebra_4d(pose.matrix @ _vector(p, 4))