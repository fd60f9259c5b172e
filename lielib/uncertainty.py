"""Propagation of Gaussian uncertainty on SO(3) and SE(3)."""

from __future__ import annotations

import numpy as np

from lielib import se3, so3

__all__ = [
    "bracket_double",
    "bracket_single",
    "left_random_r",
    "merge_poses_cov",
    "rotate_vector",
    "update_r_covariance",
    "update_r_mean",
    "update_t_covariance",
    "update_t_mean",
]

_I3 = np.eye(3)


def _matrix(m, n: int) -> np.ndarray:
    arr = np.asarray(m, dtype=float)
    if arr.shape != (n, n):
        raise ValueError(f"expected a {n}x{n} matrix, got shape {arr.shape}")
    return arr


def _vector(v, n: int) -> np.ndarray:
    arr = np.asarray(v, dtype=float)
    if arr.shape != (n,):
        raise ValueError(f"expected a {n}-vector, got shape {arr.shape}")
    return arr


def _diag_sum(m: np.ndarray) -> np.float64:
    """Sum of the diagonal entries of a square matrix."""
    return np.float64(np.diagonal(m).sum())


def _as_rotation(rotation) -> so3.Rotation:
    if isinstance(rotation, so3.Rotation):
        return rotation
    return so3.Rotation(_matrix(rotation, 3))


def bracket_single(a) -> np.ndarray:
    """The single-bracket operator <<A>> = -tr(A) I + A."""
    m = _matrix(a, 3)
    return -_diag_sum(m) * _I3 + m


def bracket_double(a, b) -> np.ndarray:
    """The double-bracket operator <<A, B>> = <<A>><<B>> + <<AB>>."""
    ma, mb = _matrix(a, 3), _matrix(b, 3)
    return bracket_single(ma) @ bracket_single(mb) + bracket_single(ma @ mb)


def merge_poses_cov(ta: se3.Pose, cov_a, cov_b) -> np.ndarray:
    """Fourth-order covariance of the composition of two uncertain poses."""
    cov_a = _matrix(cov_a, 6)
    cov_b = _matrix(cov_b, 6)

    cova_p = cov_a[:3, :3]
    cova_phi = cov_a[3:, 3:]
    cova_pphi = cov_a[:3, 3:]

    ad = ta.adjoint()
    covb_prime = ad @ cov_b @ ad.T
    covb_p = covb_prime[:3, :3]
    covb_pphi = covb_prime[:3, 3:]
    covb_phi = covb_prime[3:, 3:]

    a1 = np.zeros((6, 6))
    a1[:3, :3] = bracket_single(cova_phi)
    a1[:3, 3:] = bracket_single(cova_pphi + cova_pphi.T)
    a1[3:, 3:] = bracket_single(cova_phi)

    a2 = np.zeros((6, 6))
    a2[:3, :3] = bracket_single(covb_phi)
    a2[:3, 3:] = bracket_single(covb_pphi + covb_pphi.T)
    a2[3:, 3:] = bracket_single(covb_phi)

    b_pp = (
        bracket_double(cova_phi, covb_p)
        + bracket_double(cova_pphi.T, covb_pphi)
        + bracket_double(cova_pphi, covb_pphi.T)
        + bracket_double(cova_p, covb_phi)
    )
    b_pphi = bracket_double(cova_phi, covb_pphi.T) + bracket_double(cova_pphi.T, covb_phi)
    b_phi = bracket_double(cova_phi, covb_phi)

    beta = np.block([[b_pp, b_pphi], [b_pphi.T, b_phi]])

    return (
        cov_a
        + covb_prime
        + 0.25 * beta
        + (1.0 / 12.0)
        * (a1 @ covb_prime + covb_prime @ a1.T + a2 @ cov_a + cov_a @ a2.T)
    )


def rotate_vector(r_mean, r_cov, x) -> np.ndarray:
    """Expected value of R x for a rotation with mean ``r_mean`` and covariance ``r_cov``."""
    r = _as_rotation(r_mean).matrix
    cov = _matrix(r_cov, 3)
    tr = _diag_sum(cov)
    coeff = (
        _I3
        + 0.5 * (-tr * _I3 + cov)
        + (1.0 / 24.0) * (_I3 * (tr**2 + _diag_sum(cov @ cov)) - cov @ (tr * _I3 + 2.0 * cov))
    )
    return coeff @ r @ _vector(x, 3)


def left_random_r(r_mean, eps) -> so3.Rotation:
    """Rotation exp(eps^) R_mean, a left-perturbed sample of a random rotation."""
    return so3.Rotation(so3.exp_map(eps) @ _as_rotation(r_mean).matrix)


def update_r_mean(rotation, r_mean) -> so3.Rotation:
    """Mean of a random rotation after applying ``rotation``."""
    return _as_rotation(rotation) * _as_rotation(r_mean)


def update_r_covariance(rotation, cov_matrix) -> np.ndarray:
    """Covariance of a random rotation after applying ``rotation``."""
    r = _as_rotation(rotation).matrix
    return r @ _matrix(cov_matrix, 3) @ r.T


def update_t_mean(update: se3.Pose, old_mean: se3.Pose) -> se3.Pose:
    """Mean of a random pose after applying ``update``."""
    return update * old_mean


def update_t_covariance(update: se3.Pose, old_cov) -> np.ndarray:
    """Covariance of a random pose after applying ``update``."""
    ad = update.adjoint()
    return ad @ _matrix(old_cov, 6) @ ad.T