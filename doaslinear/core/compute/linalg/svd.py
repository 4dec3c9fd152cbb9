"""
Singular value decomposition kernels.

Thin SVD through LAPACK (via SciPy) plus the three things a DOAS fit
needs from it: least-squares back-substitution, the coefficient
covariance and a truncated pseudoinverse.
"""

from dataclasses import dataclass
from typing import Any
import numpy as np
import scipy.linalg as sla
from numpy.typing import NDArray

from doaslinear.core.compute.precision import pinv_tolerance, effective_rank


@dataclass(frozen=True)
class SVDFactorization:
    """
    Result of singular value decomposition A = U @ diag(W) @ V'.

    Attributes:
        u: Left singular vectors (m x k), k = min(m, n)
        w: Singular values (k,), sorted largest-first
        vt: Transposed right singular vectors (k x n)
    """
    u: NDArray[np.floating[Any]]
    w: NDArray[np.floating[Any]]
    vt: NDArray[np.floating[Any]]

    @property
    def shape(self) -> tuple[int, int]:
        return (self.u.shape[0], self.vt.shape[1])


def _inverse_nonzero(values: NDArray[np.floating[Any]]) -> NDArray[np.floating[Any]]:
    """1/values where values != 0, else 0."""
    inverse = np.zeros_like(values)
    nonzero = values != 0.0
    inverse[nonzero] = 1.0 / values[nonzero]
    return inverse


def svd_cpu(a: NDArray[np.floating[Any]]) -> SVDFactorization:
    """
    Thin SVD using LAPACK (gesdd via SciPy).

    Args:
        a: Matrix to decompose (m x n)

    Returns:
        SVDFactorization with singular values in descending order
    """
    u, w, vt = sla.svd(a, full_matrices=False)
    return SVDFactorization(u=u, w=w, vt=vt)


def svd_backsubstitute(
    factorization: SVDFactorization,
    b: NDArray[np.floating[Any]],
) -> NDArray[np.floating[Any]]:
    """
    Least-squares solution x = V @ diag(1/W) @ U' @ b.

    Exactly-zero singular values contribute nothing; no tolerance is
    applied (see svd_pinv for truncation).

    Args:
        factorization: SVD of the design matrix
        b: Right-hand side (m,) or (m, k)

    Returns:
        Solution (n,) or (n, k)
    """
    inv_w = _inverse_nonzero(factorization.w)
    utb = factorization.u.T @ b
    if utb.ndim == 2:
        inv_w = inv_w[:, np.newaxis]
    return factorization.vt.T @ (inv_w * utb)


def svd_covariance(factorization: SVDFactorization) -> NDArray[np.floating[Any]]:
    """
    Coefficient covariance (A'A)^-1 from the SVD factors.

    cov[j, k] = sum_i V[j, i] * V[k, i] / W[i]^2 over non-zero W[i].
    """
    v = factorization.vt.T
    inv_w2 = _inverse_nonzero(factorization.w * factorization.w)
    return (v * inv_w2) @ v.T


def svd_pinv(factorization: SVDFactorization) -> NDArray[np.floating[Any]]:
    """
    Truncated Moore-Penrose pseudoinverse V @ diag(1/W) @ U'.

    Singular values at or below max(m, n) * W[0] * eps are treated as
    zero. Only the leading r values above the cutoff enter the sum.

    Returns:
        Pseudoinverse (n x m)
    """
    m, n = factorization.shape
    w = factorization.w
    if w.size == 0 or w[0] == 0.0:
        return np.zeros((n, m))

    tolerance = pinv_tolerance(m, n, w[0])
    r = effective_rank(w, tolerance)

    v_r = factorization.vt[:r].T
    u_r = factorization.u[:, :r]
    return (v_r / w[:r]) @ u_r.T
