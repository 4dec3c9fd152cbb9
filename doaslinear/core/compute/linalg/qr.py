"""
Column-pivoted QR decomposition.

Provides the rank-revealing QR factorization used by the QR backend and
the least-squares solve against a stored factorization, so that one
decomposition serves many right-hand sides.
"""

from dataclasses import dataclass
from typing import Any
import numpy as np
import scipy.linalg as sla
from numpy.typing import NDArray

from doaslinear.core.compute.precision import EPSILON_64


@dataclass(frozen=True)
class QRResult:
    """
    Result of column-pivoted QR decomposition A[:, pivot] = Q @ R.

    Attributes:
        Q: Orthonormal columns (m x k where k = min(m, n))
        R: Upper triangular matrix (k x n), |diag| non-increasing
        pivot: Column permutation (n,)
        rank: Numerical rank determined from R diagonal
    """
    Q: NDArray[np.floating[Any]]
    R: NDArray[np.floating[Any]]
    pivot: NDArray[np.intp]
    rank: int


def qr_cpu(X: NDArray[np.floating[Any]]) -> QRResult:
    """
    Column-pivoted economy QR using LAPACK (geqp3 via SciPy).

    Args:
        X: Matrix to decompose (m x n)

    Returns:
        QRResult with Q, R, pivot and numerical rank
    """
    Q, R, pivot = sla.qr(X, mode='economic', pivoting=True)

    # Determine numerical rank from R diagonal
    diag_R = np.abs(np.diag(R))
    if len(diag_R) > 0 and diag_R[0] > 0:
        # Same default threshold as a column-pivoted Householder QR: min(m, n) * eps
        tol = min(X.shape) * EPSILON_64 * diag_R[0]
        rank = int(np.sum(diag_R > tol))
    else:
        rank = 0

    return QRResult(Q=Q, R=R, pivot=pivot, rank=rank)


def qr_solve_cpu(
    qr_result: QRResult,
    y: NDArray[np.floating[Any]],
) -> NDArray[np.floating[Any]]:
    """
    Solve least squares against a stored QR factorization.

    Solves: min_x ||y - Ax||² with
        A P = QR
        x[P[:r]] = R[:r, :r]⁻¹ (Q'y)[:r]

    Coefficients beyond the numerical rank r are set to zero, which is
    the basic solution of a rank-revealing QR.

    Args:
        qr_result: Factorization of A
        y: Right-hand side (m,) or (m, k)

    Returns:
        Coefficients (n,) or (n, k)
    """
    n = qr_result.R.shape[1]
    r = qr_result.rank

    x = np.zeros((n,) + y.shape[1:], dtype=np.float64)
    if r == 0:
        return x

    # Compute Q'y first, then solve the triangular system
    Qty = qr_result.Q.T @ y
    z = sla.solve_triangular(qr_result.R[:r, :r], Qty[:r], lower=False)

    x[qr_result.pivot[:r]] = z
    return x
