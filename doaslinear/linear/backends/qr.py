"""
QR backend for linear systems.

Uses column-pivoted QR decomposition via LAPACK (through SciPy) for the
solve, and an independent Cholesky solve of the normal equations for the
covariance.
"""

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import NDArray

from doaslinear.core.exceptions import NotPositiveDefiniteError
from doaslinear.core.compute.linalg.qr import QRResult, qr_cpu, qr_solve_cpu
from doaslinear.core.compute.linalg.cholesky import normal_matrix_inverse


@dataclass(frozen=True)
class QRFactorization:
    """
    Factorization state of a QR-mode system.

    Attributes:
        a: The normalized design matrix (m x n)
        qr: Column-pivoted QR of a
        normal_inverse: (a'a)^-1, all NaN if a'a is not positive definite
        covariance_error: Why normal_inverse is NaN, else None
    """
    a: NDArray[np.floating[Any]]
    qr: QRResult
    normal_inverse: NDArray[np.floating[Any]]
    covariance_error: str | None = None


class QRBackend:
    """
    CPU backend using column-pivoted QR decomposition.

    Implements the DecompositionBackend protocol for QRFactorization.
    The covariance is computed at factorization time, whether or not the
    caller asks for it.
    """

    @property
    def name(self) -> str:
        return 'cpu_qr'

    def factorize(self, a: NDArray[np.floating[Any]]) -> QRFactorization:
        """
        Algorithm:
            1. Column-pivoted QR: a P = QR
            2. (a'a)^-1 via Cholesky of a'a against the identity
        """
        qr_result = qr_cpu(a)

        covariance_error = None
        try:
            normal_inverse = normal_matrix_inverse(a)
        except NotPositiveDefiniteError as e:
            n = a.shape[1]
            normal_inverse = np.full((n, n), np.nan)
            covariance_error = str(e)

        return QRFactorization(
            a=a,
            qr=qr_result,
            normal_inverse=normal_inverse,
            covariance_error=covariance_error,
        )

    def solve(
        self,
        factorization: QRFactorization,
        b: NDArray[np.floating[Any]],
    ) -> NDArray[np.floating[Any]]:
        return qr_solve_cpu(factorization.qr, b)

    def covariance(self, factorization: QRFactorization) -> NDArray[np.floating[Any]]:
        """
        Raises:
            NotPositiveDefiniteError: If a'a could not be inverted
        """
        if factorization.covariance_error is not None:
            raise NotPositiveDefiniteError(
                factorization.covariance_error, matrix_name="A'A"
            )
        return factorization.normal_inverse.copy()

    def rank(self, factorization: QRFactorization) -> int:
        return factorization.qr.rank

    def diagnostics(self, factorization: QRFactorization) -> dict[str, Any]:
        return {'pivot': factorization.qr.pivot.tolist()}

    def supports(self, operation: str) -> bool:
        return False
