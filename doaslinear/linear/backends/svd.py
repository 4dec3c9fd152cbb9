"""
SVD backend for linear systems.

Singular value decomposition was the historical way to solve the linear
part of the Beer-Lambert law and is still the only backend that can
produce a pseudoinverse.
"""

from typing import Any
import numpy as np
from numpy.typing import NDArray

from doaslinear.core.compute.linalg.svd import (
    SVDFactorization,
    svd_cpu,
    svd_backsubstitute,
    svd_covariance,
    svd_pinv,
)
from doaslinear.core.compute.precision import condition_number


class SVDBackend:
    """
    CPU backend using singular value decomposition.

    Implements the DecompositionBackend protocol for SVDFactorization.
    """

    @property
    def name(self) -> str:
        return 'cpu_svd'

    def factorize(self, a: NDArray[np.floating[Any]]) -> SVDFactorization:
        return svd_cpu(a)

    def solve(
        self,
        factorization: SVDFactorization,
        b: NDArray[np.floating[Any]],
    ) -> NDArray[np.floating[Any]]:
        return svd_backsubstitute(factorization, b)

    def covariance(self, factorization: SVDFactorization) -> NDArray[np.floating[Any]]:
        return svd_covariance(factorization)

    def rank(self, factorization: SVDFactorization) -> int:
        """Number of non-zero singular values."""
        return int(np.count_nonzero(factorization.w))

    def pinv(self, factorization: SVDFactorization) -> NDArray[np.floating[Any]]:
        return svd_pinv(factorization)

    def diagnostics(self, factorization: SVDFactorization) -> dict[str, Any]:
        return {'condition_number': condition_number(factorization.w)}

    def supports(self, operation: str) -> bool:
        return operation == 'pinv'
