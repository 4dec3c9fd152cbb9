"""
Core protocols for doaslinear.

These define the structural interface every decomposition backend must
satisfy. We use Protocol (structural typing) rather than ABC (nominal
typing) so a backend only has to provide the right methods.

Design Principles:
    - Minimal contracts: factorize, solve, covariance
    - Capability-driven: use supports() for optional operations (pinv)
    - Stateless backends: all factorization state lives in the returned
      factorization object, which the LinearSystem owns
"""

from typing import Protocol, TypeVar, Any, runtime_checkable

import numpy as np
from numpy.typing import NDArray

F = TypeVar('F')  # Factorization type


@runtime_checkable
class DecompositionBackend(Protocol[F]):
    """
    Protocol for linear least-squares backends.

    A backend turns a normalized design matrix into a factorization object
    and answers questions about it. It holds no state of its own, so one
    instance can serve any number of systems.

    Type Parameters:
        F: The factorization type this backend produces
    """

    @property
    def name(self) -> str:
        """
        Backend identifier.

        Convention: '{device}_{algorithm}'
        Examples: 'cpu_svd', 'cpu_qr'
        """
        ...

    def factorize(self, a: NDArray[np.floating[Any]]) -> F:
        """Factorize a normalized m x n design matrix."""
        ...

    def solve(self, factorization: F, b: NDArray[np.floating[Any]]) -> NDArray[np.floating[Any]]:
        """
        Least-squares solution for the normalized matrix.

        Must not modify the factorization.
        """
        ...

    def covariance(self, factorization: F) -> NDArray[np.floating[Any]]:
        """(A'A)^-1 of the normalized matrix."""
        ...

    def rank(self, factorization: F) -> int:
        """Numerical rank of the factorized matrix."""
        ...

    def diagnostics(self, factorization: F) -> dict[str, Any]:
        """Backend-specific entries merged into Result.info."""
        ...

    def supports(self, operation: str) -> bool:
        """
        Check if this backend supports an optional operation.

        Standard operation strings:
            'pinv': Truncated pseudoinverse

        Note:
            Unknown operations MUST return False, never raise.
        """
        ...
