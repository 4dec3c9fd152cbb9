"""
Generic result container for doaslinear computations.

The Result class provides a standardized envelope for everything a
decomposition or fit produces. This keeps timing and diagnostics in one
place while letting each operation define its own parameter payload.

Design decisions:
    - Generic over parameter payload P for type safety
    - info dict for flexible metadata (method, rank, condition number)
    - timing is optional (don't burden unit tests)
    - Immutable (frozen=True) so a stored decomposition cannot drift
"""

from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

P = TypeVar('P')  # Parameter payload type


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable result envelope for linear-system computations.

    Type Parameters:
        P: The operation-specific parameter payload type

    Attributes:
        params: Operation-specific payload (norms, covariance, coefficients)
        info: Structured metadata (method, rank, diagnostics)
        timing: Execution timing breakdown, or None if not measured
        backend_name: Identifier of the backend that produced this result
        warnings: Non-fatal issues encountered during computation

    Examples:
        >>> Result(
        ...     params=DecompositionParams(norms=norms, rank=3),
        ...     info={'method': 'svd', 'rank': 3},
        ...     timing={'total_seconds': 0.001},
        ...     backend_name='cpu_svd'
        ... )
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)

    def has_warning(self, substring: str) -> bool:
        """Check if any warning contains the given substring."""
        return any(substring in w for w in self.warnings)
