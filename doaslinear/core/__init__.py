"""
Core infrastructure for doaslinear.

This module provides shared abstractions and numeric kernels used by the
linear-system domain.

Key components:
    protocols: DecompositionBackend protocol
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    compute: Timing, precision constants, linear algebra kernels
"""

from doaslinear.core.protocols import DecompositionBackend
from doaslinear.core.result import Result
from doaslinear.core.exceptions import (
    DoasLinearError,
    ValidationError,
    DimensionError,
    AllocationError,
    NumericalError,
    NormalizationError,
    NotPositiveDefiniteError,
    PreconditionError,
    NotDecomposedError,
    BackendCapabilityError,
)

__all__ = [
    # Protocols
    "DecompositionBackend",
    # Result
    "Result",
    # Exceptions
    "DoasLinearError",
    "ValidationError",
    "DimensionError",
    "AllocationError",
    "NumericalError",
    "NormalizationError",
    "NotPositiveDefiniteError",
    "PreconditionError",
    "NotDecomposedError",
    "BackendCapabilityError",
]
