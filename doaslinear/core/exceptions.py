"""
Exception hierarchy for doaslinear.

All exceptions inherit from DoasLinearError to allow catching any
library-specific error. The surrounding analysis pipeline maps these
classes to user-facing diagnostics; nothing in this package reports to
the user directly.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""


class DoasLinearError(Exception):
    """Base exception for all doaslinear errors."""
    pass


class ValidationError(DoasLinearError):
    """
    Input validation failed.

    Raised when caller-provided inputs fail validation checks at the
    boundary of the linear system (bad index, non-finite values, zero
    weights, unknown decomposition mode).
    """
    pass


class DimensionError(ValidationError):
    """
    Array dimensions are incorrect or inconsistent.

    Raised when a matrix or vector does not match the declared number
    of equations (m) or unknowns (n) of a linear system.
    """
    pass


class AllocationError(DoasLinearError):
    """
    Storage for a linear system could not be obtained.

    Attributes:
        requested_shape: Shape of the buffer that failed to allocate
    """

    def __init__(
        self,
        message: str,
        requested_shape: tuple[int, ...] | None = None
    ):
        super().__init__(message)
        self.requested_shape = requested_shape


class NumericalError(DoasLinearError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation.
    """
    pass


class NormalizationError(NumericalError):
    """
    A design-matrix column has zero norm.

    The column cannot be scaled to unit length, which means the design
    matrix is structurally singular. Retrying does not help: the input
    itself must change.

    Attributes:
        column: 0-based index of the offending column
    """

    def __init__(self, message: str, column: int | None = None):
        super().__init__(message)
        self.column = column


class NotPositiveDefiniteError(NumericalError):
    """
    Matrix is not positive definite.

    Raised when a Cholesky factorization of the normal matrix A'A fails,
    typically because the design matrix is rank-deficient.

    Attributes:
        matrix_name: Name/description of the problematic matrix
    """

    def __init__(self, message: str, matrix_name: str | None = None):
        super().__init__(message)
        self.matrix_name = matrix_name


class PreconditionError(DoasLinearError):
    """
    An operation was called in a state that does not allow it.

    Base class for call-order and capability violations.
    """
    pass


class NotDecomposedError(PreconditionError):
    """
    solve(), covariance() or pinv() was called before decompose().

    Attributes:
        operation: Name of the operation that was attempted
    """

    def __init__(self, message: str, operation: str | None = None):
        super().__init__(message)
        self.operation = operation


class BackendCapabilityError(PreconditionError):
    """
    The selected backend does not implement the requested operation.

    Raised for example when pinv() is requested from a QR system.

    Attributes:
        backend_name: Name of the backend in use
        operation: Name of the unsupported operation
    """

    def __init__(
        self,
        message: str,
        backend_name: str | None = None,
        operation: str | None = None
    ):
        super().__init__(message)
        self.backend_name = backend_name
        self.operation = operation
