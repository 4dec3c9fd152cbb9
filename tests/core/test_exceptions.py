"""
Tests for the doaslinear exception hierarchy.

Validates:
    - Inheritance chain (all exceptions catchable via DoasLinearError)
    - Diagnostic attributes on errors that carry them
    - Default attribute values (None for optional attributes)
"""

import pytest

from doaslinear.core.exceptions import (
    AllocationError,
    BackendCapabilityError,
    DimensionError,
    DoasLinearError,
    NormalizationError,
    NotDecomposedError,
    NotPositiveDefiniteError,
    NumericalError,
    PreconditionError,
    ValidationError,
)


# ═══════════════════════════════════════════════════════════════════════
# Inheritance hierarchy
# ═══════════════════════════════════════════════════════════════════════


class TestInheritance:
    """Every exception is catchable via DoasLinearError."""

    @pytest.mark.parametrize("exc_type", [
        ValidationError,
        DimensionError,
        AllocationError,
        NumericalError,
        NormalizationError,
        NotPositiveDefiniteError,
        PreconditionError,
        NotDecomposedError,
        BackendCapabilityError,
    ])
    def test_is_doaslinear_error(self, exc_type):
        with pytest.raises(DoasLinearError):
            raise exc_type("failure")

    def test_dimension_error_is_validation_error(self):
        with pytest.raises(ValidationError):
            raise DimensionError("wrong shape")

    def test_normalization_error_is_numerical_error(self):
        with pytest.raises(NumericalError):
            raise NormalizationError("zero column")

    def test_not_decomposed_is_precondition_error(self):
        with pytest.raises(PreconditionError):
            raise NotDecomposedError("decompose first")

    def test_capability_error_is_precondition_error(self):
        with pytest.raises(PreconditionError):
            raise BackendCapabilityError("pinv needs svd")

    def test_allocation_error_is_not_numerical_error(self):
        err = AllocationError("out of memory")
        assert not isinstance(err, NumericalError)


# ═══════════════════════════════════════════════════════════════════════
# Diagnostic attributes
# ═══════════════════════════════════════════════════════════════════════


class TestAttributes:
    """Errors carry the information a caller needs to report them."""

    def test_normalization_error_column(self):
        err = NormalizationError("column 3 has zero norm", column=3)
        assert err.column == 3
        assert "zero norm" in str(err)

    def test_normalization_error_default(self):
        assert NormalizationError("zero").column is None

    def test_allocation_error_shape(self):
        err = AllocationError("cannot allocate", requested_shape=(10, 2))
        assert err.requested_shape == (10, 2)

    def test_not_positive_definite_matrix_name(self):
        err = NotPositiveDefiniteError("Cholesky failed", matrix_name="A'A")
        assert err.matrix_name == "A'A"
        assert NotPositiveDefiniteError("x").matrix_name is None

    def test_not_decomposed_operation(self):
        err = NotDecomposedError("decompose first", operation='solve')
        assert err.operation == 'solve'

    def test_capability_error_attributes(self):
        with pytest.raises(BackendCapabilityError) as exc_info:
            raise BackendCapabilityError(
                "unsupported", backend_name='cpu_qr', operation='pinv'
            )
        assert exc_info.value.backend_name == 'cpu_qr'
        assert exc_info.value.operation == 'pinv'
