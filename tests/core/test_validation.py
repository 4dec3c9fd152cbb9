"""
Tests for input validation utilities.

Validates every function in core/validation.py:
    - check_array: conversion, dtype coercion, copy, object rejection
    - check_finite: NaN/Inf detection
    - check_ndim / check_1d / check_2d: dimensionality checks
    - check_length / check_consistent_length
    - check_positive_int / check_index / check_nonzero
"""

import numpy as np
import pytest

from doaslinear.core.exceptions import DimensionError, ValidationError
from doaslinear.core.validation import (
    check_1d,
    check_2d,
    check_array,
    check_consistent_length,
    check_finite,
    check_index,
    check_length,
    check_ndim,
    check_nonzero,
    check_positive_int,
)


# ═══════════════════════════════════════════════════════════════════════
# check_array
# ═══════════════════════════════════════════════════════════════════════


class TestCheckArray:
    """check_array converts to a float64 copy and rejects non-numeric data."""

    def test_list_to_float_array(self):
        result = check_array([1, 2, 3], "b")
        assert isinstance(result, np.ndarray)
        assert result.dtype == np.float64
        np.testing.assert_array_equal(result, [1.0, 2.0, 3.0])

    def test_returns_copy(self):
        arr = np.array([1.0, 2.0])
        result = check_array(arr, "b")
        result[0] = 99.0
        assert arr[0] == 1.0

    def test_rejects_strings(self):
        with pytest.raises(ValidationError, match="non-numeric"):
            check_array(["a", "b"], "b")

    def test_rejects_ragged(self):
        with pytest.raises(ValidationError, match="a"):
            check_array([[1.0, 2.0], [3.0]], "a")

    def test_rejects_complex(self):
        with pytest.raises(ValidationError, match="complex"):
            check_array([1 + 2j], "b")


# ═══════════════════════════════════════════════════════════════════════
# Element checks
# ═══════════════════════════════════════════════════════════════════════


class TestCheckFinite:

    def test_finite_passes(self):
        check_finite(np.array([1.0, 2.0]), "b")

    def test_nan_and_inf_counted(self):
        with pytest.raises(ValidationError, match=r"1 NaN, 1 Inf"):
            check_finite(np.array([np.nan, np.inf, 1.0]), "b")


class TestCheckNonzero:

    def test_nonzero_passes(self):
        check_nonzero(np.array([0.1, -2.0]), "sigma")

    def test_zero_reported_with_index(self):
        with pytest.raises(ValidationError, match=r"\[1\]"):
            check_nonzero(np.array([1.0, 0.0, 2.0]), "sigma")


# ═══════════════════════════════════════════════════════════════════════
# Shape checks
# ═══════════════════════════════════════════════════════════════════════


class TestShapeChecks:

    def test_check_ndim(self):
        check_ndim(np.zeros((2, 2)), 2, "a")
        with pytest.raises(DimensionError, match="expected 3D"):
            check_ndim(np.zeros((2, 2)), 3, "a")

    def test_check_1d_and_2d(self):
        check_1d(np.zeros(3), "b")
        check_2d(np.zeros((3, 1)), "a")
        with pytest.raises(DimensionError):
            check_1d(np.zeros((3, 1)), "b")
        with pytest.raises(DimensionError):
            check_2d(np.zeros(3), "a")

    def test_check_length(self):
        check_length(np.zeros(5), 5, "b")
        with pytest.raises(DimensionError, match="expected length 4, got 5"):
            check_length(np.zeros(5), 4, "b")

    def test_consistent_length(self):
        check_consistent_length(np.zeros(3), np.zeros(3), names=("t", "y"))
        with pytest.raises(DimensionError, match="t=3, y=4"):
            check_consistent_length(np.zeros(3), np.zeros(4), names=("t", "y"))

    def test_consistent_length_names_mismatch(self):
        with pytest.raises(ValueError):
            check_consistent_length(np.zeros(3), names=("t", "y"))


# ═══════════════════════════════════════════════════════════════════════
# Scalar checks
# ═══════════════════════════════════════════════════════════════════════


class TestCheckPositiveInt:

    def test_accepts_numpy_int(self):
        assert check_positive_int(np.int64(4), "m") == 4

    def test_rejects_zero_unless_allowed(self):
        with pytest.raises(ValidationError, match=">= 1"):
            check_positive_int(0, "m")
        assert check_positive_int(0, "order", allow_zero=True) == 0

    @pytest.mark.parametrize("value", [2.5, "3", True, None])
    def test_rejects_non_integers(self, value):
        with pytest.raises(ValidationError):
            check_positive_int(value, "m")


class TestCheckIndex:

    def test_valid_index(self):
        assert check_index(2, 3, "j") == 2

    @pytest.mark.parametrize("index", [-1, 3, 10])
    def test_out_of_range(self, index):
        with pytest.raises(ValidationError, match="out of range"):
            check_index(index, 3, "j")

    def test_rejects_float(self):
        with pytest.raises(ValidationError):
            check_index(1.0, 3, "j")
