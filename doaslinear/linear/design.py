"""
Design matrix storage.

DesignMatrix holds the m x n matrix a linear system is built from: one
row per observation (spectral pixel), one column per unknown (reference
cross section or polynomial term). It validates everything that enters
it, so the backends can trust what they are handed.
"""

from __future__ import annotations

from typing import Any, Sequence
import numpy as np
from numpy.typing import ArrayLike, NDArray

from doaslinear.core.exceptions import AllocationError
from doaslinear.core.validation import (
    check_array,
    check_finite,
    check_1d,
    check_2d,
    check_length,
    check_consistent_length,
    check_positive_int,
    check_index,
    check_nonzero,
)


class DesignMatrix:
    """
    Mutable m x n design matrix with column and row-weight updates.

    Construction:
        DesignMatrix.zeros(m, n)                 # filled later by set_column
        DesignMatrix.from_array(a)               # copy of an m x n array
        DesignMatrix.from_columns([c0, c1, ...]) # one array per unknown
        DesignMatrix.vandermonde(t, order)       # polynomial basis
    """

    def __init__(self, values: NDArray[np.floating[Any]]):
        self._values = values

    @classmethod
    def zeros(cls, m: int, n: int) -> DesignMatrix:
        """
        Allocate a zero-initialized m x n matrix.

        Raises:
            ValidationError: If m or n is not a positive integer
            AllocationError: If the storage cannot be obtained
        """
        m = check_positive_int(m, 'm')
        n = check_positive_int(n, 'n')
        try:
            values = np.zeros((m, n), dtype=np.float64)
        except MemoryError as e:
            raise AllocationError(
                f"Cannot allocate design matrix of {m} x {n}",
                requested_shape=(m, n),
            ) from e
        return cls(values)

    @classmethod
    def from_array(
        cls,
        a: ArrayLike,
        *,
        m: int | None = None,
        n: int | None = None,
    ) -> DesignMatrix:
        """
        Copy an m x n array-like (rows are equations).

        A 1-D input is treated as a single column. If m or n is given it
        must agree with the shape of a.

        Raises:
            ValidationError: If a is non-numeric or non-finite
            DimensionError: If a is not 2-D or disagrees with m / n
        """
        values = check_array(a, 'a')
        if values.ndim == 1:
            values = values.reshape(-1, 1)
        check_2d(values, 'a')
        check_finite(values, 'a')

        if m is not None:
            check_length(values, check_positive_int(m, 'm'), 'a (rows)')
        if n is not None:
            check_length(values.T, check_positive_int(n, 'n'), 'a (columns)')
        check_positive_int(values.shape[0], 'a (rows)')
        check_positive_int(values.shape[1], 'a (columns)')

        return cls(np.ascontiguousarray(values))

    @classmethod
    def from_columns(cls, columns: Sequence[ArrayLike]) -> DesignMatrix:
        """
        Stack one 1-D array per unknown into an m x n matrix.

        Raises:
            ValidationError: If no columns are given or values are invalid
            DimensionError: If the columns differ in length
        """
        arrays = [check_array(c, f'columns[{j}]') for j, c in enumerate(columns)]
        check_positive_int(len(arrays), 'number of columns')
        for j, arr in enumerate(arrays):
            check_1d(arr, f'columns[{j}]')
            check_finite(arr, f'columns[{j}]')
        check_consistent_length(
            *arrays, names=tuple(f'columns[{j}]' for j in range(len(arrays)))
        )
        return cls(np.column_stack(arrays))

    @classmethod
    def vandermonde(cls, t: ArrayLike, order: int) -> DesignMatrix:
        """
        Polynomial basis: column i holds t**i for i = 0..order.

        Columns are built by repeated multiplication, t**i = t * t**(i-1).
        """
        order = check_positive_int(order, 'order', allow_zero=True)
        t_arr = check_array(t, 't')
        check_1d(t_arr, 't')
        check_finite(t_arr, 't')

        values = np.empty((t_arr.shape[0], order + 1), dtype=np.float64)
        values[:, 0] = 1.0
        for i in range(1, order + 1):
            values[:, i] = t_arr * values[:, i - 1]
        return cls(values)

    # === Properties ===

    @property
    def m(self) -> int:
        """Number of equations (rows)."""
        return self._values.shape[0]

    @property
    def n(self) -> int:
        """Number of unknowns (columns)."""
        return self._values.shape[1]

    @property
    def values(self) -> NDArray[np.floating[Any]]:
        """The stored matrix. Callers must not modify it."""
        return self._values

    def copy(self) -> NDArray[np.floating[Any]]:
        return self._values.copy()

    # === Mutation ===

    def set_column(self, j: int, values: ArrayLike) -> None:
        """
        Overwrite column j (0-based).

        Raises:
            ValidationError: If j is out of range or values are non-finite
            DimensionError: If values is not 1-D of length m
        """
        j = check_index(j, self.n, 'j')
        column = check_array(values, 'values')
        check_1d(column, 'values')
        check_length(column, self.m, 'values')
        check_finite(column, 'values')
        self._values[:, j] = column

    def set_weight(self, sigma: ArrayLike | None) -> None:
        """
        Divide row i by sigma[i]; None is a no-op.

        Raises:
            ValidationError: If sigma is non-finite or contains zeros
            DimensionError: If sigma is not 1-D of length m
        """
        if sigma is None:
            return
        sigma_arr = check_weights(sigma, self.m)
        self._values /= sigma_arr[:, np.newaxis]


def check_weights(sigma: ArrayLike, m: int) -> NDArray[np.floating[Any]]:
    """Validate a per-observation standard deviation vector of length m."""
    sigma_arr = check_array(sigma, 'sigma')
    check_1d(sigma_arr, 'sigma')
    check_length(sigma_arr, m, 'sigma')
    check_finite(sigma_arr, 'sigma')
    check_nonzero(sigma_arr, 'sigma')
    return sigma_arr
