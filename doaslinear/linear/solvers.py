"""
Public entry points for linear systems.

This module provides the functional API: allocate() and from_matrix()
build a LinearSystem, and fit_poly() drives one through a complete
weighted polynomial fit.
"""

from typing import Any
import numpy as np
from numpy.typing import ArrayLike

from doaslinear.core.result import Result
from doaslinear.core.exceptions import ValidationError
from doaslinear.core.validation import (
    check_array,
    check_finite,
    check_1d,
    check_consistent_length,
    check_positive_int,
)
from doaslinear.core.compute.timing import Timer
from doaslinear.linear.design import DesignMatrix, check_weights
from doaslinear.linear.solution import PolyFitParams, PolyFitSolution
from doaslinear.linear.system import LinearSystem, DecompositionMode


def allocate(m: int, n: int, mode: DecompositionMode = 'svd') -> LinearSystem:
    """
    Allocate an empty system of m equations in n unknowns.

    The design matrix starts as zeros and is filled with set_column().

    Raises:
        ValidationError: If m or n is not a positive integer or mode is unknown
        AllocationError: If the storage cannot be obtained
    """
    return LinearSystem(m, n, mode)


def from_matrix(
    a: ArrayLike,
    mode: DecompositionMode = 'svd',
    *,
    m: int | None = None,
    n: int | None = None,
) -> LinearSystem:
    """
    Build a system from an m x n design matrix (rows are equations).

    Raises:
        ValidationError: If a is non-numeric or non-finite
        DimensionError: If a is not 2-D or disagrees with m / n
    """
    return LinearSystem.from_matrix(a, mode, m=m, n=n)


def fit_poly(
    t: ArrayLike,
    y: ArrayLike,
    order: int,
    *,
    sigma: ArrayLike | None = None,
    mode: DecompositionMode = 'qr',
) -> PolyFitSolution:
    """
    Weighted least-squares polynomial fit.

    Fits y ≈ c[0] + c[1] t + ... + c[order] t**order. With sigma, every
    equation and its right-hand side are divided by sigma[i] before the
    fit, so observations count with weight 1/sigma[i]**2.

    Args:
        t: Independent variable samples (length N)
        y: Observed values (length N)
        order: Polynomial degree, 0 <= order < N
        sigma: Per-observation standard deviations, or None
        mode: Decomposition backend, QR unless asked otherwise

    Returns:
        PolyFitSolution with coefficients lowest power first

    Raises:
        ValidationError: If inputs are invalid or order >= N
        DimensionError: If t, y and sigma differ in length
        NormalizationError: If a basis column has zero norm

    Example:
        >>> sol = fit_poly([0, 1, 2, 3, 4], [1, 2, 5, 10, 17], order=2)
        >>> sol.coefficients
        array([1., 0., 1.])
    """
    timer = Timer()
    timer.start()

    # === Input Validation ===
    t_arr = check_array(t, 't')
    y_arr = check_array(y, 'y')
    check_1d(t_arr, 't')
    check_1d(y_arr, 'y')
    check_finite(y_arr, 'y')
    check_consistent_length(t_arr, y_arr, names=('t', 'y'))
    order = check_positive_int(order, 'order', allow_zero=True)

    num_eqs = t_arr.shape[0]
    if order + 1 > num_eqs:
        raise ValidationError(
            f"order: a polynomial of order {order} needs at least {order + 1} "
            f"samples, got {num_eqs}"
        )

    # === Construct Design ===
    with timer.section('design'):
        design = DesignMatrix.vandermonde(t_arr, order)
        basis = design.copy()
        system = LinearSystem.from_design(design, mode)

        rhs = y_arr
        if sigma is not None:
            sigma_arr = check_weights(sigma, num_eqs)
            system.set_weight(sigma_arr)
            rhs = y_arr / sigma_arr

    # === Decompose and Solve ===
    with timer.section('decompose'):
        decomposition = system.decompose()

    with timer.section('solve'):
        coefficients = system.solve(rhs)

    fitted_values = basis @ coefficients
    residuals = y_arr - fitted_values

    timer.stop()

    params = PolyFitParams(
        coefficients=coefficients,
        fitted_values=fitted_values,
        residuals=residuals,
        rss=float(residuals @ residuals),
        order=order,
    )

    info: dict[str, Any] = {
        'method': mode,
        'rank': decomposition.params.rank,
        'norms': decomposition.params.norms,
        'weighted': sigma is not None,
    }

    return PolyFitSolution(_result=Result(
        params=params,
        info=info,
        timing=timer.result(),
        backend_name=system.backend_name,
        warnings=decomposition.warnings,
    ))
