"""
Linear least-squares systems.

This module solves the linear part of the Beer-Lambert law: given the
design matrix of a DOAS fit and a measured signal, it returns the
coefficients and their covariance.

Public API:
    LinearSystem(m, n, mode)       empty system, filled by set_column()
    from_matrix(a, mode) -> LinearSystem
    allocate(m, n, mode) -> LinearSystem
    fit_poly(t, y, order, sigma=None) -> PolyFitSolution

Example:
    >>> from doaslinear.linear import from_matrix
    >>> system = from_matrix(A, mode='svd')
    >>> result = system.decompose(covariance=True)
    >>> x = system.solve(b)
    >>> result.params.covariance
"""

from doaslinear.linear.design import DesignMatrix
from doaslinear.linear.system import LinearSystem, DecompositionMode
from doaslinear.linear.solution import (
    DecompositionParams,
    PolyFitParams,
    PolyFitSolution,
)
from doaslinear.linear.solvers import allocate, from_matrix, fit_poly

__all__ = [
    "LinearSystem",
    "DecompositionMode",
    "DesignMatrix",
    "DecompositionParams",
    "PolyFitParams",
    "PolyFitSolution",
    "allocate",
    "from_matrix",
    "fit_poly",
]
