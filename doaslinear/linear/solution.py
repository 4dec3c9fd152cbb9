"""
Linear-system solution types.

Contains the parameter payloads produced by decomposition and polynomial
fitting, and the user-facing polynomial fit wrapper.
"""

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import ArrayLike, NDArray

from doaslinear.core.result import Result
from doaslinear.core.validation import check_array


@dataclass(frozen=True)
class DecompositionParams:
    """
    Parameter payload of LinearSystem.decompose().

    Covariance and variances are in the caller's (unnormalized) units and
    are None unless they were requested.
    """
    norms: NDArray[np.floating[Any]]
    rank: int
    covariance: NDArray[np.floating[Any]] | None = None
    variances: NDArray[np.floating[Any]] | None = None
    singular_values: NDArray[np.floating[Any]] | None = None


@dataclass(frozen=True)
class PolyFitParams:
    """
    Parameter payload of fit_poly().

    coefficients[i] multiplies t**i.
    """
    coefficients: NDArray[np.floating[Any]]
    fitted_values: NDArray[np.floating[Any]]
    residuals: NDArray[np.floating[Any]]
    rss: float
    order: int


@dataclass
class PolyFitSolution:
    """
    User-facing polynomial fit results.

    Wraps the Result envelope and provides accessors for the coefficients
    and the quality of the fit.
    """
    _result: Result[PolyFitParams]

    @property
    def coefficients(self) -> NDArray[np.floating[Any]]:
        return self._result.params.coefficients

    @property
    def order(self) -> int:
        return self._result.params.order

    @property
    def fitted_values(self) -> NDArray[np.floating[Any]]:
        return self._result.params.fitted_values

    @property
    def residuals(self) -> NDArray[np.floating[Any]]:
        """Unweighted residuals y - fitted_values."""
        return self._result.params.residuals

    @property
    def rss(self) -> float:
        return self._result.params.rss

    @property
    def rank(self) -> int:
        return self._result.info['rank']

    @property
    def norms(self) -> NDArray[np.floating[Any]]:
        return self._result.info['norms']

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def evaluate(self, t: ArrayLike) -> NDArray[np.floating[Any]]:
        """Evaluate the fitted polynomial at t (Horner's scheme)."""
        t_arr = check_array(t, 't')
        result = np.zeros_like(t_arr)
        for c in self.coefficients[::-1]:
            result = result * t_arr + c
        return result

    def summary(self) -> str:
        """Plain-text summary of the fit."""
        lines = [
            f"Polynomial fit of order {self.order}",
            f"Backend: {self.backend_name}",
            "",
            f"{'Term':<10}{'Coefficient':>20}",
        ]
        for i, c in enumerate(self.coefficients):
            term = '1' if i == 0 else ('t' if i == 1 else f't^{i}')
            lines.append(f"{term:<10}{c:>20.10g}")
        lines.append("")
        lines.append(f"Residual sum of squares: {self.rss:.6g}")
        lines.append(f"Observations: {len(self.residuals)}, rank: {self.rank}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"PolyFitSolution(order={self.order}, "
            f"coefficients={np.array2string(self.coefficients, precision=6)})"
        )
