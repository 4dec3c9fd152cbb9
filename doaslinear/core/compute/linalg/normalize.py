"""
Column normalization.

Design-matrix columns come from heterogeneous physical quantities (cross
sections of order 1e-20, polynomial terms of order 1), so they are scaled
to unit Euclidean norm before factorization. The Normalizer remembers the
scale factors and maps every result back to the caller's units.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import NDArray

from doaslinear.core.exceptions import NormalizationError


@dataclass(frozen=True)
class Normalizer:
    """
    Per-column scale factors of a design matrix.

    Attributes:
        norms: Euclidean norm of every column (n,), all strictly positive
    """
    norms: NDArray[np.floating[Any]]

    @classmethod
    def from_matrix(cls, a: NDArray[np.floating[Any]]) -> Normalizer:
        """
        Measure the column norms of a.

        Raises:
            NormalizationError: If a column has zero norm
        """
        norms = np.sqrt(np.sum(a * a, axis=0))
        zero = np.flatnonzero(norms == 0.0)
        if zero.size > 0:
            column = int(zero[0])
            raise NormalizationError(
                f"Column {column} of the design matrix has zero norm; "
                f"the system is structurally singular",
                column=column,
            )
        return cls(norms=norms)

    def apply(self, a: NDArray[np.floating[Any]]) -> NDArray[np.floating[Any]]:
        """Return a copy of a with unit-norm columns."""
        return a / self.norms

    def solution(self, x: NDArray[np.floating[Any]]) -> NDArray[np.floating[Any]]:
        """Undo normalization on a solution vector (n,) or matrix (n, k)."""
        if x.ndim == 2:
            return x / self.norms[:, np.newaxis]
        return x / self.norms

    def covariance(self, covar: NDArray[np.floating[Any]]) -> NDArray[np.floating[Any]]:
        """covar[j, k] / (norms[j] * norms[k])"""
        return covar / np.outer(self.norms, self.norms)

    def variances(self, variances: NDArray[np.floating[Any]]) -> NDArray[np.floating[Any]]:
        """variances[j] / norms[j]**2"""
        return variances / (self.norms * self.norms)
