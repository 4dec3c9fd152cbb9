"""
LinearSystem: the least-squares facade.

A LinearSystem owns the design matrix of m equations in n unknowns, the
chosen backend and the normalization state. The expected life cycle is

    populate (from_matrix / set_column) -> set_weight -> decompose once
    -> solve many times

and every operation is dispatched to the SVD or QR backend selected at
construction.
"""

from __future__ import annotations

import warnings
from typing import Any, Literal, Sequence, Union
import numpy as np
from numpy.typing import ArrayLike, NDArray

from doaslinear.core.result import Result
from doaslinear.core.protocols import DecompositionBackend
from doaslinear.core.exceptions import (
    ValidationError,
    NotPositiveDefiniteError,
    NotDecomposedError,
    BackendCapabilityError,
)
from doaslinear.core.validation import (
    check_array,
    check_finite,
    check_1d,
    check_2d,
    check_length,
    check_index,
)
from doaslinear.core.compute.timing import Timer
from doaslinear.core.compute.linalg.normalize import Normalizer
from doaslinear.core.compute.linalg.svd import SVDFactorization
from doaslinear.linear.design import DesignMatrix
from doaslinear.linear.solution import DecompositionParams
from doaslinear.linear.backends.svd import SVDBackend
from doaslinear.linear.backends.qr import QRBackend, QRFactorization


# Type alias for backend selection
DecompositionMode = Literal['svd', 'qr']

Factorization = Union[SVDFactorization, QRFactorization]


def select_backend(mode: DecompositionMode) -> DecompositionBackend:
    """
    Instantiate the backend for a decomposition mode.

    Raises:
        ValidationError: If mode is unknown
    """
    if mode == 'svd':
        return SVDBackend()
    elif mode == 'qr':
        return QRBackend()
    else:
        raise ValidationError(f"Unknown decomposition mode: {mode!r}, expected 'svd' or 'qr'")


class LinearSystem:
    """
    Linear least-squares system of m equations in n unknowns.

    Columns are scaled to unit norm before factorization; solutions and
    covariances are scaled back to the caller's units, while pinv() stays
    in normalized units. All indices are 0-based.

    Example:
        >>> system = LinearSystem.from_matrix(A, mode='qr')
        >>> system.set_weight(sigma)
        >>> result = system.decompose(variances=True)
        >>> x = system.solve(b)
        >>> err = np.sqrt(result.params.variances)
    """

    def __init__(self, m: int, n: int, mode: DecompositionMode = 'svd'):
        self._setup(DesignMatrix.zeros(m, n), mode)

    @classmethod
    def from_matrix(
        cls,
        a: ArrayLike,
        mode: DecompositionMode = 'svd',
        *,
        m: int | None = None,
        n: int | None = None,
    ) -> LinearSystem:
        """Build a system from an m x n array (rows are equations)."""
        return cls.from_design(DesignMatrix.from_array(a, m=m, n=n), mode)

    @classmethod
    def from_columns(
        cls,
        columns: Sequence[ArrayLike],
        mode: DecompositionMode = 'svd',
    ) -> LinearSystem:
        """Build a system from one length-m array per unknown."""
        return cls.from_design(DesignMatrix.from_columns(columns), mode)

    @classmethod
    def from_design(cls, design: DesignMatrix, mode: DecompositionMode) -> LinearSystem:
        system = cls.__new__(cls)
        system._setup(design, mode)
        return system

    def _setup(self, design: DesignMatrix, mode: DecompositionMode) -> None:
        self._backend = select_backend(mode)
        self._mode = mode
        self._design = design
        self._norms = np.zeros(design.n, dtype=np.float64)
        self._normalizer: Normalizer | None = None
        self._factorization: Factorization | None = None
        self._last_decomposition: Result[DecompositionParams] | None = None

    # === Properties ===

    @property
    def m(self) -> int:
        """Number of equations."""
        return self._design.m

    @property
    def n(self) -> int:
        """Number of unknowns."""
        return self._design.n

    @property
    def mode(self) -> DecompositionMode:
        return self._mode

    @property
    def backend_name(self) -> str:
        return self._backend.name

    @property
    def matrix(self) -> NDArray[np.floating[Any]]:
        """Copy of the current (weighted, unnormalized) design matrix."""
        return self._design.copy()

    @property
    def norms(self) -> NDArray[np.floating[Any]]:
        """Copy of the column norms; zeros until decompose() succeeds."""
        return self._norms.copy()

    @property
    def is_decomposed(self) -> bool:
        return self._factorization is not None

    @property
    def last_decomposition(self) -> Result[DecompositionParams] | None:
        return self._last_decomposition

    def get_norm(self, index: int) -> float:
        """Normalization factor of column index (0-based)."""
        index = check_index(index, self.n, 'index')
        return float(self._norms[index])

    # === Population ===

    def set_column(self, j: int, values: ArrayLike) -> None:
        """
        Overwrite column j (0-based) of the design matrix.

        Any existing decomposition is discarded.
        """
        self._design.set_column(j, values)
        self._invalidate()

    def set_weight(self, sigma: ArrayLike | None) -> None:
        """
        Weighted least squares: divide row i by sigma[i].

        sigma holds the standard deviation of each observation; None is a
        no-op. Any existing decomposition is discarded. Calling this twice
        weights twice.
        """
        if sigma is None:
            return
        self._design.set_weight(sigma)
        self._invalidate()

    def _invalidate(self) -> None:
        self._norms = np.zeros(self.n, dtype=np.float64)
        self._normalizer = None
        self._factorization = None
        self._last_decomposition = None

    # === Decomposition ===

    def decompose(
        self,
        *,
        covariance: bool = False,
        variances: bool = False,
    ) -> Result[DecompositionParams]:
        """
        Normalize columns and factorize the design matrix.

        Algorithm:
            1. Scale every column to unit norm, remembering the norms
            2. Factorize with the selected backend (SVD or pivoted QR)
            3. If requested, compute (A'A)^-1 and rescale it by
               1/(norms[j] * norms[k]); variances are its diagonal

        The stored design matrix is left untouched, so decomposing again
        reproduces the same factorization.

        Args:
            covariance: Return the n x n coefficient covariance
            variances: Return the n per-coefficient variances

        Returns:
            Result containing DecompositionParams

        Raises:
            NormalizationError: If a column has zero norm
        """
        timer = Timer()
        timer.start()
        messages: list[str] = []

        m, n = self.m, self.n
        if m < n:
            msg = f"Under-determined system: {m} equations for {n} unknowns"
            warnings.warn(msg, RuntimeWarning, stacklevel=2)
            messages.append(msg)

        # === Normalization ===
        with timer.section('normalization'):
            normalizer = Normalizer.from_matrix(self._design.values)
            a = normalizer.apply(self._design.values)

        # === Factorization ===
        with timer.section('factorization'):
            factorization = self._backend.factorize(a)

        self._normalizer = normalizer
        self._norms = normalizer.norms.copy()
        self._factorization = factorization

        # === Covariance ===
        covar_out = None
        variances_out = None
        if covariance or variances:
            with timer.section('covariance'):
                covar = self._normalized_covariance(messages)
                if covariance:
                    covar_out = normalizer.covariance(covar)
                if variances:
                    variances_out = normalizer.variances(np.diag(covar).copy())

        timer.stop()

        rank = self._backend.rank(factorization)
        singular_values = None
        if isinstance(factorization, SVDFactorization):
            singular_values = factorization.w.copy()

        params = DecompositionParams(
            norms=normalizer.norms.copy(),
            rank=rank,
            covariance=covar_out,
            variances=variances_out,
            singular_values=singular_values,
        )

        info: dict[str, Any] = {
            'method': self._mode,
            'rank': rank,
            'm': m,
            'n': n,
        }
        info.update(self._backend.diagnostics(factorization))

        result = Result(
            params=params,
            info=info,
            timing=timer.result(),
            backend_name=self.backend_name,
            warnings=tuple(messages),
        )
        self._last_decomposition = result
        return result

    def _require_decomposed(self, operation: str) -> Factorization:
        if self._factorization is None:
            raise NotDecomposedError(
                f"{operation}() requires decompose() to be called first",
                operation=operation,
            )
        return self._factorization

    def _normalized_covariance(self, messages: list[str]) -> NDArray[np.floating[Any]]:
        """Covariance of the normalized matrix; NaN if A'A is singular."""
        try:
            return self._backend.covariance(self._factorization)
        except NotPositiveDefiniteError as e:
            msg = f"Covariance unavailable: {e}"
            warnings.warn(msg, RuntimeWarning, stacklevel=3)
            messages.append(msg)
            return np.full((self.n, self.n), np.nan)

    def covariance(self) -> NDArray[np.floating[Any]]:
        """Coefficient covariance (n x n) in the caller's units."""
        self._require_decomposed('covariance')
        return self._normalizer.covariance(self._normalized_covariance([]))

    def variances(self) -> NDArray[np.floating[Any]]:
        """Per-coefficient variances (n,) in the caller's units."""
        self._require_decomposed('variances')
        covar = self._normalized_covariance([])
        return self._normalizer.variances(np.diag(covar).copy())

    # === Solve ===

    def solve(self, b: ArrayLike) -> NDArray[np.floating[Any]]:
        """
        Least-squares coefficients for right-hand side b.

        Minimizes ||A x - b|| and returns x in the caller's units. Does not
        modify the decomposition and may be called any number of times.

        Args:
            b: Right-hand side of length m

        Returns:
            Coefficients of length n

        Raises:
            NotDecomposedError: If decompose() has not been called
            DimensionError: If b does not have length m
        """
        factorization = self._require_decomposed('solve')
        b_arr = check_array(b, 'b')
        check_1d(b_arr, 'b')
        check_length(b_arr, self.m, 'b')
        check_finite(b_arr, 'b')

        x = self._backend.solve(factorization, b_arr)
        return self._normalizer.solution(x)

    def solve_many(self, b: ArrayLike) -> NDArray[np.floating[Any]]:
        """
        Solve for every column of an m x k right-hand-side matrix.

        Returns:
            Coefficients (n x k), column i solving for b[:, i]
        """
        factorization = self._require_decomposed('solve_many')
        b_arr = check_array(b, 'b')
        check_2d(b_arr, 'b')
        check_length(b_arr, self.m, 'b')
        check_finite(b_arr, 'b')

        x = self._backend.solve(factorization, b_arr)
        return self._normalizer.solution(x)

    # === Pseudoinverse ===

    def pinv(self) -> NDArray[np.floating[Any]]:
        """
        Truncated pseudoinverse of the normalized design matrix (n x m).

        Built from the stored factors as V diag(1/W) U', with singular values
        at or below max(m, n) * W[0] * eps dropped. It is not rescaled by the
        column norms; combine it with get_norm() to map results back to the
        caller's units. Only the SVD backend supports this.

        Raises:
            BackendCapabilityError: If the system does not use SVD
            NotDecomposedError: If decompose() has not been called
        """
        if not self._backend.supports('pinv'):
            raise BackendCapabilityError(
                f"pinv() requires the SVD backend, this system uses {self.backend_name!r}",
                backend_name=self.backend_name,
                operation='pinv',
            )
        factorization = self._require_decomposed('pinv')
        return self._backend.pinv(factorization)

    def __repr__(self) -> str:
        state = 'decomposed' if self.is_decomposed else 'not decomposed'
        return f"LinearSystem(m={self.m}, n={self.n}, mode={self._mode!r}, {state})"
