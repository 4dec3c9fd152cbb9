"""
Inverse of the normal matrix via Cholesky.

The R factor of a QR decomposition is the Cholesky factor of A'A, but
with column pivoting it is permuted and LAPACK does not hand it back in
a form that cho_solve accepts, so (A'A)^-1 is obtained from an
independent Cholesky factorization of A'A.
"""

from typing import Any
import numpy as np
from numpy.typing import NDArray
from scipy.linalg import cho_factor, cho_solve, LinAlgError

from doaslinear.core.exceptions import NotPositiveDefiniteError


def normal_matrix_inverse(a: NDArray[np.floating[Any]]) -> NDArray[np.floating[Any]]:
    """
    Compute (A'A)^-1 by solving A'A X = I through Cholesky.

    Args:
        a: Design matrix (m x n)

    Returns:
        (A'A)^-1 (n x n), the coefficient covariance of a unit-variance fit

    Raises:
        NotPositiveDefiniteError: If A'A is not positive definite
    """
    n = a.shape[1]
    ata = a.T @ a
    try:
        factor = cho_factor(ata, lower=True, check_finite=False)
    except LinAlgError as e:
        raise NotPositiveDefiniteError(
            f"A'A ({n} x {n}) is not positive definite; "
            f"the design matrix is rank-deficient: {e}",
            matrix_name="A'A",
        ) from e
    return cho_solve(factor, np.eye(n), check_finite=False)
