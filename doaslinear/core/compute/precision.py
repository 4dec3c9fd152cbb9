"""
Numerical precision constants and utilities.

Provides machine epsilon, the pseudoinverse cutoff and a condition
number helper shared by the SVD and QR kernels.
"""

import numpy as np
from numpy.typing import NDArray
from typing import Any


# Machine epsilon for float64
EPSILON_64: float = float(np.finfo(np.float64).eps)  # ~2.22e-16

# Rounded epsilon used for the pseudoinverse cutoff, kept as the literal
# constant so truncation decisions match the historical numbers exactly.
EPSILON: float = 2.2204e-16


def pinv_tolerance(m: int, n: int, largest_singular_value: float) -> float:
    """
    Cutoff below which singular values are treated as zero.

    tol = max(m, n) * W[0] * EPSILON

    Args:
        m: Number of equations
        n: Number of unknowns
        largest_singular_value: W[0], the largest singular value

    Returns:
        Absolute tolerance on singular values
    """
    return max(m, n) * float(largest_singular_value) * EPSILON


def effective_rank(singular_values: NDArray[np.floating[Any]], tolerance: float) -> int:
    """
    Count leading singular values strictly above tolerance.

    Singular values are assumed sorted largest-first; counting stops at
    the first value that does not exceed the tolerance.
    """
    rank = 0
    for w in singular_values:
        if not w > tolerance:
            break
        rank += 1
    return rank


def condition_number(singular_values: NDArray[np.floating[Any]]) -> float:
    """
    Condition number from a set of singular values.

    Returns:
        Ratio of largest to smallest singular value, inf if singular.
    """
    s = np.asarray(singular_values)
    if s.size == 0 or s[-1] == 0:
        return float(np.inf)
    return float(s[0] / s[-1])
