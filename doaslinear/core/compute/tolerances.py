"""
Tolerance tiers for numerical validation.

Defines precision expectations when comparing solutions from different
paths:
- well-conditioned systems: SVD and QR agree to near machine precision
- ill-conditioned systems: relaxed, since both paths lose digits

Used by the test suite and by callers comparing SVD and QR solutions.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ToleranceTier:
    """Tolerance specification for numerical comparison."""
    rtol: float
    atol: float
    name: str
    description: str


# Normalized columns keep well-posed DOAS fits in this tier
CPU_FP64 = ToleranceTier(
    rtol=1e-9,
    atol=1e-12,
    name='cpu_fp64',
    description='CPU double precision, SVD and QR agree',
)

# Ill-conditioned problems (cond > 1e4 after normalization)
CPU_FP64_ILL_CONDITIONED = ToleranceTier(
    rtol=1e-4,
    atol=1e-6,
    name='cpu_fp64_ill_conditioned',
    description='CPU double precision, ill-conditioned (cond > 1e4)',
)

# Condition number above which a system counts as ill-conditioned.
ILL_CONDITIONED_THRESHOLD = 1e4


def select_tolerance(condition_number: float | None = None) -> ToleranceTier:
    """Select the tolerance tier for a system with the given condition number."""
    if condition_number is not None and condition_number > ILL_CONDITIONED_THRESHOLD:
        return CPU_FP64_ILL_CONDITIONED
    return CPU_FP64
