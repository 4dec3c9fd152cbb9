"""
Shared compute infrastructure for doaslinear.

This module provides timing utilities, precision constants and linear
algebra kernels used by the SVD and QR backends.

IMPORTANT: This is NOT where the backends live. Those go in
linear/backends/. This module contains shared NUMERIC infrastructure.

Submodules:
    timing: Execution timing utilities
    precision: Machine epsilon and pseudoinverse cutoff
    tolerances: Comparison tolerance tiers
    linalg: Linear algebra kernels (normalization, SVD, QR, Cholesky)
"""

from doaslinear.core.compute.timing import Timer

__all__ = [
    # Timing
    "Timer",
]
