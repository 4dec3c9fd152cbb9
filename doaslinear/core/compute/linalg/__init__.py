"""
Linear algebra kernels for doaslinear.

All functions follow these conventions:
    - NumPy/SciPy only (LAPACK under the hood)
    - Each factorization returns a structured, frozen result dataclass
    - Kernels trust their inputs; validation happens at the facade
    - Errors are raised immediately with clear messages

Submodules:
    normalize: Column scaling to unit norm
    svd: Singular value decomposition, back-substitution, pseudoinverse
    qr: Column-pivoted QR decomposition and solve
    cholesky: (A'A)^-1 through Cholesky
"""

from doaslinear.core.compute.linalg.normalize import Normalizer
from doaslinear.core.compute.linalg.svd import (
    SVDFactorization,
    svd_cpu,
    svd_backsubstitute,
    svd_covariance,
    svd_pinv,
)
from doaslinear.core.compute.linalg.qr import (
    QRResult,
    qr_cpu,
    qr_solve_cpu,
)
from doaslinear.core.compute.linalg.cholesky import normal_matrix_inverse

__all__ = [
    # Normalization
    "Normalizer",
    # SVD
    "SVDFactorization",
    "svd_cpu",
    "svd_backsubstitute",
    "svd_covariance",
    "svd_pinv",
    # QR decomposition
    "QRResult",
    "qr_cpu",
    "qr_solve_cpu",
    # Cholesky
    "normal_matrix_inverse",
]
