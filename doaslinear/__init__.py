"""
doaslinear: the linear least-squares core of a DOAS spectral fit.

Solves the linear (Beer-Lambert) term of a differential optical
absorption spectroscopy retrieval with interchangeable SVD and QR
backends, column normalization, observation weighting, covariance
recovery and a truncated pseudoinverse.

Submodules:
    linear: LinearSystem facade and the polynomial fit
    core: Exceptions, validation, result envelope and numeric kernels
"""

__version__ = "0.1.0"

from doaslinear import linear
from doaslinear.linear import LinearSystem, allocate, from_matrix, fit_poly

__all__ = [
    "__version__",
    "linear",
    "LinearSystem",
    "allocate",
    "from_matrix",
    "fit_poly",
]
