"""
Linear-system backends.

Available backends:
    SVDBackend: Singular value decomposition (supports pinv)
    QRBackend: Column-pivoted QR decomposition
"""

from doaslinear.linear.backends.svd import SVDBackend
from doaslinear.linear.backends.qr import QRBackend, QRFactorization

__all__ = [
    "SVDBackend",
    "QRBackend",
    "QRFactorization",
]
