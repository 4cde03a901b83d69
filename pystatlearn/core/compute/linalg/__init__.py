"""
Linear algebra kernels for pystatlearn.

All functions follow these conventions:
    - NumPy (LAPACK under the hood) for factorizations
    - Decompositions return a structured result dataclass
    - Singular systems raise SingularMatrixError immediately

Submodules:
    qr: QR decomposition and least-squares solve
    solve: Back-substitution and Gram-matrix solvers
"""

from pystatlearn.core.compute.linalg.qr import (
    QRResult,
    qr_decompose,
    qr_solve,
)
from pystatlearn.core.compute.linalg.solve import (
    back_substitute,
    check_gram,
    invert_gram,
    solve_gram,
    triangular_inverse,
)

__all__ = [
    # QR decomposition
    "QRResult",
    "qr_decompose",
    "qr_solve",
    # Solvers
    "back_substitute",
    "check_gram",
    "invert_gram",
    "solve_gram",
    "triangular_inverse",
]
