"""
QR decomposition and least-squares solve.

X = QR via LAPACK (through NumPy); the triangular system is then solved
by explicit back-substitution. Used by the regression QR backend.
"""

from dataclasses import dataclass
from typing import Literal, Any
import numpy as np
from numpy.typing import NDArray

from pystatlearn.core.compute.linalg.solve import back_substitute
from pystatlearn.core.compute.tolerances import QR_RANK_TOLERANCE
from pystatlearn.core.exceptions import SingularMatrixError


@dataclass(frozen=True)
class QRResult:
    """
    Result of QR decomposition.

    Attributes:
        Q: Orthogonal matrix (n x k where k = min(n, p) for reduced mode)
        R: Upper triangular matrix (k x p)
        rank: Numerical rank determined from R diagonal
    """
    Q: NDArray[np.floating[Any]]
    R: NDArray[np.floating[Any]]
    rank: int


def qr_decompose(
    X: NDArray[np.floating[Any]],
    mode: Literal['reduced', 'complete'] = 'reduced'
) -> QRResult:
    """
    QR decomposition using LAPACK (via NumPy).

    Computes X = QR where Q is orthogonal and R is upper triangular.

    Args:
        X: Matrix to decompose (n x p)
        mode: 'reduced' for economy QR (Q is n x k, R is k x p where k = min(n,p))
              'complete' for full QR (Q is n x n, R is n x p)

    Returns:
        QRResult with Q, R, and numerical rank
    """
    Q, R = np.linalg.qr(X, mode=mode)

    # Column j is aliased when its pivot is negligible relative to its norm
    k = min(X.shape)
    diag_R = np.abs(np.diag(R))[:k]
    col_norms = np.linalg.norm(X[:, :k], axis=0)
    rank = int(np.sum(diag_R > QR_RANK_TOLERANCE * col_norms))

    return QRResult(Q=Q, R=R, rank=rank)


def qr_solve(
    X: NDArray[np.floating[Any]],
    y: NDArray[np.floating[Any]],
) -> tuple[NDArray[np.floating[Any]], QRResult]:
    """
    Solve least squares via QR decomposition.

    Solves: min_β ||y - Xβ||² as
        X = QR
        Rβ = Q'y   (back-substitution, bottom row first)

    Args:
        X: Design matrix (n x p), must have n >= p
        y: Response vector (n,)

    Returns:
        (β, QRResult) so callers can reuse R without refactoring X

    Raises:
        SingularMatrixError: If X is rank-deficient
    """
    n, p = X.shape
    qr_result = qr_decompose(X, mode='reduced')

    if qr_result.rank < p:
        raise SingularMatrixError(
            f"Design matrix is rank-deficient: rank={qr_result.rank}, expected={p}. "
            f"X'X is singular (is the predictor constant?).",
            matrix_name='X',
            rank=qr_result.rank,
            expected_rank=p
        )

    Qty = qr_result.Q.T @ y
    beta = back_substitute(qr_result.R[:p, :p], Qty[:p])

    return beta, qr_result
