"""
Triangular and symmetric solvers.

Kernels shared by the LOESS local fits (weighted normal equations) and
the regression backends (normal-equation inverse, QR back-substitution).
Every singular case raises SingularMatrixError; nothing here returns
NaN or Inf silently.
"""

from typing import Any
import numpy as np
from numpy.typing import NDArray

from pystatlearn.core.compute.tolerances import SINGULAR_CONDITION_THRESHOLD
from pystatlearn.core.exceptions import SingularMatrixError


def back_substitute(
    R: NDArray[np.floating[Any]],
    b: NDArray[np.floating[Any]],
) -> NDArray[np.floating[Any]]:
    """
    Solve R @ x = b for upper-triangular R.

    Works from the bottom row up: x[p-1] first, then each earlier row
    subtracts the already-solved tail before dividing by its pivot.

    Args:
        R: Upper triangular matrix (p x p)
        b: Right-hand side (p,)

    Returns:
        Solution vector x (p,)

    Raises:
        SingularMatrixError: If any diagonal entry of R is zero
    """
    p = R.shape[0]
    diag = np.diag(R)
    if np.any(diag == 0.0):
        rank = int(np.count_nonzero(diag))
        raise SingularMatrixError(
            f"Triangular factor has {p - rank} zero pivot(s)",
            matrix_name='R',
            rank=rank,
            expected_rank=p,
        )

    x = np.zeros(p, dtype=np.float64)
    for i in range(p - 1, -1, -1):
        x[i] = (b[i] - R[i, i + 1:] @ x[i + 1:]) / R[i, i]
    return x


def check_gram(
    A: NDArray[np.floating[Any]],
    name: str,
    point_index: int | None = None,
) -> float:
    """
    Verify a symmetric Gram matrix is numerically invertible.

    Args:
        A: Symmetric positive semi-definite matrix (p x p)
        name: Matrix description for the error message
        point_index: Query point the matrix belongs to (local fits only)

    Returns:
        The 2-norm condition number of A

    Raises:
        SingularMatrixError: If cond(A) is infinite or above
            SINGULAR_CONDITION_THRESHOLD
    """
    with np.errstate(divide='ignore', invalid='ignore'):
        cond = float(np.linalg.cond(A))

    if not np.isfinite(cond) or cond > SINGULAR_CONDITION_THRESHOLD:
        where = f" at point {point_index}" if point_index is not None else ""
        raise SingularMatrixError(
            f"{name} is singular{where} (condition number {cond:.3e}, "
            f"threshold {SINGULAR_CONDITION_THRESHOLD:.1e})",
            matrix_name=name,
            condition_number=cond,
            expected_rank=A.shape[0],
            point_index=point_index,
        )
    return cond


def solve_gram(
    A: NDArray[np.floating[Any]],
    b: NDArray[np.floating[Any]],
    name: str,
    point_index: int | None = None,
) -> NDArray[np.floating[Any]]:
    """
    Solve the normal equations A @ x = b after a singularity check.

    Args:
        A: Gram matrix (X'X or X'WX), p x p
        b: Right-hand side (X'y or X'Wy), p
        name: Matrix description for error messages
        point_index: Query point the system belongs to (local fits only)

    Raises:
        SingularMatrixError: If A is singular or too ill-conditioned
    """
    check_gram(A, name, point_index=point_index)
    try:
        return np.linalg.solve(A, b)
    except np.linalg.LinAlgError as e:
        raise SingularMatrixError(
            f"{name} could not be solved: {e}",
            matrix_name=name,
            expected_rank=A.shape[0],
            point_index=point_index,
        ) from e


def invert_gram(
    A: NDArray[np.floating[Any]],
    name: str,
) -> tuple[NDArray[np.floating[Any]], float]:
    """
    Invert a Gram matrix after a singularity check.

    Returns:
        (A⁻¹, condition number of A)

    Raises:
        SingularMatrixError: If A is singular or too ill-conditioned
    """
    cond = check_gram(A, name)
    try:
        A_inv = np.linalg.inv(A)
    except np.linalg.LinAlgError as e:
        raise SingularMatrixError(
            f"{name} could not be inverted: {e}",
            matrix_name=name,
            condition_number=cond,
            expected_rank=A.shape[0],
        ) from e
    return A_inv, cond


def triangular_inverse(R: NDArray[np.floating[Any]]) -> NDArray[np.floating[Any]]:
    """
    Invert an upper-triangular matrix column by column.

    Each column of R⁻¹ is the back-substitution solution for the
    matching column of the identity.
    """
    p = R.shape[0]
    identity = np.eye(p)
    return np.column_stack([back_substitute(R, identity[:, j]) for j in range(p)])
