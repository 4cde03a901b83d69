"""
Solver dispatch for local regression.

This module provides the loess() function (public API) and backend selection.
"""

from typing import Literal
from numpy.typing import ArrayLike

from pystatlearn.core.exceptions import InvalidParameterError
from pystatlearn.smoothing._common import DegreeChoice
from pystatlearn.smoothing.design import LoessDesign
from pystatlearn.smoothing.solution import LoessSolution
from pystatlearn.smoothing.backends.cpu import CPULoessBackend


BackendChoice = Literal['auto', 'cpu']


def loess(
    x: ArrayLike | LoessDesign,
    y: ArrayLike | None = None,
    *,
    span: float = 0.75,
    degree: DegreeChoice = 2,
    backend: BackendChoice = 'auto',
) -> LoessSolution:
    """
    Fit a LOESS smoother through (x, y).

    For every observed x[i], the floor(span * n) nearest points are
    weighted with the tri-cube kernel on (x[j] - x[i]) / floor(window / 2)
    and a local polynomial of the given degree is fitted by weighted least
    squares; its value at x[i] is the smoothed value.

    Args:
        x: Predictor values (n,), or a prepared LoessDesign
        y: Response values (n,). Required unless x is a LoessDesign.
        span: Fraction of points in each neighborhood, strictly in (0, 1)
        degree: Local polynomial degree, 1 or 2
        backend: 'auto' or 'cpu'

    Returns:
        LoessSolution with fitted values, residuals, SSE and MSE

    Raises:
        InvalidParameterError: degree not in {1, 2} or span outside (0, 1)
        InsufficientNeighborsError: floor(span * n) < degree + 1
        DimensionMismatchError: x and y lengths differ
        SingularMatrixError: a local X'WX is singular (the fit is aborted)

    Example:
        >>> result = loess(x, y, span=0.3, degree=1)
        >>> result.fitted_values
        >>> result.mse
    """
    if isinstance(x, LoessDesign):
        design = x
    else:
        if y is None:
            raise ValueError("y required when x is not a LoessDesign")
        design = LoessDesign.from_arrays(x, y, span=span, degree=degree)

    backend_impl = _get_backend(backend)
    result = backend_impl.solve(design)
    return LoessSolution(_result=result, _design=design)


def _get_backend(choice: BackendChoice) -> CPULoessBackend:
    """Select and instantiate the appropriate backend."""
    if choice in ('auto', 'cpu'):
        return CPULoessBackend()
    raise InvalidParameterError(
        f"Unknown backend: {choice!r}", parameter='backend', value=choice
    )
