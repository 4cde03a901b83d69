"""
Solver dispatch for regression.

This module provides the fit() function (public API) and method selection.
"""

import warnings

from numpy.typing import ArrayLike

from pystatlearn.core.exceptions import InvalidParameterError
from pystatlearn.core.protocols import Backend
from pystatlearn.regression._common import (
    VALID_METHODS,
    IntervalChoice,
    LinearParams,
    MethodChoice,
)
from pystatlearn.regression.design import Design
from pystatlearn.regression.solution import LinearSolution
from pystatlearn.regression.backends.cpu import CPUInverseBackend, CPUQRBackend


LinearBackend = Backend[Design, LinearParams]

_BACKENDS: dict[str, type] = {
    'inverse': CPUInverseBackend,
    'qr': CPUQRBackend,
}

# Conditions a caller must see even without inspecting Result.warnings
_LOUD_WARNINGS = ("perfect fit",)


def fit(
    y: ArrayLike | Design,
    x: ArrayLike | None = None,
    *,
    method: MethodChoice = 'qr',
    interval: IntervalChoice = 'none',
    level: float = 0.95,
) -> LinearSolution:
    """
    Fit a straight line y = β₀ + β₁x by ordinary least squares.

    Solves min_β ||y - Xβ||² with X = [1, x], then computes the
    coefficient table, ANOVA decomposition and, on request, confidence
    and prediction bands at the observed x.

    Args:
        y: Response vector (n,), or a prepared Design
        x: Predictor vector (n,)
        method: How β and (X'X)⁻¹ are computed:
            - 'qr': QR decomposition of X with back-substitution
            - 'inverse': explicit inverse of X'X
        interval: Bands to compute at the observed x:
            'none', 'confidence', 'prediction' or 'both'
        level: Coverage level for coefficient intervals and bands, in (0, 1)

    Returns:
        LinearSolution with coefficients, tables and summary()

    Raises:
        InvalidParameterError: Unknown method or interval, level outside (0, 1)
        DimensionMismatchError: y and x lengths differ
        ValidationError: Fewer than 3 observations, non-finite values
        SingularMatrixError: x is constant, so X'X is singular

    Example:
        >>> import numpy as np
        >>> from pystatlearn.regression import fit
        >>>
        >>> x = np.arange(10.0)
        >>> y = 2.0 + 0.5 * x + np.random.default_rng(0).normal(0, 0.1, 10)
        >>> result = fit(y, x, interval='both')
        >>> print(result.summary())
    """
    if isinstance(y, Design):
        design = y
    else:
        if x is None:
            raise ValueError("x required when y is not a Design")
        design = Design.from_arrays(y, x, interval=interval, level=level)

    backend_impl = _get_backend(method)
    result = backend_impl.solve(design)

    for message in result.warnings:
        if any(key in message for key in _LOUD_WARNINGS):
            warnings.warn(message, RuntimeWarning, stacklevel=2)

    return LinearSolution(_result=result, _design=design)


def _get_backend(method: MethodChoice) -> LinearBackend:
    """
    Instantiate the backend registered for a method name.

    Raises:
        InvalidParameterError: If no backend is registered under `method`
    """
    try:
        backend_cls = _BACKENDS[method]
    except (KeyError, TypeError):
        raise InvalidParameterError(
            f"method must be one of {VALID_METHODS}, got {method!r}",
            parameter='method',
            value=method,
        ) from None
    return backend_cls()
