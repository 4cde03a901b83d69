"""
Common data types for local regression.

Contains the frozen parameter payload that goes inside the Result[P]
envelope. Pure data container: no methods, no computation.
"""

from dataclasses import dataclass
from typing import Any, Literal

import numpy as np
from numpy.typing import NDArray


VALID_DEGREES = (1, 2)

DegreeChoice = Literal[1, 2]


@dataclass(frozen=True)
class LoessParams:
    """
    Parameter payload for a LOESS fit.

    Attributes:
        fitted_values: Smoothed value at every observed x (n,)
        residuals: y - fitted_values (n,)
        sse: Sum of squared residuals
        mse: sse / n
        span: Fraction of points in each neighborhood
        degree: Local polynomial degree (1 or 2)
        window_size: floor(span * n), neighbors per query point
        bandwidth: floor(window_size / 2), scale for the kernel distance
        local_coefficients: Per-point local β in coordinates centered on
            the query point, shape (n, degree + 1). Column 0 equals the
            fitted value, column 1 the local slope.
        zero_weight_neighbors: Per-point count of selected neighbors that
            fell outside the kernel support (n,)
    """
    fitted_values: NDArray[np.floating[Any]]
    residuals: NDArray[np.floating[Any]]
    sse: float
    mse: float
    span: float
    degree: int
    window_size: int
    bandwidth: int
    local_coefficients: NDArray[np.floating[Any]]
    zero_weight_neighbors: NDArray[np.integer[Any]]
