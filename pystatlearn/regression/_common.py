"""
Common data types for linear regression.

Contains the frozen parameter payload that goes inside Result[P] envelopes
and the row/band records that make up its tables. Pure data containers.
"""

from dataclasses import dataclass
from typing import Any, Literal

import numpy as np
from numpy.typing import NDArray


VALID_METHODS = ('inverse', 'qr')
VALID_INTERVALS = ('none', 'confidence', 'prediction', 'both')

MethodChoice = Literal['inverse', 'qr']
IntervalChoice = Literal['none', 'confidence', 'prediction', 'both']

COEFFICIENT_NAMES = ('(Intercept)', 'x')


@dataclass(frozen=True)
class CoefficientRow:
    """One row of the coefficient table."""
    term: str
    estimate: float
    std_error: float
    t_value: float
    p_value: float
    ci_lower: float
    ci_upper: float


@dataclass(frozen=True)
class AnovaTableRow:
    """One row of an ANOVA table (regression, residuals or total)."""
    term: str
    df: int
    sum_sq: float
    mean_sq: float | None    # None for Total row
    f_value: float | None    # None for Residuals and Total rows
    p_value: float | None    # None for Residuals and Total rows


@dataclass(frozen=True)
class IntervalRow:
    """Interval for the fitted line at one x."""
    x: float
    fitted: float
    lower: float
    upper: float


@dataclass(frozen=True)
class IntervalBand:
    """
    Confidence or prediction band along a set of x values.

    Attributes:
        kind: 'confidence' (mean response) or 'prediction' (new observation)
        level: Coverage level, e.g. 0.95
        x: Points the band is evaluated at
        fitted: Fitted line at x
        lower, upper: Band limits at x
    """
    kind: str
    level: float
    x: NDArray[np.floating[Any]]
    fitted: NDArray[np.floating[Any]]
    lower: NDArray[np.floating[Any]]
    upper: NDArray[np.floating[Any]]

    @property
    def width(self) -> NDArray[np.floating[Any]]:
        return self.upper - self.lower

    def rows(self) -> tuple[IntervalRow, ...]:
        """The band as a table, one row per x."""
        return tuple(
            IntervalRow(x=float(a), fitted=float(f), lower=float(lo), upper=float(hi))
            for a, f, lo, hi in zip(self.x, self.fitted, self.lower, self.upper)
        )


@dataclass(frozen=True)
class AnovaTable:
    """
    Regression ANOVA decomposition.

    SS_regression + SS_residual = SS_total; F tests the slope.
    """
    rows: tuple[AnovaTableRow, ...]
    ss_regression: float
    ss_residual: float
    ss_total: float
    df_regression: int
    df_error: int
    ms_regression: float
    ms_error: float
    f_statistic: float
    f_p_value: float


@dataclass(frozen=True)
class LinearParams:
    """
    Parameter payload for single-predictor linear regression.

    Everything is computed once by the backend; nothing is cached later.
    """
    coefficients: NDArray[np.floating[Any]]
    fitted_values: NDArray[np.floating[Any]]
    residuals: NDArray[np.floating[Any]]
    xtx_inv: NDArray[np.floating[Any]]
    rank: int
    df_residual: int
    sigma_sq: float
    coefficient_table: tuple[CoefficientRow, ...]
    anova: AnovaTable
    r_squared: float
    adjusted_r_squared: float
    level: float
    confidence_band: IntervalBand | None
    prediction_band: IntervalBand | None
    x_mean: float
    sxx: float


@dataclass(frozen=True)
class Prediction:
    """Fitted line at new x values, with whichever bands were requested."""
    x: NDArray[np.floating[Any]]
    fitted: NDArray[np.floating[Any]]
    confidence_band: IntervalBand | None = None
    prediction_band: IntervalBand | None = None
