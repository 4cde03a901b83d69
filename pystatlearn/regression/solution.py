"""
Regression solution type.

Read-only wrapper around Result[LinearParams] with accessors, prediction
at new x values and an R-style summary.
"""

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pystatlearn.core.result import Result
from pystatlearn.core.validation import (
    check_1d,
    check_array,
    check_choice,
    check_finite,
    check_open_interval,
)
from pystatlearn.regression._common import (
    VALID_INTERVALS,
    AnovaTable,
    CoefficientRow,
    IntervalBand,
    IntervalChoice,
    LinearParams,
    Prediction,
)
from pystatlearn.regression._inference import interval_band

if TYPE_CHECKING:
    from pystatlearn.regression.design import Design


def _significance_stars(p_value: float) -> str:
    if not np.isfinite(p_value):
        return ""
    if p_value < 0.001:
        return "***"
    if p_value < 0.01:
        return "**"
    if p_value < 0.05:
        return "*"
    if p_value < 0.1:
        return "."
    return ""


@dataclass
class LinearSolution:
    """
    User-facing regression results.

    Wraps the backend Result and provides convenient accessors for the
    coefficient table, the ANOVA decomposition and the interval bands.
    """
    _result: Result[LinearParams]
    _design: 'Design'

    @property
    def coefficients(self) -> NDArray[np.floating[Any]]:
        """[intercept, slope]."""
        return self._result.params.coefficients

    @property
    def intercept(self) -> float:
        return float(self._result.params.coefficients[0])

    @property
    def slope(self) -> float:
        return float(self._result.params.coefficients[1])

    @property
    def fitted_values(self) -> NDArray[np.floating[Any]]:
        return self._result.params.fitted_values

    @property
    def residuals(self) -> NDArray[np.floating[Any]]:
        return self._result.params.residuals

    @property
    def standard_errors(self) -> NDArray[np.floating[Any]]:
        return np.array([row.std_error for row in self.coefficient_table])

    @property
    def t_statistics(self) -> NDArray[np.floating[Any]]:
        return np.array([row.t_value for row in self.coefficient_table])

    @property
    def p_values(self) -> NDArray[np.floating[Any]]:
        return np.array([row.p_value for row in self.coefficient_table])

    @property
    def coefficient_table(self) -> tuple[CoefficientRow, ...]:
        return self._result.params.coefficient_table

    @property
    def anova(self) -> AnovaTable:
        return self._result.params.anova

    @property
    def r_squared(self) -> float:
        return self._result.params.r_squared

    @property
    def adjusted_r_squared(self) -> float:
        return self._result.params.adjusted_r_squared

    @property
    def sigma_sq(self) -> float:
        """Residual variance estimate SSE / (n - p)."""
        return self._result.params.sigma_sq

    @property
    def residual_std_error(self) -> float:
        return float(np.sqrt(self._result.params.sigma_sq))

    @property
    def f_statistic(self) -> float:
        return self._result.params.anova.f_statistic

    @property
    def f_p_value(self) -> float:
        return self._result.params.anova.f_p_value

    @property
    def xtx_inv(self) -> NDArray[np.floating[Any]]:
        """(X'X)⁻¹ as computed by the backend."""
        return self._result.params.xtx_inv

    @property
    def covariance(self) -> NDArray[np.floating[Any]]:
        """Coefficient covariance σ̂²(X'X)⁻¹."""
        return self.sigma_sq * self.xtx_inv

    @property
    def level(self) -> float:
        return self._result.params.level

    @property
    def confidence_band(self) -> IntervalBand | None:
        return self._result.params.confidence_band

    @property
    def prediction_band(self) -> IntervalBand | None:
        return self._result.params.prediction_band

    @property
    def rank(self) -> int:
        return self._result.params.rank

    @property
    def df_residual(self) -> int:
        return self._result.params.df_residual

    @property
    def method(self) -> str:
        return self._result.info['method']

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def predict(
        self,
        x_new: ArrayLike,
        *,
        interval: IntervalChoice = 'none',
        level: float | None = None,
    ) -> Prediction:
        """
        Evaluate the fitted line at new x values.

        Args:
            x_new: Points to evaluate at (1D)
            interval: 'none', 'confidence', 'prediction' or 'both'
            level: Coverage level; defaults to the level used for the fit

        Returns:
            Prediction with the fitted values and the requested bands

        Raises:
            InvalidParameterError: Unknown interval or level outside (0, 1)
            DimensionMismatchError: x_new is not 1D
        """
        x_arr = check_array(x_new, 'x_new')
        if x_arr.ndim == 0:
            x_arr = x_arr.reshape(1)
        check_1d(x_arr, 'x_new')
        check_finite(x_arr, 'x_new')
        interval = check_choice(interval, VALID_INTERVALS, 'interval')
        level = self.level if level is None else check_open_interval(level, 0.0, 1.0, 'level')

        params = self._result.params
        beta = params.coefficients
        fitted = beta[0] + beta[1] * x_arr

        bands: dict[str, IntervalBand] = {}
        for kind in ('confidence', 'prediction'):
            if interval in (kind, 'both'):
                bands[kind] = interval_band(
                    kind,
                    x_arr,
                    beta,
                    self._design.n,
                    params.x_mean,
                    params.sxx,
                    self.residual_std_error,
                    params.df_residual,
                    level,
                )

        return Prediction(
            x=x_arr,
            fitted=fitted,
            confidence_band=bands.get('confidence'),
            prediction_band=bands.get('prediction'),
        )

    def summary(self) -> str:
        """Generate R-style summary output."""
        pct = f"{self.level * 100:g}%"
        lines = [
            "Linear Regression Results",
            "=" * 78,
            f"Observations: {self._design.n}",
            f"Method: {self.method}",
            "",
            "Coefficients:",
            "-" * 78,
            f"{'':<12} {'Estimate':>12} {'Std. Error':>12} {'t value':>9} "
            f"{'Pr(>|t|)':>10}  {'lower ' + pct:>11} {'upper ' + pct:>11}",
        ]
        for row in self.coefficient_table:
            lines.append(
                f"{row.term:<12} {row.estimate:12.6f} {row.std_error:12.6f} "
                f"{row.t_value:9.3f} {row.p_value:10.4g}  "
                f"{row.ci_lower:11.5f} {row.ci_upper:11.5f} "
                f"{_significance_stars(row.p_value)}"
            )
        lines.extend([
            "---",
            "Signif. codes:  0 '***' 0.001 '**' 0.01 '*' 0.05 '.' 0.1 ' ' 1",
            "",
            "Analysis of Variance:",
            "-" * 78,
            f"{'':<12} {'Df':>5} {'Sum Sq':>14} {'Mean Sq':>14} {'F value':>10} {'Pr(>F)':>10}",
        ])
        for row in self.anova.rows:
            mean_sq = f"{row.mean_sq:14.6g}" if row.mean_sq is not None else " " * 14
            f_value = f"{row.f_value:10.4g}" if row.f_value is not None else " " * 10
            p_value = f"{row.p_value:10.4g}" if row.p_value is not None else " " * 10
            lines.append(
                f"{row.term:<12} {row.df:5d} {row.sum_sq:14.6g} {mean_sq} {f_value} {p_value}"
            )
        lines.extend([
            "-" * 78,
            f"Residual standard error: {self.residual_std_error:.6g} on "
            f"{self.df_residual} degrees of freedom",
            f"Multiple R-squared: {self.r_squared:.6f}, "
            f"Adjusted R-squared: {self.adjusted_r_squared:.6f}",
            f"F-statistic: {self.f_statistic:.6g} on {self.anova.df_regression} and "
            f"{self.anova.df_error} DF, p-value: {self.f_p_value:.4g}",
        ])
        for w in self.warnings:
            lines.append(f"Warning: {w}")
        lines.append("-" * 78)
        lines.append(f"Backend: {self.backend_name}")
        if self.timing:
            lines.append(f"Time: {self.timing.get('total_seconds', 0):.4f}s")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"LinearSolution(n={self._design.n}, method={self.method!r}, "
            f"intercept={self.intercept:.4g}, slope={self.slope:.4g}, "
            f"r_squared={self.r_squared:.4f})"
        )
