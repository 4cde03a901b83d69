"""
Inference for the straight-line model.

Everything here is a function of (design, β, (X'X)⁻¹) only, so it is
shared by every solution method. Backends compute β and (X'X)⁻¹ their
own way and hand both to build_linear_params().
"""

from __future__ import annotations

from typing import Any
import numpy as np
from numpy.typing import NDArray
from scipy import stats as sp_stats

from pystatlearn.regression._common import (
    COEFFICIENT_NAMES,
    AnovaTable,
    AnovaTableRow,
    CoefficientRow,
    IntervalBand,
    LinearParams,
)
from pystatlearn.regression.design import Design


def t_quantile(level: float, df: int) -> float:
    """Two-sided critical value t(1 - α/2, df) for coverage `level`."""
    alpha = 1.0 - level
    return float(sp_stats.t.ppf(1.0 - alpha / 2.0, df))


def coefficient_table(
    beta: NDArray[np.floating[Any]],
    xtx_inv: NDArray[np.floating[Any]],
    sigma_sq: float,
    df_residual: int,
    ms_error: float,
    df_error: int,
    level: float,
) -> tuple[CoefficientRow, ...]:
    """
    Estimates, standard errors, t tests and confidence intervals.

    SE = sqrt(σ̂² diag((X'X)⁻¹)), t = β / SE, two-sided p-value on
    df_residual degrees of freedom. The interval uses MS_error and
    t(1 - α/2, df_error).
    """
    diag = np.diag(xtx_inv)
    se = np.sqrt(sigma_sq * diag)
    with np.errstate(divide='ignore', invalid='ignore'):
        t_values = beta / se
    p_values = 2.0 * sp_stats.t.sf(np.abs(t_values), df_residual)

    half_width = t_quantile(level, df_error) * np.sqrt(ms_error * diag)

    return tuple(
        CoefficientRow(
            term=name,
            estimate=float(b),
            std_error=float(s),
            t_value=float(t),
            p_value=float(p),
            ci_lower=float(b - h),
            ci_upper=float(b + h),
        )
        for name, b, s, t, p, h in zip(
            COEFFICIENT_NAMES, beta, se, t_values, p_values, half_width
        )
    )


def anova_table(
    y: NDArray[np.floating[Any]],
    fitted: NDArray[np.floating[Any]],
    residuals: NDArray[np.floating[Any]],
    n_predictors: int,
) -> AnovaTable:
    """
    Decompose the variation of y for a model with an intercept.

    SS_regression = β'X'Xβ - nȳ², SS_residual = (y - Xβ)'(y - Xβ),
    SS_total = y'y - nȳ². With an intercept the first and last equal
    Σ(ŷ - ȳ)² and Σ(y - ȳ)², which is how they are computed here to
    avoid cancellation.

    F = MS_regression / MS_error on (k, n - k - 1) degrees of freedom,
    k = n_predictors.
    """
    n = y.shape[0]
    y_bar = float(np.mean(y))

    ss_regression = float(np.sum((fitted - y_bar) ** 2))
    ss_residual = float(residuals @ residuals)
    ss_total = float(np.sum((y - y_bar) ** 2))

    df_regression = n_predictors
    df_error = n - n_predictors - 1
    ms_regression = ss_regression / df_regression
    ms_error = ss_residual / df_error

    if ms_error > 0.0:
        f_statistic = ms_regression / ms_error
        f_p_value = float(sp_stats.f.sf(f_statistic, df_regression, df_error))
    else:
        f_statistic = np.inf if ms_regression > 0.0 else np.nan
        f_p_value = 0.0 if ms_regression > 0.0 else np.nan

    rows = (
        AnovaTableRow(
            term='Regression',
            df=df_regression,
            sum_sq=ss_regression,
            mean_sq=ms_regression,
            f_value=float(f_statistic),
            p_value=float(f_p_value),
        ),
        AnovaTableRow(
            term='Residuals',
            df=df_error,
            sum_sq=ss_residual,
            mean_sq=ms_error,
            f_value=None,
            p_value=None,
        ),
        AnovaTableRow(
            term='Total',
            df=n - 1,
            sum_sq=ss_total,
            mean_sq=None,
            f_value=None,
            p_value=None,
        ),
    )

    return AnovaTable(
        rows=rows,
        ss_regression=ss_regression,
        ss_residual=ss_residual,
        ss_total=ss_total,
        df_regression=df_regression,
        df_error=df_error,
        ms_regression=ms_regression,
        ms_error=ms_error,
        f_statistic=float(f_statistic),
        f_p_value=float(f_p_value),
    )


def interval_band(
    kind: str,
    x_eval: NDArray[np.floating[Any]],
    beta: NDArray[np.floating[Any]],
    n: int,
    x_mean: float,
    sxx: float,
    sigma: float,
    df: int,
    level: float,
) -> IntervalBand:
    """
    Confidence or prediction band for the fitted line at x_eval.

    fitted ± t(1 - α/2, df) · σ̂ · sqrt(c + 1/n + (x - x̄)² / ((n - 1)·Var(x)))

    with c = 0 for the mean response (confidence) and c = 1 for a new
    observation (prediction). (n - 1)·Var(x) is passed in as sxx.
    """
    fitted = beta[0] + beta[1] * x_eval
    extra = 1.0 if kind == 'prediction' else 0.0
    se = sigma * np.sqrt(extra + 1.0 / n + (x_eval - x_mean) ** 2 / sxx)
    half_width = t_quantile(level, df) * se
    return IntervalBand(
        kind=kind,
        level=level,
        x=x_eval,
        fitted=fitted,
        lower=fitted - half_width,
        upper=fitted + half_width,
    )


def build_linear_params(
    design: Design,
    beta: NDArray[np.floating[Any]],
    xtx_inv: NDArray[np.floating[Any]],
    rank: int,
) -> tuple[LinearParams, list[str]]:
    """
    Assemble the full payload from a coefficient vector.

    Returns:
        (LinearParams, warnings). Warnings flag a perfect fit (zero
        residual variance) and a constant response (R² undefined).
    """
    X, y = design.X, design.y
    n, p = design.n, design.p
    n_predictors = p - 1
    warnings_list: list[str] = []

    fitted_values = X @ beta
    residuals = y - fitted_values
    df_residual = n - p

    anova = anova_table(y, fitted_values, residuals, n_predictors)
    sigma_sq = anova.ss_residual / df_residual

    if anova.ss_residual <= np.finfo(np.float64).eps * anova.ss_total:
        warnings_list.append(
            "essentially perfect fit: summary statistics may be unreliable"
        )

    if anova.ss_total > 0.0:
        # Roundoff can push SS_reg / SS_tot a hair outside [0, 1]
        r_squared = float(np.clip(anova.ss_regression / anova.ss_total, 0.0, 1.0))
        adjusted = 1.0 - (1.0 - r_squared) * (n - 1) / df_residual
    else:
        warnings_list.append("response is constant: R-squared is undefined")
        r_squared = np.nan
        adjusted = np.nan

    table = coefficient_table(
        beta,
        xtx_inv,
        sigma_sq,
        df_residual,
        anova.ms_error,
        anova.df_error,
        design.level,
    )

    x = design.x
    x_mean = float(np.mean(x))
    sxx = float((n - 1) * np.var(x, ddof=1))
    sigma = float(np.sqrt(sigma_sq))

    confidence_band = None
    prediction_band = None
    if design.interval in ('confidence', 'both'):
        confidence_band = interval_band(
            'confidence', x, beta, n, x_mean, sxx, sigma, df_residual, design.level
        )
    if design.interval in ('prediction', 'both'):
        prediction_band = interval_band(
            'prediction', x, beta, n, x_mean, sxx, sigma, df_residual, design.level
        )

    params = LinearParams(
        coefficients=beta,
        fitted_values=fitted_values,
        residuals=residuals,
        xtx_inv=xtx_inv,
        rank=rank,
        df_residual=df_residual,
        sigma_sq=float(sigma_sq),
        coefficient_table=table,
        anova=anova,
        r_squared=r_squared,
        adjusted_r_squared=float(adjusted),
        level=design.level,
        confidence_band=confidence_band,
        prediction_band=prediction_band,
        x_mean=x_mean,
        sxx=sxx,
    )
    return params, warnings_list
