"""
Tests for the method-independent inference helpers.

These work on (y, fitted, residuals) or (β, x̄, Sxx) directly, without
going through a backend.
"""

import numpy as np
import pytest
from scipy import stats

from pystatlearn.regression._inference import anova_table, interval_band, t_quantile


class TestTQuantile:

    def test_matches_scipy(self):
        assert t_quantile(0.95, 10) == pytest.approx(stats.t.ppf(0.975, 10))

    def test_wider_for_higher_level(self):
        assert t_quantile(0.99, 5) > t_quantile(0.9, 5)


class TestAnovaTable:

    def test_known_decomposition(self):
        y = np.array([2.0, 4.0, 5.0, 4.0, 5.0])
        fitted = 2.2 + 0.6 * np.arange(1.0, 6.0)
        table = anova_table(y, fitted, y - fitted, n_predictors=1)
        assert table.ss_regression == pytest.approx(3.6)
        assert table.ss_residual == pytest.approx(2.4)
        assert table.df_regression == 1
        assert table.df_error == 3
        assert table.ms_error == pytest.approx(0.8)
        assert table.f_statistic == pytest.approx(4.5)
        assert table.f_p_value == pytest.approx(stats.f.sf(4.5, 1, 3))

    def test_zero_residuals_give_infinite_f(self):
        y = np.array([1.0, 2.0, 3.0, 4.0])
        table = anova_table(y, y.copy(), np.zeros(4), n_predictors=1)
        assert table.f_statistic == np.inf
        assert table.f_p_value == 0.0
        assert table.rows[0].f_value == np.inf

    def test_rows_mirror_fields(self):
        y = np.array([1.0, 3.0, 2.0, 5.0])
        fitted = np.array([1.2, 2.2, 3.2, 4.2])
        table = anova_table(y, fitted, y - fitted, n_predictors=1)
        regression, residuals, total = table.rows
        assert regression.sum_sq == table.ss_regression
        assert residuals.mean_sq == table.ms_error
        assert total.df == 3


class TestIntervalBand:

    def test_prediction_adds_one(self):
        x = np.array([0.0, 1.0, 2.0])
        beta = np.array([1.0, 2.0])
        conf = interval_band('confidence', x, beta, 10, 1.0, 8.0, 0.5, 8, 0.95)
        pred = interval_band('prediction', x, beta, 10, 1.0, 8.0, 0.5, 8, 0.95)
        t_crit = stats.t.ppf(0.975, 8)
        np.testing.assert_allclose(
            conf.width / 2, t_crit * 0.5 * np.sqrt(0.1 + (x - 1.0) ** 2 / 8.0)
        )
        np.testing.assert_allclose(
            pred.width / 2, t_crit * 0.5 * np.sqrt(1.1 + (x - 1.0) ** 2 / 8.0)
        )

    def test_centered_on_line(self):
        x = np.array([-1.0, 3.0])
        band = interval_band('confidence', x, np.array([0.5, -1.0]), 6, 0.0, 4.0, 1.0, 4, 0.9)
        np.testing.assert_allclose(band.fitted, [1.5, -2.5])
        np.testing.assert_allclose((band.lower + band.upper) / 2, band.fitted)
        assert band.kind == 'confidence'
        assert band.level == 0.9
