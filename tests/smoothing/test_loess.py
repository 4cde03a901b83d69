"""
Tests for loess().

Tests the complete pipeline: LoessDesign construction and validation,
the per-point local fits, and LoessSolution properties.
"""

import numpy as np
import pytest

from pystatlearn import DataSource
from pystatlearn.core.exceptions import (
    DimensionMismatchError,
    InsufficientNeighborsError,
    InvalidParameterError,
    SingularMatrixError,
    ValidationError,
)
from pystatlearn.smoothing import LoessDesign, LoessSolution, loess
from pystatlearn.smoothing.backends.cpu import nearest_window


class TestLoessBasic:

    def test_returns_solution(self, wave_data):
        x, y = wave_data
        result = loess(x, y)
        assert isinstance(result, LoessSolution)
        assert result.backend_name == "cpu_loess"

    def test_default_span_and_degree(self, wave_data):
        x, y = wave_data
        result = loess(x, y)
        assert result.span == 0.75
        assert result.degree == 2
        np.testing.assert_array_equal(
            result.fitted_values, loess(x, y, span=0.75, degree=2).fitted_values
        )

    @pytest.mark.parametrize("span", [0.2, 0.5, 0.75, 0.9])
    @pytest.mark.parametrize("degree", [1, 2])
    def test_one_fitted_value_per_point(self, wave_data, span, degree):
        x, y = wave_data
        result = loess(x, y, span=span, degree=degree)
        assert result.fitted_values.shape == (x.size,)
        assert result.residuals.shape == (x.size,)
        assert result.mse == pytest.approx(result.sse / x.size)

    def test_fitted_plus_residuals_equals_y(self, wave_data):
        x, y = wave_data
        result = loess(x, y, span=0.3)
        np.testing.assert_allclose(result.fitted_values + result.residuals, y, atol=1e-12)

    def test_from_design(self, wave_data):
        x, y = wave_data
        design = LoessDesign.from_arrays(x, y, span=0.4, degree=1)
        result = loess(design)
        assert result.span == 0.4
        assert result.degree == 1

    def test_requires_y_with_arrays(self, wave_data):
        x, _ = wave_data
        with pytest.raises(ValueError, match="y required"):
            loess(x)

    def test_from_datasource(self, wave_data):
        x, y = wave_data
        ds = DataSource.from_arrays(speed=x, dist=y)
        design = LoessDesign.from_datasource(ds, x="speed", y="dist", span=0.5, degree=2)
        np.testing.assert_allclose(
            loess(design).fitted_values,
            loess(x, y, span=0.5, degree=2).fitted_values,
        )

    def test_smoother_than_data(self, wave_data):
        """The smoothed curve tracks the signal better than the raw noise."""
        x, y = wave_data
        result = loess(x, y, span=0.3, degree=2)
        truth = np.sin(x / 6.0)
        assert np.mean((result.fitted_values - truth) ** 2) < np.mean((y - truth) ** 2)

    def test_caller_arrays_not_shared(self, wave_data):
        x, y = (a.copy() for a in wave_data)
        result = loess(x, y, span=0.5)
        fitted = result.fitted_values.copy()
        x[:] = 0.0
        y[:] = 0.0
        np.testing.assert_allclose(result.x, wave_data[0])
        np.testing.assert_allclose(result.y, wave_data[1])
        np.testing.assert_array_equal(result.fitted_values, fitted)
        with pytest.raises(ValueError):
            result.x[0] = 1.0


class TestLoessExactness:
    """Local polynomials reproduce polynomials of their own degree."""

    def test_degree_1_reproduces_line(self):
        x = np.arange(20.0)
        y = 3.0 + 2.0 * x
        result = loess(x, y, span=0.5, degree=1)
        np.testing.assert_allclose(result.fitted_values, y, rtol=1e-10, atol=1e-10)
        np.testing.assert_allclose(result.local_slopes, 2.0, rtol=1e-10)
        assert result.sse == pytest.approx(0.0, abs=1e-18)

    def test_degree_2_reproduces_parabola(self):
        x = np.arange(20.0)
        y = 1.0 + x - 0.1 * x ** 2
        result = loess(x, y, span=0.5, degree=2)
        np.testing.assert_allclose(result.fitted_values, y, rtol=1e-9, atol=1e-9)

    def test_unsorted_input_keeps_input_order(self, rng):
        x = np.arange(20.0)
        perm = rng.permutation(20)
        y = 3.0 + 2.0 * x
        result = loess(x[perm], y[perm], span=0.5, degree=1)
        np.testing.assert_allclose(result.fitted_values, y[perm], atol=1e-10)

    def test_permutation_equivariant(self, wave_data, rng):
        x, y = wave_data
        perm = rng.permutation(x.size)
        base = loess(x, y, span=0.5, degree=2)
        shuffled = loess(x[perm], y[perm], span=0.5, degree=2)
        np.testing.assert_allclose(
            shuffled.fitted_values, base.fitted_values[perm], rtol=1e-10, atol=1e-12
        )


class TestLoessWindow:

    def test_window_and_bandwidth(self):
        x = np.arange(20.0)
        result = loess(x, x, span=0.5, degree=1)
        assert result.window_size == 10
        assert result.bandwidth == 5
        assert result.info["window_size"] == 10

    def test_zero_weight_neighbors_at_window_edge(self):
        """Points at distance >= bandwidth are in the window but weigh nothing."""
        x = np.arange(20.0)
        result = loess(x, x, span=0.5, degree=1)
        # Point 0 sees x = 0..9; x >= 5 is at |u| >= 1
        assert result.zero_weight_neighbors[0] == 5
        # Point 10 sees distances 0, 1, 1, ..., 4, 4, 5
        assert result.zero_weight_neighbors[10] == 1

    def test_nearest_window_ties_go_to_lower_index(self):
        x = np.array([0.0, 1.0, 2.0, 3.0, 4.0])
        idx = nearest_window(x, 2, 3)
        np.testing.assert_array_equal(idx, [2, 1, 3])
        idx = nearest_window(x, 2, 2)
        np.testing.assert_array_equal(idx, [2, 1])

    def test_sorted_curve(self, wave_data, rng):
        x, y = wave_data
        perm = rng.permutation(x.size)
        result = loess(x[perm], y[perm], span=0.5)
        xs, fs = result.sorted_curve()
        assert np.all(np.diff(xs) >= 0)
        np.testing.assert_allclose(xs, x)


class TestLoessValidation:

    @pytest.mark.parametrize("degree", [0, 3, 1.5, True])
    def test_bad_degree(self, wave_data, degree):
        x, y = wave_data
        with pytest.raises(InvalidParameterError) as excinfo:
            loess(x, y, degree=degree)
        assert excinfo.value.parameter == "degree"

    @pytest.mark.parametrize("span", [0.0, 1.0, -0.5, 1.2])
    def test_bad_span(self, wave_data, span):
        x, y = wave_data
        with pytest.raises(InvalidParameterError) as excinfo:
            loess(x, y, span=span)
        assert excinfo.value.parameter == "span"

    def test_window_too_small(self):
        x = np.arange(4.0)
        with pytest.raises(InsufficientNeighborsError) as excinfo:
            loess(x, x, span=0.5, degree=2)
        assert excinfo.value.window_size == 2
        assert excinfo.value.required == 3

    def test_length_mismatch(self):
        with pytest.raises(DimensionMismatchError):
            loess(np.arange(10.0), np.arange(9.0))

    def test_non_finite(self):
        x = np.arange(10.0)
        y = x.copy()
        y[3] = np.nan
        with pytest.raises(ValidationError, match="non-finite"):
            loess(x, y)

    def test_unknown_backend(self, wave_data):
        x, y = wave_data
        with pytest.raises(InvalidParameterError):
            loess(x, y, backend="gpu")

    def test_isolated_points_are_singular(self):
        """With widely spaced x only the point itself has nonzero weight."""
        x = np.arange(8.0) * 10.0
        with pytest.raises(SingularMatrixError) as excinfo:
            loess(x, x, span=0.5, degree=1)
        assert excinfo.value.point_index == 0
        assert excinfo.value.matrix_name == "X'WX"


class TestLoessSolution:

    def test_summary(self, wave_data):
        x, y = wave_data
        s = loess(x, y, span=0.5).summary()
        assert "LOESS" in s
        assert "Span: 0.5" in s
        assert "MSE" in s

    def test_repr(self, wave_data):
        x, y = wave_data
        assert repr(loess(x, y)).startswith("LoessSolution(n=60")

    def test_timing_sections(self, wave_data):
        x, y = wave_data
        timing = loess(x, y).timing
        assert "local_fits" in timing
        assert timing["total_seconds"] >= 0.0

    def test_rmse(self, wave_data):
        x, y = wave_data
        result = loess(x, y)
        assert result.rmse == pytest.approx(np.sqrt(result.mse))
