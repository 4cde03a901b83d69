"""
Tests for knn() on numeric labels.

Validates:
    - Weighted mean of neighbor labels, including the worked example
    - k = 1 reproduces the nearest training label
    - Zero-distance neighbors dominate the weighted mean
    - Held-out residuals, SSE, MSE and RMSE
    - Input validation
"""

import numpy as np
import pytest

from pystatlearn import DataSource
from pystatlearn.core.exceptions import (
    DimensionMismatchError,
    InvalidParameterError,
    NumericalError,
    ValidationError,
)
from pystatlearn.neighbors import KNNDesign, KNNSolution, knn


TRAIN_X = [[0.0], [1.0], [2.0], [10.0]]
TRAIN_Y = [0.0, 1.0, 2.0, 10.0]


class TestKNNRegressionBasic:

    def test_worked_example(self):
        result = knn(TRAIN_X, [[1.5]], TRAIN_Y, k=2, weighted=True)
        assert isinstance(result, KNNSolution)
        assert result.task == "regression"
        np.testing.assert_allclose(result.predictions, [1.5])

    def test_integer_labels_default_to_regression(self):
        result = knn(TRAIN_X, [[1.5]], [0, 1, 2, 10], k=2)
        assert result.task == "regression"
        np.testing.assert_allclose(result.predictions, [1.5])

    def test_k1_unweighted_is_nearest_label(self, rng):
        train_X = rng.normal(size=(30, 3))
        train_y = rng.normal(size=30)
        test_X = rng.normal(size=(10, 3))
        result = knn(train_X, test_X, train_y, k=1, weighted=False)
        d = np.linalg.norm(test_X[:, None, :] - train_X[None, :, :], axis=2)
        np.testing.assert_allclose(result.predictions, train_y[np.argmin(d, axis=1)])

    def test_training_points_predict_themselves_with_k1(self, rng):
        train_X = rng.normal(size=(15, 2))
        train_y = rng.normal(size=15)
        result = knn(train_X, train_X, train_y, k=1)
        np.testing.assert_allclose(result.predictions, train_y)

    def test_unweighted_is_plain_mean(self):
        result = knn(TRAIN_X, [[0.9]], TRAIN_Y, k=3, weighted=False)
        np.testing.assert_allclose(result.predictions, [1.0])

    def test_weighted_closer_point_counts_more(self):
        result = knn(TRAIN_X, [[1.2]], TRAIN_Y, k=2, weighted=True)
        w1, w2 = 1.0 / (0.2 + 1e-8), 1.0 / (0.8 + 1e-8)
        np.testing.assert_allclose(result.predictions, [(w1 * 1.0 + w2 * 2.0) / (w1 + w2)])

    def test_duplicate_training_point_dominates(self):
        """A training point at distance 0 gets weight 1/eps and wins the mean."""
        result = knn([[0.0], [5.0], [6.0]], [[0.0]], [10.0, 0.0, 100.0], k=3)
        np.testing.assert_allclose(result.predictions, [10.0], rtol=1e-6)

    def test_k_equals_n_train(self):
        result = knn(TRAIN_X, [[3.0]], TRAIN_Y, k=4, weighted=False)
        np.testing.assert_allclose(result.predictions, [np.mean(TRAIN_Y)])

    def test_one_dimensional_features(self):
        result = knn([0.0, 1.0, 2.0, 10.0], [1.5], TRAIN_Y, k=2)
        np.testing.assert_allclose(result.predictions, [1.5])


class TestKNNNeighbors:

    def test_neighbor_sets_nearest_first(self):
        result = knn(TRAIN_X, [[9.0], [0.2]], TRAIN_Y, k=2)
        np.testing.assert_array_equal(result.neighbor_indices, [[3, 2], [0, 1]])
        np.testing.assert_allclose(result.neighbor_distances, [[1.0, 7.0], [0.2, 0.8]])

    def test_tie_goes_to_lower_index(self):
        result = knn([[0.0], [2.0], [4.0]], [[1.0]], [0.0, 2.0, 4.0], k=1)
        np.testing.assert_array_equal(result.neighbor_indices, [[0]])
        assert any("distance ties" in w for w in result.warnings)

    def test_no_tie_no_warning(self):
        result = knn(TRAIN_X, [[1.5]], TRAIN_Y, k=2)
        assert result.warnings == ()
        assert result.info["boundary_ties"] == 0

    def test_multifeature_euclidean(self):
        result = knn([[0.0, 0.0], [3.0, 4.0]], [[0.0, 0.0]], [1.0, 2.0], k=2)
        np.testing.assert_allclose(result.neighbor_distances, [[0.0, 5.0]])


class TestKNNRegressionMetrics:

    def test_metrics_with_test_labels(self):
        result = knn(TRAIN_X, [[1.5], [0.0]], TRAIN_Y, k=2, test_y=[2.0, 0.0])
        residuals = np.array([2.0, 0.0]) - result.predictions
        np.testing.assert_allclose(result.residuals, residuals)
        assert result.sse == pytest.approx(float(residuals @ residuals))
        assert result.mse == pytest.approx(result.sse / 2)
        assert result.rmse == pytest.approx(np.sqrt(result.mse))

    def test_no_metrics_without_test_labels(self):
        result = knn(TRAIN_X, [[1.5]], TRAIN_Y, k=2)
        assert result.metrics is None
        assert result.sse is None
        assert result.accuracy is None

    def test_classification_accessors_none_for_regression(self):
        result = knn(TRAIN_X, [[1.5]], TRAIN_Y, k=2, test_y=[1.5])
        assert result.accuracy is None
        assert result.confusion_matrix is None
        assert result.classes is None
        assert result.class_probabilities is None


class TestKNNValidation:

    @pytest.mark.parametrize("k", [0, 5, -1])
    def test_k_out_of_range(self, k):
        with pytest.raises(InvalidParameterError) as excinfo:
            knn(TRAIN_X, [[1.5]], TRAIN_Y, k=k)
        assert excinfo.value.parameter == "k"

    def test_k_must_be_integer(self):
        with pytest.raises(InvalidParameterError):
            knn(TRAIN_X, [[1.5]], TRAIN_Y, k=2.0)

    @pytest.mark.parametrize("eps", [0.0, -1e-8, np.inf])
    def test_bad_eps(self, eps):
        with pytest.raises(InvalidParameterError) as excinfo:
            knn(TRAIN_X, [[1.5]], TRAIN_Y, k=2, eps=eps)
        assert excinfo.value.parameter == "eps"

    def test_feature_count_mismatch(self):
        with pytest.raises(DimensionMismatchError, match="features"):
            knn(TRAIN_X, [[1.0, 2.0]], TRAIN_Y, k=2)

    def test_label_count_mismatch(self):
        with pytest.raises(DimensionMismatchError):
            knn(TRAIN_X, [[1.0]], [1.0, 2.0], k=1)

    def test_test_label_count_mismatch(self):
        with pytest.raises(DimensionMismatchError):
            knn(TRAIN_X, [[1.0]], TRAIN_Y, k=1, test_y=[1.0, 2.0])

    def test_non_finite_features(self):
        with pytest.raises(ValidationError, match="non-finite"):
            knn([[0.0], [np.nan]], [[1.0]], [1.0, 2.0], k=1)

    def test_regression_needs_numeric_labels(self):
        with pytest.raises(InvalidParameterError):
            knn(TRAIN_X, [[1.0]], ["a", "b", "c", "d"], k=1, task="regression")

    def test_unknown_task(self):
        with pytest.raises(InvalidParameterError):
            knn(TRAIN_X, [[1.0]], TRAIN_Y, k=1, task="ranking")

    def test_weighted_must_be_bool(self):
        with pytest.raises(InvalidParameterError):
            knn(TRAIN_X, [[1.0]], TRAIN_Y, k=1, weighted="yes")

    def test_empty_test_set_rejected(self):
        with pytest.raises(ValidationError, match="at least 1"):
            knn(TRAIN_X, np.empty((0, 1)), TRAIN_Y, k=1)

    def test_requires_test_points(self):
        with pytest.raises(ValueError, match="required"):
            knn(TRAIN_X)

    def test_overflowing_distances(self):
        """Every weight is 1/inf = 0, so there is nothing to average."""
        with pytest.raises(NumericalError, match="zero"):
            knn([[1e308]], [[-1e308]], [1.0], k=1)

    def test_unknown_backend(self):
        with pytest.raises(InvalidParameterError):
            knn(TRAIN_X, [[1.0]], TRAIN_Y, k=1, backend="gpu")


class TestKNNDesign:

    def test_from_datasource(self):
        train = DataSource.from_arrays(a=[0.0, 1.0, 2.0, 10.0], b=[0.0] * 4, y=TRAIN_Y)
        test = DataSource.from_arrays(a=[1.5], b=[0.0], y=[1.0])
        design = KNNDesign.from_datasource(train, test, features=["a", "b"], label="y", k=2)
        assert design.n_features == 2
        result = knn(design)
        np.testing.assert_allclose(result.predictions, [1.5])
        assert result.sse == pytest.approx(0.25)

    def test_from_datasource_without_test_labels(self):
        train = DataSource.from_arrays(a=[0.0, 1.0, 2.0, 10.0], y=TRAIN_Y)
        test = DataSource.from_arrays(a=[1.5])
        design = KNNDesign.from_datasource(train, test, features=["a"], label="y", k=2)
        assert design.test_y is None

    def test_summary(self):
        s = knn(TRAIN_X, [[1.5]], TRAIN_Y, k=2, test_y=[1.0]).summary()
        assert "regression" in s
        assert "RMSE" in s
        assert "Backend: cpu_knn" in s

    def test_repr(self):
        r = repr(knn(TRAIN_X, [[1.5]], TRAIN_Y, k=2))
        assert r == "KNNSolution(task='regression', k=2, weighted=True, n_test=1)"
