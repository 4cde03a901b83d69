"""
Tests for distance computation, neighbor selection and weights.
"""

import numpy as np
import pytest

from pystatlearn.neighbors._distance import nearest_neighbors, pairwise_distances
from pystatlearn.neighbors.backends.cpu import neighbor_weights


class TestPairwiseDistances:

    def test_matches_explicit_norm(self, rng):
        train = rng.normal(size=(12, 3))
        test = rng.normal(size=(5, 3))
        expected = np.linalg.norm(test[:, None, :] - train[None, :, :], axis=2)
        np.testing.assert_allclose(pairwise_distances(test, train), expected, rtol=1e-12)

    def test_identical_point_is_exactly_zero(self):
        X = np.array([[0.1, 0.2, 0.3]])
        assert pairwise_distances(X, X)[0, 0] == 0.0

    def test_read_only(self):
        D = pairwise_distances(np.zeros((2, 1)), np.ones((3, 1)))
        with pytest.raises(ValueError):
            D[0, 0] = 1.0


class TestNearestNeighbors:

    def test_sorted_nearest_first(self):
        D = np.array([[3.0, 1.0, 2.0, 0.5]])
        idx, dist = nearest_neighbors(D, 3)
        np.testing.assert_array_equal(idx, [[3, 1, 2]])
        np.testing.assert_array_equal(dist, [[0.5, 1.0, 2.0]])

    def test_stable_ties(self):
        D = np.array([[1.0, 1.0, 1.0]])
        idx, _ = nearest_neighbors(D, 2)
        np.testing.assert_array_equal(idx, [[0, 1]])


class TestNeighborWeights:

    def test_inverse_distance(self):
        w = neighbor_weights(np.array([[1.0, 4.0]]), weighted=True, eps=1e-8)
        np.testing.assert_allclose(w, [[1.0 / (1.0 + 1e-8), 1.0 / (4.0 + 1e-8)]])

    def test_zero_distance_is_finite(self):
        w = neighbor_weights(np.array([[0.0]]), weighted=True, eps=1e-8)
        assert w[0, 0] == pytest.approx(1e8)

    def test_infinite_distance_weighs_zero(self):
        w = neighbor_weights(np.array([[np.inf, 1.0]]), weighted=True, eps=1e-8)
        assert w[0, 0] == 0.0

    def test_unweighted_ones(self):
        w = neighbor_weights(np.array([[0.0, 7.0]]), weighted=False, eps=1e-8)
        np.testing.assert_array_equal(w, [[1.0, 1.0]])
