"""
Distances and neighbor selection.
"""

from typing import Any
import numpy as np
from numpy.typing import NDArray
from scipy.spatial.distance import cdist


def pairwise_distances(
    test_X: NDArray[np.floating[Any]],
    train_X: NDArray[np.floating[Any]],
) -> NDArray[np.floating[Any]]:
    """
    Euclidean distance from every test point to every training point.

    Unscaled, over all feature columns. Computed from explicit
    differences, so identical points are at distance exactly 0.

    Returns:
        Distance matrix (n_test x n_train), marked read-only
    """
    D = cdist(test_X, train_X, metric='euclidean')
    D.setflags(write=False)
    return D


def nearest_neighbors(
    distances: NDArray[np.floating[Any]],
    k: int,
) -> tuple[NDArray[np.intp], NDArray[np.floating[Any]]]:
    """
    The k smallest distances in each row, nearest first.

    Stable sort per row: equal distances keep training-index order,
    so boundary ties go to the lower index.

    Returns:
        (indices, distances), each n_test x k
    """
    order = np.argsort(distances, axis=1, kind='stable')[:, :k]
    return order, np.take_along_axis(distances, order, axis=1)
