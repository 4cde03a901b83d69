"""
Common data types for nearest-neighbor prediction.

Contains the frozen parameter payloads that go inside Result[P] envelopes.
Each payload is a pure data container: no computation.
"""

from dataclasses import dataclass
from typing import Any, Literal

import numpy as np
from numpy.typing import NDArray


# Offset in w = 1 / (d + eps); keeps a zero distance finite
DEFAULT_EPSILON = 1e-8

VALID_TASKS = ('auto', 'classification', 'regression')

TaskChoice = Literal['auto', 'classification', 'regression']


@dataclass(frozen=True)
class ConfusionMatrix:
    """
    Cross-tabulation of predicted against true labels.

    Attributes:
        labels: Sorted union of predicted and true labels
        counts: counts[i, j] = number of test points predicted labels[i]
            whose true label is labels[j]
    """
    labels: tuple[Any, ...]
    counts: NDArray[np.integer[Any]]

    def count(self, predicted: Any, true: Any) -> int:
        """Number of points predicted as `predicted` whose truth is `true`."""
        i = self.labels.index(predicted)
        j = self.labels.index(true)
        return int(self.counts[i, j])


@dataclass(frozen=True)
class ClassificationMetrics:
    """Held-out performance of a classification fit."""
    accuracy: float
    error_rate: float
    confusion_matrix: ConfusionMatrix


@dataclass(frozen=True)
class RegressionMetrics:
    """Held-out performance of a regression fit."""
    residuals: NDArray[np.floating[Any]]
    sse: float
    mse: float
    rmse: float


@dataclass(frozen=True)
class KNNParams:
    """
    Parameter payload for k-nearest-neighbor prediction.

    Attributes:
        predictions: One prediction per test point (n_test,)
        task: 'classification' or 'regression'
        k: Neighbors per test point
        weighted: Whether inverse-distance weights were used
        eps: Offset used in the inverse-distance weights
        neighbor_indices: Training indices of the k neighbors, nearest
            first (n_test x k)
        neighbor_distances: Matching Euclidean distances (n_test x k)
        classes: Canonical (sorted) training labels; None for regression
        class_probabilities: Vote share of each class per test point
            (n_test x n_classes); None for regression
        metrics: Held-out metrics when true test labels were supplied
    """
    predictions: NDArray[Any]
    task: str
    k: int
    weighted: bool
    eps: float
    neighbor_indices: NDArray[np.intp]
    neighbor_distances: NDArray[np.floating[Any]]
    classes: tuple[Any, ...] | None = None
    class_probabilities: NDArray[np.floating[Any]] | None = None
    metrics: ClassificationMetrics | RegressionMetrics | None = None
