"""
Held-out performance metrics for nearest-neighbor predictions.
"""

from typing import Any
import numpy as np
from numpy.typing import NDArray

from pystatlearn.neighbors._common import (
    ClassificationMetrics,
    ConfusionMatrix,
    RegressionMetrics,
)


def confusion_matrix(
    predicted: NDArray[Any],
    true: NDArray[Any],
) -> ConfusionMatrix:
    """
    Cross-tabulate predicted (rows) against true (columns) labels.

    The label set is the sorted union of both vectors, so a class that
    is never predicted still gets a row.
    """
    labels = np.unique(np.concatenate([predicted, true]))
    rows = np.searchsorted(labels, predicted)
    cols = np.searchsorted(labels, true)
    counts = np.zeros((labels.size, labels.size), dtype=np.int64)
    np.add.at(counts, (rows, cols), 1)
    return ConfusionMatrix(labels=tuple(labels.tolist()), counts=counts)


def classification_metrics(
    predicted: NDArray[Any],
    true: NDArray[Any],
) -> ClassificationMetrics:
    """Accuracy, error rate and confusion matrix."""
    accuracy = float(np.mean(predicted == true))
    return ClassificationMetrics(
        accuracy=accuracy,
        error_rate=1.0 - accuracy,
        confusion_matrix=confusion_matrix(predicted, true),
    )


def regression_metrics(
    predicted: NDArray[np.floating[Any]],
    true: NDArray[np.floating[Any]],
) -> RegressionMetrics:
    """Residuals (true - predicted), SSE, MSE and RMSE."""
    residuals = true - predicted
    sse = float(residuals @ residuals)
    mse = sse / residuals.shape[0]
    return RegressionMetrics(
        residuals=residuals,
        sse=sse,
        mse=mse,
        rmse=float(np.sqrt(mse)),
    )
