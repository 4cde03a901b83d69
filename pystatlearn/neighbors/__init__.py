"""
Distance-weighted k-nearest neighbors.

Public API:
    knn(train_X, test_X, train_y, k=..., weighted=...) -> KNNSolution

Classification when the labels are categorical, regression when they
are numeric.
"""

from pystatlearn.neighbors.design import KNNDesign
from pystatlearn.neighbors._common import (
    DEFAULT_EPSILON,
    ClassificationMetrics,
    ConfusionMatrix,
    KNNParams,
    RegressionMetrics,
)
from pystatlearn.neighbors.solution import KNNSolution
from pystatlearn.neighbors.solvers import knn

__all__ = [
    "knn",
    "KNNDesign",
    "KNNParams",
    "KNNSolution",
    "ConfusionMatrix",
    "ClassificationMetrics",
    "RegressionMetrics",
    "DEFAULT_EPSILON",
]
