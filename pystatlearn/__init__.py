"""
PyStatLearn: smoothing, nearest-neighbor and regression methods for Python.

Small, exact implementations of three classical statistical learning
tools, each returning an immutable result with an R-style summary.

Submodules:
    smoothing: LOESS local polynomial regression
    neighbors: Distance-weighted k-nearest neighbors
    regression: Single-predictor OLS with coefficient, ANOVA and band tables
"""

__version__ = "0.1.0"

from pystatlearn.core.datasource import DataSource
from pystatlearn import smoothing
from pystatlearn import neighbors
from pystatlearn import regression

__all__ = [
    "__version__",
    "DataSource",
    "smoothing",
    "neighbors",
    "regression",
]
