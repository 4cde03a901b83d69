"""
Single-predictor linear regression with inference.

Public API:
    fit(y, x, method='qr', interval='none', level=0.95) -> LinearSolution

Coefficients come from either the QR decomposition of [1, x] or the
explicit inverse of X'X; the coefficient table, ANOVA table and interval
bands are computed the same way for both.
"""

from pystatlearn.regression.design import Design
from pystatlearn.regression._common import (
    AnovaTable,
    AnovaTableRow,
    CoefficientRow,
    IntervalBand,
    IntervalRow,
    LinearParams,
    Prediction,
)
from pystatlearn.regression.solution import LinearSolution
from pystatlearn.regression.solvers import fit

__all__ = [
    "fit",
    "Design",
    "LinearParams",
    "LinearSolution",
    "CoefficientRow",
    "AnovaTable",
    "AnovaTableRow",
    "IntervalBand",
    "IntervalRow",
    "Prediction",
]
