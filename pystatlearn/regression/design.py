"""
Regression Design.

Design holds the response y, the single predictor x, the design matrix
X = [1, x], and the interval settings. It knows it's building a
straight-line regression; DataSource doesn't.

Like a furniture maker visiting the lumber yard: "I need these two logs
for making a chair." The lumber yard just provides logs.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import NDArray, ArrayLike

from pystatlearn.core.datasource import DataSource
from pystatlearn.core.validation import (
    check_1d,
    check_array,
    check_choice,
    check_consistent_length,
    check_finite,
    check_min_samples,
    check_open_interval,
)
from pystatlearn.regression._common import VALID_INTERVALS


@dataclass(frozen=True)
class Design:
    """
    Single-predictor regression design.

    Immutable after construction.

    Construction:
        Design.from_arrays(y, x)                              # direct
        Design.from_arrays(y, x, interval='both', level=0.9)
        Design.from_datasource(ds, y='dist', x='speed')
    """
    _y: NDArray[np.floating[Any]]
    _x: NDArray[np.floating[Any]]
    _X: NDArray[np.floating[Any]]
    _interval: str
    _level: float

    @classmethod
    def from_arrays(
        cls,
        y: ArrayLike,
        x: ArrayLike,
        *,
        interval: str = 'none',
        level: float = 0.95,
    ) -> Design:
        """Build Design directly from arrays."""
        y_arr = check_array(y, 'y')
        x_arr = check_array(x, 'x')
        return cls._build(y_arr, x_arr, interval, level)

    @classmethod
    def from_datasource(
        cls,
        source: DataSource,
        *,
        y: str = 'y',
        x: str = 'x',
        interval: str = 'none',
        level: float = 0.95,
    ) -> Design:
        """
        Build Design from two named columns of a DataSource.

        Assumes good faith: garbage in, garbage out.
        """
        return cls.from_arrays(source[y], source[x], interval=interval, level=level)

    @classmethod
    def _build(
        cls,
        y: NDArray,
        x: NDArray,
        interval: Any,
        level: Any,
    ) -> Design:
        """Internal builder with validation."""
        if y.ndim == 2 and y.shape[1] == 1:
            y = y.ravel()
        if x.ndim == 2 and x.shape[1] == 1:
            x = x.ravel()

        check_1d(y, 'y')
        check_1d(x, 'x')
        check_consistent_length(y, x, names=('y', 'x'))
        check_finite(y, 'y')
        check_finite(x, 'x')
        # Two coefficients plus at least one residual degree of freedom
        check_min_samples(y, 3, 'y')

        interval = check_choice(interval, VALID_INTERVALS, 'interval')
        level = check_open_interval(level, 0.0, 1.0, 'level')

        X = np.column_stack([np.ones_like(x), x])
        return cls(_y=y, _x=x, _X=X, _interval=interval, _level=level)

    # === Properties ===

    @property
    def X(self) -> NDArray[np.floating[Any]]:
        """Design matrix [1, x] (n x 2)."""
        return self._X

    @property
    def y(self) -> NDArray[np.floating[Any]]:
        """Response vector (n,)."""
        return self._y

    @property
    def x(self) -> NDArray[np.floating[Any]]:
        """Predictor vector (n,)."""
        return self._x

    @property
    def n(self) -> int:
        """Number of observations."""
        return self._y.shape[0]

    @property
    def p(self) -> int:
        """Number of columns in X (intercept included)."""
        return self._X.shape[1]

    @property
    def interval(self) -> str:
        return self._interval

    @property
    def level(self) -> float:
        return self._level

    def XtX(self) -> NDArray[np.floating[Any]]:
        """Compute X'X."""
        return self._X.T @ self._X

    def Xty(self) -> NDArray[np.floating[Any]]:
        """Compute X'y."""
        return self._X.T @ self._y
