"""
LOESS Design.

Wraps the (x, y) sample and the smoothing configuration. All validation
happens here, once; the backend trusts what it receives.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import NDArray, ArrayLike

from pystatlearn.core.datasource import DataSource
from pystatlearn.core.exceptions import (
    InsufficientNeighborsError,
    InvalidParameterError,
)
from pystatlearn.core.validation import (
    check_1d,
    check_array,
    check_consistent_length,
    check_finite,
    check_open_interval,
)
from pystatlearn.smoothing._common import VALID_DEGREES


@dataclass(frozen=True)
class LoessDesign:
    """
    Local regression setup.

    Immutable after construction.

    Construction:
        LoessDesign.from_arrays(x, y, span=0.5, degree=1)
        LoessDesign.from_datasource(ds, x='speed', y='dist', span=0.5)
    """
    _x: NDArray[np.floating[Any]]
    _y: NDArray[np.floating[Any]]
    _span: float
    _degree: int
    _window_size: int

    @classmethod
    def from_arrays(
        cls,
        x: ArrayLike,
        y: ArrayLike,
        *,
        span: float,
        degree: int,
    ) -> LoessDesign:
        """Build LoessDesign directly from arrays."""
        x_arr = check_array(x, 'x')
        y_arr = check_array(y, 'y')
        return cls._build(x_arr, y_arr, span, degree)

    @classmethod
    def from_datasource(
        cls,
        source: DataSource,
        *,
        x: str = 'x',
        y: str = 'y',
        span: float,
        degree: int,
    ) -> LoessDesign:
        """Build LoessDesign from two named columns of a DataSource."""
        return cls.from_arrays(source[x], source[y], span=span, degree=degree)

    @classmethod
    def _build(
        cls,
        x: NDArray,
        y: NDArray,
        span: Any,
        degree: Any,
    ) -> LoessDesign:
        """Internal builder with validation."""
        if y.ndim == 2 and y.shape[1] == 1:
            y = y.ravel()
        if x.ndim == 2 and x.shape[1] == 1:
            x = x.ravel()

        check_1d(x, 'x')
        check_1d(y, 'y')
        check_consistent_length(x, y, names=('x', 'y'))
        check_finite(x, 'x')
        check_finite(y, 'y')

        if isinstance(degree, bool) or degree not in VALID_DEGREES:
            raise InvalidParameterError(
                f"degree must be one of {VALID_DEGREES}, got {degree!r}",
                parameter='degree',
                value=degree,
            )
        span = check_open_interval(span, 0.0, 1.0, 'span')

        n = x.shape[0]
        window_size = math.floor(span * n)
        required = int(degree) + 1
        if window_size < required:
            raise InsufficientNeighborsError(
                f"span={span} with n={n} gives window_size={window_size}, "
                f"but a degree-{degree} local fit needs at least {required} points",
                window_size=window_size,
                required=required,
            )

        return cls(
            _x=x,
            _y=y,
            _span=span,
            _degree=int(degree),
            _window_size=window_size,
        )

    # === Properties ===

    @property
    def x(self) -> NDArray[np.floating[Any]]:
        """Predictor values (n,)."""
        return self._x

    @property
    def y(self) -> NDArray[np.floating[Any]]:
        """Response values (n,)."""
        return self._y

    @property
    def n(self) -> int:
        """Number of observations."""
        return self._x.shape[0]

    @property
    def span(self) -> float:
        return self._span

    @property
    def degree(self) -> int:
        return self._degree

    @property
    def window_size(self) -> int:
        """Neighbors per query point: floor(span * n)."""
        return self._window_size

    @property
    def bandwidth(self) -> int:
        """Kernel scale: floor(window_size / 2)."""
        return self._window_size // 2
