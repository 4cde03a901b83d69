"""
Smoothing kernels.

A kernel maps a scaled distance u to a nonnegative weight that is largest
at u = 0 and vanishes outside its support.
"""

from typing import Any
import numpy as np
from numpy.typing import NDArray


def tricube(u: NDArray[np.floating[Any]]) -> NDArray[np.floating[Any]]:
    """
    Tukey tri-cube kernel: K(u) = (1 - |u|³)³ for |u| <= 1, else 0.

    Weights fall smoothly to exactly zero at the edge of the window,
    so |u| == 1 already gets weight 0.
    """
    a = np.abs(np.asarray(u, dtype=np.float64))
    return np.where(a <= 1.0, (1.0 - a ** 3) ** 3, 0.0)
