"""
Local polynomial smoothing.

Public API:
    loess(x, y, span=..., degree=...) -> LoessSolution

Example:
    >>> from pystatlearn.smoothing import loess
    >>> result = loess(x, y, span=0.5, degree=2)
    >>> print(result.summary())
"""

from pystatlearn.smoothing.design import LoessDesign
from pystatlearn.smoothing._common import LoessParams
from pystatlearn.smoothing.solution import LoessSolution
from pystatlearn.smoothing.solvers import loess

__all__ = [
    "loess",
    "LoessDesign",
    "LoessParams",
    "LoessSolution",
]
