"""
Core infrastructure for pystatlearn.

This module provides shared abstractions and utilities used by all
domain-specific submodules (smoothing, neighbors, regression).

Key components:
    protocols: Backend protocol
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    datasource: Named-column data container
    compute: Timing, tolerances, linear algebra kernels
"""

from pystatlearn.core.protocols import Backend
from pystatlearn.core.result import Result
from pystatlearn.core.datasource import DataSource
from pystatlearn.core.exceptions import (
    StatLearnError,
    ValidationError,
    InvalidParameterError,
    DimensionMismatchError,
    InsufficientNeighborsError,
    NumericalError,
    SingularMatrixError,
)

__all__ = [
    # Protocols
    "Backend",
    # Result
    "Result",
    # Data
    "DataSource",
    # Exceptions
    "StatLearnError",
    "ValidationError",
    "InvalidParameterError",
    "DimensionMismatchError",
    "InsufficientNeighborsError",
    "NumericalError",
    "SingularMatrixError",
]
