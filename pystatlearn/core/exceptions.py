"""
Exception hierarchy for pystatlearn.

All exceptions inherit from StatLearnError to allow catching any
library-specific error. Domain code raises the most specific class
available here.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""

from typing import Any


class StatLearnError(Exception):
    """Base exception for all pystatlearn errors."""
    pass


class ValidationError(StatLearnError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks.
    """
    pass


class InvalidParameterError(ValidationError):
    """
    A hyperparameter is out of range or not one of the accepted values.

    Raised for degree, span, k, level, method, interval, task and eps.

    Attributes:
        parameter: Name of the offending parameter
        value: The value that was rejected
    """

    def __init__(
        self,
        message: str,
        parameter: str | None = None,
        value: Any = None,
    ):
        super().__init__(message)
        self.parameter = parameter
        self.value = value


class DimensionMismatchError(ValidationError):
    """
    Array dimensions are incorrect or inconsistent.

    Raised when array shapes don't match expected dimensions or
    when features and labels have different numbers of rows.
    """
    pass


class InsufficientNeighborsError(ValidationError):
    """
    Neighborhood is too small for the requested local model.

    A local polynomial of degree d needs at least d + 1 points.

    Attributes:
        window_size: Number of points the neighborhood would contain
        required: Minimum number of points needed
    """

    def __init__(
        self,
        message: str,
        window_size: int | None = None,
        required: int | None = None,
    ):
        super().__init__(message)
        self.window_size = window_size
        self.required = required


class NumericalError(StatLearnError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation.
    """
    pass


class SingularMatrixError(NumericalError):
    """
    Matrix is singular or nearly singular.

    Raised when a matrix operation requires invertibility but the matrix
    is singular or numerically rank-deficient.

    Attributes:
        matrix_name: Name/description of the problematic matrix
        condition_number: Estimated condition number, if available
        rank: Numerical rank, if computed
        expected_rank: Expected rank (typically min(n, p))
        point_index: Index of the query point whose local solve failed
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        condition_number: float | None = None,
        rank: int | None = None,
        expected_rank: int | None = None,
        point_index: int | None = None,
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.condition_number = condition_number
        self.rank = rank
        self.expected_rank = expected_rank
        self.point_index = point_index
