"""
Input validation utilities for pystatlearn.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent.

Design principles:
    - No silent type coercion (except converting array-likes to arrays)
    - Validated arrays are private read-only copies of the caller's data
    - No default handling of edge cases
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

import numbers

import numpy as np
from numpy.typing import ArrayLike, NDArray
from typing import Any, Collection

from pystatlearn.core.exceptions import (
    ValidationError,
    DimensionMismatchError,
    InvalidParameterError,
)


def check_array(
    array: ArrayLike,
    name: str,
) -> NDArray[np.floating[Any]]:
    """
    Validate and convert input to a numeric numpy array.

    Accepts any array-like and copies it into a numpy array. Rejects inputs
    that result in object dtype (indicating mixed types or non-numeric data).
    The returned array is read-only and shares no memory with the input.

    Args:
        array: Input to validate
        name: Parameter name for error messages

    Returns:
        read-only numpy.ndarray with floating dtype

    Raises:
        ValidationError: If input cannot be converted to numeric array
    """
    try:
        result = np.array(array)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}") from e

    if result.dtype == object:
        raise ValidationError(
            f"{name}: converted to object dtype, indicating mixed types or non-numeric data"
        )

    # Reject non-numeric dtypes (strings, booleans, datetime, etc.)
    if not np.issubdtype(result.dtype, np.number):
        raise ValidationError(
            f"{name}: non-numeric dtype {result.dtype}, expected numeric data"
        )

    if not np.issubdtype(result.dtype, np.floating):
        result = result.astype(np.float64)

    result.setflags(write=False)
    return result


def check_labels(array: ArrayLike, name: str) -> NDArray:
    """
    Copy a label vector into a read-only 1D numpy array without changing its dtype.

    Labels may be numeric (regression targets, integer class codes) or
    categorical (strings, booleans, arbitrary hashable objects).

    Args:
        array: Input to validate
        name: Parameter name for error messages

    Returns:
        read-only 1D numpy.ndarray

    Raises:
        DimensionMismatchError: If the labels are not one-dimensional
    """
    result = np.array(array)
    result.setflags(write=False)
    if result.ndim == 2 and result.shape[1] == 1:
        result = result.ravel()
    check_1d(result, name)
    return result


def check_finite(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify array contains no NaN or Inf values.

    Args:
        array: Array to check
        name: Parameter name for error messages

    Raises:
        ValidationError: If array contains non-finite values
    """
    if not np.all(np.isfinite(array)):
        n_nan = int(np.sum(np.isnan(array)))
        n_inf = int(np.sum(np.isinf(array)))
        raise ValidationError(
            f"{name}: contains non-finite values ({n_nan} NaN, {n_inf} Inf)"
        )


def check_ndim(array: NDArray, ndim: int, name: str) -> None:
    """
    Verify array has exactly the specified number of dimensions.

    Args:
        array: Array to check
        ndim: Required number of dimensions
        name: Parameter name for error messages

    Raises:
        DimensionMismatchError: If array has wrong number of dimensions
    """
    if array.ndim != ndim:
        raise DimensionMismatchError(
            f"{name}: expected {ndim}D array, got {array.ndim}D with shape {array.shape}"
        )


def check_1d(array: NDArray, name: str) -> None:
    """Verify array is 1-dimensional."""
    check_ndim(array, 1, name)


def check_2d(array: NDArray, name: str) -> None:
    """Verify array is 2-dimensional."""
    check_ndim(array, 2, name)


def check_consistent_length(
    *arrays: NDArray,
    names: tuple[str, ...]
) -> None:
    """
    Verify all arrays have the same length (first dimension).

    Args:
        *arrays: Arrays to check
        names: Parameter names for error messages (must match number of arrays)

    Raises:
        ValueError: If number of names doesn't match number of arrays
        DimensionMismatchError: If arrays have inconsistent lengths
    """
    if len(arrays) != len(names):
        raise ValueError(
            f"Number of arrays ({len(arrays)}) must match number of names ({len(names)})"
        )

    if len(arrays) < 2:
        return

    lengths = [arr.shape[0] for arr in arrays]
    if len(set(lengths)) > 1:
        details = ", ".join(f"{name}={length}" for name, length in zip(names, lengths))
        raise DimensionMismatchError(f"Inconsistent lengths: {details}")


def check_min_samples(array: NDArray, min_samples: int, name: str) -> None:
    """
    Verify array has at least the minimum number of samples.

    Args:
        array: Array to check
        min_samples: Minimum required samples (first dimension)
        name: Parameter name for error messages

    Raises:
        ValidationError: If array has fewer than min_samples
    """
    n = array.shape[0]
    if n < min_samples:
        raise ValidationError(
            f"{name}: requires at least {min_samples} samples, got {n}"
        )


def check_choice(value: Any, choices: Collection[Any], name: str) -> Any:
    """
    Verify a string-valued option is one of the accepted values.

    No case folding, no prefix matching: unknown values are rejected.

    Raises:
        InvalidParameterError: If value is not in choices
    """
    if not isinstance(value, str) or value not in choices:
        raise InvalidParameterError(
            f"{name} must be one of {tuple(choices)}, got {value!r}",
            parameter=name,
            value=value,
        )
    return value


def check_open_interval(
    value: Any,
    low: float,
    high: float,
    name: str,
) -> float:
    """
    Verify a real-valued parameter lies strictly between low and high.

    Raises:
        InvalidParameterError: If value is not a real number in (low, high)
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidParameterError(
            f"{name} must be a real number in ({low}, {high}), got {value!r}",
            parameter=name,
            value=value,
        )
    if not (low < value < high):
        raise InvalidParameterError(
            f"{name} must be in ({low}, {high}), got {value}",
            parameter=name,
            value=value,
        )
    return float(value)


def check_int_in_range(
    value: Any,
    low: int,
    high: int,
    name: str,
) -> int:
    """
    Verify an integer parameter satisfies low <= value <= high.

    Raises:
        InvalidParameterError: If value is not an integer or out of range
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise InvalidParameterError(
            f"{name} must be an integer, got {value!r}",
            parameter=name,
            value=value,
        )
    if not (low <= value <= high):
        raise InvalidParameterError(
            f"{name} must satisfy {low} <= {name} <= {high}, got {value}",
            parameter=name,
            value=value,
        )
    return int(value)
