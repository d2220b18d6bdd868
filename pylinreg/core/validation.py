"""
Input validation utilities for pylinreg.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent.

Design principles:
    - No silent type coercion (except np.asarray on array-likes)
    - No default handling of edge cases
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

import math

import numpy as np
from numpy.typing import ArrayLike, NDArray
from typing import Any

from pylinreg.core.exceptions import (
    ValidationError,
    DimensionError,
    EmptyDatasetError,
    InvalidFeatureCountError,
)


def check_array(
    array: ArrayLike,
    name: str,
) -> NDArray[np.floating[Any]]:
    """
    Validate and convert input to a float64 numpy array.

    Accepts any array-like. Rejects ragged input and inputs that result in
    object dtype (indicating mixed types or non-numeric data).

    Args:
        array: Input to validate
        name: Parameter name for error messages

    Returns:
        numpy.ndarray with float64 dtype

    Raises:
        DimensionError: If nested sequences have unequal lengths
        ValidationError: If input cannot be converted to a numeric array
    """
    try:
        result = np.asarray(array)
    except ValueError as e:
        # numpy refuses ragged nested sequences
        raise DimensionError(f"{name}: cannot form a rectangular array: {e}") from e
    except TypeError as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}") from e

    if result.dtype == object:
        raise ValidationError(
            f"{name}: converted to object dtype, indicating mixed types or non-numeric data"
        )

    # Reject non-numeric dtypes (strings, bytes, datetime, etc.)
    if not np.issubdtype(result.dtype, np.number):
        raise ValidationError(
            f"{name}: non-numeric dtype {result.dtype}, expected numeric data"
        )

    return result.astype(np.float64, copy=False)


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


def check_ndim(array: NDArray[np.floating[Any]], ndim: int, name: str) -> None:
    """
    Verify array has exactly the specified number of dimensions.

    Raises:
        DimensionError: If array has wrong number of dimensions
    """
    if array.ndim != ndim:
        raise DimensionError(
            f"{name}: expected {ndim}D array, got {array.ndim}D with shape {array.shape}"
        )


def check_1d(array: NDArray[np.floating[Any]], name: str) -> None:
    """Verify array is 1-dimensional."""
    check_ndim(array, 1, name)


def check_2d(array: NDArray[np.floating[Any]], name: str) -> None:
    """Verify array is 2-dimensional."""
    check_ndim(array, 2, name)


def check_consistent_length(
    *arrays: NDArray[np.floating[Any]],
    names: tuple[str, ...]
) -> None:
    """
    Verify all arrays have the same length (first dimension).

    Args:
        *arrays: Arrays to check
        names: Parameter names for error messages (must match number of arrays)

    Raises:
        ValueError: If number of names doesn't match number of arrays
        DimensionError: If arrays have inconsistent lengths
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
        raise DimensionError(f"Inconsistent lengths: {details}")


def check_not_empty(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify array has at least one sample (first dimension).

    Raises:
        EmptyDatasetError: If the array has no rows
    """
    if array.shape[0] == 0:
        raise EmptyDatasetError(f"{name}: dataset is empty")


def check_n_features(
    array: NDArray[np.floating[Any]],
    n_features: int,
    name: str,
) -> None:
    """
    Verify the last axis holds exactly n_features values.

    Works for a single feature row (1D) and a feature table (2D).

    Raises:
        InvalidFeatureCountError: If the feature count differs
    """
    actual = array.shape[-1] if array.ndim > 0 else 0
    if actual != n_features:
        raise InvalidFeatureCountError(
            f"{name}: expected {n_features} features, got {actual}",
            expected=n_features,
            actual=actual,
        )


def check_non_negative_scalar(value: float, name: str) -> float:
    """
    Verify value is a finite real number >= 0.

    Returns:
        The value as a Python float

    Raises:
        ValidationError: If value is not a finite non-negative number
    """
    try:
        result = float(value)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"{name}: expected a real number, got {value!r}") from e
    if not math.isfinite(result) or result < 0:
        raise ValidationError(f"{name}: must be finite and >= 0, got {result}")
    return result
