"""
Error metrics on actual vs predicted values.

All functions take equal-length 1D arrays and return Python floats.
Empty input raises EmptyDatasetError; the metrics are undefined there.
"""

from typing import Any
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pylinreg.core.validation import (
    check_array,
    check_1d,
    check_consistent_length,
    check_not_empty,
)


def _pair(actual: ArrayLike, predicted: ArrayLike) -> tuple[NDArray, NDArray]:
    a = check_array(actual, 'actual')
    p = check_array(predicted, 'predicted')
    check_1d(a, 'actual')
    check_1d(p, 'predicted')
    check_consistent_length(a, p, names=('actual', 'predicted'))
    check_not_empty(a, 'actual')
    return a, p


def residuals(actual: ArrayLike, predicted: ArrayLike) -> NDArray[np.floating[Any]]:
    """actual - predicted."""
    a, p = _pair(actual, predicted)
    return a - p


def mse(actual: ArrayLike, predicted: ArrayLike) -> float:
    a, p = _pair(actual, predicted)
    err = a - p
    return float(err @ err / a.shape[0])


def rmse(actual: ArrayLike, predicted: ArrayLike) -> float:
    return float(np.sqrt(mse(actual, predicted)))


def mae(actual: ArrayLike, predicted: ArrayLike) -> float:
    a, p = _pair(actual, predicted)
    return float(np.mean(np.abs(a - p)))


def r_squared(actual: ArrayLike, predicted: ArrayLike) -> float:
    """
    Coefficient of determination, 1 - RSS/TSS.

    TSS is taken about the mean of `actual` itself. When every actual
    value is identical (TSS == 0) the result is 1.0 by convention,
    whatever the predictions are.
    """
    a, p = _pair(actual, predicted)
    tss = float(np.sum((a - np.mean(a)) ** 2))
    if tss == 0.0:
        return 1.0
    err = a - p
    return 1.0 - float(err @ err) / tss


def mape(actual: ArrayLike, predicted: ArrayLike) -> float:
    """
    Mean absolute percentage error, in percent.

    Samples whose actual value is zero are skipped. Returns 0.0 when no
    sample is usable.
    """
    a, p = _pair(actual, predicted)
    usable = a != 0.0
    if not np.any(usable):
        return 0.0
    return float(np.mean(np.abs((a[usable] - p[usable]) / a[usable])) * 100.0)
