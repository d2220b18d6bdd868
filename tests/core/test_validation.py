"""
Tests for input validation utilities.

Validates every function in core/validation.py.
"""

import numpy as np
import pytest

from pylinreg.core.exceptions import (
    DimensionError,
    EmptyDatasetError,
    InvalidFeatureCountError,
    ValidationError,
)
from pylinreg.core.validation import (
    check_1d,
    check_2d,
    check_array,
    check_consistent_length,
    check_finite,
    check_n_features,
    check_ndim,
    check_non_negative_scalar,
    check_not_empty,
)


# ═══════════════════════════════════════════════════════════════════════
# check_array
# ═══════════════════════════════════════════════════════════════════════


class TestCheckArray:
    """check_array converts to float64 ndarray and rejects non-numeric data."""

    def test_list_to_float_array(self):
        result = check_array([1, 2, 3], "X")
        assert isinstance(result, np.ndarray)
        assert result.dtype == np.float64
        np.testing.assert_array_equal(result, [1.0, 2.0, 3.0])

    def test_int_array_promoted_to_float(self):
        result = check_array(np.array([1, 2, 3], dtype=np.int32), "X")
        assert result.dtype == np.float64

    def test_nested_list_to_2d(self):
        result = check_array([[1, 2], [3, 4]], "X")
        assert result.shape == (2, 2)

    def test_ragged_rejected_as_dimension_error(self):
        with pytest.raises(DimensionError, match="grid"):
            check_array([[1, 2], [3]], "grid")

    def test_strings_rejected(self):
        with pytest.raises(ValidationError, match="non-numeric"):
            check_array(["a", "b"], "X")

    def test_mixed_types_rejected(self):
        with pytest.raises(ValidationError):
            check_array([1, "a", None], "X")


# ═══════════════════════════════════════════════════════════════════════
# check_finite
# ═══════════════════════════════════════════════════════════════════════


class TestCheckFinite:

    def test_finite_passes(self):
        check_finite(np.array([1.0, 2.0]), "X")

    def test_nan_rejected(self):
        with pytest.raises(ValidationError, match="1 NaN"):
            check_finite(np.array([1.0, np.nan]), "X")

    def test_inf_rejected(self):
        with pytest.raises(ValidationError, match="1 Inf"):
            check_finite(np.array([np.inf, 1.0]), "X")


# ═══════════════════════════════════════════════════════════════════════
# Dimensionality
# ═══════════════════════════════════════════════════════════════════════


class TestCheckNdim:

    def test_1d_passes(self):
        check_1d(np.zeros(3), "y")

    def test_2d_passes(self):
        check_2d(np.zeros((3, 2)), "X")

    def test_wrong_ndim(self):
        with pytest.raises(DimensionError, match="expected 2D"):
            check_ndim(np.zeros(3), 2, "X")


class TestCheckConsistentLength:

    def test_equal_lengths_pass(self):
        check_consistent_length(np.zeros((3, 2)), np.zeros(3), names=("X", "y"))

    def test_mismatch_rejected(self):
        with pytest.raises(DimensionError, match="X=3, y=4"):
            check_consistent_length(np.zeros((3, 2)), np.zeros(4), names=("X", "y"))

    def test_names_count_must_match(self):
        with pytest.raises(ValueError):
            check_consistent_length(np.zeros(3), names=("a", "b"))


class TestCheckNotEmpty:

    def test_non_empty_passes(self):
        check_not_empty(np.zeros((1, 6)), "X")

    def test_empty_rejected(self):
        with pytest.raises(EmptyDatasetError):
            check_not_empty(np.zeros((0, 6)), "X")


class TestCheckNFeatures:

    def test_row_with_six_passes(self):
        check_n_features(np.zeros(6), 6, "features")

    def test_table_with_six_passes(self):
        check_n_features(np.zeros((4, 6)), 6, "X")

    def test_short_row_rejected(self):
        with pytest.raises(InvalidFeatureCountError) as excinfo:
            check_n_features(np.zeros(5), 6, "features")
        assert excinfo.value.expected == 6
        assert excinfo.value.actual == 5

    def test_wide_table_rejected(self):
        with pytest.raises(InvalidFeatureCountError):
            check_n_features(np.zeros((2, 7)), 6, "X")


class TestCheckNonNegativeScalar:

    def test_zero_allowed(self):
        assert check_non_negative_scalar(0, "lam") == 0.0

    def test_positive_returned_as_float(self):
        result = check_non_negative_scalar(np.float32(0.5), "lam")
        assert isinstance(result, float)
        assert result == 0.5

    @pytest.mark.parametrize("value", [-0.1, np.nan, np.inf])
    def test_invalid_rejected(self, value):
        with pytest.raises(ValidationError, match="lam"):
            check_non_negative_scalar(value, "lam")

    def test_non_number_rejected(self):
        with pytest.raises(ValidationError):
            check_non_negative_scalar("abc", "lam")
