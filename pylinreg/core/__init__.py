"""
Core infrastructure for pylinreg.

This module provides shared abstractions, utilities, and numeric
infrastructure used by the regression package.

Key components:
    protocols: Backend protocol
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    features: Feature schema and Sample record
    datasource: Dataset loading, shuffling and splitting
    compute: Timing, tolerances, dense Matrix
"""

from pylinreg.core.protocols import Backend
from pylinreg.core.result import Result
from pylinreg.core.features import FEATURE_NAMES, TARGET_NAME, N_FEATURES, Sample
from pylinreg.core.datasource import DataSource
from pylinreg.core.exceptions import (
    PyLinRegError,
    ValidationError,
    DimensionError,
    NotSquareError,
    InvalidFeatureCountError,
    EmptyDatasetError,
    InvalidFoldCountError,
    OutOfRangeError,
    NumericalError,
    SingularMatrixError,
    ModelNotTrainedError,
)

__all__ = [
    # Protocols
    "Backend",
    # Result
    "Result",
    # Schema
    "FEATURE_NAMES",
    "TARGET_NAME",
    "N_FEATURES",
    "Sample",
    # Data
    "DataSource",
    # Exceptions
    "PyLinRegError",
    "ValidationError",
    "DimensionError",
    "NotSquareError",
    "InvalidFeatureCountError",
    "EmptyDatasetError",
    "InvalidFoldCountError",
    "OutOfRangeError",
    "NumericalError",
    "SingularMatrixError",
    "ModelNotTrainedError",
]
