"""
Exception hierarchy for pylinreg.

All exceptions inherit from PyLinRegError so callers can catch any
library-specific failure in one place. Each failure mode of the matrix
and estimator layers has its own class; none of them is retried
internally.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages state actual vs expected values
    - Never catch and re-raise with less information
"""


class PyLinRegError(Exception):
    """Base exception for all pylinreg errors."""
    pass


class ValidationError(PyLinRegError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks.
    """
    pass


class DimensionError(ValidationError):
    """
    Array or matrix dimensions are incorrect or inconsistent.

    Raised for add/subtract on unequal shapes, multiplication with
    incompatible inner dimensions, and arrays with the wrong number of axes.
    """
    pass


class NotSquareError(DimensionError):
    """
    Operation requires a square matrix.

    Attributes:
        shape: (rows, cols) of the offending matrix
    """

    def __init__(self, message: str, shape: tuple[int, int] | None = None):
        super().__init__(message)
        self.shape = shape


class InvalidFeatureCountError(DimensionError):
    """
    A feature row does not have the number of entries the model expects.

    Attributes:
        expected: Required number of features
        actual: Number of features supplied
    """

    def __init__(self, message: str, expected: int, actual: int):
        super().__init__(message)
        self.expected = expected
        self.actual = actual


class EmptyDatasetError(ValidationError):
    """Fitting or scoring was requested on zero samples."""
    pass


class InvalidFoldCountError(ValidationError):
    """
    Cross-validation fold count is not usable for the dataset.

    Attributes:
        folds: Requested number of folds
        n_samples: Number of samples available
    """

    def __init__(self, message: str, folds: int, n_samples: int):
        super().__init__(message)
        self.folds = folds
        self.n_samples = n_samples


class OutOfRangeError(PyLinRegError, IndexError):
    """
    Element or row index is outside the matrix bounds.

    Also an IndexError, so generic indexing code handles it naturally.

    Attributes:
        index: The offending (row, col) or row index
        shape: (rows, cols) of the matrix
    """

    def __init__(
        self,
        message: str,
        index: tuple[int, ...] | int | None = None,
        shape: tuple[int, int] | None = None,
    ):
        super().__init__(message)
        self.index = index
        self.shape = shape


class NumericalError(PyLinRegError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation.
    """
    pass


class SingularMatrixError(NumericalError):
    """
    Matrix is singular or nearly singular.

    Raised when Gauss-Jordan elimination finds no pivot whose magnitude
    reaches the pivot tolerance.

    Attributes:
        matrix_name: Name/description of the problematic matrix
        pivot_column: Column where elimination broke down
        pivot_value: Largest candidate pivot found in that column
        tolerance: The tolerance the pivot failed to reach
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        pivot_column: int | None = None,
        pivot_value: float | None = None,
        tolerance: float | None = None,
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.pivot_column = pivot_column
        self.pivot_value = pivot_value
        self.tolerance = tolerance


class ModelNotTrainedError(PyLinRegError):
    """Prediction or scoring was requested before a successful fit."""
    pass
