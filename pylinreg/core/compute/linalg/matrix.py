"""
Dense matrix type.

Matrix is a bounds-checked, shape-checked 2D float64 container with the
arithmetic the normal equation needs: add, subtract, matrix and scalar
products, transpose, inverse and determinant. Storage is a contiguous
NumPy array; every operation returns a new Matrix, so instances behave
as values.

Shape violations raise DimensionError, index violations OutOfRangeError.
Nothing is ever truncated, broadcast or zero-padded implicitly.
"""

from __future__ import annotations

import numbers
import operator
from typing import Any, Sequence
import numpy as np
from numpy.typing import NDArray

from pylinreg.core.exceptions import DimensionError, OutOfRangeError, ValidationError
from pylinreg.core.validation import check_array, check_2d
from pylinreg.core.compute.tolerances import CPU_FP64
from pylinreg.core.compute.linalg.elimination import (
    gauss_jordan_inverse,
    elimination_determinant,
)


def _check_size(value: int, name: str) -> int:
    size = operator.index(value)
    if size < 0:
        raise ValidationError(f"{name}: must be >= 0, got {size}")
    return size


class Matrix:
    """
    Dense rows x cols matrix of float64 entries.

    Construction:
        Matrix(3, 2)                         # 3x2 zeros
        Matrix.from_rows([[1, 2], [3, 4]])   # from nested sequences
        Matrix.from_array(X)                 # from a 2D ndarray (copied)
        Matrix.identity(6)

    Element access is m[r, c]; indices must satisfy 0 <= r < rows and
    0 <= c < cols (negative indices are rejected, not wrapped).

    Example:
        >>> A = Matrix.from_rows([[2, 0], [0, 2]])
        >>> A.inverse() == Matrix.from_rows([[0.5, 0], [0, 0.5]])
        True
    """

    __slots__ = ('_data',)

    # Keep NumPy scalars from broadcasting over a Matrix: np.float64(2) * m
    # must dispatch to Matrix.__rmul__.
    __array_ufunc__ = None

    # Mutable value type
    __hash__ = None  # type: ignore[assignment]

    def __init__(self, rows: int = 0, cols: int = 0):
        rows = _check_size(rows, 'rows')
        cols = _check_size(cols, 'cols')
        self._data: NDArray[np.floating[Any]] = np.zeros((rows, cols), dtype=np.float64)

    # === Construction ===

    @classmethod
    def _wrap(cls, data: NDArray[np.floating[Any]]) -> Matrix:
        """Adopt an owned 2D float64 array without copying."""
        obj = cls.__new__(cls)
        obj._data = data
        return obj

    @classmethod
    def from_rows(cls, grid: Sequence[Sequence[float]]) -> Matrix:
        """
        Build from nested sequences, one inner sequence per row.

        rows is the outer length and cols the length of the first row.
        Rows must all have the same length.

        Raises:
            DimensionError: If the rows are ragged or not 2D
        """
        if len(grid) == 0:
            return cls(0, 0)
        data = check_array(grid, 'grid')
        check_2d(data, 'grid')
        return cls._wrap(data.copy())

    @classmethod
    def from_array(cls, array: NDArray) -> Matrix:
        """Build from a 2D array. The data is copied."""
        data = check_array(array, 'array')
        check_2d(data, 'array')
        return cls._wrap(data.copy())

    @classmethod
    def identity(cls, size: int) -> Matrix:
        """size x size matrix with ones on the diagonal."""
        return cls._wrap(np.eye(_check_size(size, 'size'), dtype=np.float64))

    @classmethod
    def zeros(cls, rows: int, cols: int) -> Matrix:
        return cls(rows, cols)

    # === Shape ===

    @property
    def rows(self) -> int:
        return self._data.shape[0]

    @property
    def cols(self) -> int:
        return self._data.shape[1]

    @property
    def shape(self) -> tuple[int, int]:
        return (self.rows, self.cols)

    @property
    def is_square(self) -> bool:
        return self.rows == self.cols

    def resize(self, rows: int, cols: int) -> None:
        """
        Reshape in place to rows x cols.

        This is not a data-preserving reshape: entries outside the new
        shape are dropped and new entries are zero. Entries in the
        overlapping top-left block keep their values.
        """
        rows = _check_size(rows, 'rows')
        cols = _check_size(cols, 'cols')
        resized = np.zeros((rows, cols), dtype=np.float64)
        keep_r, keep_c = min(rows, self.rows), min(cols, self.cols)
        resized[:keep_r, :keep_c] = self._data[:keep_r, :keep_c]
        self._data = resized

    # === Element access ===

    def _check_index(self, row: int, col: int) -> tuple[int, int]:
        r, c = operator.index(row), operator.index(col)
        if not (0 <= r < self.rows and 0 <= c < self.cols):
            raise OutOfRangeError(
                f"Matrix indices ({r}, {c}) out of range for shape {self.shape}",
                index=(r, c),
                shape=self.shape,
            )
        return r, c

    def __getitem__(self, key: tuple[int, int]) -> float:
        if not isinstance(key, tuple) or len(key) != 2:
            raise TypeError(f"Matrix indices must be (row, col), got {key!r}")
        r, c = self._check_index(*key)
        return float(self._data[r, c])

    def __setitem__(self, key: tuple[int, int], value: float) -> None:
        if not isinstance(key, tuple) or len(key) != 2:
            raise TypeError(f"Matrix indices must be (row, col), got {key!r}")
        r, c = self._check_index(*key)
        self._data[r, c] = float(value)

    def set_element(self, row: int, col: int, value: float) -> None:
        self[row, col] = value

    def row(self, row: int) -> NDArray[np.floating[Any]]:
        """Copy of one row as a 1D array."""
        r = operator.index(row)
        if not 0 <= r < self.rows:
            raise OutOfRangeError(
                f"Matrix row index {r} out of range for {self.rows} rows",
                index=r,
                shape=self.shape,
            )
        return self._data[r].copy()

    # === Arithmetic ===

    def _check_same_shape(self, other: Matrix, operation: str) -> None:
        if self.shape != other.shape:
            raise DimensionError(
                f"Matrix dimensions must match for {operation}: "
                f"{self.shape} vs {other.shape}"
            )

    def __add__(self, other: Matrix) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        self._check_same_shape(other, 'addition')
        return Matrix._wrap(self._data + other._data)

    def __sub__(self, other: Matrix) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        self._check_same_shape(other, 'subtraction')
        return Matrix._wrap(self._data - other._data)

    def __matmul__(self, other: Matrix) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        if self.cols != other.rows:
            raise DimensionError(
                f"Matrix dimensions incompatible for multiplication: "
                f"{self.shape} x {other.shape}"
            )
        return Matrix._wrap(self._data @ other._data)

    def __mul__(self, other: Matrix | float) -> Matrix:
        if isinstance(other, Matrix):
            return self.__matmul__(other)
        if isinstance(other, numbers.Real):
            return Matrix._wrap(self._data * float(other))
        return NotImplemented

    def __rmul__(self, other: float) -> Matrix:
        if isinstance(other, numbers.Real):
            return Matrix._wrap(self._data * float(other))
        return NotImplemented

    def transpose(self) -> Matrix:
        """New cols x rows matrix with entries mirrored."""
        return Matrix._wrap(self._data.T.copy())

    @property
    def T(self) -> Matrix:
        return self.transpose()

    def inverse(self, *, name: str = 'Matrix') -> Matrix:
        """
        Inverse via Gauss-Jordan elimination with partial pivoting.

        Args:
            name: Description used in SingularMatrixError messages

        Raises:
            NotSquareError: If the matrix is not square
            SingularMatrixError: If a pivot falls below PIVOT_TOLERANCE
        """
        return Matrix._wrap(gauss_jordan_inverse(self._data, name=name))

    def determinant(self) -> float:
        """
        Determinant; 0.0 for matrices found singular during elimination.

        Raises:
            NotSquareError: If the matrix is not square
        """
        return elimination_determinant(self._data)

    # === Comparison and export ===

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.shape == other.shape and bool(np.array_equal(self._data, other._data))

    def allclose(
        self,
        other: Matrix,
        *,
        rtol: float = CPU_FP64.rtol,
        atol: float = CPU_FP64.atol,
    ) -> bool:
        """Entrywise comparison within tolerance; False on shape mismatch."""
        if self.shape != other.shape:
            return False
        return bool(np.allclose(self._data, other._data, rtol=rtol, atol=atol))

    def copy(self) -> Matrix:
        return Matrix._wrap(self._data.copy())

    def to_numpy(self) -> NDArray[np.floating[Any]]:
        return self._data.copy()

    def tolist(self) -> list[list[float]]:
        return self._data.tolist()

    def __repr__(self) -> str:
        return f"Matrix.from_rows({self.tolist()!r})" if self.rows else f"Matrix({self.rows}, {self.cols})"

    def __str__(self) -> str:
        return "\n".join(
            " ".join(f"{value:12.4f}" for value in row) for row in self._data
        )
