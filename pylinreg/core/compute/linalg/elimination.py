"""
Gaussian elimination kernels.

Row-reduction with partial pivoting on float64 arrays. These are the
numeric engines behind Matrix.inverse() and Matrix.determinant(); they
take and return plain NumPy arrays so they can be tested in isolation.

Both kernels use the same pivot rule: in column i, pick the row at or
below i with the largest absolute entry (first one wins on ties).
"""

from typing import Any
import numpy as np
from numpy.typing import NDArray

from pylinreg.core.exceptions import NotSquareError, SingularMatrixError
from pylinreg.core.compute.tolerances import PIVOT_TOLERANCE


def _check_square(a: NDArray[np.floating[Any]], operation: str) -> int:
    if a.ndim != 2 or a.shape[0] != a.shape[1]:
        raise NotSquareError(
            f"Matrix must be square to compute {operation}, got shape {a.shape}",
            shape=tuple(a.shape),
        )
    return a.shape[0]


def _pivot_row(work: NDArray[np.floating[Any]], column: int) -> int:
    """Row index (>= column) holding the largest |entry| in column."""
    return column + int(np.argmax(np.abs(work[column:, column])))


def gauss_jordan_inverse(
    a: NDArray[np.floating[Any]],
    *,
    tol: float = PIVOT_TOLERANCE,
    name: str = 'matrix',
) -> NDArray[np.floating[Any]]:
    """
    Invert a square matrix by Gauss-Jordan elimination on [A | I].

    For each pivot column the best row is swapped into place, scaled so
    the pivot becomes 1, and the column is cleared from every other row.
    When all columns are processed the right half holds A⁻¹. O(n³).

    Args:
        a: Square matrix (n x n). Not modified.
        tol: Pivots with magnitude below this mark the matrix singular
        name: Matrix description used in error messages

    Returns:
        The inverse as a new (n x n) float64 array

    Raises:
        NotSquareError: If a is not square
        SingularMatrixError: If no acceptable pivot exists in some column
    """
    n = _check_square(a, 'inverse')

    augmented = np.hstack([np.array(a, dtype=np.float64), np.eye(n)])

    for i in range(n):
        pivot_row = _pivot_row(augmented, i)
        pivot_value = float(augmented[pivot_row, i])

        if abs(pivot_value) < tol:
            raise SingularMatrixError(
                f"{name} is singular and cannot be inverted "
                f"(column {i}: best pivot {pivot_value:.3e} < {tol:.0e})",
                matrix_name=name,
                pivot_column=i,
                pivot_value=pivot_value,
                tolerance=tol,
            )

        if pivot_row != i:
            augmented[[i, pivot_row]] = augmented[[pivot_row, i]]

        augmented[i] /= augmented[i, i]

        # Subtract factor * pivot row from every other row at once
        factors = augmented[:, i].copy()
        factors[i] = 0.0
        augmented -= np.outer(factors, augmented[i])

    return augmented[:, n:].copy()


def elimination_determinant(
    a: NDArray[np.floating[Any]],
    *,
    tol: float = PIVOT_TOLERANCE,
) -> float:
    """
    Determinant by forward elimination with partial pivoting.

    Closed forms for 1x1 and 2x2. For larger matrices the determinant is
    the product of the pivots, negated once per row swap. A pivot below
    tol means the matrix is treated as singular and 0.0 is returned;
    unlike gauss_jordan_inverse this never raises for singular input.

    Args:
        a: Square matrix (n x n). Not modified.
        tol: Pivot tolerance

    Returns:
        det(a) as a Python float (1.0 for the empty 0x0 matrix)

    Raises:
        NotSquareError: If a is not square
    """
    n = _check_square(a, 'determinant')

    if n == 1:
        return float(a[0, 0])
    if n == 2:
        return float(a[0, 0] * a[1, 1] - a[0, 1] * a[1, 0])

    work = np.array(a, dtype=np.float64)
    det = 1.0

    for i in range(n):
        pivot_row = _pivot_row(work, i)

        if abs(work[pivot_row, i]) < tol:
            return 0.0

        if pivot_row != i:
            work[[i, pivot_row]] = work[[pivot_row, i]]
            det = -det

        det *= work[i, i]

        # Eliminate below the diagonal only
        factors = work[i + 1:, i] / work[i, i]
        work[i + 1:] -= np.outer(factors, work[i])

    return float(det)
