"""
Linear algebra kernels for pylinreg.

All functions follow these conventions:
    - Storage is float64 NumPy arrays
    - Matrix wraps the kernels with bounds and shape checks
    - Errors are raised immediately with clear messages

Submodules:
    elimination: Gauss-Jordan inverse and elimination determinant
    matrix: Dense Matrix value type
"""

from pylinreg.core.compute.linalg.elimination import (
    gauss_jordan_inverse,
    elimination_determinant,
)
from pylinreg.core.compute.linalg.matrix import Matrix

__all__ = [
    # Elimination kernels
    "gauss_jordan_inverse",
    "elimination_determinant",
    # Dense matrix
    "Matrix",
]
