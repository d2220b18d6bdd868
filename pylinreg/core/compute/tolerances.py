"""
Tolerance constants for elimination and numerical validation.

PIVOT_TOLERANCE governs singularity detection in Gauss-Jordan inversion
and in the elimination determinant. CPU_FP64 is the default tolerance of
Matrix.allclose().
"""

from dataclasses import dataclass


# Smallest pivot magnitude accepted during elimination. Below this the
# matrix is treated as singular: inverse() raises, determinant() returns 0.
PIVOT_TOLERANCE = 1e-10


@dataclass(frozen=True)
class ToleranceTier:
    """Tolerance specification for numerical comparison."""
    rtol: float
    atol: float
    name: str
    description: str


# Elimination result vs LAPACK on well-conditioned input
CPU_FP64 = ToleranceTier(
    rtol=1e-10,
    atol=1e-12,
    name='cpu_fp64',
    description='CPU double precision, well conditioned',
)
