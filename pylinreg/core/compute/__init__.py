"""
Shared compute infrastructure for pylinreg.

This module provides timing utilities, tolerance constants and the linear
algebra kernels used by the regression backends.

IMPORTANT: This is NOT where regression backends live. Those go in
regression/backends/. This module contains shared NUMERIC infrastructure.

Submodules:
    timing: Execution timing utilities
    tolerances: Pivot tolerance and comparison tiers
    linalg: Dense Matrix and Gaussian elimination kernels
"""

from pylinreg.core.compute.timing import Timer, timed
from pylinreg.core.compute.tolerances import PIVOT_TOLERANCE, ToleranceTier

__all__ = [
    # Timing
    "Timer",
    "timed",
    # Tolerances
    "PIVOT_TOLERANCE",
    "ToleranceTier",
]
