"""
Regression backends.

Available backends:
    NormalEquationBackend: CPU normal equation (OLS, or ridge when λ > 0)
"""

from pylinreg.regression.backends.cpu import NormalEquationBackend

__all__ = [
    "NormalEquationBackend",
]
