"""
Solver dispatch for regression.

This module provides the fit() function (public API).
"""

from numpy.typing import ArrayLike

from pylinreg.regression.design import Design, SampleInput
from pylinreg.regression.solution import LinearSolution
from pylinreg.regression.backends.cpu import NormalEquationBackend


def fit(
    X: SampleInput,
    y: ArrayLike | None = None,
    *,
    ridge_lambda: float = 0.0,
) -> LinearSolution:
    """
    Fit a linear regression model through the origin on six features.

    Solves the (optionally ridge-penalized) least squares problem:
        min_θ ||y - Xθ||² + λ||θ||²
    via the normal equation θ = (XᵗX + λI)⁻¹Xᵗy.

    Args:
        X: Feature table (n x 6), or a Design, DataSource, or list of Sample
        y: Target vector (n,). Required when X is a feature table.
        ridge_lambda: L2 penalty λ >= 0. 0 gives ordinary least squares.

    Returns:
        LinearSolution with coefficients, training diagnostics and summary

    Raises:
        ValueError: If y is missing for a feature table
        EmptyDatasetError: If there are no samples
        InvalidFeatureCountError: If X does not have 6 columns
        DimensionError: If X and y have inconsistent lengths
        ValidationError: If inputs are non-numeric or non-finite, or λ < 0
        SingularMatrixError: If the normal matrix is singular

    Example:
        >>> from pylinreg.regression import fit
        >>> result = fit(X, y)
        >>> print(result.coefficients)
        >>> print(result.summary())
    """
    # This is the boundary - validate here, trust everywhere else
    backend = NormalEquationBackend(ridge_lambda)
    design = Design.build(X, y)

    result = backend.solve(design)

    return LinearSolution(_result=result, _design=design)
