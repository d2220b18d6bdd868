"""
Stateful linear regression estimator.

LinearRegression wraps the functional fit() API in an object that
remembers its last successful fit. It is either untrained (solution is
None) or trained (solution is a LinearSolution); a fit computes a complete
new solution first and only then replaces the old one, so a failed fit
leaves the previous model untouched.

Prediction only needs the six coefficients: each prediction is one dot
product, with no matrix work at inference time.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pylinreg.core.exceptions import ModelNotTrainedError
from pylinreg.core.datasource import DataSource
from pylinreg.core.features import N_FEATURES, Sample
from pylinreg.core.validation import (
    check_array,
    check_1d,
    check_2d,
    check_finite,
    check_n_features,
)
from pylinreg.regression import _metrics
from pylinreg.regression._kfold import cross_validate
from pylinreg.regression.design import Design, SampleInput
from pylinreg.regression.solution import LinearSolution, CrossValidationSolution
from pylinreg.regression.solvers import fit


class LinearRegression:
    """
    Normal-equation linear regression for the six hardware features.

    Models PRP = θ₁·MYCT + θ₂·MMIN + θ₃·MMAX + θ₄·CACH + θ₅·CHMIN + θ₆·CHMAX
    (no intercept).

    Example:
        >>> model = LinearRegression()
        >>> model.fit(X_train, y_train)
        >>> model.predict(X_test)
        >>> model.rmse(X_test, y_test)
        >>> model.fit_ridge(X_train, y_train, lam=0.01)
    """

    def __init__(self):
        self._solution: LinearSolution | None = None

    # === Fitting ===

    def fit(self, X: SampleInput, y: ArrayLike | None = None) -> LinearRegression:
        """
        Fit by ordinary least squares, θ = (XᵗX)⁻¹Xᵗy.

        Args:
            X: Feature table (n x 6), Design, DataSource or list of Sample
            y: Target vector when X is a feature table

        Returns:
            self

        Raises:
            EmptyDatasetError: If there are no samples
            SingularMatrixError: If XᵗX is singular; the model is unchanged
        """
        self._solution = fit(X, y)
        return self

    def fit_ridge(
        self,
        X: SampleInput,
        y: ArrayLike | None = None,
        lam: float = 0.01,
    ) -> LinearRegression:
        """
        Fit by ridge regression, θ = (XᵗX + λI)⁻¹Xᵗy.

        lam = 0 reproduces fit().

        Raises:
            ValidationError: If lam is negative or not finite
            EmptyDatasetError: If there are no samples
            SingularMatrixError: If XᵗX + λI is singular; the model is unchanged
        """
        self._solution = fit(X, y, ridge_lambda=lam)
        return self

    # === State ===

    @property
    def is_trained(self) -> bool:
        return self._solution is not None

    @property
    def solution(self) -> LinearSolution:
        """The current fit. Raises ModelNotTrainedError if untrained."""
        if self._solution is None:
            raise ModelNotTrainedError("Model has not been trained yet")
        return self._solution

    @property
    def coefficients(self) -> NDArray[np.floating[Any]]:
        """Copy of the six fitted weights, in FEATURE_NAMES order."""
        return self.solution.coefficients.copy()

    @property
    def train_rmse(self) -> float:
        """RMSE on the samples of the last successful fit."""
        return self.solution.rmse

    @property
    def ridge_lambda(self) -> float:
        return self.solution.ridge_lambda

    # === Prediction ===

    def predict_one(self, features: ArrayLike) -> float:
        """
        Predict a single feature row.

        Raises:
            ModelNotTrainedError: If the model is untrained
            InvalidFeatureCountError: If features does not have 6 values
        """
        coefficients = self.solution.coefficients
        row = check_array(features, 'features')
        check_1d(row, 'features')
        check_n_features(row, N_FEATURES, 'features')
        check_finite(row, 'features')
        return float(coefficients @ row)

    def predict(self, X: SampleInput) -> NDArray[np.floating[Any]]:
        """
        Predict every row of a feature table.

        All rows are validated before any prediction is made, so an
        invalid row fails the whole batch.

        Args:
            X: Feature table (n x 6), or a Design, DataSource or list of Sample

        Raises:
            ModelNotTrainedError: If the model is untrained
            InvalidFeatureCountError: If rows do not have 6 values
        """
        coefficients = self.solution.coefficients
        table = self._feature_table(X)
        return table @ coefficients

    @staticmethod
    def _feature_table(X: SampleInput) -> NDArray[np.floating[Any]]:
        if isinstance(X, (Design, DataSource)):
            table = X.X
        else:
            if isinstance(X, Iterator):
                X = list(X)
            if isinstance(X, (list, tuple)) and X and all(isinstance(s, Sample) for s in X):
                X = [s.features for s in X]
            table = check_array(X, 'X')
        if table.ndim == 1 and table.size == 0:
            table = table.reshape(0, N_FEATURES)
        check_2d(table, 'X')
        check_n_features(table, N_FEATURES, 'X')
        check_finite(table, 'X')
        return table

    # === Scoring ===

    def _actual_and_predicted(
        self, X: SampleInput, y: ArrayLike | None
    ) -> tuple[NDArray[np.floating[Any]], NDArray[np.floating[Any]]]:
        coefficients = self.solution.coefficients
        design = Design.build(X, y)
        return design.y, design.X @ coefficients

    def rmse(self, X: SampleInput, y: ArrayLike | None = None) -> float:
        """Root mean squared error on the given samples."""
        return _metrics.rmse(*self._actual_and_predicted(X, y))

    def mse(self, X: SampleInput, y: ArrayLike | None = None) -> float:
        """Mean squared error on the given samples."""
        return _metrics.mse(*self._actual_and_predicted(X, y))

    def mae(self, X: SampleInput, y: ArrayLike | None = None) -> float:
        """Mean absolute error on the given samples."""
        return _metrics.mae(*self._actual_and_predicted(X, y))

    def r_squared(self, X: SampleInput, y: ArrayLike | None = None) -> float:
        """
        R² on the given samples, about their own target mean.

        1.0 when all targets are equal.
        """
        return _metrics.r_squared(*self._actual_and_predicted(X, y))

    # === Cross-validation ===

    def cross_validate_report(
        self,
        X: SampleInput,
        y: ArrayLike | None = None,
        folds: int = 5,
    ) -> CrossValidationSolution:
        """
        Contiguous k-fold cross-validation with per-fold results.

        Each fold fits a fresh OLS model; this estimator's own state is
        not touched.
        """
        return cross_validate(X, y, folds=folds)

    def cross_validate(
        self,
        X: SampleInput,
        y: ArrayLike | None = None,
        folds: int = 5,
    ) -> float:
        """
        Mean held-out RMSE over contiguous folds.

        Folds whose training rows cannot be fitted are skipped. Returns nan
        if no fold could be fitted.

        Raises:
            InvalidFoldCountError: If folds exceeds the number of samples
        """
        return self.cross_validate_report(X, y, folds=folds).mean_rmse

    # === Display ===

    def equation(self, precision: int = 6) -> str:
        return self.solution.equation(precision)

    def summary(self) -> str:
        if self._solution is None:
            return "Model has not been trained yet."
        return self._solution.summary()

    def __repr__(self) -> str:
        if self._solution is None:
            return "LinearRegression(trained=False)"
        return f"LinearRegression(trained=True, ridge_lambda={self._solution.ridge_lambda:g})"
