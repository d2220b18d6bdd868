"""
Linear regression on the six hardware features.

Public API:
    fit(X, y, ridge_lambda=0.0) -> LinearSolution
    LinearRegression                 stateful estimator (fit, fit_ridge,
                                     predict, scores, cross_validate)
    cross_validate(X, y, folds=5) -> CrossValidationSolution
    evaluate(model, X, y) -> EvaluationSolution

Example:
    >>> from pylinreg.regression import LinearRegression
    >>> model = LinearRegression().fit(X_train, y_train)
    >>> print(model.equation())
    >>> print(model.rmse(X_test, y_test))
"""

from pylinreg.regression.design import Design
from pylinreg.regression.solution import (
    LinearParams,
    LinearSolution,
    FoldResult,
    CrossValidationParams,
    CrossValidationSolution,
)
from pylinreg.regression.solvers import fit
from pylinreg.regression._kfold import cross_validate, fold_bounds
from pylinreg.regression.estimator import LinearRegression
from pylinreg.regression.evaluation import (
    EvaluationParams,
    EvaluationSolution,
    evaluate,
)

__all__ = [
    "fit",
    "cross_validate",
    "fold_bounds",
    "evaluate",
    "LinearRegression",
    "Design",
    "LinearParams",
    "LinearSolution",
    "FoldResult",
    "CrossValidationParams",
    "CrossValidationSolution",
    "EvaluationParams",
    "EvaluationSolution",
]
