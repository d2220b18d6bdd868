"""
K-fold cross-validation.

Folds are contiguous blocks of rows in the order given; nothing is
shuffled here, so callers who want random folds shuffle first (for
example with DataSource.shuffled). Every fold has floor(n / k) rows except
the last, which also takes the remainder.

A fold whose training rows cannot be fitted is skipped: it is recorded on
its FoldResult, reported with a UserWarning, and left out of the mean.
"""

import operator
import warnings
from typing import Any
import numpy as np
from numpy.typing import ArrayLike

from pylinreg.core.exceptions import (
    EmptyDatasetError,
    InvalidFoldCountError,
    NumericalError,
)
from pylinreg.core.result import Result
from pylinreg.core.compute.timing import Timer
from pylinreg.regression import _metrics
from pylinreg.regression.design import Design, SampleInput
from pylinreg.regression.backends.cpu import NormalEquationBackend
from pylinreg.regression.solution import (
    CrossValidationParams,
    CrossValidationSolution,
    FoldResult,
)


def fold_bounds(n_samples: int, folds: int) -> list[tuple[int, int]]:
    """
    Half-open [start, stop) validation range of each fold.

    Raises:
        InvalidFoldCountError: If folds is not an integer, or folds < 1
            or folds > n_samples
    """
    try:
        folds = operator.index(folds)
    except TypeError as e:
        raise InvalidFoldCountError(
            f"Number of folds must be an integer, got {folds!r}",
            folds=folds,
            n_samples=n_samples,
        ) from e

    if folds < 1 or folds > n_samples:
        raise InvalidFoldCountError(
            f"Number of folds ({folds}) must be between 1 and the dataset size ({n_samples})",
            folds=folds,
            n_samples=n_samples,
        )

    fold_size = n_samples // folds
    bounds = []
    for index in range(folds):
        start = index * fold_size
        stop = n_samples if index == folds - 1 else start + fold_size
        bounds.append((start, stop))
    return bounds


def cross_validate(
    X: SampleInput,
    y: ArrayLike | None = None,
    *,
    folds: int = 5,
    ridge_lambda: float = 0.0,
) -> CrossValidationSolution:
    """
    Contiguous k-fold cross-validation of the normal-equation model.

    For each fold a fresh model is fitted on every other row and scored
    by RMSE on the held-out rows.

    Args:
        X: Feature table, Design, DataSource or iterable of Sample
        y: Target vector when X is a feature table
        folds: Number of folds k, 1 <= k <= n
        ridge_lambda: Ridge penalty for the per-fold fits (0 = OLS)

    Returns:
        CrossValidationSolution; mean_rmse is nan if no fold fitted

    Raises:
        InvalidFoldCountError: If folds is out of range for the data
    """
    try:
        design = Design.build(X, y)
    except EmptyDatasetError as e:
        raise InvalidFoldCountError(
            f"Number of folds ({folds}) cannot exceed the dataset size (0)",
            folds=folds,
            n_samples=0,
        ) from e

    n = design.n
    bounds = fold_bounds(n, folds)
    backend = NormalEquationBackend(ridge_lambda)

    timer = Timer()
    timer.start()

    fold_results: list[FoldResult] = []
    messages: list[str] = []

    with timer.section('folds'):
        for index, (start, stop) in enumerate(bounds):
            train_rows = np.r_[0:start, stop:n]
            try:
                fitted = backend.solve(design.subset(train_rows))
            except (EmptyDatasetError, NumericalError) as e:
                message = f"Fold {index + 1} skipped: training subset could not be fitted ({e})"
                warnings.warn(message)
                messages.append(message)
                fold_results.append(FoldResult(
                    index=index,
                    validation_start=start,
                    validation_stop=stop,
                    n_train=len(train_rows),
                    rmse=None,
                    error=str(e),
                ))
                continue

            predicted = design.X[start:stop] @ fitted.params.coefficients
            fold_results.append(FoldResult(
                index=index,
                validation_start=start,
                validation_stop=stop,
                n_train=len(train_rows),
                rmse=_metrics.rmse(design.y[start:stop], predicted),
            ))

    timer.stop()

    scores = [f.rmse for f in fold_results if f.rmse is not None]
    mean_rmse = float(np.mean(scores)) if scores else float('nan')

    info: dict[str, Any] = {
        'method': 'kfold',
        'folds': folds,
        'n': n,
        'lambda': backend.ridge_lambda,
    }

    return CrossValidationSolution(_result=Result(
        params=CrossValidationParams(folds=tuple(fold_results), mean_rmse=mean_rmse),
        info=info,
        timing=timer.result(),
        backend_name=backend.name,
        warnings=tuple(messages),
    ))
