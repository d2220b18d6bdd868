"""
Model evaluation on held-out data.

evaluate() runs a trained LinearRegression over a test set once and
collects everything a report needs: the error metrics, per-sample
predictions and residuals, and residual statistics.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, TYPE_CHECKING
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pylinreg.core.result import Result
from pylinreg.core.compute.timing import Timer
from pylinreg.regression import _metrics
from pylinreg.regression.design import Design, SampleInput

if TYPE_CHECKING:
    import pandas as pd
    from pylinreg.regression.estimator import LinearRegression


@dataclass(frozen=True)
class EvaluationParams:
    """Metrics and per-sample arrays for one evaluation run."""
    rmse: float
    mse: float
    mae: float
    r_squared: float
    mape: float
    predictions: NDArray[np.floating[Any]]
    actuals: NDArray[np.floating[Any]]
    residuals: NDArray[np.floating[Any]]


@dataclass
class EvaluationSolution:
    """
    User-facing evaluation results.

    Residuals are actual - predicted. Residual standard deviation is the
    population value (divides by n).
    """
    _result: Result[EvaluationParams]
    _equation: str

    @property
    def rmse(self) -> float:
        return self._result.params.rmse

    @property
    def mse(self) -> float:
        return self._result.params.mse

    @property
    def mae(self) -> float:
        return self._result.params.mae

    @property
    def r_squared(self) -> float:
        return self._result.params.r_squared

    @property
    def mape(self) -> float:
        """Mean absolute percentage error in percent; zero targets skipped."""
        return self._result.params.mape

    @property
    def predictions(self) -> NDArray[np.floating[Any]]:
        return self._result.params.predictions

    @property
    def actuals(self) -> NDArray[np.floating[Any]]:
        return self._result.params.actuals

    @property
    def residuals(self) -> NDArray[np.floating[Any]]:
        return self._result.params.residuals

    @property
    def n(self) -> int:
        return int(self.actuals.shape[0])

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    # --- Residual analysis ---

    @property
    def residual_mean(self) -> float:
        return float(np.mean(self.residuals))

    @property
    def residual_std(self) -> float:
        return float(np.std(self.residuals))

    @property
    def residual_min(self) -> float:
        return float(np.min(self.residuals))

    @property
    def residual_max(self) -> float:
        return float(np.max(self.residuals))

    def residual_distribution(self) -> dict[int, int]:
        """
        Number of residuals within k standard deviations of zero.

        Returns:
            {1: count, 2: count, 3: count}
        """
        magnitude = np.abs(self.residuals)
        std = self.residual_std
        return {k: int(np.sum(magnitude <= k * std)) for k in (1, 2, 3)}

    def comparison(self, n: int = 10) -> 'pd.DataFrame':
        """
        First n samples as a table of actual, predicted, residual and
        percent error. Percent error is nan where the actual value is 0.
        """
        import pandas as pd

        k = min(n, self.n)
        actual = self.actuals[:k]
        residual = self.residuals[:k]
        with np.errstate(divide='ignore', invalid='ignore'):
            percent = np.where(actual != 0, np.abs(residual) / np.abs(actual) * 100.0, np.nan)
        return pd.DataFrame({
            'actual': actual,
            'predicted': self.predictions[:k],
            'residual': residual,
            'percent_error': percent,
        })

    # --- Reporting ---

    def summary(self, n_samples: int = 10) -> str:
        """Full text report: equation, metrics, residuals, sample predictions."""
        lines = [
            "=" * 37,
            "    LINEAR REGRESSION EVALUATION",
            "=" * 37,
            "",
            "Model Equation:",
            self._equation,
            "",
            "Performance Metrics:",
            "-" * 19,
            f"Root Mean Square Error (RMSE):  {self.rmse:.4f}",
            f"Mean Square Error (MSE):        {self.mse:.4f}",
            f"Mean Absolute Error (MAE):      {self.mae:.4f}",
            f"R-squared (R²):                 {self.r_squared:.4f}",
            f"Mean Absolute Percentage Error: {self.mape:.4f}%",
            f"Number of test samples:         {self.n}",
            "",
            "Residual Analysis:",
            "-" * 18,
            f"Mean residual:     {self.residual_mean:.4f}",
            f"Std residual:      {self.residual_std:.4f}",
            f"Min residual:      {self.residual_min:.4f}",
            f"Max residual:      {self.residual_max:.4f}",
            "",
        ]

        distribution = self.residual_distribution()
        for k, count in distribution.items():
            lines.append(
                f"Within {k} std dev:  {count:6d} ({count / self.n * 100:5.1f}%)"
            )

        table = self.comparison(n_samples)
        lines += [
            "",
            f"Sample Predictions (First {len(table)}):",
            "-" * 29,
            f"{'Actual':>10}{'Predicted':>12}{'Residual':>12}{'% Error':>12}",
            "-" * 46,
        ]
        for row in table.itertuples(index=False):
            lines.append(
                f"{row.actual:10.2f}{row.predicted:12.2f}"
                f"{row.residual:12.2f}{row.percent_error:11.2f}%"
            )
        return "\n".join(lines)

    def write_report(self, path: str | Path, n_samples: int = 10) -> Path:
        """Write summary() to a text file and return its path."""
        path = Path(path)
        path.write_text(self.summary(n_samples) + "\n", encoding='utf-8')
        return path

    def __repr__(self) -> str:
        return (
            f"EvaluationSolution(n={self.n}, rmse={self.rmse:.4f}, "
            f"r_squared={self.r_squared:.4f})"
        )


def evaluate(
    model: 'LinearRegression',
    X: SampleInput,
    y: ArrayLike | None = None,
) -> EvaluationSolution:
    """
    Evaluate a trained model on a test set.

    Args:
        model: A trained LinearRegression
        X: Feature table, Design, DataSource or list of Sample
        y: Target vector when X is a feature table

    Returns:
        EvaluationSolution with metrics, residuals and report helpers

    Raises:
        ModelNotTrainedError: If the model is untrained
        EmptyDatasetError: If the test set is empty
    """
    solution = model.solution
    design = Design.build(X, y)

    timer = Timer()
    timer.start()

    with timer.section('predict'):
        predictions = model.predict(design)

    with timer.section('metrics'):
        actuals = design.y
        params = EvaluationParams(
            rmse=_metrics.rmse(actuals, predictions),
            mse=_metrics.mse(actuals, predictions),
            mae=_metrics.mae(actuals, predictions),
            r_squared=_metrics.r_squared(actuals, predictions),
            mape=_metrics.mape(actuals, predictions),
            predictions=predictions,
            actuals=actuals.copy(),
            residuals=_metrics.residuals(actuals, predictions),
        )

    timer.stop()

    result = Result(
        params=params,
        info={'method': 'holdout', 'n': design.n},
        timing=timer.result(),
        backend_name=solution.backend_name,
    )
    return EvaluationSolution(_result=result, _equation=solution.equation())
