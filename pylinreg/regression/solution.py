"""
Regression solution types.

Contains the parameter payloads and user-facing solution wrappers for a
single fit and for k-fold cross-validation.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING
import numpy as np
from numpy.typing import NDArray

from pylinreg.core.result import Result
from pylinreg.core.features import FEATURE_NAMES, TARGET_NAME

if TYPE_CHECKING:
    from pylinreg.regression.design import Design


def format_equation(coefficients: NDArray[np.floating[Any]], precision: int = 6) -> str:
    """Render 'PRP = a*MYCT + b*MMIN - c*MMAX ...'."""
    terms = []
    for i, (coef, name) in enumerate(zip(coefficients, FEATURE_NAMES)):
        magnitude = f"{abs(coef):.{precision}f}*{name}"
        if i == 0:
            terms.append(magnitude if coef >= 0 else f"-{magnitude}")
        else:
            terms.append(f"{'+' if coef >= 0 else '-'} {magnitude}")
    return f"{TARGET_NAME} = " + " ".join(terms)


@dataclass(frozen=True)
class LinearParams:
    """
    Parameter payload for a normal-equation fit.

    This is the immutable data computed by backends. rmse is measured on
    the same samples the model was fitted to.
    """
    coefficients: NDArray[np.floating[Any]]
    fitted_values: NDArray[np.floating[Any]]
    residuals: NDArray[np.floating[Any]]
    rss: float
    tss: float
    rmse: float
    ridge_lambda: float


@dataclass
class LinearSolution:
    """
    User-facing regression results.

    Wraps the backend Result and provides accessors for the fitted
    coefficients and training diagnostics.
    """
    _result: Result[LinearParams]
    _design: 'Design'

    @property
    def coefficients(self) -> NDArray[np.floating[Any]]:
        return self._result.params.coefficients

    @property
    def fitted_values(self) -> NDArray[np.floating[Any]]:
        return self._result.params.fitted_values

    @property
    def residuals(self) -> NDArray[np.floating[Any]]:
        """Training residuals, y - fitted."""
        return self._result.params.residuals

    @property
    def rss(self) -> float:
        return self._result.params.rss

    @property
    def tss(self) -> float:
        return self._result.params.tss

    @property
    def rmse(self) -> float:
        """Training RMSE."""
        return self._result.params.rmse

    @property
    def mse(self) -> float:
        return self.rss / self._design.n

    @property
    def mae(self) -> float:
        return float(np.mean(np.abs(self.residuals)))

    @property
    def r_squared(self) -> float:
        # Constant targets: defined as a perfect fit
        if self.tss == 0:
            return 1.0
        return 1.0 - (self.rss / self.tss)

    @property
    def ridge_lambda(self) -> float:
        return self._result.params.ridge_lambda

    @property
    def n(self) -> int:
        return self._design.n

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def equation(self, precision: int = 6) -> str:
        return format_equation(self.coefficients, precision)

    def summary(self) -> str:
        """Generate a plain-text fit summary."""
        method = "Ridge" if self.ridge_lambda > 0 else "Normal Equation"
        lines = [
            f"Linear Regression Results ({method})",
            "=" * 60,
            f"Observations: {self._design.n}",
            f"Features: {self._design.p}",
        ]
        if self.ridge_lambda > 0:
            lines.append(f"Lambda: {self.ridge_lambda:g}")
        lines += [
            f"Training RMSE: {self.rmse:.4f}",
            f"R-squared: {self.r_squared:.6f}",
            "",
            "Coefficients:",
            "-" * 60,
        ]
        for name, coef in zip(FEATURE_NAMES, self.coefficients):
            lines.append(f"  {name:<8} {coef:14.6f}")
        lines += [
            "-" * 60,
            self.equation(),
            f"Backend: {self.backend_name}",
        ]
        if self.timing:
            lines.append(f"Time: {self.timing.get('total_seconds', 0):.4f}s")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"LinearSolution(n={self._design.n}, p={self._design.p}, "
            f"ridge_lambda={self.ridge_lambda:g}, rmse={self.rmse:.4f})"
        )


@dataclass(frozen=True)
class FoldResult:
    """
    Outcome of one cross-validation fold.

    Attributes:
        index: Fold number, 0-based
        validation_start: First held-out row
        validation_stop: One past the last held-out row
        n_train: Number of training rows
        rmse: Held-out RMSE, or None if the training subset could not be fitted
        error: Why fitting failed, or None on success
    """
    index: int
    validation_start: int
    validation_stop: int
    n_train: int
    rmse: float | None
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.rmse is not None

    @property
    def n_validation(self) -> int:
        return self.validation_stop - self.validation_start


@dataclass(frozen=True)
class CrossValidationParams:
    """Parameter payload for k-fold cross-validation."""
    folds: tuple[FoldResult, ...]
    mean_rmse: float


@dataclass
class CrossValidationSolution:
    """
    User-facing cross-validation results.

    mean_rmse averages only the folds that fitted; it is nan when none did.
    """
    _result: Result[CrossValidationParams]

    @property
    def mean_rmse(self) -> float:
        return self._result.params.mean_rmse

    @property
    def folds(self) -> tuple[FoldResult, ...]:
        return self._result.params.folds

    @property
    def n_folds(self) -> int:
        return len(self.folds)

    @property
    def n_succeeded(self) -> int:
        return sum(1 for f in self.folds if f.succeeded)

    @property
    def succeeded(self) -> bool:
        """True if at least one fold produced a score."""
        return self.n_succeeded > 0

    @property
    def fold_rmses(self) -> NDArray[np.floating[Any]]:
        """RMSE of each successful fold, in fold order."""
        return np.array([f.rmse for f in self.folds if f.succeeded], dtype=np.float64)

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def summary(self) -> str:
        lines = [f"Cross-validation results ({self.n_folds} folds):"]
        for fold in self.folds:
            if fold.succeeded:
                lines.append(f"  Fold {fold.index + 1} RMSE: {fold.rmse:.4f}")
            else:
                lines.append(f"  Fold {fold.index + 1} skipped: {fold.error}")
        if self.succeeded:
            lines.append(f"  Average RMSE: {self.mean_rmse:.4f}")
        else:
            lines.append("  Average RMSE: n/a (no fold could be fitted)")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"CrossValidationSolution(folds={self.n_folds}, "
            f"succeeded={self.n_succeeded}, mean_rmse={self.mean_rmse:.4f})"
        )
