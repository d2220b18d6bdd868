"""
CPU backend for linear regression.

Solves the normal equations with the package's own dense Matrix:

    θ = (XᵗX + λI)⁻¹ Xᵗy

λ = 0 gives ordinary least squares. The 6x6 system is inverted by
Gauss-Jordan elimination with partial pivoting; a singular XᵗX (collinear
features, fewer than six independent samples) raises SingularMatrixError.
Adding λI to the diagonal makes that failure far less likely, which is the
reason to offer the ridge variant.
"""

from typing import Any
import numpy as np

from pylinreg.core.result import Result
from pylinreg.core.compute.timing import Timer
from pylinreg.core.compute.linalg import Matrix
from pylinreg.core.validation import check_non_negative_scalar
from pylinreg.regression.design import Design
from pylinreg.regression.solution import LinearParams


class NormalEquationBackend:
    """
    CPU backend using the (optionally ridge-penalized) normal equation.

    Implements the Backend protocol for Design -> LinearParams.

    Args:
        ridge_lambda: L2 penalty λ >= 0 added to the diagonal of XᵗX
    """

    def __init__(self, ridge_lambda: float = 0.0):
        self._ridge_lambda = check_non_negative_scalar(ridge_lambda, 'ridge_lambda')

    @property
    def name(self) -> str:
        return 'cpu_ridge' if self._ridge_lambda > 0 else 'cpu_normal_equation'

    @property
    def ridge_lambda(self) -> float:
        return self._ridge_lambda

    def solve(self, design: Design) -> Result[LinearParams]:
        """
        Solve for the coefficient vector.

        Algorithm:
            1. Build X (n x 6) and y (n x 1) as Matrix
            2. Form XᵗX (+ λI) and Xᵗy
            3. Invert the 6x6 normal matrix, multiply by Xᵗy
            4. Compute fitted values, residuals and training RMSE

        Raises:
            SingularMatrixError: If the normal matrix cannot be inverted
        """
        timer = Timer()
        timer.start()

        with timer.section('design'):
            X = design.design_matrix()
            y = design.target_column()

        with timer.section('normal_matrix'):
            Xt = X.transpose()
            normal = Xt * X
            if self._ridge_lambda > 0:
                normal = normal + Matrix.identity(normal.rows) * self._ridge_lambda
            Xty = Xt * y

        with timer.section('inverse'):
            normal_inv = normal.inverse(name="X'X + lambda*I" if self._ridge_lambda > 0 else "X'X")

        with timer.section('solve'):
            theta = normal_inv * Xty
            coefficients = theta.to_numpy().ravel()

        # === Training diagnostics ===
        with timer.section('statistics'):
            fitted_values = design.X @ coefficients
            residuals = design.y - fitted_values
            rss = float(residuals @ residuals)
            tss = float(np.sum((design.y - np.mean(design.y)) ** 2))
            rmse = float(np.sqrt(rss / design.n))

        timer.stop()

        params = LinearParams(
            coefficients=coefficients,
            fitted_values=fitted_values,
            residuals=residuals,
            rss=rss,
            tss=tss,
            rmse=rmse,
            ridge_lambda=self._ridge_lambda,
        )

        info: dict[str, Any] = {
            'method': 'ridge' if self._ridge_lambda > 0 else 'normal_equation',
            'lambda': self._ridge_lambda,
            'n': design.n,
            'p': design.p,
        }

        return Result(
            params=params,
            info=info,
            timing=timer.result(),
            backend_name=self.name,
            warnings=(),
        )
