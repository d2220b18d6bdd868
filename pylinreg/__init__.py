"""
pylinreg: normal-equation linear regression for CPU performance data.

Predicts published relative performance (PRP) of a machine from six
hardware features (MYCT, MMIN, MMAX, CACH, CHMIN, CHMAX) with a closed-form
least squares or ridge fit, built on a small dense Matrix type with
Gauss-Jordan inversion.

Submodules:
    core: Matrix, DataSource, exceptions, validation
    regression: LinearRegression estimator, fit(), cross-validation, evaluation
"""

__version__ = "0.1.0"

from pylinreg import core
from pylinreg import regression
from pylinreg.core.compute.linalg import Matrix
from pylinreg.core.datasource import DataSource
from pylinreg.core.features import Sample
from pylinreg.regression import LinearRegression, fit, cross_validate, evaluate

__all__ = [
    "__version__",
    "core",
    "regression",
    "Matrix",
    "DataSource",
    "Sample",
    "LinearRegression",
    "fit",
    "cross_validate",
    "evaluate",
]
