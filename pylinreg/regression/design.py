"""
Regression Design.

Design holds the validated feature table X (n x 6) and target vector y
(n,). It is the single place where regression inputs are checked, and it
hands the backend X and y as Matrix objects: one row per sample, one
column per feature in FEATURE_NAMES order, and y as an n x 1 column.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Any, Union
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pylinreg.core.datasource import DataSource
from pylinreg.core.features import N_FEATURES, Sample
from pylinreg.core.compute.linalg import Matrix
from pylinreg.core.validation import (
    check_array,
    check_finite,
    check_2d,
    check_1d,
    check_consistent_length,
    check_n_features,
    check_not_empty,
)

# Anything Design.build() knows how to turn into X and y
SampleInput = Union['Design', DataSource, Iterable[Sample], ArrayLike]


@dataclass(frozen=True)
class Design:
    """
    Regression design specification.

    Immutable after construction.

    Construction:
        Design.from_arrays(X, y)
        Design.from_datasource(ds)
        Design.from_samples([Sample(...), ...])
        Design.build(anything_above)
    """
    _X: NDArray[np.floating[Any]]
    _y: NDArray[np.floating[Any]]
    _n: int
    _p: int

    @classmethod
    def from_arrays(cls, X: ArrayLike, y: ArrayLike) -> Design:
        """Build Design directly from arrays."""
        return cls._build(check_array(X, 'X'), check_array(y, 'y'))

    @classmethod
    def from_datasource(cls, source: DataSource) -> Design:
        """Build Design from a DataSource's X and y."""
        return cls._build(source['X'], source['y'])

    @classmethod
    def from_samples(cls, samples: Iterable[Sample]) -> Design:
        """Build Design from Sample records."""
        return cls.from_datasource(DataSource.from_samples(samples))

    @classmethod
    def build(cls, X: SampleInput, y: ArrayLike | None = None) -> Design:
        """
        Dispatch to the matching from_* constructor.

        Args:
            X: A Design, DataSource, iterable of Sample, or feature table
            y: Target vector; required only when X is a feature table

        Raises:
            ValueError: If X is a feature table and y is missing
        """
        if isinstance(X, Design):
            return X
        if isinstance(X, DataSource):
            return cls.from_datasource(X)
        if y is None:
            # Generators of Sample are consumed once, here
            if isinstance(X, Iterator):
                X = list(X)
            if isinstance(X, (list, tuple)) and all(isinstance(s, Sample) for s in X):
                return cls.from_samples(X)
            raise ValueError("y required when X is a feature table")
        return cls.from_arrays(X, y)

    @classmethod
    def _build(cls, X: NDArray, y: NDArray) -> Design:
        """Internal builder with validation."""
        if X.ndim == 1 and X.size == 0:
            X = X.reshape(0, N_FEATURES)
        if y.ndim == 2 and y.shape[1] == 1:
            y = y.ravel()

        check_2d(X, 'X')
        check_1d(y, 'y')
        check_n_features(X, N_FEATURES, 'X')
        check_consistent_length(X, y, names=('X', 'y'))
        check_not_empty(X, 'X')
        check_finite(X, 'X')
        check_finite(y, 'y')

        n, p = X.shape
        return cls(_X=X, _y=y, _n=n, _p=p)

    # === Properties ===

    @property
    def X(self) -> NDArray[np.floating[Any]]:
        """Feature table (n x 6)."""
        return self._X

    @property
    def y(self) -> NDArray[np.floating[Any]]:
        """Target vector (n,)."""
        return self._y

    @property
    def n(self) -> int:
        """Number of observations."""
        return self._n

    @property
    def p(self) -> int:
        """Number of features."""
        return self._p

    def design_matrix(self) -> Matrix:
        """X as a Matrix (n x 6)."""
        return Matrix.from_array(self._X)

    def target_column(self) -> Matrix:
        """y as an n x 1 Matrix."""
        return Matrix.from_array(self._y.reshape(-1, 1))

    def subset(self, indices: NDArray) -> Design:
        """Design restricted to the given rows."""
        idx = np.asarray(indices, dtype=np.intp)
        return Design._build(self._X[idx], self._y[idx])

    def __repr__(self) -> str:
        return f"Design(n={self._n}, p={self._p})"
