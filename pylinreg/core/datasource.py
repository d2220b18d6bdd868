"""
DataSource for pylinreg.

DataSource is the "I have data" abstraction: a feature table X (n x 6),
a target vector y (n,), and optional per-row labels (vendor, model, ERP).
It loads, shuffles, subsets and splits data. It does not fit anything.

Usage:
    from pylinreg import DataSource

    ds = DataSource.from_file("machine.data")
    ds = DataSource.from_arrays(X=X, y=y)
    ds = DataSource.from_dataframe(df)

    train, test = ds.split(0.8, seed=0)
    X, y = train['X'], train['y']
"""

from __future__ import annotations

import warnings
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Sequence, TYPE_CHECKING
import numpy as np
from numpy.typing import NDArray

from pylinreg.core.exceptions import ValidationError, EmptyDatasetError
from pylinreg.core.features import (
    FEATURE_NAMES,
    TARGET_NAME,
    N_FEATURES,
    FILE_COLUMNS,
    LABEL_COLUMNS,
    Sample,
)
from pylinreg.core.validation import (
    check_array,
    check_1d,
    check_2d,
    check_n_features,
    check_consistent_length,
)

if TYPE_CHECKING:
    import pandas as pd


_FILE_SUFFIXES = ('.csv', '.data', '.txt')

# Optional per-row columns carried alongside X and y
_EXTRA_COLUMNS = (*LABEL_COLUMNS, 'ERP')


@dataclass
class DataSource:
    """
    Feature table plus targets, with optional row labels.

    Construct via factory classmethods, not directly. Every array stored
    has the same first dimension; row i of every array describes the
    same machine.
    """
    _data: dict[str, Any]
    _metadata: dict[str, Any] = field(default_factory=dict)

    # === Array Access ===

    def keys(self) -> frozenset[str]:
        """
        Return the names of all available arrays.

        Example:
            >>> ds = DataSource.from_arrays(X=X, y=y)
            >>> ds.keys()
            frozenset({'X', 'y'})
        """
        return frozenset(self._data.keys())

    def __getitem__(self, key: str) -> Any:
        """
        Access a named array.

        Raises:
            KeyError: If key not found, with helpful message listing available keys
        """
        if key not in self._data:
            available = self.keys()
            raise KeyError(
                f"DataSource has no array '{key}'. Available: {available}"
            )
        return self._data[key]

    def __contains__(self, key: str) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return self.n_observations

    # === Properties ===

    @property
    def X(self) -> NDArray[np.floating[Any]]:
        """Feature table (n x 6)."""
        return self._data['X']

    @property
    def y(self) -> NDArray[np.floating[Any]]:
        """Target vector (n,)."""
        return self._data['y']

    @property
    def n_observations(self) -> int:
        """Number of rows."""
        return int(self._data['X'].shape[0])

    @property
    def metadata(self) -> dict[str, Any]:
        return self._metadata.copy()

    def samples(self) -> list[Sample]:
        """Rows as Sample records, in order."""
        return [
            Sample(features=tuple(float(v) for v in row), target=float(target))
            for row, target in zip(self.X, self.y)
        ]

    # === Factory Methods ===

    @classmethod
    def from_arrays(
        cls,
        *,
        X: NDArray,
        y: NDArray,
        **named_arrays: NDArray,
    ) -> DataSource:
        """
        Construct from a feature table and target vector.

        Extra keyword arrays (vendor, model, ERP, ...) are stored as-is and
        must have one entry per row.
        """
        X_arr = check_array(X, 'X')
        if X_arr.ndim == 1 and X_arr.size == 0:
            X_arr = X_arr.reshape(0, N_FEATURES)
        check_2d(X_arr, 'X')
        check_n_features(X_arr, N_FEATURES, 'X')

        y_arr = check_array(y, 'y')
        if y_arr.ndim == 2 and y_arr.shape[1] == 1:
            y_arr = y_arr.ravel()
        check_1d(y_arr, 'y')
        check_consistent_length(X_arr, y_arr, names=('X', 'y'))

        storage: dict[str, Any] = {'X': X_arr, 'y': y_arr}
        for name, arr in named_arrays.items():
            arr = np.asarray(arr)
            check_consistent_length(X_arr, arr, names=('X', name))
            storage[name] = arr

        return cls(
            _data=storage,
            _metadata={'n_observations': X_arr.shape[0], 'source': 'arrays'},
        )

    @classmethod
    def from_samples(cls, samples: Iterable[Sample]) -> DataSource:
        """Construct from Sample records."""
        samples = list(samples)
        if samples:
            X = check_array([s.features for s in samples], 'samples')
        else:
            X = np.empty((0, N_FEATURES))
        y = np.array([s.target for s in samples], dtype=np.float64)
        ds = cls.from_arrays(X=X, y=y)
        ds._metadata['source'] = 'samples'
        return ds

    @classmethod
    def from_dataframe(cls, df: 'pd.DataFrame', *, source_path: str | None = None) -> DataSource:
        """
        Construct from a pandas DataFrame with MYCT..CHMAX and PRP columns.

        vendor, model and ERP columns are carried along when present.
        """
        required = [*FEATURE_NAMES, TARGET_NAME]
        missing = [c for c in required if c not in df.columns]
        if missing:
            raise ValidationError(
                f"DataFrame is missing columns {missing}. Available: {list(df.columns)}"
            )

        extras = {
            name: df[name].to_numpy()
            for name in _EXTRA_COLUMNS
            if name in df.columns
        }
        ds = cls.from_arrays(
            X=df[list(FEATURE_NAMES)].to_numpy(dtype=np.float64),
            y=df[TARGET_NAME].to_numpy(dtype=np.float64),
            **extras,
        )
        ds._metadata['source'] = 'dataframe'
        if source_path:
            ds._metadata['source_path'] = source_path
        return ds

    @classmethod
    def from_file(cls, path: str | Path) -> DataSource:
        """
        Load the machine data file.

        The file has no header and ten comma-separated columns:
        vendor, model, MYCT, MMIN, MMAX, CACH, CHMIN, CHMAX, PRP, ERP.
        Blank lines are ignored. Records with the wrong number of columns
        or non-numeric values are skipped with a UserWarning.

        Raises:
            ValidationError: If the file suffix is not recognized
            EmptyDatasetError: If no valid records were read
        """
        import pandas as pd

        path = Path(path)
        suffix = path.suffix.lower()
        if suffix not in _FILE_SUFFIXES:
            raise ValidationError(f"Unknown file format: {suffix}")

        def _skip_bad_line(fields: list[str]) -> None:
            warnings.warn(
                f"{path.name}: skipping record with {len(fields)} columns "
                f"instead of {len(FILE_COLUMNS)}: {','.join(fields)}"
            )
            return None

        try:
            raw = pd.read_csv(
                path,
                header=None,
                names=list(FILE_COLUMNS),
                dtype=str,
                skip_blank_lines=True,
                skipinitialspace=True,
                engine='python',
                on_bad_lines=_skip_bad_line,
            )
        except pd.errors.EmptyDataError as e:
            raise EmptyDatasetError(f"{path}: no valid records") from e

        raw = raw.apply(lambda col: col.str.strip())

        numeric_columns = [c for c in FILE_COLUMNS if c not in LABEL_COLUMNS]
        numeric = raw[numeric_columns].apply(pd.to_numeric, errors='coerce')
        bad = numeric.isna().any(axis=1).to_numpy()
        for position in np.flatnonzero(bad):
            warnings.warn(
                f"{path.name}: skipping record {position + 1}: "
                f"missing or non-numeric values"
            )

        df = pd.concat([raw[list(LABEL_COLUMNS)], numeric], axis=1).loc[~bad].reset_index(drop=True)

        if df.empty:
            raise EmptyDatasetError(f"{path}: no valid records")

        return cls.from_dataframe(df, source_path=str(path))

    # === Row selection ===

    def subset(self, indices: Sequence[int] | NDArray) -> DataSource:
        """New DataSource holding the given rows, in the given order."""
        idx = np.asarray(indices, dtype=np.intp)
        storage = {name: arr[idx] for name, arr in self._data.items()}
        metadata = self._metadata.copy()
        metadata['n_observations'] = int(idx.shape[0])
        return DataSource(_data=storage, _metadata=metadata)

    def shuffled(self, seed: int | np.random.Generator | None = None) -> DataSource:
        """New DataSource with rows randomly permuted."""
        rng = np.random.default_rng(seed)
        return self.subset(rng.permutation(self.n_observations))

    def split(
        self,
        train_ratio: float,
        *,
        shuffle: bool = True,
        seed: int | np.random.Generator | None = None,
    ) -> tuple[DataSource, DataSource]:
        """
        Split into (train, test).

        The first floor(n * train_ratio) rows (after an optional shuffle)
        form the training set; the rest form the test set.

        Raises:
            ValidationError: If train_ratio is outside [0, 1]
        """
        if not 0.0 <= train_ratio <= 1.0:
            raise ValidationError(
                f"train_ratio: must be between 0 and 1, got {train_ratio}"
            )
        source = self.shuffled(seed) if shuffle else self
        n_train = int(source.n_observations * train_ratio)
        indices = np.arange(source.n_observations)
        return source.subset(indices[:n_train]), source.subset(indices[n_train:])

    # === Statistics ===

    def describe(self) -> 'pd.DataFrame':
        """
        Min, Max, Mean and Std for each feature and the target.

        Std is the population standard deviation (divides by n).

        Raises:
            EmptyDatasetError: If there are no rows
        """
        import pandas as pd

        if self.n_observations == 0:
            raise EmptyDatasetError("Cannot describe an empty dataset")

        table = np.column_stack([self.X, self.y])
        return pd.DataFrame(
            {
                'Min': table.min(axis=0),
                'Max': table.max(axis=0),
                'Mean': table.mean(axis=0),
                'Std': table.std(axis=0),
            },
            index=[*FEATURE_NAMES, TARGET_NAME],
        )

    def head(self, n: int = 5) -> 'pd.DataFrame':
        """
        First n rows as a table.

        Columns are vendor and model (when the source carried them), the
        six features and the target. Fewer rows are returned if the
        dataset is shorter than n.

        Raises:
            ValidationError: If n is negative
        """
        import pandas as pd

        if n < 0:
            raise ValidationError(f"n: must be >= 0, got {n}")
        k = min(n, self.n_observations)

        columns: dict[str, Any] = {
            name: self._data[name][:k] for name in LABEL_COLUMNS if name in self._data
        }
        for j, name in enumerate(FEATURE_NAMES):
            columns[name] = self.X[:k, j]
        columns[TARGET_NAME] = self.y[:k]
        return pd.DataFrame(columns)

    def __repr__(self) -> str:
        return f"DataSource(n={self.n_observations}, keys={sorted(self.keys())})"
