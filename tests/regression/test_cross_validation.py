"""
Tests for contiguous k-fold cross-validation.
"""

import warnings

import numpy as np
import pytest

from pylinreg import DataSource, LinearRegression
from pylinreg.core.exceptions import InvalidFoldCountError
from pylinreg.regression import cross_validate, fit, fold_bounds
from pylinreg.regression._metrics import rmse


@pytest.fixture
def fold_one_singular(ten_samples):
    """
    CHMAX is non-zero only in rows 0 and 1, so the training rows of the
    first fold (rows 2-9) have an all-zero column and X'X is singular.
    """
    X, y = ten_samples
    X = X.copy()
    X[2:, 5] = 0.0
    return X, y


class TestFoldBounds:

    def test_even_split(self):
        assert fold_bounds(10, 5) == [(0, 2), (2, 4), (4, 6), (6, 8), (8, 10)]

    def test_last_fold_takes_remainder(self):
        bounds = fold_bounds(11, 5)
        assert bounds[-1] == (8, 11)
        assert [stop - start for start, stop in bounds] == [2, 2, 2, 2, 3]

    def test_single_fold(self):
        assert fold_bounds(4, 1) == [(0, 4)]

    def test_leave_one_out(self):
        assert fold_bounds(3, 3) == [(0, 1), (1, 2), (2, 3)]

    @pytest.mark.parametrize("folds", [2.0, "5", None])
    def test_non_integer(self, folds):
        with pytest.raises(InvalidFoldCountError, match="integer"):
            fold_bounds(10, folds)

    def test_numpy_integer(self):
        assert fold_bounds(4, np.int64(2)) == [(0, 2), (2, 4)]

    @pytest.mark.parametrize("folds", [0, -1, 11])
    def test_invalid(self, folds):
        with pytest.raises(InvalidFoldCountError) as excinfo:
            fold_bounds(10, folds)
        assert excinfo.value.folds == folds
        assert excinfo.value.n_samples == 10


class TestCrossValidate:

    def test_mean_of_fold_rmses(self, ten_samples):
        X, y = ten_samples
        report = cross_validate(X, y, folds=5)

        expected = []
        for start, stop in fold_bounds(10, 5):
            train = np.r_[0:start, stop:10]
            coefs = fit(X[train], y[train]).coefficients
            expected.append(rmse(y[start:stop], X[start:stop] @ coefs))

        np.testing.assert_allclose(report.fold_rmses, expected)
        assert report.mean_rmse == pytest.approx(np.mean(expected))
        assert report.n_folds == 5
        assert report.n_succeeded == 5
        assert report.warnings == ()

    def test_fold_records(self, ten_samples):
        X, y = ten_samples
        folds = cross_validate(X, y, folds=3).folds
        assert [(f.validation_start, f.validation_stop) for f in folds] == [(0, 3), (3, 6), (6, 10)]
        assert [f.n_train for f in folds] == [7, 7, 6]
        assert [f.n_validation for f in folds] == [3, 3, 4]
        assert all(f.succeeded and f.error is None for f in folds)

    def test_info(self, ten_samples):
        X, y = ten_samples
        report = cross_validate(X, y, folds=2)
        assert report.info['method'] == 'kfold'
        assert report.info['folds'] == 2
        assert report.info['n'] == 10
        assert 'folds' in report.timing

    def test_does_not_shuffle(self, ten_samples):
        X, y = ten_samples
        first = cross_validate(X, y, folds=5).mean_rmse
        second = cross_validate(X, y, folds=5).mean_rmse
        assert first == second

    def test_singular_fold_skipped(self, fold_one_singular):
        X, y = fold_one_singular
        with pytest.warns(UserWarning, match="Fold 1 skipped") as record:
            report = cross_validate(X, y, folds=5)
        assert len(record) == 1

        assert report.n_succeeded == 4
        assert not report.folds[0].succeeded
        assert report.folds[0].rmse is None
        assert "singular" in report.folds[0].error
        assert report.mean_rmse == pytest.approx(np.mean(report.fold_rmses))
        assert report.fold_rmses.shape == (4,)
        assert len(report.warnings) == 1
        assert "Fold 1 skipped" in report.summary()

    def test_all_folds_fail_gives_nan(self, ten_samples):
        X, y = ten_samples
        X = X.copy()
        X[:, 3] = 0.0
        with pytest.warns(UserWarning, match="skipped") as record:
            report = cross_validate(X, y, folds=5)
        assert len(record) == 5
        assert np.isnan(report.mean_rmse)
        assert not report.succeeded
        assert "n/a" in report.summary()

    def test_single_fold_has_no_training_rows(self, ten_samples):
        X, y = ten_samples
        with pytest.warns(UserWarning, match="Fold 1 skipped") as record:
            report = cross_validate(X, y, folds=1)
        assert len(record) == 1
        assert np.isnan(report.mean_rmse)

    def test_float_folds(self, ten_samples):
        X, y = ten_samples
        with pytest.raises(InvalidFoldCountError):
            cross_validate(X, y, folds=2.0)

    def test_too_many_folds(self, ten_samples):
        X, y = ten_samples
        with pytest.raises(InvalidFoldCountError):
            cross_validate(X, y, folds=11)

    def test_empty_dataset(self):
        with pytest.raises(InvalidFoldCountError) as excinfo:
            cross_validate(np.zeros((0, 6)), np.zeros(0), folds=5)
        assert excinfo.value.n_samples == 0

    def test_ridge_folds(self, fold_one_singular):
        X, y = fold_one_singular
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            report = cross_validate(X, y, folds=5, ridge_lambda=0.5)
        assert caught == []
        assert report.n_succeeded == 5
        assert report.info['lambda'] == 0.5

    def test_accepts_datasource(self, ten_samples):
        X, y = ten_samples
        ds = DataSource.from_arrays(X=X, y=y)
        assert cross_validate(ds, folds=5).mean_rmse == cross_validate(X, y, folds=5).mean_rmse


class TestEstimatorCrossValidate:

    def test_returns_float(self, ten_samples):
        X, y = ten_samples
        score = LinearRegression().cross_validate(X, y, folds=5)
        assert isinstance(score, float)
        assert score == cross_validate(X, y, folds=5).mean_rmse

    def test_does_not_train_estimator(self, ten_samples):
        X, y = ten_samples
        model = LinearRegression()
        model.cross_validate(X, y)
        assert not model.is_trained

    def test_report(self, ten_samples):
        X, y = ten_samples
        report = LinearRegression().cross_validate_report(X, y, folds=2)
        assert report.n_folds == 2
