"""
Tests for held-out evaluation and the text report.
"""

import numpy as np
import pandas as pd
import pytest

from pylinreg import DataSource, LinearRegression, evaluate
from pylinreg.core.exceptions import EmptyDatasetError, ModelNotTrainedError


@pytest.fixture
def model(simple_regression_data):
    X, y, _ = simple_regression_data
    return LinearRegression().fit(X[:80], y[:80])


@pytest.fixture
def held_out(simple_regression_data):
    X, y, _ = simple_regression_data
    return X[80:], y[80:]


class TestEvaluate:

    def test_metrics_match_estimator(self, model, held_out):
        X, y = held_out
        report = evaluate(model, X, y)
        assert report.n == 20
        assert report.rmse == pytest.approx(model.rmse(X, y))
        assert report.mse == pytest.approx(model.mse(X, y))
        assert report.mae == pytest.approx(model.mae(X, y))
        assert report.r_squared == pytest.approx(model.r_squared(X, y))

    def test_per_sample_arrays(self, model, held_out):
        X, y = held_out
        report = evaluate(model, X, y)
        np.testing.assert_allclose(report.predictions, model.predict(X))
        np.testing.assert_array_equal(report.actuals, y)
        np.testing.assert_allclose(report.residuals, y - report.predictions)

    def test_residual_statistics(self, model, held_out):
        X, y = held_out
        report = evaluate(model, X, y)
        residuals = report.residuals
        assert report.residual_mean == pytest.approx(residuals.mean())
        assert report.residual_std == pytest.approx(residuals.std())
        assert report.residual_min == residuals.min()
        assert report.residual_max == residuals.max()

    def test_residual_distribution(self, model, held_out):
        X, y = held_out
        distribution = evaluate(model, X, y).residual_distribution()
        assert set(distribution) == {1, 2, 3}
        assert distribution[1] <= distribution[2] <= distribution[3] <= 20

    def test_accepts_datasource(self, model, held_out):
        X, y = held_out
        report = evaluate(model, DataSource.from_arrays(X=X, y=y))
        assert report.rmse == pytest.approx(model.rmse(X, y))

    def test_untrained(self, held_out):
        X, y = held_out
        with pytest.raises(ModelNotTrainedError):
            evaluate(LinearRegression(), X, y)

    def test_empty(self, model):
        with pytest.raises(EmptyDatasetError):
            evaluate(model, np.zeros((0, 6)), np.zeros(0))

    def test_timing_and_repr(self, model, held_out):
        X, y = held_out
        report = evaluate(model, X, y)
        assert 'predict' in report.timing
        assert repr(report).startswith("EvaluationSolution(n=20")


class TestComparison:

    def test_columns_and_length(self, model, held_out):
        X, y = held_out
        table = evaluate(model, X, y).comparison(5)
        assert isinstance(table, pd.DataFrame)
        assert list(table.columns) == ['actual', 'predicted', 'residual', 'percent_error']
        assert len(table) == 5

    def test_capped_at_n(self, model, held_out):
        X, y = held_out
        assert len(evaluate(model, X, y).comparison(100)) == 20

    def test_percent_error_nan_for_zero_actual(self, model, held_out):
        X, y = held_out
        y = y.copy()
        y[0] = 0.0
        table = evaluate(model, X, y).comparison(3)
        assert np.isnan(table['percent_error'].iloc[0])
        assert np.isfinite(table['percent_error'].iloc[1])


class TestReport:

    def test_summary_sections(self, model, held_out):
        X, y = held_out
        text = evaluate(model, X, y).summary(n_samples=4)
        assert "LINEAR REGRESSION EVALUATION" in text
        assert model.equation() in text
        assert "Root Mean Square Error (RMSE)" in text
        assert "Within 3 std dev" in text
        assert "Sample Predictions (First 4):" in text

    def test_write_report(self, model, held_out, tmp_path):
        X, y = held_out
        report = evaluate(model, X, y)
        path = report.write_report(tmp_path / "evaluation_report.txt")
        assert path.read_text(encoding='utf-8') == report.summary() + "\n"
