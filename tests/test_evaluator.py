"""
Unit Tests for Model Evaluator and Temporal Validator Modules

Tests:
1. Regression metrics computation
2. Decile calibration table bounds and coverage
3. Calibration chart rendering
4. Per-month / per-carrier breakdowns
"""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import logging

import pytest
import numpy as np
import pandas as pd
from delaynet.models.evaluator import ModelEvaluator
from delaynet.validation.temporal_validation import TemporalValidator


@pytest.fixture
def evaluator():
    return ModelEvaluator()


@pytest.fixture
def scored_data():
    rng = np.random.default_rng(42)
    actual = rng.normal(5, 30, 1000)
    predicted = actual + rng.normal(0, 10, 1000)
    return actual, predicted


class TestRegressionMetrics:
    def test_regression_metrics_computed(self, evaluator, scored_data):
        """Should compute RMSE, MAE, R2 for regression."""
        actual, predicted = scored_data
        metrics = evaluator.evaluate_regression(actual, predicted)

        assert "rmse" in metrics
        assert "mae" in metrics
        assert "r2" in metrics

    def test_rmse_non_negative(self, evaluator, scored_data):
        """RMSE should always be non-negative."""
        actual, predicted = scored_data
        metrics = evaluator.evaluate_regression(actual, predicted)

        assert metrics["rmse"] >= 0
        assert metrics["mae"] >= 0

    def test_perfect_predictions(self, evaluator):
        y = np.array([1.0, 5.0, -3.0, 12.0])
        metrics = evaluator.evaluate_regression(y, y)

        assert metrics["rmse"] == pytest.approx(0.0)
        assert metrics["r2"] == pytest.approx(1.0)


class TestDecileCalibration:
    def test_ten_buckets(self, evaluator, scored_data):
        actual, predicted = scored_data
        table = evaluator.decile_calibration_table(actual, predicted)

        assert len(table) == 10
        assert list(table.columns) == ["bucket", "n", "mean_actual", "mean_predicted"]

    def test_every_record_in_one_bucket(self, evaluator, scored_data):
        actual, predicted = scored_data
        table = evaluator.decile_calibration_table(actual, predicted)

        assert table["n"].sum() == len(predicted)

    def test_buckets_ordered_by_prediction(self, evaluator, scored_data):
        """Bucket edges come from predictions, so mean_predicted increases."""
        actual, predicted = scored_data
        table = evaluator.decile_calibration_table(actual, predicted)

        assert table["mean_predicted"].is_monotonic_increasing

    def test_few_records_at_most_ten_rows(self, evaluator):
        table = evaluator.decile_calibration_table([1, 2, 3, 4, 5], [0.1, 0.2, 0.2, 0.3, 0.9])

        assert len(table) <= 10
        assert table["n"].sum() == 5

    def test_constant_predictions_single_bucket(self, evaluator):
        table = evaluator.decile_calibration_table([1.0, 2.0, 3.0], [4.0, 4.0, 4.0])

        assert len(table) == 1
        assert table.loc[0, "mean_actual"] == pytest.approx(2.0)

    def test_empty_raises(self, evaluator):
        with pytest.raises(ValueError):
            evaluator.decile_calibration_table([], [])

    def test_length_mismatch_raises(self, evaluator):
        with pytest.raises(ValueError, match="Length mismatch"):
            evaluator.decile_calibration_table([1.0, 2.0], [1.0])


class TestCalibrationPlot:
    def test_plot_saved(self, evaluator, scored_data, tmp_path):
        actual, predicted = scored_data
        table = evaluator.decile_calibration_table(actual, predicted)
        out = tmp_path / "calibration.png"

        fig = evaluator.plot_calibration(table, output_path=out)

        assert out.exists()
        assert len(fig.axes) == 1


class TestTemporalValidator:
    @pytest.fixture
    def scored_df(self):
        return pd.DataFrame(
            {
                "month": [11, 11, 12, 12, 12],
                "carrier": ["AA", "UA", "AA", "AA", "UA"],
                "arr_delay": [10.0, -5.0, 20.0, 0.0, 3.0],
                "predicted_arr_delay": [8.0, -5.0, 25.0, 2.0, 3.0],
            }
        )

    def test_evaluate_by_month(self, scored_df):
        result = TemporalValidator().evaluate_by_month(scored_df)

        assert result["month"].tolist() == [11, 12]
        assert result["n_flights"].tolist() == [2, 3]

    def test_evaluate_by_carrier(self, scored_df):
        result = TemporalValidator().evaluate_by_carrier(scored_df)

        assert result["carrier"].tolist() == ["AA", "UA"]
        assert result.loc[result["carrier"] == "UA", "rmse"].iloc[0] == pytest.approx(0.0)

    def test_log_level_applied(self):
        validator = TemporalValidator(log_level="WARNING")

        assert validator.logger.level == logging.WARNING
