"""
Model Evaluator - Regression Metrics and Decile Calibration
Computes error metrics in delay minutes and the predicted-decile calibration table
"""

import numpy as np
import pandas as pd
from pathlib import Path
from typing import Dict, Optional
from sklearn.metrics import (
    mean_squared_error,
    mean_absolute_error,
    r2_score,
)
from matplotlib.figure import Figure
import logging

from config.model_config import REPORT_CONFIG


class ModelEvaluator:
    """
    Evaluates arrival-delay predictions

    Supports:
    - Regression metrics (RMSE, MAE, R2) in original minutes
    - Decile calibration table: mean actual vs mean predicted per bucket
    - Grouped bar chart of the calibration table
    """

    def __init__(self, log_level: str = "INFO"):
        """
        Initialize evaluator

        Args:
            log_level: Logging level
        """
        self.logger = logging.getLogger(__name__)
        self.logger.setLevel(getattr(logging, log_level))

        if not self.logger.hasHandlers():
            handler = logging.StreamHandler()
            formatter = logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            )
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)

    def evaluate_regression(self, y_true: np.ndarray, y_pred: np.ndarray) -> Dict:
        """
        Compute regression metrics

        Args:
            y_true: Ground truth values
            y_pred: Predicted values

        Returns:
            Metrics dict:
            {
                "rmse": float,
                "mae": float,
                "r2": float
            }
        """
        metrics = {}

        try:
            mse = mean_squared_error(y_true, y_pred)
            metrics["rmse"] = float(np.sqrt(mse))
            metrics["mae"] = float(mean_absolute_error(y_true, y_pred))
            metrics["r2"] = float(r2_score(y_true, y_pred))

            self.logger.info(
                f"Regression metrics computed: RMSE={metrics['rmse']:.2f}, MAE={metrics['mae']:.2f}, R²={metrics['r2']:.4f}"
            )

        except Exception as e:
            self.logger.error(f"Error computing regression metrics: {e}")
            raise

        return metrics

    def decile_calibration_table(
        self,
        y_true: np.ndarray,
        y_pred: np.ndarray,
        n_buckets: int = REPORT_CONFIG["n_buckets"],
    ) -> pd.DataFrame:
        """
        Bucket records by predicted value and compare means per bucket

        Bucket edges are quantiles of the predictions only; ties that
        collapse edges merge buckets, so there are at most n_buckets rows.

        Args:
            y_true: Actual delays (minutes)
            y_pred: Predicted delays (minutes)
            n_buckets: Number of equal-mass buckets (10 = deciles)

        Returns:
            DataFrame with columns: bucket, n, mean_actual, mean_predicted
        """
        y_true = np.asarray(y_true, dtype=float).ravel()
        y_pred = np.asarray(y_pred, dtype=float).ravel()

        if len(y_true) != len(y_pred):
            raise ValueError(
                f"Length mismatch: {len(y_true)} actual vs {len(y_pred)} predicted"
            )
        if len(y_pred) == 0:
            raise ValueError("Cannot build calibration table from zero predictions")
        if not np.all(np.isfinite(y_pred)):
            raise ValueError("Predictions contain NaN or infinite values")

        if np.unique(y_pred).size == 1:
            buckets = np.zeros(len(y_pred), dtype=int)
        else:
            buckets = pd.qcut(
                y_pred, q=n_buckets, labels=False, duplicates="drop"
            ).astype(int)

        table = (
            pd.DataFrame({"bucket": buckets, "actual": y_true, "predicted": y_pred})
            .groupby("bucket", sort=True)
            .agg(
                n=("actual", "size"),
                mean_actual=("actual", "mean"),
                mean_predicted=("predicted", "mean"),
            )
            .reset_index()
        )

        self.logger.info(f"Calibration table: {len(table)} buckets, {len(y_pred):,} records")
        return table

    def plot_calibration(
        self, table: pd.DataFrame, output_path: Optional[Path] = None
    ) -> Figure:
        """
        Grouped bar chart of mean actual vs mean predicted per bucket

        Args:
            table: Output of decile_calibration_table
            output_path: If given, save the chart there

        Returns:
            matplotlib Figure
        """
        fig = Figure(figsize=REPORT_CONFIG["figsize"], dpi=REPORT_CONFIG["dpi"])
        ax = fig.add_subplot(1, 1, 1)

        x = np.arange(len(table))
        width = 0.4
        ax.bar(x - width / 2, table["mean_actual"], width, label="Mean actual")
        ax.bar(x + width / 2, table["mean_predicted"], width, label="Mean predicted")

        ax.set_xticks(x)
        ax.set_xticklabels([str(b + 1) for b in table["bucket"]])
        ax.set_xlabel("Predicted delay decile")
        ax.set_ylabel("Arrival delay (minutes)")
        ax.set_title("Decile Calibration: Actual vs Predicted", fontweight="bold")
        ax.axhline(0, color="black", linewidth=0.8)
        ax.legend(loc="upper left")
        ax.grid(True, axis="y", alpha=0.3)
        fig.tight_layout()

        if output_path is not None:
            output_path = Path(output_path)
            output_path.parent.mkdir(parents=True, exist_ok=True)
            fig.savefig(output_path)
            self.logger.info(f"✓ Calibration chart saved to: {output_path}")

        return fig

    def log_metrics(self, metrics: Dict, split: str = "test"):
        """
        Log metrics in readable format

        Args:
            metrics: Metrics dictionary
            split: 'train' or 'test'
        """
        self.logger.info(f"{split.upper()} SET METRICS:")
        self.logger.info(f"  RMSE: {metrics.get('rmse', 0):.2f} min")
        self.logger.info(f"  MAE:  {metrics.get('mae', 0):.2f} min")
        self.logger.info(f"  R²:   {metrics.get('r2', 0):.4f}")


# Convenience functions


def compute_metrics(y_true: np.ndarray, y_pred: np.ndarray) -> Dict:
    """Quick regression metrics computation"""
    evaluator = ModelEvaluator()
    return evaluator.evaluate_regression(y_true, y_pred)


def decile_calibration_table(
    y_true: np.ndarray, y_pred: np.ndarray, n_buckets: int = 10
) -> pd.DataFrame:
    """Quick calibration table"""
    evaluator = ModelEvaluator()
    return evaluator.decile_calibration_table(y_true, y_pred, n_buckets=n_buckets)
