"""
Temporal Validation Module

Breaks held-out regression error down by month and by carrier so that a
single aggregate RMSE doesn't hide a bad month or a bad airline.
"""

import logging

import numpy as np
import pandas as pd
from sklearn.metrics import mean_absolute_error, mean_squared_error

from config.data_config import CARRIER_COLUMN, MONTH_COLUMN, TARGET_COLUMN
from config.model_config import REPORT_CONFIG


class TemporalValidator:
    """Validates scored predictions across months and carriers."""

    def __init__(
        self,
        prediction_col: str = "predicted_arr_delay",
        target_col: str = TARGET_COLUMN,
        log_level: str = "INFO",
    ):
        """
        Initialize temporal validator.

        Args:
            prediction_col: Column with predictions in minutes
            target_col: Column with actual arrival delay in minutes
            log_level: Logging level
        """
        self.prediction_col = prediction_col
        self.target_col = target_col

        self.logger = logging.getLogger(__name__)
        self.logger.setLevel(getattr(logging, log_level))

        if not self.logger.hasHandlers():
            handler = logging.StreamHandler()
            formatter = logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            )
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)

    def _group_metrics(self, group: pd.DataFrame) -> dict:
        y_true = group[self.target_col].to_numpy(dtype=float)
        y_pred = group[self.prediction_col].to_numpy(dtype=float)
        return {
            "n_flights": len(group),
            "mean_actual": float(y_true.mean()),
            "mean_predicted": float(y_pred.mean()),
            "rmse": float(np.sqrt(mean_squared_error(y_true, y_pred))),
            "mae": float(mean_absolute_error(y_true, y_pred)),
        }

    def evaluate_by_month(self, scored_df: pd.DataFrame) -> pd.DataFrame:
        """
        Evaluate prediction error month-by-month.

        Args:
            scored_df: Test partition with actual and predicted delay

        Returns:
            DataFrame with one row per month
        """
        self.logger.info("=" * 60)
        self.logger.info("MONTHLY PERFORMANCE ANALYSIS")
        self.logger.info("=" * 60)

        monthly_results = []
        for month in sorted(scored_df[MONTH_COLUMN].unique()):
            month_df = scored_df[scored_df[MONTH_COLUMN] == month]
            results = {"month": int(month), **self._group_metrics(month_df)}
            monthly_results.append(results)

            self.logger.info(
                f"Month {int(month):02d}: RMSE={results['rmse']:.2f}, "
                f"MAE={results['mae']:.2f}, Flights={results['n_flights']:,}"
            )

        return pd.DataFrame(monthly_results)

    def evaluate_by_carrier(
        self,
        scored_df: pd.DataFrame,
        carrier_col: str = CARRIER_COLUMN,
        top_n: int = REPORT_CONFIG["top_n_carriers"],
    ) -> pd.DataFrame:
        """
        Evaluate prediction error for the busiest carriers.

        Args:
            scored_df: Test partition with actual and predicted delay
            carrier_col: Name of carrier column
            top_n: Number of carriers (by flight count) to report

        Returns:
            DataFrame with per-carrier metrics, busiest first
        """
        self.logger.info("CARRIER-SPECIFIC PERFORMANCE")
        self.logger.info("-" * 60)

        top_carriers = scored_df[carrier_col].value_counts().head(top_n).index

        carrier_results = []
        for carrier in top_carriers:
            carrier_df = scored_df[scored_df[carrier_col] == carrier]
            results = {"carrier": carrier, **self._group_metrics(carrier_df)}
            carrier_results.append(results)

            self.logger.info(
                f"{carrier:>4}: RMSE={results['rmse']:.2f}, "
                f"Flights={results['n_flights']:,}"
            )

        return pd.DataFrame(carrier_results)
