"""
Data Cleansing Module
Filters incomplete flight records before feature engineering

Features:
- Removal of records with missing arrival delay (no imputation)
- Rejection of missing or non-numeric numeric features
- Rejection of missing categorical codes
- Range validation that fails fast
- Detailed logging of data quality metrics

Output: Clean records in their original relative order
"""

import pandas as pd
import numpy as np
from typing import Optional, Dict, List, Any
import logging

from config.data_config import (
    REQUIRED_COLUMNS,
    MISSING_VALUE_STRATEGY,
    VALIDATION_RULES,
)


class DataCleanser:
    """
    Record filter for the arrival-delay pipeline

    Every step drops rows with a boolean mask, so surviving records keep
    their original relative order.

    Output Schema:
    - origin, dest, carrier: Airport and carrier codes (str)
    - dep_delay, distance: Numeric features (float64)
    - month: Scheduled month 1-12 (int64)
    - arr_delay: Arrival delay in minutes (float64) - TARGET
    """

    def __init__(self, log_level: str = "INFO"):
        """
        Initialize data cleanser

        Args:
            log_level: Logging level ('DEBUG', 'INFO', 'WARNING', 'ERROR')
        """
        # Setup logging
        self.logger = logging.getLogger(__name__)
        self.logger.setLevel(getattr(logging, log_level))

        if not self.logger.hasHandlers():
            handler = logging.StreamHandler()
            formatter = logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            )
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)

        # Track cleaning statistics
        self.stats = {
            "original_records": 0,
            "missing_target_removed": 0,
            "invalid_numeric_removed": 0,
            "missing_categorical_removed": 0,
            "final_records": 0,
        }

    def check_required_columns(
        self, df: pd.DataFrame, required: Optional[List[str]] = None
    ):
        """Raise ValueError naming any required column that is absent."""
        required = REQUIRED_COLUMNS if required is None else required
        missing = [col for col in required if col not in df.columns]
        if missing:
            self.logger.error(f"Missing required columns: {missing}")
            raise ValueError(f"Missing required columns: {missing}")

    def remove_missing_target(self, df: pd.DataFrame) -> pd.DataFrame:
        """
        Drop records whose arrival delay is missing, non-numeric or infinite

        Rationale: the target cannot be imputed without inventing labels

        Args:
            df: Input DataFrame

        Returns:
            DataFrame with only records that have an arrival delay
        """
        target_cols = MISSING_VALUE_STRATEGY["target_columns"]

        keep = np.ones(len(df), dtype=bool)
        for col in target_cols:
            values = pd.to_numeric(df[col], errors="coerce")
            keep &= np.isfinite(values.to_numpy(dtype=float))

        df_clean = df[keep].copy()
        for col in target_cols:
            df_clean[col] = pd.to_numeric(df_clean[col], errors="coerce").astype(float)

        self.stats["missing_target_removed"] = int((~keep).sum())
        self.logger.info(
            f"Removed {self.stats['missing_target_removed']:,} records with missing/invalid arrival delay"
        )

        return df_clean

    def remove_invalid_numeric(self, df: pd.DataFrame) -> pd.DataFrame:
        """
        Drop records with missing or non-numeric numeric features

        Non-numeric strings are coerced to NaN first, then dropped like any
        other missing value.

        Args:
            df: Input DataFrame

        Returns:
            DataFrame with numeric feature columns cast to float
        """
        numeric_cols = MISSING_VALUE_STRATEGY["numeric_columns"]

        coerced = {col: pd.to_numeric(df[col], errors="coerce") for col in numeric_cols}

        keep = np.ones(len(df), dtype=bool)
        for col, values in coerced.items():
            bad = ~np.isfinite(values.to_numpy(dtype=float))
            if bad.any():
                self.logger.debug(f"{col}: {bad.sum():,} missing/non-numeric values")
            keep &= ~bad

        df_clean = df[keep].copy()
        for col, values in coerced.items():
            df_clean[col] = values[keep].astype(float)

        self.stats["invalid_numeric_removed"] = int((~keep).sum())
        self.logger.info(
            f"Removed {self.stats['invalid_numeric_removed']:,} records with missing/non-numeric features"
        )

        return df_clean

    def remove_missing_categorical(self, df: pd.DataFrame) -> pd.DataFrame:
        """
        Drop records with missing airport or carrier codes

        Args:
            df: Input DataFrame

        Returns:
            DataFrame with categorical columns cast to str
        """
        cat_cols = MISSING_VALUE_STRATEGY["categorical_columns"]

        keep = df[cat_cols].notna().all(axis=1).to_numpy()
        df_clean = df[keep].copy()
        for col in cat_cols:
            df_clean[col] = df_clean[col].astype(str)

        self.stats["missing_categorical_removed"] = int((~keep).sum())
        if self.stats["missing_categorical_removed"] > 0:
            self.logger.info(
                f"Removed {self.stats['missing_categorical_removed']:,} records with missing codes"
            )

        return df_clean

    def validate_data_quality(self, df: pd.DataFrame) -> Dict[str, bool]:
        """
        Validate cleaned data against range rules

        Checks:
        - Month within 1-12 (hard failure, the split depends on it)
        - Distance within acceptable range (warning only)

        Args:
            df: Cleaned DataFrame

        Returns:
            Dictionary of validation results

        Raises:
            ValueError: If month falls outside 1-12
        """
        validation_results = {}

        for col, rules in VALIDATION_RULES.items():
            if col not in df.columns:
                continue

            min_val, max_val = rules["min"], rules["max"]
            in_range = bool(df[col].between(min_val, max_val).all())
            validation_results[f"{col}_valid_range"] = in_range

            if not in_range:
                out_of_range = df.loc[~df[col].between(min_val, max_val), col]
                message = (
                    f"{col} has {len(out_of_range)} values outside "
                    f"[{min_val}, {max_val}]: {sorted(out_of_range.unique())[:10]}"
                )
                if col == "month":
                    self.logger.error(message)
                    raise ValueError(message)
                self.logger.warning(message)

        if "month" in df.columns:
            df["month"] = df["month"].astype("int64")

        return validation_results

    def full_pipeline(self, df: pd.DataFrame) -> pd.DataFrame:
        """
        Execute complete data cleaning pipeline

        Pipeline steps:
        1. Check required columns
        2. Remove records with missing arrival delay
        3. Remove records with missing/non-numeric features
        4. Remove records with missing codes
        5. Validate ranges

        Args:
            df: Normalized flight table

        Returns:
            Cleaned DataFrame (original relative order, fresh RangeIndex)
        """
        self.stats["original_records"] = len(df)
        self.logger.info("=" * 60)
        self.logger.info("STARTING DATA CLEANING PIPELINE")
        self.logger.info("=" * 60)
        self.logger.info(f"Input records: {len(df):,}")

        self.logger.info("[1/5] Checking required columns...")
        self.check_required_columns(df)

        self.logger.info("[2/5] Removing records with missing arrival delay...")
        df = self.remove_missing_target(df)

        self.logger.info("[3/5] Removing records with invalid numeric features...")
        df = self.remove_invalid_numeric(df)

        self.logger.info("[4/5] Removing records with missing codes...")
        df = self.remove_missing_categorical(df)

        self.logger.info("[5/5] Validating data quality...")
        self.validate_data_quality(df)

        df = df.reset_index(drop=True)
        self.stats["final_records"] = len(df)

        self.logger.info("=" * 60)
        self.logger.info("CLEANING PIPELINE COMPLETE")
        self.logger.info("=" * 60)
        self.logger.info(f"Original records:      {self.stats['original_records']:,}")
        self.logger.info(
            f"Missing target removed: {self.stats['missing_target_removed']:,}"
        )
        self.logger.info(
            f"Invalid numeric removed: {self.stats['invalid_numeric_removed']:,}"
        )
        self.logger.info(f"Final records:         {self.stats['final_records']:,}")

        if self.stats["original_records"] > 0:
            retention_rate = (
                self.stats["final_records"] / self.stats["original_records"]
            ) * 100
        else:
            retention_rate = 0.0
        self.logger.info(f"Data retention rate:   {retention_rate:.1f}%")

        return df

    def get_statistics(self) -> Dict[str, Any]:
        """
        Get cleaning statistics from last pipeline run

        Returns:
            Dictionary with cleaning metrics
        """
        return self.stats.copy()


# Convenience function
def clean_flight_data(df: pd.DataFrame, log_level: str = "INFO") -> pd.DataFrame:
    """Run the full cleaning pipeline on a normalized flight table."""
    cleanser = DataCleanser(log_level=log_level)
    return cleanser.full_pipeline(df)
