"""
Calendar Train/Test Split

Records scheduled before the cutoff month train the model; the remaining
months are held out. No shuffling, no stratification.
"""

import logging
from typing import Tuple

import numpy as np
import pandas as pd

from config.data_config import MONTH_COLUMN, TEST_MONTH_CUTOFF

logger = logging.getLogger(__name__)


def is_test_month(month, cutoff: int = TEST_MONTH_CUTOFF):
    """True where month >= cutoff (scalar or array)."""
    return np.asarray(month) >= cutoff


def split(
    records: pd.DataFrame,
    month_column: str = MONTH_COLUMN,
    cutoff: int = TEST_MONTH_CUTOFF,
) -> Tuple[pd.DataFrame, pd.DataFrame]:
    """
    Partition records by calendar month.

    Args:
        records: Cleaned, feature-engineered records
        month_column: Column holding the scheduled month (1-12)
        cutoff: First month assigned to the test partition

    Returns:
        (train_df, test_df), each in original relative order

    Raises:
        ValueError: If either partition is empty
    """
    test_mask = is_test_month(records[month_column].to_numpy(), cutoff)

    train_df = records[~test_mask].copy()
    test_df = records[test_mask].copy()

    logger.info("=" * 60)
    logger.info("TEMPORAL DATA SPLIT")
    logger.info("=" * 60)
    logger.info(f"Cutoff: month < {cutoff} -> train, month >= {cutoff} -> test")
    logger.info(f"Train set: {len(train_df):,} rows")
    logger.info(f"Test set:  {len(test_df):,} rows")

    if train_df.empty:
        raise ValueError(
            f"Empty train partition: no records with {month_column} < {cutoff}"
        )
    if test_df.empty:
        raise ValueError(
            f"Empty test partition: no records with {month_column} >= {cutoff}"
        )

    return train_df, test_df
