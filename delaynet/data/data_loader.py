"""
Flight Data Loader

Reads a flight table (CSV or Parquet) and normalizes it to the canonical
lower-case schema used by the rest of the pipeline:
origin, dest, carrier, dep_delay, distance, month, arr_delay.

Both nycflights-style exports (already lower-case) and BTS On-Time
Performance exports (camelCase or UPPERCASE) are accepted.
"""

import logging
from pathlib import Path
from typing import List, Optional

import pandas as pd

from config.data_config import (
    FLIGHTS_DATA_PATH,
    COLUMN_MAP,
    REQUIRED_COLUMNS,
    DATE_COLUMN,
    MONTH_COLUMN,
)


class FlightDataLoader:
    """Loads a single flight table and maps it onto the canonical schema."""

    def __init__(self, data_path: Optional[Path] = None, log_level: str = "INFO"):
        """
        Initialize loader.

        Args:
            data_path: CSV or Parquet file (default: FLIGHTS_DATA_PATH)
            log_level: Logging level
        """
        self.data_path = Path(data_path) if data_path else FLIGHTS_DATA_PATH

        self.logger = logging.getLogger(__name__)
        self.logger.setLevel(getattr(logging, log_level))

    def read_table(self, nrows: Optional[int] = None) -> pd.DataFrame:
        """
        Read the raw table from disk.

        Args:
            nrows: If provided, only load this many rows (CSV only)

        Returns:
            Raw DataFrame
        """
        if not self.data_path.exists():
            raise FileNotFoundError(f"File not found: {self.data_path}")

        suffix = self.data_path.suffix.lower()
        if suffix == ".parquet":
            df = pd.read_parquet(self.data_path)
            if nrows:
                df = df.head(nrows)
        elif suffix in (".csv", ".gz", ".zip"):
            df = pd.read_csv(self.data_path, nrows=nrows, low_memory=False)
        else:
            raise ValueError(
                f"Unsupported file type '{suffix}' for {self.data_path}. "
                f"Expected .csv or .parquet"
            )

        self.logger.info(f"Loaded {len(df):,} rows from {self.data_path.name}")
        return df

    def load(self, nrows: Optional[int] = None) -> pd.DataFrame:
        """Read the table and normalize its columns."""
        return normalize_columns(self.read_table(nrows=nrows))


def normalize_columns(
    df: pd.DataFrame, required: Optional[List[str]] = None
) -> pd.DataFrame:
    """
    Rename known BTS columns to canonical names and derive month if needed.

    Args:
        df: Raw flight table
        required: Columns that must exist afterwards (default: REQUIRED_COLUMNS)

    Returns:
        DataFrame with canonical column names (original row order preserved)

    Raises:
        ValueError: If any required column is still missing
    """
    logger = logging.getLogger(__name__)
    required = REQUIRED_COLUMNS if required is None else required

    # Only rename columns whose canonical target isn't already present
    rename = {
        src: dst
        for src, dst in COLUMN_MAP.items()
        if src in df.columns and dst not in df.columns
    }
    if rename:
        df = df.rename(columns=rename)
        logger.debug(f"Renamed columns: {rename}")

    if MONTH_COLUMN not in df.columns and DATE_COLUMN in df.columns:
        df[MONTH_COLUMN] = pd.to_datetime(df[DATE_COLUMN], errors="coerce").dt.month
        logger.info(f"Derived '{MONTH_COLUMN}' from '{DATE_COLUMN}'")

    missing = [col for col in required if col not in df.columns]
    if missing:
        raise ValueError(
            f"Flight table is missing required columns: {missing}. "
            f"Available: {list(df.columns)}"
        )

    return df


def load_flights(data_path: Optional[Path] = None) -> pd.DataFrame:
    """
    Convenience function to load and normalize the flight table

    Args:
        data_path: CSV or Parquet file (default: FLIGHTS_DATA_PATH)

    Returns:
        Normalized DataFrame
    """
    return FlightDataLoader(data_path).load()
