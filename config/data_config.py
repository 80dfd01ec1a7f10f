"""
Data Configuration Module
Centralizes all data-related parameters for the arrival-delay embedding network
"""

from pathlib import Path

# ============================================================================
# PROJECT ROOT & PATHS
# ============================================================================

PROJECT_ROOT = Path(__file__).parent.parent
DATA_DIR = PROJECT_ROOT / "data"

# Data subdirectories
RAW_DATA_DIR = DATA_DIR / "raw"  # flights.csv / flights.parquet go here
PROCESSED_DATA_DIR = DATA_DIR / "processed"

# Default input table (nycflights-style export, one row per flight)
FLIGHTS_DATA_PATH = RAW_DATA_DIR / "flights.csv"

# Reports (calibration chart, breakdown tables)
REPORTS_DIR = PROJECT_ROOT / "reports"
CALIBRATION_PLOT_PATH = REPORTS_DIR / "decile_calibration.png"

# Logs
LOGS_DIR = PROJECT_ROOT / "logs"

# ============================================================================
# COLUMN SCHEMA
# ============================================================================

# Canonical (lower-case) columns used throughout the pipeline
ORIGIN_COLUMN = "origin"
DEST_COLUMN = "dest"
CARRIER_COLUMN = "carrier"
ORIG_DEST_COLUMN = "orig_dest"  # derived: origin + dest, no delimiter
MONTH_COLUMN = "month"
TARGET_COLUMN = "arr_delay"

# Categorical inputs to the network (embedded)
CATEGORICAL_COLUMNS = [ORIG_DEST_COLUMN, CARRIER_COLUMN]

# Numeric inputs to the network (scaled on train only)
NUMERIC_COLUMNS = ["dep_delay", "distance"]

# Columns that must be present after loading
REQUIRED_COLUMNS = [
    ORIGIN_COLUMN,
    DEST_COLUMN,
    CARRIER_COLUMN,
    "dep_delay",
    "distance",
    MONTH_COLUMN,
    TARGET_COLUMN,
]

# BTS / camelCase exports -> canonical names
COLUMN_MAP = {
    # BTS PREZIP camelCase
    "Origin": ORIGIN_COLUMN,
    "Dest": DEST_COLUMN,
    "Reporting_Airline": CARRIER_COLUMN,
    "DepDelay": "dep_delay",
    "ArrDelay": TARGET_COLUMN,
    "Distance": "distance",
    "Month": MONTH_COLUMN,
    "FlightDate": "fl_date",
    # BTS UPPERCASE
    "ORIGIN": ORIGIN_COLUMN,
    "DEST": DEST_COLUMN,
    "OP_CARRIER": CARRIER_COLUMN,
    "OP_UNIQUE_CARRIER": CARRIER_COLUMN,
    "DEP_DELAY": "dep_delay",
    "ARR_DELAY": TARGET_COLUMN,
    "DISTANCE": "distance",
    "MONTH": MONTH_COLUMN,
    "FL_DATE": "fl_date",
}

# Date column used to derive month when no month column exists
DATE_COLUMN = "fl_date"

# ============================================================================
# DATA CLEANSING PARAMETERS
# ============================================================================

# Rows missing any of these are dropped (no imputation)
MISSING_VALUE_STRATEGY = {
    "target_columns": [TARGET_COLUMN],  # Drop if missing
    "numeric_columns": NUMERIC_COLUMNS + [MONTH_COLUMN],  # Drop if missing/non-numeric
    "categorical_columns": [ORIGIN_COLUMN, DEST_COLUMN, CARRIER_COLUMN],
}

# Acceptable ranges for validation (violations fail fast)
VALIDATION_RULES = {
    MONTH_COLUMN: {"min": 1, "max": 12},
    "distance": {"min": 0, "max": 10000},
}

# ============================================================================
# TRAIN/TEST SPLIT CONFIGURATION
# ============================================================================

# Calendar split: month < cutoff -> train, month >= cutoff -> test
TEST_MONTH_CUTOFF = 11

# Reserved vocabulary entry for unseen categories (only when enabled)
UNKNOWN_TOKEN = "<UNK>"

# ============================================================================
# LOGGING CONFIGURATION
# ============================================================================

LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FILE = LOGS_DIR / "train_pipeline.log"

# ============================================================================
# HELPER FUNCTIONS
# ============================================================================


def ensure_directories():
    """
    Create all necessary directories if they don't exist
    """
    directories = [
        RAW_DATA_DIR,
        PROCESSED_DATA_DIR,
        REPORTS_DIR,
        LOGS_DIR,
    ]

    for directory in directories:
        directory.mkdir(parents=True, exist_ok=True)


if __name__ == "__main__":
    print("=" * 60)
    print("DATA CONFIGURATION TEST")
    print("=" * 60)
    print(f"Project Root: {PROJECT_ROOT}")
    print(f"Flights Data: {FLIGHTS_DATA_PATH}")
    print(f"Categorical Columns: {CATEGORICAL_COLUMNS}")
    print(f"Numeric Columns: {NUMERIC_COLUMNS}")
    print(f"Test Month Cutoff: {TEST_MONTH_CUTOFF}")
    print("=" * 60)
