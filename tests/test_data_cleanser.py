"""
Unit Tests for Data Loader and Data Cleanser Modules

Tests:
1. Column normalization (BTS names, month derivation)
2. Missing arrival delay removal (order preserved)
3. Missing / non-numeric feature rejection
4. Range validation and required columns
"""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
import pandas as pd
import numpy as np
from delaynet.data.data_cleanser import DataCleanser
from delaynet.data.data_loader import FlightDataLoader, normalize_columns


@pytest.fixture
def cleanser():
    return DataCleanser()


class TestColumnNormalization:
    def test_bts_uppercase_renamed(self):
        """UPPERCASE BTS columns should map onto canonical names."""
        df = pd.DataFrame(
            {
                "ORIGIN": ["JFK"],
                "DEST": ["LAX"],
                "OP_CARRIER": ["AA"],
                "DEP_DELAY": [5.0],
                "DISTANCE": [2475.0],
                "MONTH": [1],
                "ARR_DELAY": [3.0],
            }
        )
        result = normalize_columns(df)

        for col in ["origin", "dest", "carrier", "dep_delay", "distance", "month", "arr_delay"]:
            assert col in result.columns

    def test_month_derived_from_flight_date(self):
        """Month should be derived from FlightDate when absent."""
        df = pd.DataFrame(
            {
                "FlightDate": ["2024-11-03", "2024-02-14"],
                "Origin": ["JFK", "LGA"],
                "Dest": ["LAX", "ORD"],
                "Reporting_Airline": ["AA", "UA"],
                "DepDelay": [5.0, 0.0],
                "Distance": [2475.0, 733.0],
                "ArrDelay": [3.0, -2.0],
            }
        )
        result = normalize_columns(df)

        assert result["month"].tolist() == [11, 2]

    def test_missing_column_raises(self):
        """A table without carrier should be rejected with a clear message."""
        df = pd.DataFrame({"origin": ["JFK"], "dest": ["LAX"]})

        with pytest.raises(ValueError, match="carrier"):
            normalize_columns(df)

    def test_loader_reads_csv(self, tmp_path, small_flight_data):
        """FlightDataLoader should read and normalize a CSV file."""
        path = tmp_path / "flights.csv"
        small_flight_data.to_csv(path, index=False)

        result = FlightDataLoader(path).load()

        assert len(result) == len(small_flight_data)

    def test_loader_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            FlightDataLoader(tmp_path / "nope.csv").load()


class TestMissingTargetRemoval:
    def test_only_complete_records_kept_in_order(self, cleanser, twelve_month_records):
        """Exactly the records with arr_delay survive, in original order."""
        result = cleanser.full_pipeline(twelve_month_records)

        expected = twelve_month_records.dropna(subset=["arr_delay"])
        assert len(result) == 10
        assert result["month"].tolist() == expected["month"].tolist()
        assert result["arr_delay"].tolist() == expected["arr_delay"].tolist()

    def test_statistics_captured(self, cleanser, twelve_month_records):
        """Cleaning statistics should count the dropped rows."""
        cleanser.full_pipeline(twelve_month_records)

        stats = cleanser.get_statistics()
        assert stats["original_records"] == 12
        assert stats["missing_target_removed"] == 2
        assert stats["final_records"] == 10

    def test_infinite_arrival_delay_dropped(self, cleanser, small_flight_data):
        """An 'inf' arrival delay is not a usable label."""
        df = small_flight_data.astype({"arr_delay": object})
        df.loc[0, "arr_delay"] = "inf"

        result = cleanser.full_pipeline(df)

        assert len(result) == len(df) - 1
        assert np.isfinite(result["arr_delay"]).all()
        assert cleanser.get_statistics()["missing_target_removed"] == 1

    def test_non_numeric_arrival_delay_dropped(self, cleanser, small_flight_data):
        df = small_flight_data.astype({"arr_delay": object})
        df.loc[3, "arr_delay"] = "n/a"

        result = cleanser.full_pipeline(df)

        assert len(result) == len(df) - 1
        assert result["arr_delay"].dtype == float
        assert cleanser.get_statistics()["missing_target_removed"] == 1


class TestNumericValidation:
    def test_non_numeric_dep_delay_dropped(self, cleanser, small_flight_data):
        """Non-numeric and missing numeric features are rejected."""
        df = small_flight_data.astype({"dep_delay": object})
        df.loc[0, "dep_delay"] = "late"
        df.loc[1, "distance"] = np.nan

        result = cleanser.full_pipeline(df)

        assert len(result) == len(df) - 2
        assert result["dep_delay"].dtype == float
        assert cleanser.get_statistics()["invalid_numeric_removed"] == 2

    @pytest.mark.parametrize("bad_month", [None, "x"])
    def test_missing_or_non_numeric_month_dropped(
        self, cleanser, small_flight_data, bad_month
    ):
        """A record without a usable month cannot be assigned to a partition."""
        df = small_flight_data.astype({"month": object})
        df.loc[5, "month"] = bad_month

        result = cleanser.full_pipeline(df)

        assert len(result) == len(df) - 1
        assert result["month"].dtype == np.int64
        assert cleanser.get_statistics()["invalid_numeric_removed"] == 1

    def test_month_out_of_range_raises(self, cleanser, small_flight_data):
        """Month 13 should fail fast."""
        df = small_flight_data.copy()
        df.loc[0, "month"] = 13

        with pytest.raises(ValueError, match="month"):
            cleanser.full_pipeline(df)

    def test_required_columns_checked(self, cleanser, small_flight_data):
        with pytest.raises(ValueError, match="distance"):
            cleanser.full_pipeline(small_flight_data.drop(columns=["distance"]))
