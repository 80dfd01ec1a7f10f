"""
Shared pytest fixtures for arrival-delay embedding network tests.
Creates minimal nycflights-like DataFrames for consistent testing.
"""

import pytest
import pandas as pd
import numpy as np


@pytest.fixture
def sample_flight_data():
    """
    Create a minimal flight table with all canonical columns.

    Returns a DataFrame with 360 rows (30 per month) spanning 4 carriers
    across 4 airports, with arrival delay loosely driven by departure delay.
    """
    rng = np.random.default_rng(42)
    n = 360

    carriers = ["AA", "UA", "DL", "B6"]
    airports = ["JFK", "LGA", "EWR", "LAX"]

    dep_delay = rng.normal(10, 25, n)

    return pd.DataFrame(
        {
            "month": np.repeat(np.arange(1, 13), n // 12),
            "carrier": rng.choice(carriers, n),
            "origin": rng.choice(airports[:3], n),
            "dest": rng.choice(airports, n),
            "dep_delay": dep_delay,
            "distance": rng.integers(200, 2500, n).astype(float),
            "arr_delay": dep_delay * 0.9 + rng.normal(0, 8, n),
        }
    )


@pytest.fixture
def twelve_month_records():
    """
    One record per month; arr_delay missing in months 3 and 12.

    After filtering: 10 records, train = months {1,2,4,...,10}, test = {11}.
    """
    return pd.DataFrame(
        {
            "month": list(range(1, 13)),
            "carrier": ["AA", "UA", "AA", "DL", "UA", "AA", "DL", "UA", "AA", "DL", "UA", "AA"],
            "origin": ["JFK", "JFK", "LGA", "EWR", "JFK", "ORD", "LGA", "EWR", "JFK", "ORD", "JFK", "LGA"],
            "dest": ["LAX", "LAX", "ORD", "LAX", "SFO", "LAX", "ATL", "SFO", "ATL", "LAX", "LAX", "ORD"],
            "dep_delay": [5.0, -3.0, 12.0, 40.0, 0.0, 7.0, -1.0, 22.0, 15.0, 3.0, 60.0, 9.0],
            "distance": [2475.0, 2475.0, 733.0, 2454.0, 2586.0, 1744.0, 762.0, 2565.0, 760.0, 1744.0, 2475.0, 733.0],
            "arr_delay": [2.0, -8.0, np.nan, 35.0, -4.0, 10.0, -6.0, 18.0, 11.0, 1.0, 55.0, np.nan],
        }
    )


@pytest.fixture
def small_flight_data():
    """Very small DataFrame (24 rows, 2 per month) for quick unit tests."""
    rng = np.random.default_rng(0)
    n = 24
    return pd.DataFrame(
        {
            "month": np.repeat(np.arange(1, 13), 2),
            "carrier": rng.choice(["AA", "UA"], n),
            "origin": rng.choice(["JFK", "LGA"], n),
            "dest": rng.choice(["LAX", "ORD"], n),
            "dep_delay": rng.normal(3, 15, n),
            "distance": rng.integers(300, 2000, n).astype(float),
            "arr_delay": rng.normal(5, 20, n),
        }
    )
