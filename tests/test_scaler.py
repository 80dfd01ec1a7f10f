"""
Unit Tests for Scaler Module

Tests:
1. Mean / sample standard deviation fitting
2. apply/invert round-trip
3. Degenerate input fails fast
4. Serialization
"""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
import numpy as np
import pandas as pd
from delaynet.features.scaler import Scaler, fit_scaler, apply_scaler, invert_scaler


class TestFitScaler:
    def test_mean_and_sample_std(self):
        values = [1.0, 2.0, 3.0, 4.0]
        scaler = fit_scaler(values, column="dep_delay")

        assert scaler.center == pytest.approx(2.5)
        assert scaler.scale == pytest.approx(np.std(values, ddof=1))
        assert scaler.column == "dep_delay"

    def test_accepts_series(self):
        scaler = fit_scaler(pd.Series([10.0, 20.0, 30.0]))
        assert scaler.center == pytest.approx(20.0)

    def test_empty_raises(self):
        with pytest.raises(ValueError, match="no training values"):
            fit_scaler([])

    def test_single_value_raises(self):
        with pytest.raises(ValueError, match="at least 2"):
            fit_scaler([5.0])

    def test_constant_raises(self):
        """Zero scale would divide by zero; must fail fast."""
        with pytest.raises(ValueError, match="divide by zero"):
            fit_scaler([7.0, 7.0, 7.0], column="distance")

    def test_nan_raises(self):
        with pytest.raises(ValueError, match="non-finite"):
            fit_scaler([1.0, np.nan, 3.0])


class TestApplyInvert:
    def test_apply_formula(self):
        scaler = Scaler(center=10.0, scale=2.0)
        assert apply_scaler(scaler, [12.0, 8.0]).tolist() == [1.0, -1.0]

    def test_invert_formula(self):
        scaler = Scaler(center=10.0, scale=2.0)
        assert invert_scaler(scaler, [1.0, -1.0]).tolist() == [12.0, 8.0]

    def test_round_trip(self):
        """invert(apply(x)) == x up to floating-point tolerance."""
        rng = np.random.default_rng(7)
        x = rng.normal(15, 40, 500)
        scaler = fit_scaler(x)

        np.testing.assert_allclose(invert_scaler(scaler, apply_scaler(scaler, x)), x)

    def test_scaled_training_data_is_standardized(self):
        rng = np.random.default_rng(3)
        x = rng.normal(100, 25, 1000)
        scaled = fit_scaler(x).transform(x)

        assert scaled.mean() == pytest.approx(0.0, abs=1e-9)
        assert scaled.std(ddof=1) == pytest.approx(1.0)


class TestSerialization:
    def test_dict_round_trip(self):
        scaler = Scaler(center=3.5, scale=1.25, column="arr_delay")
        assert Scaler.from_dict(scaler.to_dict()) == scaler
