"""Pytest configuration and shared fixtures."""

import numpy as np
import pandas as pd
import pytest

from tstoolkit.data.structs import TimeSeries


@pytest.fixture
def seasonal_series():
    """Trend + sine seasonality (period 8) + deterministic noise, 40 points."""
    i = np.arange(40, dtype=float)
    trend = i * 0.5
    seasonal = 10.0 * np.sin(i * np.pi / 4.0)
    noise = np.sin(i * 0.7) * 2.0
    return TimeSeries(trend + seasonal + noise + 50.0, name="seasonal_sales")


@pytest.fixture
def monthly_sales():
    """Short upward-trending series with timestamps."""
    values = [100.0, 120.0, 115.0, 130.0, 125.0, 140.0,
              135.0, 150.0, 145.0, 160.0, 155.0, 170.0]
    dates = pd.date_range(start="2023-01-01", periods=len(values), freq="MS")
    return TimeSeries(values, timestamps=dates, name="monthly_sales")


@pytest.fixture
def linear_series():
    """1.0 .. 50.0"""
    return TimeSeries(np.arange(1, 51, dtype=float))


@pytest.fixture
def spike_series():
    """Linear ramp 0..49 with a single spike at index 25."""
    values = np.arange(50, dtype=float)
    values[25] = 1000.0
    return TimeSeries(values)
