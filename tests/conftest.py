"""Shared fixtures for tsase tests."""

from __future__ import annotations

import numpy as np
import pandas as pd
import pytest


@pytest.fixture
def twelve() -> pd.Series:
    """The series 1..12 on an integer index."""
    return pd.Series(np.arange(1.0, 13.0))


@pytest.fixture
def daily_series() -> pd.Series:
    """A trending daily series with a weekly cycle and noise."""
    rng = np.random.default_rng(42)
    n = 120
    t = np.arange(n)
    values = 10 + 0.05 * t + np.sin(2 * np.pi * t / 7) + rng.normal(0, 0.3, n)
    return pd.Series(values, index=pd.date_range("2024-01-01", periods=n, freq="D"), name="y")


@pytest.fixture
def ar_series() -> pd.Series:
    """A stationary AR(1) series with coefficient 0.6."""
    rng = np.random.default_rng(7)
    n = 150
    values = np.zeros(n)
    noise = rng.normal(0, 1, n)
    for i in range(1, n):
        values[i] = 0.6 * values[i - 1] + noise[i]
    return pd.Series(values + 5.0)


@pytest.fixture
def covariates(ar_series: pd.Series) -> pd.DataFrame:
    """A covariate frame aligned with ``ar_series``."""
    rng = np.random.default_rng(11)
    driver = ar_series.shift(1).bfill() + rng.normal(0, 0.5, len(ar_series))
    return pd.DataFrame({"driver": driver.to_numpy()}, index=ar_series.index)
