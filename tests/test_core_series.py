"""Tests for the series store."""

from __future__ import annotations

import numpy as np
import pandas as pd
import pytest

from tsase.backtest.windows import Window
from tsase.core.errors import SeriesError
from tsase.core.series import SeriesStore


class TestFromSeries:
    """Test input validation."""

    def test_list_input(self):
        """Plain sequences get a RangeIndex."""
        store = SeriesStore.from_series([1, 2, 3, 4])
        assert len(store) == 4
        assert store.y.dtype == float
        assert isinstance(store.index, pd.RangeIndex)
        assert not store.has_exog

    def test_daily_index(self, daily_series):
        """Regular date indexes are accepted."""
        store = SeriesStore.from_series(daily_series)
        assert store.index.equals(daily_series.index)

    def test_does_not_alias_input(self):
        """The store holds its own copy."""
        y = pd.Series([1.0, 2.0, 3.0])
        store = SeriesStore.from_series(y)
        y.iloc[0] = 99.0
        assert store.y.iloc[0] == 1.0

    def test_empty(self):
        """Empty series are rejected."""
        with pytest.raises(SeriesError):
            SeriesStore.from_series([])

    def test_missing_values(self):
        """NaN observations are rejected."""
        with pytest.raises(SeriesError) as exc_info:
            SeriesStore.from_series([1.0, np.nan, 3.0])
        assert exc_info.value.context["n_missing"] == 1

    def test_date_gap(self):
        """Date indexes with gaps are rejected."""
        idx = pd.DatetimeIndex(["2024-01-01", "2024-01-02", "2024-01-05", "2024-01-06"])
        with pytest.raises(SeriesError):
            SeriesStore.from_series(pd.Series([1.0, 2.0, 3.0, 4.0], index=idx))

    def test_unsorted(self):
        """Decreasing indexes are rejected."""
        with pytest.raises(SeriesError):
            SeriesStore.from_series(pd.Series([1.0, 2.0, 3.0], index=[3, 2, 1]))

    def test_duplicate_keys(self):
        """Duplicate index keys are rejected."""
        with pytest.raises(SeriesError):
            SeriesStore.from_series(pd.Series([1.0, 2.0, 3.0], index=[1, 1, 2]))

    def test_uneven_integer_index(self):
        """Integer indexes must be evenly spaced."""
        with pytest.raises(SeriesError):
            SeriesStore.from_series(pd.Series([1.0, 2.0, 3.0], index=[0, 1, 3]))


class TestExog:
    """Test covariate alignment."""

    def test_array_exog(self):
        """2-D arrays become named columns on the series index."""
        store = SeriesStore.from_series([1.0, 2.0, 3.0], np.ones((3, 2)))
        assert list(store.exog.columns) == ["x0", "x1"]
        assert store.exog.index.equals(store.index)

    def test_series_exog(self):
        """A named Series becomes a one-column frame."""
        y = pd.Series([1.0, 2.0, 3.0])
        store = SeriesStore.from_series(y, pd.Series([0.0, 1.0, 2.0], name="temp"))
        assert list(store.exog.columns) == ["temp"]

    def test_length_mismatch(self):
        """Covariates must have one row per observation."""
        with pytest.raises(SeriesError) as exc_info:
            SeriesStore.from_series([1.0, 2.0, 3.0], np.ones((2, 1)))
        assert exc_info.value.context == {"n_exog": 2, "n_obs": 3}

    def test_index_mismatch(self):
        """Frame covariates must share the series index."""
        y = pd.Series([1.0, 2.0, 3.0])
        exog = pd.DataFrame({"x": [1.0, 2.0, 3.0]}, index=[10, 11, 12])
        with pytest.raises(SeriesError):
            SeriesStore.from_series(y, exog)

    def test_missing_covariates(self):
        """NaN covariates are rejected."""
        with pytest.raises(SeriesError):
            SeriesStore.from_series([1.0, 2.0, 3.0], [1.0, np.nan, 3.0])


class TestSlicing:
    """Test window slicing."""

    def test_train_and_test(self, twelve):
        """Slices use 1-based inclusive window positions."""
        store = SeriesStore.from_series(twelve, np.arange(12.0))
        window = Window(index=0, train_start=7, train_stop=10, test_start=11, test_stop=12)

        train_y, train_x = store.train(window)
        test_y, test_x = store.test(window)

        assert train_y.tolist() == [7.0, 8.0, 9.0, 10.0]
        assert test_y.tolist() == [11.0, 12.0]
        assert train_x["x0"].tolist() == [6.0, 7.0, 8.0, 9.0]
        assert test_x["x0"].tolist() == [10.0, 11.0]

    def test_slices_are_copies(self, twelve):
        """Mutating a slice leaves the store untouched."""
        store = SeriesStore.from_series(twelve)
        window = Window(index=0, train_start=1, train_stop=4, test_start=5, test_stop=6)
        train_y, train_x = store.train(window)
        train_y.iloc[0] = -1.0
        assert store.y.iloc[0] == 1.0
        assert train_x is None
