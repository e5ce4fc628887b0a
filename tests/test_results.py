"""Tests for result types."""

from __future__ import annotations

import numpy as np
import pandas as pd
import pytest

from tsase.backtest.windows import Window
from tsase.core.results import BacktestResult, ForecastResult, WindowFailure, WindowScore


def _window(i: int) -> Window:
    return Window(index=i, train_start=1, train_stop=4, test_start=5, test_stop=6)


class TestForecastResult:
    """Test ForecastResult."""

    def test_coerces_to_float_arrays(self):
        """Lists become 1-D float arrays."""
        result = ForecastResult(mean=[1, 2, 3])
        assert isinstance(result.mean, np.ndarray)
        assert result.mean.dtype == float
        assert result.horizon == 3
        assert not result.has_interval

    def test_interval(self):
        """Both bounds present means an interval."""
        result = ForecastResult(mean=[1.0], lower=[0.0], upper=[2.0])
        assert result.has_interval

    def test_without_interval(self):
        """Dropping bounds keeps everything else."""
        result = ForecastResult(mean=[1.0], lower=[0.0], upper=[2.0], score=3.5, model_name="m")
        stripped = result.without_interval()
        assert stripped.lower is None and stripped.upper is None
        assert stripped.score == 3.5
        assert stripped.model_name == "m"
        np.testing.assert_array_equal(stripped.mean, result.mean)

    def test_to_frame(self):
        """Frames carry bound columns only when present."""
        assert list(ForecastResult(mean=[1.0, 2.0]).to_frame().columns) == ["yhat"]
        frame = ForecastResult(mean=[1.0], lower=[0.0], upper=[2.0]).to_frame()
        assert list(frame.columns) == ["yhat", "lower", "upper"]


class TestBacktestResult:
    """Test BacktestResult accessors."""

    @pytest.fixture
    def result(self) -> BacktestResult:
        scores = [
            WindowScore(window=_window(0), ase=1.0, forecast=ForecastResult(mean=[1.0, 1.0])),
            WindowScore(window=_window(2), ase=3.0, forecast=ForecastResult(mean=[1.0, 1.0])),
        ]
        failures = [
            WindowFailure(
                window=_window(1),
                error_code="E_FIT_FAILED",
                error_type="FitError",
                message="diverged",
            )
        ]
        return BacktestResult(scores=scores, failures=failures, model_name="stub")

    def test_mean_score(self, result):
        """Mean over successful windows only."""
        assert result.mean_score == pytest.approx(2.0)

    def test_empty_mean_is_nan(self):
        """No scores gives NaN rather than raising."""
        assert np.isnan(BacktestResult(scores=[]).mean_score)

    def test_counts(self, result):
        """Window counts include failures."""
        assert result.n_windows == 3
        summary = result.summary()
        assert summary["n_succeeded"] == 2
        assert summary["n_failed"] == 1
        assert summary["failed_windows"] == [1]

    def test_ase_by_window(self, result):
        """ASE is keyed by window index."""
        pd.testing.assert_series_equal(
            result.ase_by_window,
            pd.Series({0: 1.0, 2: 3.0}, name="ase", dtype=float),
        )

    def test_get_window(self, result):
        """Lookup by index."""
        assert result.get_window(2).ase == 3.0
        assert result.get_window(1) is None

    def test_to_dict(self, result):
        """Failures keep their window range."""
        payload = result.to_dict()
        assert payload["failures"][0]["test_start"] == 5
        assert payload["failures"][0]["error_code"] == "E_FIT_FAILED"
        assert payload["scores"][1]["ase"] == 3.0

    def test_has_interval_without_comparison(self, result):
        """A result without a comparison frame has no interval."""
        assert not result.has_interval
