"""Result types for forecasting and backtesting.

``ForecastResult`` is what every adapter returns for one window.
``BacktestResult`` is what the orchestrator hands back for a whole run.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import numpy as np
import pandas as pd

if TYPE_CHECKING:
    from tsase.backtest.windows import Window


def _as_array(values: Any) -> np.ndarray:
    return np.asarray(values, dtype=float).reshape(-1)


@dataclass(frozen=True)
class ForecastResult:
    """Point forecast with optional confidence bounds.

    Attributes:
        mean: Point forecasts, one per horizon step
        lower: Lower confidence bound, or None if the model has none
        upper: Upper confidence bound, or None if the model has none
        score: Model-selection score (e.g. AIC), if the model reports one
        model_name: Name of the producing model
        metadata: Free-form details from the adapter
    """

    mean: np.ndarray
    lower: np.ndarray | None = None
    upper: np.ndarray | None = None
    score: float | None = None
    model_name: str = "model"
    metadata: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "mean", _as_array(self.mean))
        if self.lower is not None:
            object.__setattr__(self, "lower", _as_array(self.lower))
        if self.upper is not None:
            object.__setattr__(self, "upper", _as_array(self.upper))

    @property
    def horizon(self) -> int:
        return len(self.mean)

    @property
    def has_interval(self) -> bool:
        return self.lower is not None and self.upper is not None

    def without_interval(self) -> ForecastResult:
        """Return a copy with the confidence bounds dropped."""
        return ForecastResult(
            mean=self.mean,
            score=self.score,
            model_name=self.model_name,
            metadata=dict(self.metadata),
        )

    def to_frame(self, index: pd.Index | None = None) -> pd.DataFrame:
        """Return forecasts as a DataFrame with ``yhat`` and bound columns."""
        data: dict[str, Any] = {"yhat": self.mean}
        if self.has_interval:
            data["lower"] = self.lower
            data["upper"] = self.upper
        return pd.DataFrame(data, index=index)


@dataclass(frozen=True)
class WindowScore:
    """ASE for one successfully evaluated window."""

    window: Window
    ase: float
    forecast: ForecastResult

    def to_dict(self) -> dict[str, Any]:
        return {**self.window.to_dict(), "ase": self.ase, "model": self.forecast.model_name}


@dataclass(frozen=True)
class WindowFailure:
    """A window that could not be evaluated, and why."""

    window: Window
    error_code: str
    error_type: str
    message: str

    def to_dict(self) -> dict[str, Any]:
        return {
            **self.window.to_dict(),
            "error_code": self.error_code,
            "type": self.error_type,
            "error": self.message,
        }


@dataclass(frozen=True)
class BacktestResult:
    """Complete results of one rolling-window backtest.

    Attributes:
        scores: Per-window scores in schedule order (successful windows only)
        failures: Windows that failed, in schedule order
        comparison: Frame indexed like the input series with ``actual``,
            ``predicted``, ``lower``, ``upper`` and ``window`` columns; the
            forecast columns are NaN outside test regions
        model_name: Name of the evaluated model
        metadata: Run configuration
    """

    scores: list[WindowScore]
    failures: list[WindowFailure] = field(default_factory=list)
    comparison: pd.DataFrame = field(default_factory=pd.DataFrame)
    model_name: str = "model"
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def mean_score(self) -> float:
        """Mean ASE over successful windows."""
        if not self.scores:
            return float("nan")
        return float(np.mean([s.ase for s in self.scores]))

    @property
    def n_windows(self) -> int:
        return len(self.scores) + len(self.failures)

    @property
    def ase_by_window(self) -> pd.Series:
        """ASE keyed by window index."""
        return pd.Series(
            {s.window.index: s.ase for s in self.scores},
            name="ase",
            dtype=float,
        )

    @property
    def has_interval(self) -> bool:
        return bool(self.comparison.get("lower", pd.Series(dtype=float)).notna().any())

    def get_window(self, index: int) -> WindowScore | None:
        for s in self.scores:
            if s.window.index == index:
                return s
        return None

    def summary(self) -> dict[str, Any]:
        """Human-readable summary of the run."""
        return {
            "model": self.model_name,
            "mean_ase": self.mean_score,
            "n_windows": self.n_windows,
            "n_succeeded": len(self.scores),
            "n_failed": len(self.failures),
            "failed_windows": [f.window.index for f in self.failures],
        }

    def to_dict(self) -> dict[str, Any]:
        return {
            "model": self.model_name,
            "mean_ase": self.mean_score,
            "scores": [s.to_dict() for s in self.scores],
            "failures": [f.to_dict() for f in self.failures],
            "metadata": self.metadata,
        }


__all__ = [
    "ForecastResult",
    "WindowScore",
    "WindowFailure",
    "BacktestResult",
]
