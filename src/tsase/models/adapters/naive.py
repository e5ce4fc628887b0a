"""Naive baseline adapter.

Simple forecasting method: last value is the forecast for all horizons.
Intervals follow a random walk whose step variance is estimated from the
first differences of the training slice.
"""

from __future__ import annotations

from statistics import NormalDist

import numpy as np
import pandas as pd

from tsase.core.errors import FitError
from tsase.core.results import ForecastResult


class NaiveAdapter:
    """Last-value forecaster with random-walk confidence bounds."""

    name = "naive"

    def __init__(self, alpha: float = 0.05) -> None:
        if not 0 < alpha < 1:
            raise ValueError(f"alpha must be in (0, 1), got {alpha}")
        self.alpha = alpha

    def forecast(
        self,
        train: pd.Series,
        horizon: int,
        exog: pd.DataFrame | None = None,
        future_exog: pd.DataFrame | None = None,
        ci: bool = True,
    ) -> ForecastResult:
        values = np.asarray(train, dtype=float)
        if len(values) == 0:
            raise FitError("Naive forecast needs at least one observation")

        mean = np.full(horizon, values[-1])
        if not ci or len(values) < 3:
            return ForecastResult(mean=mean, model_name=self.name)

        sigma = float(np.std(np.diff(values), ddof=1))
        z = NormalDist().inv_cdf(1 - self.alpha / 2)
        half_width = z * sigma * np.sqrt(np.arange(1, horizon + 1))
        return ForecastResult(
            mean=mean,
            lower=mean - half_width,
            upper=mean + half_width,
            model_name=self.name,
            metadata={"sigma": sigma},
        )


__all__ = ["NaiveAdapter"]
