"""Signal-plus-noise adapter.

Models the series as a deterministic signal (linear trend, optionally plus a
single cosine cycle) with autoregressive noise. The signal is fitted by OLS,
the noise by an AR(p) on the regression residuals. The model has no
interval, so bounds are always None.
"""

from __future__ import annotations

import numpy as np
import pandas as pd

from tsase.core.errors import FitError
from tsase.core.results import ForecastResult
from tsase.models.protocol import require_module


def _design(t: np.ndarray, frequency: float | None, linear: bool) -> np.ndarray:
    columns = [np.ones_like(t)]
    if linear:
        columns.append(t)
    if frequency is not None:
        columns.append(np.cos(2 * np.pi * frequency * t))
        columns.append(np.sin(2 * np.pi * frequency * t))
    return np.column_stack(columns)


class SignalPlusNoiseAdapter:
    """Deterministic signal with AR(p) noise.

    Args:
        ar_order: Order of the AR model fitted to the residuals (0 for white noise)
        frequency: Cycles per observation of an optional cosine signal
        linear: Include a linear time trend in the signal
    """

    name = "signal_plus_noise"

    def __init__(
        self,
        ar_order: int = 1,
        frequency: float | None = None,
        linear: bool = True,
    ) -> None:
        if ar_order < 0:
            raise ValueError(f"ar_order must be non-negative, got {ar_order}")
        if frequency is not None and not 0 < frequency <= 0.5:
            raise ValueError(f"frequency must be in (0, 0.5], got {frequency}")
        self.ar_order = ar_order
        self.frequency = frequency
        self.linear = linear

    def forecast(
        self,
        train: pd.Series,
        horizon: int,
        exog: pd.DataFrame | None = None,
        future_exog: pd.DataFrame | None = None,
        ci: bool = True,
    ) -> ForecastResult:
        sm = require_module("statsmodels.api", "statsmodels")
        ar_model = require_module("statsmodels.tsa.ar_model", "statsmodels")

        y = np.asarray(train, dtype=float)
        n = len(y)
        t_train = np.arange(1, n + 1, dtype=float)
        t_future = np.arange(n + 1, n + horizon + 1, dtype=float)
        x_train = _design(t_train, self.frequency, self.linear)
        x_future = _design(t_future, self.frequency, self.linear)

        if n <= x_train.shape[1] + self.ar_order:
            raise FitError(
                "Training slice too short for the signal-plus-noise model",
                context={"n_obs": n, "n_signal_terms": x_train.shape[1], "ar_order": self.ar_order},
            )

        try:
            signal = sm.OLS(y, x_train).fit()
            resid = y - signal.predict(x_train)
            noise_forecast = np.zeros(horizon)
            score = float(signal.aic)
            if self.ar_order > 0:
                noise = ar_model.AutoReg(resid, lags=self.ar_order, trend="n").fit()
                noise_forecast = np.asarray(noise.forecast(steps=horizon), dtype=float)
                score = float(noise.aic)
        except Exception as exc:
            raise FitError(
                f"Signal-plus-noise estimation failed: {exc}",
                context={"n_obs": n, "ar_order": self.ar_order},
            ) from exc

        coefs = np.asarray(signal.params, dtype=float)
        if not np.all(np.isfinite(coefs)):
            raise FitError("Signal regression produced non-finite coefficients")

        mean = np.asarray(signal.predict(x_future), dtype=float) + noise_forecast
        return ForecastResult(
            mean=mean,
            score=score if np.isfinite(score) else None,
            model_name=self.name,
            metadata={"signal_params": coefs.tolist(), "ar_order": self.ar_order},
        )


__all__ = ["SignalPlusNoiseAdapter"]
