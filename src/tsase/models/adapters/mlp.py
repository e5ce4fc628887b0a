"""Multilayer perceptron adapter backed by scikit-learn.

The network learns a one-step map from a window of ``lags`` past values (plus
optional covariates at the target step) to the next value. Multi-step
forecasts are produced recursively. Several networks with different seeds
are trained and their forecasts combined by median. No intervals.
"""

from __future__ import annotations

import logging

import numpy as np
import pandas as pd

from tsase.core.errors import FitError
from tsase.core.results import ForecastResult
from tsase.models.protocol import require_module

logger = logging.getLogger(__name__)


def _lag_matrix(
    y: np.ndarray,
    lags: int,
    x: np.ndarray | None,
) -> tuple[np.ndarray, np.ndarray]:
    rows = [y[t - lags : t] for t in range(lags, len(y))]
    features = np.asarray(rows, dtype=float)
    if x is not None:
        features = np.hstack([features, x[lags:]])
    return features, y[lags:]


class MLPAdapter:
    """Lag-window neural forecaster.

    Args:
        lags: Number of past values fed to the network
        hidden_layer_sizes: Hidden layer widths
        n_networks: Networks trained with different seeds (median-combined)
        max_iter: Training iterations per network
        use_exog: Feed covariates as extra regressors
        random_state: Base seed; network ``i`` uses ``random_state + i``
        strict: Treat networks that hit ``max_iter`` as a fit failure
    """

    name = "mlp"

    def __init__(
        self,
        lags: int = 4,
        hidden_layer_sizes: tuple[int, ...] = (5,),
        n_networks: int = 5,
        max_iter: int = 2000,
        use_exog: bool = False,
        random_state: int = 0,
        strict: bool = False,
    ) -> None:
        if lags < 1:
            raise ValueError(f"lags must be at least 1, got {lags}")
        if n_networks < 1:
            raise ValueError(f"n_networks must be at least 1, got {n_networks}")
        self.lags = lags
        self.hidden_layer_sizes = tuple(hidden_layer_sizes)
        self.n_networks = n_networks
        self.max_iter = max_iter
        self.use_exog = use_exog
        self.random_state = random_state
        self.strict = strict

    def forecast(
        self,
        train: pd.Series,
        horizon: int,
        exog: pd.DataFrame | None = None,
        future_exog: pd.DataFrame | None = None,
        ci: bool = True,
    ) -> ForecastResult:
        nn = require_module("sklearn.neural_network", "scikit-learn")

        y = np.asarray(train, dtype=float)
        x_train, x_future = self._covariates(exog, future_exog, horizon)

        if len(y) <= self.lags + 1:
            raise FitError(
                f"Need more than {self.lags + 1} observations for {self.lags} lags",
                context={"n_obs": len(y), "lags": self.lags},
            )

        # Standardize so the network trains on a unit scale.
        center = float(y.mean())
        scale = float(y.std()) or 1.0
        z = (y - center) / scale
        features, target = _lag_matrix(z, self.lags, x_train)

        paths = np.empty((self.n_networks, horizon))
        n_unconverged = 0
        try:
            for i in range(self.n_networks):
                net = nn.MLPRegressor(
                    hidden_layer_sizes=self.hidden_layer_sizes,
                    max_iter=self.max_iter,
                    random_state=self.random_state + i,
                )
                net.fit(features, target)
                if net.n_iter_ >= self.max_iter:
                    n_unconverged += 1
                paths[i] = self._recurse(net, z, x_future, horizon)
        except Exception as exc:
            raise FitError(
                f"MLP training failed: {exc}",
                context={"lags": self.lags, "n_obs": len(y)},
            ) from exc

        if n_unconverged:
            if self.strict:
                raise FitError(
                    "MLP did not converge",
                    context={"n_networks_unconverged": n_unconverged, "max_iter": self.max_iter},
                )
            logger.debug("%d MLP networks hit max_iter", n_unconverged)

        mean = np.median(paths, axis=0) * scale + center
        return ForecastResult(
            mean=mean,
            model_name=self.name,
            metadata={"lags": self.lags, "n_networks": self.n_networks},
        )

    def _recurse(
        self,
        net: object,
        z: np.ndarray,
        x_future: np.ndarray | None,
        horizon: int,
    ) -> np.ndarray:
        history = list(z[-self.lags :])
        out = np.empty(horizon)
        for h in range(horizon):
            row = np.asarray(history[-self.lags :], dtype=float)
            if x_future is not None:
                row = np.concatenate([row, x_future[h]])
            out[h] = float(net.predict(row.reshape(1, -1))[0])
            history.append(out[h])
        return out

    def _covariates(
        self,
        exog: pd.DataFrame | None,
        future_exog: pd.DataFrame | None,
        horizon: int,
    ) -> tuple[np.ndarray | None, np.ndarray | None]:
        if not self.use_exog:
            return None, None
        if exog is None:
            raise FitError("use_exog=True but no covariates were supplied")
        if future_exog is None or len(future_exog) != horizon:
            raise FitError(
                "Covariates for the forecast horizon are required",
                context={"horizon": horizon},
            )
        return np.asarray(exog, dtype=float), np.asarray(future_exog, dtype=float)


__all__ = ["MLPAdapter"]
