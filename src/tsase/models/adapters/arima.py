"""ARIMA / ARUMA adapter backed by statsmodels.

Supports estimated models as well as filters with explicit AR/MA
coefficients. When coefficients are given they are held fixed and only the
innovation variance is estimated, so the forecast (and its interval) is the
one implied by the supplied filter. Seasonal behaviour is expressed as a
seasonal difference ``(1 - B^s)``.

Coefficients follow the statsmodels sign convention:
``(1 - ar_1 B - ...) (1 - B)^d (1 - B^s) y_t = (1 + ma_1 B + ...) a_t``.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

import numpy as np
import pandas as pd

from tsase.core.errors import FitError
from tsase.core.results import ForecastResult
from tsase.models.protocol import require_module

logger = logging.getLogger(__name__)


def optimizer_converged(res: Any) -> bool:
    """Whether a statsmodels fit reports a converged optimizer.

    Results without optimizer diagnostics count as converged.
    """
    retvals = getattr(res, "mle_retvals", None) or {}
    return bool(retvals.get("converged", True))


class ARIMAAdapter:
    """Autoregressive integrated moving-average forecaster.

    Args:
        order: ``(p, d, q)``; ``p``/``q`` are inferred from ``ar``/``ma`` when given.
            Defaults to ``(1, 0, 0)``, or ``(0, 0, 0)`` plus the coefficient
            counts when ``ar``/``ma`` are supplied
        ar: Fixed AR coefficients (estimated when None)
        ma: Fixed MA coefficients (estimated when None)
        seasonal_period: Apply a seasonal difference of this period
        trend: statsmodels trend spec ("n", "c", "t", "ct")
        alpha: Significance level of the confidence interval
        use_exog: Regress on covariates (requires future covariates to forecast)
        strict: Treat an unconverged optimizer as a fit failure
    """

    name = "arima"

    def __init__(
        self,
        order: tuple[int, int, int] | None = None,
        ar: Sequence[float] | None = None,
        ma: Sequence[float] | None = None,
        seasonal_period: int | None = None,
        trend: str | None = None,
        alpha: float = 0.05,
        use_exog: bool = False,
        strict: bool = False,
    ) -> None:
        if order is None:
            order = (0, 0, 0) if ar is not None or ma is not None else (1, 0, 0)
        p, d, q = order
        if ar is not None:
            if p not in (0, len(ar)):
                raise ValueError(f"order p={p} does not match {len(ar)} AR coefficients")
            p = len(ar)
        if ma is not None:
            if q not in (0, len(ma)):
                raise ValueError(f"order q={q} does not match {len(ma)} MA coefficients")
            q = len(ma)
        if min(p, d, q) < 0:
            raise ValueError(f"order must be non-negative, got {(p, d, q)}")
        if seasonal_period is not None and seasonal_period < 2:
            raise ValueError(f"seasonal_period must be >= 2, got {seasonal_period}")

        self.order = (p, d, q)
        self.ar = list(ar) if ar is not None else None
        self.ma = list(ma) if ma is not None else None
        self.seasonal_period = seasonal_period
        self.trend = trend
        self.alpha = alpha
        self.use_exog = use_exog
        self.strict = strict

    @property
    def seasonal_order(self) -> tuple[int, int, int, int]:
        if self.seasonal_period is None:
            return (0, 0, 0, 0)
        return (0, 1, 0, self.seasonal_period)

    def _fixed_params(self) -> dict[str, float]:
        fixed: dict[str, float] = {}
        if self.ar is not None:
            fixed.update({f"ar.L{i + 1}": float(c) for i, c in enumerate(self.ar)})
        if self.ma is not None:
            fixed.update({f"ma.L{i + 1}": float(c) for i, c in enumerate(self.ma)})
        return fixed

    def forecast(
        self,
        train: pd.Series,
        horizon: int,
        exog: pd.DataFrame | None = None,
        future_exog: pd.DataFrame | None = None,
        ci: bool = True,
    ) -> ForecastResult:
        arima_mod = require_module("statsmodels.tsa.arima.model", "statsmodels")

        endog = np.asarray(train, dtype=float)
        x_train, x_future = self._exog_arrays(exog, future_exog, horizon)
        fixed = self._fixed_params()

        try:
            model = arima_mod.ARIMA(
                endog,
                exog=x_train,
                order=self.order,
                seasonal_order=self.seasonal_order,
                trend=self.trend,
                enforce_stationarity=not fixed,
                enforce_invertibility=not fixed,
            )
            res = model.fit_constrained(fixed) if fixed else model.fit()
            pred = res.get_forecast(steps=horizon, exog=x_future)
            mean = np.asarray(pred.predicted_mean, dtype=float)
            bounds = np.asarray(pred.conf_int(alpha=self.alpha), dtype=float) if ci else None
        except Exception as exc:
            raise FitError(
                f"ARIMA{self.order} estimation failed: {exc}",
                context={"order": self.order, "n_obs": len(endog)},
            ) from exc

        # Convergence comes from the result; warnings state is shared across threads.
        if not optimizer_converged(res):
            if self.strict:
                raise FitError(
                    f"ARIMA{self.order} did not converge",
                    context={"order": self.order, "n_obs": len(endog)},
                )
            logger.debug("ARIMA%s optimizer did not converge", self.order)

        if not np.all(np.isfinite(np.asarray(res.params, dtype=float))):
            raise FitError(
                f"ARIMA{self.order} produced non-finite coefficients",
                context={"params": [float(v) for v in np.asarray(res.params)]},
            )

        aic = float(res.aic)
        return ForecastResult(
            mean=mean,
            lower=bounds[:, 0] if bounds is not None else None,
            upper=bounds[:, 1] if bounds is not None else None,
            score=aic if np.isfinite(aic) else None,
            model_name=self.name,
            metadata={"order": self.order, "seasonal_order": self.seasonal_order},
        )

    def _exog_arrays(
        self,
        exog: pd.DataFrame | None,
        future_exog: pd.DataFrame | None,
        horizon: int,
    ) -> tuple[Any, Any]:
        if not self.use_exog:
            return None, None
        if exog is None:
            raise FitError("use_exog=True but no covariates were supplied")
        if future_exog is None or len(future_exog) != horizon:
            raise FitError(
                "Covariates for the forecast horizon are required",
                context={"horizon": horizon, "n_future": 0 if future_exog is None else len(future_exog)},
            )
        return np.asarray(exog, dtype=float), np.asarray(future_exog, dtype=float)


__all__ = ["ARIMAAdapter", "optimizer_converged"]
