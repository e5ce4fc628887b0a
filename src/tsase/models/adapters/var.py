"""Vector autoregression adapter backed by statsmodels.

The target and its covariates are modelled jointly; the forecast of the
target equation is returned together with its interval. Covariates are
endogenous here, so no future covariate values are needed.
"""

from __future__ import annotations

import logging

import numpy as np
import pandas as pd

from tsase.core.errors import FitError
from tsase.core.results import ForecastResult
from tsase.models.protocol import require_module

logger = logging.getLogger(__name__)


class VARAdapter:
    """Vector autoregression over target plus covariates.

    Args:
        lags: Fixed lag order; when None the order is selected by ``ic``
        maxlags: Upper bound for lag selection
        ic: Information criterion used for selection ("aic", "bic", "hqic", "fpe")
        trend: statsmodels trend spec ("c", "ct", "ctt", "n")
        alpha: Significance level of the confidence interval
        columns: Covariate columns to include (all when None)
    """

    name = "var"

    def __init__(
        self,
        lags: int | None = 1,
        maxlags: int = 5,
        ic: str = "aic",
        trend: str = "c",
        alpha: float = 0.05,
        columns: list[str] | None = None,
    ) -> None:
        if lags is not None and lags < 1:
            raise ValueError(f"lags must be at least 1, got {lags}")
        self.lags = lags
        self.maxlags = maxlags
        self.ic = ic
        self.trend = trend
        self.alpha = alpha
        self.columns = columns

    def forecast(
        self,
        train: pd.Series,
        horizon: int,
        exog: pd.DataFrame | None = None,
        future_exog: pd.DataFrame | None = None,
        ci: bool = True,
    ) -> ForecastResult:
        tsa = require_module("statsmodels.tsa.api", "statsmodels")

        if exog is None or exog.shape[1] == 0:
            raise FitError(
                "VAR requires at least one covariate column",
                fix_hint="Pass an exogenous matrix to the backtest or use a univariate adapter",
            )
        covariates = exog[self.columns] if self.columns is not None else exog
        data = np.column_stack([np.asarray(train, dtype=float), np.asarray(covariates, dtype=float)])
        n_obs, k = data.shape

        p = self.lags if self.lags is not None else self.maxlags
        if n_obs - p <= k * p + 1:
            raise FitError(
                f"VAR({p}) with {k} variables is over-parameterized for {n_obs} observations",
                context={"lags": p, "n_vars": k, "n_obs": n_obs},
            )

        try:
            model = tsa.VAR(data)
            if self.lags is not None:
                res = model.fit(self.lags, trend=self.trend)
            else:
                res = model.fit(maxlags=self.maxlags, ic=self.ic, trend=self.trend)
                if res.k_ar == 0:
                    logger.debug("VAR lag selection chose 0 lags; refitting with 1")
                    res = model.fit(1, trend=self.trend)

            context = data[-res.k_ar :]
            if ci:
                point, lower, upper = res.forecast_interval(context, steps=horizon, alpha=self.alpha)
            else:
                point, lower, upper = res.forecast(context, steps=horizon), None, None
        except Exception as exc:
            raise FitError(
                f"VAR estimation failed: {exc}",
                context={"lags": self.lags, "n_vars": k, "n_obs": n_obs},
            ) from exc

        if not np.all(np.isfinite(np.asarray(res.params, dtype=float))):
            raise FitError(
                "VAR produced non-finite coefficients",
                context={"lags": res.k_ar, "n_vars": k},
            )

        aic = float(res.aic)
        return ForecastResult(
            mean=np.asarray(point)[:, 0],
            lower=np.asarray(lower)[:, 0] if lower is not None else None,
            upper=np.asarray(upper)[:, 0] if upper is not None else None,
            score=aic if np.isfinite(aic) else None,
            model_name=self.name,
            metadata={"lags": int(res.k_ar), "n_vars": k},
        )


__all__ = ["VARAdapter"]
