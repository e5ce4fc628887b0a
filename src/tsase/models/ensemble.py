"""Ensemble utilities for combining multiple model forecasts.

Forecasts are combined by simple elementwise averaging. Confidence bounds
are averaged the same way, and only when every member reports them; the
result is a convenience average, not a pooled-variance interval.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

import numpy as np

from tsase.core.errors import ShapeMismatchError
from tsase.core.results import ForecastResult
from tsase.models.protocol import validate_forecast

if TYPE_CHECKING:
    import pandas as pd

    from tsase.models.protocol import ForecastAdapter

logger = logging.getLogger(__name__)


def combine(
    results: Sequence[ForecastResult],
    model_name: str = "mean_ensemble",
) -> ForecastResult:
    """Average point forecasts (and bounds, if all have them).

    Args:
        results: Forecasts produced for the same horizon
        model_name: Name given to the combined forecast

    Returns:
        ForecastResult with the elementwise mean

    Raises:
        ValueError: If ``results`` is empty
        ShapeMismatchError: If horizons differ
    """
    if not results:
        raise ValueError("No forecasts provided for ensemble")

    horizons = [r.horizon for r in results]
    if len(set(horizons)) != 1:
        raise ShapeMismatchError(
            "Cannot combine forecasts with different horizons",
            context={"horizons": {r.model_name: r.horizon for r in results}, "all": horizons},
        )

    mean = np.mean(np.vstack([r.mean for r in results]), axis=0)

    lower = upper = None
    if all(r.has_interval for r in results):
        lower = np.mean(np.vstack([r.lower for r in results]), axis=0)
        upper = np.mean(np.vstack([r.upper for r in results]), axis=0)

    return ForecastResult(
        mean=mean,
        lower=lower,
        upper=upper,
        model_name=model_name,
        metadata={"members": [r.model_name for r in results]},
    )


class EnsembleAdapter:
    """Adapter that forecasts with every member and averages the results.

    All members must succeed; a member failure fails the window.
    """

    def __init__(
        self,
        adapters: Sequence[ForecastAdapter],
        name: str = "mean_ensemble",
    ) -> None:
        if not adapters:
            raise ValueError("EnsembleAdapter needs at least one member adapter")
        self.adapters = list(adapters)
        self.name = name

    def forecast(
        self,
        train: pd.Series,
        horizon: int,
        exog: pd.DataFrame | None = None,
        future_exog: pd.DataFrame | None = None,
        ci: bool = True,
    ) -> ForecastResult:
        members = []
        for adapter in self.adapters:
            result = adapter.forecast(
                train,
                horizon,
                exog=exog,
                future_exog=future_exog,
                ci=ci,
            )
            members.append(validate_forecast(result, horizon))

        if ci and not all(m.has_interval for m in members):
            logger.debug(
                "Ensemble %s: dropping interval, members without bounds: %s",
                self.name,
                [m.model_name for m in members if not m.has_interval],
            )
        return combine(members, model_name=self.name)


__all__ = ["combine", "EnsembleAdapter"]
