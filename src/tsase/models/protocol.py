"""Forecast adapter protocol.

Model families with incompatible native APIs are exposed to the backtest
engine through one capability: ``forecast(train, horizon, ...)``. Adapters
share no base class; anything with a matching ``forecast`` method and a
``name`` attribute qualifies.
"""

from __future__ import annotations

import importlib
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

import numpy as np

from tsase.core.errors import DimensionError, FitError

if TYPE_CHECKING:
    import pandas as pd

    from tsase.core.results import ForecastResult


@runtime_checkable
class ForecastAdapter(Protocol):
    """Uniform fit-and-forecast capability over one model family.

    Implementations must fit from scratch on every call, return exactly
    ``horizon`` point forecasts, return ``None`` bounds when intervals are
    unsupported or not requested, and raise ``FitError`` instead of returning
    partial or non-finite output.
    """

    name: str

    def forecast(
        self,
        train: pd.Series,
        horizon: int,
        exog: pd.DataFrame | None = None,
        future_exog: pd.DataFrame | None = None,
        ci: bool = True,
    ) -> ForecastResult:
        """Fit on ``train`` and forecast ``horizon`` steps ahead.

        Args:
            train: Training observations
            horizon: Number of steps to forecast
            exog: Covariates aligned with ``train``
            future_exog: Covariates for the forecast horizon
            ci: Whether to compute confidence bounds
        """
        ...


def validate_forecast(result: ForecastResult, horizon: int) -> ForecastResult:
    """Check an adapter's output against the contract.

    Raises:
        DimensionError: If any sequence length differs from ``horizon``
        FitError: If forecasts or bounds are non-finite, or only one bound is set
    """
    context = {"model": result.model_name, "horizon": horizon}

    if len(result.mean) != horizon:
        raise DimensionError(
            f"Model returned {len(result.mean)} forecasts for horizon {horizon}",
            context={**context, "n_forecasts": len(result.mean)},
        )
    if not np.all(np.isfinite(result.mean)):
        raise FitError(
            "Model produced non-finite point forecasts",
            context={**context, "n_nonfinite": int((~np.isfinite(result.mean)).sum())},
        )

    if (result.lower is None) != (result.upper is None):
        raise FitError(
            "Model returned only one confidence bound",
            context=context,
        )
    if result.has_interval:
        for label, bound in (("lower", result.lower), ("upper", result.upper)):
            if len(bound) != horizon:
                raise DimensionError(
                    f"{label} bound has {len(bound)} values for horizon {horizon}",
                    context=context,
                )
            if not np.all(np.isfinite(bound)):
                raise FitError(
                    f"Model produced non-finite {label} bounds",
                    context=context,
                )

    return result


def require_module(module: str, package: str | None = None) -> Any:
    """Import an optional model library or fail with an install hint."""
    try:
        return importlib.import_module(module)
    except ImportError as exc:
        raise ImportError(
            f"{package or module} is required for this adapter. "
            f"Install with: pip install {package or module}"
        ) from exc


__all__ = ["ForecastAdapter", "validate_forecast", "require_module"]
