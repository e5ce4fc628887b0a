"""Rolling window backtest engine.

Drives the window schedule, calls the forecast adapter on each training
slice, scores the forecast against the held-out block and stitches the
forecasts back onto the original index for plotting.

Window-local failures (``FitError``, ``DimensionError``, ``WindowError``) are
recorded and the run continues; only configuration errors and a run in which
no window succeeds are raised to the caller.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping, Sequence
from concurrent.futures import ThreadPoolExecutor
from contextlib import closing
from typing import Any

import numpy as np
import pandas as pd

from tsase.core.config import BacktestSpec
from tsase.core.errors import (
    BacktestExhaustedError,
    ConfigError,
    FitError,
    TSASEError,
    WindowError,
)
from tsase.core.results import BacktestResult, ForecastResult, WindowFailure, WindowScore
from tsase.core.series import SeriesStore
from tsase.models.protocol import ForecastAdapter, validate_forecast
from tsase.models.registry import create_adapter, get_spec

from .metrics import aggregate, ase
from .windows import Window, schedule_windows

logger = logging.getLogger(__name__)

_FORECAST_COLUMNS = ("predicted", "lower", "upper")


def rolling_backtest(
    series: pd.Series | SeriesStore | Any,
    spec: BacktestSpec | Mapping[str, Any],
    adapter: ForecastAdapter | None = None,
    exog: pd.DataFrame | Any | None = None,
) -> BacktestResult:
    """Execute a rolling-window ASE backtest.

    Args:
        series: Observed series (or a prepared ``SeriesStore``)
        spec: Backtest configuration, or a mapping of its fields
        adapter: Forecast adapter; resolved from ``spec.model`` when None
        exog: Covariates aligned with ``series``

    Returns:
        BacktestResult with per-window scores, failures and the stitched
        comparison frame

    Raises:
        ConfigError: If the configuration or adapter is invalid
        BacktestExhaustedError: If no window could be evaluated
    """
    spec = _resolve_spec(spec)
    store = _resolve_store(series, exog)
    adapter = _resolve_adapter(adapter, spec, store)
    model_name = getattr(adapter, "name", type(adapter).__name__)

    try:
        windows = schedule_windows(len(store), spec.training_size, spec.horizon)
    except WindowError as exc:
        raise BacktestExhaustedError(
            "No backtest window could be scheduled",
            context={"reason": exc.message, **exc.context},
        ) from exc

    logger.info(
        "Backtesting %s over %d windows (training_size=%d, horizon=%d)",
        model_name,
        len(windows),
        spec.training_size,
        spec.horizon,
    )

    scores: list[WindowScore] = []
    failures: list[WindowFailure] = []
    stopped_early = False

    with closing(_run_windows(store, windows, adapter, spec)) as outcomes:
        for outcome in outcomes:
            if isinstance(outcome, WindowFailure):
                failures.append(outcome)
                logger.warning(
                    "Window %d (test %d..%d) failed: [%s] %s",
                    outcome.window.index,
                    outcome.window.test_start,
                    outcome.window.test_stop,
                    outcome.error_code,
                    outcome.message,
                )
                if spec.max_failures is not None and len(failures) >= spec.max_failures:
                    stopped_early = len(scores) + len(failures) < len(windows)
                    if stopped_early:
                        logger.warning(
                            "Reached max_failures=%d; skipping remaining windows",
                            spec.max_failures,
                        )
                    break
            else:
                scores.append(outcome)
                logger.debug("Window %d ASE=%.6g", outcome.window.index, outcome.ase)

    if not scores:
        raise BacktestExhaustedError(
            f"All {len(failures)} evaluated windows failed for model '{model_name}'",
            context={"failures": [f.to_dict() for f in failures]},
        )

    logger.info(
        "Backtest of %s done: mean ASE=%.6g over %d windows (%d failed)",
        model_name,
        aggregate([s.ase for s in scores]),
        len(scores),
        len(failures),
    )

    return BacktestResult(
        scores=scores,
        failures=failures,
        comparison=_stitch(store, scores),
        model_name=model_name,
        metadata={
            "training_size": spec.training_size,
            "horizon": spec.horizon,
            "ci": spec.ci,
            "n_scheduled": len(windows),
            "stopped_early": stopped_early,
        },
    )


def evaluate_window(
    store: SeriesStore,
    window: Window,
    adapter: ForecastAdapter,
    horizon: int,
    ci: bool = True,
) -> WindowScore:
    """Fit, forecast and score a single window.

    Raises:
        WindowError: If the window falls outside the series
        FitError: If the adapter fails or violates its contract
    """
    if window.train_start < 1 or window.test_stop > len(store):
        raise WindowError(
            f"Window {window.index} falls outside the series",
            context={**window.to_dict(), "n_obs": len(store)},
        )

    train_y, train_x = store.train(window)
    actual, future_x = store.test(window)

    try:
        result = adapter.forecast(
            train_y,
            horizon,
            exog=train_x,
            future_exog=future_x,
            ci=ci,
        )
    except (TSASEError, ImportError):
        raise
    except Exception as exc:
        raise FitError(
            f"{type(exc).__name__}: {exc}",
            context={"window_index": window.index},
        ) from exc

    if not isinstance(result, ForecastResult):
        raise FitError(
            f"Adapter returned {type(result).__name__}, expected ForecastResult",
            context={"window_index": window.index},
            fix_hint="forecast() must return a tsase ForecastResult",
        )
    result = validate_forecast(result, horizon)
    if not ci and result.has_interval:
        result = result.without_interval()

    return WindowScore(
        window=window,
        ase=ase(result.mean, actual.to_numpy(), horizon=horizon),
        forecast=result,
    )


def _run_windows(
    store: SeriesStore,
    windows: list[Window],
    adapter: ForecastAdapter,
    spec: BacktestSpec,
) -> Iterator[WindowScore | WindowFailure]:
    """Yield window outcomes in schedule order."""

    def run_one(window: Window) -> WindowScore | WindowFailure:
        try:
            return evaluate_window(store, window, adapter, spec.horizon, ci=spec.ci)
        except (FitError, WindowError) as exc:
            return WindowFailure(
                window=window,
                error_code=exc.error_code,
                error_type=type(exc).__name__,
                message=exc.message,
            )

    if spec.n_jobs == 1 or len(windows) <= 1:
        yield from (run_one(w) for w in windows)
        return

    # Results are yielded in submission order so output matches sequential runs.
    # Closing the generator early cancels windows that have not started.
    executor = ThreadPoolExecutor(max_workers=spec.n_jobs)
    futures = [executor.submit(run_one, w) for w in windows]
    try:
        for future in futures:
            yield future.result()
    finally:
        executor.shutdown(wait=True, cancel_futures=True)


def _stitch(store: SeriesStore, scores: Sequence[WindowScore]) -> pd.DataFrame:
    """Align forecasts to the series index; NaN outside test regions.

    Test blocks only overlap when ``horizon > training_size``; the most
    recent window then wins.
    """
    frame = pd.DataFrame({"actual": store.y}, index=store.index)
    for col in _FORECAST_COLUMNS:
        frame[col] = np.nan
    frame["window"] = pd.array([pd.NA] * len(frame), dtype="Int64")

    for score in reversed(scores):
        positions = np.arange(score.window.test_start - 1, score.window.test_stop)
        forecast = score.forecast
        frame.iloc[positions, frame.columns.get_loc("predicted")] = forecast.mean
        if forecast.has_interval:
            frame.iloc[positions, frame.columns.get_loc("lower")] = forecast.lower
            frame.iloc[positions, frame.columns.get_loc("upper")] = forecast.upper
        frame.iloc[positions, frame.columns.get_loc("window")] = score.window.index

    return frame


def _resolve_spec(spec: BacktestSpec | Mapping[str, Any]) -> BacktestSpec:
    if isinstance(spec, BacktestSpec):
        return spec
    if isinstance(spec, Mapping):
        return BacktestSpec.from_kwargs(**spec)
    raise ConfigError(
        f"spec must be a BacktestSpec or mapping, got {type(spec).__name__}",
    )


def _resolve_store(series: Any, exog: Any | None) -> SeriesStore:
    if isinstance(series, SeriesStore):
        if exog is not None:
            raise ConfigError(
                "Pass covariates either inside the SeriesStore or as exog, not both",
                fix_hint="Drop the exog argument or build the store without covariates",
            )
        return series
    return SeriesStore.from_series(series, exog)


def _resolve_adapter(
    adapter: ForecastAdapter | None,
    spec: BacktestSpec,
    store: SeriesStore,
) -> ForecastAdapter:
    if adapter is None:
        try:
            entry = get_spec(spec.model)
        except KeyError as exc:
            raise ConfigError(
                str(exc.args[0]),
                context={"model": spec.model},
                fix_hint="Choose a name from tsase.list_models() or pass an adapter instance",
            ) from exc
        if entry.requires_exog and not store.has_exog:
            raise ConfigError(
                f"Model '{spec.model}' needs covariates but none were supplied",
                context={"model": spec.model},
                fix_hint="Pass exog to rolling_backtest",
            )
        if spec.ci and not entry.supports_interval:
            logger.info("Model %s produces no confidence interval", spec.model)
        try:
            adapter = create_adapter(spec.model, **spec.model_params)
        except (TypeError, ValueError) as exc:
            raise ConfigError(
                f"Invalid parameters for model '{spec.model}': {exc}",
                context={"model_params": spec.model_params},
                fix_hint=f"See the {entry.adapter_path} constructor for accepted parameters",
            ) from exc

    if not isinstance(adapter, ForecastAdapter):
        raise ConfigError(
            f"{type(adapter).__name__} does not implement forecast()",
            fix_hint="Adapters need a `name` attribute and a forecast(train, horizon, ...) method",
        )
    return adapter


__all__ = ["rolling_backtest", "evaluate_window"]
