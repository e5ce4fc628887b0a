"""tsase - rolling-window ASE backtesting for heterogeneous forecasters.

Scores autoregressive, signal-plus-noise, neural and vector-autoregressive
models against one observed series with a uniform backtest protocol.

Basic usage:
    >>> from tsase import rolling_backtest
    >>> result = rolling_backtest(y, {"training_size": 48, "horizon": 6, "model": "arima"})
    >>> result.mean_score

Custom adapters:
    >>> from tsase import ARIMAAdapter, BacktestSpec
    >>> spec = BacktestSpec(training_size=48, horizon=6)
    >>> result = rolling_backtest(y, spec, adapter=ARIMAAdapter(order=(2, 1, 0)))
    >>> result.comparison[["actual", "predicted"]]

Ensembles:
    >>> from tsase import EnsembleAdapter, MLPAdapter, VARAdapter
    >>> ensemble = EnsembleAdapter([MLPAdapter(use_exog=True), VARAdapter(lags=2)])
    >>> result = rolling_backtest(y, spec, adapter=ensemble, exog=x)
"""

__version__ = "0.3.0"

from tsase.backtest import (
    Window,
    aggregate,
    ase,
    evaluate_window,
    rolling_backtest,
    schedule_windows,
)
from tsase.core import (
    BacktestExhaustedError,
    BacktestResult,
    BacktestSpec,
    ConfigError,
    DimensionError,
    FitError,
    ForecastResult,
    SeriesError,
    SeriesStore,
    ShapeMismatchError,
    TSASEError,
    WindowError,
    WindowFailure,
    WindowScore,
)
from tsase.models import (
    REGISTRY,
    ARIMAAdapter,
    EnsembleAdapter,
    ForecastAdapter,
    MLPAdapter,
    NaiveAdapter,
    SignalPlusNoiseAdapter,
    VARAdapter,
    combine,
    create_adapter,
    list_models,
)

__all__ = [
    "__version__",
    # Backtest
    "rolling_backtest",
    "evaluate_window",
    "schedule_windows",
    "Window",
    "ase",
    "aggregate",
    # Data / config / results
    "BacktestSpec",
    "SeriesStore",
    "ForecastResult",
    "WindowScore",
    "WindowFailure",
    "BacktestResult",
    # Models
    "ForecastAdapter",
    "NaiveAdapter",
    "ARIMAAdapter",
    "SignalPlusNoiseAdapter",
    "MLPAdapter",
    "VARAdapter",
    "EnsembleAdapter",
    "combine",
    "REGISTRY",
    "create_adapter",
    "list_models",
    # Errors
    "TSASEError",
    "ConfigError",
    "SeriesError",
    "WindowError",
    "FitError",
    "DimensionError",
    "ShapeMismatchError",
    "BacktestExhaustedError",
]
