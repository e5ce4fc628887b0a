"""Core data structures, configuration and errors."""

from tsase.core.config import BacktestSpec
from tsase.core.errors import (
    BacktestExhaustedError,
    ConfigError,
    DimensionError,
    FitError,
    SeriesError,
    ShapeMismatchError,
    TSASEError,
    WindowError,
)
from tsase.core.results import BacktestResult, ForecastResult, WindowFailure, WindowScore
from tsase.core.series import SeriesStore

__all__ = [
    "BacktestSpec",
    "SeriesStore",
    "ForecastResult",
    "WindowScore",
    "WindowFailure",
    "BacktestResult",
    "TSASEError",
    "ConfigError",
    "SeriesError",
    "WindowError",
    "FitError",
    "DimensionError",
    "ShapeMismatchError",
    "BacktestExhaustedError",
]
