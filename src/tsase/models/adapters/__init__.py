"""Forecast adapters for the supported model families."""

from .arima import ARIMAAdapter
from .mlp import MLPAdapter
from .naive import NaiveAdapter
from .signal_noise import SignalPlusNoiseAdapter
from .var import VARAdapter

__all__ = [
    "ARIMAAdapter",
    "MLPAdapter",
    "NaiveAdapter",
    "SignalPlusNoiseAdapter",
    "VARAdapter",
]
