"""Models module for tsase.

Adapters, the adapter registry and the ensemble combiner.
"""

from .adapters import (
    ARIMAAdapter,
    MLPAdapter,
    NaiveAdapter,
    SignalPlusNoiseAdapter,
    VARAdapter,
)
from .ensemble import EnsembleAdapter, combine
from .protocol import ForecastAdapter, validate_forecast
from .registry import REGISTRY, AdapterSpec, create_adapter, get_spec, list_models

__all__ = [
    # Protocol
    "ForecastAdapter",
    "validate_forecast",
    # Adapters
    "ARIMAAdapter",
    "MLPAdapter",
    "NaiveAdapter",
    "SignalPlusNoiseAdapter",
    "VARAdapter",
    # Ensemble
    "combine",
    "EnsembleAdapter",
    # Registry
    "REGISTRY",
    "AdapterSpec",
    "create_adapter",
    "get_spec",
    "list_models",
]
