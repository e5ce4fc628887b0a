"""Adapter registry - single source of truth for selectable models.

Maps the ``model`` name of a ``BacktestSpec`` to the adapter that implements
it. Adding a new model requires only adding an entry here.
"""

from __future__ import annotations

import importlib
from dataclasses import dataclass
from typing import Any

from tsase.models.protocol import ForecastAdapter


@dataclass(frozen=True)
class AdapterSpec:
    """Specification for a selectable adapter.

    Attributes:
        name: Unique model identifier
        adapter_path: ``module:Class`` import path of the adapter
        supports_interval: Whether the model can produce confidence bounds
        requires_exog: Whether the model cannot run without covariates
    """

    name: str
    adapter_path: str
    supports_interval: bool
    requires_exog: bool = False


REGISTRY: dict[str, AdapterSpec] = {
    "naive": AdapterSpec(
        name="naive",
        adapter_path="tsase.models.adapters.naive:NaiveAdapter",
        supports_interval=True,
    ),
    "arima": AdapterSpec(
        name="arima",
        adapter_path="tsase.models.adapters.arima:ARIMAAdapter",
        supports_interval=True,
    ),
    "signal_plus_noise": AdapterSpec(
        name="signal_plus_noise",
        adapter_path="tsase.models.adapters.signal_noise:SignalPlusNoiseAdapter",
        supports_interval=False,
    ),
    "mlp": AdapterSpec(
        name="mlp",
        adapter_path="tsase.models.adapters.mlp:MLPAdapter",
        supports_interval=False,
    ),
    "var": AdapterSpec(
        name="var",
        adapter_path="tsase.models.adapters.var:VARAdapter",
        supports_interval=True,
        requires_exog=True,
    ),
}


def list_models() -> list[str]:
    """List registered model names."""
    return list(REGISTRY)


def get_spec(name: str) -> AdapterSpec:
    """Get adapter specification by name.

    Raises:
        KeyError: If model not found in registry
    """
    if name not in REGISTRY:
        available = ", ".join(list_models())
        raise KeyError(f"Model '{name}' not found. Available: {available}")
    return REGISTRY[name]


def create_adapter(name: str, **params: Any) -> ForecastAdapter:
    """Instantiate the adapter registered under ``name``."""
    spec = get_spec(name)
    module_path, class_name = spec.adapter_path.split(":")
    adapter_cls = getattr(importlib.import_module(module_path), class_name)
    return adapter_cls(**params)


__all__ = [
    "AdapterSpec",
    "REGISTRY",
    "list_models",
    "get_spec",
    "create_adapter",
]
