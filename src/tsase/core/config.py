"""Backtest configuration.

A single frozen pydantic spec holds every option the orchestrator
recognizes. Validation failures are surfaced as ``ConfigError``.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from tsase.core.errors import ConfigError


class BaseSpec(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)


class BacktestSpec(BaseSpec):
    """Configuration for one rolling-window backtest run.

    Args:
        training_size: Observations in each training slice
        horizon: Steps forecast (and scored) per window
        model: Registry name of the adapter used when none is passed directly
        model_params: Keyword arguments for the registry adapter
        ci: Whether adapters should produce confidence intervals
        max_failures: Stop scheduling further windows after this many failures
        n_jobs: Number of worker threads for window evaluation (1 = sequential)
    """

    training_size: int = Field(..., gt=0)
    horizon: int = Field(..., gt=0)
    model: str = "naive"
    model_params: dict[str, Any] = Field(default_factory=dict)
    ci: bool = True
    max_failures: int | None = Field(None, gt=0)
    n_jobs: int = Field(1, ge=1)

    @classmethod
    def from_kwargs(cls, **kwargs: Any) -> BacktestSpec:
        """Build a spec, converting validation failures into ``ConfigError``."""
        try:
            return cls(**kwargs)
        except ValidationError as exc:
            raise ConfigError(
                "Invalid backtest configuration",
                context={
                    "errors": [
                        {"field": ".".join(str(p) for p in err["loc"]), "msg": err["msg"]}
                        for err in exc.errors()
                    ]
                },
            ) from exc

    @property
    def window_length(self) -> int:
        """Total observations consumed by one train/test window."""
        return self.training_size + self.horizon


__all__ = ["BacktestSpec"]
