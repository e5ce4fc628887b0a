"""Error types for tsase.

Every error carries a stable ``error_code``, a context dict for debugging and
an actionable ``fix_hint``. The orchestrator distinguishes window-local errors
(recorded and skipped) from run-level errors (raised to the caller).
"""

from __future__ import annotations

from typing import Any


class TSASEError(Exception):
    """Base exception with rich context.

    Attributes:
        error_code: Unique error code string for programmatic handling
        message: Human-readable error message
        context: Additional context data for debugging
        fix_hint: Actionable hint for resolving the error
    """

    error_code: str = "E_UNKNOWN"
    fix_hint: str = ""

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        fix_hint: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}
        if fix_hint:
            self.fix_hint = fix_hint

    def __str__(self) -> str:
        parts = [f"[{self.error_code}] {self.message}"]
        if self.context:
            parts.append(f"(context: {self.context})")
        if self.fix_hint:
            parts.append(f"[hint: {self.fix_hint}]")
        return " ".join(parts)

    def to_dict(self) -> dict[str, Any]:
        """Return a structured dict suitable for reports."""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "fix_hint": self.fix_hint,
            "context": self.context,
        }


class ConfigError(TSASEError):
    """Backtest configuration is malformed."""

    error_code = "E_CONFIG_INVALID"
    fix_hint = "Check the BacktestSpec fields and the model parameters"


class SeriesError(TSASEError):
    """Input series or exogenous matrix violates the store contract."""

    error_code = "E_SERIES_INVALID"
    fix_hint = "Provide a gap-free, strictly increasing index and exogenous rows aligned 1:1"


class WindowError(TSASEError):
    """Not enough history for the requested window schedule."""

    error_code = "E_WINDOW_INSUFFICIENT_HISTORY"
    fix_hint = "Reduce training_size or horizon, or provide a longer series"


class FitError(TSASEError):
    """Model estimation failed or produced non-finite output."""

    error_code = "E_FIT_FAILED"
    fix_hint = "Reduce model order / lag count or check the training slice for degenerate values"


class DimensionError(FitError):
    """Forecast or actual length does not match the requested horizon."""

    error_code = "E_DIMENSION_MISMATCH"
    fix_hint = "Adapters must return exactly `horizon` point forecasts"


class ShapeMismatchError(TSASEError):
    """Ensemble inputs do not share the same horizon."""

    error_code = "E_SHAPE_MISMATCH"
    fix_hint = "Only combine forecasts produced for the same horizon"


class BacktestExhaustedError(TSASEError):
    """No backtest window produced a usable forecast."""

    error_code = "E_BACKTEST_EXHAUSTED"
    fix_hint = "Inspect context['failures'] for the per-window reasons"


ERROR_REGISTRY: dict[str, type[TSASEError]] = {
    cls.error_code: cls
    for cls in (
        ConfigError,
        SeriesError,
        WindowError,
        FitError,
        DimensionError,
        ShapeMismatchError,
        BacktestExhaustedError,
    )
}


def get_error_class(error_code: str) -> type[TSASEError]:
    """Get error class by code."""
    return ERROR_REGISTRY.get(error_code, TSASEError)


__all__ = [
    "TSASEError",
    "ConfigError",
    "SeriesError",
    "WindowError",
    "FitError",
    "DimensionError",
    "ShapeMismatchError",
    "BacktestExhaustedError",
    "ERROR_REGISTRY",
    "get_error_class",
]
