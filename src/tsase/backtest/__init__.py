"""Backtest module for tsase.

Provides the backward-walking window schedule, ASE scoring and the rolling
backtest engine.
"""

from .engine import evaluate_window, rolling_backtest
from .metrics import aggregate, ase
from .windows import Window, count_windows, schedule_windows

__all__ = [
    # Engine
    "rolling_backtest",
    "evaluate_window",
    # Windows
    "Window",
    "schedule_windows",
    "count_windows",
    # Metrics
    "ase",
    "aggregate",
]
