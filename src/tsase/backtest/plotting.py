"""Rendering of backtest results.

Pure consumer of ``BacktestResult``; the engine never calls into this
module. matplotlib is imported lazily so the core runs without it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from tsase.models.protocol import require_module

if TYPE_CHECKING:
    from tsase.core.results import BacktestResult


def plot_backtest(
    result: BacktestResult,
    ax: Any | None = None,
    title: str | None = None,
    show_interval: bool = True,
) -> Any:
    """Plot actual values against stitched forecasts.

    Args:
        result: Output of ``rolling_backtest``
        ax: Existing matplotlib Axes (a new figure is created when None)
        title: Axes title; defaults to the model name and mean ASE
        show_interval: Shade the confidence band where it is available

    Returns:
        The matplotlib Axes drawn on
    """
    if ax is None:
        plt = require_module("matplotlib.pyplot", "matplotlib")
        _, ax = plt.subplots(figsize=(10, 4))

    frame = result.comparison
    ax.plot(frame.index, frame["actual"], color="black", linewidth=1.0, label="actual")
    ax.plot(frame.index, frame["predicted"], color="tab:blue", linewidth=1.5, label="predicted")

    if show_interval and result.has_interval:
        ax.fill_between(
            frame.index,
            frame["lower"].to_numpy(dtype=float),
            frame["upper"].to_numpy(dtype=float),
            color="tab:blue",
            alpha=0.2,
            label="interval",
        )

    for score in result.scores:
        ax.axvline(frame.index[score.window.test_start - 1], color="grey", linestyle=":", linewidth=0.8)

    ax.set_title(title or f"{result.model_name}: mean ASE {result.mean_score:.4g}")
    ax.legend(loc="best")
    return ax


__all__ = ["plot_backtest"]
