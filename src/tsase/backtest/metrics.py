"""Average squared error scoring.

ASE is deliberately unnormalized: scores are only comparable between models
forecasting the same target series.
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from tsase.core.errors import DimensionError


def ase(
    predicted: Sequence[float] | np.ndarray,
    actual: Sequence[float] | np.ndarray,
    horizon: int | None = None,
) -> float:
    """Average Squared Error over one forecast horizon.

    Args:
        predicted: Forecast values
        actual: Observed values
        horizon: Expected length of both sequences (optional)

    Returns:
        Mean of the elementwise squared differences

    Raises:
        DimensionError: If the lengths differ, are zero, or differ from ``horizon``
    """
    y_pred = np.asarray(predicted, dtype=float).reshape(-1)
    y_true = np.asarray(actual, dtype=float).reshape(-1)

    if len(y_pred) != len(y_true) or len(y_true) == 0:
        raise DimensionError(
            "Predicted and actual lengths differ",
            context={"n_predicted": len(y_pred), "n_actual": len(y_true)},
        )
    if horizon is not None and len(y_true) != horizon:
        raise DimensionError(
            f"Expected {horizon} values, got {len(y_true)}",
            context={"horizon": horizon, "n_values": len(y_true)},
        )

    return float(np.mean((y_pred - y_true) ** 2))


def aggregate(scores: Sequence[float] | np.ndarray) -> float:
    """Arithmetic mean of per-window scores.

    Raises:
        ValueError: If ``scores`` is empty
    """
    values = np.asarray(scores, dtype=float).reshape(-1)
    if len(values) == 0:
        raise ValueError("Cannot aggregate an empty list of scores")
    return float(np.mean(values))


__all__ = ["ase", "aggregate"]
