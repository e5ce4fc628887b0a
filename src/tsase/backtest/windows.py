"""Window scheduling for rolling ASE backtests.

Windows are laid out backward from the end of the series. Each step moves the
test block back by ``training_size`` (not ``training_size + horizon``), so a
window's test block overlaps the training block of the window scheduled
before it. This keeps the number of evaluated windows at
``floor(n / (training_size + horizon))`` for a fixed series length.

Positions are 1-based and inclusive.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from tsase.core.errors import ConfigError, WindowError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Window:
    """One train/test split expressed as 1-based inclusive positions.

    Attributes:
        index: Position of the window in the schedule (0 = latest)
        train_start: First training position
        train_stop: Last training position
        test_start: First test position (``train_stop + 1``)
        test_stop: Last test position
    """

    index: int
    train_start: int
    train_stop: int
    test_start: int
    test_stop: int

    @property
    def training_size(self) -> int:
        return self.train_stop - self.train_start + 1

    @property
    def horizon(self) -> int:
        return self.test_stop - self.test_start + 1

    @property
    def train_slice(self) -> slice:
        """Zero-based slice selecting the training positions."""
        return slice(self.train_start - 1, self.train_stop)

    @property
    def test_slice(self) -> slice:
        """Zero-based slice selecting the test positions."""
        return slice(self.test_start - 1, self.test_stop)

    def to_dict(self) -> dict[str, Any]:
        return {
            "window_index": self.index,
            "train_start": self.train_start,
            "train_stop": self.train_stop,
            "test_start": self.test_start,
            "test_stop": self.test_stop,
        }


def count_windows(n: int, training_size: int, horizon: int) -> int:
    """Number of windows the schedule produces for a series of length ``n``."""
    return n // (training_size + horizon)


def schedule_windows(n: int, training_size: int, horizon: int) -> list[Window]:
    """Compute the backward-walking window schedule.

    Args:
        n: Series length
        training_size: Observations per training slice
        horizon: Observations per test slice

    Returns:
        Windows in schedule order, latest test block first

    Raises:
        ConfigError: If ``training_size`` or ``horizon`` is not positive
        WindowError: If the series cannot hold a single full window, or a
            scheduled window would start before the first observation
    """
    if training_size <= 0 or horizon <= 0:
        raise ConfigError(
            "training_size and horizon must be positive",
            context={"training_size": training_size, "horizon": horizon},
            fix_hint="training_size and horizon must be positive integers",
        )

    n_windows = count_windows(n, training_size, horizon)
    if n_windows == 0:
        raise WindowError(
            f"Series of length {n} is shorter than one window "
            f"({training_size} + {horizon})",
            context={"n_obs": n, "training_size": training_size, "horizon": horizon},
        )

    windows: list[Window] = []
    test_stop = n
    for i in range(n_windows):
        test_start = test_stop - horizon + 1
        train_stop = test_start - 1
        train_start = train_stop - training_size + 1
        if train_start < 1:
            raise WindowError(
                f"Window {i} would start at position {train_start}",
                context={
                    "window_index": i,
                    "train_start": train_start,
                    "n_obs": n,
                    "n_windows_requested": n_windows,
                },
            )
        windows.append(
            Window(
                index=i,
                train_start=train_start,
                train_stop=train_stop,
                test_start=test_start,
                test_stop=test_stop,
            )
        )
        test_stop -= training_size

    logger.debug(
        "Scheduled %d windows (n=%d, training_size=%d, horizon=%d)",
        len(windows),
        n,
        training_size,
        horizon,
    )
    return windows


__all__ = ["Window", "count_windows", "schedule_windows"]
