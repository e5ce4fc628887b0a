"""Series store: the observed target and optional aligned covariates.

Window arithmetic is positional, so the store guarantees a contiguous,
strictly increasing index and exogenous rows aligned 1:1 with the target.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import numpy as np
import pandas as pd

from tsase.core.errors import SeriesError

if TYPE_CHECKING:
    from tsase.backtest.windows import Window


def _check_index(index: pd.Index) -> None:
    if index.has_duplicates:
        raise SeriesError(
            "Series index contains duplicate keys",
            context={"duplicates": [str(v) for v in index[index.duplicated()][:5]]},
        )
    if not index.is_monotonic_increasing:
        raise SeriesError(
            "Series index is not strictly increasing",
            fix_hint="Sort the series: y = y.sort_index()",
        )
    if len(index) < 3:
        return

    if isinstance(index, pd.DatetimeIndex):
        freq = index.freq or pd.infer_freq(index)
        if freq is None:
            raise SeriesError(
                "Cannot infer a regular frequency; the date index has gaps",
                context={"start": str(index[0]), "end": str(index[-1]), "n_obs": len(index)},
            )
    elif pd.api.types.is_integer_dtype(index):
        steps = np.diff(index.to_numpy())
        if not np.all(steps == steps[0]):
            raise SeriesError(
                "Integer index is not evenly spaced",
                context={"steps": sorted({int(s) for s in steps})[:5]},
            )


@dataclass(frozen=True)
class SeriesStore:
    """Immutable container for one observed series.

    Attributes:
        y: Target observations indexed by a strictly increasing key
        exog: Optional covariate columns sharing ``y``'s index
    """

    y: pd.Series
    exog: pd.DataFrame | None = None

    @classmethod
    def from_series(cls, y: Any, exog: Any | None = None) -> SeriesStore:
        """Validate inputs and build a store.

        Args:
            y: Target values (Series, list or array)
            exog: Covariates (DataFrame, Series or 2-D array) aligned with ``y``

        Raises:
            SeriesError: If the index has gaps or exog is misaligned
        """
        if not isinstance(y, pd.Series):
            y = pd.Series(np.asarray(y, dtype=float))
        y = y.astype(float).copy()
        if y.empty:
            raise SeriesError("Series is empty")
        if y.isna().any():
            raise SeriesError(
                "Series contains missing values",
                context={"n_missing": int(y.isna().sum())},
                fix_hint="Impute or trim missing observations before backtesting",
            )
        _check_index(y.index)

        exog_df = None
        if exog is not None:
            exog_df = _coerce_exog(exog, y.index)

        return cls(y=y, exog=exog_df)

    def __len__(self) -> int:
        return len(self.y)

    @property
    def index(self) -> pd.Index:
        return self.y.index

    @property
    def has_exog(self) -> bool:
        return self.exog is not None

    def train(self, window: Window) -> tuple[pd.Series, pd.DataFrame | None]:
        """Return copies of the target and covariates in the training range."""
        return self._slice(window.train_slice)

    def test(self, window: Window) -> tuple[pd.Series, pd.DataFrame | None]:
        """Return copies of the target and covariates in the test range."""
        return self._slice(window.test_slice)

    def _slice(self, positions: slice) -> tuple[pd.Series, pd.DataFrame | None]:
        y = self.y.iloc[positions].copy()
        exog = self.exog.iloc[positions].copy() if self.exog is not None else None
        return y, exog


def _coerce_exog(exog: Any, index: pd.Index) -> pd.DataFrame:
    if isinstance(exog, pd.Series):
        exog = exog.to_frame(name=exog.name if exog.name is not None else "x0")

    if isinstance(exog, pd.DataFrame):
        if len(exog) != len(index):
            raise SeriesError(
                "Exogenous matrix length differs from series length",
                context={"n_exog": len(exog), "n_obs": len(index)},
            )
        if not exog.index.equals(index):
            raise SeriesError(
                "Exogenous matrix index is not aligned with the series index",
                fix_hint="Reindex covariates: exog = exog.reindex(y.index)",
            )
        frame = exog.copy()
    else:
        values = np.asarray(exog, dtype=float)
        if values.ndim == 1:
            values = values.reshape(-1, 1)
        if values.shape[0] != len(index):
            raise SeriesError(
                "Exogenous matrix length differs from series length",
                context={"n_exog": values.shape[0], "n_obs": len(index)},
            )
        frame = pd.DataFrame(
            values,
            index=index,
            columns=[f"x{i}" for i in range(values.shape[1])],
        )

    frame = frame.astype(float)
    if frame.isna().any().any():
        raise SeriesError("Exogenous matrix contains missing values")
    return frame


__all__ = ["SeriesStore"]
