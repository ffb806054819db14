"""Core data structures for time series analysis."""

from dataclasses import dataclass, replace
from typing import Any, Iterator, Optional, Sequence, Union

import numpy as np
import pandas as pd

from ..utils.error_handling import (
    InsufficientDataError,
    InvalidDataError,
    InvalidParameterError,
)


@dataclass
class Statistics:
    """Summary statistics of a sequence (population variance)."""
    mean: float
    median: float
    std_dev: float
    min: float
    max: float
    count: int

    @classmethod
    def from_values(cls, values: Sequence[float]) -> "Statistics":
        """Compute statistics; all fields are zero for an empty sequence."""
        arr = np.asarray(values, dtype=float)
        if arr.size == 0:
            return cls(mean=0.0, median=0.0, std_dev=0.0, min=0.0, max=0.0, count=0)

        return cls(
            mean=float(arr.mean()),
            median=float(np.median(arr)),
            std_dev=float(arr.std(ddof=0)),
            min=float(arr.min()),
            max=float(arr.max()),
            count=int(arr.size),
        )

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "mean": self.mean,
            "median": self.median,
            "std_dev": self.std_dev,
            "min": self.min,
            "max": self.max,
            "count": self.count,
        }


@dataclass(eq=False)
class TimeSeries:
    """
    Ordered numeric samples at regular intervals.

    Attributes:
        values: 1-D float array of samples
        timestamps: Optional DatetimeIndex, one entry per sample
        name: Optional label for the series
    """
    values: np.ndarray
    timestamps: Optional[pd.DatetimeIndex] = None
    name: Optional[str] = None

    def __post_init__(self):
        """Normalize values and validate consistency after initialization."""
        self.values = np.asarray(self.values, dtype=float).reshape(-1)
        if self.timestamps is not None:
            self.timestamps = pd.DatetimeIndex(self.timestamps)
            if len(self.timestamps) != len(self.values):
                raise InvalidDataError(
                    f"Length mismatch: values ({len(self.values)}) vs timestamps ({len(self.timestamps)})"
                )

    @classmethod
    def with_timestamps(cls, values: Sequence[float], timestamps: Sequence[Any]) -> "TimeSeries":
        """Create a time series with timestamps."""
        return cls(values=values, timestamps=timestamps)

    @classmethod
    def from_series(cls, series: pd.Series) -> "TimeSeries":
        """Create from a pandas Series, keeping a DatetimeIndex if it has one."""
        timestamps = series.index if isinstance(series.index, pd.DatetimeIndex) else None
        name = str(series.name) if series.name is not None else None
        return cls(values=series.to_numpy(dtype=float), timestamps=timestamps, name=name)

    def to_series(self) -> pd.Series:
        """Convert to a pandas Series indexed by timestamps or position."""
        index = self.timestamps if self.timestamps is not None else pd.RangeIndex(len(self))
        return pd.Series(self.values, index=index, name=self.name)

    def with_name(self, name: str) -> "TimeSeries":
        """Return a copy of the series with a new name."""
        return replace(self, values=self.values.copy(), name=name)

    def __len__(self) -> int:
        return int(self.values.size)

    def __getitem__(self, index):
        return self.values[index]

    def __iter__(self) -> Iterator[float]:
        return iter(self.values.tolist())

    @property
    def is_empty(self) -> bool:
        return self.values.size == 0

    def moving_average(self, window: int) -> np.ndarray:
        """
        Calculate trailing simple moving average.

        Args:
            window: Number of samples per window

        Returns:
            Array of length ``len(self) - window + 1``
        """
        if window <= 0:
            raise InvalidParameterError("Window size must be greater than 0")
        if window > len(self):
            raise InsufficientDataError(
                f"Window size {window} is larger than data length {len(self)}"
            )

        rolled = pd.Series(self.values).rolling(window=window).mean()
        return rolled.iloc[window - 1:].to_numpy()

    def exponential_moving_average(self, alpha: float) -> np.ndarray:
        """
        Calculate exponential moving average.

        s0 = x0, s_i = alpha * x_i + (1 - alpha) * s_{i-1}

        A NaN sample makes every smoothed value from that point on NaN, as
        the recurrence does; pandas on its own would skip it and reweight.

        Args:
            alpha: Smoothing factor in (0, 1]

        Returns:
            Array of smoothed values, same length as the series
        """
        if not 0.0 < alpha <= 1.0:
            raise InvalidParameterError("Alpha must be between 0 and 1")
        if self.is_empty:
            raise InsufficientDataError("Cannot calculate EMA on empty series")

        smoothed = pd.Series(self.values).ewm(alpha=alpha, adjust=False).mean().to_numpy()
        poisoned = np.maximum.accumulate(np.isnan(self.values))
        return np.where(poisoned, np.nan, smoothed)

    def diff(self) -> np.ndarray:
        """First difference; empty for fewer than two samples."""
        if len(self) < 2:
            return np.array([], dtype=float)
        return np.diff(self.values)

    def pct_change(self) -> np.ndarray:
        """Percentage change between consecutive samples, 0.0 where the base is zero."""
        if len(self) < 2:
            return np.array([], dtype=float)

        prev = self.values[:-1]
        curr = self.values[1:]
        with np.errstate(divide="ignore", invalid="ignore"):
            change = (curr - prev) / prev
        return np.where(prev == 0.0, 0.0, change)

    def slice(self, start: int, end: int) -> "TimeSeries":
        """Half-open slice ``[start, end)`` keeping timestamps and name."""
        if start < 0 or start >= end or end > len(self):
            raise InvalidParameterError("Invalid slice indices")

        timestamps = self.timestamps[start:end] if self.timestamps is not None else None
        return TimeSeries(
            values=self.values[start:end].copy(),
            timestamps=timestamps,
            name=self.name,
        )

    def statistics(self) -> Statistics:
        """Calculate basic statistics."""
        return Statistics.from_values(self.values)


SeriesLike = Union[TimeSeries, pd.Series, np.ndarray, Sequence[float]]


def as_timeseries(data: SeriesLike) -> TimeSeries:
    """Coerce a TimeSeries, pandas Series, array or list into a TimeSeries."""
    if isinstance(data, TimeSeries):
        return data
    if isinstance(data, pd.Series):
        return TimeSeries.from_series(data)
    if isinstance(data, pd.DataFrame):
        raise InvalidDataError("Expected a single series, got a DataFrame")
    arr = np.asarray(data, dtype=float)
    if arr.ndim > 1:
        raise InvalidDataError(f"Expected 1-D data, got shape {arr.shape}")
    return TimeSeries(values=arr)
