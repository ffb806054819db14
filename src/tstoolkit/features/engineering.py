"""Feature engineering for time series.

Lag features, rolling window statistics, rolling trend slopes and rate of
change. Window-based features are trailing and start at the first full window.
"""

from dataclasses import dataclass
from typing import List, Sequence
import logging

import numpy as np
import pandas as pd

from ..data.structs import SeriesLike, as_timeseries
from ..utils.error_handling import (
    InsufficientDataError,
    InvalidParameterError,
    log_errors,
)

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class RollingStats:
    """Rolling window statistics, one entry per full window."""
    means: np.ndarray
    stds: np.ndarray
    mins: np.ndarray
    maxs: np.ndarray

    def to_dataframe(self) -> pd.DataFrame:
        return pd.DataFrame({
            "mean": self.means,
            "std": self.stds,
            "min": self.mins,
            "max": self.maxs,
        })


class FeatureExtractor:
    """Extract features from time series."""

    @staticmethod
    @log_errors
    def create_lag_features(data: SeriesLike, lags: Sequence[int]) -> List[np.ndarray]:
        """
        Create lag features.

        Args:
            data: Source series
            lags: Lag offsets; feature for lag ``k`` is ``values[:n - k]``

        Returns:
            One array per lag, in the given order
        """
        ts = as_timeseries(data)
        if len(lags) == 0:
            raise InvalidParameterError("Must specify at least one lag")
        if max(lags) >= len(ts):
            raise InvalidParameterError("Lag is too large for the time series")
        if min(lags) < 0:
            raise InvalidParameterError("Lags must be non-negative")

        n = len(ts)
        return [ts.values[:n - lag].copy() for lag in lags]

    @staticmethod
    @log_errors
    def rolling_statistics(data: SeriesLike, window: int) -> RollingStats:
        """
        Calculate rolling mean, population std, min and max.

        Args:
            data: Source series
            window: Rolling window size

        Returns:
            RollingStats with ``n - window + 1`` entries per field
        """
        ts = as_timeseries(data)
        if window <= 0:
            raise InvalidParameterError("Window size must be greater than 0")
        if window > len(ts):
            raise InsufficientDataError("Window size is larger than series length")

        rolling = pd.Series(ts.values).rolling(window=window)
        start = window - 1
        return RollingStats(
            means=rolling.mean().iloc[start:].to_numpy(),
            stds=rolling.std(ddof=0).iloc[start:].to_numpy(),
            mins=rolling.min().iloc[start:].to_numpy(),
            maxs=rolling.max().iloc[start:].to_numpy(),
        )

    @staticmethod
    @log_errors
    def trend_features(data: SeriesLike, window: int) -> np.ndarray:
        """
        Least-squares slope of each trailing window.

        Args:
            data: Source series
            window: Window size (at least 2)

        Returns:
            Array of ``n - window + 1`` slopes
        """
        ts = as_timeseries(data)
        if window < 2:
            raise InvalidParameterError("Window size must be at least 2 for trend calculation")
        if window > len(ts):
            raise InsufficientDataError("Window size is larger than series length")

        return np.array([
            FeatureExtractor.calculate_slope(ts.values[i:i + window])
            for i in range(len(ts) - window + 1)
        ])

    @staticmethod
    def calculate_slope(values: Sequence[float]) -> float:
        """Slope of a simple linear regression of values on their positions."""
        y = np.asarray(values, dtype=float)
        x = np.arange(y.size, dtype=float)
        x_dev = x - x.mean()

        denominator = float(np.dot(x_dev, x_dev))
        if denominator == 0.0:
            return 0.0
        return float(np.dot(x_dev, y - y.mean()) / denominator)

    @staticmethod
    @log_errors
    def rate_of_change(data: SeriesLike, periods: int) -> np.ndarray:
        """
        Relative change over ``periods`` samples; 0.0 where the base value is zero.

        Args:
            data: Source series
            periods: Look-back distance

        Returns:
            Array of ``n - periods`` values
        """
        ts = as_timeseries(data)
        if periods <= 0:
            raise InvalidParameterError("Periods must be greater than 0")
        if periods >= len(ts):
            raise InsufficientDataError("Periods is too large for the time series")

        base = ts.values[:-periods]
        current = ts.values[periods:]
        with np.errstate(divide="ignore", invalid="ignore"):
            change = (current - base) / base
        return np.where(base == 0.0, 0.0, change)
