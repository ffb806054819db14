"""Seasonal-trend decomposition of time series.

Splits a series into trend (centered moving average), seasonal (per-position
averages of the detrended series, normalized over one cycle) and residual
components. Positions where a centered window does not fit, or where a
multiplicative factor is zero, are marked with NaN rather than raising.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Union
import logging

import numpy as np
import pandas as pd

from ..data.structs import SeriesLike, as_timeseries
from ..utils.error_handling import (
    InsufficientDataError,
    InvalidParameterError,
    ensure_integer,
    log_errors,
)

logger = logging.getLogger(__name__)


class DecompositionType(Enum):
    """How the components combine to reconstruct the series."""
    ADDITIVE = "additive"  # Y = T + S + R
    MULTIPLICATIVE = "multiplicative"  # Y = T * S * R


@dataclass(eq=False)
class DecompositionResult:
    """Trend, seasonal and residual components, aligned with the input."""
    trend: np.ndarray
    seasonal: np.ndarray
    residual: np.ndarray

    def __len__(self) -> int:
        return int(self.trend.size)

    def reconstruct(self, decomposition_type: DecompositionType) -> np.ndarray:
        """Recombine the components; NaN wherever the trend is undefined."""
        if decomposition_type is DecompositionType.MULTIPLICATIVE:
            return self.trend * self.seasonal * self.residual
        return self.trend + self.seasonal + self.residual

    def to_dataframe(self, index: pd.Index = None) -> pd.DataFrame:
        """Components as DataFrame columns."""
        return pd.DataFrame(
            {
                "trend": self.trend,
                "seasonal": self.seasonal,
                "residual": self.residual,
            },
            index=index,
        )


class Decomposer:
    """Classical moving-average decomposition with a fixed seasonal period."""

    def __init__(
        self,
        decomposition_type: Union[DecompositionType, str] = DecompositionType.ADDITIVE,
        period: int = 12,
    ):
        """
        Initialize decomposer.

        Args:
            decomposition_type: Additive or multiplicative combination
            period: Length of one seasonal cycle in samples (must be > 0)
        """
        try:
            self.decomposition_type = DecompositionType(decomposition_type)
        except ValueError:
            raise InvalidParameterError(
                f"Unknown decomposition type: {decomposition_type!r}"
            ) from None

        period = ensure_integer(period, "Period")
        if period <= 0:
            raise InvalidParameterError("Period must be greater than 0")

        self.period = period

    @property
    def is_multiplicative(self) -> bool:
        return self.decomposition_type is DecompositionType.MULTIPLICATIVE

    @log_errors
    def decompose(self, data: SeriesLike) -> DecompositionResult:
        """
        Decompose a time series.

        Args:
            data: TimeSeries, pandas Series or array of values

        Returns:
            DecompositionResult with components at full input length
        """
        ts = as_timeseries(data)
        if len(ts) < 2 * self.period:
            raise InsufficientDataError(
                f"Need at least {2 * self.period} data points for period {self.period}"
            )

        values = ts.values
        trend = self._calculate_trend(values)
        detrended = self._detrend(values, trend)
        seasonal = self._calculate_seasonal(detrended)
        residual = self._calculate_residual(values, trend, seasonal)

        logger.debug(
            f"Decomposed {len(ts)} points ({self.decomposition_type.value}, period={self.period})"
        )
        return DecompositionResult(trend=trend, seasonal=seasonal, residual=residual)

    def _calculate_trend(self, values: np.ndarray) -> np.ndarray:
        """Centered moving average, NaN-padded by ``period // 2`` at both ends."""
        half_window = self.period // 2
        n = values.size

        trend = np.full(n, np.nan)
        # Window spans i-h..=i+h but is always divided by the period
        window_sums = np.convolve(values, np.ones(2 * half_window + 1), mode="valid")
        trend[half_window:n - half_window] = window_sums / self.period
        return trend

    def _detrend(self, values: np.ndarray, trend: np.ndarray) -> np.ndarray:
        if not self.is_multiplicative:
            return values - trend

        with np.errstate(divide="ignore", invalid="ignore"):
            detrended = values / trend
        return np.where(trend == 0.0, np.nan, detrended)

    def _calculate_seasonal(self, detrended: np.ndarray) -> np.ndarray:
        """Average detrended values per cycle position, normalize, tile."""
        pattern = np.zeros(self.period)
        for pos in range(self.period):
            at_pos = detrended[pos::self.period]
            at_pos = at_pos[~np.isnan(at_pos)]
            if at_pos.size > 0:
                pattern[pos] = at_pos.mean()

        mean = pattern.mean()
        if not self.is_multiplicative:
            pattern = pattern - mean
        elif mean != 0.0:
            pattern = pattern / mean

        positions = np.arange(detrended.size) % self.period
        return pattern[positions]

    def _calculate_residual(
        self,
        values: np.ndarray,
        trend: np.ndarray,
        seasonal: np.ndarray,
    ) -> np.ndarray:
        if not self.is_multiplicative:
            # NaN trend propagates
            return values - trend - seasonal

        with np.errstate(divide="ignore", invalid="ignore"):
            residual = values / (trend * seasonal)
        return np.where((trend == 0.0) | (seasonal == 0.0), np.nan, residual)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"decomposition_type={self.decomposition_type.value!r}, "
            f"period={self.period})"
        )
