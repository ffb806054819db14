"""
Exponential smoothing and moving-average forecasters.
"""

from typing import Optional
import logging

import numpy as np

from ..data.structs import SeriesLike, as_timeseries
from ..utils.error_handling import (
    InsufficientDataError,
    InvalidParameterError,
    ensure_integer,
    log_errors,
)
from .base_model import Forecaster, ForecastResult, z_score

logger = logging.getLogger(__name__)


class ExponentialSmoothing(Forecaster):
    """
    Simple exponential smoothing.
    Forecasts a flat line at the final smoothed level.
    """

    def __init__(
        self,
        alpha: float = 0.3,
        model_id: Optional[str] = None,
    ):
        if not 0.0 < alpha <= 1.0:
            raise InvalidParameterError("Alpha must be between 0 and 1")

        super().__init__(model_id, {"alpha": alpha})
        self.alpha = float(alpha)
        self._last_value: Optional[float] = None

    @property
    def model_type(self) -> str:
        return "exponential_smoothing"

    @property
    def level(self) -> Optional[float]:
        """Final smoothed value, None until fitted."""
        return self._last_value

    @log_errors
    def fit(self, data: SeriesLike) -> "ExponentialSmoothing":
        ts = as_timeseries(data)
        if ts.is_empty:
            raise InsufficientDataError("Cannot fit on empty time series")

        smoothed = ts.exponential_moving_average(self.alpha)
        self._last_value = float(smoothed[-1])
        self.n_observations = len(ts)
        self.is_fitted = True

        logger.info(
            f"Fitted {self.model_type} on {len(ts)} points (alpha={self.alpha}, level={self._last_value:.4f})"
        )
        return self

    @log_errors
    def forecast(self, steps: int) -> ForecastResult:
        self._check_is_fitted()
        steps = self._validate_steps(steps)

        return ForecastResult(
            predictions=np.full(steps, self._last_value),
            confidence=0.7,
        )

    def _confidence_margin(self, confidence_level: float) -> float:
        # abs() keeps bounds ordered for negative levels
        return abs(self._last_value) * (1.0 - confidence_level) * 0.5


class MovingAverageForecaster(Forecaster):
    """
    Moving-average forecaster.
    Forecasts a flat line at the mean of the trailing window.
    """

    def __init__(
        self,
        window: int = 3,
        model_id: Optional[str] = None,
    ):
        window = ensure_integer(window, "Window size")
        if window <= 0:
            raise InvalidParameterError("Window size must be greater than 0")

        super().__init__(model_id, {"window": window})
        self.window = window
        self._history: Optional[np.ndarray] = None

    @property
    def model_type(self) -> str:
        return "moving_average"

    @log_errors
    def fit(self, data: SeriesLike) -> "MovingAverageForecaster":
        ts = as_timeseries(data)
        if len(ts) < self.window:
            raise InsufficientDataError(f"Need at least {self.window} data points")

        self._history = ts.values.copy()
        self.n_observations = len(ts)
        self.is_fitted = True

        logger.info(f"Fitted {self.model_type} on {len(ts)} points (window={self.window})")
        return self

    def _last_window(self) -> np.ndarray:
        return self._history[-self.window:]

    @log_errors
    def forecast(self, steps: int) -> ForecastResult:
        self._check_is_fitted()
        steps = self._validate_steps(steps)

        avg = float(self._last_window().mean())
        return ForecastResult(
            predictions=np.full(steps, avg),
            confidence=0.6,
        )

    def _confidence_margin(self, confidence_level: float) -> float:
        std_dev = float(self._last_window().std(ddof=0))
        return z_score(confidence_level) * std_dev
