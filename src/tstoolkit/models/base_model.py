"""Base forecaster interface for all forecasting models."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional
import logging

import numpy as np
import pandas as pd

from ..data.structs import SeriesLike
from ..utils.error_handling import InvalidParameterError, ModelError, log_errors

logger = logging.getLogger(__name__)


def z_score(confidence_level: float) -> float:
    """Two-sided normal critical value used for interval margins."""
    return 1.96 if confidence_level >= 0.95 else 1.645


@dataclass(eq=False)
class ForecastResult:
    """Point forecasts with optional confidence bounds."""
    predictions: np.ndarray
    lower_bound: Optional[np.ndarray] = None
    upper_bound: Optional[np.ndarray] = None
    confidence: float = 0.0

    def __len__(self) -> int:
        return int(self.predictions.size)

    @property
    def has_bounds(self) -> bool:
        return self.lower_bound is not None and self.upper_bound is not None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "predictions": self.predictions.tolist(),
            "lower_bound": None if self.lower_bound is None else self.lower_bound.tolist(),
            "upper_bound": None if self.upper_bound is None else self.upper_bound.tolist(),
            "confidence": self.confidence,
        }

    def to_dataframe(self) -> pd.DataFrame:
        """Predictions (and bounds, when present) as DataFrame columns indexed by step."""
        frame = pd.DataFrame(
            {"prediction": self.predictions},
            index=pd.RangeIndex(1, len(self) + 1, name="step"),
        )
        if self.has_bounds:
            frame["lower"] = self.lower_bound
            frame["upper"] = self.upper_bound
        return frame


class Forecaster(ABC):
    """Abstract base class for all forecasting models."""

    def __init__(
        self,
        model_id: Optional[str] = None,
        hyperparameters: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize base forecaster.

        Args:
            model_id: Unique identifier for the model
            hyperparameters: Model hyperparameters
        """
        self.model_id = model_id or self._generate_model_id()
        self.hyperparameters = hyperparameters or {}
        self.is_fitted: bool = False
        self.n_observations: int = 0

    @property
    @abstractmethod
    def model_type(self) -> str:
        """Return the model type identifier."""
        pass

    @abstractmethod
    def fit(self, data: SeriesLike) -> "Forecaster":
        """
        Fit the model to historical data, replacing any previous fit.

        Args:
            data: TimeSeries, pandas Series or array of values

        Returns:
            Self for method chaining
        """
        pass

    @abstractmethod
    def forecast(self, steps: int) -> ForecastResult:
        """
        Forecast ``steps`` points ahead.

        Args:
            steps: Forecast horizon

        Returns:
            ForecastResult without bounds
        """
        pass

    @abstractmethod
    def _confidence_margin(self, confidence_level: float) -> float:
        """Half-width of the interval around every prediction."""
        pass

    @log_errors
    def forecast_with_confidence(
        self,
        steps: int,
        confidence_level: float = 0.95,
    ) -> ForecastResult:
        """
        Forecast with symmetric confidence bounds.

        Point predictions always come from ``forecast``; bounds are
        ``prediction -/+ margin`` with a model-specific margin.

        Args:
            steps: Forecast horizon
            confidence_level: Nominal coverage in [0, 1]

        Returns:
            ForecastResult with bounds; ``confidence`` echoes the level
        """
        if not 0.0 <= confidence_level <= 1.0:
            raise InvalidParameterError(
                f"Confidence level must be within [0, 1], got {confidence_level}"
            )

        base_forecast = self.forecast(steps)
        margin = self._confidence_margin(confidence_level)

        return ForecastResult(
            predictions=base_forecast.predictions,
            lower_bound=base_forecast.predictions - margin,
            upper_bound=base_forecast.predictions + margin,
            confidence=confidence_level,
        )

    def get_params(self) -> Dict[str, Any]:
        """Return constructor hyperparameters."""
        return dict(self.hyperparameters)

    def _check_is_fitted(self) -> None:
        if not self.is_fitted:
            raise ModelError("Model must be fitted before forecasting")

    def _validate_steps(self, steps: int) -> int:
        if isinstance(steps, bool) or not isinstance(steps, (int, np.integer)) or steps < 0:
            raise InvalidParameterError(f"Steps must be a non-negative integer, got {steps!r}")
        return int(steps)

    def _generate_model_id(self) -> str:
        """Generate a unique model ID."""
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        return f"{self.model_type}_{timestamp}"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"model_id='{self.model_id}', "
            f"is_fitted={self.is_fitted})"
        )
