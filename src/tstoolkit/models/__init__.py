"""Forecasting models."""

from tstoolkit.models.base_model import Forecaster, ForecastResult, z_score
from tstoolkit.models.smoothing import ExponentialSmoothing, MovingAverageForecaster
from tstoolkit.models.arima import ArimaModel, ArimaParams
from tstoolkit.models.registry import (
    FORECASTERS,
    create_forecaster,
    forecaster_from_config,
    decomposer_from_config,
)

__all__ = [
    "Forecaster",
    "ForecastResult",
    "z_score",
    "ExponentialSmoothing",
    "MovingAverageForecaster",
    "ArimaModel",
    "ArimaParams",
    "FORECASTERS",
    "create_forecaster",
    "forecaster_from_config",
    "decomposer_from_config",
]
