"""Time series analysis: statistics, decomposition, anomaly detection,
feature extraction and short-horizon forecasting."""

from tstoolkit.data import TimeSeries, Statistics
from tstoolkit.decomposition import Decomposer, DecompositionResult, DecompositionType
from tstoolkit.models import (
    Forecaster,
    ForecastResult,
    ExponentialSmoothing,
    MovingAverageForecaster,
    ArimaModel,
    ArimaParams,
    create_forecaster,
)
from tstoolkit.anomaly import Anomaly, AnomalyDetector, AnomalyType
from tstoolkit.features import FeatureExtractor, RollingStats
from tstoolkit.utils.error_handling import (
    TelemetryError,
    InvalidDataError,
    InsufficientDataError,
    ModelError,
    InvalidParameterError,
)

__version__ = "0.1.0"

__all__ = [
    "TimeSeries",
    "Statistics",
    "Decomposer",
    "DecompositionResult",
    "DecompositionType",
    "Forecaster",
    "ForecastResult",
    "ExponentialSmoothing",
    "MovingAverageForecaster",
    "ArimaModel",
    "ArimaParams",
    "create_forecaster",
    "Anomaly",
    "AnomalyDetector",
    "AnomalyType",
    "FeatureExtractor",
    "RollingStats",
    "TelemetryError",
    "InvalidDataError",
    "InsufficientDataError",
    "ModelError",
    "InvalidParameterError",
]
