"""Forecaster and decomposer factories driven by name or configuration."""

from typing import Any, Dict, Type
import logging

from ..decomposition.decomposer import Decomposer
from ..utils.error_handling import InvalidParameterError
from .arima import ArimaModel
from .base_model import Forecaster
from .smoothing import ExponentialSmoothing, MovingAverageForecaster

logger = logging.getLogger(__name__)

FORECASTERS: Dict[str, Type[Forecaster]] = {
    "exponential_smoothing": ExponentialSmoothing,
    "moving_average": MovingAverageForecaster,
    "arima": ArimaModel,
}


def create_forecaster(name: str, **params: Any) -> Forecaster:
    """
    Build an unfitted forecaster by model type name.

    Args:
        name: One of ``FORECASTERS``
        **params: Constructor arguments for that model

    Returns:
        Forecaster instance
    """
    try:
        forecaster_cls = FORECASTERS[name]
    except KeyError:
        raise InvalidParameterError(
            f"Unknown forecaster '{name}'. Available: {sorted(FORECASTERS)}"
        ) from None

    try:
        forecaster = forecaster_cls(**params)
    except TypeError as e:
        raise InvalidParameterError(f"Invalid parameters for '{name}': {e}") from e

    logger.debug(f"Created forecaster {forecaster!r} with params {params}")
    return forecaster


def forecaster_from_config(config: Dict[str, Any]) -> Forecaster:
    """Build the forecaster described by the ``forecaster`` section of a config."""
    section = config.get("forecaster")
    if not section:
        raise InvalidParameterError("Configuration has no 'forecaster' section")
    return create_forecaster(section["name"], **section.get("params", {}))


def decomposer_from_config(config: Dict[str, Any]) -> Decomposer:
    """Build the decomposer described by the ``decomposition`` section of a config."""
    section = config.get("decomposition")
    if not section:
        raise InvalidParameterError("Configuration has no 'decomposition' section")
    return Decomposer(section["type"], section["period"])
