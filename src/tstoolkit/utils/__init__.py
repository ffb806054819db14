"""Error types, logging setup and configuration management."""

from tstoolkit.utils.error_handling import (
    TelemetryError,
    InvalidDataError,
    InsufficientDataError,
    ModelError,
    InvalidParameterError,
    log_errors,
)
from tstoolkit.utils.logging_config import setup_logging
from tstoolkit.utils.config_manager import ConfigManager

__all__ = [
    "TelemetryError",
    "InvalidDataError",
    "InsufficientDataError",
    "ModelError",
    "InvalidParameterError",
    "log_errors",
    "setup_logging",
    "ConfigManager",
]
