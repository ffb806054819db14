"""Error types and error handling utilities."""

import functools
import logging
import numbers
from typing import Any, Callable

logger = logging.getLogger(__name__)


class TelemetryError(Exception):
    """Base class for all toolkit errors."""

    # Set by log_errors once the error has been reported
    logged = False


class InvalidDataError(TelemetryError, ValueError):
    """Structurally inconsistent input (e.g. mismatched lengths)."""


class InsufficientDataError(TelemetryError, ValueError):
    """Not enough samples for the requested operation, window, period or order."""


class ModelError(TelemetryError, RuntimeError):
    """Operation invoked in the wrong lifecycle state, e.g. forecasting before fitting."""


class InvalidParameterError(TelemetryError, ValueError):
    """Out-of-range constructor or call argument."""


def ensure_integer(value: Any, name: str) -> int:
    """Return ``value`` as an int; bools, floats and other types are rejected."""
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise InvalidParameterError(f"{name} must be an integer, got {value!r}")
    return int(value)


def log_errors(func: Callable) -> Callable:
    """
    Decorator that logs toolkit errors raised by ``func`` and re-raises them.

    Only ``TelemetryError`` subclasses are logged; anything else propagates
    untouched since it indicates a bug rather than rejected input. When
    decorated calls are nested, the innermost one logs and the outer ones
    re-raise silently.

    Args:
        func: Function to wrap

    Returns:
        Decorated function
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except TelemetryError as e:
            if not e.logged:
                logger.warning(f"{func.__qualname__} rejected input: {type(e).__name__}: {e}")
                e.logged = True
            raise
    return wrapper
