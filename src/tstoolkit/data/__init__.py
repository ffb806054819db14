"""Time series container and summary statistics."""

from .structs import TimeSeries, Statistics, SeriesLike, as_timeseries

__all__ = [
    "TimeSeries",
    "Statistics",
    "SeriesLike",
    "as_timeseries",
]
