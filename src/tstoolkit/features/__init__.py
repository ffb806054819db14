"""Feature engineering utilities for time series.

This module provides:
- Lag features
- Rolling statistics (mean, std, min, max)
- Rolling trend slopes
- Rate of change
"""

from tstoolkit.features.engineering import FeatureExtractor, RollingStats

__all__ = ["FeatureExtractor", "RollingStats"]
