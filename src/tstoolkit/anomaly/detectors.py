"""Statistical anomaly detection for time series.

Implements z-score, interquartile-range and moving-average deviation
detectors, plus an ensemble that merges the z-score and IQR results.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List
import logging

import numpy as np

from ..data.structs import SeriesLike, as_timeseries
from ..utils.error_handling import InsufficientDataError, log_errors

logger = logging.getLogger(__name__)


class AnomalyType(Enum):
    """Anomaly classifications."""
    POINT = "point"  # single outlier
    CONTEXTUAL = "contextual"  # unusual relative to its neighbourhood
    COLLECTIVE = "collective"  # unusual pattern


@dataclass
class Anomaly:
    """A detected anomaly."""
    index: int
    value: float
    anomaly_type: AnomalyType
    score: float  # higher = more anomalous

    def to_dict(self) -> Dict[str, object]:
        return {
            "index": self.index,
            "value": self.value,
            "anomaly_type": self.anomaly_type.value,
            "score": self.score,
        }


class AnomalyDetector:
    """Detect anomalies using statistical thresholds."""

    # Relative deviation from the moving average that counts as anomalous
    MA_DEVIATION_THRESHOLD = 0.5

    def __init__(self, z_threshold: float = 3.0, iqr_multiplier: float = 1.5):
        """
        Initialize detector.

        Args:
            z_threshold: Absolute z-score above which a point is anomalous
            iqr_multiplier: Fence distance in IQRs beyond Q1/Q3
        """
        self.z_threshold = z_threshold
        self.iqr_multiplier = iqr_multiplier

    @log_errors
    def detect_zscore(self, data: SeriesLike) -> List[Anomaly]:
        """
        Detect anomalies using the z-score method (population std).

        A constant series has zero spread and yields no anomalies.

        Args:
            data: Series to scan

        Returns:
            Point anomalies in index order
        """
        ts = as_timeseries(data)
        if len(ts) < 3:
            raise InsufficientDataError("Need at least 3 data points for Z-score detection")

        stats = ts.statistics()
        with np.errstate(divide="ignore", invalid="ignore"):
            scores = np.abs((ts.values - stats.mean) / stats.std_dev)

        flagged = np.flatnonzero(scores > self.z_threshold)
        return [
            Anomaly(int(i), float(ts.values[i]), AnomalyType.POINT, float(scores[i]))
            for i in flagged
        ]

    @log_errors
    def detect_iqr(self, data: SeriesLike) -> List[Anomaly]:
        """
        Detect anomalies outside the IQR fences.

        Quartiles are taken by rank (``sorted[n // 4]`` and ``sorted[3n // 4]``),
        without interpolation.

        Args:
            data: Series to scan

        Returns:
            Point anomalies in index order, scored by distance past the fence in IQRs
        """
        ts = as_timeseries(data)
        if len(ts) < 4:
            raise InsufficientDataError("Need at least 4 data points for IQR detection")

        ordered = np.sort(ts.values)
        n = ordered.size
        q1 = ordered[n // 4]
        q3 = ordered[3 * n // 4]
        iqr = q3 - q1

        lower = q1 - self.iqr_multiplier * iqr
        upper = q3 + self.iqr_multiplier * iqr

        anomalies = []
        with np.errstate(divide="ignore", invalid="ignore"):
            for i, value in enumerate(ts.values):
                if value < lower:
                    score = (lower - value) / iqr
                elif value > upper:
                    score = (value - upper) / iqr
                else:
                    continue
                anomalies.append(Anomaly(i, float(value), AnomalyType.POINT, float(score)))
        return anomalies

    @log_errors
    def detect_moving_average(self, data: SeriesLike, window: int) -> List[Anomaly]:
        """
        Detect points deviating more than 50% from their moving average.

        Window ``i`` is compared against the value at ``i + window // 2``.

        Args:
            data: Series to scan
            window: Moving-average window

        Returns:
            Contextual anomalies in index order
        """
        ts = as_timeseries(data)
        ma = ts.moving_average(window)
        offset = window // 2

        anomalies = []
        for i, avg in enumerate(ma):
            idx = i + offset
            if idx >= len(ts):
                break

            value = float(ts.values[idx])
            relative_dev = abs(value - avg) / max(abs(avg), 1e-10)
            if relative_dev > self.MA_DEVIATION_THRESHOLD:
                anomalies.append(Anomaly(idx, value, AnomalyType.CONTEXTUAL, float(relative_dev)))
        return anomalies

    @log_errors
    def detect_ensemble(self, data: SeriesLike) -> List[Anomaly]:
        """
        Union of z-score and IQR detections.

        Each index appears once; its score is the mean of both method scores,
        counting 0 for a method that did not flag it.
        """
        ts = as_timeseries(data)
        zscore_scores = {a.index: a.score for a in self.detect_zscore(ts)}
        iqr_scores = {a.index: a.score for a in self.detect_iqr(ts)}

        anomalies = []
        for idx in sorted(set(zscore_scores) | set(iqr_scores)):
            score = (zscore_scores.get(idx, 0.0) + iqr_scores.get(idx, 0.0)) / 2.0
            anomalies.append(Anomaly(idx, float(ts.values[idx]), AnomalyType.POINT, score))

        logger.debug(f"Ensemble flagged {len(anomalies)} of {len(ts)} points")
        return anomalies
