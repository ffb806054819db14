"""Statistical anomaly detection."""

from tstoolkit.anomaly.detectors import Anomaly, AnomalyDetector, AnomalyType

__all__ = ["Anomaly", "AnomalyDetector", "AnomalyType"]
