"""Unit tests for anomaly detection."""

import pytest

from tstoolkit.anomaly import AnomalyDetector, AnomalyType
from tstoolkit.data.structs import TimeSeries
from tstoolkit.utils.error_handling import InsufficientDataError

SHORT_SPIKE = [1.0, 2.0, 3.0, 2.0, 1.0, 100.0, 2.0, 1.0]


class TestAnomalyDetector:
    """Tests for AnomalyDetector methods."""

    def test_zscore_detects_spike(self, spike_series):
        anomalies = AnomalyDetector().detect_zscore(spike_series)
        assert [a.index for a in anomalies] == [25]
        assert anomalies[0].value == 1000.0
        assert anomalies[0].anomaly_type is AnomalyType.POINT
        assert anomalies[0].score > 3.0

    def test_zscore_threshold(self):
        # With 8 points the largest possible z-score is sqrt(7)
        assert AnomalyDetector().detect_zscore(SHORT_SPIKE) == []
        anomalies = AnomalyDetector(z_threshold=2.0).detect_zscore(SHORT_SPIKE)
        assert [a.index for a in anomalies] == [5]

    def test_zscore_constant_series(self):
        assert AnomalyDetector().detect_zscore([5.0, 5.0, 5.0, 5.0]) == []

    def test_zscore_insufficient_data(self):
        with pytest.raises(InsufficientDataError):
            AnomalyDetector().detect_zscore([1.0, 2.0])

    def test_iqr_detection(self):
        anomalies = AnomalyDetector().detect_iqr(SHORT_SPIKE)
        assert len(anomalies) == 1
        # q1 = 1, q3 = 3, upper fence = 6
        assert anomalies[0].index == 5
        assert anomalies[0].score == pytest.approx((100.0 - 6.0) / 2.0)

    def test_iqr_insufficient_data(self):
        with pytest.raises(InsufficientDataError):
            AnomalyDetector().detect_iqr([1.0, 2.0, 3.0])

    def test_moving_average_detection(self):
        ts = TimeSeries([10.0, 10.0, 10.0, 50.0, 10.0, 10.0, 10.0])
        anomalies = AnomalyDetector().detect_moving_average(ts, 3)

        # The spike inflates the average of every window containing it
        assert [a.index for a in anomalies] == [2, 3, 4]
        assert all(a.anomaly_type is AnomalyType.CONTEXTUAL for a in anomalies)

    def test_ensemble_averages_scores(self):
        anomalies = AnomalyDetector().detect_ensemble(SHORT_SPIKE)
        assert len(anomalies) == 1
        assert anomalies[0].index == 5
        # Only IQR flagged it; z-score contributes 0
        assert anomalies[0].score == pytest.approx(47.0 / 2.0)
        assert anomalies[0].to_dict()["anomaly_type"] == "point"
