"""End-to-end analysis workflow tests."""

import numpy as np
import pytest

from tstoolkit import (
    AnomalyDetector,
    Decomposer,
    DecompositionType,
    ExponentialSmoothing,
    FeatureExtractor,
    TimeSeries,
)
from tstoolkit.models import decomposer_from_config, forecaster_from_config
from tstoolkit.utils.config_manager import ConfigManager


def test_end_to_end_analysis():
    data = np.arange(100, dtype=float) + np.sin(np.arange(100) / 5.0) * 10.0
    ts = TimeSeries(data)

    stats = ts.statistics()
    assert stats.mean > 0.0
    assert stats.std_dev > 0.0

    assert len(ts.moving_average(5)) == 96

    anomalies = AnomalyDetector().detect_zscore(ts)
    assert isinstance(anomalies, list)

    forecast = ExponentialSmoothing(0.3).fit(ts).forecast(10)
    assert len(forecast.predictions) == 10


def test_feature_engineering_pipeline(linear_series):
    lags = FeatureExtractor.create_lag_features(linear_series, [1, 2, 3])
    assert len(lags) == 3
    assert len(lags[0]) == 49

    assert len(FeatureExtractor.rolling_statistics(linear_series, 5).means) == 46
    assert len(FeatureExtractor.trend_features(linear_series, 5)) == 46
    assert len(FeatureExtractor.rate_of_change(linear_series, 3)) == 47


def test_decomposition_workflow(seasonal_series):
    result = Decomposer(DecompositionType.ADDITIVE, 8).decompose(seasonal_series)

    frame = result.to_dataframe()
    assert frame.shape == (len(seasonal_series), 3)

    defined = ~np.isnan(result.trend)
    error = np.abs(seasonal_series.values - result.reconstruct(DecompositionType.ADDITIVE))
    assert error[defined].mean() < 1e-9

    # The sine component dominates the recovered seasonal pattern
    assert result.seasonal[:8].max() > 5.0
    assert result.seasonal[:8].min() < -5.0


def test_forecast_with_confidence_intervals():
    ts = TimeSeries(np.arange(1, 31, dtype=float))
    forecast = ExponentialSmoothing(0.5).fit(ts).forecast_with_confidence(5, 0.95)

    assert len(forecast.predictions) == 5
    assert forecast.has_bounds
    assert np.all(forecast.lower_bound < forecast.predictions)
    assert np.all(forecast.upper_bound > forecast.predictions)


@pytest.mark.parametrize("name,params", [
    ("exponential_smoothing", {"alpha": 0.3}),
    ("moving_average", {"window": 3}),
    ("arima", {"p": 2, "d": 1, "q": 1}),
])
def test_configured_forecasting_run(monthly_sales, name, params):
    cm = ConfigManager()
    config = cm.load_analysis_config(
        {
            "decomposition": {"period": 3},
            "forecaster": {"name": name, "params": params},
        }
    )
    # Override params replace rather than merge across model types
    config["forecaster"]["params"] = params

    forecaster = forecaster_from_config(config)
    steps = cm.get_value(config, "forecast.steps")
    level = cm.get_value(config, "forecast.confidence_level")

    result = forecaster.fit(monthly_sales).forecast_with_confidence(steps, level)
    frame = result.to_dataframe()
    assert len(frame) == steps
    assert (frame["lower"] <= frame["prediction"]).all()
    assert (frame["prediction"] <= frame["upper"]).all()

    decomposition = decomposer_from_config(config).decompose(monthly_sales)
    assert len(decomposition) == len(monthly_sales)
