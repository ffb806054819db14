"""Unit tests for exponential smoothing and moving-average forecasters."""

import math

import numpy as np
import pandas as pd
import pytest

from tstoolkit.data.structs import TimeSeries
from tstoolkit.models import ExponentialSmoothing, MovingAverageForecaster
from tstoolkit.utils.error_handling import (
    InsufficientDataError,
    InvalidParameterError,
    ModelError,
)


@pytest.fixture
def one_to_five():
    return TimeSeries([1.0, 2.0, 3.0, 4.0, 5.0])


# --- Exponential smoothing ---

@pytest.mark.parametrize("alpha", [0.0, -0.1, 1.5])
def test_exponential_smoothing_invalid_alpha(alpha):
    with pytest.raises(InvalidParameterError):
        ExponentialSmoothing(alpha)


def test_exponential_smoothing_fit_forecast(one_to_five):
    model = ExponentialSmoothing(0.5).fit(one_to_five)

    assert model.is_fitted
    assert model.level == pytest.approx(4.0625)

    forecast = model.forecast(3)
    np.testing.assert_allclose(forecast.predictions, [4.0625] * 3)
    assert forecast.confidence == 0.7
    assert forecast.lower_bound is None
    assert forecast.upper_bound is None
    assert not forecast.has_bounds


def test_exponential_smoothing_alpha_one_passes_last_value(one_to_five):
    forecast = ExponentialSmoothing(1.0).fit(one_to_five).forecast(4)
    np.testing.assert_array_equal(forecast.predictions, [5.0] * 4)


def test_exponential_smoothing_empty_fit():
    with pytest.raises(InsufficientDataError):
        ExponentialSmoothing(0.5).fit([])


def test_exponential_smoothing_nan_sample_gives_nan_level():
    model = ExponentialSmoothing(0.5).fit([1.0, math.nan, 3.0])
    assert math.isnan(model.level)
    assert np.isnan(model.forecast(2).predictions).all()


def test_exponential_smoothing_confidence_bounds(one_to_five):
    model = ExponentialSmoothing(0.5).fit(one_to_five)
    forecast = model.forecast_with_confidence(5, 0.95)

    margin = 4.0625 * (1 - 0.95) * 0.5
    np.testing.assert_allclose(forecast.lower_bound, [4.0625 - margin] * 5)
    np.testing.assert_allclose(forecast.upper_bound, [4.0625 + margin] * 5)
    assert forecast.confidence == 0.95


def test_exponential_smoothing_bounds_ordered_for_negative_level():
    model = ExponentialSmoothing(0.3).fit([-10.0, -12.0, -11.0])
    forecast = model.forecast_with_confidence(3, 0.8)
    assert (forecast.lower_bound < forecast.predictions).all()
    assert (forecast.predictions < forecast.upper_bound).all()


def test_exponential_smoothing_accepts_pandas_series():
    series = pd.Series([3.0, 3.0, 3.0], name="flat")
    forecast = ExponentialSmoothing(0.2).fit(series).forecast(1)
    np.testing.assert_allclose(forecast.predictions, [3.0])


# --- Moving average ---

def test_moving_average_invalid_window():
    with pytest.raises(InvalidParameterError):
        MovingAverageForecaster(0)


@pytest.mark.parametrize("window", [2.5, 3.0, "3", True])
def test_moving_average_rejects_non_integer_window(window):
    with pytest.raises(InvalidParameterError):
        MovingAverageForecaster(window)


def test_moving_average_insufficient_data():
    with pytest.raises(InsufficientDataError):
        MovingAverageForecaster(4).fit([1.0, 2.0, 3.0])


def test_moving_average_forecast(one_to_five):
    model = MovingAverageForecaster(3).fit(one_to_five)

    np.testing.assert_array_equal(model.forecast(1).predictions, [4.0])

    forecast = model.forecast(2)
    np.testing.assert_array_equal(forecast.predictions, [4.0, 4.0])
    assert forecast.confidence == 0.6
    assert not forecast.has_bounds


@pytest.mark.parametrize("level,z", [(0.95, 1.96), (0.99, 1.96), (0.9, 1.645)])
def test_moving_average_confidence_bounds(one_to_five, level, z):
    model = MovingAverageForecaster(3).fit(one_to_five)
    forecast = model.forecast_with_confidence(2, level)

    # Population std of [3, 4, 5]
    margin = z * math.sqrt(2.0 / 3.0)
    np.testing.assert_allclose(forecast.lower_bound, [4.0 - margin] * 2)
    np.testing.assert_allclose(forecast.upper_bound, [4.0 + margin] * 2)
    assert forecast.confidence == level


def test_moving_average_retains_copy_of_history():
    values = np.array([1.0, 2.0, 3.0])
    model = MovingAverageForecaster(3).fit(values)
    values[:] = 100.0
    np.testing.assert_array_equal(model.forecast(1).predictions, [2.0])


def test_refit_overwrites_state():
    model = MovingAverageForecaster(3)
    model.fit([1.0, 2.0, 3.0])
    model.fit([10.0, 20.0, 30.0])
    np.testing.assert_array_equal(model.forecast(1).predictions, [20.0])


# --- Shared contract ---

@pytest.mark.parametrize("model", [ExponentialSmoothing(0.5), MovingAverageForecaster(2)])
def test_forecast_before_fit_is_model_error(model):
    with pytest.raises(ModelError):
        model.forecast(3)
    with pytest.raises(ModelError):
        model.forecast_with_confidence(3, 0.95)


@pytest.mark.parametrize("steps", [-1, 1.5, True])
def test_invalid_steps(one_to_five, steps):
    model = MovingAverageForecaster(2).fit(one_to_five)
    with pytest.raises(InvalidParameterError):
        model.forecast(steps)


def test_zero_steps(one_to_five):
    forecast = ExponentialSmoothing(0.5).fit(one_to_five).forecast_with_confidence(0, 0.9)
    assert len(forecast) == 0
    assert forecast.lower_bound.size == 0


@pytest.mark.parametrize("level", [-0.1, 1.5])
def test_invalid_confidence_level(one_to_five, level):
    model = ExponentialSmoothing(0.5).fit(one_to_five)
    with pytest.raises(InvalidParameterError):
        model.forecast_with_confidence(2, level)


def test_forecast_result_to_dataframe(one_to_five):
    forecast = MovingAverageForecaster(3).fit(one_to_five).forecast_with_confidence(3, 0.95)
    frame = forecast.to_dataframe()

    assert list(frame.columns) == ["prediction", "lower", "upper"]
    assert list(frame.index) == [1, 2, 3]
    assert forecast.to_dict()["confidence"] == 0.95


def test_model_metadata():
    model = ExponentialSmoothing(0.4, model_id="es_test")
    assert model.model_type == "exponential_smoothing"
    assert model.get_params() == {"alpha": 0.4}
    assert "es_test" in repr(model)
    assert MovingAverageForecaster(3).model_id.startswith("moving_average_")
