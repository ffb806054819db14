"""
Simplified ARIMA (AutoRegressive Integrated Moving Average) forecaster.

This is not a maximum-likelihood ARIMA. Fitting differences the series ``d``
times, estimates each AR coefficient independently from a single-lag least
squares ratio, and fills the MA coefficients with fixed placeholder values.

Forecasts are produced on the differenced scale: ``forecast`` does not undo
the ``d`` differencing passes, so for ``d > 0`` predictions are changes, not
levels. ``integrate`` is available for callers that want to map differenced
values back explicitly.
"""

from dataclasses import dataclass
from typing import Optional, Sequence
import logging

import numpy as np

from ..data.structs import SeriesLike, as_timeseries
from ..utils.error_handling import (
    InsufficientDataError,
    InvalidParameterError,
    ensure_integer,
    log_errors,
)
from .base_model import Forecaster, ForecastResult, z_score

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ArimaParams:
    """ARIMA orders."""
    p: int  # AR order
    d: int  # differencing order
    q: int  # MA order

    @property
    def min_observations(self) -> int:
        return self.p + self.d + self.q + 1


class ArimaModel(Forecaster):
    """
    ARIMA(p, d, q) forecaster using the simplified estimation above.
    """

    # Interval half-width is z times this; not derived from residuals
    RESIDUAL_STD = 1.0

    def __init__(
        self,
        p: int = 1,
        d: int = 0,
        q: int = 0,
        model_id: Optional[str] = None,
    ):
        """
        Initialize ARIMA model.

        Args:
            p: Autoregressive order (>= 0)
            d: Differencing order (>= 0)
            q: Moving-average order (>= 0)
            model_id: Unique identifier for the model
        """
        p = ensure_integer(p, "Order p")
        d = ensure_integer(d, "Order d")
        q = ensure_integer(q, "Order q")
        for name, order in (("p", p), ("d", d), ("q", q)):
            if order < 0:
                raise InvalidParameterError(f"Order {name} must be non-negative, got {order}")

        super().__init__(model_id, {"p": p, "d": d, "q": q})
        self.params = ArimaParams(p=p, d=d, q=q)
        self._ar_coeffs = np.zeros(self.params.p)
        self._ma_coeffs = np.zeros(self.params.q)
        self._differenced: np.ndarray = np.array([], dtype=float)
        self._last_observation: Optional[float] = None

    @property
    def model_type(self) -> str:
        return "arima"

    @property
    def ar_coeffs(self) -> np.ndarray:
        return self._ar_coeffs.copy()

    @property
    def ma_coeffs(self) -> np.ndarray:
        return self._ma_coeffs.copy()

    @property
    def differenced_data(self) -> np.ndarray:
        return self._differenced.copy()

    @log_errors
    def fit(self, data: SeriesLike) -> "ArimaModel":
        """
        Fit AR and MA coefficients.

        Args:
            data: TimeSeries, pandas Series or array of values

        Returns:
            Self
        """
        ts = as_timeseries(data)
        if len(ts) < self.params.min_observations:
            raise InsufficientDataError(
                f"Insufficient data for ARIMA{(self.params.p, self.params.d, self.params.q)}: "
                f"need at least {self.params.min_observations} points, got {len(ts)}"
            )

        differenced = self._difference(ts.values)
        ar_coeffs = self._estimate_ar_coeffs(differenced)
        # Residuals are not computed; the MA estimate ignores them
        ma_coeffs = self._estimate_ma_coeffs()

        self._differenced = differenced
        self._ar_coeffs = ar_coeffs
        self._ma_coeffs = ma_coeffs
        self._last_observation = float(ts.values[-1])
        self.n_observations = len(ts)
        self.is_fitted = True

        logger.info(
            f"Fitted ARIMA{(self.params.p, self.params.d, self.params.q)} on {len(ts)} points"
        )
        logger.debug(f"AR coefficients: {ar_coeffs.tolist()}, MA coefficients: {ma_coeffs.tolist()}")
        return self

    def _difference(self, values: np.ndarray) -> np.ndarray:
        """Apply the first difference ``d`` times."""
        result = values.astype(float, copy=True)
        for _ in range(self.params.d):
            result = np.diff(result)
        return result

    def _estimate_ar_coeffs(self, data: np.ndarray) -> np.ndarray:
        """
        Per-lag least squares ratio sum(x[j] * x[j-k]) / sum(x[j-k]^2).

        Each lag is estimated on its own rather than solving the joint
        Yule-Walker system.
        """
        if data.size <= self.params.p:
            raise InsufficientDataError("Not enough data for AR estimation")

        coeffs = np.zeros(self.params.p)
        for i in range(self.params.p):
            lag = i + 1
            current = data[lag:]
            lagged = data[:-lag]
            sum_xy = float(np.dot(current, lagged))
            sum_x2 = float(np.dot(lagged, lagged))
            coeffs[i] = sum_xy / sum_x2 if sum_x2 != 0.0 else 0.0
        return coeffs

    def _estimate_ma_coeffs(self) -> np.ndarray:
        """Placeholder MA weights 0.1 * (i + 1) / q."""
        q = self.params.q
        return np.array([0.1 * (i + 1) / q for i in range(q)], dtype=float)

    @log_errors
    def forecast(self, steps: int) -> ForecastResult:
        """
        Recursive AR forecast on the differenced scale.

        Each prediction is appended to the history before the next step.
        The MA terms do not contribute.

        Args:
            steps: Forecast horizon

        Returns:
            ForecastResult (differenced scale when d > 0)
        """
        self._check_is_fitted()
        steps = self._validate_steps(steps)

        history = self._differenced.tolist()
        predictions = []
        for _ in range(steps):
            pred = 0.0
            for i, coeff in enumerate(self._ar_coeffs):
                if i < len(history):
                    pred += coeff * history[-1 - i]
            predictions.append(pred)
            history.append(pred)

        return ForecastResult(
            predictions=np.asarray(predictions, dtype=float),
            confidence=0.75,
        )

    def _confidence_margin(self, confidence_level: float) -> float:
        return z_score(confidence_level) * self.RESIDUAL_STD

    def integrate(self, differenced: Sequence[float]) -> np.ndarray:
        """
        Undo differencing by cumulative summation.

        Each of the ``d`` passes prepends a start value and takes a running
        sum, so the output is ``d`` entries longer than the input. The start
        value is the last observed value when ``d == 1`` and 0.0 otherwise,
        so only first-order integration lands on the original level.

        Args:
            differenced: Values on the differenced scale, e.g. forecast predictions

        Returns:
            Integrated values
        """
        self._check_is_fitted()

        result = np.asarray(differenced, dtype=float)
        start_value = self._last_observation if self.params.d == 1 else 0.0
        for _ in range(self.params.d):
            result = np.concatenate(([start_value], start_value + np.cumsum(result)))
        return result
