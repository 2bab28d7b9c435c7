"""Holt-Winters seasonal forecasting."""

from __future__ import annotations

import enum
import math
from collections.abc import Sequence
from dataclasses import dataclass, field

from gridframe.dataframe import NoRowsError, Series, limits
from gridframe.forecast.base import (
    EvaluationFunc,
    ForecastingAlgorithm,
    InsufficientDataPointsError,
)
from gridframe.forecast.confidence import Confidence, drift_confidence_interval


class SeasonalMethod(enum.IntEnum):
    """Whether the seasonal component is added to or multiplied with the trend."""

    ADDITIVE = 0
    MULTIPLICATIVE = 1


@dataclass
class HoltWintersConfig:
    """Parameters for the Holt-Winters algorithm.

    alpha, beta and gamma lie in [0, 1] and weigh recent values in the level,
    trend and seasonal components. period is the number of observations in a
    full season. confidence_levels lie in (0, 1) and select the intervals
    returned with forecasts.
    """

    alpha: float
    beta: float
    gamma: float
    period: int
    seasonal_method: SeasonalMethod = SeasonalMethod.ADDITIVE
    confidence_levels: Sequence[float] = field(default_factory=tuple)

    def validate(self) -> None:
        """Raise ValueError if the configuration is invalid."""
        if not 0.0 <= self.alpha <= 1.0:
            raise ValueError("Alpha must be between [0,1]")
        if not 0.0 <= self.beta <= 1.0:
            raise ValueError("Beta must be between [0,1]")
        if not 0.0 <= self.gamma <= 1.0:
            raise ValueError("Gamma must be between [0,1]")
        if self.period <= 2:
            raise ValueError("Period must be at least a length of 2")
        for level in self.confidence_levels:
            if not 0.0 < level < 1.0:
                raise ValueError("ConfidenceLevel value must be between (0,1)")


@dataclass
class _TrainingState:
    initial_smooth: float = 0.0
    initial_trend: float = 0.0
    initial_seasonal_comps: list[float] = field(default_factory=list)
    smoothing_level: float = 0.0
    trend_level: float = 0.0
    seasonal_comps: list[float] = field(default_factory=list)
    rmse: float = 0.0
    t: int = 0


def _initial_trend(y: Sequence[float], period: int) -> float:
    total = 0.0
    for i in range(period):
        total += (y[period + i] - y[i]) / period
    return total / period


def _initial_seasonal_components(y: Sequence[float], period: int,
                                 method: SeasonalMethod) -> list[float]:
    n_seasons = len(y) // period
    averages = []
    for i in range(n_seasons):
        total = 0.0
        for value in y[i * period:(i + 1) * period]:
            total += value
        averages.append(total / period)

    indices = []
    for i in range(period):
        total = 0.0
        for j, average in enumerate(averages):
            value = y[j * period + i]
            if method == SeasonalMethod.MULTIPLICATIVE:
                total += value / average
            else:
                total += value - average
        indices.append(total / n_seasons)
    return indices


def _as_values(values: Series | Sequence[float | None]) -> list[float]:
    raw = list(values.values) if isinstance(values, Series) else list(values)
    return [math.nan if v is None else float(v) for v in raw]


class HoltWinters(ForecastingAlgorithm):
    """Holt-Winters triple exponential smoothing for seasonal time series."""

    def __init__(self) -> None:
        self._cfg: HoltWintersConfig | None = None
        self._values: list[float] | None = None
        self._range: tuple[int | None, int | None] = (None, None)
        self._state = _TrainingState()

    def configure(self, config: HoltWintersConfig) -> None:
        """Validate and store config."""
        if not isinstance(config, HoltWintersConfig):
            raise TypeError("config must be a HoltWintersConfig")
        config.validate()
        self._cfg = config

    def _config(self) -> HoltWintersConfig:
        if self._cfg is None:
            raise RuntimeError("algorithm is not configured")
        return self._cfg

    def load(self, values: Series | Sequence[float | None], start: int | None = None,
             end: int | None = None) -> None:
        """Train on rows start..end (inclusive).

        The training set must hold no missing values and at least period + 6
        observations; two full seasons give the best results.
        """
        cfg = self._config()
        data = _as_values(values)
        try:
            s, e = limits(len(data), start, end)
        except (NoRowsError, IndexError, ValueError):
            raise InsufficientDataPointsError() from None
        if any(math.isnan(v) for v in data[s:e + 1]):
            raise InsufficientDataPointsError()
        # For m seasons per year, m + 5 observations is the theoretical minimum.
        if e - s < cfg.period + 5:
            raise InsufficientDataPointsError()

        self._state = self._train(cfg, data[s:e + 1])
        self._values = data
        self._range = (start, end)

    @staticmethod
    def _train(cfg: HoltWintersConfig, y: list[float]) -> _TrainingState:
        alpha, beta, gamma = cfg.alpha, cfg.beta, cfg.gamma
        period = cfg.period
        multiplicative = cfg.seasonal_method == SeasonalMethod.MULTIPLICATIVE

        state = _TrainingState()
        seasonals = _initial_seasonal_components(y, period, cfg.seasonal_method)
        state.initial_seasonal_comps = list(seasonals)
        trend = _initial_trend(y, period)
        state.initial_trend = trend

        level = 0.0
        mse = 0.0
        for i, xt in enumerate(y):
            if i == 0:
                level = xt
                state.initial_smooth = xt
                continue
            k = i % period
            if multiplicative:
                prev_level, level = level, alpha * (xt / seasonals[k]) + (1 - alpha) * (level + trend)
                trend = beta * (level - prev_level) + (1 - beta) * trend
                seasonals[k] = gamma * (xt / level) + (1 - gamma) * seasonals[k]
            else:
                prev_level, level = level, alpha * (xt - seasonals[k]) + (1 - alpha) * (level + trend)
                prev_trend, trend = trend, beta * (level - prev_level) + (1 - beta) * trend
                seasonals[k] = gamma * (xt - prev_level - prev_trend) + (1 - gamma) * seasonals[k]
            err = xt - seasonals[k]
            mse = mse + err * err

        state.t = len(y)
        state.rmse = math.sqrt(mse / (len(y) - 1))
        state.smoothing_level = level
        state.trend_level = trend
        state.seasonal_comps = seasonals
        return state

    def predict(self, n: int) -> tuple[list[float], list[Confidence] | None]:
        """Forecast the next n values; intervals are None unless levels are configured."""
        cfg = self._config()
        if self._values is None:
            raise RuntimeError("no data loaded")
        levels = list(cfg.confidence_levels)
        state = self._state
        period = cfg.period
        multiplicative = cfg.seasonal_method == SeasonalMethod.MULTIPLICATIVE

        predictions: list[float] = []
        confidence: list[Confidence] = []
        for m in range(1, max(n, 0) + 1):
            base = state.smoothing_level + m * state.trend_level
            seasonal = state.seasonal_comps[(m - 1) % period]
            value = base * seasonal if multiplicative else base + seasonal
            predictions.append(value)
            confidence.append({
                level: drift_confidence_interval(value, level, state.rmse, state.t, n)
                for level in levels
            })
        return predictions, (confidence if levels else None)

    def evaluate(self, predicted: Sequence[float], eval_func: EvaluationFunc) -> float:
        """Compare predicted with the loaded values that follow the training range."""
        if eval_func is None:
            raise ValueError("eval_func is required")
        if self._values is None:
            raise RuntimeError("no data loaded")
        loaded = self._values
        _, train_end = limits(len(loaded), *self._range)
        first = train_end + 1
        if first >= len(loaded):
            return 0.0
        count = min(len(loaded) - first, len(predicted))
        error, _ = eval_func(loaded[first:first + count], list(predicted[:count]), None)
        return error