"""Simple exponential smoothing forecasts."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass, field

from gridframe.dataframe import NoRowsError, limits
from gridframe.forecast.base import (
    EvaluationFunc,
    ForecastingAlgorithm,
    InsufficientDataPointsError,
)
from gridframe.forecast.confidence import Confidence, drift_confidence_interval


@dataclass
class ExponentialSmoothingConfig:
    """Parameters for simple exponential smoothing.

    alpha lies in [0, 1]; values near 1 weigh recent observations more.
    confidence_levels lie in (0, 1) and select the intervals returned with forecasts.
    """

    alpha: float
    confidence_levels: Sequence[float] = field(default_factory=tuple)

    def validate(self) -> None:
        """Raise ValueError if the configuration is invalid."""
        if not 0.0 <= self.alpha <= 1.0:
            raise ValueError("Alpha must be between [0,1]")
        for level in self.confidence_levels:
            if not 0.0 < level < 1.0:
                raise ValueError("ConfidenceLevel value must be between (0,1)")


@dataclass
class _TrainingState:
    final_smoothed: float = 0.0
    y_origin: float = 0.0
    rmse: float = 0.0
    t: int = 0


def _as_float(v: float | None) -> float:
    return math.nan if v is None else float(v)


class SimpleExpSmoothing(ForecastingAlgorithm):
    """Simple exponential smoothing, bootstrapped from the first observation."""

    def __init__(self) -> None:
        self._cfg: ExponentialSmoothingConfig | None = None
        self._values: list[float] | None = None
        self._range: tuple[int | None, int | None] = (None, None)
        self._state = _TrainingState()

    def configure(self, config: ExponentialSmoothingConfig) -> None:
        """Validate and store config."""
        if not isinstance(config, ExponentialSmoothingConfig):
            raise TypeError("config must be an ExponentialSmoothingConfig")
        config.validate()
        self._cfg = config

    def _config(self) -> ExponentialSmoothingConfig:
        if self._cfg is None:
            raise RuntimeError("algorithm is not configured")
        return self._cfg

    def load(self, values: Sequence[float | None], start: int | None = None,
             end: int | None = None) -> None:
        """Train on rows start..end (inclusive); at least 3 values, none missing."""
        cfg = self._config()
        data = [_as_float(v) for v in values]
        try:
            s, e = limits(len(data), start, end)
        except (NoRowsError, IndexError, ValueError):
            raise InsufficientDataPointsError() from None
        if e - s < 2:
            raise InsufficientDataPointsError()
        if any(math.isnan(v) for v in data[s:e + 1]):
            raise InsufficientDataPointsError()

        alpha = cfg.alpha
        state = _TrainingState()
        mse = 0.0
        for j, i in enumerate(range(s, e + 1), 1):
            if j == 2:
                state.final_smoothed = data[s]
            elif j > 2:
                smoothed = alpha * data[i - 1] + (1 - alpha) * state.final_smoothed
                state.final_smoothed = smoothed
                err = data[i] - smoothed
                mse += err * err
        state.t = e - s + 1
        state.y_origin = data[e]
        state.rmse = math.sqrt(mse / (e - s - 1))

        self._values = data
        self._range = (start, end)
        self._state = state

    def predict(self, n: int) -> tuple[list[float], list[Confidence] | None]:
        """Forecast the next n values; intervals are None unless levels are configured."""
        cfg = self._config()
        if self._values is None:
            raise RuntimeError("no data loaded")
        levels = list(cfg.confidence_levels)
        predictions: list[float] = []
        confidence: list[Confidence] = []
        state = self._state
        for _ in range(max(n, 0)):
            smoothed = cfg.alpha * state.y_origin + (1 - cfg.alpha) * state.final_smoothed
            state.final_smoothed = smoothed
            predictions.append(smoothed)
            confidence.append({
                level: drift_confidence_interval(smoothed, level, state.rmse, state.t, n)
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