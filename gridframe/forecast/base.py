"""Common interface, errors and driver for forecasting algorithms."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any


class ForecastError(Exception):
    """Base class for forecasting errors."""


class InsufficientDataPointsError(ForecastError):
    """The algorithm needs more data points, or nil values were found."""

    def __init__(self, message: str = "insufficient data points or nil values found") -> None:
        super().__init__(message)


class MismatchLengthError(ForecastError):
    """Two series or sequences differ in length."""

    def __init__(self, message: str = "mismatch length") -> None:
        super().__init__(message)


class IndeterminateError(ForecastError):
    """The result of a calculation is indeterminate."""

    def __init__(self, message: str = "indeterminate") -> None:
        super().__init__(message)


@dataclass
class EvaluationOptions:
    """Options for evaluation functions.

    skip_invalids skips Inf and NaN values instead of raising IndeterminateError.
    """

    skip_invalids: bool = False


EvaluationFunc = Callable[
    [Sequence[float], Sequence[float], "EvaluationOptions | None"], "tuple[float, int]"
]


class ForecastingAlgorithm(ABC):
    """Methods every forecasting algorithm provides."""

    @abstractmethod
    def configure(self, config: Any) -> None:
        """Set the algorithm's parameters; config is an algorithm-specific object."""

    @abstractmethod
    def load(self, values: Sequence[float | None], start: int | None = None,
             end: int | None = None) -> None:
        """Load historical data; rows start..end (inclusive) form the training set."""

    @abstractmethod
    def predict(self, n: int) -> tuple[list[float], list[dict] | None]:
        """Forecast the next n values, with confidence intervals where configured."""

    @abstractmethod
    def evaluate(self, predicted: Sequence[float], eval_func: EvaluationFunc) -> float:
        """Measure predicted against the loaded data following the training set."""


def forecast(
    values: Sequence[float | None],
    alg: ForecastingAlgorithm,
    config: Any,
    n: int,
    eval_func: EvaluationFunc | None = None,
    start: int | None = None,
    end: int | None = None,
) -> tuple[list[float], list[dict] | None, float]:
    """Predict the next n values of values using alg.

    Returns the predictions, their confidence intervals (or None) and the
    evaluation error (0.0 when no eval_func is given).
    """
    alg.configure(config)
    alg.load(values, start, end)
    predictions, confidence = alg.predict(n)
    error = alg.evaluate(predictions, eval_func) if eval_func is not None else 0.0
    return predictions, confidence, error