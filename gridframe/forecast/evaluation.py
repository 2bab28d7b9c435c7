"""Functions measuring the error between a validation set and a forecast."""

from __future__ import annotations

import math
from collections.abc import Callable, Iterator, Sequence

from gridframe.forecast.base import EvaluationOptions, IndeterminateError, MismatchLengthError


def _is_invalid(val: float) -> bool:
    return math.isinf(val) or math.isnan(val)


def _pairs(
    validation_set: Sequence[float],
    forecast_set: Sequence[float],
    options: EvaluationOptions | None,
    reject: Callable[[float, float], bool] = lambda actual, predicted: False,
) -> Iterator[tuple[float, float]]:
    """Yield valid (actual, predicted) pairs, skipping or raising on invalid ones."""
    skip = options is not None and options.skip_invalids
    for actual, predicted in zip(validation_set, forecast_set):
        if _is_invalid(actual) or _is_invalid(predicted) or reject(actual, predicted):
            if skip:
                continue
            raise IndeterminateError()
        yield actual, predicted


def _check_lengths(validation_set: Sequence[float], forecast_set: Sequence[float]) -> None:
    if len(validation_set) != len(forecast_set):
        raise MismatchLengthError()


def mean_absolute_error(
    validation_set: Sequence[float],
    forecast_set: Sequence[float],
    options: EvaluationOptions | None = None,
) -> tuple[float, int]:
    """Mean absolute error and the number of values used."""
    _check_lengths(validation_set, forecast_set)
    errors = [abs(a - p) for a, p in _pairs(validation_set, forecast_set, options)]
    if not errors:
        raise IndeterminateError()
    return sum(errors) / len(errors), len(errors)


def mean_absolute_percentage_error(
    validation_set: Sequence[float],
    forecast_set: Sequence[float],
    options: EvaluationOptions | None = None,
) -> tuple[float, int]:
    """Mean absolute percentage error and the number of values used; zero actuals are invalid."""
    _check_lengths(validation_set, forecast_set)
    errors = [
        abs(100 * (a - p) / a)
        for a, p in _pairs(validation_set, forecast_set, options, lambda a, p: a == 0)
    ]
    if not errors:
        raise IndeterminateError()
    return sum(errors) / len(errors), len(errors)


def sum_of_squared_errors(
    validation_set: Sequence[float],
    forecast_set: Sequence[float],
    options: EvaluationOptions | None = None,
) -> tuple[float, int]:
    """Sum of squared errors and the number of values used."""
    _check_lengths(validation_set, forecast_set)
    total = 0.0
    n = 0
    for actual, predicted in _pairs(validation_set, forecast_set, options):
        e = actual - predicted
        total += e * e
        n += 1
    return total, n


def root_mean_squared_error(
    validation_set: Sequence[float],
    forecast_set: Sequence[float],
    options: EvaluationOptions | None = None,
) -> tuple[float, int]:
    """Root mean squared error and the number of values used.

    If every value was skipped the result is NaN.
    """
    _check_lengths(validation_set, forecast_set)
    if not validation_set:
        raise IndeterminateError()
    sse, n = sum_of_squared_errors(validation_set, forecast_set, options)
    if n == 0:
        return math.nan, 0
    return math.sqrt(sse / n), n