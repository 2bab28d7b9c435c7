"""Prediction intervals and confidence-level to z-score conversion."""

from __future__ import annotations

import math
from dataclasses import dataclass
from statistics import NormalDist


@dataclass(frozen=True)
class ConfidenceInterval:
    """An estimated range of values around a forecasted value.

    normal marks errors as normally distributed with a mean of zero.
    """

    upper: float
    lower: float
    normal: bool = False

    def normal_error(self) -> float:
        """The error, assuming it is normally distributed with a mean of zero."""
        return (self.upper - self.lower) / 2.0

    def __str__(self) -> str:
        if self.normal:
            return f"±{self.normal_error():f}"
        return f"[{self.lower:+f}, {self.upper:+f}]"


# Maps a confidence level (0.95 for 95%) to its interval.
Confidence = dict[float, ConfidenceInterval]

_Z_TABLE: dict[float, float] = {
    0.50: 0.6744897501960818,
    0.55: 0.7554150263604694,
    0.60: 0.8416212335729143,
    0.65: 0.9345892910734802,
    0.66: 0.9541652531461945,
    0.667: 0.9680888458785382,
    0.67: 0.9741138770593095,
    0.68: 0.9944578832097534,
    0.70: 1.0364333894937896,
    0.75: 1.1503493803760083,
    0.80: 1.2815515655446008,
    0.85: 1.439531470938456,
    0.90: 1.6448536269514724,
    0.95: 1.9599639845400534,
    0.96: 2.053748910631822,
    0.97: 2.17009037758456,
    0.98: 2.32634787404084,
    0.99: 2.5758293035489,
}


def confidence_level_to_z(level: float) -> float:
    """Return the z value for a confidence level between 0 and 1 (exclusive)."""
    if level in _Z_TABLE:
        return _Z_TABLE[level]
    if level == 1.0:
        return math.inf
    if level == -1.0:
        return -math.inf
    if not -1.0 < level < 1.0:
        return math.nan
    # sqrt(2) * erfinv(level) is the normal quantile at (1 + level) / 2
    return NormalDist().inv_cdf((1.0 + level) / 2.0)


def _symmetric(pred: float, x: float) -> ConfidenceInterval:
    return ConfidenceInterval(upper=pred + x, lower=pred - x, normal=True)


def mean_confidence_interval(pred: float, level: float, sigma_hat: float, t: int) -> ConfidenceInterval:
    """Interval for the mean method over t observations."""
    x = confidence_level_to_z(level) * sigma_hat * math.sqrt(1 + 1 // t)
    return _symmetric(pred, x)


def naive_confidence_interval(pred: float, level: float, sigma_hat: float, h: int) -> ConfidenceInterval:
    """Interval for the naïve method at horizon h."""
    x = confidence_level_to_z(level) * sigma_hat * math.sqrt(h)
    return _symmetric(pred, x)


def seasonal_naive_confidence_interval(
    pred: float, level: float, sigma_hat: float, h: int, seasonal_period: int
) -> ConfidenceInterval:
    """Interval for the seasonal naïve method at horizon h."""
    k = (h - 1) // seasonal_period
    x = confidence_level_to_z(level) * sigma_hat * math.sqrt(k + 1)
    return _symmetric(pred, x)


def drift_confidence_interval(
    pred: float, level: float, sigma_hat: float, t: int, h: int
) -> ConfidenceInterval:
    """Interval for the drift method over t observations at horizon h."""
    x = confidence_level_to_z(level) * sigma_hat * math.sqrt(h * (1 + h // t))
    return _symmetric(pred, x)