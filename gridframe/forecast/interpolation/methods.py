"""Interpolation options, methods and the curve fitters they rely on."""

from __future__ import annotations

import bisect
import enum
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import Any


class FillDirection(enum.Flag):
    """Direction in which runs of missing values are filled."""

    FORWARD = 1
    BACKWARD = 2


class FillRegion(enum.Flag):
    """Whether missing values are filled between known values, beyond them, or both."""

    INTERPOLATION = 1
    EXTRAPOLATION = 2


class _Method:
    """Marker base for interpolation methods."""


@dataclass(frozen=True)
class ForwardFill(_Method):
    """Fill a run of missing values with the known value on its left."""


@dataclass(frozen=True)
class BackwardFill(_Method):
    """Fill a run of missing values with the known value on its right."""


@dataclass(frozen=True)
class Linear(_Method):
    """Fill a run of missing values along a straight line between its neighbours."""


@dataclass(frozen=True)
class Spline(_Method):
    """Fill missing values with a spline; only order 3 (cubic) fills anything."""

    order: int = 3


@dataclass(frozen=True)
class Lagrange(_Method):
    """Fill missing values with the Lagrange polynomial; it never extrapolates."""

    order: int = 0


@dataclass
class InterpolateOptions:
    """Configuration for interpolation.

    method defaults to forward fill. limit caps how many consecutive missing
    values are filled and must be positive when set. fill_region of None
    means both interpolation and extrapolation. start and end (inclusive)
    limit the rows considered. horiz_axis sets the x values used; for a data
    frame it may also be a column index or name.
    """

    method: _Method | None = None
    limit: int | None = None
    fill_direction: FillDirection = FillDirection.FORWARD
    fill_region: FillRegion | None = None
    in_place: bool = False
    start: int | None = None
    end: int | None = None
    horiz_axis: Any = None

    def __post_init__(self) -> None:
        if self.limit is not None and self.limit <= 0:
            raise ValueError("limit must be greater than 0")
        if self.method is not None and not isinstance(self.method, _Method):
            raise TypeError(f"unknown interpolation method: {self.method!r}")


def _fill_order(start: int, end: int, direction: FillDirection,
                limit: int | None = None) -> Iterator[tuple[int, int]]:
    """Yield (argument, row) pairs for the rows strictly between start and end.

    The argument is what the fill function is called with; the row is where
    its result goes. Filling stops after limit rows when a limit is set.
    """
    length = end - start - 1
    if length <= 0:
        return
    forward = FillDirection.FORWARD in direction
    backward = FillDirection.BACKWARD in direction
    if forward and backward:
        pairs: Iterator[tuple[int, int]] = (
            (j, j // 2 if j % 2 == 0 else length - (1 + j) // 2) for j in range(length)
        )
    elif forward or not direction:
        pairs = ((j, j) for j in range(length))
    else:
        pairs = ((j, j) for j in reversed(range(length)))
    for added, (arg, idx) in enumerate(pairs, 1):
        yield arg, start + 1 + idx
        if limit is not None and added >= limit:
            return


def _check_points(xs: Sequence[float], ys: Sequence[float], minimum: int) -> tuple[list[float], list[float]]:
    xs = [float(x) for x in xs]
    ys = [float(y) for y in ys]
    if len(xs) != len(ys):
        raise ValueError("x and y values must have the same length")
    if len(xs) < minimum:
        raise ValueError(f"at least {minimum} points are required")
    if any(b <= a for a, b in zip(xs, xs[1:])):
        raise ValueError("x values must be strictly increasing")
    return xs, ys


class CubicSpline:
    """Natural cubic spline through a set of points with increasing x."""

    def __init__(self, xs: Sequence[float], ys: Sequence[float]) -> None:
        self.xs, self.ys = _check_points(xs, ys, 2)
        self._m = self._second_derivatives()

    def _second_derivatives(self) -> list[float]:
        xs, ys = self.xs, self.ys
        n = len(xs)
        m = [0.0] * n
        if n < 3:
            return m
        h = [b - a for a, b in zip(xs, xs[1:])]
        # Tridiagonal system for the interior second derivatives (Thomas algorithm).
        sub, diag, sup, rhs = [], [], [], []
        for i in range(1, n - 1):
            sub.append(h[i - 1])
            diag.append(2.0 * (h[i - 1] + h[i]))
            sup.append(h[i])
            rhs.append(6.0 * ((ys[i + 1] - ys[i]) / h[i] - (ys[i] - ys[i - 1]) / h[i - 1]))
        size = len(diag)
        for i in range(1, size):
            w = sub[i] / diag[i - 1]
            diag[i] -= w * sup[i - 1]
            rhs[i] -= w * rhs[i - 1]
        interior = [0.0] * size
        interior[-1] = rhs[-1] / diag[-1]
        for i in range(size - 2, -1, -1):
            interior[i] = (rhs[i] - sup[i] * interior[i + 1]) / diag[i]
        m[1:n - 1] = interior
        return m

    def at(self, x: float) -> float:
        """The spline's value at x; outside the points the end pieces are extended."""
        xs, ys, m = self.xs, self.ys, self._m
        i = min(max(bisect.bisect_right(xs, x) - 1, 0), len(xs) - 2)
        h = xs[i + 1] - xs[i]
        a = xs[i + 1] - x
        b = x - xs[i]
        return (m[i] * a ** 3 / (6 * h) + m[i + 1] * b ** 3 / (6 * h)
                + (ys[i] / h - m[i] * h / 6) * a + (ys[i + 1] / h - m[i + 1] * h / 6) * b)

    def range(self, start: float, stop: float, step: float) -> list[float]:
        """Values at start, start + step, ... for int((stop - start) / step) points."""
        if start > stop:
            raise ValueError("start must not be greater than stop")
        if step <= 0:
            raise ValueError("step must be positive")
        count = int((stop - start) / step)
        return [self.at(start + i * step) for i in range(count)]


class LagrangePolynomial:
    """Lagrange interpolating polynomial through a set of points with increasing x."""

    def __init__(self, xs: Sequence[float], ys: Sequence[float]) -> None:
        self.xs, self.ys = _check_points(xs, ys, 1)

    def at(self, x: float) -> float:
        """The polynomial's value at x, which must lie within the fitted points."""
        if x < self.xs[0]:
            raise ValueError("value to interpolate is too small and not in range")
        if x > self.xs[-1]:
            raise ValueError("value to interpolate is too large and not in range")
        total = 0.0
        for i, (xi, yi) in enumerate(zip(self.xs, self.ys)):
            term = yi
            for j, xj in enumerate(self.xs):
                if j != i:
                    term *= (x - xj) / (xi - xj)
            total += term
        return total