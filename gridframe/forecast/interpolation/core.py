"""Fill missing values in float series and data frames."""

from __future__ import annotations

import dataclasses
import datetime
import math
from collections.abc import Callable, Sequence
from typing import Any

from gridframe.dataframe import DataFrame, Series, limits
from gridframe.forecast.interpolation.methods import (
    BackwardFill,
    CubicSpline,
    FillRegion,
    ForwardFill,
    InterpolateOptions,
    Lagrange,
    LagrangePolynomial,
    Linear,
    Spline,
    _fill_order,
)

_NIL_AXIS = "HorizAxis must contain no nil values"
_EPOCH = datetime.datetime(1970, 1, 1, tzinfo=datetime.timezone.utc)

FillFn = Callable[[int], float]


def interpolate(
    data: Series | DataFrame, options: InterpolateOptions | None = None
) -> dict[Any, Any] | None:
    """Fill the missing values of a float64 Series or of a DataFrame's float64 columns.

    With options.in_place the data is modified and None is returned. Otherwise
    the data is left unchanged and the filled values are returned: for a Series
    a dict mapping row to value, for a DataFrame a dict keyed by both column
    index and column name holding such a dict for each interpolated column.
    """
    opts = options if options is not None else InterpolateOptions()
    if isinstance(data, DataFrame):
        return _interpolate_dataframe(data, opts)
    if isinstance(data, Series):
        return _interpolate_series(data, opts)
    raise TypeError("data must be a float64 Series or DataFrame")


def _interpolate_dataframe(df: DataFrame, opts: InterpolateOptions) -> dict[Any, Any] | None:
    with df:
        axis = opts.horiz_axis
        if axis is not None:
            if isinstance(axis, bool):
                raise TypeError("horiz_axis must be a Series, a column index or a column name")
            if isinstance(axis, int):
                axis = df.series[axis]
            elif isinstance(axis, str):
                axis = df.series[df.name_to_column(axis)]
            elif not isinstance(axis, Series):
                raise TypeError("horiz_axis must be a Series, a column index or a column name")
        series_opts = dataclasses.replace(opts, horiz_axis=axis)

        results: dict[Any, Any] = {}
        for idx, s in enumerate(df.series):
            if s is axis or s.dtype != "float64":
                continue
            filled = _interpolate_series(s, series_opts)
            if filled is not None:
                results[idx] = filled
                results[s.name] = filled
    return None if opts.in_place else results


def _micros(dt: datetime.datetime) -> int:
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=datetime.timezone.utc)
    return (dt - _EPOCH) // datetime.timedelta(microseconds=1)


def _axis_values(axis: Any) -> list[float | None]:
    if isinstance(axis, Series):
        with axis:
            raw = list(axis.values)
    elif isinstance(axis, Sequence) and not isinstance(axis, (str, bytes)):
        raw = list(axis)
    else:
        raise TypeError("horiz_axis must be a Series or a sequence of numbers or datetimes")
    out: list[float | None] = []
    for v in raw:
        if v is None:
            out.append(None)
        elif isinstance(v, datetime.datetime):
            out.append(float(_micros(v)))
        else:
            try:
                f = float(v)
            except (TypeError, ValueError) as err:
                raise ValueError(f"horiz_axis value {v!r} cannot be converted to a float") from err
            out.append(None if math.isnan(f) else f)
    return out


class _SeriesFill:
    """State for filling one float series."""

    def __init__(self, fs: Series, opts: InterpolateOptions, start: int, end: int,
                 axis: list[float | None] | None) -> None:
        self.fs = fs
        self.opts = opts
        self.start = start
        self.end = end
        self.axis = axis
        self.omap: dict[int, float] | None = None if opts.in_place else {}

    def y(self, row: int) -> float:
        v = self.fs.values[row]
        return math.nan if v is None else v

    def current(self, row: int) -> float:
        """The value at row, taking earlier fills into account."""
        if self.omap is not None and row in self.omap:
            return self.omap[row]
        return self.y(row)

    def x(self, row: int) -> float:
        if self.axis is None:
            return float(row)
        idx = row if len(self.axis) == len(self.fs.values) else row - self.start
        if not 0 <= idx < len(self.axis):
            raise IndexError(f"row {row} is outside the horizontal axis")
        v = self.axis[idx]
        if v is None:
            raise ValueError(_NIL_AXIS)
        return v

    def fill(self, fn: FillFn | None, lo: int, hi: int) -> None:
        if fn is None:
            return
        for arg, row in _fill_order(lo, hi, self.opts.fill_direction, self.opts.limit):
            y = fn(arg)
            if self.omap is not None:
                self.omap[row] = y
            else:
                self.fs.update(row, y)

    def fitter(self) -> CubicSpline | LagrangePolynomial | None:
        method = self.opts.method
        is_spline = isinstance(method, Spline) and method.order == 3
        if not is_spline and not isinstance(method, Lagrange):
            return None
        xs: list[float] = []
        ys: list[float] = []
        for row in range(self.start, self.end + 1):
            if self.fs.values[row] is not None:
                xs.append(self.x(row))
                ys.append(self.y(row))
        return CubicSpline(xs, ys) if is_spline else LagrangePolynomial(xs, ys)

    @staticmethod
    def _lagrange_at(fitter: Any, x: float) -> float:
        try:
            return fitter.at(x)
        except ValueError as err:
            raise ValueError(f"Lagrange method: {err}") from err

    def interior_fn(self, left: int, right: int, fitter: Any) -> FillFn | None:
        method = self.opts.method
        if method is None or isinstance(method, ForwardFill):
            value = self.y(left)
            return lambda r: value
        if isinstance(method, BackwardFill):
            value = self.y(right)
            return lambda r: value
        if isinstance(method, Linear):
            y_left = self.y(left)
            if self.axis is None:
                grad = (self.y(right) - y_left) / (right - left)
                c = y_left + grad
                return lambda r: grad * r + c
            x_left = self.x(left)
            grad = (self.y(right) - y_left) / (self.x(right) - x_left)
            return lambda r: grad * (self.x(left + r + 1) - x_left) + y_left
        if isinstance(method, Spline):
            if method.order != 3:
                return None
            return lambda r: fitter.at(self.x(left + r + 1))
        if isinstance(method, Lagrange):
            return lambda r: self._lagrange_at(fitter, self.x(left + r + 1))
        return None

    def left_fn(self, first: int, fitter: Any) -> FillFn | None:
        method = self.opts.method
        start = self.start
        y_first = self.y(first)
        if method is None or isinstance(method, (ForwardFill, BackwardFill)):
            return lambda r: y_first
        if isinstance(method, Linear):
            y2 = self.current(first + 1)
            if self.axis is None:
                grad = (y2 - y_first) / 1.0
                c = y_first - grad * first
                return lambda r: grad * (r + start) + c
            x_first = self.x(first)
            grad = (y2 - y_first) / (self.x(first + 1) - x_first)
            return lambda r: y_first - grad * (x_first - self.x(start + r))
        if isinstance(method, Spline) and method.order == 3:
            return lambda r: fitter.at(self.x(start + r))
        return None

    def right_fn(self, last: int, fitter: Any) -> FillFn | None:
        method = self.opts.method
        y_last = self.y(last)
        if method is None or isinstance(method, (ForwardFill, BackwardFill)):
            return lambda r: y_last
        if isinstance(method, Linear):
            y1 = self.current(last - 1)
            if self.axis is None:
                grad = (y_last - y1) / 1.0
                c = y_last - grad * last
                return lambda r: grad * (r + last + 1) + c
            x_last = self.x(last)
            grad = (y_last - y1) / (x_last - self.x(last - 1))
            return lambda r: grad * (self.x(last + 1 + r) - x_last) + y_last
        if isinstance(method, Spline) and method.order == 3:
            return lambda r: fitter.at(self.x(last + 1 + r))
        return None

    def run(self) -> dict[int, float] | None:
        start, end = self.start, self.end
        region = self.opts.fill_region
        fitter = self.fitter()

        first: int | None = None
        last: int | None = None
        seg = start
        while seg < end:
            left: int | None = None
            right: int | None = None
            for i in range(seg, end + 1):
                if self.fs.values[i] is None:
                    continue
                if first is None:
                    first = i
                if left is None:
                    left = i
                else:
                    right = i
                    last = i
                    break
            if left is None or right is None:
                break
            if region is None or FillRegion.INTERPOLATION in region:
                self.fill(self.interior_fn(left, right, fitter), left, right)
            seg = right

        if region is None or FillRegion.EXTRAPOLATION in region:
            if first is None or last is None:
                raise ValueError("at least two known values are required to extrapolate")
            if start != first:
                self.fill(self.left_fn(first, fitter), start - 1, first)
            if end != last:
                self.fill(self.right_fn(last, fitter), last, end + 1)

        return self.omap


def _interpolate_series(fs: Series, opts: InterpolateOptions) -> dict[int, float] | None:
    if fs.dtype != "float64":
        raise TypeError("data must be a float64 Series or DataFrame")
    with fs:
        start, end = limits(len(fs.values), opts.start, opts.end)
        axis = None
        if opts.horiz_axis is not None:
            axis = _axis_values(opts.horiz_axis)
            if len(axis) not in (len(fs.values), end - start + 1):
                raise ValueError("HorizAxis must contain the same number of rows")
            if opts.in_place:
                offset = 0 if len(axis) == len(fs.values) else start
                if any(axis[row - offset] is None for row in range(start, end + 1)):
                    raise ValueError(_NIL_AXIS)
        result = _SeriesFill(fs, opts, start, end, axis).run()
    return None if opts.in_place else result