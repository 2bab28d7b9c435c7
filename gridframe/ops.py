"""Row-wise apply and filter operations over series and data frames."""

from __future__ import annotations

import enum
from collections.abc import Callable, Mapping
from typing import Any

from gridframe.dataframe import DataFrame, Series, SeriesReturn

ApplySeriesFn = Callable[[Any, int, int], Any]
ApplyDataFrameFn = Callable[[dict[Any, Any], int, int], "Mapping[Any, Any] | None"]
FilterSeriesFn = Callable[[Any, int, int], "FilterAction | int"]
FilterDataFrameFn = Callable[[dict[Any, Any], int, int], "FilterAction | int"]


class FilterAction(enum.IntEnum):
    """What a filter function decides for a row."""

    DROP = 0
    KEEP = 1
    CHOOSE = 1


def _action(result: Any) -> FilterAction:
    try:
        return FilterAction(result)
    except ValueError:
        raise ValueError(f"unrecognized FilterAction returned by fn: {result!r}") from None


def apply(sdf: Series | DataFrame, fn: Callable[..., Any], in_place: bool = False) -> Series | DataFrame | None:
    """Call fn for every row and store what it returns.

    For a Series, fn(val, row, nrows) returns the new value. For a DataFrame,
    fn(vals, row, nrows) receives the row keyed by series index and name and
    returns a mapping of the values to change, or None to leave the row as is.
    With in_place the input is modified and None is returned; otherwise a new
    Series or DataFrame is returned and the input is left unchanged.
    """
    if fn is None:
        raise ValueError("fn is required")
    if isinstance(sdf, Series):
        return _apply_series(sdf, fn, in_place)
    if isinstance(sdf, DataFrame):
        return _apply_dataframe(sdf, fn, in_place)
    raise TypeError("sdf must be a Series or DataFrame")


def _apply_series(s: Series, fn: ApplySeriesFn, in_place: bool) -> Series | None:
    with s:
        nrows = s.nrows()
        ns = None if in_place else s.new_series(s.name)
        for row in range(nrows):
            new_val = fn(s.value(row), row, nrows)
            if ns is None:
                s.update(row, new_val)
            else:
                ns.append(new_val)
    return ns


def _apply_dataframe(df: DataFrame, fn: ApplyDataFrameFn, in_place: bool) -> DataFrame | None:
    with df:
        nrows = df.nrows()
        ndf = None if in_place else DataFrame(*(s.new_series(s.name) for s in df.series))
        for row in range(nrows):
            vals = df.row(row)
            new_vals = fn(vals, row, nrows)
            if ndf is None:
                if new_vals is not None:
                    df.update_row(row, new_vals)
            else:
                ndf.append(new_vals if new_vals is not None else vals)
    return ndf


def filter_rows(sdf: Series | DataFrame, fn: Callable[..., Any], in_place: bool = False) -> Series | DataFrame | None:
    """Keep or drop rows according to fn.

    fn receives (val, row, nrows) for a Series or (vals, row, nrows) for a
    DataFrame and returns FilterAction.KEEP (or CHOOSE) or FilterAction.DROP.
    With in_place the dropped rows are removed and None is returned; otherwise
    a new Series or DataFrame holding the kept rows is returned.
    """
    if fn is None:
        raise ValueError("fn is required")
    if isinstance(sdf, Series):
        return _filter_series(sdf, fn, in_place)
    if isinstance(sdf, DataFrame):
        return _filter_dataframe(sdf, fn, in_place)
    raise TypeError("sdf must be a Series or DataFrame")


def _selected_rows(nrows: int, decide: Callable[[int], Any], in_place: bool) -> list[int]:
    """Rows to remove (in place) or to transfer (otherwise)."""
    wanted = FilterAction.DROP if in_place else FilterAction.KEEP
    return [row for row in range(nrows) if _action(decide(row)) == wanted]


def _filter_series(s: Series, fn: FilterSeriesFn, in_place: bool) -> Series | None:
    with s:
        nrows = s.nrows()
        rows = _selected_rows(nrows, lambda row: fn(s.value(row), row, nrows), in_place)
        if not in_place:
            ns = s.new_series(s.name)
            for row in rows:
                ns.append(s.value(row))
            return ns
        for row in reversed(rows):
            s.remove(row)
    return None


def _filter_dataframe(df: DataFrame, fn: FilterDataFrameFn, in_place: bool) -> DataFrame | None:
    with df:
        nrows = df.nrows()
        rows = _selected_rows(nrows, lambda row: fn(df.row(row), row, nrows), in_place)
        if not in_place:
            ndf = DataFrame(*(s.new_series(s.name) for s in df.series))
            for row in rows:
                ndf.append(df.row(row, SeriesReturn.NAME))
            return ndf
        for row in reversed(rows):
            df.remove(row)
    return None