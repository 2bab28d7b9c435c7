"""In-memory series and data frames with row-level editing and table output."""

from __future__ import annotations

import datetime
import enum
import math
import threading
from collections.abc import Iterable, Iterator, Mapping, Sequence
from decimal import Decimal
from typing import Any

from gridframe.errors import NoRowsError
from gridframe.table import render_table

_DTYPES = ("float64", "int64", "string", "time", "mixed")


def limits(nrows: int, start: int | None = None, end: int | None = None) -> tuple[int, int]:
    """Resolve an inclusive row range against nrows; negative values count from the end."""
    if nrows <= 0:
        raise NoRowsError()
    s = 0 if start is None else start
    e = nrows - 1 if end is None else end
    if s < 0:
        s += nrows
    if e < 0:
        e += nrows
    if not 0 <= s < nrows or not 0 <= e < nrows:
        raise IndexError("range out of bounds")
    if s > e:
        raise ValueError("start is greater than end")
    return s, e


def _format_float(f: float) -> str:
    """Shortest representation of f, switching to exponent form for very small or large values."""
    if math.isnan(f):
        return "NaN"
    if math.isinf(f):
        return "+Inf" if f > 0 else "-Inf"
    if f == 0:
        return "-0" if math.copysign(1.0, f) < 0 else "0"
    d = abs(Decimal(repr(f))).normalize()
    _, digits, exp = d.as_tuple()
    x = len(digits) + exp - 1
    if x < -4 or x >= 21:
        mant = "".join(str(digit) for digit in digits)
        body = mant[0] + ("." + mant[1:] if len(mant) > 1 else "")
        out = f"{body}e{'-' if x < 0 else '+'}{abs(x):02d}"
    else:
        out = format(d, "f")
    return ("-" if f < 0 else "") + out


def _infer_dtype(values: Sequence[Any]) -> str:
    present = [v for v in values if v is not None]
    if not present or any(isinstance(v, bool) for v in present):
        return "mixed"
    if all(isinstance(v, int) for v in present):
        return "int64"
    if all(isinstance(v, (int, float)) for v in present):
        return "float64"
    if all(isinstance(v, str) for v in present):
        return "string"
    if all(isinstance(v, datetime.datetime) for v in present):
        return "time"
    return "mixed"


class Series:
    """A named column of values of one type; None marks a missing value."""

    def __init__(self, name: str, values: Iterable[Any] = (), dtype: str | None = None) -> None:
        values = list(values)
        if dtype is None:
            dtype = _infer_dtype(values)
        if dtype not in _DTYPES:
            raise ValueError(f"unknown dtype: {dtype}")
        self.name = name
        self.dtype = dtype
        self._lock = threading.RLock()
        self.values: list[Any] = [self._coerce(v) for v in values]

    def _coerce(self, v: Any) -> Any:
        if v is None:
            return None
        if self.dtype == "float64":
            f = float(v)
            return None if math.isnan(f) else f
        if self.dtype == "int64":
            if isinstance(v, float) and math.isnan(v):
                return None
            return int(v)
        if self.dtype == "string":
            return str(v)
        if self.dtype == "time":
            if not isinstance(v, datetime.datetime):
                raise TypeError(f"time series requires datetime values, got {v!r}")
            return v
        return v

    def _check_row(self, row: int, allow_end: bool = False) -> None:
        upper = len(self.values) if allow_end else len(self.values) - 1
        if not 0 <= row <= upper:
            raise IndexError(f"row {row} out of range")

    def __len__(self) -> int:
        return self.nrows()

    def __enter__(self) -> Series:
        self._lock.acquire()
        return self

    def __exit__(self, *exc: object) -> None:
        self._lock.release()

    def lock(self) -> None:
        """Acquire the series' lock."""
        self._lock.acquire()

    def unlock(self) -> None:
        """Release the series' lock."""
        self._lock.release()

    def nrows(self) -> int:
        """Number of rows."""
        with self._lock:
            return len(self.values)

    def value(self, row: int) -> Any:
        """The value at row."""
        with self._lock:
            self._check_row(row)
            return self.values[row]

    def value_string(self, row: int) -> str:
        """The value at row formatted for display; missing values show as NaN."""
        val = self.value(row)
        if val is None:
            return "NaN"
        if isinstance(val, float):
            return _format_float(val)
        return str(val)

    def insert(self, row: int, val: Any) -> None:
        """Insert val before row."""
        with self._lock:
            self._check_row(row, allow_end=True)
            self.values.insert(row, self._coerce(val))

    def append(self, val: Any) -> None:
        """Add val at the end."""
        with self._lock:
            self.values.append(self._coerce(val))

    def prepend(self, val: Any) -> None:
        """Add val at the beginning."""
        self.insert(0, val)

    def remove(self, row: int) -> None:
        """Delete row."""
        with self._lock:
            self._check_row(row)
            del self.values[row]

    def update(self, row: int, val: Any) -> None:
        """Replace the value at row."""
        with self._lock:
            self._check_row(row)
            self.values[row] = self._coerce(val)

    def swap(self, row1: int, row2: int) -> None:
        """Exchange the values at two rows."""
        with self._lock:
            self._check_row(row1)
            self._check_row(row2)
            self.values[row1], self.values[row2] = self.values[row2], self.values[row1]

    def copy(self, start: int | None = None, end: int | None = None) -> Series:
        """A new series holding rows start..end (inclusive), or all rows."""
        with self._lock:
            if start is None and end is None:
                chosen = list(self.values)
            else:
                s, e = limits(len(self.values), start, end)
                chosen = self.values[s:e + 1]
            return Series(self.name, chosen, self.dtype)

    def new_series(self, name: str | None = None) -> Series:
        """An empty series of the same type."""
        return Series(self.name if name is None else name, (), self.dtype)

    def nil_count(self, start: int | None = None, end: int | None = None,
                  stop_at_one_nil: bool = False) -> int:
        """Count missing values in the range; stops at the first one if asked."""
        with self._lock:
            if start is None and end is None and not self.values:
                return 0
            s, e = limits(len(self.values), start, end)
            count = 0
            for val in self.values[s:e + 1]:
                if val is None:
                    count += 1
                    if stop_at_one_nil:
                        break
            return count

    def is_equal(self, other: object, check_name: bool = False) -> bool:
        """True if other holds the same type and values (and name, if check_name)."""
        if not isinstance(other, Series):
            return False
        with self._lock, other._lock:
            if self.dtype != other.dtype:
                return False
            if check_name and self.name != other.name:
                return False
            return self.values == other.values

    def __repr__(self) -> str:
        return f"Series({self.name!r}, {self.values!r}, dtype={self.dtype!r})"


class SeriesReturn(enum.Flag):
    """Which keys a row mapping carries: the series index, the series name, or both."""

    IDX = 1
    NAME = 2
    BOTH = IDX | NAME


class DataFrame:
    """A set of equally long, uniquely named series."""

    def __init__(self, *series: Series) -> None:
        self._lock = threading.RLock()
        self.series: list[Series] = []
        self._n = 0
        count: int | None = None
        names: set[str] = set()
        for s in series:
            if count is None:
                count = s.nrows()
            elif count != s.nrows():
                raise ValueError("different number of rows in series")
            if s.name in names:
                raise ValueError(f"names of series must be unique: {s.name}")
            names.add(s.name)
            self.series.append(s)
        self._n = count or 0

    def __len__(self) -> int:
        return self.nrows()

    def __enter__(self) -> DataFrame:
        self.lock()
        return self

    def __exit__(self, *exc: object) -> None:
        self.unlock()

    def nrows(self) -> int:
        """Number of rows."""
        with self._lock:
            return self._n

    def _row(self, row: int, ret: SeriesReturn) -> dict[Any, Any]:
        out: dict[Any, Any] = {}
        for idx, s in enumerate(self.series):
            val = s.value(row)
            if ret & SeriesReturn.IDX:
                out[idx] = val
            if ret & SeriesReturn.NAME:
                out[s.name] = val
        return out

    def row(self, row: int, ret: SeriesReturn = SeriesReturn.BOTH) -> dict[Any, Any]:
        """The values of one row keyed by series index and/or name."""
        with self._lock:
            return self._row(row, ret)

    def values(self, initial_row: int = 0, step: int = 1,
               ret: SeriesReturn = SeriesReturn.BOTH) -> Iterator[tuple[int, dict[Any, Any]]]:
        """Yield (row, values) pairs; a negative initial_row counts from the end."""
        if step == 0:
            step = 1
        row = initial_row if initial_row >= 0 else self.nrows() + initial_row
        while True:
            with self._lock:
                if row < 0 or row > self._n - 1:
                    return
                vals = self._row(row, ret)
            yield row, vals
            row += step

    def _column(self, key: Any) -> int:
        if isinstance(key, bool) or not isinstance(key, (int, str)):
            raise TypeError("unknown key type. Must be an int or string.")
        if isinstance(key, str):
            return self.name_to_column(key)
        if not 0 <= key < len(self.series):
            raise IndexError(f"column {key} out of range")
        return key

    def _resolve_mapping(self, mapping: Mapping[Any, Any]) -> dict[int, Any]:
        return {self._column(key): val for key, val in mapping.items()}

    def prepend(self, *args: Any) -> None:
        """Insert a row at the beginning."""
        self.insert(0, *args)

    def append(self, *args: Any) -> None:
        """Insert a row at the end."""
        with self._lock:
            self.insert(self._n, *args)

    def insert(self, row: int, *args: Any) -> None:
        """Insert a row before row, given positionally or as a mapping keyed by index or name."""
        if not args:
            return
        with self._lock:
            first = args[0]
            if isinstance(first, Mapping):
                cols = self._resolve_mapping(first)
                if len(cols) != len(self.series):
                    raise ValueError("no. of args not equal to no. of series")
                items = sorted(cols.items())
            else:
                if len(args) != len(self.series):
                    raise ValueError("no. of args not equal to no. of series")
                items = list(enumerate(args))
            if not 0 <= row <= self._n:
                raise IndexError(f"row {row} out of range")
            for col, val in items:
                self.series[col].insert(row, val)
            self._n += 1

    def clear_row(self, row: int) -> None:
        """Set every value of row to None."""
        with self._lock:
            for s in self.series:
                s.update(row, None)

    def remove(self, row: int) -> None:
        """Delete row."""
        with self._lock:
            if not 0 <= row < self._n:
                raise IndexError(f"row {row} out of range")
            for s in self.series:
                s.remove(row)
            self._n -= 1

    def update(self, row: int, col: int | str, val: Any) -> None:
        """Replace one value; col is a series index or name."""
        with self._lock:
            self.series[self._column(col)].update(row, val)

    def update_row(self, row: int, *args: Any) -> None:
        """Replace values of a row, given positionally (all columns) or as a mapping."""
        if not args:
            return
        with self._lock:
            first = args[0]
            if isinstance(first, Mapping):
                for col, val in self._resolve_mapping(first).items():
                    self.series[col].update(row, val)
            else:
                if len(args) != len(self.series):
                    raise ValueError("no. of args not equal to no. of series")
                for s, val in zip(self.series, args):
                    s.update(row, val)

    def names(self) -> list[str]:
        """Names of all series, in column order."""
        with self._lock:
            return [s.name for s in self.series]

    def name_to_column(self, name: str) -> int:
        """The column index of the series called name."""
        with self._lock:
            for idx, s in enumerate(self.series):
                if s.name == name:
                    return idx
        raise KeyError(f"no series contains name: {name}")

    def reorder_columns(self, new_order: Sequence[str]) -> None:
        """Reorder the columns to follow new_order, which must name every series once."""
        with self._lock:
            if len(new_order) != len(self.series):
                raise ValueError("length of new_order must match number of columns")
            if len(set(new_order)) != len(self.series):
                raise ValueError("new_order must not contain duplicate values")
            self.series = [self.series[self.name_to_column(name)] for name in new_order]

    def remove_series(self, name: str) -> None:
        """Remove the series called name."""
        with self._lock:
            del self.series[self.name_to_column(name)]

    def add_series(self, s: Series, col: int | None = None) -> None:
        """Add s at the end, or at position col."""
        with self._lock:
            if s.nrows() != self._n:
                raise ValueError("different number of rows in series")
            if col is None:
                self.series.append(s)
            else:
                self.series.insert(col, s)

    def swap(self, row1: int, row2: int) -> None:
        """Exchange two rows."""
        with self._lock:
            for s in self.series:
                s.swap(row1, row2)

    def lock(self, deep: bool = False) -> None:
        """Lock the frame, and every series too when deep is set."""
        self._lock.acquire()
        if deep:
            for s in self.series:
                s.lock()

    def unlock(self, deep: bool = False) -> None:
        """Release a lock taken with lock()."""
        if deep:
            for s in self.series:
                s.unlock()
        self._lock.release()

    def copy(self, start: int | None = None, end: int | None = None) -> DataFrame:
        """A new frame holding copies of rows start..end (inclusive), or all rows."""
        with self._lock:
            return DataFrame(*(s.copy(start, end) for s in self.series))

    def is_equal(self, other: object, **kwargs: Any) -> bool:
        """True if other has the same columns holding equal series; kwargs go to Series.is_equal."""
        if not isinstance(other, DataFrame):
            return False
        with self._lock:
            if len(self.series) != len(other.series):
                return False
            return all(a.is_equal(b, **kwargs) for a, b in zip(self.series, other.series))

    def table(self, series: Iterable[int | str] | None = None,
              start: int | None = None, end: int | None = None) -> str:
        """Render the frame as a text table, optionally limited to some series and rows."""
        with self._lock:
            wanted = set(series) if series else set()
            cols = [s for idx, s in enumerate(self.series)
                    if not wanted or idx in wanted or s.name in wanted]
            headers = [""] + [s.name for s in cols]
            footers = [f"{self._n}x{len(self.series)}"] + [s.dtype for s in cols]
            rows: list[list[str]] = []
            if self._n > 0:
                s_row, e_row = limits(self._n, start, end)
                for row in range(s_row, e_row + 1):
                    rows.append([f"{row}:"] + [s.value_string(row) for s in cols])
            return render_table(headers, rows, footers)

    def __str__(self) -> str:
        with self._lock:
            n = self._n
            if n <= 6:
                return self.table()
            headers = [""] + [s.name for s in self.series]
            footers = [f"{n}x{len(self.series)}"] + [s.dtype for s in self.series]
            rows: list[list[str]] = []
            for j, row in enumerate((0, 1, 2, n - 3, n - 2, n - 1)):
                if j == 3:
                    rows.append(["⋮"] * (len(self.series) + 1))
                rows.append([f"{row}:"] + [s.value_string(row) for s in self.series])
            return render_table(headers, rows, footers)