"""Write data frames as CSV or JSON Lines."""

from __future__ import annotations

import datetime
import json
import math
from collections.abc import Mapping
from decimal import Decimal
from typing import Any, TextIO

from gridframe.dataframe import DataFrame, limits


def _check_delimiter(separator: str) -> None:
    if (
        not isinstance(separator, str)
        or len(separator) != 1
        or separator in '\x00"\r\n\ufffd'
        or 0xD800 <= ord(separator) <= 0xDFFF
    ):
        raise ValueError("csv: invalid field or comment delimiter")


def _needs_quotes(value: str, separator: str) -> bool:
    if value == "":
        return False
    if value == "\\.":
        return True
    if any(ch in value for ch in (separator, '"', "\r", "\n")):
        return True
    return value[0].isspace()


def _csv_field(value: str, separator: str, use_crlf: bool) -> str:
    if not _needs_quotes(value, separator):
        return value
    parts = ['"']
    for ch in value:
        if ch == '"':
            parts.append('""')
        elif ch == "\r":
            if not use_crlf:
                parts.append("\r")
        elif ch == "\n":
            parts.append("\r\n" if use_crlf else "\n")
        else:
            parts.append(ch)
    parts.append('"')
    return "".join(parts)


def export_to_csv(
    stream: TextIO,
    df: DataFrame,
    null_string: str | None = None,
    start: int | None = None,
    end: int | None = None,
    separator: str = ",",
    use_crlf: bool = False,
) -> None:
    """Write df to stream as CSV: a header of series names, then rows start..end.

    Missing values are written as null_string, "NaN" by default.
    """
    _check_delimiter(separator)
    null = "NaN" if null_string is None else null_string
    newline = "\r\n" if use_crlf else "\n"

    def write(fields: list[str]) -> None:
        stream.write(separator.join(_csv_field(f, separator, use_crlf) for f in fields) + newline)

    with df:
        write(df.names())
        nrows = df.nrows()
        if nrows > 0:
            s, e = limits(nrows, start, end)
            for row in range(s, e + 1):
                write([
                    null if series.value(row) is None else series.value_string(row)
                    for series in df.series
                ])


def _json_float(f: float) -> str:
    if math.isnan(f) or math.isinf(f):
        raise ValueError(f"json: unsupported value: {f}")
    if f == 0:
        return "-0" if math.copysign(1.0, f) < 0 else "0"
    d = Decimal(repr(f)).normalize()
    magnitude = abs(f)
    if magnitude < 1e-6 or magnitude >= 1e21:
        _, digits, exp = d.as_tuple()
        mantissa = "".join(str(digit) for digit in digits)
        x = len(digits) + exp - 1
        body = mantissa[0] + ("." + mantissa[1:] if len(mantissa) > 1 else "")
        exponent = f"{'-' if x < 0 else '+'}{abs(x):02d}"
        if exponent.startswith("-0"):
            exponent = "-" + exponent[2:]
        return ("-" if f < 0 else "") + body + "e" + exponent
    return format(d, "f")


def _json_string(s: str, escape_html: bool) -> str:
    out = json.dumps(s, ensure_ascii=False)
    out = out.replace("\u2028", "\\u2028").replace("\u2029", "\\u2029")
    if escape_html:
        out = out.replace("&", "\\u0026").replace("<", "\\u003c").replace(">", "\\u003e")
    return out


def _rfc3339(dt: datetime.datetime) -> str:
    text = dt.strftime("%Y-%m-%dT%H:%M:%S")
    if dt.microsecond:
        text += "." + f"{dt.microsecond:06d}".rstrip("0")
    offset = dt.utcoffset()
    if offset is None or offset == datetime.timedelta(0):
        return text + "Z"
    minutes = int(offset.total_seconds()) // 60
    sign = "+" if minutes >= 0 else "-"
    minutes = abs(minutes)
    return f"{text}{sign}{minutes // 60:02d}:{minutes % 60:02d}"


def _json_value(v: Any, escape_html: bool) -> str:
    if v is None:
        return "null"
    if isinstance(v, bool):
        return "true" if v else "false"
    if isinstance(v, int):
        return str(v)
    if isinstance(v, float):
        return _json_float(v)
    if isinstance(v, str):
        return _json_string(v, escape_html)
    if isinstance(v, datetime.datetime):
        return _json_string(_rfc3339(v), escape_html)
    if isinstance(v, Mapping):
        return _json_object(v, escape_html)
    if isinstance(v, (list, tuple)):
        return "[" + ",".join(_json_value(item, escape_html) for item in v) + "]"
    return _json_string(str(v), escape_html)


def _json_object(record: Mapping[Any, Any], escape_html: bool) -> str:
    items = sorted((str(k), val) for k, val in record.items())
    return "{" + ",".join(
        f"{_json_string(k, escape_html)}:{_json_value(val, escape_html)}" for k, val in items
    ) + "}"


def export_to_jsonl(
    stream: TextIO,
    df: DataFrame,
    null_string: str | None = None,
    start: int | None = None,
    end: int | None = None,
    escape_html: bool = True,
) -> None:
    """Write rows start..end of df to stream as JSON Lines, one object per row.

    Keys are series names in sorted order. Missing values are written as
    null, or as the string null_string when it is given.
    """
    with df:
        nrows = df.nrows()
        if nrows <= 0:
            return
        s, e = limits(nrows, start, end)
        for row in range(s, e + 1):
            record = {}
            for series in df.series:
                val = series.value(row)
                record[series.name] = null_string if val is None and null_string is not None else val
            stream.write(_json_object(record, escape_html) + "\n")