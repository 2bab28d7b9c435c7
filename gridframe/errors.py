"""Error types and small value helpers shared across the package."""

from __future__ import annotations

import math
import threading
from collections.abc import Iterable, Iterator
from typing import TypeVar

FALSE = 0
TRUE = 1

_E = TypeVar("_E", bound=BaseException)


class NoRowsError(Exception):
    """The Series, DataFrame or imported data contains no rows."""

    def __init__(self, message: str = "contains no rows") -> None:
        super().__init__(message)


class RowError(Exception):
    """A particular row contained or generated an error."""

    def __init__(self, row: int, err: BaseException) -> None:
        super().__init__(row, err)
        self.row = row
        self.err = err
        self.__cause__ = err

    def __str__(self) -> str:
        return f"row: {self.row}: {self.err}"


def _chain(err: BaseException) -> Iterator[BaseException]:
    """Yield err followed by every error it wraps."""
    seen: set[int] = set()
    current: BaseException | None = err
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        current = current.err if isinstance(current, RowError) else current.__cause__


class ErrorCollection(Exception):
    """Holds several errors at once; safe to fill from multiple threads."""

    def __init__(self, errors: Iterable[BaseException] = ()) -> None:
        super().__init__()
        self._lock = threading.Lock()
        self._errors: list[BaseException] = []
        for err in errors:
            self.add_error(err)

    def add_error(self, err: BaseException) -> None:
        """Add an error to the collection."""
        if err is None:
            raise ValueError("error must not be nil")
        with self._lock:
            self._errors.append(err)

    def is_nil(self) -> bool:
        """Return True when the collection holds no errors."""
        with self._lock:
            return not self._errors

    @property
    def errors(self) -> tuple[BaseException, ...]:
        """A snapshot of the collected errors."""
        with self._lock:
            return tuple(self._errors)

    def __str__(self) -> str:
        return "\n".join(str(err) for err in self.errors)

    def contains(self, err: BaseException | None) -> bool:
        """Return True if err is one of the collected errors or wrapped by one."""
        errors = self.errors
        if err is None:
            return not errors
        for collected in errors:
            for link in _chain(collected):
                if link is err or link == err:
                    return True
                if isinstance(link, ErrorCollection) and link.contains(err):
                    return True
        return False

    def find(self, target_type: type[_E]) -> _E | None:
        """Return the first collected (or wrapped) error of target_type, else None."""
        if target_type is None:
            raise TypeError("target cannot be nil")
        for collected in self.errors:
            for link in _chain(collected):
                if isinstance(link, target_type):
                    return link
                if isinstance(link, ErrorCollection):
                    found = link.find(target_type)
                    if found is not None:
                        return found
        return None


def b(value: bool) -> int:
    """Convert a boolean to 1 or 0."""
    return TRUE if value else FALSE


def is_valid_float64(f: float) -> bool:
    """Return True if f is neither NaN nor infinite."""
    return not (math.isnan(f) or math.isinf(f))


def bool_value_formatter(v: object) -> str:
    """Display a 0/1 value as a boolean; None shows as NaN."""
    if v is None:
        return "NaN"
    if isinstance(v, bool):
        return ""
    if isinstance(v, (int, float)) and v in (0, 1):
        return "true" if v == 1 else "false"
    if isinstance(v, str) and v in ("0", "1"):
        return "true" if v == "1" else "false"
    raise TypeError(f"value {v!r} cannot be displayed as a bool")