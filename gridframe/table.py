"""Plain-text table rendering with a header, rows and a footer."""

from __future__ import annotations

import unicodedata
from collections.abc import Sequence


def _display_width(text: str) -> int:
    width = 0
    for ch in text:
        if unicodedata.combining(ch):
            continue
        width += 2 if unicodedata.east_asian_width(ch) in ("W", "F") else 1
    return width


def _is_num_or_space(ch: str) -> bool:
    return ch.isdigit() or ch.isspace()


def _title(name: str) -> str:
    """Format a header or footer cell: underscores and word dots become spaces, upper-cased."""
    chars = list(name)
    last = len(chars) - 1
    for i, ch in enumerate(chars):
        if ch == "_":
            chars[i] = " "
        elif ch == ".":
            before = i != 0 and not _is_num_or_space(chars[i - 1])
            after = i != last and not _is_num_or_space(chars[i + 1])
            if before or after:
                chars[i] = " "
    result = "".join(chars).strip()
    if not result and name:
        result = " "
    return result.upper()


def _center(text: str, width: int) -> str:
    gap = width - _display_width(text)
    if gap <= 0:
        return text
    left = gap // 2
    return " " * left + text + " " * (gap - left)


def render_table(
    headers: Sequence[str],
    rows: Sequence[Sequence[str]],
    footers: Sequence[str] | None = None,
) -> str:
    """Render a bordered table with centred cells; headers and footers are upper-cased."""
    head = [_title(str(h)) for h in headers]
    foot = [_title(str(f)) for f in footers] if footers else []
    body = [[str(c) for c in r] for r in rows]

    ncols = max([len(head), len(foot), *(len(r) for r in body)], default=0)

    def padded(cells: list[str]) -> list[str]:
        return cells + [""] * (ncols - len(cells))

    head = padded(head) if head else []
    foot = padded(foot) if foot else []
    body = [padded(r) for r in body]

    widths = [0] * ncols
    for line in [head, foot, *body]:
        for i, cell in enumerate(line):
            widths[i] = max(widths[i], _display_width(cell))

    border = "+" + "+".join("-" * (w + 2) for w in widths) + "+"

    def render(cells: list[str]) -> str:
        return "|" + "|".join(f" {_center(c, w)} " for c, w in zip(cells, widths)) + "|"

    lines = [border]
    if head:
        lines += [render(head), border]
    lines += [render(r) for r in body]
    if foot:
        if body:
            lines.append(border)
        lines.append(render(foot))
    if not head or body or foot:
        lines.append(border)
    return "\n".join(lines) + "\n"