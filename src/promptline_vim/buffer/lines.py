"""Line boundary arithmetic over a flat string.

There is no line index: every query scans outward from ``pos`` for ``\\n``,
which is linear in the line length.
"""

from __future__ import annotations

from typing import Optional


def line_start(text: str, pos: int) -> int:
    start = pos
    while start > 0 and text[start - 1] != "\n":
        start -= 1
    return start


def line_end(text: str, pos: int) -> int:
    """Offset of the ``\\n`` terminating the line at ``pos`` (or ``len(text)``)."""

    end = pos
    while end < len(text) and text[end] != "\n":
        end += 1
    return end


def column(text: str, pos: int) -> int:
    return pos - line_start(text, pos)


def previous_line_start(text: str, pos: int) -> Optional[int]:
    """Start of the line above ``pos``; ``None`` on the first line."""

    start = line_start(text, pos)
    if start == 0:
        return None
    return line_start(text, start - 1)


def next_line_start(text: str, pos: int) -> Optional[int]:
    """Start of the line below ``pos``; ``None`` on the last line."""

    end = line_end(text, pos)
    if end >= len(text):
        return None
    return end + 1


def line_with_newline_end(text: str, pos: int) -> int:
    # dd/yy extent: include the terminator unless this is the last line
    end = line_end(text, pos)
    return end + 1 if end < len(text) else end


def clamp_column(text: str, start: int, col: int, *, allow_eol: bool) -> int:
    """Offset of ``col`` on the line beginning at ``start``.

    With ``allow_eol`` the result may sit on the line terminator; otherwise it
    stops on the last character of a non-empty line.
    """

    length = line_end(text, start) - start
    limit = length if allow_eol else max(0, length - 1)
    return start + max(0, min(col, limit))


__all__ = [
    "clamp_column",
    "column",
    "line_end",
    "line_start",
    "line_with_newline_end",
    "next_line_start",
    "previous_line_start",
]
