"""In-memory host that behaves like a browser textarea."""

from __future__ import annotations

from typing import Callable, Optional

from .protocol import SelectionDirection


class MemoryTextHost:
    """Minimal ``TextHost`` implementation.

    Assigning text places the caret at the end, selection endpoints are
    clamped into the text and reordered, and every ``notify_content_changed``
    call is counted (and forwarded to ``on_change`` when given).
    """

    def __init__(
        self,
        text: str = "",
        *,
        caret: Optional[int] = None,
        on_change: Optional[Callable[[str], None]] = None,
    ) -> None:
        self._text = text
        position = len(text) if caret is None else caret
        self._start = 0
        self._end = 0
        self.direction: SelectionDirection = "none"
        self.change_count = 0
        self._on_change = on_change
        self.set_selection_range(position, position)

    def get_text(self) -> str:
        return self._text

    def set_text(self, text: str) -> None:
        self._text = text
        self._start = self._end = len(text)
        self.direction = "none"

    def get_selection_start(self) -> int:
        return self._start

    def get_selection_end(self) -> int:
        return self._end

    def set_selection_range(
        self, start: int, end: int, direction: SelectionDirection = "none"
    ) -> None:
        length = len(self._text)
        start = max(0, min(start, length))
        end = max(0, min(end, length))
        if end < start:
            start = end
        self._start = start
        self._end = end
        self.direction = direction

    def notify_content_changed(self) -> None:
        self.change_count += 1
        if self._on_change is not None:
            self._on_change(self._text)

    @property
    def selection(self) -> tuple[int, int]:
        return (self._start, self._end)

    @property
    def selected_text(self) -> str:
        return self._text[self._start : self._end]

    def type_text(self, text: str) -> None:
        """Replace the selection with ``text`` the way native typing would."""

        self._text = self._text[: self._start] + text + self._text[self._end :]
        caret = self._start + len(text)
        self._start = self._end = caret
        self.direction = "none"
        self.notify_content_changed()

    def __repr__(self) -> str:
        return f"MemoryTextHost(text={self._text!r}, selection={self.selection})"


__all__ = ["MemoryTextHost"]
