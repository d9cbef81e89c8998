"""``TextHost`` over a Textual ``TextArea``."""

from __future__ import annotations

from typing import Callable, Optional, Sequence, Tuple

from textual.widgets import TextArea
from textual.widgets.text_area import Selection

from promptline_vim.host.protocol import SelectionDirection

Location = Tuple[int, int]


def offset_for_location(lines: Sequence[str], location: Location) -> int:
    row, col = location
    row = max(0, min(row, len(lines) - 1))
    offset = 0
    for i in range(row):
        offset += len(lines[i]) + 1  # newline
    return offset + max(0, min(col, len(lines[row])))


def location_for_offset(lines: Sequence[str], offset: int) -> Location:
    running = 0
    for row, line in enumerate(lines):
        line_len = len(line)
        if offset <= running + line_len:
            return (row, max(0, offset - running))
        running += line_len + 1
    return (len(lines) - 1, len(lines[-1]))


class TextAreaHost:
    """Adapts ``TextArea`` locations to flat offsets.

    Textual keeps the anchor in ``Selection.start`` and the cursor in
    ``Selection.end``; a backward range is stored cursor-first.
    """

    def __init__(
        self,
        text_area: TextArea,
        *,
        on_change: Optional[Callable[[str], None]] = None,
    ) -> None:
        self.text_area = text_area
        self._on_change = on_change

    def _lines(self) -> list[str]:
        return self.text_area.text.split("\n")

    def _offsets(self) -> Tuple[int, int]:
        lines = self._lines()
        selection = self.text_area.selection
        first = offset_for_location(lines, selection.start)
        second = offset_for_location(lines, selection.end)
        return min(first, second), max(first, second)

    def get_text(self) -> str:
        return self.text_area.text

    def set_text(self, text: str) -> None:
        self.text_area.load_text(text)
        end = location_for_offset(text.split("\n"), len(text))
        self.text_area.selection = Selection.cursor(end)

    def get_selection_start(self) -> int:
        return self._offsets()[0]

    def get_selection_end(self) -> int:
        return self._offsets()[1]

    def set_selection_range(
        self, start: int, end: int, direction: SelectionDirection = "none"
    ) -> None:
        lines = self._lines()
        first = location_for_offset(lines, start)
        second = location_for_offset(lines, end)
        if direction == "backward":
            self.text_area.selection = Selection(second, first)
        else:
            self.text_area.selection = Selection(first, second)

    def notify_content_changed(self) -> None:
        if self._on_change is not None:
            self._on_change(self.text_area.text)


__all__ = ["TextAreaHost", "location_for_offset", "offset_for_location"]
