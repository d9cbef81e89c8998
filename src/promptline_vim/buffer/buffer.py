"""Buffer façade over the host widget, the yank register, and undo history."""

from __future__ import annotations

from typing import Optional

from promptline_vim.host.protocol import SelectionDirection, TextHost
from promptline_vim.runtime import telemetry

from .registers import YankRegister
from .state import Selection, block_range
from .undo import Snapshot, UndoHistory


class Buffer:
    """Reads and writes go straight through to the attached ``TextHost``.

    Nothing about the text or selection is cached between calls. Without a
    host every read reports an empty buffer and every write is a no-op.
    """

    def __init__(
        self,
        host: Optional[TextHost] = None,
        *,
        name: str = "prompt",
        registers: Optional[YankRegister] = None,
        undo: Optional[UndoHistory] = None,
    ) -> None:
        self.name = name
        self.host = host
        self.registers = registers if registers is not None else YankRegister()
        self.undo = undo if undo is not None else UndoHistory()

    @property
    def attached(self) -> bool:
        return self.host is not None

    def text(self) -> str:
        if self.host is None:
            return ""
        return self.host.get_text()

    def selection(self) -> Selection:
        if self.host is None:
            return Selection(0, 0)
        length = len(self.host.get_text())
        start = _clamp(self.host.get_selection_start(), length)
        end = _clamp(self.host.get_selection_end(), length)
        if end < start:
            start, end = end, start
        return Selection(start, end)

    def cursor(self) -> int:
        return self.selection().start

    def select(
        self, start: int, end: int, direction: SelectionDirection = "none"
    ) -> None:
        if self.host is None:
            return
        length = len(self.host.get_text())
        start = _clamp(start, length)
        end = _clamp(end, length)
        if end < start:
            start, end = end, start
        self.host.set_selection_range(start, end, direction)

    def place_caret(self, pos: int) -> None:
        self.select(pos, pos)

    def show_block_cursor(self) -> None:
        """Select the character at the caret so the host draws a block."""

        if self.host is None:
            return
        start, end = block_range(self.text(), self.cursor())
        self.select(start, end)

    def collapse_to_start(self) -> None:
        self.place_caret(self.cursor())

    def replace_range(
        self,
        start: int,
        end: int,
        text: str,
        *,
        label: str,
        caret: Optional[int] = None,
    ) -> bool:
        """Swap ``[start, end)`` for ``text`` and park the caret.

        The caret defaults to ``start``. Returns ``False`` when detached.
        """

        if self.host is None:
            return False
        with telemetry.span(
            f"buffer::{label}",
            component="buffer",
            metadata={"buffer": self.name, "start": start, "end": end},
        ):
            before = self.host.get_text()
            start = _clamp(start, len(before))
            end = _clamp(end, len(before))
            if end < start:
                start, end = end, start
            after = before[:start] + text + before[end:]
            self.host.set_text(after)
            self.place_caret(start if caret is None else caret)
            self.host.notify_content_changed()
        return True

    def snapshot(self) -> Snapshot:
        return Snapshot(text=self.text(), cursor=self.cursor())

    def save_state(self) -> bool:
        """Record the current text/cursor as an undo point."""

        if self.host is None:
            return False
        return self.undo.record(self.snapshot())

    def restore(self, snapshot: Snapshot) -> None:
        if self.host is None:
            return
        self.host.set_text(snapshot.text)
        self.place_caret(snapshot.cursor)
        self.host.notify_content_changed()

    def step_undo(self) -> bool:
        if self.host is None:
            return False
        target = self.undo.undo(self.snapshot())
        if target is None:
            return False
        self.restore(target)
        return True

    def step_redo(self) -> bool:
        if self.host is None:
            return False
        target = self.undo.redo(self.snapshot())
        if target is None:
            return False
        self.restore(target)
        return True


def _clamp(pos: int, length: int) -> int:
    return max(0, min(pos, length))


__all__ = ["Buffer"]
