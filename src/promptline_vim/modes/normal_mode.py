"""Normal mode: motions, edits, and compound commands."""

from __future__ import annotations

from typing import Optional

from .base_mode import KeyInput, Mode, ModeResult, VimMode


class NormalMode(Mode):
    name = VimMode.NORMAL

    def on_enter(self, previous: Optional[VimMode]) -> None:
        del previous
        self.context.visual.clear()
        self.context.buffer.show_block_cursor()

    def handle_miss(self, key: KeyInput, *, had_pending: bool) -> ModeResult:
        # Mistyped commands must never leak characters into the buffer.
        if had_pending:
            return ModeResult(consumed=True, status="dropped", message="unknown_sequence")
        if key.printable:
            return ModeResult(consumed=True, status="ignored")
        return ModeResult(consumed=False, status="unbound")
