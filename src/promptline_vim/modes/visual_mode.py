"""Visual and Visual-Line modes extending an engine-owned selection."""

from __future__ import annotations

from typing import Optional

from .base_mode import KeyInput, Mode, ModeResult, VimMode


class VisualMode(Mode):
    name = VimMode.VISUAL
    linewise = False

    def on_enter(self, previous: Optional[VimMode]) -> None:
        del previous
        visual = self.context.visual
        if not visual.engaged:
            # Entered without v/V (for example by a custom binding): adopt the caret.
            visual.begin(self.context.buffer.cursor(), linewise=self.linewise)
        visual.linewise = self.linewise
        self.render_selection()

    def on_exit(self, next_mode: Optional[VimMode]) -> None:
        super().on_exit(next_mode)
        self.context.visual.clear()

    def render_selection(self) -> None:
        buffer = self.context.buffer
        selection = self.context.visual.selection(buffer.text())
        buffer.select(selection.start, selection.end, selection.direction)

    def handle_miss(self, key: KeyInput, *, had_pending: bool) -> ModeResult:
        if had_pending:
            # Only gg is compound here; g followed by a motion still moves.
            return self.handle_key(key)
        if key.printable:
            return ModeResult(consumed=True, status="ignored")
        return ModeResult(consumed=False, status="unbound")


class VisualLineMode(VisualMode):
    name = VimMode.VISUAL_LINE
    linewise = True


__all__ = ["VisualLineMode", "VisualMode"]
