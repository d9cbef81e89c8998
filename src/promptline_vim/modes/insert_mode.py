"""Insert mode: the host widget does the typing."""

from __future__ import annotations

from typing import Optional

from .base_mode import Mode, VimMode


class InsertMode(Mode):
    """Only the exit bindings are intercepted; every other key passes through."""

    name = VimMode.INSERT

    def on_enter(self, previous: Optional[VimMode]) -> None:
        if previous is None:
            return
        # A live selection would be silently overwritten by the next keystroke.
        self.context.buffer.collapse_to_start()
