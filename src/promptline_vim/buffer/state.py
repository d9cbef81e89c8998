"""Selection and Visual-mode anchor tracking."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from promptline_vim.host.protocol import SelectionDirection

from .lines import line_end, line_start


@dataclass(frozen=True, slots=True)
class Selection:
    start: int
    end: int
    direction: SelectionDirection = "none"

    @property
    def collapsed(self) -> bool:
        return self.start == self.end


@dataclass(slots=True)
class VisualState:
    """Anchor and active endpoint owned by the engine during Visual modes.

    Characterwise selections are inclusive of both the anchor and the active
    character; linewise selections always cover whole lines between them.
    """

    anchor: Optional[int] = None
    active: Optional[int] = None
    linewise: bool = False

    @property
    def engaged(self) -> bool:
        return self.anchor is not None and self.active is not None

    def begin(self, anchor: int, *, linewise: bool) -> None:
        self.anchor = anchor
        self.active = anchor
        self.linewise = linewise

    def clear(self) -> None:
        self.anchor = None
        self.active = None
        self.linewise = False

    def selection(self, text: str) -> Selection:
        """Host range for the current anchor/active pair."""

        anchor = _clamp(self.anchor or 0, text)
        active = _clamp(self.active if self.active is not None else anchor, text)
        direction: SelectionDirection = "backward" if active < anchor else "forward"
        low, high = min(anchor, active), max(anchor, active)
        if self.linewise:
            return Selection(line_start(text, low), line_end(text, high), direction)
        if not text:
            return Selection(0, 0, "none")
        return Selection(low, min(len(text), high + 1), direction)


def block_range(text: str, pos: int) -> Tuple[int, int]:
    """One-character range rendered as a block caret at ``pos``.

    Past the end the block falls back onto the last character, unless that is
    a newline: the caret then sits on an empty last line and stays zero-width.
    """

    pos = max(0, pos)
    if pos < len(text):
        return pos, pos + 1
    if text and not text.endswith("\n"):
        return len(text) - 1, len(text)
    return len(text), len(text)


def _clamp(pos: int, text: str) -> int:
    return max(0, min(pos, len(text)))


__all__ = [
    "Selection",
    "VisualState",
    "block_range",
]
