"""Boundary types describing what the engine needs from its host widget."""

from __future__ import annotations

from typing import Awaitable, Callable, Literal, Optional, Protocol

SelectionDirection = Literal["forward", "backward", "none"]

ClipboardReader = Callable[[], Awaitable[Optional[str]]]


class TextHost(Protocol):
    """Text input surface the engine reads and writes through.

    The host is the single source of truth for both content and selection;
    offsets count code units from the start of the text.
    """

    def get_text(self) -> str:
        ...

    def set_text(self, text: str) -> None:
        ...

    def get_selection_start(self) -> int:
        ...

    def get_selection_end(self) -> int:
        ...

    def set_selection_range(
        self, start: int, end: int, direction: SelectionDirection = "none"
    ) -> None:
        ...

    def notify_content_changed(self) -> None:
        """Fire host-side hooks (character count, draft save) after an edit."""
        ...


__all__ = ["ClipboardReader", "SelectionDirection", "TextHost"]
