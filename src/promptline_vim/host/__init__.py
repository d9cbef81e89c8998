"""Host widget and clipboard capabilities consumed by the engine."""

from .memory import MemoryTextHost
from .protocol import ClipboardReader, SelectionDirection, TextHost

__all__ = [
    "ClipboardReader",
    "MemoryTextHost",
    "SelectionDirection",
    "TextHost",
]
