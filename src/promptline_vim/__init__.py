"""Vim-style modal editing for prompt text boxes."""

from .config import EngineSettings
from .engine import VimModeEngine
from .host import MemoryTextHost, TextHost
from .modes import KeyInput, VimMode

__all__ = [
    "EngineSettings",
    "KeyInput",
    "MemoryTextHost",
    "TextHost",
    "VimMode",
    "VimModeEngine",
]

__version__ = "0.1.0"
