"""Mode state machine: normal, insert, visual and visual-line."""

from .base_mode import KeyInput, Mode, ModeBus, ModeContext, ModeResult, VimMode
from .insert_mode import InsertMode
from .mode_manager import ModeManager
from .normal_mode import NormalMode
from .visual_mode import VisualLineMode, VisualMode

__all__ = [
    "KeyInput",
    "Mode",
    "ModeBus",
    "ModeContext",
    "ModeManager",
    "ModeResult",
    "VimMode",
    "InsertMode",
    "NormalMode",
    "VisualLineMode",
    "VisualMode",
]
