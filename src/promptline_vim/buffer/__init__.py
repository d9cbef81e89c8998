"""Text arithmetic, the yank register, and undo/redo over the host buffer."""

from .buffer import Buffer
from .registers import RegisterType, RegisterValue, YankRegister
from .state import Selection, VisualState, block_range
from .undo import Snapshot, UndoHistory

__all__ = [
    "Buffer",
    "RegisterType",
    "RegisterValue",
    "YankRegister",
    "Selection",
    "VisualState",
    "block_range",
    "Snapshot",
    "UndoHistory",
]
