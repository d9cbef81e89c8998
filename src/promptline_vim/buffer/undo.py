"""Bounded linear undo/redo history of whole-text snapshots."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Deque, List, Optional


@dataclass(frozen=True, slots=True)
class Snapshot:
    text: str
    cursor: int


class UndoHistory:
    """Undo stack with FIFO eviction plus an unbounded redo stack.

    Branching is not preserved: recording a new snapshot discards redo.
    """

    def __init__(self, capacity: int = 100) -> None:
        if capacity <= 0:
            raise ValueError("undo capacity must be positive")
        self.capacity = capacity
        self._undo: Deque[Snapshot] = deque(maxlen=capacity)
        self._redo: List[Snapshot] = []

    def __len__(self) -> int:
        return len(self._undo)

    @property
    def redo_depth(self) -> int:
        return len(self._redo)

    def can_undo(self) -> bool:
        return bool(self._undo)

    def can_redo(self) -> bool:
        return bool(self._redo)

    def record(self, snapshot: Snapshot) -> bool:
        """Push ``snapshot``; returns ``False`` when it repeats the newest text.

        A repeat replaces the newest entry so undo lands on the latest caret.
        Redo survives a repeat since the text did not change.
        """

        if self._undo and self._undo[-1].text == snapshot.text:
            self._undo[-1] = snapshot
            return False
        self._undo.append(snapshot)
        self._redo.clear()
        return True

    def undo(self, current: Snapshot) -> Optional[Snapshot]:
        """Step back from ``current``; ``None`` when nothing differs from it.

        Entries identical to the live text (an insert session's exit snapshot,
        for example) are skipped so one keypress always changes something.
        """

        while self._undo and self._undo[-1].text == current.text:
            self._undo.pop()
        if not self._undo:
            return None
        self._redo.append(current)
        return self._undo.pop()

    def redo(self, current: Snapshot) -> Optional[Snapshot]:
        while self._redo and self._redo[-1].text == current.text:
            self._redo.pop()
        if not self._redo:
            return None
        self._undo.append(current)
        return self._redo.pop()

    def clear(self) -> None:
        self._undo.clear()
        self._redo.clear()


__all__ = ["Snapshot", "UndoHistory"]
