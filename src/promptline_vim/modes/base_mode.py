"""Base classes and shared types for editor modes."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Callable, Dict, List, Optional, Tuple

from promptline_vim.buffer import Buffer, VisualState, YankRegister
from promptline_vim.keymaps import (
    KeymapResolver,
    ResolutionMatch,
    normalize_modifiers,
    stroke_token,
)
from promptline_vim.runtime import telemetry

if TYPE_CHECKING:
    from promptline_vim.runtime.paste import PasteCoordinator


class VimMode(str, Enum):
    NORMAL = "normal"
    INSERT = "insert"
    VISUAL = "visual"
    VISUAL_LINE = "visual-line"

    @property
    def label(self) -> str:
        return _MODE_LABELS[self]


_MODE_LABELS = {
    VimMode.NORMAL: "NORMAL",
    VimMode.INSERT: "INSERT",
    VimMode.VISUAL: "VISUAL",
    VimMode.VISUAL_LINE: "V-LINE",
}


@dataclass(slots=True)
class KeyInput:
    """Normalized key event passed to modes.

    ``key`` follows DOM ``KeyboardEvent.key`` naming (``"h"``, ``"G"``,
    ``"Escape"``, ``"Backspace"``).
    """

    key: str
    modifiers: Tuple[str, ...] = ()
    text: Optional[str] = None

    def __post_init__(self) -> None:
        self.modifiers = normalize_modifiers(self.key, self.modifiers)

    @classmethod
    def from_event(
        cls,
        key: str,
        *,
        ctrl: bool = False,
        shift: bool = False,
        alt: bool = False,
        meta: bool = False,
    ) -> "KeyInput":
        flags = (("ctrl", ctrl), ("shift", shift), ("alt", alt), ("meta", meta))
        modifiers = tuple(name for name, on in flags if on)
        text = key if len(key) == 1 and not (ctrl or alt or meta) else None
        return cls(key=key, modifiers=modifiers, text=text)

    @property
    def token(self) -> str:
        return stroke_token(self.key, self.modifiers)

    @property
    def printable(self) -> bool:
        """Single character with no command modifier held."""

        return len(self.key) == 1 and not self.modifiers


@dataclass(slots=True)
class ModeResult:
    """Result returned from ``Mode.handle_key``."""

    consumed: bool
    switch_to: Optional[VimMode] = None
    status: str = "ok"
    message: Optional[str] = None
    timeout_ms: Optional[int] = None


class ModeBus:
    """Minimal event bus letting modes and actions signal the host."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in self._subscribers.get(event, []):
            callback(payload)


@dataclass(slots=True)
class ModeContext:
    """Shared services every mode and action can reach."""

    buffer: Buffer
    bus: ModeBus
    visual: VisualState = field(default_factory=VisualState)
    paste: Optional["PasteCoordinator"] = None

    @property
    def registers(self) -> YankRegister:
        return self.buffer.registers


class Mode:
    """Keymap-driven mode; subclasses decide what an unbound key means."""

    name: VimMode = VimMode.NORMAL

    def __init__(
        self,
        context: ModeContext,
        *,
        resolver: KeymapResolver,
        default_pending_timeout_ms: int = 1000,
    ) -> None:
        self.context = context
        self._resolver = resolver
        self._pending: List[str] = []
        self._default_timeout_ms = default_pending_timeout_ms
        self.logger = telemetry.get_logger(f"promptline_vim.modes.{self.name.value}")

    @property
    def pending_tokens(self) -> tuple[str, ...]:
        return tuple(self._pending)

    def on_enter(self, previous: Optional[VimMode]) -> None:
        del previous

    def on_exit(self, next_mode: Optional[VimMode]) -> None:
        del next_mode
        self._pending.clear()

    def handle_key(self, key: KeyInput) -> ModeResult:
        had_pending = bool(self._pending)
        self._pending.append(key.token)
        result = self._resolver.resolve(self.name.value, tuple(self._pending))

        if result.status == "match" and result.match:
            self._pending.clear()
            return self._execute_match(result.match)

        if result.status == "pending":
            return ModeResult(
                consumed=True,
                status="pending",
                message="awaiting_sequence",
                timeout_ms=result.timeout_ms or self._default_timeout_ms,
            )

        self._pending.clear()
        return self.handle_miss(key, had_pending=had_pending)

    def handle_miss(self, key: KeyInput, *, had_pending: bool) -> ModeResult:
        del key, had_pending
        return ModeResult(consumed=False, status="unbound")

    def handle_timeout(self) -> ModeResult:
        """Drop an expired pending key without side effects."""

        if self._pending:
            self._pending.clear()
            return ModeResult(consumed=False, status="timeout", message="pending_timeout")
        return ModeResult(consumed=False, status="timeout")

    def _execute_match(self, match: ResolutionMatch) -> ModeResult:
        with telemetry.span(
            "keymaps::execute",
            metadata={"binding_id": match.binding.id, "action": match.action.id},
        ):
            outcome = match.action(self.context, match)
        if isinstance(outcome, ModeResult):
            return outcome
        return ModeResult(consumed=True)


__all__ = [
    "KeyInput",
    "Mode",
    "ModeBus",
    "ModeContext",
    "ModeResult",
    "VimMode",
]
