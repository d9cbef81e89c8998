"""Dataclasses describing key sequences, actions, and bindings."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable

DEFAULT_SEQUENCE_TIMEOUT_MS = 1000


def normalize_modifiers(key: str, modifiers: Iterable[str]) -> tuple[str, ...]:
    """Lower-case, de-duplicate and sort modifiers.

    ``shift`` is dropped for single-character keys because the character
    already carries it (``U`` rather than ``shift+u``).
    """

    values = [m.strip().lower() for m in modifiers if m and m.strip()]
    if len(key) == 1:
        values = [m for m in values if m != "shift"]
    return tuple(sorted(dict.fromkeys(values)))


def stroke_token(key: str, modifiers: Iterable[str] = ()) -> str:
    normalized = normalize_modifiers(key, modifiers)
    if normalized:
        return "+".join(normalized) + "+" + key
    return key


@dataclass(frozen=True, slots=True)
class KeyStroke:
    """Single key press within a sequence."""

    key: str
    modifiers: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.key:
            raise ValueError("key cannot be empty")
        object.__setattr__(
            self, "modifiers", normalize_modifiers(self.key, self.modifiers)
        )

    @property
    def token(self) -> str:
        return stroke_token(self.key, self.modifiers)

    @classmethod
    def parse(cls, spec: str) -> "KeyStroke":
        """Build a stroke from ``"ctrl+["`` style text."""

        if len(spec) > 1 and "+" in spec[:-1]:
            head, _, key = spec.rpartition("+")
            if key == "" and head.endswith("+"):
                head, key = head[:-1], "+"
            return cls(key, tuple(head.split("+")))
        return cls(spec)


@dataclass(frozen=True, slots=True)
class KeySequence:
    """One or more strokes that must arrive within ``timeout_ms`` of each other."""

    strokes: tuple[KeyStroke, ...]
    timeout_ms: int = DEFAULT_SEQUENCE_TIMEOUT_MS

    def __post_init__(self) -> None:
        if not self.strokes:
            raise ValueError("KeySequence requires at least one stroke")
        if self.timeout_ms <= 0:
            raise ValueError("timeout_ms must be positive")

    @property
    def tokens(self) -> tuple[str, ...]:
        return tuple(stroke.token for stroke in self.strokes)

    @classmethod
    def from_strings(
        cls, *keys: str, timeout_ms: int = DEFAULT_SEQUENCE_TIMEOUT_MS
    ) -> "KeySequence":
        return cls(tuple(KeyStroke.parse(key) for key in keys if key), timeout_ms)


@dataclass(frozen=True, slots=True)
class ActionRef:
    """Named handler invoked when a binding matches."""

    id: str
    handler: Callable[..., object]
    description: str = ""

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("ActionRef id cannot be empty")
        if not callable(self.handler):
            raise TypeError("handler must be callable")

    def __call__(self, *args: object, **kwargs: object) -> object:
        return self.handler(*args, **kwargs)


@dataclass(frozen=True, slots=True)
class Binding:
    """Associates a key sequence in one mode with an action."""

    id: str
    mode: str
    sequence: KeySequence
    action_id: str
    description: str = ""
    priority: int = 0

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("binding id cannot be empty")
        if not self.mode:
            raise ValueError("binding mode cannot be empty")
        if not self.action_id:
            raise ValueError("binding action_id cannot be empty")

    @property
    def key_signature(self) -> str:
        return " ".join(self.sequence.tokens)


__all__ = [
    "DEFAULT_SEQUENCE_TIMEOUT_MS",
    "ActionRef",
    "Binding",
    "KeySequence",
    "KeyStroke",
    "normalize_modifiers",
    "stroke_token",
]
