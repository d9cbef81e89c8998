"""Routes Textual key events into a ``VimModeEngine`` and relays its events."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional

from promptline_vim.engine import VimModeEngine
from promptline_vim.modes import KeyInput, VimMode

_MODIFIERS = ("ctrl", "shift", "alt", "meta")

# Textual key names -> DOM KeyboardEvent.key names used by the keymaps.
_NAMED_KEYS: Dict[str, str] = {
    "escape": "Escape",
    "backspace": "Backspace",
    "enter": "Enter",
    "tab": "Tab",
    "delete": "Delete",
    "home": "Home",
    "end": "End",
    "up": "ArrowUp",
    "down": "ArrowDown",
    "left": "ArrowLeft",
    "right": "ArrowRight",
    "pageup": "PageUp",
    "pagedown": "PageDown",
    "space": " ",
    "left_square_bracket": "[",
    "right_square_bracket": "]",
}


def translate_key(key: str, character: Optional[str] = None) -> KeyInput:
    """Map a Textual ``events.Key`` (``key``/``character``) to a ``KeyInput``.

    ``"ctrl+left_square_bracket"`` becomes ``ctrl+[``; a printable character
    wins over the key name so ``"G"`` stays ``"G"``.
    """

    parts = key.split("+")
    modifiers = tuple(part for part in parts[:-1] if part in _MODIFIERS)
    base = parts[-1] if len(parts) > 1 else key
    command = any(mod in ("ctrl", "alt", "meta") for mod in modifiers)

    if character and len(character) == 1 and character.isprintable() and not command:
        return KeyInput(key=character, modifiers=modifiers, text=character)
    name = _NAMED_KEYS.get(base, base)
    text = name if len(name) == 1 and not command else None
    return KeyInput(key=name, modifiers=modifiers, text=text)


def _noop(*_args, **_kwargs) -> None:
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks the controller uses to update Textual widgets."""

    update_status: Callable[[str], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    log: Callable[[str], None] = _noop


class TextualVimController:
    """Bridges Textual keys and engine bus events to a Textual-friendly surface."""

    def __init__(self, engine: VimModeEngine, hooks: Optional[TextualUIHooks] = None) -> None:
        self.engine = engine
        self.hooks = hooks or TextualUIHooks()
        self._subscribe_events()
        self._refresh_status()

    def handle_textual_key(self, key: str, character: Optional[str] = None) -> bool:
        """Dispatch one key; ``True`` means the widget must not handle it."""

        key_input = translate_key(key, character)
        handled = self.engine.handle_key_down(key_input)
        self.hooks.log(
            f"key -> {key_input.token!r} handled={handled} "
            f"mode={self.engine.get_current_mode().value}"
        )
        return handled

    def process_timeouts(self) -> bool:
        expired = self.engine.process_timeouts()
        if expired:
            self.hooks.log("timeout -> pending key dropped")
            self._refresh_status()
        return expired

    def _subscribe_events(self) -> None:
        bus = self.engine.bus
        bus.subscribe("mode.change", lambda _mode: self._refresh_status())
        for event in ("visual.selection", "yank", "window.close"):
            bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )

    def _handle_event(self, name: str, payload: object | None) -> None:
        self.hooks.log(f"event -> {name} {payload!r}")
        self.hooks.handle_event(name, payload)

    def _refresh_status(self) -> None:
        if not self.engine.is_enabled():
            self.hooks.update_status("")
            return
        mode = self.engine.get_current_mode()
        label = f"-- {mode.label} --" if mode is not VimMode.NORMAL else mode.label
        self.hooks.update_status(label)


__all__ = ["TextualUIHooks", "TextualVimController", "translate_key"]
