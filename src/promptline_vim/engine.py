"""Public facade: one ``VimModeEngine`` per host text widget."""

from __future__ import annotations

from collections import deque
from typing import Callable, Deque, Optional, Union

from promptline_vim.actions.edit import apply_paste
from promptline_vim.buffer import Buffer, RegisterValue, UndoHistory
from promptline_vim.config import EngineSettings
from promptline_vim.host import ClipboardReader, TextHost
from promptline_vim.keymaps import KeymapRegistry, KeymapResolver, KeyStroke
from promptline_vim.keymaps.defaults import load_default_keymaps
from promptline_vim.modes import (
    InsertMode,
    KeyInput,
    ModeBus,
    ModeContext,
    ModeManager,
    NormalMode,
    VimMode,
    VisualLineMode,
    VisualMode,
)
from promptline_vim.modes.mode_manager import Clock
from promptline_vim.runtime import telemetry
from promptline_vim.runtime.paste import PasteCoordinator, PastePlan

KeyEvent = Union[KeyInput, str]


class VimModeEngine:
    """Turns key events into buffer edits, selections and mode changes.

    The engine starts disabled, in insert mode, so the widget behaves like a
    plain text box. ``handle_key_down`` returns ``True`` when the host should
    suppress its default handling of the key.
    """

    def __init__(
        self,
        host: Optional[TextHost] = None,
        *,
        settings: Optional[EngineSettings] = None,
        clipboard: Optional[ClipboardReader] = None,
        on_mode_change: Optional[Callable[[VimMode], None]] = None,
        on_window_close: Optional[Callable[[], None]] = None,
        on_yank: Optional[Callable[[str], None]] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        self.settings = settings or EngineSettings()
        self.logger = telemetry.get_logger("promptline_vim.engine")
        self.buffer = Buffer(host, undo=UndoHistory(self.settings.undo_capacity))
        self.bus = ModeBus()
        self.paste = PasteCoordinator(
            self.buffer.registers,
            self._apply_paste,
            reader=clipboard,
            on_settled=self._replay_deferred,
        )
        self.context = ModeContext(buffer=self.buffer, bus=self.bus, paste=self.paste)

        self.registry = KeymapRegistry()
        load_default_keymaps(
            self.registry, sequence_timeout_ms=self.settings.pending_timeout_ms
        )
        self.resolver = KeymapResolver(self.registry)
        self.modes = ModeManager(
            self.context,
            resolver=self.resolver,
            clock=clock,
            default_pending_timeout_ms=self.settings.pending_timeout_ms,
        )
        # Registered first so a disabled engine starts out in insert mode.
        for mode_cls in (InsertMode, NormalMode, VisualMode, VisualLineMode):
            self.modes.register_mode(mode_cls)

        if on_mode_change is not None:
            self.bus.subscribe("mode.change", lambda mode: on_mode_change(mode))  # type: ignore[arg-type]
        if on_window_close is not None:
            self.bus.subscribe("window.close", lambda _payload: on_window_close())
        if on_yank is not None:
            self.bus.subscribe("yank", lambda text: on_yank(str(text)))

        self._enabled = False
        self._deferred: Deque[KeyInput] = deque()
        if self.settings.enabled:
            self.set_enabled(True)

    # -- lifecycle -----------------------------------------------------------

    def set_enabled(self, enabled: bool) -> None:
        """Toggle modal editing; enabling enters normal mode and snapshots."""

        self._enabled = enabled
        if enabled:
            self.modes.switch_mode(VimMode.NORMAL, force=True)
            self.buffer.save_state()
        else:
            self._drop_in_flight()
            self.modes.switch_mode(VimMode.INSERT, force=True)
        telemetry.record_event("engine.enabled", data={"enabled": enabled})

    def is_enabled(self) -> bool:
        return self._enabled

    def get_current_mode(self) -> VimMode:
        return self.modes.active_name or VimMode.INSERT

    def attach(self, host: TextHost) -> None:
        self.buffer.host = host
        if self._enabled:
            self.modes.switch_mode(VimMode.NORMAL, force=True)

    def detach(self) -> None:
        self._drop_in_flight()
        self.modes.cancel_timeouts()
        self.buffer.host = None

    def cleanup(self) -> None:
        """Cancel the pending-key timer and any outstanding clipboard read."""

        self._drop_in_flight()
        self.modes.cancel_timeouts()
        telemetry.record_event("engine.cleanup")

    def _drop_in_flight(self) -> None:
        self.paste.invalidate()
        self._deferred.clear()

    # -- key handling --------------------------------------------------------

    def handle_key_down(self, event: KeyEvent) -> bool:
        if not self._enabled or not self.buffer.attached:
            return False
        key = _coerce(event)
        if self.paste.in_flight:
            self._deferred.append(key)
            telemetry.record_event("engine.key_deferred", data={"key": key.token})
            return True
        return self._dispatch(key)

    def _dispatch(self, key: KeyInput) -> bool:
        result = self.modes.handle_key(key)
        return result.consumed

    def process_timeouts(self) -> bool:
        """Expire a stale pending key; ``True`` when one was dropped."""

        return self.modes.process_timeouts() is not None

    async def wait_for_paste(self) -> None:
        await self.paste.wait()

    @property
    def yank_text(self) -> str:
        return self.buffer.registers.text

    # -- paste ---------------------------------------------------------------

    def _apply_paste(self, plan: PastePlan, value: RegisterValue) -> None:
        apply_paste(self.context, plan, value)

    def _replay_deferred(self) -> None:
        """Feed keys held back during a clipboard read, in arrival order.

        The host already suppressed these keys, so text that insert mode would
        have let through is typed into the buffer here instead.
        """

        while self._deferred and not self.paste.in_flight:
            if not self._enabled or not self.buffer.attached:
                self._deferred.clear()
                return
            key = self._deferred.popleft()
            if self._dispatch(key) or self.get_current_mode() is not VimMode.INSERT:
                continue
            self._type(key)

    def _type(self, key: KeyInput) -> None:
        selection = self.buffer.selection()
        if key.key == "Backspace" and not key.modifiers:
            start = selection.start - 1 if selection.collapsed else selection.start
            if start >= 0:
                self.buffer.replace_range(start, selection.end, "", label="replay_backspace")
            return
        text = "\n" if key.key == "Enter" and not key.modifiers else key.text
        if text:
            self.buffer.replace_range(
                selection.start,
                selection.end,
                text,
                label="replay_type",
                caret=selection.start + len(text),
            )


def _coerce(event: KeyEvent) -> KeyInput:
    if isinstance(event, KeyInput):
        return event
    stroke = KeyStroke.parse(event)
    command = any(mod in ("ctrl", "alt", "meta") for mod in stroke.modifiers)
    text = stroke.key if len(stroke.key) == 1 and not command else None
    return KeyInput(key=stroke.key, modifiers=stroke.modifiers, text=text)


__all__ = ["KeyEvent", "VimModeEngine"]
