"""Mode manager owning the active mode, the pending-key timer, and dispatch."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Type

from promptline_vim.keymaps import KeymapResolver
from promptline_vim.runtime import telemetry

from .base_mode import KeyInput, Mode, ModeContext, ModeResult, VimMode

Clock = Callable[[], float]


@dataclass
class PendingTimeout:
    deadline: float
    timeout_ms: int


class ModeManager:
    """Dispatches key events to the active mode and handles transitions.

    The pending compound key expires against ``clock`` (seconds, monotonic).
    Stale pending keys are expired lazily before each dispatch, so a host
    that never polls ``process_timeouts`` still observes the timeout.
    """

    def __init__(
        self,
        context: ModeContext,
        *,
        resolver: KeymapResolver,
        clock: Optional[Clock] = None,
        default_pending_timeout_ms: int = 1000,
    ) -> None:
        self.context = context
        self.resolver = resolver
        self._clock: Clock = clock or time.monotonic
        self._default_timeout_ms = default_pending_timeout_ms
        self._modes: Dict[VimMode, Mode] = {}
        self._active: Optional[VimMode] = None
        self._pending: Optional[PendingTimeout] = None
        self.logger = telemetry.get_logger("promptline_vim.modes")

    @property
    def active_name(self) -> Optional[VimMode]:
        return self._active

    @property
    def active_mode(self) -> Optional[Mode]:
        if self._active is None:
            return None
        return self._modes.get(self._active)

    @property
    def has_pending(self) -> bool:
        return self._pending is not None

    def register_mode(self, mode_cls: Type[Mode]) -> Mode:
        mode = mode_cls(
            self.context,
            resolver=self.resolver,
            default_pending_timeout_ms=self._default_timeout_ms,
        )
        if mode.name in self._modes:
            raise ValueError(f"Mode '{mode.name.value}' already registered")
        self._modes[mode.name] = mode
        if self._active is None:
            self._active = mode.name
            mode.on_enter(None)
        return mode

    def switch_mode(self, name: VimMode, *, force: bool = False) -> None:
        """Activate ``name``; ``force`` re-runs entry hooks for the same mode."""

        if name not in self._modes:
            raise KeyError(f"Unknown mode '{name}'")
        previous = self.active_mode
        if previous is not None and previous.name == name and not force:
            return
        self.cancel_timeouts()
        if previous is not None:
            previous.on_exit(name)
        self._active = name
        self._modes[name].on_enter(previous.name if previous else None)
        telemetry.record_event("mode.switch", data={"mode": name.value})
        self.context.bus.emit("mode.change", name)

    def handle_key(self, key: KeyInput) -> ModeResult:
        self.process_timeouts()
        mode = self.active_mode
        if mode is None:
            raise RuntimeError("No active mode registered")
        with telemetry.span(
            f"mode::{mode.name.value}",
            component="modes",
            metadata={"key": key.token, "mode": mode.name.value},
        ):
            result = mode.handle_key(key)
        return self._after_mode_result(mode, result)

    def _after_mode_result(self, mode: Mode, result: ModeResult) -> ModeResult:
        if result.timeout_ms:
            self._arm_timeout(result.timeout_ms)
        else:
            self._pending = None
        if result.switch_to is not None and result.switch_to != mode.name:
            self.switch_mode(result.switch_to)
        return result

    def _arm_timeout(self, timeout_ms: int) -> None:
        self._pending = PendingTimeout(
            deadline=self._clock() + timeout_ms / 1000.0,
            timeout_ms=timeout_ms,
        )

    def cancel_timeouts(self) -> None:
        """Forget the pending compound key in every mode."""

        self._pending = None
        for mode in self._modes.values():
            mode.handle_timeout()

    def process_timeouts(self) -> Optional[ModeResult]:
        timer = self._pending
        if timer is None or timer.deadline > self._clock():
            return None
        return self.force_timeout()

    def force_timeout(self) -> Optional[ModeResult]:
        if self._pending is None:
            return None
        self._pending = None
        mode = self.active_mode
        if mode is None:
            return None
        with telemetry.span(f"mode_timeout::{mode.name.value}", component="modes"):
            return mode.handle_timeout()


__all__ = ["Clock", "ModeManager", "PendingTimeout"]
