from __future__ import annotations

from typing import List, Optional

import pytest

from promptline_vim.buffer import Buffer
from promptline_vim.host import MemoryTextHost
from promptline_vim.keymaps import KeymapRegistry, KeymapResolver
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


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms / 1000.0


def make_manager(
    text: str = "",
    *,
    caret: Optional[int] = None,
    clock: Optional[FakeClock] = None,
) -> ModeManager:
    registry = KeymapRegistry()
    load_default_keymaps(registry)
    resolver = KeymapResolver(registry)
    context = ModeContext(buffer=Buffer(MemoryTextHost(text, caret=caret)), bus=ModeBus())
    manager = ModeManager(context, resolver=resolver, clock=clock)
    manager.register_mode(NormalMode)
    manager.register_mode(InsertMode)
    manager.register_mode(VisualMode)
    manager.register_mode(VisualLineMode)
    return manager


def press(manager: ModeManager, *keys: str) -> None:
    for key in keys:
        manager.handle_key(KeyInput(key=key))


def selection(manager: ModeManager) -> tuple[int, int]:
    current = manager.context.buffer.selection()
    return current.start, current.end


def test_first_registered_mode_is_active() -> None:
    manager = make_manager("abc", caret=1)

    assert manager.active_name is VimMode.NORMAL
    assert selection(manager) == (1, 2)


def test_register_mode_twice_fails() -> None:
    manager = make_manager()

    with pytest.raises(ValueError):
        manager.register_mode(NormalMode)


def test_normal_mode_enters_insert() -> None:
    manager = make_manager("abc", caret=1)

    result = manager.handle_key(KeyInput(key="i"))

    assert result.switch_to is VimMode.INSERT
    assert manager.active_name is VimMode.INSERT
    assert selection(manager) == (1, 1)


def test_insert_mode_passes_keys_through() -> None:
    manager = make_manager("abc", caret=1)
    press(manager, "i")

    result = manager.handle_key(KeyInput(key="x", text="x"))

    assert result.consumed is False
    assert manager.context.buffer.text() == "abc"


@pytest.mark.parametrize("escape", [KeyInput("Escape"), KeyInput("[", ("ctrl",))])
def test_insert_escape_returns_to_normal_one_left(escape: KeyInput) -> None:
    manager = make_manager("abc", caret=1)
    press(manager, "a")
    assert selection(manager) == (2, 2)

    manager.handle_key(escape)

    assert manager.active_name is VimMode.NORMAL
    assert selection(manager) == (1, 2)


def test_normal_mode_swallows_unmapped_printable() -> None:
    manager = make_manager("abc", caret=0)

    result = manager.handle_key(KeyInput(key="z", text="z"))

    assert result.consumed is True
    assert result.status == "ignored"
    assert manager.context.buffer.text() == "abc"


def test_normal_mode_lets_modified_keys_through() -> None:
    manager = make_manager("abc", caret=0)

    assert manager.handle_key(KeyInput(key="c", modifiers=("ctrl",))).consumed is False
    assert manager.handle_key(KeyInput(key="ArrowLeft")).consumed is False


def test_normal_mode_drops_unknown_compound() -> None:
    manager = make_manager("abc\ndef", caret=5)

    press(manager, "d")
    result = manager.handle_key(KeyInput(key="x"))

    assert result.consumed is True
    assert result.status == "dropped"
    assert manager.context.buffer.text() == "abc\ndef"
    assert manager.has_pending is False


def test_pending_key_expires_after_timeout() -> None:
    clock = FakeClock()
    manager = make_manager("abc\ndef", caret=5, clock=clock)

    press(manager, "g")
    clock.advance(1001)
    press(manager, "g")

    assert selection(manager) == (5, 6)
    assert manager.has_pending is True


def test_pending_key_within_timeout_completes() -> None:
    clock = FakeClock()
    manager = make_manager("abc\ndef", caret=5, clock=clock)

    press(manager, "g")
    clock.advance(999)
    press(manager, "g")

    assert selection(manager) == (0, 1)
    assert manager.has_pending is False


def test_process_timeouts_reports_expired_key() -> None:
    clock = FakeClock()
    manager = make_manager("abc", clock=clock)
    press(manager, "d")

    assert manager.process_timeouts() is None
    clock.advance(1000)
    result = manager.process_timeouts()

    assert result is not None and result.message == "pending_timeout"
    assert manager.active_mode is not None
    assert manager.active_mode.pending_tokens == ()


def test_mode_switch_clears_pending_key() -> None:
    manager = make_manager("abc")
    press(manager, "g")

    manager.switch_mode(VimMode.INSERT)

    assert manager.has_pending is False
    assert manager.active_mode is not None
    assert manager.active_mode.pending_tokens == ()


def test_switch_mode_emits_change_event() -> None:
    manager = make_manager("abc")
    seen: List[object] = []
    manager.context.bus.subscribe("mode.change", seen.append)

    press(manager, "v")
    press(manager, "Escape")

    assert seen == [VimMode.VISUAL, VimMode.NORMAL]


def test_switch_mode_unknown_mode() -> None:
    registry = KeymapRegistry()
    context = ModeContext(buffer=Buffer(), bus=ModeBus())
    manager = ModeManager(context, resolver=KeymapResolver(registry))
    manager.register_mode(NormalMode)

    with pytest.raises(KeyError):
        manager.switch_mode(VimMode.VISUAL)


def test_visual_mode_extends_with_g_then_motion() -> None:
    manager = make_manager("abcdefgh", caret=5)
    press(manager, "v", "g", "h")

    assert manager.active_name is VimMode.VISUAL
    assert selection(manager) == (4, 6)


def test_visual_mode_swallows_printable_without_binding() -> None:
    manager = make_manager("abcdefgh", caret=5)
    press(manager, "v")

    result = manager.handle_key(KeyInput(key="z", text="z"))

    assert result.consumed is True
    assert manager.active_name is VimMode.VISUAL
    assert selection(manager) == (5, 6)


def test_visual_line_mode_selects_current_line() -> None:
    manager = make_manager("one\ntwo\nthree", caret=5)

    press(manager, "V")

    assert manager.active_name is VimMode.VISUAL_LINE
    assert selection(manager) == (4, 7)
