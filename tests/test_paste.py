from __future__ import annotations

import asyncio
from typing import List, Optional

from promptline_vim import MemoryTextHost, VimMode, VimModeEngine
from promptline_vim.buffer import RegisterValue, YankRegister
from promptline_vim.runtime.paste import PasteCoordinator, PastePlan


def make_engine(text: str, *, caret: int = 0, **kwargs) -> tuple[VimModeEngine, MemoryTextHost]:
    host = MemoryTextHost(text, caret=caret)
    engine = VimModeEngine(host, **kwargs)
    engine.set_enabled(True)
    return engine, host


def press(engine: VimModeEngine, *keys: str) -> List[bool]:
    return [engine.handle_key_down(key) for key in keys]


def fixed_clipboard(value: Optional[str]):
    async def read() -> Optional[str]:
        return value

    return read


def test_coordinator_without_reader_applies_register() -> None:
    applied: List[tuple[PastePlan, RegisterValue]] = []
    register = YankRegister()
    register.yank("xy")
    coordinator = PasteCoordinator(register, lambda plan, value: applied.append((plan, value)))

    coordinator.request(PastePlan(kind="after", start=2, end=2))

    assert applied == [(PastePlan("after", 2, 2), RegisterValue("xy"))]
    assert coordinator.in_flight is False


def test_put_reads_clipboard_without_event_loop() -> None:
    engine, host = make_engine("abc", clipboard=fixed_clipboard("XYZ"))

    assert press(engine, "p") == [True]

    assert host.get_text() == "aXYZbc"
    assert host.selection == (1, 2)


def test_put_falls_back_to_register_on_empty_clipboard() -> None:
    engine, host = make_engine("abc", clipboard=fixed_clipboard(None))

    press(engine, "v", "y", "p")

    assert host.get_text() == "aabc"


def test_put_falls_back_to_register_when_clipboard_rejects() -> None:
    async def broken() -> Optional[str]:
        raise PermissionError("clipboard denied")

    engine, host = make_engine("abc", clipboard=broken)

    press(engine, "v", "y", "P")

    assert host.get_text() == "aabc"


def test_mirrored_clipboard_keeps_linewise_put() -> None:
    mirrored: List[str] = []

    async def read() -> Optional[str]:
        return mirrored[-1] if mirrored else None

    engine, host = make_engine("alpha\nbeta", on_yank=mirrored.append, clipboard=read)

    press(engine, "d", "d", "p")

    assert host.get_text() == "alpha\nbeta"


def test_keys_are_deferred_while_clipboard_read_in_flight() -> None:
    async def scenario() -> tuple[VimModeEngine, MemoryTextHost]:
        gate = asyncio.Event()

        async def read() -> Optional[str]:
            await gate.wait()
            return "XY"

        engine, host = make_engine("abc", clipboard=read)
        assert press(engine, "p") == [True]
        assert engine.paste.in_flight is True

        assert press(engine, "l", "x") == [True, True]
        assert host.get_text() == "abc"

        gate.set()
        await engine.wait_for_paste()
        return engine, host

    engine, host = asyncio.run(scenario())

    assert engine.paste.in_flight is False
    assert host.get_text() == "aXbc"


def test_deferred_insert_keys_are_typed_on_replay() -> None:
    async def scenario() -> tuple[VimModeEngine, MemoryTextHost]:
        gate = asyncio.Event()

        async def read() -> Optional[str]:
            await gate.wait()
            return "XY"

        engine, host = make_engine("abc", clipboard=read)
        press(engine, "p", "i", "z", "Enter")

        gate.set()
        await engine.wait_for_paste()
        return engine, host

    engine, host = asyncio.run(scenario())

    assert engine.get_current_mode() is VimMode.INSERT
    assert host.get_text() == "az\nXYbc"


def test_disable_discards_in_flight_paste() -> None:
    async def scenario() -> tuple[VimModeEngine, MemoryTextHost]:
        gate = asyncio.Event()

        async def read() -> Optional[str]:
            await gate.wait()
            return "XY"

        engine, host = make_engine("abc", clipboard=read)
        press(engine, "p", "x")

        engine.set_enabled(False)
        gate.set()
        await asyncio.sleep(0.01)
        return engine, host

    engine, host = asyncio.run(scenario())

    assert host.get_text() == "abc"
    assert engine.paste.in_flight is False
    engine.set_enabled(True)
    assert press(engine, "x") == [True]
    assert host.get_text() == "bc"
