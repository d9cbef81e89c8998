"""Clipboard-backed puts with an explicit in-flight guard.

A put captures where it lands (``PastePlan``) when its key is pressed, reads
the clipboard once, and applies the edit when the read settles. While a read
is outstanding ``in_flight`` is true and the engine holds back further keys.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Callable, Literal, Optional

from promptline_vim.buffer import RegisterValue, YankRegister
from promptline_vim.host.protocol import ClipboardReader

from . import telemetry

PasteKind = Literal["after", "before", "replace"]


@dataclass(frozen=True, slots=True)
class PastePlan:
    kind: PasteKind
    start: int
    end: int


ApplyPaste = Callable[[PastePlan, RegisterValue], None]


class PasteCoordinator:
    """Reads the clipboard for puts and applies them exactly once.

    Without a ``reader`` the yank register is used synchronously. Without a
    running event loop the read is driven to completion on the spot. Inside a
    loop the read becomes a task and ``on_settled`` fires once it lands.
    ``invalidate`` makes any outstanding read's result irrelevant.
    """

    def __init__(
        self,
        registers: YankRegister,
        apply: ApplyPaste,
        *,
        reader: Optional[ClipboardReader] = None,
        on_settled: Optional[Callable[[], None]] = None,
    ) -> None:
        self.registers = registers
        self.reader = reader
        self._apply = apply
        self._on_settled = on_settled
        self._generation = 0
        self._task: Optional[asyncio.Task[None]] = None

    @property
    def in_flight(self) -> bool:
        return self._task is not None

    def request(self, plan: PastePlan) -> None:
        if self.reader is None:
            self._settle(plan, None, self._generation)
            return

        self._generation += 1
        generation = self._generation
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            clipboard = asyncio.run(self._read())
            self._settle(plan, clipboard, generation)
            return

        telemetry.record_event("paste.pending", data={"kind": plan.kind})
        self._task = loop.create_task(self._run(plan, generation))

    async def wait(self) -> None:
        """Wait for the outstanding read, if any, to settle."""

        task = self._task
        if task is not None:
            await task

    def invalidate(self) -> None:
        self._generation += 1
        if self._task is not None:
            telemetry.record_event("paste.invalidated")
        self._task = None

    async def _read(self) -> Optional[str]:
        assert self.reader is not None
        try:
            text = await self.reader()
        except Exception as exc:  # clipboard access is best effort
            telemetry.record_event("paste.clipboard_error", data={"error": repr(exc)})
            return None
        return text or None

    async def _run(self, plan: PastePlan, generation: int) -> None:
        clipboard = await self._read()
        deferred = generation == self._generation
        self._settle(plan, clipboard, generation)
        if deferred and self._on_settled is not None:
            self._on_settled()

    def _settle(
        self, plan: PastePlan, clipboard: Optional[str], generation: int
    ) -> None:
        if generation != self._generation:
            telemetry.record_event("paste.discarded", data={"kind": plan.kind})
            return
        self._task = None
        value = self.registers.resolve(clipboard)
        with telemetry.span(
            "paste::apply",
            component="paste",
            metadata={"kind": plan.kind, "start": plan.start, "end": plan.end},
        ):
            self._apply(plan, value)
        telemetry.record_event(
            "paste.applied",
            data={
                "kind": plan.kind,
                "source": "clipboard" if clipboard else "register",
                "length": len(value.text),
            },
        )


__all__ = ["ApplyPaste", "PasteCoordinator", "PasteKind", "PastePlan"]
