"""Normal-mode caret motions. None of them mutate text."""

from __future__ import annotations

from promptline_vim.buffer import Buffer
from promptline_vim.buffer.lines import (
    clamp_column,
    column,
    next_line_start,
    previous_line_start,
)
from promptline_vim.keymaps import ResolutionMatch
from promptline_vim.modes.base_mode import ModeContext, ModeResult


def _move(buffer: Buffer, pos: int) -> ModeResult:
    buffer.place_caret(pos)
    buffer.show_block_cursor()
    return ModeResult(consumed=True, status="motion")


def move_left(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    buffer = context.buffer
    return _move(buffer, max(0, buffer.cursor() - 1))


def move_right(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    buffer = context.buffer
    return _move(buffer, min(len(buffer.text()), buffer.cursor() + 1))


def move_up(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    buffer = context.buffer
    text, pos = buffer.text(), buffer.cursor()
    target = previous_line_start(text, pos)
    if target is None:
        return ModeResult(consumed=True, status="motion", message="first_line")
    return _move(buffer, clamp_column(text, target, column(text, pos), allow_eol=False))


def move_down(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    buffer = context.buffer
    text, pos = buffer.text(), buffer.cursor()
    target = next_line_start(text, pos)
    if target is None:
        return ModeResult(consumed=True, status="motion", message="last_line")
    return _move(buffer, clamp_column(text, target, column(text, pos), allow_eol=False))


def move_to_buffer_start(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return _move(context.buffer, 0)


def move_to_buffer_end(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    buffer = context.buffer
    return _move(buffer, len(buffer.text()))


__all__ = [
    "move_down",
    "move_left",
    "move_right",
    "move_to_buffer_end",
    "move_to_buffer_start",
    "move_up",
]
