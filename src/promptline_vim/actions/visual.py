"""Actions dedicated to Visual and Visual-Line selection management."""

from __future__ import annotations

from typing import Tuple

from promptline_vim.buffer.lines import (
    clamp_column,
    column,
    line_end,
    line_start,
    line_with_newline_end,
    next_line_start,
    previous_line_start,
)
from promptline_vim.keymaps import ResolutionMatch
from promptline_vim.modes.base_mode import ModeContext, ModeResult, VimMode
from promptline_vim.runtime.paste import PastePlan

from .edit import apply_paste, yank


def _extend(context: ModeContext, active: int) -> ModeResult:
    """Move the active end and redraw the selection around the anchor."""

    visual = context.visual
    buffer = context.buffer
    text = buffer.text()
    if visual.linewise:
        visual.active = max(0, min(active, len(text)))
    else:
        visual.active = max(0, min(active, len(text) - 1))
    selection = visual.selection(text)
    buffer.select(selection.start, selection.end, selection.direction)
    context.bus.emit(
        "visual.selection",
        {"anchor": visual.anchor, "active": visual.active, "range": selection},
    )
    return ModeResult(consumed=True, status="visual_select")


def _active(context: ModeContext) -> int:
    visual = context.visual
    if visual.active is None:
        return context.buffer.cursor()
    return visual.active


def extend_left(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return _extend(context, _active(context) - 1)


def extend_right(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return _extend(context, _active(context) + 1)


def extend_up(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    text, active = context.buffer.text(), _active(context)
    target = previous_line_start(text, active)
    if target is None:
        return ModeResult(consumed=True, status="visual_select", message="first_line")
    if context.visual.linewise:
        return _extend(context, target)
    return _extend(context, clamp_column(text, target, column(text, active), allow_eol=True))


def extend_down(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    text, active = context.buffer.text(), _active(context)
    target = next_line_start(text, active)
    if target is None:
        return ModeResult(consumed=True, status="visual_select", message="last_line")
    if context.visual.linewise:
        return _extend(context, line_end(text, target))
    return _extend(context, clamp_column(text, target, column(text, active), allow_eol=True))


def extend_to_buffer_start(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return _extend(context, 0)


def extend_to_buffer_end(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return _extend(context, len(context.buffer.text()))


def _operated_range(context: ModeContext) -> Tuple[int, int, str]:
    """Range y/d act on; linewise ranges take the trailing newline like dd."""

    text = context.buffer.text()
    selection = context.visual.selection(text)
    end = selection.end
    if context.visual.linewise:
        end = line_with_newline_end(text, end)
    return selection.start, end, text[selection.start : end]


def _leave(context: ModeContext, caret: int, status: str) -> ModeResult:
    context.buffer.place_caret(caret)
    context.visual.clear()
    return ModeResult(consumed=True, switch_to=VimMode.NORMAL, status=status)


def exit_visual_mode(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    """Collapse onto the active end (its line start in Visual-Line)."""

    del match
    active = _active(context)
    if context.visual.linewise:
        active = line_start(context.buffer.text(), active)
    return _leave(context, active, "exit_visual")


def yank_selection(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    start, _, text = _operated_range(context)
    yank(context, text, linewise=context.visual.linewise)
    return _leave(context, start, "visual_yank")


def delete_selection(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    buffer = context.buffer
    buffer.save_state()
    start, end, text = _operated_range(context)
    yank(context, text, linewise=context.visual.linewise)
    buffer.replace_range(start, end, "", label="visual_delete")
    return _leave(context, start, "visual_delete")


def replace_selection(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    selection = context.visual.selection(context.buffer.text())
    plan = PastePlan(kind="replace", start=selection.start, end=selection.end)
    context.visual.clear()
    if context.paste is None:
        apply_paste(context, plan, context.registers.value)
    else:
        context.paste.request(plan)
    return ModeResult(consumed=True, switch_to=VimMode.NORMAL, status="visual_replace")


__all__ = [
    "delete_selection",
    "exit_visual_mode",
    "extend_down",
    "extend_left",
    "extend_right",
    "extend_to_buffer_end",
    "extend_to_buffer_start",
    "extend_up",
    "replace_selection",
    "yank_selection",
]
