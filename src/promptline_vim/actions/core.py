"""Mode-switching verbs shared across modes."""

from __future__ import annotations

from promptline_vim.buffer.lines import line_end, line_start
from promptline_vim.keymaps import ResolutionMatch
from promptline_vim.modes.base_mode import ModeContext, ModeResult, VimMode


def _to_insert(message: str) -> ModeResult:
    return ModeResult(consumed=True, switch_to=VimMode.INSERT, message=message)


def enter_insert_mode(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.buffer.save_state()
    return _to_insert("enter_insert")


def insert_at_line_start(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    buffer = context.buffer
    buffer.save_state()
    buffer.place_caret(line_start(buffer.text(), buffer.cursor()))
    return _to_insert("insert_line_start")


def append_after_cursor(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    buffer = context.buffer
    buffer.save_state()
    buffer.place_caret(min(len(buffer.text()), buffer.cursor() + 1))
    return _to_insert("append")


def append_at_line_end(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    buffer = context.buffer
    buffer.save_state()
    buffer.place_caret(line_end(buffer.text(), buffer.cursor()))
    return _to_insert("append_line_end")


def open_line_below(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    buffer = context.buffer
    buffer.save_state()
    end = line_end(buffer.text(), buffer.cursor())
    buffer.replace_range(end, end, "\n", label="open_below", caret=end + 1)
    return _to_insert("open_below")


def open_line_above(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    buffer = context.buffer
    buffer.save_state()
    start = line_start(buffer.text(), buffer.cursor())
    buffer.replace_range(start, start, "\n", label="open_above", caret=start)
    return _to_insert("open_above")


def exit_insert_mode(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    """Close the insert session: one undo step, caret back onto the last character."""

    del match
    buffer = context.buffer
    buffer.save_state()
    buffer.place_caret(max(0, buffer.cursor() - 1))
    return ModeResult(consumed=True, switch_to=VimMode.NORMAL, message="exit_insert")


def enter_visual_mode(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.visual.begin(context.buffer.cursor(), linewise=False)
    return ModeResult(consumed=True, switch_to=VimMode.VISUAL, message="enter_visual")


def enter_visual_line_mode(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    buffer = context.buffer
    context.visual.begin(line_start(buffer.text(), buffer.cursor()), linewise=True)
    return ModeResult(
        consumed=True, switch_to=VimMode.VISUAL_LINE, message="enter_visual_line"
    )


def close_window(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.bus.emit("window.close", None)
    return ModeResult(consumed=True, message="close_window")


def noop_action(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del context, match
    return ModeResult(consumed=True, status="noop")


__all__ = [
    "append_after_cursor",
    "append_at_line_end",
    "close_window",
    "enter_insert_mode",
    "enter_visual_line_mode",
    "enter_visual_mode",
    "exit_insert_mode",
    "insert_at_line_start",
    "noop_action",
    "open_line_above",
    "open_line_below",
]
