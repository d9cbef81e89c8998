"""Editing verbs bound to keys by :mod:`promptline_vim.keymaps.defaults`."""

from .core import (
    append_after_cursor,
    append_at_line_end,
    close_window,
    enter_insert_mode,
    enter_visual_line_mode,
    enter_visual_mode,
    exit_insert_mode,
    insert_at_line_start,
    noop_action,
    open_line_above,
    open_line_below,
)
from .edit import (
    apply_paste,
    delete_char,
    delete_line,
    paste_after,
    paste_before,
    redo,
    undo,
    yank,
    yank_line,
)
from .motion import (
    move_down,
    move_left,
    move_right,
    move_to_buffer_end,
    move_to_buffer_start,
    move_up,
)
from .visual import (
    delete_selection,
    exit_visual_mode,
    extend_down,
    extend_left,
    extend_right,
    extend_to_buffer_end,
    extend_to_buffer_start,
    extend_up,
    replace_selection,
    yank_selection,
)

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
    "apply_paste",
    "delete_char",
    "delete_line",
    "paste_after",
    "paste_before",
    "redo",
    "undo",
    "yank",
    "yank_line",
    "move_down",
    "move_left",
    "move_right",
    "move_to_buffer_end",
    "move_to_buffer_start",
    "move_up",
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
