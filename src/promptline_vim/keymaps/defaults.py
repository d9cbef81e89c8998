"""Built-in keymaps for normal, insert, visual and visual-line modes."""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable, Sequence

from promptline_vim.actions import core as core_actions
from promptline_vim.actions import edit as edit_actions
from promptline_vim.actions import motion as motion_actions
from promptline_vim.actions import visual as visual_actions

from .models import ActionRef, Binding, KeySequence
from .registry import KeymapRegistry

DEFAULT_ACTIONS: tuple[ActionRef, ...] = (
    ActionRef("core.enter_insert", core_actions.enter_insert_mode, "Insert before the cursor"),
    ActionRef("core.insert_line_start", core_actions.insert_at_line_start, "Insert at line start"),
    ActionRef("core.append", core_actions.append_after_cursor, "Append after the cursor"),
    ActionRef("core.append_line_end", core_actions.append_at_line_end, "Append at line end"),
    ActionRef("core.open_below", core_actions.open_line_below, "Open a line below"),
    ActionRef("core.open_above", core_actions.open_line_above, "Open a line above"),
    ActionRef("core.exit_insert", core_actions.exit_insert_mode, "Leave insert mode"),
    ActionRef("core.enter_visual", core_actions.enter_visual_mode, "Enter visual mode"),
    ActionRef(
        "core.enter_visual_line",
        core_actions.enter_visual_line_mode,
        "Enter visual-line mode",
    ),
    ActionRef("core.close_window", core_actions.close_window, "Ask the host to close"),
    ActionRef("core.noop", core_actions.noop_action, "Consume the key"),
    ActionRef("motion.left", motion_actions.move_left, "Cursor left"),
    ActionRef("motion.right", motion_actions.move_right, "Cursor right"),
    ActionRef("motion.up", motion_actions.move_up, "Cursor up one line"),
    ActionRef("motion.down", motion_actions.move_down, "Cursor down one line"),
    ActionRef("motion.buffer_start", motion_actions.move_to_buffer_start, "Go to buffer start"),
    ActionRef("motion.buffer_end", motion_actions.move_to_buffer_end, "Go to buffer end"),
    ActionRef("edit.delete_char", edit_actions.delete_char, "Delete character under cursor"),
    ActionRef("edit.delete_line", edit_actions.delete_line, "Delete current line"),
    ActionRef("edit.yank_line", edit_actions.yank_line, "Yank current line"),
    ActionRef("edit.paste_after", edit_actions.paste_after, "Put after the cursor"),
    ActionRef("edit.paste_before", edit_actions.paste_before, "Put before the cursor"),
    ActionRef("edit.undo", edit_actions.undo, "Undo"),
    ActionRef("edit.redo", edit_actions.redo, "Redo"),
    ActionRef("visual.exit", visual_actions.exit_visual_mode, "Leave visual mode"),
    ActionRef("visual.extend_left", visual_actions.extend_left, "Extend selection left"),
    ActionRef("visual.extend_right", visual_actions.extend_right, "Extend selection right"),
    ActionRef("visual.extend_up", visual_actions.extend_up, "Extend selection up"),
    ActionRef("visual.extend_down", visual_actions.extend_down, "Extend selection down"),
    ActionRef(
        "visual.extend_buffer_start",
        visual_actions.extend_to_buffer_start,
        "Extend selection to buffer start",
    ),
    ActionRef(
        "visual.extend_buffer_end",
        visual_actions.extend_to_buffer_end,
        "Extend selection to buffer end",
    ),
    ActionRef("visual.yank_selection", visual_actions.yank_selection, "Yank the selection"),
    ActionRef("visual.delete_selection", visual_actions.delete_selection, "Delete the selection"),
    ActionRef("visual.replace_selection", visual_actions.replace_selection, "Put over the selection"),
)

_NORMAL_KEYS: tuple[tuple[str, tuple[str, ...], str], ...] = (
    ("enter_insert", ("i",), "core.enter_insert"),
    ("insert_line_start", ("I",), "core.insert_line_start"),
    ("append", ("a",), "core.append"),
    ("append_line_end", ("A",), "core.append_line_end"),
    ("open_below", ("o",), "core.open_below"),
    ("open_above", ("O",), "core.open_above"),
    ("enter_visual", ("v",), "core.enter_visual"),
    ("enter_visual_line", ("V",), "core.enter_visual_line"),
    ("left", ("h",), "motion.left"),
    ("left_backspace", ("Backspace",), "motion.left"),
    ("down", ("j",), "motion.down"),
    ("up", ("k",), "motion.up"),
    ("right", ("l",), "motion.right"),
    ("buffer_start", ("g", "g"), "motion.buffer_start"),
    ("buffer_end", ("G",), "motion.buffer_end"),
    ("delete_char", ("x",), "edit.delete_char"),
    ("delete_line", ("d", "d"), "edit.delete_line"),
    ("yank_line", ("y", "y"), "edit.yank_line"),
    ("paste_after", ("p",), "edit.paste_after"),
    ("paste_before", ("P",), "edit.paste_before"),
    ("undo", ("u",), "edit.undo"),
    ("redo", ("U",), "edit.redo"),
    ("close_window", ("q",), "core.close_window"),
    ("escape", ("Escape",), "core.noop"),
)

_INSERT_KEYS: tuple[tuple[str, tuple[str, ...], str], ...] = (
    ("exit_escape", ("Escape",), "core.exit_insert"),
    ("exit_ctrl_bracket", ("ctrl+[",), "core.exit_insert"),
)

# Shared by visual and visual-line; the actions read the linewise flag.
_VISUAL_KEYS: tuple[tuple[str, tuple[str, ...], str], ...] = (
    ("exit_escape", ("Escape",), "visual.exit"),
    ("exit_ctrl_bracket", ("ctrl+[",), "visual.exit"),
    ("extend_left", ("h",), "visual.extend_left"),
    ("extend_down", ("j",), "visual.extend_down"),
    ("extend_up", ("k",), "visual.extend_up"),
    ("extend_right", ("l",), "visual.extend_right"),
    ("extend_buffer_start", ("g", "g"), "visual.extend_buffer_start"),
    ("extend_buffer_end", ("G",), "visual.extend_buffer_end"),
    ("yank_selection", ("y",), "visual.yank_selection"),
    ("delete_selection", ("d",), "visual.delete_selection"),
    ("replace_selection", ("p",), "visual.replace_selection"),
)


def _bindings(
    mode: str, table: Iterable[tuple[str, tuple[str, ...], str]]
) -> tuple[Binding, ...]:
    return tuple(
        Binding(
            id=f"{mode}.{name}",
            mode=mode,
            sequence=KeySequence.from_strings(*keys),
            action_id=action_id,
        )
        for name, keys, action_id in table
    )


DEFAULT_BINDINGS: tuple[Binding, ...] = (
    _bindings("normal", _NORMAL_KEYS)
    + _bindings("insert", _INSERT_KEYS)
    + _bindings("visual", _VISUAL_KEYS)
    + _bindings("visual-line", _VISUAL_KEYS)
)


def load_default_keymaps(
    registry: KeymapRegistry,
    *,
    replace: bool = False,
    sequence_timeout_ms: int | None = None,
    extra_bindings: Iterable[Binding] | None = None,
    exclude_bindings: Sequence[str] | None = None,
) -> None:
    """Register built-in actions and bindings for every mode.

    ``sequence_timeout_ms`` overrides the pending-key timeout of the built-in
    compound bindings. ``exclude_bindings`` skips bindings by id (for example
    ``"normal.close_window"`` when the host has no window to close).
    """

    excluded = set(exclude_bindings or ())

    for action in DEFAULT_ACTIONS:
        registry.register_action(action, replace=replace)

    for binding in DEFAULT_BINDINGS:
        if binding.id in excluded:
            continue
        registry.register_binding(
            _binding_with_timeout(binding, sequence_timeout_ms),
            replace=replace,
        )

    if extra_bindings:
        for binding in extra_bindings:
            registry.register_binding(binding, replace=replace)


def _binding_with_timeout(binding: Binding, timeout_ms: int | None) -> Binding:
    if timeout_ms is None or len(binding.sequence.strokes) < 2:
        return binding
    sequence = KeySequence(binding.sequence.strokes, timeout_ms=timeout_ms)
    return replace(binding, sequence=sequence)


__all__ = ["DEFAULT_ACTIONS", "DEFAULT_BINDINGS", "load_default_keymaps"]
