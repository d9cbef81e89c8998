from __future__ import annotations

import pytest

from promptline_vim.buffer import (
    Buffer,
    RegisterValue,
    Snapshot,
    UndoHistory,
    VisualState,
    YankRegister,
    block_range,
)
from promptline_vim.buffer.lines import (
    clamp_column,
    column,
    line_end,
    line_start,
    line_with_newline_end,
    next_line_start,
    previous_line_start,
)
from promptline_vim.host import MemoryTextHost

TEXT = "one\ntwo\n\nfour"


def make_buffer(text: str = "", caret: int | None = None) -> Buffer:
    return Buffer(MemoryTextHost(text, caret=caret))


def test_line_boundaries() -> None:
    assert line_start(TEXT, 5) == 4
    assert line_end(TEXT, 5) == 7
    assert line_end(TEXT, 8) == 8
    assert line_start(TEXT, 9) == 9
    assert line_end(TEXT, 9) == len(TEXT)
    assert column(TEXT, 6) == 2


def test_adjacent_lines() -> None:
    assert previous_line_start(TEXT, 2) is None
    assert previous_line_start(TEXT, 9) == 8
    assert next_line_start(TEXT, 5) == 8
    assert next_line_start(TEXT, 10) is None
    assert next_line_start("single", 3) is None


def test_line_with_newline_end_skips_terminator_on_last_line() -> None:
    assert line_with_newline_end(TEXT, 1) == 4
    assert line_with_newline_end(TEXT, 10) == len(TEXT)


def test_clamp_column_respects_line_length() -> None:
    assert clamp_column(TEXT, 4, 7, allow_eol=False) == 6
    assert clamp_column(TEXT, 4, 7, allow_eol=True) == 7
    assert clamp_column(TEXT, 8, 3, allow_eol=False) == 8


def test_undo_history_evicts_oldest() -> None:
    history = UndoHistory(capacity=3)
    for index in range(5):
        history.record(Snapshot(text=str(index), cursor=index))

    assert len(history) == 3
    assert history.undo(Snapshot("live", 0)) == Snapshot("4", 4)
    assert history.undo(Snapshot("4", 4)) == Snapshot("3", 3)
    assert history.undo(Snapshot("3", 3)) == Snapshot("2", 2)
    assert history.undo(Snapshot("2", 2)) is None


def test_undo_history_record_clears_redo() -> None:
    history = UndoHistory()
    history.record(Snapshot("a", 0))
    history.undo(Snapshot("ab", 1))
    assert history.can_redo()

    history.record(Snapshot("ac", 1))

    assert not history.can_redo()


def test_undo_history_skips_entries_matching_live_text() -> None:
    history = UndoHistory()
    history.record(Snapshot("a", 0))
    history.record(Snapshot("ab", 2))

    assert history.record(Snapshot("ab", 1)) is False
    assert history.undo(Snapshot("ab", 1)) == Snapshot("a", 0)
    assert history.redo(Snapshot("a", 0)) == Snapshot("ab", 1)


def test_undo_history_repeat_refreshes_newest_cursor() -> None:
    history = UndoHistory()
    history.record(Snapshot("abc", 2))

    assert history.record(Snapshot("abc", 0)) is False
    assert len(history) == 1
    assert history.undo(Snapshot("bc", 0)) == Snapshot("abc", 0)


def test_buffer_keeps_supplied_empty_history() -> None:
    history = UndoHistory(capacity=2)
    register = YankRegister()

    buffer = Buffer(MemoryTextHost("abc"), registers=register, undo=history)

    assert buffer.undo is history
    assert buffer.registers is register


def test_undo_history_rejects_zero_capacity() -> None:
    with pytest.raises(ValueError):
        UndoHistory(capacity=0)


def test_yank_register_starts_empty_and_overwrites() -> None:
    register = YankRegister()
    assert register.value == RegisterValue("")

    register.yank("line\n", register_type="line")
    register.yank("word")

    assert register.value == RegisterValue("word", "character")


def test_yank_register_resolve_prefers_clipboard() -> None:
    register = YankRegister()
    register.yank("two\n", register_type="line")

    assert register.resolve(None).linewise
    assert register.resolve("").text == "two\n"
    assert register.resolve("two\n").linewise
    assert register.resolve("other") == RegisterValue("other", "character")


def test_visual_state_characterwise_is_inclusive() -> None:
    state = VisualState()
    state.begin(5, linewise=False)
    state.active = 2

    selection = state.selection("abcdefgh")

    assert (selection.start, selection.end, selection.direction) == (2, 6, "backward")


def test_visual_state_linewise_covers_whole_lines() -> None:
    state = VisualState()
    state.begin(4, linewise=True)
    state.active = 9

    selection = state.selection(TEXT)

    assert (selection.start, selection.end) == (4, len(TEXT))
    assert selection.direction == "forward"


def test_block_range_edges() -> None:
    assert block_range("abc", 1) == (1, 2)
    assert block_range("abc", 3) == (2, 3)
    assert block_range("abc\n", 4) == (4, 4)
    assert block_range("", 0) == (0, 0)


def test_buffer_replace_range_notifies_host() -> None:
    host = MemoryTextHost("hello world")
    buffer = Buffer(host)

    delta = buffer.replace_range(5, 11, "", label="trim")

    assert host.get_text() == "hello"
    assert host.change_count == 1
    assert delta is not None and delta.removed == " world"
    assert buffer.cursor() == 5


def test_buffer_selection_is_clamped_and_ordered() -> None:
    buffer = make_buffer("abc")

    buffer.select(5, -2, "backward")

    assert (buffer.selection().start, buffer.selection().end) == (0, 3)


def test_detached_buffer_is_inert() -> None:
    buffer = Buffer()

    assert buffer.text() == ""
    assert buffer.replace_range(0, 0, "x", label="noop") is False
    assert buffer.save_state() is False
    assert buffer.step_undo() is False
    buffer.show_block_cursor()


def test_buffer_undo_restores_text_and_cursor() -> None:
    buffer = make_buffer("abc", caret=1)
    buffer.save_state()
    buffer.replace_range(1, 2, "", label="delete")

    assert buffer.step_undo() is True
    assert buffer.text() == "abc"
    assert buffer.cursor() == 1
    assert buffer.step_redo() is True
    assert buffer.text() == "ac"
