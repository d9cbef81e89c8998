"""Normal-mode edits: delete, yank, put, undo and redo."""

from __future__ import annotations

from promptline_vim.buffer import RegisterValue
from promptline_vim.buffer.lines import line_end, line_start, line_with_newline_end
from promptline_vim.keymaps import ResolutionMatch
from promptline_vim.modes.base_mode import ModeContext, ModeResult
from promptline_vim.runtime import telemetry
from promptline_vim.runtime.paste import PastePlan


def yank(context: ModeContext, text: str, *, linewise: bool = False) -> None:
    """Fill the yank register and mirror the text out through the bus."""

    context.registers.yank(text, register_type="line" if linewise else "character")
    telemetry.record_event(
        "register.yank", data={"length": len(text), "linewise": linewise}
    )
    context.bus.emit("yank", text)


def delete_char(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    buffer = context.buffer
    buffer.save_state()
    pos = buffer.cursor()
    if pos < len(buffer.text()):
        buffer.replace_range(pos, pos + 1, "", label="delete_char")
    buffer.show_block_cursor()
    return ModeResult(consumed=True, status="delete")


def delete_line(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    buffer = context.buffer
    buffer.save_state()
    text, pos = buffer.text(), buffer.cursor()
    start, end = line_start(text, pos), line_with_newline_end(text, pos)
    yank(context, text[start:end], linewise=True)
    buffer.replace_range(start, end, "", label="delete_line")
    buffer.show_block_cursor()
    return ModeResult(consumed=True, status="delete", message="delete_line")


def yank_line(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    buffer = context.buffer
    text, pos = buffer.text(), buffer.cursor()
    yank(context, text[line_start(text, pos) : line_with_newline_end(text, pos)], linewise=True)
    return ModeResult(consumed=True, status="yank", message="yank_line")


def _request_paste(context: ModeContext, plan: PastePlan) -> ModeResult:
    if context.paste is None:
        apply_paste(context, plan, context.registers.value)
    else:
        context.paste.request(plan)
    return ModeResult(consumed=True, status="paste", message=plan.kind)


def paste_after(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    pos = context.buffer.cursor()
    return _request_paste(context, PastePlan(kind="after", start=pos, end=pos))


def paste_before(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    pos = context.buffer.cursor()
    return _request_paste(context, PastePlan(kind="before", start=pos, end=pos))


def apply_paste(context: ModeContext, plan: PastePlan, value: RegisterValue) -> None:
    """Insert ``value`` where ``plan`` says, captured when the key was pressed.

    Linewise values go in front of the current line so ``dd`` followed by a
    put restores the buffer exactly. Replacing a range that stops short of
    a newline drops the value's own trailing one.
    """

    if not value.text:
        return
    buffer = context.buffer
    if not buffer.attached:
        return
    buffer.save_state()
    text = buffer.text()
    inserted = value.text

    if plan.kind == "replace":
        start, end = plan.start, plan.end
        if value.linewise and inserted.endswith("\n") and not text[start:end].endswith("\n"):
            inserted = inserted[:-1]
    elif value.linewise:
        start = end = line_start(text, min(plan.start, len(text)))
        if not inserted.endswith("\n") and line_end(text, start) > start:
            inserted += "\n"
    elif plan.kind == "after":
        start = end = min(len(text), plan.start + 1)
    else:
        start = end = min(len(text), plan.start)

    buffer.replace_range(start, end, inserted, label=f"paste_{plan.kind}")
    buffer.show_block_cursor()


def undo(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    changed = context.buffer.step_undo()
    context.buffer.show_block_cursor()
    telemetry.record_event("history.undo", data={"changed": changed})
    return ModeResult(consumed=True, status="undo" if changed else "noop")


def redo(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    changed = context.buffer.step_redo()
    context.buffer.show_block_cursor()
    telemetry.record_event("history.redo", data={"changed": changed})
    return ModeResult(consumed=True, status="redo" if changed else "noop")


__all__ = [
    "apply_paste",
    "delete_char",
    "delete_line",
    "paste_after",
    "paste_before",
    "redo",
    "undo",
    "yank",
    "yank_line",
]
