"""Executable Textual app: a prompt box driven by the modal engine."""

from __future__ import annotations

import argparse
from typing import Any, Optional, Sequence

from textual import events
from textual.app import App, ComposeResult
from textual.widgets import Footer, Header, Static, TextArea

from promptline_vim.config import EngineSettings
from promptline_vim.engine import VimModeEngine
from promptline_vim.runtime import telemetry

from .controller import TextualUIHooks, TextualVimController
from .host import TextAreaHost


class VimTextArea(TextArea):
    """``TextArea`` that offers every key to the controller first.

    Textual runs ``TextArea._on_key`` after this handler unless the default
    is prevented, so unhandled keys still type normally.
    """

    controller: Optional[TextualVimController] = None

    async def _on_key(self, event: events.Key) -> None:
        controller = self.controller
        if controller is not None and controller.handle_textual_key(
            event.key, event.character
        ):
            event.prevent_default()
            event.stop()


class PromptlineVimApp(App[str]):
    """Prompt editor demo; exits with the buffer text on ``q``."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#prompt {
		height: 1fr;
		border: round $accent;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+c", "quit", "Quit"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(
        self,
        *,
        text: str = "",
        settings: Optional[EngineSettings] = None,
    ) -> None:
        super().__init__()
        self._initial_text = text
        self._settings = settings or EngineSettings(enabled=True)
        self._yanked = ""
        self.engine: Optional[VimModeEngine] = None
        self.controller: Optional[TextualVimController] = None
        self._editor: Optional[VimTextArea] = None
        self._status_widget: Optional[Static] = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        self._editor = VimTextArea(self._initial_text, id="prompt")
        yield self._editor
        self._status_widget = Static("", id="status-line")
        yield self._status_widget
        yield Footer()

    def on_mount(self) -> None:
        assert self._editor is not None
        self.engine = VimModeEngine(
            TextAreaHost(self._editor),
            settings=self._settings,
            clipboard=self._read_clipboard,
            on_window_close=self._close,
            on_yank=self._copy,
        )
        hooks = TextualUIHooks(
            update_status=self._update_status,
            handle_event=self._handle_event,
            log=lambda line: telemetry.logger.debug(line),
        )
        self.controller = TextualVimController(self.engine, hooks)
        self._editor.controller = self.controller
        self._editor.focus()
        self.set_interval(0.1, self._process_timeouts)

    def on_unmount(self) -> None:
        if self.engine is not None:
            self.engine.cleanup()

    def _process_timeouts(self) -> None:
        if self.controller is not None:
            self.controller.process_timeouts()

    async def _read_clipboard(self) -> Optional[str]:
        return self._yanked or None

    def _copy(self, text: str) -> None:
        self._yanked = text
        self.copy_to_clipboard(text)

    def _close(self) -> None:
        self.exit(self._editor.text if self._editor is not None else "")

    def _update_status(self, status: str) -> None:
        if self._status_widget is not None:
            self._status_widget.update(status)

    def _handle_event(self, name: str, payload: Any | None) -> None:
        if name == "yank" and isinstance(payload, str):
            self.notify(f"{len(payload)} characters yanked", timeout=1.5)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the promptline-vim Textual demo.")
    parser.add_argument("--text", default="", help="Initial prompt text")
    parser.add_argument(
        "--log-preset",
        choices=telemetry.PRESETS,
        default=None,
        help="Telemetry preset (default: PROMPTLINE_VIM_* environment)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    settings = EngineSettings.from_env()
    preset = args.log_preset or settings.log_preset
    if preset:
        telemetry.configure(preset=preset)
    app = PromptlineVimApp(
        text=args.text.replace("\\n", "\n"),
        settings=EngineSettings(
            enabled=True,
            pending_timeout_ms=settings.pending_timeout_ms,
            undo_capacity=settings.undo_capacity,
            log_preset=preset,
        ),
    )
    result = app.run()
    if result:
        print(result)


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
