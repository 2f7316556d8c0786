"""Executable Textual app that hosts the editor session."""

from __future__ import annotations

import argparse
import subprocess
import sys
from dataclasses import dataclass
from functools import partial
from typing import Iterable, Optional, Sequence

try:  # pragma: no cover - imported only when the app is run
    from rich.text import Text
    from textual import events
    from textual.app import App, ComposeResult, SystemCommand
    from textual.containers import Horizontal, Vertical
    from textual.screen import Screen
    from textual.widgets import Footer, Header, Input, Log, OptionList, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use bean_editor.adapters.textual.app"
    ) from exc

from bean_editor.buffer import BufferMirror
from bean_editor.runtime import telemetry
from bean_editor.session import EditorSession
from bean_editor.toolchain import Diagnostic

from .controller import TextualEditorAdapter, TextualUIHooks


def render_buffer(mirror: BufferMirror) -> Text:
    """Render buffer text with the selection and caret highlighted."""

    text = Text(mirror.text, no_wrap=False)
    if mirror.selection is not None:
        start, end = mirror.selection
        text.stylize("reverse blue", start, end)
    if mirror.caret < len(mirror.text) and mirror.text[mirror.caret] != "\n":
        text.stylize("reverse", mirror.caret, mirror.caret + 1)
    else:
        caret = Text(" ", style="reverse")
        text = Text.assemble(text[: mirror.caret], caret, text[mirror.caret :])
    return text


@dataclass
class UIState:
    status_text: str = ""
    diagnostics: tuple[Diagnostic, ...] = ()


class BeanEditorApp(App[None]):
    """Terminal editor for a single source file."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#program-args {
		height: 3;
	}

	#buffer-view {
		width: 1fr;
		height: 1fr;
		border: round $accent;
		padding: 0 1;
		overflow: auto;
	}

	#errors {
		width: 40;
		height: 1fr;
		border: round $error;
	}

	#errors.hidden {
		display: none;
	}

	#program-output {
		height: 8;
		border: round $surface-lighten-2;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    AUTO_FOCUS = None

    BINDINGS = [
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, session: EditorSession) -> None:
        super().__init__()
        self.session = session
        self.adapter: TextualEditorAdapter | None = None
        self._state = UIState()

    def compose(self) -> ComposeResult:
        yield Header(show_clock=False)
        yield Input(placeholder="program arguments", id="program-args")
        with Horizontal():
            with Vertical():
                yield Static("", id="buffer-view")
            yield OptionList(id="errors", classes="hidden")
        yield Log(id="program-output")
        yield Static("", id="status-line")
        yield Footer()

    def on_mount(self) -> None:
        source = self.session.context.source
        self.title = str(source.path) if source else "bean-editor"
        self.session.context.extras["run_streams"] = {
            "stdin": subprocess.DEVNULL,
            "stdout": subprocess.PIPE,
            "stderr": subprocess.STDOUT,
        }
        hooks = TextualUIHooks(
            update_buffer=self._update_buffer,
            update_status=self._update_status,
            update_diagnostics=self._update_diagnostics,
            handle_event=self._handle_event,
        )
        self.adapter = TextualEditorAdapter(self.session, hooks)
        self.set_focus(None)

    def get_system_commands(self, screen: Screen) -> Iterable[SystemCommand]:
        yield from super().get_system_commands(screen)
        registry = self.session.keymap_registry
        for binding in registry.menu_bindings():
            action = registry.get_action(binding.action_id)
            yield SystemCommand(
                action.description,
                f"{action.description} ({binding.token})",
                partial(self._run_menu_action, action.id),
            )

    def _run_menu_action(self, action_id: str) -> None:
        if self.adapter:
            self.adapter.run_action(action_id)

    async def on_key(self, event: events.Key) -> None:
        if not self.adapter or isinstance(self.focused, (Input, OptionList)):
            if event.key == "escape":
                self.set_focus(None)
                event.stop()
            return
        result = self.adapter.handle_textual_key(event.key, text=event.character)
        if result.consumed:
            event.stop()
            event.prevent_default()

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id == "program-args":
            self.session.set_program_args(event.value)

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        if self.adapter:
            self.adapter.select_diagnostic(event.option_index)
            self.set_focus(None)

    def _update_buffer(self, mirror: BufferMirror) -> None:
        self.query_one("#buffer-view", Static).update(render_buffer(mirror))
        marker = " *" if mirror.dirty else ""
        source = self.session.context.source
        self.sub_title = f"{source.class_name if source else ''}{marker}"

    def _update_status(self, status: str) -> None:
        self._state.status_text = status
        self.query_one("#status-line", Static).update(status)

    def _update_diagnostics(
        self, diagnostics: Sequence[Diagnostic], visible: bool
    ) -> None:
        self._state.diagnostics = tuple(diagnostics)
        errors = self.query_one("#errors", OptionList)
        errors.clear_options()
        errors.add_options([d.label for d in diagnostics])
        errors.set_class(not visible, "hidden")

    def _handle_event(self, name: str, payload: object | None) -> None:
        if name == "run.started" and isinstance(payload, subprocess.Popen):
            output = self.query_one("#program-output", Log)
            output.clear()
            self.run_worker(partial(self._pump_output, payload), thread=True)

    def _pump_output(self, process: subprocess.Popen) -> None:
        output = self.query_one("#program-output", Log)
        if process.stdout is None:
            return
        for raw in process.stdout:
            line = raw.decode("utf-8", errors="replace").rstrip("\n")
            self.call_from_thread(output.write_line, line)
        code = process.wait()
        self.call_from_thread(self._update_status, f"program exited with {code}")


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="bean-editor",
        description="Edit, compile, and run a single Java source file.",
    )
    parser.add_argument(
        "file",
        help="Class file name (e.g. Hello or Hello.java) or a directory for Code.java",
    )
    parser.add_argument(
        "--log-preset",
        choices=telemetry.PRESETS,
        default="production",
        help="Logging preset (default: production, which logs to a file)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    telemetry.configure(preset=args.log_preset)
    try:
        session = EditorSession.open(args.file)
    except OSError as exc:
        print(f"Error reading file: {exc}", file=sys.stderr)
        raise SystemExit(2) from exc
    BeanEditorApp(session).run()


if __name__ == "__main__":  # pragma: no cover - manual launch
    main()
