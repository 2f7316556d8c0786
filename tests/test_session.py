from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Any, List

import pytest

from bean_editor.buffer import Buffer
from bean_editor.config import EditorConfig
from bean_editor.session import EditorContext, EditorSession, KeyInput
from bean_editor.workspace import resolve_source

SOURCE = "class Hello {\n    void f() {\n        x = 1;\n    }\n}\n"

JAVAC_OUTPUT = """\
{path}:3: error: cannot find symbol
        x = 1;
        ^
  symbol:   variable x
  location: class Hello
1 error
"""


def make_session(text: str = "", *, directory: Path | None = None) -> EditorSession:
    source = resolve_source(directory / "Hello") if directory is not None else None
    context = EditorContext(
        buffer=Buffer.from_text(text, name="Hello"),
        source=source,
        config=EditorConfig(),
    )
    return EditorSession(context)


def type_text(session: EditorSession, text: str) -> None:
    for char in text:
        if char == "\n":
            session.handle_key(KeyInput(key="enter"))
        else:
            session.handle_key(KeyInput(key=char, text=char))


class FakeProcess:
    pid = 4242

    def __init__(self, command: List[str], **kwargs: Any) -> None:
        self.command = command
        self.kwargs = kwargs


def test_typing_block_auto_indents_and_dedents() -> None:
    session = make_session()

    type_text(session, "if (x) {\nfoo();\n}")

    assert session.buffer.text == "if (x) {\n    foo();\n}"
    assert session.buffer.caret == len(session.buffer.text)


def test_closing_brace_is_one_undo_step() -> None:
    session = make_session()
    type_text(session, "if (x) {\nfoo();\n}")

    result = session.handle_key(KeyInput(key="z", modifiers=("ctrl",)))

    assert result.status == "undo"
    assert session.buffer.text == "if (x) {\n    foo();\n    "


def test_redo_reapplies_dedent() -> None:
    session = make_session()
    type_text(session, "if (x) {\n}")
    session.handle_key(KeyInput(key="z", modifiers=("ctrl",)))

    session.handle_key(KeyInput(key="y", modifiers=("ctrl",)))

    assert session.buffer.text == "if (x) {\n}"


def test_continuation_lines_indent_twice() -> None:
    session = make_session()

    type_text(session, "int total = a +\nb;\n")

    assert session.buffer.text == "int total = a +\n        b;\n"


def test_enter_replaces_selection() -> None:
    session = make_session("if (x) {abc")
    session.buffer.select(8, 11)

    session.handle_key(KeyInput(key="enter"))

    assert session.buffer.text == "if (x) {\n    "


def test_unbound_control_chord_is_a_miss() -> None:
    session = make_session("abc")

    result = session.handle_key(KeyInput(key="k", modifiers=("ctrl",), text="k"))

    assert result.consumed is False
    assert result.status == "miss"
    assert result.message == "ctrl+k"
    assert session.buffer.text == "abc"


def test_changes_are_published_on_the_bus() -> None:
    session = make_session()
    seen: list[object] = []
    session.context.bus.subscribe("buffer.changed", seen.append)

    session.handle_key(KeyInput(key="a", text="a"))
    session.handle_key(KeyInput(key="left"))

    assert len(seen) == 1
    assert getattr(seen[0], "text") == "a"


def test_caret_motion_keys() -> None:
    session = make_session("ab\ncdef\ng")
    session.buffer.set_caret(6)

    session.handle_key(KeyInput(key="up"))
    assert session.buffer.caret == 2
    session.handle_key(KeyInput(key="down"))
    assert session.buffer.caret == 5
    session.handle_key(KeyInput(key="end"))
    assert session.buffer.caret == 7
    session.handle_key(KeyInput(key="home"))
    assert session.buffer.caret == 3
    session.handle_key(KeyInput(key="backspace"))
    assert session.buffer.text == "abcdef\ng"


def test_toggle_errors_flips_panel() -> None:
    session = make_session()

    first = session.execute("project.toggle_errors")
    second = session.execute("project.toggle_errors")

    assert first.status == "errors_shown"
    assert second.status == "errors_hidden"


def test_save_writes_source_and_clears_dirty(tmp_path: Path) -> None:
    session = make_session("", directory=tmp_path)
    type_text(session, "class Hello {\n}")

    result = session.execute("project.save")

    assert result.status == "saved"
    assert (tmp_path / "Hello.java").read_text(encoding="utf-8") == "class Hello {\n}"
    assert session.buffer.mirror().dirty is False


def test_save_without_source_fails() -> None:
    session = make_session("x")

    assert session.execute("project.save").status == "save_failed"


def test_compile_collects_diagnostics(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    session = make_session(SOURCE, directory=tmp_path)
    calls: list[list[str]] = []
    path = tmp_path / "Hello.java"

    def fake_run(command: List[str], **kwargs: Any) -> subprocess.CompletedProcess:
        calls.append(command)
        return subprocess.CompletedProcess(
            command, 1, stdout="", stderr=JAVAC_OUTPUT.format(path=path)
        )

    monkeypatch.setattr(subprocess, "run", fake_run)
    events: list[str] = []
    session.context.bus.subscribe("compile.finished", lambda _: events.append("done"))

    result = session.execute("project.compile")

    assert result.status == "compile_failed"
    assert calls[0][0] == "javac"
    assert calls[0][-1] == str(path)
    assert events == ["done"]
    diagnostics = session.context.diagnostics
    assert len(diagnostics) == 1
    assert diagnostics.visible is True

    selected = session.select_diagnostic(0)

    assert selected.status == "diagnostic"
    assert session.buffer.state.selection == (37, 38)
    assert session.buffer.text[37:38] == "x"


def test_run_stops_when_compile_fails(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    session = make_session(SOURCE, directory=tmp_path)
    launched: list[FakeProcess] = []

    def fake_run(command: List[str], **kwargs: Any) -> subprocess.CompletedProcess:
        return subprocess.CompletedProcess(command, 1, stdout="", stderr="")

    def fake_popen(command: List[str], **kwargs: Any) -> FakeProcess:
        process = FakeProcess(command, **kwargs)
        launched.append(process)
        return process

    monkeypatch.setattr(subprocess, "run", fake_run)
    monkeypatch.setattr(subprocess, "Popen", fake_popen)

    result = session.execute("project.run")

    assert result.status == "run_failed"
    assert launched == []


def test_run_launches_program_with_arguments(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    session = make_session(SOURCE, directory=tmp_path)
    started: list[object] = []

    def fake_run(command: List[str], **kwargs: Any) -> subprocess.CompletedProcess:
        return subprocess.CompletedProcess(command, 0, stdout="", stderr="")

    monkeypatch.setattr(subprocess, "run", fake_run)
    monkeypatch.setattr(subprocess, "Popen", FakeProcess)
    session.context.bus.subscribe("run.started", started.append)
    session.set_program_args("one  two")

    result = session.execute("project.run")

    assert result.status == "running"
    assert len(started) == 1
    process = started[0]
    assert isinstance(process, FakeProcess)
    assert process.command == ["java", "Hello", "one", "two"]
    assert process.kwargs["cwd"] == tmp_path.absolute()


def test_open_missing_file_loads_template(tmp_path: Path) -> None:
    session = EditorSession.open(tmp_path / "Greeter.java", config=EditorConfig())

    assert "class Greeter {" in session.buffer.text
    assert session.buffer.name == "Greeter"
    assert session.buffer.mirror().dirty is False
