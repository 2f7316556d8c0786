from __future__ import annotations

from pathlib import Path

import pytest

from bean_editor.workspace import (
    DEFAULT_CLASS_NAME,
    SourceFile,
    base_name,
    class_template,
    is_class_name,
    resolve_source,
)


@pytest.mark.parametrize(
    ("leaf", "expected"),
    [
        ("Hello", "Hello"),
        ("Hello.java", "Hello"),
        ("Hello.class", "Hello"),
        ("Hello.", "Hello"),
        ("Hello.txt", "Hello.txt"),
    ],
)
def test_base_name_strips_known_suffixes(leaf: str, expected: str) -> None:
    assert base_name(leaf) == expected


def test_is_class_name_requires_leading_capital() -> None:
    assert is_class_name("Hello")
    assert not is_class_name("hello")
    assert not is_class_name("")
    assert not is_class_name("_Hello")


def test_resolve_class_name_in_directory(tmp_path: Path) -> None:
    source = resolve_source(tmp_path / "src" / "Hello.class")

    assert source.class_name == "Hello"
    assert source.path == tmp_path / "src" / "Hello.java"
    assert source.working_dir == (tmp_path / "src").absolute()


def test_resolve_directory_uses_default_class(tmp_path: Path) -> None:
    source = resolve_source(str(tmp_path / "project"))

    assert source.class_name == DEFAULT_CLASS_NAME
    assert source.path == tmp_path / "project" / "Code.java"


def test_template_names_the_class() -> None:
    template = class_template("Greeter")

    assert "class Greeter {" in template
    assert 'System.err.println("Greeter");' in template
    assert template.startswith("import java.awt.*;")


def test_load_existing_file(tmp_path: Path) -> None:
    path = tmp_path / "Hello.java"
    path.write_text("class Hello {}\n", encoding="utf-8")

    assert SourceFile(path, "Hello").load() == "class Hello {}\n"


def test_save_creates_parent_directories(tmp_path: Path) -> None:
    source = resolve_source(tmp_path / "nested" / "dir" / "Hello")

    assert source.save("class Hello {}\n") is True
    assert source.path.read_text(encoding="utf-8") == "class Hello {}\n"


def test_save_reports_failure(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")
    source = SourceFile(blocker / "Hello.java", "Hello")

    assert source.save("class Hello {}\n") is False
