"""Resolve, load, and save the single source file being edited."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from bean_editor.runtime import telemetry

DEFAULT_CLASS_NAME = "Code"

CLASS_TEMPLATE = """\
import java.awt.*;
import java.awt.event.*;
import java.io.*;
import java.lang.reflect.*;
import java.nio.charset.*;
import java.nio.file.*;
import java.util.*;
import java.util.concurrent.*;
import java.util.concurrent.atomic.*;
import java.util.function.*;
import java.util.stream.*;
import javax.swing.*;
import javax.swing.event.*;
import javax.swing.text.*;
import javax.swing.undo.*;
import javax.tools.*;
import java.util.List;
import javax.swing.Timer;

class {name} {{
    public static void main(String[] args) throws Throwable {{
        System.err.println("{name}");
    }}
}}
"""


def is_class_name(leaf: str) -> bool:
    """A leaf starting with an ASCII capital names a class, not a directory."""

    return bool(leaf) and "A" <= leaf[0] <= "Z"


def remove_ext(name: str, ext: str) -> str:
    dot_ext = f".{ext}"
    return name[: -len(dot_ext)] if name.endswith(dot_ext) else name


def base_name(leaf: str) -> str:
    # Tolerate shell completion stopping at "Foo." as well as "Foo.class".
    return remove_ext(remove_ext(remove_ext(leaf, ""), "java"), "class")


def class_template(class_name: str) -> str:
    return CLASS_TEMPLATE.format(name=class_name)


@dataclass(frozen=True, slots=True)
class SourceFile:
    path: Path
    class_name: str

    @property
    def working_dir(self) -> Path:
        return self.path.absolute().parent

    def load(self) -> str:
        """Return the file's text, or a fresh class skeleton if it is missing."""

        try:
            return self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            telemetry.record_event(
                "source.template",
                data={"path": str(self.path), "class": self.class_name},
            )
            return class_template(self.class_name)

    def save(self, text: str) -> bool:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(text, encoding="utf-8")
        except OSError as exc:
            telemetry.get_logger("bean_editor.workspace").error(
                f"Failed to save {self.path}: {exc}"
            )
            return False
        telemetry.record_event(
            "source.saved", data={"path": str(self.path), "chars": len(text)}
        )
        return True


def resolve_source(file_name: str | Path) -> SourceFile:
    raw = Path(file_name)
    leaf = raw.name
    if is_class_name(leaf):
        class_name = base_name(leaf)
        return SourceFile(path=raw.with_name(f"{class_name}.java"), class_name=class_name)
    return SourceFile(
        path=raw / f"{DEFAULT_CLASS_NAME}.java", class_name=DEFAULT_CLASS_NAME
    )


__all__ = [
    "CLASS_TEMPLATE",
    "DEFAULT_CLASS_NAME",
    "SourceFile",
    "base_name",
    "class_template",
    "is_class_name",
    "remove_ext",
    "resolve_source",
]
