"""Launch the compiled program."""

from __future__ import annotations

import subprocess
from typing import IO, List, Optional, Union

from bean_editor.config import EditorConfig
from bean_editor.runtime import telemetry
from bean_editor.workspace import SourceFile

Stream = Union[int, IO[bytes], IO[str], None]


def split_args(arg_string: str) -> List[str]:
    """Split on single spaces; no quoting is recognised."""

    return [part for part in arg_string.split(" ") if part]


class ProgramRunner:
    def __init__(self, config: EditorConfig | None = None) -> None:
        self.config = config or EditorConfig()
        self.logger = telemetry.get_logger("bean_editor.toolchain")

    def build_command(self, source: SourceFile, arg_string: str = "") -> List[str]:
        command = [self.config.java]
        if self.config.enable_preview:
            command.append("--enable-preview")
        command.append(source.class_name)
        command.extend(split_args(arg_string))
        return command

    def launch(
        self,
        source: SourceFile,
        arg_string: str = "",
        *,
        stdin: Stream = None,
        stdout: Stream = None,
        stderr: Stream = None,
    ) -> Optional[subprocess.Popen]:
        """Start the program without waiting; ``None`` if it cannot start."""

        command = self.build_command(source, arg_string)
        try:
            process = subprocess.Popen(
                command,
                cwd=source.working_dir,
                stdin=stdin,
                stdout=stdout,
                stderr=stderr,
            )
        except OSError as exc:
            self.logger.error(f"Cannot start {command[0]}: {exc}")
            return None
        telemetry.record_event(
            "program.started",
            data={"class": source.class_name, "pid": process.pid},
        )
        return process


__all__ = ["ProgramRunner", "split_args"]
