"""Invoke the external Java compiler on the edited source file."""

from __future__ import annotations

import subprocess
from typing import Callable, List

from bean_editor.buffer import TextDocument
from bean_editor.config import EditorConfig
from bean_editor.runtime import telemetry
from bean_editor.workspace import SourceFile

from .diagnostics import Diagnostic, parse_javac_output

Reporter = Callable[[Diagnostic], None]


class JavaCompiler:
    """Compiles one source file into its own directory."""

    def __init__(self, config: EditorConfig | None = None) -> None:
        self.config = config or EditorConfig()
        self.logger = telemetry.get_logger("bean_editor.toolchain")

    def build_command(self, source: SourceFile) -> List[str]:
        command = [self.config.javac, "-d", str(source.working_dir)]
        if self.config.lint:
            command.append("-Xlint:all")
        if self.config.enable_preview:
            command.append("--enable-preview")
        if self.config.release:
            command.extend(["--release", self.config.release])
        command.append(str(source.path.absolute()))
        return command

    def compile(
        self, source: SourceFile, document: TextDocument, report: Reporter
    ) -> bool:
        command = self.build_command(source)
        with telemetry.span(
            "toolchain::compile",
            component="toolchain",
            metadata={"path": str(source.path)},
        ) as handle:
            try:
                completed = subprocess.run(
                    command,
                    cwd=source.working_dir,
                    capture_output=True,
                    text=True,
                    check=False,
                )
            except OSError as exc:
                self.logger.error(f"Cannot start {command[0]}: {exc}")
                handle.add_metadata("status", "unavailable")
                report(
                    Diagnostic(
                        kind="error",
                        line=1,
                        column=0,
                        message=f"Cannot start {command[0]}: {exc}",
                        start=0,
                        end=0,
                    )
                )
                return False

            output = completed.stderr + completed.stdout
            diagnostics = parse_javac_output(output, document)
            if completed.returncode != 0 and not diagnostics:
                diagnostics = [
                    Diagnostic(
                        kind="error",
                        line=1,
                        column=0,
                        message=output.strip()
                        or f"{command[0]} exited with {completed.returncode}",
                        start=0,
                        end=0,
                    )
                ]
            for diagnostic in diagnostics:
                report(diagnostic)
            handle.add_metadata("returncode", completed.returncode)
            handle.add_metadata("diagnostics", len(diagnostics))
            return completed.returncode == 0


__all__ = ["JavaCompiler", "Reporter"]
