"""External compiler and runtime integration."""

from .compiler import JavaCompiler, Reporter
from .diagnostics import Diagnostic, DiagnosticLog, parse_javac_output
from .runner import ProgramRunner, split_args

__all__ = [
    "Diagnostic",
    "DiagnosticLog",
    "JavaCompiler",
    "ProgramRunner",
    "Reporter",
    "parse_javac_output",
    "split_args",
]
