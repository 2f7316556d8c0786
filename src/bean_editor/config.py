"""Environment-driven editor configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

ENV_PREFIX = "BEAN_EDITOR_"

_TRUTHY = {"1", "true", "yes", "on"}


def env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}", default)


def env_flag(name: str, default: bool) -> bool:
    raw = env(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUTHY


@dataclass(frozen=True, slots=True)
class EditorConfig:
    """Toolchain settings shared by compile and run.

    ``release`` and ``enable_preview`` are passed straight through to the
    compiler; preview features require a release matching the installed JDK,
    so both stay off unless explicitly requested.
    """

    javac: str = "javac"
    java: str = "java"
    release: Optional[str] = None
    enable_preview: bool = False
    lint: bool = True

    @classmethod
    def from_env(cls) -> "EditorConfig":
        return cls(
            javac=env("JAVAC") or "javac",
            java=env("JAVA") or "java",
            release=env("JAVA_RELEASE") or None,
            enable_preview=env_flag("ENABLE_PREVIEW", False),
            lint=env_flag("LINT", True),
        )


__all__ = ["ENV_PREFIX", "EditorConfig", "env", "env_flag"]
