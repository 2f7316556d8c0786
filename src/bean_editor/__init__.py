"""Single-file source editor built around an auto-indentation engine."""

__all__ = [
    "actions",
    "adapters",
    "buffer",
    "config",
    "indent",
    "keymaps",
    "runtime",
    "session",
    "toolchain",
    "workspace",
]

__version__ = "0.1.0"
