"""Source file resolution and persistence."""

from .source import (
    CLASS_TEMPLATE,
    DEFAULT_CLASS_NAME,
    SourceFile,
    base_name,
    class_template,
    is_class_name,
    remove_ext,
    resolve_source,
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
