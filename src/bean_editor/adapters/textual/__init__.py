"""Textual host for the editor session."""

from .controller import TextualEditorAdapter, TextualUIHooks, normalize_textual_key

__all__ = ["TextualEditorAdapter", "TextualUIHooks", "normalize_textual_key"]
