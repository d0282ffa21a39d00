"""Textual host: key decoding, prompts and the full-screen app."""

from .controller import PromptKind, TextualEditorAdapter, TextualUIHooks

__all__ = ["PromptKind", "TextualEditorAdapter", "TextualUIHooks"]
