"""Command dispatch over the buffer, viewport and search engine."""

from .bus import EventBus
from .commands import (
    Command,
    CommandResult,
    DeleteBackward,
    DeleteForward,
    InsertChar,
    InsertNewline,
    Load,
    MoveCursor,
    PageMove,
    Resize,
    Save,
    SearchKeystroke,
    StartSearch,
)
from .session import EditorSession

__all__ = [
    "Command",
    "CommandResult",
    "DeleteBackward",
    "DeleteForward",
    "EditorSession",
    "EventBus",
    "InsertChar",
    "InsertNewline",
    "Load",
    "MoveCursor",
    "PageMove",
    "Resize",
    "Save",
    "SearchKeystroke",
    "StartSearch",
]
