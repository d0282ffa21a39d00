"""Logical commands accepted by ``EditorSession`` and their results."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from pound_engine.buffer.buffer import PathLike
from pound_engine.viewport import Direction, PageDirection


@dataclass(frozen=True, slots=True)
class MoveCursor:
    direction: Direction


@dataclass(frozen=True, slots=True)
class PageMove:
    direction: PageDirection


@dataclass(frozen=True, slots=True)
class InsertChar:
    ch: str


@dataclass(frozen=True, slots=True)
class InsertNewline:
    pass


@dataclass(frozen=True, slots=True)
class DeleteBackward:
    pass


@dataclass(frozen=True, slots=True)
class DeleteForward:
    pass


@dataclass(frozen=True, slots=True)
class StartSearch:
    pass


@dataclass(frozen=True, slots=True)
class SearchKeystroke:
    """``query`` is the full text typed so far; ``key`` the key just pressed."""

    query: str
    key: str


@dataclass(frozen=True, slots=True)
class Save:
    path: Optional[PathLike] = None


@dataclass(frozen=True, slots=True)
class Load:
    path: PathLike


@dataclass(frozen=True, slots=True)
class Resize:
    rows: int
    columns: int


Command = Union[
    MoveCursor,
    PageMove,
    InsertChar,
    InsertNewline,
    DeleteBackward,
    DeleteForward,
    StartSearch,
    SearchKeystroke,
    Save,
    Load,
    Resize,
]


@dataclass(slots=True)
class CommandResult:
    """Outcome of ``EditorSession.apply``."""

    consumed: bool = True
    status: str = "ok"
    message: Optional[str] = None


__all__ = [
    "Command",
    "CommandResult",
    "DeleteBackward",
    "DeleteForward",
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
