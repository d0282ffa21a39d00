"""Text storage, tab rendering and cursor primitives."""

from .buffer import LineBuffer, split_lines
from .errors import BufferIOError, BufferValidationError, NoFileNameError
from .line import Line
from .render import (
    TAB_STOP,
    CharClass,
    classify,
    logical_to_rendered,
    render,
    rendered_to_logical,
)
from .state import CursorPosition

__all__ = [
    "BufferIOError",
    "BufferValidationError",
    "CharClass",
    "CursorPosition",
    "Line",
    "LineBuffer",
    "NoFileNameError",
    "TAB_STOP",
    "classify",
    "logical_to_rendered",
    "render",
    "rendered_to_logical",
    "split_lines",
]
