"""Cursor position shared by the buffer, viewport and search layers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(slots=True)
class CursorPosition:
    """Logical ``(column, row)``; ``row == line_count`` is the virtual last row."""

    column: int = 0
    row: int = 0

    def set(self, column: int, row: int) -> None:
        self.column = column
        self.row = row

    def copy(self) -> "CursorPosition":
        return CursorPosition(self.column, self.row)

    def as_tuple(self) -> Tuple[int, int]:
        return (self.column, self.row)
