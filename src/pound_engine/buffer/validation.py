"""Index checks shared by buffer mutations."""

from __future__ import annotations

from typing import Sequence

from .errors import BufferValidationError
from .line import Line


def ensure_row(lines: Sequence[Line], row: int, *, allow_virtual: bool = False) -> int:
    limit = len(lines) if allow_virtual else len(lines) - 1
    if row < 0 or row > limit:
        raise BufferValidationError("Row out of range", position=(0, row))
    return row


def ensure_position(
    lines: Sequence[Line], column: int, row: int, *, allow_virtual: bool = False
) -> tuple[int, int]:
    ensure_row(lines, row, allow_virtual=allow_virtual)
    length = len(lines[row]) if row < len(lines) else 0
    if column < 0 or column > length:
        raise BufferValidationError("Column out of range", position=(column, row))
    return (column, row)
