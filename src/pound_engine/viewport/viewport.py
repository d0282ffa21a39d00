"""Cursor navigation and scroll-window maintenance."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from pound_engine.buffer import CursorPosition, LineBuffer, logical_to_rendered


class Direction(str, Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    HOME = "home"
    END = "end"


class PageDirection(str, Enum):
    UP = "up"
    DOWN = "down"


@dataclass(slots=True)
class ViewportSnapshot:
    cursor: CursorPosition
    row_offset: int
    column_offset: int


class Viewport:
    """Tracks the cursor and the visible window over a ``LineBuffer``.

    After ``scroll`` the cursor row lies in
    ``[row_offset, row_offset + screen_rows)`` and the rendered cursor column
    in ``[column_offset, column_offset + screen_columns)``.
    """

    def __init__(self, screen_rows: int, screen_columns: int) -> None:
        self.cursor = CursorPosition()
        self.row_offset = 0
        self.column_offset = 0
        self.rendered_column = 0
        self.screen_rows = 1
        self.screen_columns = 1
        self.resize(screen_rows, screen_columns)

    def resize(self, screen_rows: int, screen_columns: int) -> None:
        if screen_rows < 1 or screen_columns < 1:
            raise ValueError(
                f"screen must be at least 1x1, got {screen_columns}x{screen_rows}"
            )
        self.screen_rows = screen_rows
        self.screen_columns = screen_columns

    def reset(self) -> None:
        self.cursor = CursorPosition()
        self.row_offset = 0
        self.column_offset = 0
        self.rendered_column = 0

    def snapshot(self) -> ViewportSnapshot:
        return ViewportSnapshot(
            cursor=self.cursor.copy(),
            row_offset=self.row_offset,
            column_offset=self.column_offset,
        )

    def restore(self, snapshot: ViewportSnapshot) -> None:
        self.cursor = snapshot.cursor.copy()
        self.row_offset = snapshot.row_offset
        self.column_offset = snapshot.column_offset

    def move_cursor(self, direction: Direction, buffer: LineBuffer) -> None:
        count = buffer.line_count
        cursor = self.cursor

        if direction is Direction.UP:
            cursor.row = max(cursor.row - 1, 0)
        elif direction is Direction.DOWN:
            if cursor.row < count:
                cursor.row += 1
        elif direction is Direction.LEFT:
            if cursor.column > 0:
                cursor.column -= 1
            elif cursor.row > 0:
                cursor.row -= 1
                cursor.column = buffer.row_length(cursor.row)
        elif direction is Direction.RIGHT:
            if cursor.row < count:
                if cursor.column < buffer.row_length(cursor.row):
                    cursor.column += 1
                else:
                    cursor.column = 0
                    cursor.row += 1
        elif direction is Direction.HOME:
            cursor.column = 0
        elif direction is Direction.END:
            if cursor.row < count:
                cursor.column = buffer.row_length(cursor.row)
        else:  # pragma: no cover - exhaustive enum
            raise ValueError(f"Unknown direction {direction!r}")

        self.clamp(buffer)

    def page_move(self, direction: PageDirection, buffer: LineBuffer) -> None:
        """Jump to the top or bottom edge of the current screen."""

        if direction is PageDirection.UP:
            self.cursor.row = self.row_offset
        else:
            self.cursor.row = min(
                self.row_offset + self.screen_rows - 1, buffer.line_count
            )
        self.clamp(buffer)

    def clamp(self, buffer: LineBuffer) -> None:
        """Pull the cursor back inside the buffer after a structural change."""

        self.cursor.row = min(max(self.cursor.row, 0), buffer.line_count)
        self.cursor.column = min(
            max(self.cursor.column, 0), buffer.row_length(self.cursor.row)
        )

    def invalidate_scroll(self, buffer: LineBuffer) -> None:
        """Force the next ``scroll`` to bring the cursor row to the top."""

        self.row_offset = buffer.line_count

    def scroll(self, buffer: LineBuffer) -> None:
        cursor = self.cursor
        self.rendered_column = 0
        if cursor.row < buffer.line_count:
            self.rendered_column = logical_to_rendered(
                buffer.get_row(cursor.row), cursor.column
            )

        self.row_offset = min(self.row_offset, cursor.row)
        if cursor.row >= self.row_offset + self.screen_rows:
            self.row_offset = cursor.row - self.screen_rows + 1

        self.column_offset = min(self.column_offset, self.rendered_column)
        if self.rendered_column >= self.column_offset + self.screen_columns:
            self.column_offset = self.rendered_column - self.screen_columns + 1

    def screen_cursor(self) -> Tuple[int, int]:
        """Cursor ``(column, row)`` relative to the top-left of the screen."""

        return (
            self.rendered_column - self.column_offset,
            self.cursor.row - self.row_offset,
        )

    def visible_rows(self, buffer: LineBuffer) -> List[Optional[str]]:
        """Rendered text of each screen row; ``None`` past the end of the buffer."""

        rows: List[Optional[str]] = []
        for screen_row in range(self.screen_rows):
            file_row = screen_row + self.row_offset
            if file_row >= buffer.line_count:
                rows.append(None)
                continue
            rendered = buffer.get_rendered_row(file_row)
            start = min(self.column_offset, len(rendered))
            rows.append(rendered[start : start + self.screen_columns])
        return rows


__all__ = ["Direction", "PageDirection", "Viewport", "ViewportSnapshot"]
