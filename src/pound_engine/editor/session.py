"""Editor session: applies logical commands to buffer, viewport and search."""

from __future__ import annotations

from typing import Callable, Dict, Optional, Type

from pound_engine.buffer import (
    BufferIOError,
    CursorPosition,
    LineBuffer,
    NoFileNameError,
)
from pound_engine.runtime import telemetry
from pound_engine.search import SearchEngine
from pound_engine.viewport import Direction, Frame, Viewport

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

DEFAULT_SCREEN_ROWS = 24
DEFAULT_SCREEN_COLUMNS = 80

_SEARCH_COMMANDS = (SearchKeystroke, Resize)


class EditorSession:
    """Owns one buffer and applies each command completely before returning."""

    def __init__(
        self,
        buffer: Optional[LineBuffer] = None,
        *,
        screen_rows: int = DEFAULT_SCREEN_ROWS,
        screen_columns: int = DEFAULT_SCREEN_COLUMNS,
        bus: Optional[EventBus] = None,
    ) -> None:
        self.buffer = buffer if buffer is not None else LineBuffer()
        self.viewport = Viewport(screen_rows, screen_columns)
        self.search = SearchEngine()
        self.bus = bus or EventBus()
        self.logger = telemetry.get_logger("pound_engine.session")
        self._handlers: Dict[Type[object], Callable[[object], CommandResult]] = {
            MoveCursor: self._move_cursor,
            PageMove: self._page_move,
            InsertChar: self._insert_char,
            InsertNewline: self._insert_newline,
            DeleteBackward: self._delete_backward,
            DeleteForward: self._delete_forward,
            StartSearch: self._start_search,
            SearchKeystroke: self._search_keystroke,
            Save: self._save,
            Load: self._load,
            Resize: self._resize,
        }

    @property
    def cursor(self) -> CursorPosition:
        return self.viewport.cursor

    def apply(self, command: Command) -> CommandResult:
        handler = self._handlers.get(type(command))
        if handler is None:
            raise TypeError(f"Unsupported command {command!r}")
        if self.search.active and not isinstance(command, _SEARCH_COMMANDS):
            return CommandResult(consumed=False, status="search_active")

        name = type(command).__name__
        with telemetry.span(
            name=f"session::{name}",
            component="session",
            metadata={"command": name, "cursor": self.cursor.as_tuple()},
        ):
            result = handler(command)
            self.viewport.scroll(self.buffer)
        return result

    def frame(self) -> Frame:
        self.viewport.scroll(self.buffer)
        return Frame(
            rows=tuple(self.viewport.visible_rows(self.buffer)),
            cursor=self.viewport.screen_cursor(),
            cursor_row=self.cursor.row,
            line_count=self.buffer.line_count,
            dirty=self.buffer.dirty,
            filename=self.buffer.filename,
            searching=self.search.active,
        )

    # -- navigation ------------------------------------------------------

    def _move_cursor(self, command: MoveCursor) -> CommandResult:
        self.viewport.move_cursor(command.direction, self.buffer)
        return CommandResult()

    def _page_move(self, command: PageMove) -> CommandResult:
        self.viewport.page_move(command.direction, self.buffer)
        return CommandResult()

    def _resize(self, command: Resize) -> CommandResult:
        self.viewport.resize(command.rows, command.columns)
        return CommandResult(status="resized")

    # -- edits -----------------------------------------------------------

    def _insert_char(self, command: InsertChar) -> CommandResult:
        cursor = self.cursor
        self.buffer.insert_char(cursor.row, cursor.column, command.ch)
        cursor.column += 1
        return CommandResult()

    def _insert_newline(self, command: InsertNewline) -> CommandResult:
        del command
        cursor = self.cursor
        if cursor.column == 0:
            self.buffer.insert_line(cursor.row)
        else:
            self.buffer.split_line(cursor.row, cursor.column)
        cursor.set(0, cursor.row + 1)
        return CommandResult()

    def _delete_backward(self, command: DeleteBackward) -> CommandResult:
        del command
        cursor = self.cursor
        landing = self.buffer.delete_char(cursor.row, cursor.column)
        if landing is None:
            return CommandResult(status="noop")
        cursor.set(landing.column, landing.row)
        self.viewport.clamp(self.buffer)
        return CommandResult()

    def _delete_forward(self, command: DeleteForward) -> CommandResult:
        del command
        cursor = self.cursor
        last_row = self.buffer.line_count - 1
        if cursor.row > last_row or (
            cursor.row == last_row
            and cursor.column == self.buffer.row_length(last_row)
        ):
            return CommandResult(status="noop")
        self.viewport.move_cursor(Direction.RIGHT, self.buffer)
        return self._delete_backward(DeleteBackward())

    # -- search ----------------------------------------------------------

    def _start_search(self, command: StartSearch) -> CommandResult:
        del command
        self.search.start(self.viewport)
        self.bus.emit("search.start", None)
        return CommandResult(status="searching")

    def _search_keystroke(self, command: SearchKeystroke) -> CommandResult:
        if not self.search.active:
            return CommandResult(consumed=False, status="search_idle")
        outcome = self.search.keystroke(
            self.buffer, self.viewport, command.query, command.key
        )
        if outcome.finished:
            self.bus.emit(
                "search.end", {"query": command.query, "cancelled": outcome.cancelled}
            )
            status = "search_cancelled" if outcome.cancelled else "search_accepted"
            return CommandResult(status=status)
        if outcome.matched:
            self.bus.emit("search.match", {"row": outcome.row, "column": outcome.column})
            return CommandResult(status="search_match")
        return CommandResult(status="search_miss")

    # -- persistence -----------------------------------------------------

    def _save(self, command: Save) -> CommandResult:
        try:
            written = self.buffer.save(command.path)
        except (NoFileNameError, BufferIOError) as exc:
            telemetry.record_event(
                "session.save_failed", level="error", data={"error": str(exc)}
            )
            self.bus.emit("buffer.error", str(exc))
            return CommandResult(status="error", message=str(exc))
        self.bus.emit("buffer.saved", {"path": str(self.buffer.path), "bytes": written})
        return CommandResult(status="saved", message=f"{written} bytes written to disk")

    def _load(self, command: Load) -> CommandResult:
        try:
            buffer = LineBuffer.load(command.path)
        except BufferIOError as exc:
            self.bus.emit("buffer.error", str(exc))
            return CommandResult(status="error", message=str(exc))
        self.buffer = buffer
        self.viewport.reset()
        self.bus.emit(
            "buffer.loaded", {"path": str(buffer.path), "lines": buffer.line_count}
        )
        return CommandResult(status="loaded")


__all__ = ["DEFAULT_SCREEN_COLUMNS", "DEFAULT_SCREEN_ROWS", "EditorSession"]
