"""Incremental, direction-aware search over rendered rows."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional, Tuple

from pound_engine.buffer import LineBuffer, rendered_to_logical
from pound_engine.runtime import telemetry
from pound_engine.viewport import Viewport, ViewportSnapshot

KEY_UP = "up"
KEY_DOWN = "down"
KEY_LEFT = "left"
KEY_RIGHT = "right"
KEY_ENTER = "enter"
KEY_ESCAPE = "escape"


class SearchDirection(Enum):
    NONE = "none"
    FORWARD = "forward"
    BACKWARD = "backward"


class SearchPhase(str, Enum):
    IDLE = "idle"
    SEARCHING = "searching"


@dataclass(slots=True)
class SearchState:
    """Last match position (rendered column, row) and the active directions."""

    x_index: int = 0
    y_index: int = 0
    x_direction: SearchDirection = SearchDirection.NONE
    y_direction: SearchDirection = SearchDirection.NONE

    def reset(self) -> None:
        self.x_index = 0
        self.y_index = 0
        self.x_direction = SearchDirection.NONE
        self.y_direction = SearchDirection.NONE


@dataclass(frozen=True, slots=True)
class SearchOutcome:
    matched: bool = False
    finished: bool = False
    cancelled: bool = False
    row: Optional[int] = None
    column: Optional[int] = None


_ROW_KEYS = {KEY_DOWN: SearchDirection.FORWARD, KEY_UP: SearchDirection.BACKWARD}
_COLUMN_KEYS = {KEY_RIGHT: SearchDirection.FORWARD, KEY_LEFT: SearchDirection.BACKWARD}


class SearchEngine:
    """State machine driven by one keystroke at a time while a prompt is open.

    A miss never moves the cursor or touches ``state``; the previous match
    stays selected until the query or the direction changes.
    """

    def __init__(self) -> None:
        self.state = SearchState()
        self.phase = SearchPhase.IDLE
        self._saved: Optional[ViewportSnapshot] = None
        self.logger = telemetry.get_logger("pound_engine.search")

    @property
    def active(self) -> bool:
        return self.phase is SearchPhase.SEARCHING

    def start(self, viewport: Viewport) -> None:
        self.state = SearchState()
        self._saved = viewport.snapshot()
        self.phase = SearchPhase.SEARCHING
        telemetry.record_event("search.start", level="debug")

    def accept(self) -> SearchOutcome:
        self._finish()
        return SearchOutcome(finished=True)

    def cancel(self, viewport: Viewport) -> SearchOutcome:
        if self._saved is not None:
            viewport.restore(self._saved)
        self._finish()
        return SearchOutcome(finished=True, cancelled=True)

    def keystroke(
        self, buffer: LineBuffer, viewport: Viewport, query: str, key: str
    ) -> SearchOutcome:
        if not self.active:
            raise RuntimeError("No active search session")

        if key == KEY_ESCAPE:
            return self.cancel(viewport)
        if key == KEY_ENTER:
            if not query:
                return SearchOutcome()
            return self.accept()

        self.state.y_direction = _ROW_KEYS.get(key, SearchDirection.NONE)
        self.state.x_direction = _COLUMN_KEYS.get(key, SearchDirection.NONE)
        if not query:
            return SearchOutcome()

        with telemetry.span(
            "search::scan",
            component="search",
            metadata={
                "x_direction": self.state.x_direction.value,
                "y_direction": self.state.y_direction.value,
            },
        ):
            hit = self._scan(buffer, query)
        if hit is None:
            return SearchOutcome()

        row, match_column = hit
        self.state.y_index = row
        self.state.x_index = match_column
        viewport.cursor.row = row
        viewport.cursor.column = rendered_to_logical(buffer.get_row(row), match_column)
        viewport.invalidate_scroll(buffer)
        telemetry.record_event(
            "search.match",
            level="debug",
            data={"row": row, "column": viewport.cursor.column},
        )
        return SearchOutcome(matched=True, row=row, column=viewport.cursor.column)

    def _finish(self) -> None:
        self.state.reset()
        self._saved = None
        self.phase = SearchPhase.IDLE
        telemetry.record_event("search.end", level="debug")

    def _rows(self, count: int) -> Iterator[int]:
        state = self.state
        if state.y_direction is SearchDirection.FORWARD:
            yield from range(state.y_index + 1, count)
        elif state.y_direction is SearchDirection.BACKWARD:
            yield from range(min(state.y_index, count) - 1, -1, -1)
        elif state.x_direction is SearchDirection.NONE:
            yield from range(count)
        elif state.y_index < count:
            yield state.y_index

    def _scan(self, buffer: LineBuffer, query: str) -> Optional[Tuple[int, int]]:
        """Return ``(row, rendered column)`` of the first hit in scan order."""

        state = self.state
        for row in self._rows(buffer.line_count):
            rendered = buffer.get_rendered_row(row)
            if state.x_direction is SearchDirection.FORWARD:
                start = min(len(rendered), state.x_index + 1)
                index = rendered.find(query, start)
            elif state.x_direction is SearchDirection.BACKWARD:
                index = rendered.rfind(query, 0, min(state.x_index, len(rendered)))
            else:
                index = rendered.find(query)

            if index != -1:
                return (row, index)
            if state.x_direction is not SearchDirection.NONE:
                break
        return None


__all__ = [
    "KEY_DOWN",
    "KEY_ENTER",
    "KEY_ESCAPE",
    "KEY_LEFT",
    "KEY_RIGHT",
    "KEY_UP",
    "SearchDirection",
    "SearchEngine",
    "SearchOutcome",
    "SearchPhase",
    "SearchState",
]
