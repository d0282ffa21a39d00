from __future__ import annotations

import pytest

from pound_engine.buffer import LineBuffer
from pound_engine.search import SearchDirection, SearchEngine, SearchPhase
from pound_engine.viewport import Viewport


def make_search(*lines: str) -> tuple[LineBuffer, Viewport, SearchEngine]:
    buffer = LineBuffer(lines)
    viewport = Viewport(10, 40)
    engine = SearchEngine()
    engine.start(viewport)
    return buffer, viewport, engine


def test_row_stepping_forward_and_back() -> None:
    buffer, viewport, engine = make_search("hello world", "goodbye world")

    first = engine.keystroke(buffer, viewport, "world", "d")
    assert first.matched
    assert viewport.cursor.as_tuple() == (6, 0)

    second = engine.keystroke(buffer, viewport, "world", "down")
    assert second.matched
    assert viewport.cursor.as_tuple() == (8, 1)

    third = engine.keystroke(buffer, viewport, "world", "up")
    assert third.matched
    assert viewport.cursor.as_tuple() == (6, 0)


def test_miss_leaves_cursor_and_state_unchanged() -> None:
    buffer, viewport, engine = make_search("hello world", "goodbye world")
    engine.keystroke(buffer, viewport, "world", "d")
    engine.keystroke(buffer, viewport, "world", "down")

    outcome = engine.keystroke(buffer, viewport, "world", "down")

    assert not outcome.matched
    assert viewport.cursor.as_tuple() == (8, 1)
    assert (engine.state.x_index, engine.state.y_index) == (8, 1)


def test_backward_from_first_row_misses() -> None:
    buffer, viewport, engine = make_search("world", "world")
    engine.keystroke(buffer, viewport, "world", "d")

    outcome = engine.keystroke(buffer, viewport, "world", "up")

    assert not outcome.matched
    assert viewport.cursor.as_tuple() == (0, 0)


def test_typing_rescans_from_top() -> None:
    buffer, viewport, engine = make_search("alpha", "beta", "gamma beta")
    engine.keystroke(buffer, viewport, "gam", "m")
    assert viewport.cursor.row == 2

    engine.keystroke(buffer, viewport, "beta", "a")

    assert viewport.cursor.as_tuple() == (0, 1)


def test_column_stepping_within_row() -> None:
    buffer, viewport, engine = make_search("foo foo foo")
    engine.keystroke(buffer, viewport, "foo", "o")
    assert viewport.cursor.column == 0

    engine.keystroke(buffer, viewport, "foo", "right")
    assert viewport.cursor.column == 4
    assert engine.state.x_direction is SearchDirection.FORWARD

    engine.keystroke(buffer, viewport, "foo", "right")
    assert viewport.cursor.column == 8

    miss = engine.keystroke(buffer, viewport, "foo", "right")
    assert not miss.matched
    assert viewport.cursor.column == 8

    engine.keystroke(buffer, viewport, "foo", "left")
    assert viewport.cursor.column == 4
    assert engine.state.y_direction is SearchDirection.NONE


def test_column_stepping_does_not_leave_row() -> None:
    buffer, viewport, engine = make_search("needle", "needle needle")
    engine.keystroke(buffer, viewport, "needle", "e")

    outcome = engine.keystroke(buffer, viewport, "needle", "right")

    assert not outcome.matched
    assert viewport.cursor.as_tuple() == (0, 0)


def test_match_in_rendered_space_maps_to_logical_column() -> None:
    buffer, viewport, engine = make_search("\tneedle")

    engine.keystroke(buffer, viewport, "needle", "e")

    assert engine.state.x_index == 8
    assert viewport.cursor.as_tuple() == (1, 0)


def test_match_forces_rescroll() -> None:
    lines = [f"line {i}" for i in range(30)] + ["target"]
    buffer, viewport, engine = make_search(*lines)

    engine.keystroke(buffer, viewport, "target", "t")
    assert viewport.row_offset == buffer.line_count

    viewport.scroll(buffer)
    assert viewport.row_offset == 30


def test_escape_restores_cursor_and_resets() -> None:
    buffer = LineBuffer(["abc", "xyz match"])
    viewport = Viewport(10, 40)
    viewport.cursor.set(2, 0)
    engine = SearchEngine()
    engine.start(viewport)
    engine.keystroke(buffer, viewport, "match", "h")
    assert viewport.cursor.as_tuple() == (4, 1)

    outcome = engine.keystroke(buffer, viewport, "", "escape")

    assert outcome.cancelled
    assert viewport.cursor.as_tuple() == (2, 0)
    assert engine.phase is SearchPhase.IDLE
    assert engine.state.y_index == 0


def test_enter_accepts_and_keeps_cursor() -> None:
    buffer, viewport, engine = make_search("abc", "xyz match")
    engine.keystroke(buffer, viewport, "match", "h")

    outcome = engine.keystroke(buffer, viewport, "match", "enter")

    assert outcome.finished and not outcome.cancelled
    assert viewport.cursor.as_tuple() == (4, 1)
    assert not engine.active
    assert engine.state.x_direction is SearchDirection.NONE


def test_enter_with_empty_query_keeps_session_open() -> None:
    buffer, viewport, engine = make_search("abc")

    outcome = engine.keystroke(buffer, viewport, "", "enter")

    assert not outcome.finished
    assert engine.active


def test_empty_query_never_matches() -> None:
    buffer, viewport, engine = make_search("abc", "def")
    viewport.cursor.set(1, 1)

    outcome = engine.keystroke(buffer, viewport, "", "backspace")

    assert not outcome.matched
    assert viewport.cursor.as_tuple() == (1, 1)


def test_keystroke_without_session_raises() -> None:
    engine = SearchEngine()

    with pytest.raises(RuntimeError):
        engine.keystroke(LineBuffer(["a"]), Viewport(1, 1), "a", "a")
