from __future__ import annotations

import pytest

from pound_engine.buffer import (
    TAB_STOP,
    CharClass,
    classify,
    logical_to_rendered,
    render,
    rendered_to_logical,
)


def test_single_tab_expands_to_full_stop() -> None:
    assert render("\t") == " " * TAB_STOP


def test_tab_after_character_reaches_next_stop() -> None:
    assert render("a\t") == "a" + " " * 7
    assert render("ab\tc") == "ab" + " " * 6 + "c"
    assert render("12345678\t") == "12345678" + " " * 8


def test_render_without_tabs_is_identity() -> None:
    assert render("plain text") == "plain text"
    assert render("") == ""


@pytest.mark.parametrize("content", ["", "abc", "hello world", "x" * 20])
def test_logical_equals_rendered_without_tabs(content: str) -> None:
    for column in range(len(content) + 1):
        assert logical_to_rendered(content, column) == column


def test_logical_to_rendered_accounts_for_tabs() -> None:
    assert logical_to_rendered("a\tb", 1) == 1
    assert logical_to_rendered("a\tb", 2) == 8
    assert logical_to_rendered("a\tb", 3) == 9
    assert logical_to_rendered("\t\t", 2) == 16


def test_rendered_to_logical_inside_tab_resolves_to_tab() -> None:
    assert rendered_to_logical("a\tb", 1) == 1
    assert rendered_to_logical("a\tb", 4) == 1
    assert rendered_to_logical("a\tb", 7) == 1
    assert rendered_to_logical("a\tb", 8) == 2


def test_rendered_to_logical_past_end_and_empty() -> None:
    assert rendered_to_logical("a\tb", 20) == 3
    assert rendered_to_logical("abc", 3) == 3
    assert rendered_to_logical("", 0) == 0
    assert rendered_to_logical("", 5) == 0


@pytest.mark.parametrize("content", ["", "abc", "\tx", "a\tb\tc", "\t\t1234\t"])
def test_round_trip_on_character_starts(content: str) -> None:
    for column in range(len(content) + 1):
        rendered = logical_to_rendered(content, column)
        assert rendered_to_logical(content, rendered) == column


def test_classify_marks_digits() -> None:
    assert classify("7") is CharClass.NUMBER
    assert classify("a") is CharClass.NORMAL
    assert classify("\t") is CharClass.NORMAL
