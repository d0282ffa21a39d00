from __future__ import annotations

from pound_engine.adapters.textual.app import render_body, render_status
from pound_engine.viewport import Frame


def make_frame(*rows, cursor=(0, 0), line_count=None, dirty=0, filename=None) -> Frame:
    count = line_count if line_count is not None else sum(r is not None for r in rows)
    return Frame(
        rows=tuple(rows),
        cursor=cursor,
        cursor_row=cursor[1],
        line_count=count,
        dirty=dirty,
        filename=filename,
    )


def test_body_fills_past_end_with_tildes() -> None:
    body = render_body(make_frame("abc", None, None, cursor=(1, 0)), 10)

    assert body.plain.split("\n") == ["abc", "~", "~"]


def test_body_styles_digits_and_cursor() -> None:
    body = render_body(make_frame("a1", cursor=(0, 0)), 10)

    styles = {(span.start, span.end, str(span.style)) for span in body.spans}
    assert (1, 2, "cyan") in styles
    assert (0, 1, "reverse") in styles


def test_body_shows_welcome_on_empty_buffer() -> None:
    body = render_body(make_frame(None, None, None, None, None, None, cursor=(0, 0)), 40)

    lines = body.plain.split("\n")
    assert "Pound editor --- Version" in lines[2]
    assert lines[2].startswith("~")


def test_status_line_layout() -> None:
    status = render_status(make_frame("a", "b", cursor=(0, 1), dirty=2, filename="f.txt"), 40)

    assert status.startswith("f.txt (modified) -- 2 lines")
    assert status.endswith("2/2")
    assert len(status) == 40


def test_status_line_without_name() -> None:
    status = render_status(make_frame(None, line_count=0), 30)

    assert status.startswith("[No Name]  -- 0 lines")
    assert status.endswith("1/0")
