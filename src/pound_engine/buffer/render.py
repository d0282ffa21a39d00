"""Tab expansion and logical <-> rendered column translation."""

from __future__ import annotations

from enum import Enum

TAB_STOP = 8


class CharClass(str, Enum):
    NORMAL = "normal"
    NUMBER = "number"


def char_width(ch: str, rendered_column: int) -> int:
    """Cells ``ch`` occupies when it starts at ``rendered_column``."""

    if ch == "\t":
        return TAB_STOP - (rendered_column % TAB_STOP)
    return 1


def render(content: str) -> str:
    """Return ``content`` with every tab expanded to the next tab stop."""

    if "\t" not in content:
        return content
    parts: list[str] = []
    width = 0
    for ch in content:
        step = char_width(ch, width)
        parts.append(" " * step if ch == "\t" else ch)
        width += step
    return "".join(parts)


def logical_to_rendered(content: str, logical_column: int) -> int:
    """Rendered column at which the character at ``logical_column`` starts."""

    rendered_column = 0
    for ch in content[:logical_column]:
        rendered_column += char_width(ch, rendered_column)
    return rendered_column


def rendered_to_logical(content: str, rendered_column: int) -> int:
    """Logical column of the character covering ``rendered_column``.

    A column inside a tab's expansion resolves to the tab itself. Columns at or
    beyond the rendered width map to the end of the line.
    """

    current = 0
    for logical_column, ch in enumerate(content):
        current += char_width(ch, current)
        if current > rendered_column:
            return logical_column
    return len(content)


def classify(ch: str) -> CharClass:
    if ch.isdecimal():
        return CharClass.NUMBER
    return CharClass.NORMAL


__all__ = [
    "TAB_STOP",
    "CharClass",
    "char_width",
    "classify",
    "logical_to_rendered",
    "render",
    "rendered_to_logical",
]
