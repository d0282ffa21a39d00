"""Single buffer row with its cached rendered form."""

from __future__ import annotations

from .render import render


class Line:
    """Logical row content plus the tab-expanded string painted on screen.

    ``rendered`` is recomputed on every write to ``content``; there is no lazy
    invalidation flag.
    """

    __slots__ = ("_content", "_rendered")

    def __init__(self, content: str = "") -> None:
        self._content = ""
        self._rendered = ""
        self.set_content(content)

    def __repr__(self) -> str:
        return f"Line({self._content!r})"

    def __len__(self) -> int:
        return len(self._content)

    @property
    def content(self) -> str:
        return self._content

    @property
    def rendered(self) -> str:
        return self._rendered

    def set_content(self, content: str) -> None:
        self._content = content
        self._rendered = render(content)

    def insert_char(self, at: int, ch: str) -> None:
        self.set_content(self._content[:at] + ch + self._content[at:])

    def delete_char(self, at: int) -> None:
        self.set_content(self._content[:at] + self._content[at + 1 :])

    def truncate(self, at: int) -> str:
        """Cut the line at ``at`` and return the removed tail."""

        tail = self._content[at:]
        self.set_content(self._content[:at])
        return tail

    def append(self, text: str) -> None:
        self.set_content(self._content + text)
