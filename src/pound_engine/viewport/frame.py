"""Paint snapshot handed to hosts once per refresh."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol, Tuple


@dataclass(frozen=True, slots=True)
class Frame:
    """Everything a host needs to draw one screen."""

    rows: Tuple[Optional[str], ...]
    cursor: Tuple[int, int]  # (column, row) on screen
    cursor_row: int
    line_count: int
    dirty: int
    filename: Optional[str] = None
    searching: bool = False

    @property
    def modified(self) -> bool:
        return self.dirty > 0


class FrameSource(Protocol):
    """Anything able to produce a scrolled ``Frame``."""

    def frame(self) -> Frame:
        ...
