"""Error types raised by the buffer layer."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Tuple


class BufferIOError(RuntimeError):
    """The backing file could not be read or written."""

    def __init__(self, message: str, *, path: Optional[Path] = None) -> None:
        super().__init__(message)
        self.path = path


class NoFileNameError(RuntimeError):
    """Save was requested for a buffer that has no associated path."""

    def __init__(self, message: str = "no file name specified") -> None:
        super().__init__(message)


class BufferValidationError(RuntimeError):
    """Raised when a caller hands the buffer an out-of-range position."""

    def __init__(
        self, message: str, *, position: Tuple[int, int] | None = None
    ) -> None:
        super().__init__(message)
        self.position = position


__all__ = ["BufferIOError", "BufferValidationError", "NoFileNameError"]
