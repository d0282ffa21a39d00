"""Line-oriented text buffer with file load/save."""

from __future__ import annotations

from contextlib import AbstractContextManager
from pathlib import Path
from typing import ContextManager, Iterable, Iterator, List, Optional

from pound_engine.runtime import telemetry

from .errors import BufferIOError, BufferValidationError, NoFileNameError
from .line import Line
from .state import CursorPosition
from .validation import ensure_position, ensure_row

PathLike = str | Path


def split_lines(text: str) -> List[str]:
    """Split on ``\\n`` only; the final terminator does not open a new line."""

    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


class LineBuffer:
    """Ordered rows of ``Line`` plus the file they came from.

    ``dirty`` counts edits since the last successful save. An empty buffer has
    no lines at all; the cursor may still sit on row ``0`` (the virtual row).
    """

    def __init__(
        self,
        lines: Iterable[str] = (),
        *,
        path: Optional[PathLike] = None,
    ) -> None:
        self._lines: List[Line] = [Line(content) for content in lines]
        self.path: Optional[Path] = Path(path) if path is not None else None
        self.dirty = 0

    @classmethod
    def from_text(cls, text: str, *, path: Optional[PathLike] = None) -> "LineBuffer":
        return cls(split_lines(text), path=path)

    @classmethod
    def load(cls, path: PathLike) -> "LineBuffer":
        target = Path(path)
        try:
            # No newline translation: a lone \r stays inside its row.
            text = target.read_bytes().decode("utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            telemetry.record_event(
                "buffer.load_failed",
                level="error",
                data={"path": str(target), "error": str(exc)},
            )
            raise BufferIOError(f"cannot read {target}: {exc}", path=target) from exc
        buffer = cls.from_text(text, path=target)
        telemetry.record_event(
            "buffer.loaded",
            data={"path": str(target), "lines": buffer.line_count},
        )
        return buffer

    # -- readers ---------------------------------------------------------

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self) -> Iterator[Line]:
        return iter(self._lines)

    @property
    def line_count(self) -> int:
        return len(self._lines)

    @property
    def is_dirty(self) -> bool:
        return self.dirty > 0

    @property
    def filename(self) -> Optional[str]:
        return self.path.name if self.path is not None else None

    def get_line(self, row: int) -> Line:
        ensure_row(self._lines, row)
        return self._lines[row]

    def get_row(self, row: int) -> str:
        return self.get_line(row).content

    def get_rendered_row(self, row: int) -> str:
        return self.get_line(row).rendered

    def row_length(self, row: int) -> int:
        """Length of ``row``; the virtual row past the end has length 0."""

        if row == len(self._lines):
            return 0
        return len(self.get_line(row))

    def text(self) -> str:
        return "\n".join(line.content for line in self._lines)

    # -- mutations -------------------------------------------------------

    def insert_line(self, index: int, content: str = "") -> None:
        with _Mutation(self, "insert_line"):
            ensure_row(self._lines, index, allow_virtual=True)
            self._lines.insert(index, Line(content))

    def insert_char(self, row: int, column: int, ch: str) -> None:
        if len(ch) != 1:
            raise ValueError(f"expected a single character, got {ch!r}")
        ensure_position(self._lines, column, row, allow_virtual=True)
        if row == len(self._lines):
            self.insert_line(row)
        with _Mutation(self, "insert_char"):
            self._lines[row].insert_char(column, ch)

    def split_line(self, row: int, column: int) -> None:
        with _Mutation(self, "split_line"):
            ensure_position(self._lines, column, row)
            tail = self._lines[row].truncate(column)
            self._lines.insert(row + 1, Line(tail))

    def join_rows(self, row: int) -> int:
        """Append ``row`` onto ``row - 1`` and drop it; return the join column."""

        with _Mutation(self, "join_rows"):
            ensure_row(self._lines, row)
            if row == 0:
                raise BufferValidationError("Cannot join the first row", position=(0, 0))
            previous = self._lines[row - 1]
            join_column = len(previous)
            current = self._lines.pop(row)
            previous.append(current.content)
        return join_column

    def delete_char(self, row: int, column: int) -> Optional[CursorPosition]:
        """Backspace at ``(column, row)``; return where the cursor belongs.

        Returns ``None`` when nothing was deleted: at the very start of the
        buffer, and on the virtual row past the last line.
        """

        ensure_position(self._lines, column, row, allow_virtual=True)
        if row == len(self._lines) or (row == 0 and column == 0):
            return None
        if column > 0:
            with _Mutation(self, "delete_char"):
                self._lines[row].delete_char(column - 1)
            return CursorPosition(column - 1, row)
        join_column = self.join_rows(row)
        return CursorPosition(join_column, row - 1)

    # -- persistence -----------------------------------------------------

    def save(self, path: Optional[PathLike] = None) -> int:
        """Write the buffer to disk and return the number of bytes written."""

        if path is not None:
            self.path = Path(path)
        if self.path is None:
            raise NoFileNameError()

        payload = self.text().encode("utf-8")
        with telemetry.span(
            "buffer::save", component="buffer", metadata={"path": str(self.path)}
        ):
            try:
                self.path.write_bytes(payload)
            except OSError as exc:
                telemetry.record_event(
                    "buffer.save_failed",
                    level="error",
                    data={"path": str(self.path), "error": str(exc)},
                )
                raise BufferIOError(
                    f"cannot write {self.path}: {exc}", path=self.path
                ) from exc
        self.dirty = 0
        telemetry.record_event(
            "buffer.saved", data={"path": str(self.path), "bytes": len(payload)}
        )
        return len(payload)


class _Mutation(AbstractContextManager["_Mutation"]):
    """Profiles one edit and bumps the dirty counter when it completes."""

    def __init__(self, buffer: LineBuffer, label: str) -> None:
        self.buffer = buffer
        self.label = label
        self._span_cm: Optional[ContextManager[object]] = None

    def __enter__(self) -> "_Mutation":
        self._span_cm = telemetry.span(
            name=f"buffer::{self.label}",
            component="buffer",
            metadata={"file": self.buffer.filename or "[No Name]"},
        )
        self._span_cm.__enter__()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if exc_type is None:
            self.buffer.dirty += 1
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
        return False


__all__ = ["LineBuffer", "PathLike", "split_lines"]
