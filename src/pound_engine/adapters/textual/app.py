"""Executable Textual app hosting the pound editor engine."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Optional, Sequence

from rich.text import Text
from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.timer import Timer
from textual.widgets import Static

from pound_engine import __version__
from pound_engine.buffer import CharClass, classify
from pound_engine.editor import EditorSession, Load, Resize
from pound_engine.runtime import telemetry
from pound_engine.viewport import Frame

from .controller import HELP_MESSAGE, TextualEditorAdapter, TextualUIHooks

MESSAGE_TIMEOUT_S = 5.0
# status bar + message bar
RESERVED_ROWS = 2


def render_body(frame: Frame, screen_columns: int) -> Text:
    """Paint the text area: buffer rows, ``~`` fillers and the cursor cell."""

    cursor_column, cursor_row = frame.cursor
    screen_rows = len(frame.rows)
    lines: list[Text] = []
    for index, row in enumerate(frame.rows):
        line = Text(no_wrap=True, overflow="crop")
        if row is not None:
            for ch in row:
                style = "cyan" if classify(ch) is CharClass.NUMBER else ""
                line.append(ch, style=style)
        elif frame.line_count == 0 and index == screen_rows // 3:
            welcome = f"Pound editor --- Version {__version__}"[:screen_columns]
            padding = (screen_columns - len(welcome)) // 2
            if padding:
                line.append("~")
                padding -= 1
            line.append(" " * padding + welcome)
        else:
            line.append("~")

        if index == cursor_row:
            if row is None:
                # the virtual row past the end: the cursor replaces the filler
                line = Text(" ", no_wrap=True, overflow="crop")
            if cursor_column >= len(line):
                line.append(" " * (cursor_column - len(line) + 1))
            line.stylize("reverse", cursor_column, cursor_column + 1)
        lines.append(line)
    return Text("\n", no_wrap=True, overflow="crop").join(lines)


def render_status(frame: Frame, screen_columns: int) -> str:
    info = "{} {} -- {} lines".format(
        frame.filename or "[No Name]",
        "(modified)" if frame.modified else "",
        frame.line_count,
    )[:screen_columns]
    line_info = f"{frame.cursor_row + 1}/{frame.line_count}"
    gap = screen_columns - len(info) - len(line_info)
    if gap < 0:
        return info.ljust(screen_columns)
    return info + " " * gap + line_info


class PoundApp(App[None]):
    """Full-screen host: body, reverse-video status bar and message bar."""

    CSS = """
    Screen {
        layout: vertical;
    }

    #body {
        height: 1fr;
    }

    #status-bar {
        height: 1;
        text-style: reverse;
    }

    #message-bar {
        height: 1;
    }
    """

    BINDINGS = [Binding("ctrl+q", "quit", "Quit", show=False, priority=True)]

    ENABLE_COMMAND_PALETTE = False

    def __init__(self, path: Optional[str] = None) -> None:
        super().__init__()
        self.path = path
        self.session = EditorSession()
        self.adapter: TextualEditorAdapter | None = None
        self._body: Static | None = None
        self._status_bar: Static | None = None
        self._message_bar: Static | None = None
        self._message_timer: Timer | None = None
        self._prompt_text = ""
        self._message = ""
        self.logger = telemetry.get_logger("pound_engine.app")

    def compose(self) -> ComposeResult:
        self._body = Static("", id="body")
        self._status_bar = Static("", id="status-bar")
        self._message_bar = Static("", id="message-bar")
        yield self._body
        yield self._status_bar
        yield self._message_bar

    def on_mount(self) -> None:
        self._resize_session(self.size.width, self.size.height)
        load_error: Optional[str] = None
        if self.path:
            result = self.session.apply(Load(self.path))
            if result.status == "error":
                # Start empty but keep the path so Ctrl+S creates the file.
                self.session.buffer.path = Path(self.path)
                load_error = result.message
        hooks = TextualUIHooks(
            update_frame=self._update_frame,
            update_status=self._set_message,
            show_prompt=self._show_prompt,
            request_quit=self.exit,
            log=self._log_line,
        )
        self.adapter = TextualEditorAdapter(self.session, hooks)
        self._set_message(load_error or HELP_MESSAGE)

    def on_resize(self, event: events.Resize) -> None:
        self._resize_session(event.size.width, event.size.height)
        if self.adapter:
            self.adapter.refresh()

    def on_key(self, event: events.Key) -> None:
        if not self.adapter:
            return
        self.adapter.handle_textual_key(event.key, character=event.character)
        event.stop()
        event.prevent_default()

    async def action_quit(self) -> None:
        # Textual's own ctrl+q binding lands here; keep the unsaved-changes guard.
        if self.adapter:
            self.adapter.handle_textual_key("ctrl+q")
        else:
            self.exit()

    def _resize_session(self, width: int, height: int) -> None:
        rows = max(height - RESERVED_ROWS, 1)
        self.session.apply(Resize(rows, max(width, 1)))

    def _update_frame(self, frame: Frame) -> None:
        columns = self.session.viewport.screen_columns
        if self._body:
            self._body.update(render_body(frame, columns))
        if self._status_bar:
            self._status_bar.update(Text(render_status(frame, columns)))

    def _show_prompt(self, text: str) -> None:
        self._prompt_text = text
        self._paint_message_bar()

    def _set_message(self, message: str) -> None:
        self._message = message
        if self._message_timer is not None:
            self._message_timer.stop()
        self._message_timer = self.set_timer(MESSAGE_TIMEOUT_S, self._expire_message)
        self._paint_message_bar()

    def _expire_message(self) -> None:
        self._message = ""
        self._message_timer = None
        self._paint_message_bar()

    def _paint_message_bar(self) -> None:
        if self._message_bar:
            self._message_bar.update(Text(self._prompt_text or self._message))

    def _log_line(self, line: str) -> None:
        self.logger.debug(line)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Pound terminal text editor.")
    parser.add_argument("path", nargs="?", help="File to open")
    parser.add_argument(
        "--log-preset",
        default="tui",
        choices=telemetry.PRESETS,
        help="Telemetry preset (default: tui, console logging disabled)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    telemetry.configure(preset=args.log_preset)
    app = PoundApp(args.path)
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual run
    main()
