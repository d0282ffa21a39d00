"""Textual-facing adapter: decodes keys into session commands and runs prompts."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional

from pound_engine.editor import (
    CommandResult,
    DeleteBackward,
    DeleteForward,
    EditorSession,
    InsertChar,
    InsertNewline,
    MoveCursor,
    PageMove,
    Save,
    SearchKeystroke,
    StartSearch,
)
from pound_engine.editor.commands import Command
from pound_engine.runtime import telemetry
from pound_engine.viewport import Direction, Frame, PageDirection

QUIT_TIMES = 2

HELP_MESSAGE = "Help: CTRL + S to Save | CTRL + F to Find | CTRL + Q to Quit."
SEARCH_PROMPT = "Search: {} (ESC to cancel, Arrows to find next matches, Enter to find)"
SAVE_AS_PROMPT = "Save as: {} (ESC to cancel)"

_MOVE_KEYS: Dict[str, Direction] = {
    "up": Direction.UP,
    "down": Direction.DOWN,
    "left": Direction.LEFT,
    "right": Direction.RIGHT,
    "home": Direction.HOME,
    "end": Direction.END,
}
_PAGE_KEYS: Dict[str, PageDirection] = {
    "pageup": PageDirection.UP,
    "pagedown": PageDirection.DOWN,
}


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_frame: Callable[[Frame], None]
    update_status: Callable[[str], None] = _noop
    show_prompt: Callable[[str], None] = _noop
    request_quit: Callable[[], None] = _noop
    log: Callable[[str], None] = _noop


class PromptKind(str, Enum):
    SEARCH = "search"
    SAVE_AS = "save_as"


class TextualEditorAdapter:
    """Bridges Textual key events to an ``EditorSession``."""

    def __init__(self, session: EditorSession, hooks: TextualUIHooks) -> None:
        self.session = session
        self.hooks = hooks
        self.quit_times = QUIT_TIMES
        self._prompt: Optional[PromptKind] = None
        self._typed: List[str] = []
        self.logger = telemetry.get_logger("pound_engine.adapters.textual")
        self.refresh()

    @property
    def prompt_text(self) -> str:
        return "".join(self._typed)

    @property
    def prompt_kind(self) -> Optional[PromptKind]:
        return self._prompt

    def refresh(self) -> None:
        self.hooks.update_frame(self.session.frame())

    def handle_textual_key(self, key: str, *, character: Optional[str] = None) -> None:
        """Dispatch one Textual key (``event.key`` / ``event.character``)."""

        self.hooks.log(f"key -> key={key!r} character={character!r}")
        if self._prompt is not None:
            self._handle_prompt_key(key, character)
        else:
            self._handle_editor_key(key, character)
        if key != "ctrl+q":
            self.quit_times = QUIT_TIMES
        self.refresh()

    # -- editing ---------------------------------------------------------

    def _handle_editor_key(self, key: str, character: Optional[str]) -> None:
        if key == "ctrl+q":
            self._request_quit()
            return
        if key == "ctrl+s":
            self._save()
            return
        if key in {"ctrl+f", "ctrl+g"}:
            self._open_prompt(PromptKind.SEARCH)
            self._dispatch(StartSearch())
            return

        command = self._decode(key, character)
        if command is not None:
            self._dispatch(command)

    @staticmethod
    def _decode(key: str, character: Optional[str]) -> Optional[Command]:
        if key in _MOVE_KEYS:
            return MoveCursor(_MOVE_KEYS[key])
        if key in _PAGE_KEYS:
            return PageMove(_PAGE_KEYS[key])
        if key == "enter":
            return InsertNewline()
        if key == "backspace":
            return DeleteBackward()
        if key == "delete":
            return DeleteForward()
        if key == "tab":
            return InsertChar("\t")
        if key.startswith(("ctrl+", "alt+", "meta+", "super+")):
            return None
        if character and len(character) == 1 and character.isprintable():
            return InsertChar(character)
        return None

    def _save(self) -> None:
        if self.session.buffer.path is None:
            self._open_prompt(PromptKind.SAVE_AS)
            return
        self._report(self._dispatch(Save()))

    def _request_quit(self) -> None:
        if self.session.buffer.is_dirty and self.quit_times > 0:
            self.hooks.update_status(
                "WARNING! File has unsaved changes. "
                f"Press Ctrl+q {self.quit_times} more times to quit."
            )
            self.quit_times -= 1
            return
        telemetry.record_event("session.quit", data={"dirty": self.session.buffer.dirty})
        self.hooks.request_quit()

    # -- prompts ---------------------------------------------------------

    def _open_prompt(self, kind: PromptKind) -> None:
        self._prompt = kind
        self._typed.clear()
        self._show_prompt()

    def _close_prompt(self) -> None:
        self._prompt = None
        self._typed.clear()
        self.hooks.show_prompt("")

    def _show_prompt(self) -> None:
        template = SEARCH_PROMPT if self._prompt is PromptKind.SEARCH else SAVE_AS_PROMPT
        self.hooks.show_prompt(template.format(self.prompt_text))

    def _handle_prompt_key(self, key: str, character: Optional[str]) -> None:
        if key == "escape":
            kind = self._prompt
            self._typed.clear()
            self._prompt_submit(kind, key)
            self._close_prompt()
            if kind is PromptKind.SAVE_AS:
                self.hooks.update_status("Save aborted")
            return
        if key == "enter":
            kind = self._prompt
            if not self._typed:
                if kind is PromptKind.SEARCH:
                    self._prompt_submit(kind, key)
                return
            self._prompt_submit(kind, key)
            self._close_prompt()
            return
        if key in {"backspace", "delete"}:
            if self._typed:
                self._typed.pop()
        elif key == "tab":
            self._typed.append("\t")
        elif (
            not key.startswith(("ctrl+", "alt+", "meta+", "super+"))
            and character
            and len(character) == 1
            and character.isprintable()
        ):
            self._typed.append(character)
        self._show_prompt()
        if self._prompt is PromptKind.SEARCH:
            self._dispatch(SearchKeystroke(self.prompt_text, key))

    def _prompt_submit(self, kind: Optional[PromptKind], key: str) -> None:
        if kind is PromptKind.SEARCH:
            self._dispatch(SearchKeystroke(self.prompt_text, key))
        elif kind is PromptKind.SAVE_AS and key == "enter":
            self._report(self._dispatch(Save(self.prompt_text)))

    # -- plumbing --------------------------------------------------------

    def _dispatch(self, command: Command) -> CommandResult:
        result = self.session.apply(command)
        self.hooks.log(
            f"result <- command={type(command).__name__} status={result.status!r}"
            f" cursor={self.session.cursor.as_tuple()!r}"
        )
        return result

    def _report(self, result: CommandResult) -> None:
        if result.message:
            self.hooks.update_status(result.message)


__all__ = [
    "HELP_MESSAGE",
    "PromptKind",
    "QUIT_TIMES",
    "TextualEditorAdapter",
    "TextualUIHooks",
]
