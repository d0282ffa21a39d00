from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from pound_engine.adapters.textual import PromptKind, TextualEditorAdapter, TextualUIHooks
from pound_engine.buffer import LineBuffer
from pound_engine.editor import EditorSession
from pound_engine.viewport import Frame


class Recorder:
    def __init__(self) -> None:
        self.frames: List[Frame] = []
        self.statuses: List[str] = []
        self.prompts: List[str] = []
        self.logs: List[str] = []
        self.quits = 0

    def hooks(self) -> TextualUIHooks:
        return TextualUIHooks(
            update_frame=self.frames.append,
            update_status=self.statuses.append,
            show_prompt=self.prompts.append,
            request_quit=self._quit,
            log=self.logs.append,
        )

    def _quit(self) -> None:
        self.quits += 1


def make_adapter(
    *lines: str, path: Optional[Path] = None
) -> tuple[TextualEditorAdapter, Recorder]:
    recorder = Recorder()
    session = EditorSession(LineBuffer(lines, path=path), screen_rows=5, screen_columns=40)
    return TextualEditorAdapter(session, recorder.hooks()), recorder


def type_text(adapter: TextualEditorAdapter, text: str) -> None:
    for ch in text:
        adapter.handle_textual_key(ch, character=ch)


def test_adapter_paints_initial_frame() -> None:
    _, recorder = make_adapter("abc")

    assert recorder.frames
    assert recorder.frames[-1].rows[0] == "abc"


def test_printable_keys_insert_text() -> None:
    adapter, recorder = make_adapter()

    type_text(adapter, "hi")
    adapter.handle_textual_key("tab", character="\t")
    adapter.handle_textual_key("enter")

    assert adapter.session.buffer.text() == "hi\t\n"
    assert recorder.frames[-1].cursor == (0, 1)
    assert any(line.startswith("key ->") for line in recorder.logs)


def test_modifier_combinations_are_ignored() -> None:
    adapter, _ = make_adapter("abc")

    adapter.handle_textual_key("ctrl+x", character="\x18")
    adapter.handle_textual_key("alt+a", character="a")

    assert adapter.session.buffer.text() == "abc"
    assert adapter.session.buffer.dirty == 0


def test_navigation_and_delete_keys() -> None:
    adapter, _ = make_adapter("abc", "def")

    adapter.handle_textual_key("end")
    adapter.handle_textual_key("delete")
    assert adapter.session.buffer.text() == "abcdef"

    adapter.handle_textual_key("backspace")
    assert adapter.session.buffer.text() == "abdef"
    assert adapter.session.cursor.as_tuple() == (2, 0)


def test_ctrl_s_with_path_saves(tmp_path: Path) -> None:
    target = tmp_path / "doc.txt"
    adapter, recorder = make_adapter("abc", path=target)

    adapter.handle_textual_key("ctrl+s")

    assert target.read_text(encoding="utf-8") == "abc"
    assert recorder.statuses[-1] == "3 bytes written to disk"


def test_ctrl_s_without_path_prompts_for_name(tmp_path: Path) -> None:
    adapter, recorder = make_adapter("abc")
    target = tmp_path / "saved.txt"

    adapter.handle_textual_key("ctrl+s")
    assert adapter.prompt_kind is PromptKind.SAVE_AS

    adapter.handle_textual_key("enter")
    assert adapter.prompt_kind is PromptKind.SAVE_AS

    type_text(adapter, str(target))
    assert recorder.prompts[-1].startswith("Save as: " + str(target))
    adapter.handle_textual_key("enter")

    assert adapter.prompt_kind is None
    assert target.read_text(encoding="utf-8") == "abc"
    assert recorder.statuses[-1] == "3 bytes written to disk"
    assert recorder.prompts[-1] == ""


def test_save_as_escape_aborts() -> None:
    adapter, recorder = make_adapter("abc")

    adapter.handle_textual_key("ctrl+s")
    type_text(adapter, "x")
    adapter.handle_textual_key("escape")

    assert adapter.prompt_kind is None
    assert recorder.statuses[-1] == "Save aborted"
    assert adapter.session.buffer.path is None


def test_search_prompt_drives_session() -> None:
    adapter, recorder = make_adapter("hello world", "goodbye world")

    adapter.handle_textual_key("ctrl+f")
    type_text(adapter, "world")
    assert adapter.session.cursor.as_tuple() == (6, 0)
    assert recorder.frames[-1].searching

    adapter.handle_textual_key("down")
    assert adapter.session.cursor.as_tuple() == (8, 1)
    assert recorder.prompts[-1].startswith("Search: world")

    adapter.handle_textual_key("enter")
    assert adapter.prompt_kind is None
    assert not adapter.session.search.active
    assert adapter.session.cursor.as_tuple() == (8, 1)


def test_search_prompt_backspace_and_escape() -> None:
    adapter, _ = make_adapter("abc", "xyz")
    adapter.handle_textual_key("right")

    adapter.handle_textual_key("ctrl+f")
    type_text(adapter, "xyq")
    adapter.handle_textual_key("backspace")
    assert adapter.prompt_text == "xy"
    assert adapter.session.cursor.as_tuple() == (0, 1)

    adapter.handle_textual_key("escape")

    assert adapter.session.cursor.as_tuple() == (1, 0)
    assert not adapter.session.search.active


def test_quit_guard_counts_down_when_dirty() -> None:
    adapter, recorder = make_adapter("abc")
    type_text(adapter, "x")

    adapter.handle_textual_key("ctrl+q")
    adapter.handle_textual_key("ctrl+q")
    assert recorder.quits == 0
    assert "Press Ctrl+q 1 more times" in recorder.statuses[-1]

    adapter.handle_textual_key("ctrl+q")
    assert recorder.quits == 1


def test_quit_guard_resets_after_other_key() -> None:
    adapter, recorder = make_adapter("abc")
    type_text(adapter, "x")

    adapter.handle_textual_key("ctrl+q")
    adapter.handle_textual_key("left")
    adapter.handle_textual_key("ctrl+q")
    adapter.handle_textual_key("ctrl+q")

    assert recorder.quits == 0


def test_clean_buffer_quits_immediately() -> None:
    adapter, recorder = make_adapter("abc")

    adapter.handle_textual_key("ctrl+q")

    assert recorder.quits == 1
