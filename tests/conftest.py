import pytest

from quern.commontypes import Position
from quern.editor.keys import Key
from quern.editor.state import EditorState
from quern.settings import Settings


def parse_keys(names: str) -> list[Key]:
    "Keys separated by spaces, e.g. 'C-x ( a b C-x )'. C-x chords keep their inner space."
    keys = []
    words = names.split(" ")
    i = 0
    while i < len(words):
        word = words[i]
        if word == "C-x" and i + 1 < len(words):
            word = f"C-x {words[i + 1]}"
            i += 1
        keys.append(Key.from_display_name(word))
        i += 1
    return keys


class Driver:
    def __init__(self, editor: EditorState):
        self.editor = editor

    def type(self, text: str):
        for ch in text:
            self.editor.handle_key(Key.char(ch))

    def keys(self, names: str):
        statuses = [self.editor.handle_key(key) for key in parse_keys(names)]
        return statuses[-1]

    def load(self, text: str, line: int = 0, col: int = 0):
        self.editor.current_buffer.set_text(text)
        self.editor.current_buffer.modified = False
        self.editor.window.move_to(Position(line=line, col=col))

    @property
    def text(self):
        return self.editor.current_buffer.text

    @property
    def cursor(self):
        return self.editor.window.cursor

    @property
    def message(self):
        return self.editor.display.message


@pytest.fixture
def settings(tmp_path):
    return Settings.for_test(tmp_path)


@pytest.fixture
def editor(settings):
    return EditorState(settings)


@pytest.fixture
def driver(editor):
    return Driver(editor)
