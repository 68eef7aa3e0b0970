import curses

import pytest

from quern.editor.decoder import translate
from quern.editor.keys import Key
from quern.terminal.curses_terminal import event_for_wch
from quern.terminal.scripted import ScriptedTerminal
from quern.terminal.termtypes import NamedKey, RawKeyEvent, Terminal


@pytest.mark.parametrize(
    "wch,expected",
    (
        ("a", RawKeyEvent.typed("a")),
        ("\x1b", RawKeyEvent.named(NamedKey.ESCAPE)),
        ("\r", RawKeyEvent.named(NamedKey.ENTER)),
        ("\t", RawKeyEvent.named(NamedKey.TAB)),
        ("\x7f", RawKeyEvent.named(NamedKey.BACKSPACE)),
        ("\x00", RawKeyEvent.typed(" ", ctrl=True)),
        ("\x06", RawKeyEvent.typed("f", ctrl=True)),
        ("\n", RawKeyEvent.typed("j", ctrl=True)),
        ("\x1f", RawKeyEvent.typed("_", ctrl=True)),
        (curses.KEY_LEFT, RawKeyEvent.named(NamedKey.LEFT)),
        (curses.KEY_DC, RawKeyEvent.named(NamedKey.DELETE)),
        (curses.KEY_F0 + 3, RawKeyEvent.named(NamedKey.F3)),
        (curses.KEY_RESIZE, None),
    ),
)
def test_event_for_wch(wch, expected):
    assert event_for_wch(wch) == expected


def test_control_characters_decode_to_control_keys():
    assert translate(event_for_wch("\x07")) == Key.ctrl("g")
    assert translate(event_for_wch("\x00")) == Key.ctrl(" ")


def test_scripted_terminal():
    terminal: Terminal = ScriptedTerminal([RawKeyEvent.typed("a")])
    assert terminal.poll(0)
    assert terminal.read_event() == RawKeyEvent.typed("a")
    assert not terminal.poll(0)
    assert terminal.read_event() is None
    terminal.beep()
    assert terminal.beeps == 1
