from __future__ import annotations

import argparse
import curses
import logging
import pathlib
import sys

import msgspec
import trio

from .editor import macro_store
from .editor.buffer import Buffer
from .editor.state import EditorState
from .settings import DEFAULT_SETTINGS_PATH, Settings
from .terminal.curses_terminal import CursesTerminal
from .terminal.keystreams import make_keystream

logger = logging.getLogger(__name__)


class Quern:
    def __init__(self, terminal: CursesTerminal, settings: Settings):
        self.terminal = terminal
        self.settings = settings
        self.editor = EditorState(settings, bell=terminal.beep)

    def load_macros(self):
        try:
            self.editor.macros.slots = macro_store.load_macros(self.settings.macros_path)
        except (OSError, msgspec.DecodeError) as e:
            logger.warning("Unable to load macros from %s: %s", self.settings.macros_path, e)

    def open_files(self, paths: list[pathlib.Path]):
        for path in paths:
            try:
                self.editor.open_file(path)
            except FileNotFoundError:
                self.editor.display.set_message(f"(New file) {path}")
                self.editor.add_buffer(Buffer(path.name, path=path))
            except (OSError, UnicodeDecodeError) as e:
                logger.warning("Unable to open %s: %s", path, e)
                self.editor.display.set_message(f"Error reading file: {e}")

    def show_pending(self, message: str):
        self.editor.display.set_message(message)
        self.terminal.paint(self.editor)

    async def run(self):
        self.terminal.paint(self.editor)
        async with make_keystream(self.terminal.events(), on_pending=self.show_pending) as keystream:
            async for key in keystream:
                logger.debug("Key %s", key.display_name())
                self.editor.handle_key(key)
                if not self.editor.running:
                    break
                self.terminal.paint(self.editor)


parser = argparse.ArgumentParser(prog="quern")
parser.add_argument("files", nargs="*", type=pathlib.Path)
parser.add_argument("--settings", type=pathlib.Path, default=DEFAULT_SETTINGS_PATH)
parser.add_argument("--log-file", type=pathlib.Path, default=pathlib.Path("quern.log"))
parser.add_argument("--debug", action="store_true")


def start_quern(stdscr, parsed: argparse.Namespace):
    settings = Settings.load(parsed.settings)
    quern = Quern(CursesTerminal(stdscr), settings)
    quern.load_macros()
    quern.open_files(parsed.files)
    trio.run(quern.run)


def main(argv=sys.argv):
    """
    Args:
        argv (list): List of arguments

    Returns:
        int: A return code
    """
    parsed = parser.parse_args(argv[1:])
    # the screen belongs to curses, so logs go to a file
    logging.basicConfig(filename=parsed.log_file, level=logging.DEBUG if parsed.debug else logging.INFO)
    curses.wrapper(start_quern, parsed)
    return 0
