from __future__ import annotations

import curses
import logging
import select
import sys
import typing

import trio

from .termtypes import NamedKey, RawKeyEvent, TerminalError

if typing.TYPE_CHECKING:
    from ..editor.buffer import Window
    from ..editor.state import EditorState

logger = logging.getLogger(__name__)

CURSES_NAMED_KEYS = {
    curses.KEY_BACKSPACE: NamedKey.BACKSPACE,
    curses.KEY_DC: NamedKey.DELETE,
    curses.KEY_HOME: NamedKey.HOME,
    curses.KEY_END: NamedKey.END,
    curses.KEY_PPAGE: NamedKey.PAGE_UP,
    curses.KEY_NPAGE: NamedKey.PAGE_DOWN,
    curses.KEY_UP: NamedKey.UP,
    curses.KEY_DOWN: NamedKey.DOWN,
    curses.KEY_LEFT: NamedKey.LEFT,
    curses.KEY_RIGHT: NamedKey.RIGHT,
    curses.KEY_ENTER: NamedKey.ENTER,
}
CURSES_NAMED_KEYS.update({curses.KEY_F0 + n: NamedKey[f"F{n}"] for n in range(1, 13)})

CHARACTER_NAMED_KEYS = {
    "\x1b": NamedKey.ESCAPE,
    "\r": NamedKey.ENTER,
    "\t": NamedKey.TAB,
    "\x7f": NamedKey.BACKSPACE,
    "\x08": NamedKey.BACKSPACE,
}


def event_for_wch(wch: int | str) -> typing.Optional[RawKeyEvent]:
    "Turn one get_wch() result into a raw key event."
    if isinstance(wch, int):
        if wch == curses.KEY_RESIZE:
            return None
        named = CURSES_NAMED_KEYS.get(wch)
        if named is None:
            logger.debug("Unhandled curses key code %d", wch)
            return None
        return RawKeyEvent.named(named)
    named = CHARACTER_NAMED_KEYS.get(wch)
    if named is not None:
        return RawKeyEvent.named(named)
    code = ord(wch)
    if code == 0:
        return RawKeyEvent.typed(" ", ctrl=True)
    if code < 0x1B:
        return RawKeyEvent.typed(chr(code + 0x60), ctrl=True)
    if code < 0x20:
        return RawKeyEvent.typed(chr(code + 0x40), ctrl=True)
    return RawKeyEvent.typed(wch)


def safe_addstr(window, y: int, x: int, text: str, attr: int = 0):
    # writing into the bottom-right cell raises even though the text lands
    try:
        window.addstr(y, x, text, attr)
    except curses.error:
        logger.debug("curses.error in addstr at (%d,%d): %r", y, x, text)


class CursesTerminal:
    def __init__(self, stdscr):
        self.stdscr = stdscr
        try:
            curses.raw()
            curses.nonl()
            curses.noecho()
            stdscr.keypad(True)
            stdscr.nodelay(True)
        except curses.error as e:
            raise TerminalError(f"Unable to set up terminal: {e}") from e

    def read_event(self) -> typing.Optional[RawKeyEvent]:
        try:
            wch = self.stdscr.get_wch()
        except curses.error:
            return None
        return event_for_wch(wch)

    def poll(self, timeout: float) -> bool:
        readable, _, _ = select.select([sys.stdin], [], [], timeout)
        return bool(readable)

    def beep(self):
        curses.beep()

    async def events(self):
        while True:
            await trio.lowlevel.wait_readable(sys.stdin.fileno())
            # curses may hold several characters from one read; drain until it reports none
            while True:
                try:
                    wch = self.stdscr.get_wch()
                except curses.error:
                    break
                event = event_for_wch(wch)
                if event is not None:
                    yield event

    def _paint_window(self, editor: EditorState, window: Window, top: int, cols: int, selected: bool) -> int:
        "Paint one window and its mode line from row top. Returns the screen column of its cursor."
        stdscr = self.stdscr
        buffer = editor.buffers[window.buffer_index]
        gutter = 0
        if editor.display.show_line_numbers:
            gutter = len(str(buffer.line_count)) + 1
        tab_width = editor.settings.tab_width
        for row in range(window.height):
            index = window.top_line + row
            if index >= buffer.line_count:
                break
            if gutter:
                safe_addstr(stdscr, top + row, 0, str(index + 1).rjust(gutter - 1), curses.A_DIM)
            text = buffer.line(index).expandtabs(tab_width)
            safe_addstr(stdscr, top + row, gutter, text[: max(0, cols - gutter)])

        if buffer.read_only:
            flags = "%%"
        else:
            flags = "**" if buffer.modified else "--"
        mode = f"-{flags}- {buffer.name}"
        if editor.macros.recording and selected:
            mode += "  Def"
        mode += f"  L{window.cursor.line + 1}"
        safe_addstr(stdscr, top + window.height, 0, mode.ljust(cols)[:cols], curses.A_REVERSE)

        cursor = buffer.clamp(window.cursor)
        return gutter + len(buffer.line(cursor.line)[: cursor.col].expandtabs(tab_width))

    def paint(self, editor: EditorState):
        stdscr = self.stdscr
        rows, cols = stdscr.getmaxyx()
        editor.layout_windows(max(len(editor.windows) * 2, rows - 1))
        stdscr.erase()

        top = 0
        cursor_at = (0, 0)
        for index, window in enumerate(editor.windows):
            selected = index == editor.current_window
            if selected:
                window.ensure_cursor_visible()
            x = self._paint_window(editor, window, top, cols, selected)
            if selected:
                cursor_at = (top + window.cursor.line - window.top_line, min(x, cols - 1))
            top += window.height + 1

        message = editor.display.message or ""
        safe_addstr(stdscr, rows - 1, 0, message[: cols - 1])

        if editor.prompt is not None or editor.search is not None or editor.capture is not None:
            stdscr.move(rows - 1, min(len(message), cols - 1))
        else:
            stdscr.move(*cursor_at)
        stdscr.refresh()
        editor.display.take_redraw()
        editor.highlighter.take_dirty()
