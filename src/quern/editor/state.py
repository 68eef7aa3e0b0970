# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import collections.abc
import logging
import pathlib
import time
import typing

from ..commands import default_bindings
from ..commontypes import CommandStatus, Direction, QuernError
from ..settings import Settings
from . import modes
from .bindings import BindingTable, CommandFn
from .buffer import Buffer, Highlighter, Window
from .display import Display
from .keys import ABORT_KEY, Key, KeyFlag
from .killring import KillRing
from .macros import MacroRecorder
from .prefixarg import PrefixArgument

logger = logging.getLogger(__name__)

SCRATCH_BUFFER = "*scratch*"
MIN_SPLIT_HEIGHT = 4
KeyCapture = collections.abc.Callable[[Key], CommandStatus]


class EditorState:
    """Everything one editing session owns, and the per-key router that drives it.

    handle_key() is the single entry point for keys, both live and replayed from a macro.
    It gives the key to the first of these that is active: a one-key capture armed by a command,
    the minibuffer prompt, incremental search, query-replace, and finally ordinary command dispatch.
    """

    def __init__(
        self,
        settings: Settings,
        bindings: typing.Optional[BindingTable] = None,
        bell: typing.Optional[collections.abc.Callable[[], None]] = None,
        clock: collections.abc.Callable[[], float] = time.monotonic,
    ):
        if bindings is None:
            bindings = default_bindings()
        self.settings = settings
        self.bindings = bindings
        self.display = Display(bell=bell, show_line_numbers=settings.show_line_numbers)
        self.highlighter = Highlighter()
        self.kill_ring = KillRing(max_entries=settings.kill_ring_max)
        self.macros = MacroRecorder()
        self.prefix = PrefixArgument()
        self.buffers: list[Buffer] = [Buffer(SCRATCH_BUFFER)]
        self.windows: list[Window] = [Window()]
        self.current_window = 0
        self.prompt: typing.Optional[modes.PromptState] = None
        self.search: typing.Optional[modes.SearchState] = None
        self.query_replace: typing.Optional[modes.QueryReplaceState] = None
        self.capture: typing.Optional[KeyCapture] = None
        self.quote_pending = False
        self.last_search = ""
        self.running = True
        self.auto_save_enabled = settings.auto_save
        self.clock = clock
        self.last_auto_save = clock()

    @property
    def window(self) -> Window:
        return self.windows[self.current_window]

    @property
    def current_buffer(self) -> Buffer:
        return self.buffers[self.window.buffer_index]

    # buffers

    def buffer_names(self) -> list[str]:
        return [b.name for b in self.buffers]

    def find_buffer(self, name: str) -> typing.Optional[int]:
        for index, buffer in enumerate(self.buffers):
            if buffer.name == name:
                return index
        return None

    def switch_to_buffer(self, index: int):
        window = self.window
        window.buffer_index = index
        window.set_cursor(0, 0)
        window.mark = None
        window.top_line = 0
        self.display.force_redraw()

    def add_buffer(self, buffer: Buffer) -> int:
        self.buffers.append(buffer)
        index = len(self.buffers) - 1
        self.switch_to_buffer(index)
        return index

    def open_file(self, path: pathlib.Path) -> Buffer:
        for index, buffer in enumerate(self.buffers):
            if buffer.path is not None and buffer.path.resolve() == path.resolve():
                self.switch_to_buffer(index)
                return buffer
        buffer = Buffer.load(path)
        self.add_buffer(buffer)
        logger.debug("Opened %s (%d lines)", path, buffer.line_count)
        return buffer

    def show_output(self, name: str, text: str):
        "Replace the contents of a scratch-style buffer and display it."
        index = self.find_buffer(name)
        if index is None:
            index = self.add_buffer(Buffer(name, text))
        else:
            self.buffers[index].set_text(text)
            self.switch_to_buffer(index)
        self.buffers[index].modified = False
        self.highlighter.invalidate_from(0)

    def remove_buffer(self, index: int):
        del self.buffers[index]
        for window in self.windows:
            if window.buffer_index == index:
                window.buffer_index = 0
                window.set_cursor(0, 0)
                window.mark = None
            elif window.buffer_index > index:
                window.buffer_index -= 1
        self.display.force_redraw()

    def modified_buffers(self) -> list[Buffer]:
        return [b for b in self.buffers if b.modified and b.path is not None]

    # windows

    def _select_window(self, index: int):
        self.current_window = index
        window = self.window
        window.move_to(self.current_buffer.clamp(window.cursor))
        window.ensure_cursor_visible()
        self.display.force_redraw()

    def split_window(self) -> bool:
        "Split the current window in two, both showing its buffer. The top half stays selected."
        window = self.window
        if window.height < MIN_SPLIT_HEIGHT:
            return False
        top_height = window.height // 2
        # the lower window gives up one row for the upper window's mode line
        new_window = Window(buffer_index=window.buffer_index, height=window.height - top_height - 1)
        new_window.move_to(window.cursor)
        new_window.top_line = window.top_line
        new_window.ensure_cursor_visible()
        window.height = top_height
        window.ensure_cursor_visible()
        self.windows.insert(self.current_window + 1, new_window)
        self.display.force_redraw()
        return True

    def delete_window(self) -> bool:
        if len(self.windows) <= 1:
            return False
        index = self.current_window
        freed = self.window.height + 1
        neighbor = self.windows[index - 1] if index > 0 else self.windows[index + 1]
        neighbor.height += freed
        del self.windows[index]
        self._select_window(min(index, len(self.windows) - 1))
        return True

    def delete_other_windows(self) -> bool:
        if len(self.windows) <= 1:
            return False
        window = self.window
        window.height = sum(w.height + 1 for w in self.windows) - 1
        self.windows = [window]
        self.current_window = 0
        self.display.force_redraw()
        return True

    def other_window(self, count: int = 1):
        self._select_window((self.current_window + count) % len(self.windows))

    def layout_windows(self, rows: int):
        """Fit the windows, each with its mode line, into rows screen rows.

        Heights are kept when they already fit; otherwise the rows are shared out evenly.
        """
        if sum(w.height + 1 for w in self.windows) == rows:
            return
        share, extra = divmod(rows, len(self.windows))
        for index, window in enumerate(self.windows):
            window.height = max(1, share - 1 + (1 if index < extra else 0))
            window.ensure_cursor_visible()

    # editing primitives shared by commands

    def insert_text(self, text: str):
        window = self.window
        start = window.cursor
        window.move_to(self.current_buffer.insert_text(start, text))
        window.goal_col = None
        window.ensure_cursor_visible()
        self.highlighter.invalidate_from(start.line)

    def insert_char(self, ch: str, count: int = 1):
        self.insert_text(ch * count)

    # modes

    def start_prompt(
        self,
        prompt: str,
        action: modes.PromptAction,
        default: typing.Optional[str] = None,
        context: typing.Optional[str] = None,
    ):
        self.prompt = modes.PromptState(prompt=prompt, action=action, default=default, context=context)
        self.display.set_message(self.prompt.display_text())
        logger.debug("Prompt %s started", action.name)

    def start_search(self, direction: Direction):
        self.search = modes.SearchState(direction=direction, origin=self.window.cursor)
        self.display.set_message(self.search.prompt_text())

    def start_query_replace(self, search: str, replacement: str) -> CommandStatus:
        self.query_replace = modes.QueryReplaceState(search=search, replacement=replacement)
        return modes.query_replace_next(self, self.query_replace)

    def capture_next_key(self, message: str, callback: KeyCapture):
        "Hand the next key to callback instead of dispatching it."
        self.capture = callback
        self.display.set_message(message)

    # dispatch

    def alert(self):
        self.display.alert()

    def quit(self):
        logger.debug("Editor stopping")
        self.running = False

    def _report(self, status: CommandStatus):
        match status:
            case CommandStatus.FAILURE:
                self.alert()
            case CommandStatus.ABORT:
                self.display.set_message("Quit")
                self.alert()

    def _guarded(self, fn: collections.abc.Callable[..., CommandStatus], *args) -> CommandStatus:
        try:
            return fn(*args)
        except QuernError as e:
            self.display.set_message(str(e))
            return CommandStatus.FAILURE
        except Exception:
            logger.exception("Command %r failed", fn)
            self.display.set_message("Command failed; see log")
            return CommandStatus.FAILURE

    def run_command(self, command: CommandFn, has_arg: bool, n: int) -> CommandStatus:
        return self._guarded(command, self, has_arg, n)

    def execute_named_command(self, name: str) -> CommandStatus:
        command = self.bindings.lookup_by_name(name)
        if command is None:
            self.display.set_message(f"No command named {name}")
            return CommandStatus.FAILURE
        return self.run_command(command, False, 1)

    def play_macro(self, keys: collections.abc.Sequence[Key], times: int = 1) -> bool:
        return self.macros.play(keys, self.handle_key, lambda: self.running, times=times)

    def handle_key(self, key: Key) -> CommandStatus:
        capturing = self.macros.capturing
        if self.capture is not None:
            callback, self.capture = self.capture, None
            status = CommandStatus.ABORT if key == ABORT_KEY else self._guarded(callback, key)
        elif self.prompt is not None:
            status = self._guarded(modes.handle_prompt_key, self, key)
        elif self.search is not None:
            status = self._guarded(modes.handle_search_key, self, key)
        elif self.query_replace is not None:
            status = self._guarded(modes.handle_query_replace_key, self, key)
        else:
            status = self._handle_normal(key, capturing)
            self.check_auto_save()
            return status
        self._report(status)
        if capturing and self.macros.capturing:
            self.macros.record([key])
        self.check_auto_save()
        return status

    def _self_insert(self, ch: str, count: int) -> CommandStatus:
        self.insert_char(ch, count)
        return CommandStatus.SUCCESS

    def _insert_literal(self, key: Key) -> CommandStatus:
        if key.is_special:
            return CommandStatus.FAILURE
        code = key.code
        if key.has(KeyFlag.CONTROL) and 0x40 <= code < 0x80:
            code &= 0x1F
        ch = chr(code)
        self.insert_text("\n" if ch in ("\r", "\n") else ch)
        return CommandStatus.SUCCESS

    def _handle_normal(self, key: Key, capturing: bool) -> CommandStatus:
        if self.quote_pending:
            self.quote_pending = False
            self.kill_ring.begin_command()
            self.display.clear_message()
            self.current_buffer.add_undo_boundary()
            status = self._guarded(self._insert_literal, key)
            self._report(status)
            if status is CommandStatus.SUCCESS and capturing and self.macros.capturing:
                self.macros.record([key])
            return status

        if self.prefix.feed(key):
            self.display.set_message(self.prefix.status_text())
            return CommandStatus.SUCCESS

        self.kill_ring.begin_command()
        self.current_buffer.add_undo_boundary()
        self.display.clear_message()
        has_arg, n, prefix_keys = self.prefix.take()

        binding = self.bindings.lookup(key)
        if binding is not None:
            status = self.run_command(binding.command, has_arg, n)
            self._report(status)
        elif key.is_self_insert:
            status = self._guarded(self._self_insert, key.character, max(1, n) if has_arg else 1)
            self._report(status)
        else:
            self.display.set_message("Key not bound")
            self.alert()
            status = CommandStatus.FAILURE

        if status is CommandStatus.SUCCESS and capturing and self.macros.capturing:
            self.macros.record([*prefix_keys, key])
        return status

    def check_auto_save(self):
        if not self.auto_save_enabled or self.macros.playing:
            return
        now = self.clock()
        if now - self.last_auto_save < self.settings.auto_save_interval.total_seconds():
            return
        self.last_auto_save = now
        for buffer in self.modified_buffers():
            try:
                buffer.write_auto_save()
            except OSError as e:
                logger.warning("Auto-save of %s failed: %s", buffer.name, e)
                self.display.set_message(f"Auto-save failed: {e}")
