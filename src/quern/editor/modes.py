# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
"""Input modes that take the keyboard away from ordinary command dispatch."""
from __future__ import annotations

import collections.abc
import dataclasses
import enum
import logging
import typing

from ..commontypes import CommandStatus, Direction, Position
from ..util import common_prefix
from .keys import ABORT_KEY, BACKSPACE_KEY, ENTER_KEY, ESCAPE_KEY, TAB_KEY, Key

if typing.TYPE_CHECKING:
    from .state import EditorState

logger = logging.getLogger(__name__)

ALT_BACKSPACE_KEY = Key.ctrl("h")


class PromptAction(enum.Enum):
    FIND_FILE = enum.auto()
    INSERT_FILE = enum.auto()
    WRITE_FILE = enum.auto()
    SWITCH_BUFFER = enum.auto()
    KILL_BUFFER = enum.auto()
    CONFIRM_KILL_BUFFER = enum.auto()
    GOTO_LINE = enum.auto()
    QUERY_REPLACE_SEARCH = enum.auto()
    QUERY_REPLACE_REPLACE = enum.auto()
    REPLACE_STRING_SEARCH = enum.auto()
    REPLACE_STRING_REPLACE = enum.auto()
    SHELL_COMMAND = enum.auto()
    EXTENDED_COMMAND = enum.auto()
    CONFIRM_QUIT = enum.auto()


PromptHandler = collections.abc.Callable[["EditorState", str, "PromptState"], CommandStatus]
PROMPT_ACTIONS: dict[PromptAction, PromptHandler] = {}


def prompt_action(action: PromptAction):
    def register(fn: PromptHandler):
        PROMPT_ACTIONS[action] = fn
        return fn

    return register


@dataclasses.dataclass
class PromptState:
    prompt: str
    action: PromptAction
    default: typing.Optional[str] = None
    input: str = ""
    context: typing.Optional[str] = None

    def display_text(self):
        if self.default is not None and not self.input:
            return f"{self.prompt} (default {self.default}): "
        return f"{self.prompt}: {self.input}"

    @property
    def result(self):
        if not self.input and self.default is not None:
            return self.default
        return self.input


def completion_candidates(editor: EditorState, prompt: PromptState) -> list[str]:
    match prompt.action:
        case PromptAction.EXTENDED_COMMAND:
            return editor.bindings.complete(prompt.input)
        case PromptAction.SWITCH_BUFFER | PromptAction.KILL_BUFFER:
            return sorted(name for name in editor.buffer_names() if name.startswith(prompt.input))
        case _:
            return []


def handle_prompt_key(editor: EditorState, key: Key) -> CommandStatus:
    prompt = editor.prompt
    assert prompt is not None
    if key == ABORT_KEY:
        editor.prompt = None
        logger.debug("Prompt %s cancelled", prompt.action.name)
        return CommandStatus.ABORT
    if key == ENTER_KEY:
        editor.prompt = None
        editor.display.clear_message()
        logger.debug("Resolving prompt %s", prompt.action.name)
        return PROMPT_ACTIONS[prompt.action](editor, prompt.result, prompt)
    if key == BACKSPACE_KEY or key == ALT_BACKSPACE_KEY:
        prompt.input = prompt.input[:-1]
    elif key == TAB_KEY:
        candidates = completion_candidates(editor, prompt)
        if not candidates:
            editor.display.set_message(f"{prompt.display_text()} [No match]")
            return CommandStatus.FAILURE
        prompt.input = common_prefix(*candidates)
    elif key.is_self_insert:
        prompt.input += key.character
    else:
        return CommandStatus.FAILURE
    editor.display.set_message(prompt.display_text())
    return CommandStatus.SUCCESS


@dataclasses.dataclass
class SearchState:
    direction: Direction
    origin: Position
    pattern: str = ""
    last_match: typing.Optional[Position] = None

    @property
    def label(self):
        return "I-search" if self.direction is Direction.FORWARD else "I-search backward"

    def prompt_text(self):
        return f"{self.label}: {self.pattern}"


def _search_step(editor: EditorState, search: SearchState, start: Position, inclusive: bool) -> CommandStatus:
    found = editor.current_buffer.find(search.pattern, start, search.direction, inclusive=inclusive)
    if found is None:
        editor.display.set_message(f"Failing {search.prompt_text()}")
        return CommandStatus.FAILURE
    match_pos, wrapped = found
    search.last_match = match_pos
    editor.window.move_to(match_pos)
    editor.window.ensure_cursor_visible()
    if wrapped:
        editor.display.set_message(f"Wrapped: {search.prompt_text()}")
    else:
        editor.display.set_message(search.prompt_text())
    return CommandStatus.SUCCESS


def handle_search_key(editor: EditorState, key: Key) -> CommandStatus:
    search = editor.search
    assert search is not None
    if key == ABORT_KEY:
        editor.window.move_to(search.origin)
        editor.search = None
        return CommandStatus.ABORT
    if key == ENTER_KEY or key == ESCAPE_KEY:
        editor.search = None
        if search.pattern:
            editor.last_search = search.pattern
        editor.display.clear_message()
        return CommandStatus.SUCCESS
    if key == Key.ctrl("s") or key == Key.ctrl("r"):
        search.direction = Direction.FORWARD if key == Key.ctrl("s") else Direction.BACKWARD
        if not search.pattern:
            if not editor.last_search:
                editor.display.set_message(search.prompt_text())
                return CommandStatus.SUCCESS
            search.pattern = editor.last_search
        return _search_step(editor, search, editor.window.cursor, inclusive=False)
    if key == BACKSPACE_KEY or key == ALT_BACKSPACE_KEY:
        search.pattern = search.pattern[:-1]
        editor.window.move_to(search.origin)
        search.last_match = None
        if not search.pattern:
            editor.display.set_message(search.prompt_text())
            return CommandStatus.SUCCESS
        return _search_step(editor, search, search.origin, inclusive=True)
    if key.is_self_insert:
        search.pattern += key.character
        return _search_step(editor, search, search.origin, inclusive=True)
    return CommandStatus.FAILURE


QUERY_REPLACE_HELP = "y:replace n:skip !:all q:quit .:replace+quit"


@dataclasses.dataclass
class QueryReplaceState:
    search: str
    replacement: str
    count: int = 0
    replace_all: bool = False

    def prompt_text(self):
        return f"Query replacing {self.search} with {self.replacement}: (y/n/!/q/?)"


def replace_at_cursor(editor: EditorState, search: str, replacement: str):
    window = editor.window
    start = window.cursor
    buffer = editor.current_buffer
    buffer.delete_range(start, Position(line=start.line, col=start.col + len(search)))
    window.move_to(buffer.insert_text(start, replacement))
    editor.highlighter.invalidate_from(start.line)


def find_forward(editor: EditorState, pattern: str) -> typing.Optional[Position]:
    "Next occurrence at or after the cursor, without wrapping."
    buffer = editor.current_buffer
    cursor = editor.window.cursor
    for index in range(cursor.line, buffer.line_count):
        col = buffer.line(index).find(pattern, cursor.col if index == cursor.line else 0)
        if col >= 0:
            return Position(line=index, col=col)
    return None


def finish_query_replace(editor: EditorState, qr: QueryReplaceState) -> CommandStatus:
    editor.query_replace = None
    editor.display.set_message(f"Replaced {qr.count} occurrences")
    logger.debug("Query replace of %r finished after %d replacements", qr.search, qr.count)
    return CommandStatus.SUCCESS


def query_replace_next(editor: EditorState, qr: QueryReplaceState) -> CommandStatus:
    while True:
        match_pos = find_forward(editor, qr.search)
        if match_pos is None:
            return finish_query_replace(editor, qr)
        editor.window.move_to(match_pos)
        editor.window.ensure_cursor_visible()
        if not qr.replace_all:
            editor.display.set_message(qr.prompt_text())
            return CommandStatus.SUCCESS
        replace_at_cursor(editor, qr.search, qr.replacement)
        qr.count += 1


def handle_query_replace_key(editor: EditorState, key: Key) -> CommandStatus:
    qr = editor.query_replace
    assert qr is not None
    if key == ABORT_KEY:
        editor.query_replace = None
        return CommandStatus.ABORT
    if key == ENTER_KEY:
        return finish_query_replace(editor, qr)
    match key.character if key.modifiers == 0 else None:
        case "y" | " ":
            replace_at_cursor(editor, qr.search, qr.replacement)
            qr.count += 1
            return query_replace_next(editor, qr)
        case "n":
            cursor = editor.window.cursor
            editor.window.set_cursor(cursor.line, cursor.col + len(qr.search))
            return query_replace_next(editor, qr)
        case "!":
            qr.replace_all = True
            replace_at_cursor(editor, qr.search, qr.replacement)
            qr.count += 1
            return query_replace_next(editor, qr)
        case "q":
            return finish_query_replace(editor, qr)
        case ".":
            replace_at_cursor(editor, qr.search, qr.replacement)
            qr.count += 1
            return finish_query_replace(editor, qr)
        case "?":
            editor.display.set_message(QUERY_REPLACE_HELP)
            return CommandStatus.SUCCESS
        case _:
            return CommandStatus.FAILURE
