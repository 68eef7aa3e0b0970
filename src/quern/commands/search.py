from __future__ import annotations

import typing

from ..commontypes import CommandStatus, Direction
from ..editor import modes
from ..editor.modes import PromptAction, PromptState, prompt_action

if typing.TYPE_CHECKING:
    from ..editor.state import EditorState


def isearch_forward(editor: EditorState, f: bool, n: int) -> CommandStatus:
    editor.start_search(Direction.FORWARD)
    return CommandStatus.SUCCESS


def isearch_backward(editor: EditorState, f: bool, n: int) -> CommandStatus:
    editor.start_search(Direction.BACKWARD)
    return CommandStatus.SUCCESS


def _hunt(editor: EditorState, direction: Direction) -> CommandStatus:
    pattern = editor.last_search
    if not pattern:
        editor.display.set_message("No previous search")
        return CommandStatus.FAILURE
    found = editor.current_buffer.find(pattern, editor.window.cursor, direction)
    if found is None:
        editor.display.set_message(f"Not found: {pattern}")
        return CommandStatus.FAILURE
    match_pos, wrapped = found
    editor.window.move_to(match_pos)
    editor.window.ensure_cursor_visible()
    if wrapped:
        editor.display.set_message(f"Wrapped: {pattern}")
    return CommandStatus.SUCCESS


def hunt_forward(editor: EditorState, f: bool, n: int) -> CommandStatus:
    return _hunt(editor, Direction.FORWARD)


def hunt_backward(editor: EditorState, f: bool, n: int) -> CommandStatus:
    return _hunt(editor, Direction.BACKWARD)


def query_replace(editor: EditorState, f: bool, n: int) -> CommandStatus:
    editor.start_prompt("Query replace", PromptAction.QUERY_REPLACE_SEARCH)
    return CommandStatus.SUCCESS


def replace_string(editor: EditorState, f: bool, n: int) -> CommandStatus:
    editor.start_prompt("Replace string", PromptAction.REPLACE_STRING_SEARCH)
    return CommandStatus.SUCCESS


@prompt_action(PromptAction.QUERY_REPLACE_SEARCH)
def resolve_query_replace_search(editor: EditorState, text: str, prompt: PromptState) -> CommandStatus:
    if not text:
        editor.display.set_message("No search string")
        return CommandStatus.FAILURE
    editor.start_prompt(f"Query replace {text} with", PromptAction.QUERY_REPLACE_REPLACE, context=text)
    return CommandStatus.SUCCESS


@prompt_action(PromptAction.QUERY_REPLACE_REPLACE)
def resolve_query_replace_replace(editor: EditorState, text: str, prompt: PromptState) -> CommandStatus:
    return editor.start_query_replace(prompt.context, text)


@prompt_action(PromptAction.REPLACE_STRING_SEARCH)
def resolve_replace_string_search(editor: EditorState, text: str, prompt: PromptState) -> CommandStatus:
    if not text:
        editor.display.set_message("No search string")
        return CommandStatus.FAILURE
    editor.start_prompt(f"Replace {text} with", PromptAction.REPLACE_STRING_REPLACE, context=text)
    return CommandStatus.SUCCESS


@prompt_action(PromptAction.REPLACE_STRING_REPLACE)
def resolve_replace_string_replace(editor: EditorState, text: str, prompt: PromptState) -> CommandStatus:
    search = prompt.context
    count = 0
    match_pos = modes.find_forward(editor, search)
    while match_pos is not None:
        editor.window.move_to(match_pos)
        modes.replace_at_cursor(editor, search, text)
        count += 1
        match_pos = modes.find_forward(editor, search)
    editor.window.ensure_cursor_visible()
    editor.display.set_message(f"Replaced {count} occurrences")
    return CommandStatus.SUCCESS
