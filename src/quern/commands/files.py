from __future__ import annotations

import logging
import pathlib
import typing

from ..commontypes import CommandStatus
from ..editor.buffer import Buffer
from ..editor.modes import PromptAction, PromptState, prompt_action

if typing.TYPE_CHECKING:
    from ..editor.state import EditorState

logger = logging.getLogger(__name__)

BUFFER_LIST_BUFFER = "*Buffer List*"


def find_file(editor: EditorState, f: bool, n: int) -> CommandStatus:
    editor.start_prompt("Find file", PromptAction.FIND_FILE)
    return CommandStatus.SUCCESS


def insert_file(editor: EditorState, f: bool, n: int) -> CommandStatus:
    editor.start_prompt("Insert file", PromptAction.INSERT_FILE)
    return CommandStatus.SUCCESS


def write_file(editor: EditorState, f: bool, n: int) -> CommandStatus:
    path = editor.current_buffer.path
    editor.start_prompt("Write file", PromptAction.WRITE_FILE, default=None if path is None else str(path))
    return CommandStatus.SUCCESS


def save_buffer(editor: EditorState, f: bool, n: int) -> CommandStatus:
    buffer = editor.current_buffer
    if buffer.path is None:
        editor.display.set_message("No file name")
        return CommandStatus.FAILURE
    if not buffer.modified:
        editor.display.set_message("(No changes need to be saved)")
        return CommandStatus.SUCCESS
    try:
        buffer.save()
    except OSError as e:
        editor.display.set_message(f"Error writing file: {e}")
        return CommandStatus.FAILURE
    editor.display.set_message(f"Wrote {buffer.line_count} lines to {buffer.path}")
    return CommandStatus.SUCCESS


def switch_to_buffer(editor: EditorState, f: bool, n: int) -> CommandStatus:
    current = editor.window.buffer_index
    others = [b.name for i, b in enumerate(editor.buffers) if i != current]
    editor.start_prompt("Switch to buffer", PromptAction.SWITCH_BUFFER, default=others[0] if others else None)
    return CommandStatus.SUCCESS


def kill_buffer(editor: EditorState, f: bool, n: int) -> CommandStatus:
    editor.start_prompt("Kill buffer", PromptAction.KILL_BUFFER, default=editor.current_buffer.name)
    return CommandStatus.SUCCESS


def _cycle_buffer(editor: EditorState, step: int) -> CommandStatus:
    count = len(editor.buffers)
    if count <= 1:
        editor.display.set_message("Only one buffer")
        return CommandStatus.SUCCESS
    index = (editor.window.buffer_index + step) % count
    editor.switch_to_buffer(index)
    editor.display.set_message(f"Buffer: {editor.buffers[index].name}")
    return CommandStatus.SUCCESS


def next_buffer(editor: EditorState, f: bool, n: int) -> CommandStatus:
    return _cycle_buffer(editor, max(1, n))


def previous_buffer(editor: EditorState, f: bool, n: int) -> CommandStatus:
    return _cycle_buffer(editor, -max(1, n))


def list_buffers(editor: EditorState, f: bool, n: int) -> CommandStatus:
    current = editor.window.buffer_index
    lines = [" CRM Buffer           Size  File", " --- ------           ----  ----"]
    for index, buffer in enumerate(editor.buffers):
        marks = ("." if index == current else " ") + ("%" if buffer.read_only else " ") + ("*" if buffer.modified else " ")
        path = "" if buffer.path is None else str(buffer.path)
        lines.append(f" {marks} {buffer.name[:16]:<16} {buffer.line_count:>5}  {path}".rstrip())
    editor.show_output(BUFFER_LIST_BUFFER, "\n".join(lines))
    return CommandStatus.SUCCESS


def toggle_read_only(editor: EditorState, f: bool, n: int) -> CommandStatus:
    buffer = editor.current_buffer
    buffer.read_only = not buffer.read_only
    editor.display.set_message("Buffer is now read-only" if buffer.read_only else "Buffer is now writable")
    return CommandStatus.SUCCESS


def revert_buffer(editor: EditorState, f: bool, n: int) -> CommandStatus:
    buffer = editor.current_buffer
    if buffer.path is None:
        editor.display.set_message("Buffer has no file")
        return CommandStatus.FAILURE
    try:
        buffer.revert()
    except (OSError, UnicodeDecodeError) as e:
        editor.display.set_message(f"Error reading file: {e}")
        return CommandStatus.FAILURE
    window = editor.window
    window.set_cursor(0, 0)
    window.top_line = 0
    window.mark = None
    for other in editor.windows:
        other.move_to(editor.buffers[other.buffer_index].clamp(other.cursor))
    editor.highlighter.invalidate_from(0)
    editor.display.force_redraw()
    editor.display.set_message(f"Reverted {buffer.path}")
    logger.debug("Reverted %s", buffer.path)
    return CommandStatus.SUCCESS


def not_modified(editor: EditorState, f: bool, n: int) -> CommandStatus:
    editor.current_buffer.modified = False
    editor.display.set_message("Modification flag cleared")
    return CommandStatus.SUCCESS


def auto_save_mode(editor: EditorState, f: bool, n: int) -> CommandStatus:
    editor.auto_save_enabled = n > 0 if f else not editor.auto_save_enabled
    editor.last_auto_save = editor.clock()
    editor.display.set_message(f"Auto-save {'enabled' if editor.auto_save_enabled else 'disabled'}")
    return CommandStatus.SUCCESS


@prompt_action(PromptAction.FIND_FILE)
def resolve_find_file(editor: EditorState, text: str, prompt: PromptState) -> CommandStatus:
    if not text:
        editor.display.set_message("No file name")
        return CommandStatus.FAILURE
    path = pathlib.Path(text).expanduser()
    if not path.exists():
        editor.add_buffer(Buffer(path.name, path=path))
        editor.display.set_message(f"(New file) {text}")
        return CommandStatus.SUCCESS
    try:
        editor.open_file(path)
    except (OSError, UnicodeDecodeError) as e:
        editor.display.set_message(f"Error reading file: {e}")
        return CommandStatus.FAILURE
    editor.display.set_message(f"Opened {text}")
    return CommandStatus.SUCCESS


@prompt_action(PromptAction.INSERT_FILE)
def resolve_insert_file(editor: EditorState, text: str, prompt: PromptState) -> CommandStatus:
    if not text:
        editor.display.set_message("No file name")
        return CommandStatus.FAILURE
    try:
        contents = pathlib.Path(text).expanduser().read_text()
    except (OSError, UnicodeDecodeError) as e:
        editor.display.set_message(f"Error reading file: {e}")
        return CommandStatus.FAILURE
    start = editor.window.cursor
    editor.current_buffer.insert_text(start, contents)
    editor.highlighter.invalidate_from(start.line)
    editor.display.force_redraw()
    return CommandStatus.SUCCESS


@prompt_action(PromptAction.WRITE_FILE)
def resolve_write_file(editor: EditorState, text: str, prompt: PromptState) -> CommandStatus:
    if not text:
        editor.display.set_message("No file name")
        return CommandStatus.FAILURE
    buffer = editor.current_buffer
    path = pathlib.Path(text).expanduser()
    try:
        buffer.save(path)
    except OSError as e:
        editor.display.set_message(f"Error writing file: {e}")
        return CommandStatus.FAILURE
    editor.display.set_message(f"Wrote {buffer.line_count} lines to {path}")
    return CommandStatus.SUCCESS


@prompt_action(PromptAction.SWITCH_BUFFER)
def resolve_switch_buffer(editor: EditorState, text: str, prompt: PromptState) -> CommandStatus:
    if not text:
        return CommandStatus.SUCCESS
    index = editor.find_buffer(text)
    if index is None:
        editor.display.set_message(f"No buffer named {text}")
        return CommandStatus.FAILURE
    editor.switch_to_buffer(index)
    return CommandStatus.SUCCESS


def _kill_buffer_at(editor: EditorState, index: int) -> CommandStatus:
    name = editor.buffers[index].name
    editor.remove_buffer(index)
    editor.display.set_message(f"Killed buffer {name}")
    logger.debug("Killed buffer %s", name)
    return CommandStatus.SUCCESS


@prompt_action(PromptAction.KILL_BUFFER)
def resolve_kill_buffer(editor: EditorState, text: str, prompt: PromptState) -> CommandStatus:
    if not text:
        return CommandStatus.SUCCESS
    index = editor.find_buffer(text)
    if index is None:
        editor.display.set_message(f"No buffer named {text}")
        return CommandStatus.FAILURE
    if len(editor.buffers) <= 1:
        editor.display.set_message("Can't kill the only buffer")
        return CommandStatus.FAILURE
    if editor.buffers[index].modified:
        editor.start_prompt(f"Buffer {text} modified; kill anyway? (yes or no)", PromptAction.CONFIRM_KILL_BUFFER, context=text)
        return CommandStatus.SUCCESS
    return _kill_buffer_at(editor, index)


@prompt_action(PromptAction.CONFIRM_KILL_BUFFER)
def resolve_confirm_kill_buffer(editor: EditorState, text: str, prompt: PromptState) -> CommandStatus:
    if text.strip().lower() not in ("y", "yes"):
        editor.display.set_message("Buffer not killed")
        return CommandStatus.SUCCESS
    index = editor.find_buffer(prompt.context)
    if index is None:
        editor.display.set_message(f"No buffer named {prompt.context}")
        return CommandStatus.FAILURE
    return _kill_buffer_at(editor, index)
