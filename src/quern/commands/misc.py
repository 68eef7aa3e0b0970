from __future__ import annotations

import logging
import subprocess
import typing

from ..commontypes import CommandStatus
from ..editor.keys import Key
from ..editor.modes import PromptAction, PromptState, prompt_action

if typing.TYPE_CHECKING:
    from ..editor.state import EditorState

logger = logging.getLogger(__name__)

SHELL_OUTPUT_BUFFER = "*Shell Command Output*"
BINDINGS_BUFFER = "*Bindings*"


def keyboard_quit(editor: EditorState, f: bool, n: int) -> CommandStatus:
    editor.quote_pending = False
    return CommandStatus.ABORT


def redraw_display(editor: EditorState, f: bool, n: int) -> CommandStatus:
    editor.display.force_redraw()
    return CommandStatus.SUCCESS


def toggle_line_numbers(editor: EditorState, f: bool, n: int) -> CommandStatus:
    display = editor.display
    display.show_line_numbers = not display.show_line_numbers
    display.force_redraw()
    display.set_message(f"Line numbers {'enabled' if display.show_line_numbers else 'disabled'}")
    return CommandStatus.SUCCESS


def what_line(editor: EditorState, f: bool, n: int) -> CommandStatus:
    editor.display.set_message(f"Line {editor.window.cursor_line + 1} of {editor.current_buffer.line_count}")
    return CommandStatus.SUCCESS


def what_cursor_position(editor: EditorState, f: bool, n: int) -> CommandStatus:
    window = editor.window
    buffer = editor.current_buffer
    line = buffer.line(window.cursor_line)
    where = f"Line {window.cursor_line + 1} of {buffer.line_count} Col {window.cursor_col}"
    if window.cursor_col < len(line):
        ch = line[window.cursor_col]
        editor.display.set_message(f"{where} '{ch}' (0x{ord(ch):04X})")
    else:
        editor.display.set_message(f"{where} EOL")
    return CommandStatus.SUCCESS


def count_words(editor: EditorState, f: bool, n: int) -> CommandStatus:
    "Count lines, words and characters in the region, or the whole buffer when no mark is set."
    window = editor.window
    buffer = editor.current_buffer
    if window.mark is None:
        what, text, lines = "Buffer", buffer.text, buffer.line_count
    else:
        start, end = sorted((buffer.clamp(window.mark), window.cursor))
        what, text, lines = "Region", buffer.text_between(start, end), end.line - start.line + 1
    editor.display.set_message(f"{what}: {lines} lines, {len(text.split())} words, {len(text)} characters")
    return CommandStatus.SUCCESS


def execute_extended_command(editor: EditorState, f: bool, n: int) -> CommandStatus:
    editor.start_prompt("M-x", PromptAction.EXTENDED_COMMAND)
    return CommandStatus.SUCCESS


def describe_key(editor: EditorState, f: bool, n: int) -> CommandStatus:
    def describe(key: Key) -> CommandStatus:
        name = key.display_name()
        binding = editor.bindings.lookup(key)
        if binding is not None:
            editor.display.set_message(f"{name} runs the command {binding.name}")
        elif key.is_self_insert:
            editor.display.set_message(f"{name} runs the command self-insert-command")
        else:
            editor.display.set_message(f"{name} is not bound")
        return CommandStatus.SUCCESS

    editor.capture_next_key("Describe key: ", describe)
    return CommandStatus.SUCCESS


def describe_bindings(editor: EditorState, f: bool, n: int) -> CommandStatus:
    bindings = editor.bindings.all_bindings()
    width = max((len(b.key.display_name()) for b in bindings), default=0) + 2
    lines = ["Key".ljust(width) + "Binding", "---".ljust(width) + "-------"]
    lines.extend(b.key.display_name().ljust(width) + b.name for b in bindings)
    editor.show_output(BINDINGS_BUFFER, "\n".join(lines))
    return CommandStatus.SUCCESS


def shell_command(editor: EditorState, f: bool, n: int) -> CommandStatus:
    editor.start_prompt("Shell command", PromptAction.SHELL_COMMAND)
    return CommandStatus.SUCCESS


def save_buffers_kill_editor(editor: EditorState, f: bool, n: int) -> CommandStatus:
    "Exit. C-u exits without asking about modified buffers."
    if f:
        editor.quit()
        return CommandStatus.SUCCESS
    modified = editor.modified_buffers()
    if editor.settings.warn_unsaved and modified:
        if len(modified) == 1:
            question = f"Buffer {modified[0].name} modified; really quit? (y/n)"
        else:
            question = f"{len(modified)} buffers modified; really quit? (y/n)"
        editor.start_prompt(question, PromptAction.CONFIRM_QUIT)
        return CommandStatus.SUCCESS
    editor.quit()
    return CommandStatus.SUCCESS


@prompt_action(PromptAction.CONFIRM_QUIT)
def resolve_confirm_quit(editor: EditorState, text: str, prompt: PromptState) -> CommandStatus:
    if text.strip().lower() in ("y", "yes"):
        editor.quit()
    return CommandStatus.SUCCESS


@prompt_action(PromptAction.EXTENDED_COMMAND)
def resolve_extended_command(editor: EditorState, text: str, prompt: PromptState) -> CommandStatus:
    if not text:
        return CommandStatus.SUCCESS
    return editor.execute_named_command(text.strip())


def run_shell_command(command: str) -> str:
    try:
        result = subprocess.run(["sh", "-c", command], capture_output=True, text=True, errors="replace")
    except OSError as e:
        return f"Error executing command: {e}"
    output = result.stdout
    if result.stderr:
        output = output + "\n" + result.stderr if output else result.stderr
    return output or "(No output)"


@prompt_action(PromptAction.SHELL_COMMAND)
def resolve_shell_command(editor: EditorState, text: str, prompt: PromptState) -> CommandStatus:
    if not text:
        return CommandStatus.SUCCESS
    logger.debug("Running shell command %r", text)
    editor.show_output(SHELL_OUTPUT_BUFFER, run_shell_command(text).rstrip("\n"))
    editor.display.set_message(f"Shell command: {text}")
    return CommandStatus.SUCCESS
