from __future__ import annotations

import typing

from ..commontypes import CommandStatus, Position
from ..editor.modes import PromptAction, PromptState, prompt_action

if typing.TYPE_CHECKING:
    from ..editor.state import EditorState


def is_word_char(ch: str) -> bool:
    return ch.isalnum() or ch == "_"


def _move(editor: EditorState, pos: Position, keep_goal: bool = False):
    window = editor.window
    window.move_to(pos)
    if not keep_goal:
        window.goal_col = None
    window.ensure_cursor_visible()


def step_forward(editor: EditorState, pos: Position) -> typing.Optional[Position]:
    buffer = editor.current_buffer
    if pos.col < len(buffer.line(pos.line)):
        return Position(line=pos.line, col=pos.col + 1)
    if pos.line + 1 < buffer.line_count:
        return Position(line=pos.line + 1, col=0)
    return None


def step_backward(editor: EditorState, pos: Position) -> typing.Optional[Position]:
    buffer = editor.current_buffer
    if pos.col > 0:
        return Position(line=pos.line, col=pos.col - 1)
    if pos.line > 0:
        return Position(line=pos.line - 1, col=len(buffer.line(pos.line - 1)))
    return None


def char_at(editor: EditorState, pos: Position) -> str:
    line = editor.current_buffer.line(pos.line)
    return line[pos.col] if pos.col < len(line) else "\n"


def forward_char(editor: EditorState, f: bool, n: int) -> CommandStatus:
    if n < 0:
        return backward_char(editor, f, -n)
    pos = editor.window.cursor
    for _ in range(n):
        nxt = step_forward(editor, pos)
        if nxt is None:
            _move(editor, pos)
            return CommandStatus.FAILURE
        pos = nxt
    _move(editor, pos)
    return CommandStatus.SUCCESS


def backward_char(editor: EditorState, f: bool, n: int) -> CommandStatus:
    if n < 0:
        return forward_char(editor, f, -n)
    pos = editor.window.cursor
    for _ in range(n):
        prev = step_backward(editor, pos)
        if prev is None:
            _move(editor, pos)
            return CommandStatus.FAILURE
        pos = prev
    _move(editor, pos)
    return CommandStatus.SUCCESS


def _vertical(editor: EditorState, delta: int) -> CommandStatus:
    window = editor.window
    buffer = editor.current_buffer
    if window.goal_col is None:
        window.goal_col = window.cursor_col
    target = window.cursor_line + delta
    status = CommandStatus.SUCCESS
    if target < 0 or target >= buffer.line_count:
        status = CommandStatus.FAILURE
        target = min(max(target, 0), buffer.line_count - 1)
    col = min(window.goal_col, len(buffer.line(target)))
    _move(editor, Position(line=target, col=col), keep_goal=True)
    return status


def next_line(editor: EditorState, f: bool, n: int) -> CommandStatus:
    return _vertical(editor, n)


def previous_line(editor: EditorState, f: bool, n: int) -> CommandStatus:
    return _vertical(editor, -n)


def beginning_of_line(editor: EditorState, f: bool, n: int) -> CommandStatus:
    _move(editor, Position(line=editor.window.cursor_line, col=0))
    return CommandStatus.SUCCESS


def end_of_line(editor: EditorState, f: bool, n: int) -> CommandStatus:
    line = editor.window.cursor_line
    _move(editor, Position(line=line, col=len(editor.current_buffer.line(line))))
    return CommandStatus.SUCCESS


def back_to_indentation(editor: EditorState, f: bool, n: int) -> CommandStatus:
    line = editor.window.cursor_line
    text = editor.current_buffer.line(line)
    _move(editor, Position(line=line, col=len(text) - len(text.lstrip(" \t"))))
    return CommandStatus.SUCCESS


def beginning_of_buffer(editor: EditorState, f: bool, n: int) -> CommandStatus:
    editor.window.set_mark()
    _move(editor, Position.origin())
    return CommandStatus.SUCCESS


def end_of_buffer(editor: EditorState, f: bool, n: int) -> CommandStatus:
    editor.window.set_mark()
    _move(editor, editor.current_buffer.end)
    return CommandStatus.SUCCESS


def word_end(editor: EditorState, pos: Position) -> typing.Optional[Position]:
    "Skip non-word characters, then word characters. None when already at the end of the buffer."
    if step_forward(editor, pos) is None:
        return None
    while not is_word_char(char_at(editor, pos)):
        nxt = step_forward(editor, pos)
        if nxt is None:
            return pos
        pos = nxt
    while is_word_char(char_at(editor, pos)):
        nxt = step_forward(editor, pos)
        if nxt is None:
            return pos
        pos = nxt
    return pos


def word_start(editor: EditorState, pos: Position) -> typing.Optional[Position]:
    if step_backward(editor, pos) is None:
        return None
    while True:
        prev = step_backward(editor, pos)
        if prev is None or is_word_char(char_at(editor, prev)):
            break
        pos = prev
    while True:
        prev = step_backward(editor, pos)
        if prev is None or not is_word_char(char_at(editor, prev)):
            break
        pos = prev
    return pos


def forward_word(editor: EditorState, f: bool, n: int) -> CommandStatus:
    if n < 0:
        return backward_word(editor, f, -n)
    pos = editor.window.cursor
    for _ in range(n):
        nxt = word_end(editor, pos)
        if nxt is None:
            _move(editor, pos)
            return CommandStatus.FAILURE
        pos = nxt
    _move(editor, pos)
    return CommandStatus.SUCCESS


def backward_word(editor: EditorState, f: bool, n: int) -> CommandStatus:
    if n < 0:
        return forward_word(editor, f, -n)
    pos = editor.window.cursor
    for _ in range(n):
        prev = word_start(editor, pos)
        if prev is None:
            _move(editor, pos)
            return CommandStatus.FAILURE
        pos = prev
    _move(editor, pos)
    return CommandStatus.SUCCESS


def scroll_down(editor: EditorState, f: bool, n: int) -> CommandStatus:
    page = max(1, editor.window.height - 2)
    return _vertical(editor, page * (n if f else 1))


def scroll_up(editor: EditorState, f: bool, n: int) -> CommandStatus:
    page = max(1, editor.window.height - 2)
    return _vertical(editor, -page * (n if f else 1))


def goto_line(editor: EditorState, f: bool, n: int) -> CommandStatus:
    if f:
        return goto_line_number(editor, n)
    editor.start_prompt("Goto line", PromptAction.GOTO_LINE)
    return CommandStatus.SUCCESS


def goto_line_number(editor: EditorState, number: int) -> CommandStatus:
    target = min(max(number - 1, 0), editor.current_buffer.line_count - 1)
    _move(editor, Position(line=target, col=0))
    return CommandStatus.SUCCESS


@prompt_action(PromptAction.GOTO_LINE)
def resolve_goto_line(editor: EditorState, text: str, prompt: PromptState) -> CommandStatus:
    try:
        number = int(text)
    except ValueError:
        editor.display.set_message("Invalid line number")
        return CommandStatus.FAILURE
    return goto_line_number(editor, number)
