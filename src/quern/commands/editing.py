from __future__ import annotations

import re
import typing

from ..commontypes import CommandStatus, Position
from ..editor.keys import Key

if typing.TYPE_CHECKING:
    from ..editor.buffer import Buffer
    from ..editor.state import EditorState

WORD_RE = re.compile(r"\S+")


def delete_char(editor: EditorState, f: bool, n: int) -> CommandStatus:
    "Delete forward. With an argument the deleted text goes to the kill ring."
    if n < 0:
        return delete_backward_char(editor, f, -n)
    buffer = editor.current_buffer
    window = editor.window
    start_line = window.cursor_line
    status = CommandStatus.SUCCESS
    deleted = []
    for _ in range(max(1, n)):
        pos = window.cursor
        ch = buffer.delete_char(pos)
        if ch is None:
            if buffer.join_line(pos.line) is None:
                status = CommandStatus.FAILURE
                break
            ch = "\n"
        deleted.append(ch)
    if f and deleted:
        editor.kill_ring.start_kill()
        editor.kill_ring.kill_append("".join(deleted))
    editor.highlighter.invalidate_from(start_line)
    editor.display.force_redraw()
    return status


def delete_backward_char(editor: EditorState, f: bool, n: int) -> CommandStatus:
    if n < 0:
        return delete_char(editor, f, -n)
    buffer = editor.current_buffer
    window = editor.window
    status = CommandStatus.SUCCESS
    deleted = []
    for _ in range(max(1, n)):
        pos = window.cursor
        if pos.col > 0:
            ch = buffer.delete_char(Position(line=pos.line, col=pos.col - 1))
            window.set_cursor(pos.line, pos.col - 1)
        elif pos.line > 0:
            col = buffer.join_line(pos.line - 1)
            window.set_cursor(pos.line - 1, col)
            ch = "\n"
        else:
            status = CommandStatus.FAILURE
            break
        deleted.insert(0, ch)
    if f and deleted:
        editor.kill_ring.start_kill()
        editor.kill_ring.kill_prepend("".join(deleted))
    window.goal_col = None
    editor.highlighter.invalidate_from(window.cursor_line)
    editor.display.force_redraw()
    return status


def newline(editor: EditorState, f: bool, n: int) -> CommandStatus:
    if n < 0:
        return CommandStatus.FAILURE
    editor.insert_text("\n" * max(1, n))
    return CommandStatus.SUCCESS


def open_line(editor: EditorState, f: bool, n: int) -> CommandStatus:
    if n < 0:
        return CommandStatus.FAILURE
    pos = editor.window.cursor
    buffer = editor.current_buffer
    for _ in range(max(1, n)):
        buffer.insert_newline(pos)
    editor.highlighter.invalidate_from(pos.line)
    return CommandStatus.SUCCESS


def newline_and_indent(editor: EditorState, f: bool, n: int) -> CommandStatus:
    if n < 0:
        return CommandStatus.FAILURE
    line = editor.current_buffer.line(editor.window.cursor_line)
    indent = line[: len(line) - len(line.lstrip(" \t"))]
    for _ in range(max(1, n)):
        editor.insert_text("\n" + indent)
    return CommandStatus.SUCCESS


def tab_to_tab_stop(editor: EditorState, f: bool, n: int) -> CommandStatus:
    if n < 0:
        return CommandStatus.FAILURE
    width = editor.settings.tab_width
    for _ in range(max(1, n)):
        col = editor.window.cursor_col
        editor.insert_text(" " * (width - col % width))
    return CommandStatus.SUCCESS


def transpose_chars(editor: EditorState, f: bool, n: int) -> CommandStatus:
    window = editor.window
    buffer = editor.current_buffer
    line = buffer.line(window.cursor_line)
    col = window.cursor_col
    if len(line) < 2 or col == 0:
        return CommandStatus.FAILURE
    if col >= len(line):
        col = len(line) - 1
    swapped = line[: col - 1] + line[col] + line[col - 1] + line[col + 1 :]
    buffer.replace_line(window.cursor_line, swapped)
    window.set_cursor(window.cursor_line, col + 1)
    editor.highlighter.invalidate_from(window.cursor_line)
    return CommandStatus.SUCCESS


def transpose_words(editor: EditorState, f: bool, n: int) -> CommandStatus:
    "Swap the word before the cursor with the one after it, on the cursor's line."
    window = editor.window
    buffer = editor.current_buffer
    for _ in range(max(1, n)):
        index = window.cursor_line
        line = buffer.line(index)
        words = list(WORD_RE.finditer(line))
        first = max((i for i, m in enumerate(words) if m.start() < window.cursor_col), default=0)
        if first + 1 >= len(words):
            return CommandStatus.FAILURE
        left, right = words[first], words[first + 1]
        swapped = line[: left.start()] + right.group() + line[left.end() : right.start()] + left.group() + line[right.end() :]
        buffer.replace_line(index, swapped)
        window.set_cursor(index, right.end())
        editor.highlighter.invalidate_from(index)
    return CommandStatus.SUCCESS


def transpose_lines(editor: EditorState, f: bool, n: int) -> CommandStatus:
    window = editor.window
    buffer = editor.current_buffer
    for _ in range(max(1, n)):
        index = window.cursor_line
        if index == 0:
            return CommandStatus.FAILURE
        above, here = buffer.line(index - 1), buffer.line(index)
        buffer.replace_line(index - 1, here)
        buffer.replace_line(index, above)
        editor.highlighter.invalidate_from(index - 1)
        if index + 1 < buffer.line_count:
            window.set_cursor(index + 1, 0)
        else:
            window.set_cursor(index, min(window.cursor_col, len(above)))
    return CommandStatus.SUCCESS


def copy_line(editor: EditorState, f: bool, n: int) -> CommandStatus:
    buffer = editor.current_buffer
    first = editor.window.cursor_line
    last = min(first + max(1, n), buffer.line_count)
    editor.kill_ring.start_kill()
    editor.kill_ring.kill_append("".join(buffer.line(index) + "\n" for index in range(first, last)))
    editor.display.set_message(f"Copied {last - first} line(s)")
    return CommandStatus.SUCCESS


def duplicate_line(editor: EditorState, f: bool, n: int) -> CommandStatus:
    window = editor.window
    buffer = editor.current_buffer
    count = max(1, n)
    index = window.cursor_line
    line = buffer.line(index)
    buffer.insert_text(Position(line=index, col=len(line)), ("\n" + line) * count)
    window.set_cursor(index + 1, window.cursor_col)
    window.ensure_cursor_visible()
    editor.highlighter.invalidate_from(index)
    editor.display.set_message(f"Duplicated {count} time(s)")
    return CommandStatus.SUCCESS


def split_line(editor: EditorState, f: bool, n: int) -> CommandStatus:
    "Move the rest of the line down, indented to the cursor's column. The cursor stays put."
    window = editor.window
    pos = window.cursor
    line = editor.current_buffer.line(pos.line)
    width = len(line[: pos.col].expandtabs(editor.settings.tab_width))
    editor.current_buffer.insert_text(pos, "\n" + " " * width)
    editor.highlighter.invalidate_from(pos.line)
    return CommandStatus.SUCCESS


def delete_indentation(editor: EditorState, f: bool, n: int) -> CommandStatus:
    "Join this line to the previous one, leaving a single space where they meet."
    window = editor.window
    buffer = editor.current_buffer
    for _ in range(max(1, n)):
        index = window.cursor_line
        if index == 0:
            return CommandStatus.FAILURE
        join_at = Position(line=index - 1, col=len(buffer.line(index - 1)))
        line = buffer.line(index)
        rest = line.lstrip(" \t")
        buffer.delete_range(join_at, Position(line=index, col=len(line) - len(rest)))
        if rest and join_at.col > 0:
            buffer.insert_text(join_at, " ")
        window.move_to(join_at)
        editor.highlighter.invalidate_from(join_at.line)
    window.goal_col = None
    editor.display.force_redraw()
    return CommandStatus.SUCCESS


def _horizontal_space(line: str, col: int) -> tuple[int, int]:
    start = col
    while start > 0 and line[start - 1] in " \t":
        start -= 1
    end = col
    while end < len(line) and line[end] in " \t":
        end += 1
    return start, end


def _replace_horizontal_space(editor: EditorState, replacement: str) -> CommandStatus:
    window = editor.window
    index = window.cursor_line
    start, end = _horizontal_space(editor.current_buffer.line(index), window.cursor_col)
    if start == end:
        return CommandStatus.SUCCESS
    buffer = editor.current_buffer
    buffer.delete_range(Position(line=index, col=start), Position(line=index, col=end))
    window.move_to(buffer.insert_text(Position(line=index, col=start), replacement))
    window.goal_col = None
    editor.highlighter.invalidate_from(index)
    return CommandStatus.SUCCESS


def just_one_space(editor: EditorState, f: bool, n: int) -> CommandStatus:
    return _replace_horizontal_space(editor, " ")


def delete_horizontal_space(editor: EditorState, f: bool, n: int) -> CommandStatus:
    return _replace_horizontal_space(editor, "")


def _is_blank(buffer: Buffer, index: int) -> bool:
    return not buffer.line(index).strip()


def delete_blank_lines(editor: EditorState, f: bool, n: int) -> CommandStatus:
    """On a blank line, squeeze the surrounding blank lines down to one.
    On a non-blank line, delete the blank lines right after it.
    """
    window = editor.window
    buffer = editor.current_buffer
    first = window.cursor_line
    if _is_blank(buffer, first):
        while first > 0 and _is_blank(buffer, first - 1):
            first -= 1
    last = window.cursor_line
    while last + 1 < buffer.line_count and _is_blank(buffer, last + 1):
        last += 1
    if last > first:
        buffer.delete_range(Position(line=first, col=len(buffer.line(first))), Position(line=last, col=len(buffer.line(last))))
        editor.highlighter.invalidate_from(first)
        editor.display.force_redraw()
    if _is_blank(buffer, first):
        window.set_cursor(first, 0)
    window.ensure_cursor_visible()
    return CommandStatus.SUCCESS


def _trim_trailing(buffer: Buffer, index: int) -> bool:
    line = buffer.line(index)
    trimmed = line.rstrip()
    if trimmed == line:
        return False
    buffer.delete_range(Position(line=index, col=len(trimmed)), Position(line=index, col=len(line)))
    return True


def trim_line(editor: EditorState, f: bool, n: int) -> CommandStatus:
    "Remove trailing whitespace from this line, or from every line with an argument."
    buffer = editor.current_buffer
    window = editor.window
    if f:
        count = sum(1 for index in range(buffer.line_count) if _trim_trailing(buffer, index))
        if count:
            editor.display.set_message(f"Trimmed {count} lines")
        else:
            editor.display.set_message("No trailing whitespace found")
    elif _trim_trailing(buffer, window.cursor_line):
        editor.display.set_message("Trailing whitespace removed")
    else:
        editor.display.set_message("No trailing whitespace")
    window.move_to(buffer.clamp(window.cursor))
    editor.highlighter.invalidate_from(0 if f else window.cursor_line)
    return CommandStatus.SUCCESS


def undo(editor: EditorState, f: bool, n: int) -> CommandStatus:
    buffer = editor.current_buffer
    cursor = None
    for _ in range(max(1, n)):
        undone_to = buffer.undo()
        if undone_to is None:
            break
        cursor = undone_to
    if cursor is None:
        editor.display.set_message("Nothing to undo")
        return CommandStatus.FAILURE
    window = editor.window
    window.move_to(buffer.clamp(cursor))
    window.goal_col = None
    window.ensure_cursor_visible()
    editor.highlighter.invalidate_from(0)
    editor.display.force_redraw()
    editor.display.set_message("Undo!")
    return CommandStatus.SUCCESS


def quoted_insert(editor: EditorState, f: bool, n: int) -> CommandStatus:
    editor.quote_pending = True
    editor.display.set_message("C-q")
    return CommandStatus.SUCCESS


def zap_to_char(editor: EditorState, f: bool, n: int) -> CommandStatus:
    def zap(key: Key) -> CommandStatus:
        if not key.is_self_insert:
            return CommandStatus.ABORT
        if n < 0:
            editor.display.set_message("Backward zap not yet implemented")
            return CommandStatus.FAILURE
        target = key.character
        buffer = editor.current_buffer
        start = editor.window.cursor
        end = start
        for _ in range(max(1, n)):
            found = None
            for index in range(end.line, buffer.line_count):
                col = buffer.line(index).find(target, end.col if index == end.line else 0)
                if col >= 0:
                    found = Position(line=index, col=col + 1)
                    break
            if found is None:
                editor.display.set_message(f"'{target}' not found")
                return CommandStatus.FAILURE
            end = found
        killed = buffer.delete_range(start, end)
        editor.kill_ring.start_kill()
        editor.kill_ring.kill_append(killed)
        editor.highlighter.invalidate_from(start.line)
        return CommandStatus.SUCCESS

    editor.capture_next_key("Zap to char: ", zap)
    return CommandStatus.SUCCESS
