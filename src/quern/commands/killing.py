from __future__ import annotations

import typing

from ..commontypes import CommandStatus, Position
from ..editor.killring import YankAnchor
from .navigation import word_end, word_start

if typing.TYPE_CHECKING:
    from ..editor.buffer import Buffer
    from ..editor.state import EditorState


def _line_kill_span(buffer: Buffer, pos: Position, f: bool, n: int) -> tuple[Position, Position]:
    if f and n == 0:
        return Position(line=pos.line, col=0), pos
    if f and n > 0:
        start = Position(line=pos.line, col=0)
        if pos.line + n < buffer.line_count:
            return start, Position(line=pos.line + n, col=0)
        return start, buffer.end
    line = buffer.line(pos.line)
    if pos.col < len(line):
        return pos, Position(line=pos.line, col=len(line))
    if pos.line + 1 < buffer.line_count:
        return pos, Position(line=pos.line + 1, col=0)
    return pos, pos


def kill_line(editor: EditorState, f: bool, n: int) -> CommandStatus:
    """Kill to the end of the line, or the newline when already there.

    With an argument of 0, kill back to the start of the line. With a positive argument,
    kill that many whole lines starting from the beginning of this one. A negative argument
    kills to the end of the line like no argument at all.
    """
    buffer = editor.current_buffer
    window = editor.window
    start, end = _line_kill_span(buffer, window.cursor, f, n)
    if start == end:
        if f and n == 0:
            return CommandStatus.SUCCESS
        editor.display.set_message("End of buffer")
        return CommandStatus.FAILURE
    killed = buffer.delete_range(start, end)
    kill_ring = editor.kill_ring
    kill_ring.start_kill()
    if f and n == 0:
        kill_ring.kill_prepend(killed)
    else:
        kill_ring.kill_append(killed)
    window.move_to(start)
    window.goal_col = None
    editor.highlighter.invalidate_from(start.line)
    editor.display.force_redraw()
    return CommandStatus.SUCCESS


def kill_word(editor: EditorState, f: bool, n: int) -> CommandStatus:
    if n < 0:
        return backward_kill_word(editor, f, -n)
    start = editor.window.cursor
    end = start
    for _ in range(max(1, n)):
        nxt = word_end(editor, end)
        if nxt is None:
            break
        end = nxt
    if end == start:
        return CommandStatus.FAILURE
    killed = editor.current_buffer.delete_range(start, end)
    editor.kill_ring.start_kill()
    editor.kill_ring.kill_append(killed)
    editor.highlighter.invalidate_from(start.line)
    return CommandStatus.SUCCESS


def backward_kill_word(editor: EditorState, f: bool, n: int) -> CommandStatus:
    if n < 0:
        return kill_word(editor, f, -n)
    end = editor.window.cursor
    start = end
    for _ in range(max(1, n)):
        prev = word_start(editor, start)
        if prev is None:
            break
        start = prev
    if end == start:
        return CommandStatus.FAILURE
    killed = editor.current_buffer.delete_range(start, end)
    editor.kill_ring.start_kill()
    editor.kill_ring.kill_prepend(killed)
    editor.window.move_to(start)
    editor.highlighter.invalidate_from(start.line)
    return CommandStatus.SUCCESS


def set_mark_command(editor: EditorState, f: bool, n: int) -> CommandStatus:
    editor.window.set_mark()
    editor.display.set_message("Mark set")
    return CommandStatus.SUCCESS


def _region(editor: EditorState) -> typing.Optional[tuple[Position, Position]]:
    window = editor.window
    if window.mark is None:
        editor.display.set_message("No mark set")
        return None
    mark = editor.current_buffer.clamp(window.mark)
    start, end = sorted((mark, window.cursor))
    return start, end


def exchange_point_and_mark(editor: EditorState, f: bool, n: int) -> CommandStatus:
    window = editor.window
    if window.mark is None:
        editor.display.set_message("No mark set")
        return CommandStatus.FAILURE
    mark = editor.current_buffer.clamp(window.mark)
    window.mark = window.cursor
    window.move_to(mark)
    window.ensure_cursor_visible()
    return CommandStatus.SUCCESS


def mark_whole_buffer(editor: EditorState, f: bool, n: int) -> CommandStatus:
    window = editor.window
    window.set_mark(editor.current_buffer.end)
    window.move_to(Position.origin())
    window.goal_col = None
    window.top_line = 0
    editor.display.set_message("Mark set (whole buffer)")
    return CommandStatus.SUCCESS


def kill_region(editor: EditorState, f: bool, n: int) -> CommandStatus:
    region = _region(editor)
    if region is None:
        return CommandStatus.FAILURE
    start, end = region
    killed = editor.current_buffer.delete_range(start, end)
    editor.kill_ring.start_kill()
    if editor.window.cursor == start:
        editor.kill_ring.kill_prepend(killed)
    else:
        editor.kill_ring.kill_append(killed)
    editor.window.move_to(start)
    editor.window.mark = start
    editor.highlighter.invalidate_from(start.line)
    editor.display.force_redraw()
    return CommandStatus.SUCCESS


def kill_ring_save(editor: EditorState, f: bool, n: int) -> CommandStatus:
    region = _region(editor)
    if region is None:
        return CommandStatus.FAILURE
    start, end = region
    editor.kill_ring.start_kill()
    editor.kill_ring.kill_append(editor.current_buffer.text_between(start, end))
    editor.display.set_message("Region copied")
    return CommandStatus.SUCCESS


def append_next_kill(editor: EditorState, f: bool, n: int) -> CommandStatus:
    editor.kill_ring.append_next_kill()
    editor.display.set_message("Next kill appends")
    return CommandStatus.SUCCESS


def yank(editor: EditorState, f: bool, n: int) -> CommandStatus:
    if n < 0:
        return CommandStatus.FAILURE
    text = editor.kill_ring.yank_text()
    if text is None:
        return CommandStatus.SUCCESS
    start = editor.window.cursor
    editor.window.set_mark(start)
    editor.insert_text(text * max(1, n))
    editor.kill_ring.reset_index()
    editor.kill_ring.record_yank(YankAnchor(start=start, end=editor.window.cursor))
    return CommandStatus.SUCCESS


def yank_pop(editor: EditorState, f: bool, n: int) -> CommandStatus:
    kill_ring = editor.kill_ring
    if not kill_ring.last_was_yank or kill_ring.anchor is None:
        editor.display.set_message("Previous command was not a yank")
        return CommandStatus.FAILURE
    text = kill_ring.yank_text_at(kill_ring.cycle_kill_ring())
    if text is None:
        return CommandStatus.FAILURE
    anchor = kill_ring.anchor
    editor.current_buffer.delete_range(anchor.start, anchor.end)
    editor.window.move_to(anchor.start)
    editor.insert_text(text)
    kill_ring.record_yank(YankAnchor(start=anchor.start, end=editor.window.cursor))
    editor.display.force_redraw()
    return CommandStatus.SUCCESS
