from __future__ import annotations

import logging
import pathlib
import typing

import msgspec

from ..commontypes import Direction, Position, ReadOnlyBufferError

logger = logging.getLogger(__name__)


class Insertion(msgspec.Struct, frozen=True):
    start: Position
    end: Position


class Deletion(msgspec.Struct, frozen=True):
    start: Position
    text: str


# None separates the changes made by one command from the next
UndoEntry = typing.Union[Insertion, Deletion, None]


def _file_lines(text: str) -> list[str]:
    lines = text.split("\n")
    if len(lines) > 1 and lines[-1] == "":
        # trailing newline belongs to the file, not to an extra empty line
        lines.pop()
    return lines


class Buffer:
    """Text as a list of lines without their newlines. Columns are indices into the line string.

    Every change goes through insert_text, delete_char, join_line or delete_range, which log
    it for undo and refuse to touch a read-only buffer. set_text replaces everything and
    starts a fresh undo log.
    """

    def __init__(self, name: str, text: str = "", path: typing.Optional[pathlib.Path] = None):
        self.name = name
        self.path = path
        self.lines = text.split("\n")
        self.modified = False
        self.read_only = False
        self.undo_log: list[UndoEntry] = []
        self._undoing = False

    def __repr__(self):
        return f"<Buffer {self.name!r} lines={len(self.lines)} modified={self.modified}>"

    @classmethod
    def load(cls, path: pathlib.Path):
        buffer = cls(path.name, path=path)
        buffer.lines = _file_lines(path.read_text())
        return buffer

    def revert(self):
        "Reread the buffer's file, dropping unsaved changes."
        if self.path is None:
            raise FileNotFoundError("No file name for buffer " + self.name)
        text = self.path.read_text()
        self.set_text(text)
        self.lines = _file_lines(text)
        self.modified = False

    @property
    def text(self) -> str:
        return "\n".join(self.lines)

    @property
    def line_count(self):
        return len(self.lines)

    @property
    def end(self) -> Position:
        return Position(line=len(self.lines) - 1, col=len(self.lines[-1]))

    @property
    def auto_save_path(self) -> typing.Optional[pathlib.Path]:
        if self.path is None:
            return None
        return self.path.with_name(f"#{self.path.name}#")

    def line(self, index: int) -> str:
        return self.lines[index]

    def clamp(self, pos: Position) -> Position:
        line = min(max(pos.line, 0), len(self.lines) - 1)
        col = min(max(pos.col, 0), len(self.lines[line]))
        return Position(line=line, col=col)

    def save(self, path: typing.Optional[pathlib.Path] = None):
        if path is not None:
            self.path = path
            self.name = path.name
        if self.path is None:
            raise FileNotFoundError("No file name for buffer " + self.name)
        self.path.write_text(self.text + "\n")
        self.modified = False
        auto_save = self.auto_save_path
        if auto_save is not None and auto_save.exists():
            auto_save.unlink()

    def write_auto_save(self):
        auto_save = self.auto_save_path
        if auto_save is None:
            return
        auto_save.write_text(self.text + "\n")
        logger.debug("Auto-saved %s to %s", self.name, auto_save)

    def set_text(self, text: str):
        self.lines = text.split("\n")
        self.modified = True
        self.undo_log = []

    def _check_writable(self):
        if self.read_only:
            raise ReadOnlyBufferError(self.name)

    def _log(self, entry: UndoEntry):
        if not self._undoing:
            self.undo_log.append(entry)

    def insert_text(self, pos: Position, text: str) -> Position:
        "Insert text (which may contain newlines) and return the position just past it."
        if not text:
            return pos
        self._check_writable()
        line = self.lines[pos.line]
        before, after = line[: pos.col], line[pos.col :]
        pieces = text.split("\n")
        if len(pieces) == 1:
            self.lines[pos.line] = before + text + after
            end = Position(line=pos.line, col=pos.col + len(text))
        else:
            new_lines = [before + pieces[0], *pieces[1:-1], pieces[-1] + after]
            self.lines[pos.line : pos.line + 1] = new_lines
            end = Position(line=pos.line + len(pieces) - 1, col=len(pieces[-1]))
        self.modified = True
        self._log(Insertion(start=pos, end=end))
        return end

    def insert_newline(self, pos: Position) -> Position:
        return self.insert_text(pos, "\n")

    def delete_char(self, pos: Position) -> typing.Optional[str]:
        line = self.lines[pos.line]
        if pos.col >= len(line):
            return None
        self._check_writable()
        self.lines[pos.line] = line[: pos.col] + line[pos.col + 1 :]
        self.modified = True
        self._log(Deletion(start=pos, text=line[pos.col]))
        return line[pos.col]

    def join_line(self, index: int) -> typing.Optional[int]:
        "Join line index with the one after it. Returns the column where they meet."
        if index + 1 >= len(self.lines):
            return None
        self._check_writable()
        col = len(self.lines[index])
        self.lines[index] += self.lines.pop(index + 1)
        self.modified = True
        self._log(Deletion(start=Position(line=index, col=col), text="\n"))
        return col

    def text_between(self, start: Position, end: Position) -> str:
        start, end = sorted((start, end))
        if start.line == end.line:
            return self.lines[start.line][start.col : end.col]
        parts = [self.lines[start.line][start.col :]]
        parts.extend(self.lines[start.line + 1 : end.line])
        parts.append(self.lines[end.line][: end.col])
        return "\n".join(parts)

    def delete_range(self, start: Position, end: Position) -> str:
        start, end = sorted((start, end))
        removed = self.text_between(start, end)
        if not removed:
            return removed
        self._check_writable()
        head = self.lines[start.line][: start.col]
        tail = self.lines[end.line][end.col :]
        self.lines[start.line : end.line + 1] = [head + tail]
        self.modified = True
        self._log(Deletion(start=start, text=removed))
        return removed

    def replace_line(self, index: int, text: str):
        line = self.lines[index]
        if line == text:
            return
        self.delete_range(Position(line=index, col=0), Position(line=index, col=len(line)))
        self.insert_text(Position(line=index, col=0), text)

    def kill_to_eol(self, pos: Position) -> typing.Optional[str]:
        line = self.lines[pos.line]
        if pos.col < len(line):
            return self.delete_range(pos, Position(line=pos.line, col=len(line)))
        if self.join_line(pos.line) is not None:
            return "\n"
        return None

    def add_undo_boundary(self):
        if self.undo_log and self.undo_log[-1] is not None:
            self.undo_log.append(None)

    def undo(self) -> typing.Optional[Position]:
        """Reverse the most recent group of changes.

        Returns where the cursor belongs afterwards, or None when there was nothing to undo.
        """
        while self.undo_log and self.undo_log[-1] is None:
            self.undo_log.pop()
        if not self.undo_log:
            return None
        self._check_writable()
        cursor = None
        self._undoing = True
        try:
            while self.undo_log:
                entry = self.undo_log.pop()
                match entry:
                    case None:
                        break
                    case Insertion(start=start, end=end):
                        self.delete_range(start, end)
                        cursor = start
                    case Deletion(start=start, text=text):
                        cursor = self.insert_text(start, text)
        finally:
            self._undoing = False
        return cursor

    def find(self, pattern: str, start: Position, direction: Direction, inclusive: bool = False) -> typing.Optional[tuple[Position, bool]]:
        """Find pattern starting from start, wrapping around the buffer once.

        Returns the match position and whether the search wrapped to get there.
        Forward matches begin after start (or at it, when inclusive); backward matches begin before it.
        """
        if not pattern:
            return None
        if direction is Direction.FORWARD:
            first_col = start.col if inclusive else start.col + 1
            for index in range(start.line, len(self.lines)):
                col = self.lines[index].find(pattern, first_col if index == start.line else 0)
                if col >= 0:
                    return Position(line=index, col=col), False
            for index in range(0, start.line + 1):
                text = self.lines[index]
                limit = first_col - 1 + len(pattern) if index == start.line else len(text)
                col = text.find(pattern, 0, limit)
                if col >= 0:
                    return Position(line=index, col=col), True
            return None
        last_col = start.col + 1 if inclusive else start.col
        for index in range(start.line, -1, -1):
            text = self.lines[index]
            if index == start.line:
                col = text.rfind(pattern, 0, last_col + len(pattern) - 1)
            else:
                col = text.rfind(pattern)
            if col >= 0:
                return Position(line=index, col=col), False
        for index in range(len(self.lines) - 1, start.line - 1, -1):
            col = self.lines[index].rfind(pattern, last_col if index == start.line else 0)
            if col >= 0:
                return Position(line=index, col=col), True
        return None


class Window:
    def __init__(self, buffer_index: int = 0, height: int = 24):
        self.buffer_index = buffer_index
        self.cursor = Position.origin()
        self.goal_col: typing.Optional[int] = None
        self.mark: typing.Optional[Position] = None
        self.top_line = 0
        self.height = height

    @property
    def cursor_line(self):
        return self.cursor.line

    @property
    def cursor_col(self):
        return self.cursor.col

    def set_cursor(self, line: int, col: int):
        self.cursor = Position(line=line, col=col)

    def move_to(self, pos: Position):
        self.cursor = pos

    def set_mark(self, pos: typing.Optional[Position] = None):
        self.mark = self.cursor if pos is None else pos

    def ensure_cursor_visible(self):
        if self.cursor.line < self.top_line:
            self.top_line = self.cursor.line
        elif self.cursor.line >= self.top_line + self.height:
            self.top_line = self.cursor.line - self.height + 1


class Highlighter:
    "Tracks the first line whose highlighting is stale. Repainting clears it."

    def __init__(self):
        self.dirty_from: typing.Optional[int] = None

    def invalidate_from(self, line: int):
        if self.dirty_from is None or line < self.dirty_from:
            self.dirty_from = line
            logger.debug("Highlighting invalidated from line %d", line)

    def take_dirty(self) -> typing.Optional[int]:
        dirty, self.dirty_from = self.dirty_from, None
        return dirty
