from __future__ import annotations

import enum

import msgspec


class QuernError(Exception):
    pass


class CommandError(QuernError):
    """A command could not complete; the message is meant for the status line."""


class ReadOnlyBufferError(QuernError):
    def __init__(self, name: str):
        super().__init__(f"Buffer is read-only: {name}")


class CommandStatus(enum.Enum):
    SUCCESS = enum.auto()
    FAILURE = enum.auto()
    ABORT = enum.auto()


class Position(msgspec.Struct, frozen=True, order=True):
    line: int
    col: int

    @classmethod
    def origin(cls):
        return cls(line=0, col=0)


class Direction(enum.Enum):
    FORWARD = enum.auto()
    BACKWARD = enum.auto()
