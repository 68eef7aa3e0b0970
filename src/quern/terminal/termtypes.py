from __future__ import annotations

import enum
import typing

import msgspec

from ..commontypes import QuernError


class TerminalError(QuernError):
    pass


class KeyPress(enum.IntEnum):
    RELEASED = 0
    PRESSED = 1
    REPEATED = 2


class NamedKey(enum.Enum):
    ESCAPE = enum.auto()
    ENTER = enum.auto()
    TAB = enum.auto()
    BACKSPACE = enum.auto()
    DELETE = enum.auto()
    HOME = enum.auto()
    END = enum.auto()
    PAGE_UP = enum.auto()
    PAGE_DOWN = enum.auto()
    UP = enum.auto()
    DOWN = enum.auto()
    LEFT = enum.auto()
    RIGHT = enum.auto()
    F1 = enum.auto()
    F2 = enum.auto()
    F3 = enum.auto()
    F4 = enum.auto()
    F5 = enum.auto()
    F6 = enum.auto()
    F7 = enum.auto()
    F8 = enum.auto()
    F9 = enum.auto()
    F10 = enum.auto()
    F11 = enum.auto()
    F12 = enum.auto()

    @property
    def function_number(self) -> typing.Optional[int]:
        if self.name.startswith("F") and self.name[1:].isdigit():
            return int(self.name[1:])
        return None


class ModifierAnnotation(msgspec.Struct, frozen=True):
    alt: bool = False
    ctrl: bool = False
    shift: bool = False


class RawKeyEvent(msgspec.Struct, frozen=True):
    press: KeyPress
    annotation: ModifierAnnotation = msgspec.field(default_factory=ModifierAnnotation)
    key: typing.Optional[NamedKey] = None
    character: typing.Optional[str] = None

    @classmethod
    def typed(cls, character: str, *, ctrl: bool = False, alt: bool = False):
        return cls(
            press=KeyPress.PRESSED,
            annotation=ModifierAnnotation(ctrl=ctrl, alt=alt),
            character=character,
        )

    @classmethod
    def named(cls, key: NamedKey, *, ctrl: bool = False, alt: bool = False):
        return cls(press=KeyPress.PRESSED, annotation=ModifierAnnotation(ctrl=ctrl, alt=alt), key=key)

    @classmethod
    def released(cls, character: str):
        return cls(press=KeyPress.RELEASED, character=character)


class Terminal(typing.Protocol):
    def read_event(self) -> typing.Optional[RawKeyEvent]: ...

    def poll(self, timeout: float) -> bool: ...

    def beep(self) -> None: ...

    def events(self) -> typing.AsyncIterator[RawKeyEvent]: ...
