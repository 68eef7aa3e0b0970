# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import enum
import typing

import msgspec


class KeyFlag(enum.IntFlag):
    NONE = 0
    CONTROL = 0x1000_0000
    META = 0x2000_0000
    CTLX = 0x4000_0000
    SPECIAL = 0x8000_0000


CODE_MASK = 0x0FFF_FFFF
DEL = 0x7F


class SpecialCode(enum.IntEnum):
    HOME = 0x47
    UP = 0x48
    PAGE_UP = 0x49
    LEFT = 0x4B
    RIGHT = 0x4D
    END = 0x4F
    DOWN = 0x50
    PAGE_DOWN = 0x51
    DELETE = 0x53

    @staticmethod
    def function(n: int) -> int:
        return 0x3A + n


SPECIAL_NAMES = {
    SpecialCode.HOME: "Home",
    SpecialCode.UP: "Up",
    SpecialCode.PAGE_UP: "PageUp",
    SpecialCode.LEFT: "Left",
    SpecialCode.RIGHT: "Right",
    SpecialCode.END: "End",
    SpecialCode.DOWN: "Down",
    SpecialCode.PAGE_DOWN: "PageDown",
    SpecialCode.DELETE: "Delete",
}
SPECIAL_BY_NAME = {v: k for k, v in SPECIAL_NAMES.items()}
FUNCTION_KEY_RANGE = range(1, 13)


class Key(msgspec.Struct, frozen=True):
    """A canonical chord: one base code plus modifier bits.

    CONTROL chords fold letters to lower case, so C-F and C-f are the same key.
    META and CTLX chords keep case; M-s and M-S are different keys.
    """

    code: int
    modifiers: KeyFlag = KeyFlag.NONE

    @classmethod
    def char(cls, ch: str):
        return cls(code=ord(ch))

    @classmethod
    def ctrl(cls, ch: str):
        return cls(code=ord(ch.lower()), modifiers=KeyFlag.CONTROL)

    @classmethod
    def meta(cls, ch: str):
        return cls(code=ord(ch), modifiers=KeyFlag.META)

    @classmethod
    def meta_ctrl(cls, ch: str):
        return cls(code=ord(ch.lower()), modifiers=KeyFlag.META | KeyFlag.CONTROL)

    @classmethod
    def ctlx(cls, ch: str):
        return cls(code=ord(ch), modifiers=KeyFlag.CTLX)

    @classmethod
    def ctlx_ctrl(cls, ch: str):
        return cls(code=ord(ch.lower()), modifiers=KeyFlag.CTLX | KeyFlag.CONTROL)

    @classmethod
    def ctlx_meta(cls, ch: str):
        return cls(code=ord(ch), modifiers=KeyFlag.CTLX | KeyFlag.META)

    @classmethod
    def special(cls, code: int):
        return cls(code=int(code), modifiers=KeyFlag.SPECIAL)

    @classmethod
    def function(cls, n: int):
        return cls.special(SpecialCode.function(n))

    @classmethod
    def from_packed(cls, packed: int):
        return cls(code=packed & CODE_MASK, modifiers=KeyFlag(packed & ~CODE_MASK))

    @property
    def packed(self) -> int:
        return self.code | int(self.modifiers)

    def with_modifiers(self, extra: KeyFlag) -> Key:
        return Key(code=self.code, modifiers=self.modifiers | extra)

    def has(self, flag: KeyFlag) -> bool:
        return bool(self.modifiers & flag)

    @property
    def is_special(self):
        return self.has(KeyFlag.SPECIAL)

    @property
    def is_self_insert(self):
        return self.modifiers == KeyFlag.NONE and self.code >= 0x20 and self.code != DEL

    @property
    def character(self) -> typing.Optional[str]:
        if self.is_special:
            return None
        return chr(self.code)

    @property
    def digit(self) -> typing.Optional[int]:
        "The decimal value of the base character, ignoring modifiers."
        if self.is_special or not (0x30 <= self.code <= 0x39):
            return None
        return self.code - 0x30

    def _base_name(self):
        if self.is_special:
            if self.code in SPECIAL_NAMES:
                return SPECIAL_NAMES[self.code]
            n = self.code - 0x3A
            if n in FUNCTION_KEY_RANGE:
                return f"F{n}"
            return f"<special {self.code:#x}>"
        if self.code == DEL:
            return "Backspace"
        if self.code == 0x20:
            return "SPC"
        return chr(self.code)

    def display_name(self) -> str:
        parts = []
        if self.has(KeyFlag.CTLX):
            parts.append("C-x ")
        if self.has(KeyFlag.META):
            parts.append("M-")
        if self.has(KeyFlag.CONTROL):
            parts.append("C-")
        parts.append(self._base_name())
        return "".join(parts)

    @classmethod
    def from_display_name(cls, name: str) -> Key:
        modifiers = KeyFlag.NONE
        rest = name
        if rest.startswith("C-x ") and len(rest) > 4:
            modifiers |= KeyFlag.CTLX
            rest = rest[4:]
        if rest.startswith("M-") and len(rest) > 2:
            modifiers |= KeyFlag.META
            rest = rest[2:]
        if rest.startswith("C-") and len(rest) > 2:
            modifiers |= KeyFlag.CONTROL
            rest = rest[2:]
        if rest in SPECIAL_BY_NAME:
            return cls(code=int(SPECIAL_BY_NAME[rest]), modifiers=modifiers | KeyFlag.SPECIAL)
        if rest.startswith("F") and rest[1:].isdigit() and int(rest[1:]) in FUNCTION_KEY_RANGE:
            return cls(code=SpecialCode.function(int(rest[1:])), modifiers=modifiers | KeyFlag.SPECIAL)
        if rest == "Backspace":
            return cls(code=DEL, modifiers=modifiers)
        if rest == "SPC":
            return cls(code=0x20, modifiers=modifiers)
        if len(rest) != 1:
            raise ValueError(f"Unrecognized key name {name!r}")
        if modifiers & KeyFlag.CONTROL:
            rest = rest.lower()
        return cls(code=ord(rest), modifiers=modifiers)


ABORT_KEY = Key.ctrl("g")
UNIVERSAL_ARGUMENT_KEY = Key.ctrl("u")
ENTER_KEY = Key.ctrl("m")
TAB_KEY = Key.ctrl("i")
BACKSPACE_KEY = Key.char(chr(DEL))
ESCAPE_KEY = Key.ctrl("[")
