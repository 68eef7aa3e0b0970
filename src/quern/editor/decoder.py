# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import collections.abc
import enum
import logging
import typing

from ..terminal.termtypes import KeyPress, NamedKey, RawKeyEvent
from .keys import DEL, Key, KeyFlag, SpecialCode

logger = logging.getLogger(__name__)


class PendingPrefix(enum.Enum):
    NONE = enum.auto()
    META = enum.auto()
    CTLX = enum.auto()
    CTLX_META = enum.auto()


PENDING_MESSAGES = {
    PendingPrefix.NONE: None,
    PendingPrefix.META: "ESC -",
    PendingPrefix.CTLX: "C-x -",
    PendingPrefix.CTLX_META: "C-x ESC -",
}

NAMED_SPECIALS = {
    NamedKey.HOME: SpecialCode.HOME,
    NamedKey.END: SpecialCode.END,
    NamedKey.PAGE_UP: SpecialCode.PAGE_UP,
    NamedKey.PAGE_DOWN: SpecialCode.PAGE_DOWN,
    NamedKey.UP: SpecialCode.UP,
    NamedKey.DOWN: SpecialCode.DOWN,
    NamedKey.LEFT: SpecialCode.LEFT,
    NamedKey.RIGHT: SpecialCode.RIGHT,
    NamedKey.DELETE: SpecialCode.DELETE,
}


def _is_escape(event: RawKeyEvent):
    return event.key is NamedKey.ESCAPE and not event.annotation.ctrl and not event.annotation.alt


def _is_ctlx(event: RawKeyEvent):
    return event.character is not None and event.character.lower() == "x" and event.annotation.ctrl and not event.annotation.alt


def translate(event: RawKeyEvent) -> typing.Optional[Key]:
    "Map one press to a key with no regard for prefix state."
    if event.key is not None:
        match event.key:
            case NamedKey.ESCAPE:
                key = Key.ctrl("[")
            case NamedKey.ENTER:
                key = Key.ctrl("m")
            case NamedKey.TAB:
                key = Key.ctrl("i")
            case NamedKey.BACKSPACE:
                key = Key(code=DEL)
            case named if named.function_number is not None:
                key = Key.function(named.function_number)
            case named if named in NAMED_SPECIALS:
                key = Key.special(NAMED_SPECIALS[named])
            case _:
                return None
        if event.annotation.alt:
            key = key.with_modifiers(KeyFlag.META)
        if event.annotation.ctrl and key.is_special:
            key = key.with_modifiers(KeyFlag.CONTROL)
        return key
    if event.character is None or len(event.character) != 1:
        return None
    ch = event.character
    if ord(ch) < 0x20 and not event.annotation.ctrl:
        return None
    match (event.annotation.ctrl, event.annotation.alt):
        case (True, True):
            return Key.meta_ctrl(ch)
        case (True, False):
            return Key.ctrl(ch)
        case (False, True):
            return Key.meta(ch)
        case _:
            return Key.char(ch)


class KeyDecoder:
    """Turns raw presses into canonical keys, tracking ESC and C-x prefixes.

    There is no timeout; ESC x and M-x decode to the same key no matter how far apart the presses arrive.
    """

    def __init__(self):
        self.pending = PendingPrefix.NONE

    @property
    def pending_message(self) -> typing.Optional[str]:
        return PENDING_MESSAGES[self.pending]

    def reset(self):
        self.pending = PendingPrefix.NONE

    def decode(self, event: RawKeyEvent) -> typing.Optional[Key]:
        if event.press is not KeyPress.PRESSED:
            return None
        match self.pending:
            case PendingPrefix.NONE:
                if _is_escape(event):
                    self.pending = PendingPrefix.META
                    return None
                if _is_ctlx(event):
                    self.pending = PendingPrefix.CTLX
                    return None
                return translate(event)
            case PendingPrefix.CTLX if _is_escape(event):
                self.pending = PendingPrefix.CTLX_META
                return None
            case PendingPrefix.META:
                extra = KeyFlag.META
            case PendingPrefix.CTLX:
                extra = KeyFlag.CTLX
            case PendingPrefix.CTLX_META:
                extra = KeyFlag.CTLX | KeyFlag.META
        key = translate(event)
        if key is None:
            logger.debug("Dropping unrecognized event %r while %s is pending", event, self.pending.name)
            return None
        self.pending = PendingPrefix.NONE
        return key.with_modifiers(extra)

    @classmethod
    def read_key(cls, events: collections.abc.Iterable[RawKeyEvent]) -> typing.Optional[Key]:
        "Read exactly one key using a decoder of its own, so the caller's prefix state is untouched."
        decoder = cls()
        for event in events:
            key = decoder.decode(event)
            if key is not None:
                return key
        return None
