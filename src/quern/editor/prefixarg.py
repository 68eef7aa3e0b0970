from __future__ import annotations

import typing

from .keys import Key, KeyFlag, UNIVERSAL_ARGUMENT_KEY

MINUS = ord("-")


class PrefixArgument:
    """Accumulates C-u, M-digit and M-- into a repeat count for the next command."""

    def __init__(self):
        self.reset()

    def reset(self):
        self.active = False
        self.value: typing.Optional[int] = None
        self.multiplier = 1
        self.keys: list[Key] = []

    def feed(self, key: Key) -> bool:
        "Returns True when the key was consumed as part of a prefix argument."
        is_meta = key.modifiers == KeyFlag.META
        plain = key.modifiers == KeyFlag.NONE
        if key == UNIVERSAL_ARGUMENT_KEY:
            if not self.active:
                self.active = True
                self.multiplier = 4
                self.value = None
            elif self.value is None:
                self.multiplier *= 4
        elif key.digit is not None and (is_meta or (plain and self.active)):
            if not self.active:
                self.active = True
                self.multiplier = 1
            self.value = (self.value or 0) * 10 + key.digit
        elif key.code == MINUS and is_meta and not self.active:
            self.active = True
            self.multiplier = -1
            self.value = None
        elif key.code == MINUS and (is_meta or plain) and self.active and self.value is None:
            self.multiplier = -abs(self.multiplier)
        else:
            return False
        self.keys.append(key)
        return True

    @property
    def effective(self) -> int:
        return (1 if self.value is None else self.value) * self.multiplier

    def snapshot(self) -> tuple[bool, int]:
        if not self.active:
            return (False, 1)
        return (True, self.effective)

    def take(self) -> tuple[bool, int, list[Key]]:
        "Snapshot the argument and the keys that built it, then reset."
        has_arg, n = self.snapshot()
        keys = self.keys
        self.reset()
        return has_arg, n, keys

    def status_text(self) -> str:
        if self.value is None and self.multiplier > 0:
            count = 0
            m = self.multiplier
            while m > 1 and m % 4 == 0:
                m //= 4
                count += 1
            if m == 1 and count > 0:
                return " ".join(["C-u"] * count)
        return f"Arg: {self.effective}"
