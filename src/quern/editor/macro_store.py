"""Keyboard macro slots on disk, as JSON lists of chord names."""
from __future__ import annotations

import logging
import pathlib

import msgspec

from .keys import Key
from .macros import SLOT_COUNT

logger = logging.getLogger(__name__)


class MacroFile(msgspec.Struct):
    slots: dict[int, list[str]] = msgspec.field(default_factory=dict)


def _parse_keys(slot: int, names: list[str]) -> list[Key]:
    keys = []
    for name in names:
        try:
            keys.append(Key.from_display_name(name))
        except ValueError:
            logger.warning("Skipping unknown key %r in macro slot %d", name, slot)
    return keys


def load_macros(path: pathlib.Path) -> list[list[Key]]:
    slots: list[list[Key]] = [[] for _ in range(SLOT_COUNT)]
    if not path.exists():
        return slots
    macro_file = msgspec.json.decode(path.read_bytes(), type=MacroFile)
    for slot, names in macro_file.slots.items():
        if not 0 <= slot < SLOT_COUNT:
            logger.warning("Ignoring out-of-range macro slot %d in %s", slot, path)
            continue
        slots[slot] = _parse_keys(slot, names)
    return slots


def save_macros(path: pathlib.Path, slots: list[list[Key]]):
    macro_file = MacroFile(slots={i: [k.display_name() for k in keys] for i, keys in enumerate(slots) if keys})
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(msgspec.json.format(msgspec.json.encode(macro_file), indent=2))
