from __future__ import annotations

import logging
import typing

import msgspec

from ..commontypes import Position

logger = logging.getLogger(__name__)


class YankAnchor(msgspec.Struct, frozen=True):
    start: Position
    end: Position


class KillRing:
    """Deleted text blocks, newest last.

    Kill commands call start_kill() and then feed text with kill_append/kill_prepend.
    When the previous command was also a kill, start_kill() keeps the newest entry open,
    so a run of kills yanks back as a single block.
    """

    def __init__(self, max_entries: int = 60):
        self.entries: list[str] = []
        self.index = 0
        self.max_entries = max_entries
        self.last_was_kill = False
        self.this_was_kill = False
        self.last_was_yank = False
        self.this_was_yank = False
        self.anchor: typing.Optional[YankAnchor] = None

    def __len__(self):
        return len(self.entries)

    def begin_command(self):
        "Roll the per-command flags over before a new command is dispatched."
        self.last_was_kill = self.this_was_kill
        self.last_was_yank = self.this_was_yank
        self.this_was_kill = False
        self.this_was_yank = False
        if not self.last_was_yank:
            self.anchor = None

    def append_next_kill(self):
        self.this_was_kill = True

    def start_kill(self):
        if not (self.last_was_kill or self.this_was_kill) or not self.entries:
            self.entries.append("")
            if len(self.entries) > self.max_entries:
                dropped = self.entries.pop(0)
                logger.debug("Kill ring full; dropped %d characters", len(dropped))
            self.index = len(self.entries) - 1
        self.this_was_kill = True

    def kill_append(self, text: str):
        if self.entries:
            self.entries[-1] += text

    def kill_prepend(self, text: str):
        if self.entries:
            self.entries[-1] = text + self.entries[-1]

    def yank_text(self) -> typing.Optional[str]:
        if not self.entries:
            return None
        return self.entries[-1]

    def yank_text_at(self, index: int) -> typing.Optional[str]:
        if not self.entries:
            return None
        return self.entries[index % len(self.entries)]

    def reset_index(self):
        self.index = max(0, len(self.entries) - 1)

    def cycle_kill_ring(self) -> int:
        "Step the rotation index one entry older, wrapping to the newest."
        if self.entries:
            self.index = (self.index - 1) % len(self.entries)
        return self.index

    def record_yank(self, anchor: YankAnchor):
        self.anchor = anchor
        self.this_was_yank = True
