from __future__ import annotations

import collections
import collections.abc
import typing

from .termtypes import RawKeyEvent


class ScriptedTerminal:
    "A terminal that plays back a fixed list of events."

    def __init__(self, events: collections.abc.Iterable[RawKeyEvent] = ()):
        self.pending = collections.deque(events)
        self.beeps = 0

    def feed(self, *events: RawKeyEvent):
        self.pending.extend(events)

    def read_event(self) -> typing.Optional[RawKeyEvent]:
        if not self.pending:
            return None
        return self.pending.popleft()

    def poll(self, timeout: float) -> bool:
        return bool(self.pending)

    def beep(self):
        self.beeps += 1

    async def events(self):
        while self.pending:
            yield self.pending.popleft()
