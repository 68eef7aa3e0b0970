from __future__ import annotations

import collections.abc
import logging
import typing

from ..commontypes import CommandError
from .keys import Key

logger = logging.getLogger(__name__)

SLOT_COUNT = 10


class MacroRecorder:
    """Records keys into the current macro and replays them through the live dispatcher.

    recording and playing are never both set: start() refuses while playing and play() refuses while recording.
    """

    def __init__(self):
        self.recording = False
        self.playing = False
        self.keys: list[Key] = []
        self.slots: list[list[Key]] = [[] for _ in range(SLOT_COUNT)]

    @property
    def capturing(self):
        return self.recording and not self.playing

    def start(self) -> bool:
        if self.playing:
            return False
        self.recording = True
        self.keys = []
        logger.debug("Started recording keyboard macro")
        return True

    def end(self) -> bool:
        if not self.recording:
            return False
        self.recording = False
        logger.debug("Finished keyboard macro of %d keys", len(self.keys))
        return True

    def record(self, keys: collections.abc.Iterable[Key]):
        if self.capturing:
            self.keys.extend(keys)

    def can_play(self) -> bool:
        return not self.recording and not self.playing

    def play(
        self,
        keys: collections.abc.Sequence[Key],
        dispatch: collections.abc.Callable[[Key], typing.Any],
        is_running: collections.abc.Callable[[], bool],
        times: int = 1,
    ) -> bool:
        if not self.can_play():
            return False
        replay = list(keys)
        self.playing = True
        logger.debug("Playing keyboard macro of %d keys, %d times", len(replay), times)
        try:
            for _ in range(times):
                for key in replay:
                    if not is_running():
                        return True
                    dispatch(key)
        finally:
            self.playing = False
        return True

    def play_slot(
        self,
        slot: int,
        dispatch: collections.abc.Callable[[Key], typing.Any],
        is_running: collections.abc.Callable[[], bool],
    ) -> bool:
        self.check_slot(slot)
        if not self.slots[slot]:
            return False
        return self.play(self.slots[slot], dispatch, is_running)

    def check_slot(self, slot: int):
        if not 0 <= slot < SLOT_COUNT:
            raise CommandError(f"Macro slot must be 0-{SLOT_COUNT - 1}")

    def save_to_slot(self, slot: int) -> bool:
        self.check_slot(slot)
        if not self.keys:
            return False
        self.slots[slot] = list(self.keys)
        return True

    def load_from_slot(self, slot: int) -> bool:
        self.check_slot(slot)
        if not self.slots[slot]:
            return False
        self.keys = list(self.slots[slot])
        return True

    def stored_count(self) -> int:
        return sum(1 for slot in self.slots if slot)
