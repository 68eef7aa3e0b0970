# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import abc
import collections.abc
import typing
from contextlib import aclosing, asynccontextmanager
from typing import Any, AsyncIterable, cast

import trio

from ..editor.decoder import KeyDecoder
from ..editor.keys import Key
from .termtypes import KeyPress, RawKeyEvent



class Section(abc.ABC):
    @abc.abstractmethod
    async def pump(self, source: trio.MemoryReceiveChannel[Any], sink: trio.MemorySendChannel[Any]): ...


# stage 1: drop releases and repeats
class OnlyPresses(Section):
    async def pump(self, source: trio.MemoryReceiveChannel[RawKeyEvent], sink: trio.MemorySendChannel[RawKeyEvent]):
        async with aclosing(source), aclosing(sink):
            async for event in source:
                if event.press is KeyPress.PRESSED:
                    await sink.send(event)


# stage 2: fold ESC and C-x prefixes into chords
class ChordDecoding(Section):
    def __init__(self, on_pending: typing.Optional[collections.abc.Callable[[str], None]] = None):
        self.decoder = KeyDecoder()
        self.on_pending = on_pending

    async def pump(self, source: trio.MemoryReceiveChannel[RawKeyEvent], sink: trio.MemorySendChannel[Key]):
        async with aclosing(source), aclosing(sink):
            async for event in source:
                key = self.decoder.decode(event)
                if key is not None:
                    await sink.send(key)
                    continue
                message = self.decoder.pending_message
                if message is not None and self.on_pending is not None:
                    self.on_pending(message)


@asynccontextmanager
async def pump_all(first_source: AsyncIterable[Any], *sections: Section):
    async with trio.open_nursery() as nursery:
        section_input = first_source
        for section in sections:
            section_send_channel, section_receive_channel = trio.open_memory_channel(0)
            nursery.start_soon(section.pump, section_input, section_send_channel)
            section_input = section_receive_channel
        yield section_input
        nursery.cancel_scope.cancel()


@asynccontextmanager
async def make_keystream(
    event_source: AsyncIterable[RawKeyEvent],
    on_pending: typing.Optional[collections.abc.Callable[[str], None]] = None,
):
    sections = [
        OnlyPresses(),
        ChordDecoding(on_pending),
    ]

    async with pump_all(event_source, *sections) as keystream:
        yield cast(trio.MemoryReceiveChannel[Key], keystream)
