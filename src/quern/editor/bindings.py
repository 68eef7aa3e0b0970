from __future__ import annotations

import collections.abc
import typing

import msgspec
import pygtrie

from ..commontypes import CommandStatus
from .keys import Key

if typing.TYPE_CHECKING:
    from .state import EditorState

CommandFn = collections.abc.Callable[["EditorState", bool, int], CommandStatus]


class Binding(msgspec.Struct, frozen=True):
    key: Key
    command: CommandFn
    name: str


class BindingTable:
    def __init__(self):
        self._by_key: dict[Key, Binding] = {}
        self._by_name: dict[str, CommandFn] = {}
        self._names = pygtrie.CharTrie()

    def __len__(self):
        return len(self._by_key)

    def __contains__(self, key: Key):
        return key in self._by_key

    def bind(self, key: Key, command: CommandFn, name: str):
        self._by_key[key] = Binding(key=key, command=command, name=name)
        self.register(command, name)

    def register(self, command: CommandFn, name: str):
        "Make a command reachable by name without binding it to any key."
        self._by_name[name] = command
        self._names[name] = command

    def unbind(self, key: Key) -> typing.Optional[Binding]:
        return self._by_key.pop(key, None)

    def lookup(self, key: Key) -> typing.Optional[Binding]:
        return self._by_key.get(key)

    def lookup_by_name(self, name: str) -> typing.Optional[CommandFn]:
        return self._by_name.get(name)

    def all_bindings(self) -> list[Binding]:
        return sorted(self._by_key.values(), key=lambda b: (b.name, b.key.display_name()))

    def command_names(self) -> list[str]:
        return sorted(self._by_name)

    def keys_for(self, name: str) -> list[Key]:
        return [b.key for b in self.all_bindings() if b.name == name]

    def complete(self, prefix: str) -> list[str]:
        if not self._names.has_subtrie(prefix) and prefix not in self._names:
            return []
        return sorted(self._names.keys(prefix=prefix))
