from __future__ import annotations

import typing

import msgspec

from ..commontypes import CommandStatus
from ..editor import macro_store
from ..editor.keys import Key

if typing.TYPE_CHECKING:
    from ..editor.state import EditorState


def start_kbd_macro(editor: EditorState, f: bool, n: int) -> CommandStatus:
    if not editor.macros.start():
        editor.display.set_message("Can't define macro while executing macro")
        return CommandStatus.FAILURE
    editor.display.set_message("Defining keyboard macro...")
    return CommandStatus.SUCCESS


def end_kbd_macro(editor: EditorState, f: bool, n: int) -> CommandStatus:
    if not editor.macros.end():
        editor.display.set_message("Not defining keyboard macro")
        return CommandStatus.FAILURE
    editor.display.set_message(f"Keyboard macro defined ({len(editor.macros.keys)} keys)")
    return CommandStatus.SUCCESS


def _play(editor: EditorState, keys: list[Key], times: int) -> CommandStatus:
    macros = editor.macros
    if macros.recording:
        editor.display.set_message("Can't execute macro while defining it")
        return CommandStatus.FAILURE
    if macros.playing:
        return CommandStatus.FAILURE
    if not keys:
        editor.display.set_message("No keyboard macro defined")
        return CommandStatus.FAILURE
    editor.play_macro(keys, times=times)
    return CommandStatus.SUCCESS


def call_last_kbd_macro(editor: EditorState, f: bool, n: int) -> CommandStatus:
    return _play(editor, editor.macros.keys, max(1, n))


def _with_slot(editor: EditorState, f: bool, n: int, prompt: str, action: typing.Callable[[int], CommandStatus]):
    "Run action on the slot named by the argument, or by the next key typed."
    if f:
        editor.macros.check_slot(n)
        return action(n)

    def slot_key(key: Key) -> CommandStatus:
        if key.modifiers or key.digit is None:
            return CommandStatus.ABORT
        return action(key.digit)

    editor.capture_next_key(prompt, slot_key)
    return CommandStatus.SUCCESS


def call_macro_slot(editor: EditorState, f: bool, n: int) -> CommandStatus:
    def play(slot: int) -> CommandStatus:
        macros = editor.macros
        if macros.recording:
            editor.display.set_message("Can't execute macro while defining it")
            return CommandStatus.FAILURE
        if not macros.slots[slot]:
            editor.display.set_message(f"Macro slot {slot} is empty")
            return CommandStatus.FAILURE
        if not macros.play_slot(slot, editor.handle_key, lambda: editor.running):
            return CommandStatus.FAILURE
        return CommandStatus.SUCCESS

    return _with_slot(editor, f, n, "Execute macro from slot (0-9): ", play)


def store_kbd_macro(editor: EditorState, f: bool, n: int) -> CommandStatus:
    def store(slot: int) -> CommandStatus:
        if not editor.macros.save_to_slot(slot):
            editor.display.set_message("No keyboard macro defined")
            return CommandStatus.FAILURE
        editor.display.set_message(f"Macro saved to slot {slot}")
        return CommandStatus.SUCCESS

    return _with_slot(editor, f, n, "Store macro to slot (0-9): ", store)


def load_kbd_macro(editor: EditorState, f: bool, n: int) -> CommandStatus:
    def load(slot: int) -> CommandStatus:
        if not editor.macros.load_from_slot(slot):
            editor.display.set_message(f"Macro slot {slot} is empty")
            return CommandStatus.FAILURE
        editor.display.set_message(f"Macro loaded from slot {slot} ({len(editor.macros.keys)} keys)")
        return CommandStatus.SUCCESS

    return _with_slot(editor, f, n, "Load macro from slot (0-9): ", load)


def save_macros_to_file(editor: EditorState, f: bool, n: int) -> CommandStatus:
    path = editor.settings.macros_path
    try:
        macro_store.save_macros(path, editor.macros.slots)
    except OSError as e:
        editor.display.set_message(f"Error saving macros: {e}")
        return CommandStatus.FAILURE
    editor.display.set_message(f"Saved {editor.macros.stored_count()} macro(s) to {path}")
    return CommandStatus.SUCCESS


def load_macros_from_file(editor: EditorState, f: bool, n: int) -> CommandStatus:
    path = editor.settings.macros_path
    try:
        slots = macro_store.load_macros(path)
    except (OSError, msgspec.DecodeError) as e:
        editor.display.set_message(f"Error loading macros: {e}")
        return CommandStatus.FAILURE
    count = sum(1 for slot in slots if slot)
    if count == 0:
        editor.display.set_message(f"No macros found in {path}")
        return CommandStatus.SUCCESS
    editor.macros.slots = slots
    editor.display.set_message(f"Loaded {count} macro(s) from {path}")
    return CommandStatus.SUCCESS
