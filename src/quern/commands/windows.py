from __future__ import annotations

import typing

from ..commontypes import CommandStatus

if typing.TYPE_CHECKING:
    from ..editor.state import EditorState


def split_window_below(editor: EditorState, f: bool, n: int) -> CommandStatus:
    if not editor.split_window():
        editor.display.set_message("Window too small to split")
        return CommandStatus.FAILURE
    return CommandStatus.SUCCESS


def delete_other_windows(editor: EditorState, f: bool, n: int) -> CommandStatus:
    editor.delete_other_windows()
    return CommandStatus.SUCCESS


def delete_window(editor: EditorState, f: bool, n: int) -> CommandStatus:
    if not editor.delete_window():
        editor.display.set_message("Can't delete the only window")
        return CommandStatus.FAILURE
    return CommandStatus.SUCCESS


def other_window(editor: EditorState, f: bool, n: int) -> CommandStatus:
    "Select the next window, or the nth one on from here with an argument."
    editor.other_window(n if f else 1)
    return CommandStatus.SUCCESS
