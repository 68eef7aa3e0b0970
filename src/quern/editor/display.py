from __future__ import annotations

import collections.abc
import typing


class Display:
    """The status line and the bits of screen state commands may poke at.

    The screen painter consumes all of it.
    """

    def __init__(self, bell: typing.Optional[collections.abc.Callable[[], None]] = None, show_line_numbers: bool = False):
        self.message: typing.Optional[str] = None
        self.show_line_numbers = show_line_numbers
        self.needs_redraw = True
        self.alerts = 0
        self._bell = bell

    def set_message(self, text: str):
        self.message = text

    def clear_message(self):
        self.message = None

    def force_redraw(self):
        self.needs_redraw = True

    def alert(self):
        self.alerts += 1
        if self._bell is not None:
            self._bell()

    def take_redraw(self) -> bool:
        needs_redraw, self.needs_redraw = self.needs_redraw, False
        return needs_redraw
