import argparse
import curses

import trio

from .commands import default_bindings
from .editor.bindings import BindingTable
from .editor.keys import ABORT_KEY
from .terminal.curses_terminal import CursesTerminal, safe_addstr
from .terminal.keystreams import make_keystream


def print_bindings(bindings: BindingTable):
    for binding in bindings.all_bindings():
        print(f"{binding.key.display_name():<16}{binding.name}")


print_bindings_parser = argparse.ArgumentParser(prog="quern-bindings")
print_bindings_parser.add_argument("prefix", nargs="?", default="")


def print_bindings_cli():
    prefix = print_bindings_parser.parse_args().prefix
    bindings = default_bindings()
    if prefix:
        for name in bindings.complete(prefix):
            print(name, " ".join(k.display_name() for k in bindings.keys_for(name)))
        return
    print_bindings(bindings)


def show_keys(stdscr):
    "Echo each decoded chord until C-g."
    terminal = CursesTerminal(stdscr)
    bindings = default_bindings()

    def show(row: int, text: str):
        stdscr.move(row, 0)
        stdscr.clrtoeol()
        safe_addstr(stdscr, row, 0, text)
        stdscr.refresh()

    async def runner():
        show(0, "Press keys; C-g to quit")
        async with make_keystream(terminal.events(), on_pending=lambda message: show(1, message)) as keystream:
            async for key in keystream:
                binding = bindings.lookup(key)
                show(1, f"{key.display_name()} (0x{key.packed:08x}) {binding.name if binding else ''}")
                if key == ABORT_KEY:
                    break

    trio.run(runner)


def print_keys_cli():
    curses.wrapper(show_keys)
