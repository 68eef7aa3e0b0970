from __future__ import annotations

from ..editor.bindings import BindingTable
from ..editor.keys import DEL, Key, KeyFlag, SpecialCode
from . import editing, files, killing, macros, misc, navigation, search, windows

# fmt: off
DEFAULT_BINDINGS = [
    # motion
    (Key.ctrl("f"), navigation.forward_char, "forward-char"),
    (Key.special(SpecialCode.RIGHT), navigation.forward_char, "forward-char"),
    (Key.ctrl("b"), navigation.backward_char, "backward-char"),
    (Key.special(SpecialCode.LEFT), navigation.backward_char, "backward-char"),
    (Key.ctrl("n"), navigation.next_line, "next-line"),
    (Key.special(SpecialCode.DOWN), navigation.next_line, "next-line"),
    (Key.ctrl("p"), navigation.previous_line, "previous-line"),
    (Key.special(SpecialCode.UP), navigation.previous_line, "previous-line"),
    (Key.ctrl("a"), navigation.beginning_of_line, "beginning-of-line"),
    (Key.special(SpecialCode.HOME), navigation.beginning_of_line, "beginning-of-line"),
    (Key.ctrl("e"), navigation.end_of_line, "end-of-line"),
    (Key.special(SpecialCode.END), navigation.end_of_line, "end-of-line"),
    (Key.meta("m"), navigation.back_to_indentation, "back-to-indentation"),
    (Key.ctrl("v"), navigation.scroll_down, "scroll-down"),
    (Key.special(SpecialCode.PAGE_DOWN), navigation.scroll_down, "scroll-down"),
    (Key.meta("v"), navigation.scroll_up, "scroll-up"),
    (Key.special(SpecialCode.PAGE_UP), navigation.scroll_up, "scroll-up"),
    (Key.meta("<"), navigation.beginning_of_buffer, "beginning-of-buffer"),
    (Key.meta(">"), navigation.end_of_buffer, "end-of-buffer"),
    (Key.meta("f"), navigation.forward_word, "forward-word"),
    (Key.meta("b"), navigation.backward_word, "backward-word"),
    (Key.meta("g"), navigation.goto_line, "goto-line"),
    # editing
    (Key.ctrl("d"), editing.delete_char, "delete-char"),
    (Key.special(SpecialCode.DELETE), editing.delete_char, "delete-char"),
    (Key(code=DEL), editing.delete_backward_char, "delete-backward-char"),
    (Key.ctrl("h"), editing.delete_backward_char, "delete-backward-char"),
    (Key.ctrl("m"), editing.newline, "newline"),
    (Key.ctrl("o"), editing.open_line, "open-line"),
    (Key.ctrl("j"), editing.newline_and_indent, "newline-and-indent"),
    (Key.ctrl("i"), editing.tab_to_tab_stop, "tab-to-tab-stop"),
    (Key.meta("i"), editing.tab_to_tab_stop, "tab-to-tab-stop"),
    (Key.ctrl("t"), editing.transpose_chars, "transpose-chars"),
    (Key.ctrl("q"), editing.quoted_insert, "quoted-insert"),
    (Key.meta("z"), editing.zap_to_char, "zap-to-char"),
    (Key.meta("t"), editing.transpose_words, "transpose-words"),
    (Key.ctlx_ctrl("t"), editing.transpose_lines, "transpose-lines"),
    (Key.ctlx_ctrl("k"), editing.copy_line, "copy-line"),
    (Key.ctlx("d"), editing.duplicate_line, "duplicate-line"),
    (Key.meta_ctrl("o"), editing.split_line, "split-line"),
    (Key.meta("^"), editing.delete_indentation, "delete-indentation"),
    (Key.meta(" "), editing.just_one_space, "just-one-space"),
    (Key.meta("\\"), editing.delete_horizontal_space, "delete-horizontal-space"),
    (Key.ctlx_ctrl("o"), editing.delete_blank_lines, "delete-blank-lines"),
    (Key.ctlx("t"), editing.trim_line, "trim-line"),
    (Key.ctrl("/"), editing.undo, "undo"),
    (Key.ctrl("_"), editing.undo, "undo"),
    # killing and yanking
    (Key.ctrl("k"), killing.kill_line, "kill-line"),
    (Key.meta("d"), killing.kill_word, "kill-word"),
    (Key(code=DEL, modifiers=KeyFlag.META), killing.backward_kill_word, "backward-kill-word"),
    (Key.ctrl(" "), killing.set_mark_command, "set-mark-command"),
    (Key.ctlx_ctrl("x"), killing.exchange_point_and_mark, "exchange-point-and-mark"),
    (Key.ctlx("h"), killing.mark_whole_buffer, "mark-whole-buffer"),
    (Key.ctrl("w"), killing.kill_region, "kill-region"),
    (Key.meta("w"), killing.kill_ring_save, "kill-ring-save"),
    (Key.meta_ctrl("w"), killing.append_next_kill, "append-next-kill"),
    (Key.ctrl("y"), killing.yank, "yank"),
    (Key.meta("y"), killing.yank_pop, "yank-pop"),
    # search and replace
    (Key.ctrl("s"), search.isearch_forward, "isearch-forward"),
    (Key.ctrl("r"), search.isearch_backward, "isearch-backward"),
    (Key.meta("s"), search.hunt_forward, "hunt-forward"),
    (Key.meta("S"), search.hunt_backward, "hunt-backward"),
    (Key.meta("%"), search.query_replace, "query-replace"),
    (Key.meta("r"), search.replace_string, "replace-string"),
    # files and buffers
    (Key.ctlx_ctrl("f"), files.find_file, "find-file"),
    (Key.ctlx("i"), files.insert_file, "insert-file"),
    (Key.ctlx_ctrl("s"), files.save_buffer, "save-buffer"),
    (Key.ctlx_ctrl("w"), files.write_file, "write-file"),
    (Key.ctlx("b"), files.switch_to_buffer, "switch-to-buffer"),
    (Key.ctlx_ctrl("b"), files.list_buffers, "list-buffers"),
    (Key.ctlx("k"), files.kill_buffer, "kill-buffer"),
    (Key.ctlx("n"), files.next_buffer, "next-buffer"),
    (Key.ctlx("p"), files.previous_buffer, "previous-buffer"),
    (Key.meta("~"), files.not_modified, "not-modified"),
    (Key.ctlx_ctrl("q"), files.toggle_read_only, "toggle-read-only"),
    (Key.ctlx_ctrl("r"), files.revert_buffer, "revert-buffer"),
    (Key.ctlx("a"), files.auto_save_mode, "auto-save-mode"),
    # windows
    (Key.ctlx("2"), windows.split_window_below, "split-window-below"),
    (Key.ctlx("1"), windows.delete_other_windows, "delete-other-windows"),
    (Key.ctlx("0"), windows.delete_window, "delete-window"),
    (Key.ctlx("o"), windows.other_window, "other-window"),
    # keyboard macros
    (Key.ctlx("("), macros.start_kbd_macro, "kmacro-start-macro"),
    (Key.ctlx(")"), macros.end_kbd_macro, "kmacro-end-macro"),
    (Key.ctlx("e"), macros.call_last_kbd_macro, "kmacro-end-and-call-macro"),
    (Key.ctlx_meta("e"), macros.call_macro_slot, "call-macro-slot"),
    (Key.ctlx_meta("s"), macros.store_kbd_macro, "store-kbd-macro"),
    (Key.ctlx_meta("l"), macros.load_kbd_macro, "load-kbd-macro"),
    (Key.ctlx_meta("S"), macros.save_macros_to_file, "save-macros-to-file"),
    (Key.ctlx_meta("L"), macros.load_macros_from_file, "load-macros-from-file"),
    # everything else
    (Key.ctrl("g"), misc.keyboard_quit, "keyboard-quit"),
    (Key.ctrl("l"), misc.redraw_display, "redraw-display"),
    (Key.ctlx("#"), misc.toggle_line_numbers, "toggle-line-numbers"),
    (Key.ctlx("="), misc.what_cursor_position, "what-cursor-position"),
    (Key.ctlx("l"), misc.what_line, "what-line"),
    (Key.meta("="), misc.count_words, "count-words"),
    (Key.meta("x"), misc.execute_extended_command, "execute-extended-command"),
    (Key.meta("?"), misc.describe_key, "describe-key"),
    (Key.function(1), misc.describe_bindings, "describe-bindings"),
    (Key.meta("!"), misc.shell_command, "shell-command"),
    (Key.ctlx_ctrl("c"), misc.save_buffers_kill_editor, "save-buffers-kill-emacs"),
]
# fmt: on


def default_bindings() -> BindingTable:
    table = BindingTable()
    for key, command, name in DEFAULT_BINDINGS:
        table.bind(key, command, name)
    return table
