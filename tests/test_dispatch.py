# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from quern.commontypes import CommandError, CommandStatus, Position
from quern.editor.keys import Key


def test_self_insert(driver):
    driver.type("hi")
    assert driver.text == "hi"
    assert driver.cursor == Position(line=0, col=2)
    assert driver.editor.current_buffer.modified


def test_prefix_argument_repeats_self_insert(driver):
    driver.keys("C-u a")
    assert driver.text == "aaaa"
    driver.keys("M-1 2 b")
    assert driver.text == "aaaa" + "b" * 12


def test_meta_digit_repeats_command(driver):
    driver.load("abcdefgh")
    driver.keys("M-3 C-f")
    assert driver.cursor == Position(line=0, col=3)


def test_prefix_argument_shows_status(driver):
    driver.keys("C-u C-u")
    assert driver.message == "C-u C-u"
    driver.keys("C-f")
    assert not driver.editor.prefix.active


def test_unbound_key(driver):
    status = driver.keys("C-x z")
    assert status is CommandStatus.FAILURE
    assert driver.message == "Key not bound"
    assert driver.editor.display.alerts == 1


def test_keyboard_quit(driver):
    assert driver.keys("C-g") is CommandStatus.ABORT
    assert driver.message == "Quit"


def test_kill_and_yank(driver):
    driver.type("hello")
    driver.keys("C-a C-k")
    assert driver.text == ""
    assert driver.editor.kill_ring.entries == ["hello"]
    driver.keys("C-y")
    assert driver.text == "hello"
    assert driver.cursor == Position(line=0, col=5)


def test_universal_argument_multiplies_motion(driver):
    driver.load("x" * 30)
    driver.keys("C-u C-u C-f")
    assert driver.cursor == Position(line=0, col=16)
    driver.keys("C-u - C-f")
    assert driver.cursor == Position(line=0, col=12)
    assert not driver.editor.prefix.active


def test_kill_line_at_end_of_buffer_leaves_kill_ring_alone(driver):
    driver.load("hello\n")
    driver.keys("C-k M->")
    assert driver.keys("C-k") is CommandStatus.FAILURE
    assert driver.message == "End of buffer"
    assert driver.editor.kill_ring.entries == ["hello"]
    driver.keys("C-y")
    assert driver.text == "\nhello"


def test_kill_line_with_arguments(driver):
    driver.load("one\ntwo\nthree", col=2)
    driver.keys("M-0 C-k")
    assert driver.text == "e\ntwo\nthree"
    assert driver.cursor == Position(line=0, col=0)
    driver.keys("C-n M-2 C-k")
    assert driver.text == "e\n"
    assert driver.editor.kill_ring.entries == ["on", "two\nthree"]


def test_kill_line_negative_argument_kills_to_end_of_line(driver):
    driver.load("one two\nthree", col=4)
    assert driver.keys("M-- C-k") is CommandStatus.SUCCESS
    assert driver.text == "one \nthree"
    assert driver.editor.kill_ring.entries == ["two"]


def test_consecutive_kill_lines_merge(driver):
    driver.load("one\ntwo\nthree")
    driver.keys("C-k C-k C-k")
    assert driver.text == "\nthree"
    assert driver.editor.kill_ring.entries == ["one\ntwo"]


def test_movement_separates_kills(driver):
    driver.load("one\ntwo")
    driver.keys("C-k C-n C-a C-k")
    assert driver.editor.kill_ring.entries == ["one", "two"]


def test_yank_pop(driver):
    driver.type("one")
    driver.keys("C-a C-k")
    driver.type("two")
    driver.keys("C-a C-k")
    driver.keys("C-y")
    assert driver.text == "two"
    driver.keys("M-y")
    assert driver.text == "one"
    driver.keys("M-y")
    assert driver.text == "two"


def test_yank_pop_needs_yank(driver):
    assert driver.keys("M-y") is CommandStatus.FAILURE
    assert driver.message == "Previous command was not a yank"


def test_kill_region(driver):
    driver.load("hello world")
    driver.keys("C-SPC M-f C-w")
    assert driver.text == " world"
    assert driver.editor.kill_ring.yank_text() == "hello"


def test_kill_region_without_mark(driver):
    assert driver.keys("C-w") is CommandStatus.FAILURE
    assert driver.message == "No mark set"


def test_quoted_insert(driver):
    driver.keys("C-q C-l C-q C-m")
    assert driver.text == "\x0c\n"


def test_zap_to_char(driver):
    driver.load("hello world")
    driver.keys("M-z")
    assert driver.message == "Zap to char: "
    driver.type("o")
    assert driver.text == " world"
    assert driver.editor.kill_ring.yank_text() == "hello"


def test_zap_to_char_not_found(driver):
    driver.load("hello")
    driver.keys("M-z")
    assert driver.keys("q") is CommandStatus.FAILURE
    assert driver.message == "'q' not found"
    assert driver.text == "hello"


def test_isearch(driver):
    driver.load("alpha beta alpha")
    driver.keys("C-s")
    assert driver.message == "I-search: "
    driver.type("be")
    assert driver.cursor == Position(line=0, col=6)
    assert driver.message == "I-search: be"
    driver.keys("C-m")
    assert driver.editor.search is None
    assert driver.editor.last_search == "be"


def test_isearch_repeat_and_abort(driver):
    driver.load("alpha beta alpha")
    driver.keys("C-s")
    driver.type("alpha")
    assert driver.cursor == Position(line=0, col=0)
    driver.keys("C-s")
    assert driver.cursor == Position(line=0, col=11)
    assert driver.keys("C-g") is CommandStatus.ABORT
    assert driver.cursor == Position(line=0, col=0)
    assert driver.editor.search is None


def test_isearch_failing(driver):
    driver.load("alpha")
    driver.keys("C-s")
    assert driver.keys("z") is CommandStatus.FAILURE
    assert driver.message == "Failing I-search: z"


def test_hunt_uses_last_search(driver):
    driver.load("x foo y foo")
    assert driver.keys("M-s") is CommandStatus.FAILURE
    assert driver.message == "No previous search"
    driver.editor.last_search = "foo"
    driver.keys("M-s")
    assert driver.cursor == Position(line=0, col=2)
    driver.keys("M-s")
    assert driver.cursor == Position(line=0, col=8)
    driver.keys("M-s")
    assert driver.cursor == Position(line=0, col=2)
    assert driver.message == "Wrapped: foo"


def test_query_replace_all(driver):
    driver.load("foo foo foo")
    driver.keys("M-%")
    driver.type("foo")
    driver.keys("C-m")
    assert driver.message == "Query replace foo with: "
    driver.type("bar")
    driver.keys("C-m")
    assert driver.editor.query_replace is not None
    driver.type("!")
    assert driver.text == "bar bar bar"
    assert driver.message == "Replaced 3 occurrences"
    assert driver.editor.query_replace is None


def test_query_replace_step(driver):
    driver.load("foo foo foo")
    driver.keys("M-%")
    driver.type("foo")
    driver.keys("C-m")
    driver.type("bar")
    driver.keys("C-m")
    driver.type("yny")
    assert driver.text == "bar foo bar"
    assert driver.message == "Replaced 2 occurrences"


def test_replace_string(driver):
    driver.load("a.a.a")
    driver.keys("M-r")
    driver.type("a")
    driver.keys("C-m")
    driver.type("bb")
    driver.keys("C-m")
    assert driver.text == "bb.bb.bb"
    assert driver.message == "Replaced 3 occurrences"


def test_prompt_abort(driver):
    driver.keys("M-g")
    assert driver.editor.prompt is not None
    assert driver.keys("C-g") is CommandStatus.ABORT
    assert driver.editor.prompt is None


def test_goto_line(driver):
    driver.load("one\ntwo\nthree")
    driver.keys("M-g")
    driver.type("3")
    driver.keys("C-m")
    assert driver.cursor == Position(line=2, col=0)
    driver.keys("M-2 M-g")
    assert driver.cursor == Position(line=1, col=0)


def test_goto_line_invalid(driver):
    driver.keys("M-g")
    driver.type("x")
    assert driver.keys("C-m") is CommandStatus.FAILURE
    assert driver.message == "Invalid line number"


def test_extended_command_completion(driver):
    driver.load("abc")
    driver.keys("M-x")
    driver.type("forw")
    driver.keys("C-i")
    assert driver.editor.prompt.input == "forward-"
    driver.type("c")
    driver.keys("C-i")
    assert driver.editor.prompt.input == "forward-char"
    driver.keys("C-m")
    assert driver.cursor == Position(line=0, col=1)


def test_extended_command_unknown(driver):
    driver.keys("M-x")
    driver.type("frobnicate")
    assert driver.keys("C-m") is CommandStatus.FAILURE
    assert driver.message == "No command named frobnicate"


def test_describe_key(driver):
    driver.keys("M-?")
    driver.keys("C-f")
    assert driver.message == "C-f runs the command forward-char"
    driver.keys("M-? C-x z")
    assert driver.message == "C-x z is not bound"
    driver.keys("M-? q")
    assert driver.message == "q runs the command self-insert-command"
    assert driver.text == ""


def test_describe_bindings(driver):
    driver.keys("F1")
    assert driver.editor.current_buffer.name == "*Bindings*"
    assert "C-f" in driver.text
    assert "forward-char" in driver.text


def test_command_error_becomes_message(driver):
    status = driver.keys("M-1 M-2 C-x M-s")
    assert status is CommandStatus.FAILURE
    assert driver.message == "Macro slot must be 0-9"


def test_unexpected_exception_is_contained(driver):
    def broken(editor, f, n):
        raise RuntimeError("boom")

    def refuses(editor, f, n):
        raise CommandError("Not today")

    driver.editor.bindings.bind(Key.ctlx("z"), broken, "broken")
    driver.editor.bindings.bind(Key.ctlx("y"), refuses, "refuses")
    assert driver.keys("C-x z") is CommandStatus.FAILURE
    assert driver.message == "Command failed; see log"
    assert driver.keys("C-x y") is CommandStatus.FAILURE
    assert driver.message == "Not today"
    assert driver.editor.running


def test_quit(driver):
    driver.keys("C-x C-c")
    assert not driver.editor.running
