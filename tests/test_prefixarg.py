import pytest

from quern.editor.keys import Key
from quern.editor.prefixarg import PrefixArgument


def feed_all(prefix: PrefixArgument, keys):
    return [prefix.feed(key) for key in keys]


@pytest.mark.parametrize(
    "keys,expected",
    (
        ([Key.ctrl("u")], 4),
        ([Key.ctrl("u"), Key.ctrl("u")], 16),
        ([Key.ctrl("u"), Key.ctrl("u"), Key.ctrl("u")], 64),
        ([Key.meta("5")], 5),
        ([Key.meta("5"), Key.meta("2")], 52),
        ([Key.meta("5"), Key.char("2")], 52),
        ([Key.ctrl("u"), Key.char("-")], -4),
        ([Key.meta("-")], -1),
        ([Key.meta("-"), Key.meta("3")], -3),
        ([Key.ctrl("u"), Key.char("5")], 20),
    ),
)
def test_accumulates(keys, expected: int):
    prefix = PrefixArgument()
    assert all(feed_all(prefix, keys))
    has_arg, n, prefix_keys = prefix.take()
    assert has_arg
    assert n == expected
    assert prefix_keys == keys


def test_inactive_by_default():
    prefix = PrefixArgument()
    assert prefix.snapshot() == (False, 1)
    assert prefix.take() == (False, 1, [])


def test_plain_digits_self_insert_when_inactive():
    prefix = PrefixArgument()
    assert not prefix.feed(Key.char("5"))
    assert not prefix.feed(Key.char("-"))
    assert not prefix.active


def test_non_argument_key_ends_accumulation():
    prefix = PrefixArgument()
    prefix.feed(Key.meta("3"))
    assert not prefix.feed(Key.ctrl("f"))
    assert prefix.snapshot() == (True, 3)


def test_take_resets():
    prefix = PrefixArgument()
    prefix.feed(Key.ctrl("u"))
    prefix.take()
    assert not prefix.active
    assert prefix.keys == []
    assert prefix.snapshot() == (False, 1)


def test_universal_argument_after_digits_is_consumed():
    prefix = PrefixArgument()
    feed_all(prefix, [Key.ctrl("u"), Key.char("3")])
    assert prefix.feed(Key.ctrl("u"))
    assert prefix.effective == 12


def test_status_text():
    prefix = PrefixArgument()
    prefix.feed(Key.ctrl("u"))
    assert prefix.status_text() == "C-u"
    prefix.feed(Key.ctrl("u"))
    assert prefix.status_text() == "C-u C-u"
    prefix.feed(Key.char("-"))
    assert prefix.status_text() == "Arg: -16"
    prefix.reset()
    prefix.feed(Key.meta("7"))
    assert prefix.status_text() == "Arg: 7"
