from quern.commontypes import Position
from quern.editor.killring import KillRing, YankAnchor


def kill(ring: KillRing, text: str, prepend: bool = False):
    ring.begin_command()
    ring.start_kill()
    if prepend:
        ring.kill_prepend(text)
    else:
        ring.kill_append(text)


def test_consecutive_kills_merge():
    ring = KillRing()
    kill(ring, "hello")
    kill(ring, " world")
    assert len(ring) == 1
    assert ring.yank_text() == "hello world"


def test_prepend_merges_at_front():
    ring = KillRing()
    kill(ring, "world")
    kill(ring, "hello ", prepend=True)
    assert ring.yank_text() == "hello world"


def test_intervening_command_separates_kills():
    ring = KillRing()
    kill(ring, "one")
    ring.begin_command()
    kill(ring, "two")
    assert ring.entries == ["one", "two"]
    assert ring.yank_text() == "two"


def test_append_next_kill_merges_across_commands():
    ring = KillRing()
    kill(ring, "one")
    ring.begin_command()
    ring.begin_command()
    ring.append_next_kill()
    ring.begin_command()
    ring.start_kill()
    ring.kill_append("two")
    assert ring.entries == ["onetwo"]


def test_capacity():
    ring = KillRing(max_entries=2)
    for text in ("a", "b", "c"):
        ring.begin_command()
        kill(ring, text)
    assert ring.entries == ["b", "c"]


def test_empty_ring():
    ring = KillRing()
    assert ring.yank_text() is None
    assert ring.yank_text_at(3) is None
    assert ring.cycle_kill_ring() == 0


def test_cycle_wraps():
    ring = KillRing()
    for text in ("a", "b", "c"):
        ring.begin_command()
        kill(ring, text)
    ring.reset_index()
    assert ring.yank_text_at(ring.index) == "c"
    assert ring.yank_text_at(ring.cycle_kill_ring()) == "b"
    assert ring.yank_text_at(ring.cycle_kill_ring()) == "a"
    assert ring.yank_text_at(ring.cycle_kill_ring()) == "c"


def test_yank_anchor_survives_only_one_command():
    ring = KillRing()
    anchor = YankAnchor(start=Position(line=0, col=0), end=Position(line=0, col=3))
    ring.begin_command()
    ring.record_yank(anchor)
    ring.begin_command()
    assert ring.last_was_yank
    assert ring.anchor == anchor
    ring.begin_command()
    assert not ring.last_was_yank
    assert ring.anchor is None
