"""Tests for sent-message history and draft preservation."""
import sys
import os
import random
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import pytest

from msgcompose.buffer import MemoryTextBuffer
from msgcompose.history import HistoryNavigator, MAX_MESSAGE_HISTORY


def make_navigator(*sent, draft="", max_size=MAX_MESSAGE_HISTORY):
    buf = MemoryTextBuffer()
    nav = HistoryNavigator(buf, max_size=max_size)
    for text in sent:
        nav.record_sent(text)
    buf.set_text(draft)
    return nav, buf


def test_browse_and_return_to_draft():
    nav, buf = make_navigator("hi", "there", draft="new msg")

    nav.show_previous()
    assert buf.text() == "there"
    nav.show_previous()
    assert buf.text() == "hi"
    nav.show_next()
    assert buf.text() == "there"
    nav.show_next()
    assert buf.text() == "new msg"
    assert nav.at_current
    assert nav.index == nav.size == 2


def test_recalled_entry_puts_cursor_at_end():
    nav, buf = make_navigator("hello")
    nav.show_previous()
    assert buf.cursor_position() == 5


def test_recorded_message_is_shown_first_and_draft_comes_back():
    nav, buf = make_navigator("older", draft="half typed")
    nav.record_sent("just sent")
    nav.show_previous()
    assert buf.text() == "just sent"
    nav.show_next()
    assert buf.text() == "half typed"


def test_previous_without_history_keeps_draft():
    nav, buf = make_navigator(draft="D")
    nav.show_previous()
    nav.show_next()
    assert buf.text() == "D"
    assert nav.index == 0
    assert not nav.correction


def test_previous_stops_at_oldest():
    nav, buf = make_navigator("one", "two", "three")
    for _ in range(3):
        nav.show_previous()
    assert buf.text() == "one"
    assert nav.index == 0
    events = []
    buf.add_listener(lambda *args: events.append(args))
    nav.show_previous()
    assert buf.text() == "one"
    assert nav.index == 0
    assert events == []


def test_single_entry_previous_twice():
    nav, buf = make_navigator("only")
    nav.show_previous()
    nav.show_previous()
    assert buf.text() == "only"
    assert nav.index == 0


def test_next_at_current_is_noop():
    nav, buf = make_navigator("a", draft="typing")
    events = []
    buf.add_listener(lambda *args: events.append(args))
    for _ in range(3):
        nav.show_next()
    assert buf.text() == "typing"
    assert nav.at_current
    assert events == []


def test_blank_messages_are_not_recorded():
    nav, buf = make_navigator("kept")
    nav.show_previous()
    index = nav.index
    nav.record_sent("")
    nav.record_sent("   ")
    nav.record_sent("\n\t")
    assert nav.entries == ("kept",)
    assert nav.index == index


def test_duplicate_moves_to_newest():
    nav, buf = make_navigator("a", "b", "c")
    nav.record_sent("a")
    assert nav.entries == ("b", "c", "a")
    nav.show_previous()
    assert buf.text() == "a"


def test_oldest_entry_evicted_at_capacity():
    nav, buf = make_navigator("1", "2", "3", max_size=3)
    nav.record_sent("4")
    assert nav.entries == ("2", "3", "4")
    assert nav.index == 3


def test_history_bounded_and_unique_for_random_sends():
    rng = random.Random(7)
    nav, buf = make_navigator(max_size=10)
    for _ in range(500):
        nav.record_sent(rng.choice("abcdefghijklmnopqrstuvwxyz") * rng.randint(1, 2))
        assert nav.size <= 10
        assert len(set(nav.entries)) == nav.size
        assert nav.index == nav.size


def test_index_stays_in_range_for_random_navigation():
    rng = random.Random(11)
    nav, buf = make_navigator("a", "b", "c", draft="d")
    actions = [nav.show_previous, nav.show_next, nav.show_first, nav.show_last,
               lambda: nav.record_sent(rng.choice(["x", "y", "a"])),
               lambda: buf.insert_text("z")]
    for _ in range(1000):
        rng.choice(actions)()
        assert 0 <= nav.index <= nav.size


def test_sending_the_draft_discards_it():
    nav, buf = make_navigator("old", draft="draft text")
    nav.show_previous()
    assert nav.draft == "draft text"
    nav.record_sent("draft text")
    assert nav.draft == ""


def test_show_last_jumps_to_newest():
    nav, buf = make_navigator("first", "second", "third")
    nav.show_last()
    assert buf.text() == "third"
    assert nav.index == 2
    nav.show_previous()
    assert buf.text() == "second"


def test_show_first_without_draft_jumps_to_oldest():
    nav, buf = make_navigator("first", "second", "third")
    nav.show_first()
    assert buf.text() == "first"
    assert nav.index == 0


def test_show_first_with_draft_returns_to_draft():
    nav, buf = make_navigator("first", "second", draft="wip")
    nav.show_previous()
    nav.show_previous()
    assert buf.text() == "first"
    nav.show_first()
    assert buf.text() == "wip"
    assert nav.at_current


def test_correction_flag_follows_navigation():
    changes = []
    buf = MemoryTextBuffer("draft")
    nav = HistoryNavigator(buf, on_correction_changed=changes.append)
    nav.record_sent("a")
    nav.record_sent("b")

    nav.show_previous()
    assert nav.correction
    assert changes[-1] is True
    nav.show_next()
    assert not nav.correction
    assert changes[-1] is False
    assert buf.text() == "draft"


def test_edited_newest_entry_is_shown_again():
    nav, buf = make_navigator("a", "b", draft="draft")
    nav.show_previous()
    assert buf.text() == "b"
    buf.insert_text("!")
    nav.show_previous()
    assert buf.text() == "b"
    assert nav.index == 1
    assert not nav.correction
    nav.show_previous()
    assert buf.text() == "a"
    nav.show_next()
    nav.show_next()
    assert buf.text() == "draft"


def test_clear():
    nav, buf = make_navigator("a", "b")
    nav.show_previous()
    nav.clear()
    assert nav.size == 0
    assert nav.index == 0
    assert not nav.correction
    buf.set_text("after")
    nav.show_previous()
    nav.show_last()
    nav.show_first()
    assert buf.text() == "after"


def test_max_size_must_be_positive():
    with pytest.raises(ValueError):
        HistoryNavigator(MemoryTextBuffer(), max_size=0)
