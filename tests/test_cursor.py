"""Tests for the token cursor."""

from shon.cursor import Cursor


def test_cursor_walks_tokens():
    c = Cursor(["foo", "bar"])

    assert c.more()
    assert c.peek() == "foo"
    assert c.next() == "foo"

    assert c.more()
    assert c.peek() == "bar"
    assert c.next() == "bar"

    assert not c.more()
    assert c.peek() is None
    assert c.next() is None


def test_cursor_empty():
    c = Cursor([])
    assert not c.more()
    assert c.peek() is None
    assert c.next() is None


def test_cursor_peek_does_not_move():
    c = Cursor(["a"])
    assert c.peek() == "a"
    assert c.peek() == "a"
    assert c.position == 0


def test_cursor_position_and_remaining():
    c = Cursor(["a", "b", "c"])
    c.next()
    assert c.position == 1
    assert c.remaining() == ["b", "c"]


def test_cursor_copies_tokens():
    tokens = ["a"]
    c = Cursor(tokens)
    tokens.append("b")
    assert c.remaining() == ["a"]
