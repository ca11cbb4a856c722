"""Tests for the parser layer and its lazy readers."""

import pytest

from shon.cursor import Cursor
from shon.errors import ParseError
from shon.parser import (
    ArrayReader,
    ImplicitObjectReader,
    ObjectReader,
    parse_implicit_object,
    parse_tokens,
)
from shon.values import (
    EMPTY_ARRAY,
    EMPTY_OBJECT,
    Null,
    VArray,
    VBool,
    VObject,
    VScalar,
    VString,
)


def _parse(*tokens):
    cursor = Cursor(tokens)
    return parse_tokens(cursor), cursor


# ---------------------------------------------------------------------------
# Single-token values
# ---------------------------------------------------------------------------

def test_bool_flags():
    assert _parse("-t")[0] == VBool(True)
    assert _parse("-f")[0] == VBool(False)

def test_null_flags():
    assert _parse("-n")[0] is Null
    assert _parse("-u")[0] is Null

def test_empty_token_is_string():
    assert _parse("")[0] == VString("")

def test_escape_takes_next_token_verbatim():
    for token in ("[", "]", "-t", "--foo", "42", "--"):
        value, cursor = _parse("--", token)
        assert value == VString(token)
        assert not cursor.more()

def test_scalar_numeric():
    assert _parse("42")[0] == VScalar("42", True)
    assert _parse("-4.2e1")[0] == VScalar("-4.2e1", True)
    assert _parse("+10")[0] == VScalar("+10", True)

def test_scalar_text():
    assert _parse("foo")[0] == VScalar("foo", False)
    assert _parse("1+2i")[0] == VScalar("1+2i", False)

def test_empty_shorthands():
    value, _ = _parse("[]")
    assert isinstance(value, VArray)
    assert value.reader is EMPTY_ARRAY
    value, _ = _parse("[--]")
    assert isinstance(value, VObject)
    assert value.reader is EMPTY_OBJECT

def test_empty_readers_never_yield():
    assert not EMPTY_ARRAY.more()
    assert list(EMPTY_ARRAY) == []
    assert list(EMPTY_OBJECT) == []


# ---------------------------------------------------------------------------
# Parse errors
# ---------------------------------------------------------------------------

def test_no_tokens():
    with pytest.raises(ParseError, match="expected a value"):
        _parse()

def test_bare_close():
    with pytest.raises(ParseError, match="expected a value, got ']'"):
        _parse("]")

def test_escape_at_end():
    with pytest.raises(ParseError, match="unexpected end of input"):
        _parse("--")

def test_unknown_flag():
    with pytest.raises(ParseError, match="unexpected flag '-x'"):
        _parse("-x")
    with pytest.raises(ParseError, match="unexpected flag '--foo'"):
        _parse("--foo")

def test_open_at_end():
    with pytest.raises(ParseError, match="expected an array item, an object key, or ']'"):
        _parse("[")


# ---------------------------------------------------------------------------
# Array / object disambiguation
# ---------------------------------------------------------------------------

def test_open_close_is_array():
    value, cursor = _parse("[", "]")
    assert isinstance(value.reader, ArrayReader)
    assert list(value.reader) == []
    assert not cursor.more()

def test_key_after_open_is_object():
    value, _ = _parse("[", "--k", "v", "]")
    assert isinstance(value.reader, ObjectReader)

def test_escape_after_open_is_array():
    value, _ = _parse("[", "--", "--", "]")
    assert isinstance(value.reader, ArrayReader)
    assert list(value.reader) == [VString("--")]


# ---------------------------------------------------------------------------
# Laziness
# ---------------------------------------------------------------------------

def test_array_reader_is_lazy():
    value, cursor = _parse("[", "a", "b", "]", "tail")
    # only "[" has been consumed so far
    assert cursor.position == 1

    reader = value.reader
    assert reader.more()
    assert cursor.position == 2
    assert reader.next() == VScalar("a")

    assert reader.more()
    assert reader.next() == VScalar("b")
    assert cursor.position == 3

    assert not reader.more()
    assert reader.drained
    assert cursor.position == 4

    # a drained reader leaves the cursor alone
    assert not reader.more()
    assert cursor.peek() == "tail"

def test_object_reader_entries():
    value, cursor = _parse("[", "--a", "1", "--b=x", "--c", "[", "y", "]", "]")
    entries = []
    for key, item in value.reader:
        if isinstance(item, VArray):
            item = list(item.reader)
        entries.append((key, item))
    assert entries == [
        ("a", VScalar("1", True)),
        ("b", VScalar("x")),
        ("c", [VScalar("y")]),
    ]
    assert not cursor.more()

def test_object_equals_value_may_open_array():
    value, cursor = _parse("[", "--k=[", "1", "]", "]")
    key, item = next(value.reader)
    assert key == "k"
    assert [v.text for v in item.reader] == ["1"]
    assert list(value.reader) == []
    assert not cursor.more()

def test_object_equals_escape_reads_next_token():
    value, _ = _parse("[", "--k=--", "-t", "]")
    assert list(value.reader) == [("k", VString("-t"))]

def test_object_equals_empty_value():
    value, _ = _parse("[", "--k=", "]")
    assert list(value.reader) == [("k", VString(""))]

def test_object_value_splits_on_first_equals():
    value, _ = _parse("[", "--k=a=b", "]")
    assert list(value.reader) == [("k", VScalar("a=b"))]

def test_nested_arrays_consume_balanced_tokens():
    value, cursor = _parse("[", "[", "a", "]", "[", "]", "b", "]")
    outer = []
    for item in value.reader:
        if isinstance(item, VArray):
            outer.append([v.text for v in item.reader])
        else:
            outer.append(item.text)
    assert outer == [["a"], [], "b"]
    assert not cursor.more()


# ---------------------------------------------------------------------------
# Reader errors
# ---------------------------------------------------------------------------

def test_unclosed_array():
    value, _ = _parse("[", "a")
    with pytest.raises(ParseError, match="expected an array item or ']'"):
        list(value.reader)

def test_unclosed_object():
    value, _ = _parse("[", "--a", "1")
    with pytest.raises(ParseError, match="expected an object key or ']'"):
        list(value.reader)

def test_missing_object_key():
    value, _ = _parse("[", "--foo", "bar", "baz")
    with pytest.raises(ParseError, match="expected object key, got 'baz'"):
        list(value.reader)

def test_escape_is_not_a_key():
    value, _ = _parse("[", "--foo", "bar", "--", "x", "]")
    with pytest.raises(ParseError, match="expected object key, got '--'"):
        list(value.reader)

def test_object_value_missing():
    value, _ = _parse("[", "--foo")
    with pytest.raises(ParseError, match="expected a value"):
        list(value.reader)

def test_flag_inside_array():
    value, _ = _parse("[", "42", "--foo", "]")
    with pytest.raises(ParseError, match="unexpected flag '--foo'"):
        list(value.reader)


# ---------------------------------------------------------------------------
# Implicit object
# ---------------------------------------------------------------------------

def test_implicit_object_reads_to_end():
    cursor = Cursor(["--foo", "bar", "--qux", "-t"])
    value = parse_implicit_object(cursor)
    assert isinstance(value.reader, ImplicitObjectReader)
    assert list(value.reader) == [("foo", VScalar("bar")), ("qux", VBool(True))]
    assert not cursor.more()

def test_implicit_object_empty():
    value = parse_implicit_object(Cursor([]))
    assert list(value.reader) == []

def test_implicit_object_rejects_close():
    value = parse_implicit_object(Cursor(["--a", "1", "]"]))
    with pytest.raises(ParseError, match="expected object key, got ']'"):
        list(value.reader)
