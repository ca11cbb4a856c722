"""Parser layer: turns tokens into (lazy) SHON values.

Arrays and objects are not read up front. Their readers pull tokens from
the same cursor as the parser, so a reader must be drained completely,
in order, before anything else reads from the cursor.
"""

from __future__ import annotations

from typing import Iterator

from .cursor import Cursor
from .errors import ParseError
from .numbers import is_numeric
from .values import (
    EMPTY_ARRAY,
    EMPTY_OBJECT,
    Null,
    Value,
    VArray,
    VBool,
    VObject,
    VScalar,
    VString,
)

OPEN = "["
CLOSE = "]"
ESCAPE = "--"

_NULLS = ("-n", "-u")


class Parser:
    """Recursive-descent parser over a single cursor."""

    def __init__(self, cursor: Cursor) -> None:
        self.cursor = cursor

    def value(self) -> Value:
        """Read the next value from the cursor."""
        arg = self.cursor.next()
        if arg is None:
            raise ParseError("expected a value")
        return self.value_from(arg)

    def value_from(self, arg: str) -> Value:
        """Interpret *arg*, which has already been taken off the cursor."""
        if arg in _NULLS:
            return Null
        if arg == "":
            return VString("")
        if arg == OPEN:
            return self._array_or_object()
        if arg == CLOSE:
            raise ParseError(f"expected a value, got {CLOSE!r}")
        if arg == "[]":
            return VArray(EMPTY_ARRAY)
        if arg == "[--]":
            return VObject(EMPTY_OBJECT)
        if arg in ("-t", "-f"):
            return VBool(arg == "-t")
        if arg == ESCAPE:
            s = self.cursor.next()
            if s is None:
                raise ParseError(f"unexpected end of input: expected a string after {ESCAPE!r}")
            return VString(s)

        numeric = is_numeric(arg)
        if arg[0] == "-" and not numeric:
            raise ParseError(f"unexpected flag {arg!r}")
        return VScalar(arg, numeric)

    def _array_or_object(self) -> Value:
        arg = self.cursor.peek()
        if arg is None:
            raise ParseError(f"expected an array item, an object key, or {CLOSE!r}")
        if _is_key(arg):
            return VObject(ObjectReader(self))
        # [ ] is the same as []
        return VArray(ArrayReader(self))


def _is_key(arg: str) -> bool:
    return arg != ESCAPE and arg.startswith(ESCAPE)


# ---------------------------------------------------------------------------
# Readers
# ---------------------------------------------------------------------------

class _Reader:
    """Shared state for the array and object readers.

    ``more()`` has to take a token off the cursor to find out whether the
    closing ``]`` was reached. A token that is not ``]`` is held until the
    following ``next()``.
    """

    def __init__(self, parser: Parser) -> None:
        self._parser = parser
        self._pending: str | None = None
        self.drained = False

    def more(self) -> bool:
        if self.drained:
            return False
        if self._pending is not None:
            return True
        arg = self._parser.cursor.next()
        if arg is None:
            # Let next() report the unterminated structure.
            return True
        if arg == CLOSE:
            self.drained = True
            return False
        self._pending = arg
        return True

    def _take(self, expected: str) -> str:
        arg, self._pending = self._pending, None
        if arg is None:
            arg = self._parser.cursor.next()
        if arg is None:
            raise ParseError(f"expected {expected} or {CLOSE!r}")
        return arg

    def __iter__(self) -> Iterator:
        return self

    def __next__(self):
        if not self.more():
            raise StopIteration
        return self.next()


class ArrayReader(_Reader):
    """Reads array items until the closing ``]``."""

    def next(self) -> Value:
        return self._parser.value_from(self._take("an array item"))


class ObjectReader(_Reader):
    """Reads ``--key value`` and ``--key=value`` entries until ``]``."""

    def next(self) -> tuple[str, Value]:
        arg = self._take("an object key")
        if not _is_key(arg):
            raise ParseError(f"expected object key, got {arg!r}")

        key = arg[len(ESCAPE):]
        key, sep, rest = key.partition("=")
        if sep:
            return key, self._parser.value_from(rest)
        return key, self._parser.value()


class ImplicitObjectReader(ObjectReader):
    """Reads object entries until the tokens run out.

    Used when the whole input is the body of an object, e.g.
    ``--name foo --verbose -t``.
    """

    def more(self) -> bool:
        if self.drained:
            return False
        if self._pending is not None:
            return True
        arg = self._parser.cursor.next()
        if arg is None:
            self.drained = True
            return False
        if arg == CLOSE:
            raise ParseError(f"expected object key, got {CLOSE!r}")
        self._pending = arg
        return True


# ---------------------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------------------

def parse_tokens(cursor: Cursor) -> Value:
    """Parse one top-level value from *cursor*."""
    return Parser(cursor).value()


def parse_implicit_object(cursor: Cursor) -> Value:
    """Parse all of *cursor* as the entries of one object."""
    return VObject(ImplicitObjectReader(Parser(cursor)))
