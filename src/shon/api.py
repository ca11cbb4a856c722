"""Public entry points: parse tokens and decode them into a type."""

from __future__ import annotations

import logging
from typing import Any, Sequence

from .cursor import Cursor
from .decoder import decode_value
from .errors import ParseError, TrailingArgumentsError
from .options import Options
from .parser import parse_implicit_object, parse_tokens
from .shapes import ShapeCache, shape_of
from .values import Value

logger = logging.getLogger(__name__)


def parse_value(tokens: Sequence[str]) -> tuple[Value, Cursor]:
    """Parse the first value in *tokens*.

    The returned value may hold lazy readers; decode it before touching
    the cursor.
    """
    cursor = Cursor(tokens)
    return parse_tokens(cursor), cursor


def decode(
    value: Value,
    into: Any = Any,
    options: Options | None = None,
    *,
    cache: ShapeCache | None = None,
) -> Any:
    """Decode a parsed *value* into the type or shape *into*."""
    shape = shape_of(into, cache)
    try:
        return decode_value(shape, value, options)
    except RecursionError:
        raise _too_deep() from None


def parse(
    tokens: Sequence[str],
    into: Any = Any,
    options: Options | None = None,
    *,
    cache: ShapeCache | None = None,
) -> Any:
    """Parse *tokens* as a single SHON value and decode it into *into*.

    Usage::

        parse(["[", "--name", "foo", "--tags", "[", "a", "b", "]", "]"])
        # → {"name": "foo", "tags": ["a", "b"]}

        parse(["42"], int)   # → 42

    Raises :class:`~shon.errors.TrailingArgumentsError` if tokens are
    left over after the value.
    """
    shape = shape_of(into, cache)
    logger.debug("parsing %d tokens into %s", len(tokens), shape)
    cursor = Cursor(tokens)
    try:
        result = decode_value(shape, parse_tokens(cursor), options)
    except RecursionError:
        raise _too_deep() from None
    _check_drained(cursor)
    return result


def parse_object(
    tokens: Sequence[str],
    into: Any = dict,
    options: Options | None = None,
    *,
    cache: ShapeCache | None = None,
) -> Any:
    """Like :func:`parse`, but *tokens* are the entries of an object.

    ``["--foo", "bar", "--qux", "-t"]`` is read as if it was
    ``["[", "--foo", "bar", "--qux", "-t", "]"]``. No tokens at all
    decode to an empty object.
    """
    shape = shape_of(into, cache)
    logger.debug("parsing %d tokens as an object into %s", len(tokens), shape)
    cursor = Cursor(tokens)
    try:
        result = decode_value(shape, parse_implicit_object(cursor), options)
    except RecursionError:
        raise _too_deep() from None
    _check_drained(cursor)
    return result


def _check_drained(cursor: Cursor) -> None:
    if cursor.more():
        remaining = cursor.remaining()
        logger.debug("%d unread tokens after position %d", len(remaining), cursor.position)
        raise TrailingArgumentsError(remaining)


def _too_deep() -> ParseError:
    # nesting depth is bounded by the interpreter's recursion limit
    return ParseError("input nested too deeply")
