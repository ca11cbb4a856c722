"""Exception hierarchy for SHON."""

from __future__ import annotations


class ShonError(ValueError):
    """Base class for all errors raised while reading SHON input."""


class ParseError(ShonError):
    """The token stream does not follow the SHON grammar."""


class DecodeError(ShonError):
    """A well-formed value cannot be stored in the requested shape."""


class TrailingArgumentsError(ShonError):
    """A value was decoded but unread tokens remain."""

    def __init__(self, arguments: list[str]) -> None:
        super().__init__(f"unexpected arguments: {arguments!r}")
        self.arguments = arguments


class UnsupportedTypeError(ShonError, TypeError):
    """A Python type cannot be turned into a destination shape."""
