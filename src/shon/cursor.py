"""Cursor: forward-only view over the input tokens."""

from __future__ import annotations

from typing import Sequence


class Cursor:
    """Points to a position in a token sequence.

    ``peek`` and ``next`` return ``None`` once the tokens run out.
    There is no way to move backwards.
    """

    def __init__(self, tokens: Sequence[str]) -> None:
        self._tokens = list(tokens)
        self._pos = 0

    @property
    def position(self) -> int:
        return self._pos

    def more(self) -> bool:
        """Report whether tokens remain, without moving."""
        return self._pos < len(self._tokens)

    def peek(self) -> str | None:
        """Return the next token without moving."""
        if self.more():
            return self._tokens[self._pos]
        return None

    def next(self) -> str | None:
        """Return the next token and move past it."""
        if not self.more():
            return None
        token = self._tokens[self._pos]
        self._pos += 1
        return token

    def remaining(self) -> list[str]:
        return self._tokens[self._pos:]

    def __repr__(self) -> str:
        return f"Cursor(position={self._pos}, remaining={len(self._tokens) - self._pos})"
