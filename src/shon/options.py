"""Options for decoding."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Options:
    """Settings that apply to one decode.

    preserve_numeric_literal:
        When decoding into ``Any``, keep numeric tokens as
        :class:`~shon.values.Number` (their exact text) instead of
        converting them to ``int`` or ``float``.
    """

    preserve_numeric_literal: bool = False
