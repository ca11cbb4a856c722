"""JSON output for decoded values."""

from __future__ import annotations

import re
from typing import Any

import orjson

from .values import Number

_JSON_NUMBER_RE = re.compile(r"-?(?:0|[1-9][0-9]*)(?:\.[0-9]+)?(?:[eE][+-]?[0-9]+)?")

_OPTIONS = orjson.OPT_INDENT_2 | orjson.OPT_PASSTHROUGH_SUBCLASS


def _default(obj: Any) -> Any:
    if isinstance(obj, Number):
        if not _JSON_NUMBER_RE.fullmatch(obj):
            raise TypeError(f"invalid number literal {str(obj)!r}")
        return orjson.Fragment(str(obj))
    raise TypeError(f"type is not JSON serializable: {type(obj).__name__}")


def to_json(value: Any) -> str:
    """Serialize *value* as JSON indented by two spaces.

    :class:`~shon.values.Number` is written as its literal text, so
    ``Number("1.50")`` comes out as ``1.50``. Literals that are not valid
    JSON numbers (``+5``, ``1.``) raise ``orjson.JSONEncodeError``.
    """
    return orjson.dumps(value, default=_default, option=_OPTIONS).decode()
