"""Value types produced by the SHON parser."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterator, Union

from .errors import ParseError

if TYPE_CHECKING:
    from .parser import ArrayReader, ObjectReader


class _Null:
    """Singleton for ``-n``."""

    _instance: "_Null | None" = None
    kind = "null"

    def __new__(cls) -> "_Null":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "Null"

    def __bool__(self) -> bool:
        return False


Null = _Null()


@dataclass
class VBool:
    value: bool
    kind = "bool"


@dataclass
class VString:
    """A value that is a string no matter what it looks like."""

    value: str
    kind = "string"


@dataclass
class VScalar:
    """A bare token; may become a number or a string during decoding."""

    text: str
    numeric: bool = False
    kind = "scalar"


@dataclass(eq=False)
class VArray:
    reader: "ArrayReader | _EmptyReader"
    kind = "array"


@dataclass(eq=False)
class VObject:
    reader: "ObjectReader | _EmptyReader"
    kind = "object"


Value = Union[_Null, VBool, VString, VScalar, VArray, VObject]


# ---------------------------------------------------------------------------
# Empty readers for [] and [--]
# ---------------------------------------------------------------------------

class _EmptyReader:
    """Reader with nothing in it. Never touches the cursor."""

    drained = True

    def more(self) -> bool:
        return False

    def next(self):
        raise ParseError("read past the end of an empty array or object")

    def __iter__(self) -> Iterator:
        return self

    def __next__(self):
        raise StopIteration

    def __repr__(self) -> str:
        return "<empty>"


EMPTY_ARRAY = _EmptyReader()
EMPTY_OBJECT = _EmptyReader()


# ---------------------------------------------------------------------------
# Number
# ---------------------------------------------------------------------------

class Number(str):
    """Exact text of a numeric literal, kept when decoding into ``Any``.

    Use ``int()`` or ``float()`` to convert it.
    """

    def __repr__(self) -> str:
        return f"Number({str.__repr__(self)})"
