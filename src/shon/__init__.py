"""SHON — structured values from command-line style arguments."""

from .api import decode, parse, parse_object, parse_value
from .cursor import Cursor
from .errors import (
    DecodeError,
    ParseError,
    ShonError,
    TrailingArgumentsError,
    UnsupportedTypeError,
)
from .fields import to_kebab
from .options import Options
from .shapes import (
    BOOL,
    COMPLEX64,
    COMPLEX128,
    DYNAMIC,
    FLOAT32,
    FLOAT64,
    INT,
    INT8,
    INT16,
    INT32,
    INT64,
    STRING,
    UINT,
    UINT8,
    UINT16,
    UINT32,
    UINT64,
    Capacity,
    FixedArray,
    Mapping,
    Optional,
    Record,
    Sequence,
    Shape,
    ShapeCache,
    shape_of,
)
from .values import Null, Number, Value, VArray, VBool, VObject, VScalar, VString
from .repl import ShonRepl, shon2json

__all__ = [
    "parse",
    "parse_object",
    "parse_value",
    "decode",
    "Options",
    "Cursor",
    "ShonError",
    "ParseError",
    "DecodeError",
    "TrailingArgumentsError",
    "UnsupportedTypeError",
    "to_kebab",
    "Shape",
    "ShapeCache",
    "shape_of",
    "Capacity",
    "FixedArray",
    "Mapping",
    "Optional",
    "Record",
    "Sequence",
    "BOOL",
    "INT",
    "INT8",
    "INT16",
    "INT32",
    "INT64",
    "UINT",
    "UINT8",
    "UINT16",
    "UINT32",
    "UINT64",
    "FLOAT32",
    "FLOAT64",
    "COMPLEX64",
    "COMPLEX128",
    "STRING",
    "DYNAMIC",
    "Value",
    "Null",
    "Number",
    "VBool",
    "VString",
    "VScalar",
    "VArray",
    "VObject",
    "ShonRepl",
    "shon2json",
]
