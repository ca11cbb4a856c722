"""Numeric literals: the lexical check used by the parser and the
width-aware conversions used by the decoder.

The conversions raise ``ValueError`` with a short cause
(``parsing '300': value out of range``); the decoder adds the name of the
destination shape.
"""

from __future__ import annotations

import math
import re
import struct

_NUMERIC_HEAD = frozenset("0123456789+-")
_NUMERIC_TAIL = frozenset("0123456789+-.eE")

_INT_RE = re.compile(r"[+-]?[0-9]+")
_UINT_RE = re.compile(r"[0-9]+")
_FLOAT_RE = re.compile(
    r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?"
    r"|[+-]?(?:inf|infinity|nan)",
    re.IGNORECASE,
)
_HEX_FLOAT_RE = re.compile(
    r"[+-]?0x(?:[0-9a-f]+\.?[0-9a-f]*|\.[0-9a-f]+)p[+-]?[0-9]+",
    re.IGNORECASE,
)
_SPECIAL_FLOATS = ("inf", "infinity", "nan")


def is_numeric(s: str) -> bool:
    """Report whether *s* looks like a number.

    This is a coarse filter: ``"1-2"`` passes. Real parsing happens
    when the value is decoded into a concrete width.
    """
    if not s or s[0] not in _NUMERIC_HEAD:
        return False
    return all(c in _NUMERIC_TAIL for c in s[1:])


def _syntax(s: str) -> ValueError:
    return ValueError(f"parsing {s!r}: invalid syntax")


def _range(s: str) -> ValueError:
    return ValueError(f"parsing {s!r}: value out of range")


# ---------------------------------------------------------------------------
# Integers
# ---------------------------------------------------------------------------

def parse_int(s: str, bits: int = 64) -> int:
    """Parse a base-10 signed integer that must fit in *bits*."""
    if not _INT_RE.fullmatch(s):
        raise _syntax(s)
    n = int(s)
    limit = 1 << (bits - 1)
    if not -limit <= n < limit:
        raise _range(s)
    return n


def parse_uint(s: str, bits: int = 64) -> int:
    """Parse a base-10 unsigned integer that must fit in *bits*."""
    if not _UINT_RE.fullmatch(s):
        raise _syntax(s)
    n = int(s)
    if n >= 1 << bits:
        raise _range(s)
    return n


# ---------------------------------------------------------------------------
# Floats
# ---------------------------------------------------------------------------

def parse_float(s: str, bits: int = 64) -> float:
    """Parse a float, rounded to single precision when *bits* is 32.

    Decimal and hexadecimal (``0x1p-2``) forms are accepted; a hex
    mantissa needs a ``p`` exponent.
    """
    if _FLOAT_RE.fullmatch(s):
        f = float(s)
    elif _HEX_FLOAT_RE.fullmatch(s):
        try:
            f = float.fromhex(s)
        except OverflowError:
            raise _range(s) from None
    else:
        raise _syntax(s)
    special = s.lstrip("+-").lower() in _SPECIAL_FLOATS
    if math.isinf(f) and not special:
        raise _range(s)
    if bits == 32 and math.isfinite(f):
        try:
            f = struct.unpack("f", struct.pack("f", f))[0]
        except OverflowError:
            raise _range(s) from None
        if math.isinf(f):
            raise _range(s)
    return f


def parse_complex(s: str, bits: int = 128) -> complex:
    """Parse ``R``, ``Ii`` or ``R+Ii`` (optionally in parentheses).

    Each component is a float of half of *bits*.
    """
    text = s
    if len(text) >= 2 and text[0] == "(" and text[-1] == ")":
        text = text[1:-1]
    part = bits // 2
    try:
        if not text.endswith("i"):
            return complex(parse_float(text, part), 0.0)
        body = text[:-1]
        split = _imaginary_split(body)
        if split <= 0:
            return complex(0.0, parse_float(body, part))
        real = parse_float(body[:split], part)
        imag = parse_float(body[split:], part)
    except ValueError as exc:
        if "out of range" in str(exc):
            raise _range(s) from None
        raise _syntax(s) from None
    return complex(real, imag)


def _imaginary_split(body: str) -> int:
    """Index of the sign that starts the imaginary part, or -1."""
    for i in range(len(body) - 1, 0, -1):
        if body[i] in "+-" and body[i - 1] not in "eEpP":
            return i
    return -1
