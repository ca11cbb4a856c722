"""Decoder: stores parsed values into destination shapes."""

from __future__ import annotations

from typing import Any

from .errors import DecodeError
from .numbers import is_numeric, parse_complex, parse_float, parse_int, parse_uint
from .options import Options
from .shapes import (
    Bool,
    Complex,
    Dynamic,
    FixedArray,
    Float,
    Mapping,
    Optional,
    Record,
    Sequence,
    Shape,
    SignedInt,
    String,
    UnsignedInt,
)
from .values import Number, Value, VArray, VBool, VObject, VScalar, VString, _Null


def decode_value(shape: Shape, value: Value, options: Options | None = None) -> Any:
    """Decode *value* into *shape*.

    Array and object readers inside *value* are drained as part of this
    call. The first error aborts the whole decode.
    """
    return _decode(shape, value, options or Options())


def _decode(shape: Shape, value: Value, opts: Options) -> Any:
    if isinstance(value, _Null):
        if shape.nullable:
            return None
        raise DecodeError(f"cannot assign null to {shape}")

    if isinstance(shape, Optional):
        return _decode(shape.inner, value, opts)
    if isinstance(shape, Dynamic):
        return _decode_dynamic(value, opts)
    if isinstance(shape, Bool):
        if not isinstance(value, VBool):
            raise _mismatch(shape, value)
        return value.value
    if isinstance(shape, String):
        if isinstance(value, VString):
            return value.value
        if isinstance(value, VScalar):
            return value.text
        raise _mismatch(shape, value)
    if isinstance(shape, SignedInt):
        return _number(shape, value, parse_int)
    if isinstance(shape, UnsignedInt):
        return _number(shape, value, parse_uint)
    if isinstance(shape, Float):
        return _number(shape, value, parse_float)
    if isinstance(shape, Complex):
        return _number(shape, value, parse_complex)
    if isinstance(shape, Sequence):
        return _decode_sequence(shape, value, opts)
    if isinstance(shape, FixedArray):
        return _decode_fixed_array(shape, value, opts)
    if isinstance(shape, Mapping):
        return _decode_mapping(shape, value, opts)
    if isinstance(shape, Record):
        return _decode_record(shape, value, opts)

    raise DecodeError(f"unsupported shape {shape!r}")


def _mismatch(shape: Shape, value: Value) -> DecodeError:
    return DecodeError(f"expected {shape}, got {value.kind}")


def _number(shape, value: Value, convert) -> Any:
    if not isinstance(value, VScalar):
        raise _mismatch(shape, value)
    try:
        return convert(value.text, shape.bits)
    except ValueError as exc:
        raise DecodeError(f"bad {shape}: {exc}") from None


# ---------------------------------------------------------------------------
# Composite shapes
# ---------------------------------------------------------------------------

def _decode_sequence(shape: Sequence, value: Value, opts: Options) -> list:
    if not isinstance(value, VArray):
        raise _mismatch(shape, value)
    return [_decode(shape.elem, item, opts) for item in value.reader]


def _decode_fixed_array(shape: FixedArray, value: Value, opts: Options) -> list:
    if not isinstance(value, VArray):
        raise _mismatch(shape, value)
    items = []
    for item in value.reader:
        if len(items) >= shape.capacity:
            raise DecodeError(f"too many values: at most {shape.capacity} expected")
        items.append(_decode(shape.elem, item, opts))
    while len(items) < shape.capacity:
        items.append(zero_value(shape.elem))
    return items


def _decode_mapping(shape: Mapping, value: Value, opts: Options) -> dict:
    if not isinstance(value, VObject):
        raise _mismatch(shape, value)
    result = {}
    for key, item in value.reader:
        k = _decode(shape.key, VScalar(key, is_numeric(key)), opts)
        result[k] = _decode(shape.value, item, opts)
    return result


def _decode_record(shape: Record, value: Value, opts: Options) -> Any:
    if not isinstance(value, VObject):
        raise _mismatch(shape, value)
    kwargs: dict[str, Any] = {}
    for key, item in value.reader:
        f = shape.resolve(key)
        kwargs[f.name] = _decode(f.shape, item, opts)
    return _build_record(shape, kwargs)


def _build_record(shape: Record, kwargs: dict[str, Any]) -> Any:
    for f in shape.fields:
        if f.name not in kwargs and not f.has_default:
            kwargs[f.name] = zero_value(f.shape)
    return shape.cls(**kwargs)


def _decode_dynamic(value: Value, opts: Options) -> Any:
    if isinstance(value, _Null):
        return None
    if isinstance(value, VBool):
        return value.value
    if isinstance(value, VString):
        return value.value
    if isinstance(value, VScalar):
        if not value.numeric:
            return value.text
        if opts.preserve_numeric_literal:
            return Number(value.text)
        return _best_effort_number(value.text)
    if isinstance(value, VArray):
        return [_decode_dynamic(item, opts) for item in value.reader]
    if isinstance(value, VObject):
        return {key: _decode_dynamic(item, opts) for key, item in value.reader}
    raise DecodeError(f"unexpected {value.kind}")


def _best_effort_number(text: str) -> int | float:
    try:
        return parse_int(text)
    except ValueError:
        pass
    try:
        return parse_float(text)
    except ValueError:
        raise DecodeError(f"bad number {text!r}") from None


# ---------------------------------------------------------------------------
# Zero values
# ---------------------------------------------------------------------------

def zero_value(shape: Shape) -> Any:
    """Value a slot of *shape* holds when the input does not set it."""
    if isinstance(shape, Bool):
        return False
    if isinstance(shape, (SignedInt, UnsignedInt)):
        return 0
    if isinstance(shape, Float):
        return 0.0
    if isinstance(shape, Complex):
        return 0j
    if isinstance(shape, String):
        return ""
    if isinstance(shape, (Optional, Dynamic)):
        return None
    if isinstance(shape, Sequence):
        return []
    if isinstance(shape, Mapping):
        return {}
    if isinstance(shape, FixedArray):
        return [zero_value(shape.elem) for _ in range(shape.capacity)]
    if isinstance(shape, Record):
        return _build_record(shape, {})
    raise DecodeError(f"unsupported shape {shape!r}")
