"""Destination shapes and their compilation from Python types.

A shape describes what a decoded value should look like. Shapes depend
only on the destination type, never on the input, so they can be built
once and shared.
"""

from __future__ import annotations

import dataclasses
import logging
import threading
import types
import typing
from dataclasses import dataclass, field
from typing import Any, Union

from .errors import UnsupportedTypeError
from .fields import METADATA_KEY, SKIP, Field, FieldTable

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Shape variants
# ---------------------------------------------------------------------------

class Shape:
    """Base class for all shapes."""

    nullable = False

    @property
    def name(self) -> str:
        raise NotImplementedError

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Bool(Shape):
    @property
    def name(self) -> str:
        return "bool"


@dataclass(frozen=True)
class SignedInt(Shape):
    bits: int = 64

    @property
    def name(self) -> str:
        return f"int{self.bits}"


@dataclass(frozen=True)
class UnsignedInt(Shape):
    bits: int = 64

    @property
    def name(self) -> str:
        return f"uint{self.bits}"


@dataclass(frozen=True)
class Float(Shape):
    bits: int = 64

    @property
    def name(self) -> str:
        return f"float{self.bits}"


@dataclass(frozen=True)
class Complex(Shape):
    bits: int = 128

    @property
    def name(self) -> str:
        return f"complex{self.bits}"


@dataclass(frozen=True)
class String(Shape):
    @property
    def name(self) -> str:
        return "str"


@dataclass(frozen=True)
class Optional(Shape):
    inner: Shape
    nullable = True

    @property
    def name(self) -> str:
        return f"Optional[{self.inner.name}]"


@dataclass(frozen=True)
class Sequence(Shape):
    elem: Shape
    nullable = True

    @property
    def name(self) -> str:
        return f"list[{self.elem.name}]"


@dataclass(frozen=True)
class FixedArray(Shape):
    elem: Shape
    capacity: int

    def __post_init__(self) -> None:
        if self.capacity < 0:
            raise ValueError(f"negative capacity {self.capacity}")

    @property
    def name(self) -> str:
        return f"[{self.capacity}]{self.elem.name}"


@dataclass(frozen=True)
class Mapping(Shape):
    key: Shape
    value: Shape
    nullable = True

    def __post_init__(self) -> None:
        if not isinstance(self.key, (String, SignedInt, UnsignedInt)):
            raise UnsupportedTypeError(f"unsupported mapping key {self.key.name}")

    @property
    def name(self) -> str:
        return f"dict[{self.key.name}, {self.value.name}]"


@dataclass(eq=False)
class Record(Shape):
    """A dataclass. Fields are filled in after construction so that a
    record can refer to itself."""

    cls: type
    table: FieldTable = field(default_factory=FieldTable)

    @property
    def name(self) -> str:
        return self.cls.__name__

    @property
    def fields(self) -> list[Field]:
        return self.table.fields

    def resolve(self, key: str) -> Field:
        return self.table.resolve(key)

    def __repr__(self) -> str:
        return f"Record({self.cls.__qualname__})"


@dataclass(frozen=True)
class Dynamic(Shape):
    nullable = True

    @property
    def name(self) -> str:
        return "any"


@dataclass(frozen=True)
class Capacity:
    """Marks a ``list`` annotation as a fixed-capacity array:
    ``Annotated[list[int], Capacity(3)]``."""

    size: int


BOOL = Bool()
INT8 = SignedInt(8)
INT16 = SignedInt(16)
INT32 = SignedInt(32)
INT64 = SignedInt(64)
INT = INT64
UINT8 = UnsignedInt(8)
UINT16 = UnsignedInt(16)
UINT32 = UnsignedInt(32)
UINT64 = UnsignedInt(64)
UINT = UINT64
FLOAT32 = Float(32)
FLOAT64 = Float(64)
COMPLEX64 = Complex(64)
COMPLEX128 = Complex(128)
STRING = String()
DYNAMIC = Dynamic()


# ---------------------------------------------------------------------------
# Compilation
# ---------------------------------------------------------------------------

_SIMPLE: dict[Any, Shape] = {
    bool: BOOL,
    int: INT,
    float: FLOAT64,
    complex: COMPLEX128,
    str: STRING,
    Any: DYNAMIC,
    object: DYNAMIC,
}


def shape_of(tp: Any, cache: "ShapeCache | None" = None) -> Shape:
    """Return the shape for the Python type *tp*.

    With a *cache*, previously compiled shapes are reused.
    """
    if isinstance(tp, Shape):
        return tp
    if cache is not None:
        return cache.get(tp)
    return _Compiler().build(tp)


class _Compiler:
    """Compiles one type. Records under construction are kept in
    ``building`` until they are complete."""

    def __init__(self, known: dict[Any, Shape] | None = None) -> None:
        self.known = known if known is not None else {}
        self.building: dict[type, Record] = {}

    def build(self, tp: Any) -> Shape:
        """Compile *tp* and check that every record in it has a zero value."""
        shape = self.compile(tp)
        _check_zero_values(shape)
        return shape

    def compile(self, tp: Any) -> Shape:
        if isinstance(tp, Shape):
            return tp
        simple = _SIMPLE.get(tp) if _hashable(tp) else None
        if simple is not None:
            return simple
        if _hashable(tp) and tp in self.known:
            return self.known[tp]

        origin = typing.get_origin(tp)
        args = typing.get_args(tp)

        if origin is typing.Annotated:
            return self._annotated(args[0], args[1:])
        if origin in (Union, types.UnionType):
            return self._union(tp, args)
        if tp is list or origin is list:
            return Sequence(self.compile(args[0]) if args else DYNAMIC)
        if tp is dict or origin is dict:
            if not args:
                return Mapping(STRING, DYNAMIC)
            return Mapping(self.compile(args[0]), self.compile(args[1]))
        if isinstance(tp, type) and dataclasses.is_dataclass(tp):
            return self._record(tp)

        raise UnsupportedTypeError(f"unsupported type {tp!r}")

    def _annotated(self, base: Any, extras: tuple) -> Shape:
        for extra in extras:
            if isinstance(extra, Shape):
                return extra
            if isinstance(extra, Capacity):
                if base is not list and typing.get_origin(base) is not list:
                    raise UnsupportedTypeError(f"Capacity applies to lists, not {base!r}")
                args = typing.get_args(base)
                elem = self.compile(args[0]) if args else DYNAMIC
                return FixedArray(elem, extra.size)
        return self.compile(base)

    def _union(self, tp: Any, args: tuple) -> Shape:
        rest = [a for a in args if a is not type(None)]
        if len(rest) != 1 or len(rest) == len(args):
            raise UnsupportedTypeError(f"unsupported union {tp!r}")
        return Optional(self.compile(rest[0]))

    def _record(self, cls: type) -> Record:
        if cls in self.building:
            return self.building[cls]

        record = Record(cls)
        self.building[cls] = record
        try:
            hints = typing.get_type_hints(cls, include_extras=True)
        except NameError as exc:
            raise UnsupportedTypeError(f"cannot resolve annotations of {cls.__name__}: {exc}") from None

        for f in dataclasses.fields(cls):
            if f.name.startswith("_") or not f.init:
                continue
            override = f.metadata.get(METADATA_KEY)
            if override == SKIP:
                continue
            has_default = (
                f.default is not dataclasses.MISSING
                or f.default_factory is not dataclasses.MISSING
            )
            record.table.add(Field(
                name=f.name,
                shape=self.compile(hints.get(f.name, f.type)),
                override=override,
                has_default=has_default,
            ))
        return record


def _check_zero_values(shape: Shape) -> None:
    """Reject records that contain themselves through fields without a
    default. Such a record has no zero value to fill a missing field."""
    seen: set[int] = set()
    stack = [shape]
    while stack:
        s = stack.pop()
        if isinstance(s, Record):
            if id(s) in seen:
                continue
            seen.add(id(s))
            _zero_cycle(s, ())
            stack.extend(f.shape for f in s.fields)
        elif isinstance(s, (Optional, Sequence, FixedArray)):
            stack.append(s.inner if isinstance(s, Optional) else s.elem)
        elif isinstance(s, Mapping):
            stack.append(s.value)


def _zero_cycle(shape: Shape, active: tuple) -> None:
    if isinstance(shape, FixedArray) and shape.capacity > 0:
        _zero_cycle(shape.elem, active)
    if not isinstance(shape, Record):
        return
    if any(r is shape for r in active):
        path = " -> ".join(r.name for r in active + (shape,))
        raise UnsupportedTypeError(
            f"{shape.name} contains itself through required fields ({path}); "
            "give one of them a default or make it Optional"
        )
    for f in shape.fields:
        if not f.has_default:
            _zero_cycle(f.shape, active + (shape,))


def _hashable(tp: Any) -> bool:
    try:
        hash(tp)
    except TypeError:
        return False
    return True


# ---------------------------------------------------------------------------
# ShapeCache
# ---------------------------------------------------------------------------

class ShapeCache:
    """Shapes keyed by destination type.

    Reads do not lock. A shape is published only once it is fully built;
    two threads compiling the same type at once both do the work and the
    first one to publish wins.
    """

    def __init__(self) -> None:
        self._shapes: dict[Any, Shape] = {}
        self._lock = threading.Lock()

    def get(self, tp: Any) -> Shape:
        if isinstance(tp, Shape):
            return tp
        try:
            return self._shapes[tp]
        except KeyError:
            pass
        except TypeError:
            # unhashable annotation, compile every time
            return _Compiler().build(tp)

        shape = _Compiler(dict(self._shapes)).build(tp)
        logger.debug("compiled shape %s for %r", shape, tp)
        with self._lock:
            return self._shapes.setdefault(tp, shape)

    def __contains__(self, tp: Any) -> bool:
        return tp in self._shapes

    def __len__(self) -> int:
        return len(self._shapes)

    def clear(self) -> None:
        with self._lock:
            self._shapes.clear()
