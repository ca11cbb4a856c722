"""Record fields and the names they accept."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .errors import DecodeError

if TYPE_CHECKING:
    from .shapes import Shape

METADATA_KEY = "shon"
SKIP = "-"


@dataclass
class Field:
    name: str  # attribute the decoded value is stored in
    shape: "Shape"
    override: str | None = None
    has_default: bool = False
    names: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.names:
            self.names = field_names(self.name, self.override)


def to_kebab(name: str) -> str:
    """Convert a field name to kebab-case.

    Examples:
        FirstName   → first-name
        first_name  → first-name
        HTTPServer  → h-t-t-p-server
    """
    words: list[str] = []
    for part in name.split("_"):
        start = 0
        while start < len(part):
            end = start + 1
            while end < len(part) and not part[end].isupper():
                end += 1
            words.append(part[start:end].lower())
            start = end
    return "-".join(words)


def field_names(name: str, override: str | None = None) -> tuple[str, ...]:
    """Names a field is addressed by: the override alone, or the
    declared name plus its kebab-case form."""
    if override is not None:
        return (override,)
    kebab = to_kebab(name)
    if kebab == name:
        return (name,)
    return (name, kebab)


@dataclass
class FieldTable:
    """Maps every accepted name to the field that owns it."""

    fields: list[Field] = field(default_factory=list)
    by_name: dict[str, Field] = field(default_factory=dict)

    def add(self, f: Field) -> None:
        self.fields.append(f)
        for n in f.names:
            owner = self.by_name.get(n)
            # An explicit name is never shadowed by a derived one.
            if owner is not None and owner.override == n and f.override != n:
                continue
            self.by_name[n] = f

    def resolve(self, key: str) -> Field:
        """Return the field named *key*. Matching is exact."""
        try:
            return self.by_name[key]
        except KeyError:
            raise DecodeError(f"unknown field {key!r}") from None
