"""Field type tags and the value-kind variant used by coercion.

Frontmatter values are dynamically shaped (YAML on disk, JSON from the UI).
Rather than branching on ``isinstance`` all over the coercion code, every
value is first classified into a :class:`ValueKind` and the rules dispatch
on that tag.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any


class FieldType(StrEnum):
    """Recognised ``field_type`` tags for schema fields."""

    STRING = "string"
    NUMBER = "number"
    STRING_LIST = "string[]"
    DATE = "date"
    TIME = "time"
    DATE_AND_TIME = "dateandtime"

    @classmethod
    def parse(cls, tag: str | None) -> FieldType:
        """Map a raw tag to a FieldType. Unknown tags behave as STRING."""
        if tag is None:
            return cls.STRING
        try:
            return cls(tag)
        except ValueError:
            return cls.STRING

    @property
    def is_temporal(self) -> bool:
        return self in _TEMPORAL


_TEMPORAL = frozenset({FieldType.DATE, FieldType.TIME, FieldType.DATE_AND_TIME})


class ValueKind(StrEnum):
    """Shape of a dynamically typed metadata or form value."""

    STRING = "string"
    NUMBER = "number"
    LIST = "list"
    NULL = "null"
    OTHER = "other"


def value_kind(value: Any) -> ValueKind:
    """Classify *value* into a :class:`ValueKind`.

    ``bool`` is checked before numbers because it subclasses ``int``;
    booleans are never treated as numbers.
    """
    if value is None:
        return ValueKind.NULL
    if isinstance(value, bool):
        return ValueKind.OTHER
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, (int, float)):
        return ValueKind.NUMBER
    if isinstance(value, list):
        return ValueKind.LIST
    return ValueKind.OTHER
