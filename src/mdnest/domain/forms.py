"""Schema-driven coercion between frontmatter and form values.

The two directions are asymmetric:

- :func:`form_from_metadata` materialises *every* schema field so
  each form control has a value to bind to.
- :func:`metadata_from_form` omits anything absent or unusable, and
  collapses to ``{}`` when nothing was filled in, so saved documents are
  not littered with empty fields.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from typing import Any

from mdnest.domain.frontmatter import FrontmatterField
from mdnest.domain.types import FieldType, ValueKind, value_kind


def split_list(raw: str) -> list[str]:
    """Split a comma-separated string, trimming items and dropping blanks.

    Examples:
        >>> split_list("a, b,,c ")
        ['a', 'b', 'c']
        >>> split_list("  ")
        []
    """
    return [part.strip() for part in raw.split(",") if part.strip()]


# ---------------------------------------------------------------------------
# Metadata -> form
# ---------------------------------------------------------------------------


def _form_value(field_type: FieldType, present: bool, raw: Any) -> Any:
    kind = value_kind(raw) if present else ValueKind.NULL

    if field_type == FieldType.STRING_LIST:
        if kind == ValueKind.LIST:
            return list(raw)
        if kind == ValueKind.STRING:
            return split_list(raw)
        return []

    if field_type.is_temporal:
        return raw if kind == ValueKind.STRING else None

    if field_type == FieldType.NUMBER:
        return raw if present else 0

    return raw if present else ""


def form_from_metadata(
    schema: Iterable[FrontmatterField],
    metadata: Mapping[str, Any] | None,
) -> dict[str, Any]:
    """Build the form value map for *schema* from a document's metadata.

    Every schema field gets a key. Defaults for absent fields: ``[]`` for
    ``string[]``, ``None`` for date/time fields, ``0`` for ``number`` and
    ``""`` for everything else.
    """
    source = metadata or {}
    form: dict[str, Any] = {}
    for field in schema:
        present = field.title in source
        form[field.title] = _form_value(field.kind, present, source.get(field.title))
    return form


# ---------------------------------------------------------------------------
# Form -> metadata
# ---------------------------------------------------------------------------

_OMIT = object()


def _metadata_value(field_type: FieldType, raw: Any) -> Any:
    kind = value_kind(raw)

    if field_type == FieldType.STRING_LIST:
        if kind == ValueKind.LIST:
            return list(raw)
        if kind == ValueKind.STRING:
            return split_list(raw)
        return _OMIT

    if field_type.is_temporal:
        if kind == ValueKind.STRING and raw:
            return raw
        return _OMIT

    if field_type == FieldType.NUMBER:
        if kind != ValueKind.NUMBER:
            return _OMIT
        # ints of any size are exact; only floats can be nan or inf
        if isinstance(raw, float) and not math.isfinite(raw):
            return _OMIT
        return int(raw)

    return raw if kind == ValueKind.STRING else _OMIT


def _is_meaningful(value: Any) -> bool:
    kind = value_kind(value)
    if kind == ValueKind.STRING:
        return bool(value.strip())
    if kind == ValueKind.LIST:
        return bool(value)
    return kind == ValueKind.NUMBER


def metadata_from_form(
    schema: Iterable[FrontmatterField],
    form: Mapping[str, Any] | None,
) -> dict[str, Any]:
    """Build a frontmatter block for *schema* from submitted form values.

    Fields are omitted when the form has no entry, when the value has the
    wrong shape for the field type, or (date/time fields) when it is an
    empty string. ``number`` values are truncated to int. If no field ends
    up with a meaningful value the result is ``{}``.
    """
    source = form or {}
    metadata: dict[str, Any] = {}
    for field in schema:
        if field.title not in source:
            continue
        value = _metadata_value(field.kind, source[field.title])
        if value is not _OMIT:
            metadata[field.title] = value

    if not any(_is_meaningful(v) for v in metadata.values()):
        return {}
    return metadata
