"""Frontmatter extraction and document rendering.

A document optionally starts with a YAML block fenced by ``---`` marker
lines. Everything after the closing marker is the body, kept verbatim.
Malformed frontmatter is never an error: it is treated as "no frontmatter".
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from io import StringIO
from typing import Any

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from mdnest.domain.types import ValueKind, value_kind

logger = logging.getLogger(__name__)

FRONTMATTER_DELIMITER = "---"


# ---------------------------------------------------------------------------
# YAML parsers
# ---------------------------------------------------------------------------


def _loader() -> YAML:
    """Safe loader producing plain dict/list/scalar values."""
    return YAML(typ="safe", pure=True)


def _dumper() -> YAML:
    """Round-trip dumper; keys are emitted in insertion order."""
    y = YAML()
    y.default_flow_style = False
    return y


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def split_document(text: str) -> tuple[str | None, str]:
    """Split *text* into ``(frontmatter_block, body)``.

    The first line must be the ``---`` marker; the block runs until the next
    marker line. Returns ``(None, text)`` when either marker is missing.
    One blank line after the closing marker is consumed as separator.
    Marker lines must start at column zero. The body keeps the document's
    own line endings; the block is returned with ``\\n`` endings.
    """
    # each line keeps its trailing "\r" on CRLF input
    lines = text.split("\n")
    if lines[0].rstrip() != FRONTMATTER_DELIMITER:
        return None, text

    end_idx: int | None = None
    for i, line in enumerate(lines[1:], start=1):
        if line.rstrip() == FRONTMATTER_DELIMITER:
            end_idx = i
            break

    if end_idx is None:
        return None, text

    block = "\n".join(line.removesuffix("\r") for line in lines[1:end_idx])
    body = "\n".join(lines[end_idx + 1 :])
    if body.startswith("\r\n"):
        body = body[2:]
    elif body.startswith("\n"):
        body = body[1:]
    return block, body


def _plain(value: Any) -> Any:
    """Normalise loaded YAML into JSON-compatible Python values."""
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_plain(v) for v in value]
    # datetime before date: datetime subclasses date
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return value


def extract_frontmatter(text: str) -> dict[str, Any] | None:
    """Return the frontmatter mapping of *text*, or None.

    None covers: no opening marker, no closing marker, YAML that fails to
    parse, and YAML whose top level is not a mapping. Top-level keys that
    are not strings are dropped.
    """
    block, _body = split_document(text)
    if block is None:
        return None

    try:
        loaded = _loader().load(block)
    except (YAMLError, ValueError) as exc:
        logger.debug("Ignoring malformed frontmatter: %s", exc)
        return None

    if not isinstance(loaded, dict):
        return None

    return {key: _plain(value) for key, value in loaded.items() if isinstance(key, str)}


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


def has_content(metadata: dict[str, Any]) -> bool:
    """Whether any value in *metadata* is worth writing to disk.

    Blank strings, empty lists, and nulls carry nothing; every other value
    (numbers, booleans, non-empty collections) does.
    """
    for value in metadata.values():
        kind = value_kind(value)
        if kind == ValueKind.STRING:
            if value.strip():
                return True
        elif kind == ValueKind.LIST:
            if value:
                return True
        elif kind != ValueKind.NULL:
            return True
    return False


def render_document(metadata: dict[str, Any], body: str) -> str:
    """Render *metadata* and *body* as ``---\\n<yaml>---\\n\\n<body>``.

    Returns the bare body when the metadata has no content, so documents
    without filled-in fields stay plain markdown.
    """
    if not has_content(metadata):
        return body

    buf = StringIO()
    _dumper().dump(dict(metadata), buf)
    parts = [FRONTMATTER_DELIMITER, "\n", buf.getvalue(), FRONTMATTER_DELIMITER, "\n\n", body]
    return "".join(parts)
