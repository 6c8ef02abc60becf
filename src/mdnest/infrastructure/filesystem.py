"""Filesystem primitives: path classification, corpus discovery, document I/O.

INVARIANT: Files are truth. Nothing here caches file contents; every call
reads or writes the disk directly.

Pure parsing/rendering lives in :mod:`mdnest.domain.content`. This module
handles actual file I/O and the traversal error taxonomy.
"""

from __future__ import annotations

import logging
import os
import stat
from collections.abc import Iterator
from enum import StrEnum
from pathlib import Path
from typing import Any

from mdnest.domain.content import (
    extract_frontmatter,
    has_content,
    render_document,
    split_document,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class TraversalError(Exception):
    """Base for failures while reading the directory structure."""

    code = "TRAVERSAL_ERROR"

    def __init__(self, message: str, path: Path | str | None = None) -> None:
        super().__init__(message)
        self.path = str(path) if path is not None else None


class UnreadableError(TraversalError):
    """Metadata or listing for a path could not be read."""

    code = "UNREADABLE"


class NotFoundError(UnreadableError):
    """The path does not exist (or is a dangling reference)."""

    code = "NOT_FOUND"


class BudgetExceededError(TraversalError):
    """The node budget was exhausted before this node could be built."""

    code = "BUDGET_EXCEEDED"


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------


class PathKind(StrEnum):
    """What a filesystem entry is, judged without following symlinks."""

    FILE = "file"
    DIRECTORY = "directory"


def classify_path(path: Path) -> tuple[PathKind, os.stat_result]:
    """Classify *path* using ``lstat`` so symlinked directories are leaves.

    Raises:
        NotFoundError: The path does not exist.
        UnreadableError: Any other failure reading metadata.
    """
    try:
        st = path.lstat()
    except FileNotFoundError as exc:
        msg = f"Path does not exist: {path}"
        raise NotFoundError(msg, path) from exc
    except OSError as exc:
        msg = f"Cannot read metadata for {path}: {exc.strerror or exc}"
        raise UnreadableError(msg, path) from exc

    kind = PathKind.DIRECTORY if stat.S_ISDIR(st.st_mode) else PathKind.FILE
    return kind, st


# ---------------------------------------------------------------------------
# Corpus discovery
# ---------------------------------------------------------------------------


def iter_markdown_files(root: Path, *, extension: str = "md") -> Iterator[Path]:
    """Yield every file under *root* whose suffix is exactly ``.{extension}``.

    Walks without depth or count limits and without descending into
    symlinked directories. Unlistable directories are skipped silently.
    Directory and file names are visited in sorted order.
    """
    suffix = f".{extension}"

    def _on_error(exc: OSError) -> None:
        logger.debug("Skipping unlistable directory: %s", exc)

    for dirpath, dirnames, filenames in os.walk(root, onerror=_on_error):
        dirnames.sort()
        for filename in sorted(filenames):
            path = Path(dirpath) / filename
            if path.suffix == suffix:
                yield path


# ---------------------------------------------------------------------------
# Document I/O
# ---------------------------------------------------------------------------


def read_document(path: Path, *, encoding: str = "utf-8") -> tuple[dict[str, Any] | None, str]:
    """Read a markdown file, returning ``(frontmatter | None, body)``.

    When the frontmatter is missing or malformed the body is the whole text.
    """
    text = path.read_text(encoding=encoding)
    metadata = extract_frontmatter(text)
    if metadata is None:
        return None, text
    _block, body = split_document(text)
    return metadata, body


def write_document(
    path: Path,
    metadata: dict[str, Any],
    body: str,
    *,
    encoding: str = "utf-8",
) -> bool:
    """Write *metadata* + *body* to *path*, creating parent directories.

    Returns True when a frontmatter block was written, False when the
    metadata was empty and only the body went to disk.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_document(metadata, body), encoding=encoding)
    return has_content(metadata)
