"""Corpus-wide frontmatter scan feeding the suggestion tables."""

from __future__ import annotations

import logging
from pathlib import Path

from mdnest.domain.content import extract_frontmatter
from mdnest.domain.frontmatter import FrontmatterSuggestions
from mdnest.domain.suggestions import SuggestionTally
from mdnest.infrastructure.filesystem import iter_markdown_files

logger = logging.getLogger(__name__)


def aggregate_suggestions(
    root: Path | str,
    *,
    extension: str = "md",
    encoding: str = "utf-8",
) -> FrontmatterSuggestions:
    """Scan every markdown file under *root* and rank frontmatter values.

    The walk is unbounded. Files that cannot be read or decoded, and files
    without usable frontmatter, are left out of the counts without error.
    """
    tally = SuggestionTally()
    scanned = 0
    for path in iter_markdown_files(Path(root), extension=extension):
        try:
            text = path.read_text(encoding=encoding)
        except (OSError, UnicodeDecodeError) as exc:
            logger.debug("Skipping unreadable document %s: %s", path, exc)
            continue
        frontmatter = extract_frontmatter(text)
        if frontmatter is None:
            continue
        tally.add(frontmatter)
        scanned += 1

    logger.debug("Aggregated frontmatter from %d documents under %s", scanned, root)
    return tally.result()
