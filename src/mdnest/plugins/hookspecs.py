"""Pluggy hook specifications for mdnest state-change events.

These are the notifications a UI subscribes to so it can refresh after the
backend changes persisted state or documents.
"""

from __future__ import annotations

from typing import Any

import pluggy

hookspec = pluggy.HookspecMarker("mdnest")


class MdnestHookSpec:
    """Hook specifications for the mdnest plugin system."""

    @hookspec
    def post_set_working_directory(self, path: str) -> None:
        """Called after the working directory is stored."""

    @hookspec
    def post_save_schema(self, fields: list[dict[str, Any]]) -> None:
        """Called after the frontmatter schema is saved."""

    @hookspec
    def post_collect_suggestions(self, root: str | None, field_count: int) -> None:
        """Called after suggestions are rebuilt from the corpus."""

    @hookspec
    def post_save_document(self, path: str, has_frontmatter: bool) -> None:
        """Called after a document is written."""
