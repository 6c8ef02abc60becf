"""Pydantic configuration sections with code-baked defaults.

Sparse TOML contract: defaults baked here, mdnest.toml only contains overrides.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from mdnest.infrastructure.tree import MAX_DEPTH, MAX_NODES


class TreeConfig(BaseModel):
    """[tree] section."""

    model_config = {"frozen": True}

    max_depth: int = Field(default=MAX_DEPTH, ge=0)
    max_nodes: int = Field(default=MAX_NODES, ge=1)


class DocumentsConfig(BaseModel):
    """[documents] section."""

    model_config = {"frozen": True}

    encoding: str = "utf-8"
    extension: str = "md"
