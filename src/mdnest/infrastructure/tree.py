"""Bounded directory snapshot for the file-tree view.

The walk is capped by a depth limit and a node budget shared across the
whole recursion. Hitting either cap truncates the tree silently: capacity
is a policy, not an error. Only a root that cannot be classified, or a
budget that is already spent before the root is built, fails the call.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Self

from pydantic import BaseModel, model_validator

from mdnest.infrastructure.filesystem import (
    BudgetExceededError,
    PathKind,
    TraversalError,
    classify_path,
)

logger = logging.getLogger(__name__)

MAX_DEPTH = 6
MAX_NODES = 5000


class TreeNode(BaseModel):
    """A file or directory in a snapshot.

    ``children`` is a list (possibly empty) exactly for directories;
    ``size`` is set exactly for files.
    """

    model_config = {"frozen": True}

    name: str
    path: str
    is_dir: bool
    children: list[TreeNode] | None = None
    size: int | None = None

    @model_validator(mode="after")
    def _check_shape(self) -> Self:
        if self.is_dir and (self.children is None or self.size is not None):
            msg = "Directory nodes need children and no size"
            raise ValueError(msg)
        if not self.is_dir and (self.children is not None or self.size is None):
            msg = "File nodes need a size and no children"
            raise ValueError(msg)
        return self

    def count(self) -> int:
        """Total number of nodes in this subtree, including self."""
        return 1 + sum(child.count() for child in self.children or [])


class NodeBudget:
    """Node counter owned by a single :func:`build_tree` call."""

    def __init__(self, limit: int) -> None:
        self.limit = limit
        self.used = 0

    @property
    def exhausted(self) -> bool:
        return self.used >= self.limit

    def consume(self) -> None:
        self.used += 1


def _node_name(path: Path) -> str:
    return path.name or str(path)


def _list_entries(path: Path) -> list[Path]:
    try:
        return sorted(path.iterdir(), key=lambda p: p.name)
    except OSError as exc:
        logger.debug("Cannot list %s, leaving it empty: %s", path, exc)
        return []


def _build_node(path: Path, depth: int, budget: NodeBudget, max_depth: int) -> TreeNode:
    if budget.exhausted:
        msg = f"Node limit of {budget.limit} reached"
        raise BudgetExceededError(msg, path)

    kind, st = classify_path(path)

    if kind is PathKind.FILE:
        budget.consume()
        return TreeNode(name=_node_name(path), path=str(path), is_dir=False, size=st.st_size)

    children: list[TreeNode] = []
    if depth < max_depth:
        for entry in _list_entries(path):
            if budget.exhausted:
                logger.debug("Node budget spent, truncating %s", path)
                break
            try:
                children.append(_build_node(entry, depth + 1, budget, max_depth))
            except TraversalError as exc:
                logger.debug("Skipping %s: %s", entry, exc)
    else:
        logger.debug("Depth limit reached at %s", path)

    budget.consume()
    return TreeNode(name=_node_name(path), path=str(path), is_dir=True, children=children)


def build_tree(
    root: Path | str,
    *,
    max_depth: int = MAX_DEPTH,
    max_nodes: int = MAX_NODES,
) -> TreeNode:
    """Build a bounded snapshot of the directory tree at *root*.

    Entries are sorted by name. Unreadable children are skipped and
    unlistable directories come back with empty children.

    Raises:
        NotFoundError: *root* does not exist.
        UnreadableError: *root* metadata cannot be read.
        BudgetExceededError: *max_nodes* leaves no room for the root.
    """
    budget = NodeBudget(max_nodes)
    tree = _build_node(Path(root), 0, budget, max_depth)
    logger.debug("Built tree for %s with %d nodes", root, budget.used)
    return tree
