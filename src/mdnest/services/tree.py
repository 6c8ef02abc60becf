"""TreeService: working directory selection and bounded tree snapshots."""

from __future__ import annotations

from pathlib import Path

from mdnest.infrastructure.filesystem import TraversalError
from mdnest.infrastructure.store import SELECTED_PATH_KEY, SETTINGS_STORE, StoreError
from mdnest.infrastructure.tree import build_tree
from mdnest.services.base import BaseService
from mdnest.services.result import ServiceResult
from mdnest.services.telemetry import trace_span, traced


class TreeService(BaseService):
    """Stores the working directory and builds file-tree snapshots of it."""

    def stored_path(self) -> str | None:
        """The persisted working directory, or None when never set."""
        value = self._workspace.store(SETTINGS_STORE).get(SELECTED_PATH_KEY)
        return value if isinstance(value, str) else None

    @traced
    def set_working_directory(self, path: str | Path) -> ServiceResult:
        """Persist *path* as the working directory after validating it."""
        op = "set_working_directory"
        target = Path(path).expanduser()
        if not target.exists():
            return ServiceResult.failure(op, "NOT_FOUND", f"Path does not exist: {target}")
        if not target.is_dir():
            return ServiceResult.failure(
                op, "NOT_A_DIRECTORY", f"Path is not a directory: {target}"
            )

        resolved = str(target.resolve())
        store = self._workspace.store(SETTINGS_STORE)
        try:
            store.set(SELECTED_PATH_KEY, resolved)
            store.save()
        except StoreError as exc:
            return ServiceResult.failure(op, exc.code, str(exc))

        warnings: list[str] = []
        self._dispatch_event("post_set_working_directory", {"path": resolved}, warnings)
        return ServiceResult(ok=True, op=op, data={"path": resolved}, warnings=warnings)

    @traced
    def get_working_directory(self) -> ServiceResult:
        op = "get_working_directory"
        try:
            path = self.stored_path()
        except StoreError as exc:
            return ServiceResult.failure(op, exc.code, str(exc))
        return ServiceResult(ok=True, op=op, data={"path": path})

    @traced
    def build_tree(
        self,
        path: str | Path | None = None,
        *,
        max_depth: int | None = None,
        max_nodes: int | None = None,
    ) -> ServiceResult:
        """Snapshot *path* (or the stored working directory) as a tree.

        Limits default to the ``[tree]`` settings section.
        """
        op = "build_tree"
        if path is None:
            try:
                path = self.stored_path()
            except StoreError as exc:
                return ServiceResult.failure(op, exc.code, str(exc))
            if path is None:
                return ServiceResult.failure(
                    op,
                    "NO_WORKING_DIRECTORY",
                    "No path given and no working directory has been set",
                )

        depth_limit = self.settings.tree.max_depth if max_depth is None else max_depth
        node_limit = self.settings.tree.max_nodes if max_nodes is None else max_nodes
        root = Path(path).expanduser()

        with trace_span("walk") as span:
            try:
                tree = build_tree(root, max_depth=depth_limit, max_nodes=node_limit)
            except TraversalError as exc:
                return ServiceResult.failure(
                    op, exc.code, f"Cannot read directory: {exc}", path=exc.path
                )
            node_count = tree.count()
            if span:
                span.annotate("nodes", node_count)

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "root": str(root),
                "tree": tree.model_dump(),
                "node_count": node_count,
                "truncated": node_count >= node_limit,
                "max_depth": depth_limit,
                "max_nodes": node_limit,
            },
        )
