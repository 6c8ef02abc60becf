"""Integration tests: event dispatch from services to plugins."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from mdnest.infrastructure.workspace import Workspace
from mdnest.plugins.event_bus import EventBus
from mdnest.plugins.manager import PluginManager, hookimpl
from mdnest.services.frontmatter import FrontmatterService
from mdnest.services.tree import TreeService
from tests.conftest import schema_fields, write_note


class RecordingPlugin:
    """Plugin that records all hook calls for verification."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, dict[str, Any]]] = []

    @hookimpl
    def post_set_working_directory(self, path: str) -> None:
        self.calls.append(("post_set_working_directory", {"path": path}))

    @hookimpl
    def post_save_schema(self, fields: list[dict[str, Any]]) -> None:
        self.calls.append(("post_save_schema", {"fields": fields}))

    @hookimpl
    def post_collect_suggestions(self, root: str | None, field_count: int) -> None:
        self.calls.append(("post_collect_suggestions", {"root": root, "field_count": field_count}))

    @hookimpl
    def post_save_document(self, path: str, has_frontmatter: bool) -> None:
        self.calls.append(
            ("post_save_document", {"path": path, "has_frontmatter": has_frontmatter})
        )


class FailingPlugin:
    @hookimpl
    def post_set_working_directory(self, path: str) -> None:
        raise RuntimeError("plugin exploded")


def _attach(workspace: Workspace, *plugins: object) -> None:
    pm = PluginManager()
    for plugin in plugins:
        pm.register_plugin(plugin)
    workspace._event_bus = EventBus(pm, sync=True)


@pytest.fixture
def recorder(workspace: Workspace) -> RecordingPlugin:
    plugin = RecordingPlugin()
    _attach(workspace, plugin)
    return plugin


class TestServiceEvents:
    def test_set_working_directory(
        self, workspace: Workspace, recorder: RecordingPlugin, notes_root: Path
    ) -> None:
        result = TreeService(workspace).set_working_directory(notes_root)
        assert result.warnings == []
        assert recorder.calls == [
            ("post_set_working_directory", {"path": str(notes_root.resolve())})
        ]

    def test_failed_operation_dispatches_nothing(
        self, workspace: Workspace, recorder: RecordingPlugin, tmp_path: Path
    ) -> None:
        TreeService(workspace).set_working_directory(tmp_path / "missing")
        assert recorder.calls == []

    def test_save_schema(self, workspace: Workspace, recorder: RecordingPlugin) -> None:
        FrontmatterService(workspace).save_schema(schema_fields(("title", "string")))
        name, payload = recorder.calls[0]
        assert name == "post_save_schema"
        assert payload["fields"][0]["title"] == "title"

    def test_collect_suggestions(
        self, workspace: Workspace, recorder: RecordingPlugin, notes_root: Path
    ) -> None:
        write_note(notes_root, "a.md", "status: open")
        FrontmatterService(workspace).collect_suggestions(notes_root)
        assert recorder.calls == [
            ("post_collect_suggestions", {"root": str(notes_root), "field_count": 1})
        ]

    def test_save_document(
        self, workspace: Workspace, recorder: RecordingPlugin, notes_root: Path
    ) -> None:
        path = notes_root / "a.md"
        FrontmatterService(workspace).save_document(path, {}, "body")
        assert recorder.calls == [
            ("post_save_document", {"path": str(path), "has_frontmatter": False})
        ]


class TestPluginFailures:
    def test_failure_becomes_warning(self, workspace: Workspace, notes_root: Path) -> None:
        _attach(workspace, FailingPlugin())
        result = TreeService(workspace).set_working_directory(notes_root)
        assert result.ok
        assert result.warnings == ["Event dispatch failed for post_set_working_directory"]

    def test_no_event_bus_is_noop(self, workspace: Workspace, notes_root: Path) -> None:
        result = TreeService(workspace).set_working_directory(notes_root)
        assert result.ok
        assert result.warnings == []
