"""End-to-end workflow through the service layer."""

from __future__ import annotations

from pathlib import Path

from mdnest.config.settings import MdnSettings
from mdnest.infrastructure.workspace import Workspace
from mdnest.services.frontmatter import FrontmatterService
from mdnest.services.tree import TreeService
from tests.conftest import write_note


def test_edit_cycle(settings: MdnSettings, notes_root: Path) -> None:
    """Select a folder, define fields, edit a note, and see suggestions follow."""
    write_note(notes_root, "inbox/first.md", "tags: [python]\nstatus: draft")
    write_note(notes_root, "second.md", None, body="Untouched\n")

    ws = Workspace(settings)
    try:
        tree_svc = TreeService(ws)
        fm_svc = FrontmatterService(ws)

        assert tree_svc.set_working_directory(notes_root).ok
        tree = tree_svc.build_tree().data["tree"]
        assert [c["name"] for c in tree["children"]] == ["inbox", "second.md"]

        fm_svc.add_field("tags", "string[]")
        fm_svc.add_field("status")
        assert fm_svc.collect_suggestions().data["fields"] == {"tags": 1, "status": 1}

        target = notes_root / "second.md"
        form = fm_svc.read_form(target).data
        assert form["values"] == {"tags": [], "status": ""}

        saved = fm_svc.save_form(target, {"tags": "python, cli", "status": "draft"})
        assert saved.data["has_frontmatter"] is True
    finally:
        ws.close()

    # A fresh workspace sees everything that was persisted.
    ws = Workspace(settings)
    try:
        fm_svc = FrontmatterService(ws)
        fm_svc.collect_suggestions()
        options = fm_svc.load_suggestions("tags", ["cli"]).data["options"]
        assert options == [
            {"label": "python (2)", "value": "python"},
            {"label": "cli (2)", "value": "cli"},
        ]
        assert fm_svc.read_form(notes_root / "second.md").data["body"] == "Untouched\n"
    finally:
        ws.close()
