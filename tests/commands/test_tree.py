"""Tests for the tree command."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from mdnest.cli import cli
from tests.conftest import write_note


@pytest.mark.usefixtures("_isolated_home")
class TestTreeCommand:
    def test_explicit_path(self, cli_runner: CliRunner, notes_root: Path) -> None:
        write_note(notes_root, "a.md", None)
        write_note(notes_root, "sub/b.md", None)
        result = cli_runner.invoke(cli, ["tree", str(notes_root)])
        assert result.exit_code == 0
        assert "a.md" in result.output
        assert "sub/" in result.output
        assert "4 nodes" in result.output

    def test_json_output(self, cli_runner: CliRunner, notes_root: Path) -> None:
        write_note(notes_root, "a.md", None, body="12345")
        result = cli_runner.invoke(cli, ["--json", "tree", str(notes_root)])
        assert result.exit_code == 0
        data = json.loads(result.stdout)["data"]
        assert data["tree"]["children"][0] == {
            "name": "a.md",
            "path": str(notes_root / "a.md"),
            "is_dir": False,
            "children": None,
            "size": 5,
        }

    def test_uses_working_directory(self, cli_runner: CliRunner, notes_root: Path) -> None:
        write_note(notes_root, "a.md", None)
        cli_runner.invoke(cli, ["workdir", "set", str(notes_root)])
        result = cli_runner.invoke(cli, ["--json", "tree"])
        assert result.exit_code == 0
        assert json.loads(result.stdout)["data"]["node_count"] == 2

    def test_no_working_directory(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "tree"])
        assert result.exit_code == 1
        assert "NO_WORKING_DIRECTORY" in result.output

    def test_limits(self, cli_runner: CliRunner, notes_root: Path) -> None:
        for i in range(4):
            write_note(notes_root, f"n{i}.md", None)
        write_note(notes_root, "deep/inner/x.md", None)
        result = cli_runner.invoke(
            cli, ["--json", "tree", str(notes_root), "--max-nodes", "3", "--max-depth", "1"]
        )
        assert result.exit_code == 0
        data = json.loads(result.stdout)["data"]
        assert data["truncated"] is True
        assert [c["name"] for c in data["tree"]["children"]] == ["deep", "n0.md", "n1.md"]
        assert data["tree"]["children"][0]["children"] == []

    def test_invalid_max_nodes(self, cli_runner: CliRunner, notes_root: Path) -> None:
        result = cli_runner.invoke(cli, ["tree", str(notes_root), "--max-nodes", "0"])
        assert result.exit_code == 2

    def test_limits_from_config(
        self, cli_runner: CliRunner, tmp_path: Path, notes_root: Path
    ) -> None:
        (tmp_path / "mdnest.toml").write_text("[tree]\nmax_nodes = 2\n")
        for i in range(3):
            write_note(notes_root, f"n{i}.md", None)
        result = cli_runner.invoke(cli, ["--json", "tree", str(notes_root)])
        data = json.loads(result.stdout)["data"]
        assert data["max_nodes"] == 2
        assert len(data["tree"]["children"]) == 2
