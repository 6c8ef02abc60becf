"""Tests for the schema command group."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from mdnest.cli import cli


@pytest.mark.usefixtures("_isolated_home")
class TestSchemaCommand:
    def test_show_empty(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["schema", "show"])
        assert result.exit_code == 0
        assert "(no fields)" in result.output

    def test_add_and_show(self, cli_runner: CliRunner) -> None:
        assert cli_runner.invoke(cli, ["schema", "add", "title"]).exit_code == 0
        result = cli_runner.invoke(cli, ["schema", "add", "tags", "--type", "string[]"])
        assert result.exit_code == 0

        result = cli_runner.invoke(cli, ["--json", "schema", "show"])
        fields = json.loads(result.stdout)["data"]["fields"]
        assert fields == [
            {"key": 1, "title": "title", "field_type": "string"},
            {"key": 2, "title": "tags", "field_type": "string[]"},
        ]

    def test_invalid_type_rejected(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["schema", "add", "x", "--type", "color"])
        assert result.exit_code == 2

    def test_duplicate(self, cli_runner: CliRunner) -> None:
        cli_runner.invoke(cli, ["schema", "add", "title"])
        result = cli_runner.invoke(cli, ["--json", "schema", "add", "title"])
        assert result.exit_code == 1
        assert "DUPLICATE_FIELD" in result.output

    def test_remove(self, cli_runner: CliRunner) -> None:
        cli_runner.invoke(cli, ["schema", "add", "title"])
        result = cli_runner.invoke(cli, ["--json", "schema", "remove", "title"])
        assert result.exit_code == 0
        assert json.loads(result.stdout)["data"] == {"title": "title", "count": 0}

    def test_remove_missing(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["schema", "remove", "ghost"])
        assert result.exit_code == 1
