"""Tests for output mode dispatch."""

import json

from mdnest.output.formatters import OutputSettings, format_result
from mdnest.services.result import ServiceResult


def _result() -> ServiceResult:
    return ServiceResult(ok=True, op="set_working_directory", data={"path": "/notes"})


class TestFormatResult:
    def test_default_is_rich(self) -> None:
        output = format_result(_result())
        assert "OK" in output
        assert "/notes" in output

    def test_json(self) -> None:
        output = format_result(_result(), settings=OutputSettings(json_output=True))
        parsed = json.loads(output)
        assert parsed["op"] == "set_working_directory"
        assert parsed["data"] == {"path": "/notes"}

    def test_quiet(self) -> None:
        assert format_result(_result(), settings=OutputSettings(quiet=True)) == "/notes"

    def test_json_wins_over_quiet(self) -> None:
        output = format_result(_result(), settings=OutputSettings(json_output=True, quiet=True))
        assert json.loads(output)["ok"] is True
