"""Shared pytest fixtures and test helpers for mdnest tests."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from mdnest.config.settings import MdnSettings
from mdnest.infrastructure.workspace import Workspace
from mdnest.services.telemetry import disable_telemetry


@pytest.fixture(autouse=True)
def _reset_process_state() -> Iterator[None]:
    """Undo logging and telemetry set up by CLI invocations."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers = handlers
    root.setLevel(level)
    disable_telemetry()


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    """Directory holding the store database for one test."""
    return tmp_path / "data"


@pytest.fixture
def notes_root(tmp_path: Path) -> Path:
    """Empty markdown folder, separate from the data directory."""
    root = tmp_path / "notes"
    root.mkdir()
    return root


@pytest.fixture
def settings(tmp_path: Path, data_dir: Path, monkeypatch: pytest.MonkeyPatch) -> MdnSettings:
    monkeypatch.delenv("MDNEST_CONFIG", raising=False)
    return MdnSettings.from_cli(start=tmp_path, data_dir=data_dir)


@pytest.fixture
def workspace(settings: MdnSettings) -> Iterator[Workspace]:
    """Workspace on a temp data directory, without plugins."""
    ws = Workspace(settings)
    try:
        yield ws
    finally:
        ws.close()


@pytest.fixture
def _isolated_home(
    tmp_path: Path,
    data_dir: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """Point the CLI at a temp data directory and cwd.

    Use via ``@pytest.mark.usefixtures("_isolated_home")`` on command test
    classes.
    """
    monkeypatch.delenv("MDNEST_CONFIG", raising=False)
    monkeypatch.setenv("MDNEST_DATA_DIR", str(data_dir))
    monkeypatch.chdir(tmp_path)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def write_note(root: Path, relpath: str, frontmatter: str | None, body: str = "Body\n") -> Path:
    """Write a markdown file; *frontmatter* is raw YAML without delimiters."""
    path = root / relpath
    path.parent.mkdir(parents=True, exist_ok=True)
    text = body if frontmatter is None else f"---\n{frontmatter}\n---\n\n{body}"
    path.write_text(text, encoding="utf-8")
    return path


def schema_fields(*specs: tuple[str, str]) -> list[dict[str, Any]]:
    """Build schema dicts from ``(title, field_type)`` pairs, keyed 1..n."""
    return [
        {"key": i, "title": title, "field_type": field_type}
        for i, (title, field_type) in enumerate(specs, start=1)
    ]
