"""Command group: read and save a document through the form schema."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, TextIO

import click

from mdnest.commands._base import MdnGroup

if TYPE_CHECKING:
    from mdnest.commands._context import AppContext


@click.group(
    cls=MdnGroup,
    examples="""\
  mdnest form read notes/today.md
  mdnest form save notes/today.md --values '{"tags": "a, b", "rating": 4.6}'
  echo '{"title": "Draft"}' | mdnest form save notes/draft.md --values -""",
)
def form() -> None:
    """Convert between document frontmatter and form values."""


@form.command()
@click.argument("file", type=click.Path(dir_okay=False))
@click.pass_obj
def read(app: AppContext, file: str) -> None:
    """Show FILE's frontmatter as form values."""
    from mdnest.services.frontmatter import FrontmatterService

    app.emit(FrontmatterService(app.workspace).read_form(file))


@form.command()
@click.argument("file", type=click.Path(dir_okay=False))
@click.option(
    "--values",
    "values_json",
    required=True,
    help="Form values as a JSON object, or '-' to read stdin.",
)
@click.option("--body-file", type=click.File("r"), default=None, help="Replace the body.")
@click.pass_obj
def save(app: AppContext, file: str, values_json: str, body_file: TextIO | None) -> None:
    """Write form values into FILE's frontmatter."""
    from mdnest.services.frontmatter import FrontmatterService

    raw = click.get_text_stream("stdin").read() if values_json == "-" else values_json
    try:
        values = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise click.BadParameter(f"Invalid JSON: {exc}", param_hint="--values") from exc
    if not isinstance(values, dict):
        raise click.BadParameter("Expected a JSON object", param_hint="--values")

    body = body_file.read() if body_file is not None else None
    app.emit(FrontmatterService(app.workspace).save_form(file, values, body))
