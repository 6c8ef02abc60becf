"""Command group: frontmatter value suggestions."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from mdnest.commands._base import MdnGroup

if TYPE_CHECKING:
    from mdnest.commands._context import AppContext


@click.group(
    cls=MdnGroup,
    examples="""\
  mdnest suggest collect
  mdnest suggest collect --root ~/notes
  mdnest suggest show
  mdnest suggest show tags --current python""",
)
def suggest() -> None:
    """Rebuild or inspect ranked frontmatter suggestions."""


@suggest.command()
@click.option(
    "--root",
    type=click.Path(file_okay=False),
    default=None,
    help="Corpus root (default: the working directory).",
)
@click.pass_obj
def collect(app: AppContext, root: str | None) -> None:
    """Scan all markdown files and rebuild the suggestion tables."""
    from mdnest.services.frontmatter import FrontmatterService

    app.emit(FrontmatterService(app.workspace).collect_suggestions(root))


@suggest.command("show")
@click.argument("field", required=False)
@click.option(
    "--current",
    multiple=True,
    help="Value already set in the open document (repeatable).",
)
@click.pass_obj
def show(app: AppContext, field: str | None, current: tuple[str, ...]) -> None:
    """Show stored suggestions, optionally for a single FIELD."""
    from mdnest.services.frontmatter import FrontmatterService

    svc = FrontmatterService(app.workspace)
    app.emit(svc.load_suggestions(field, list(current) or None))
