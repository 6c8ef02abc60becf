"""Command group: the frontmatter field schema."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from mdnest.commands._base import MdnGroup
from mdnest.domain.types import FieldType

if TYPE_CHECKING:
    from mdnest.commands._context import AppContext

_SCHEMA_EXAMPLES = """\
  mdnest schema show
  mdnest schema add tags --type "string[]"
  mdnest schema add published --type date
  mdnest schema remove published"""


@click.group(cls=MdnGroup, examples=_SCHEMA_EXAMPLES)
def schema() -> None:
    """Manage the frontmatter fields shown in the form editor."""


@schema.command("show")
@click.pass_obj
def show(app: AppContext) -> None:
    """List the configured fields."""
    from mdnest.services.frontmatter import FrontmatterService

    app.emit(FrontmatterService(app.workspace).load_schema())


@schema.command("add")
@click.argument("title")
@click.option(
    "--type",
    "field_type",
    type=click.Choice([t.value for t in FieldType]),
    default=FieldType.STRING.value,
    help="Field type.",
)
@click.pass_obj
def add(app: AppContext, title: str, field_type: str) -> None:
    """Append a field named TITLE."""
    from mdnest.services.frontmatter import FrontmatterService

    app.emit(FrontmatterService(app.workspace).add_field(title, field_type))


@schema.command("remove")
@click.argument("title")
@click.pass_obj
def remove(app: AppContext, title: str) -> None:
    """Remove the field named TITLE."""
    from mdnest.services.frontmatter import FrontmatterService

    app.emit(FrontmatterService(app.workspace).remove_field(title))
