"""Command group: the stored working directory."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from mdnest.commands._base import MdnGroup

if TYPE_CHECKING:
    from mdnest.commands._context import AppContext


@click.group(
    cls=MdnGroup,
    examples="""\
  mdnest workdir set ~/notes
  mdnest workdir show""",
)
def workdir() -> None:
    """Select or show the working directory."""


@workdir.command("set")
@click.argument("path", type=click.Path())
@click.pass_obj
def set_cmd(app: AppContext, path: str) -> None:
    """Store PATH as the working directory."""
    from mdnest.services.tree import TreeService

    app.emit(TreeService(app.workspace).set_working_directory(path))


@workdir.command("show")
@click.pass_obj
def show(app: AppContext) -> None:
    """Print the stored working directory."""
    from mdnest.services.tree import TreeService

    app.emit(TreeService(app.workspace).get_working_directory())
