"""Command: bounded directory tree snapshot."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from mdnest.commands._base import MdnCommand

if TYPE_CHECKING:
    from mdnest.commands._context import AppContext


@click.command(
    cls=MdnCommand,
    examples="""\
  mdnest tree
  mdnest tree ~/notes
  mdnest tree ~/notes --max-depth 2
  mdnest --json tree ~/notes --max-nodes 500""",
)
@click.argument("path", required=False, type=click.Path(file_okay=False))
@click.option("--max-depth", type=click.IntRange(min=0), default=None, help="Depth limit.")
@click.option("--max-nodes", type=click.IntRange(min=1), default=None, help="Node budget.")
@click.pass_obj
def tree(
    app: AppContext,
    path: str | None,
    max_depth: int | None,
    max_nodes: int | None,
) -> None:
    """Show the file tree of PATH (default: the working directory)."""
    from mdnest.services.tree import TreeService

    svc = TreeService(app.workspace)
    app.emit(svc.build_tree(path, max_depth=max_depth, max_nodes=max_nodes))
