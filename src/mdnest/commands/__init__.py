"""Subcommand modules for mdnest.

Provides register_commands() which uses deferred imports to keep
``mdnest --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all command groups and standalone commands on the root CLI group."""
    # --- Groups ---
    from mdnest.commands.form import form
    from mdnest.commands.schema import schema
    from mdnest.commands.suggest import suggest
    from mdnest.commands.workdir import workdir

    cli.add_command(workdir)
    cli.add_command(schema)
    cli.add_command(suggest)
    cli.add_command(form)

    # --- Standalone commands ---
    from mdnest.commands.tree import tree

    cli.add_command(tree)
