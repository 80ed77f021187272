"""Subcommand modules for graphlens.

Provides register_commands() which uses deferred imports to keep
``graphlens --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register command groups and standalone commands on the root CLI group."""
    # --- Groups ---
    from graphlens.commands.db import db
    from graphlens.commands.graph import graph

    cli.add_command(db)
    cli.add_command(graph)

    # --- Standalone commands ---
    from graphlens.commands.browse import browse
    from graphlens.commands.serve import serve

    cli.add_command(browse)
    cli.add_command(serve)
