"""ls — browse directories for database files."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from graphlens.commands._base import GlCommand
from graphlens.services.databases import DatabaseService

if TYPE_CHECKING:
    from graphlens.commands._context import AppContext


@click.command(
    name="ls",
    cls=GlCommand,
    examples="""\
  graphlens ls
  graphlens ls exports
  graphlens --json ls /data""",
)
@click.argument("path", required=False)
@click.pass_obj
def browse(app: AppContext, path: str | None) -> None:
    """List subdirectories and database files (default: the data root)."""
    app.emit(DatabaseService(app.workspace).list_directory(path))
