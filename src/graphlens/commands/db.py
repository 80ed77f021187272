"""Command group: database registry."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from graphlens.commands._base import GlGroup
from graphlens.services.databases import DatabaseService

if TYPE_CHECKING:
    from graphlens.commands._context import AppContext

_DB_EXAMPLES = """\
  graphlens db list
  graphlens --root ~/graphs db list
  graphlens db add ./exports/companies.kuzu"""


@click.group(cls=GlGroup, examples=_DB_EXAMPLES)
@click.pass_obj
def db(app: AppContext) -> None:
    """List and register graph databases."""


@db.command(
    name="list",
    examples="""\
  graphlens db list
  graphlens --json db list""",
)
@click.pass_obj
def list_cmd(app: AppContext) -> None:
    """List databases found under the data root."""
    app.emit(DatabaseService(app.workspace).list_databases())


@db.command(
    examples="""\
  graphlens db add ./exports/companies.kuzu
  graphlens --json db add /data/social.kuzu""",
)
@click.argument("path")
@click.pass_obj
def add(app: AppContext, path: str) -> None:
    """Register a database file by path (for this session only)."""
    app.emit(DatabaseService(app.workspace).register_database(path))
