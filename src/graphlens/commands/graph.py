"""Command group: overview graphs and ad hoc queries."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from graphlens.commands._base import GlGroup
from graphlens.services.graph import GraphService

if TYPE_CHECKING:
    from graphlens.commands._context import AppContext

_GRAPH_EXAMPLES = """\
  graphlens graph overview 0
  graphlens graph overview 0 --limit 100
  graphlens --json graph query 0 "MATCH (a)-[r]->(b) RETURN a, r, b LIMIT 25\""""


@click.group(cls=GlGroup, examples=_GRAPH_EXAMPLES)
@click.pass_obj
def graph(app: AppContext) -> None:
    """Project graph databases into node/link graphs."""


@graph.command(
    examples="""\
  graphlens graph overview 0
  graphlens graph overview 2 --limit 50
  graphlens --json graph overview 0""",
)
@click.argument("database_id", type=int)
@click.option("--limit", default=None, type=int, help="Row cap for each overview query.")
@click.pass_obj
def overview(app: AppContext, database_id: int, limit: int | None) -> None:
    """Show every node (up to the cap) and the links between them."""
    app.emit(GraphService(app.workspace).overview(database_id, limit=limit))


@graph.command(
    examples="""\
  graphlens graph query 0 "MATCH (n:Person) RETURN n LIMIT 10"
  graphlens --json graph query 1 "MATCH (a)-[r:Follows]->(b) RETURN a, r, b\"""",
)
@click.argument("database_id", type=int)
@click.argument("query")
@click.pass_obj
def query(app: AppContext, database_id: int, query: str) -> None:
    """Run a Cypher query and project its nodes and relationships."""
    app.emit(GraphService(app.workspace).run_query(database_id, query))
