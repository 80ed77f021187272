"""GraphService — run queries and project their rows into node/link graphs.

Two operations, both one-shot batch transforms:

- ``overview``: the fixed node/link query pair, each capped at a row
  limit (``[overview]`` config, overridable per call).
- ``run_query``: an arbitrary caller query, bounded only by its own LIMIT.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from graphlens.domain.projection import overview_queries, project_overview, project_rows
from graphlens.errors import GraphlensError, ValidationError
from graphlens.services.base import BaseService
from graphlens.services.result import ServiceResult
from graphlens.services.telemetry import trace_span, traced

if TYPE_CHECKING:
    from graphlens.domain.graph import GraphData


def _graph_payload(database_id: int, graph: GraphData, **extra: Any) -> dict[str, Any]:
    return {
        "database_id": database_id,
        "node_count": len(graph.nodes),
        "link_count": len(graph.links),
        **graph.to_dict(),
        **extra,
    }


class GraphService(BaseService):
    """Handles overview graphs and ad hoc queries."""

    @traced
    def overview(self, database_id: int, *, limit: int | None = None) -> ServiceResult:
        """Build the overview graph of *database_id*.

        Args:
            database_id: Position in the current database listing.
            limit: Row cap applied to both overview queries. Defaults to the
                configured ``node_limit`` / ``link_limit``.

        When a query returns exactly its cap the result is flagged
        ``truncated`` with a warning. Links whose endpoint fell past the node
        cap are dropped like any other dangling link.
        """
        op = "overview_graph"
        config = self._workspace.settings.overview
        if limit is not None and limit <= 0:
            return self._failure(op, ValidationError("limit must be positive", limit=limit))
        node_limit = limit if limit is not None else config.node_limit
        link_limit = limit if limit is not None else config.link_limit

        try:
            with trace_span("execute") as span:
                node_rows, link_rows = self._workspace.executor.run_batch(
                    database_id, overview_queries(node_limit, link_limit)
                )
                if span:
                    span.annotate("node_rows", len(node_rows))
                    span.annotate("link_rows", len(link_rows))
        except GraphlensError as exc:
            return self._failure(op, exc)

        with trace_span("project"):
            graph = project_overview(node_rows, link_rows)

        warnings: list[str] = []
        if len(node_rows) >= node_limit:
            warnings.append(f"Node query reached its {node_limit}-row cap; graph is truncated")
        if len(link_rows) >= link_limit:
            warnings.append(f"Link query reached its {link_limit}-row cap; graph is truncated")

        return ServiceResult(
            ok=True,
            op=op,
            data=_graph_payload(
                database_id,
                graph,
                node_limit=node_limit,
                link_limit=link_limit,
                truncated=bool(warnings),
            ),
            warnings=warnings,
        )

    @traced
    def run_query(self, database_id: int, query: str) -> ServiceResult:
        """Run *query* against *database_id* and project every node and relationship."""
        op = "run_query"
        if not query or not query.strip():
            return self._failure(op, ValidationError("query is required"))

        try:
            with trace_span("execute") as span:
                rows = self._workspace.executor.run(database_id, query)
                if span:
                    span.annotate("rows", len(rows))
        except GraphlensError as exc:
            return self._failure(op, exc)

        with trace_span("project"):
            graph = project_rows(rows)

        return ServiceResult(
            ok=True,
            op=op,
            data=_graph_payload(database_id, graph, row_count=len(rows)),
        )
