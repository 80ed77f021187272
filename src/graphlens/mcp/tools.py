"""MCP tool definitions — the five host-facing operations.

Each tool has a ``<name>_impl`` function testable without the mcp package.
``register_tools()`` wraps them with FastMCP decorators.
"""

from __future__ import annotations

from typing import Any

from graphlens.services.databases import DatabaseService
from graphlens.services.graph import GraphService
from graphlens.services.result import ServiceResult


def _to_mcp_response(result: ServiceResult) -> dict[str, Any]:
    """Convert a ServiceResult to an MCP-friendly dict."""
    response: dict[str, Any] = {
        "ok": result.ok,
        "op": result.op,
        "data": result.data,
    }
    if result.warnings:
        response["warnings"] = result.warnings
    if result.error is not None:
        response["error"] = {
            "code": result.error.code,
            "message": result.error.message,
        }
    return response


# ---------------------------------------------------------------------------
# Registry tools
# ---------------------------------------------------------------------------


def list_databases_impl(workspace: Any) -> dict[str, Any]:
    """List scanned and registered databases."""
    return _to_mcp_response(DatabaseService(workspace).list_databases())


def register_database_impl(workspace: Any, path: str) -> dict[str, Any]:
    """Register a database file by path."""
    return _to_mcp_response(DatabaseService(workspace).register_database(path))


def list_directory_impl(workspace: Any, path: str | None = None) -> dict[str, Any]:
    """List subdirectories and database files of a directory."""
    return _to_mcp_response(DatabaseService(workspace).list_directory(path))


# ---------------------------------------------------------------------------
# Graph tools
# ---------------------------------------------------------------------------


def get_overview_graph_impl(
    workspace: Any, database_id: int, *, limit: int | None = None
) -> dict[str, Any]:
    """Overview graph of a database."""
    return _to_mcp_response(GraphService(workspace).overview(database_id, limit=limit))


def run_query_impl(workspace: Any, database_id: int, query: str) -> dict[str, Any]:
    """Run a query and project its nodes and relationships."""
    return _to_mcp_response(GraphService(workspace).run_query(database_id, query))


def register_tools(server: Any, workspace: Any) -> None:
    """Register all five tools on the FastMCP server."""

    @server.tool()  # type: ignore[untyped-decorator]
    def list_databases() -> dict[str, Any]:
        """List graph databases under the data root, then registered ones."""
        return list_databases_impl(workspace)

    @server.tool()  # type: ignore[untyped-decorator]
    def register_database(path: str) -> dict[str, Any]:
        """Register a database file so it appears in list_databases."""
        return register_database_impl(workspace, path)

    @server.tool()  # type: ignore[untyped-decorator]
    def list_directory(path: str | None = None) -> dict[str, Any]:
        """Browse a directory for subdirectories and database files."""
        return list_directory_impl(workspace, path)

    @server.tool()  # type: ignore[untyped-decorator]
    def get_overview_graph(database_id: int, limit: int | None = None) -> dict[str, Any]:
        """Nodes and links of a database, capped per query."""
        return get_overview_graph_impl(workspace, database_id, limit=limit)

    @server.tool()  # type: ignore[untyped-decorator]
    def run_query(database_id: int, query: str) -> dict[str, Any]:
        """Run a Cypher query and return its nodes and relationships as a graph."""
        return run_query_impl(workspace, database_id, query)
