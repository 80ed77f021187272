"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO). The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from graphlens.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from graphlens.services.result import ServiceResult

# Node and link tables stop here; --json always carries the full graph.
MAX_TABLE_ROWS = 50


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    items = result.data.get("items") or result.data.get("nodes")
    if items and isinstance(items, list):
        return "\n".join(str(item["id"]) for item in items if "id" in item)

    if "id" in result.data:
        return str(result.data["id"])
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK/ERROR status line."""
    label = Text("OK", style="gl.ok")
    op = Text(f"  {result.op}", style="gl.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="gl.key")
    if key == "id" or key.endswith("_id"):
        v = Text(str(value), style="gl.id")
    elif key in ("path", "relativePath"):
        v = Text(str(value), style="gl.path")
    elif key == "name":
        v = Text(str(value), style="gl.name")
    else:
        v = Text(str(value))
    console.print(k, v, end="")
    console.print()


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print meta block including telemetry span tree (verbose only)."""
    if not result.meta:
        return

    console.print()
    console.print(Text("  meta:", style="dim"))

    for k, v in result.meta.items():
        if k == "telemetry":
            _render_telemetry_tree(console, v, indent=4)
        else:
            console.print(Text(f"    {k}: {v}"))


def _render_telemetry_tree(
    console: Console,
    span_data: dict[str, Any],
    indent: int = 4,
) -> None:
    """Render a hierarchical span tree with color-coded timing."""
    prefix = " " * indent
    name = span_data.get("name", "?")
    duration = span_data.get("duration_ms", 0.0)

    if duration > 1000:
        style = "bold red"
    elif duration > 100:
        style = "yellow"
    else:
        style = "dim"

    line = f"{prefix}[{style}]{duration:>8.2f}ms[/{style}]  {name}"
    annotations = span_data.get("annotations") or {}
    if annotations:
        line += "  (" + ", ".join(f"{k}={v}" for k, v in annotations.items()) + ")"
    console.print(line)

    for child in span_data.get("children", []):
        _render_telemetry_tree(console, child, indent=indent + 4)


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="gl.error")
    op = Text(f"  {result.op}", style="gl.op")
    sep = Text(" — ")
    console.print(label, op, sep, Text(msg))

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))


# ── Registry renderers ────────────────────────────────────────────────


def _render_databases(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render list_databases as a table."""
    items = result.data.get("items", [])
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("ID", style="gl.id", justify="right", no_wrap=True)
    table.add_column("Name", style="gl.name")
    table.add_column("Relative Path", style="gl.path")
    if verbose:
        table.add_column("Path", style="gl.path")

    for item in items:
        row = [
            Text(str(item.get("id", ""))),
            Text(str(item.get("name", ""))),
            Text(str(item.get("relativePath", ""))),
        ]
        if verbose:
            row.append(Text(str(item.get("path", ""))))
        table.add_row(*row)

    console.print(table)
    console.print(f"\n{result.data.get('count', len(items))} databases")
    if verbose:
        _render_meta(console, result)


def _render_registration(
    result: ServiceResult, console: Console, *, verbose: bool = False
) -> None:
    """Render register_database as fields."""
    _status_line(console, result)
    for key in ("id", "name", "path"):
        if key in result.data:
            _field(console, key, result.data[key])
    if verbose:
        _render_meta(console, result)


def _render_directory(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render list_directory as a two-section listing."""
    d = result.data
    console.print(Text(str(d.get("current", "")), style="bold"))
    if d.get("parent"):
        console.print(Text(f"  ..  {d['parent']}", style="gl.path"))
    for entry in d.get("directories", []):
        console.print(Text(f"  {entry['name']}/", style="gl.dir"))
    for entry in d.get("files", []):
        console.print(Text(f"  {entry['name']}", style="gl.name"))
    dirs = len(d.get("directories", []))
    files = len(d.get("files", []))
    console.print(f"\n{dirs} directories, {files} databases")
    if verbose:
        _render_meta(console, result)


# ── Graph renderer ────────────────────────────────────────────────────


def _render_graph(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render overview_graph and run_query as node and link tables."""
    d = result.data
    nodes: list[dict[str, Any]] = d.get("nodes", [])
    links: list[dict[str, Any]] = d.get("links", [])
    names = {node["id"]: node["name"] for node in nodes}

    _status_line(console, result)
    _field(console, "database_id", d.get("database_id", ""))

    if nodes:
        table = Table(title="Nodes", show_header=True, pad_edge=False, expand=False)
        table.add_column("ID", style="gl.id", no_wrap=True)
        table.add_column("Name", style="gl.name")
        table.add_column("Label", style="gl.label")
        for node in nodes[:MAX_TABLE_ROWS]:
            table.add_row(Text(node["id"]), Text(node["name"]), Text(node["label"]))
        console.print(table)

    if links:
        table = Table(title="Links", show_header=True, pad_edge=False, expand=False)
        table.add_column("Source", style="gl.name")
        table.add_column("Label", style="gl.label")
        table.add_column("Target", style="gl.name")
        for link in links[:MAX_TABLE_ROWS]:
            table.add_row(
                Text(names.get(link["source"], link["source"])),
                Text(link["label"]),
                Text(names.get(link["target"], link["target"])),
            )
        console.print(table)

    shown = max(len(nodes), len(links))
    if shown > MAX_TABLE_ROWS:
        console.print(Text(f"  (first {MAX_TABLE_ROWS} rows shown; use --json)", style="dim"))
    node_count = d.get("node_count", len(nodes))
    link_count = d.get("link_count", len(links))
    console.print(f"\n{node_count} nodes, {link_count} links")
    if verbose:
        _render_meta(console, result)


# ── Fallback ──────────────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, json.dumps(value, separators=(",", ":")))
        else:
            _field(console, key, value)
    if verbose:
        _render_meta(console, result)


_OP_RENDERERS: dict[str, Callable[..., None]] = {
    "list_databases": _render_databases,
    "register_database": _render_registration,
    "list_directory": _render_directory,
    "overview_graph": _render_graph,
    "run_query": _render_graph,
}
