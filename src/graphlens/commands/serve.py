"""serve — start the RPC server for desktop hosts (requires graphlens[mcp] extra)."""

from __future__ import annotations

import click

from graphlens.commands._base import GlCommand


@click.command(
    cls=GlCommand,
    examples="""\
  # Start the server (stdio transport, default)
  graphlens serve

  # Streamable HTTP on custom host/port
  graphlens serve --transport streamable-http --host 0.0.0.0 --port 9000""",
)
@click.option(
    "--transport",
    default=None,
    type=click.Choice(["stdio", "sse", "streamable-http"]),
    help="MCP transport protocol (default: [mcp] transport).",
)
@click.option("--host", default="127.0.0.1", help="Bind address (HTTP transports only).")
@click.option("--port", default=8000, type=int, help="Listen port (HTTP transports only).")
@click.pass_obj
def serve(app: object, transport: str | None, host: str, port: int) -> None:
    """Start the RPC server (requires graphlens[mcp] extra)."""
    from graphlens.mcp.server import create_server, mcp_available

    if not mcp_available:
        click.echo("MCP not installed. Install with: pip install graphlens[mcp]", err=True)
        raise SystemExit(1)

    from graphlens.commands._context import AppContext

    assert isinstance(app, AppContext)
    server = create_server(settings=app.settings, host=host, port=port)
    server.run(transport=transport or app.settings.mcp.transport)
