"""FastMCP server setup.

Optional extra — guarded behind try/except ImportError.
One long-lived Workspace backs every tool call, so databases registered
through ``register_database`` stay listed until the process exits.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from graphlens.config.settings import GraphlensSettings

mcp_available = False
_FastMCP: Any = None

try:
    from mcp.server.fastmcp import FastMCP as _FastMCP  # type: ignore[no-redef,import-not-found]

    mcp_available = True
except ImportError:
    pass

__all__ = ["create_server", "mcp_available"]


def create_server(
    *,
    settings: GraphlensSettings | None = None,
    data_root: Path | None = None,
    host: str = "127.0.0.1",
    port: int = 8000,
) -> Any:
    """Create and configure the MCP server.

    Uses *settings* when given, otherwise builds them for *data_root* (or
    CWD). Registers all tools on a FastMCP instance and returns it.

    *host* and *port* configure the bind address for HTTP transports
    (sse, streamable-http). They are ignored when using stdio.

    Raises RuntimeError if the mcp extra is not installed.
    """
    if not mcp_available or _FastMCP is None:
        msg = "MCP extra not installed. Install with: pip install graphlens[mcp]"
        raise RuntimeError(msg)

    from graphlens.config.settings import GraphlensSettings
    from graphlens.infrastructure.workspace import Workspace
    from graphlens.mcp.tools import register_tools

    if settings is None:
        settings = GraphlensSettings.from_cli(data_root=data_root)
    workspace = Workspace(settings)

    server = _FastMCP("graphlens", host=host, port=port)
    register_tools(server, workspace)
    return server
