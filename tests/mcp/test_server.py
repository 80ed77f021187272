"""Tests for MCP server creation."""

from __future__ import annotations

from pathlib import Path
from typing import Any
from unittest.mock import patch

import pytest

from graphlens.mcp.server import create_server, mcp_available


class DummyFastMCP:
    def __init__(self, name: str, **kwargs: Any) -> None:
        self.name = name
        self.kwargs = kwargs
        self.tools: list[str] = []

    def tool(self):  # type: ignore[no-untyped-def]
        def decorator(fn):  # type: ignore[no-untyped-def]
            self.tools.append(fn.__name__)
            return fn

        return decorator


class TestServer:
    def test_mcp_available_is_bool(self) -> None:
        assert isinstance(mcp_available, bool)

    def test_create_server_without_mcp_raises(self) -> None:
        with (
            patch("graphlens.mcp.server.mcp_available", False),
            pytest.raises(RuntimeError, match="MCP extra not installed"),
        ):
            create_server()

    def test_create_server_registers_tools(self, data_root: Path) -> None:
        with (
            patch("graphlens.mcp.server.mcp_available", True),
            patch("graphlens.mcp.server._FastMCP", DummyFastMCP),
        ):
            server = create_server(data_root=data_root, host="0.0.0.0", port=9001)
        assert server.name == "graphlens"
        assert server.kwargs == {"host": "0.0.0.0", "port": 9001}
        assert len(server.tools) == 5
