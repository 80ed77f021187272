"""Tests for config section models."""

import pytest
from pydantic import ValidationError

from graphlens.config.models import EngineConfig, McpConfig, OverviewConfig, RegistryConfig


class TestRegistryConfig:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [(".kuzu", ".kuzu"), ("lbdb", ".lbdb"), ("  .graph ", ".graph"), (".db.v2", ".db.v2")],
    )
    def test_extension_normalized(self, raw: str, expected: str) -> None:
        assert RegistryConfig(extension=raw).extension == expected

    @pytest.mark.parametrize("raw", ["", "   ", "."])
    def test_extension_rejected(self, raw: str) -> None:
        with pytest.raises(ValidationError):
            RegistryConfig(extension=raw)


class TestOverviewConfig:
    def test_defaults(self) -> None:
        cfg = OverviewConfig()
        assert (cfg.node_limit, cfg.link_limit) == (500, 500)

    def test_limits_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            OverviewConfig(node_limit=0)


class TestEngineConfig:
    def test_negative_sizes_rejected(self) -> None:
        with pytest.raises(ValidationError):
            EngineConfig(buffer_pool_size=-1)


class TestMcpConfig:
    @pytest.mark.parametrize("transport", ["stdio", "sse", "streamable-http"])
    def test_known_transports(self, transport: str) -> None:
        assert McpConfig(transport=transport).transport == transport  # type: ignore[arg-type]

    def test_unknown_transport_rejected(self) -> None:
        with pytest.raises(ValidationError):
            McpConfig(transport="websocket")  # type: ignore[arg-type]
