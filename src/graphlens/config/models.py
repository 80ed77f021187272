"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, graphlens.toml only contains
overrides. A fresh install needs no config file at all.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator

DEFAULT_EXTENSION = ".kuzu"
DEFAULT_OVERVIEW_LIMIT = 500


class RegistryConfig(BaseModel):
    """[registry] section."""

    model_config = {"frozen": True}

    extension: str = DEFAULT_EXTENSION

    @field_validator("extension")
    @classmethod
    def _leading_dot(cls, value: str) -> str:
        value = value.strip()
        if not value or value == ".":
            msg = "extension must not be empty"
            raise ValueError(msg)
        return value if value.startswith(".") else f".{value}"


class OverviewConfig(BaseModel):
    """[overview] section — row caps for the overview query pair."""

    model_config = {"frozen": True}

    node_limit: int = Field(default=DEFAULT_OVERVIEW_LIMIT, gt=0)
    link_limit: int = Field(default=DEFAULT_OVERVIEW_LIMIT, gt=0)


class EngineConfig(BaseModel):
    """[engine] section — passed to the embedded engine on open.

    Zero means "engine default" for the sizing options.
    """

    model_config = {"frozen": True}

    read_only: bool = False
    buffer_pool_size: int = Field(default=0, ge=0)
    max_num_threads: int = Field(default=0, ge=0)


class McpConfig(BaseModel):
    """[mcp] section."""

    model_config = {"frozen": True}

    transport: Literal["stdio", "sse", "streamable-http"] = "stdio"

