"""Workspace — the single dependency injected into every service.

Owns the database registry and the query executor for one data root.
Registered databases live exactly as long as the Workspace: a CLI
invocation builds a fresh one, the RPC server keeps one for its lifetime.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from graphlens.infrastructure.engine import KuzuEngine
from graphlens.infrastructure.executor import QueryExecutor
from graphlens.infrastructure.registry import DatabaseRegistry

if TYPE_CHECKING:
    from graphlens.config.settings import GraphlensSettings
    from graphlens.infrastructure.engine import GraphEngine

logger = logging.getLogger(__name__)


class Workspace:
    """Registry + executor bound to a data root and settings."""

    def __init__(self, settings: GraphlensSettings, *, engine: GraphEngine | None = None) -> None:
        self._settings = settings
        self._root = Path(settings.data_root).expanduser().absolute()
        self._registry = DatabaseRegistry(self._root, settings.registry.extension)
        self._executor = QueryExecutor(
            self._registry, engine if engine is not None else KuzuEngine(settings.engine)
        )
        logger.debug("Workspace root: %s", self._root)

    @property
    def root(self) -> Path:
        return self._root

    @property
    def settings(self) -> GraphlensSettings:
        return self._settings

    @property
    def registry(self) -> DatabaseRegistry:
        return self._registry

    @property
    def executor(self) -> QueryExecutor:
        return self._executor
