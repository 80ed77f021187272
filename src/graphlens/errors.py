"""Exception hierarchy raised by the registry, filesystem, and executor.

Infrastructure raises these; the service layer converts them into
:class:`~graphlens.services.result.ServiceResult` errors at the operation
boundary. Nothing here is retried.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any


class GraphlensError(Exception):
    """Base exception for graphlens operations."""

    code = "ERROR"

    def __init__(self, message: str, **detail: Any) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail


class ValidationError(GraphlensError):
    """Input rejected before any I/O (empty path, wrong extension, duplicate)."""

    code = "VALIDATION_FAILED"


class NotFoundError(GraphlensError):
    """Unknown database id or nonexistent directory."""

    code = "NOT_FOUND"


class DirectoryReadError(GraphlensError):
    """A directory exists but could not be read."""

    code = "IO_ERROR"


class EngineStage(StrEnum):
    """Which step of a query call the embedded engine failed in."""

    OPEN = "open"
    CONNECT = "connect"
    EXECUTE = "execute"


class EngineError(GraphlensError):
    """Failure reported by the embedded graph engine.

    The engine's own message is kept verbatim in :attr:`engine_message`.
    """

    stage: EngineStage
    prefix = "Engine failure"

    def __init__(self, engine_message: str, **detail: Any) -> None:
        self.engine_message = engine_message
        super().__init__(f"{self.prefix}: {engine_message}", stage=str(self.stage), **detail)


class DatabaseOpenError(EngineError):
    code = "ENGINE_OPEN_FAILED"
    stage = EngineStage.OPEN
    prefix = "Failed to open database"


class ConnectionOpenError(EngineError):
    code = "ENGINE_CONNECT_FAILED"
    stage = EngineStage.CONNECT
    prefix = "Failed to create connection"


class QueryExecutionError(EngineError):
    code = "QUERY_FAILED"
    stage = EngineStage.EXECUTE
    prefix = "Query failed"
