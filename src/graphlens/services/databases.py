"""DatabaseService — registry listing, registration, and directory browsing."""

from __future__ import annotations

from graphlens.errors import GraphlensError
from graphlens.infrastructure.filesystem import list_directory, resolve_browse_path
from graphlens.services.base import BaseService
from graphlens.services.result import ServiceResult
from graphlens.services.telemetry import traced


class DatabaseService(BaseService):
    """Handles the database registry and filesystem browsing."""

    @traced
    def list_databases(self) -> ServiceResult:
        """List scanned databases followed by registered ones."""
        items = [info.to_dict() for info in self._workspace.registry.list()]
        return ServiceResult(
            ok=True,
            op="list_databases",
            data={"count": len(items), "items": items},
        )

    @traced
    def register_database(self, path: str) -> ServiceResult:
        """Register a database file by path and return its current entry."""
        try:
            info = self._workspace.registry.register(path)
        except GraphlensError as exc:
            return self._failure("register_database", exc)
        return ServiceResult(ok=True, op="register_database", data=info.to_dict())

    @traced
    def list_directory(self, path: str | None = None) -> ServiceResult:
        """List subdirectories and database files of *path*.

        No path means the data root; relative paths resolve against it.
        """
        registry = self._workspace.registry
        directory = resolve_browse_path(registry.root, path)
        try:
            listing = list_directory(directory, registry.extension)
        except GraphlensError as exc:
            return self._failure("list_directory", exc)
        return ServiceResult(ok=True, op="list_directory", data=listing.to_dict())
