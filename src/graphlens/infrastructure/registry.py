"""DatabaseRegistry — merged view of scanned and registered databases.

Scanned databases come from a recursive walk of the data root; registered
databases are added explicitly at runtime and live only as long as the
registry object. Ids are positions in the merged list, recomputed on every
call to :meth:`DatabaseRegistry.list`, so they may shift when files appear
or disappear between calls.

INVARIANT: the registered list is only touched under ``self._lock``.
"""

from __future__ import annotations

import logging
import os
import threading
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from graphlens.errors import NotFoundError, ValidationError
from graphlens.infrastructure.filesystem import (
    find_database_files,
    is_database_file,
    strip_extension,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DatabaseInfo:
    """One known database. ``id`` is only meaningful within a single listing."""

    id: int
    name: str
    path: str
    relative_path: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "path": self.path,
            "relativePath": self.relative_path,
        }


class DatabaseRegistry:
    """Owned, thread-safe container of known databases.

    Exposes only :meth:`list`, :meth:`register`, and :meth:`resolve`.
    """

    def __init__(self, root: Path, extension: str) -> None:
        self._root = root
        self._extension = extension
        self._registered: list[DatabaseInfo] = []
        self._lock = threading.Lock()

    @property
    def root(self) -> Path:
        return self._root

    @property
    def extension(self) -> str:
        return self._extension

    def _scan(self) -> list[DatabaseInfo]:
        entries: list[DatabaseInfo] = []
        for path in find_database_files(self._root, self._extension):
            entries.append(
                DatabaseInfo(
                    id=0,
                    name=strip_extension(path.name, self._extension),
                    path=str(path),
                    relative_path=path.relative_to(self._root).as_posix(),
                )
            )
        return entries

    def list(self) -> list[DatabaseInfo]:
        """Scanned databases followed by registered ones, ids ``0..N-1``."""
        scanned = self._scan()
        with self._lock:
            registered = list(self._registered)
        return [replace(info, id=i) for i, info in enumerate([*scanned, *registered])]

    def resolve(self, database_id: int) -> DatabaseInfo:
        """Return the database at *database_id* in the current listing.

        Raises:
            NotFoundError: *database_id* is out of range.
        """
        databases = self.list()
        if not 0 <= database_id < len(databases):
            msg = f"Database not found: {database_id}"
            raise NotFoundError(msg, id=database_id, count=len(databases))
        return databases[database_id]

    def register(self, path: str) -> DatabaseInfo:
        """Register a database file outside (or inside) the data root.

        Relative paths resolve against the process working directory.

        Raises:
            ValidationError: empty path, missing file, wrong extension, or the
                same absolute path is already registered. The registry is
                unchanged in every failure case.
        """
        if not path or not path.strip():
            msg = "filePath is required"
            raise ValidationError(msg)

        abs_path = Path(os.path.abspath(Path(path).expanduser()))
        if not abs_path.exists():
            msg = f"File not found: {abs_path}"
            raise ValidationError(msg, path=str(abs_path))
        if not is_database_file(abs_path.name, self._extension):
            msg = f"Only {self._extension} files are supported"
            raise ValidationError(msg, path=str(abs_path))

        abs_str = str(abs_path)
        info = DatabaseInfo(
            id=0,
            name=strip_extension(abs_path.name, self._extension),
            path=abs_str,
            relative_path=abs_str,
        )
        with self._lock:
            if any(entry.path == abs_str for entry in self._registered):
                msg = "Database already added"
                raise ValidationError(msg, path=abs_str)
            self._registered.append(info)
        logger.debug("Registered database %s", abs_str)

        # Registered entries follow scanned ones, so the last match is ours.
        for entry in reversed(self.list()):
            if entry.path == abs_str:
                return entry
        return info
