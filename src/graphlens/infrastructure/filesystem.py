"""Filesystem discovery for database files and directory browsing.

A file is a candidate database iff its name ends with the recognized
extension; its display name is the filename with that extension removed.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from graphlens.errors import DirectoryReadError, NotFoundError

logger = logging.getLogger(__name__)


def is_database_file(name: str, extension: str) -> bool:
    """Return True if *name* carries the database *extension*."""
    return len(name) > len(extension) and name.endswith(extension)


def strip_extension(name: str, extension: str) -> str:
    """Remove the database *extension* from *name*."""
    return name[: -len(extension)] if is_database_file(name, extension) else name


def find_database_files(root: Path, extension: str) -> list[Path]:
    """Recursively discover database files under *root*.

    Returns paths sorted by their position relative to *root* so repeated
    scans of an unchanged tree yield the same order.
    """
    if not root.is_dir():
        logger.debug("Scan root %s is not a directory", root)
        return []

    results: list[Path] = []
    for path in root.rglob(f"*{extension}"):
        if path.is_file() and is_database_file(path.name, extension):
            results.append(path)
    return sorted(results, key=lambda p: p.relative_to(root).as_posix())


# ---------------------------------------------------------------------------
# Directory listing
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DirEntry:
    name: str
    path: str
    type: str  # "directory" or "file"


@dataclass(frozen=True)
class DirectoryListing:
    current: str
    parent: str
    directories: list[DirEntry] = field(default_factory=list)
    files: list[DirEntry] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def resolve_browse_path(root: Path, path: str | None) -> Path:
    """Resolve a browse request: empty means *root*, relative joins *root*."""
    if not path:
        return root
    candidate = Path(path).expanduser()
    return candidate if candidate.is_absolute() else root / candidate


def list_directory(directory: Path, extension: str) -> DirectoryListing:
    """List subdirectories and database files directly inside *directory*.

    Dotfiles are hidden. Every subdirectory is listed; only files carrying
    *extension* are, with the extension stripped from their display name.
    Both lists are sorted by name.

    Raises:
        NotFoundError: *directory* does not exist or is not a directory.
        DirectoryReadError: the directory could not be read.
    """
    if not directory.is_dir():
        msg = f"Directory not found: {directory}"
        raise NotFoundError(msg, path=str(directory))

    try:
        children = list(directory.iterdir())
    except OSError as exc:
        msg = f"Cannot read directory {directory}: {exc.strerror or exc}"
        raise DirectoryReadError(msg, path=str(directory)) from exc

    directories: list[DirEntry] = []
    files: list[DirEntry] = []
    for child in children:
        name = child.name
        if name.startswith("."):
            continue
        if child.is_dir():
            directories.append(DirEntry(name=name, path=str(child), type="directory"))
        elif is_database_file(name, extension):
            files.append(
                DirEntry(name=strip_extension(name, extension), path=str(child), type="file")
            )

    directories.sort(key=lambda e: e.name)
    files.sort(key=lambda e: e.name)

    parent = directory.parent
    return DirectoryListing(
        current=str(directory),
        parent="" if parent == directory else str(parent),
        directories=directories,
        files=files,
    )
