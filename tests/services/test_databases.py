"""Tests for DatabaseService — list, register, browse."""

from __future__ import annotations

from pathlib import Path

from graphlens.infrastructure.workspace import Workspace
from graphlens.services.databases import DatabaseService
from tests.conftest import EngineFactory


class TestListDatabases:
    def test_scanned(self, workspace: Workspace) -> None:
        result = DatabaseService(workspace).list_databases()
        assert result.ok
        assert result.op == "list_databases"
        assert result.data["count"] == 2
        assert [item["name"] for item in result.data["items"]] == ["alpha", "beta"]
        assert result.data["items"][1] == {
            "id": 1,
            "name": "beta",
            "path": str(workspace.root / "nested" / "beta.kuzu"),
            "relativePath": "nested/beta.kuzu",
        }

    def test_empty_root(self, tmp_path: Path, make_engine: EngineFactory) -> None:
        from graphlens.config.settings import GraphlensSettings

        empty = tmp_path / "empty"
        empty.mkdir()
        ws = Workspace(GraphlensSettings.from_cli(data_root=empty), engine=make_engine())
        result = DatabaseService(ws).list_databases()
        assert result.ok
        assert result.data == {"count": 0, "items": []}


class TestRegisterDatabase:
    def test_register_then_list(self, workspace: Workspace, tmp_path: Path) -> None:
        extra = tmp_path / "extra.kuzu"
        extra.write_bytes(b"")
        svc = DatabaseService(workspace)

        result = svc.register_database(str(extra))
        assert result.ok
        assert result.data["id"] == 2
        assert result.data["relativePath"] == str(extra)

        listed = svc.list_databases()
        assert listed.data["count"] == 3
        assert listed.data["items"][2]["name"] == "extra"

    def test_duplicate(self, workspace: Workspace, tmp_path: Path) -> None:
        extra = tmp_path / "extra.kuzu"
        extra.write_bytes(b"")
        svc = DatabaseService(workspace)
        assert svc.register_database(str(extra)).ok

        again = svc.register_database(str(extra))
        assert not again.ok
        assert again.error is not None
        assert again.error.code == "VALIDATION_FAILED"
        assert again.error.message == "Database already added"

    def test_wrong_extension(self, workspace: Workspace, data_root: Path) -> None:
        result = DatabaseService(workspace).register_database(str(data_root / "notes.txt"))
        assert not result.ok
        assert result.error is not None
        assert result.error.message == "Only .kuzu files are supported"

    def test_missing(self, workspace: Workspace, tmp_path: Path) -> None:
        result = DatabaseService(workspace).register_database(str(tmp_path / "ghost.kuzu"))
        assert not result.ok
        assert result.error is not None
        assert result.error.message.startswith("File not found")

    def test_empty(self, workspace: Workspace) -> None:
        result = DatabaseService(workspace).register_database("")
        assert result.error is not None
        assert result.error.message == "filePath is required"


class TestListDirectory:
    def test_defaults_to_root(self, workspace: Workspace) -> None:
        result = DatabaseService(workspace).list_directory()
        assert result.ok
        assert result.data["current"] == str(workspace.root)
        assert [d["name"] for d in result.data["directories"]] == ["nested"]
        assert [f["name"] for f in result.data["files"]] == ["alpha"]

    def test_relative_to_root(self, workspace: Workspace) -> None:
        result = DatabaseService(workspace).list_directory("nested")
        assert result.ok
        assert [f["name"] for f in result.data["files"]] == ["beta"]
        assert result.data["parent"] == str(workspace.root)

    def test_missing(self, workspace: Workspace) -> None:
        result = DatabaseService(workspace).list_directory("nope")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "NOT_FOUND"
