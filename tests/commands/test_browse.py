"""Tests for the ls command."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from graphlens.cli import cli


@pytest.mark.usefixtures("_isolated_root", "patch_engine")
class TestLs:
    def test_root_listing(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["ls"])
        assert result.exit_code == 0, result.output
        assert "nested/" in result.stdout
        assert "alpha" in result.stdout
        assert "notes" not in result.stdout
        assert "1 directories, 1 databases" in result.stdout

    def test_relative_path(self, cli_runner: CliRunner, data_root: Path) -> None:
        result = cli_runner.invoke(cli, ["--json", "ls", "nested"])
        payload = json.loads(result.stdout)
        assert payload["data"]["current"] == str(data_root / "nested")
        assert [f["name"] for f in payload["data"]["files"]] == ["beta"]

    def test_absolute_path(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        result = cli_runner.invoke(cli, ["--json", "ls", str(tmp_path)])
        payload = json.loads(result.stdout)
        assert [d["name"] for d in payload["data"]["directories"]] == ["data"]

    def test_missing_directory(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "ls", "does-not-exist"])
        assert result.exit_code == 1
        assert json.loads(result.stderr)["error"]["code"] == "NOT_FOUND"
