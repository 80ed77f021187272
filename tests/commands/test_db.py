"""Tests for the db command group."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from graphlens.cli import cli


@pytest.mark.usefixtures("_isolated_root", "patch_engine")
class TestDbList:
    def test_human_output(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["db", "list"])
        assert result.exit_code == 0, result.output
        assert "alpha" in result.stdout
        assert "nested/beta.kuzu" in result.stdout
        assert "2 databases" in result.stdout

    def test_json_output(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "db", "list"])
        assert result.exit_code == 0
        payload = json.loads(result.stdout)
        assert payload["ok"] is True
        assert payload["op"] == "list_databases"
        assert [i["relativePath"] for i in payload["data"]["items"]] == [
            "alpha.kuzu",
            "nested/beta.kuzu",
        ]

    def test_quiet_prints_ids(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "db", "list"])
        assert result.stdout.splitlines() == ["0", "1"]


@pytest.mark.usefixtures("patch_engine")
class TestDbListRoot:
    def test_root_option(self, cli_runner: CliRunner, data_root: Path) -> None:
        nested = str(data_root / "nested")
        result = cli_runner.invoke(cli, ["--json", "--root", nested, "db", "list"])
        payload = json.loads(result.stdout)
        assert [i["name"] for i in payload["data"]["items"]] == ["beta"]

    def test_extension_from_config(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        (tmp_path / "graphlens.toml").write_text('[registry]\nextension = ".lbdb"\n')
        (tmp_path / "legacy.lbdb").write_bytes(b"")
        (tmp_path / "modern.kuzu").write_bytes(b"")
        result = cli_runner.invoke(cli, ["--json", "--root", str(tmp_path), "db", "list"])
        payload = json.loads(result.stdout)
        assert [i["name"] for i in payload["data"]["items"]] == ["legacy"]


@pytest.mark.usefixtures("_isolated_root", "patch_engine")
class TestDbAdd:
    def test_add(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        extra = tmp_path / "extra.kuzu"
        extra.write_bytes(b"")
        result = cli_runner.invoke(cli, ["--json", "db", "add", str(extra)])
        assert result.exit_code == 0
        payload = json.loads(result.stdout)
        assert payload["data"]["id"] == 2
        assert payload["data"]["path"] == str(extra)

    def test_wrong_extension_exits_1(self, cli_runner: CliRunner, data_root: Path) -> None:
        result = cli_runner.invoke(cli, ["--json", "db", "add", str(data_root / "notes.txt")])
        assert result.exit_code == 1
        assert result.stdout == ""
        payload = json.loads(result.stderr)
        assert payload["error"]["code"] == "VALIDATION_FAILED"

    def test_missing_human_error(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["db", "add", "ghost.kuzu"])
        assert result.exit_code == 1
        assert "ERROR" in result.stderr
        assert "File not found" in result.stderr

    def test_registration_lasts_one_invocation(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        extra = tmp_path / "extra.kuzu"
        extra.write_bytes(b"")
        cli_runner.invoke(cli, ["db", "add", str(extra)])
        result = cli_runner.invoke(cli, ["--json", "db", "list"])
        assert json.loads(result.stdout)["data"]["count"] == 2


class TestDbExamples:
    def test_examples(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["db", "add", "--examples"])
        assert result.exit_code == 0
        assert "graphlens db add" in result.output
