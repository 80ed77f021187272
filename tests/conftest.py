"""Shared pytest fixtures and test helpers for graphlens tests."""

from __future__ import annotations

import logging
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from graphlens.config.settings import GraphlensSettings
from graphlens.domain.values import (
    IdValue,
    InternalId,
    NodeValue,
    RelValue,
    Row,
    StringValue,
    Value,
)
from graphlens.infrastructure.workspace import Workspace
from graphlens.services.telemetry import disable_telemetry

NODE_QUERY_PREFIX = "MATCH (n) RETURN n, LABEL(n)"
LINK_QUERY_PREFIX = "MATCH (a)-[r]->(b) RETURN ID(a)"


# ---------------------------------------------------------------------------
# In-memory graph engine
# ---------------------------------------------------------------------------


class FakeEngine:
    """GraphEngine double that records every call.

    Overview queries are answered from *node_rows* / *link_rows*, anything
    else from *rows*. ``fail_at`` makes one stage raise ``RuntimeError``.
    """

    def __init__(
        self,
        *,
        rows: list[Row] | None = None,
        node_rows: list[Row] | None = None,
        link_rows: list[Row] | None = None,
        fail_at: str | None = None,
        message: str = "boom",
    ) -> None:
        self.rows = rows or []
        self.node_rows = node_rows or []
        self.link_rows = link_rows or []
        self.fail_at = fail_at
        self.message = message
        self.events: list[tuple[str, str]] = []

    def open(self, path: str) -> Any:
        self.events.append(("open", path))
        if self.fail_at == "open":
            raise RuntimeError(self.message)
        return {"path": path}

    def connect(self, handle: Any) -> Any:
        self.events.append(("connect", handle["path"]))
        if self.fail_at == "connect":
            raise RuntimeError(self.message)
        return {"path": handle["path"]}

    def execute(self, connection: Any, query: str) -> list[Row]:
        self.events.append(("execute", query))
        if self.fail_at == "execute":
            raise RuntimeError(self.message)
        if query.startswith(NODE_QUERY_PREFIX):
            return list(self.node_rows)
        if query.startswith(LINK_QUERY_PREFIX):
            return list(self.link_rows)
        return list(self.rows)

    def close_connection(self, connection: Any) -> None:
        self.events.append(("close_connection", connection["path"]))

    def close_database(self, handle: Any) -> None:
        self.events.append(("close_database", handle["path"]))

    @property
    def stages(self) -> list[str]:
        return [stage for stage, _ in self.events]

    @property
    def queries(self) -> list[str]:
        return [arg for stage, arg in self.events if stage == "execute"]


EngineFactory = Callable[..., FakeEngine]


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _no_config_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's GRAPHLENS_* environment out of the tests."""
    monkeypatch.delenv("GRAPHLENS_CONFIG", raising=False)
    monkeypatch.delenv("GRAPHLENS_DATA_ROOT", raising=False)


@pytest.fixture(autouse=True)
def _reset_cli_state() -> Generator[None]:
    """Undo what AppContext configures process-wide (telemetry flag, log handlers)."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    disable_telemetry()
    root.handlers = handlers
    root.setLevel(level)
    logging.getLogger("graphlens").setLevel(logging.NOTSET)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def data_root(tmp_path: Path) -> Path:
    """Data directory with two databases, one nested, plus noise.

    Layout::

        data/
          alpha.kuzu
          notes.txt
          nested/
            beta.kuzu
    """
    root = tmp_path / "data"
    (root / "nested").mkdir(parents=True)
    (root / "alpha.kuzu").write_bytes(b"")
    (root / "notes.txt").write_text("not a database", encoding="utf-8")
    (root / "nested" / "beta.kuzu").write_bytes(b"")
    return root


@pytest.fixture
def settings(data_root: Path) -> GraphlensSettings:
    return GraphlensSettings.from_cli(data_root=data_root)


@pytest.fixture
def make_engine() -> EngineFactory:
    """Factory for engines with canned rows or a failing stage."""
    return FakeEngine


@pytest.fixture
def fake_engine() -> FakeEngine:
    return FakeEngine()


@pytest.fixture
def workspace(settings: GraphlensSettings, fake_engine: FakeEngine) -> Workspace:
    """Workspace over ``data_root`` backed by the in-memory engine."""
    return Workspace(settings, engine=fake_engine)


@pytest.fixture
def _isolated_root(data_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to the data root so the CLI scans it by default."""
    monkeypatch.chdir(data_root)


@pytest.fixture
def patch_engine(monkeypatch: pytest.MonkeyPatch, fake_engine: FakeEngine) -> FakeEngine:
    """Make every CLI-built Workspace use ``fake_engine`` instead of kuzu."""
    monkeypatch.setattr(
        "graphlens.infrastructure.workspace.KuzuEngine", lambda _config: fake_engine
    )
    return fake_engine


# ---------------------------------------------------------------------------
# Shared test helpers (engine value builders)
# ---------------------------------------------------------------------------


def iid(table: int, offset: int) -> InternalId:
    return InternalId(table_id=table, offset=offset)


def node(table: int, offset: int, label: str = "Person", **props: Any) -> NodeValue:
    """Build a node whose properties are all strings."""
    properties: tuple[tuple[str, Value], ...] = tuple(
        (key, StringValue(str(value))) for key, value in props.items()
    )
    return NodeValue(id=iid(table, offset), label=label, properties=properties)


def rel(src: InternalId, dst: InternalId, label: str = "Knows") -> RelValue:
    return RelValue(label=label, src=src, dst=dst)


def overview_node_row(n: NodeValue) -> Row:
    return [n, StringValue(n.label), IdValue(n.id)]


def overview_link_row(src: InternalId, dst: InternalId, label: str = "Knows") -> Row:
    return [IdValue(src), IdValue(dst), StringValue(label)]
