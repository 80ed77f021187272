"""Embedded graph engine adapter (kuzu).

The executor talks to the engine through the three-step :class:`GraphEngine`
protocol (open, connect, execute) plus explicit release calls.
:class:`KuzuEngine` implements it on top of the ``kuzu`` Python package and
converts kuzu's Python result objects into :mod:`graphlens.domain.values`:

- internal ids arrive as ``{"table": t, "offset": o}``
- nodes arrive as dicts carrying ``_id`` and ``_label`` plus properties
- relationships arrive as dicts carrying ``_src``, ``_dst`` and ``_label``
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Protocol

from graphlens.domain.values import (
    BoolValue,
    FloatValue,
    IdValue,
    IntValue,
    InternalId,
    NodeValue,
    OtherValue,
    RelValue,
    Row,
    StringValue,
    Value,
)

if TYPE_CHECKING:
    from graphlens.config.models import EngineConfig

logger = logging.getLogger(__name__)

_ID_KEYS = frozenset({"table", "offset"})
# Keys kuzu adds to node and relationship dicts alongside user properties.
_NODE_META_KEYS = frozenset({"_id", "_label"})


class GraphEngine(Protocol):
    """Collaborator contract with an embedded graph engine."""

    def open(self, path: str) -> Any: ...

    def connect(self, handle: Any) -> Any: ...

    def execute(self, connection: Any, query: str) -> list[Row]: ...

    def close_connection(self, connection: Any) -> None: ...

    def close_database(self, handle: Any) -> None: ...


# ---------------------------------------------------------------------------
# Value conversion
# ---------------------------------------------------------------------------


def _internal_id(raw: Any) -> InternalId | None:
    if isinstance(raw, Mapping) and set(raw) == _ID_KEYS:
        table, offset = raw["table"], raw["offset"]
        if isinstance(table, int) and isinstance(offset, int):
            return InternalId(table_id=table, offset=offset)
    return None


def to_value(raw: Any) -> Value:
    """Convert one kuzu result cell into a :data:`Value`.

    ``bool`` is checked before ``int`` since it is an ``int`` subclass.
    Anything unrecognized (NULL, lists, maps, dates, decimals, paths) becomes
    :class:`OtherValue` carrying the raw object.
    """
    if isinstance(raw, bool):
        return BoolValue(raw)
    if isinstance(raw, int):
        return IntValue(raw)
    if isinstance(raw, float):
        return FloatValue(raw)
    if isinstance(raw, str):
        return StringValue(raw)
    if isinstance(raw, Mapping):
        internal_id = _internal_id(raw)
        if internal_id is not None:
            return IdValue(internal_id)
        if "_src" in raw and "_dst" in raw:
            src = _internal_id(raw["_src"])
            dst = _internal_id(raw["_dst"])
            if src is not None and dst is not None:
                return RelValue(label=str(raw.get("_label") or ""), src=src, dst=dst)
        elif _NODE_META_KEYS <= raw.keys():
            node_id = _internal_id(raw["_id"])
            if node_id is not None:
                properties = tuple(
                    (str(key), to_value(value))
                    for key, value in raw.items()
                    if key not in _NODE_META_KEYS
                )
                return NodeValue(
                    id=node_id, label=str(raw["_label"] or ""), properties=properties
                )
    return OtherValue(raw)


def to_row(raw_row: Any) -> Row:
    return [to_value(cell) for cell in raw_row]


# ---------------------------------------------------------------------------
# KuzuEngine
# ---------------------------------------------------------------------------


class KuzuEngine:
    """:class:`GraphEngine` backed by ``kuzu.Database`` / ``kuzu.Connection``."""

    def __init__(self, config: EngineConfig | None = None) -> None:
        if config is None:
            from graphlens.config.models import EngineConfig

            config = EngineConfig()
        self._config = config

    def open(self, path: str) -> Any:
        import kuzu

        return kuzu.Database(
            path,
            buffer_pool_size=self._config.buffer_pool_size,
            max_num_threads=self._config.max_num_threads,
            read_only=self._config.read_only,
        )

    def connect(self, handle: Any) -> Any:
        import kuzu

        return kuzu.Connection(handle)

    def execute(self, connection: Any, query: str) -> list[Row]:
        """Run *query* and materialize every row.

        A multi-statement query yields one result per statement; the rows of
        the last statement are returned.
        """
        result = connection.execute(query)
        results = result if isinstance(result, list) else [result]
        rows: list[Row] = []
        if not results:
            return rows
        try:
            final = results[-1]
            while final.has_next():
                rows.append(to_row(final.get_next()))
        finally:
            for r in results:
                r.close()
        return rows

    def close_connection(self, connection: Any) -> None:
        connection.close()

    def close_database(self, handle: Any) -> None:
        handle.close()
