"""Graph projection — raw engine rows to a deduplicated node/link graph.

Pure functions, no infrastructure dependencies. Two modes:

- **Overview**: a fixed pair of queries, one enumerating nodes as
  ``(entity, label, id)`` rows and one enumerating relationships as
  ``(src, dst, label)`` rows.
- **Ad hoc**: any caller-supplied query; every column of every row is
  inspected for node and relationship values.

Both modes finalize the node set before evaluating a single link and drop
links whose endpoints are not in it. Malformed rows and columns are skipped
individually; a partial graph is preferred over failing the projection.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import assert_never

from graphlens.domain.graph import GraphData, GraphLink, GraphNode
from graphlens.domain.values import (
    BoolValue,
    FloatValue,
    IdValue,
    IntValue,
    NodeValue,
    OtherValue,
    RelValue,
    StringValue,
    Value,
    display_text,
)

logger = logging.getLogger(__name__)

# Property keys tried, in order, for a node's display name.
NAME_KEYS: tuple[str, ...] = ("name", "id", "title")
DEFAULT_NAME = "Node"
DEFAULT_NODE_LABEL = "Node"
DEFAULT_LINK_LABEL = ""

OVERVIEW_NODE_QUERY = "MATCH (n) RETURN n, LABEL(n) AS label, ID(n) AS nodeId LIMIT {limit}"
OVERVIEW_LINK_QUERY = (
    "MATCH (a)-[r]->(b) RETURN ID(a) AS src, ID(b) AS dst, LABEL(r) AS relType LIMIT {limit}"
)


def overview_queries(node_limit: int, link_limit: int) -> tuple[str, str]:
    """Return the ``(node query, link query)`` pair for overview mode."""
    return (
        OVERVIEW_NODE_QUERY.format(limit=node_limit),
        OVERVIEW_LINK_QUERY.format(limit=link_limit),
    )


# ---------------------------------------------------------------------------
# Value extraction
# ---------------------------------------------------------------------------


def resolve_display_name(node: NodeValue) -> str:
    """Pick a display name from *node*'s properties.

    Tries ``name``, then ``id``, then ``title``; falls back to ``"Node"``.
    """
    for key in NAME_KEYS:
        value = node.get(key)
        if value is not None:
            return display_text(value)
    return DEFAULT_NAME


def _as_id(value: Value) -> str | None:
    match value:
        case IdValue(value=internal_id):
            return str(internal_id)
        case (
            StringValue()
            | IntValue()
            | FloatValue()
            | BoolValue()
            | NodeValue()
            | RelValue()
            | OtherValue()
        ):
            return None
        case _:
            assert_never(value)


def _as_label(value: Value, default: str) -> str:
    match value:
        case StringValue(value=text):
            return text
        case (
            IntValue()
            | FloatValue()
            | BoolValue()
            | IdValue()
            | NodeValue()
            | RelValue()
            | OtherValue()
        ):
            return default
        case _:
            assert_never(value)


def _entity_name(value: Value) -> str:
    match value:
        case NodeValue():
            return resolve_display_name(value)
        case (
            StringValue()
            | IntValue()
            | FloatValue()
            | BoolValue()
            | IdValue()
            | RelValue()
            | OtherValue()
        ):
            return DEFAULT_NAME
        case _:
            assert_never(value)


def filter_links(candidates: Iterable[GraphLink], node_ids: set[str]) -> list[GraphLink]:
    """Keep links whose source and target are both in *node_ids*, in order."""
    return [link for link in candidates if link.source in node_ids and link.target in node_ids]


# ---------------------------------------------------------------------------
# Overview mode
# ---------------------------------------------------------------------------


def project_overview(
    node_rows: Iterable[Sequence[Value]],
    link_rows: Iterable[Sequence[Value]],
) -> GraphData:
    """Build a graph from the overview node and link query results.

    Node rows are ``(entity, label, id)``: rows that are too short or whose
    id column is not an internal id are skipped. Every remaining row becomes
    a node; nodes are never filtered by link presence.

    Link rows are ``(src, dst, label)``: rows that are too short or whose
    endpoints are not internal ids are skipped, and links with an endpoint
    outside the node set are dropped.
    """
    nodes: list[GraphNode] = []
    for row in node_rows:
        if len(row) < 3:
            continue
        node_id = _as_id(row[2])
        if node_id is None:
            continue
        nodes.append(
            GraphNode(
                id=node_id,
                name=_entity_name(row[0]),
                label=_as_label(row[1], DEFAULT_NODE_LABEL),
            )
        )

    candidates: list[GraphLink] = []
    for row in link_rows:
        if len(row) < 3:
            continue
        source = _as_id(row[0])
        target = _as_id(row[1])
        if source is None or target is None:
            continue
        candidates.append(
            GraphLink(source=source, target=target, label=_as_label(row[2], DEFAULT_LINK_LABEL))
        )

    node_ids = {node.id for node in nodes}
    links = filter_links(candidates, node_ids)
    logger.debug(
        "Overview projection: %d nodes, %d/%d links kept",
        len(nodes),
        len(links),
        len(candidates),
    )
    return GraphData(nodes=nodes, links=links)


# ---------------------------------------------------------------------------
# Ad hoc mode
# ---------------------------------------------------------------------------


def project_rows(rows: Iterable[Sequence[Value]]) -> GraphData:
    """Build a graph from an arbitrary query result.

    Walks rows in order and columns left to right. The first occurrence of a
    node id wins; later duplicates contribute nothing. Relationships become
    candidate links, filtered against the full node set once every row has
    been consumed. Scalars and other values are ignored.
    """
    nodes: list[GraphNode] = []
    seen: set[str] = set()
    candidates: list[GraphLink] = []

    for row in rows:
        for value in row:
            match value:
                case NodeValue(id=internal_id, label=label):
                    node_id = str(internal_id)
                    if node_id in seen:
                        continue
                    seen.add(node_id)
                    nodes.append(
                        GraphNode(id=node_id, name=resolve_display_name(value), label=label)
                    )
                case RelValue(label=label, src=src, dst=dst):
                    candidates.append(GraphLink(source=str(src), target=str(dst), label=label))
                case (
                    StringValue()
                    | IntValue()
                    | FloatValue()
                    | BoolValue()
                    | IdValue()
                    | OtherValue()
                ):
                    pass
                case _:
                    assert_never(value)

    links = filter_links(candidates, seen)
    logger.debug(
        "Ad hoc projection: %d nodes, %d/%d links kept",
        len(nodes),
        len(links),
        len(candidates),
    )
    return GraphData(nodes=nodes, links=links)
