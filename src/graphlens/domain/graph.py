"""Visualization-ready graph models produced by projection.

Node and link ids are the canonical ``"{table}:{offset}"`` strings of the
engine's internal ids, so a frontend can join links to nodes directly.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any


@dataclass(frozen=True)
class GraphNode:
    id: str
    name: str
    label: str


@dataclass(frozen=True)
class GraphLink:
    source: str
    target: str
    label: str


@dataclass(frozen=True)
class GraphData:
    """Nodes in first-seen order and links in discovery order.

    INVARIANT: every link endpoint is the id of a node in ``nodes``.
    INVARIANT: node ids are unique.
    """

    nodes: list[GraphNode] = field(default_factory=list)
    links: list[GraphLink] = field(default_factory=list)

    @property
    def node_ids(self) -> set[str]:
        return {node.id for node in self.nodes}

    def to_dict(self) -> dict[str, Any]:
        return {
            "nodes": [asdict(node) for node in self.nodes],
            "links": [asdict(link) for link in self.links],
        }
