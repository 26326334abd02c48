"""Graph model for draw.io diagrams - nodes, edges and the edge-derived hierarchy."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping


@dataclass(frozen=True)
class DiagramNode:
    """Vertex cell of the mxGraphModel (or any cell carrying a label)."""

    id: str
    label: str = ""
    style: str = ""
    parent_ref: str | None = None
    geometry: Mapping[str, float] = field(default_factory=dict)


@dataclass(frozen=True)
class DiagramEdge:
    """Directed connection between two cells."""

    id: str
    source_id: str
    target_id: str
    label: str = ""


@dataclass(frozen=True)
class HierarchyNode:
    """Diagram node placed in the edge-derived tree. parent is None for roots."""

    node: DiagramNode
    parent: str | None = None
    children: tuple[str, ...] = ()

    @property
    def id(self) -> str:
        return self.node.id

    @property
    def is_root(self) -> bool:
        return self.parent is None


@dataclass(frozen=True)
class Hierarchy:
    """Lookup by node id plus the forest roots in diagram order."""

    lookup: Mapping[str, HierarchyNode]
    roots: tuple[HierarchyNode, ...]

    def children_of(self, node_id: str) -> list[HierarchyNode]:
        node = self.lookup.get(node_id)
        if node is None:
            return []
        return [self.lookup[c] for c in node.children if c in self.lookup]


@dataclass(frozen=True)
class ParsedDiagram:
    """Extractor output; mx_graph_model_xml is the decompressed model kept for download."""

    nodes: tuple[DiagramNode, ...]
    edges: tuple[DiagramEdge, ...]
    mx_graph_model_xml: str
