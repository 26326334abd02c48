"""Turn the flat node/edge lists into a forest: each edge makes its target a child of its source."""

from __future__ import annotations

from types import MappingProxyType
from typing import Iterable

from .graph import DiagramEdge, DiagramNode, Hierarchy, HierarchyNode

# mxGraphModel's default parent cells; a node under either is a top-level canvas node
CANVAS_ROOT_IDS = frozenset({"0", "1"})


def build_hierarchy(nodes: Iterable[DiagramNode], edges: Iterable[DiagramEdge]) -> Hierarchy:
    """Build the parent/children relation once from the edges.

    Edges whose endpoints are not both known nodes are dropped. When a node has
    several inbound edges the last one decides its parent; it is still listed
    as a child of every source.
    """
    ordered = list(nodes)
    by_id: dict[str, DiagramNode] = {}
    for node in ordered:
        by_id[node.id] = node

    children: dict[str, list[str]] = {nid: [] for nid in by_id}
    parents: dict[str, str] = {}
    for edge in edges:
        if edge.source_id not in by_id or edge.target_id not in by_id:
            continue
        children[edge.source_id].append(edge.target_id)
        parents[edge.target_id] = edge.source_id

    lookup: dict[str, HierarchyNode] = {}
    for nid, node in by_id.items():
        parent = parents.get(nid)
        if parent in CANVAS_ROOT_IDS:
            parent = None
        lookup[nid] = HierarchyNode(node=node, parent=parent, children=tuple(children[nid]))

    roots: list[HierarchyNode] = []
    seen: set[str] = set()
    for node in ordered:
        if node.id in seen:
            continue
        seen.add(node.id)
        if lookup[node.id].is_root:
            roots.append(lookup[node.id])
    return Hierarchy(lookup=MappingProxyType(lookup), roots=tuple(roots))
