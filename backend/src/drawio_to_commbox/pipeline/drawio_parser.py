"""draw.io file parser: locate the <diagram> payload, decompress it, read mxGraphModel cells."""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET

from ..errors import ParseError, ParseFailure
from .decompress import decompress_diagram
from .graph import DiagramEdge, DiagramNode, ParsedDiagram

logger = logging.getLogger(__name__)

# Attributes that may carry the payload when the <diagram> element has no text
_PAYLOAD_ATTRIBUTES = ("data",)
# Wrappers draw.io uses for cells with custom properties
_CELL_WRAPPERS = ("object", "UserObject")


def parse_drawio(content: str) -> ParsedDiagram:
    """Parse an exported .drawio file into nodes, edges and the decompressed model markup."""
    payload = extract_diagram_payload(content)
    mx_graph_model_xml = decompress_diagram(payload)
    nodes, edges = parse_mx_graph_model(mx_graph_model_xml)
    logger.debug("Extracted %d nodes and %d edges", len(nodes), len(edges))
    return ParsedDiagram(nodes=tuple(nodes), edges=tuple(edges), mx_graph_model_xml=mx_graph_model_xml)


def extract_diagram_payload(content: str) -> str:
    """Return the compressed payload of the first <diagram> element."""
    try:
        root = ET.fromstring((content or "").lstrip("\ufeff"))
    except ET.ParseError as e:
        raise ParseError(ParseFailure.MALFORMED_DIAGRAM_FILE, f"Invalid Draw.io file: {e}") from e

    diagram = _find_diagram(root)
    if diagram is None:
        raise ParseError(ParseFailure.NO_DIAGRAM_FOUND, "Invalid Draw.io file format - no diagram found")

    payload = (diagram.text or "").strip()
    if not payload:
        for attr in _PAYLOAD_ATTRIBUTES:
            payload = (diagram.get(attr) or "").strip()
            if payload:
                break
    if not payload:
        raise ParseError(ParseFailure.NO_DIAGRAM_FOUND, "No compressed data found in diagram")
    return payload


def _find_diagram(root: ET.Element) -> ET.Element | None:
    if root.tag == "mxfile":
        return root.find("diagram")
    if root.tag == "diagram":
        return root
    return None


def parse_mx_graph_model(markup: str) -> tuple[list[DiagramNode], list[DiagramEdge]]:
    """Read vertex and edge cells from decompressed mxGraphModel markup."""
    try:
        model = ET.fromstring(markup)
    except ET.ParseError as e:
        raise ParseError(ParseFailure.MALFORMED_GRAPH_MODEL, f"Malformed mxGraphModel: {e}") from e
    if model.tag != "mxGraphModel":
        raise ParseError(
            ParseFailure.MALFORMED_GRAPH_MODEL, f"Expected <mxGraphModel>, got <{model.tag}>"
        )
    cell_root = model.find("root")
    if cell_root is None:
        raise ParseError(ParseFailure.MALFORMED_GRAPH_MODEL, "mxGraphModel has no <root> element")

    nodes: list[DiagramNode] = []
    edges: list[DiagramEdge] = []
    for elem in cell_root:
        attrs = _cell_attributes(elem)
        if attrs is None:
            continue
        cell, geom_elem = attrs
        if cell.get("vertex") == "1" or cell.get("value"):
            nodes.append(
                DiagramNode(
                    id=cell.get("id", ""),
                    label=cell.get("value", ""),
                    style=cell.get("style", ""),
                    parent_ref=cell.get("parent") or None,
                    geometry=_read_geometry(geom_elem),
                )
            )
        if cell.get("edge") == "1":
            edges.append(
                DiagramEdge(
                    id=cell.get("id", ""),
                    source_id=cell.get("source", ""),
                    target_id=cell.get("target", ""),
                    label=cell.get("value", ""),
                )
            )
    return nodes, edges


def _cell_attributes(elem: ET.Element) -> tuple[dict[str, str], ET.Element | None] | None:
    """Flatten a cell (plain or wrapped) into one attribute dict. None means skip."""
    if elem.tag == "mxCell":
        return dict(elem.attrib), elem.find("mxGeometry")
    if elem.tag in _CELL_WRAPPERS:
        inner = elem.find("mxCell")
        if inner is None:
            logger.warning("Skipping <%s id=%r> without an inner mxCell", elem.tag, elem.get("id"))
            return None
        attrs = dict(inner.attrib)
        attrs["id"] = elem.get("id") or attrs.get("id", "")
        attrs["value"] = elem.get("label", attrs.get("value", ""))
        return attrs, inner.find("mxGeometry")
    return None


def _read_geometry(geom_elem: ET.Element | None) -> dict[str, float]:
    if geom_elem is None:
        return {}
    geometry: dict[str, float] = {}
    for key, raw in geom_elem.attrib.items():
        try:
            geometry[key] = float(raw)
        except ValueError:
            continue
    return geometry
