"""draw.io → Commbox conversion pipeline: decompress, extract, classify, build hierarchy, generate."""

from .graph import DiagramNode, DiagramEdge, HierarchyNode, Hierarchy, ParsedDiagram
from .decompress import compress_diagram, decompress_diagram
from .drawio_parser import parse_drawio
from .classifier import NodeRole, classify
from .hierarchy import build_hierarchy
from .script_generator import build_script_records, generate_commbox_xml

__all__ = [
    "DiagramNode",
    "DiagramEdge",
    "HierarchyNode",
    "Hierarchy",
    "ParsedDiagram",
    "compress_diagram",
    "decompress_diagram",
    "parse_drawio",
    "NodeRole",
    "classify",
    "build_hierarchy",
    "build_script_records",
    "generate_commbox_xml",
]
