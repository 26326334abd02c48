"""Run the draw.io → Commbox conversion for one uploaded file."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from datetime import datetime

from ..errors import ConversionError
from ..models import ConvertResponse, ConvertStats, ErrorResponse
from ..pipeline import build_hierarchy, generate_commbox_xml, parse_drawio

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConversionResult:
    xml: str
    mx_graph_model_xml: str
    nodes_count: int
    connections_count: int


def convert_drawio(content: str, now: datetime | None = None) -> ConversionResult:
    """Convert draw.io file text to Commbox XML. Raises ConversionError on any failure."""
    parsed = parse_drawio(content)
    logger.info("Parsed %d nodes and %d connections", len(parsed.nodes), len(parsed.edges))
    hierarchy = build_hierarchy(parsed.nodes, parsed.edges)
    xml = generate_commbox_xml(hierarchy, now=now)
    return ConversionResult(
        xml=xml,
        mx_graph_model_xml=parsed.mx_graph_model_xml,
        nodes_count=len(parsed.nodes),
        connections_count=len(parsed.edges),
    )


def run_conversion(content: str, filename: str = "") -> ConvertResponse | ErrorResponse:
    """Convert and shape the transport result; conversion failures become an ErrorResponse."""
    logger.info("Processing file: %s", filename or "<unnamed>")
    try:
        result = convert_drawio(content)
    except ConversionError as e:
        logger.warning("Conversion failed for %s: %s", filename or "<unnamed>", e.message)
        return ErrorResponse(error=e.message or "שגיאה בעיבוד הקובץ")
    stamp = int(time.time() * 1000)
    return ConvertResponse(
        xml=result.xml,
        mx_graph_model_xml=result.mx_graph_model_xml,
        filename=f"commbox_bot_{stamp}.xml",
        mx_graph_model_filename=f"mxGraphModel_{stamp}.xml",
        stats=ConvertStats(
            nodes_count=result.nodes_count,
            connections_count=result.connections_count,
        ),
    )
