import base64
import html
import json
import re

import pytest

from drawio_to_commbox.errors import ParseError
from drawio_to_commbox.models import ConvertResponse, ErrorResponse
from drawio_to_commbox.services.run_pipeline import convert_drawio, run_conversion


def _records(xml: str) -> list:
    return json.loads(html.unescape(re.search(r'Value="([^"]*)"', xml).group(1)))


def test_convert_sample(sample_drawio):
    result = convert_drawio(sample_drawio)
    assert result.nodes_count == 5
    assert result.connections_count == 3
    assert "<mxGraphModel" in result.mx_graph_model_xml

    records = _records(result.xml)
    by_text = {r.get("text"): r for r in records}
    start = by_text["התחלה"]
    assert start["parent"] == "node_0" and start["id"] != "node_0"
    greeting = by_text["Welcome to our service, how can we help?"]
    assert greeting["parent"] == start["id"]
    assert greeting["bodyHtml"] == greeting["text"]
    assert by_text["Enter your input"]["parent"] == greeting["id"]
    assert by_text["Enter your input"]["d_e"][0]["uniqueName"].startswith("input_")
    assert by_text["Transfer to agent"]["step"] == "agent_node"
    assert by_text["Error page"]["parent"] == "node_0"


def test_conversion_is_repeatable(sample_drawio):
    first = convert_drawio(sample_drawio)
    second = convert_drawio(sample_drawio)
    assert (first.nodes_count, first.connections_count) == (second.nodes_count, second.connections_count)
    assert _records(first.xml) == _records(second.xml)


def test_convert_raises_on_bad_file():
    with pytest.raises(ParseError):
        convert_drawio("<mxfile/>")


def test_run_conversion_success(sample_drawio):
    resp = run_conversion(sample_drawio, "flow.drawio")
    assert isinstance(resp, ConvertResponse)
    body = resp.model_dump(by_alias=True)
    assert body["success"] is True
    assert re.fullmatch(r"commbox_bot_\d+\.xml", body["filename"])
    assert re.fullmatch(r"mxGraphModel_\d+\.xml", body["mxGraphModelFilename"])
    assert body["stats"] == {"nodesCount": 5, "connectionsCount": 3}
    assert body["mxGraphModelXml"].startswith("<mxGraphModel")


def test_run_conversion_failure_for_non_deflate_payload():
    payload = base64.b64encode(b"\xff\xfe\xfd\xfc not deflate").decode("ascii")
    resp = run_conversion(f"<mxfile><diagram>{payload}</diagram></mxfile>", "broken.drawio")
    assert isinstance(resp, ErrorResponse)
    body = resp.model_dump(by_alias=True)
    assert body["success"] is False
    assert body["error"]
    assert "xml" not in body
