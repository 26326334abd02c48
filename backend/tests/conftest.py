from xml.sax.saxutils import quoteattr

import pytest
from fastapi.testclient import TestClient


@pytest.fixture()
def client() -> TestClient:
    from drawio_to_commbox.main import app

    return TestClient(app)


def _vertex(cell_id: str, label: str, style: str) -> str:
    return (
        f"<mxCell id={quoteattr(cell_id)} value={quoteattr(label)} style={quoteattr(style)} "
        'vertex="1" parent="1"><mxGeometry x="10" y="20" width="120" height="60" as="geometry"/></mxCell>'
    )


def _edge(cell_id: str, source: str, target: str, label: str = "") -> str:
    return (
        f"<mxCell id={quoteattr(cell_id)} value={quoteattr(label)} edge=\"1\" parent=\"1\" "
        f"source={quoteattr(source)} target={quoteattr(target)}><mxGeometry relative=\"1\" as=\"geometry\"/></mxCell>"
    )


@pytest.fixture()
def build_model():
    """Build mxGraphModel markup.

    vertices: (id, label) or (id, label, style); edges: (id, source, target).
    """

    def _build(vertices=(), edges=()) -> str:
        cells = ['<mxCell id="0"/>', '<mxCell id="1" parent="0"/>']
        for v in vertices:
            cell_id, label = v[0], v[1]
            style = v[2] if len(v) > 2 else "rounded=0;whiteSpace=wrap;html=1;"
            cells.append(_vertex(cell_id, label, style))
        for e in edges:
            cells.append(_edge(*e))
        return '<mxGraphModel dx="800" dy="600" grid="1"><root>' + "".join(cells) + "</root></mxGraphModel>"

    return _build


@pytest.fixture()
def build_drawio():
    """Wrap mxGraphModel markup into a compressed .drawio export."""
    from drawio_to_commbox.pipeline import compress_diagram

    def _build(model_markup: str) -> str:
        payload = compress_diagram(model_markup)
        return (
            '<mxfile host="app.diagrams.net" type="device">'
            f'<diagram id="d1" name="Page-1">{payload}</diagram>'
            "</mxfile>"
        )

    return _build


@pytest.fixture()
def sample_drawio(build_model, build_drawio) -> str:
    """Welcome flow: start → greeting → (input, transfer); a separate error node."""
    model = build_model(
        vertices=[
            ("s", "התחלה", "ellipse;whiteSpace=wrap;html=1;"),
            ("g", "Welcome to our service, how can we help?"),
            ("i", "Enter your input"),
            ("t", "Transfer to agent"),
            ("e", "Error page"),
        ],
        edges=[("e1", "s", "g"), ("e2", "g", "i"), ("e3", "g", "t")],
    )
    return build_drawio(model)
