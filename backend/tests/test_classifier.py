import pytest

from drawio_to_commbox.pipeline import DiagramNode, NodeRole, classify


def _node(label: str = "", style: str = "") -> DiagramNode:
    return DiagramNode(id="n", label=label, style=style)


@pytest.mark.parametrize(
    "label,style,role",
    [
        ("מעבר לנציג", "", NodeRole.TRANSFER),
        ("Talk to an AGENT", "", NodeRole.TRANSFER),
        ("לא ידוע", "", NodeRole.UNKNOWN),
        ("Unknown answer", "", NodeRole.UNKNOWN),
        ("שגיאה", "", NodeRole.ERROR),
        ("Error page", "", NodeRole.ERROR),
        ("סיום שיחה", "", NodeRole.END),
        ("Close chat", "", NodeRole.END),
        ("התחלה", "", NodeRole.START),
        ("Start here", "", NodeRole.START),
        ("קלט מספר טלפון", "", NodeRole.INPUT),
        ("Your input please", "", NodeRole.INPUT),
        ("Hello", "ellipse;whiteSpace=wrap;", NodeRole.START),
        ("", "shape=circle;", NodeRole.START),
        ("Which topic?", "rhombus;whiteSpace=wrap;", NodeRole.DECISION),
        ("Which topic?", "shape=Diamond;", NodeRole.DECISION),
        ("Hello", "rounded=1;", NodeRole.MESSAGE),
        ("", "", NodeRole.MESSAGE),
    ],
)
def test_classify(label, style, role):
    assert classify(_node(label, style)) is role


def test_label_beats_shape():
    assert classify(_node("Error while loading", "rhombus;")) is NodeRole.ERROR
    assert classify(_node("Start", "rhombus;")) is NodeRole.START


def test_label_precedence_order():
    # transfer wins over every later keyword
    assert classify(_node("transfer on error, then end")) is NodeRole.TRANSFER
    assert classify(_node("unknown error")) is NodeRole.UNKNOWN
    assert classify(_node("error at the end")) is NodeRole.ERROR
    assert classify(_node("end of input")) is NodeRole.END


def test_role_values_are_stable_strings():
    assert NodeRole.DECISION.value == "decision"
    assert {r.value for r in NodeRole} == {
        "message", "transfer", "unknown", "error", "end", "start", "input", "decision",
    }
