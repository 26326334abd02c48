"""Node role detection from label keywords (Hebrew/English) and shape style."""

from __future__ import annotations

from enum import Enum

from .graph import DiagramNode


class NodeRole(str, Enum):
    MESSAGE = "message"
    TRANSFER = "transfer"
    UNKNOWN = "unknown"
    ERROR = "error"
    END = "end"
    START = "start"
    INPUT = "input"
    DECISION = "decision"


# First match wins; label rules always run before style rules.
LABEL_KEYWORDS: tuple[tuple[NodeRole, tuple[str, ...]], ...] = (
    (NodeRole.TRANSFER, ("מעבר לנציג", "transfer", "agent")),
    (NodeRole.UNKNOWN, ("לא ידוע", "unknown")),
    (NodeRole.ERROR, ("שגיאה", "error")),
    (NodeRole.END, ("סיום", "סגירה", "end", "close")),
    (NodeRole.START, ("התחלה", "start")),
    (NodeRole.INPUT, ("קלט", "input")),
)

STYLE_KEYWORDS: tuple[tuple[NodeRole, tuple[str, ...]], ...] = (
    (NodeRole.START, ("ellipse", "circle")),
    (NodeRole.DECISION, ("rhombus", "diamond")),
)


def classify(node: DiagramNode) -> NodeRole:
    """Assign the node's role: label keywords, then shape style, else MESSAGE."""
    label = (node.label or "").lower()
    for role, keywords in LABEL_KEYWORDS:
        if any(k in label for k in keywords):
            return role
    style = (node.style or "").lower()
    for role, keywords in STYLE_KEYWORDS:
        if any(k in style for k in keywords):
            return role
    return NodeRole.MESSAGE
