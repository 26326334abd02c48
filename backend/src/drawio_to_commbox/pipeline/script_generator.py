"""Hierarchy → Commbox bot script (JSON record array embedded in the Scripts XML section).

Record layout of every script:

- record 0: global script configuration (no id)
- record 1: synthetic entry node ``node_0`` (parent ``#``)
- one record per diagram node, depth-first pre-order, ids ``n_2``, ``n_3``, ...
- the standing processes group and its transfer / error / unknown records

The SCRIPT element carries the JSON as an attribute, so the payload is escaped
for all five XML special characters.
"""

from __future__ import annotations

import json
import time
from datetime import datetime
from typing import Any
from xml.sax.saxutils import escape

from .classifier import NodeRole, classify
from .graph import Hierarchy, HierarchyNode

ROOT_SENTINEL = "#"
ENTRY_NODE_ID = "node_0"
FIRST_NODE_INDEX = 2
BODY_HTML_MIN_LENGTH = 20
BRAND = "802"

_ATTR_ENTITIES = {'"': "&quot;", "'": "&apos;"}

_ENVELOPE = """<?xml version="1.0" encoding="UTF-8"?>
<Section Name="Scripts">
    <SCRIPT Value="{value}"
            EncryptedStreamId="{stream_id}"
            Name="Bot Generated {timestamp}"
            Brand="{brand}" />
</Section>"""


def generate_commbox_xml(
    hierarchy: Hierarchy,
    now: datetime | None = None,
    stream_id: str | None = None,
) -> str:
    """Render the full Commbox Scripts XML for a hierarchy."""
    records = build_script_records(hierarchy)
    now = now or datetime.now()
    return _ENVELOPE.format(
        value=escape_attribute(serialize_records(records)),
        stream_id=stream_id or f"generated_{int(time.time() * 1000)}",
        timestamp=format_timestamp(now),
        brand=BRAND,
    )


def build_script_records(hierarchy: Hierarchy) -> list[dict[str, Any]]:
    """Build the ordered record array: config, entry node, diagram nodes, standing processes."""
    records: list[dict[str, Any]] = [_config_record(), _entry_record()]
    diagram_records, next_index = _diagram_records(hierarchy, FIRST_NODE_INDEX)
    records.extend(diagram_records)
    records.extend(_standing_process_records(next_index))
    return records


def serialize_records(records: list[dict[str, Any]]) -> str:
    return json.dumps(records, ensure_ascii=False, separators=(",", ":"))


def escape_attribute(text: str) -> str:
    """Escape & < > " ' for use inside a double-quoted XML attribute."""
    return escape(text, _ATTR_ENTITIES)


def format_timestamp(now: datetime) -> str:
    """he-IL locale style: D.M.YYYY, H:MM:SS (hour not zero-padded)."""
    return f"{now.day}.{now.month}.{now.year}, {now.hour}:{now:%M:%S}"


def _config_record() -> dict[str, Any]:
    return {
        "seedId": 44,
        "endNodeId": "",
        "genericDelayJumpTime": "",
        "genericDelayJumpNode": "",
        "genericRedisplayTime": "",
        "genericRedisplayMessage": "",
        "dataContextExpirationTime": "",
        "engineVersion": 0,
        "allowUsingAI": False,
        "importMismatches": [],
        "assistantId": "",
    }


def _base_record(record_id: str, text: str, parent: str) -> dict[str, Any]:
    return {
        "id": record_id,
        "text": text,
        "parent": parent,
        "rI": "2",
        "addChannelStateMessage": False,
        "attachments": {},
    }


def _entry_record() -> dict[str, Any]:
    return _base_record(ENTRY_NODE_ID, "התחלה", ROOT_SENTINEL)


def _diagram_records(hierarchy: Hierarchy, start_index: int) -> tuple[list[dict[str, Any]], int]:
    """Depth-first pre-order over every root; each node is emitted at most once.

    Returns the records and the next free index.
    """
    records: list[dict[str, Any]] = []
    visited: set[str] = set()
    index = start_index
    for root in hierarchy.roots:
        # (node, parent record id); children pushed reversed to pop in diagram order
        stack: list[tuple[HierarchyNode, str]] = [(root, ENTRY_NODE_ID)]
        while stack:
            node, parent_id = stack.pop()
            if node.id in visited:
                continue
            visited.add(node.id)
            record = node_record(node, index, parent_id)
            index += 1
            records.append(record)
            for child in reversed(hierarchy.children_of(node.id)):
                if child.id not in visited:
                    stack.append((child, record["id"]))
    return records, index


def node_record(node: HierarchyNode, index: int, parent_id: str = ENTRY_NODE_ID) -> dict[str, Any]:
    """Script record for one diagram node, with the fields its role requires."""
    label = node.node.label
    record = _base_record(f"n_{index}", label or f"Node {index}", parent_id)
    role = classify(node.node)
    if role is NodeRole.MESSAGE:
        if label and len(label) > BODY_HTML_MIN_LENGTH:
            record["bodyHtml"] = label
    elif role is NodeRole.TRANSFER:
        record["step"] = "agent_node"
    elif role is NodeRole.UNKNOWN:
        record["unknown"] = "1"
    elif role is NodeRole.ERROR:
        record["error"] = True
    elif role is NodeRole.END:
        record["end"] = "2"
    elif role is NodeRole.INPUT:
        record["d_e"] = [_input_field(index, label)]
    elif role in (NodeRole.START, NodeRole.DECISION):
        pass
    else:
        raise ValueError(f"Unhandled node role: {role}")
    return record


def _input_field(index: int, label: str) -> dict[str, Any]:
    return {
        "uniqueName": f"input_{index}",
        "name": label or "הזן קלט",
        "labelDescription": "",
        "type": "string",
        "key": False,
        "isVisible": False,
        "isMandatory": True,
        "askOnlyOnce": False,
        "isSystemField": False,
        "fieldType": "1",
        "validation": "",
    }


def _standing_process_records(start_index: int) -> list[dict[str, Any]]:
    """Fixed fallback processes present in every script; ids continue the diagram sequence."""
    group_id = f"n_{start_index}"
    group = _base_record(group_id, "תהליכים קבועים", ENTRY_NODE_ID)
    group["buttonDisplayMode"] = "1"

    transfer = _base_record(f"n_{start_index + 1}", "מעבר לנציג", group_id)

    error = _base_record(f"n_{start_index + 2}", "Error", group_id)
    del error["attachments"]
    error["error"] = True

    unknown = _base_record(f"n_{start_index + 3}", "לא ידוע", group_id)
    del unknown["attachments"]
    unknown["unknown"] = "1"
    return [group, transfer, error, unknown]
