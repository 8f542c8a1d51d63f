#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/slatedown/ast/serialization.py
"""JSON interchange for document trees.

Values are exchanged in the Slate JSON shape::

    {"document": {"nodes": [
        {"kind": "block", "type": "paragraph", "data": {}, "nodes": [
            {"kind": "text", "leaves": [{"text": "hi", "marks": [{"type": "bold"}]}]}
        ]}
    ]}}

Later Slate releases spell ``kind`` as ``object``; both are accepted on
input, ``kind`` is written on output.

"""

from __future__ import annotations

import json
import logging
from typing import Any, Mapping

from slatedown.ast.nodes import (
    Block,
    Document,
    Inline,
    Leaf,
    Mark,
    Node,
    Text,
    Value,
    data_to_dict,
)
from slatedown.constants import KIND_BLOCK, KIND_INLINE, KIND_TEXT
from slatedown.exceptions import ParsingError

logger = logging.getLogger(__name__)


def _node_kind(data: Mapping[str, Any]) -> Any:
    return data.get("kind", data.get("object"))


# Serialization
def _serialize_mark(mark: Mark) -> dict[str, Any]:
    return {"type": mark.type}


def _serialize_leaf(leaf: Leaf) -> dict[str, Any]:
    return {"text": leaf.text, "marks": [_serialize_mark(mark) for mark in leaf.marks]}


def node_to_dict(node: Node) -> dict[str, Any]:
    """Convert a node to its JSON-compatible mapping.

    Parameters
    ----------
    node : Node
        Block, Inline or Text node

    Returns
    -------
    dict
        Mapping in the Slate JSON shape

    Raises
    ------
    ValueError
        If the node is not a Block, Inline or Text

    """
    if isinstance(node, Text):
        return {"kind": KIND_TEXT, "leaves": [_serialize_leaf(leaf) for leaf in node.leaves]}
    if isinstance(node, (Block, Inline)):
        return {
            "kind": node.kind,
            "type": node.type,
            "data": data_to_dict(node.data),
            "nodes": [node_to_dict(child) for child in node.nodes],
        }
    raise ValueError(f"Unknown node type for serialization: {type(node).__name__}")


def value_to_dict(value: Value) -> dict[str, Any]:
    """Convert a Value to its JSON-compatible mapping."""
    return {"document": {"nodes": [node_to_dict(node) for node in value.document.nodes]}}


def value_to_json(value: Value, indent: int | None = None) -> str:
    """Serialize a Value to a JSON string."""
    return json.dumps(value_to_dict(value), indent=indent, ensure_ascii=False)


# Deserialization
def _deserialize_leaf(data: Mapping[str, Any]) -> Leaf:
    if not isinstance(data, Mapping):
        raise ParsingError(f"Expected a leaf mapping, got {type(data).__name__}", parsing_stage="json")
    marks = []
    for mark in data.get("marks", []):
        if isinstance(mark, str):
            marks.append(Mark(type=mark))
        else:
            marks.append(Mark(type=mark["type"]))
    return Leaf(text=data.get("text", ""), marks=marks)


def _deserialize_text(data: Mapping[str, Any]) -> Text:
    if "leaves" in data:
        return Text(leaves=[_deserialize_leaf(leaf) for leaf in data["leaves"]])
    # Single-leaf shorthand
    return Text(leaves=[_deserialize_leaf(data)])


def node_from_dict(data: Mapping[str, Any]) -> Node:
    """Build a node from its JSON-compatible mapping.

    Parameters
    ----------
    data : Mapping
        Node mapping with a ``kind`` (or ``object``) tag

    Returns
    -------
    Node
        The reconstructed node

    Raises
    ------
    ParsingError
        If the mapping is malformed or has an unknown kind

    """
    if not isinstance(data, Mapping):
        raise ParsingError(f"Expected a node mapping, got {type(data).__name__}", parsing_stage="json")

    kind = _node_kind(data)
    try:
        if kind == KIND_TEXT:
            return _deserialize_text(data)
        if kind in (KIND_BLOCK, KIND_INLINE):
            node_cls = Block if kind == KIND_BLOCK else Inline
            return node_cls(
                type=data["type"],
                nodes=[node_from_dict(child) for child in data.get("nodes", [])],
                data=data.get("data") or {},
            )
    except (KeyError, TypeError, ValueError) as e:
        raise ParsingError(f"Malformed {kind} node: {e}", parsing_stage="json", original_error=e) from e

    raise ParsingError(f"Unknown node kind: {kind!r}", parsing_stage="json")


def value_from_dict(data: Mapping[str, Any]) -> Value:
    """Build a Value from its JSON-compatible mapping.

    A bare document mapping (``{"nodes": [...]}``) is accepted as well.

    Raises
    ------
    ParsingError
        If the mapping is malformed

    """
    if not isinstance(data, Mapping):
        raise ParsingError(f"Expected a mapping, got {type(data).__name__}", parsing_stage="json")

    document_data = data.get("document", data)
    if not isinstance(document_data, Mapping):
        raise ParsingError("'document' must be a mapping", parsing_stage="json")

    nodes = document_data.get("nodes", [])
    if not isinstance(nodes, list):
        raise ParsingError("'nodes' must be a list", parsing_stage="json")

    document = Document(nodes=[node_from_dict(node) for node in nodes])
    logger.debug("Loaded document with %d top-level nodes", len(document.nodes))
    return Value(document=document)


def value_from_json(json_str: str) -> Value:
    """Deserialize a Value from a JSON string.

    Raises
    ------
    ParsingError
        If the string is not valid JSON or not a valid value

    """
    try:
        data = json.loads(json_str)
    except json.JSONDecodeError as e:
        raise ParsingError(f"Invalid JSON: {e}", parsing_stage="json", original_error=e) from e
    return value_from_dict(data)
