#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/slatedown/ast/__init__.py
"""Document tree module.

- nodes: node classes, typed data payloads and the Value wrapper
- serialization: Slate-shaped JSON interchange

Examples
--------
    >>> from slatedown.ast import Block, Document, Text, Value
    >>> value = Value(document=Document(nodes=[
    ...     Block(type="paragraph", nodes=[Text.from_string("Hello", marks=["bold"])])
    ... ]))

"""

from slatedown.ast.nodes import (
    Block,
    Document,
    ImageData,
    Inline,
    Leaf,
    LinkbarData,
    LinkData,
    ListItemData,
    Mark,
    MentionData,
    Node,
    NodeData,
    String,
    TableHeadData,
    Text,
    Value,
    make_data,
)
from slatedown.ast.serialization import (
    node_from_dict,
    node_to_dict,
    value_from_dict,
    value_from_json,
    value_to_dict,
    value_to_json,
)

__all__ = [
    "Block",
    "Document",
    "ImageData",
    "Inline",
    "Leaf",
    "LinkData",
    "LinkbarData",
    "ListItemData",
    "Mark",
    "MentionData",
    "Node",
    "NodeData",
    "String",
    "TableHeadData",
    "Text",
    "Value",
    "make_data",
    "node_from_dict",
    "node_to_dict",
    "value_from_dict",
    "value_from_json",
    "value_to_dict",
    "value_to_json",
]
