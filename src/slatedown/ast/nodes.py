#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/slatedown/ast/nodes.py
"""Document tree node classes.

This module defines the rich-text document model read by the serializer and
produced by the Markdown parser. The tree follows the Slate layout: a
Document holds block nodes, blocks hold blocks, inlines or text nodes, and
text nodes hold leaves whose formatting is a list of marks.

Node Hierarchy
--------------
All nodes carry an immutable ``kind`` tag and support the visitor pattern.

    - Document: root, ordered top-level nodes
    - Block: typed block (paragraph, heading1..6, lists, tables, ...)
    - Inline: typed inline (link, code-line, mention)
    - Text: ordered Leaf runs, each with raw text and Marks
    - Mark: formatting tag on a leaf (bold, italic, code, ...)
    - String: a raw text fragment routed through the serializer rules

Type-specific fields live in typed payload dataclasses (``ImageData``,
``LinkData``, ...). A plain mapping passed as ``data`` is converted to the
payload registered for the node's type; unknown types keep the mapping.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass, field, fields
from typing import Any, ClassVar, Iterator, Mapping, Optional, Union

from slatedown.constants import (
    IMAGE,
    KIND_BLOCK,
    KIND_DOCUMENT,
    KIND_INLINE,
    KIND_MARK,
    KIND_STRING,
    KIND_TEXT,
    LINK,
    LINKBAR,
    LIST_ITEM,
    MENTION,
    TABLE_HEAD,
    Alignment,
)

# ============================================================================
# Typed data payloads
# ============================================================================


@dataclass(frozen=True)
class NodeData:
    """Base class for typed block and inline payloads."""

    def to_dict(self) -> dict[str, Any]:
        """Return the payload as a mapping, omitting unset fields."""
        return {key: value for key, value in asdict(self).items() if value is not None}


@dataclass(frozen=True)
class TableHeadData(NodeData):
    """Payload of a ``table-head`` cell.

    Parameters
    ----------
    align : {"left", "center", "right"} or None, default = None
        Column alignment emitted in the header separator row

    """

    align: Optional[Alignment] = None


@dataclass(frozen=True)
class ListItemData(NodeData):
    """Payload of a ``list-item``; ``checked`` only matters inside a todo-list."""

    checked: Optional[bool] = None


@dataclass(frozen=True)
class ImageData(NodeData):
    """Payload of an ``image`` block."""

    src: Optional[str] = None
    alt: Optional[str] = None


@dataclass(frozen=True)
class LinkbarData(NodeData):
    """Payload of a ``linkbar`` block (a link preview card).

    Parameters
    ----------
    url : str or None
        Target URL of the card
    image : str or None
        Preview image URL
    title : str or None
        Card title
    description : str or None
        Card description; bracketed groups are dropped when serialized
    domain : str or None
        Display domain

    """

    url: Optional[str] = None
    image: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    domain: Optional[str] = None


@dataclass(frozen=True)
class LinkData(NodeData):
    """Payload of a ``link`` inline."""

    href: Optional[str] = None


@dataclass(frozen=True)
class MentionData(NodeData):
    """Payload of a ``mention`` inline."""

    username: Optional[str] = None
    anonymous: bool = False


DATA_TYPES: dict[str, type[NodeData]] = {
    TABLE_HEAD: TableHeadData,
    LIST_ITEM: ListItemData,
    IMAGE: ImageData,
    LINKBAR: LinkbarData,
    LINK: LinkData,
    MENTION: MentionData,
}

NodePayload = Union[NodeData, dict[str, Any]]


def make_data(node_type: str, data: Mapping[str, Any] | NodeData | None = None) -> NodePayload:
    """Build the typed payload for a node type.

    Parameters
    ----------
    node_type : str
        Block or inline type tag
    data : Mapping, NodeData or None
        Raw data mapping, an existing payload, or None

    Returns
    -------
    NodeData or dict
        Typed payload for known types; a plain dict for types without one.
        Keys that the payload does not declare are ignored.

    """
    if isinstance(data, NodeData):
        return data

    raw = dict(data or {})
    data_cls = DATA_TYPES.get(node_type)
    if data_cls is None:
        return raw

    names = {f.name for f in fields(data_cls)}
    kwargs = {key: value for key, value in raw.items() if key in names and value is not None}
    if data_cls is MentionData and "anonymous" in kwargs:
        kwargs["anonymous"] = bool(kwargs["anonymous"])
    return data_cls(**kwargs)


def data_to_dict(data: NodePayload) -> dict[str, Any]:
    """Convert a payload back to a plain mapping."""
    if isinstance(data, NodeData):
        return data.to_dict()
    return dict(data)


# ============================================================================
# Nodes
# ============================================================================


class Node(ABC):
    """Base class for all tree nodes.

    Subclasses set the class-level ``kind`` tag, which decides the rule
    group allowed to serialize the node.

    """

    kind: ClassVar[str]

    @abstractmethod
    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this node.

        Parameters
        ----------
        visitor : Any
            A visitor object with visit_* methods

        Returns
        -------
        Any
            Result from the visitor's processing

        """
        pass


@dataclass
class Mark(Node):
    """Formatting mark attached to a leaf.

    Parameters
    ----------
    type : str
        Mark type ("bold", "italic", "code", "inserted", "deleted")

    """

    type: str
    kind: ClassVar[str] = KIND_MARK

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_mark``."""
        return visitor.visit_mark(self)


@dataclass
class String(Node):
    """Raw text fragment routed through the serializer's rules."""

    text: str = ""
    kind: ClassVar[str] = KIND_STRING

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_string``."""
        return visitor.visit_string(self)


@dataclass
class Leaf:
    """A run of text sharing one set of marks.

    Parameters
    ----------
    text : str, default = ""
        Raw text
    marks : list of Mark, default = empty list
        Marks in stored order; the first mark is applied innermost

    """

    text: str = ""
    marks: list[Mark] = field(default_factory=list)


@dataclass
class Text(Node):
    """Text node holding ordered leaves.

    Parameters
    ----------
    leaves : list of Leaf, default = empty list
        Text runs in document order

    """

    leaves: list[Leaf] = field(default_factory=list)
    kind: ClassVar[str] = KIND_TEXT

    @classmethod
    def from_string(cls, text: str, marks: list[str] | None = None) -> Text:
        """Build a single-leaf text node from raw text and mark type names."""
        return cls(leaves=[Leaf(text=text, marks=[Mark(type=name) for name in marks or []])])

    @property
    def text(self) -> str:
        """Concatenated raw text of all leaves."""
        return "".join(leaf.text for leaf in self.leaves)

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_text``."""
        return visitor.visit_text(self)


@dataclass
class Block(Node):
    """Block-level node.

    Parameters
    ----------
    type : str
        Block type ("paragraph", "heading1", "table-row", ...)
    nodes : list of Node, default = empty list
        Child blocks, inlines or text nodes
    data : NodeData, Mapping or None, default = None
        Type-specific payload; mappings are converted by :func:`make_data`

    """

    type: str
    nodes: list[Node] = field(default_factory=list)
    data: Any = None
    kind: ClassVar[str] = KIND_BLOCK

    def __post_init__(self) -> None:
        """Normalize ``data`` into the typed payload for this block type."""
        self.data = make_data(self.type, self.data)

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_block``."""
        return visitor.visit_block(self)


@dataclass
class Inline(Node):
    """Inline node (link, code-line, mention).

    Parameters
    ----------
    type : str
        Inline type
    nodes : list of Node, default = empty list
        Child inlines or text nodes
    data : NodeData, Mapping or None, default = None
        Type-specific payload; mappings are converted by :func:`make_data`

    """

    type: str
    nodes: list[Node] = field(default_factory=list)
    data: Any = None
    kind: ClassVar[str] = KIND_INLINE

    def __post_init__(self) -> None:
        """Normalize ``data`` into the typed payload for this inline type."""
        self.data = make_data(self.type, self.data)

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_inline``."""
        return visitor.visit_inline(self)


ParentNode = Union["Document", Block, Inline]


@dataclass
class Document(Node):
    """Root node holding the ordered top-level nodes.

    Parameters
    ----------
    nodes : list of Node, default = empty list
        Top-level blocks

    """

    nodes: list[Node] = field(default_factory=list)
    kind: ClassVar[str] = KIND_DOCUMENT

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_document``."""
        return visitor.visit_document(self)

    def iter_with_parents(self) -> Iterator[tuple[Node, ParentNode]]:
        """Yield every descendant node with its parent, depth first."""
        stack: list[ParentNode] = [self]
        while stack:
            parent = stack.pop()
            for child in reversed(parent.nodes):
                yield child, parent
                if isinstance(child, (Block, Inline)):
                    stack.append(child)

    def get_parent(self, node: Node) -> Optional[ParentNode]:
        """Return the parent of ``node``, matched by identity.

        Returns the Document itself for top-level nodes and None when the
        node is not part of this document.

        """
        for child, parent in self.iter_with_parents():
            if child is node:
                return parent
        return None


@dataclass
class Value:
    """Document state wrapper returned by deserialization.

    Parameters
    ----------
    document : Document, default = empty Document
        The wrapped document tree

    """

    document: Document = field(default_factory=Document)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Value:
        """Build a Value from its JSON-compatible mapping."""
        from slatedown.ast.serialization import value_from_dict

        return value_from_dict(data)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-compatible mapping of this Value."""
        from slatedown.ast.serialization import value_to_dict

        return value_to_dict(self)
