"""Test utilities for the slatedown test suite.

Small builders for document trees so tests read close to the Markdown they
expect.
"""

from slatedown.ast import Block, Document, Inline, Leaf, Mark, Text, Value


def text(content, *marks):
    """Single-leaf text node with the given mark types (innermost first)."""
    return Text(leaves=[Leaf(text=content, marks=[Mark(type=m) for m in marks])])


def leaves(*pairs):
    """Text node from (content, [marks]) pairs."""
    return Text(leaves=[Leaf(text=content, marks=[Mark(type=m) for m in marks]) for content, marks in pairs])


def block(node_type, *nodes, **data):
    """Block node; string children become plain text nodes."""
    children = [text(n) if isinstance(n, str) else n for n in nodes]
    return Block(type=node_type, nodes=children, data=data)


def inline(node_type, *nodes, **data):
    """Inline node; string children become plain text nodes."""
    children = [text(n) if isinstance(n, str) else n for n in nodes]
    return Inline(type=node_type, nodes=children, data=data)


def paragraph(*nodes):
    return block("paragraph", *nodes)


def document(*nodes):
    return Document(nodes=list(nodes))


def value(*nodes):
    return Value(document=document(*nodes))
