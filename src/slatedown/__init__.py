#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/slatedown/__init__.py
"""slatedown - Markdown serialization for Slate-style rich-text documents.

slatedown converts between an in-memory document tree (blocks, inlines and
text leaves carrying formatting marks) and Markdown text. Serialization is
driven by an ordered list of pluggable rules; caller rules take precedence
over the built-in ones. Parsing Markdown back into a tree uses mistune.

Examples
--------
Serialize a document:

    >>> from slatedown import Block, Document, Text, Value, to_markdown
    >>> value = Value(document=Document(nodes=[
    ...     Block(type="heading1", nodes=[Text.from_string("Title")]),
    ...     Block(type="paragraph", nodes=[Text.from_string("Hello", marks=["bold"])]),
    ... ]))
    >>> to_markdown(value)
    '# Title\\n\\n**Hello**\\n'

Parse Markdown:

    >>> from slatedown import from_markdown
    >>> value = from_markdown("* one\\n* two\\n")

Override a rule:

    >>> from slatedown import MarkdownSerializer, rule
    >>> @rule("mark", "bold")
    ... def underscores(node, children, context):
    ...     return f"__{children}__"
    >>> MarkdownSerializer(rules=[underscores]).serialize(value)

"""


from slatedown.api import from_markdown, to_markdown
from slatedown.ast import (
    Block,
    Document,
    Inline,
    Leaf,
    Mark,
    Node,
    String,
    Text,
    Value,
    value_from_dict,
    value_from_json,
    value_to_dict,
    value_to_json,
)
from slatedown.exceptions import (
    DependencyError,
    InvalidOptionsError,
    ParsingError,
    RenderingError,
    SlatedownError,
    UnhandledNodeTypeError,
    ValidationError,
)
from slatedown.options import MarkdownParserOptions, MarkdownSerializerOptions
from slatedown.parsers.markdown import MarkdownParser
from slatedown.renderers.context import RenderContext
from slatedown.renderers.markdown import MarkdownSerializer
from slatedown.renderers.rules import FunctionRule, Rule, rule
from slatedown.utils import encode, escape_markdown

__version__ = "0.3.0"

__all__ = [
    "Block",
    "DependencyError",
    "Document",
    "FunctionRule",
    "Inline",
    "InvalidOptionsError",
    "Leaf",
    "Mark",
    "MarkdownParser",
    "MarkdownParserOptions",
    "MarkdownSerializer",
    "MarkdownSerializerOptions",
    "Node",
    "ParsingError",
    "RenderContext",
    "RenderingError",
    "Rule",
    "SlatedownError",
    "String",
    "Text",
    "UnhandledNodeTypeError",
    "ValidationError",
    "Value",
    "encode",
    "escape_markdown",
    "from_markdown",
    "rule",
    "value_from_dict",
    "value_from_json",
    "value_to_dict",
    "value_to_json",
    "to_markdown",
]
