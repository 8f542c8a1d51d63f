#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/slatedown/constants.py
"""Constants shared by the slatedown serializer and parser.

Node kinds, block/inline/mark type tags, the Markdown fragments emitted for
each construct, and dependency declarations for the optional parser.

"""

from __future__ import annotations

from typing import Literal

# Node kinds
KIND_DOCUMENT = "document"
KIND_BLOCK = "block"
KIND_INLINE = "inline"
KIND_TEXT = "text"
KIND_MARK = "mark"
KIND_STRING = "string"

NodeKind = Literal["document", "block", "inline", "text", "mark", "string"]

# Block types
PARAGRAPH = "paragraph"
CODE = "code"
BLOCK_QUOTE = "block-quote"
TODO_LIST = "todo-list"
BULLETED_LIST = "bulleted-list"
ORDERED_LIST = "ordered-list"
LIST_ITEM = "list-item"
TABLE = "table"
TABLE_HEAD = "table-head"
TABLE_ROW = "table-row"
TABLE_CELL = "table-cell"
HORIZONTAL_RULE = "horizontal-rule"
IMAGE = "image"
LINKBAR = "linkbar"
HEADING_TYPES = ("heading1", "heading2", "heading3", "heading4", "heading5", "heading6")

LIST_TYPES = (TODO_LIST, BULLETED_LIST, ORDERED_LIST)

# Inline types
LINK = "link"
CODE_LINE = "code-line"
MENTION = "mention"

# Mark types
BOLD = "bold"
ITALIC = "italic"
CODE_MARK = "code"
INSERTED = "inserted"
DELETED = "deleted"

Alignment = Literal["left", "center", "right"]

# Table header separator cells keyed by column alignment
TABLE_ALIGNMENT_MARKERS: dict[str | None, str] = {
    "left": "|:--- ",
    "center": "|:---:",
    "right": "| ---:",
}
TABLE_DEFAULT_ALIGNMENT_MARKER = "| --- "

# Mark wrappers as (opening, closing)
MARK_DELIMITERS: dict[str, tuple[str, str]] = {
    BOLD: ("**", "**"),
    ITALIC: ("*", "*"),
    CODE_MARK: ("`", "`"),
    INSERTED: ("__", "__"),
    DELETED: ("~~", "~~"),
}

# List item markers keyed by the enclosing list type
ORDERED_LIST_MARKER = "1. "
BULLET_LIST_MARKER = "* "
TODO_CHECKED_MARKER = "[x] "
TODO_UNCHECKED_MARKER = "[ ] "

NESTED_LIST_INDENT = "   "
SOFT_BREAK = "  \n"
CODE_FENCE = "```"
LINKBAR_FENCE = "%%%"
HORIZONTAL_RULE_MARKUP = "---\n"

# Characters escaped in plain text runs; backslash must stay first
MARKDOWN_ESCAPE_CHARS = ("\\", "@", "!", "[", "]", "%")

MENTION_PREFIX = "@"
ANONYMOUS_MENTION_PREFIX = "!"

# Dependencies for optional components as (install_name, import_name, version_spec)
DEPS_MARKDOWN = [("mistune", "mistune", ">=3.0.0")]

# Default option values
DEFAULT_STRICT_MODE = False
DEFAULT_ESCAPE_SPECIAL = True
DEFAULT_TRIM_LEADING = True
