#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/slatedown/parsers/markdown.py
"""Markdown to document tree converter.

This module parses Markdown with mistune and converts the token stream into
the Slate-style document tree read by the serializer: typed blocks, inlines
and text nodes whose leaves carry marks. Two mistune plugins add the
syntax the serializer emits on top of CommonMark/GFM: ``@name``/``!name``
mentions and ``%%%`` fenced link cards.

"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Match, Optional, Union

from slatedown.ast.nodes import Block, Document, Inline, Leaf, Mark, Node, Text
from slatedown.constants import (
    BLOCK_QUOTE,
    BOLD,
    BULLETED_LIST,
    CODE,
    CODE_LINE,
    DELETED,
    DEPS_MARKDOWN,
    HORIZONTAL_RULE,
    IMAGE,
    ITALIC,
    LINK,
    LINKBAR,
    LIST_ITEM,
    MENTION,
    ORDERED_LIST,
    PARAGRAPH,
    TABLE,
    TABLE_CELL,
    TABLE_HEAD,
    TABLE_ROW,
    TODO_LIST,
)
from slatedown.exceptions import ParsingError
from slatedown.options.markdown import MarkdownParserOptions
from slatedown.parsers.base import BaseParser
from slatedown.utils.decorators import requires_dependencies

if TYPE_CHECKING:
    from mistune import Markdown
    from mistune.block_parser import BlockParser
    from mistune.core import BlockState, InlineState
    from mistune.inline_parser import InlineParser

logger = logging.getLogger(__name__)

LINKBAR_PATTERN = r"^ {0,3}%%%[ \t]*\n(?P<linkbar_text>[\s\S]*?)\n {0,3}%%%[ \t]*(?:\n|$)"
MENTION_PATTERN = r"(?<![\w\\])(?P<mention_prefix>[@!])(?P<mention_name>\w(?:[\w.\-]*\w)?) ?"

# mistune inline token types that become leaf marks
_MARK_TOKENS = {
    "strong": BOLD,
    "emphasis": ITALIC,
    "strikethrough": DELETED,
}


def parse_linkbar(block: "BlockParser", m: Match[str], state: "BlockState") -> int:
    """Turn a ``%%%`` fenced block into a linkbar token.

    The lines are url, optional image, title, description and domain; a fifth
    line means the image is present.
    """
    lines = m.group("linkbar_text").split("\n")
    if len(lines) >= 5:
        url, image, title, description, domain = lines[:5]
    else:
        lines += [""] * (4 - len(lines))
        url, title, description, domain = lines[:4]
        image = ""
    attrs = {"url": url, "image": image, "title": title, "description": description, "domain": domain}
    state.append_token({"type": "linkbar", "attrs": attrs})
    return m.end()


def parse_mention(inline: "InlineParser", m: Match[str], state: "InlineState") -> int:
    """Turn ``@name`` (or ``!name`` for anonymous users) into a mention token."""
    if state.in_link or state.in_image:
        inline.process_text(m.group(0), state)
        return m.end()

    attrs = {"username": m.group("mention_name"), "anonymous": m.group("mention_prefix") == "!"}
    state.append_token({"type": "mention", "attrs": attrs})
    return m.end()


def linkbar(md: "Markdown") -> None:
    """mistune plugin for ``%%%`` link cards."""
    md.block.register("linkbar", LINKBAR_PATTERN, parse_linkbar, before="list")


def mention(md: "Markdown") -> None:
    """mistune plugin for ``@user`` and ``!user`` mentions."""
    md.inline.register("mention", MENTION_PATTERN, parse_mention, before="link")


class MarkdownParser(BaseParser):
    r"""Convert Markdown to a document tree.

    Parameters
    ----------
    options : MarkdownParserOptions or None, default = None
        Parser configuration options

    Examples
    --------
    Basic parsing:

        >>> parser = MarkdownParser()
        >>> document = parser.parse("# Hello\\n\\nThis is **bold**.")
        >>> document.nodes[0].type
        'heading1'

    """

    def __init__(self, options: MarkdownParserOptions | None = None):
        """Initialize the Markdown parser with options."""
        BaseParser._validate_options_type(options, MarkdownParserOptions, "markdown parser")
        options = options or MarkdownParserOptions()
        super().__init__(options)
        self.options: MarkdownParserOptions = options

    @requires_dependencies("markdown parser", DEPS_MARKDOWN)
    def parse(self, input_data: Union[str, bytes]) -> Document:
        """Parse Markdown into a Document.

        Parameters
        ----------
        input_data : str or bytes
            Markdown text; bytes are decoded as UTF-8

        Returns
        -------
        Document
            The document tree

        Raises
        ------
        ParsingError
            If the input cannot be decoded or mistune fails

        """
        markdown_content = self._load_text_content(input_data)

        import mistune

        plugins: list[Any] = []
        if self.options.parse_strikethrough:
            plugins.append("strikethrough")
        if self.options.parse_tables:
            plugins.append("table")
        if self.options.parse_task_lists:
            plugins.append("task_lists")
        if self.options.parse_link_bars:
            plugins.append(linkbar)
        if self.options.parse_mentions:
            plugins.append(mention)

        markdown = mistune.create_markdown(plugins=plugins, renderer=None)

        logger.debug("Parsing %d characters of Markdown", len(markdown_content))
        try:
            tokens, _state = markdown.parse(markdown_content)
        except (ValueError, TypeError, IndexError, RecursionError) as e:
            raise ParsingError(f"Failed to parse Markdown: {e}", parsing_stage="markdown", original_error=e) from e

        nodes = self._process_tokens(tokens) if isinstance(tokens, list) else []
        logger.debug("Parsed %d top-level nodes", len(nodes))
        return Document(nodes=nodes)

    # Block tokens

    def _process_tokens(self, tokens: list[dict[str, Any]]) -> list[Node]:
        """Process a list of mistune block tokens into nodes."""
        nodes: list[Node] = []
        for token in tokens:
            node = self._process_token(token)
            if node is not None:
                nodes.append(node)
        return nodes

    def _process_token(self, token: dict[str, Any]) -> Optional[Node]:
        """Process a single block token; returns None for tokens that carry no content."""
        token_type = token.get("type", "")

        if token_type == "heading":
            return self._process_heading(token)
        elif token_type in ("paragraph", "block_text"):
            # block_text is used for tight list items - treat like paragraph
            return self._process_paragraph(token)
        elif token_type == "block_code":
            return self._process_code_block(token)
        elif token_type == "block_quote":
            return Block(type=BLOCK_QUOTE, nodes=self._process_tokens(token.get("children", [])))
        elif token_type == "list":
            return self._process_list(token)
        elif token_type == "table":
            return self._process_table(token)
        elif token_type == "thematic_break":
            return Block(type=HORIZONTAL_RULE)
        elif token_type == "linkbar":
            # Empty card fields stay unset
            attrs = token.get("attrs", {})
            return Block(type=LINKBAR, data={key: value for key, value in attrs.items() if value})
        elif token_type == "block_html":
            raw = token.get("raw", "").strip("\n")
            return Block(type=PARAGRAPH, nodes=[Text.from_string(raw)])

        return None

    def _process_heading(self, token: dict[str, Any]) -> Block:
        attrs = token.get("attrs", {})
        level = attrs.get("level", 1) if isinstance(attrs, dict) else 1
        if not isinstance(level, int) or level < 1 or level > 6:
            level = 1
        return Block(type=f"heading{level}", nodes=self._process_inline_tokens(token.get("children", [])))

    def _process_paragraph(self, token: dict[str, Any]) -> Block:
        """Process a paragraph; a paragraph holding only an image becomes an image block."""
        children = [
            child
            for child in token.get("children", [])
            if not (child.get("type") == "text" and not child.get("raw", "").strip())
        ]
        if len(children) == 1 and children[0].get("type") == "image":
            image = children[0]
            attrs = image.get("attrs", {})
            return Block(type=IMAGE, data={"src": attrs.get("url", ""), "alt": self._plain_text(image)})

        return Block(type=PARAGRAPH, nodes=self._process_inline_tokens(token.get("children", [])))

    def _process_code_block(self, token: dict[str, Any]) -> Block:
        code = token.get("raw", "")
        if code.endswith("\n"):
            code = code[:-1]
        return Block(type=CODE, nodes=[Text.from_string(code)])

    def _process_list(self, token: dict[str, Any]) -> Block:
        attrs = token.get("attrs", {})
        if not isinstance(attrs, dict):
            attrs = {}

        items = [child for child in token.get("children", []) if isinstance(child, dict)]
        if attrs.get("ordered", False):
            list_type = ORDERED_LIST
        elif any(item.get("type") == "task_list_item" for item in items):
            list_type = TODO_LIST
        else:
            list_type = BULLETED_LIST

        return Block(type=list_type, nodes=[self._process_list_item(item) for item in items])

    def _process_list_item(self, token: dict[str, Any]) -> Block:
        data: dict[str, Any] = {}
        attrs = token.get("attrs", {})
        if token.get("type") == "task_list_item" and isinstance(attrs, dict):
            data["checked"] = bool(attrs.get("checked", False))
        return Block(type=LIST_ITEM, nodes=self._process_tokens(token.get("children", [])), data=data)

    def _process_table(self, token: dict[str, Any]) -> Block:
        """Process a GFM table; header cells become table-head nodes carrying the column alignment."""
        rows: list[Node] = []
        for section in token.get("children", []):
            section_type = section.get("type", "")
            if section_type == "table_head":
                cells = [
                    Block(
                        type=TABLE_HEAD,
                        nodes=self._process_inline_tokens(cell.get("children", [])),
                        data={"align": cell.get("attrs", {}).get("align")},
                    )
                    for cell in section.get("children", [])
                ]
                rows.append(Block(type=TABLE_ROW, nodes=cells))
            elif section_type == "table_body":
                for row in section.get("children", []):
                    cells = [
                        Block(type=TABLE_CELL, nodes=self._process_inline_tokens(cell.get("children", [])))
                        for cell in row.get("children", [])
                    ]
                    rows.append(Block(type=TABLE_ROW, nodes=cells))
        return Block(type=TABLE, nodes=rows)

    # Inline tokens

    def _process_inline_tokens(self, tokens: list[dict[str, Any]], marks: tuple[str, ...] = ()) -> list[Node]:
        """Process inline tokens; ``marks`` lists enclosing mark types, outermost first."""
        nodes: list[Node] = []
        for token in tokens:
            nodes.extend(self._process_inline_token(token, marks))
        return _merge_text_nodes(nodes)

    def _process_inline_token(self, token: dict[str, Any], marks: tuple[str, ...]) -> list[Node]:
        token_type = token.get("type", "")

        if token_type in ("text", "inline_html"):
            return [_make_text(token.get("raw", ""), marks)]
        if token_type in ("softbreak", "linebreak"):
            return [_make_text("\n", marks)]
        if token_type in _MARK_TOKENS:
            return self._process_inline_tokens(token.get("children", []), marks + (_MARK_TOKENS[token_type],))
        if token_type == "codespan":
            return [Inline(type=CODE_LINE, nodes=[_make_text(token.get("raw", ""), marks)])]
        if token_type == "link":
            attrs = token.get("attrs", {})
            return [
                Inline(
                    type=LINK,
                    nodes=self._process_inline_tokens(token.get("children", []), marks),
                    data={"href": attrs.get("url", "")},
                )
            ]
        if token_type == "image":
            # Images inside running text keep only their alt text
            return [_make_text(self._plain_text(token), marks)]
        if token_type == "mention":
            return [Inline(type=MENTION, data=token.get("attrs", {}))]

        logger.debug("Skipping unsupported inline token %r", token_type)
        return []

    def _plain_text(self, token: dict[str, Any]) -> str:
        """Concatenate the raw text of a token's descendants."""
        if "raw" in token:
            return token["raw"]
        return "".join(self._plain_text(child) for child in token.get("children", []))


def _make_text(text: str, marks: tuple[str, ...]) -> Text:
    # Leaves store marks innermost first
    return Text(leaves=[Leaf(text=text, marks=[Mark(type=name) for name in reversed(marks)])])


def _merge_text_nodes(nodes: list[Node]) -> list[Node]:
    """Merge adjacent text nodes, joining neighbouring leaves with identical marks."""
    merged: list[Node] = []
    for node in nodes:
        if isinstance(node, Text) and merged and isinstance(merged[-1], Text):
            target = merged[-1]
            for leaf in node.leaves:
                last = target.leaves[-1] if target.leaves else None
                if last is not None and [m.type for m in last.marks] == [m.type for m in leaf.marks]:
                    last.text += leaf.text
                else:
                    target.leaves.append(leaf)
        else:
            merged.append(node)
    return merged
