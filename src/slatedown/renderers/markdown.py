#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/slatedown/renderers/markdown.py
"""Markdown serialization of document trees.

This module provides the MarkdownSerializer, which renders a document tree
to Markdown and delegates the reverse direction to the Markdown parser.

Rendering is post-order: a node's children are rendered first and their
output concatenated, then the rules are asked, in priority order, to turn the
node plus that text into Markdown. The first rule returning a string wins. A
node no rule accepts contributes nothing (or raises in strict mode).

"""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Union

from slatedown.ast.nodes import Block, Document, Inline, Leaf, Mark, Node, String, Text, Value
from slatedown.exceptions import UnhandledNodeTypeError
from slatedown.options.markdown import MarkdownParserOptions, MarkdownSerializerOptions
from slatedown.parsers.markdown import MarkdownParser
from slatedown.renderers.base import BaseRenderer
from slatedown.renderers.context import RenderContext
from slatedown.renderers.rules import Rule, default_rules, validate_rules

logger = logging.getLogger(__name__)


class _TreeWalker:
    """Visitor rendering one document; created fresh per serialize call."""

    def __init__(self, rules: list[Rule], context: RenderContext):
        self.rules = rules
        self.context = context

    def render(self, node: Node) -> str:
        return node.accept(self)

    def visit_document(self, node: Document) -> str:
        return "".join(self.render(child) for child in node.nodes)

    def visit_block(self, node: Block) -> str:
        return self._render_parent(node)

    def visit_inline(self, node: Inline) -> str:
        return self._render_parent(node)

    def visit_text(self, node: Text) -> str:
        return "".join(self._render_leaf(leaf) for leaf in node.leaves)

    def visit_string(self, node: String) -> str:
        return self._dispatch(node, node.text)

    def visit_mark(self, node: Mark) -> str:
        # Leaves fold their marks in _render_leaf; this path only serves a
        # Mark passed directly to serialize_node, rendered around empty text
        return self._dispatch(node, "")

    def _render_parent(self, node: Union[Block, Inline]) -> str:
        with self.context.descend(node):
            children = "".join(self.render(child) for child in node.nodes)
        return self._dispatch(node, children)

    def _render_leaf(self, leaf: Leaf) -> str:
        text = self.visit_string(String(text=leaf.text))
        for mark in leaf.marks:
            wrapped = self._try_rules(mark, text)
            if wrapped is None:
                self._unhandled(mark)
                return ""
            text = wrapped
        return text

    def _try_rules(self, node: Node, children: str) -> Optional[str]:
        for rule in self.rules:
            result = rule.serialize(node, children, self.context)
            if result is not None:
                return result
        return None

    def _dispatch(self, node: Node, children: str) -> str:
        result = self._try_rules(node, children)
        if result is None:
            self._unhandled(node)
            return ""
        return result

    def _unhandled(self, node: Node) -> None:
        node_type = getattr(node, "type", None)
        if self.context.options.strict_mode:
            logger.warning("No serialization rule matched %s node of type %r", node.kind, node_type)
            raise UnhandledNodeTypeError(node.kind, node_type)
        logger.debug("No serialization rule matched %s node of type %r; rendering as empty", node.kind, node_type)


class MarkdownSerializer(BaseRenderer):
    """Serialize document trees to Markdown and parse Markdown back.

    Parameters
    ----------
    rules : iterable of Rule or None, default = None
        Extra rules tried before the built-in ones
    options : MarkdownSerializerOptions or None, default = None
        Serialization options
    parser_options : MarkdownParserOptions or None, default = None
        Options handed to the parser by :meth:`deserialize`

    Examples
    --------
    Basic usage:

        >>> from slatedown.ast import Block, Document, Text, Value
        >>> serializer = MarkdownSerializer()
        >>> value = Value(document=Document(nodes=[
        ...     Block(type="heading2", nodes=[Text.from_string("Title")])
        ... ]))
        >>> serializer.serialize(value)
        '## Title'

    With a caller rule:

        >>> from slatedown.renderers.rules import rule
        >>> @rule("block", "horizontal-rule")
        ... def stars(node, children, context):
        ...     return "***\\n"
        >>> serializer = MarkdownSerializer(rules=[stars])

    """

    def __init__(
        self,
        rules: Optional[Iterable[Rule]] = None,
        options: MarkdownSerializerOptions | None = None,
        parser_options: MarkdownParserOptions | None = None,
    ):
        """Initialize the serializer with caller rules and options."""
        BaseRenderer._validate_options_type(options, MarkdownSerializerOptions, "markdown serializer")
        options = options or MarkdownSerializerOptions()
        super().__init__(options)
        self.options: MarkdownSerializerOptions = options
        self.parser = MarkdownParser(parser_options)
        self.rules: list[Rule] = [*validate_rules(rules), *default_rules()]

    def serialize(self, value: Union[Value, Document]) -> str:
        """Render a document to Markdown.

        Each top-level node is rendered on its own, the results are joined
        with a newline and leading whitespace is stripped from the result.

        Parameters
        ----------
        value : Value or Document
            The document to render

        Returns
        -------
        str
            Markdown text

        Raises
        ------
        UnhandledNodeTypeError
            In strict mode, when no rule accepts a node

        """
        document = self._resolve_document(value)
        context = RenderContext(document=document, options=self.options)
        walker = _TreeWalker(self.rules, context)

        elements = [walker.render(node) for node in document.nodes]
        output = "\n".join(elements)
        logger.debug("Serialized %d top-level nodes to %d characters", len(elements), len(output))

        if self.options.trim_leading:
            output = output.lstrip()
        return output

    def serialize_node(self, node: Node, document: Optional[Document] = None) -> str:
        """Render a single node, as if it were a top-level node of ``document``.

        Parameters
        ----------
        node : Node
            The node to render
        document : Document or None, default = None
            Document the node belongs to; a document holding only ``node`` is
            assumed when omitted

        Returns
        -------
        str
            Markdown for the node, untrimmed

        """
        context = RenderContext(document=document or Document(nodes=[node]), options=self.options)
        return _TreeWalker(self.rules, context).render(node)

    def deserialize(self, markdown: str) -> Value:
        """Parse Markdown into a document Value.

        Parameters
        ----------
        markdown : str
            Markdown text

        Returns
        -------
        Value
            The parsed document wrapped in a Value

        Raises
        ------
        DependencyError
            If mistune is not installed
        ParsingError
            If the text cannot be parsed

        """
        document = self.parser.parse(markdown)
        return Value(document=document)
