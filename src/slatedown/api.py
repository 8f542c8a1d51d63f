#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/slatedown/api.py
"""Convenience functions for converting between document trees and Markdown."""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Union

from slatedown.ast.nodes import Document, Value
from slatedown.options.markdown import MarkdownParserOptions, MarkdownSerializerOptions
from slatedown.renderers.markdown import MarkdownSerializer
from slatedown.renderers.rules import Rule

logger = logging.getLogger(__name__)


def to_markdown(
    value: Union[Value, Document],
    rules: Optional[Iterable[Rule]] = None,
    options: Optional[MarkdownSerializerOptions] = None,
) -> str:
    """Serialize a document to Markdown.

    Parameters
    ----------
    value : Value or Document
        Document to serialize
    rules : iterable of Rule, optional
        Extra rules tried before the built-in ones
    options : MarkdownSerializerOptions, optional
        Serialization options

    Returns
    -------
    str
        Markdown text

    Examples
    --------
        >>> from slatedown.ast import Block, Document, Text
        >>> to_markdown(Document(nodes=[Block(type="paragraph", nodes=[Text.from_string("hello")])]))
        'hello\\n'

    """
    return MarkdownSerializer(rules=rules, options=options).serialize(value)


def from_markdown(markdown: Union[str, bytes], options: Optional[MarkdownParserOptions] = None) -> Value:
    """Parse Markdown into a document Value.

    Parameters
    ----------
    markdown : str or bytes
        Markdown text
    options : MarkdownParserOptions, optional
        Parser options

    Returns
    -------
    Value
        Parsed document

    Raises
    ------
    DependencyError
        If mistune is not installed

    """
    return MarkdownSerializer(parser_options=options).deserialize(markdown)
