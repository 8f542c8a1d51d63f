#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/slatedown/options/__init__.py
"""Option classes for the slatedown serializer and parser."""

from slatedown.options.base import BaseParserOptions, BaseSerializerOptions, CloneFrozenMixin
from slatedown.options.markdown import MarkdownParserOptions, MarkdownSerializerOptions

__all__ = [
    "BaseParserOptions",
    "BaseSerializerOptions",
    "CloneFrozenMixin",
    "MarkdownParserOptions",
    "MarkdownSerializerOptions",
]
