#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/slatedown/parsers/__init__.py
"""Parsers that turn text into document trees."""

from slatedown.parsers.base import BaseParser
from slatedown.parsers.markdown import MarkdownParser

__all__ = ["BaseParser", "MarkdownParser"]
