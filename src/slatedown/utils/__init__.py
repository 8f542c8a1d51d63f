#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/slatedown/utils/__init__.py
"""Utility modules for the slatedown package.

This package contains the text escaping and URL encoding helpers used by the
serializer, plus dependency checking for the optional Markdown parser.
"""

from slatedown.utils.escape import escape_markdown, unescape_markdown
from slatedown.utils.urls import encode

__all__ = [
    "encode",
    "escape_markdown",
    "unescape_markdown",
]
