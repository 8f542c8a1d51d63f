#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/slatedown/renderers/__init__.py
"""Serializers that render document trees to text."""

from slatedown.renderers.base import BaseRenderer
from slatedown.renderers.markdown import MarkdownSerializer

__all__ = ["BaseRenderer", "MarkdownSerializer"]
