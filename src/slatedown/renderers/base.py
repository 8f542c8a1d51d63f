#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/slatedown/renderers/base.py
"""Base class for document serializers.

Serializers turn a document tree into a text format. The BaseRenderer
provides the shared options handling and the entry point signature.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Union

from slatedown.ast.nodes import Document, Value
from slatedown.exceptions import InvalidOptionsError
from slatedown.options.base import BaseSerializerOptions


class BaseRenderer(ABC):
    """Abstract base class for serializers.

    Parameters
    ----------
    options : BaseSerializerOptions or None, default = None
        Format-specific serialization options

    """

    def __init__(self, options: BaseSerializerOptions | None = None):
        """Initialize the renderer with optional configuration."""
        self.options = options

    @staticmethod
    def _validate_options_type(
        options: BaseSerializerOptions | None, expected_type: type, renderer_name: str
    ) -> None:
        """Validate that options are of the correct type for this renderer.

        Parameters
        ----------
        options : BaseSerializerOptions or None
            The options object to validate
        expected_type : type
            The expected options class type
        renderer_name : str
            Name of the renderer (for error messages)

        Raises
        ------
        InvalidOptionsError
            If options are not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                component_name=renderer_name,
                expected_type=expected_type,
                received_type=type(options),
            )

    @staticmethod
    def _resolve_document(value: Union[Value, Document]) -> Document:
        """Accept either a Value wrapper or a bare Document."""
        if isinstance(value, Value):
            return value.document
        if isinstance(value, Document):
            return value
        raise TypeError(f"Expected Value or Document, got {type(value).__name__}")

    @abstractmethod
    def serialize(self, value: Union[Value, Document]) -> str:
        """Render a document to text.

        Parameters
        ----------
        value : Value or Document
            The document to render

        Returns
        -------
        str
            Rendered text

        Raises
        ------
        RenderingError
            If rendering fails

        """
        pass
