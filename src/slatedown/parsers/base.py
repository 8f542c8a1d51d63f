#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/slatedown/parsers/base.py
"""Base class for document parsers.

Parsers turn text input into a document tree.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Union

from slatedown.ast.nodes import Document
from slatedown.exceptions import InvalidOptionsError, ParsingError
from slatedown.options.base import BaseParserOptions


class BaseParser(ABC):
    """Abstract base class for document parsers.

    Parameters
    ----------
    options : BaseParserOptions or None, default = None
        Format-specific parsing options

    """

    def __init__(self, options: BaseParserOptions | None = None):
        """Initialize the parser with optional configuration."""
        self.options = options

    @staticmethod
    def _validate_options_type(options: BaseParserOptions | None, expected_type: type, parser_name: str) -> None:
        """Validate that options are of the correct type for this parser.

        Parameters
        ----------
        options : BaseParserOptions or None
            The options object to validate
        expected_type : type
            The expected options class type
        parser_name : str
            Name of the parser (for error messages)

        Raises
        ------
        InvalidOptionsError
            If options are not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                component_name=parser_name,
                expected_type=expected_type,
                received_type=type(options),
            )

    @staticmethod
    def _load_text_content(input_data: Union[str, bytes]) -> str:
        """Return text input as str, decoding bytes as UTF-8.

        Raises
        ------
        ParsingError
            If the input is neither str nor UTF-8 bytes

        """
        if isinstance(input_data, str):
            return input_data
        if isinstance(input_data, bytes):
            try:
                return input_data.decode("utf-8")
            except UnicodeDecodeError as e:
                raise ParsingError("Input bytes are not valid UTF-8", parsing_stage="decode", original_error=e) from e
        raise ParsingError(f"Expected str or bytes input, got {type(input_data).__name__}", parsing_stage="decode")

    @abstractmethod
    def parse(self, input_data: Union[str, bytes]) -> Document:
        """Parse the input into a document tree.

        Parameters
        ----------
        input_data : str or bytes
            Source text

        Returns
        -------
        Document
            The parsed document

        Raises
        ------
        ParsingError
            If parsing fails

        """
        pass
