#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/slatedown/options/markdown.py
"""Configuration options for Markdown serialization and parsing.

This module defines options for converting document trees to Markdown and
Markdown back to document trees.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from slatedown.constants import DEFAULT_ESCAPE_SPECIAL, DEFAULT_STRICT_MODE, DEFAULT_TRIM_LEADING
from slatedown.options.base import BaseParserOptions, BaseSerializerOptions


@dataclass(frozen=True)
class MarkdownSerializerOptions(BaseSerializerOptions):
    """Markdown serialization options.

    Parameters
    ----------
    strict_mode : bool, default False
        Raise UnhandledNodeTypeError when no rule accepts a node, mark or
        string instead of rendering it as empty text.
    escape_special : bool, default True
        Escape ``\\ @ ! [ ] %`` in plain text runs.
    trim_leading : bool, default True
        Strip leading whitespace from the final output.

    """

    strict_mode: bool = field(
        default=DEFAULT_STRICT_MODE,
        metadata={"help": "Raise an error for nodes no rule can serialize", "importance": "advanced"},
    )
    escape_special: bool = field(
        default=DEFAULT_ESCAPE_SPECIAL,
        metadata={
            "help": "Escape Markdown-significant characters (\\ @ ! [ ] %) in plain text",
            "importance": "core",
        },
    )
    trim_leading: bool = field(
        default=DEFAULT_TRIM_LEADING,
        metadata={"help": "Strip leading whitespace from the serialized document", "importance": "advanced"},
    )


@dataclass(frozen=True)
class MarkdownParserOptions(BaseParserOptions):
    """Markdown parsing options.

    Parameters
    ----------
    parse_tables : bool, default True
        Parse GitHub-flavored tables into table blocks.
    parse_strikethrough : bool, default True
        Parse ``~~text~~`` into the deleted mark.
    parse_task_lists : bool, default True
        Parse ``- [x]`` items into todo-lists.
    parse_mentions : bool, default True
        Parse ``@name`` and ``!name`` into mention inlines.
    parse_link_bars : bool, default True
        Parse ``%%%`` fenced link cards into linkbar blocks.

    """

    parse_tables: bool = field(
        default=True,
        metadata={"help": "Parse table syntax", "importance": "core"},
    )
    parse_strikethrough: bool = field(
        default=True,
        metadata={"help": "Parse ~~strikethrough~~ syntax", "importance": "core"},
    )
    parse_task_lists: bool = field(
        default=True,
        metadata={"help": "Parse - [ ] task list syntax", "importance": "core"},
    )
    parse_mentions: bool = field(
        default=True,
        metadata={"help": "Parse @user and !user mentions", "importance": "core"},
    )
    parse_link_bars: bool = field(
        default=True,
        metadata={"help": "Parse %%% link card blocks", "importance": "core"},
    )
