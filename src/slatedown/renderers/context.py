#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/slatedown/renderers/context.py
"""Per-call rendering state for the Markdown serializer.

Every ``serialize`` call builds a fresh :class:`RenderContext`. The context
tracks the ancestors of the node being rendered, so rules can look at the
parent they were rendered under, and owns one :class:`TableHeader`
accumulator per open table. Nothing here is shared between calls, so a
serializer instance can be reused concurrently and re-entrantly.

"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator, Optional, Union

from slatedown.ast.nodes import Block, Document, Inline, Node
from slatedown.constants import TABLE, TABLE_ALIGNMENT_MARKERS, TABLE_DEFAULT_ALIGNMENT_MARKER
from slatedown.options.markdown import MarkdownSerializerOptions


@dataclass
class TableHeader:
    """Pending header separator of one table.

    ``table-head`` cells add one alignment marker each; the first
    ``table-row`` that finds markers pending emits the separator line and
    clears them.

    """

    markers: list[str] = field(default_factory=list)

    def add(self, align: Optional[str]) -> None:
        """Append the separator cell for a column alignment."""
        self.markers.append(TABLE_ALIGNMENT_MARKERS.get(align, TABLE_DEFAULT_ALIGNMENT_MARKER))

    def consume(self) -> str:
        """Return the pending separator line (empty if none) and clear it."""
        if not self.markers:
            return ""
        line = "".join(self.markers) + "|\n"
        self.markers.clear()
        return line


@dataclass
class RenderContext:
    """State of one serialization pass.

    Parameters
    ----------
    document : Document
        The document being serialized
    options : MarkdownSerializerOptions
        Serializer options in effect

    """

    document: Document
    options: MarkdownSerializerOptions = field(default_factory=MarkdownSerializerOptions)
    ancestors: list[Union[Block, Inline]] = field(default_factory=list)
    table_headers: list[TableHeader] = field(default_factory=list)

    @property
    def parent(self) -> Union[Document, Block, Inline]:
        """Parent of the node currently being dispatched."""
        if self.ancestors:
            return self.ancestors[-1]
        return self.document

    @property
    def is_top_level(self) -> bool:
        """Whether the current node sits directly under the document."""
        return not self.ancestors

    @property
    def table_header(self) -> Optional[TableHeader]:
        """Header accumulator of the innermost open table, if any."""
        if self.table_headers:
            return self.table_headers[-1]
        return None

    @contextmanager
    def descend(self, node: Node) -> Iterator[None]:
        """Make ``node`` the parent while its children are rendered.

        Entering a table opens a fresh header accumulator, dropped again when
        the table's children are done.

        """
        opens_table = isinstance(node, Block) and node.type == TABLE
        if isinstance(node, (Block, Inline)):
            self.ancestors.append(node)
        if opens_table:
            self.table_headers.append(TableHeader())
        try:
            yield
        finally:
            if opens_table:
                self.table_headers.pop()
            if isinstance(node, (Block, Inline)):
                self.ancestors.pop()
