#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/slatedown/renderers/rules.py
"""Serialization rules for the Markdown serializer.

A rule turns one node into Markdown given the node's already rendered
children and the current :class:`~slatedown.renderers.context.RenderContext`.
Rules return ``None`` when they do not handle the node; an empty string is
a real result. The serializer tries caller rules first, then the built-in
groups in this order:

- StringRule: escaped plain text
- BlockRule: paragraphs, headings, lists, tables, code, quotes, images, link cards
- InlineRule: links, inline code, mentions
- MarkRule: bold, italic, code, inserted, deleted

Custom rules subclass :class:`Rule` or wrap a function with :func:`rule`:

    >>> @rule("block", "paragraph")
    ... def plain_paragraph(node, children, context):
    ...     return children + "\\n"

"""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from typing import Any, Callable, ClassVar, Optional

from slatedown.ast.nodes import Block, Node
from slatedown.constants import (
    ANONYMOUS_MENTION_PREFIX,
    BLOCK_QUOTE,
    BULLET_LIST_MARKER,
    BULLETED_LIST,
    CODE,
    CODE_FENCE,
    CODE_LINE,
    HEADING_TYPES,
    HORIZONTAL_RULE,
    HORIZONTAL_RULE_MARKUP,
    IMAGE,
    KIND_BLOCK,
    KIND_INLINE,
    KIND_MARK,
    KIND_STRING,
    LINK,
    LINKBAR,
    LINKBAR_FENCE,
    LIST_ITEM,
    LIST_TYPES,
    MARK_DELIMITERS,
    MENTION,
    MENTION_PREFIX,
    NESTED_LIST_INDENT,
    ORDERED_LIST,
    ORDERED_LIST_MARKER,
    PARAGRAPH,
    SOFT_BREAK,
    TABLE,
    TABLE_CELL,
    TABLE_HEAD,
    TABLE_ROW,
    TODO_CHECKED_MARKER,
    TODO_LIST,
    TODO_UNCHECKED_MARKER,
)
from slatedown.exceptions import ValidationError
from slatedown.renderers.context import RenderContext
from slatedown.utils.escape import escape_markdown
from slatedown.utils.urls import encode

logger = logging.getLogger(__name__)

_BRACKET_GROUP_PATTERN = re.compile(r"\[(.*?)\]")

RuleFunction = Callable[[Node, str, RenderContext], Optional[str]]


def format_soft_break(children: str) -> str:
    """Turn every newline into a Markdown hard break (two spaces + newline)."""
    return children.replace("\n", SOFT_BREAK)


def indent_lines(text: str, indent: str = NESTED_LIST_INDENT) -> str:
    """Prefix every line of ``text`` with ``indent``.

    The position after a trailing newline counts as a line, so ``"a\\n"``
    becomes ``"   a\\n   "``.

    """
    return "\n".join(indent + line for line in text.split("\n"))


def format_link_bar(image: str, url: str, title: str, description: str, domain: str) -> str:
    """Render a link card as a ``%%%`` fenced block.

    The image line follows the URL line and only appears when an image is set.
    Bracketed groups are removed from the description.

    """
    head = f"{url}\n{image}" if image else url
    description = _BRACKET_GROUP_PATTERN.sub("", description)
    return f"{LINKBAR_FENCE}\n{head}\n{title}\n{description}\n{domain}\n{LINKBAR_FENCE}\n"


class Rule(ABC):
    """Base class for serialization rules.

    Subclasses set ``kind`` to the node kind they accept (or leave it None to
    see every node) and implement :meth:`render`.

    """

    kind: ClassVar[Optional[str]] = None

    def accepts(self, node: Node) -> bool:
        """Cheap guard run before :meth:`render`."""
        return self.kind is None or node.kind == self.kind

    def serialize(self, node: Node, children: str, context: RenderContext) -> Optional[str]:
        """Render ``node`` or return None when this rule does not handle it."""
        if not self.accepts(node):
            return None
        return self.render(node, children, context)

    @abstractmethod
    def render(self, node: Node, children: str, context: RenderContext) -> Optional[str]:
        """Render a node of this rule's kind.

        Parameters
        ----------
        node : Node
            The node to render
        children : str
            Concatenated output of the node's children; for strings the raw
            text, for marks the leaf text rendered so far
        context : RenderContext
            State of the current serialization pass

        Returns
        -------
        str or None
            Markdown text, or None if the rule does not handle the node

        """
        pass


class FunctionRule(Rule):
    """Rule wrapping a plain function, optionally limited to some node types.

    Parameters
    ----------
    func : callable
        ``func(node, children, context) -> str | None``
    kind : str or None
        Node kind the function accepts; None accepts every kind
    types : tuple of str
        Node types the function accepts; empty accepts every type

    """

    def __init__(self, func: RuleFunction, kind: Optional[str] = None, types: tuple[str, ...] = ()):
        """Initialize the rule from a function and its guards."""
        if not callable(func):
            raise ValidationError("Rule function must be callable", parameter_name="func", parameter_value=func)
        self.func = func
        self._kind = kind
        self.types = tuple(types)
        self.__name__ = getattr(func, "__name__", type(self).__name__)

    def accepts(self, node: Node) -> bool:
        """Match on kind and, when given, on the node's type."""
        if self._kind is not None and node.kind != self._kind:
            return False
        if self.types and getattr(node, "type", None) not in self.types:
            return False
        return True

    def render(self, node: Node, children: str, context: RenderContext) -> Optional[str]:
        """Call the wrapped function."""
        return self.func(node, children, context)

    def __call__(self, node: Node, children: str, context: RenderContext) -> Optional[str]:
        """Call the wrapped function directly, bypassing the guards."""
        return self.func(node, children, context)

    def __repr__(self) -> str:
        """Show the wrapped function and guards."""
        return f"FunctionRule({self.__name__}, kind={self._kind!r}, types={self.types!r})"


def rule(kind: Optional[str] = None, *types: str) -> Callable[[RuleFunction], FunctionRule]:
    """Turn a function into a serialization rule.

    Parameters
    ----------
    kind : str or None
        Node kind to accept ("block", "inline", "mark", "string"), or None for all
    *types : str
        Node types to accept; none means every type of ``kind``

    Returns
    -------
    callable
        Decorator producing a :class:`FunctionRule`

    Examples
    --------
        >>> @rule("mark", "bold")
        ... def strong_underscores(node, children, context):
        ...     return f"__{children}__"

    """

    def decorator(func: RuleFunction) -> FunctionRule:
        return FunctionRule(func, kind=kind, types=types)

    return decorator


class StringRule(Rule):
    """Escape plain text runs."""

    kind = KIND_STRING

    def render(self, node: Node, children: str, context: RenderContext) -> Optional[str]:
        """Return the text, escaped unless escaping is disabled."""
        if context.options.escape_special:
            return escape_markdown(children)
        return children


class BlockRule(Rule):
    """Render block nodes, dispatching on the block type."""

    kind = KIND_BLOCK

    def __init__(self) -> None:
        """Build the type-to-handler table."""
        self._handlers: dict[str, Callable[[Block, str, RenderContext], Optional[str]]] = {
            TABLE: self._render_table,
            TABLE_HEAD: self._render_table_head,
            TABLE_ROW: self._render_table_row,
            TABLE_CELL: self._render_table_cell,
            PARAGRAPH: self._render_paragraph,
            CODE: self._render_code,
            BLOCK_QUOTE: self._render_block_quote,
            LIST_ITEM: self._render_list_item,
            HORIZONTAL_RULE: self._render_horizontal_rule,
            IMAGE: self._render_image,
            LINKBAR: self._render_linkbar,
        }
        for list_type in LIST_TYPES:
            self._handlers[list_type] = self._render_list
        for heading_type in HEADING_TYPES:
            self._handlers[heading_type] = self._render_heading

    def render(self, node: Node, children: str, context: RenderContext) -> Optional[str]:
        """Dispatch to the handler for the block's type."""
        handler = self._handlers.get(getattr(node, "type", ""))
        if handler is None:
            return None
        return handler(node, children, context)  # type: ignore[arg-type]

    def _render_table(self, node: Block, children: str, context: RenderContext) -> str:
        # The header separator is already part of the first row
        return children

    def _render_table_head(self, node: Block, children: str, context: RenderContext) -> str:
        header = context.table_header
        if header is not None:
            header.add(getattr(node.data, "align", None))
        return f"| {children} "

    def _render_table_row(self, node: Block, children: str, context: RenderContext) -> str:
        header = context.table_header
        separator = header.consume() if header is not None else ""
        return f"{children}|\n{separator}"

    def _render_table_cell(self, node: Block, children: str, context: RenderContext) -> str:
        return f"| {children} "

    def _render_paragraph(self, node: Block, children: str, context: RenderContext) -> str:
        parent = context.parent
        if isinstance(parent, Block) and parent.type == LIST_ITEM:
            return format_soft_break(children)
        return f"\n{format_soft_break(children)}\n"

    def _render_code(self, node: Block, children: str, context: RenderContext) -> str:
        return f"{CODE_FENCE}\n{children}\n{CODE_FENCE}\n"

    def _render_block_quote(self, node: Block, children: str, context: RenderContext) -> str:
        return f"> {children}\n"

    def _render_list(self, node: Block, children: str, context: RenderContext) -> str:
        if context.is_top_level:
            return f"\n{children}"
        return f"\n{indent_lines(children)}"

    def _render_list_item(self, node: Block, children: str, context: RenderContext) -> str:
        parent = context.parent
        list_type = parent.type if isinstance(parent, Block) else None

        if list_type == ORDERED_LIST:
            marker = ORDERED_LIST_MARKER
        elif list_type == TODO_LIST:
            checked = getattr(node.data, "checked", False)
            marker = TODO_CHECKED_MARKER if checked else TODO_UNCHECKED_MARKER
        else:
            marker = BULLET_LIST_MARKER
        return f"{marker}{format_soft_break(children)}\n"

    def _render_heading(self, node: Block, children: str, context: RenderContext) -> str:
        level = HEADING_TYPES.index(node.type) + 1
        # Only heading1 turns newlines into hard breaks
        if level == 1:
            children = format_soft_break(children)
        return f"{'#' * level} {children}"

    def _render_horizontal_rule(self, node: Block, children: str, context: RenderContext) -> str:
        return HORIZONTAL_RULE_MARKUP

    def _render_image(self, node: Block, children: str, context: RenderContext) -> str:
        alt = getattr(node.data, "alt", None) or ""
        src = encode(getattr(node.data, "src", None) or "")
        return f"![{alt}]({src})\n"

    def _render_linkbar(self, node: Block, children: str, context: RenderContext) -> str:
        data = node.data
        return format_link_bar(
            image=encode(getattr(data, "image", None) or ""),
            url=encode(getattr(data, "url", None) or ""),
            title=getattr(data, "title", None) or "",
            description=getattr(data, "description", None) or "",
            domain=getattr(data, "domain", None) or "",
        )


class InlineRule(Rule):
    """Render inline nodes: links, inline code and mentions."""

    kind = KIND_INLINE

    def render(self, node: Node, children: str, context: RenderContext) -> Optional[str]:
        """Dispatch on the inline type."""
        node_type = getattr(node, "type", None)
        data: Any = getattr(node, "data", None)

        if node_type == LINK:
            href = encode(getattr(data, "href", None) or "")
            return f"[{children.strip()}]({href})"
        if node_type == CODE_LINE:
            return f"`{children}`"
        if node_type == MENTION:
            username = getattr(data, "username", None)
            if not username:
                return None
            prefix = ANONYMOUS_MENTION_PREFIX if getattr(data, "anonymous", False) else MENTION_PREFIX
            return f"{prefix}{username} "
        return None


class MarkRule(Rule):
    """Wrap leaf text in the delimiters of a mark."""

    kind = KIND_MARK

    def render(self, node: Node, children: str, context: RenderContext) -> Optional[str]:
        """Wrap ``children`` for known mark types."""
        delimiters = MARK_DELIMITERS.get(getattr(node, "type", ""))
        if delimiters is None:
            return None
        opening, closing = delimiters
        return f"{opening}{children}{closing}"


def default_rules() -> list[Rule]:
    """Return fresh instances of the built-in rule groups in priority order."""
    return [StringRule(), BlockRule(), InlineRule(), MarkRule()]


def validate_rules(rules: Any) -> list[Rule]:
    """Check caller-supplied rules.

    Parameters
    ----------
    rules : iterable of Rule or None
        Caller rules

    Returns
    -------
    list of Rule
        The rules as a list

    Raises
    ------
    ValidationError
        If ``rules`` is not iterable or holds something other than a Rule

    """
    if rules is None:
        return []
    if isinstance(rules, (str, bytes)) or not hasattr(rules, "__iter__"):
        raise ValidationError("rules must be a sequence of Rule objects", parameter_name="rules", parameter_value=rules)

    validated = []
    for item in rules:
        if not isinstance(item, Rule):
            raise ValidationError(
                f"Invalid rule {item!r}: expected a Rule instance (use the @rule decorator for functions)",
                parameter_name="rules",
                parameter_value=item,
            )
        validated.append(item)
    logger.debug("Registered %d caller rules", len(validated))
    return validated
