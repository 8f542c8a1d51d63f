#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_rules.py
"""Unit tests for serialization rules and caller rule dispatch."""

import pytest
from utils import block, inline, paragraph, text, value

from slatedown import MarkdownSerializer
from slatedown.exceptions import ValidationError
from slatedown.renderers.rules import (
    BlockRule,
    FunctionRule,
    InlineRule,
    MarkRule,
    Rule,
    StringRule,
    default_rules,
    format_link_bar,
    format_soft_break,
    indent_lines,
    rule,
    validate_rules,
)


@pytest.mark.unit
class TestHelpers:
    """Tests for the formatting helpers."""

    def test_format_soft_break(self):
        assert format_soft_break("a\nb\nc") == "a  \nb  \nc"

    def test_format_soft_break_without_newlines(self):
        assert format_soft_break("abc") == "abc"

    def test_indent_lines(self):
        assert indent_lines("a\nb") == "   a\n   b"

    def test_indent_lines_trailing_newline(self):
        assert indent_lines("a\n") == "   a\n   "

    def test_indent_lines_custom_indent(self):
        assert indent_lines("a\nb", "\t") == "\ta\n\tb"

    def test_format_link_bar(self):
        result = format_link_bar(image="", url="u", title="t", description="d [x]", domain="dom")
        assert result == "%%%\nu\nt\nd \ndom\n%%%\n"


@pytest.mark.unit
class TestDefaultRules:
    """Tests for the built-in rule groups."""

    def test_default_order(self):
        assert [type(r) for r in default_rules()] == [StringRule, BlockRule, InlineRule, MarkRule]

    def test_fresh_instances(self):
        assert default_rules()[0] is not default_rules()[0]

    def test_kind_guard(self):
        assert BlockRule().accepts(paragraph("x"))
        assert not BlockRule().accepts(inline("link"))
        assert not MarkRule().accepts(paragraph("x"))


@pytest.mark.unit
class TestFunctionRule:
    """Tests for FunctionRule and the rule decorator."""

    def test_decorator_builds_function_rule(self):
        @rule("block", "paragraph")
        def shout(node, children, context):
            return children.upper()

        assert isinstance(shout, FunctionRule)
        assert shout.types == ("paragraph",)
        assert shout.__name__ == "shout"

    def test_guards(self):
        @rule("block", "paragraph", "code")
        def some_blocks(node, children, context):
            return ""

        assert some_blocks.accepts(paragraph("x"))
        assert some_blocks.accepts(block("code"))
        assert not some_blocks.accepts(block("heading1"))
        assert not some_blocks.accepts(inline("paragraph"))

    def test_without_guards_accepts_everything(self):
        @rule()
        def anything(node, children, context):
            return None

        assert anything.accepts(paragraph("x"))
        assert anything.accepts(text("x"))

    def test_called_directly(self):
        @rule("mark")
        def wrap(node, children, context):
            return f"<{children}>"

        assert wrap(None, "x", None) == "<x>"

    def test_non_callable_rejected(self):
        with pytest.raises(ValidationError):
            FunctionRule("not callable")

    def test_repr(self):
        @rule("inline", "link")
        def links(node, children, context):
            return None

        assert repr(links) == "FunctionRule(links, kind='inline', types=('link',))"


@pytest.mark.unit
class TestValidateRules:
    """Tests for caller rule validation."""

    def test_none(self):
        assert validate_rules(None) == []

    def test_generator_accepted(self):
        rules = validate_rules(r for r in default_rules())
        assert len(rules) == 4

    @pytest.mark.parametrize("bad", ["rules", b"rules", 42])
    def test_non_sequence_rejected(self, bad):
        with pytest.raises(ValidationError):
            validate_rules(bad)

    def test_plain_function_rejected(self):
        def plain(node, children, context):
            return None

        with pytest.raises(ValidationError, match="@rule decorator"):
            validate_rules([plain])

    def test_serializer_validates(self):
        with pytest.raises(ValidationError):
            MarkdownSerializer(rules=[object()])


@pytest.mark.unit
class TestCallerRules:
    """Caller rules run before the built-ins; the first string wins."""

    def test_override_horizontal_rule(self):
        @rule("block", "horizontal-rule")
        def stars(node, children, context):
            return "***\n"

        serializer = MarkdownSerializer(rules=[stars])
        assert serializer.serialize(value(block("horizontal-rule"))) == "***\n"

    def test_none_falls_through(self):
        calls = []

        @rule("block")
        def observe(node, children, context):
            calls.append(node.type)
            return None

        serializer = MarkdownSerializer(rules=[observe])
        assert serializer.serialize(value(paragraph("x"))) == "x\n"
        assert calls == ["paragraph"]

    def test_empty_string_wins(self):
        @rule("block", "paragraph")
        def hide(node, children, context):
            return ""

        serializer = MarkdownSerializer(rules=[hide])
        assert serializer.serialize(value(paragraph("x"), block("horizontal-rule"))) == "---\n"

    def test_first_caller_rule_wins(self):
        @rule("mark", "bold")
        def first(node, children, context):
            return f"__{children}__"

        @rule("mark", "bold")
        def second(node, children, context):
            return f"<b>{children}</b>"

        serializer = MarkdownSerializer(rules=[first, second])
        assert serializer.serialize(value(paragraph(text("x", "bold")))) == "__x__\n"

    def test_string_rule_override(self):
        @rule("string")
        def raw(node, children, context):
            return children

        serializer = MarkdownSerializer(rules=[raw])
        assert serializer.serialize(value(paragraph("[x]"))) == "[x]\n"

    def test_rule_for_new_block_type(self):
        @rule("block", "callout")
        def callout(node, children, context):
            return f"\n!!! {children}\n"

        serializer = MarkdownSerializer(rules=[callout])
        assert serializer.serialize(value(block("callout", "note"))) == "!!! note\n"

    def test_rule_sees_parent(self):
        parents = []

        @rule("inline", "link")
        def record(node, children, context):
            parents.append(context.parent.type)
            return None

        serializer = MarkdownSerializer(rules=[record])
        serializer.serialize(value(block("heading3", inline("link", "x", href="/a"))))
        assert parents == ["heading3"]

    def test_rule_subclass(self):
        class UpperMention(Rule):
            kind = "inline"

            def render(self, node, children, context):
                if node.type != "mention":
                    return None
                return f"@{node.data.username.upper()} "

        serializer = MarkdownSerializer(rules=[UpperMention()])
        doc = value(paragraph(inline("mention", username="ada"), inline("link", "x", href="/")))
        assert serializer.serialize(doc) == "@ADA [x](/)\n"
