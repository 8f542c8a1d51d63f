#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_lists.py
"""Unit tests for list serialization."""

import pytest
from utils import block, paragraph, text, value


def item(*nodes, **data):
    return block("list-item", *nodes, **data)


@pytest.mark.unit
class TestFlatLists:
    """Tests for single-level lists."""

    def test_bulleted_list(self, serializer):
        doc = value(block("bulleted-list", item(paragraph("one")), item(paragraph("two"))))
        assert serializer.serialize(doc) == "* one\n* two\n"

    def test_ordered_list_always_uses_one(self, serializer):
        doc = value(block("ordered-list", item(paragraph("a")), item(paragraph("b")), item(paragraph("c"))))
        assert serializer.serialize(doc) == "1. a\n1. b\n1. c\n"

    def test_todo_list(self, serializer):
        doc = value(
            block(
                "todo-list",
                item(paragraph("done"), checked=True),
                item(paragraph("open"), checked=False),
                item(paragraph("unset")),
            )
        )
        assert serializer.serialize(doc) == "[x] done\n[ ] open\n[ ] unset\n"

    def test_item_with_bare_text(self, serializer):
        doc = value(block("bulleted-list", item("plain")))
        assert serializer.serialize(doc) == "* plain\n"

    def test_item_marks(self, serializer):
        doc = value(block("bulleted-list", item(paragraph(text("b", "bold")))))
        assert serializer.serialize(doc) == "* **b**\n"

    def test_item_outside_list_uses_bullet(self, serializer):
        assert serializer.serialize(value(item(paragraph("loose")))) == "* loose\n"

    def test_paragraph_newlines_broken_twice(self, serializer):
        # Both the paragraph and the item apply the hard-break formatting
        doc = value(block("bulleted-list", item(paragraph("a\nb"))))
        assert serializer.serialize(doc) == "* a    \nb\n"

    def test_list_after_paragraph(self, serializer):
        doc = value(paragraph("intro"), block("bulleted-list", item(paragraph("x"))))
        assert serializer.serialize(doc) == "intro\n\n\n* x\n"

    def test_empty_list(self, serializer):
        assert serializer.serialize(value(block("bulleted-list"))) == ""


@pytest.mark.unit
class TestNestedLists:
    """Tests for lists inside list items."""

    def test_ordered_inside_bulleted(self, serializer):
        doc = value(
            block(
                "bulleted-list",
                item(paragraph("outer"), block("ordered-list", item(paragraph("inner")))),
            )
        )
        assert serializer.serialize(doc) == "* outer  \n   1. inner  \n   \n"

    def test_nested_marker_follows_own_parent(self, serializer):
        doc = value(
            block(
                "ordered-list",
                item(paragraph("o"), block("bulleted-list", item(paragraph("b")))),
            )
        )
        result = serializer.serialize(doc)
        assert result.startswith("1. o")
        assert "   * b" in result

    def test_two_levels_of_nesting_indent_twice(self, serializer):
        doc = value(
            block(
                "bulleted-list",
                item(
                    paragraph("1"),
                    block("bulleted-list", item(paragraph("2"), block("bulleted-list", item(paragraph("3"))))),
                ),
            )
        )
        assert "      * 3" in serializer.serialize(doc)

    def test_top_level_list_not_indented(self, serializer):
        doc = value(block("bulleted-list", item(paragraph("x"))))
        assert not serializer.serialize(doc).startswith(" ")
