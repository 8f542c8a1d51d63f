#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_markdown_parser.py
"""Unit tests for the Markdown to document tree parser.

Tests cover:
- Headings, paragraphs, marks and inline code
- Lists (bulleted, ordered, task lists)
- Tables with column alignment
- Mentions and %%% link cards
- Option switches and error handling

"""

import re

import pytest

from slatedown.ast import Block, Inline, Leaf, Mark, Text
from slatedown.ast.nodes import ImageData, LinkbarData, ListItemData, MentionData, TableHeadData
from slatedown.exceptions import ParsingError
from slatedown.options import MarkdownParserOptions
from slatedown.parsers.markdown import (
    LINKBAR_PATTERN,
    MENTION_PATTERN,
    MarkdownParser,
    _merge_text_nodes,
    parse_linkbar,
)


class _RecordingState:
    """Stand-in for a mistune block state collecting appended tokens."""

    def __init__(self):
        self.tokens = []

    def append_token(self, token):
        self.tokens.append(token)


@pytest.mark.unit
class TestPluginPatterns:
    """Tests for the plugin regular expressions and handlers (no mistune needed)."""

    @pytest.mark.parametrize(
        "source,prefix,name",
        [("@ada", "@", "ada"), ("!bob", "!", "bob"), ("@first.last", "@", "first.last"), ("@a-b_c", "@", "a-b_c")],
    )
    def test_mention_pattern(self, source, prefix, name):
        m = re.search(MENTION_PATTERN, source)
        assert m.group("mention_prefix") == prefix
        assert m.group("mention_name") == name

    def test_mention_pattern_skips_email(self):
        assert re.search(MENTION_PATTERN, "mail a@b.com") is None

    def test_mention_pattern_skips_escaped(self):
        assert re.search(MENTION_PATTERN, "\\@ada") is None

    def test_mention_trailing_dot_not_included(self):
        m = re.search(MENTION_PATTERN, "thanks @ada.")
        assert m.group("mention_name") == "ada"

    def test_mention_consumes_one_space(self):
        m = re.search(MENTION_PATTERN, "@ada  next")
        assert m.group(0) == "@ada "

    def test_linkbar_with_image(self):
        source = "%%%\nhttps://ex.com\nhttps://ex.com/i.png\nTitle\nDesc\nex.com\n%%%\n"
        m = re.match(LINKBAR_PATTERN, source, re.M)
        state = _RecordingState()

        assert parse_linkbar(None, m, state) == len(source)
        assert state.tokens == [
            {
                "type": "linkbar",
                "attrs": {
                    "url": "https://ex.com",
                    "image": "https://ex.com/i.png",
                    "title": "Title",
                    "description": "Desc",
                    "domain": "ex.com",
                },
            }
        ]

    def test_linkbar_without_image(self):
        m = re.match(LINKBAR_PATTERN, "%%%\nu\nt\nd\ndom\n%%%", re.M)
        state = _RecordingState()
        parse_linkbar(None, m, state)
        assert state.tokens[0]["attrs"] == {"url": "u", "image": "", "title": "t", "description": "d", "domain": "dom"}

    def test_short_linkbar_padded(self):
        m = re.match(LINKBAR_PATTERN, "%%%\nu\n%%%\n", re.M)
        state = _RecordingState()
        parse_linkbar(None, m, state)
        assert state.tokens[0]["attrs"]["url"] == "u"
        assert state.tokens[0]["attrs"]["domain"] == ""


@pytest.mark.unit
class TestMergeTextNodes:
    """Tests for merging adjacent text nodes."""

    def test_same_marks_joined(self):
        nodes = _merge_text_nodes([Text.from_string("a"), Text.from_string("b")])
        assert nodes == [Text(leaves=[Leaf(text="ab", marks=[])])]

    def test_different_marks_kept_apart(self):
        nodes = _merge_text_nodes([Text.from_string("a"), Text.from_string("b", marks=["bold"])])
        assert nodes == [Text(leaves=[Leaf(text="a", marks=[]), Leaf(text="b", marks=[Mark(type="bold")])])]

    def test_inline_breaks_runs(self):
        link = Inline(type="link", data={"href": "/"})
        nodes = _merge_text_nodes([Text.from_string("a"), link, Text.from_string("b")])
        assert len(nodes) == 3


@pytest.fixture
def parser():
    pytest.importorskip("mistune")
    return MarkdownParser()


def _leaf_view(text_node):
    return [(leaf.text, [m.type for m in leaf.marks]) for leaf in text_node.leaves]


@pytest.mark.unit
class TestBlockParsing:
    """Tests for block-level constructs."""

    def test_heading_and_paragraph(self, parser):
        doc = parser.parse("# Hello\n\nThis is **bold**.")
        heading, para = doc.nodes
        assert heading.type == "heading1"
        assert heading.nodes[0].text == "Hello"
        assert para.type == "paragraph"
        assert _leaf_view(para.nodes[0]) == [("This is ", []), ("bold", ["bold"]), (".", [])]

    @pytest.mark.parametrize("level", [1, 2, 3, 4, 5, 6])
    def test_heading_levels(self, parser, level):
        doc = parser.parse("#" * level + " H")
        assert doc.nodes[0].type == f"heading{level}"

    def test_code_block(self, parser):
        doc = parser.parse("```\nx = 1\ny = 2\n```\n")
        code = doc.nodes[0]
        assert code.type == "code"
        assert code.nodes[0].text == "x = 1\ny = 2"

    def test_block_quote(self, parser):
        quote = parser.parse("> wise words\n").nodes[0]
        assert quote.type == "block-quote"
        assert quote.nodes[0].type == "paragraph"
        assert quote.nodes[0].nodes[0].text == "wise words"

    def test_horizontal_rule(self, parser):
        assert parser.parse("---\n").nodes == [Block(type="horizontal-rule")]

    def test_standalone_image(self, parser):
        image = parser.parse("![A pic](img.png)\n").nodes[0]
        assert image.type == "image"
        assert image.data == ImageData(src="img.png", alt="A pic")

    def test_empty_input(self, parser):
        assert parser.parse("").nodes == []

    def test_bytes_input(self, parser):
        assert parser.parse("# Hé".encode("utf-8")).nodes[0].nodes[0].text == "Hé"


@pytest.mark.unit
class TestListParsing:
    """Tests for lists."""

    def test_bulleted(self, parser):
        lst = parser.parse("* one\n* two\n").nodes[0]
        assert lst.type == "bulleted-list"
        assert [item.type for item in lst.nodes] == ["list-item", "list-item"]
        assert lst.nodes[1].nodes[0].type == "paragraph"
        assert lst.nodes[1].nodes[0].nodes[0].text == "two"

    def test_ordered(self, parser):
        assert parser.parse("1. a\n2. b\n").nodes[0].type == "ordered-list"

    def test_task_list(self, parser):
        lst = parser.parse("- [x] done\n- [ ] open\n").nodes[0]
        assert lst.type == "todo-list"
        assert [item.data for item in lst.nodes] == [ListItemData(checked=True), ListItemData(checked=False)]

    def test_task_list_disabled(self, parser):
        parser = MarkdownParser(MarkdownParserOptions(parse_task_lists=False))
        assert parser.parse("- [x] done\n").nodes[0].type == "bulleted-list"

    def test_nested(self, parser):
        outer = parser.parse("* outer\n   1. inner\n").nodes[0]
        item = outer.nodes[0]
        assert [child.type for child in item.nodes] == ["paragraph", "ordered-list"]


@pytest.mark.unit
class TestTableParsing:
    """Tests for GFM tables."""

    def test_table_structure(self, parser):
        table = parser.parse("| a | b |\n|:--- | ---:|\n| 1 | 2 |\n").nodes[0]
        assert table.type == "table"
        head_row, body_row = table.nodes
        assert [cell.type for cell in head_row.nodes] == ["table-head", "table-head"]
        assert [cell.data for cell in head_row.nodes] == [TableHeadData(align="left"), TableHeadData(align="right")]
        assert [cell.type for cell in body_row.nodes] == ["table-cell", "table-cell"]
        assert body_row.nodes[1].nodes[0].text == "2"

    def test_unaligned_column(self, parser):
        table = parser.parse("| a |\n| --- |\n| 1 |\n").nodes[0]
        assert table.nodes[0].nodes[0].data == TableHeadData()

    def test_tables_disabled(self):
        pytest.importorskip("mistune")
        parser = MarkdownParser(MarkdownParserOptions(parse_tables=False))
        assert parser.parse("| a |\n| --- |\n| 1 |\n").nodes[0].type == "paragraph"


@pytest.mark.unit
class TestInlineParsing:
    """Tests for inline constructs."""

    def test_marks(self, parser):
        para = parser.parse("*i* and ~~d~~").nodes[0]
        assert _leaf_view(para.nodes[0]) == [("i", ["italic"]), (" and ", []), ("d", ["deleted"])]

    def test_nested_marks_innermost_first(self, parser):
        para = parser.parse("**a *b* c**").nodes[0]
        assert _leaf_view(para.nodes[0]) == [("a ", ["bold"]), ("b", ["italic", "bold"]), (" c", ["bold"])]

    def test_strikethrough_disabled(self):
        pytest.importorskip("mistune")
        parser = MarkdownParser(MarkdownParserOptions(parse_strikethrough=False))
        para = parser.parse("~~d~~").nodes[0]
        assert _leaf_view(para.nodes[0]) == [("~~d~~", [])]

    def test_inline_code(self, parser):
        para = parser.parse("run `ls -la` now").nodes[0]
        code = para.nodes[1]
        assert code == Inline(type="code-line", nodes=[Text.from_string("ls -la")])

    def test_link(self, parser):
        para = parser.parse("see [the docs](https://ex.com/a) now").nodes[0]
        link = para.nodes[1]
        assert link.type == "link"
        assert link.data.href == "https://ex.com/a"
        assert link.nodes[0].text == "the docs"

    def test_line_breaks_become_newlines(self, parser):
        para = parser.parse("a\nb").nodes[0]
        assert para.nodes[0].text == "a\nb"

    def test_escapes_resolved(self, parser):
        para = parser.parse("100\\% \\[x\\]").nodes[0]
        assert para.nodes[0].text == "100% [x]"

    def test_inline_image_keeps_alt(self, parser):
        para = parser.parse("an ![icon](i.png) here").nodes[0]
        assert para.nodes[0].text == "an icon here"


@pytest.mark.unit
class TestPluginParsing:
    """Tests for mentions and link cards through mistune."""

    def test_mentions(self, parser):
        para = parser.parse("hi @ada and !bob ok").nodes[0]
        mentions = [node for node in para.nodes if isinstance(node, Inline)]
        assert [m.data for m in mentions] == [
            MentionData(username="ada", anonymous=False),
            MentionData(username="bob", anonymous=True),
        ]

    def test_mention_inside_link_is_text(self, parser):
        para = parser.parse("[@ada](https://ex.com)").nodes[0]
        link = para.nodes[0]
        assert link.type == "link"
        assert link.nodes[0].text == "@ada"

    def test_mentions_disabled(self):
        pytest.importorskip("mistune")
        parser = MarkdownParser(MarkdownParserOptions(parse_mentions=False))
        para = parser.parse("hi @ada").nodes[0]
        assert para.nodes[0].text == "hi @ada"

    def test_linkbar(self, parser):
        doc = parser.parse("intro\n\n%%%\nhttps://ex.com\nTitle\nDesc\nex.com\n%%%\n\nafter\n")
        assert [node.type for node in doc.nodes] == ["paragraph", "linkbar", "paragraph"]
        assert doc.nodes[1].data == LinkbarData(url="https://ex.com", title="Title", description="Desc", domain="ex.com")

    def test_linkbars_disabled(self):
        pytest.importorskip("mistune")
        parser = MarkdownParser(MarkdownParserOptions(parse_link_bars=False))
        doc = parser.parse("%%%\nu\nt\nd\ndom\n%%%\n")
        assert all(node.type != "linkbar" for node in doc.nodes)


@pytest.mark.unit
class TestParserErrors:
    """Tests for invalid input."""

    def test_non_text_input(self, parser):
        with pytest.raises(ParsingError) as exc_info:
            parser.parse(42)
        assert exc_info.value.parsing_stage == "decode"

    def test_invalid_utf8(self, parser):
        with pytest.raises(ParsingError):
            parser.parse(b"\xff\xfe\xfa")
