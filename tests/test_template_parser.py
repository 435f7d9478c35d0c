"""Tests for the line lexer, directive parser and placeholder scanner."""

import pytest

from pagesmith.template.lexer import LineKind, classify, tokenize
from pagesmith.template.nodes import IncludeNode, LoopNode, TemplateNode, TextNode, TextRun, VariableRef
from pagesmith.template.parser import parse
from pagesmith.template.placeholders import scan_placeholders


class TestLexer:
    """Test line classification."""

    def test_include_line(self):
        token = classify("    include templates/partials/header.html  ")

        assert token.kind == LineKind.INCLUDE
        assert token.indent == "    "
        assert token.argument == "templates/partials/header.html"

    def test_for_and_endfor_lines(self):
        header = classify("  for card < 3")
        footer = classify("  endfor")

        assert header.kind == LineKind.FOR
        assert header.name == "card"
        assert header.argument == "3"
        assert footer.kind == LineKind.ENDFOR
        assert footer.indent == "  "

    def test_directive_words_inside_text_are_text(self):
        assert classify("<p>include this</p>").kind == LineKind.TEXT
        assert classify("<p>for i < 3</p>").kind == LineKind.TEXT

    def test_tokenize_preserves_lines(self):
        text = "a\n\n  include x.html\nb\n"
        tokens = tokenize(text)

        assert "\n".join(t.text for t in tokens) == text


class TestParser:
    """Test directive tree construction."""

    def test_loop_block(self):
        nodes = parse("<ul>\nfor i < 2\n<li>${i}</li>\nendfor\n</ul>")

        assert isinstance(nodes[0], TextNode)
        assert isinstance(nodes[1], LoopNode)
        assert isinstance(nodes[2], TextNode)
        loop = nodes[1]
        assert loop.variable == "i"
        assert loop.bound_text == "2"
        assert [t.text for t in loop.body] == ["<li>${i}</li>"]

    def test_nested_loop_at_same_indent_pairs_outermost(self):
        nodes = parse("for i < 2\nfor j < 2\nx\nendfor\nendfor")

        assert len(nodes) == 1
        assert [t.text for t in nodes[0].body] == ["for j < 2", "x", "endfor"]

    def test_endfor_at_other_indent_does_not_close(self):
        nodes = parse("for i < 2\n  endfor\nendfor")

        assert len(nodes) == 1
        assert [t.text for t in nodes[0].body] == ["  endfor"]

    def test_unmatched_for_and_stray_endfor_are_text(self):
        nodes = parse("for i < 2\nx\n  endfor")

        assert all(isinstance(node, TextNode) for node in nodes)
        assert [node.source for node in nodes] == ["for i < 2", "x", "  endfor"]

    def test_include_node(self):
        nodes = parse("  include templates/a.html")

        assert isinstance(nodes[0], IncludeNode)
        assert nodes[0].path == "templates/a.html"
        assert nodes[0].indent == "  "

    def test_base_node_is_abstract(self):
        with pytest.raises(TypeError):
            TemplateNode()


class TestPlaceholderScanner:
    """Test ${name|modifier} scanning."""

    def test_segments_in_order(self):
        segments = scan_placeholders('<a class="${cta|attr}">${label}</a>')

        assert segments == [
            TextRun('<a class="'),
            VariableRef(name="cta", modifier="attr"),
            TextRun('">'),
            VariableRef(name="label", modifier=""),
            TextRun("</a>"),
        ]

    def test_invalid_names_are_not_placeholders(self):
        assert scan_placeholders("${not valid} ${}") == [TextRun("${not valid} ${}")]
