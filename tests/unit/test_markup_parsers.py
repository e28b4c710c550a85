"""Tests for markup parsers and HTML helpers."""

import pytest

from sitekit.core.html import escape, nl2br
from sitekit.markup.parsers import PARSERS, MarkdownParser, TextParser
from sitekit.markup.parsers import markdown as markdown_module


class TestHtmlHelpers:
    """Tests for escape and nl2br."""

    def test_nl2br_keeps_line_breaks(self):
        assert nl2br("a\nb") == "a<br />\nb"

    @pytest.mark.parametrize("newline", ["\r\n", "\n\r", "\r"])
    def test_nl2br_pairs_count_once(self, newline):
        assert nl2br(f"a{newline}b") == f"a<br />{newline}b"

    def test_escape_quotes(self):
        assert escape('<a href="x">\'</a>') == "&lt;a href=&quot;x&quot;&gt;&#x27;&lt;/a&gt;"


class TestMarkdownParser:
    """Tests for the Markdown parser."""

    def test_renders_markdown(self):
        html = MarkdownParser().parse("Hello **world**")

        assert html == "<p>Hello <strong>world</strong></p>"

    def test_extra_extension_tables(self):
        source = "| a | b |\n|---|---|\n| 1 | 2 |"

        assert "<table>" in MarkdownParser().parse(source)

    def test_extensions_option(self):
        source = "| a | b |\n|---|---|\n| 1 | 2 |"

        assert "<table>" not in MarkdownParser({"extensions": []}).parse(source)

    def test_empty_content(self):
        assert MarkdownParser().parse("") == ""

    def test_fallback_without_markdown(self, monkeypatch):
        monkeypatch.setattr(markdown_module, "markdown", None)

        assert MarkdownParser().parse("line one\nline **two**") == "line one<br />\nline **two**"


class TestTextParser:
    """Tests for the plain text parser."""

    def test_escapes_and_keeps_breaks(self):
        assert TextParser().parse("<b>hi</b>\nthere") == "&lt;b&gt;hi&lt;/b&gt;<br />\nthere"

    def test_registry(self):
        assert PARSERS["markdown"] is MarkdownParser
        assert PARSERS["text"] is TextParser
