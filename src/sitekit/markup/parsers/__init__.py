"""Markup parsers, keyed by name."""

from .base import AbstractParser
from .markdown import MarkdownParser
from .text import TextParser

PARSERS = {
    MarkdownParser.name: MarkdownParser,
    TextParser.name: TextParser,
}

__all__ = ["AbstractParser", "MarkdownParser", "TextParser", "PARSERS"]
