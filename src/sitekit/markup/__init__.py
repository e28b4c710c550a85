"""Markup parsing: source formats to HTML."""

from .parsers import PARSERS, AbstractParser, MarkdownParser, TextParser

__all__ = ["AbstractParser", "MarkdownParser", "TextParser", "PARSERS"]
