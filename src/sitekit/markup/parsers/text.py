"""Plain text parser."""

from sitekit.core.html import escape, nl2br

from .base import AbstractParser


class TextParser(AbstractParser):
    """Escape HTML and keep line breaks."""

    name = "text"

    def parse_content(self, value: str) -> str:
        return nl2br(escape(value))
