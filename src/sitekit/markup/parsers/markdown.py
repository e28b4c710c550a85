"""Markdown parser."""

from sitekit.core.html import nl2br

from .base import AbstractParser

try:
    import markdown
except ImportError:
    markdown = None

DEFAULT_EXTENSIONS = ["extra", "sane_lists"]


class MarkdownParser(AbstractParser):
    """
    Render Markdown with the ``markdown`` package.

    Without the package installed, line breaks are turned into ``<br />``
    and the text is otherwise returned as is.

    Options:
        extensions: Markdown extension names (default: extra, sane_lists)
    """

    name = "markdown"

    def parse_content(self, value: str) -> str:
        if markdown is None:
            return nl2br(value)
        extensions = self.options.get("extensions", DEFAULT_EXTENSIONS)
        return markdown.markdown(value, extensions=list(extensions))
