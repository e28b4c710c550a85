"""Small HTML text helpers shared by parsers and filters."""

import html
import re

_LINE_BREAK = re.compile(r"(\r\n|\n\r|\n|\r)")


def escape(value: str) -> str:
    """Escape HTML special characters, quotes included."""
    return html.escape(value, quote=True)


def nl2br(value: str) -> str:
    """
    Insert ``<br />`` before every line break.

    The line breaks themselves are kept, so ``"a\\nb"`` becomes
    ``"a<br />\\nb"``. ``\\r\\n`` and ``\\n\\r`` count as a single break.
    """
    return _LINE_BREAK.sub(r"<br />\1", value)
