"""Hash tag filter."""

from sitekit.core.html import escape

from .base import PatternLinkFilter


class TagFilter(PatternLinkFilter):
    """
    Turn ``#term`` tags into tag links.

    A tag must not follow a word character or ``&``, so URL fragments and
    ``&#39;`` style references are left alone.
    """

    defaults = {
        "tag": "%tag%",
        "pattern": r"(?<![&\w])#(\w{2,32})",
        "replacement": "",
        "callback": None,
    }

    def default_callback(self, term: str) -> str:
        url = self.user_service.get_url("tag", {"tag": term})
        escaped = escape(term)
        return f'<a href="{escape(url)}" title="{escaped}">#{escaped}</a>'
