"""User mention filter."""

from sitekit.core.html import escape

from .base import PatternLinkFilter


class UserFilter(PatternLinkFilter):
    """
    Turn ``@name`` mentions into profile links.

    ``@alice`` becomes ``<a href="/user/profile/alice" title="alice">@alice</a>``
    unless a ``replacement`` template or a ``callback`` is given.
    """

    defaults = {
        "tag": "%user%",
        "pattern": r"@([a-zA-Z0-9]{3,32})",
        "replacement": "",
        "callback": None,
    }

    def default_callback(self, name: str) -> str:
        url = self.user_service.get_url("profile", {"name": name})
        escaped = escape(name)
        return f'<a href="{escape(url)}" title="{escaped}">@{escaped}</a>'
