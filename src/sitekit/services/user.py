"""
Service for building user-facing links.
"""

from typing import Any, Dict, Optional
from urllib.parse import quote

from .base import BaseService

DEFAULT_ROUTES = {
    "profile": "/user/profile/{name}",
    "tag": "/tag/{tag}",
}


class UserService(BaseService):
    """
    Builds profile and tag URLs from the ``[user]`` config section.

    Route templates use ``str.format`` placeholders; every parameter is
    URL-quoted before substitution.
    """

    def __init__(self, options: Optional[Dict[str, Any]] = None) -> None:
        super().__init__()
        if options is None:
            from sitekit.core.config import get_config

            options = get_config().user
        self.routes = dict(DEFAULT_ROUTES)
        if options.get("profile_url"):
            self.routes["profile"] = options["profile_url"]
        if options.get("tag_url"):
            self.routes["tag"] = options["tag_url"]

    def get_url(self, route: str, params: Optional[Dict[str, Any]] = None) -> str:
        """
        Build the URL for a named route.

        Args:
            route: ``profile`` or ``tag``
            params: Template parameters, e.g. ``{"name": "alice"}``

        Raises:
            ValueError: If the route is unknown or a parameter is missing
        """
        template = self.routes.get(route)
        if template is None:
            raise ValueError(f"Unknown route: {route}")
        quoted = {key: quote(str(value), safe="") for key, value in (params or {}).items()}
        try:
            return template.format(**quoted)
        except KeyError as e:
            raise ValueError(f"Missing parameter {e} for route '{route}'") from None
