"""Base class for text filters."""

import re
from typing import Any, Callable, Dict, Optional

_HTML_TAG = re.compile(r"(<[^<>]+>)")
_LINK_OPEN = re.compile(r"<a[\s>]", re.IGNORECASE)
_LINK_CLOSE = re.compile(r"</a\s*>", re.IGNORECASE)


class AbstractFilter:
    """
    A filter transforms a piece of text.

    Options are merged over the class-level ``defaults``; filters are
    callable, so ``filter(value)`` and ``filter.filter(value)`` are the same.
    """

    defaults: Dict[str, Any] = {}

    def __init__(self, options: Optional[Dict[str, Any]] = None) -> None:
        self.options: Dict[str, Any] = dict(self.defaults)
        self.set_options(options or {})

    def set_options(self, options: Dict[str, Any]) -> "AbstractFilter":
        self.options.update(options)
        return self

    def filter(self, value: str) -> str:
        raise NotImplementedError

    def __call__(self, value: str) -> str:
        return self.filter(value)


class PatternLinkFilter(AbstractFilter):
    """
    Replace every match of ``pattern`` using a callback or a template.

    Only text content is filtered: HTML tags, their attributes and the text
    of existing ``<a>`` links are left as they are.

    Options:
        tag: Placeholder in ``replacement`` for the captured term
        pattern: Regular expression; group 1 is the term
        replacement: Template such as ``<a href="/x/%term%">%term%</a>``
        callback: Callable receiving the term and returning its replacement
    """

    def __init__(self, options: Optional[Dict[str, Any]] = None, user_service=None) -> None:
        self._user_service = user_service
        super().__init__(options)
        if not self.options.get("replacement") and not self.options.get("callback"):
            self.options["callback"] = self.default_callback

    @property
    def user_service(self):
        if self._user_service is None:
            from sitekit.services.user import UserService

            self._user_service = UserService()
        return self._user_service

    def default_callback(self, term: str) -> str:
        raise NotImplementedError

    def _replace(self, match: re.Match) -> str:
        callback: Optional[Callable[[str], str]] = self.options.get("callback")
        if callback:
            return callback(match.group(1))
        return self.options["replacement"].replace(self.options["tag"], match.group(1))

    def filter(self, value: str) -> str:
        if not value:
            return value
        pattern = re.compile(self.options["pattern"])

        # Odd items are HTML tags
        parts = _HTML_TAG.split(value)
        link_depth = 0
        for i, part in enumerate(parts):
            if i % 2:
                if _LINK_OPEN.match(part):
                    link_depth += 1
                elif _LINK_CLOSE.match(part):
                    link_depth = max(0, link_depth - 1)
            elif part and not link_depth:
                parts[i] = pattern.sub(self._replace, part)
        return "".join(parts)
