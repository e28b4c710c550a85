"""
Service for rendering user content to HTML.
"""

from typing import Any, Dict, List, Optional, Sequence

from sitekit.core.logger import get_logger
from sitekit.filters import FILTERS, AbstractFilter
from sitekit.markup.parsers import PARSERS, AbstractParser, TextParser

from .base import BaseService, ServiceResult
from .user import UserService

logger = get_logger(__name__)

RENDERERS = ("html", "text")


class MarkupService(BaseService):
    """
    Render content through an optional parser, a renderer and filters.

    - ``html`` renderer: content is HTML, or becomes HTML through ``parser``
    - ``text`` renderer: content is plain text, escaped with line breaks kept

    Filters (``user`` mentions, ``tag`` links) run last, on the HTML.

    Example:
        markup = MarkupService()
        result = markup.render("Hello **@alice**", parser="markdown")
        html = result.data
    """

    def __init__(
        self,
        options: Optional[Dict[str, Any]] = None,
        user_service: Optional[UserService] = None,
    ) -> None:
        """
        Args:
            options: Markup options; defaults to the ``[markup]`` config section
            user_service: Link builder shared by the default filters
        """
        super().__init__()
        if options is None:
            from sitekit.core.config import get_config

            options = get_config().markup
        self.options = dict(options)
        self._user_service = user_service

    @property
    def user_service(self) -> UserService:
        if self._user_service is None:
            self._user_service = UserService()
        return self._user_service

    def get_parser(self, name: str) -> AbstractParser:
        """
        Create a parser by name.

        Raises:
            ValueError: If the parser is unknown
        """
        parser_class = PARSERS.get(name)
        if parser_class is None:
            raise ValueError(f"Unknown parser: {name}")
        options = {}
        if name == "markdown" and self.options.get("extensions") is not None:
            options["extensions"] = self.options["extensions"]
        return parser_class(options)

    def get_filters(self, names: Optional[Sequence[str]] = None) -> List[AbstractFilter]:
        """
        Create filters by name, defaulting to the ``filters`` option.

        Raises:
            ValueError: If a filter is unknown
        """
        if names is None:
            names = self.options.get("filters", [])
        filters = []
        for name in names:
            filter_class = FILTERS.get(name)
            if filter_class is None:
                raise ValueError(f"Unknown filter: {name}")
            filters.append(filter_class(user_service=self.user_service))
        return filters

    def parse(self, content: str, parser: str = "") -> ServiceResult[str]:
        """Parse content into HTML with the named or configured parser."""
        try:
            name = parser or self.options.get("parser", "markdown")
            return ServiceResult.ok(data=self.get_parser(name).parse(content), parser=name)
        except Exception as e:
            logger.warning(f"Failed to parse content: {e}")
            return ServiceResult.fail(f"Failed to parse content: {e}")

    def render(
        self,
        content: str,
        renderer: str = "html",
        parser: Optional[str] = None,
        filters: Optional[Sequence[str]] = None,
    ) -> ServiceResult[str]:
        """
        Render content.

        Args:
            content: Source content
            renderer: ``html`` or ``text``
            parser: Parser name for the ``html`` renderer (None: content is HTML)
            filters: Filter names; None uses the configured filters, [] none

        Returns:
            ServiceResult containing the rendered HTML
        """
        if renderer not in RENDERERS:
            return ServiceResult.fail(f"Unknown renderer: {renderer}")
        if renderer == "text" and parser:
            return ServiceResult.fail("The text renderer does not take a parser")

        try:
            if renderer == "text":
                output = TextParser().parse(content)
            elif parser:
                output = self.get_parser(parser).parse(content)
            else:
                output = content

            for content_filter in self.get_filters(filters):
                output = content_filter(output)

            return ServiceResult.ok(data=output, renderer=renderer, parser=parser)
        except Exception as e:
            logger.warning(f"Failed to render content: {e}")
            return ServiceResult.fail(f"Failed to render content: {e}")
