"""Base class for markup parsers."""

from typing import Any, Dict, Optional


class AbstractParser:
    """
    A parser turns source markup into HTML.

    Subclasses implement ``parse_content``; ``parse`` is the public entry
    point and leaves empty content alone.
    """

    name = ""

    def __init__(self, options: Optional[Dict[str, Any]] = None) -> None:
        self.options: Dict[str, Any] = {}
        self.set_options(options or {})

    def set_options(self, options: Dict[str, Any]) -> "AbstractParser":
        self.options.update(options)
        return self

    def parse(self, value: str) -> str:
        if not value:
            return value
        return self.parse_content(value)

    def parse_content(self, value: str) -> str:
        raise NotImplementedError
