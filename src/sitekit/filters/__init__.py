"""Text filters applied to rendered content."""

from .base import AbstractFilter, PatternLinkFilter
from .tag import TagFilter
from .user import UserFilter

FILTERS = {
    "user": UserFilter,
    "tag": TagFilter,
}

__all__ = ["AbstractFilter", "PatternLinkFilter", "UserFilter", "TagFilter", "FILTERS"]
