# services/__init__.py
"""
Services Package
================

Application services that orchestrate between views (CLI, web) and the
core helpers.

Architecture:
    View (CLI/web)
        ↓ (paths, options)
    Service (ServiceResult)
        ↓ (delegates to)
    Adapters, parsers, filters

Usage:
    from sitekit.services import ServiceFactory

    factory = ServiceFactory()
    result = factory.image.thumbnail("photo.jpg", 200, "thumbs/photo.jpg")
    html = factory.markup.render("Hi @alice", parser="markdown").data
"""

from .base import BaseService, ServiceResult
from .config import ConfigService
from .factory import ServiceFactory
from .file import FileService
from .image import DRIVERS, ImageService
from .markup import RENDERERS, MarkupService
from .user import UserService

__all__ = [
    "BaseService",
    "ConfigService",
    "DRIVERS",
    "FileService",
    "ImageService",
    "MarkupService",
    "RENDERERS",
    "ServiceFactory",
    "ServiceResult",
    "UserService",
]
