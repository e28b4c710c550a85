"""CLI command modules for sitekit."""

from .config import config
from .form import form
from .image import image
from .markup import markup

__all__ = [
    "config",
    "form",
    "image",
    "markup",
]
