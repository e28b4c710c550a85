"""File repository layer for dependency injection."""

from sitekit.repository.local import LocalFileRepository
from sitekit.repository.protocol import FileRepositoryProtocol

__all__ = [
    "FileRepositoryProtocol",
    "LocalFileRepository",
]
