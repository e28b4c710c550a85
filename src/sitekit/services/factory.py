"""
Service Factory
===============

Reusable factory for instantiating services with their dependencies.

The factory provides sensible defaults (LocalFileRepository, the global
configuration) and applications override them by injection.

Usage:
    from sitekit.services.factory import ServiceFactory

    factory = ServiceFactory()
    images = factory.create_image_service()
    markup = factory.markup

    # Custom storage and configuration
    factory = ServiceFactory(file_repository=MyRepository(), config=my_config)
"""

from typing import Optional

from sitekit.core.config import Config
from sitekit.repository import LocalFileRepository
from sitekit.repository.protocol import FileRepositoryProtocol

from .config import ConfigService
from .file import FileService
from .image import ImageService
from .markup import MarkupService
from .user import UserService


class ServiceFactory:
    """
    Factory for creating service instances with dependency injection.

    Attributes:
        file_repository: File repository implementation for file-based services
        config: Configuration the services read their options from
    """

    def __init__(
        self,
        file_repository: Optional[FileRepositoryProtocol] = None,
        config: Optional[Config] = None,
    ):
        """
        Initialize the service factory.

        Args:
            file_repository: Optional custom file repository. If None, uses LocalFileRepository.
            config: Optional configuration. If None, the global configuration is used.
        """
        self.file_repository = file_repository or LocalFileRepository()
        self._config = config

    @property
    def config(self) -> Config:
        if self._config is None:
            from sitekit.core.config import get_config

            return get_config()
        return self._config

    # ========================================================================
    # File-Based Services
    # ========================================================================

    def create_file_service(self) -> FileService:
        """Create FileService with file repository."""
        return FileService(file_repository=self.file_repository)

    def create_image_service(self) -> ImageService:
        """Create ImageService with file repository and ``[image]`` options."""
        return ImageService(
            file_repository=self.file_repository,
            options=self.config.image,
            file_service=self.create_file_service(),
        )

    # ========================================================================
    # Non-File-Based Services
    # ========================================================================

    def create_user_service(self) -> UserService:
        """Create UserService with ``[user]`` options."""
        return UserService(options=self.config.user)

    def create_markup_service(self) -> MarkupService:
        """Create MarkupService with ``[markup]`` options."""
        return MarkupService(options=self.config.markup, user_service=self.create_user_service())

    def create_config_service(self) -> ConfigService:
        """Create ConfigService."""
        return ConfigService()

    # ========================================================================
    # Convenience Properties
    # ========================================================================

    @property
    def file(self) -> FileService:
        """Convenience property for create_file_service()."""
        return self.create_file_service()

    @property
    def image(self) -> ImageService:
        """Convenience property for create_image_service()."""
        return self.create_image_service()

    @property
    def user(self) -> UserService:
        """Convenience property for create_user_service()."""
        return self.create_user_service()

    @property
    def markup(self) -> MarkupService:
        """Convenience property for create_markup_service()."""
        return self.create_markup_service()

    @property
    def config_service(self) -> ConfigService:
        """Convenience property for create_config_service()."""
        return self.create_config_service()
