"""
CLI Service Helpers
===================

CLI-specific utilities for working with services and the ServiceFactory.

- A module-level ServiceFactory shared by all commands, created on first use
- Consistent error reporting for failed service results

Usage:
    from sitekit.cli.service_helpers import services, handle_result

    data = handle_result(services.image.info("photo.jpg"))
"""

from typing import TYPE_CHECKING, Any, Optional, TypeVar

import click

if TYPE_CHECKING:
    from sitekit.services import ServiceFactory
    from sitekit.services.base import ServiceResult
    from sitekit.services.config import ConfigService
    from sitekit.services.file import FileService
    from sitekit.services.image import ImageService
    from sitekit.services.markup import MarkupService
    from sitekit.services.user import UserService

T = TypeVar("T")


# ============================================================================
# Singleton Factory Instance
# ============================================================================

_factory: "Optional[ServiceFactory]" = None


def get_factory() -> "ServiceFactory":
    """
    Get the singleton ServiceFactory instance for CLI.

    Lazily initialized on first access; use set_factory() to inject a
    custom instance.
    """
    global _factory
    if _factory is None:
        from sitekit.services import ServiceFactory

        _factory = ServiceFactory()
    return _factory


def set_factory(factory: "ServiceFactory") -> None:
    """
    Set a custom ServiceFactory instance.

    Example:
        # In tests
        from tests.mocks import MockFileRepository
        set_factory(ServiceFactory(file_repository=MockFileRepository()))
    """
    global _factory
    _factory = factory


class _ServiceAccessor:
    """Property-based access to the services of the singleton factory."""

    @property
    def config(self) -> "ConfigService":
        """Get ConfigService instance."""
        return get_factory().config_service

    @property
    def file(self) -> "FileService":
        """Get FileService instance."""
        return get_factory().file

    @property
    def image(self) -> "ImageService":
        """Get ImageService instance."""
        return get_factory().image

    @property
    def markup(self) -> "MarkupService":
        """Get MarkupService instance."""
        return get_factory().markup

    @property
    def user(self) -> "UserService":
        """Get UserService instance."""
        return get_factory().user


services = _ServiceAccessor()


# ============================================================================
# Result Handling Utilities
# ============================================================================


def handle_result(result: "ServiceResult[T]") -> T:
    """
    Handle a service result, exiting with error if failed.

    Returns:
        The result data if successful

    Raises:
        SystemExit: If result indicates failure (exits with code 1)
    """
    if not result.success:
        exit_with_error(result.error or "Unknown error")
    return result.data


def exit_with_error(message: str, code: int = 1) -> None:
    """
    Print error message and exit.

    Raises:
        SystemExit: Always exits with specified code
    """
    click.echo(f"Error: {message}", err=True)
    raise SystemExit(code)


def check_result(result: "ServiceResult[Any]", error_message: Optional[str] = None) -> bool:
    """Exit with an error unless the result is successful."""
    if not result.success:
        exit_with_error(error_message or result.error or "Unknown error")
    return True


def reset_factory() -> None:
    """Reset the singleton factory instance (for tests)."""
    global _factory
    _factory = None


__all__ = [
    "services",
    "get_factory",
    "set_factory",
    "handle_result",
    "exit_with_error",
    "check_result",
    "reset_factory",
]
