"""Shared fixtures for service tests."""

import pytest

from sitekit.core.config import DEFAULT_CONFIG
from sitekit.repository import LocalFileRepository
from sitekit.services.image import ImageService
from tests.mocks.mock_repository import MockFileRepository


@pytest.fixture
def mock_repository() -> MockFileRepository:
    """Create a mock file repository for testing."""
    return MockFileRepository()


@pytest.fixture
def image_options() -> dict:
    """Default ``[image]`` options."""
    return dict(DEFAULT_CONFIG["image"])


@pytest.fixture
def image_service(image_options) -> ImageService:
    """ImageService on the local filesystem with default options."""
    return ImageService(LocalFileRepository(), options=image_options)
