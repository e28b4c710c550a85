# tests/conftest.py
"""
Global pytest fixtures for sitekit tests.
"""

import pytest
from PIL import Image

from sitekit.core.config import get_default_config, reset_config, set_config


@pytest.fixture(autouse=True)
def default_config():
    """Run every test against the built-in defaults, not the user's config files."""
    config = get_default_config()
    set_config(config)
    yield config
    reset_config()


@pytest.fixture(autouse=True)
def reset_cli_factory():
    """Drop the CLI service factory between tests."""
    from sitekit.cli.service_helpers import reset_factory

    reset_factory()
    yield
    reset_factory()


@pytest.fixture
def tmp_image_file(tmp_path):
    """Create a 200x100 red PNG file."""
    path = tmp_path / "photo.png"
    Image.new("RGB", (200, 100), (255, 0, 0)).save(path)
    return str(path)


@pytest.fixture
def tmp_jpeg_file(tmp_path):
    """Create a 120x80 blue JPEG file."""
    path = tmp_path / "photo.jpg"
    Image.new("RGB", (120, 80), (0, 0, 255)).save(path, quality=95)
    return str(path)


@pytest.fixture
def tmp_watermark_file(tmp_path):
    """Create a 20x10 semi-transparent green watermark."""
    path = tmp_path / "mark.png"
    Image.new("RGBA", (20, 10), (0, 255, 0, 255)).save(path)
    return str(path)
