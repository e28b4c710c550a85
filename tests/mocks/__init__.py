"""Test doubles."""

from .mock_repository import MockFileRepository

__all__ = ["MockFileRepository"]
