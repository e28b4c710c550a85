"""Command line interface for sitekit."""

from .cli import cli

__all__ = ["cli"]
