"""Core helpers: configuration, logging and text utilities."""
