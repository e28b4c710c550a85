"""Adapters for external library integrations.

This package contains adapters that wrap external libraries (like Pillow)
behind sitekit-shaped interfaces. Only the services layer should import
from these adapters.
"""
