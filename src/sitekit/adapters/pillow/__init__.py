"""Pillow adapter for image manipulation.

Only the services layer should import from this module.
"""

from sitekit.adapters.pillow.image import RESAMPLING_FILTERS, PillowImageDriver

__all__ = [
    "PillowImageDriver",
    "RESAMPLING_FILTERS",
]
