"""Value objects and data containers."""

from sitekit.models.base import ToDictMixin
from sitekit.models.geometry import (
    Box,
    Color,
    ExactSize,
    FitSize,
    Point,
    ScaleSize,
    SizeSpec,
)

__all__ = [
    "ToDictMixin",
    "Box",
    "Point",
    "Color",
    "ExactSize",
    "FitSize",
    "ScaleSize",
    "SizeSpec",
]
