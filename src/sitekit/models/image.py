"""Image data containers passed between the image service and its driver."""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from PIL import Image

from sitekit.models.base import ToDictMixin
from sitekit.models.geometry import Box, Color

# Thumbnail modes
THUMBNAIL_INSET = "inset"
THUMBNAIL_OUTBOUND = "outbound"
THUMBNAIL_MODES = (THUMBNAIL_INSET, THUMBNAIL_OUTBOUND)

# Resampling filter names
FILTER_UNDEFINED = "undefined"


@dataclass
class ImageData(ToDictMixin):
    """
    Container for an in-memory image.

    This is the object every image service operation accepts in place of a
    file path, and the one returned when an operation has no destination.
    """

    image: Image.Image = field(repr=False)
    source_path: Optional[str] = None
    format: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def size(self) -> Box:
        """Current size as a Box."""
        return Box(*self.image.size)

    @property
    def width(self) -> int:
        return self.image.width

    @property
    def height(self) -> int:
        return self.image.height

    @property
    def mode(self) -> str:
        return self.image.mode

    def copy(self) -> "ImageData":
        """Create an independent copy of the image data."""
        return ImageData(
            image=self.image.copy(),
            source_path=self.source_path,
            format=self.format,
            metadata=self.metadata.copy(),
        )

    def _to_dict_extra(self) -> Optional[Dict[str, Any]]:
        return {"width": self.width, "height": self.height, "mode": self.mode}


@dataclass
class FontData(ToDictMixin):
    """A loaded TrueType font with its size in points and its color."""

    font: Any = field(repr=False)
    file: str
    size: int
    color: Optional[Color] = None
