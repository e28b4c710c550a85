"""PillowImageDriver - image manipulation backed by Pillow.

Design notes:
- Every operation takes and returns ``ImageData``; resize, crop, rotate
  and paste modify the given container in place, thumbnail returns a new one
- Positive rotation angles turn the image clockwise
- Saving picks the format from the file extension unless ``format`` is given
"""

import io
from pathlib import Path
from typing import Any, BinaryIO, Dict, Optional, Union

from PIL import Image, ImageFont

from sitekit.core.logger import get_logger
from sitekit.models.geometry import Box, Color, Point, color
from sitekit.models.image import (
    FILTER_UNDEFINED,
    THUMBNAIL_INSET,
    THUMBNAIL_MODES,
    THUMBNAIL_OUTBOUND,
    FontData,
    ImageData,
)

logger = get_logger(__name__)

RESAMPLING_FILTERS = {
    FILTER_UNDEFINED: Image.Resampling.BICUBIC,
    "point": Image.Resampling.NEAREST,
    "box": Image.Resampling.BOX,
    "triangle": Image.Resampling.BILINEAR,
    "bilinear": Image.Resampling.BILINEAR,
    "hamming": Image.Resampling.HAMMING,
    "cubic": Image.Resampling.BICUBIC,
    "bicubic": Image.Resampling.BICUBIC,
    "lanczos": Image.Resampling.LANCZOS,
}

# Formats that cannot carry an alpha channel
_OPAQUE_FORMATS = {"JPEG", "BMP"}

# Save option aliases -> Pillow keyword
_SAVE_OPTION_ALIASES = {
    "quality": "quality",
    "jpeg_quality": "quality",
    "png_compression_level": "compress_level",
    "optimize": "optimize",
    "progressive": "progressive",
}

WHITE = color("#ffffff")


class PillowImageDriver:
    """Image driver using Pillow.

    Example:
        >>> driver = PillowImageDriver()
        >>> data = driver.open("photo.jpg")
        >>> driver.resize(data, Box(320, 240))
        >>> driver.save(data, "photo-small.png")
    """

    name = "pillow"

    @classmethod
    def is_available(cls) -> bool:
        return True

    # =========================================================================
    # Construction
    # =========================================================================

    def create(self, size: Box, background: Optional[Color] = None) -> ImageData:
        """Create a new RGBA image filled with ``background`` (opaque white by default)."""
        fill = (background or WHITE).to_rgba()
        return ImageData(image=Image.new("RGBA", size.as_tuple(), fill))

    def open(self, path: Union[str, Path]) -> ImageData:
        """Open an image file and read its pixels."""
        image = Image.open(path)
        image.load()
        return ImageData(
            image=image,
            source_path=str(path),
            format=image.format,
        )

    def load(self, data: bytes) -> ImageData:
        """Load an image from binary data."""
        return self.read(io.BytesIO(data))

    def read(self, stream: BinaryIO) -> ImageData:
        """Load an image from a readable binary stream."""
        image = Image.open(stream)
        image.load()
        return ImageData(image=image, format=image.format)

    def font(self, file: str, size: int, font_color: Optional[Color] = None) -> FontData:
        """Load a TrueType font; ``size`` is in points."""
        return FontData(
            font=ImageFont.truetype(file, size),
            file=file,
            size=size,
            color=font_color,
        )

    # =========================================================================
    # Manipulation
    # =========================================================================

    def resize(self, data: ImageData, size: Box, filter: str = FILTER_UNDEFINED) -> ImageData:
        """Resize to exactly ``size``."""
        data.image = data.image.resize(size.as_tuple(), self._resampling(filter))
        return data

    def crop(self, data: ImageData, start: Point, size: Box) -> ImageData:
        """
        Cut ``size`` out of the image starting at ``start``.

        The crop box is clipped to the image borders.

        Raises:
            ValueError: If the start point is outside the image
        """
        origin = data.size
        if not start.in_box(origin):
            raise ValueError(f"Crop start {start.as_tuple()} is outside the image {origin}")
        width = min(size.width, origin.width - start.x)
        height = min(size.height, origin.height - start.y)
        data.image = data.image.crop((start.x, start.y, start.x + width, start.y + height))
        return data

    def thumbnail(
        self,
        data: ImageData,
        size: Box,
        mode: str = THUMBNAIL_INSET,
        filter: str = FILTER_UNDEFINED,
    ) -> ImageData:
        """
        Create a scaled-down copy, leaving ``data`` untouched.

        ``inset`` fits the image inside ``size``; ``outbound`` fills
        ``size`` and crops the overflow around the center. Images are
        never enlarged.
        """
        if mode not in THUMBNAIL_MODES:
            raise ValueError(f"Unknown thumbnail mode: {mode}")

        thumbnail = data.copy()
        origin = thumbnail.size
        if size.width >= origin.width and size.height >= origin.height:
            return thumbnail

        ratios = (size.width / origin.width, size.height / origin.height)

        if mode == THUMBNAIL_OUTBOUND:
            if not origin.contains(size):
                size = Box(min(origin.width, size.width), min(origin.height, size.height))
                scaled = origin
            else:
                scaled = origin.scale(max(ratios))
                self.resize(thumbnail, scaled, filter)
            start = Point(
                max(0, (scaled.width - size.width) // 2),
                max(0, (scaled.height - size.height) // 2),
            )
            return self.crop(thumbnail, start, size)

        return self.resize(thumbnail, origin.scale(min(ratios)), filter)

    def rotate(
        self,
        data: ImageData,
        angle: float,
        background: Optional[Color] = None,
    ) -> ImageData:
        """Rotate clockwise by ``angle`` degrees, expanding the canvas."""
        fill = (background or WHITE).to_rgba()
        image = data.image
        if image.mode not in ("RGB", "RGBA") or (fill[3] < 255 and image.mode != "RGBA"):
            image = image.convert("RGBA")
        fillcolor = fill if image.mode == "RGBA" else fill[:3]
        data.image = image.rotate(
            -angle,
            resample=Image.Resampling.BICUBIC,
            expand=True,
            fillcolor=fillcolor,
        )
        return data

    def paste(self, data: ImageData, child: ImageData, start: Point) -> ImageData:
        """
        Paste ``child`` into ``data`` at ``start``.

        Raises:
            ValueError: If the child exceeds the parent borders
        """
        if not data.size.contains(child.size, start):
            raise ValueError(
                f"Image {child.size} at {start.as_tuple()} exceeds parent image {data.size}"
            )
        layer = child.image
        if layer.mode == "P" and "transparency" in layer.info:
            layer = layer.convert("RGBA")
        mask = layer if layer.mode in ("RGBA", "LA") else None
        data.image.paste(layer, start.as_tuple(), mask)
        return data

    # =========================================================================
    # Persistence
    # =========================================================================

    def save(
        self,
        data: ImageData,
        path: Union[str, Path],
        options: Optional[Dict[str, Any]] = None,
    ) -> str:
        """
        Save the image to ``path``.

        Args:
            data: Image to save
            path: Destination; its extension selects the format
            options: ``format``, ``quality``/``jpeg_quality``,
                ``png_compression_level``, ``optimize``, ``progressive``

        Returns:
            The destination path
        """
        options = dict(options or {})
        image_format = options.pop("format", None) or self.format_for(path)

        params = {}
        for key, value in options.items():
            target = _SAVE_OPTION_ALIASES.get(key)
            if target:
                params[target] = value
            else:
                logger.debug(f"Ignoring unsupported save option: {key}")

        image = data.image
        if image_format in _OPAQUE_FORMATS and image.mode not in ("RGB", "L"):
            image = image.convert("RGB")
        if image_format not in ("JPEG", "WEBP"):
            params.pop("quality", None)
        if image_format != "JPEG":
            params.pop("progressive", None)

        image.save(path, format=image_format, **params)
        data.format = image_format
        return str(path)

    @staticmethod
    def format_for(path: Union[str, Path]) -> str:
        """
        Find the Pillow format name for a file extension.

        Raises:
            ValueError: If the extension is unknown
        """
        extension = Path(path).suffix.lower()
        image_format = Image.registered_extensions().get(extension)
        if not image_format:
            raise ValueError(f"Unsupported image format: '{extension or path}'")
        return image_format

    @staticmethod
    def _resampling(filter: str) -> Image.Resampling:
        try:
            return RESAMPLING_FILTERS[filter or FILTER_UNDEFINED]
        except KeyError:
            raise ValueError(f"Unknown resampling filter: {filter}") from None
