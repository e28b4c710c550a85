"""
Geometry value objects for the image service.

Callers describe sizes, positions and colors in several loose shapes
(integers, sequences, ratios, hex strings). The helpers here turn those
shapes into one canonical type each, so the image driver only ever sees
``Box``, ``Point`` and ``Color``.

Size shapes accepted by ``parse_size``::

    500                 # square, 500x500
    (800, 600)          # exact width and height
    (800, 0)            # width, height follows the aspect ratio
    (0, 600)            # height, width follows the aspect ratio
    (800, 600, True)    # fit within 800x600 keeping the aspect ratio
    0.5                 # ratio of the original size
    Box(800, 600)       # already canonical
"""

import math
import re
from dataclasses import dataclass
from typing import Any, Optional, Sequence, Tuple, Union

from sitekit.models.base import ToDictMixin


def _round(value: float) -> int:
    """Round half away from zero; dimensions are never negative."""
    return int(math.floor(value + 0.5))


@dataclass(frozen=True)
class Box(ToDictMixin):
    """Width/height pair, both strictly positive."""

    width: int
    height: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "width", int(self.width))
        object.__setattr__(self, "height", int(self.height))
        if self.width < 1 or self.height < 1:
            raise ValueError(
                f"Box dimensions must be positive, got {self.width}x{self.height}"
            )

    def scale(self, ratio: float) -> "Box":
        """Scale both sides by ``ratio``."""
        return Box(_round(self.width * ratio), _round(self.height * ratio))

    def widen(self, width: int) -> "Box":
        """Scale to ``width``, keeping the aspect ratio."""
        return self.scale(width / self.width)

    def heighten(self, height: int) -> "Box":
        """Scale to ``height``, keeping the aspect ratio."""
        return self.scale(height / self.height)

    def contains(self, box: "Box", start: Optional["Point"] = None) -> bool:
        """Whether ``box`` placed at ``start`` lies entirely inside this box."""
        start = start or Point(0, 0)
        return (
            start.x + box.width <= self.width
            and start.y + box.height <= self.height
        )

    def as_tuple(self) -> Tuple[int, int]:
        return (self.width, self.height)

    def __str__(self) -> str:
        return f"{self.width}x{self.height}"


@dataclass(frozen=True)
class Point(ToDictMixin):
    """Non-negative (x, y) coordinate, origin at the top-left corner."""

    x: int
    y: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "x", int(self.x))
        object.__setattr__(self, "y", int(self.y))
        if self.x < 0 or self.y < 0:
            raise ValueError(f"Point coordinates must be non-negative, got ({self.x}, {self.y})")

    def in_box(self, box: Box) -> bool:
        """Whether the point lies inside ``box``."""
        return self.x < box.width and self.y < box.height

    def move(self, dx: int, dy: Optional[int] = None) -> "Point":
        """Return a point shifted by ``dx`` and ``dy`` (``dy`` defaults to ``dx``)."""
        return Point(self.x + dx, self.y + (dx if dy is None else dy))

    def as_tuple(self) -> Tuple[int, int]:
        return (self.x, self.y)


# Number of channel values -> palette name
PALETTE_GRAYSCALE = "grayscale"
PALETTE_RGB = "rgb"
PALETTE_CMYK = "cmyk"

_PALETTE_BY_COUNT = {1: PALETTE_GRAYSCALE, 3: PALETTE_RGB, 4: PALETTE_CMYK}
_CHANNEL_MAX = {PALETTE_GRAYSCALE: 255, PALETTE_RGB: 255, PALETTE_CMYK: 100}
_HEX_COLOR = re.compile(r"^#([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


@dataclass(frozen=True)
class Color(ToDictMixin):
    """
    A color in one of three palettes.

    Attributes:
        palette: ``grayscale`` (one value 0-255), ``rgb`` (three values
            0-255) or ``cmyk`` (four values 0-100, percentages)
        values: Channel values for the palette
        alpha: Opacity in percent, 0 is fully transparent
    """

    palette: str
    values: Tuple[int, ...]
    alpha: int = 100

    def __post_init__(self) -> None:
        if self.palette not in _CHANNEL_MAX:
            raise ValueError(f"Unknown palette: {self.palette}")
        values = tuple(int(v) for v in self.values)
        expected = {v: k for k, v in _PALETTE_BY_COUNT.items()}[self.palette]
        if len(values) != expected:
            raise ValueError(
                f"{self.palette} colors take {expected} values, got {len(values)}"
            )
        limit = _CHANNEL_MAX[self.palette]
        if any(v < 0 or v > limit for v in values):
            raise ValueError(f"{self.palette} values must be within 0-{limit}: {values}")
        alpha = int(self.alpha)
        if alpha < 0 or alpha > 100:
            raise ValueError(f"Alpha must be within 0-100, got {alpha}")
        object.__setattr__(self, "values", values)
        object.__setattr__(self, "alpha", alpha)

    def to_rgba(self) -> Tuple[int, int, int, int]:
        """Convert to an 8-bit RGBA tuple."""
        if self.palette == PALETTE_GRAYSCALE:
            r = g = b = self.values[0]
        elif self.palette == PALETTE_RGB:
            r, g, b = self.values
        else:
            c, m, y, k = (v / 100 for v in self.values)
            r = _round(255 * (1 - c) * (1 - k))
            g = _round(255 * (1 - m) * (1 - k))
            b = _round(255 * (1 - y) * (1 - k))
        return (r, g, b, _round(255 * self.alpha / 100))

    def __str__(self) -> str:
        r, g, b, _ = self.to_rgba()
        return f"#{r:02x}{g:02x}{b:02x}"


def _parse_hex(value: str) -> Tuple[int, int, int]:
    digits = _HEX_COLOR.match(value.strip()).group(1)
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    return (int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))


def box(width: Union[Box, Sequence[int], int], height: int = 0) -> Box:
    """
    Canonize a Box.

    Args:
        width: A Box, a (width, height) sequence, or the width
        height: Height, used only when ``width`` is a number

    Returns:
        Box
    """
    if isinstance(width, Box):
        return width
    if isinstance(width, (list, tuple)):
        return Box(width[0], width[1])
    return Box(width, height)


def point(x: Union[Point, Sequence[int], int], y: int = 0) -> Point:
    """Canonize a Point from a Point, an (x, y) sequence, or x and y."""
    if isinstance(x, Point):
        return x
    if isinstance(x, (list, tuple)):
        return Point(x[0], x[1])
    return Point(x, y)


def color(value: Any, alpha: Optional[int] = None) -> Optional[Color]:
    """
    Canonize a Color.

    A scalar is treated as a one-value list. The number of values picks the
    palette: 1 for grayscale, 3 for RGB, 4 for CMYK. A hex string such as
    ``"#ff8800"`` or ``"#fff"`` is an RGB color; a string without ``#``
    is a single value.

    Returns:
        Color, or None when the number of values matches no palette
    """
    if isinstance(value, Color):
        return value
    alpha = 100 if alpha is None else alpha
    if isinstance(value, str) and _HEX_COLOR.match(value.strip()):
        return Color(PALETTE_RGB, _parse_hex(value), alpha)
    if not isinstance(value, (list, tuple)):
        value = [value]
    palette = _PALETTE_BY_COUNT.get(len(value))
    if palette is None:
        return None
    return Color(palette, tuple(value), alpha)


# ---------------------------------------------------------------------------
# Size variants
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ExactSize(ToDictMixin):
    """Exact width and height; a zero side follows the aspect ratio."""

    width: int
    height: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "width", int(self.width))
        object.__setattr__(self, "height", int(self.height))
        if self.width < 0 or self.height < 0:
            raise ValueError(f"Size must not be negative: {self.width}x{self.height}")
        if not self.width and not self.height:
            raise ValueError("Size needs a width or a height")


@dataclass(frozen=True)
class FitSize(ToDictMixin):
    """Largest size within width x height that keeps the aspect ratio."""

    width: int
    height: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "width", int(self.width))
        object.__setattr__(self, "height", int(self.height))
        if self.width < 1 or self.height < 1:
            raise ValueError(f"Fit size must be positive: {self.width}x{self.height}")


@dataclass(frozen=True)
class ScaleSize(ToDictMixin):
    """Ratio of the original size."""

    ratio: float

    def __post_init__(self) -> None:
        if self.ratio <= 0:
            raise ValueError(f"Scale ratio must be positive, got {self.ratio}")


SizeSpec = Union[Box, ExactSize, FitSize, ScaleSize]


def parse_size(value: Any) -> SizeSpec:
    """
    Turn any accepted size shape into a size variant.

    Raises:
        ValueError: If the shape is not supported
    """
    if isinstance(value, (Box, ExactSize, FitSize, ScaleSize)):
        return value
    if isinstance(value, bool):
        raise ValueError(f"Unsupported size: {value!r}")
    if isinstance(value, int):
        return ExactSize(value, value)
    if isinstance(value, float):
        return ScaleSize(value)
    if isinstance(value, (list, tuple)):
        if len(value) not in (2, 3):
            raise ValueError(f"Size sequence takes 2 or 3 items, got {len(value)}")
        width, height = int(value[0] or 0), int(value[1] or 0)
        if len(value) == 3 and value[2] is not None and width and height:
            return FitSize(width, height)
        return ExactSize(width, height)
    raise ValueError(f"Unsupported size: {value!r}")


def parse_size_text(text: str) -> SizeSpec:
    """
    Parse a command-line size.

    ``"500"`` (square), ``"0.5"`` (ratio), ``"800x600"``, ``"800x0"``,
    ``"0x600"``, and ``"800x600!"`` (fit keeping the aspect ratio).
    """
    text = text.strip().lower()
    keep_ratio = text.endswith("!")
    text = text.rstrip("!")
    try:
        if "x" in text:
            width, height = text.split("x", 1)
            size = (int(width or 0), int(height or 0))
            return parse_size(size + (True,) if keep_ratio else size)
        if "." in text:
            return parse_size(float(text))
        return parse_size(int(text))
    except ValueError as e:
        raise ValueError(f"Invalid size '{text}': {e}") from e


def resolve_size(size: Any, origin: Box) -> Box:
    """
    Compute the target box for resize and thumbnail operations.

    Args:
        size: Any shape accepted by ``parse_size``
        origin: Size of the source image

    Returns:
        Target Box
    """
    requested = parse_size(size)
    if isinstance(requested, Box):
        return requested
    if isinstance(requested, ScaleSize):
        return origin.scale(requested.ratio)
    if isinstance(requested, FitSize):
        ratio = (requested.width * origin.height) / (requested.height * origin.width)
        if ratio >= 1:
            return origin.heighten(requested.height)
        return origin.widen(requested.width)
    if not requested.width:
        return origin.heighten(requested.height)
    if not requested.height:
        return origin.widen(requested.width)
    return Box(requested.width, requested.height)


def resolve_crop_size(size: Any, origin: Box) -> Box:
    """
    Compute the crop box.

    Aspect ratio does not apply to cropping: a missing side takes the
    original side, and a fit request is treated as an exact one.
    """
    requested = parse_size(size)
    if isinstance(requested, Box):
        return requested
    if isinstance(requested, ScaleSize):
        return origin.scale(requested.ratio)
    return Box(requested.width or origin.width, requested.height or origin.height)


# Named watermark anchors
POSITIONS = ("top-left", "top-right", "bottom-left", "bottom-right")


def resolve_position(position: Any, canvas: Box, item: Box) -> Point:
    """
    Resolve where ``item`` goes on ``canvas``.

    Args:
        position: A Point, an (x, y) sequence, or a named anchor; unknown
            names and empty values fall back to ``bottom-right``
        canvas: Size of the target image
        item: Size of the pasted image

    Raises:
        ValueError: If the item is larger than the canvas for an anchor
    """
    if isinstance(position, (Point, list, tuple)):
        return point(position)
    if position == "top-left":
        return Point(0, 0)
    if position == "top-right":
        return Point(canvas.width - item.width, 0)
    if position == "bottom-left":
        return Point(0, canvas.height - item.height)
    return Point(canvas.width - item.width, canvas.height - item.height)
