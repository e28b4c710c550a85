"""
Image Service
=============

Convenience facade over an image driver (Pillow by default).

Size arguments, applicable to ``resize``, ``thumbnail`` and ``crop``;
``thumbnail`` always keeps the aspect ratio and ``crop`` never applies it:

    (width, height)        # exact width and height
    (width, 0)             # width only
    (0, height)            # height only
    500                    # square, in pixels
    (width, height, True)  # fit within width x height keeping the aspect ratio
    0.5                    # ratio of the original size
    Box(width, height)

Every source argument is either a file path or an ``ImageData``. When no
destination is given, a path source is overwritten in place, while an
``ImageData`` source is returned in the result instead of being saved.

Usage:
    from sitekit.repository import LocalFileRepository
    from sitekit.services.image import ImageService

    images = ImageService(LocalFileRepository())

    # Resize into a new file, keeping the aspect ratio
    images.resize("upload/photo.jpg", (800, 600, True), "cache/photo-800.jpg")

    # Watermark in place with the configured watermark, bottom-right
    images.watermark("upload/photo.jpg")

    # Crop a 200x200 square at (10, 20)
    images.crop("upload/photo.jpg", (10, 20), 200, "cache/photo-crop.jpg")
"""

from pathlib import Path
from typing import Any, BinaryIO, Dict, Optional, Type, Union

from sitekit.adapters.pillow import PillowImageDriver
from sitekit.core.logger import get_logger
from sitekit.models import geometry
from sitekit.models.geometry import Box, Color, Point
from sitekit.models.image import FILTER_UNDEFINED, THUMBNAIL_INSET, FontData, ImageData
from sitekit.repository.protocol import FileRepositoryProtocol

from .base import BaseService, ServiceResult
from .file import FileService

logger = get_logger(__name__)

# Driver name -> driver class; "auto" picks the first available one
DRIVERS: Dict[str, Type[PillowImageDriver]] = {
    "pillow": PillowImageDriver,
}

ImageSource = Union[str, Path, ImageData]


class ImageService(BaseService):
    """
    Service for image manipulation.

    Options (``[image]`` config section):
        driver: Driver name, ``auto`` or ``pillow``
        watermark: Default watermark image path
        auto_mkdir: Create destination directories before saving (default on)
        quality: Default quality for lossy formats
    """

    def __init__(
        self,
        file_repository: FileRepositoryProtocol,
        options: Optional[Dict[str, Any]] = None,
        file_service: Optional[FileService] = None,
    ) -> None:
        """Initialize the service.

        Args:
            file_repository: File repository for existence checks and directories
            options: Image options; defaults to the ``[image]`` config section
            file_service: FileService used to create directories
        """
        super().__init__(file_repository)
        if options is None:
            from sitekit.core.config import get_config

            options = get_config().image
        self.options = dict(options)
        self.file_service = file_service or FileService(file_repository)
        self._driver: Optional[PillowImageDriver] = None
        self._driver_resolved = False

    def get_option(self, key: str, default: Any = None) -> Any:
        return self.options.get(key, default)

    def get_driver(self, driver: str = "") -> Optional[PillowImageDriver]:
        """
        Get the image driver, resolving it on first use.

        Args:
            driver: Driver name; falls back to the ``driver`` option

        Returns:
            The driver, or None if it is unknown or unavailable
        """
        if not self._driver_resolved:
            name = driver or self.get_option("driver") or "auto"
            driver_class = None
            if name == "auto":
                driver_class = next(
                    (cls for cls in DRIVERS.values() if cls.is_available()), None
                )
            elif name in DRIVERS and DRIVERS[name].is_available():
                driver_class = DRIVERS[name]

            if driver_class is None:
                logger.warning(f"Image driver not available: {name}")
                self._driver = None
            else:
                self._driver = driver_class()
            self._driver_resolved = True

        return self._driver

    # =========================================================================
    # Geometry canonicalization
    # =========================================================================

    def box(self, width: Any, height: int = 0) -> Box:
        """Canonize a Box from a Box, a (width, height) sequence, or width and height."""
        return geometry.box(width, height)

    def point(self, x: Any, y: int = 0) -> Point:
        """Canonize a Point from a Point, an (x, y) sequence, or x and y."""
        return geometry.point(x, y)

    def color(self, value: Any, alpha: Optional[int] = None) -> Optional[Color]:
        """Canonize a Color; see ``sitekit.models.geometry.color``."""
        return geometry.color(value, alpha)

    def canonize_size(self, size: Any, origin: Box) -> Box:
        """Resolve a resize/thumbnail size against the original size."""
        return geometry.resolve_size(size, origin)

    # =========================================================================
    # Construction
    # =========================================================================

    def create(self, size: Any, color: Any = None) -> ServiceResult[ImageData]:
        """
        Create a new empty image with an optional background color.

        Args:
            size: Box or (width, height)
            color: Background color value, see ``color``

        Returns:
            ServiceResult containing the new ImageData
        """
        driver = self.get_driver()
        if not driver:
            return self._no_driver()

        try:
            background = self._canonical_color(color)
            image = driver.create(self.box(size), background)
            return ServiceResult.ok(data=image, message=f"Created {image.size} image")
        except Exception as e:
            return self._failed("create image", e)

    def open(self, path: Union[str, Path]) -> ServiceResult[ImageData]:
        """Open an existing image file."""
        driver = self.get_driver()
        if not driver:
            return self._no_driver()

        error = self._validate_input_path(str(path))
        if error:
            return ServiceResult.fail(error)

        try:
            image = driver.open(path)
            return ServiceResult.ok(data=image, message=f"Opened {path}")
        except Exception as e:
            return self._failed(f"open {path}", e)

    def load(self, data: bytes) -> ServiceResult[ImageData]:
        """Load an image from binary data."""
        driver = self.get_driver()
        if not driver:
            return self._no_driver()

        try:
            return ServiceResult.ok(data=driver.load(data), message="Loaded image")
        except Exception as e:
            return self._failed("load image", e)

    def read(self, stream: BinaryIO) -> ServiceResult[ImageData]:
        """Load an image from a readable binary stream."""
        driver = self.get_driver()
        if not driver:
            return self._no_driver()

        try:
            return ServiceResult.ok(data=driver.read(stream), message="Read image")
        except Exception as e:
            return self._failed("read image", e)

    def font(self, file: str, size: int, color: Any) -> ServiceResult[FontData]:
        """
        Load a font with the given size (in points) and color.

        Args:
            file: TrueType font file
            size: Font size in points
            color: Font color value, see ``color``
        """
        driver = self.get_driver()
        if not driver:
            return self._no_driver()

        try:
            font = driver.font(file, size, self._canonical_color(color))
            return ServiceResult.ok(data=font, message=f"Loaded font {file}")
        except Exception as e:
            return self._failed(f"load font {file}", e)

    # =========================================================================
    # Manipulation
    # =========================================================================

    def watermark(
        self,
        source: ImageSource,
        to: str = "",
        watermark: Union[str, ImageData] = "",
        position: Any = "",
        options: Optional[Dict[str, Any]] = None,
    ) -> ServiceResult:
        """
        Add a watermark to an image.

        Args:
            source: Image path or ImageData
            to: Destination path; empty overwrites a path source
            watermark: Watermark path or ImageData; defaults to the
                ``watermark`` option
            position: ``top-left``, ``top-right``, ``bottom-left``,
                ``bottom-right`` (default), an (x, y) sequence, or a Point
            options: Save options

        Returns:
            ServiceResult with the saved path, or the ImageData when there
            is nowhere to save
        """
        driver = self.get_driver()
        if not driver:
            return self._no_driver()

        try:
            image = self._image(source)
            if isinstance(watermark, ImageData):
                mark = watermark
            else:
                mark_path = watermark or self.get_option("watermark")
                if not mark_path:
                    return ServiceResult.fail("No watermark image given or configured")
                mark = self._image(mark_path)
            start = geometry.resolve_position(position, image.size, mark.size)
            driver.paste(image, mark, start)
            return self._save_image(image, to, source, options)
        except Exception as e:
            return self._failed("watermark image", e)

    def crop(
        self,
        source: ImageSource,
        start: Any,
        size: Any,
        to: str = "",
        options: Optional[Dict[str, Any]] = None,
    ) -> ServiceResult:
        """
        Crop a box out of the image.

        Args:
            source: Image path or ImageData
            start: Top-left corner, (x, y) or Point
            size: Crop size; a missing side keeps the original side
            to: Destination path; empty overwrites a path source
            options: Save options
        """
        driver = self.get_driver()
        if not driver:
            return self._no_driver()

        try:
            image = self._image(source)
            box = geometry.resolve_crop_size(size, image.size)
            driver.crop(image, self.point(start), box)
            return self._save_image(image, to, source, options)
        except Exception as e:
            return self._failed("crop image", e)

    def resize(
        self,
        source: ImageSource,
        size: Any,
        to: str = "",
        filter: str = "",
        options: Optional[Dict[str, Any]] = None,
    ) -> ServiceResult:
        """
        Resize the image.

        Args:
            source: Image path or ImageData
            size: Target size, see module docs
            to: Destination path; empty overwrites a path source
            filter: Resampling filter name (``undefined`` by default)
            options: Save options
        """
        driver = self.get_driver()
        if not driver:
            return self._no_driver()

        try:
            image = self._image(source)
            box = self.canonize_size(size, image.size)
            driver.resize(image, box, filter or FILTER_UNDEFINED)
            return self._save_image(image, to, source, options)
        except Exception as e:
            return self._failed("resize image", e)

    def thumbnail(
        self,
        source: ImageSource,
        size: Any,
        to: str = "",
        mode: str = "",
        options: Optional[Dict[str, Any]] = None,
    ) -> ServiceResult:
        """
        Generate a thumbnail; the source image itself is left unchanged.

        Args:
            source: Image path or ImageData
            size: Bounding size, see module docs
            to: Destination path; empty overwrites a path source
            mode: ``inset`` (default) or ``outbound``
            options: Save options
        """
        driver = self.get_driver()
        if not driver:
            return self._no_driver()

        try:
            image = self._image(source)
            box = self.canonize_size(size, image.size)
            thumbnail = driver.thumbnail(image, box, mode or THUMBNAIL_INSET)
            return self._save_image(thumbnail, to, source, options)
        except Exception as e:
            return self._failed("create thumbnail", e)

    def rotate(
        self,
        source: ImageSource,
        angle: float,
        to: str = "",
        background: Any = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> ServiceResult:
        """
        Rotate the image clockwise by ``angle`` degrees.

        Args:
            source: Image path or ImageData
            angle: Angle in degrees
            to: Destination path; empty overwrites a path source
            background: Fill color for the uncovered area
            options: Save options
        """
        driver = self.get_driver()
        if not driver:
            return self._no_driver()

        try:
            image = self._image(source)
            fill = self._canonical_color(background)
            driver.rotate(image, angle, fill)
            return self._save_image(image, to, source, options)
        except Exception as e:
            return self._failed("rotate image", e)

    def paste(
        self,
        source: ImageSource,
        child: ImageSource,
        start: Any,
        to: str = "",
        options: Optional[Dict[str, Any]] = None,
    ) -> ServiceResult:
        """
        Paste a child image into the source image.

        Fails when the child exceeds the source image borders.

        Args:
            source: Parent image path or ImageData
            child: Child image path or ImageData
            start: Top-left corner in the parent, (x, y) or Point
            to: Destination path; empty overwrites a path source
            options: Save options
        """
        driver = self.get_driver()
        if not driver:
            return self._no_driver()

        try:
            image = self._image(source)
            driver.paste(image, self._image(child), self.point(start))
            return self._save_image(image, to, source, options)
        except Exception as e:
            return self._failed("paste image", e)

    def save(
        self,
        source: ImageSource,
        to: str = "",
        options: Optional[Dict[str, Any]] = None,
    ) -> ServiceResult:
        """
        Save an image; the target extension selects the format.

        Unlike the other operations, an empty ``to`` never overwrites the
        source: the ImageData is returned instead.
        """
        driver = self.get_driver()
        if not driver:
            return self._no_driver()

        try:
            image = self._image(source)
            return self._save_image(image, to, "", options)
        except Exception as e:
            return self._failed("save image", e)

    def info(self, source: ImageSource) -> ServiceResult[Dict[str, Any]]:
        """Get size, mode and format of an image."""
        driver = self.get_driver()
        if not driver:
            return self._no_driver()

        try:
            image = self._image(source)
            return ServiceResult.ok(
                data={
                    "path": image.source_path,
                    "width": image.width,
                    "height": image.height,
                    "mode": image.mode,
                    "format": image.format,
                },
            )
        except Exception as e:
            return self._failed("read image info", e)

    def mkdir(self, file: Union[str, Path], is_file: bool = True) -> ServiceResult[str]:
        """
        Create the directory an image file is to be stored in.

        Args:
            file: File path, or a directory path when ``is_file`` is False
            is_file: Whether ``file`` names a file
        """
        path = Path(file).parent if is_file else Path(file)
        return self.file_service.mkdir(path)

    # =========================================================================
    # Helpers
    # =========================================================================

    def _canonical_color(self, value: Any) -> Optional[Color]:
        if value is None or value == "":
            return None
        canonical = self.color(value)
        if canonical is None:
            raise ValueError(f"Invalid color: {value!r}")
        return canonical

    def _image(self, source: ImageSource) -> ImageData:
        if isinstance(source, ImageData):
            return source
        error = self._validate_input_path(str(source))
        if error:
            raise FileNotFoundError(error)
        return self.get_driver().open(source)

    def _save_image(
        self,
        image: ImageData,
        to: Union[str, Path],
        source: Union[str, Path, ImageData] = "",
        options: Optional[Dict[str, Any]] = None,
    ) -> ServiceResult:
        if not to and source and not isinstance(source, ImageData):
            to = source
        if not to:
            return ServiceResult.ok(
                data=image,
                message="Image processed",
                width=image.width,
                height=image.height,
            )

        if not (options or {}).get("format"):
            self.get_driver().format_for(to)

        auto_mkdir = self.get_option("auto_mkdir")
        if auto_mkdir is None or auto_mkdir:
            made = self.mkdir(to)
            if not made.success:
                return ServiceResult.fail(made.error)

        options = dict(options or {})
        if self.get_option("quality") is not None:
            options.setdefault("quality", self.get_option("quality"))

        path = self.get_driver().save(image, to, options)
        logger.debug(f"Saved {image.size} image to {path}")
        return ServiceResult.ok(
            data=path,
            message=f"Saved image to {path}",
            width=image.width,
            height=image.height,
        )

    @staticmethod
    def _no_driver() -> ServiceResult:
        return ServiceResult.fail("Image driver not available")

    @staticmethod
    def _failed(action: str, error: Exception) -> ServiceResult:
        logger.warning(f"Failed to {action}: {error}")
        return ServiceResult.fail(f"Failed to {action}: {error}")
