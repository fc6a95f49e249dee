"""Factory: the entry point for opening, creating, transforming and writing images.

    factory = Factory()
    with factory.open_image("photo.jpg") as image:
        with factory.resize_image(image, "scale", 800, 600) as thumb:
            factory.write_image(
                thumb, "png", lambda strategy: strategy.set_quality(9).to_file("thumb.png")
            )
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import BinaryIO, Callable

from PIL import Image as PILImage
from PIL import UnidentifiedImageError

from imagewrap import filters, resize, writers
from imagewrap.color import ColorLike, Rgb
from imagewrap.elements import ImageElement, TextElement
from imagewrap.errors import DecodeError, ImageNotFoundError, InvalidDimensionsError
from imagewrap.filters import FilterName
from imagewrap.image import Image
from imagewrap.resize import ResizeMode
from imagewrap.writers import ImageFormat, WriteOptions, WriteStrategy

logger = logging.getLogger(__name__)


class Factory:
    """Creates images and dispatches operations to strategies."""

    # =========================================================================
    # Images
    # =========================================================================

    def open_image(self, path: str | os.PathLike) -> Image:
        """Decode an image file.

        Args:
            path: File path; the format is detected from the content

        Returns:
            Image in RGBA mode

        Raises:
            ImageNotFoundError: If path is not an existing, readable file
            DecodeError: If the file is not a readable image
        """
        source_path = Path(path)
        if not source_path.is_file() or not os.access(source_path, os.R_OK):
            raise ImageNotFoundError(str(path))

        try:
            with PILImage.open(source_path) as source:
                fmt = source.format
                resource = source.convert("RGBA")
        except PermissionError as exc:
            raise ImageNotFoundError(str(path)) from exc
        except (
            UnidentifiedImageError,
            PILImage.DecompressionBombError,
            OSError,
            ValueError,
        ) as exc:
            raise DecodeError(f"Cannot decode {path}: {exc}") from exc

        logger.debug("Opened %s (%s, %dx%d)", path, fmt, *resource.size)
        return Image(resource, format=fmt)

    def create_image(self, width: int, height: int, color: ColorLike | None = None) -> Image:
        """Allocate a blank canvas, opaque black unless color is given.

        Raises:
            InvalidDimensionsError: If width or height is not positive
        """
        if width <= 0 or height <= 0:
            raise InvalidDimensionsError(f"Image size must be positive, got {width}x{height}")
        fill = Rgb.coerce(color) if color is not None else Rgb.create_black()
        return Image(PILImage.new("RGBA", (width, height), fill.to_pillow()))

    def resize_image(
        self, image: Image, mode: ResizeMode | str, width: int, height: int
    ) -> Image:
        """Resize into a new image using the strategy for mode.

        Modes:
            scale: fit within width x height, keep aspect ratio
            fix: exactly width x height
            crop: cover width x height, then center-crop to it

        Raises:
            UnsupportedModeError: If mode is unknown
            InvalidDimensionsError: If width or height is not positive
        """
        resized = resize.resize(image.get_resource(), mode, width, height)
        return Image(resized, format=image.format)

    def filter_image(self, image: Image, name: FilterName | str) -> Image:
        """Apply a pixel filter into a new image.

        Raises:
            UnsupportedFilterError: If name is unknown
        """
        filtered = filters.apply_filter(image.get_resource(), name)
        return Image(filtered, format=image.format)

    # =========================================================================
    # Writing
    # =========================================================================

    def create_write_strategy(self, image: Image, format: ImageFormat | str) -> WriteStrategy:
        """Build the write strategy for format with default options.

        Raises:
            UnsupportedFormatError: If format is unknown
        """
        strategy_class = writers.WRITE_STRATEGIES[ImageFormat.parse(format)]
        return strategy_class(image)

    def write_image(
        self,
        image: Image,
        format: ImageFormat | str,
        configure: Callable[[WriteStrategy], object],
    ) -> None:
        """Hand a write strategy to configure, which sets options and writes.

        Nothing is written unless configure calls a terminal method
        (``to_file``, ``to_stream`` or ``to_stdout``).
        """
        strategy = self.create_write_strategy(image, format)
        configure(strategy)
        if not strategy.written:
            logger.debug("No terminal write for %s; nothing emitted", strategy.format.value)

    def save_image(
        self,
        image: Image,
        target: str | os.PathLike | BinaryIO,
        options: WriteOptions,
    ) -> None:
        """Encode and write in one call; the options type selects the format.

        Args:
            image: Image to write
            target: File path, binary stream, or "-" for stdout
            options: JpegOptions, PngOptions or GifOptions
        """
        writers.write(image, options, target)

    # =========================================================================
    # Elements
    # =========================================================================

    def create_text_element(self) -> TextElement:
        return TextElement()

    def create_image_element(self, image: Image) -> ImageElement:
        return ImageElement(image)
