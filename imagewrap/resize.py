"""Resize strategies.

Each strategy takes a Pillow image and a target box and returns a new
Pillow image. Strategies are looked up by ResizeMode member.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable

from PIL import Image

from imagewrap.errors import InvalidDimensionsError, UnsupportedModeError

DEFAULT_RESAMPLE = Image.Resampling.LANCZOS


class ResizeMode(str, Enum):
    SCALE = "scale"
    FIX = "fix"
    CROP = "crop"

    @classmethod
    def parse(cls, value: ResizeMode | str) -> ResizeMode:
        """Resolve a mode name.

        Raises:
            UnsupportedModeError: If value names no known mode
        """
        if isinstance(value, ResizeMode):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise UnsupportedModeError(
                f"Unsupported resize mode: {value!r}. "
                f"Available: {', '.join(m.value for m in cls)}"
            ) from None


def scale_size(size: tuple[int, int], width: int, height: int) -> tuple[int, int]:
    """Largest size within width x height that keeps the aspect ratio.

    The scaled side is floored: 300x200 into 100x200 gives 100x66.

    Args:
        size: Current (width, height)
        width, height: Bounding box

    Returns:
        (width, height) tuple
    """
    w, h = size
    # Compare width/w against height/h without floating point
    if width * h <= height * w:
        return (width, max(1, h * width // w))
    return (max(1, w * height // h), height)


def cover_size(size: tuple[int, int], width: int, height: int) -> tuple[int, int]:
    """Smallest size covering width x height that keeps the aspect ratio."""
    w, h = size
    if width * h >= height * w:
        return (width, max(height, -(-h * width // w)))
    return (max(width, -(-w * height // h)), height)


def resize_scale(image: Image.Image, width: int, height: int) -> Image.Image:
    """Fit image within bounds, preserving aspect ratio.

    The result may be smaller than the target in one dimension.
    """
    return image.resize(scale_size(image.size, width, height), DEFAULT_RESAMPLE)


def resize_fix(image: Image.Image, width: int, height: int) -> Image.Image:
    """Resize to exactly width x height, ignoring aspect ratio."""
    return image.resize((width, height), DEFAULT_RESAMPLE)


def resize_crop(image: Image.Image, width: int, height: int) -> Image.Image:
    """Fill bounds completely, cropping excess (center crop).

    The image is scaled to completely cover the specified dimensions,
    then center-cropped to exact size.
    """
    scaled_w, scaled_h = cover_size(image.size, width, height)
    scaled = image.resize((scaled_w, scaled_h), DEFAULT_RESAMPLE)
    try:
        left = (scaled_w - width) // 2
        top = (scaled_h - height) // 2
        return scaled.crop((left, top, left + width, top + height))
    finally:
        scaled.close()


RESIZE_STRATEGIES: dict[ResizeMode, Callable[[Image.Image, int, int], Image.Image]] = {
    ResizeMode.SCALE: resize_scale,
    ResizeMode.FIX: resize_fix,
    ResizeMode.CROP: resize_crop,
}


def resize(image: Image.Image, mode: ResizeMode | str, width: int, height: int) -> Image.Image:
    """Apply a named resize strategy.

    Args:
        image: Input Pillow image
        mode: ResizeMode member or its name
        width, height: Target box

    Returns:
        New Pillow image

    Raises:
        UnsupportedModeError: If mode is unknown
        InvalidDimensionsError: If the target box is empty
    """
    strategy = RESIZE_STRATEGIES[ResizeMode.parse(mode)]
    if width <= 0 or height <= 0:
        raise InvalidDimensionsError(f"Target size must be positive, got {width}x{height}")
    return strategy(image, width, height)
