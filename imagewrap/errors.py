"""Exception hierarchy for imagewrap.

Every error derives from ImageError and from the closest builtin, so callers
can catch either ``ImageError`` or e.g. ``FileNotFoundError``.
"""

from __future__ import annotations


class ImageError(Exception):
    """Base class for all imagewrap errors."""


class ImageNotFoundError(ImageError, FileNotFoundError):
    """A source file (image or font) does not exist."""

    def __init__(self, path: str):
        super().__init__(f"File {path} not found")
        self.path = path


class DecodeError(ImageError, ValueError):
    """The engine could not decode a file as an image."""


class UnsupportedModeError(ImageError, ValueError):
    """Unknown resize mode."""


class UnsupportedFilterError(ImageError, ValueError):
    """Unknown filter name."""


class UnsupportedFormatError(ImageError, ValueError):
    """Unknown output format."""


class OutOfBoundsError(ImageError, IndexError):
    """A region or point lies outside the canvas."""


class InvalidQualityError(ImageError, ValueError):
    """A write option is outside its valid range."""


class InvalidDimensionsError(ImageError, ValueError):
    """Width or height is not a positive integer."""


class InvalidColorError(ImageError, ValueError):
    """A colour string or channel value cannot be used."""


class WriteError(ImageError, OSError):
    """Encoding or writing the output failed."""


class InvalidOpacityError(ImageError, ValueError):
    """An opacity is outside 0.0-1.0."""
