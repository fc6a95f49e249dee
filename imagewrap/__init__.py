"""imagewrap - an object-oriented facade over Pillow.

Open, transform, annotate and re-encode JPEG/PNG/GIF images:

    factory = Factory()
    with factory.open_image("photo.png") as image:
        factory.save_image(image.rotate(90, "#FF0000"), "out.jpg", JpegOptions(quality=90))
"""

import logging

from imagewrap.color import Rgb
from imagewrap.elements import Element, ImageElement, TextElement
from imagewrap.errors import (
    DecodeError,
    ImageError,
    ImageNotFoundError,
    InvalidColorError,
    InvalidDimensionsError,
    InvalidOpacityError,
    InvalidQualityError,
    OutOfBoundsError,
    UnsupportedFilterError,
    UnsupportedFormatError,
    UnsupportedModeError,
    WriteError,
)
from imagewrap.factory import Factory
from imagewrap.filters import FilterName
from imagewrap.image import Image
from imagewrap.resize import ResizeMode
from imagewrap.writers import (
    GifOptions,
    GifWriteStrategy,
    ImageFormat,
    JpegOptions,
    JpegWriteStrategy,
    PngOptions,
    PngWriteStrategy,
    WriteStrategy,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"
__all__ = [
    "DecodeError",
    "Element",
    "Factory",
    "FilterName",
    "GifOptions",
    "GifWriteStrategy",
    "Image",
    "ImageElement",
    "ImageError",
    "ImageFormat",
    "ImageNotFoundError",
    "InvalidColorError",
    "InvalidDimensionsError",
    "InvalidOpacityError",
    "InvalidQualityError",
    "JpegOptions",
    "JpegWriteStrategy",
    "OutOfBoundsError",
    "PngOptions",
    "PngWriteStrategy",
    "ResizeMode",
    "Rgb",
    "TextElement",
    "UnsupportedFilterError",
    "UnsupportedFormatError",
    "UnsupportedModeError",
    "WriteError",
    "WriteStrategy",
]
