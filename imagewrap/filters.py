"""Pixel filters.

Filters work on the whole RGBA buffer as a numpy array and leave the alpha
channel untouched.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable

import numpy as np
from PIL import Image

from imagewrap.errors import UnsupportedFilterError

# ITU-R 601 luma weights
LUMA_WEIGHTS = np.array([0.299, 0.587, 0.114], dtype=np.float64)


class FilterName(str, Enum):
    GREYSCALE = "greyscale"
    NEGATE = "negate"

    @classmethod
    def parse(cls, value: FilterName | str) -> FilterName:
        """Resolve a filter name.

        Raises:
            UnsupportedFilterError: If value names no known filter
        """
        if isinstance(value, FilterName):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise UnsupportedFilterError(
                f"Unsupported filter: {value!r}. "
                f"Available: {', '.join(f.value for f in cls)}"
            ) from None


def filter_greyscale(image: Image.Image) -> Image.Image:
    """Replace R, G and B with the rounded luma of each pixel."""
    arr = np.asarray(image, dtype=np.float64)
    luma = np.rint(arr[:, :, :3] @ LUMA_WEIGHTS)
    out = arr.copy()
    out[:, :, 0] = out[:, :, 1] = out[:, :, 2] = luma
    return Image.fromarray(np.clip(out, 0, 255).astype(np.uint8))


def filter_negate(image: Image.Image) -> Image.Image:
    """Invert R, G and B."""
    arr = np.array(image, dtype=np.uint8)
    arr[:, :, :3] = 255 - arr[:, :, :3]
    return Image.fromarray(arr)


FILTERS: dict[FilterName, Callable[[Image.Image], Image.Image]] = {
    FilterName.GREYSCALE: filter_greyscale,
    FilterName.NEGATE: filter_negate,
}


def apply_filter(image: Image.Image, name: FilterName | str) -> Image.Image:
    """Apply a named filter to an RGBA Pillow image.

    Args:
        image: Input Pillow image in RGBA mode
        name: FilterName member or its name

    Returns:
        New Pillow image

    Raises:
        UnsupportedFilterError: If name is unknown
    """
    return FILTERS[FilterName.parse(name)](image)
