"""Image handle: the scoped owner of one Pillow pixel buffer.

The buffer is always kept in RGBA mode. Transforms that change geometry
(crop, rotate) return a new Image; flips, fill and element composition act
on the receiver and return it for chaining.

    with factory.open_image("photo.png") as image:
        rotated = image.rotate(90, "#FF0000")
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from PIL import Image as PILImage

from imagewrap.color import ColorLike, Rgb
from imagewrap.errors import ImageError, OutOfBoundsError

if TYPE_CHECKING:
    from imagewrap.elements import Element

logger = logging.getLogger(__name__)


class Image:
    """An RGBA canvas backed by a Pillow image.

    Args:
        resource: Pillow image to take ownership of. Converted to RGBA if
            needed; the original is closed after conversion.
        format: Name of the format the image was decoded from, if any
    """

    def __init__(self, resource: PILImage.Image, format: str | None = None):
        if resource.mode != "RGBA":
            converted = resource.convert("RGBA")
            resource.close()
            resource = converted
        self._resource: PILImage.Image | None = resource
        self.format = format

    def __repr__(self) -> str:
        if self._resource is None:
            return "<Image closed>"
        return f"<Image {self.width}x{self.height} format={self.format}>"

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def __enter__(self) -> Image:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        """Release the pixel buffer. Safe to call more than once."""
        if self._resource is not None:
            self._resource.close()
            self._resource = None

    @property
    def closed(self) -> bool:
        return self._resource is None

    def get_resource(self) -> PILImage.Image:
        """Return the underlying Pillow image for direct inspection.

        Raises:
            ImageError: If the image has been closed
        """
        if self._resource is None:
            raise ImageError("Image is closed")
        return self._resource

    # =========================================================================
    # Dimensions and pixels
    # =========================================================================

    @property
    def width(self) -> int:
        return self.get_resource().width

    @property
    def height(self) -> int:
        return self.get_resource().height

    @property
    def size(self) -> tuple[int, int]:
        return self.get_resource().size

    @property
    def has_alpha(self) -> bool:
        """True when at least one pixel is not fully opaque."""
        low, _ = self.get_resource().getchannel("A").getextrema()
        return low < 255

    def _check_point(self, x: int, y: int) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise OutOfBoundsError(
                f"Point ({x}, {y}) outside {self.width}x{self.height} canvas"
            )

    def get_color(self, x: int, y: int) -> Rgb:
        self._check_point(x, y)
        return Rgb.from_pillow(self.get_resource().getpixel((x, y)))

    def get_pixel(self, x: int, y: int) -> int:
        """Return the packed colour at (x, y)."""
        return self.get_color(x, y).to_int()

    def copy(self) -> Image:
        return Image(self.get_resource().copy(), format=self.format)

    # =========================================================================
    # Geometry
    # =========================================================================

    def crop(self, x: int, y: int, width: int, height: int) -> Image:
        """Cut out a region as a new image.

        Args:
            x, y: Top-left corner
            width, height: Region dimensions

        Returns:
            New image of exactly width x height

        Raises:
            OutOfBoundsError: If the region is empty or leaves the canvas
        """
        if width <= 0 or height <= 0:
            raise OutOfBoundsError(f"Crop size must be positive, got {width}x{height}")
        if x < 0 or y < 0 or x + width > self.width or y + height > self.height:
            raise OutOfBoundsError(
                f"Crop region ({x}, {y}, {width}x{height}) exceeds "
                f"{self.width}x{self.height} canvas"
            )
        region = self.get_resource().crop((x, y, x + width, y + height))
        return Image(region, format=self.format)

    def rotate(self, angle: float, background: ColorLike) -> Image:
        """Rotate counter-clockwise into a new, expanded canvas.

        Args:
            angle: Rotation angle in degrees
            background: Colour for pixels not covered by the rotated content

        Returns:
            Rotated image. Multiples of 90 degrees are exact.
        """
        fill = Rgb.coerce(background).to_pillow()
        rotated = self.get_resource().rotate(
            angle,
            resample=PILImage.Resampling.BICUBIC,
            expand=True,
            fillcolor=fill,
        )
        return Image(rotated, format=self.format)

    def _transpose(self, method: PILImage.Transpose) -> Image:
        resource = self.get_resource()
        self._resource = resource.transpose(method)
        resource.close()
        return self

    def flip_vertical(self) -> Image:
        """Mirror top to bottom in place: (x, y) -> (x, h-1-y)."""
        return self._transpose(PILImage.Transpose.FLIP_TOP_BOTTOM)

    def flip_horizontal(self) -> Image:
        """Mirror left to right in place: (x, y) -> (w-1-x, y)."""
        return self._transpose(PILImage.Transpose.FLIP_LEFT_RIGHT)

    def flip_both(self) -> Image:
        """Mirror along both axes in place."""
        return self._transpose(PILImage.Transpose.ROTATE_180)

    # =========================================================================
    # Drawing
    # =========================================================================

    def fill(self, color: ColorLike) -> Image:
        """Set every pixel to color."""
        resource = self.get_resource()
        resource.paste(Rgb.coerce(color).to_pillow(), (0, 0, resource.width, resource.height))
        return self

    def append_element_at_position(self, element: Element, x: int, y: int) -> Image:
        """Draw element onto the canvas anchored at (x, y).

        Later calls draw over earlier ones.
        """
        logger.debug("Drawing %s at (%d, %d)", type(element).__name__, x, y)
        element.draw(self.get_resource(), x, y)
        return self
