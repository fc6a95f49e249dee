"""Drawable elements composited onto an Image.

Each element renders itself onto a transparent RGBA layer which is then
alpha-composited onto the canvas. Elements are configured through chaining
setters and are only read when drawn, so one element can be drawn several
times with different settings:

    element = factory.create_text_element().set_text("hello").set_size(40)
    image.append_element_at_position(element.set_color("#ababab"), 50, 150)
    image.append_element_at_position(element.set_color("#ff0000"), 49, 149)
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING

from PIL import Image as PILImage
from PIL import ImageDraw, ImageFont

from imagewrap.color import ColorLike, Rgb
from imagewrap.errors import (
    ImageError,
    ImageNotFoundError,
    InvalidDimensionsError,
    InvalidOpacityError,
)

if TYPE_CHECKING:
    from imagewrap.image import Image


def _composite(canvas: PILImage.Image, layer: PILImage.Image, x: int, y: int) -> None:
    """Alpha-composite layer onto canvas with its top-left corner at (x, y).

    Parts of the layer outside the canvas are clipped.
    """
    source = (max(0, -x), max(0, -y))
    dest = (max(0, x), max(0, y))
    if source[0] >= layer.width or source[1] >= layer.height:
        return
    if dest[0] >= canvas.width or dest[1] >= canvas.height:
        return
    canvas.alpha_composite(layer, dest=dest, source=source)


class Element(ABC):
    """Something that can be drawn onto a canvas at a position."""

    @abstractmethod
    def draw(self, canvas: PILImage.Image, x: int, y: int) -> None:
        """Composite this element onto an RGBA canvas in place."""


# =============================================================================
# Text
# =============================================================================


class TextElement(Element):
    """A line of text, optionally rotated.

    The anchor (x, y) is the left end of the text baseline. Rotation is
    counter-clockwise around that anchor.
    """

    DEFAULT_SIZE = 12

    def __init__(self):
        self.text = ""
        self.font: str | None = None
        self.size = self.DEFAULT_SIZE
        self.angle = 0.0
        self.color = Rgb.create_black()

    def set_text(self, text: str) -> TextElement:
        self.text = text
        return self

    def set_font(self, path: str | Path) -> TextElement:
        """Use a TrueType font file.

        Raises:
            ImageNotFoundError: If the file does not exist
        """
        if not Path(path).is_file():
            raise ImageNotFoundError(str(path))
        self.font = str(path)
        return self

    def set_size(self, size: float) -> TextElement:
        if size <= 0:
            raise InvalidDimensionsError(f"Font size must be positive, got {size}")
        self.size = size
        return self

    def set_angle(self, angle: float) -> TextElement:
        self.angle = angle
        return self

    def set_color(self, color: ColorLike) -> TextElement:
        self.color = Rgb.coerce(color)
        return self

    def _load_font(self) -> ImageFont.FreeTypeFont:
        if self.font is None:
            return ImageFont.load_default(size=self.size)
        try:
            return ImageFont.truetype(self.font, size=self.size)
        except OSError as exc:
            raise ImageError(f"Cannot load font {self.font}: {exc}") from exc

    def render(self) -> tuple[PILImage.Image, tuple[float, float]] | None:
        """Render the text onto its own transparent layer.

        Returns:
            (layer, anchor) where anchor is the baseline origin inside the
            layer, or None if there is nothing to draw
        """
        if not self.text:
            return None

        font = self._load_font()
        box = font.getbbox(self.text, anchor="ls")
        left, top = math.floor(box[0]), math.floor(box[1])
        right, bottom = math.ceil(box[2]), math.ceil(box[3])
        width, height = right - left, bottom - top
        if width <= 0 or height <= 0:
            return None

        layer = PILImage.new("RGBA", (width, height), (0, 0, 0, 0))
        anchor_x, anchor_y = -left, -top
        ImageDraw.Draw(layer).text(
            (anchor_x, anchor_y),
            self.text,
            font=font,
            fill=self.color.to_pillow(),
            anchor="ls",
        )

        if self.angle % 360 == 0:
            return layer, (anchor_x, anchor_y)

        # Rotation is about the layer centre; track where the anchor lands
        rotated = layer.rotate(self.angle, resample=PILImage.Resampling.BICUBIC, expand=True)
        theta = math.radians(self.angle)
        dx, dy = anchor_x - width / 2, anchor_y - height / 2
        new_x = rotated.width / 2 + dx * math.cos(theta) + dy * math.sin(theta)
        new_y = rotated.height / 2 - dx * math.sin(theta) + dy * math.cos(theta)
        layer.close()
        return rotated, (new_x, new_y)

    def draw(self, canvas: PILImage.Image, x: int, y: int) -> None:
        rendered = self.render()
        if rendered is None:
            return
        layer, (anchor_x, anchor_y) = rendered
        try:
            _composite(canvas, layer, round(x - anchor_x), round(y - anchor_y))
        finally:
            layer.close()


# =============================================================================
# Image
# =============================================================================


class ImageElement(Element):
    """Another image placed with its top-left corner at the anchor."""

    def __init__(self, image: Image):
        self.image = image
        self.opacity = 1.0

    def set_image(self, image: Image) -> ImageElement:
        self.image = image
        return self

    def set_opacity(self, opacity: float) -> ImageElement:
        if not 0.0 <= opacity <= 1.0:
            raise InvalidOpacityError(f"Opacity must be between 0.0 and 1.0, got {opacity}")
        self.opacity = opacity
        return self

    def draw(self, canvas: PILImage.Image, x: int, y: int) -> None:
        overlay = self.image.get_resource()
        if self.opacity >= 1.0:
            _composite(canvas, overlay, x, y)
            return

        r, g, b, a = overlay.split()
        a = a.point(lambda p: int(p * self.opacity))
        layer = PILImage.merge("RGBA", (r, g, b, a))
        try:
            _composite(canvas, layer, x, y)
        finally:
            layer.close()
