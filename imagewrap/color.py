"""RGB colour model.

Colours are packed into a single integer the way the engine's colour-at query
reports them:

    alpha << 24 | red << 16 | green << 8 | blue

where alpha is a transparency value from 0 (opaque) to 127 (fully
transparent). Pillow stores opacity from 0 to 255 instead; ``to_pillow`` and
``from_pillow`` convert between the two.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Union

from PIL import ImageColor

from imagewrap.errors import InvalidColorError


@dataclass(frozen=True)
class Rgb:
    """A single colour with 8-bit channels and 7-bit transparency.

    Attributes:
        red, green, blue: Channel values 0-255
        alpha: Transparency 0 (opaque) to 127 (transparent)
    """

    red: int
    green: int
    blue: int
    alpha: int = 0

    MAX_ALPHA: ClassVar[int] = 127
    MAX_PACKED: ClassVar[int] = 0x7FFFFFFF

    def __post_init__(self) -> None:
        for name in ("red", "green", "blue", "alpha"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool):
                raise InvalidColorError(f"{name} must be an integer, got {value!r}")
        for name in ("red", "green", "blue"):
            value = getattr(self, name)
            if not 0 <= value <= 255:
                raise InvalidColorError(f"{name} must be 0-255, got {value}")
        if not 0 <= self.alpha <= self.MAX_ALPHA:
            raise InvalidColorError(
                f"alpha must be 0-{self.MAX_ALPHA}, got {self.alpha}"
            )

    # =========================================================================
    # Packed integer form
    # =========================================================================

    @classmethod
    def from_int(cls, packed: int) -> Rgb:
        """Unpack an engine colour integer."""
        if not 0 <= packed <= cls.MAX_PACKED:
            raise InvalidColorError(f"Invalid packed colour: {packed:#x}")
        return cls(
            red=(packed >> 16) & 0xFF,
            green=(packed >> 8) & 0xFF,
            blue=packed & 0xFF,
            alpha=(packed >> 24) & 0x7F,
        )

    @classmethod
    def from_int_as_array(cls, packed: int) -> list[int]:
        """Unpack an engine colour integer to ``[red, green, blue]``."""
        return cls.from_int(packed).to_array()[:3]

    def to_int(self) -> int:
        return (self.alpha << 24) | (self.red << 16) | (self.green << 8) | self.blue

    def to_array(self) -> list[int]:
        return [self.red, self.green, self.blue, self.alpha]

    # =========================================================================
    # Pillow interop
    # =========================================================================

    @classmethod
    def from_pillow(cls, rgba: tuple[int, ...]) -> Rgb:
        """Build from a Pillow RGB or RGBA pixel tuple (opacity 0-255)."""
        if len(rgba) == 3:
            r, g, b = rgba
            opacity = 255
        elif len(rgba) == 4:
            r, g, b, opacity = rgba
        else:
            raise InvalidColorError(f"Expected RGB or RGBA tuple, got {rgba!r}")
        if not isinstance(opacity, int) or not 0 <= opacity <= 255:
            raise InvalidColorError(f"opacity must be an integer 0-255, got {opacity!r}")
        return cls(r, g, b, cls.MAX_ALPHA - (opacity >> 1))

    def to_pillow(self) -> tuple[int, int, int, int]:
        """Return an RGBA tuple with Pillow's 0-255 opacity."""
        opacity = 255 - ((self.alpha << 1) + (self.alpha >> 6))
        return (self.red, self.green, self.blue, opacity)

    # =========================================================================
    # Constructors
    # =========================================================================

    @classmethod
    def from_string(cls, color: str) -> Rgb:
        """Parse a colour name or hex string.

        Args:
            color: Colour name, hex (#RGB, #RRGGBB, #RRGGBBAA), or "transparent"

        Returns:
            Parsed colour
        """
        if color.lower() == "transparent":
            return cls(0, 0, 0, cls.MAX_ALPHA)

        try:
            rgb = ImageColor.getrgb(color)
        except ValueError as exc:
            raise InvalidColorError(f"Invalid color: {color}") from exc
        return cls.from_pillow(rgb)

    @classmethod
    def coerce(cls, value: ColorLike) -> Rgb:
        """Accept an Rgb, a colour string, or a Pillow RGB(A) tuple."""
        if isinstance(value, Rgb):
            return value
        if isinstance(value, str):
            return cls.from_string(value)
        if isinstance(value, (tuple, list)):
            return cls.from_pillow(tuple(value))
        raise InvalidColorError(f"Cannot interpret {value!r} as a colour")

    @classmethod
    def create_white(cls) -> Rgb:
        return cls(255, 255, 255, 0)

    @classmethod
    def create_black(cls) -> Rgb:
        return cls(0, 0, 0, 0)


ColorLike = Union[Rgb, str, tuple, list]
