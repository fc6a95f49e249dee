"""Format-specific write strategies.

Options for each format are immutable dataclasses, validated on
construction. A WriteStrategy binds one image to one options value and
performs exactly one terminal write:

    strategy = JpegWriteStrategy(image)
    strategy.set_quality(90).to_file("out.jpg")

or, without the fluent interface:

    write(image, JpegOptions(quality=90), "out.jpg")
"""

from __future__ import annotations

import io
import logging
import os
import sys
from abc import ABC
from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path
from typing import BinaryIO, ClassVar, Union

from PIL import Image as PILImage

from imagewrap.errors import InvalidQualityError, UnsupportedFormatError, WriteError
from imagewrap.image import Image

logger = logging.getLogger(__name__)


class ImageFormat(str, Enum):
    JPEG = "jpeg"
    PNG = "png"
    GIF = "gif"

    @classmethod
    def parse(cls, value: ImageFormat | str) -> ImageFormat:
        """Resolve a format name ("jpg" is accepted for JPEG).

        Raises:
            UnsupportedFormatError: If value names no known format
        """
        if isinstance(value, ImageFormat):
            return value
        name = str(value).lower()
        if name == "jpg":
            name = "jpeg"
        try:
            return cls(name)
        except ValueError:
            raise UnsupportedFormatError(
                f"Unsupported format: {value!r}. "
                f"Available: {', '.join(f.value for f in cls)}"
            ) from None


# =============================================================================
# Options
# =============================================================================


@dataclass(frozen=True)
class JpegOptions:
    """JPEG encoder options.

    Attributes:
        quality: 0 (smallest) to 100 (best)
    """

    quality: int = 75

    def __post_init__(self) -> None:
        if not 0 <= self.quality <= 100:
            raise InvalidQualityError(f"JPEG quality must be 0-100, got {self.quality}")


@dataclass(frozen=True)
class PngOptions:
    """PNG encoder options.

    Attributes:
        compression: zlib level, 0 (none) to 9 (smallest file)
    """

    compression: int = 6

    def __post_init__(self) -> None:
        if not 0 <= self.compression <= 9:
            raise InvalidQualityError(
                f"PNG compression level must be 0-9, got {self.compression}"
            )


@dataclass(frozen=True)
class GifOptions:
    """GIF has no encoder options."""


WriteOptions = Union[JpegOptions, PngOptions, GifOptions]


# =============================================================================
# Strategies
# =============================================================================


class WriteStrategy(ABC):
    """Encode one image with one options value.

    Subclasses set the format, the options type and the Pillow save
    arguments. ``to_file``, ``to_stream`` and ``to_stdout`` are terminal:
    only one of them may be called, once.
    """

    format: ClassVar[ImageFormat]
    options_type: ClassVar[type]
    pillow_format: ClassVar[str]

    def __init__(self, image: Image, options: WriteOptions | None = None):
        if options is None:
            options = self.options_type()
        elif not isinstance(options, self.options_type):
            raise UnsupportedFormatError(
                f"{type(self).__name__} expects {self.options_type.__name__}, "
                f"got {type(options).__name__}"
            )
        self.image = image
        self.options = options
        self._written = False

    @property
    def written(self) -> bool:
        """True once a terminal write has been performed."""
        return self._written

    def _save_kwargs(self) -> dict:
        return {}

    def _prepare(self, resource: PILImage.Image) -> PILImage.Image:
        return resource

    def encode(self) -> bytes:
        """Encode the image with the current options.

        Raises:
            WriteError: If the engine fails to encode
        """
        resource = self.image.get_resource()
        prepared = self._prepare(resource)
        buffer = io.BytesIO()
        try:
            prepared.save(buffer, format=self.pillow_format, **self._save_kwargs())
        except (OSError, ValueError, KeyError, TypeError) as exc:
            raise WriteError(f"Cannot encode {self.format.value}: {exc}") from exc
        finally:
            if prepared is not resource:
                prepared.close()
        return buffer.getvalue()

    def _consume(self) -> None:
        if self._written:
            raise WriteError(f"{type(self).__name__} has already written its output")
        self._written = True

    def to_file(self, path: str | os.PathLike) -> None:
        """Write the encoded image to path.

        Raises:
            WriteError: If the directory is missing or not writable, or the
                write fails
        """
        self._consume()
        target = Path(path)
        directory = target.parent
        if not directory.is_dir() or not os.access(directory, os.W_OK):
            raise WriteError(f"Directory {directory} is not writable")

        data = self.encode()
        try:
            target.write_bytes(data)
        except OSError as exc:
            raise WriteError(f"Cannot write {target}: {exc}") from exc
        logger.debug("Wrote %s (%d bytes) to %s", self.format.value, len(data), target)

    def to_stream(self, stream: BinaryIO) -> None:
        """Write the encoded image to a binary stream."""
        self._consume()
        data = self.encode()
        try:
            stream.write(data)
        except OSError as exc:
            raise WriteError(f"Cannot write to stream: {exc}") from exc

    def to_stdout(self) -> None:
        """Write the raw encoded bytes to standard output."""
        self.to_stream(sys.stdout.buffer)
        sys.stdout.buffer.flush()


class JpegWriteStrategy(WriteStrategy):
    format = ImageFormat.JPEG
    options_type = JpegOptions
    pillow_format = "JPEG"

    def set_quality(self, quality: int) -> JpegWriteStrategy:
        """Set quality 0-100."""
        self.options = replace(self.options, quality=quality)
        return self

    def _save_kwargs(self) -> dict:
        return {"quality": self.options.quality}

    def _prepare(self, resource: PILImage.Image) -> PILImage.Image:
        # JPEG has no alpha channel
        return resource.convert("RGB")


class PngWriteStrategy(WriteStrategy):
    format = ImageFormat.PNG
    options_type = PngOptions
    pillow_format = "PNG"

    def set_quality(self, level: int) -> PngWriteStrategy:
        """Set zlib compression level 0-9 (9 is the smallest file)."""
        self.options = replace(self.options, compression=level)
        return self

    def _save_kwargs(self) -> dict:
        return {"compress_level": self.options.compression}


class GifWriteStrategy(WriteStrategy):
    format = ImageFormat.GIF
    options_type = GifOptions
    pillow_format = "GIF"


WRITE_STRATEGIES: dict[ImageFormat, type[WriteStrategy]] = {
    ImageFormat.JPEG: JpegWriteStrategy,
    ImageFormat.PNG: PngWriteStrategy,
    ImageFormat.GIF: GifWriteStrategy,
}


def strategy_for_options(options: WriteOptions) -> type[WriteStrategy]:
    """Find the strategy class whose options type matches options."""
    for strategy in WRITE_STRATEGIES.values():
        if isinstance(options, strategy.options_type):
            return strategy
    raise UnsupportedFormatError(f"No write strategy for {type(options).__name__}")


def write(image: Image, options: WriteOptions, target: str | os.PathLike | BinaryIO) -> None:
    """Encode image with options and write it in one call.

    Args:
        image: Image to encode
        options: JpegOptions, PngOptions or GifOptions; selects the format
        target: File path, binary stream, or "-" for stdout
    """
    strategy = strategy_for_options(options)(image, options)
    if isinstance(target, str) and target == "-":
        strategy.to_stdout()
    elif isinstance(target, (str, os.PathLike)):
        strategy.to_file(target)
    else:
        strategy.to_stream(target)
