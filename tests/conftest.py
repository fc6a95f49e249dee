"""Shared fixtures: sample images generated on the fly."""

from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest
from PIL import Image

from imagewrap import Factory

RED = (255, 0, 0, 255)
BLUE = (0, 0, 255, 255)
GREEN = (0, 255, 0, 255)
WHITE = (255, 255, 255, 255)


@pytest.fixture
def factory() -> Factory:
    return Factory()


@pytest.fixture
def quadrant_image() -> Image.Image:
    """300x200 image: red, blue / green, white quadrants."""
    img = Image.new("RGBA", (300, 200), WHITE)
    img.paste(RED, (0, 0, 150, 100))
    img.paste(BLUE, (150, 0, 300, 100))
    img.paste(GREEN, (0, 100, 150, 200))
    return img


@pytest.fixture
def noise_image() -> Image.Image:
    """300x200 opaque image of seeded random pixels."""
    rng = np.random.default_rng(7)
    arr = rng.integers(0, 256, size=(200, 300, 4), dtype=np.uint8)
    arr[:, :, 3] = 255
    return Image.fromarray(arr)


@pytest.fixture
def sample_files(tmp_path: Path, quadrant_image: Image.Image) -> dict[str, Path]:
    """The quadrant image saved as png, jpeg and gif."""
    paths = {
        "png": tmp_path / "test.png",
        "jpeg": tmp_path / "test.jpg",
        "gif": tmp_path / "test.gif",
    }
    quadrant_image.save(paths["png"])
    quadrant_image.convert("RGB").save(paths["jpeg"], quality=95)
    quadrant_image.save(paths["gif"])
    return paths


@pytest.fixture
def noise_file(tmp_path: Path, noise_image: Image.Image) -> Path:
    path = tmp_path / "noise.png"
    noise_image.save(path)
    return path
