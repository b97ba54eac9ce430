"""Image file I/O: decode to and encode from RGBA pixel grids with Pillow."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import numpy as np
from PIL import Image

from regionseg.models.image import PixelGrid, as_grid

logger = logging.getLogger(__name__)


class ImageIOError(Exception):
    """Base class for image file failures."""

    def __init__(self, path: str | Path, message: str) -> None:
        self.path = Path(path)
        super().__init__(f"{self.path}: {message}")


class DecodeError(ImageIOError):
    """Input image is missing, unreadable or not a decodable image."""


class EncodeError(ImageIOError):
    """Output image could not be written."""


def decode(path: str | Path) -> tuple[PixelGrid, int, int]:
    """Read an image file as an RGBA grid.

    Returns:
        (grid, width, height) with grid of shape (height, width, 4), uint8.
    """
    try:
        with Image.open(path) as img:
            grid = np.array(img.convert("RGBA"), dtype=np.uint8)
    except (OSError, ValueError, Image.DecompressionBombError) as e:
        raise DecodeError(path, str(e)) from e

    height, width = grid.shape[:2]
    logger.debug("Decoded %s: %dx%d", path, width, height)
    return grid, width, height


def encode(path: str | Path, pixels: Any, width: int, height: int) -> None:
    """Write an RGBA grid to ``path``; the format follows the file extension."""
    try:
        grid = as_grid(pixels, width, height)
        Image.fromarray(np.ascontiguousarray(grid)).save(path)
    except (OSError, ValueError, KeyError) as e:
        raise EncodeError(path, str(e)) from e
    logger.debug("Encoded %s: %dx%d", path, width, height)
