"""Pixel-level data model shared by every stage.

A pixel grid is a ``uint8`` array of shape ``(height, width, 4)`` holding
RGBA samples in row-major order with the origin at the top-left corner.
A label grid is an ``int32`` array of shape ``(height, width)`` where 0 means
"unassigned" and ids >= 1 are component ids.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray

PixelGrid = NDArray[np.uint8]
LabelGrid = NDArray[np.int32]
RGB = tuple[int, int, int]

CHANNELS = 4

# Pixels at or below this alpha are transparent and never labeled.
ALPHA_CUTOFF = 128

OPAQUE = 255


@dataclass(frozen=True)
class PaletteColor:
    name: str
    rgb: RGB


# Highlight colors, cycled by (component_id - 1) % len(PALETTE).
PALETTE: tuple[PaletteColor, ...] = (
    PaletteColor("red", (255, 0, 0)),
    PaletteColor("violet", (174, 0, 255)),
    PaletteColor("green", (0, 255, 0)),
    PaletteColor("magenta", (255, 0, 170)),
    PaletteColor("blue", (0, 0, 255)),
)


def palette_for(component_id: int) -> PaletteColor:
    return PALETTE[(component_id - 1) % len(PALETTE)]


@dataclass(frozen=True)
class ComponentRecord:
    """Frozen statistics of one connected component."""

    component_id: int
    pixel_count: int
    avg_color: RGB  # truncated channel means

    @property
    def rgba(self) -> tuple[int, int, int, int]:
        return (*self.avg_color, OPAQUE)


def new_grid(width: int, height: int) -> PixelGrid:
    """Zero-initialized (transparent black) pixel grid."""
    return np.zeros((height, width, CHANNELS), dtype=np.uint8)


def as_grid(pixels: Any, width: int, height: int) -> PixelGrid:
    """Coerce ``pixels`` to a ``(height, width, 4)`` uint8 array.

    Accepts an existing grid, a flat row-major byte sequence of length
    ``width * height * 4``, or a sequence of ``width * height`` RGBA tuples.
    Raises ValueError when the number of samples or the array shape does not
    match, or when a sample does not fit in a byte.
    """
    if width < 0 or height < 0:
        raise ValueError(f"Invalid grid size {width}x{height}")
    if isinstance(pixels, (bytes, bytearray, memoryview)):
        arr = np.frombuffer(pixels, dtype=np.uint8)
    else:
        try:
            arr = np.asarray(pixels, dtype=np.uint8)
        except OverflowError as e:
            raise ValueError(f"Pixel data out of range for uint8: {e}") from e
    if arr.ndim == 3 and arr.shape != (height, width, CHANNELS):
        raise ValueError(f"Grid shape {arr.shape} does not match {width}x{height} RGBA")
    expected = width * height * CHANNELS
    if arr.size != expected:
        raise ValueError(
            f"Pixel data has {arr.size} samples, expected {expected} for {width}x{height} RGBA"
        )
    return arr.reshape(height, width, CHANNELS)


def opaque_mask(grid: PixelGrid) -> NDArray[np.bool_]:
    return grid[:, :, 3] > ALPHA_CUTOFF
