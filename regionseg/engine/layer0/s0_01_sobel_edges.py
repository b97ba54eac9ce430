"""S0.01: Sobel Edge Map.

Gradient magnitude per color channel with the 3×3 Sobel kernels, averaged over
R, G, B into a grayscale opaque image. Only interior pixels are computed;
the 1-pixel border stays zero (transparent black).
"""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import NDArray
from scipy.ndimage import correlate

from regionseg.engine.context import PipelineContext
from regionseg.engine.registry import Layer, transform
from regionseg.models.image import OPAQUE, PixelGrid, as_grid, new_grid

# Kernel cell [dy+1][dx+1] weights the pixel at (y+dy, x+dx).
SOBEL_X = np.array([[-1, 0, 1], [-2, 0, 2], [-1, 0, 1]], dtype=np.int32)
SOBEL_Y = np.array([[1, 2, 1], [0, 0, 0], [-1, -2, -1]], dtype=np.int32)

# A 3×3 window needs at least one pixel on each side.
_MIN_SIDE = 3


def _channel_magnitude(channel: NDArray[np.int32]) -> NDArray[np.int32]:
    """round(sqrt(gx² + gy²)) over the interior of one channel."""
    gx = correlate(channel, SOBEL_X, mode="constant")[1:-1, 1:-1].astype(np.float64)
    gy = correlate(channel, SOBEL_Y, mode="constant")[1:-1, 1:-1].astype(np.float64)
    return np.rint(np.sqrt(gx * gx + gy * gy)).astype(np.int32)


def detect_edges(pixels: Any, width: int, height: int) -> PixelGrid:
    """Grayscale gradient-magnitude image of the same size as the input.

    Alpha is ignored for the gradient; every interior output pixel is opaque.
    """
    grid = as_grid(pixels, width, height)
    out = new_grid(width, height)
    if width < _MIN_SIDE or height < _MIN_SIDE:
        return out

    total = np.zeros((height - 2, width - 2), dtype=np.int32)
    for c in range(3):
        total += _channel_magnitude(grid[:, :, c].astype(np.int32))

    magnitude = np.clip(total // 3, 0, 255).astype(np.uint8)
    interior = out[1:-1, 1:-1]
    interior[:, :, 0] = magnitude
    interior[:, :, 1] = magnitude
    interior[:, :, 2] = magnitude
    interior[:, :, 3] = OPAQUE
    return out


@transform(
    id="S0.01",
    layer=Layer.EDGES,
    description="Compute Sobel gradient-magnitude edge map",
)
def sobel_edges(ctx: PipelineContext) -> None:
    ctx.edges = detect_edges(ctx.image, ctx.width, ctx.height)
