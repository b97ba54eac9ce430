"""S3.02: Palette Highlight Map.

Foreground components are tinted with a cycling palette color scaled by the
original pixel's luminance, which keeps the texture of the source visible.
Unlabeled pixels and components whose average color is close to the
background average pass through unchanged, alpha included.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import numpy as np
from numpy.typing import NDArray

from regionseg.engine.context import PipelineContext
from regionseg.engine.registry import Layer, transform
from regionseg.models.image import (
    OPAQUE,
    PALETTE,
    ComponentRecord,
    LabelGrid,
    PixelGrid,
    as_grid,
)

# ITU-R BT.601 luma weights. Evaluated in float32 so that truncation matches
# the single-precision reference output byte for byte.
_LUMA_R = np.float32(0.299)
_LUMA_G = np.float32(0.587)
_LUMA_B = np.float32(0.114)
_MAX_CHANNEL = np.float32(255.0)

_PALETTE_RGB = np.array([p.rgb for p in PALETTE], dtype=np.float32)

DEFAULT_BACKGROUND_TOLERANCE = 30


def luminance(grid: PixelGrid) -> NDArray[np.float32]:
    """Per-pixel (0.299R + 0.587G + 0.114B) / 255 in [0, 1]."""
    rgb = grid[:, :, :3].astype(np.float32)
    return (rgb[:, :, 0] * _LUMA_R + rgb[:, :, 1] * _LUMA_G + rgb[:, :, 2] * _LUMA_B) / _MAX_CHANNEL


def near_background(
    record: ComponentRecord,
    background: ComponentRecord | None,
    tolerance: int = DEFAULT_BACKGROUND_TOLERANCE,
) -> bool:
    """True when every channel of the average is within ``tolerance`` (exclusive)."""
    if background is None:
        return False
    return all(abs(a - b) < tolerance for a, b in zip(record.avg_color, background.avg_color))


def render_highlight_map(
    pixels: Any,
    labels: LabelGrid,
    components: Mapping[int, ComponentRecord],
    background: ComponentRecord | None,
    tolerance: int = DEFAULT_BACKGROUND_TOLERANCE,
) -> PixelGrid:
    labels = np.asarray(labels, dtype=np.int32)
    height, width = labels.shape
    grid = as_grid(pixels, width, height)
    out = grid.copy()
    if not components:
        return out

    size = max([int(labels.max()) if labels.size else 0, *components]) + 1
    tinted_ids = np.zeros(size, dtype=np.bool_)
    for component_id, record in components.items():
        if component_id > 0 and not near_background(record, background, tolerance):
            tinted_ids[component_id] = True

    mask = tinted_ids[labels]
    if not mask.any():
        return out

    palette_idx = (labels[mask] - 1) % len(PALETTE)
    lum = luminance(grid)[mask]
    tinted = _PALETTE_RGB[palette_idx] * lum[:, None]
    out[mask, :3] = np.clip(tinted, 0, 255).astype(np.uint8)
    out[mask, 3] = OPAQUE
    return out


@transform(
    id="S3.02",
    layer=Layer.VISUALIZATION,
    dependencies=["S1.01", "S2.01"],
    description="Render palette highlight map of foreground components",
)
def highlight_map(ctx: PipelineContext) -> None:
    if ctx.labels is None:
        return
    ctx.highlight_map = render_highlight_map(
        ctx.image,
        ctx.labels,
        ctx.components,
        ctx.background,
        ctx.config.background_tolerance,
    )
