"""S1.01: Region Growing.

Connected-component labeling by seeded flood fill. Pixels are scanned in
raster order; every unlabeled opaque pixel seeds a new component that grows
breadth-first over 4-neighbors. A neighbor joins when its L1 RGB distance to
the *seed* color is below the threshold, so region extent depends on where
the seed sits rather than on a locally adaptive tolerance.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Any

import numpy as np

from regionseg.engine.context import PipelineContext
from regionseg.engine.registry import Layer, transform
from regionseg.models.image import ComponentRecord, LabelGrid, as_grid, opaque_mask

logger = logging.getLogger(__name__)

# (dx, dy): left, right, up, down
_NEIGHBORS = ((-1, 0), (1, 0), (0, -1), (0, 1))


def _grow_region(
    colors: list[list[list[int]]],
    opaque: list[list[bool]],
    labels: list[list[int]],
    width: int,
    height: int,
    x: int,
    y: int,
    component_id: int,
    threshold: int,
) -> ComponentRecord:
    """Flood-fill one component from the seed at (x, y) and freeze its stats."""
    queue: deque[tuple[int, int]] = deque([(x, y)])
    labels[y][x] = component_id

    seed_r, seed_g, seed_b = colors[y][x]
    total_r, total_g, total_b = seed_r, seed_g, seed_b
    count = 1

    while queue:
        px, py = queue.popleft()
        for dx, dy in _NEIGHBORS:
            nx, ny = px + dx, py + dy
            if not (0 <= nx < width and 0 <= ny < height):
                continue
            if labels[ny][nx] != 0 or not opaque[ny][nx]:
                continue
            r, g, b = colors[ny][nx]
            if abs(seed_r - r) + abs(seed_g - g) + abs(seed_b - b) < threshold:
                labels[ny][nx] = component_id
                queue.append((nx, ny))
                total_r += r
                total_g += g
                total_b += b
                count += 1

    return ComponentRecord(
        component_id=component_id,
        pixel_count=count,
        avg_color=(total_r // count, total_g // count, total_b // count),
    )


def label_components(
    pixels: Any,
    width: int,
    height: int,
    threshold: int,
) -> tuple[LabelGrid, dict[int, ComponentRecord]]:
    """Label every opaque pixel with a component id.

    Returns:
        (labels, components): an int32 (height, width) label grid with 0 for
        transparent pixels, and the frozen records keyed by id (1..k, in
        raster discovery order).
    """
    grid = as_grid(pixels, width, height)
    components: dict[int, ComponentRecord] = {}
    if width == 0 or height == 0:
        return np.zeros((height, width), dtype=np.int32), components

    # Plain lists: per-pixel numpy indexing dominates the fill otherwise.
    colors = grid[:, :, :3].astype(np.int32).tolist()
    opaque = opaque_mask(grid).tolist()
    labels = [[0] * width for _ in range(height)]

    component_id = 1
    for y in range(height):
        row = labels[y]
        for x in range(width):
            if row[x] == 0 and opaque[y][x]:
                components[component_id] = _grow_region(
                    colors, opaque, labels, width, height, x, y, component_id, threshold
                )
                component_id += 1

    return np.array(labels, dtype=np.int32), components


@transform(
    id="S1.01",
    layer=Layer.REGIONS,
    description="Label connected regions of similar color by seeded flood fill",
)
def region_growing(ctx: PipelineContext) -> None:
    ctx.labels, ctx.components = label_components(
        ctx.image, ctx.width, ctx.height, ctx.config.threshold
    )
    logger.debug(
        "Region growing: %d components over %d opaque pixels (threshold=%d)",
        len(ctx.components),
        ctx.opaque_pixels,
        ctx.config.threshold,
    )
