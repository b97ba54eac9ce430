"""S3.01: Flat Component Map.

Every labeled pixel takes its component's average color; unlabeled pixels
are opaque black.
"""

from __future__ import annotations

from collections.abc import Mapping

import numpy as np
from numpy.typing import NDArray

from regionseg.engine.context import PipelineContext
from regionseg.engine.registry import Layer, transform
from regionseg.models.image import OPAQUE, ComponentRecord, LabelGrid, PixelGrid

UNLABELED_COLOR = (0, 0, 0, OPAQUE)


def _color_table(labels: LabelGrid, components: Mapping[int, ComponentRecord]) -> NDArray[np.uint8]:
    """RGBA lookup table indexed by label id."""
    size = max([int(labels.max()) if labels.size else 0, *components]) + 1
    table = np.empty((size, 4), dtype=np.uint8)
    table[:] = UNLABELED_COLOR
    for component_id, record in components.items():
        if component_id > 0:
            table[component_id] = record.rgba
    return table


def render_component_map(
    labels: LabelGrid,
    components: Mapping[int, ComponentRecord],
) -> PixelGrid:
    labels = np.asarray(labels, dtype=np.int32)
    return _color_table(labels, components)[labels]


@transform(
    id="S3.01",
    layer=Layer.VISUALIZATION,
    dependencies=["S1.01"],
    description="Render flat per-component average-color map",
)
def component_map(ctx: PipelineContext) -> None:
    if ctx.labels is None:
        return
    ctx.component_map = render_component_map(ctx.labels, ctx.components)
