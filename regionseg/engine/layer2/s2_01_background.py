"""S2.01: Background Selection.

The background is the component covering the most pixels. Ties go to the
lowest id.
"""

from __future__ import annotations

from collections.abc import Mapping

from regionseg.engine.context import PipelineContext
from regionseg.engine.registry import Layer, transform
from regionseg.models.image import ComponentRecord


def find_background(components: Mapping[int, ComponentRecord]) -> ComponentRecord | None:
    """Largest component by pixel count, or None when there are no components."""
    background: ComponentRecord | None = None
    for component_id in sorted(components):
        if component_id < 1:
            continue
        record = components[component_id]
        if background is None or record.pixel_count > background.pixel_count:
            background = record
    return background


@transform(
    id="S2.01",
    layer=Layer.CLASSIFICATION,
    dependencies=["S1.01"],
    description="Select the dominant component as background",
)
def background(ctx: PipelineContext) -> None:
    ctx.background = find_background(ctx.components)
