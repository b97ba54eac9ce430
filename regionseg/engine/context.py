"""PipelineContext: the single mutable state object flowing through all stages.

Input image → PipelineContext.image
Stage results → edges, labels, components, background, component_map, highlight_map
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import numpy as np

from regionseg.engine.config import PipelineConfig
from regionseg.models.image import ComponentRecord, LabelGrid, PixelGrid, as_grid, opaque_mask


@dataclass
class PipelineContext:
    """Shared state flowing through the entire pipeline."""

    # Source pixels, (height, width, 4) uint8. Read-only for every stage.
    image: PixelGrid = field(default_factory=lambda: np.zeros((0, 0, 4), dtype=np.uint8))
    width: int = 0
    height: int = 0
    config: PipelineConfig = field(default_factory=PipelineConfig)

    # --- Layer 0 ---
    edges: PixelGrid | None = None

    # --- Layer 1 ---
    labels: LabelGrid | None = None
    components: dict[int, ComponentRecord] = field(default_factory=dict)

    # --- Layer 2 ---
    background: ComponentRecord | None = None

    # --- Layer 3 ---
    component_map: PixelGrid | None = None
    highlight_map: PixelGrid | None = None

    # --- Pipeline metadata ---
    completed_transforms: set[str] = field(default_factory=set)
    errors: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_image(
        cls,
        pixels: Any,
        width: int,
        height: int,
        config: PipelineConfig | None = None,
    ) -> PipelineContext:
        grid = as_grid(pixels, width, height)
        return cls(image=grid, width=width, height=height, config=config or PipelineConfig())

    @property
    def num_pixels(self) -> int:
        return self.width * self.height

    @property
    def num_components(self) -> int:
        return len(self.components)

    @property
    def opaque_pixels(self) -> int:
        return int(np.count_nonzero(opaque_mask(self.image)))

    def get_component(self, component_id: int) -> ComponentRecord | None:
        return self.components.get(component_id)
