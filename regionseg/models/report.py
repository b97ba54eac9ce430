"""Structured segmentation report: the machine-readable pipeline summary."""

from __future__ import annotations

from pydantic import BaseModel, Field


class ComponentSummary(BaseModel):
    component_id: int
    pixel_count: int
    area_pct: float = 0.0
    avg_color: tuple[int, int, int] = (0, 0, 0)
    highlight: str | None = None  # palette name, None when background-like


class SegmentationReport(BaseModel):
    width: int
    height: int
    threshold: int
    opaque_pixels: int = 0
    num_components: int = 0
    background: ComponentSummary | None = None
    components: list[ComponentSummary] = Field(default_factory=list)
    completed_stages: list[str] = Field(default_factory=list)
    errors: dict[str, str] = Field(default_factory=dict)
