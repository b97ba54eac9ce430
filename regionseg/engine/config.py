"""Pipeline configuration: numeric knobs of the segmentation stages."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class PipelineConfig:
    """Controls region growing and highlighting."""

    # Region growing: max |dr|+|dg|+|db| from the seed color (exclusive)
    threshold: int = 30

    # Highlighting: per-channel distance from the background average (exclusive)
    background_tolerance: int = 30

    # Number of foreground components listed in the text summary
    summary_limit: int = 10
