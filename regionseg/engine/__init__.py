"""Region segmentation engine."""

from regionseg.engine.registry import transform, Layer, get_registry
from regionseg.engine.context import PipelineContext
from regionseg.engine.config import PipelineConfig
from regionseg.engine.pipeline import Pipeline, create_pipeline

__all__ = [
    "transform",
    "Layer",
    "get_registry",
    "PipelineContext",
    "PipelineConfig",
    "Pipeline",
    "create_pipeline",
]
