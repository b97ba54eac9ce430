"""Pipeline orchestrator: runs stages in dependency order."""

from __future__ import annotations

import importlib
import logging
import pkgutil
import time

from regionseg.engine.config import PipelineConfig
from regionseg.engine.context import PipelineContext
from regionseg.engine.registry import Layer, TransformRegistry, get_registry

logger = logging.getLogger(__name__)

_STAGE_PACKAGES = ["layer0", "layer1", "layer2", "layer3"]


def register_stages() -> None:
    """Import all stage modules so @transform decorators fire."""
    for layer_name in _STAGE_PACKAGES:
        package = importlib.import_module(f"regionseg.engine.{layer_name}")
        for _, module_name, _ in pkgutil.iter_modules(package.__path__):
            importlib.import_module(f"{package.__name__}.{module_name}")


class Pipeline:
    """Orchestrates the segmentation pipeline."""

    def __init__(
        self,
        registry: TransformRegistry | None = None,
        config: PipelineConfig | None = None,
    ) -> None:
        if registry is None:
            register_stages()
            registry = get_registry()
        self.registry = registry
        self.config = config or PipelineConfig()

    def run(self, ctx: PipelineContext) -> PipelineContext:
        """Run every registered stage on the given context."""
        start = time.perf_counter()
        ctx.config = self.config

        ordered = self.registry.resolve_order()
        logger.info(
            "Pipeline: %d stages queued for %dx%d image",
            len(ordered),
            ctx.width,
            ctx.height,
        )

        for spec in ordered:
            t0 = time.perf_counter()
            try:
                spec.fn(ctx)
                ctx.completed_transforms.add(spec.id)
                elapsed = (time.perf_counter() - t0) * 1000
                logger.debug("  %s completed in %.1fms", spec.id, elapsed)
            except Exception as e:
                ctx.errors[spec.id] = str(e)
                logger.warning("  %s FAILED: %s", spec.id, e)

        total = (time.perf_counter() - start) * 1000
        logger.info(
            "Pipeline complete: %d/%d stages in %.0fms, %d components",
            len(ctx.completed_transforms),
            len(ordered),
            total,
            ctx.num_components,
        )
        return ctx

    def run_layer(self, ctx: PipelineContext, layer: Layer) -> PipelineContext:
        """Run the stages of one layer, plus any dependencies not yet completed."""
        ctx.config = self.config
        requested = {s.id for s in self.registry.get_layer(layer)}
        ordered = self.registry.resolve_order(requested)
        for spec in ordered:
            if spec.id in ctx.completed_transforms and spec.id not in requested:
                continue
            try:
                spec.fn(ctx)
                ctx.completed_transforms.add(spec.id)
            except Exception as e:
                ctx.errors[spec.id] = str(e)
                logger.warning("  %s FAILED: %s", spec.id, e)
        return ctx


def create_pipeline(config: PipelineConfig | None = None) -> Pipeline:
    """Factory function for creating a pipeline instance."""
    return Pipeline(config=config)
