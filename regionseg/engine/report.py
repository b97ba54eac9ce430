"""Pipeline summaries: structured report and human-readable text."""

from __future__ import annotations

from regionseg.engine.context import PipelineContext
from regionseg.engine.layer3.s3_02_highlight_map import near_background
from regionseg.models.image import ComponentRecord, palette_for
from regionseg.models.report import ComponentSummary, SegmentationReport


def _summarize(ctx: PipelineContext, record: ComponentRecord) -> ComponentSummary:
    total = ctx.num_pixels
    highlighted = not near_background(record, ctx.background, ctx.config.background_tolerance)
    return ComponentSummary(
        component_id=record.component_id,
        pixel_count=record.pixel_count,
        area_pct=round(record.pixel_count / total * 100, 2) if total else 0.0,
        avg_color=record.avg_color,
        highlight=palette_for(record.component_id).name if highlighted else None,
    )


def build_report(ctx: PipelineContext) -> SegmentationReport:
    """Structured summary of a finished pipeline run.

    Components are listed largest first, ties by id, capped at
    ``ctx.config.summary_limit`` entries. The background is not repeated in
    the component list.
    """
    bg_id = ctx.background.component_id if ctx.background else None
    ranked = sorted(
        (r for r in ctx.components.values() if r.component_id != bg_id),
        key=lambda r: (-r.pixel_count, r.component_id),
    )
    return SegmentationReport(
        width=ctx.width,
        height=ctx.height,
        threshold=ctx.config.threshold,
        opaque_pixels=ctx.opaque_pixels,
        num_components=ctx.num_components,
        background=_summarize(ctx, ctx.background) if ctx.background else None,
        components=[_summarize(ctx, r) for r in ranked[: ctx.config.summary_limit]],
        completed_stages=sorted(ctx.completed_transforms),
        errors=dict(ctx.errors),
    )


def format_summary(ctx: PipelineContext) -> str:
    """Human-readable output for review."""
    report = build_report(ctx)
    lines = ["=" * 64, "REGION SEGMENTATION RESULTS", "=" * 64]
    lines.append(f"\nImage: {report.width}x{report.height} ({report.opaque_pixels} opaque pixels)")
    lines.append(f"Threshold: {report.threshold}")
    lines.append(f"Components: {report.num_components}")

    bg = report.background
    if bg is None:
        lines.append("\n--- BACKGROUND ---\n  none")
    else:
        lines.append("\n--- BACKGROUND ---")
        lines.append(f"  C{bg.component_id}: {bg.pixel_count} px ({bg.area_pct:.1f}%), color=rgb{bg.avg_color}")

    if report.components:
        lines.append(f"\n--- LARGEST COMPONENTS ({len(report.components)}) ---")
        for c in report.components:
            tag = c.highlight or "background-like"
            lines.append(
                f"  C{c.component_id}: {c.pixel_count} px ({c.area_pct:.1f}%), "
                f"color=rgb{c.avg_color} [{tag}]"
            )

    if report.errors:
        lines.append(f"\n--- ERRORS ({len(report.errors)}) ---")
        for stage_id, message in sorted(report.errors.items()):
            lines.append(f"  {stage_id}: {message}")

    return "\n".join(lines)
