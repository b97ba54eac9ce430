"""Command-line entry point: segment one image and write the review images.

Usage:
  regionseg skull.png                      # writes 11_edges.png, 22_components.png, 33_result.png
  regionseg skull.png -o out/ -t 40        # custom output folder and threshold
  regionseg skull.png --summary            # also prints the component summary
  regionseg skull.png --json report.json   # also saves the structured report
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from regionseg.config import Settings
from regionseg.engine.config import PipelineConfig
from regionseg.engine.context import PipelineContext
from regionseg.engine.pipeline import create_pipeline
from regionseg.engine.report import build_report, format_summary
from regionseg.utils.image_io import DecodeError, EncodeError, decode, encode

logger = logging.getLogger(__name__)


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="regionseg",
        description="Edge map, region segmentation and foreground highlighting for one image.",
    )
    parser.add_argument("input", nargs="?", default=settings.regionseg_input, help="input image")
    parser.add_argument(
        "-o", "--output-dir", default=settings.regionseg_output_dir, help="folder for the output images"
    )
    parser.add_argument(
        "-t", "--threshold", type=int, default=settings.regionseg_threshold,
        help="region growing threshold (L1 RGB distance to the seed, exclusive)",
    )
    parser.add_argument("--summary", action="store_true", help="print the component summary")
    parser.add_argument("--json", metavar="PATH", help="save the structured report as JSON")
    return parser


def write_outputs(ctx: PipelineContext, output_dir: Path, settings: Settings) -> list[Path]:
    """Encode every rendered image. Returns the paths that failed."""
    outputs = [
        (settings.regionseg_edges_name, ctx.edges),
        (settings.regionseg_components_name, ctx.component_map),
        (settings.regionseg_result_name, ctx.highlight_map),
    ]
    failed: list[Path] = []
    for name, grid in outputs:
        path = output_dir / name
        if grid is None:
            logger.error("Nothing rendered for %s", path)
            failed.append(path)
            continue
        try:
            encode(path, grid, ctx.width, ctx.height)
            logger.info("Wrote %s", path)
        except EncodeError as e:
            logger.error("Error writing output: %s", e)
            failed.append(path)
    return failed


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    settings = Settings()

    logging.basicConfig(
        level=getattr(logging, settings.regionseg_log_level.upper(), logging.INFO),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    args = build_parser(settings).parse_args(argv)

    try:
        grid, width, height = decode(args.input)
    except DecodeError as e:
        logger.error("Error reading input: %s", e)
        return 1

    config = PipelineConfig(
        threshold=args.threshold,
        background_tolerance=settings.regionseg_background_tolerance,
    )
    ctx = create_pipeline(config).run(PipelineContext.from_image(grid, width, height, config))

    output_dir = Path(args.output_dir)
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.error("Error creating output folder: %s", e)
        return 1
    failed = write_outputs(ctx, output_dir, settings)

    if args.summary:
        print(format_summary(ctx))

    if args.json:
        try:
            Path(args.json).write_text(build_report(ctx).model_dump_json(indent=2), encoding="utf-8")
        except OSError as e:
            logger.error("Error writing report: %s", e)
            return 1

    return 1 if failed or ctx.errors else 0


if __name__ == "__main__":
    sys.exit(main())
