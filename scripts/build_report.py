"""
Build a paginated PDF report from a folder (or list) of rendered block images.

Blocks are laid out in the order given (directories are expanded in
sorted file-name order).

Usage:
    python scripts/build_report.py charts/ -o exports --title "Term 2 Report" --logo logo.png
"""

import argparse
import logging
import sys
from pathlib import Path

from PIL import Image

from report_toolkit.builder import BuildError, ImageFileBlockSource, ReportConfig, build_report
from report_toolkit.builder.layout import LayoutConfig
from report_toolkit.core.models import Letterhead, PageGeometry

IMAGE_SUFFIXES = {".png", ".jpg", ".jpeg", ".webp", ".bmp"}

logging.basicConfig(level=logging.INFO, format="%(asctime)s | %(levelname)s | %(message)s")
logger = logging.getLogger("build_report")


def _collect_images(inputs):
    paths = []
    for item in inputs:
        path = Path(item)
        if path.is_dir():
            paths.extend(sorted(p for p in path.iterdir() if p.suffix.lower() in IMAGE_SUFFIXES))
        else:
            paths.append(path)
    return paths


def _load_logo(path):
    with Image.open(path) as img:
        img.load()
        return img.copy()


def main(argv=None):
    parser = argparse.ArgumentParser(description="Compose block images into a paginated PDF report")
    parser.add_argument("inputs", nargs="+", help="Block image files or directories")
    parser.add_argument("-o", "--output-dir", default="exports", help="Output directory")
    parser.add_argument("--name", default="Report", help="Base file name")
    parser.add_argument("--title", help="Letterhead title")
    parser.add_argument("--logo", help="Letterhead logo image")
    parser.add_argument("--block-gap", type=float, default=8.0, help="Spacing after each block (mm)")
    parser.add_argument("--min-slice", type=float, default=5.0, help="Minimum slice height (mm)")
    parser.add_argument("--caption", help="Footer caption")
    parser.add_argument("--markup", help="HTML body file; also writes the flat .doc export")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    paths = _collect_images(args.inputs)
    logger.info(f"Found {len(paths)} block images")

    layout_kwargs = {"block_gap": args.block_gap, "min_viable_slice": args.min_slice}
    if args.caption:
        layout_kwargs["footer_caption"] = args.caption

    try:
        logo = _load_logo(args.logo) if args.logo else None
        markup = Path(args.markup).read_text(encoding="utf-8") if args.markup else None
        config = ReportConfig(
            output_dir=Path(args.output_dir),
            file_name=args.name,
            geometry=PageGeometry.a4(),
            layout=LayoutConfig(**layout_kwargs),
            letterhead=Letterhead(logo=logo, title=args.title),
            semantic_markup=markup,
        )
    except (OSError, ValueError) as e:
        logger.error(f"Invalid input: {e}")
        return 1

    try:
        result = build_report(ImageFileBlockSource(paths), config)
    except BuildError as e:
        logger.error(str(e))
        return 1

    logger.info(f"Wrote {result.page_count} pages to {result.report_pdf}")
    for warning in result.warnings:
        logger.warning(warning)
    return 0


if __name__ == "__main__":
    sys.exit(main())
