"""
Module: builder.controller

Purpose:
    Orchestrate the complete report export pipeline.
    Materialize → Letterhead → Paginate → Decorate → Render

Key Functions:
    - build_layout(): Pure layout of already materialized blocks
    - build_report(): Main entry point producing the PDF

Key Classes:
    - BuildResult: Complete build result
    - BuildError: Exception for build failures

Dependencies:
    - builder.images: Block materialization
    - builder.layout: Letterhead, pagination and footers
    - builder.output: PDF and semantic document writers

Used By:
    - scripts/build_report.py: Command line export
"""

from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from typing import Optional, Sequence

from report_toolkit import __version__
from report_toolkit.core.models import ContentBlock, InvalidGeometry, Letterhead, PageGeometry

from .config import ReportConfig
from .images import BlockSource, BlockSourceFailure, OutOfRange, materialize_blocks
from .layout import (
    LayoutConfig,
    LayoutError,
    LayoutResult,
    apply_footers,
    compose_letterhead,
    paginate,
)
from .output.renderer import render_to_pdf
from .output.semantic import SEMANTIC_SUFFIX, write_semantic_document

logger = logging.getLogger(__name__)


class BuildError(Exception):
    """Error during build pipeline."""
    pass


@dataclass(frozen=True)
class BuildResult:
    """
    Complete build result (immutable).

    Attributes:
        report_pdf: Path to generated PDF
        semantic_doc: Path to the flat document export (if requested)
        layout: Final decorated layout
        page_count: Number of pages generated
        metadata: Build metadata dictionary
        warnings: Any warnings during build

    Example:
        >>> result = build_report(source, config)
        >>> print(f"Generated {result.page_count} pages")
    """

    report_pdf: Path
    semantic_doc: Optional[Path]
    layout: LayoutResult
    page_count: int
    metadata: dict
    warnings: tuple[str, ...]


def build_layout(
    blocks: Sequence[ContentBlock],
    *,
    geometry: Optional[PageGeometry] = None,
    letterhead: Optional[Letterhead] = None,
    config: Optional[LayoutConfig] = None,
) -> LayoutResult:
    """
    Lay out materialized blocks into decorated pages.

    Args:
        blocks: Blocks in report order
        geometry: Page geometry (A4 default)
        letterhead: Optional page-1 header
        config: Layout configuration

    Returns:
        LayoutResult with letterhead, pages and footers

    Raises:
        InvalidGeometry: If footers cannot fit the bottom band
        DegenerateLayout: If a block cannot be sliced under this geometry

    Example:
        >>> layout = build_layout([block], letterhead=Letterhead(title="Term 2"))
        >>> layout.footers[0].text
        'Page 1 of 1 | Educational Intelligence Report | Powered by EduAnalytics AI'
    """
    geometry = geometry or PageGeometry()
    config = config or LayoutConfig()

    header = compose_letterhead(letterhead, geometry, config)
    layout = paginate(blocks, geometry, config, letterhead=header)
    return apply_footers(layout, geometry, config)


def build_report(source: BlockSource, config: ReportConfig) -> BuildResult:
    """
    Build a report from start to finish.

    Pipeline:
    1. Materialize every block from the source
    2. Compose letterhead, paginate, stamp footers
    3. Render PDF
    4. (Optional) Write semantic document
    5. (Optional) Write build metadata

    Nothing is written until the layout is complete, so a failing build
    leaves no partial document behind.

    Args:
        source: Block source
        config: Build configuration

    Returns:
        BuildResult with paths and metadata

    Raises:
        BuildError: If any step fails (cause chained)
    """
    start_time = time.perf_counter()
    logger.info(f"Starting report build for {config.file_name!r}")

    # 1. Snapshot blocks
    try:
        blocks = materialize_blocks(source)
    except BlockSourceFailure as e:
        raise BuildError(f"Failed to materialize report blocks: {e}") from e

    # 2. Layout
    try:
        layout = build_layout(
            blocks,
            geometry=config.geometry,
            letterhead=config.letterhead,
            config=config.layout,
        )
    except (LayoutError, InvalidGeometry, OutOfRange) as e:
        raise BuildError(f"Failed to lay out report: {e}") from e
    except ValueError as e:
        raise BuildError(f"Invalid report content: {e}") from e

    logger.info(f"Laid out {len(blocks)} blocks onto {layout.page_count} pages")

    # 3. Render PDF
    report_pdf = _dated_output_path(config.output_dir, config.file_name, ".pdf")
    title = config.letterhead.title if config.letterhead and config.letterhead.has_title else None
    try:
        render_to_pdf(
            layout,
            blocks,
            report_pdf,
            config.geometry,
            config.layout,
            letterhead=config.letterhead,
            title=title or config.file_name,
        )
    except OSError as e:
        raise BuildError(f"Failed to write PDF {report_pdf}: {e}") from e

    # 4. Semantic document (optional)
    semantic_doc = None
    if config.semantic_markup is not None:
        try:
            semantic_doc = write_semantic_document(
                config.semantic_markup,
                config.output_dir / f"{config.file_name}{SEMANTIC_SUFFIX}",
                file_name=config.file_name,
                letterhead=config.letterhead,
            )
        except OSError as e:
            raise BuildError(f"Failed to write semantic document: {e}") from e

    elapsed = time.perf_counter() - start_time
    logger.info(f"Report generation completed in {elapsed:.2f}s")

    # 5. Metadata
    metadata = _build_metadata(config, layout, report_pdf)
    if config.write_metadata:
        _write_metadata(config.output_dir, metadata)

    return BuildResult(
        report_pdf=report_pdf,
        semantic_doc=semantic_doc,
        layout=layout,
        page_count=layout.page_count,
        metadata=metadata,
        warnings=tuple(layout.warnings),
    )


def _dated_output_path(output_dir: Path, file_name: str, suffix: str) -> Path:
    """
    Output path stamped with today's date, avoiding overwrites.

    Example:
        >>> _dated_output_path(Path("exports"), "Report", ".pdf")
        Path('exports/Report_2025-01-16.pdf')
    """
    stem = f"{file_name}_{date.today().isoformat()}"
    candidate = output_dir / f"{stem}{suffix}"
    counter = 1
    while candidate.exists():
        candidate = output_dir / f"{stem} ({counter}){suffix}"
        counter += 1
    return candidate


def _build_metadata(config: ReportConfig, layout: LayoutResult, report_pdf: Path) -> dict:
    """
    Build metadata dictionary for a generated report.

    Contains the page geometry, letterhead summary and a manifest of
    every placement (page, block, source rows, drawn box).
    """
    geometry = config.geometry
    manifest = [
        {
            "page": placement.page_index,
            "block_id": placement.block_id,
            "source_offset_px": placement.source_offset_px,
            "source_height_px": placement.source_height_px,
            "x": round(placement.x, 3),
            "y": round(placement.y, 3),
            "width": round(placement.width, 3),
            "height": round(placement.height, 3),
            "partial": placement.is_partial,
        }
        for placement in layout.placements
    ]

    return {
        "generated_at": datetime.now().isoformat(),
        "builder_version": __version__,
        "file": report_pdf.name,
        "page_count": layout.page_count,
        "geometry": {
            "width": geometry.width,
            "height": geometry.height,
            "margins": [
                geometry.margin_top,
                geometry.margin_right,
                geometry.bottom_margin,
                geometry.margin_left,
            ],
        },
        "letterhead": {
            "header_height": layout.letterhead.header_height,
            "has_logo": layout.letterhead.logo is not None,
            "has_title": layout.letterhead.title is not None,
        },
        "warnings": list(layout.warnings),
        "manifest": manifest,
    }


def _write_metadata(output_dir: Path, metadata: dict) -> None:
    """
    Write metadata JSON file to output directory.

    Raises:
        BuildError: If writing fails
    """
    metadata_path = output_dir / "build_metadata.json"

    try:
        with open(metadata_path, "w", encoding="utf-8") as f:
            json.dump(metadata, f, indent=2)
        logger.debug(f"Wrote metadata to {metadata_path}")
    except OSError as e:
        raise BuildError(f"Failed to write metadata: {e}") from e
