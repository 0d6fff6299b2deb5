"""
Module: builder.output.renderer

Purpose:
    Render a LayoutResult to PDF using ReportLab.
    Each PagePlan becomes one PDF page: page 1 gets the letterhead,
    every page gets its block slices and footer.

Key Functions:
    - render_to_pdf(): Main rendering function

Dependencies:
    - reportlab: PDF generation
    - PIL: Image handling
    - builder.layout.models: LayoutResult, PagePlan
    - builder.images.slicer: slice_block

Used By:
    - builder.controller: build_report()
"""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Dict, Mapping, Optional, Sequence

from PIL import Image
from reportlab.lib.units import mm
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from report_toolkit.core.models import ContentBlock, Letterhead, PageGeometry
from report_toolkit.builder.images.slicer import slice_block
from report_toolkit.builder.layout.config import LayoutConfig
from report_toolkit.builder.layout.models import (
    FooterStamp,
    LayoutResult,
    LetterheadLayout,
    PagePlan,
    SlicePlacement,
)

logger = logging.getLogger(__name__)

# Fonts and colours (RGB 0-255)
TITLE_FONT = "Helvetica"
FOOTER_FONT = "Helvetica"
TITLE_COLOR = (15, 23, 42)  # slate-900
SEPARATOR_COLOR = (226, 232, 240)  # slate-200
FOOTER_COLOR = (148, 163, 184)  # slate-400


def render_to_pdf(
    layout: LayoutResult,
    blocks: Sequence[ContentBlock],
    output_path: Path,
    geometry: PageGeometry,
    config: Optional[LayoutConfig] = None,
    *,
    letterhead: Optional[Letterhead] = None,
    title: Optional[str] = None,
) -> Path:
    """
    Render layout result to PDF file.

    Args:
        layout: Finished (decorated) layout
        blocks: Blocks the layout was built from
        output_path: Path to write PDF
        geometry: Page geometry the layout was built for
        config: Layout configuration (fonts, rule width)
        letterhead: Letterhead content holding the logo raster
        title: PDF document title metadata

    Returns:
        output_path

    Raises:
        ValueError: If a placement references an unknown block
        OSError: If PDF cannot be written

    Example:
        >>> render_to_pdf(layout, blocks, Path("out/report.pdf"), PageGeometry.a4())
    """
    config = config or LayoutConfig()
    block_map = {block.block_id: block for block in blocks}
    _check_block_refs(layout, block_map)

    output_path.parent.mkdir(parents=True, exist_ok=True)

    page_size = (geometry.width * mm, geometry.height * mm)
    c = canvas.Canvas(str(output_path), pagesize=page_size)
    if title:
        c.setTitle(title)

    footers: Dict[int, FooterStamp] = {stamp.page_index: stamp for stamp in layout.footers}

    for page in layout.pages:
        if page.index == 1:
            _draw_letterhead(c, layout.letterhead, letterhead, geometry, config)
        _render_page(c, page, block_map, geometry)
        stamp = footers.get(page.index)
        if stamp is not None:
            _draw_footer(c, stamp, geometry, config)
        c.showPage()

    c.save()

    logger.info(f"Rendered {layout.page_count} pages to {output_path}")
    return output_path


def _check_block_refs(layout: LayoutResult, block_map: Mapping[str, ContentBlock]) -> None:
    for placement in layout.placements:
        if placement.block_id not in block_map:
            raise ValueError(f"Placement references unknown block {placement.block_id!r}")


def _render_page(
    c: canvas.Canvas,
    page: PagePlan,
    block_map: Mapping[str, ContentBlock],
    geometry: PageGeometry,
) -> None:
    """Draw every placement of one page."""
    for placement in page.placements:
        _draw_slice(c, placement, block_map[placement.block_id], geometry)


def _draw_slice(
    c: canvas.Canvas,
    placement: SlicePlacement,
    block: ContentBlock,
    geometry: PageGeometry,
) -> None:
    """
    Draw a whole block or the row range a placement refers to.

    The slice is stretched into its drawn box; its aspect ratio already
    matches because the paginator derived the box from the row count.
    """
    image, _ = slice_block(block, placement.source_offset_px, placement.source_height_px)
    c.drawImage(
        _pil_to_reader(image),
        placement.x * mm,
        _transform_y(geometry.height, placement.y, placement.height),
        width=placement.width * mm,
        height=placement.height * mm,
    )


def _draw_letterhead(
    c: canvas.Canvas,
    composed: LetterheadLayout,
    letterhead: Optional[Letterhead],
    geometry: PageGeometry,
    config: LayoutConfig,
) -> None:
    """Draw logo, title and separator rule of page 1."""
    if composed.is_empty:
        return

    if composed.logo is not None:
        if letterhead is None or letterhead.logo is None:
            logger.warning("Letterhead layout has a logo box but no logo image, skipping logo")
        else:
            box = composed.logo
            logo = letterhead.logo
            if logo.mode not in ("RGB", "RGBA", "L", "LA"):
                logo = logo.convert("RGBA")
            c.drawImage(
                _pil_to_reader(logo),
                box.x * mm,
                _transform_y(geometry.height, box.y, box.height),
                width=box.width * mm,
                height=box.height * mm,
                mask="auto",
            )

    if composed.title is not None:
        title = composed.title
        font_size = _fit_font_size(c, title.text, title.font_size, title.max_width * mm)
        c.saveState()
        c.setFont(TITLE_FONT, font_size)
        c.setFillColorRGB(*_rgb(TITLE_COLOR))
        baseline = (geometry.height - title.y) * mm
        if title.align == "right":
            c.drawRightString(title.x * mm, baseline, title.text)
        else:
            c.drawString(title.x * mm, baseline, title.text)
        c.restoreState()

    if composed.separator_y is not None:
        y_pt = (geometry.height - composed.separator_y) * mm
        c.saveState()
        c.setStrokeColorRGB(*_rgb(SEPARATOR_COLOR))
        c.setLineWidth(config.separator_width * mm)
        c.line(composed.separator_x0 * mm, y_pt, composed.separator_x1 * mm, y_pt)
        c.restoreState()


def _draw_footer(
    c: canvas.Canvas,
    stamp: FooterStamp,
    geometry: PageGeometry,
    config: LayoutConfig,
) -> None:
    """Draw centered footer caption in the bottom band."""
    c.saveState()
    c.setFont(FOOTER_FONT, config.footer_font_size)
    c.setFillColorRGB(*_rgb(FOOTER_COLOR))
    c.drawCentredString(stamp.x * mm, (geometry.height - stamp.y) * mm, stamp.text)
    c.restoreState()


def _fit_font_size(c: canvas.Canvas, text: str, font_size: float, max_width_pt: float) -> float:
    """Shrink the font until the text fits the available width."""
    text_width = c.stringWidth(text, TITLE_FONT, font_size)
    if max_width_pt <= 0 or text_width <= max_width_pt:
        return font_size
    return font_size * max_width_pt / text_width


def _pil_to_reader(img: Image.Image) -> ImageReader:
    """
    Convert PIL image to ReportLab ImageReader.

    Args:
        img: PIL Image object

    Returns:
        ImageReader for use with ReportLab
    """
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    buf.seek(0)
    return ImageReader(buf)


def _rgb(color: tuple[int, int, int]) -> tuple[float, float, float]:
    return tuple(channel / 255.0 for channel in color)


def _transform_y(page_height: float, y_top: float, height: float) -> float:
    """
    Convert a top-down mm coordinate to ReportLab's bottom-up points.

    Args:
        page_height: Page height in mm
        y_top: Top edge in mm from the page top
        height: Element height in mm

    Returns:
        Bottom edge in points from the page bottom
    """
    return (page_height - y_top - height) * mm
