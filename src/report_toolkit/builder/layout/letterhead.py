"""
Module: builder.layout.letterhead

Purpose:
    Lay out the optional logo and title in the top band of page 1 and
    compute how far down the first content block must start.

Key Functions:
    - compose_letterhead(): Main entry point
    - fit_logo(): Scale a logo into the bounding box

Algorithm:
    1. Scale the logo to the full box width; if that is too tall,
       bind on the box height instead (aspect ratio preserved)
    2. Put the title baseline beside the logo's vertical centre, or a
       fixed offset below margin_top when there is no logo
    3. Anchor left for left-to-right titles, right (mirrored around the
       logo) for right-to-left titles
    4. header_height = max(logo height, title line) + header gap

Dependencies:
    - core.models: PageGeometry, Letterhead
    - builder.layout.config: LayoutConfig

Used By:
    - builder.controller: build_layout()
"""

from __future__ import annotations

import logging
from typing import Optional, Tuple

from report_toolkit.core.models import Letterhead, PageGeometry

from .config import LayoutConfig
from .models import LetterheadLayout, LogoPlacement, TitlePlacement

logger = logging.getLogger(__name__)


def fit_logo(
    pixel_width: int,
    pixel_height: int,
    max_width: float,
    max_height: float,
) -> Tuple[float, float]:
    """
    Scale a logo into a bounding box, preserving aspect ratio.

    Args:
        pixel_width: Logo raster width
        pixel_height: Logo raster height
        max_width: Box width
        max_height: Box height

    Returns:
        (draw_width, draw_height)

    Raises:
        ValueError: If the logo has no pixels

    Example:
        >>> fit_logo(400, 100, 45, 22)   # wide logo, width binds
        (45.0, 11.25)
        >>> fit_logo(100, 100, 45, 22)   # square logo, height binds
        (22.0, 22.0)
    """
    if pixel_width <= 0 or pixel_height <= 0:
        raise ValueError(f"Logo has empty raster: {pixel_width}x{pixel_height}")

    aspect = pixel_width / pixel_height
    draw_width = float(max_width)
    draw_height = max_width / aspect
    if draw_height > max_height:
        draw_height = float(max_height)
        draw_width = max_height * aspect
    return draw_width, draw_height


def compose_letterhead(
    letterhead: Optional[Letterhead],
    geometry: PageGeometry,
    config: LayoutConfig,
) -> LetterheadLayout:
    """
    Compose the page-1 header.

    Args:
        letterhead: Logo/title content, or None for no header
        geometry: Page geometry
        config: Layout configuration

    Returns:
        LetterheadLayout; body_top is margin_top when nothing is drawn

    Example:
        >>> layout = compose_letterhead(Letterhead(logo=square_logo, title="Term 2"), geometry, config)
        >>> layout.header_height
        37.0
    """
    if letterhead is None or letterhead.is_empty:
        return LetterheadLayout(header_height=0.0, body_top=geometry.margin_top)

    rtl = letterhead.is_rtl

    logo: Optional[LogoPlacement] = None
    if letterhead.has_logo:
        draw_w, draw_h = fit_logo(
            letterhead.logo.width,
            letterhead.logo.height,
            config.logo_max_width,
            config.logo_max_height,
        )
        logo_x = geometry.content_right - draw_w if rtl else geometry.content_left
        logo = LogoPlacement(x=logo_x, y=geometry.margin_top, width=draw_w, height=draw_h)

    title: Optional[TitlePlacement] = None
    if letterhead.has_title:
        title = _place_title(letterhead.title.strip(), logo, rtl, geometry, config)

    logo_height = logo.height if logo else 0.0
    header_height = max(logo_height, config.title_line_height) + config.header_gap
    body_top = geometry.margin_top + header_height

    if body_top >= geometry.page_bottom:
        logger.warning(
            f"Letterhead ({header_height:.1f}) leaves no room for content on page 1"
        )

    logger.debug(
        f"Letterhead composed: logo={'yes' if logo else 'no'}, "
        f"title={'yes' if title else 'no'}, rtl={rtl}, header_height={header_height:.2f}"
    )

    return LetterheadLayout(
        header_height=header_height,
        body_top=body_top,
        logo=logo,
        title=title,
        separator_y=body_top,
        separator_x0=geometry.content_left,
        separator_x1=geometry.content_right,
    )


def _place_title(
    text: str,
    logo: Optional[LogoPlacement],
    rtl: bool,
    geometry: PageGeometry,
    config: LayoutConfig,
) -> TitlePlacement:
    """Anchor the title beside the logo (or at the content edge)."""
    if logo is not None:
        baseline = logo.y + logo.height / 2 + config.title_logo_nudge
    else:
        baseline = geometry.margin_top + config.title_baseline_offset

    if rtl:
        anchor = logo.x - config.title_gap if logo else geometry.content_right
        max_width = anchor - geometry.content_left
        align = "right"
    else:
        anchor = logo.x + logo.width + config.title_gap if logo else geometry.content_left
        max_width = geometry.content_right - anchor
        align = "left"

    return TitlePlacement(
        text=text,
        x=anchor,
        y=baseline,
        align=align,
        max_width=max(0.0, max_width),
        font_size=config.title_font_size,
    )
