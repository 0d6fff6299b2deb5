"""
Module: builder.layout.decorator

Purpose:
    Stamp every finished page with a centred footer caption
    ("Page i of n | caption") inside the reserved bottom band.
    Runs after pagination and never moves any placement.

Key Functions:
    - decorate_pages(): Footer stamps for pages 1..page_count
    - apply_footers(): Attach stamps to a LayoutResult

Dependencies:
    - core.models: PageGeometry, InvalidGeometry
    - builder.layout.config: LayoutConfig

Used By:
    - builder.controller: build_layout()
"""

from __future__ import annotations

import dataclasses
import logging

from report_toolkit.core.models import InvalidGeometry, PageGeometry

from .config import LayoutConfig
from .models import FooterStamp, LayoutResult

logger = logging.getLogger(__name__)


def decorate_pages(
    page_count: int,
    geometry: PageGeometry,
    config: LayoutConfig,
) -> tuple[FooterStamp, ...]:
    """
    Build one footer stamp per page.

    Args:
        page_count: Total pages in the document
        geometry: Page geometry
        config: Layout configuration (template, caption, offset)

    Returns:
        Tuple of FooterStamps, page 1 first

    Raises:
        InvalidGeometry: If the footer line falls outside the bottom band
        ValueError: If page_count is not positive

    Example:
        >>> stamps = decorate_pages(3, PageGeometry.a4(), LayoutConfig())
        >>> stamps[0].text.startswith("Page 1 of 3")
        True
    """
    if page_count <= 0:
        raise ValueError(f"page_count must be positive: {page_count}")
    if config.footer_offset > geometry.bottom_margin:
        raise InvalidGeometry(
            f"Footer offset {config.footer_offset} lies outside the "
            f"{geometry.bottom_margin} bottom band"
        )

    x = geometry.width / 2
    y = geometry.height - config.footer_offset
    return tuple(
        FooterStamp(page_index=page, text=config.footer_text(page, page_count), x=x, y=y)
        for page in range(1, page_count + 1)
    )


def apply_footers(
    layout: LayoutResult,
    geometry: PageGeometry,
    config: LayoutConfig,
) -> LayoutResult:
    """Return a copy of ``layout`` with footers for all its pages."""
    footers = decorate_pages(layout.page_count, geometry, config)
    logger.debug(f"Stamped footers on {len(footers)} pages")
    return dataclasses.replace(layout, footers=footers)
