"""
Module: builder.layout.paginator

Purpose:
    Flow content blocks onto fixed-size pages, top to bottom, in input
    order. Blocks taller than a whole page are sliced across pages.

Key Functions:
    - paginate(): Main pagination function

Algorithm:
    For each block, scaled to the full content width:
    1. If it fits in the space left on the current page, place it whole
    2. Else if it fits on a fresh page, start one and place it whole
       (a block that fits a page is never split)
    3. Else slice it: each page gets as many source rows as fit; a slice
       thinner than min_viable_slice is pushed to a fresh page instead of
       being drawn as a sliver below existing content
    A block_gap follows every block, capped at the page bottom.

Dependencies:
    - core.models: PageGeometry, ContentBlock
    - builder.images.slicer: take_rows
    - builder.layout.config: LayoutConfig
    - builder.layout.models: SlicePlacement, PagePlan, LayoutResult

Used By:
    - builder.controller: build_layout()
"""

from __future__ import annotations

import logging
import math
from typing import List, Optional, Sequence

from report_toolkit.core.models import ContentBlock, PageGeometry
from report_toolkit.builder.images.slicer import take_rows

from .config import LayoutConfig
from .models import LayoutResult, LetterheadLayout, PagePlan, SlicePlacement

logger = logging.getLogger(__name__)

# Floating tolerance for linear comparisons
EPSILON = 1e-6


class LayoutError(Exception):
    """Error while flowing blocks onto pages."""
    pass


class DegenerateLayout(LayoutError):
    """A block cannot yield a non-empty slice on a fresh page."""
    pass


class _Cursor:
    """Current page and vertical write position of one paginate() call."""

    def __init__(self, geometry: PageGeometry, start_y: float) -> None:
        self.geometry = geometry
        self.page = 1
        self.y = start_y
        self.pages: List[List[SlicePlacement]] = [[]]

    @property
    def space_left(self) -> float:
        return self.geometry.page_bottom - self.y

    @property
    def has_content(self) -> bool:
        """Anything (letterhead or blocks) already above the cursor."""
        return self.y > self.geometry.margin_top + EPSILON

    def new_page(self) -> None:
        self.page += 1
        self.y = self.geometry.margin_top
        self.pages.append([])

    def place(
        self,
        block: ContentBlock,
        height: float,
        offset: int,
        rows: int,
        *,
        partial: bool,
    ) -> SlicePlacement:
        placement = SlicePlacement(
            page_index=self.page,
            x=self.geometry.content_left,
            y=self.y,
            width=self.geometry.content_width,
            height=height,
            block_id=block.block_id,
            source_offset_px=offset,
            source_height_px=rows,
            is_partial=partial,
        )
        self.pages[-1].append(placement)
        self.y = min(self.y + height, self.geometry.page_bottom)
        return placement

    def advance(self, gap: float) -> None:
        self.y = min(self.y + gap, self.geometry.page_bottom)


def paginate(
    blocks: Sequence[ContentBlock],
    geometry: PageGeometry,
    config: LayoutConfig,
    letterhead: Optional[LetterheadLayout] = None,
) -> LayoutResult:
    """
    Arrange blocks onto pages.

    Page 1 content starts at ``letterhead.body_top`` (margin_top without
    a letterhead); every later page starts at margin_top. An empty block
    list still yields one page.

    Args:
        blocks: Blocks in report order
        geometry: Page geometry
        config: Layout configuration
        letterhead: Composed page-1 header, or None

    Returns:
        LayoutResult with pages 1..page_count (footers not yet stamped)

    Raises:
        DegenerateLayout: If a full page maps to zero source rows of a block
        ValueError: If two blocks share an id
    """
    if letterhead is None:
        letterhead = LetterheadLayout(header_height=0.0, body_top=geometry.margin_top)

    _check_unique_ids(blocks)

    cursor = _Cursor(geometry, letterhead.body_top)
    warnings: List[str] = []

    for block in blocks:
        scale = block.scale_for(geometry.content_width)
        drawn = block.height * scale

        if drawn <= cursor.space_left + EPSILON:
            cursor.place(block, drawn, 0, block.height, partial=False)
        elif drawn <= geometry.content_height + EPSILON:
            _leave_page(cursor, warnings)
            cursor.new_page()
            cursor.place(block, drawn, 0, block.height, partial=False)
        else:
            _flow_tall_block(block, scale, cursor, geometry, config, warnings)

        cursor.advance(config.block_gap)

    pages = tuple(
        PagePlan(index=i, placements=tuple(placements))
        for i, placements in enumerate(cursor.pages, start=1)
    )

    logger.info(f"Paginated {len(blocks)} blocks onto {len(pages)} pages")

    return LayoutResult(pages=pages, letterhead=letterhead, warnings=warnings)


def _flow_tall_block(
    block: ContentBlock,
    scale: float,
    cursor: _Cursor,
    geometry: PageGeometry,
    config: LayoutConfig,
    warnings: List[str],
) -> None:
    """
    Slice a block taller than one page across as many pages as needed.

    Every source row is placed exactly once.
    """
    px_per_unit = 1.0 / scale
    offset = 0
    remaining = block.height

    while remaining > 0:
        available = geometry.content_height if not cursor.has_content else cursor.space_left
        rows = math.floor(max(0.0, available) * px_per_unit + EPSILON)
        candidate = min(rows, remaining)

        if candidate <= 0 or candidate * scale < config.min_viable_slice:
            if cursor.has_content:
                logger.debug(
                    f"Block {block.block_id!r}: {candidate}px slice below minimum "
                    f"on page {cursor.page}, moving to next page"
                )
                _leave_page(cursor, warnings)
                cursor.new_page()
                continue
            if candidate <= 0:
                raise DegenerateLayout(
                    f"Block {block.block_id!r} ({block.width}x{block.height}px) maps a full "
                    f"page of {geometry.content_height:.2f} to zero source rows"
                )

        taken = take_rows(block, offset, candidate)
        placement = cursor.place(block, taken * scale, offset, taken, partial=True)
        logger.debug(
            f"Block {block.block_id!r}: rows {offset}-{offset + taken} on page "
            f"{placement.page_index} at y={placement.y:.2f}"
        )
        offset += taken
        remaining -= taken

        if remaining > config.slice_epsilon_px:
            cursor.new_page()


def _leave_page(cursor: _Cursor, warnings: List[str]) -> None:
    """Record pages abandoned without any block on them."""
    if not cursor.pages[-1]:
        message = f"Page {cursor.page} holds no content blocks"
        logger.warning(message)
        warnings.append(message)


def _check_unique_ids(blocks: Sequence[ContentBlock]) -> None:
    seen = set()
    for block in blocks:
        if block.block_id in seen:
            raise ValueError(f"Duplicate block id: {block.block_id!r}")
        seen.add(block.block_id)
