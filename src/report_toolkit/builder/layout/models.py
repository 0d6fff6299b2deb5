"""
Module: builder.layout.models

Purpose:
    Data models for report layout.
    Immutable dataclasses representing block placements, pages, the
    composed letterhead and footer stamps.

Key Classes:
    - SlicePlacement: A whole block or a block slice positioned on a page
    - PagePlan: Complete page layout
    - LetterheadLayout: Composed header of page 1
    - FooterStamp: Footer caption for one page
    - LayoutResult: Final layout output

Dependencies:
    - dataclasses (std)

Used By:
    - builder.layout.paginator: Creates PagePlans
    - builder.layout.letterhead: Creates LetterheadLayout
    - builder.layout.decorator: Creates FooterStamps
    - builder.output.renderer: Draws LayoutResult
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Optional


@dataclass(frozen=True)
class SlicePlacement:
    """
    A block, or a contiguous row range of it, positioned on a page.

    Coordinates are top-down from the page's top-left corner.

    Attributes:
        page_index: Page number (1-indexed)
        x: Left edge
        y: Top edge
        width: Drawn width (always the content width)
        height: Drawn height
        block_id: Source block identifier
        source_offset_px: First source pixel row drawn
        source_height_px: Number of source pixel rows drawn
        is_partial: True when only part of the block is drawn here

    Example:
        >>> placement = SlicePlacement(1, 15.0, 15.0, 180.0, 100.0, "chart", 0, 500)
        >>> placement.bottom
        115.0
    """

    page_index: int
    x: float
    y: float
    width: float
    height: float
    block_id: str
    source_offset_px: int
    source_height_px: int
    is_partial: bool = False

    @property
    def bottom(self) -> float:
        """Bottom Y coordinate (y + height)."""
        return self.y + self.height

    @property
    def source_end_px(self) -> int:
        """First source row after this placement."""
        return self.source_offset_px + self.source_height_px


@dataclass(frozen=True)
class PagePlan:
    """
    Complete layout plan for a single page.

    Attributes:
        index: Page number (1-indexed)
        placements: Tuple of SlicePlacements on this page, top to bottom
    """

    index: int
    placements: tuple[SlicePlacement, ...] = ()

    @property
    def placement_count(self) -> int:
        return len(self.placements)

    @property
    def is_empty(self) -> bool:
        """Check if page has no placements."""
        return len(self.placements) == 0


@dataclass(frozen=True)
class LogoPlacement:
    """Logo box on page 1 (top-down coordinates)."""

    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class TitlePlacement:
    """
    Title line on page 1.

    ``x`` is the anchor: the left end of the text when ``align`` is
    "left", the right end when it is "right". ``y`` is the baseline.
    """

    text: str
    x: float
    y: float
    align: str
    max_width: float
    font_size: float


@dataclass(frozen=True)
class LetterheadLayout:
    """
    Composed page-1 header.

    Attributes:
        header_height: Vertical space consumed below margin_top
        body_top: Earliest y for the first block on page 1
        logo: Logo box, or None
        title: Title line, or None
        separator_y: Y of the full-width rule, or None without a header
        separator_x0: Left end of the rule
        separator_x1: Right end of the rule
    """

    header_height: float
    body_top: float
    logo: Optional[LogoPlacement] = None
    title: Optional[TitlePlacement] = None
    separator_y: Optional[float] = None
    separator_x0: float = 0.0
    separator_x1: float = 0.0

    @property
    def is_empty(self) -> bool:
        return self.logo is None and self.title is None


@dataclass(frozen=True)
class FooterStamp:
    """Centred footer caption; ``y`` is the baseline, ``x`` the centre."""

    page_index: int
    text: str
    x: float
    y: float


@dataclass(frozen=True)
class LayoutResult:
    """
    Final layout output with diagnostics.

    Attributes:
        pages: Tuple of PagePlans, indices 1..page_count
        letterhead: Composed header of page 1
        footers: One FooterStamp per page (empty until decorated)
        warnings: List of warning messages

    Example:
        >>> result.page_count
        2
        >>> [p.page_index for p in result.placements_for("scores")]
        [1, 2]
    """

    pages: tuple[PagePlan, ...]
    letterhead: LetterheadLayout
    footers: tuple[FooterStamp, ...] = ()
    warnings: list[str] = field(default_factory=list)

    @property
    def page_count(self) -> int:
        """Number of pages in layout."""
        return len(self.pages)

    @property
    def total_placements(self) -> int:
        """Total number of placements across all pages."""
        return sum(p.placement_count for p in self.pages)

    @property
    def placements(self) -> Iterator[SlicePlacement]:
        """All placements in page order."""
        for page in self.pages:
            yield from page.placements

    def placements_for(self, block_id: str) -> list[SlicePlacement]:
        """Placements drawing the given block, in order."""
        return [p for p in self.placements if p.block_id == block_id]
