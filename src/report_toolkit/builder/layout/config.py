"""
Module: builder.layout.config

Purpose:
    Configuration for the report layout engine.
    Names every spacing, threshold and header/footer metric used when
    composing the letterhead, flowing blocks and stamping footers.

Key Classes:
    - LayoutConfig: Immutable layout configuration

Dependencies:
    - dataclasses (std)

Used By:
    - builder.layout.letterhead: Header metrics
    - builder.layout.paginator: Block spacing and slicing thresholds
    - builder.layout.decorator: Footer text and position
    - builder.output.renderer: Fonts and colours
"""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_FOOTER_TEMPLATE = "Page {page} of {total} | {caption}"
DEFAULT_FOOTER_CAPTION = "Educational Intelligence Report | Powered by EduAnalytics AI"


@dataclass(frozen=True)
class LayoutConfig:
    """
    Configuration for report layout (immutable).

    Linear values share the page geometry's unit (millimetres).

    Attributes:
        block_gap: Vertical spacing after each block
        min_viable_slice: Smallest slice worth drawing on a partly used page
        slice_epsilon_px: Remaining source rows tolerated before forcing a page break
        logo_max_width: Logo bounding box width
        logo_max_height: Logo bounding box height
        title_line_height: Vertical band reserved for the title line
        header_gap: Space between the header band and the first block
        title_gap: Horizontal gap between logo and title
        title_baseline_offset: Title baseline below margin_top without a logo
        title_logo_nudge: Title baseline below the logo's vertical centre
        title_font_size: Title size in points
        separator_width: Header rule thickness
        footer_offset: Footer baseline distance above the page bottom
        footer_font_size: Footer size in points
        footer_template: Footer format string ({page}, {total}, {caption})
        footer_caption: Fixed product caption

    Example:
        >>> config = LayoutConfig(block_gap=4.0)
        >>> config.footer_text(2, 5)
        'Page 2 of 5 | Educational Intelligence Report | Powered by EduAnalytics AI'
    """

    # Flow
    block_gap: float = 8.0
    min_viable_slice: float = 5.0
    slice_epsilon_px: int = 10

    # Letterhead
    logo_max_width: float = 45.0
    logo_max_height: float = 22.0
    title_line_height: float = 15.0
    header_gap: float = 15.0
    title_gap: float = 5.0
    title_baseline_offset: float = 10.0
    title_logo_nudge: float = 4.0
    title_font_size: float = 24.0
    separator_width: float = 0.5

    # Footer
    footer_offset: float = 10.0
    footer_font_size: float = 8.0
    footer_template: str = DEFAULT_FOOTER_TEMPLATE
    footer_caption: str = DEFAULT_FOOTER_CAPTION

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        for name in (
            "block_gap",
            "min_viable_slice",
            "slice_epsilon_px",
            "header_gap",
            "title_gap",
            "title_line_height",
        ):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative: {getattr(self, name)}")
        if self.logo_max_width <= 0 or self.logo_max_height <= 0:
            raise ValueError(
                f"Logo box must be positive: {self.logo_max_width}x{self.logo_max_height}"
            )
        if self.footer_offset < 0:
            raise ValueError(f"footer_offset must be non-negative: {self.footer_offset}")

    def footer_text(self, page: int, total: int) -> str:
        """Footer caption for one page."""
        return self.footer_template.format(page=page, total=total, caption=self.footer_caption)
