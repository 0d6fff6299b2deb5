"""
Module: geometry

Purpose:
    Provides the PageGeometry dataclass - the fixed printable page, its
    margins and the usable content box derived from them. All values are
    in millimetres.

Key Functions:
    - PageGeometry.a4(): Standard A4 portrait page used by the dashboard
    - PageGeometry.content_width / content_height: Usable content box

Dependencies:
    - dataclasses (std)

Used By:
    - builder.layout.letterhead: Header placement
    - builder.layout.paginator: Block flow
    - builder.layout.decorator: Footer placement
    - builder.output.renderer: Page size conversion
"""

from __future__ import annotations

from dataclasses import dataclass

# A4 portrait in millimetres
A4_WIDTH_MM = 210.0
A4_HEIGHT_MM = 297.0

# Space always kept free at the page bottom for the running footer
DEFAULT_FOOTER_BAND_MM = 10.0


class InvalidGeometry(ValueError):
    """Page dimensions leave no usable content area."""
    pass


@dataclass(frozen=True, slots=True)
class PageGeometry:
    """
    Fixed page size and margins (immutable).

    The bottom reservation is the larger of ``margin_bottom`` and
    ``footer_band`` so the footer line never competes with content.

    Attributes:
        width: Page width
        height: Page height
        margin_top: Top margin
        margin_bottom: Bottom margin (content never enters it)
        margin_left: Left margin
        margin_right: Right margin
        footer_band: Minimum bottom reservation holding the footer line

    Invariants:
        - width > margin_left + margin_right
        - height > margin_top + bottom_margin

    Example:
        >>> geometry = PageGeometry.a4()
        >>> geometry.content_width
        180.0
        >>> geometry.content_height
        262.0
    """

    width: float = A4_WIDTH_MM
    height: float = A4_HEIGHT_MM
    margin_top: float = 15.0
    margin_bottom: float = 20.0
    margin_left: float = 15.0
    margin_right: float = 15.0
    footer_band: float = DEFAULT_FOOTER_BAND_MM

    def __post_init__(self) -> None:
        """Validate geometry on construction."""
        if self.width <= 0 or self.height <= 0:
            raise InvalidGeometry(
                f"Page size must be positive: {self.width}x{self.height}"
            )
        for name in ("margin_top", "margin_bottom", "margin_left", "margin_right", "footer_band"):
            if getattr(self, name) < 0:
                raise InvalidGeometry(f"{name} must be >= 0: {getattr(self, name)}")
        if self.content_width <= 0:
            raise InvalidGeometry("Margins exceed page width")
        if self.content_height <= 0:
            raise InvalidGeometry("Margins exceed page height")

    @classmethod
    def a4(cls, margin: float = 15.0, margin_bottom: float = 20.0) -> PageGeometry:
        """A4 portrait with equal top/side margins and a deeper bottom band."""
        return cls(
            width=A4_WIDTH_MM,
            height=A4_HEIGHT_MM,
            margin_top=margin,
            margin_bottom=margin_bottom,
            margin_left=margin,
            margin_right=margin,
        )

    # ─────────────────────────────────────────────────────────────────────────
    # Derived dimensions
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def bottom_margin(self) -> float:
        """Bottom reservation including the footer band."""
        return max(self.margin_bottom, self.footer_band)

    @property
    def content_width(self) -> float:
        """Width available for content (excluding side margins)."""
        return self.width - self.margin_left - self.margin_right

    @property
    def content_height(self) -> float:
        """Height available for content on a fresh page."""
        return self.height - self.margin_top - self.bottom_margin

    @property
    def content_left(self) -> float:
        return self.margin_left

    @property
    def content_right(self) -> float:
        return self.width - self.margin_right

    @property
    def page_bottom(self) -> float:
        """Lowest y any content may reach."""
        return self.height - self.bottom_margin
