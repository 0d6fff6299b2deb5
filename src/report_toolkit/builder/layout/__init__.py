"""
Module: builder.layout

Purpose:
    Page layout for report export.
    Converts measured content blocks into positioned page layouts with a
    page-1 letterhead and running footers.

Key Functions:
    - compose_letterhead(): Logo/title band of page 1
    - paginate(): Flow blocks onto pages, slicing tall ones
    - decorate_pages(): Footer stamps for every page

Key Classes:
    - LayoutConfig: Configuration for page layout
    - SlicePlacement: Block or block slice on a page
    - PagePlan: Single page layout plan
    - LayoutResult: Complete layout

Dependencies:
    - report_toolkit.core.models: PageGeometry, Letterhead, ContentBlock
    - builder.images.slicer: Row slicing

Used By:
    - builder.controller: Build orchestration
    - builder.output.renderer: PDF emission
"""

from .config import LayoutConfig
from .models import (
    SlicePlacement,
    PagePlan,
    LogoPlacement,
    TitlePlacement,
    LetterheadLayout,
    FooterStamp,
    LayoutResult,
)
from .letterhead import compose_letterhead, fit_logo
from .paginator import paginate, LayoutError, DegenerateLayout
from .decorator import decorate_pages, apply_footers

__all__ = [
    # Config
    "LayoutConfig",
    # Models
    "SlicePlacement",
    "PagePlan",
    "LogoPlacement",
    "TitlePlacement",
    "LetterheadLayout",
    "FooterStamp",
    "LayoutResult",
    # Functions
    "compose_letterhead",
    "fit_logo",
    "paginate",
    "decorate_pages",
    "apply_footers",
    # Errors
    "LayoutError",
    "DegenerateLayout",
]
