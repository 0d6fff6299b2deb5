"""
Module: builder

Purpose:
    Report export pipeline: turns rendered dashboard blocks into a
    paginated PDF with a letterhead and running footers.

Key Functions:
    - build_layout(): Letterhead + pagination + footers
    - build_report(): Main entry point for report generation

Key Classes:
    - ReportConfig: Configuration for a build
    - BlockSource: Abstract block supply

Dependencies:
    - PIL: Image manipulation
    - reportlab: PDF generation
    - report_toolkit.core.models: Geometry, letterhead and block models

Used By:
    - scripts/build_report.py
"""

from .config import ReportConfig
from .images import BlockSource, StaticBlockSource, ImageFileBlockSource, BlockSourceFailure
from .controller import build_layout, build_report, BuildResult, BuildError

__all__ = [
    # Config
    "ReportConfig",
    # Sources
    "BlockSource",
    "StaticBlockSource",
    "ImageFileBlockSource",
    "BlockSourceFailure",
    # Controller
    "build_layout",
    "build_report",
    "BuildResult",
    "BuildError",
]
