"""
Module: builder.config

Purpose:
    Configuration dataclass for a complete report build. Immutable
    configuration with validation on construction.

Key Classes:
    - ReportConfig: Main configuration for building a report

Dependencies:
    - dataclasses (std)
    - pathlib (std)

Used By:
    - builder.controller: build_report()
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from report_toolkit.core.models import Letterhead, PageGeometry

from .layout.config import LayoutConfig

_FILE_NAME_PATTERN = re.compile(r"^[A-Za-z0-9_\-. ]+$")


@dataclass(frozen=True)
class ReportConfig:
    """
    Configuration for building a report (immutable).

    Attributes:
        output_dir: Directory receiving the PDF and metadata
        file_name: Base name; the PDF is written as <file_name>_<date>.pdf
        geometry: Page geometry
        layout: Layout configuration
        letterhead: Optional logo/title for page 1
        semantic_markup: If set, also write the flat .doc export with this body
        write_metadata: Write build_metadata.json next to the PDF

    Example:
        >>> config = ReportConfig(
        ...     output_dir=Path("exports"),
        ...     file_name="Term_2_Report",
        ...     letterhead=Letterhead(title="Term 2 Report"),
        ... )
    """

    output_dir: Path
    file_name: str = "Report"
    geometry: PageGeometry = field(default_factory=PageGeometry)
    layout: LayoutConfig = field(default_factory=LayoutConfig)
    letterhead: Optional[Letterhead] = None
    semantic_markup: Optional[str] = None
    write_metadata: bool = True

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if not self.file_name or not _FILE_NAME_PATTERN.match(self.file_name):
            raise ValueError(f"file_name must be a plain file name: {self.file_name!r}")
        if self.file_name.startswith("."):
            raise ValueError(f"file_name must not start with a dot: {self.file_name!r}")
