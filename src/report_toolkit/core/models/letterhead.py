"""
Module: letterhead

Purpose:
    Provides the Letterhead dataclass - the optional logo and title shown
    once at the top of the first report page, plus the text direction
    used to align the title.

Key Functions:
    - Letterhead.is_empty: Whether any header content exists
    - Letterhead.resolved_direction: Hint or direction detected from title
    - detect_direction(): Right-to-left detection for a string

Dependencies:
    - PIL.Image (TYPE_CHECKING only)
    - unicodedata (std)

Used By:
    - builder.layout.letterhead: Header composition
    - builder.output.renderer: Logo drawing
    - builder.output.semantic: Document direction
"""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from PIL import Image


# Unicode bidirectional classes of strong right-to-left characters
_RTL_BIDI_CLASSES = frozenset({"R", "AL"})


class TextDirection(Enum):
    """Script direction used for header and document alignment."""

    LTR = "ltr"
    RTL = "rtl"


def detect_direction(text: Optional[str]) -> TextDirection:
    """
    Detect script direction from text content.

    Any strong right-to-left character (Arabic, Hebrew, ...) makes the
    whole string right-to-left.

    Example:
        >>> detect_direction("تقرير الأداء")
        <TextDirection.RTL: 'rtl'>
        >>> detect_direction("Term 2 Report")
        <TextDirection.LTR: 'ltr'>
    """
    if text and any(unicodedata.bidirectional(ch) in _RTL_BIDI_CLASSES for ch in text):
        return TextDirection.RTL
    return TextDirection.LTR


@dataclass(frozen=True)
class Letterhead:
    """
    Report header content (immutable).

    Attributes:
        logo: Institution logo raster, or None
        title: Report title, or None (blank titles count as absent)
        direction: Explicit direction hint; detected from title when None
    """

    logo: Optional[Image.Image] = None
    title: Optional[str] = None
    direction: Optional[TextDirection] = None

    @property
    def has_logo(self) -> bool:
        return self.logo is not None

    @property
    def has_title(self) -> bool:
        return bool(self.title and self.title.strip())

    @property
    def is_empty(self) -> bool:
        """True when neither logo nor title would be drawn."""
        return not (self.has_logo or self.has_title)

    @property
    def resolved_direction(self) -> TextDirection:
        if self.direction is not None:
            return self.direction
        return detect_direction(self.title)

    @property
    def is_rtl(self) -> bool:
        return self.resolved_direction is TextDirection.RTL
