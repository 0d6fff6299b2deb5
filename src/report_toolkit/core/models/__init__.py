"""
Core Models Package

Immutable, validated data models shared across the report pipeline.
All models are frozen dataclasses so one build can never leak state
into another.
"""

from .geometry import PageGeometry, InvalidGeometry
from .letterhead import Letterhead, TextDirection, detect_direction
from .blocks import ContentBlock

__all__ = [
    "PageGeometry",
    "InvalidGeometry",
    "Letterhead",
    "TextDirection",
    "detect_direction",
    "ContentBlock",
]
