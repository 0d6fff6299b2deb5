"""
Module: builder.output

Purpose:
    Document emission for the report builder.
    Converts a LayoutResult to PDF with ReportLab, and writes the flat
    Word-compatible export.

Key Functions:
    - render_to_pdf(): Render layout to PDF
    - write_semantic_document(): Non-paginated document export

Dependencies:
    - reportlab: PDF generation
    - PIL: Image handling
    - builder.layout.models: LayoutResult

Used By:
    - builder.controller: Build orchestration
"""

from .renderer import render_to_pdf
from .semantic import render_semantic_document, write_semantic_document

__all__ = [
    "render_to_pdf",
    "render_semantic_document",
    "write_semantic_document",
]
