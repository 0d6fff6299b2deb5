"""
Module: builder.output.semantic

Purpose:
    Export the report as a single flat, Word-compatible HTML document
    (letterhead + raw body markup, no pagination). Shares the letterhead
    direction rule with the PDF layout: right-to-left titles switch the
    whole document to right-to-left.

Key Functions:
    - render_semantic_document(): Build the document text
    - write_semantic_document(): Write it to disk with a UTF-8 BOM

Dependencies:
    - PIL: Logo encoding
    - core.models.letterhead: Letterhead

Used By:
    - builder.controller: build_report() (optional output)
"""

from __future__ import annotations

import base64
import html
import io
import logging
from pathlib import Path
from typing import Optional

from PIL import Image

from report_toolkit.core.models import Letterhead

logger = logging.getLogger(__name__)

SEMANTIC_SUFFIX = ".doc"

_STYLE = """
        body {{ font-family: 'Segoe UI', Calibri, sans-serif; padding: 20px; direction: {direction}; }}
        table {{ border-collapse: collapse; width: 100%; margin-bottom: 20px; }}
        th, td {{ border: 1px solid #cbd5e1; padding: 10px; text-align: {align}; }}
        th {{ background-color: #f8fafc; color: #1e293b; font-weight: bold; }}
        h1 {{ color: #0f172a; font-size: 28px; border-bottom: 2px solid #e2e8f0; padding-bottom: 10px; }}
        h2 {{ color: #334155; font-size: 22px; margin-top: 30px; }}
        .logo-container {{ text-align: {logo_align}; margin-bottom: 20px; }}
        .logo-img {{ max-height: 80px; max-width: 180px; }}
"""


def render_semantic_document(
    body_markup: str,
    *,
    file_name: str,
    letterhead: Optional[Letterhead] = None,
) -> str:
    """
    Build the Word-compatible HTML document.

    Args:
        body_markup: Report body as HTML markup (inserted verbatim)
        file_name: Base file name; used as fallback title
        letterhead: Optional logo/title

    Returns:
        Complete document text

    Example:
        >>> doc = render_semantic_document("<p>Scores</p>", file_name="term_2_report")
        >>> "<h1>term 2 report</h1>" in doc
        True
    """
    letterhead = letterhead or Letterhead()
    rtl = letterhead.is_rtl
    direction = "rtl" if rtl else "ltr"

    title_text = letterhead.title.strip() if letterhead.has_title else file_name.replace("_", " ")
    style = _STYLE.format(
        direction=direction,
        align="right" if rtl else "left",
        logo_align="right" if rtl else "left",
    )

    logo_html = ""
    if letterhead.has_logo:
        logo_html = f'<img src="{_logo_data_uri(letterhead.logo)}" class="logo-img" />'

    return (
        "<html xmlns:o='urn:schemas-microsoft-com:office:office' "
        "xmlns:w='urn:schemas-microsoft-com:office:word' "
        "xmlns='http://www.w3.org/TR/REC-html40'>\n"
        f"<head><meta charset='utf-8'><title>{html.escape(file_name)}</title>\n"
        f"<style>{style}</style>\n"
        "</head>\n"
        f"<body dir='{direction}'>\n"
        f'<div class="logo-container">{logo_html}</div>\n'
        f"<h1>{html.escape(title_text)}</h1>\n"
        f"{body_markup}\n"
        "</body></html>"
    )


def write_semantic_document(
    body_markup: str,
    output_path: Path,
    *,
    file_name: str,
    letterhead: Optional[Letterhead] = None,
) -> Path:
    """
    Write the semantic document (UTF-8 with BOM so Word detects encoding).

    Returns:
        Path written (".doc" appended unless already present)
    """
    if output_path.suffix != SEMANTIC_SUFFIX:
        output_path = output_path.with_name(output_path.name + SEMANTIC_SUFFIX)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    document = render_semantic_document(body_markup, file_name=file_name, letterhead=letterhead)
    output_path.write_text(document, encoding="utf-8-sig")

    logger.info(f"Wrote semantic document to {output_path}")
    return output_path


def _logo_data_uri(logo: Image.Image) -> str:
    """Encode a logo as a base64 PNG data URI."""
    buf = io.BytesIO()
    if logo.mode not in ("RGB", "RGBA", "L", "LA"):
        logo = logo.convert("RGBA")
    logo.save(buf, format="PNG")
    return "data:image/png;base64," + base64.b64encode(buf.getvalue()).decode("ascii")
