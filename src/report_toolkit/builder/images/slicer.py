"""
Module: builder.images.slicer

Purpose:
    Cut contiguous pixel-row ranges out of content blocks.
    The paginator uses take_rows() to decide how many rows a page gets;
    the PDF renderer uses slice_block() to produce the actual sub-raster.

Key Functions:
    - take_rows(): Rows actually available from an offset
    - slice_block(): Pixel-exact sub-raster of a block

Dependencies:
    - PIL: Image cropping
    - core.models.blocks: ContentBlock

Used By:
    - builder.layout.paginator: Slice sizing
    - builder.output.renderer: Slice drawing
"""

from __future__ import annotations

from typing import Tuple

from PIL import Image

from report_toolkit.core.models import ContentBlock


class OutOfRange(IndexError):
    """Slice offset lies outside the block's pixel rows."""
    pass


def take_rows(block: ContentBlock, offset: int, requested: int) -> int:
    """
    Number of rows a slice starting at ``offset`` actually gets.

    Args:
        block: Source block
        offset: First source row (0-indexed)
        requested: Rows wanted

    Returns:
        min(requested, block.height - offset)

    Raises:
        OutOfRange: If offset is negative or past the last row
        ValueError: If requested is not positive

    Example:
        >>> take_rows(block_300px, 200, 150)
        100
    """
    if offset < 0 or offset >= block.height:
        raise OutOfRange(
            f"Row offset {offset} outside block {block.block_id!r} (height {block.height})"
        )
    if requested <= 0:
        raise ValueError(f"Requested rows must be positive: {requested}")
    return min(requested, block.height - offset)


def slice_block(
    block: ContentBlock,
    offset: int,
    requested: int,
) -> Tuple[Image.Image, int]:
    """
    Copy a row range out of a block.

    Rows [offset, offset + rows) are copied verbatim at the block's full
    width; no resampling takes place.

    Args:
        block: Source block
        offset: First source row
        requested: Rows wanted

    Returns:
        (sub-raster, rows actually taken)

    Raises:
        OutOfRange: If offset is outside the block
        ValueError: If requested is not positive

    Example:
        >>> img, rows = slice_block(block_300px, 100, 500)
        >>> img.size, rows
        ((600, 200), 200)
    """
    rows = take_rows(block, offset, requested)
    if offset == 0 and rows == block.height:
        return block.image.copy(), rows
    box = (0, offset, block.width, offset + rows)
    return block.image.crop(box), rows
