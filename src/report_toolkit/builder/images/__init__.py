"""
Module: builder.images

Purpose:
    Block supply and raster slicing for the report builder.

Key Functions:
    - materialize_blocks(): Snapshot a block source
    - take_rows() / slice_block(): Row-range slicing

Key Classes:
    - BlockSource: Abstract block supplier
    - StaticBlockSource, ImageFileBlockSource: Concrete sources

Dependencies:
    - PIL: Image manipulation

Used By:
    - builder.layout.paginator
    - builder.output.renderer
    - builder.controller
"""

from .slicer import take_rows, slice_block, OutOfRange
from .provider import (
    BlockSource,
    BlockSourceFailure,
    StaticBlockSource,
    ImageFileBlockSource,
    flatten_to_white,
    materialize_blocks,
)

__all__ = [
    "take_rows",
    "slice_block",
    "OutOfRange",
    "BlockSource",
    "BlockSourceFailure",
    "StaticBlockSource",
    "ImageFileBlockSource",
    "flatten_to_white",
    "materialize_blocks",
]
