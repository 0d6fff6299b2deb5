"""
Module: blocks

Purpose:
    Provides the ContentBlock dataclass - one rendered unit of report
    content (chart, table, KPI card) held as an opaque raster of known
    pixel size. Blocks are always drawn at full content width.

Key Functions:
    - ContentBlock.from_image(): Build a block from a PIL image
    - ContentBlock.scale_for(): Linear units per source pixel
    - ContentBlock.drawn_height(): Height once scaled to content width

Dependencies:
    - PIL: Image type

Used By:
    - builder.images.provider: Block sources
    - builder.images.slicer: Row slicing
    - builder.layout.paginator: Block flow
"""

from __future__ import annotations

from dataclasses import dataclass

from PIL import Image


@dataclass(frozen=True)
class ContentBlock:
    """
    Rendered report block (immutable).

    Attributes:
        block_id: Identifier carried into placements
        image: Source raster (never modified)
        width: Raster width in pixels
        height: Raster height in pixels

    Example:
        >>> block = ContentBlock.from_image("kpis", Image.new("RGB", (900, 300)))
        >>> block.drawn_height(180.0)
        60.0
    """

    block_id: str
    image: Image.Image
    width: int
    height: int

    def __post_init__(self) -> None:
        """Validate dimensions on construction."""
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"Block {self.block_id!r} has empty raster: {self.width}x{self.height}"
            )
        if tuple(self.image.size) != (self.width, self.height):
            raise ValueError(
                f"Block {self.block_id!r} size {self.width}x{self.height} "
                f"does not match image size {self.image.size}"
            )

    @classmethod
    def from_image(cls, block_id: str, image: Image.Image) -> ContentBlock:
        return cls(block_id=block_id, image=image, width=image.width, height=image.height)

    def scale_for(self, content_width: float) -> float:
        """Linear units per source pixel when drawn at ``content_width``."""
        return content_width / self.width

    def drawn_height(self, content_width: float) -> float:
        """Height of the whole block when drawn at ``content_width``."""
        return self.height * self.scale_for(content_width)

    def __repr__(self) -> str:
        return f"ContentBlock({self.block_id!r}, {self.width}x{self.height})"
