"""
Module: builder.images.provider

Purpose:
    Interface for supplying rendered report blocks to the layout engine.
    A block source yields fully materialized rasters in report order;
    materialize_blocks() snapshots a source before layout begins so the
    engine itself never waits on rendering.

Key Classes:
    - BlockSource: Abstract base class for block supply
    - StaticBlockSource: Blocks already in memory
    - ImageFileBlockSource: Blocks loaded from raster files
    - BlockSourceFailure: A block could not be materialized

Key Functions:
    - materialize_blocks(): Snapshot a source into an immutable tuple
    - flatten_to_white(): Composite transparency onto a white page

Dependencies:
    - PIL: Image loading and conversion
    - core.models.blocks: ContentBlock

Used By:
    - builder.controller: build_report()
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterable, Iterator, Sequence, Tuple

from PIL import Image

from report_toolkit.core.models import ContentBlock

logger = logging.getLogger(__name__)

PAGE_BACKGROUND = (255, 255, 255)


class BlockSourceFailure(Exception):
    """A block source could not produce a block."""
    pass


class BlockSource(ABC):
    """
    Abstract supplier of rendered blocks.

    An empty source is valid and distinct from a failing one: failures
    raise BlockSourceFailure.
    """

    @abstractmethod
    def iter_blocks(self) -> Iterator[ContentBlock]:
        """
        Yield blocks in report order.

        Raises:
            BlockSourceFailure: If a block cannot be rendered or loaded
        """


class StaticBlockSource(BlockSource):
    """Source over blocks that are already materialized."""

    def __init__(self, blocks: Iterable[ContentBlock]) -> None:
        self._blocks = tuple(blocks)

    def iter_blocks(self) -> Iterator[ContentBlock]:
        return iter(self._blocks)

    def __len__(self) -> int:
        return len(self._blocks)


class ImageFileBlockSource(BlockSource):
    """
    Source that loads each block from a raster file.

    The block id is the file stem; transparent areas are flattened onto
    white, matching the report's page background.

    Example:
        >>> source = ImageFileBlockSource([Path("kpis.png"), Path("scores.png")])
        >>> [b.block_id for b in source.iter_blocks()]
        ['kpis', 'scores']
    """

    def __init__(self, paths: Sequence[Path]) -> None:
        self._paths = [Path(p) for p in paths]

    def iter_blocks(self) -> Iterator[ContentBlock]:
        for path in self._paths:
            yield self._load(path)

    @staticmethod
    def _load(path: Path) -> ContentBlock:
        try:
            with Image.open(path) as img:
                img.load()
                image = flatten_to_white(img)
        except (OSError, ValueError) as e:
            raise BlockSourceFailure(f"Could not load block image {path}: {e}") from e
        logger.debug(f"Loaded block {path.stem!r} ({image.width}x{image.height}px)")
        return ContentBlock.from_image(path.stem, image)


def flatten_to_white(image: Image.Image) -> Image.Image:
    """
    Return an RGB copy of ``image`` with transparency composited on white.

    Args:
        image: Any PIL image

    Returns:
        New RGB image of the same size
    """
    if image.mode in ("RGBA", "LA") or (image.mode == "P" and "transparency" in image.info):
        rgba = image.convert("RGBA")
        background = Image.new("RGB", rgba.size, PAGE_BACKGROUND)
        background.paste(rgba, mask=rgba.getchannel("A"))
        return background
    return image.convert("RGB")


def materialize_blocks(source: BlockSource) -> Tuple[ContentBlock, ...]:
    """
    Snapshot every block of a source before layout.

    Any collaborator error aborts the whole build: no block is skipped
    and no partial list is returned.

    Args:
        source: Block source

    Returns:
        Tuple of blocks in report order (possibly empty)

    Raises:
        BlockSourceFailure: If any block cannot be produced
    """
    blocks = []
    try:
        for block in source.iter_blocks():
            if not isinstance(block, ContentBlock):
                raise BlockSourceFailure(
                    f"Block source produced {type(block).__name__} instead of ContentBlock"
                )
            blocks.append(block)
    except BlockSourceFailure:
        raise
    except Exception as e:
        raise BlockSourceFailure(
            f"Block source failed after {len(blocks)} blocks: {e}"
        ) from e

    logger.info(f"Materialized {len(blocks)} blocks")
    return tuple(blocks)
