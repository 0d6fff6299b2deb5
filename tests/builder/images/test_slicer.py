"""
Tests for builder.images.slicer

Test Coverage:
- take_rows(): clamping and range checks
- slice_block(): pixel-exact row copies
"""

import pytest
from PIL import Image

from report_toolkit.builder.images.slicer import OutOfRange, slice_block, take_rows
from report_toolkit.core.models import ContentBlock


@pytest.fixture
def striped_block():
    """10 rows, each row's red channel equals its row index."""
    img = Image.new("RGB", (4, 10))
    for y in range(10):
        for x in range(4):
            img.putpixel((x, y), (y, 0, 0))
    return ContentBlock.from_image("striped", img)


def test_take_rows_when_enough_rows_then_requested(striped_block):
    assert take_rows(striped_block, 2, 5) == 5


def test_take_rows_when_past_end_then_clamped(striped_block):
    assert take_rows(striped_block, 7, 5) == 3


def test_take_rows_when_offset_at_height_then_out_of_range(striped_block):
    with pytest.raises(OutOfRange):
        take_rows(striped_block, 10, 1)


def test_take_rows_when_negative_offset_then_out_of_range(striped_block):
    with pytest.raises(OutOfRange):
        take_rows(striped_block, -1, 1)


def test_take_rows_when_nothing_requested_then_raises(striped_block):
    with pytest.raises(ValueError):
        take_rows(striped_block, 0, 0)


def test_out_of_range_is_index_error(striped_block):
    with pytest.raises(IndexError):
        slice_block(striped_block, 11, 1)


def test_slice_block_copies_rows_verbatim(striped_block):
    """Rows [3, 7) come out unchanged at full width."""
    # Act
    img, rows = slice_block(striped_block, 3, 4)

    # Assert
    assert rows == 4
    assert img.size == (4, 4)
    assert [img.getpixel((0, y))[0] for y in range(4)] == [3, 4, 5, 6]


def test_slice_block_tail_is_clamped(striped_block):
    img, rows = slice_block(striped_block, 8, 50)

    assert rows == 2
    assert img.size == (4, 2)
    assert img.getpixel((3, 1)) == (9, 0, 0)


def test_slice_block_whole_block_returns_copy(striped_block):
    """The source raster is never handed out for mutation."""
    img, rows = slice_block(striped_block, 0, 10)

    assert rows == 10
    assert img is not striped_block.image
    img.putpixel((0, 0), (255, 255, 255))
    assert striped_block.image.getpixel((0, 0)) == (0, 0, 0)


def test_slices_reassemble_to_source(striped_block):
    """Consecutive slices cover every row exactly once."""
    offset, pieces = 0, []
    while offset < striped_block.height:
        img, rows = slice_block(striped_block, offset, 3)
        pieces.append(img)
        offset += rows

    assert [p.height for p in pieces] == [3, 3, 3, 1]
    reassembled = Image.new("RGB", (4, 10))
    y = 0
    for piece in pieces:
        reassembled.paste(piece, (0, y))
        y += piece.height
    assert list(reassembled.getdata()) == list(striped_block.image.getdata())
