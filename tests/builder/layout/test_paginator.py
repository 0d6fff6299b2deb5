"""
Unit tests for the report paginator.

Blocks from block_factory are 180px wide, so on the A4 fixture
(180 x 262 content box) each pixel row is drawn exactly 1 mm tall.
"""

import pytest

from report_toolkit.builder.layout import (
    DegenerateLayout,
    LayoutConfig,
    LetterheadLayout,
    paginate,
)
from report_toolkit.core.models import PageGeometry


@pytest.fixture
def config():
    return LayoutConfig(block_gap=8.0, min_viable_slice=5.0, slice_epsilon_px=10)


def _assert_layout_invariants(result, blocks, config, tol=1e-6):
    """Properties every layout must satisfy."""
    # Contiguous 1-based page indices, last placement on the last page
    assert [p.index for p in result.pages] == list(range(1, result.page_count + 1))
    placements = list(result.placements)
    if placements:
        assert placements[-1].page_index == result.page_count

    # No vertical overlap within a page
    for page in result.pages:
        ordered = sorted(page.placements, key=lambda p: p.y)
        for upper, lower in zip(ordered, ordered[1:]):
            assert upper.bottom <= lower.y + tol

    for block in blocks:
        parts = result.placements_for(block.block_id)
        # Every source row placed exactly once, in order
        assert sum(p.source_height_px for p in parts) == block.height
        offset = 0
        for part in parts:
            assert part.source_offset_px == offset
            offset = part.source_end_px
        # No sliver except possibly the final slice
        for part in parts[:-1]:
            assert part.height >= config.min_viable_slice - tol


class TestFitsWhole:
    """Blocks that fit a page are placed whole, never sliced."""

    def test_single_block_placed_at_margin_top(self, a4_geometry, config, block_factory):
        """One 100 mm block on an A4 page with no letterhead."""
        # Arrange
        block = block_factory(100)

        # Act
        result = paginate([block], a4_geometry, config)

        # Assert
        assert result.page_count == 1
        placement = result.pages[0].placements[0]
        assert placement.y == pytest.approx(15.0)
        assert placement.x == pytest.approx(15.0)
        assert placement.width == pytest.approx(180.0)
        assert placement.height == pytest.approx(100.0)
        assert not placement.is_partial
        assert (placement.source_offset_px, placement.source_height_px) == (0, 100)

    def test_following_block_is_spaced_by_block_gap(self, a4_geometry, config, block_factory):
        a = block_factory(100, "a")
        b = block_factory(100, "b")

        result = paginate([a, b], a4_geometry, config)

        assert result.page_count == 1
        assert result.pages[0].placements[1].y == pytest.approx(15 + 100 + 8)

    def test_block_scaled_to_content_width(self, a4_geometry, config, block_factory):
        """A 360px-wide raster is drawn at half scale."""
        block = block_factory(200, width=360)

        result = paginate([block], a4_geometry, config)

        placement = result.pages[0].placements[0]
        assert placement.width == pytest.approx(180.0)
        assert placement.height == pytest.approx(100.0)

    def test_block_not_fitting_moves_to_fresh_page(self, a4_geometry, config, block_factory):
        """200 + 8 gap leaves 54 mm; a 100 mm block goes to page 2 whole."""
        a = block_factory(200, "a")
        b = block_factory(100, "b")

        result = paginate([a, b], a4_geometry, config)

        assert result.page_count == 2
        moved = result.pages[1].placements[0]
        assert moved.block_id == "b"
        assert moved.y == pytest.approx(15.0)
        assert not moved.is_partial

    def test_block_of_exact_page_height_is_never_split(self, a4_geometry, config, block_factory):
        """Tie-break: fitting a fresh page beats splitting on the current one."""
        a = block_factory(200, "a")
        b = block_factory(262, "b")

        result = paginate([a, b], a4_geometry, config)

        parts = result.placements_for("b")
        assert len(parts) == 1
        assert parts[0].page_index == 2
        assert parts[0].height == pytest.approx(262.0)

    def test_gap_after_full_page_does_not_overflow(self, a4_geometry, config, block_factory):
        a = block_factory(262, "a")
        b = block_factory(1, "b")

        result = paginate([a, b], a4_geometry, config)

        assert result.page_count == 2
        assert result.placements_for("b")[0].y == pytest.approx(15.0)

    def test_exact_fit_after_gap(self, a4_geometry, config, block_factory):
        """100 + 8 gap leaves exactly 154 mm, which a 154 mm block fills."""
        a = block_factory(100, "a")
        b = block_factory(154, "b")

        result = paginate([a, b], a4_geometry, config)

        assert result.page_count == 1
        assert result.placements_for("b")[0].bottom == pytest.approx(a4_geometry.page_bottom)


class TestSlicing:
    """Blocks taller than a page are sliced across pages."""

    def test_tall_block_spans_two_pages(self, a4_geometry, config, block_factory):
        """A 400 mm block: 262 mm on page 1, 138 mm on page 2."""
        # Arrange
        block = block_factory(400)

        # Act
        result = paginate([block], a4_geometry, config)

        # Assert
        assert result.page_count == 2
        first, second = result.placements_for("block")
        assert (first.page_index, first.y, first.height) == (1, 15, 262)
        assert (second.page_index, second.y, second.height) == (2, 15, 138)
        assert first.is_partial and second.is_partial
        assert first.height + second.height == pytest.approx(400.0)

    def test_tall_block_starts_in_space_left_on_current_page(self, a4_geometry, config, block_factory):
        a = block_factory(100, "a")
        tall = block_factory(400, "tall")

        result = paginate([a, tall], a4_geometry, config)

        first, second = result.placements_for("tall")
        assert first.page_index == 1
        assert first.y == pytest.approx(123.0)
        assert first.height == pytest.approx(154.0)
        assert second.page_index == 2
        assert second.height == pytest.approx(246.0)
        _assert_layout_invariants(result, [a, tall], config)

    def test_sliver_is_pushed_to_next_page(self, a4_geometry, config, block_factory):
        """Only 4 mm left: the tall block starts on a fresh page instead."""
        # 250 + 8 gap -> y = 273, 4 mm left above page_bottom (277)
        a = block_factory(250, "a")
        tall = block_factory(400, "tall")

        result = paginate([a, tall], a4_geometry, config)

        assert result.page_count == 3
        assert result.pages[0].placement_count == 1
        parts = result.placements_for("tall")
        assert [p.page_index for p in parts] == [2, 3]
        assert [p.source_height_px for p in parts] == [262, 138]

    def test_small_remainder_still_placed(self, a4_geometry, config, block_factory):
        """A 6 px tail (within epsilon) is not lost."""
        block = block_factory(268)

        result = paginate([block], a4_geometry, config)

        parts = result.placements_for("block")
        assert [p.source_height_px for p in parts] == [262, 6]
        assert parts[1].page_index == 2
        assert parts[1].y == pytest.approx(15.0)

    def test_very_tall_block_spans_many_pages(self, a4_geometry, config, block_factory):
        block = block_factory(262 * 3 + 50)

        result = paginate([block], a4_geometry, config)

        assert result.page_count == 4
        _assert_layout_invariants(result, [block], config)

    def test_scaled_slices_cover_all_source_rows(self, a4_geometry, config, block_factory):
        """Non-integer scale: rows per page are floored, none are lost."""
        block = block_factory(1000, width=333)

        result = paginate([block], a4_geometry, config)

        _assert_layout_invariants(result, [block], config)
        for placement in result.placements:
            assert placement.bottom <= a4_geometry.page_bottom + 1e-6

    def test_degenerate_geometry_raises(self, config, block_factory):
        """A 5 mm content box maps to zero rows of a 10px-wide block."""
        geometry = PageGeometry(height=40, margin_top=15, margin_bottom=20)
        block = block_factory(1000, width=10)

        with pytest.raises(DegenerateLayout, match="zero source rows"):
            paginate([block], geometry, config)


class TestLetterheadAndEmpty:
    """Page 1 offset and empty reports."""

    def test_first_block_starts_below_letterhead(self, a4_geometry, config, block_factory):
        header = LetterheadLayout(header_height=37.0, body_top=52.0)

        result = paginate([block_factory(100)], a4_geometry, config, letterhead=header)

        assert result.placements_for("block")[0].y == pytest.approx(52.0)
        assert result.letterhead is header

    def test_letterhead_only_first_page_is_kept(self, a4_geometry, config, block_factory):
        """A block that fits a page but not below the header leaves page 1 empty."""
        header = LetterheadLayout(header_height=37.0, body_top=52.0)

        result = paginate([block_factory(250)], a4_geometry, config, letterhead=header)

        assert result.page_count == 2
        assert result.pages[0].is_empty
        assert result.warnings == ["Page 1 holds no content blocks"]

    def test_only_later_pages_start_at_margin_top(self, a4_geometry, config, block_factory):
        header = LetterheadLayout(header_height=37.0, body_top=52.0)
        tall = block_factory(600, "tall")

        result = paginate([tall], a4_geometry, config, letterhead=header)

        parts = result.placements_for("tall")
        assert parts[0].y == pytest.approx(52.0)
        assert all(p.y == pytest.approx(15.0) for p in parts[1:])
        _assert_layout_invariants(result, [tall], config)

    def test_empty_block_list_yields_one_page(self, a4_geometry, config):
        result = paginate([], a4_geometry, config)

        assert result.page_count == 1
        assert result.pages[0].is_empty
        assert result.total_placements == 0

    def test_duplicate_block_ids_rejected(self, a4_geometry, config, block_factory):
        with pytest.raises(ValueError, match="Duplicate block id"):
            paginate([block_factory(10, "x"), block_factory(10, "x")], a4_geometry, config)


@pytest.mark.parametrize(
    "heights",
    [
        [40, 80, 300, 20, 20, 900, 5],
        [262, 262, 263, 1, 1, 1],
        [270, 3, 520, 140, 140, 60],
        [12] * 40,
    ],
)
def test_layout_invariants_hold_for_mixed_reports(a4_geometry, config, block_factory, heights):
    blocks = [block_factory(h, f"b{i}") for i, h in enumerate(heights)]
    header = LetterheadLayout(header_height=37.0, body_top=52.0)

    result = paginate(blocks, a4_geometry, config, letterhead=header)

    _assert_layout_invariants(result, blocks, config)
    # Input order is preserved
    seen = []
    for placement in result.placements:
        if placement.block_id not in seen:
            seen.append(placement.block_id)
    assert seen == [b.block_id for b in blocks]
    # Blocks that fit a page are never split
    for block in blocks:
        if block.height <= a4_geometry.content_height:
            assert len(result.placements_for(block.block_id)) == 1
