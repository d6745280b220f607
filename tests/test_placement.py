"""
Tests for rotations, collision checks, placement search and the packer.
"""

import random

import pytest

from sheetnest.core.dxf.entities import BoundingBox
from sheetnest.core.events import EventBus, EventRecorder, EventType
from sheetnest.core.exceptions import InvalidRotationError, InvalidFieldValueError
from sheetnest.nesting.geometry import (
    group_bounding_box, normalize_rotation, rotated_bounding_box, validate_rotations,
)
from sheetnest.nesting.collision import rectangles_collide, groups_collide
from sheetnest.nesting.models import NestingParams, PlacedGroup, StockSheet
from sheetnest.nesting import collision, placement
from sheetnest.nesting.placement import CandidateTracker, candidate_positions, find_best_placement
from sheetnest.nesting.packer import pack_groups

from conftest import make_group


# ============================================================
# Geometry
# ============================================================

class TestRotation:

    def test_quarter_turn_swaps_dimensions(self):
        rotated = rotated_bounding_box(BoundingBox(5, 5, 505, 305), 90)
        assert rotated == BoundingBox(0, 0, 300, 500)

    def test_half_turn_keeps_box(self):
        bbox = BoundingBox(5, 5, 505, 305)
        assert rotated_bounding_box(bbox, 180) == bbox
        assert rotated_bounding_box(bbox, 0) == bbox

    def test_two_quarter_turns_restore_dimensions(self):
        bbox = BoundingBox(20, -10, 220, 40)
        twice = rotated_bounding_box(rotated_bounding_box(bbox, 90), 90)
        assert (twice.width, twice.height) == (bbox.width, bbox.height)

    @pytest.mark.parametrize("rotation", [45, 360, -90, 90.5, "abc", None])
    def test_invalid_rotation(self, rotation):
        with pytest.raises(InvalidRotationError):
            normalize_rotation(rotation)

    def test_float_right_angle_accepted(self):
        assert normalize_rotation(90.0) == 90

    def test_validate_rotations_drops_repeats(self):
        assert validate_rotations([90, 0, 90]) == [90, 0]

    def test_group_box_covers_children(self):
        group = make_group(100, 100, holes=[(100, 50, 20)])
        assert group_bounding_box(group) == BoundingBox(0, 0, 120, 100)


class TestNestingParams:

    def test_defaults(self):
        params = NestingParams()
        assert params.spacing == 10.0
        assert params.rotations == [0, 90]
        assert params.max_results == 3

    def test_negative_spacing(self):
        with pytest.raises(InvalidFieldValueError):
            NestingParams(spacing=-1)

    def test_empty_rotations(self):
        with pytest.raises(InvalidFieldValueError):
            NestingParams(rotations=[])

    def test_bad_rotation(self):
        with pytest.raises(InvalidRotationError):
            NestingParams(rotations=[0, 30])


# ============================================================
# Collision
# ============================================================

class TestCollision:

    def test_exactly_spacing_apart_is_allowed(self):
        assert not rectangles_collide(10, 10, 100, 100, 120, 10, 100, 100, spacing=10)
        assert not rectangles_collide(10, 10, 100, 100, 10, 120, 100, 100, spacing=10)

    def test_closer_than_spacing_collides(self):
        assert rectangles_collide(10, 10, 100, 100, 119, 10, 100, 100, spacing=10)
        assert rectangles_collide(10, 10, 100, 100, 10, 119.9, 100, 100, spacing=10)

    def test_overlap_collides(self):
        assert rectangles_collide(0, 0, 100, 100, 50, 50, 100, 100, spacing=0)

    def test_symmetric(self):
        args_a = (0, 0, 30, 40)
        args_b = (35, 10, 20, 20)
        assert rectangles_collide(*args_a, *args_b, 10) == rectangles_collide(*args_b, *args_a, 10)

    def test_placed_groups_use_rotated_footprint(self):
        a = PlacedGroup(group=make_group(500, 100), x=10, y=10, rotation=90)
        b = PlacedGroup(group=make_group(100, 100), x=130, y=10)
        # a is 100 wide once rotated
        assert not groups_collide(a, b, 10)
        assert groups_collide(PlacedGroup(group=a.group, x=10, y=10), b, 10)


# ============================================================
# Placement search
# ============================================================

class TestPlacement:

    def test_first_group_at_inset_origin(self, small_sheet):
        placed = find_best_placement(make_group(500, 300), [], small_sheet, [0, 90], 10)
        assert (placed.x, placed.y, placed.rotation) == (10, 10, 0)

    def test_second_group_right_of_first(self, small_sheet):
        first = PlacedGroup(group=make_group(500, 300), x=10, y=10)
        placed = find_best_placement(make_group(500, 300), [first], small_sheet, [0, 90], 10)
        assert (placed.x, placed.y, placed.rotation) == (520, 10, 0)

    def test_rotates_when_only_rotation_fits(self, small_sheet):
        placed = find_best_placement(make_group(2000, 400), [], small_sheet, [0, 90], 10)
        assert placed.rotation == 90
        assert (placed.x, placed.y) == (10, 10)
        assert (placed.width, placed.height) == (400, 2000)

    def test_too_large_for_sheet(self, small_sheet):
        assert find_best_placement(make_group(2000, 2000), [], small_sheet, [0, 90], 10) is None

    def test_no_rotation_allowed(self, small_sheet):
        assert find_best_placement(make_group(2000, 400), [], small_sheet, [0], 10) is None

    def test_candidates_without_repeats(self):
        a = PlacedGroup(group=make_group(100, 100), x=10, y=10)
        b = PlacedGroup(group=make_group(100, 100), x=10, y=10)
        positions = candidate_positions([a, b], 10)
        assert positions == [(10, 10), (120, 10), (10, 120)]

    def test_fills_row_before_opening_new_one(self, small_sheet):
        placed = []
        for _ in range(3):
            placed.append(find_best_placement(make_group(300, 300), placed, small_sheet, [0], 10))
        assert [(p.x, p.y) for p in placed] == [(10, 10), (320, 10), (630, 10)]


# ============================================================
# Packer
# ============================================================

class TestPacker:

    def test_two_rectangles_side_by_side(self, small_sheet, params):
        groups = [make_group(500, 300), make_group(500, 300, x=1000)]

        result = pack_groups(groups, small_sheet, params, strategy="width-first")

        assert [(p.x, p.y) for p in result.placed_groups] == [(10, 10), (520, 10)]
        assert result.sheet_size == (1030, 320)
        assert result.sheet_area_m2 == pytest.approx(0.3296)
        assert result.used_area_m2 == pytest.approx(0.3)
        assert result.efficiency == pytest.approx(91.0194, abs=1e-3)
        assert result.metal_cost == pytest.approx(32.96)
        assert result.strategy == "width-first"
        assert result.stock_sheet == small_sheet

    def test_unplaceable_group_omitted(self, small_sheet, params):
        too_big = make_group(5000, 5000)
        fits = make_group(100, 100)
        bus = EventBus()
        recorder = EventRecorder()
        bus.subscribe_all(recorder)

        result = pack_groups([too_big, fits], small_sheet, params, observer=bus)

        assert result.placed_count == 1
        assert result.unplaced_groups == [too_big]
        assert recorder.count(EventType.GROUP_OMITTED) == 1
        assert recorder.count(EventType.GROUP_PLACED) == 1
        assert recorder.count(EventType.STRATEGY_COMPLETED) == 1

    def test_nothing_placed_keeps_zero_metrics(self, small_sheet, params):
        result = pack_groups([make_group(5000, 5000)], small_sheet, params)
        assert result.placed_groups == []
        assert result.sheet_size == (0, 0)
        assert result.efficiency == 0
        assert result.metal_cost == 0

    def test_sheet_size_capped_by_stock(self, params):
        sheet = StockSheet(520, 320)
        result = pack_groups([make_group(500, 300)], sheet, params)
        assert result.sheet_size == (520, 320)

    @pytest.mark.parametrize("seed", [1, 7, 42, 2024])
    def test_random_layouts_are_valid(self, seed, small_sheet, params):
        rng = random.Random(seed)
        groups = [make_group(rng.uniform(20, 600), rng.uniform(20, 600)) for _ in range(25)]

        result = pack_groups(groups, small_sheet, params)

        placed = result.placed_groups
        for i, a in enumerate(placed):
            assert a.x >= params.spacing and a.y >= params.spacing
            assert a.right + params.spacing <= small_sheet.max_width
            assert a.bottom + params.spacing <= small_sheet.max_height
            for b in placed[i + 1:]:
                assert not groups_collide(a, b, params.spacing)

        assert result.placed_count + result.unplaced_count == len(groups)
        assert 0 <= result.efficiency <= 100
        assert result.sheet_width <= small_sheet.max_width
        assert result.sheet_height <= small_sheet.max_height

    def test_tracked_candidates_give_same_layout(self, small_sheet, params):
        rng = random.Random(11)
        groups = [make_group(rng.uniform(20, 400), rng.uniform(20, 400)) for _ in range(40)]

        placed = []
        for group in groups:
            found = find_best_placement(group, placed, small_sheet,
                                        params.rotations, params.spacing)
            if found is not None:
                placed.append(found)

        result = pack_groups(groups, small_sheet, params)

        assert [(p.x, p.y, p.rotation) for p in result.placed_groups] == \
            [(p.x, p.y, p.rotation) for p in placed]

    def test_work_grows_quadratically_at_most(self, small_sheet, params, monkeypatch):
        calls = [0]
        original = collision.rectangles_collide

        def counting(*args):
            calls[0] += 1
            return original(*args)

        monkeypatch.setattr(collision, "rectangles_collide", counting)
        monkeypatch.setattr(placement, "rectangles_collide", counting)

        n = 300
        result = pack_groups([make_group(20, 20)] * n, small_sheet, params)

        assert result.placed_count == n
        assert calls[0] < 2 * n * n


class TestCandidateTracker:

    def test_blocked_anchors_dropped(self):
        tracker = CandidateTracker(10)
        tracker.add(PlacedGroup(group=make_group(100, 100), x=10, y=10))

        assert tracker.positions == [(120, 10), (10, 120)]

    def test_anchor_inside_later_group_dropped(self):
        tracker = CandidateTracker(10)
        tracker.add(PlacedGroup(group=make_group(100, 100), x=10, y=10))
        tracker.add(PlacedGroup(group=make_group(100, 300), x=120, y=10))

        assert (10, 120) in tracker.positions
        assert (120, 10) not in tracker.positions
        assert (230, 10) in tracker.positions
