"""Tests for single-channel point operations."""
import pytest

from rgbcurve.services.points import (
    clamp,
    find_insert_index,
    insert_point,
    is_point_near,
    normalize_points,
    remove_point,
    sort_points,
    update_point,
)
from rgbcurve.services.schemas import MIN_POINT_DISTANCE, CurvePoint, as_point, default_points

THREE = (CurvePoint(0, 0), CurvePoint(128, 200), CurvePoint(255, 255))


class TestAsPoint:
    def test_accepts_pairs_and_mappings(self):
        assert as_point((10, 20)) == CurvePoint(10, 20)
        assert as_point({"x": 10, "y": 20}) == CurvePoint(10, 20)

    def test_rounds_half_up(self):
        assert as_point((10.5, 19.4)) == CurvePoint(11, 19)

    def test_infinite_coordinates_clamped(self):
        assert as_point((float("-inf"), float("inf"))) == CurvePoint(0, 255)

    def test_nan_rejected(self):
        with pytest.raises(ValueError, match="NaN"):
            as_point((float("nan"), 0))


class TestSortPoints:
    def test_sorts_by_x(self):
        result = sort_points([(255, 255), (0, 0), (100, 30)])
        assert [p.x for p in result] == [0, 100, 255]

    def test_is_stable_for_equal_x(self):
        result = sort_points([(50, 1), (50, 2), (0, 0)])
        assert result == (CurvePoint(0, 0), CurvePoint(50, 1), CurvePoint(50, 2))

    def test_does_not_mutate_input(self):
        pts = [(255, 255), (0, 0)]
        sort_points(pts)
        assert pts == [(255, 255), (0, 0)]


class TestInsertPoint:
    def test_inserts_in_order(self):
        assert insert_point(default_points(), (128, 200)) == THREE

    def test_rejects_point_too_close(self):
        assert insert_point(THREE, (130, 50)) is None
        assert insert_point(THREE, (4, 50)) is None

    def test_accepts_point_at_exact_min_distance(self):
        result = insert_point(THREE, (128 + MIN_POINT_DISTANCE, 50))
        assert result is not None
        assert len(result) == 4

    def test_clamps_out_of_range_coordinates(self):
        result = insert_point(default_points(), (100, 400))
        assert CurvePoint(100, 255) in result

    def test_infinite_coordinate_clamped(self):
        result = insert_point(default_points(), (100, float("inf")))
        assert CurvePoint(100, 255) in result


class TestRemovePoint:
    def test_removes_interior_point(self):
        assert remove_point(THREE, 1) == default_points()

    def test_endpoints_are_permanent(self):
        assert remove_point(THREE, 0) is None
        assert remove_point(THREE, 2) is None

    def test_keeps_minimum_cardinality(self):
        assert remove_point(default_points(), 1) is None

    def test_uses_sorted_index(self):
        unsorted = [(255, 255), (128, 200), (0, 0)]
        assert remove_point(unsorted, 1) == default_points()


class TestUpdatePoint:
    def test_first_point_pinned_to_zero(self):
        result = update_point(THREE, 0, (40, 30))
        assert result[0] == CurvePoint(0, 30)

    def test_last_point_pinned_to_max(self):
        result = update_point(THREE, 2, (200, 210))
        assert result[-1] == CurvePoint(255, 210)

    def test_interior_x_clamped_between_neighbours(self):
        assert update_point(THREE, 1, (2, 100))[1] == CurvePoint(MIN_POINT_DISTANCE, 100)
        assert update_point(THREE, 1, (254, 100))[1] == CurvePoint(255 - MIN_POINT_DISTANCE, 100)

    def test_y_clamped(self):
        assert update_point(THREE, 1, (128, -20))[1] == CurvePoint(128, 0)
        assert update_point(THREE, 0, (0, 999))[0] == CurvePoint(0, 255)

    def test_out_of_range_index_rejected(self):
        assert update_point(THREE, 3, (10, 10)) is None
        assert update_point(THREE, -1, (10, 10)) is None

    def test_preserves_order(self):
        pts = (CurvePoint(0, 0), CurvePoint(60, 60), CurvePoint(120, 120), CurvePoint(255, 255))
        result = update_point(pts, 1, (200, 10))
        xs = [p.x for p in result]
        assert xs == sorted(xs)
        assert result[1] == CurvePoint(115, 10)


class TestNormalizePoints:
    def test_anchors_endpoints(self):
        result = normalize_points([(10, 5), (128, 128), (240, 250)])
        assert result[0] == CurvePoint(0, 5)
        assert result[-1] == CurvePoint(255, 250)

    def test_drops_crowded_points(self):
        result = normalize_points([(0, 0), (2, 10), (100, 100), (103, 110), (253, 200), (255, 255)])
        assert [p.x for p in result] == [0, 100, 255]

    def test_too_few_points_falls_back_to_diagonal(self):
        assert normalize_points([(30, 40)]) == default_points()
        assert normalize_points([]) == default_points()

    def test_valid_points_unchanged(self):
        assert normalize_points(THREE) == THREE


class TestHelpers:
    def test_clamp(self):
        assert clamp(-3, 0, 255) == 0
        assert clamp(300, 0, 255) == 255
        assert clamp(7, 0, 255) == 7

    def test_find_insert_index(self):
        assert find_insert_index(THREE, 64) == 1
        assert find_insert_index(THREE, 200) == 2
        assert find_insert_index(THREE, 255) == 3

    def test_is_point_near(self):
        assert is_point_near((0, 0), (3, 4), 5)
        assert not is_point_near((0, 0), (3, 4), 4.9)
