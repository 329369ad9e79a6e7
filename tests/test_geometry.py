"""Circle/square overlap and candidate cell enumeration."""

import pytest

from territory.geometry import candidate_cells, circle_intersects_square


class TestCircleIntersectsSquare:
    def test_center_inside(self):
        assert circle_intersects_square(5, 5, 1, 0, 0, 10)

    def test_touching_edge_counts(self):
        assert circle_intersects_square(15, 5, 5, 0, 0, 10)

    def test_just_outside_edge(self):
        assert not circle_intersects_square(15.001, 5, 5, 0, 0, 10)

    def test_corner_uses_euclidean_distance(self):
        # bounding boxes overlap but the corner is sqrt(2) * 4 away
        assert not circle_intersects_square(14, 14, 5, 0, 0, 10)
        assert circle_intersects_square(13, 13, 5, 0, 0, 10)


class TestCandidateCells:
    def test_row_major_order(self):
        cells = list(candidate_cells(15, 20, 5, 10, 4))
        assert cells == [(1, 1), (2, 1), (1, 2), (2, 2)]

    def test_clamped_at_origin(self):
        cells = list(candidate_cells(2, 2, 5, 10, 4))
        assert cells == [(0, 0)]

    def test_clamped_at_far_edge(self):
        cells = list(candidate_cells(39, 39, 5, 10, 4))
        assert cells == [(3, 3)]

    def test_two_by_two_interior(self):
        cells = list(candidate_cells(31, 31, 5, 10, 4))
        assert cells == [(2, 2), (3, 2), (2, 3), (3, 3)]

    @pytest.mark.parametrize("x,y", [(-50, -50), (500, 500), (-3, 41)])
    def test_never_out_of_range(self, x, y):
        for gx, gy in candidate_cells(x, y, 5, 10, 4):
            assert 0 <= gx < 4
            assert 0 <= gy < 4
