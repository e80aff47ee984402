"""
Unit tests for the Bezier root finder and the Line/Cubic primitives.
"""
import math

import pytest

from curveforge import Anchor, Cubic, Line, Vec
from curveforge.geometry.arc import arc_segment
from curveforge.geometry.bezier import find_roots, split_bezier, zero_crossing_count
from curveforge.geometry.segment import (
    cubic_distance_lookup_table,
    cubic_length,
    derivative_of_cubic_at_time,
    is_segment_linear,
    partial_cubic_length,
    point_on_cubic_at_time,
    position_and_time_at_closest_point_on_cubic,
    position_and_time_at_closest_point_on_line,
    primitive_from_segment,
    split_cubic,
    time_at_distance_on_cubic,
    trim_cubic,
)
from conftest import assert_vec_close


class TestRootFinder:

    def test_linear_bernstein_polynomial(self):
        w = [Vec(i / 5, -1 + 3 * i / 5) for i in range(6)]
        roots = find_roots(w, 5)
        assert len(roots) == 1
        assert roots[0] == pytest.approx(1 / 3, abs=1e-9)

    def test_no_crossing_no_roots(self):
        w = [Vec(i / 5, 1 + i) for i in range(6)]
        assert zero_crossing_count(w) == 0
        assert find_roots(w, 5) == []

    def test_split_bezier_shares_midpoint(self):
        w = [Vec(i / 5, (-1) ** i) for i in range(6)]
        left, right = split_bezier(w, 0.5)
        assert left[0] == w[0]
        assert right[-1] == w[-1]
        assert left[-1] == right[0]
        assert left[-1].x == pytest.approx(0.5)


class TestClosestPoint:

    def test_interior_point(self, arch):
        position, time = position_and_time_at_closest_point_on_cubic(Vec(5, 20), arch)
        assert time == pytest.approx(0.5, abs=1e-6)
        assert_vec_close(position, Vec(5, 7.5), abs_tol=1e-6)

    def test_start_point(self, arch):
        position, time = position_and_time_at_closest_point_on_cubic(Vec(-5, -5), arch)
        assert time == 0
        assert position == arch.p0

    def test_end_point(self, arch):
        position, time = position_and_time_at_closest_point_on_cubic(Vec(15, -5), arch)
        assert time == 1
        assert position == arch.p3

    def test_zero_length_cubic_returns_endpoint(self):
        p = Vec(3, 3)
        position, time = position_and_time_at_closest_point_on_cubic(Vec(7, 1), Cubic(p, p, p, p))
        assert position == p
        # End point wins ties
        assert time == 1

    def test_point_on_curve(self, s_cubic):
        target = point_on_cubic_at_time(s_cubic, 0.3)
        position, time = position_and_time_at_closest_point_on_cubic(target, s_cubic)
        assert time == pytest.approx(0.3, abs=1e-6)
        assert_vec_close(position, target, abs_tol=1e-6)

    def test_line_clamps_to_segment(self):
        line = Line(Vec(0, 0), Vec(10, 0))
        position, time = position_and_time_at_closest_point_on_line(Vec(-3, 2), line)
        assert time == 0
        assert position == Vec(0, 0)
        position, time = position_and_time_at_closest_point_on_line(Vec(4, 2), line)
        assert time == pytest.approx(0.4)
        assert_vec_close(position, Vec(4, 0))


class TestEvaluation:

    def test_endpoints_are_exact(self, s_cubic):
        assert point_on_cubic_at_time(s_cubic, 0) == s_cubic.p0
        assert point_on_cubic_at_time(s_cubic, 1) == s_cubic.p3

    def test_midpoint(self, arch):
        assert_vec_close(point_on_cubic_at_time(arch, 0.5), Vec(5, 7.5))

    def test_derivative(self, straight_cubic):
        assert_vec_close(derivative_of_cubic_at_time(straight_cubic, 0.5), Vec(3, 0))

    def test_segment_classification(self):
        a1 = Anchor(Vec(0, 0), Vec(-1, 0), Vec(0, 0))
        a2 = Anchor(Vec(10, 0), Vec(0, 0), Vec(1, 1))
        assert is_segment_linear((a1, a2))
        assert isinstance(primitive_from_segment((a1, a2)), Line)

        a2.handle_in = Vec(-2, 3)
        cubic = primitive_from_segment((a1, a2))
        assert isinstance(cubic, Cubic)
        assert cubic.p1 == Vec(0, 0)
        assert cubic.p2 == Vec(8, 3)


class TestSplitting:

    def test_split_halves_meet(self, arch):
        left, right = split_cubic(arch, 0.5)
        assert left.p0 == arch.p0
        assert right.p3 == arch.p3
        assert left.p3 == right.p0
        assert_vec_close(left.p3, Vec(5, 7.5))

    @pytest.mark.parametrize("t", [0.1, 0.37, 0.8])
    def test_split_preserves_curve(self, s_cubic, t):
        left, right = split_cubic(s_cubic, t)
        for u in (0.25, 0.5, 0.75):
            assert_vec_close(point_on_cubic_at_time(left, u), point_on_cubic_at_time(s_cubic, u * t))
            assert_vec_close(point_on_cubic_at_time(right, u),
                             point_on_cubic_at_time(s_cubic, t + u * (1 - t)))

    def test_trim(self, arch):
        trimmed = trim_cubic(arch, 0.25, 0.75)
        assert_vec_close(trimmed.p0, point_on_cubic_at_time(arch, 0.25))
        assert_vec_close(trimmed.p3, point_on_cubic_at_time(arch, 0.75))

    def test_trim_backwards(self, s_cubic):
        trimmed = trim_cubic(s_cubic, 0.75, 0.25)
        assert_vec_close(trimmed.p0, point_on_cubic_at_time(s_cubic, 0.75))
        assert_vec_close(trimmed.p3, point_on_cubic_at_time(s_cubic, 0.25))
        assert_vec_close(point_on_cubic_at_time(trimmed, 0.5), point_on_cubic_at_time(s_cubic, 0.5))


class TestArcLength:

    def test_straight_cubic_length(self, straight_cubic):
        assert cubic_length(straight_cubic) == pytest.approx(3)
        assert partial_cubic_length(straight_cubic, 0.5) == pytest.approx(1.5)
        assert partial_cubic_length(straight_cubic, 0) == 0

    def test_quarter_circle_length(self):
        first, second = arc_segment(90)
        cubic = Cubic(first.position, first.position + first.handle_out,
                      second.position + second.handle_in, second.position)
        assert cubic_length(cubic) == pytest.approx(math.pi / 2, rel=1e-3)

    def test_lookup_table(self, straight_cubic):
        table = cubic_distance_lookup_table(straight_cubic)
        assert len(table) == 100
        assert table[0] == 0
        assert table[-1] == pytest.approx(3)

    def test_time_at_distance(self, straight_cubic):
        assert time_at_distance_on_cubic(straight_cubic, 1.5) == pytest.approx(0.5)
        assert time_at_distance_on_cubic(straight_cubic, 0) == 0
        assert time_at_distance_on_cubic(straight_cubic, 10) == 1

    def test_time_at_distance_inverts_partial_length(self, s_cubic):
        for t in (0.2, 0.5, 0.9):
            d = partial_cubic_length(s_cubic, t)
            assert time_at_distance_on_cubic(s_cubic, d) == pytest.approx(t, abs=1e-3)
