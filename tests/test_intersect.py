"""
Unit tests for line/line, line/cubic and cubic/cubic intersection.
"""
import logging
import math

import pytest

from curveforge import (
    Cubic,
    Line,
    Path,
    PrimitiveIntersection,
    Vec,
    cubic_cubic_intersections,
    cubic_line_intersections,
    cubic_self_intersections,
    line_cubic_intersections,
    line_line_intersections,
    path_intersections,
    primitive_intersections,
)
from curveforge.geometry.intersect import cubics_overlap
from curveforge.geometry.segment import point_on_cubic_at_time, trim_cubic
from conftest import assert_vec_close


# ── Line / line ─────────────────────────────────────────────────────────

class TestLineLine:

    def test_crossing(self):
        line1 = Line(Vec(0, 0), Vec(10, 10))
        line2 = Line(Vec(0, 10), Vec(10, 0))
        hits = line_line_intersections(line1, line2)
        assert hits == [PrimitiveIntersection(0.5, 0.5)]
        assert_vec_close(line1.p0.mix(line1.p1, hits[0].time1), line2.p0.mix(line2.p1, hits[0].time2))

    def test_parallel(self):
        assert line_line_intersections(Line(Vec(0, 0), Vec(10, 0)), Line(Vec(0, 1), Vec(10, 1))) == []

    def test_collinear(self):
        assert line_line_intersections(Line(Vec(0, 0), Vec(10, 0)), Line(Vec(5, 0), Vec(15, 0))) == []

    def test_crossing_outside_segment(self):
        assert line_line_intersections(Line(Vec(0, 0), Vec(1, 1)), Line(Vec(0, 10), Vec(10, 0))) == []

    @pytest.mark.parametrize("line2, expected", [
        (Line(Vec(10, 0), Vec(10, 10)), (1, 0)),
        (Line(Vec(0, -5), Vec(0, 5)), (0, 0.5)),
        (Line(Vec(4, 3), Vec(4, -1)), (0.4, 0.75)),
    ])
    def test_endpoint_and_interior_hits(self, line2, expected):
        hits = line_line_intersections(Line(Vec(0, 0), Vec(10, 0)), line2)
        assert len(hits) == 1
        assert hits[0].time1 == pytest.approx(expected[0])
        assert hits[0].time2 == pytest.approx(expected[1])


# ── Line / cubic ────────────────────────────────────────────────────────

class TestLineCubic:

    def test_s_curve_crosses_once(self, s_cubic):
        hits = line_cubic_intersections(Line(Vec(0, 5), Vec(10, 5)), s_cubic)
        assert len(hits) == 1
        assert hits[0].time1 == pytest.approx(0.5)
        assert hits[0].time2 == pytest.approx(0.5)

    def test_long_line_through_s_curve(self, s_cubic):
        hits = line_cubic_intersections(Line(Vec(-5, 5), Vec(15, 5)), s_cubic)
        assert len(hits) == 1
        assert 0 < hits[0].time2 < 1
        assert hits[0].time1 == pytest.approx(0.5)

    def test_arch_crosses_twice_in_cubic_order(self, arch):
        line = Line(Vec(-5, 5), Vec(15, 5))
        hits = line_cubic_intersections(line, arch)
        assert len(hits) == 2
        assert hits[0].time2 < hits[1].time2
        for hit in hits:
            on_line = line.p0.mix(line.p1, hit.time1)
            assert_vec_close(on_line, point_on_cubic_at_time(arch, hit.time2), abs_tol=1e-6)

    def test_miss(self, arch):
        assert line_cubic_intersections(Line(Vec(0, 20), Vec(10, 20)), arch) == []

    def test_line_too_short(self, arch):
        assert line_cubic_intersections(Line(Vec(-5, 5), Vec(-1, 5)), arch) == []

    def test_zero_length_line(self, arch):
        assert line_cubic_intersections(Line(Vec(5, 5), Vec(5, 5)), arch) == []

    def test_cubic_along_line(self, straight_cubic):
        assert line_cubic_intersections(Line(Vec(-1, 0), Vec(5, 0)), straight_cubic) == []

    def test_cubic_line_swaps_times(self, s_cubic):
        line = Line(Vec(0, 5), Vec(20, 5))
        forward = line_cubic_intersections(line, s_cubic)
        backward = cubic_line_intersections(s_cubic, line)
        assert backward == [hit.swapped() for hit in forward]
        assert backward[0].time2 == pytest.approx(0.25)

    @pytest.mark.parametrize("end_x", [5, 5 - 1e-12])
    def test_crossing_at_line_end(self, s_cubic, end_x):
        hits = line_cubic_intersections(Line(Vec(0, 5), Vec(end_x, 5)), s_cubic)
        assert len(hits) == 1
        assert hits[0].time1 == pytest.approx(1.0)
        assert hits[0].time1 <= 1.0
        assert hits[0].time2 == pytest.approx(0.5)


# ── Cubic / cubic ───────────────────────────────────────────────────────

class TestCubicCubic:

    def test_crossing_arches(self, arch):
        flipped = Cubic(Vec(0, 10), Vec(0, 0), Vec(10, 0), Vec(10, 10))
        hits = sorted(cubic_cubic_intersections(arch, flipped), key=lambda h: h.time1)
        assert len(hits) == 2
        expected = [(3 - math.sqrt(3)) / 6, (3 + math.sqrt(3)) / 6]
        for hit, t in zip(hits, expected):
            assert hit.time1 == pytest.approx(t, abs=1e-4)
            assert hit.time2 == pytest.approx(t, abs=1e-4)
            assert_vec_close(point_on_cubic_at_time(arch, hit.time1),
                             point_on_cubic_at_time(flipped, hit.time2), abs_tol=1e-3)

    def test_disjoint_boxes(self, arch):
        moved = Cubic(*(p + Vec(100, 0) for p in arch))
        assert cubic_cubic_intersections(arch, moved) == []

    def test_identical_cubics(self, arch, caplog):
        with caplog.at_level(logging.DEBUG, logger="curveforge.geometry.intersect"):
            assert cubic_cubic_intersections(arch, arch) == []
        assert "coincident" in caplog.text

    def test_reversed_cubics(self, s_cubic):
        reversed_cubic = Cubic(s_cubic.p3, s_cubic.p2, s_cubic.p1, s_cubic.p0)
        assert cubic_cubic_intersections(s_cubic, reversed_cubic) == []

    def test_overlapping_cubics(self, arch):
        part = trim_cubic(arch, 0.25, 0.75)
        assert cubics_overlap(arch, part)
        assert cubic_cubic_intersections(arch, part) == []

    def test_crossing_cubics_do_not_overlap(self, arch):
        flipped = Cubic(Vec(0, 10), Vec(0, 0), Vec(10, 0), Vec(10, 10))
        assert not cubics_overlap(arch, flipped)

    def test_crossing_on_subdivision_boundary_reported_once(self):
        horizontal = Cubic(Vec(2, 5), Vec(4, 5), Vec(6, 5), Vec(8, 5))
        vertical = Cubic(Vec(5, 2), Vec(5, 4), Vec(5, 6), Vec(5, 8))
        hits = cubic_cubic_intersections(horizontal, vertical)
        assert hits == [PrimitiveIntersection(0.5, 0.5)]

    def test_arch_and_vertical_cubic_hit_once(self, arch):
        vertical = Cubic(Vec(5, 5), Vec(5, 5), Vec(5, 10), Vec(5, 10))
        hits = cubic_cubic_intersections(arch, vertical)
        assert len(hits) == 1
        assert hits[0].time1 == pytest.approx(0.5, abs=1e-6)
        assert hits[0].time2 == pytest.approx(0.5, abs=1e-6)


class TestSelfIntersection:

    @pytest.fixture
    def loop(self):
        return Cubic(Vec(0, 0), Vec(10, 10), Vec(0, 10), Vec(10, 0))

    def test_looping_cubic_reports_nothing(self, loop):
        assert cubic_self_intersections(loop) == []

    def test_looping_path_reports_nothing(self, loop):
        path = Path.from_cubic_bezier_points(list(loop))
        assert len(path.primitives()) == 1
        assert path_intersections([path]) == []


class TestDispatch:

    def test_line_and_cubic(self, s_cubic):
        line = Line(Vec(0, 5), Vec(10, 5))
        assert primitive_intersections(line, s_cubic) == line_cubic_intersections(line, s_cubic)
        assert primitive_intersections(s_cubic, line) == cubic_line_intersections(s_cubic, line)

    def test_two_lines(self):
        line1 = Line(Vec(0, 0), Vec(10, 10))
        line2 = Line(Vec(0, 10), Vec(10, 0))
        assert primitive_intersections(line1, line2) == [PrimitiveIntersection(0.5, 0.5)]
