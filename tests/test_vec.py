"""
Unit tests for Vec.
"""
import math

import pytest

from curveforge import Vec
from conftest import assert_vec_close


class TestVecArithmetic:

    def test_add_sub(self):
        assert Vec(1, 2) + Vec(3, 4) == Vec(4, 6)
        assert Vec(1, 2) - Vec(3, 4) == Vec(-2, -2)

    def test_scalar_multiply_both_sides(self):
        assert Vec(1, 2) * 2 == Vec(2, 4)
        assert 2 * Vec(1, 2) == Vec(2, 4)
        assert Vec(2, 4) / 2 == Vec(1, 2)
        assert -Vec(1, -2) == Vec(-1, 2)

    def test_dot_and_cross(self):
        assert Vec(1, 2).dot(Vec(3, 4)) == 11
        assert Vec(1, 0).cross(Vec(0, 1)) == 1
        assert Vec(0, 1).cross(Vec(1, 0)) == -1

    def test_vec_is_immutable(self):
        v = Vec(1, 2)
        with pytest.raises(AttributeError):
            v.x = 5


class TestVecLength:

    def test_length_and_distance(self):
        assert Vec(3, 4).length() == 5
        assert Vec(3, 4).length_squared() == 25
        assert Vec(1, 1).distance(Vec(4, 5)) == 5

    def test_normalized(self):
        assert_vec_close(Vec(3, 4).normalized(), Vec(0.6, 0.8))

    def test_normalized_zero_stays_zero(self):
        assert Vec(0, 0).normalized() == Vec(0, 0)


class TestVecRotation:

    def test_rotate_degrees(self):
        assert_vec_close(Vec(1, 0).rotate(90), Vec(0, 1))
        assert_vec_close(Vec(1, 0).rotate(-90), Vec(0, -1))

    def test_rotate90(self):
        assert Vec(1, 0).rotate90() == Vec(0, 1)
        assert Vec(1, 0).rotate_neg90() == Vec(0, -1)

    def test_angle(self):
        assert Vec(0, 1).angle() == pytest.approx(90)
        assert Vec(-1, 0).angle_radians() == pytest.approx(math.pi)
        assert_vec_close(Vec.from_angle(45), Vec(math.sqrt(0.5), math.sqrt(0.5)))


class TestVecProjection:

    def test_distance_to_line_segment(self):
        assert Vec(5, 5).distance_to_line_segment(Vec(0, 0), Vec(10, 0)) == pytest.approx(5)
        assert Vec(13, 4).distance_to_line_segment(Vec(0, 0), Vec(10, 0)) == pytest.approx(5)

    def test_project_to_line_is_unclamped(self):
        assert_vec_close(Vec(15, 3).project_to_line(Vec(0, 0), Vec(10, 0)), Vec(15, 0))
        assert_vec_close(Vec(15, 3).project_to_line_segment(Vec(0, 0), Vec(10, 0)), Vec(10, 0))

    def test_time_at_closest_point(self):
        assert Vec(2.5, 7).time_at_closest_point_on_line_segment(Vec(0, 0), Vec(10, 0)) == pytest.approx(0.25)


class TestVecValidity:

    @pytest.mark.parametrize("value", [Vec(math.nan, 0), Vec(0, math.inf), "not a vec", None])
    def test_invalid(self, value):
        assert not Vec.is_valid(value)

    def test_valid(self):
        assert Vec.is_valid(Vec(1.5, -2))
        assert Vec(1, 2).is_finite()

    def test_equals_within_tolerance(self):
        assert Vec(1, 1).equals_within_tolerance(Vec(1.0005, 0.9995))
        assert not Vec(1, 1).equals_within_tolerance(Vec(1.01, 1))
