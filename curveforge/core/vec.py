# CurveForge - A Planar Curve Geometry Kernel
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Two-dimensional vector value.

Vec is immutable: every operation returns a new Vec.  Angles are in
degrees unless the method name says radians.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .constants import DEFAULT_EPSILON, DEFAULT_TOLERANCE, DEGREES_PER_RADIAN, RADIANS_PER_DEGREE
from .mathutil import equal_within_relative_epsilon, saturate

if TYPE_CHECKING:
    from .matrix import AffineMatrix


@dataclass(frozen=True)
class Vec:
    x: float = 0.0
    y: float = 0.0

    # -- arithmetic ---------------------------------------------------------

    def __add__(self, other: Vec) -> Vec:
        return Vec(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vec) -> Vec:
        return Vec(self.x - other.x, self.y - other.y)

    def __mul__(self, s: float) -> Vec:
        return Vec(self.x * s, self.y * s)

    def __rmul__(self, s: float) -> Vec:
        return self.__mul__(s)

    def __truediv__(self, s: float) -> Vec:
        return Vec(self.x / s, self.y / s)

    def __neg__(self) -> Vec:
        return Vec(-self.x, -self.y)

    def __iter__(self):
        yield self.x
        yield self.y

    def mul(self, other: Vec) -> Vec:
        """Componentwise product."""
        return Vec(self.x * other.x, self.y * other.y)

    def min(self, other: Vec) -> Vec:
        return Vec(min(self.x, other.x), min(self.y, other.y))

    def max(self, other: Vec) -> Vec:
        return Vec(max(self.x, other.x), max(self.y, other.y))

    def mix(self, other: Vec, t: float) -> Vec:
        return Vec(self.x + (other.x - self.x) * t, self.y + (other.y - self.y) * t)

    def dot(self, other: Vec) -> float:
        return self.x * other.x + self.y * other.y

    def cross(self, other: Vec) -> float:
        return self.x * other.y - self.y * other.x

    # -- length -------------------------------------------------------------

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def length_squared(self) -> float:
        return self.x * self.x + self.y * self.y

    def distance(self, other: Vec) -> float:
        return math.hypot(other.x - self.x, other.y - self.y)

    def distance_squared(self, other: Vec) -> float:
        dx = other.x - self.x
        dy = other.y - self.y
        return dx * dx + dy * dy

    def normalized(self) -> Vec:
        """Unit vector in the same direction; the zero vector stays zero."""
        length_sq = self.length_squared()
        if length_sq > 0:
            return self * (1 / math.sqrt(length_sq))
        return self

    # -- rotation -----------------------------------------------------------

    def rotate(self, degrees: float) -> Vec:
        return self.rotate_radians(degrees * RADIANS_PER_DEGREE)

    def rotate_radians(self, radians: float) -> Vec:
        ct = math.cos(radians)
        st = math.sin(radians)
        return Vec(self.x * ct - self.y * st, self.x * st + self.y * ct)

    def rotate90(self) -> Vec:
        return Vec(-self.y, self.x)

    def rotate_neg90(self) -> Vec:
        return Vec(self.y, -self.x)

    def angle(self) -> float:
        return self.angle_radians() * DEGREES_PER_RADIAN

    def angle_radians(self) -> float:
        return math.atan2(self.y, self.x)

    # -- projection ---------------------------------------------------------

    def time_at_closest_point_on_line_segment(self, a: Vec, b: Vec) -> float:
        """Unclamped parameter of the projection of this point on line a-b."""
        pax = self.x - a.x
        pay = self.y - a.y
        bax = b.x - a.x
        bay = b.y - a.y
        return (pax * bax + pay * bay) / (bax * bax + bay * bay)

    def distance_to_line_segment(self, a: Vec, b: Vec) -> float:
        pax = self.x - a.x
        pay = self.y - a.y
        bax = b.x - a.x
        bay = b.y - a.y
        h = saturate((pax * bax + pay * bay) / (bax * bax + bay * bay))
        return math.hypot(pax - bax * h, pay - bay * h)

    def project_to_line_segment(self, a: Vec, b: Vec) -> Vec:
        h = saturate(self.time_at_closest_point_on_line_segment(a, b))
        return a.mix(b, h)

    def project_to_line(self, a: Vec, b: Vec) -> Vec:
        return a.mix(b, self.time_at_closest_point_on_line_segment(a, b))

    # -- transforms ---------------------------------------------------------

    def affine_transform(self, m: AffineMatrix) -> Vec:
        return Vec(m.a * self.x + m.c * self.y + m.tx, m.b * self.x + m.d * self.y + m.ty)

    def affine_transform_without_translation(self, m: AffineMatrix) -> Vec:
        return Vec(m.a * self.x + m.c * self.y, m.b * self.x + m.d * self.y)

    # -- comparisons --------------------------------------------------------

    def is_zero(self) -> bool:
        return self.x == 0 and self.y == 0

    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y)

    def equals_within_tolerance(self, other: Vec, tolerance: float = DEFAULT_TOLERANCE) -> bool:
        return abs(self.x - other.x) <= tolerance and abs(self.y - other.y) <= tolerance

    def equals_within_relative_epsilon(self, other: Vec, epsilon: float = DEFAULT_EPSILON) -> bool:
        return (equal_within_relative_epsilon(self.x, other.x, epsilon)
                and equal_within_relative_epsilon(self.y, other.y, epsilon))

    # -- constructors -------------------------------------------------------

    @staticmethod
    def from_angle(degrees: float) -> Vec:
        return Vec.from_angle_radians(degrees * RADIANS_PER_DEGREE)

    @staticmethod
    def from_angle_radians(radians: float) -> Vec:
        return Vec(math.cos(radians), math.sin(radians))

    @staticmethod
    def is_valid(v: object) -> bool:
        return (isinstance(v, Vec)
                and isinstance(v.x, (int, float)) and math.isfinite(v.x)
                and isinstance(v.y, (int, float)) and math.isfinite(v.y))

