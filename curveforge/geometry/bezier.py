# CurveForge - A Planar Curve Geometry Kernel
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Bezier root finder for closest-point queries.

After "A Bezier Curve-Based Root-Finder" by Philip J. Schneider,
Graphics Gems (1990), with the control-polygon flatness correction by
James Walker.

The squared distance from a point P to a cubic B(t) is minimal where
``B'(t) . (B(t) - P) == 0``.  That product is a degree 5 polynomial; it is
written here in Bernstein form as a Bezier curve ``w`` whose x coordinates
are i/5 and whose y coordinates are the Bernstein coefficients, so its
roots are the x intercepts of the curve ``w``.
"""

from __future__ import annotations

from typing import Sequence

from ..core.constants import CLOSEST_POINT_DEGREE, FIND_ROOTS_EPSILON, FIND_ROOTS_MAX_DEPTH
from ..core.mathutil import sign
from ..core.vec import Vec

# Products of binomial coefficients, C(3,i)*C(2,j)/C(5,i+j), indexed [j][i]
_Z = (
    (1.0, 0.6, 0.3, 0.1),
    (0.4, 0.6, 0.6, 0.4),
    (0.1, 0.3, 0.6, 1.0),
)


def bernstein_form_for_closest_point(point: Vec, cubic: Sequence[Vec]) -> list[Vec]:
    """Build the degree 5 Bezier ``w`` whose x intercepts are the candidate
    closest-point parameters of *point* on *cubic*."""
    c = [p - point for p in cubic]
    c_dot_d = []
    for j in range(3):
        d = (cubic[j + 1] - cubic[j]) * 3
        c_dot_d.append([d.dot(c[i]) for i in range(4)])

    ys = [0.0] * (CLOSEST_POINT_DEGREE + 1)
    n = 3
    n1 = n - 1
    for k in range(n + n1 + 1):
        lb = max(0, k - n1)
        ub = min(k, n)
        for i in range(lb, ub + 1):
            j = k - i
            ys[i + j] += c_dot_d[j][i] * _Z[j][i]

    return [Vec(i / CLOSEST_POINT_DEGREE, ys[i]) for i in range(CLOSEST_POINT_DEGREE + 1)]


def find_roots(w: Sequence[Vec], degree: int = CLOSEST_POINT_DEGREE, depth: int = 0) -> list[float]:
    """Return the x intercepts in [0, 1] of the Bezier curve *w*.

    The control polygon is split at 0.5 until each piece crosses the axis
    at most once and is flat enough to replace by its chord.  Recursion is
    capped at FIND_ROOTS_MAX_DEPTH, where the interval midpoint is taken as
    the root, so degenerate input still terminates.
    """
    crossings = zero_crossing_count(w)
    if crossings == 0:
        return []
    if crossings == 1:
        if depth >= FIND_ROOTS_MAX_DEPTH:
            return [(w[0].x + w[degree].x) / 2]
        if control_polygon_flat_enough(w, degree):
            return [compute_x_intercept(w, degree)]

    left, right = split_bezier(w, 0.5)
    return find_roots(left, degree, depth + 1) + find_roots(right, degree, depth + 1)


def zero_crossing_count(points: Sequence[Vec]) -> int:
    """Number of sign changes along the control polygon's y values."""
    count = 0
    prev_sign = sign(points[0].y)
    for p in points[1:]:
        s = sign(p.y)
        if s != prev_sign:
            count += 1
            prev_sign = s
    return count


def control_polygon_flat_enough(points: Sequence[Vec], degree: int) -> bool:
    """True when the x intercepts of the polygon's bounding band around the
    chord differ by less than FIND_ROOTS_EPSILON."""
    # Implicit line a*x + b*y + c = 0 through the first and last points
    a = points[0].y - points[degree].y
    b = points[degree].x - points[0].x
    c = points[0].x * points[degree].y - points[degree].x * points[0].y
    if a == 0:
        return False

    max_above = 0.0
    max_below = 0.0
    for p in points[1:degree]:
        value = a * p.x + b * p.y + c
        if value > max_above:
            max_above = value
        elif value < max_below:
            max_below = value

    # The band edges c - max_above and c - max_below meet y = 0 at
    # x = (max - c) / a, so the intercept spread is their difference over |a|
    error = (max_above - max_below) / abs(a)
    return error < FIND_ROOTS_EPSILON


def compute_x_intercept(points: Sequence[Vec], degree: int) -> float:
    """x intercept of the chord from the first to the last control point."""
    p0 = points[0]
    p1 = points[degree]
    dx = p1.x - p0.x
    dy = p1.y - p0.y
    return (dx * p0.y - dy * p0.x) / -dy


def split_bezier(points: Sequence[Vec], t: float) -> tuple[list[Vec], list[Vec]]:
    """de Casteljau split of a Bezier of any degree at *t*."""
    degree = len(points) - 1
    rows = [list(points)]
    for j in range(1, degree + 1):
        prev = rows[j - 1]
        rows.append([prev[i].mix(prev[i + 1], t) for i in range(degree - j + 1)])

    left = [rows[j][0] for j in range(degree + 1)]
    right = [rows[degree - j][j] for j in range(degree + 1)]
    return left, right
