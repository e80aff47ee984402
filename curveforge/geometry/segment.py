# CurveForge - A Planar Curve Geometry Kernel
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Segment primitives.

A segment is a pair of adjacent anchors.  It is classified once into one
of two primitive types and every algorithm dispatches on that type:

- ``Line(p0, p1)`` when the first anchor's handle_out and the second
  anchor's handle_in are both zero.
- ``Cubic(p0, p1, p2, p3)`` otherwise, with the handles turned into
  absolute control points.

Arc length of a cubic is integrated with Gauss-Legendre quadrature; the
inverse (time at a distance) uses a fixed-resolution lookup table of
chord lengths.
"""

from __future__ import annotations

from typing import NamedTuple, Union

import numpy as np

from ..core.anchor import Anchor
from ..core.bounding_box import BoundingBox
from ..core.constants import ARC_LENGTH_LUT_SAMPLES, ARC_LENGTH_QUADRATURE_ORDER
from ..core.mathutil import saturate
from ..core.vec import Vec
from .bezier import bernstein_form_for_closest_point, find_roots

# ---------------------------------------------------------------------------
# Primitive types
# ---------------------------------------------------------------------------

class Line(NamedTuple):
    p0: Vec
    p1: Vec


class Cubic(NamedTuple):
    p0: Vec
    p1: Vec
    p2: Vec
    p3: Vec


Primitive = Union[Line, Cubic]
Segment = tuple[Anchor, Anchor]


def is_segment_linear(segment: Segment) -> bool:
    a1, a2 = segment
    return a1.handle_out.is_zero() and a2.handle_in.is_zero()


def line_from_segment(segment: Segment) -> Line:
    a1, a2 = segment
    return Line(a1.position, a2.position)


def cubic_from_segment(segment: Segment) -> Cubic:
    a1, a2 = segment
    return Cubic(a1.position, a1.position + a1.handle_out,
                 a2.position + a2.handle_in, a2.position)


def primitive_from_segment(segment: Segment) -> Primitive:
    if is_segment_linear(segment):
        return line_from_segment(segment)
    return cubic_from_segment(segment)


def bounding_box_of_primitive(primitive: Primitive) -> BoundingBox:
    """Control-point box; a loose bound for cubics, exact for lines."""
    if isinstance(primitive, Line):
        return BoundingBox(primitive.p0.min(primitive.p1), primitive.p0.max(primitive.p1))
    return BoundingBox.from_cubic(primitive)


# ---------------------------------------------------------------------------
# Evaluation
# ---------------------------------------------------------------------------

def point_on_cubic_at_time(cubic: Cubic, t: float) -> Vec:
    """Bernstein evaluation; t == 0 and t == 1 return the endpoints exactly."""
    p0, p1, p2, p3 = cubic
    if t == 0:
        return p0
    if t == 1:
        return p3

    mt = 1 - t
    t2 = t * t
    mt2 = mt * mt
    a = mt2 * mt
    b = mt2 * t * 3
    c = mt * t2 * 3
    d = t * t2
    return Vec(a * p0.x + b * p1.x + c * p2.x + d * p3.x,
               a * p0.y + b * p1.y + c * p2.y + d * p3.y)


def derivative_of_cubic_at_time(cubic: Cubic, t: float) -> Vec:
    p0, p1, p2, p3 = cubic
    mt = 1 - t
    a = 3 * mt * mt
    b = 6 * mt * t
    c = 3 * t * t
    return Vec(a * (p1.x - p0.x) + b * (p2.x - p1.x) + c * (p3.x - p2.x),
               a * (p1.y - p0.y) + b * (p2.y - p1.y) + c * (p3.y - p2.y))


# ---------------------------------------------------------------------------
# Closest point
# ---------------------------------------------------------------------------

def position_and_time_at_closest_point_on_line(point: Vec, line: Line) -> tuple[Vec, float]:
    p0, p1 = line
    direction = p1 - p0
    length_sq = direction.length_squared()
    if length_sq == 0:
        return p0, 0.0
    t = saturate((point - p0).dot(direction) / length_sq)
    return p0 + direction * t, t


def position_and_time_at_closest_point_on_cubic(point: Vec, cubic: Cubic) -> tuple[Vec, float]:
    """Closest point on *cubic* to *point* and its parameter in [0, 1].

    The start point is the initial candidate.  Interior roots of the
    distance derivative replace it only when strictly closer; the end
    point replaces the best so far when it is closer or equally close.
    """
    w = bernstein_form_for_closest_point(point, cubic)
    roots = find_roots(w)

    best_position = cubic.p0
    best_time = 0.0
    best_distance_sq = point.distance_squared(cubic.p0)

    for t in roots:
        candidate = point_on_cubic_at_time(cubic, t)
        distance_sq = point.distance_squared(candidate)
        if distance_sq < best_distance_sq:
            best_distance_sq = distance_sq
            best_position = candidate
            best_time = t

    if point.distance_squared(cubic.p3) <= best_distance_sq:
        best_position = cubic.p3
        best_time = 1.0

    return best_position, best_time


def position_and_time_at_closest_point_on_primitive(point: Vec, primitive: Primitive) -> tuple[Vec, float]:
    if isinstance(primitive, Line):
        return position_and_time_at_closest_point_on_line(point, primitive)
    return position_and_time_at_closest_point_on_cubic(point, primitive)


# ---------------------------------------------------------------------------
# Splitting and trimming
# ---------------------------------------------------------------------------

def split_cubic(cubic: Cubic, t: float) -> tuple[Cubic, Cubic]:
    """Split a cubic at parameter t using de Casteljau's algorithm."""
    p0, p1, p2, p3 = cubic
    m = p1.mix(p2, t)
    a1 = p0.mix(p1, t)
    a2 = a1.mix(m, t)
    b2 = p2.mix(p3, t)
    b1 = m.mix(b2, t)
    a3 = a2.mix(b1, t)
    return Cubic(p0, a1, a2, a3), Cubic(a3, b1, b2, p3)


def trim_cubic(cubic: Cubic, start: float, end: float) -> Cubic:
    """Sub-curve of *cubic* between *start* and *end*.

    If start > end the returned cubic runs backwards.
    """
    if start > end:
        start, end = end, start
        cubic = Cubic(cubic.p3, cubic.p2, cubic.p1, cubic.p0)
        # Re-express the range on the reversed curve
        start, end = 1 - end, 1 - start
    if start != 0:
        cubic = split_cubic(cubic, start)[1]
    if end != 1:
        cubic = split_cubic(cubic, (end - start) / (1 - start))[0]
    return cubic


# ---------------------------------------------------------------------------
# Arc length
# ---------------------------------------------------------------------------

_GL_NODES, _GL_WEIGHTS = np.polynomial.legendre.leggauss(ARC_LENGTH_QUADRATURE_ORDER)


def _cubic_coefficients(cubic: Cubic) -> np.ndarray:
    return np.array([[p.x, p.y] for p in cubic], dtype=float)


def _speed(ctrl: np.ndarray, ts: np.ndarray) -> np.ndarray:
    mt = 1 - ts
    d = (3 * (mt * mt)[:, None] * (ctrl[1] - ctrl[0])
         + 6 * (mt * ts)[:, None] * (ctrl[2] - ctrl[1])
         + 3 * (ts * ts)[:, None] * (ctrl[3] - ctrl[2]))
    return np.hypot(d[:, 0], d[:, 1])


def partial_cubic_length(cubic: Cubic, end_time: float) -> float:
    """Arc length of *cubic* from t=0 to *end_time*."""
    if end_time <= 0:
        return 0.0
    half = end_time / 2
    ts = half * (_GL_NODES + 1)
    return float(half * np.dot(_GL_WEIGHTS, _speed(_cubic_coefficients(cubic), ts)))


def cubic_length(cubic: Cubic) -> float:
    return partial_cubic_length(cubic, 1.0)


def cubic_distance_lookup_table(cubic: Cubic, samples: int = ARC_LENGTH_LUT_SAMPLES) -> np.ndarray:
    """Cumulative chord length at ``samples`` evenly spaced parameters."""
    ctrl = _cubic_coefficients(cubic)
    ts = np.linspace(0.0, 1.0, samples)
    mt = 1 - ts
    points = ((mt ** 3)[:, None] * ctrl[0]
              + (3 * mt * mt * ts)[:, None] * ctrl[1]
              + (3 * mt * ts * ts)[:, None] * ctrl[2]
              + (ts ** 3)[:, None] * ctrl[3])
    steps = np.diff(points, axis=0)
    return np.concatenate(([0.0], np.cumsum(np.hypot(steps[:, 0], steps[:, 1]))))


def time_at_distance_on_cubic(cubic: Cubic, distance: float, samples: int = ARC_LENGTH_LUT_SAMPLES) -> float:
    """Parameter at arc length *distance* along *cubic*.

    Finds the lookup table step that straddles the distance and
    interpolates linearly inside it.
    """
    if distance <= 0:
        return 0.0
    table = cubic_distance_lookup_table(cubic, samples)
    if distance >= table[-1]:
        return 1.0
    i = int(np.searchsorted(table, distance, side="right")) - 1
    step = table[i + 1] - table[i]
    fraction = (distance - table[i]) / step if step > 0 else 0.0
    return (i + fraction) / (samples - 1)


def segment_length(segment: Segment) -> float:
    primitive = primitive_from_segment(segment)
    if isinstance(primitive, Line):
        return primitive.p0.distance(primitive.p1)
    return cubic_length(primitive)


def partial_segment_length(segment: Segment, end_time: float) -> float:
    primitive = primitive_from_segment(segment)
    if isinstance(primitive, Line):
        return end_time * primitive.p0.distance(primitive.p1)
    return partial_cubic_length(primitive, end_time)
