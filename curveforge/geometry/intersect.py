# CurveForge - A Planar Curve Geometry Kernel
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Segment Intersection Engine

Finds the parameters at which two primitives cross.  Every function
returns a list of PrimitiveIntersection records with both times in
[0, 1]; an empty list is the normal answer for parallel, disjoint,
coincident or overlapping input.

- line/line: closed-form 2x2 solve.
- line/cubic: real roots of the cubic's signed distance to the line.
- cubic/cubic: recursive subdivision of both curves, pruning candidate
  pairs by bounding box and then by chord crossing.

Self-intersection of a single cubic is not detected.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np

from ..core.bounding_box import BoundingBox
from ..core.constants import (
    BOUNDING_BOX_ITERATIONS,
    DEFAULT_TOLERANCE,
    MAX_INTERSECTION_ITERATIONS,
    ROOT_EPSILON,
)
from .segment import (
    Cubic,
    Line,
    Primitive,
    point_on_cubic_at_time,
    position_and_time_at_closest_point_on_cubic,
    split_cubic,
    trim_cubic,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PrimitiveIntersection:
    time1: float
    time2: float

    def swapped(self) -> PrimitiveIntersection:
        return PrimitiveIntersection(self.time2, self.time1)


# ---------------------------------------------------------------------------
# Line / line
# ---------------------------------------------------------------------------

def line_line_intersections(line1: Line, line2: Line) -> list[PrimitiveIntersection]:
    """Intersection of two line segments.

    Parallel lines (including collinear ones) and crossings outside either
    segment give no result.  Crossings exactly at an endpoint are kept.
    """
    p1, p2 = line1
    p3, p4 = line2
    denom = (p4.y - p3.y) * (p2.x - p1.x) - (p4.x - p3.x) * (p2.y - p1.y)
    if denom == 0:
        return []
    ua = ((p4.x - p3.x) * (p1.y - p3.y) - (p4.y - p3.y) * (p1.x - p3.x)) / denom
    if ua < 0 or ua > 1:
        return []
    ub = ((p2.x - p1.x) * (p1.y - p3.y) - (p2.y - p1.y) * (p1.x - p3.x)) / denom
    if ub < 0 or ub > 1:
        return []
    return [PrimitiveIntersection(ua, ub)]


# ---------------------------------------------------------------------------
# Line / cubic
# ---------------------------------------------------------------------------

def _real_roots_in_unit_interval(coeffs: list[float]) -> list[float]:
    roots = np.roots(coeffs)
    roots = roots[np.isclose(roots.imag, 0)].real
    result = []
    for r in sorted(roots):
        if -ROOT_EPSILON <= r <= 1 + ROOT_EPSILON:
            result.append(min(max(float(r), 0.0), 1.0))
    return result


def line_cubic_intersections(line: Line, cubic: Cubic) -> list[PrimitiveIntersection]:
    """Crossings of a line segment with a cubic, ordered by cubic time.

    The signed distance of the cubic to the infinite line is itself a cubic
    polynomial in t; its real roots in [0, 1] are the cubic times.  Each
    root's curve point is projected on the line to get the line time, which
    is clamped when it lands within ROOT_EPSILON outside [0, 1].  A cubic
    lying along the line has an identically zero distance and gives no
    result.
    """
    a1, a2 = line
    direction = a2 - a1
    length_sq = direction.length_squared()
    if length_sq == 0:
        return []

    unit = direction.normalized()
    d0, d1, d2, d3 = (unit.cross(p - a1) for p in cubic)
    coeffs = [
        -d0 + 3 * d1 - 3 * d2 + d3,
        3 * d0 - 6 * d1 + 3 * d2,
        -3 * d0 + 3 * d1,
        d0,
    ]

    results = []
    for time2 in _real_roots_in_unit_interval(coeffs):
        point = point_on_cubic_at_time(cubic, time2)
        time1 = (point - a1).dot(direction) / length_sq
        if time1 < -ROOT_EPSILON or time1 > 1 + ROOT_EPSILON:
            continue
        results.append(PrimitiveIntersection(min(max(time1, 0.0), 1.0), time2))
    return results


def cubic_line_intersections(cubic: Cubic, line: Line) -> list[PrimitiveIntersection]:
    return [r.swapped() for r in line_cubic_intersections(line, cubic)]


# ---------------------------------------------------------------------------
# Cubic / cubic
# ---------------------------------------------------------------------------

def cubic_bounding_boxes_overlap(cubic1: Cubic, cubic2: Cubic) -> bool:
    return BoundingBox.from_cubic(cubic1).overlaps_bounding_box(BoundingBox.from_cubic(cubic2))


def _chords_intersect(cubic1: Cubic, cubic2: Cubic) -> bool:
    return bool(line_line_intersections(Line(cubic1.p0, cubic1.p3), Line(cubic2.p0, cubic2.p3)))


def cubics_equal(cubic1: Cubic, cubic2: Cubic) -> bool:
    """Point-for-point equality, forwards or reversed."""
    return tuple(cubic1) == tuple(cubic2) or tuple(cubic1) == tuple(reversed(cubic2))


def cubics_almost_equal(cubic1: Cubic, cubic2: Cubic, tolerance: float = DEFAULT_TOLERANCE) -> bool:
    forward = all(a.distance(b) <= tolerance for a, b in zip(cubic1, cubic2))
    if forward:
        return True
    return all(a.distance(b) <= tolerance for a, b in zip(cubic1, reversed(cubic2)))


def cubics_overlap(cubic1: Cubic, cubic2: Cubic, tolerance: float = DEFAULT_TOLERANCE) -> bool:
    """True when the two cubics trace a common stretch of curve.

    Each endpoint of one cubic that lies within *tolerance* of the other
    cubic contributes a (time1, time2) match.  With at least two matches
    spanning more than *tolerance* in time1, both cubics are trimmed to the
    matched span and compared by their inner control points.
    """
    box1 = BoundingBox.from_cubic(cubic1).expanded_scalar(tolerance)
    box2 = BoundingBox.from_cubic(cubic2).expanded_scalar(tolerance)

    matches: list[tuple[float, float]] = []
    for point, time1 in ((cubic1.p0, 0.0), (cubic1.p3, 1.0)):
        if box2.contains_point(point):
            position, time2 = position_and_time_at_closest_point_on_cubic(point, cubic2)
            if position.distance(point) < tolerance:
                matches.append((time1, time2))
    for point, time2 in ((cubic2.p0, 0.0), (cubic2.p3, 1.0)):
        if box1.contains_point(point):
            position, time1 = position_and_time_at_closest_point_on_cubic(point, cubic1)
            if position.distance(point) < tolerance:
                matches.append((time1, time2))

    if len(matches) < 2:
        return False
    matches.sort(key=lambda m: m[0])
    start1, start2 = matches[0]
    end1, end2 = matches[-1]
    # Measured in time rather than space
    if end1 - start1 < tolerance:
        return False

    trimmed1 = trim_cubic(cubic1, start1, end1)
    trimmed2 = trim_cubic(cubic2, start2, end2)
    return (trimmed1.p1.distance(trimmed2.p1) < tolerance
            and trimmed1.p2.distance(trimmed2.p2) < tolerance)


def cubic_cubic_intersections(cubic1: Cubic, cubic2: Cubic,
                              tolerance: float = DEFAULT_TOLERANCE) -> list[PrimitiveIntersection]:
    """Crossings of two cubics by recursive subdivision.

    Candidates are (time1, sub-cubic1, time2, sub-cubic2) where time1 and
    time2 are the start parameters of the sub-cubics.  Each round keeps a
    candidate if its sub-cubics' boxes overlap (first
    BOUNDING_BOX_ITERATIONS rounds) or if their chords cross (later
    rounds), then splits both halves 2x2.  After MAX_INTERSECTION_ITERATIONS
    rounds the remaining candidates are resolved by chord intersection,
    and identical (time1, time2) pairs are reported once.

    Coincident and overlapping cubics give no result.
    """
    if cubics_equal(cubic1, cubic2) or cubics_almost_equal(cubic1, cubic2, tolerance):
        logger.debug("cubic/cubic: coincident curves")
        return []
    if not cubic_bounding_boxes_overlap(cubic1, cubic2):
        return []
    if cubics_overlap(cubic1, cubic2, tolerance):
        logger.debug("cubic/cubic: overlapping curves")
        return []

    candidates = [(0.0, cubic1, 0.0, cubic2)]
    time_length = 1.0

    for i in range(MAX_INTERSECTION_ITERATIONS):
        next_candidates = []
        next_time_length = time_length * 0.5
        for time1, c1, time2, c2 in candidates:
            if i < BOUNDING_BOX_ITERATIONS:
                keep = cubic_bounding_boxes_overlap(c1, c2)
            else:
                keep = _chords_intersect(c1, c2)
            if not keep:
                continue
            c1a, c1b = split_cubic(c1, 0.5)
            c2a, c2b = split_cubic(c2, 0.5)
            next_candidates.append((time1, c1a, time2, c2a))
            next_candidates.append((time1, c1a, time2 + next_time_length, c2b))
            next_candidates.append((time1 + next_time_length, c1b, time2, c2a))
            next_candidates.append((time1 + next_time_length, c1b, time2 + next_time_length, c2b))
        if not next_candidates:
            logger.debug("cubic/cubic: no candidates left after round %d", i)
            return []
        candidates = next_candidates
        time_length = next_time_length

    logger.debug("cubic/cubic: resolving %d candidates", len(candidates))

    results = []
    seen = set()
    for time1, c1, time2, c2 in candidates:
        for hit in line_line_intersections(Line(c1.p0, c1.p3), Line(c2.p0, c2.p3)):
            result = PrimitiveIntersection(time1 + hit.time1 * time_length,
                                           time2 + hit.time2 * time_length)
            # A crossing on a subdivision boundary is found by every candidate sharing it
            if result in seen:
                continue
            seen.add(result)
            results.append(result)
    return results


def cubic_self_intersections(cubic: Cubic) -> list[PrimitiveIntersection]:
    """Not implemented: always returns an empty list.

    A looping cubic does cross itself, so callers cannot use this to detect
    self-crossing curves.
    """
    return []


def primitive_intersections(primitive1: Primitive, primitive2: Primitive) -> list[PrimitiveIntersection]:
    if isinstance(primitive1, Line):
        if isinstance(primitive2, Line):
            return line_line_intersections(primitive1, primitive2)
        return line_cubic_intersections(primitive1, primitive2)
    if isinstance(primitive2, Line):
        return cubic_line_intersections(primitive1, primitive2)
    return cubic_cubic_intersections(primitive1, primitive2)
