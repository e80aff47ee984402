# CurveForge - A Planar Curve Geometry Kernel
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Path: an ordered chain of anchors, optionally closed.

Time
----
A path is parameterized by *time*.  The integer part selects a segment
(the segment from anchor i to anchor i + 1), the fractional part is the
local Bezier parameter within it.  Closed paths wrap time modulo the
anchor count; open paths clamp it to ``[0, len(anchors) - 1]``.

Mutation
--------
Paths and anchors are mutable.  ``insert_anchor_at_time``,
``split_at_anchor``, ``round_corner_at_anchor``, ``polygonize``,
``reverse`` and the transform methods change the path they are called on
(and, for insertion, the handles of the neighboring anchors).  Clone
first to keep the original.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Iterable, Sequence

from ..geometry.arc import arc_anchors
from ..geometry.insideness import point_in_primitives
from ..geometry.intersect import line_line_intersections
from ..geometry.segment import (
    Line,
    Primitive,
    Segment,
    bounding_box_of_primitive,
    cubic_from_segment,
    derivative_of_cubic_at_time,
    is_segment_linear,
    partial_segment_length,
    point_on_cubic_at_time,
    position_and_time_at_closest_point_on_primitive,
    primitive_from_segment,
    segment_length,
    split_cubic,
    time_at_distance_on_cubic,
)
from .anchor import Anchor, ClosestPointResult
from .bounding_box import BoundingBox
from .constants import ROUND_CORNER_STEPS
from .mathutil import clamp, modulo
from .matrix import AffineMatrix
from .vec import Vec

logger = logging.getLogger(__name__)


@dataclass
class RoundCornerInfo:
    """Where a fillet of a given radius touches the path around a corner.

    ``sign`` is 1 when the center lies on the left of the path (positive
    normal side), -1 when it lies on the right.  The arc runs from
    ``start_angle`` to ``end_angle`` (degrees, measured at ``center``).
    """
    center: Vec
    time1: float
    time2: float
    point1: Vec
    point2: Vec
    sign: int
    start_angle: float
    end_angle: float


@dataclass(eq=False)
class Path:
    anchors: list[Anchor] = field(default_factory=list)
    closed: bool = False

    # ---------------------------------------------------------------------------
    # Data model
    # ---------------------------------------------------------------------------

    def clone(self) -> Path:
        return Path([anchor.clone() for anchor in self.anchors], self.closed)

    def is_valid(self) -> bool:
        return isinstance(self.anchors, list) and all(
            isinstance(anchor, Anchor) and anchor.is_valid() for anchor in self.anchors)

    def affine_transform(self, m: AffineMatrix) -> Path:
        for anchor in self.anchors:
            anchor.affine_transform(m)
        return self

    def affine_transform_without_translation(self, m: AffineMatrix) -> Path:
        for anchor in self.anchors:
            anchor.affine_transform_without_translation(m)
        return self

    def transform(self, position: Vec | None = None, rotation: float | None = None,
                  scale: Vec | float | None = None, skew: float | None = None,
                  origin: Vec | None = None) -> Path:
        """Apply ``AffineMatrix.from_transform`` built from the given parts."""
        m = AffineMatrix.from_transform(position=position, rotation=rotation, scale=scale,
                                        skew=skew, origin=origin)
        return self.affine_transform(m)

    def reverse(self) -> Path:
        for anchor in self.anchors:
            anchor.reverse()
        self.anchors.reverse()
        return self

    def first_anchor(self) -> Anchor | None:
        return self.anchors[0] if self.anchors else None

    def last_anchor(self) -> Anchor | None:
        return self.anchors[-1] if self.anchors else None

    def index_of_anchor(self, anchor: Anchor) -> int:
        """Position of *anchor* (by identity) in this path, or -1."""
        for i, a in enumerate(self.anchors):
            if a is anchor:
                return i
        return -1

    def final_time(self) -> int:
        n = len(self.anchors)
        return n if self.closed else n - 1

    def segment_pairs(self) -> list[Segment]:
        anchors = self.anchors
        if len(anchors) < 2:
            return []
        pairs = list(zip(anchors, anchors[1:]))
        if self.closed:
            pairs.append((anchors[-1], anchors[0]))
        return pairs

    def segment_at_index(self, index: int) -> Path:
        return Path(self.anchors[index:index + 2])

    def segments(self) -> list[Path]:
        """One open two-anchor path per segment; anchors are shared."""
        return [Path([a1, a2]) for a1, a2 in self.segment_pairs()]

    def primitives(self) -> list[Primitive]:
        return [primitive_from_segment(segment) for segment in self.segment_pairs()]

    def edges(self) -> list[Path]:
        """Split the path at its sharp corners.

        Anchors whose handles are not tangent end one edge and start the
        next.  A closed path with no sharp corner is a single closed edge.
        """
        anchors = self.anchors
        count = len(anchors)
        if count < 2:
            return []

        start = 0
        if self.closed:
            while start < count and anchors[start].has_tangent_handles():
                start += 1
            if start == count:
                return [Path(anchors, True)]

        edges = []
        edge_anchors: list[Anchor] = []

        def accumulate(anchor: Anchor):
            nonlocal edge_anchors
            edge_anchors.append(anchor)
            if len(edge_anchors) >= 2 and not anchor.has_tangent_handles():
                edges.append(Path(edge_anchors))
                edge_anchors = [anchor]

        for i in range(start, count):
            accumulate(anchors[i])

        if start > 0:
            for i in range(start + 1):
                accumulate(anchors[i])
        elif self.closed:
            edge_anchors.append(anchors[0])

        if len(edge_anchors) > 1:
            edges.append(Path(edge_anchors))
        return edges

    # ---------------------------------------------------------------------------
    # Bounds and hit testing
    # ---------------------------------------------------------------------------

    def loose_bounding_box(self) -> BoundingBox | None:
        """Box around all anchor positions and the handles that are in use."""
        anchors = self.anchors
        if not anchors:
            return None
        if len(anchors) == 1:
            return anchors[0].loose_bounding_box()

        first = anchors[0]
        box = BoundingBox(first.position, first.position)
        box = box.expanded_to_include_point(first.position + first.handle_out)
        if self.closed:
            box = box.expanded_to_include_point(first.position + first.handle_in)

        for anchor in anchors[1:-1]:
            box = box.expanded_to_include_point(anchor.position)
            box = box.expanded_to_include_point(anchor.position + anchor.handle_in)
            box = box.expanded_to_include_point(anchor.position + anchor.handle_out)

        last = anchors[-1]
        box = box.expanded_to_include_point(last.position)
        box = box.expanded_to_include_point(last.position + last.handle_in)
        if self.closed:
            box = box.expanded_to_include_point(last.position + last.handle_out)
        return box

    def closest_point_within_distance_to_point(self, max_distance: float, point: Vec) -> ClosestPointResult:
        """Closest point on the path to *point*, if closer than *max_distance*."""
        anchors = self.anchors
        if not anchors:
            return ClosestPointResult()
        if len(anchors) == 1:
            return anchors[0].closest_point_within_distance_to_point(max_distance, point)

        max_distance_sq = max_distance * max_distance
        result = ClosestPointResult()
        for index, segment in enumerate(self.segment_pairs()):
            primitive = primitive_from_segment(segment)
            bounds = bounding_box_of_primitive(primitive).expanded_scalar(max_distance)
            if not bounds.contains_point(point):
                continue
            position, time = position_and_time_at_closest_point_on_primitive(point, primitive)
            distance_sq = position.distance_squared(point)
            if distance_sq < max_distance_sq and distance_sq < result.distance * result.distance:
                result = ClosestPointResult(math.sqrt(distance_sq), position, index + time)
        return result

    def is_intersected_by_bounding_box(self, box: BoundingBox) -> bool:
        """True when the outline of *box* crosses the path."""
        from ..geometry.path_intersect import partitioned_path_intersections

        loose = self.loose_bounding_box()
        if loose is None or not loose.overlaps_bounding_box(box):
            return False
        return len(partitioned_path_intersections([self], [Path.from_bounding_box(box)])) > 0

    def contains_point(self, point: Vec) -> bool:
        """Even-odd insideness; open paths contain nothing."""
        if not self.closed:
            return False
        return point_in_primitives(self.primitives(), point)

    # ---------------------------------------------------------------------------
    # Parameterization
    # ---------------------------------------------------------------------------

    def normalize_time(self, time: float) -> float:
        n = len(self.anchors)
        if self.closed:
            return modulo(time, n)
        return clamp(time, 0, n - 1)

    def _segment_from_index(self, index: int) -> Segment:
        next_index = index + 1
        if self.closed:
            next_index %= len(self.anchors)
        return self.anchors[index], self.anchors[next_index]

    def position_at_time(self, time: float) -> Vec:
        anchors = self.anchors
        if not anchors:
            return Vec(0, 0)
        if len(anchors) < 2:
            return anchors[0].position

        time = self.normalize_time(time)
        index = int(time)
        if time == index:
            return anchors[index].position

        segment = self._segment_from_index(index)
        t = time - index
        if is_segment_linear(segment):
            return segment[0].position.mix(segment[1].position, t)
        return point_on_cubic_at_time(cubic_from_segment(segment), t)

    def derivative_at_time(self, time: float) -> Vec:
        """Derivative of the path at *time*.

        Linear segments report their unit direction and cubics their raw
        derivative.  At an anchor the outgoing handle is used (the incoming
        one at the end of an open path), borrowing the neighbor's control
        point when that handle is zero.
        """
        anchors = self.anchors
        n = len(anchors)
        if n < 2:
            return Vec(0, 0)

        time = self.normalize_time(time)
        index = int(time)
        anchor = anchors[index]

        if time == index:
            if not self.closed and index == n - 1:
                if anchor.handle_in.is_zero():
                    prev = anchors[index - 1]
                    return (anchor.position - (prev.position + prev.handle_out)).normalized()
                return (-anchor.handle_in).normalized()
            if anchor.handle_out.is_zero():
                following = anchors[(index + 1) % n]
                return (following.position + following.handle_in - anchor.position).normalized()
            return anchor.handle_out.normalized()

        segment = self._segment_from_index(index)
        if is_segment_linear(segment):
            return (segment[1].position - segment[0].position).normalized()
        return derivative_of_cubic_at_time(cubic_from_segment(segment), time - index)

    def tangent_at_time(self, time: float) -> Vec:
        return self.derivative_at_time(time).normalized()

    def normal_at_time(self, time: float) -> Vec:
        return self.tangent_at_time(time).rotate90()

    def length(self) -> float:
        return sum(segment_length(segment) for segment in self.segment_pairs())

    def time_at_distance(self, distance: float) -> float:
        """Time at arc length *distance* from the start of the path.

        Lines are exact; cubics interpolate in a chord-length lookup table.
        Distances past the end give the final time.
        """
        if distance <= 0 or len(self.anchors) < 2:
            return 0.0

        t = 0
        travelled = 0.0
        for segment in self.segment_pairs():
            length = segment_length(segment)
            if travelled + length > distance:
                if is_segment_linear(segment):
                    return t + (distance - travelled) / length
                return t + time_at_distance_on_cubic(cubic_from_segment(segment), distance - travelled)
            travelled += length
            t += 1
        return float(self.final_time())

    def distance_at_time(self, time: float) -> float:
        """Arc length from the start of the path to *time*."""
        if time <= 0 or len(self.anchors) < 2:
            return 0.0
        if time >= self.final_time():
            return self.length()

        index = int(time)
        distance = sum(segment_length(self._segment_from_index(i)) for i in range(index))
        t = time - index
        if t > 0:
            distance += partial_segment_length(self._segment_from_index(index), t)
        return distance

    # ---------------------------------------------------------------------------
    # Mutation
    # ---------------------------------------------------------------------------

    def insert_anchor_at_time(self, time: float) -> Anchor | None:
        """Insert an anchor at *time* without changing the path's shape.

        Returns the new anchor, the existing anchor when *time* is an
        integer, or None for paths with fewer than two anchors.
        """
        anchors = self.anchors
        n = len(anchors)
        if n < 2:
            return None

        time = self.normalize_time(time)
        index1 = int(time)
        if time == index1:
            return anchors[index1 % n]

        t = time - index1
        a1, a2 = self._segment_from_index(index1)

        if is_segment_linear((a1, a2)):
            anchor = Anchor(a1.position.mix(a2.position, t))
        else:
            left, right = split_cubic(cubic_from_segment((a1, a2)), t)
            a1.handle_out = left.p1 - a1.position
            a2.handle_in = right.p2 - a2.position
            position = right.p0
            anchor = Anchor(position, left.p2 - position, right.p1 - position)

        anchors.insert(index1 + 1, anchor)
        return anchor

    def split_at_anchor(self, anchor: Anchor) -> list[Path]:
        """Split at *anchor*.

        A closed path is opened in place so that it starts and ends at
        *anchor* (a copy of it is appended) and is returned alone.  An open
        path yields two new paths that both contain the split point.
        """
        anchors = self.anchors
        index = self.index_of_anchor(anchor)
        if index == -1:
            return [self]

        if self.closed:
            if index > 0:
                anchors[:] = anchors[index:] + anchors[:index]
            anchors.append(anchors[0].clone())
            self.closed = False
            return [self]

        path1 = Path(anchors[:index] + [anchors[index].clone()])
        path2 = Path(anchors[index:])
        return [path1, path2]

    def split_at_time(self, time: float) -> list[Path]:
        anchor = self.insert_anchor_at_time(time)
        if anchor is None:
            return [self]
        return self.split_at_anchor(anchor)

    def round_corner_info_at_anchor(self, anchor: Anchor, radius: float) -> RoundCornerInfo | None:
        """Locate a fillet of *radius* at *anchor*.

        The path is offset by *radius* on each side and sampled in
        ROUND_CORNER_STEPS steps per segment before and after the anchor.
        The first crossing of the two offset polylines is the fillet
        center.  Returns None when there is no crossing, the radius is not
        positive, or the anchor is an end of an open path.
        """
        if radius <= 0:
            return None
        index = self.index_of_anchor(anchor)
        if index == -1:
            return None
        if not self.closed and (index == 0 or index == len(self.anchors) - 1):
            return None

        def center_at_time(t: float, sign: int) -> Vec:
            return self.position_at_time(t) + self.normal_at_time(t) * (sign * radius)

        steps = ROUND_CORNER_STEPS
        step = 1 / steps
        time = index

        for sign in (-1, 1):
            before = [None] + [center_at_time(time - i * step, sign) for i in range(1, steps)]
            prev_after = None
            for j in range(1, steps):
                after = center_at_time(time + j * step, sign)
                if prev_after is not None:
                    for i in range(2, steps):
                        hits = line_line_intersections(Line(before[i - 1], before[i]),
                                                       Line(prev_after, after))
                        if not hits:
                            continue
                        center = before[i - 1].mix(before[i], hits[0].time1)
                        time1 = time - (i - 1) * step
                        time2 = time + (j - 1) * step
                        point1 = self.position_at_time(time1)
                        point2 = self.position_at_time(time2)
                        start_angle = (point1 - center).angle()
                        end_angle = (point2 - center).angle()
                        if sign == 1:
                            # Positive normal side: the arc sweeps with increasing angle
                            if start_angle > end_angle:
                                end_angle += 360
                        elif start_angle < end_angle:
                            start_angle += 360
                        return RoundCornerInfo(center, time1, time2, point1, point2,
                                               sign, start_angle, end_angle)
                prev_after = after

        logger.debug("no fillet of radius %g at anchor %d", radius, index)
        return None

    def round_corner_at_anchor(self, anchor: Anchor, radius: float) -> Path:
        """Replace the corner at *anchor* with a circular arc of *radius*.

        The path is left unchanged when no fillet fits.
        """
        info = self.round_corner_info_at_anchor(anchor, radius)
        if info is None:
            return self

        time1 = self.normalize_time(info.time1)
        time2 = self.normalize_time(info.time2)

        # Insert the later time first so the earlier one stays valid
        if time1 > time2:
            anchor1 = self.insert_anchor_at_time(time1)
            anchor2 = self.insert_anchor_at_time(time2)
        else:
            anchor2 = self.insert_anchor_at_time(time2)
            anchor1 = self.insert_anchor_at_time(time1)

        if anchor1 is not None and anchor2 is not None:
            arc = Path.from_arc(info.center, radius, info.start_angle, info.end_angle)
            anchor1.handle_out = arc.anchors[0].handle_out
            anchor2.handle_in = arc.anchors[-1].handle_in
            index2 = self.index_of_anchor(anchor2)
            self.anchors[index2 - 1:index2] = arc.anchors[1:-1]
        return self

    def polygonize(self, max_segment_length: float) -> Path:
        """Replace the path by a polyline whose segments are all shorter
        than *max_segment_length*."""
        if max_segment_length <= 0:
            return self
        new_anchors = []
        for segment in self.segments():
            length = segment.length()
            divisions = math.ceil(length / max_segment_length)
            if divisions == 0:
                new_anchors.append(Anchor(segment.anchors[0].position))
                continue
            step = length / divisions
            for i in range(divisions):
                t = segment.time_at_distance(i * step)
                new_anchors.append(Anchor(segment.position_at_time(t)))
        if not self.closed and self.anchors:
            new_anchors.append(Anchor(self.anchors[-1].position))
        self.anchors = new_anchors
        return self

    # ---------------------------------------------------------------------------
    # Constructors
    # ---------------------------------------------------------------------------

    @staticmethod
    def from_points(points: Iterable[Vec], closed: bool = False) -> Path:
        return Path([Anchor(point) for point in points], closed)

    @staticmethod
    def from_cubic_bezier_points(points: Sequence[Vec], closed: bool = False) -> Path:
        """Build a path from flat cubic control points ``p0 c1 c2 p1 c3 c4 p2 ...``.

        For a closed path the last two points may be the control points of
        the closing segment.
        """
        if not points:
            return Path([], closed)
        prev = Anchor(points[0])
        path = Path([prev], closed)
        i = 1
        n = len(points)
        while i < n:
            prev.handle_out = points[i] - prev.position
            i += 1
            if i == n:
                break
            handle_point = points[i]
            i += 1
            if i == n:
                if closed:
                    first = path.anchors[0]
                    first.handle_in = handle_point - first.position
                else:
                    path.anchors.append(Anchor(handle_point))
                break
            anchor = Anchor(points[i], handle_point - points[i])
            path.anchors.append(anchor)
            prev = anchor
            i += 1
        return path

    @staticmethod
    def from_bounding_box(box: BoundingBox) -> Path:
        return Path.from_points(box.corners(), closed=True)

    @staticmethod
    def from_arc(center: Vec, radius: float, start_angle: float, end_angle: float) -> Path:
        """Open path tracing a circular arc (angles in degrees)."""
        return Path(arc_anchors(center, radius, start_angle, end_angle))
