# CurveForge - A Planar Curve Geometry Kernel
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Path-level intersection aggregation.

Every segment of every path becomes a TaggedPrimitive that remembers its
owning path and segment index.  Primitive pairs are run through the
segment intersection engine and local times are lifted to path times by
adding the segment index.

Same-path results are deduplicated: a point meeting itself
(``time1 == time2``) is dropped, and on a closed path the seam pair
``(0, N)`` / ``(N, 0)`` is dropped, N being the anchor count.

With ``max_distance`` and ``point`` given, primitives whose expanded
control-point box misses the point are skipped and results farther than
``max_distance`` from the point are dropped.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable

from ..core.vec import Vec
from .intersect import PrimitiveIntersection, cubic_self_intersections, primitive_intersections
from .segment import Cubic, Primitive, bounding_box_of_primitive, primitive_from_segment

if TYPE_CHECKING:
    from ..core.path import Path

logger = logging.getLogger(__name__)


@dataclass
class IntersectionResult:
    path1: Path
    path2: Path
    time1: float
    time2: float
    position: Vec
    distance: float | None = None


@dataclass
class TaggedPrimitive:
    primitive: Primitive
    path: Path
    index: int


def tagged_primitives_from_paths(paths: Iterable[Path], max_distance: float | None = None,
                                 point: Vec | None = None) -> list[TaggedPrimitive]:
    tagged = []
    filtered = max_distance is not None and point is not None
    for path in paths:
        for index, segment in enumerate(path.segment_pairs()):
            primitive = primitive_from_segment(segment)
            if filtered:
                bounds = bounding_box_of_primitive(primitive).expanded_scalar(max_distance)
                if not bounds.contains_point(point):
                    continue
            tagged.append(TaggedPrimitive(primitive, path, index))
    return tagged


def _accumulate(results: list[IntersectionResult], tp1: TaggedPrimitive, tp2: TaggedPrimitive,
                hits: list[PrimitiveIntersection], max_distance: float | None,
                point: Vec | None) -> None:
    for hit in hits:
        time1 = hit.time1 + tp1.index
        time2 = hit.time2 + tp2.index
        if tp1.path is tp2.path:
            if time1 == time2:
                continue
            if tp1.path.closed:
                n = len(tp1.path.anchors)
                if (time1 == 0 and time2 == n) or (time2 == 0 and time1 == n):
                    continue

        position = tp1.path.position_at_time(time1)
        if max_distance is None or point is None:
            results.append(IntersectionResult(tp1.path, tp2.path, time1, time2, position))
            continue
        distance = position.distance(point)
        if distance > max_distance:
            continue
        results.append(IntersectionResult(tp1.path, tp2.path, time1, time2, position, distance))


def path_intersections_within_distance_to_point(paths: Iterable[Path], max_distance: float | None = None,
                                                point: Vec | None = None) -> list[IntersectionResult]:
    """All intersections among the segments of *paths*.

    In each result, path1 either is path2 or comes before it in *paths*.
    Results are further restricted to within *max_distance* of *point*
    when both are given.
    """
    tagged = tagged_primitives_from_paths(paths, max_distance, point)
    results: list[IntersectionResult] = []
    for i, tp1 in enumerate(tagged):
        if isinstance(tp1.primitive, Cubic):
            _accumulate(results, tp1, tp1, cubic_self_intersections(tp1.primitive), max_distance, point)
        for tp2 in tagged[i + 1:]:
            hits = primitive_intersections(tp1.primitive, tp2.primitive)
            _accumulate(results, tp1, tp2, hits, max_distance, point)
    logger.debug("path intersections: %d primitives, %d results", len(tagged), len(results))
    return results


def path_intersections(paths: Iterable[Path]) -> list[IntersectionResult]:
    return path_intersections_within_distance_to_point(paths)


def partitioned_path_intersections_within_distance_to_point(
        paths1: Iterable[Path], paths2: Iterable[Path], max_distance: float | None = None,
        point: Vec | None = None) -> list[IntersectionResult]:
    """Intersections between segments of *paths1* and segments of *paths2*.

    path1 of each result is taken from *paths1* and path2 from *paths2*.
    Segments are never tested against others from the same list.
    """
    tagged1 = tagged_primitives_from_paths(paths1, max_distance, point)
    tagged2 = tagged_primitives_from_paths(paths2, max_distance, point)
    results: list[IntersectionResult] = []
    for tp1 in tagged1:
        for tp2 in tagged2:
            hits = primitive_intersections(tp1.primitive, tp2.primitive)
            _accumulate(results, tp1, tp2, hits, max_distance, point)
    logger.debug("partitioned intersections: %d x %d primitives, %d results",
                 len(tagged1), len(tagged2), len(results))
    return results


def partitioned_path_intersections(paths1: Iterable[Path], paths2: Iterable[Path]) -> list[IntersectionResult]:
    return partitioned_path_intersections_within_distance_to_point(paths1, paths2)
