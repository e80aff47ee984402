# CurveForge - A Planar Curve Geometry Kernel
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Axis-aligned bounding box."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from .vec import Vec


@dataclass(frozen=True)
class BoundingBox:
    min: Vec
    max: Vec

    def center(self) -> Vec:
        return (self.min + self.max) * 0.5

    def size(self) -> Vec:
        return self.max - self.min

    def width(self) -> float:
        return self.max.x - self.min.x

    def height(self) -> float:
        return self.max.y - self.min.y

    def is_finite(self) -> bool:
        return self.min.is_finite() and self.max.is_finite()

    def canonicalized(self) -> BoundingBox:
        """Return a box whose min is componentwise <= its max."""
        return BoundingBox(self.min.min(self.max), self.min.max(self.max))

    def expanded_to_include_point(self, point: Vec) -> BoundingBox:
        return BoundingBox(self.min.min(point), self.max.max(point))

    def expanded_to_include_bounding_box(self, box: BoundingBox) -> BoundingBox:
        return BoundingBox(self.min.min(box.min), self.max.max(box.max))

    def expanded_scalar(self, distance: float) -> BoundingBox:
        return BoundingBox(Vec(self.min.x - distance, self.min.y - distance),
                           Vec(self.max.x + distance, self.max.y + distance))

    def contains_point(self, point: Vec) -> bool:
        return (self.min.x <= point.x <= self.max.x
                and self.min.y <= point.y <= self.max.y)

    def contains_bounding_box(self, box: BoundingBox) -> bool:
        return (box.min.x >= self.min.x and box.max.x <= self.max.x
                and box.min.y >= self.min.y and box.max.y <= self.max.y)

    def overlaps_bounding_box(self, box: BoundingBox) -> bool:
        """Closed-interval overlap test; touching boxes overlap."""
        return (box.max.x >= self.min.x and box.min.x <= self.max.x
                and box.max.y >= self.min.y and box.min.y <= self.max.y)

    def corners(self) -> list[Vec]:
        """Corners in the order min, (max.x, min.y), max, (min.x, max.y)."""
        return [self.min, Vec(self.max.x, self.min.y), self.max, Vec(self.min.x, self.max.y)]

    @staticmethod
    def from_points(points: Iterable[Vec]) -> BoundingBox | None:
        """Smallest box containing *points*, or None for no points."""
        box = None
        for p in points:
            if box is None:
                box = BoundingBox(p, p)
            else:
                box = box.expanded_to_include_point(p)
        return box

    @staticmethod
    def from_cubic(points: Sequence[Vec]) -> BoundingBox:
        """Box around a cubic's four control points (a loose bound on the curve)."""
        p0, p1, p2, p3 = points
        return BoundingBox(
            Vec(min(p0.x, p1.x, p2.x, p3.x), min(p0.y, p1.y, p2.y, p3.y)),
            Vec(max(p0.x, p1.x, p2.x, p3.x), max(p0.y, p1.y, p2.y, p3.y)),
        )
