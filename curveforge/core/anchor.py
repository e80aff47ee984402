# CurveForge - A Planar Curve Geometry Kernel
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Anchor: one vertex of a path.

Handles are offsets relative to ``position``, not absolute control points.
A zero handle means the adjoining segment has no curvature on that side.
Anchors are mutable and compared by identity, so a path can locate a
specific anchor even when two anchors share coordinates.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .bounding_box import BoundingBox
from .constants import DEFAULT_TOLERANCE
from .vec import Vec

if TYPE_CHECKING:
    from .matrix import AffineMatrix


@dataclass
class ClosestPointResult:
    """Outcome of a closest point query; ``distance`` is inf for no match."""
    distance: float = math.inf
    position: Vec | None = None
    time: float | None = None


@dataclass(eq=False)
class Anchor:
    position: Vec = field(default_factory=Vec)
    handle_in: Vec = field(default_factory=Vec)
    handle_out: Vec = field(default_factory=Vec)

    def clone(self) -> Anchor:
        return Anchor(self.position, self.handle_in, self.handle_out)

    def is_valid(self) -> bool:
        return (Vec.is_valid(self.position)
                and Vec.is_valid(self.handle_in)
                and Vec.is_valid(self.handle_out))

    def affine_transform(self, m: AffineMatrix) -> Anchor:
        self.position = self.position.affine_transform(m)
        self.handle_in = self.handle_in.affine_transform_without_translation(m)
        self.handle_out = self.handle_out.affine_transform_without_translation(m)
        return self

    def affine_transform_without_translation(self, m: AffineMatrix) -> Anchor:
        self.position = self.position.affine_transform_without_translation(m)
        self.handle_in = self.handle_in.affine_transform_without_translation(m)
        self.handle_out = self.handle_out.affine_transform_without_translation(m)
        return self

    def reverse(self) -> Anchor:
        """Swap the handles so the anchor reads correctly in a reversed path."""
        self.handle_in, self.handle_out = self.handle_out, self.handle_in
        return self

    def has_tangent_handles(self, tolerance: float = DEFAULT_TOLERANCE) -> bool:
        """True when the two handles point in opposite directions (a smooth point)."""
        return self.handle_in.normalized().dot(self.handle_out.normalized()) <= tolerance - 1

    def has_zero_handles(self) -> bool:
        return self.handle_in.is_zero() and self.handle_out.is_zero()

    def loose_bounding_box(self) -> BoundingBox:
        return BoundingBox(self.position, self.position)

    def closest_point_within_distance_to_point(self, max_distance: float, point: Vec) -> ClosestPointResult:
        distance_sq = self.position.distance_squared(point)
        if distance_sq <= max_distance * max_distance:
            return ClosestPointResult(math.sqrt(distance_sq), self.position)
        return ClosestPointResult()
