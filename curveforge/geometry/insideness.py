# CurveForge - A Planar Curve Geometry Kernel
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Point-in-path insideness testing.

Implements ray casting for nonzero winding and even-odd fill rules.
Cubic primitives are flattened to line segments before testing.
"""

from __future__ import annotations

import math
from typing import Iterable

from ..core.constants import FLATNESS
from ..core.vec import Vec
from .segment import Cubic, Line, Primitive


def flatten_cubic(cubic: Cubic, flatness: float = FLATNESS) -> list[Vec]:
    """
    Flatten a cubic Bezier curve into line segments.

    Measures the perpendicular distance from the inner control points to
    the chord; if both are within *flatness* the chord replaces the curve,
    otherwise the curve is split at its midpoint.

    Args:
        cubic: Control points of the curve
        flatness: Maximum allowed deviation from the true curve

    Returns:
        Segment end points in curve order, excluding the start point
    """
    points = []
    stack = [tuple(cubic)]

    while stack:
        p0, p1, p2, p3 = stack.pop()

        dx = p3.x - p0.x
        dy = p3.y - p0.y
        chord_len_sq = dx * dx + dy * dy

        if chord_len_sq < 1e-10:
            # Endpoints coincide; fall back to the control polygon extent
            if max(p0.distance(p1), p0.distance(p2)) <= flatness:
                points.append(p3)
                continue
            d1 = d2 = math.inf
        else:
            chord_len = math.sqrt(chord_len_sq)
            d1 = abs((p1.x - p0.x) * dy - (p1.y - p0.y) * dx) / chord_len
            d2 = abs((p2.x - p0.x) * dy - (p2.y - p0.y) * dx) / chord_len

        if max(d1, d2) <= flatness:
            points.append(p3)
        else:
            p01 = (p0 + p1) * 0.5
            p12 = (p1 + p2) * 0.5
            p23 = (p2 + p3) * 0.5
            p012 = (p01 + p12) * 0.5
            p123 = (p12 + p23) * 0.5
            p0123 = (p012 + p123) * 0.5

            # Push second half first so first half is processed next
            stack.append((p0123, p123, p23, p3))
            stack.append((p0, p01, p012, p0123))

    return points


def flatten_primitives(primitives: Iterable[Primitive], flatness: float = FLATNESS) -> list[tuple[Vec, Vec]]:
    """Turn a chain of primitives into (start, end) line segments."""
    segments = []
    for primitive in primitives:
        if isinstance(primitive, Line):
            segments.append((primitive.p0, primitive.p1))
            continue
        current = primitive.p0
        for point in flatten_cubic(primitive, flatness):
            segments.append((current, point))
            current = point
    return segments


def point_in_primitives(primitives: Iterable[Primitive], point: Vec,
                        use_winding: bool = False, flatness: float = FLATNESS) -> bool:
    """Ray-casting point-in-path test.

    Casts a horizontal ray from *point* towards +x and counts crossings
    with the flattened primitives, which must form closed loops.

    Args:
        primitives: Line and Cubic primitives of one or more closed paths.
        point: Test point.
        use_winding: True for nonzero winding rule, False for even-odd.
        flatness: Curve flattening tolerance.

    Returns:
        True if the point is inside.
    """
    winding = 0
    crossings = 0
    px, py = point.x, point.y

    for p0, p1 in flatten_primitives(primitives, flatness):
        x0, y0, x1, y1 = p0.x, p0.y, p1.x, p1.y
        # Count a crossing when exactly one endpoint is strictly below py.
        # Shared vertices are counted once and horizontal segments skipped.
        if (y0 < py) == (y1 < py):
            continue

        t = (py - y0) / (y1 - y0)
        x_intercept = x0 + t * (x1 - x0)

        if x_intercept > px:
            crossings += 1
            if use_winding:
                if y1 > y0:
                    winding += 1
                else:
                    winding -= 1

    if use_winding:
        return winding != 0
    return (crossings % 2) == 1
