# CurveForge - A Planar Curve Geometry Kernel
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Circular arcs as chains of cubic anchors.

An arc is cut into pieces of at most 90 degrees.  Each piece is the
standard cubic approximation of a unit-circle arc, with handle length
``4/3 * tan(angle / 4)``.  Angles are in degrees.
"""

from __future__ import annotations

import math

from ..core.anchor import Anchor
from ..core.mathutil import tan_degrees
from ..core.matrix import AffineMatrix
from ..core.vec import Vec


def arc_segment(angle: float) -> tuple[Anchor, Anchor]:
    """Unit-circle arc from 0 to *angle* degrees as two anchors."""
    f = 4 / 3 * tan_degrees(angle / 4)
    start = Anchor(Vec(1, 0), Vec(0, 0), Vec(0, f))
    end = Anchor(Vec(1, 0).rotate(angle), Vec(0, -f).rotate(angle), Vec(0, 0))
    return start, end


def arc_anchors(center: Vec, radius: float, start_angle: float, end_angle: float) -> list[Anchor]:
    """Anchors for the arc of *radius* around *center* from *start_angle*
    to *end_angle*.

    The sweep direction follows the sign of ``end_angle - start_angle``;
    sweeps larger than 360 degrees wind around more than once.  A zero
    sweep gives the single start anchor.
    """
    sweep = end_angle - start_angle
    num_segments = math.ceil(abs(sweep) / 90)

    anchors = [Anchor(Vec(1, 0))]
    if num_segments > 0:
        segment_angle = sweep / num_segments
        for i in range(num_segments):
            rotation = AffineMatrix.from_rotation(i * segment_angle)
            first, second = (a.affine_transform(rotation) for a in arc_segment(segment_angle))
            anchors[-1].handle_out = first.handle_out
            anchors.append(second)

    m = AffineMatrix.from_transform(position=center, rotation=start_angle, scale=radius)
    for anchor in anchors:
        anchor.affine_transform(m)
    return anchors
