# CurveForge - A Planar Curve Geometry Kernel
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
CurveForge Package - Public API

A planar curve geometry kernel.  Shapes are paths of cubic Bezier anchors;
the kernel intersects their segments, finds closest points on them, and
converts between time, distance, position and tangent along a path.

**Internal Module Organization:**
- core/vec.py, core/matrix.py, core/bounding_box.py: value types
- core/anchor.py, core/path.py: the mutable path data model
- geometry/bezier.py: Bernstein-form root finder
- geometry/segment.py: Line and Cubic primitives
- geometry/intersect.py: primitive/primitive intersections
- geometry/path_intersect.py: path-level intersection queries
- geometry/arc.py, geometry/insideness.py: arc construction, point in path

**Usage:**
```python
import curveforge as cf

square = cf.Path.from_points(
    [cf.Vec(0, 0), cf.Vec(10, 0), cf.Vec(10, 10), cf.Vec(0, 10)], closed=True)
square.position_at_time(0.5)            # Vec(x=5.0, y=0.0)
cf.path_intersections([square])         # []
```
"""

from .core.anchor import Anchor, ClosestPointResult
from .core.bounding_box import BoundingBox
from .core.error import GeometryError, InvalidGeometryError, SingularMatrixError, ensure_valid
from .core.matrix import AffineMatrix, Transform
from .core.path import Path, RoundCornerInfo
from .core.vec import Vec
from .geometry.intersect import (
    PrimitiveIntersection,
    cubic_cubic_intersections,
    cubic_line_intersections,
    cubic_self_intersections,
    cubics_overlap,
    line_cubic_intersections,
    line_line_intersections,
    primitive_intersections,
)
from .geometry.path_intersect import (
    IntersectionResult,
    partitioned_path_intersections,
    partitioned_path_intersections_within_distance_to_point,
    path_intersections,
    path_intersections_within_distance_to_point,
)
from .geometry.segment import (
    Cubic,
    Line,
    position_and_time_at_closest_point_on_cubic,
    position_and_time_at_closest_point_on_line,
)

__version__ = "0.1.0"

__all__ = [
    "Anchor",
    "AffineMatrix",
    "BoundingBox",
    "ClosestPointResult",
    "Cubic",
    "GeometryError",
    "IntersectionResult",
    "InvalidGeometryError",
    "Line",
    "Path",
    "PrimitiveIntersection",
    "RoundCornerInfo",
    "SingularMatrixError",
    "Transform",
    "Vec",
    "cubic_cubic_intersections",
    "cubic_line_intersections",
    "cubic_self_intersections",
    "cubics_overlap",
    "ensure_valid",
    "line_cubic_intersections",
    "line_line_intersections",
    "partitioned_path_intersections",
    "partitioned_path_intersections_within_distance_to_point",
    "path_intersections",
    "path_intersections_within_distance_to_point",
    "position_and_time_at_closest_point_on_cubic",
    "position_and_time_at_closest_point_on_line",
    "primitive_intersections",
]
