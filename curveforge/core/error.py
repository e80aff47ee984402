# CurveForge - A Planar Curve Geometry Kernel
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Error types for CurveForge.

The geometry routines do not raise for degenerate input: parallel lines,
disjoint boxes and zero-length curves are ordinary "no result" outcomes.
Exceptions are reserved for the two places where a caller asked for
something that cannot be produced: inverting a singular matrix, and
validating data that carries non-finite coordinates.
"""

from __future__ import annotations

import math


class GeometryError(Exception):
    """Base class for all CurveForge errors."""


class InvalidGeometryError(GeometryError, ValueError):
    """Raised by ``ensure_valid`` when an object holds non-finite data."""

    def __init__(self, obj, field: str) -> None:
        self.obj = obj
        self.field = field
        super().__init__(f"{type(obj).__name__} has a non-finite {field}")


class SingularMatrixError(GeometryError, ZeroDivisionError):
    """Raised when inverting a matrix whose determinant is zero."""


def _first_invalid_field(obj) -> str | None:
    """Return a dotted name for the first non-finite coordinate in *obj*."""
    # Late import: the data model modules import this one for their errors
    from .anchor import Anchor
    from .matrix import AffineMatrix
    from .path import Path
    from .vec import Vec

    if isinstance(obj, Vec):
        if not (math.isfinite(obj.x) and math.isfinite(obj.y)):
            return "value"
        return None
    if isinstance(obj, AffineMatrix):
        for name in ("a", "b", "c", "d", "tx", "ty"):
            if not math.isfinite(getattr(obj, name)):
                return name
        return None
    if isinstance(obj, Anchor):
        for name in ("position", "handle_in", "handle_out"):
            if not Vec.is_valid(getattr(obj, name)):
                return name
        return None
    if isinstance(obj, Path):
        for index, anchor in enumerate(obj.anchors):
            field = _first_invalid_field(anchor)
            if field is not None:
                return f"anchors[{index}].{field}"
        return None
    raise TypeError(f"cannot validate object of type {type(obj).__name__}")


def ensure_valid(obj):
    """Return *obj* unchanged if all its coordinates are finite.

    Accepts a Vec, AffineMatrix, Anchor or Path.

    Raises:
        InvalidGeometryError: naming the first offending field.
        TypeError: for unsupported objects.
    """
    field = _first_invalid_field(obj)
    if field is not None:
        raise InvalidGeometryError(obj, field)
    return obj
