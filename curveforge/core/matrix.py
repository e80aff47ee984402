# CurveForge - A Planar Curve Geometry Kernel
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Affine Matrix Module

A 2D affine map stored as six coefficients::

    | a  c  tx |
    | b  d  ty |
    | 0  0  1  |

(a, b) is the image of the x basis vector, (c, d) of the y basis vector.
Matrices are immutable; every method returns a new matrix.  ``m.mul(n)``
applies ``n`` first and then ``m``, the same order PostScript's
``concat`` uses for the CTM.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from .constants import DEFAULT_EPSILON, DEFAULT_TOLERANCE, DEGREES_PER_RADIAN, RADIANS_PER_DEGREE
from .error import SingularMatrixError
from .mathutil import equal_within_relative_epsilon, modulo
from .vec import Vec


@dataclass
class Transform:
    """Decomposed form of an AffineMatrix.

    ``AffineMatrix.from_transform`` applies the parts in the order
    position, rotation, skew, scale, origin.
    """
    position: Vec = field(default_factory=Vec)
    rotation: float = 0.0
    scale: Vec = field(default_factory=lambda: Vec(1.0, 1.0))
    skew: float = 0.0
    origin: Vec = field(default_factory=Vec)

    def __post_init__(self):
        if isinstance(self.scale, (int, float)):
            self.scale = Vec(self.scale, self.scale)

    def equals_within_relative_epsilon(self, other: Transform, epsilon: float = DEFAULT_EPSILON) -> bool:
        return (self.position.equals_within_relative_epsilon(other.position, epsilon)
                and equal_within_relative_epsilon(self.rotation, other.rotation, epsilon)
                and self.scale.equals_within_relative_epsilon(other.scale, epsilon)
                and equal_within_relative_epsilon(self.skew, other.skew, epsilon)
                and self.origin.equals_within_relative_epsilon(other.origin, epsilon))


@dataclass(frozen=True)
class AffineMatrix:
    a: float = 1.0
    b: float = 0.0
    c: float = 0.0
    d: float = 1.0
    tx: float = 0.0
    ty: float = 0.0

    # -- composition --------------------------------------------------------

    def mul(self, m: AffineMatrix) -> AffineMatrix:
        """Return ``self * m`` (m is applied first)."""
        a, b, c, d, tx, ty = self.a, self.b, self.c, self.d, self.tx, self.ty
        return AffineMatrix(
            a * m.a + c * m.b,
            b * m.a + d * m.b,
            a * m.c + c * m.d,
            b * m.c + d * m.d,
            a * m.tx + c * m.ty + tx,
            b * m.tx + d * m.ty + ty,
        )

    def pre_mul(self, m: AffineMatrix) -> AffineMatrix:
        """Return ``m * self`` (self is applied first)."""
        return m.mul(self)

    def __matmul__(self, m: AffineMatrix) -> AffineMatrix:
        return self.mul(m)

    def determinant(self) -> float:
        return self.a * self.d - self.b * self.c

    def invert(self) -> AffineMatrix:
        """Return the inverse matrix.

        Raises:
            SingularMatrixError: if the determinant is zero.
        """
        det = self.determinant()
        if det == 0:
            raise SingularMatrixError("Singular matrix")
        a, b, c, d, tx, ty = self.a, self.b, self.c, self.d, self.tx, self.ty
        return AffineMatrix(
            d / det,
            -b / det,
            -c / det,
            a / det,
            (c * ty - d * tx) / det,
            (b * tx - a * ty) / det,
        )

    def change_basis(self, basis: AffineMatrix, inverse_basis: AffineMatrix | None = None) -> AffineMatrix:
        """Express this map in the coordinate system given by *basis*."""
        if inverse_basis is None:
            inverse_basis = basis.invert()
        return inverse_basis.mul(self).mul(basis)

    # -- building -----------------------------------------------------------

    def translate(self, v: Vec) -> AffineMatrix:
        return AffineMatrix(self.a, self.b, self.c, self.d,
                            self.tx + self.a * v.x + self.c * v.y,
                            self.ty + self.b * v.x + self.d * v.y)

    def pre_translate(self, v: Vec) -> AffineMatrix:
        return AffineMatrix(self.a, self.b, self.c, self.d, self.tx + v.x, self.ty + v.y)

    def scale(self, v: Vec) -> AffineMatrix:
        return AffineMatrix(self.a * v.x, self.b * v.x, self.c * v.y, self.d * v.y, self.tx, self.ty)

    def scale_scalar(self, s: float) -> AffineMatrix:
        return AffineMatrix(self.a * s, self.b * s, self.c * s, self.d * s, self.tx, self.ty)

    def rotate(self, degrees: float) -> AffineMatrix:
        return self.mul(AffineMatrix.from_rotation(degrees))

    def skew(self, degrees: float) -> AffineMatrix:
        s = math.tan(degrees * RADIANS_PER_DEGREE)
        return AffineMatrix(self.a, self.b, self.c + s * self.a, self.d + s * self.b, self.tx, self.ty)

    def origin(self, origin: Vec) -> AffineMatrix:
        """Move the pivot of this map to *origin*."""
        return self.translate(-origin)

    def normalize(self) -> AffineMatrix:
        """Scale both basis vectors to unit length (zero vectors are kept)."""
        a, b, c, d = self.a, self.b, self.c, self.d
        m = a * a + b * b
        if m > 0:
            m = 1 / math.sqrt(m)
            a *= m
            b *= m
        m = c * c + d * d
        if m > 0:
            m = 1 / math.sqrt(m)
            c *= m
            d *= m
        return AffineMatrix(a, b, c, d, self.tx, self.ty)

    # -- application --------------------------------------------------------

    def transform_point(self, p: Vec) -> Vec:
        return p.affine_transform(self)

    def transform_vector(self, v: Vec) -> Vec:
        return v.affine_transform_without_translation(self)

    # -- predicates ---------------------------------------------------------

    def is_invertible(self) -> bool:
        return self.determinant() != 0

    def is_identity(self) -> bool:
        return (self.a == 1 and self.b == 0 and self.c == 0 and self.d == 1
                and self.tx == 0 and self.ty == 0)

    def is_mirror(self) -> bool:
        return self.determinant() < 0

    def is_orthogonal(self, tolerance: float = DEFAULT_TOLERANCE) -> bool:
        return abs(self.a * self.c + self.b * self.d) <= tolerance

    def is_uniform_scale(self, tolerance: float = DEFAULT_TOLERANCE) -> bool:
        a, b, c, d = self.a, self.b, self.c, self.d
        return abs(a * a + b * b - (c * c + d * d)) <= tolerance

    # -- decomposition ------------------------------------------------------

    def to_transform(self) -> Transform:
        """Decompose into position, rotation, scale and skew.

        Guarantees ``0 <= rotation < 360`` and ``-90 < skew < 90`` when the
        basis vectors are not collinear.  A degenerate basis vector forces
        skew to 0; two degenerate basis vectors force rotation to 0.  Of the
        two valid solutions, the one with a positive x scale along the
        rotated x axis is returned.
        """
        a, b, c, d = self.a, self.b, self.c, self.d

        x_usable = a * a + b * b > 1e-7
        y_usable = c * c + d * d > 1e-7

        rotation_radians = 0.0
        skew = 0.0
        if x_usable:
            rotation_radians = math.atan2(b, a)
            if y_usable:
                skew = (rotation_radians - math.atan2(-c, d)) * DEGREES_PER_RADIAN
                skew = modulo(skew, 180)
                if skew > 90:
                    skew -= 180
        elif y_usable:
            # Y basis rotated -90 degrees stands in for the missing x basis
            rotation_radians = math.atan2(-c, d)

        ct = math.cos(-rotation_radians)
        st = math.sin(-rotation_radians)
        rotation = modulo(rotation_radians * DEGREES_PER_RADIAN, 360)

        scale = Vec(a * ct - b * st, c * st + d * ct)
        return Transform(Vec(self.tx, self.ty), rotation, scale, skew)

    # -- constructors -------------------------------------------------------

    @staticmethod
    def from_transform(position: Vec | None = None, rotation: float | None = None,
                       scale: Vec | float | None = None, skew: float | None = None,
                       origin: Vec | None = None) -> AffineMatrix:
        m = AffineMatrix()
        if position is not None:
            m = m.translate(position)
        if rotation is not None:
            m = m.rotate(rotation)
        if skew is not None:
            m = m.skew(skew)
        if isinstance(scale, Vec):
            m = m.scale(scale)
        elif scale is not None:
            m = m.scale_scalar(scale)
        if origin is not None:
            m = m.origin(origin)
        return m

    @staticmethod
    def from_translation(translation: Vec) -> AffineMatrix:
        return AffineMatrix(1, 0, 0, 1, translation.x, translation.y)

    @staticmethod
    def from_rotation(degrees: float) -> AffineMatrix:
        radians = degrees * RADIANS_PER_DEGREE
        c = math.cos(radians)
        s = math.sin(radians)
        return AffineMatrix(c, s, -s, c, 0, 0)

    @staticmethod
    def from_center_scale(center: Vec, scale: Vec) -> AffineMatrix:
        x, y = center.x, center.y
        return AffineMatrix(scale.x, 0, 0, scale.y, x - x * scale.x, y - y * scale.y)

    @staticmethod
    def from_center_and_rotation_points(center: Vec, p1: Vec, p2: Vec) -> AffineMatrix:
        """Rotation about *center* that carries the direction of *p1* onto *p2*."""
        x, y = center.x, center.y
        t1 = math.atan2(p1.y - y, p1.x - x)
        t2 = math.atan2(p2.y - y, p2.x - x)
        radians = t2 - t1
        ct = math.cos(radians)
        st = math.sin(radians)
        return AffineMatrix(ct, st, -st, ct, x - x * ct + y * st, y - x * st - y * ct)

    @staticmethod
    def is_valid(m: object) -> bool:
        return isinstance(m, AffineMatrix) and all(
            isinstance(v, (int, float)) and math.isfinite(v)
            for v in (m.a, m.b, m.c, m.d, m.tx, m.ty))
