# CurveForge - A Planar Curve Geometry Kernel
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Scalar helpers shared by the vector, matrix and path modules."""

import math

from .constants import DEFAULT_EPSILON, RADIANS_PER_DEGREE


def clamp(x: float, lo: float, hi: float) -> float:
    return lo if x < lo else hi if x > hi else x


def saturate(x: float) -> float:
    return 0.0 if x < 0 else 1.0 if x > 1 else x


def mix(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def sign(x: float) -> int:
    """-1, 0 or 1 (NaN counts as 0)."""
    return (x > 0) - (x < 0)


def modulo(x: float, base: float) -> float:
    """Like ``x % base`` but never returns ``base`` itself for tiny negative x."""
    result = math.fmod(x, base)
    if result < 0:
        result += base
        if result >= base:
            result = 0.0
    return result


def tan_degrees(angle: float) -> float:
    return math.tan(angle * RADIANS_PER_DEGREE)


def equal_within_relative_epsilon(a: float, b: float, epsilon: float = DEFAULT_EPSILON) -> bool:
    d = abs(b - a)
    return d <= max(abs(a), abs(b)) * epsilon
