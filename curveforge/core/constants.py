# CurveForge - A Planar Curve Geometry Kernel
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
CurveForge Constants Module

Numerical policy for the geometry kernel: comparison tolerances, iteration
caps for the recursive algorithms, and sample counts for the arc-length
approximations. Functions that take a ``tolerance`` or ``flatness`` keyword
default to the values below.
"""

import math
import sys

# Angles
RADIANS_PER_DEGREE = math.pi / 180
DEGREES_PER_RADIAN = 180 / math.pi

# Comparison tolerances
DEFAULT_TOLERANCE = 0.001                   # Spatial tolerance for "same point" tests
DEFAULT_EPSILON = sys.float_info.epsilon    # Relative comparisons

# Closest point root finder (Schneider, Graphics Gems 1990)
FIND_ROOTS_MAX_DEPTH = 64
FIND_ROOTS_EPSILON = 2.0 ** (-FIND_ROOTS_MAX_DEPTH - 1)
CLOSEST_POINT_DEGREE = 5                    # Degree of the Bernstein distance form

# Cubic/cubic subdivision
BOUNDING_BOX_ITERATIONS = 10                # Rounds that prune with bounding boxes
MAX_INTERSECTION_ITERATIONS = 20            # Total rounds before chord resolution

# Slack allowed on polynomial roots and back-solved line times
ROOT_EPSILON = 1e-9

# Arc length
ARC_LENGTH_LUT_SAMPLES = 100                # Points in a cubic's distance lookup table
ARC_LENGTH_QUADRATURE_ORDER = 24            # Gauss-Legendre nodes for cubic length

# Corner rounding scan resolution (steps per segment)
ROUND_CORNER_STEPS = 100

# Curve flattening tolerance for insideness tests
FLATNESS = 0.1
