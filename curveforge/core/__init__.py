# CurveForge - A Planar Curve Geometry Kernel
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Data model: vectors, matrices, bounding boxes, anchors and paths."""
