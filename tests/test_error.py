"""
Unit tests for ensure_valid and the geometry error types.
"""
import math

import pytest

from curveforge import (
    AffineMatrix,
    Anchor,
    GeometryError,
    InvalidGeometryError,
    Path,
    Vec,
    ensure_valid,
)


class TestValidation:

    def test_valid_objects_pass_through(self, square):
        assert ensure_valid(square) is square
        assert ensure_valid(Vec(1, 2)) == Vec(1, 2)

    def test_invalid_anchor_field_is_named(self):
        path = Path([Anchor(Vec(0, 0)), Anchor(Vec(1, 1), Vec(math.nan, 0))])
        assert not path.is_valid()
        with pytest.raises(InvalidGeometryError) as excinfo:
            ensure_valid(path)
        assert excinfo.value.field == "anchors[1].handle_in"
        assert "anchors[1].handle_in" in str(excinfo.value)

    def test_invalid_geometry_is_value_error(self):
        with pytest.raises(ValueError):
            ensure_valid(Vec(math.inf, 0))
        with pytest.raises(GeometryError):
            ensure_valid(AffineMatrix(d=math.nan))

    def test_unsupported_type(self):
        with pytest.raises(TypeError):
            ensure_valid(42)
