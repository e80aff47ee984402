"""
Shared fixtures for CurveForge tests.

Provides reusable paths and cubics, plus a helper for comparing vectors.
"""
import pytest

from curveforge import Anchor, Cubic, Path, Vec


def assert_vec_close(a, b, abs_tol=1e-9):
    assert a.x == pytest.approx(b.x, abs=abs_tol)
    assert a.y == pytest.approx(b.y, abs=abs_tol)


# ── Cubics ──────────────────────────────────────────────────────────────

@pytest.fixture
def arch():
    """Symmetric arch from (0,0) to (10,0) peaking at (5, 7.5)."""
    return Cubic(Vec(0, 0), Vec(0, 10), Vec(10, 10), Vec(10, 0))


@pytest.fixture
def s_cubic():
    """S-curve from (0,0) to (10,10) crossing y=5 once, at t=0.5."""
    return Cubic(Vec(0, 0), Vec(10, 0), Vec(0, 10), Vec(10, 10))


@pytest.fixture
def straight_cubic():
    """Cubic along the x axis with uniform speed 3."""
    return Cubic(Vec(0, 0), Vec(1, 0), Vec(2, 0), Vec(3, 0))


# ── Paths ───────────────────────────────────────────────────────────────

@pytest.fixture
def square():
    return Path.from_points([Vec(0, 0), Vec(10, 0), Vec(10, 10), Vec(0, 10)], closed=True)


@pytest.fixture
def corner_path():
    """Open polyline with a 90 degree left turn at (10, 0)."""
    return Path.from_points([Vec(0, 0), Vec(10, 0), Vec(10, 10)])


@pytest.fixture
def mixed_path():
    """Open path with a line, a cubic and another line."""
    return Path([
        Anchor(Vec(0, 0)),
        Anchor(Vec(10, 0), Vec(0, 0), Vec(5, 5)),
        Anchor(Vec(20, 10), Vec(-5, 5), Vec(0, 0)),
        Anchor(Vec(30, 0)),
    ])


@pytest.fixture
def blob():
    """Closed path made only of cubic segments."""
    return Path([
        Anchor(Vec(0, 0), Vec(-4, 4), Vec(4, -4)),
        Anchor(Vec(12, 0), Vec(-2, -4), Vec(2, 4)),
        Anchor(Vec(10, 12), Vec(4, 0), Vec(-4, 0)),
    ], closed=True)
