"""Pytest configuration for ray tracer tests.

This module provides shared fixtures for all test modules: the default
two-sphere world, a glass sphere factory, and a tolerance helper for
comparing colors against reference values.
"""

import math

import pytest

from whitted.core.matrix import IDENTITY
from whitted.core.tuples import Color
from whitted.geometry import Shape, Sphere
from whitted.materials.material import glass
from whitted.scene.world import default_world

SQRT2_2 = math.sqrt(2.0) / 2.0


def assert_color_close(actual: Color, expected: Color, tol: float = 1e-4) -> None:
    """Assert two colors match channel by channel within ``tol``."""
    for channel, a, e in zip("rgb", actual, expected):
        assert abs(a - e) < tol, f"{channel}: got {a}, expected {e} ({actual!r} vs {expected!r})"


@pytest.fixture
def world():
    """The default world: two concentric spheres and one white light."""
    return default_world()


@pytest.fixture
def glass_sphere():
    """Factory for unit spheres with a glass material.

    Usage:
        sphere = glass_sphere(transform=scaling(2, 2, 2), refractive_index=2.0)
    """

    def _make(transform=IDENTITY, **material_changes):
        return Shape(Sphere(), transform=transform, material=glass(**material_changes))

    return _make
