"""Core rendering module.

This module contains the fundamental building blocks for ray tracing:

Components:
    constants: Tolerances and default settings
    tuples: Points, vectors and colors
    matrix: 4x4 matrices with cached inverses
    transforms: Translation, scaling, rotation, shearing and view matrices
    ray: Ray data structure
    integrator: Whitted light transport (shading, reflection, refraction)
    canvas: Output color buffer
    renderer: Pixel loop with progress reporting and cancellation

Equality of tuples, colors and matrices is approximate, using EPSILON from
``whitted.core.constants``.
"""

from .canvas import Canvas
from .constants import DEFAULT_MAX_BOUNCES, EPSILON, SINGULAR_EPSILON
from .matrix import IDENTITY, Matrix, SingularMatrixError
from .ray import Ray
from .transforms import (
    chain,
    rotation_x,
    rotation_y,
    rotation_z,
    scaling,
    shearing,
    translation,
    view_transform,
)
from .tuples import BLACK, ORIGIN, WHITE, Color, Tuple, color, point, vector

# Note: integrator and renderer are NOT imported here to avoid circular
# imports (they depend on whitted.scene, which depends on this package).
# Import directly from whitted.core.integrator or whitted.core.renderer.

__all__ = [
    # Constants
    "EPSILON",
    "SINGULAR_EPSILON",
    "DEFAULT_MAX_BOUNCES",
    # Tuples
    "Tuple",
    "Color",
    "point",
    "vector",
    "color",
    "ORIGIN",
    "BLACK",
    "WHITE",
    # Matrices
    "Matrix",
    "IDENTITY",
    "SingularMatrixError",
    # Transforms
    "translation",
    "scaling",
    "rotation_x",
    "rotation_y",
    "rotation_z",
    "shearing",
    "chain",
    "view_transform",
    # Ray and output
    "Canvas",
    "Ray",
]
