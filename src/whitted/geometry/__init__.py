"""Geometry module for shape primitives.

This module provides the primitive surfaces and the Shape wrapper that
places them in a scene:

Components:
    sphere: Unit sphere at the origin
    plane: Infinite xz-plane
    cube: Axis-aligned cube [-1, 1]^3
    cylinder: Unit-radius cylinder about y, optionally truncated and capped
    cone: Double cone about y, optionally truncated and capped
    triangle: Flat and smooth (normal-interpolated) triangles
    shape: Shape (geometry + transform + material)

Each primitive intersects and computes normals in its own object space;
Shape handles the world/object conversions:
    ts = shape.intersect(ray)
    n = shape.normal_at(point)
"""

from .cone import Cone
from .cube import Cube
from .cylinder import Cylinder
from .plane import Plane
from .shape import GEOMETRY_TYPES, Geometry, Shape
from .sphere import Sphere
from .triangle import SmoothTriangle, Triangle

__all__ = [
    "Shape",
    "Geometry",
    "GEOMETRY_TYPES",
    "Sphere",
    "Plane",
    "Cube",
    "Cylinder",
    "Cone",
    "Triangle",
    "SmoothTriangle",
]
