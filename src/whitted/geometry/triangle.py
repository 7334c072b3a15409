"""Flat and smooth triangle primitives.

Both use the Moller-Trumbore algorithm: the ray is expressed in the
triangle's barycentric frame (u along edge p1->p2, v along edge p1->p3) and
rejected as soon as either coordinate, or their sum, leaves the triangle.

Unlike the other primitives a triangle's geometry is not canonical: its
vertices are given in object space and the Shape transform is applied on
top. Triangles are hit from either side and shading flips the normal
toward the eye, so winding only matters for the reported normal.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from whitted.core.constants import EPSILON
from whitted.core.ray import Ray
from whitted.core.tuples import Tuple


def _moller_trumbore(p1: Tuple, e1: Tuple, e2: Tuple, ray: Ray) -> list[float]:
    dir_cross_e2 = ray.direction.cross(e2)
    det = e1.dot(dir_cross_e2)
    if abs(det) < EPSILON:
        return []

    f = 1.0 / det
    p1_to_origin = ray.origin - p1
    u = f * p1_to_origin.dot(dir_cross_e2)
    if u < 0.0 or u > 1.0:
        return []

    origin_cross_e1 = p1_to_origin.cross(e1)
    v = f * ray.direction.dot(origin_cross_e1)
    if v < 0.0 or u + v > 1.0:
        return []

    return [f * e2.dot(origin_cross_e1)]


@dataclass(frozen=True)
class Triangle:
    """A flat-shaded triangle.

    Attributes:
        p1, p2, p3: Vertices (points) in object space.
        e1: Edge p2 - p1 (derived).
        e2: Edge p3 - p1 (derived).
        normal: Unit face normal, cross(e2, e1) (derived).
    """

    p1: Tuple
    p2: Tuple
    p3: Tuple
    e1: Tuple = field(init=False, repr=False)
    e2: Tuple = field(init=False, repr=False)
    normal: Tuple = field(init=False, repr=False)

    def __post_init__(self) -> None:
        e1 = self.p2 - self.p1
        e2 = self.p3 - self.p1
        face = e2.cross(e1)
        if face.magnitude() < EPSILON:
            raise ValueError(f"Degenerate triangle: {self.p1!r}, {self.p2!r}, {self.p3!r} are collinear")
        object.__setattr__(self, "e1", e1)
        object.__setattr__(self, "e2", e2)
        object.__setattr__(self, "normal", face.normalize())

    def local_intersect(self, ray: Ray) -> list[float]:
        return _moller_trumbore(self.p1, self.e1, self.e2, ray)

    def local_normal_at(self, point: Tuple) -> Tuple:
        return self.normal


@dataclass(frozen=True)
class SmoothTriangle:
    """A triangle whose normal is interpolated from per-vertex normals.

    Attributes:
        p1, p2, p3: Vertices (points) in object space.
        n1, n2, n3: Vertex normals (vectors) at p1, p2, p3.
        e1: Edge p2 - p1 (derived).
        e2: Edge p3 - p1 (derived).
    """

    p1: Tuple
    p2: Tuple
    p3: Tuple
    n1: Tuple
    n2: Tuple
    n3: Tuple
    e1: Tuple = field(init=False, repr=False)
    e2: Tuple = field(init=False, repr=False)

    def __post_init__(self) -> None:
        e1 = self.p2 - self.p1
        e2 = self.p3 - self.p1
        if e2.cross(e1).magnitude() < EPSILON:
            raise ValueError(f"Degenerate triangle: {self.p1!r}, {self.p2!r}, {self.p3!r} are collinear")
        object.__setattr__(self, "e1", e1)
        object.__setattr__(self, "e2", e2)

    def local_intersect(self, ray: Ray) -> list[float]:
        return _moller_trumbore(self.p1, self.e1, self.e2, ray)

    def barycentric(self, point: Tuple) -> tuple[float, float]:
        """Return the (u, v) weights of ``point`` for p2 and p3.

        Solves point = p1 + u * e1 + v * e2 in the plane of the triangle.
        """
        d = point - self.p1
        d00 = self.e1.dot(self.e1)
        d01 = self.e1.dot(self.e2)
        d11 = self.e2.dot(self.e2)
        d20 = d.dot(self.e1)
        d21 = d.dot(self.e2)
        denom = d00 * d11 - d01 * d01
        u = (d11 * d20 - d01 * d21) / denom
        v = (d00 * d21 - d01 * d20) / denom
        return u, v

    def local_normal_at(self, point: Tuple) -> Tuple:
        u, v = self.barycentric(point)
        return self.n2 * u + self.n3 * v + self.n1 * (1.0 - u - v)
