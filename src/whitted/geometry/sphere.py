"""Unit sphere primitive.

The canonical sphere has radius 1 and is centred at the object-space origin;
size and placement come from the owning Shape's transform.

The ray-sphere intersection is found by solving:
    |origin + t * direction|^2 = 1

Expanding gives the quadratic a*t^2 + b*t + c = 0 with
    a = dot(direction, direction)
    b = 2 * dot(direction, origin - center)
    c = dot(origin - center, origin - center) - 1

A negative discriminant means the ray misses. A tangent ray reports the
same t twice so that callers tracking entry/exit pairs (the refraction
container stack) always see matched intersections.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from whitted.core.ray import Ray
from whitted.core.tuples import ORIGIN, Tuple


@dataclass(frozen=True)
class Sphere:
    """A unit sphere at the origin. Carries no parameters."""

    def local_intersect(self, ray: Ray) -> list[float]:
        """Intersect an object-space ray with the unit sphere.

        Args:
            ray: The ray in object space (direction need not be unit length).

        Returns:
            Zero or two t values, ascending.
        """
        sphere_to_ray = ray.origin - ORIGIN
        a = ray.direction.dot(ray.direction)
        b = 2.0 * ray.direction.dot(sphere_to_ray)
        c = sphere_to_ray.dot(sphere_to_ray) - 1.0

        discriminant = b * b - 4.0 * a * c
        if discriminant < 0.0:
            return []

        sqrt_d = math.sqrt(discriminant)
        t0 = (-b - sqrt_d) / (2.0 * a)
        t1 = (-b + sqrt_d) / (2.0 * a)
        return [t0, t1] if t0 <= t1 else [t1, t0]

    def local_normal_at(self, point: Tuple) -> Tuple:
        # Centred at the origin, so the surface point is the outward normal
        return point - ORIGIN
