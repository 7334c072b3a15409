"""Infinite xz-plane primitive with a constant +y normal."""

from __future__ import annotations

from dataclasses import dataclass

from whitted.core.constants import EPSILON
from whitted.core.ray import Ray
from whitted.core.tuples import Tuple, vector

_UP = vector(0.0, 1.0, 0.0)


@dataclass(frozen=True)
class Plane:
    """The plane y = 0 in object space."""

    def local_intersect(self, ray: Ray) -> list[float]:
        # Parallel or coplanar rays never register a hit
        if abs(ray.direction.y) < EPSILON:
            return []
        return [-ray.origin.y / ray.direction.y]

    def local_normal_at(self, point: Tuple) -> Tuple:
        return _UP
