"""Cylinder primitive of radius 1 around the object-space y axis.

The cylinder is infinite by default. ``minimum`` and ``maximum`` truncate it
(both bounds exclusive) and ``closed`` adds end caps at the truncation
planes.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from whitted.core.constants import EPSILON
from whitted.core.ray import Ray
from whitted.core.tuples import Tuple, vector


def check_cap(ray: Ray, t: float, radius: float) -> bool:
    """Whether the ray at ``t`` lies within ``radius`` of the y axis."""
    x = ray.origin.x + t * ray.direction.x
    z = ray.origin.z + t * ray.direction.z
    return x * x + z * z <= radius * radius + EPSILON


@dataclass(frozen=True)
class Cylinder:
    """A (possibly truncated and capped) unit cylinder.

    Attributes:
        minimum: Lower y bound (exclusive). Defaults to -infinity.
        maximum: Upper y bound (exclusive). Defaults to +infinity.
        closed: Whether the ends at ``minimum``/``maximum`` are capped.
    """

    minimum: float = -math.inf
    maximum: float = math.inf
    closed: bool = False

    def __post_init__(self) -> None:
        if self.minimum > self.maximum:
            raise ValueError(f"Cylinder minimum {self.minimum} exceeds maximum {self.maximum}")

    def _intersect_caps(self, ray: Ray) -> list[float]:
        if not self.closed or abs(ray.direction.y) < EPSILON:
            return []
        xs = []
        t = (self.minimum - ray.origin.y) / ray.direction.y
        if check_cap(ray, t, 1.0):
            xs.append(t)
        t = (self.maximum - ray.origin.y) / ray.direction.y
        if check_cap(ray, t, 1.0):
            xs.append(t)
        return xs

    def local_intersect(self, ray: Ray) -> list[float]:
        o, d = ray.origin, ray.direction
        a = d.x * d.x + d.z * d.z

        xs: list[float] = []
        # A ray parallel to the y axis can only hit the caps
        if a >= EPSILON:
            b = 2.0 * o.x * d.x + 2.0 * o.z * d.z
            c = o.x * o.x + o.z * o.z - 1.0
            disc = b * b - 4.0 * a * c
            if disc < 0.0:
                return []

            sqrt_d = math.sqrt(disc)
            t0 = (-b - sqrt_d) / (2.0 * a)
            t1 = (-b + sqrt_d) / (2.0 * a)
            if t0 > t1:
                t0, t1 = t1, t0

            for t in (t0, t1):
                y = o.y + t * d.y
                if self.minimum < y < self.maximum:
                    xs.append(t)

        xs.extend(self._intersect_caps(ray))
        return sorted(xs)

    def local_normal_at(self, point: Tuple) -> Tuple:
        dist = point.x * point.x + point.z * point.z
        if dist < 1.0 and point.y >= self.maximum - EPSILON:
            return vector(0.0, 1.0, 0.0)
        if dist < 1.0 and point.y <= self.minimum + EPSILON:
            return vector(0.0, -1.0, 0.0)
        return vector(point.x, 0.0, point.z)
