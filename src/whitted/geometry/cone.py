"""Double-napped cone primitive around the object-space y axis.

The surface is x^2 + z^2 = y^2: two cones meeting tip to tip at the origin,
with radius |y| at height y. Like the cylinder it can be truncated with
``minimum``/``maximum`` and capped with ``closed``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from whitted.core.constants import EPSILON
from whitted.core.ray import Ray
from whitted.core.tuples import Tuple, vector
from whitted.geometry.cylinder import check_cap


@dataclass(frozen=True)
class Cone:
    """A (possibly truncated and capped) double cone.

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
            raise ValueError(f"Cone minimum {self.minimum} exceeds maximum {self.maximum}")

    def _intersect_caps(self, ray: Ray) -> list[float]:
        if not self.closed or abs(ray.direction.y) < EPSILON:
            return []
        xs = []
        # Cap radius equals |y| at the cap plane
        t = (self.minimum - ray.origin.y) / ray.direction.y
        if check_cap(ray, t, abs(self.minimum)):
            xs.append(t)
        t = (self.maximum - ray.origin.y) / ray.direction.y
        if check_cap(ray, t, abs(self.maximum)):
            xs.append(t)
        return xs

    def _in_bounds(self, ray: Ray, t: float) -> bool:
        y = ray.origin.y + t * ray.direction.y
        return self.minimum < y < self.maximum

    def local_intersect(self, ray: Ray) -> list[float]:
        o, d = ray.origin, ray.direction
        a = d.x * d.x - d.y * d.y + d.z * d.z
        b = 2.0 * o.x * d.x - 2.0 * o.y * d.y + 2.0 * o.z * d.z
        c = o.x * o.x - o.y * o.y + o.z * o.z

        xs: list[float] = []
        if abs(a) < EPSILON:
            # Ray parallel to one of the halves: at most one hit on the other
            if abs(b) >= EPSILON:
                t = -c / (2.0 * b)
                if self._in_bounds(ray, t):
                    xs.append(t)
        else:
            disc = b * b - 4.0 * a * c
            # Rounding can push a tangent ray's discriminant just below zero
            if disc < 0.0 and disc > -EPSILON:
                disc = 0.0
            if disc >= 0.0:
                sqrt_d = math.sqrt(disc)
                t0 = (-b - sqrt_d) / (2.0 * a)
                t1 = (-b + sqrt_d) / (2.0 * a)
                if t0 > t1:
                    t0, t1 = t1, t0
                for t in (t0, t1):
                    if self._in_bounds(ray, t):
                        xs.append(t)

        xs.extend(self._intersect_caps(ray))
        return sorted(xs)

    def local_normal_at(self, point: Tuple) -> Tuple:
        dist = point.x * point.x + point.z * point.z
        if dist < self.maximum * self.maximum and point.y >= self.maximum - EPSILON:
            return vector(0.0, 1.0, 0.0)
        if dist < self.minimum * self.minimum and point.y <= self.minimum + EPSILON:
            return vector(0.0, -1.0, 0.0)
        if dist < EPSILON * EPSILON:
            # Apex has no side normal; use the axis, pointing away from the nappe
            return vector(0.0, -1.0, 0.0) if point.y > 0.0 else vector(0.0, 1.0, 0.0)

        y = math.sqrt(dist)
        if point.y > 0.0:
            y = -y
        return vector(point.x, y, point.z)
