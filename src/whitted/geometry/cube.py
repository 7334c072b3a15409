"""Axis-aligned cube primitive spanning [-1, 1] on every axis.

Intersection uses the slab method: each axis contributes the interval of t
for which the ray lies between that axis's two faces, and the ray is inside
the cube for the overlap of the three intervals. The overlap starts at the
largest near-t and ends at the smallest far-t; if it is empty the ray misses.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from whitted.core.constants import EPSILON
from whitted.core.ray import Ray
from whitted.core.tuples import Tuple, vector


def check_axis(origin: float, direction: float, minimum: float = -1.0, maximum: float = 1.0) -> tuple[float, float]:
    """Return the (near, far) t interval of one slab.

    A direction component that is (nearly) zero yields +/- infinity, so a ray
    parallel to a slab is either always inside it or never.
    """
    tmin_numerator = minimum - origin
    tmax_numerator = maximum - origin

    if abs(direction) >= EPSILON:
        tmin = tmin_numerator / direction
        tmax = tmax_numerator / direction
    else:
        tmin = math.copysign(math.inf, tmin_numerator) if tmin_numerator != 0.0 else -math.inf
        tmax = math.copysign(math.inf, tmax_numerator) if tmax_numerator != 0.0 else math.inf

    if tmin > tmax:
        tmin, tmax = tmax, tmin
    return tmin, tmax


@dataclass(frozen=True)
class Cube:
    """The axis-aligned cube [-1, 1]^3 in object space."""

    def local_intersect(self, ray: Ray) -> list[float]:
        o, d = ray.origin, ray.direction
        xtmin, xtmax = check_axis(o.x, d.x)
        ytmin, ytmax = check_axis(o.y, d.y)
        ztmin, ztmax = check_axis(o.z, d.z)

        tmin = max(xtmin, ytmin, ztmin)
        tmax = min(xtmax, ytmax, ztmax)
        if tmin > tmax:
            return []
        return [tmin, tmax]

    def local_normal_at(self, point: Tuple) -> Tuple:
        ax, ay, az = abs(point.x), abs(point.y), abs(point.z)
        maxc = max(ax, ay, az)
        if maxc == ax:
            return vector(point.x, 0.0, 0.0)
        if maxc == ay:
            return vector(0.0, point.y, 0.0)
        return vector(0.0, 0.0, point.z)
