"""Intersection records and per-hit shading precomputation.

An Intersection pairs a ray parameter ``t`` with the shape that was hit.
Intersection lists are kept sorted by ``t`` so the visible surface is simply
the first record with ``t >= 0`` (see ``hit``).

``prepare_computations`` turns the chosen hit into a Computations record
holding everything the shading code needs: the hit point, eye and normal
vectors, points nudged off the surface on either side, the reflection
vector, and the refractive indices on both sides of the surface.

Refractive indices are found by walking the sorted intersection list with a
stack of "containers" (shapes the ray is currently inside). Shapes are
tracked by identity, so two distinct shapes with equal parameters are never
confused:

    n1 = index of the innermost container before the hit
    n2 = index of the innermost container after entering/leaving the hit shape

An empty stack means the ray is in vacuum (index 1.0).
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from whitted.core.constants import EPSILON
from whitted.core.ray import Ray
from whitted.core.tuples import Tuple
from whitted.geometry.shape import Shape

VACUUM_INDEX = 1.0


@dataclass(frozen=True, eq=False)
class Intersection:
    """A ray/shape intersection at parameter ``t``.

    Attributes:
        t: Distance along the ray, in units of the ray direction.
        shape: The shape that was hit.
    """

    t: float
    shape: Shape


def intersections(*xs: Intersection) -> list[Intersection]:
    """Collect intersections into a list sorted by ascending ``t``."""
    return sorted(xs, key=lambda i: i.t)


def hit(xs: Iterable[Intersection]) -> Intersection | None:
    """Return the visible intersection: the lowest non-negative ``t``.

    ``xs`` need not be sorted. Returns None when every ``t`` is negative
    or the collection is empty.
    """
    best: Intersection | None = None
    for i in xs:
        if i.t >= 0.0 and (best is None or i.t < best.t):
            best = i
    return best


@dataclass(frozen=True)
class Computations:
    """Precomputed state for shading one hit.

    Attributes:
        t: Ray parameter of the hit.
        shape: The shape that was hit.
        point: Hit point in world space.
        eyev: Unit vector from the hit point back toward the ray origin.
        normalv: Unit surface normal, flipped to face the eye.
        inside: True if the normal was flipped (ray origin inside the shape).
        over_point: ``point`` nudged along the normal; origin for shadow and
            reflection rays.
        under_point: ``point`` nudged against the normal; origin for
            refraction rays.
        reflectv: Ray direction reflected about the normal.
        n1: Refractive index on the incoming side.
        n2: Refractive index on the outgoing side.
    """

    t: float
    shape: Shape
    point: Tuple
    eyev: Tuple
    normalv: Tuple
    inside: bool
    over_point: Tuple
    under_point: Tuple
    reflectv: Tuple
    n1: float = VACUUM_INDEX
    n2: float = VACUUM_INDEX


def _refractive_indices(hit_: Intersection, xs: Sequence[Intersection]) -> tuple[float, float]:
    containers: list[Shape] = []
    n1 = n2 = VACUUM_INDEX
    for i in xs:
        is_hit = i is hit_
        if is_hit:
            n1 = containers[-1].material.refractive_index if containers else VACUUM_INDEX

        # Toggle membership by identity
        for position, shape in enumerate(containers):
            if shape is i.shape:
                del containers[position]
                break
        else:
            containers.append(i.shape)

        if is_hit:
            n2 = containers[-1].material.refractive_index if containers else VACUUM_INDEX
            break
    return n1, n2


def prepare_computations(
    hit_: Intersection,
    ray: Ray,
    xs: Sequence[Intersection] | None = None,
) -> Computations:
    """Precompute shading state for a hit.

    Args:
        hit_: The intersection being shaded.
        ray: The ray that produced it.
        xs: The full sorted intersection list for ``ray``, used to find the
            refractive indices. Defaults to ``[hit_]``.

    Returns:
        A Computations record for ``hit_``.
    """
    if xs is None:
        xs = [hit_]

    point = ray.position(hit_.t)
    eyev = -ray.direction.normalize()
    normalv = hit_.shape.normal_at(point)

    inside = normalv.dot(eyev) < 0.0
    if inside:
        normalv = -normalv

    offset = normalv * EPSILON
    n1, n2 = _refractive_indices(hit_, xs)

    return Computations(
        t=hit_.t,
        shape=hit_.shape,
        point=point,
        eyev=eyev,
        normalv=normalv,
        inside=inside,
        over_point=point + offset,
        under_point=point - offset,
        reflectv=(-eyev).reflect(normalv),
        n1=n1,
        n2=n2,
    )


def schlick(comps: Computations) -> float:
    """Schlick's approximation of the Fresnel reflectance.

    Returns the fraction of light reflected (the rest is refracted) at the
    hit described by ``comps``. Returns 1.0 under total internal reflection.
    """
    cos = comps.eyev.dot(comps.normalv)

    if comps.n1 > comps.n2:
        n = comps.n1 / comps.n2
        sin2_t = n * n * (1.0 - cos * cos)
        if sin2_t > 1.0:
            return 1.0
        # Leaving the denser medium: use the transmitted angle
        cos = math.sqrt(1.0 - sin2_t)

    r0 = ((comps.n1 - comps.n2) / (comps.n1 + comps.n2)) ** 2
    return r0 + (1.0 - r0) * (1.0 - cos) ** 5
