"""Whitted-style light transport.

This module evaluates the color seen along a ray: find the nearest hit,
shade it with Phong lighting from every point light (with hard shadows),
then add mirror reflection and refraction by tracing secondary rays.

Recursion is bounded by an explicit ``remaining`` counter that every
secondary ray decrements. When it reaches zero the secondary contribution
is black, so a ray bouncing between two parallel mirrors terminates after
at most ``remaining`` bounces.

Call graph:

    color_at -> shade_hit -> reflected_color -> color_at
                          -> refracted_color -> refracted_ray, color_at

Example:
    >>> from whitted.core.integrator import color_at
    >>> from whitted.core.ray import Ray
    >>> from whitted.core.tuples import point, vector
    >>> from whitted.scene.world import default_world
    >>> c = color_at(default_world(), Ray(point(0, 0, -5), vector(0, 0, 1)))
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from whitted.core.constants import DEFAULT_MAX_BOUNCES, EPSILON
from whitted.core.ray import Ray
from whitted.core.tuples import BLACK, Color
from whitted.materials.phong import lighting
from whitted.scene.intersection import Computations, hit, prepare_computations, schlick
from whitted.scene.world import World

# =============================================================================
# Render Settings
# =============================================================================


@dataclass(frozen=True)
class RenderConfig:
    """Settings that control light transport.

    Attributes:
        max_bounces: Bounce budget given to each camera ray.
        use_schlick: Blend reflection and refraction with the Schlick
            Fresnel term when a material is both reflective and transparent.
        background: Color returned by rays that hit nothing.
    """

    max_bounces: int = DEFAULT_MAX_BOUNCES
    use_schlick: bool = True
    background: Color = field(default_factory=lambda: BLACK)

    def __post_init__(self) -> None:
        if self.max_bounces < 0:
            raise ValueError(f"max_bounces must be non-negative, got {self.max_bounces}")


DEFAULT_RENDER_CONFIG = RenderConfig()


# =============================================================================
# Shading
# =============================================================================


def shade_hit(
    world: World,
    comps: Computations,
    remaining: int = DEFAULT_MAX_BOUNCES,
    config: RenderConfig = DEFAULT_RENDER_CONFIG,
) -> Color:
    """Color at a prepared hit: direct lighting plus secondary rays.

    Args:
        world: The scene.
        comps: Precomputed hit state from ``prepare_computations``.
        remaining: Bounces left for secondary rays.
        config: Render settings.

    Returns:
        The unclamped color at the hit.
    """
    material = comps.shape.material

    surface = BLACK
    for light in world.lights:
        shadow_factor = 0.0 if world.is_shadowed(comps.over_point, light) else 1.0
        surface = surface + lighting(
            material,
            comps.shape,
            light,
            comps.over_point,
            comps.eyev,
            comps.normalv,
            shadow_factor,
        )

    reflected = reflected_color(world, comps, remaining, config)
    refracted = refracted_color(world, comps, remaining, config)

    if config.use_schlick and material.reflective > 0.0 and material.transparency > 0.0:
        reflectance = schlick(comps)
        return surface + reflected * reflectance + refracted * (1.0 - reflectance)

    return surface + reflected + refracted


def color_at(
    world: World,
    ray: Ray,
    remaining: int = DEFAULT_MAX_BOUNCES,
    config: RenderConfig = DEFAULT_RENDER_CONFIG,
) -> Color:
    """Color seen along ``ray``; the background color when nothing is hit."""
    xs = world.intersect(ray)
    nearest = hit(xs)
    if nearest is None:
        return config.background
    comps = prepare_computations(nearest, ray, xs)
    return shade_hit(world, comps, remaining, config)


# =============================================================================
# Reflection & Refraction
# =============================================================================


def reflected_color(
    world: World,
    comps: Computations,
    remaining: int = DEFAULT_MAX_BOUNCES,
    config: RenderConfig = DEFAULT_RENDER_CONFIG,
) -> Color:
    """Mirror contribution at a hit, scaled by the material's reflectivity."""
    reflective = comps.shape.material.reflective
    if remaining <= 0 or reflective < EPSILON:
        return BLACK

    reflect_ray = Ray(comps.over_point, comps.reflectv)
    return color_at(world, reflect_ray, remaining - 1, config) * reflective


def refracted_ray(comps: Computations) -> Ray | None:
    """Ray transmitted through the surface at a hit, by Snell's law.

    Uses ``comps.n1`` and ``comps.n2`` and starts just below the surface.

    Returns:
        The refracted ray, or None under total internal reflection.
    """
    n_ratio = comps.n1 / comps.n2
    cos_i = comps.eyev.dot(comps.normalv)
    sin2_t = n_ratio * n_ratio * (1.0 - cos_i * cos_i)
    if sin2_t > 1.0:
        return None

    cos_t = math.sqrt(1.0 - sin2_t)
    direction = comps.normalv * (n_ratio * cos_i - cos_t) - comps.eyev * n_ratio
    return Ray(comps.under_point, direction)


def refracted_color(
    world: World,
    comps: Computations,
    remaining: int = DEFAULT_MAX_BOUNCES,
    config: RenderConfig = DEFAULT_RENDER_CONFIG,
) -> Color:
    """Transmitted contribution at a hit, scaled by the material's transparency.

    Returns black under total internal reflection.
    """
    transparency = comps.shape.material.transparency
    if remaining <= 0 or transparency < EPSILON:
        return BLACK

    ray = refracted_ray(comps)
    if ray is None:
        return BLACK
    return color_at(world, ray, remaining - 1, config) * transparency
