"""Phong local illumination.

Evaluates the light reflected toward the eye from one point light:

    ambient  = base * intensity * material.ambient
    diffuse  = base * intensity * material.diffuse * max(dot(L, N), 0)
    specular = intensity * material.specular * max(dot(R, E), 0) ^ shininess

where ``base`` is the material color (or the pattern color at the point),
L the unit vector toward the light, N the surface normal, E the eye vector
and R the reflection of -L about N. Diffuse and specular are scaled by the
shadow factor; ambient is not.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from whitted.core.tuples import BLACK, Color, Tuple
from whitted.materials.material import Material
from whitted.materials.pattern import pattern_at, pattern_at_shape

if TYPE_CHECKING:
    from whitted.geometry.shape import Shape
    from whitted.scene.light import PointLight


def surface_color(material: Material, shape: Shape | None, point: Tuple) -> Color:
    """Base color at ``point``: the pattern color if any, else ``material.color``.

    Without a shape, ``point`` is taken to be in object space already.
    """
    pattern = material.pattern
    if pattern is None:
        return material.color
    if shape is None:
        return pattern_at(pattern, pattern.inverse @ point)
    return pattern_at_shape(pattern, shape, point)


def lighting(
    material: Material,
    shape: Shape | None,
    light: PointLight,
    point: Tuple,
    eyev: Tuple,
    normalv: Tuple,
    shadow_factor: float = 1.0,
) -> Color:
    """Compute the Phong color contributed by one light.

    Args:
        material: Surface material at the point.
        shape: Shape being shaded, used to place the material's pattern.
            May be None when shading a bare material.
        light: The point light.
        point: Surface point in world space.
        eyev: Unit vector from the point toward the eye.
        normalv: Unit surface normal at the point (facing the eye).
        shadow_factor: 1.0 when fully lit, 0.0 when fully in shadow.

    Returns:
        ambient + diffuse + specular for this light.
    """
    effective_color = surface_color(material, shape, point) * light.intensity
    ambient = effective_color * material.ambient

    if shadow_factor <= 0.0:
        return ambient

    lightv = (light.position - point).normalize()
    light_dot_normal = lightv.dot(normalv)
    # Light on the far side of the surface
    if light_dot_normal < 0.0:
        return ambient

    diffuse = effective_color * (material.diffuse * light_dot_normal)

    reflectv = (-lightv).reflect(normalv)
    reflect_dot_eye = reflectv.dot(eyev)
    if reflect_dot_eye <= 0.0:
        specular = BLACK
    else:
        factor = reflect_dot_eye**material.shininess
        specular = light.intensity * (material.specular * factor)

    return ambient + (diffuse + specular) * shadow_factor
