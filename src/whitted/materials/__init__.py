"""Materials module for surface appearance.

Components:
    material: Material parameters (Phong coefficients, reflectivity,
        transparency, refractive index, optional pattern)
    pattern: Procedural color patterns with their own transforms
    phong: Phong local illumination for a single point light

Materials are immutable and validated on construction; the shading code in
``whitted.core.integrator`` reads them during rendering and never mutates
them.
"""

from .material import DEFAULT_MATERIAL, Material, glass
from .pattern import Pattern, PatternType, pattern_at, pattern_at_shape
from .phong import lighting, surface_color

__all__ = [
    # Material
    "Material",
    "DEFAULT_MATERIAL",
    "glass",
    # Patterns
    "Pattern",
    "PatternType",
    "pattern_at",
    "pattern_at_shape",
    # Phong
    "lighting",
    "surface_color",
]
