"""Surface material parameters for Phong shading and light transport.

Materials are immutable and validated on construction so that a bad value
is reported while the scene is being built, not halfway through a render.
Use ``dataclasses.replace`` (or ``Material.replace``) to derive variants:

    >>> from whitted.materials.material import Material
    >>> glass = Material(transparency=1.0, refractive_index=1.5)
    >>> mirror = glass.replace(transparency=0.0, reflective=1.0)

Common refractive indices:
    - Vacuum: 1.0
    - Air: 1.00029
    - Water: 1.333
    - Glass: 1.52
    - Diamond: 2.417
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Any

from whitted.core.tuples import WHITE, Color
from whitted.materials.pattern import Pattern


@dataclass(frozen=True)
class Material:
    """Phong surface parameters plus reflection/refraction coefficients.

    Attributes:
        color: Base surface color, used when there is no pattern.
        ambient: Ambient reflectance (>= 0).
        diffuse: Diffuse reflectance (>= 0).
        specular: Specular reflectance (>= 0).
        shininess: Specular exponent (> 0); larger is a tighter highlight.
        reflective: Mirror contribution in [0, 1].
        transparency: Refracted contribution in [0, 1].
        refractive_index: Index of refraction (> 0).
        pattern: Optional procedural color replacing ``color``.
    """

    color: Color = field(default_factory=lambda: WHITE)
    ambient: float = 0.1
    diffuse: float = 0.9
    specular: float = 0.9
    shininess: float = 200.0
    reflective: float = 0.0
    transparency: float = 0.0
    refractive_index: float = 1.0
    pattern: Pattern | None = None

    def __post_init__(self) -> None:
        for name in ("ambient", "diffuse", "specular"):
            value = getattr(self, name)
            if value < 0.0:
                raise ValueError(f"Material {name} = {value} is negative.")
        if self.shininess <= 0.0:
            raise ValueError(f"Material shininess = {self.shininess} must be positive.")
        for name in ("reflective", "transparency"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"Material {name} = {value} is outside [0, 1].")
        if self.refractive_index <= 0.0:
            raise ValueError(f"Refractive index = {self.refractive_index} must be positive.")

    def replace(self, **changes: Any) -> Material:
        """Return a copy with the given fields changed (validated again)."""
        return dataclasses.replace(self, **changes)


DEFAULT_MATERIAL = Material()


def glass(**changes: Any) -> Material:
    """A fully transparent material with the refractive index of glass."""
    params: dict[str, Any] = {"transparency": 1.0, "refractive_index": 1.5}
    params.update(changes)
    return Material(**params)
