"""Point light source."""

from __future__ import annotations

from dataclasses import dataclass, field

from whitted.core.tuples import WHITE, Color, Tuple


@dataclass(frozen=True)
class PointLight:
    """A light with no size, emitting ``intensity`` from ``position``.

    Attributes:
        position: Light position (point) in world space.
        intensity: Emitted color/brightness.
    """

    position: Tuple
    intensity: Color = field(default_factory=lambda: WHITE)

    def __post_init__(self) -> None:
        if not self.position.is_point:
            raise ValueError(f"Light position must be a point, got {self.position!r}")
