"""Procedural color patterns.

A pattern is a pure function from a 3-D point to a color. Each pattern has
its own transform, independent of the shape it decorates; a world-space
point is first taken into the shape's object space and then into the
pattern's space before the pattern function is evaluated.

Supported kinds (``PatternType``):
    SOLID:    always ``a``
    STRIPE:   ``a`` when floor(x) is even, else ``b``
    GRADIENT: linear blend from ``a`` to ``b`` across each unit of x
    RING:     ``a`` when floor(sqrt(x^2 + z^2)) is even, else ``b``
    CHECKER:  ``a`` when floor(x) + floor(y) + floor(z) is even, else ``b``

Example:
    >>> from whitted.core.tuples import BLACK, WHITE, point
    >>> from whitted.materials.pattern import Pattern, PatternType, pattern_at
    >>> stripes = Pattern(PatternType.STRIPE, WHITE, BLACK)
    >>> pattern_at(stripes, point(1.0, 0.0, 0.0)) == BLACK
    True
"""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import IntEnum
from typing import TYPE_CHECKING

from whitted.core.constants import EPSILON
from whitted.core.matrix import IDENTITY, Matrix, SingularMatrixError
from whitted.core.tuples import BLACK, Color, Tuple

if TYPE_CHECKING:
    from whitted.geometry.shape import Shape


class PatternType(IntEnum):
    """Enumeration of supported pattern kinds."""

    SOLID = 0
    STRIPE = 1
    GRADIENT = 2
    RING = 3
    CHECKER = 4


@dataclass(frozen=True)
class Pattern:
    """A two-color procedural pattern.

    Attributes:
        kind: Which pattern function to evaluate.
        a: First color (the only color for SOLID).
        b: Second color.
        transform: Object-to-pattern placement. Must be invertible.
        inverse: Inverse of ``transform`` (derived).
    """

    kind: PatternType
    a: Color
    b: Color = field(default_factory=lambda: BLACK)
    transform: Matrix = field(default_factory=lambda: IDENTITY)
    inverse: Matrix = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        try:
            inverse = self.transform.inverse()
        except SingularMatrixError as exc:
            raise SingularMatrixError(f"{self.kind.name.lower()} pattern transform is not invertible") from exc
        object.__setattr__(self, "kind", PatternType(self.kind))
        object.__setattr__(self, "inverse", inverse)


def _floor(value: float) -> int:
    # Nudge before flooring so values rounded to just below an integer
    # boundary land on the same side as the exact value
    return math.floor(value + EPSILON)


def _solid(pattern: Pattern, p: Tuple) -> Color:
    return pattern.a


def _stripe(pattern: Pattern, p: Tuple) -> Color:
    return pattern.a if _floor(p.x) % 2 == 0 else pattern.b


def _gradient(pattern: Pattern, p: Tuple) -> Color:
    fraction = p.x - math.floor(p.x)
    return pattern.a + (pattern.b - pattern.a) * fraction


def _ring(pattern: Pattern, p: Tuple) -> Color:
    return pattern.a if _floor(math.sqrt(p.x * p.x + p.z * p.z)) % 2 == 0 else pattern.b


def _checker(pattern: Pattern, p: Tuple) -> Color:
    return pattern.a if (_floor(p.x) + _floor(p.y) + _floor(p.z)) % 2 == 0 else pattern.b


_PATTERN_FUNCTIONS: dict[PatternType, Callable[[Pattern, Tuple], Color]] = {
    PatternType.SOLID: _solid,
    PatternType.STRIPE: _stripe,
    PatternType.GRADIENT: _gradient,
    PatternType.RING: _ring,
    PatternType.CHECKER: _checker,
}


def pattern_at(pattern: Pattern, pattern_point: Tuple) -> Color:
    """Evaluate a pattern at a point already in pattern space."""
    return _PATTERN_FUNCTIONS[pattern.kind](pattern, pattern_point)


def pattern_at_shape(pattern: Pattern, shape: Shape, world_point: Tuple) -> Color:
    """Evaluate a pattern on a shape at a world-space point.

    Args:
        pattern: The pattern to evaluate.
        shape: The shape the pattern decorates (supplies the world-to-object
            transform).
        world_point: Point on the shape's surface in world space.

    Returns:
        The pattern color at that point.
    """
    object_point = shape.world_to_object(world_point)
    pattern_point = pattern.inverse @ object_point
    return pattern_at(pattern, pattern_point)
