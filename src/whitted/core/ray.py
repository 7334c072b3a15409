"""Ray data structure.

A ray is an origin point plus a direction vector. The direction is not
required to be unit length (rays transformed into object space are usually
not), but it must be non-zero: a zero direction is a caller contract
violation and is rejected at construction.

Example:
    >>> from whitted.core.ray import Ray
    >>> from whitted.core.tuples import point, vector
    >>> ray = Ray(point(2, 3, 4), vector(1, 0, 0))
    >>> ray.position(2.5)
    point(4.5, 3, 4)
"""

from __future__ import annotations

from dataclasses import dataclass

from whitted.core.matrix import Matrix
from whitted.core.tuples import Tuple


@dataclass(frozen=True)
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray.
        direction: The direction vector. Any non-zero length.
    """

    origin: Tuple
    direction: Tuple

    def __post_init__(self) -> None:
        if not self.origin.is_point:
            raise ValueError(f"Ray origin must be a point, got {self.origin!r}")
        if not self.direction.is_vector:
            raise ValueError(f"Ray direction must be a vector, got {self.direction!r}")
        if self.direction.magnitude() == 0.0:
            raise ValueError("Ray direction must have non-zero length")

    def position(self, t: float) -> Tuple:
        """Compute the point along the ray at parameter t.

        Args:
            t: The parameter value. Positive values are in front of the origin.

        Returns:
            The point origin + t * direction.
        """
        return self.origin + self.direction * t

    def transform(self, matrix: Matrix) -> Ray:
        """Return a new ray with origin and direction multiplied by ``matrix``."""
        return Ray(matrix @ self.origin, matrix @ self.direction)
