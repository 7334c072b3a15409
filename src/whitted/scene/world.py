"""The renderable world: shapes plus point lights.

A World is frozen once built. Shapes and lights are stored as tuples, so a
render can never observe a scene changing underneath it. Build worlds with
the constructor, ``World.from_objects`` (which flattens Groups), or
``whitted.scene.manager.SceneManager``.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from whitted.core.constants import EPSILON
from whitted.core.ray import Ray
from whitted.core.transforms import scaling
from whitted.core.tuples import Tuple, color, point
from whitted.geometry import Shape, Sphere
from whitted.materials.material import Material
from whitted.scene.group import Group
from whitted.scene.intersection import Intersection
from whitted.scene.light import PointLight


@dataclass(frozen=True)
class World:
    """Immutable collection of shapes and lights.

    Attributes:
        shapes: Every renderable shape, already in world space.
        lights: Point lights; each contributes independently to shading.
    """

    shapes: tuple[Shape, ...] = ()
    lights: tuple[PointLight, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "shapes", tuple(self.shapes))
        object.__setattr__(self, "lights", tuple(self.lights))

    @classmethod
    def from_objects(cls, objects: Iterable[Shape | Group], lights: Iterable[PointLight]) -> World:
        """Build a world from shapes and groups, flattening the groups."""
        shapes: list[Shape] = []
        for obj in objects:
            if isinstance(obj, Group):
                shapes.extend(obj.flatten())
            else:
                shapes.append(obj)
        return cls(tuple(shapes), tuple(lights))

    def intersect(self, ray: Ray) -> list[Intersection]:
        """All intersections of ``ray`` with the world, sorted by ``t``."""
        xs = [Intersection(t, shape) for shape in self.shapes for t in shape.intersect(ray)]
        xs.sort(key=lambda i: i.t)
        return xs

    def is_shadowed(self, point_: Tuple, light: PointLight) -> bool:
        """True if any shape lies strictly between ``point_`` and ``light``.

        Only intersections with EPSILON < t < distance-to-light count, so the
        surface the point sits on and anything beyond the light are ignored.
        """
        to_light = light.position - point_
        distance = to_light.magnitude()
        if distance < EPSILON:
            return False
        ray = Ray(point_, to_light.normalize())
        for shape in self.shapes:
            for t in shape.intersect(ray):
                if EPSILON < t < distance:
                    return True
        return False


def default_world() -> World:
    """Two concentric spheres lit from the upper left.

    The outer unit sphere is green-yellow with low specular; the inner one is
    the default material scaled by one half. The light sits at (-10, 10, -10).
    """
    outer = Shape(
        Sphere(),
        material=Material(color=color(0.8, 1.0, 0.6), diffuse=0.7, specular=0.2),
    )
    inner = Shape(Sphere(), transform=scaling(0.5, 0.5, 0.5))
    light = PointLight(point(-10.0, 10.0, -10.0), color(1.0, 1.0, 1.0))
    return World((outer, inner), (light,))
