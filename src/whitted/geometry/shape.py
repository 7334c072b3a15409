"""Scene shapes: a geometry variant placed in the world with a material.

Every primitive is written against a fixed canonical geometry in object
space (unit sphere, xz-plane, [-1, 1] cube, ...). A Shape pairs one of those
geometry variants with an object-to-world transform and a Material, and
performs the two change-of-space steps around the variant's own code:

    intersect:  world ray  --inverse-->  object ray  --> local_intersect
    normal_at:  world point --inverse--> object point --> local_normal_at
                object normal --inverse transpose--> world normal (renormalized)

The set of geometry variants is closed (GEOMETRY_TYPES). Adding a primitive
means adding a dataclass with ``local_intersect`` and ``local_normal_at``
and listing it here; Shape itself is never subclassed.

Shapes compare and hash by identity: two shapes with identical geometry,
transform and material are still distinct scene entities.

Example:
    >>> from whitted.core.transforms import scaling
    >>> from whitted.geometry import Shape, Sphere
    >>> big = Shape(Sphere(), transform=scaling(2, 2, 2))
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from whitted.core.matrix import IDENTITY, Matrix, SingularMatrixError
from whitted.core.ray import Ray
from whitted.core.tuples import Tuple
from whitted.geometry.cone import Cone
from whitted.geometry.cube import Cube
from whitted.geometry.cylinder import Cylinder
from whitted.geometry.plane import Plane
from whitted.geometry.sphere import Sphere
from whitted.geometry.triangle import SmoothTriangle, Triangle
from whitted.materials.material import DEFAULT_MATERIAL, Material

Geometry = Union[Sphere, Plane, Cube, Cylinder, Cone, Triangle, SmoothTriangle]

GEOMETRY_TYPES: tuple[type, ...] = (Sphere, Plane, Cube, Cylinder, Cone, Triangle, SmoothTriangle)


@dataclass(frozen=True, eq=False)
class Shape:
    """A geometry variant with a transform and material.

    Attributes:
        geometry: The object-space primitive.
        transform: Object-to-world matrix. Must be invertible.
        material: Surface appearance.
        inverse: World-to-object matrix (derived).
        normal_matrix: Transpose of ``inverse``, for normals (derived).

    Raises:
        TypeError: If ``geometry`` is not one of GEOMETRY_TYPES.
        SingularMatrixError: If ``transform`` has no inverse.
    """

    geometry: Geometry
    transform: Matrix = field(default_factory=lambda: IDENTITY)
    material: Material = DEFAULT_MATERIAL
    inverse: Matrix = field(init=False, repr=False)
    normal_matrix: Matrix = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if not isinstance(self.geometry, GEOMETRY_TYPES):
            raise TypeError(f"Unsupported geometry type: {type(self.geometry).__name__}")
        try:
            inverse = self.transform.inverse()
        except SingularMatrixError as exc:
            raise SingularMatrixError(f"{type(self.geometry).__name__} transform is not invertible") from exc
        object.__setattr__(self, "inverse", inverse)
        object.__setattr__(self, "normal_matrix", inverse.transpose())

    def local_intersect(self, local_ray: Ray) -> list[float]:
        return self.geometry.local_intersect(local_ray)

    def local_normal_at(self, local_point: Tuple) -> Tuple:
        return self.geometry.local_normal_at(local_point)

    def intersect(self, ray: Ray) -> list[float]:
        """Intersect a world-space ray with this shape.

        Args:
            ray: Ray in world space.

        Returns:
            Ascending t values. The same t parameterizes both the world ray
            and its object-space image, so no conversion back is needed.
        """
        return self.local_intersect(ray.transform(self.inverse))

    def normal_at(self, world_point: Tuple) -> Tuple:
        """Unit surface normal at a world-space point on this shape."""
        local_point = self.inverse @ world_point
        local_normal = self.local_normal_at(local_point)
        world_normal = self.normal_matrix @ local_normal
        # The inverse transpose can leak translation into w
        return Tuple(world_normal.x, world_normal.y, world_normal.z, 0.0).normalize()

    def world_to_object(self, world_point: Tuple) -> Tuple:
        return self.inverse @ world_point
