"""Perspective camera that maps pixels to world-space rays.

The camera sits at the origin of its own space looking down -z, with a
canvas one unit in front of it (z = -1). The canvas spans the field of view
along its longer side; pixel size follows from that and the image size.
``transform`` is the world-to-camera (view) matrix, typically built with
``whitted.core.transforms.view_transform``; its inverse carries canvas
points and the eye back into world space.

Example:
    >>> import math
    >>> from whitted.camera import Camera
    >>> from whitted.core.transforms import view_transform
    >>> from whitted.core.tuples import point, vector
    >>> camera = Camera(
    ...     hsize=160,
    ...     vsize=120,
    ...     field_of_view=math.pi / 3,
    ...     transform=view_transform(point(0, 1.5, -5), point(0, 1, 0), vector(0, 1, 0)),
    ... )
    >>> ray = camera.ray_for_pixel(80, 60)  # Ray through the image center
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from whitted.core.matrix import IDENTITY, Matrix, SingularMatrixError
from whitted.core.ray import Ray
from whitted.core.tuples import ORIGIN, point

# =============================================================================
# Camera Data Structures
# =============================================================================


@dataclass(frozen=True)
class Camera:
    """A pinhole camera with a rectangular pixel grid.

    Attributes:
        hsize: Horizontal size of the image in pixels.
        vsize: Vertical size of the image in pixels.
        field_of_view: Angle spanned by the longer image side, in radians.
        transform: World-to-camera matrix. Must be invertible.
        inverse: Camera-to-world matrix (derived).
        half_width: Half the canvas width at z = -1 (derived).
        half_height: Half the canvas height at z = -1 (derived).
        pixel_size: World-unit size of one pixel on the canvas (derived).

    Raises:
        ValueError: If a size is not positive or the field of view is
            outside (0, pi).
        SingularMatrixError: If ``transform`` has no inverse.
    """

    hsize: int
    vsize: int
    field_of_view: float
    transform: Matrix = field(default_factory=lambda: IDENTITY)
    inverse: Matrix = field(init=False, repr=False, compare=False)
    half_width: float = field(init=False, repr=False, compare=False)
    half_height: float = field(init=False, repr=False, compare=False)
    pixel_size: float = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.hsize <= 0 or self.vsize <= 0:
            raise ValueError(f"Camera size must be positive, got {self.hsize}x{self.vsize}")
        if not 0.0 < self.field_of_view < math.pi:
            raise ValueError(f"Field of view must be in (0, pi) radians, got {self.field_of_view}")
        try:
            inverse = self.transform.inverse()
        except SingularMatrixError as exc:
            raise SingularMatrixError("Camera transform is not invertible") from exc

        half_view = math.tan(self.field_of_view / 2.0)
        aspect = self.hsize / self.vsize
        if aspect >= 1.0:
            half_width = half_view
            half_height = half_view / aspect
        else:
            half_width = half_view * aspect
            half_height = half_view

        object.__setattr__(self, "inverse", inverse)
        object.__setattr__(self, "half_width", half_width)
        object.__setattr__(self, "half_height", half_height)
        object.__setattr__(self, "pixel_size", half_width * 2.0 / self.hsize)

    @property
    def aspect_ratio(self) -> float:
        """Width divided by height of the output image."""
        return self.hsize / self.vsize

    # =========================================================================
    # Ray Generation
    # =========================================================================

    def ray_for_pixel(self, px: int, py: int) -> Ray:
        """Build the world-space ray through the center of pixel (px, py).

        Args:
            px: Pixel column (0 = left).
            py: Pixel row (0 = top).

        Returns:
            A ray from the eye with a unit direction.
        """
        # Offset from the canvas edge to the pixel center
        xoffset = (px + 0.5) * self.pixel_size
        yoffset = (py + 0.5) * self.pixel_size

        # The camera looks toward -z, so +x is to the left
        world_x = self.half_width - xoffset
        world_y = self.half_height - yoffset

        pixel = self.inverse @ point(world_x, world_y, -1.0)
        origin = self.inverse @ ORIGIN
        direction = (pixel - origin).normalize()
        return Ray(origin, direction)
