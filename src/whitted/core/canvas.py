"""Output buffer for rendered images.

A Canvas is a (height, width, 3) float64 NumPy array of linear, unclamped
colors addressed by pixel column ``x`` and row ``y`` (row 0 at the top).
It is the only object mutated during a render.
"""

from __future__ import annotations

import numpy as np
import numpy.typing as npt

from whitted.core.tuples import Color


class Canvas:
    """A width x height grid of colors, initially black.

    Attributes:
        width: Number of pixel columns.
        height: Number of pixel rows.
    """

    def __init__(self, width: int, height: int) -> None:
        """Create a black canvas.

        Raises:
            ValueError: If either dimension is not positive.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Canvas dimensions must be positive, got {width}x{height}")
        self._width = width
        self._height = height
        self._pixels = np.zeros((height, width, 3), dtype=np.float64)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def _check(self, x: int, y: int) -> None:
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise IndexError(f"Pixel ({x}, {y}) is outside a {self._width}x{self._height} canvas")

    def write_pixel(self, x: int, y: int, color: Color) -> None:
        """Set the color at column ``x``, row ``y``.

        Raises:
            IndexError: If (x, y) is outside the canvas.
        """
        self._check(x, y)
        self._pixels[y, x] = (color.red, color.green, color.blue)

    def pixel_at(self, x: int, y: int) -> Color:
        """Get the color at column ``x``, row ``y``.

        Raises:
            IndexError: If (x, y) is outside the canvas.
        """
        self._check(x, y)
        r, g, b = self._pixels[y, x]
        return Color(float(r), float(g), float(b))

    def to_numpy(self) -> npt.NDArray[np.float64]:
        """Return a copy of the pixel data, shape (height, width, 3)."""
        return self._pixels.copy()

    def __repr__(self) -> str:
        return f"Canvas(width={self._width}, height={self._height})"
