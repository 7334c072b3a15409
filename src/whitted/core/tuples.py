"""Points, vectors and colors.

A Tuple is the homogeneous 4-component value every other module works in:
w=1 marks a point and w=0 a vector. Arithmetic keeps that discriminant
honest: subtracting two points yields a vector, adding a vector to a point
yields a point, and combinations with no geometric meaning (adding two
points) raise ValueError.

Colors are kept as a separate 3-component type so that the Hadamard product
and unclamped linear arithmetic used by the shading code cannot be mixed up
with geometric operations.

Example:
    >>> from whitted.core.tuples import point, vector
    >>> p = point(1.0, 2.0, 3.0)
    >>> v = vector(0.0, 1.0, 0.0)
    >>> (p + v).is_point
    True
"""

from __future__ import annotations

import math

import numpy as np
import numpy.typing as npt

from whitted.core.constants import EPSILON

POINT_W = 1.0
VECTOR_W = 0.0


class Tuple:
    """An immutable (x, y, z, w) value backed by a read-only numpy array.

    Attributes:
        x, y, z: Spatial components.
        w: 1.0 for points, 0.0 for vectors.
    """

    __slots__ = ("_data",)
    __hash__ = None  # type: ignore[assignment]

    def __init__(self, x: float, y: float, z: float, w: float) -> None:
        data = np.array((x, y, z, w), dtype=np.float64)
        data.flags.writeable = False
        self._data = data

    @classmethod
    def from_array(cls, data: npt.ArrayLike) -> Tuple:
        """Build a tuple from any 4-element array-like."""
        x, y, z, w = np.asarray(data, dtype=np.float64)
        return cls(x, y, z, w)

    @property
    def x(self) -> float:
        return float(self._data[0])

    @property
    def y(self) -> float:
        return float(self._data[1])

    @property
    def z(self) -> float:
        return float(self._data[2])

    @property
    def w(self) -> float:
        return float(self._data[3])

    @property
    def is_point(self) -> bool:
        return abs(self._data[3] - POINT_W) < EPSILON

    @property
    def is_vector(self) -> bool:
        return abs(self._data[3] - VECTOR_W) < EPSILON

    def to_numpy(self) -> npt.NDArray[np.float64]:
        """Return the underlying (read-only) array of 4 components."""
        return self._data

    # -------------------------------------------------------------------------
    # Arithmetic
    # -------------------------------------------------------------------------

    def __add__(self, other: Tuple) -> Tuple:
        if not isinstance(other, Tuple):
            return NotImplemented
        return _checked(self._data + other._data, "add", self, other)

    def __sub__(self, other: Tuple) -> Tuple:
        if not isinstance(other, Tuple):
            return NotImplemented
        return _checked(self._data - other._data, "subtract", self, other)

    def __neg__(self) -> Tuple:
        return Tuple(-self._data[0], -self._data[1], -self._data[2], self._data[3])

    def __mul__(self, scalar: float) -> Tuple:
        if isinstance(scalar, Tuple):
            return NotImplemented
        s = float(scalar)
        return Tuple(self._data[0] * s, self._data[1] * s, self._data[2] * s, self._data[3])

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> Tuple:
        s = float(scalar)
        return Tuple(self._data[0] / s, self._data[1] / s, self._data[2] / s, self._data[3])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Tuple):
            return NotImplemented
        return bool(np.all(np.abs(self._data - other._data) < EPSILON))

    def __iter__(self):
        return iter(float(c) for c in self._data)

    def __repr__(self) -> str:
        if self.is_point:
            return f"point({self.x:g}, {self.y:g}, {self.z:g})"
        if self.is_vector:
            return f"vector({self.x:g}, {self.y:g}, {self.z:g})"
        return f"Tuple({self.x:g}, {self.y:g}, {self.z:g}, {self.w:g})"

    # -------------------------------------------------------------------------
    # Vector operations
    # -------------------------------------------------------------------------

    def dot(self, other: Tuple) -> float:
        """Dot product over all four components."""
        return float(np.dot(self._data, other._data))

    def cross(self, other: Tuple) -> Tuple:
        """Cross product; both operands must be vectors."""
        if not (self.is_vector and other.is_vector):
            raise ValueError(f"Cross product is only defined for vectors: {self!r} x {other!r}")
        c = np.cross(self._data[:3], other._data[:3])
        return Tuple(c[0], c[1], c[2], VECTOR_W)

    def magnitude(self) -> float:
        """Euclidean length of the x, y, z components."""
        return math.sqrt(float(np.dot(self._data[:3], self._data[:3])))

    def normalize(self) -> Tuple:
        """Return a unit vector in the same direction.

        Raises:
            ValueError: If the tuple is not a vector or has zero length.
        """
        if not self.is_vector:
            raise ValueError(f"Only vectors can be normalized, got {self!r}")
        length = self.magnitude()
        if length == 0.0:
            raise ValueError("Cannot normalize a zero-length vector")
        return self / length

    def reflect(self, normal: Tuple) -> Tuple:
        """Reflect this vector about a (unit) normal: v - 2 * dot(v, n) * n."""
        return self - normal * (2.0 * self.dot(normal))


def _checked(data: npt.NDArray[np.float64], op: str, a: Tuple, b: Tuple) -> Tuple:
    w = data[3]
    if abs(w - POINT_W) >= EPSILON and abs(w - VECTOR_W) >= EPSILON:
        raise ValueError(f"Cannot {op} {a!r} and {b!r}: result is neither a point nor a vector")
    return Tuple(data[0], data[1], data[2], POINT_W if abs(w - POINT_W) < EPSILON else VECTOR_W)


def point(x: float, y: float, z: float) -> Tuple:
    """Create a point (w=1)."""
    return Tuple(x, y, z, POINT_W)


def vector(x: float, y: float, z: float) -> Tuple:
    """Create a vector (w=0)."""
    return Tuple(x, y, z, VECTOR_W)


ORIGIN = point(0.0, 0.0, 0.0)


class Color:
    """An immutable linear RGB color. Components are not clamped."""

    __slots__ = ("_data",)
    __hash__ = None  # type: ignore[assignment]

    def __init__(self, red: float, green: float, blue: float) -> None:
        data = np.array((red, green, blue), dtype=np.float64)
        data.flags.writeable = False
        self._data = data

    @property
    def red(self) -> float:
        return float(self._data[0])

    @property
    def green(self) -> float:
        return float(self._data[1])

    @property
    def blue(self) -> float:
        return float(self._data[2])

    def to_numpy(self) -> npt.NDArray[np.float64]:
        return self._data

    def __add__(self, other: Color) -> Color:
        if not isinstance(other, Color):
            return NotImplemented
        return Color(*(self._data + other._data))

    def __sub__(self, other: Color) -> Color:
        if not isinstance(other, Color):
            return NotImplemented
        return Color(*(self._data - other._data))

    def __mul__(self, other: Color | float) -> Color:
        # Color * Color is the Hadamard (component-wise) product
        if isinstance(other, Color):
            return Color(*(self._data * other._data))
        return Color(*(self._data * float(other)))

    __rmul__ = __mul__

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Color):
            return NotImplemented
        return bool(np.all(np.abs(self._data - other._data) < EPSILON))

    def __iter__(self):
        return iter(float(c) for c in self._data)

    def __repr__(self) -> str:
        return f"Color({self.red:.5g}, {self.green:.5g}, {self.blue:.5g})"


def color(red: float, green: float, blue: float) -> Color:
    """Create a color."""
    return Color(red, green, blue)


BLACK = Color(0.0, 0.0, 0.0)
WHITE = Color(1.0, 1.0, 1.0)
