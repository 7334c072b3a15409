"""Fixed-size 4x4 transformation matrices.

Matrices are immutable wrappers over read-only float64 numpy arrays. The
``@`` operator multiplies by another Matrix (composition) or by a Tuple
(transforming a point or vector). A vector's w=0 zeroes the contribution of
the translation column, so translations move points and leave vectors
untouched.

The inverse is computed by numpy's LU-based elimination rather than a
hand-expanded cofactor formula. A matrix whose determinant magnitude is
below SINGULAR_EPSILON has no usable inverse and ``inverse()`` raises
SingularMatrixError; callers building scene objects let that propagate so a
bad transform is rejected before any rendering starts.

Example:
    >>> from whitted.core.matrix import Matrix
    >>> from whitted.core.transforms import translation
    >>> from whitted.core.tuples import point
    >>> translation(5, -3, 2) @ point(-3, 4, 5)
    point(2, 1, 7)
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import overload

import numpy as np
import numpy.typing as npt

from whitted.core.constants import EPSILON, SINGULAR_EPSILON
from whitted.core.tuples import Tuple

SIZE = 4


class SingularMatrixError(ValueError):
    """Raised when inverting a matrix whose determinant is (near) zero."""


class Matrix:
    """An immutable 4x4 matrix.

    Attributes:
        rows: The matrix entries as a tuple of row tuples (read-only view).
    """

    __slots__ = ("_data", "_inverse")
    __hash__ = None  # type: ignore[assignment]

    def __init__(self, rows: Sequence[Sequence[float]] | npt.ArrayLike) -> None:
        data = np.array(rows, dtype=np.float64)
        if data.shape != (SIZE, SIZE):
            raise ValueError(f"Matrix must be {SIZE}x{SIZE}, got shape {data.shape}")
        data.flags.writeable = False
        self._data = data
        self._inverse: Matrix | None = None

    @classmethod
    def identity(cls) -> Matrix:
        return cls(np.identity(SIZE))

    @property
    def rows(self) -> tuple[tuple[float, ...], ...]:
        return tuple(tuple(float(v) for v in row) for row in self._data)

    def to_numpy(self) -> npt.NDArray[np.float64]:
        """Return the underlying (read-only) 4x4 array."""
        return self._data

    def __getitem__(self, index: tuple[int, int]) -> float:
        return float(self._data[index])

    @overload
    def __matmul__(self, other: Matrix) -> Matrix: ...

    @overload
    def __matmul__(self, other: Tuple) -> Tuple: ...

    def __matmul__(self, other):
        if isinstance(other, Matrix):
            return Matrix(self._data @ other._data)
        if isinstance(other, Tuple):
            return Tuple.from_array(self._data @ other.to_numpy())
        return NotImplemented

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return bool(np.all(np.abs(self._data - other._data) < EPSILON))

    def __repr__(self) -> str:
        body = ", ".join("[" + ", ".join(f"{v:g}" for v in row) + "]" for row in self._data)
        return f"Matrix([{body}])"

    def transpose(self) -> Matrix:
        return Matrix(self._data.T)

    def determinant(self) -> float:
        return float(np.linalg.det(self._data))

    def is_invertible(self) -> bool:
        return abs(self.determinant()) >= SINGULAR_EPSILON

    def inverse(self) -> Matrix:
        """Return the inverse matrix (cached after the first call).

        Raises:
            SingularMatrixError: If the determinant magnitude is below
                SINGULAR_EPSILON.
        """
        if self._inverse is None:
            det = self.determinant()
            if abs(det) < SINGULAR_EPSILON:
                raise SingularMatrixError(f"Matrix is not invertible (determinant={det:g}): {self!r}")
            inverse = Matrix(np.linalg.inv(self._data))
            inverse._inverse = self
            self._inverse = inverse
        return self._inverse


IDENTITY = Matrix.identity()
