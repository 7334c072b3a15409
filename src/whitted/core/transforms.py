"""Builders for affine transformation matrices.

Composition follows matrix multiplication order: in ``A @ B @ p`` the
rightmost factor B is applied to p first. ``chain`` takes steps in the order
they should be applied and does the reversal for you:

    >>> from math import pi
    >>> from whitted.core.transforms import chain, rotation_x, scaling, translation
    >>> m = chain(rotation_x(pi / 2), scaling(5, 5, 5), translation(10, 5, 7))
    >>> # equivalent to translation(10, 5, 7) @ scaling(5, 5, 5) @ rotation_x(pi / 2)
"""

from __future__ import annotations

import math

from whitted.core.constants import EPSILON
from whitted.core.matrix import IDENTITY, Matrix
from whitted.core.tuples import Tuple


def translation(x: float, y: float, z: float) -> Matrix:
    return Matrix(
        [
            [1.0, 0.0, 0.0, x],
            [0.0, 1.0, 0.0, y],
            [0.0, 0.0, 1.0, z],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def scaling(x: float, y: float, z: float) -> Matrix:
    return Matrix(
        [
            [x, 0.0, 0.0, 0.0],
            [0.0, y, 0.0, 0.0],
            [0.0, 0.0, z, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def rotation_x(radians: float) -> Matrix:
    """Rotation about the x axis (left-handed, clockwise looking toward -x)."""
    c, s = math.cos(radians), math.sin(radians)
    return Matrix(
        [
            [1.0, 0.0, 0.0, 0.0],
            [0.0, c, -s, 0.0],
            [0.0, s, c, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def rotation_y(radians: float) -> Matrix:
    c, s = math.cos(radians), math.sin(radians)
    return Matrix(
        [
            [c, 0.0, s, 0.0],
            [0.0, 1.0, 0.0, 0.0],
            [-s, 0.0, c, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def rotation_z(radians: float) -> Matrix:
    c, s = math.cos(radians), math.sin(radians)
    return Matrix(
        [
            [c, -s, 0.0, 0.0],
            [s, c, 0.0, 0.0],
            [0.0, 0.0, 1.0, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def shearing(xy: float, xz: float, yx: float, yz: float, zx: float, zy: float) -> Matrix:
    """Shear matrix; ``xy`` moves x in proportion to y, and so on."""
    return Matrix(
        [
            [1.0, xy, xz, 0.0],
            [yx, 1.0, yz, 0.0],
            [zx, zy, 1.0, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def chain(*steps: Matrix) -> Matrix:
    """Compose transforms listed in the order they are applied.

    Args:
        *steps: Matrices, first-applied first.

    Returns:
        ``steps[-1] @ ... @ steps[0]``, or the identity for no steps.
    """
    result = IDENTITY
    for step in steps:
        result = step @ result
    return result


def view_transform(from_point: Tuple, to_point: Tuple, up: Tuple) -> Matrix:
    """World-to-camera transform for an eye at ``from_point`` looking at ``to_point``.

    Args:
        from_point: Eye position (point).
        to_point: Point the eye looks at.
        up: Approximate up direction (vector); need not be orthogonal
            to the view direction.

    Returns:
        A matrix that orients the world relative to the eye.

    Raises:
        ValueError: If the eye and target coincide or ``up`` is parallel
            to the view direction.
    """
    forward = (to_point - from_point).normalize()
    left = forward.cross(up.normalize())
    if left.magnitude() < EPSILON:
        raise ValueError(f"Up vector {up!r} is parallel to the view direction")
    true_up = left.cross(forward)
    orientation = Matrix(
        [
            [left.x, left.y, left.z, 0.0],
            [true_up.x, true_up.y, true_up.z, 0.0],
            [-forward.x, -forward.y, -forward.z, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )
    return orientation @ translation(-from_point.x, -from_point.y, -from_point.z)
