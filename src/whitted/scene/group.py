"""Hierarchical grouping of shapes for scene construction.

A Group carries a transform that applies to all of its children, which may
be Shapes or other Groups. Groups only exist while a scene is being
assembled: ``flatten`` folds every ancestor transform into the leaf shapes,
so the World that gets rendered holds plain Shapes and rays never need to
walk a hierarchy.

Example:
    >>> from whitted.core.transforms import rotation_y, translation
    >>> from whitted.geometry import Shape, Sphere
    >>> from whitted.scene.group import Group
    >>> arm = Group(transform=rotation_y(0.5))
    >>> arm.add_child(Shape(Sphere(), transform=translation(5, 0, 0)))
    >>> shapes = arm.flatten()
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable

from whitted.core.matrix import IDENTITY, Matrix
from whitted.geometry.shape import Shape


class Group:
    """A transform node with Shape and Group children.

    Attributes:
        transform: Group-to-parent matrix.
        name: Optional label (OBJ group name, config name).
        children: Child shapes and groups, in insertion order.
    """

    def __init__(
        self,
        transform: Matrix = IDENTITY,
        children: Iterable[Shape | Group] = (),
        name: str | None = None,
    ) -> None:
        self.transform = transform
        self.name = name
        self.children: list[Shape | Group] = []
        for child in children:
            self.add_child(child)

    def add_child(self, child: Shape | Group) -> None:
        """Append a Shape or Group.

        Raises:
            TypeError: If ``child`` is neither.
            ValueError: If adding ``child`` would create a cycle.
        """
        if not isinstance(child, (Shape, Group)):
            raise TypeError(f"Group children must be Shape or Group, got {type(child).__name__}")
        if isinstance(child, Group) and child._contains(self):
            raise ValueError("Adding this group would create a cycle")
        self.children.append(child)

    def _contains(self, group: Group) -> bool:
        if self is group:
            return True
        return any(isinstance(c, Group) and c._contains(group) for c in self.children)

    def __len__(self) -> int:
        return len(self.children)

    def __repr__(self) -> str:
        return f"Group(name={self.name!r}, children={len(self.children)})"

    def flatten(self, parent: Matrix = IDENTITY) -> list[Shape]:
        """Return all leaf shapes with ancestor transforms folded in.

        Args:
            parent: Transform of everything above this group.

        Returns:
            New Shape objects whose transform is
            ``parent @ group.transform @ ... @ shape.transform``.
        """
        to_world = parent @ self.transform
        shapes: list[Shape] = []
        for child in self.children:
            if isinstance(child, Group):
                shapes.extend(child.flatten(to_world))
            else:
                shapes.append(dataclasses.replace(child, transform=to_world @ child.transform))
        return shapes
