"""Unit tests for shape groups and flattening."""

import math

import pytest

from whitted.core.matrix import IDENTITY
from whitted.core.ray import Ray
from whitted.core.transforms import rotation_y, scaling, translation
from whitted.core.tuples import point, vector
from whitted.geometry import Shape, Sphere
from whitted.materials.material import Material
from whitted.scene.group import Group


class TestGroupConstruction:
    """Tests for building groups."""

    def test_new_group_is_empty(self):
        """A new group has no children and an identity transform."""
        g = Group()
        assert g.transform == IDENTITY
        assert len(g) == 0
        assert g.name is None

    def test_add_child(self):
        """add_child appends the shape to the children."""
        g = Group()
        s = Shape(Sphere())
        g.add_child(s)
        assert g.children == [s]

    def test_children_from_constructor(self):
        """Children and a name can be given up front."""
        a, b = Shape(Sphere()), Shape(Sphere())
        g = Group(children=[a, b], name="pair")
        assert g.children == [a, b]
        assert repr(g) == "Group(name='pair', children=2)"

    def test_non_shape_child_raises(self):
        """Only shapes and groups can be children."""
        with pytest.raises(TypeError, match="Shape or Group"):
            Group().add_child("sphere")

    def test_cycle_raises(self):
        """Adding an ancestor as a child is rejected."""
        outer = Group()
        inner = Group()
        outer.add_child(inner)
        with pytest.raises(ValueError, match="cycle"):
            inner.add_child(outer)

    def test_self_child_raises(self):
        """A group cannot contain itself."""
        g = Group()
        with pytest.raises(ValueError, match="cycle"):
            g.add_child(g)


class TestGroupFlatten:
    """Tests for folding group transforms into leaf shapes."""

    def test_empty_group_flattens_to_nothing(self):
        """An empty group yields no shapes."""
        assert Group().flatten() == []

    def test_group_transform_is_applied(self):
        """The group transform wraps the child transform."""
        s = Shape(Sphere(), transform=translation(5, 0, 0))
        g = Group(transform=scaling(2, 2, 2), children=[s])
        (flat,) = g.flatten()
        assert flat.transform == scaling(2, 2, 2) @ translation(5, 0, 0)
        xs = flat.intersect(Ray(point(10, 0, -10), vector(0, 0, 1)))
        assert xs == pytest.approx([8, 12])

    def test_nested_transforms_compose_outside_in(self):
        """Nested group transforms compose from the outermost inward."""
        s = Shape(Sphere(), transform=translation(5, 0, 0))
        g2 = Group(transform=scaling(1, 2, 3), children=[s])
        g1 = Group(transform=rotation_y(math.pi / 2), children=[g2])
        (flat,) = g1.flatten()
        assert flat.transform == rotation_y(math.pi / 2) @ scaling(1, 2, 3) @ translation(5, 0, 0)

    def test_normal_on_flattened_child(self):
        """Normals on a flattened child account for every parent transform."""
        s = Shape(Sphere(), transform=translation(5, 0, 0))
        g2 = Group(transform=scaling(1, 2, 3), children=[s])
        g1 = Group(transform=rotation_y(math.pi / 2), children=[g2])
        (flat,) = g1.flatten()
        n = flat.normal_at(point(1.7321, 1.1547, -5.5774))
        assert list(n)[:3] == pytest.approx([0.2857, 0.4286, -0.8571], abs=1e-3)

    def test_flatten_keeps_material_and_geometry(self):
        """Flattened copies share the child's material and geometry."""
        m = Material(reflective=0.3)
        s = Shape(Sphere(), material=m)
        (flat,) = Group(transform=translation(0, 1, 0), children=[s]).flatten()
        assert flat.material is m
        assert flat.geometry is s.geometry
        assert flat is not s

    def test_flatten_leaves_original_shape_untouched(self):
        """Flattening does not modify the child shape."""
        s = Shape(Sphere())
        Group(transform=translation(0, 1, 0), children=[s]).flatten()
        assert s.transform == IDENTITY

    def test_parent_transform_argument(self):
        """An explicit parent transform is folded into every leaf."""
        s = Shape(Sphere())
        (flat,) = Group(children=[s]).flatten(translation(1, 2, 3))
        assert flat.transform == translation(1, 2, 3)
