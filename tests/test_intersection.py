"""Unit tests for intersections and shading precomputation.

Tests cover:
- Intersection records and sorted aggregation
- Hit selection
- prepare_computations (inside/outside, offset points, reflection vector)
- Refractive indices via the container stack
- Schlick reflectance
"""

import math

import pytest

from whitted.core.constants import EPSILON
from whitted.core.ray import Ray
from whitted.core.transforms import scaling, translation
from whitted.core.tuples import point, vector
from whitted.geometry import Plane, Shape, Sphere
from whitted.materials.material import glass
from whitted.scene.intersection import (
    Intersection,
    hit,
    intersections,
    prepare_computations,
    schlick,
)

SQRT2_2 = math.sqrt(2) / 2


class TestIntersections:
    """Tests for intersection records and hit selection."""

    def test_intersection_encapsulates_t_and_shape(self):
        """An intersection records t and the shape hit."""
        s = Shape(Sphere())
        i = Intersection(3.5, s)
        assert i.t == 3.5
        assert i.shape is s

    def test_aggregating_sorts_by_t(self):
        """intersections() returns records in ascending t."""
        s = Shape(Sphere())
        xs = intersections(Intersection(2, s), Intersection(-1, s), Intersection(1, s))
        assert [i.t for i in xs] == [-1, 1, 2]

    def test_world_sphere_intersections_set_shape(self):
        """Both sphere hits reference the sphere."""
        s = Shape(Sphere())
        ts = s.intersect(Ray(point(0, 0, -5), vector(0, 0, 1)))
        xs = intersections(*(Intersection(t, s) for t in ts))
        assert len(xs) == 2
        assert xs[0].shape is s and xs[1].shape is s

    def test_hit_all_positive(self):
        """With all t positive the smallest is the hit."""
        s = Shape(Sphere())
        i1 = Intersection(1, s)
        i2 = Intersection(2, s)
        assert hit(intersections(i2, i1)) is i1

    def test_hit_some_negative(self):
        """Negative t values are skipped."""
        s = Shape(Sphere())
        i1 = Intersection(-1, s)
        i2 = Intersection(1, s)
        assert hit(intersections(i2, i1)) is i2

    def test_hit_all_negative(self):
        """No hit when everything lies behind the ray."""
        s = Shape(Sphere())
        assert hit(intersections(Intersection(-2, s), Intersection(-1, s))) is None

    def test_hit_is_lowest_nonnegative(self):
        """The hit is the lowest non-negative t of an unsorted list."""
        s = Shape(Sphere())
        i4 = Intersection(2, s)
        xs = [Intersection(5, s), Intersection(7, s), Intersection(-3, s), i4]
        assert hit(xs) is i4

    def test_hit_of_empty_list(self):
        """An empty list has no hit."""
        assert hit([]) is None

    def test_intersections_compare_by_identity(self):
        """Equal t and shape do not make two records equal."""
        s = Shape(Sphere())
        assert Intersection(1, s) != Intersection(1, s)


class TestPrepareComputations:
    """Tests for precomputed hit state."""

    def test_precomputes_state(self):
        """Point, eye vector and normal are filled in."""
        ray = Ray(point(0, 0, -5), vector(0, 0, 1))
        shape = Shape(Sphere())
        i = Intersection(4, shape)
        comps = prepare_computations(i, ray)
        assert comps.t == i.t
        assert comps.shape is shape
        assert comps.point == point(0, 0, -1)
        assert comps.eyev == vector(0, 0, -1)
        assert comps.normalv == vector(0, 0, -1)

    def test_hit_outside(self):
        """A hit from outside is not marked inside."""
        ray = Ray(point(0, 0, -5), vector(0, 0, 1))
        comps = prepare_computations(Intersection(4, Shape(Sphere())), ray)
        assert comps.inside is False

    def test_hit_inside_flips_normal(self):
        """A hit from inside flips the normal toward the eye."""
        ray = Ray(point(0, 0, 0), vector(0, 0, 1))
        comps = prepare_computations(Intersection(1, Shape(Sphere())), ray)
        assert comps.point == point(0, 0, 1)
        assert comps.eyev == vector(0, 0, -1)
        assert comps.inside is True
        assert comps.normalv == vector(0, 0, -1)

    def test_over_point_is_above_surface(self):
        """over_point sits just outside the surface."""
        ray = Ray(point(0, 0, -5), vector(0, 0, 1))
        shape = Shape(Sphere(), transform=translation(0, 0, 1))
        comps = prepare_computations(Intersection(5, shape), ray)
        assert comps.over_point.z < -EPSILON / 2
        assert comps.point.z > comps.over_point.z

    def test_under_point_is_below_surface(self, glass_sphere):
        """under_point sits just inside the surface."""
        ray = Ray(point(0, 0, -5), vector(0, 0, 1))
        shape = glass_sphere(transform=translation(0, 0, 1))
        i = Intersection(5, shape)
        comps = prepare_computations(i, ray, [i])
        assert comps.under_point.z > EPSILON / 2
        assert comps.point.z < comps.under_point.z

    def test_reflection_vector(self):
        """The reflection vector mirrors the ray about the normal."""
        shape = Shape(Plane())
        ray = Ray(point(0, 1, -1), vector(0, -SQRT2_2, SQRT2_2))
        comps = prepare_computations(Intersection(math.sqrt(2), shape), ray)
        assert comps.reflectv == vector(0, SQRT2_2, SQRT2_2)

    def test_eye_vector_is_unit_for_unnormalized_ray(self):
        """eyev is normalized even when the ray direction is not."""
        ray = Ray(point(0, 0, -5), vector(0, 0, 2))
        comps = prepare_computations(Intersection(2, Shape(Sphere())), ray)
        assert comps.eyev == vector(0, 0, -1)


class TestRefractiveIndices:
    """Tests for n1/n2 from the container stack."""

    @pytest.mark.parametrize(
        "index, n1, n2",
        [
            (0, 1.0, 1.5),
            (1, 1.5, 2.0),
            (2, 2.0, 2.5),
            (3, 2.5, 2.5),
            (4, 2.5, 1.5),
            (5, 1.5, 1.0),
        ],
    )
    def test_n1_n2_at_various_intersections(self, glass_sphere, index, n1, n2):
        """n1 and n2 follow nested glass spheres through the stack."""
        a = glass_sphere(transform=scaling(2, 2, 2), refractive_index=1.5)
        b = glass_sphere(transform=translation(0, 0, -0.25), refractive_index=2.0)
        c = glass_sphere(transform=translation(0, 0, 0.25), refractive_index=2.5)
        ray = Ray(point(0, 0, -4), vector(0, 0, 1))
        xs = intersections(
            Intersection(2, a),
            Intersection(2.75, b),
            Intersection(3.25, c),
            Intersection(4.75, b),
            Intersection(5.25, c),
            Intersection(6, a),
        )
        comps = prepare_computations(xs[index], ray, xs)
        assert comps.n1 == pytest.approx(n1)
        assert comps.n2 == pytest.approx(n2)

    def test_equal_but_distinct_shapes_tracked_separately(self, glass_sphere):
        """Two spheres with identical parameters are separate containers."""
        a = glass_sphere(refractive_index=1.5)
        b = glass_sphere(refractive_index=1.5)
        ray = Ray(point(0, 0, -5), vector(0, 0, 1))
        xs = intersections(Intersection(4, a), Intersection(4, b), Intersection(6, a), Intersection(6, b))
        comps = prepare_computations(xs[1], ray, xs)
        # Entering b while inside a; b must not be mistaken for a
        assert comps.n1 == pytest.approx(1.5)
        assert comps.n2 == pytest.approx(1.5)

    def test_plane_is_never_exited(self):
        """A plane is crossed once, so it stays on the stack past its hit."""
        upper = Shape(Plane(), transform=translation(0, 1, 0), material=glass())
        lower = Shape(Plane(), transform=translation(0, -1, 0), material=glass())
        ray = Ray(point(0, 3, 0), vector(0, -1, 0))
        xs = intersections(Intersection(2, upper), Intersection(4, lower))
        comps = prepare_computations(xs[1], ray, xs)
        assert comps.n1 == pytest.approx(1.5)
        assert comps.n2 == pytest.approx(1.5)

    def test_defaults_to_vacuum_without_list(self):
        """Without an intersection list both sides are vacuum."""
        ray = Ray(point(0, 0, -5), vector(0, 0, 1))
        comps = prepare_computations(Intersection(4, Shape(Sphere())), ray)
        assert comps.n1 == 1.0
        assert comps.n2 == 1.0


class TestSchlick:
    """Tests for the Schlick Fresnel approximation."""

    def test_total_internal_reflection(self, glass_sphere):
        """Schlick reflectance is 1 under total internal reflection."""
        shape = glass_sphere()
        ray = Ray(point(0, 0, SQRT2_2), vector(0, 1, 0))
        xs = intersections(Intersection(-SQRT2_2, shape), Intersection(SQRT2_2, shape))
        comps = prepare_computations(xs[1], ray, xs)
        assert schlick(comps) == 1.0

    def test_perpendicular_viewing_angle(self, glass_sphere):
        """Head-on viewing gives a small reflectance."""
        shape = glass_sphere()
        ray = Ray(point(0, 0, 0), vector(0, 1, 0))
        xs = intersections(Intersection(-1, shape), Intersection(1, shape))
        comps = prepare_computations(xs[1], ray, xs)
        assert schlick(comps) == pytest.approx(0.04, abs=1e-5)

    def test_small_angle_n2_greater_than_n1(self, glass_sphere):
        """A grazing entry into denser glass reflects more."""
        shape = glass_sphere()
        ray = Ray(point(0, 0.99, -2), vector(0, 0, 1))
        xs = intersections(Intersection(1.8589, shape))
        comps = prepare_computations(xs[0], ray, xs)
        assert schlick(comps) == pytest.approx(0.48873, abs=1e-4)
