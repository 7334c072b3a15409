"""Unit tests for materials, patterns and Phong lighting.

Tests cover:
- Material defaults and validation
- Each pattern kind, pattern transforms and shape transforms
- Phong lighting for the classic eye/light configurations
- Shadow factor and pattern-driven surface color
"""

import math

import pytest

from whitted.core.matrix import SingularMatrixError
from whitted.core.transforms import scaling, translation
from whitted.core.tuples import BLACK, WHITE, color, point, vector
from whitted.geometry import Shape, Sphere
from whitted.materials import (
    DEFAULT_MATERIAL,
    Material,
    Pattern,
    PatternType,
    glass,
    lighting,
    pattern_at,
    pattern_at_shape,
    surface_color,
)
from whitted.scene.light import PointLight

from conftest import assert_color_close

SQRT2_2 = math.sqrt(2) / 2


class TestMaterial:
    """Tests for material defaults and validation."""

    def test_defaults(self):
        """A default material is white, matte-ish and opaque."""
        m = Material()
        assert m.color == WHITE
        assert m.ambient == 0.1
        assert m.diffuse == 0.9
        assert m.specular == 0.9
        assert m.shininess == 200.0
        assert m.reflective == 0.0
        assert m.transparency == 0.0
        assert m.refractive_index == 1.0
        assert m.pattern is None

    def test_default_material_constant(self):
        """DEFAULT_MATERIAL equals a freshly built Material."""
        assert DEFAULT_MATERIAL == Material()

    def test_replace_returns_modified_copy(self):
        """replace() leaves the original material unchanged."""
        m = Material().replace(reflective=0.5)
        assert m.reflective == 0.5
        assert DEFAULT_MATERIAL.reflective == 0.0

    def test_glass_helper(self):
        """glass() is transparent with index 1.5 unless overridden."""
        g = glass()
        assert g.transparency == 1.0
        assert g.refractive_index == 1.5
        assert glass(refractive_index=2.0).refractive_index == 2.0

    @pytest.mark.parametrize(
        "field, value",
        [
            ("ambient", -0.1),
            ("diffuse", -1.0),
            ("specular", -0.5),
            ("shininess", 0.0),
            ("reflective", 1.5),
            ("transparency", -0.1),
            ("refractive_index", 0.0),
        ],
    )
    def test_invalid_values_raise(self, field, value):
        """Out-of-range coefficients are rejected."""
        with pytest.raises(ValueError):
            Material(**{field: value})


class TestPatterns:
    """Tests for pattern evaluation."""

    def test_solid(self):
        """A solid pattern returns its color everywhere."""
        p = Pattern(PatternType.SOLID, color(0.2, 0.3, 0.4))
        assert pattern_at(p, point(5, -3, 2)) == color(0.2, 0.3, 0.4)

    def test_stripe_constant_in_y_and_z(self):
        """Stripes do not vary along y or z."""
        p = Pattern(PatternType.STRIPE, WHITE, BLACK)
        for pt in (point(0, 0, 0), point(0, 1, 0), point(0, 2, 0), point(0, 0, 1), point(0, 0, 2)):
            assert pattern_at(p, pt) == WHITE

    def test_stripe_alternates_in_x(self):
        """Stripes alternate at every integer x."""
        p = Pattern(PatternType.STRIPE, WHITE, BLACK)
        assert pattern_at(p, point(0, 0, 0)) == WHITE
        assert pattern_at(p, point(0.9, 0, 0)) == WHITE
        assert pattern_at(p, point(1, 0, 0)) == BLACK
        assert pattern_at(p, point(-0.1, 0, 0)) == BLACK
        assert pattern_at(p, point(-1, 0, 0)) == BLACK
        assert pattern_at(p, point(-1.1, 0, 0)) == WHITE

    def test_stripe_boundary_rounding(self):
        """A value a hair below an integer lands on the integer's stripe."""
        p = Pattern(PatternType.STRIPE, WHITE, BLACK)
        assert pattern_at(p, point(1 - 1e-9, 0, 0)) == BLACK

    def test_gradient_interpolates(self):
        """A gradient blends linearly between its colors along x."""
        p = Pattern(PatternType.GRADIENT, WHITE, BLACK)
        assert pattern_at(p, point(0, 0, 0)) == WHITE
        assert pattern_at(p, point(0.25, 0, 0)) == color(0.75, 0.75, 0.75)
        assert pattern_at(p, point(0.5, 0, 0)) == color(0.5, 0.5, 0.5)
        assert pattern_at(p, point(0.75, 0, 0)) == color(0.25, 0.25, 0.25)

    def test_ring_extends_in_x_and_z(self):
        """Rings depend on the distance from the y axis."""
        p = Pattern(PatternType.RING, WHITE, BLACK)
        assert pattern_at(p, point(0, 0, 0)) == WHITE
        assert pattern_at(p, point(1, 0, 0)) == BLACK
        assert pattern_at(p, point(0, 0, 1)) == BLACK
        assert pattern_at(p, point(0.708, 0, 0.708)) == BLACK

    @pytest.mark.parametrize("axis", [(1, 0, 0), (0, 1, 0), (0, 0, 1)])
    def test_checker_repeats_in_each_dimension(self, axis):
        """Checkers alternate along every axis."""
        p = Pattern(PatternType.CHECKER, WHITE, BLACK)
        x, y, z = axis
        assert pattern_at(p, point(0, 0, 0)) == WHITE
        assert pattern_at(p, point(0.99 * x, 0.99 * y, 0.99 * z)) == WHITE
        assert pattern_at(p, point(1.01 * x, 1.01 * y, 1.01 * z)) == BLACK

    def test_singular_pattern_transform_raises(self):
        """A non-invertible pattern transform is rejected."""
        with pytest.raises(SingularMatrixError):
            Pattern(PatternType.STRIPE, WHITE, BLACK, transform=scaling(0, 1, 1))


class TestPatternTransforms:
    """Tests for patterns evaluated on transformed shapes."""

    def test_object_transformation(self):
        """The shape transform is undone before sampling."""
        shape = Shape(Sphere(), transform=scaling(2, 2, 2))
        p = Pattern(PatternType.STRIPE, WHITE, BLACK)
        assert pattern_at_shape(p, shape, point(1.5, 0, 0)) == WHITE

    def test_pattern_transformation(self):
        """The pattern transform is undone before sampling."""
        shape = Shape(Sphere())
        p = Pattern(PatternType.STRIPE, WHITE, BLACK, transform=scaling(2, 2, 2))
        assert pattern_at_shape(p, shape, point(1.5, 0, 0)) == WHITE

    def test_both_transformations(self):
        """Shape and pattern transforms are both applied."""
        shape = Shape(Sphere(), transform=scaling(2, 2, 2))
        p = Pattern(PatternType.STRIPE, WHITE, BLACK, transform=translation(0.5, 0, 0))
        assert pattern_at_shape(p, shape, point(2.5, 0, 0)) == WHITE

    def test_surface_color_uses_pattern(self):
        """The pattern overrides the material color."""
        m = Material(pattern=Pattern(PatternType.STRIPE, WHITE, BLACK))
        assert surface_color(m, None, point(1.5, 0, 0)) == BLACK
        assert surface_color(Material(color=color(1, 0, 0)), None, point(0, 0, 0)) == color(1, 0, 0)


class TestLighting:
    """Tests for Phong lighting."""

    @pytest.fixture
    def position(self):
        return point(0, 0, 0)

    def test_eye_between_light_and_surface(self, position):
        """Full diffuse and specular when eye and light face the surface."""
        light = PointLight(point(0, 0, -10), WHITE)
        result = lighting(Material(), None, light, position, vector(0, 0, -1), vector(0, 0, -1))
        assert_color_close(result, color(1.9, 1.9, 1.9))

    def test_eye_offset_45_degrees(self, position):
        """Tilting the eye removes the specular highlight."""
        light = PointLight(point(0, 0, -10), WHITE)
        result = lighting(Material(), None, light, position, vector(0, SQRT2_2, -SQRT2_2), vector(0, 0, -1))
        assert_color_close(result, color(1.0, 1.0, 1.0))

    def test_light_offset_45_degrees(self, position):
        """Tilting the light reduces diffuse light."""
        light = PointLight(point(0, 10, -10), WHITE)
        result = lighting(Material(), None, light, position, vector(0, 0, -1), vector(0, 0, -1))
        assert_color_close(result, color(0.7364, 0.7364, 0.7364))

    def test_eye_in_path_of_reflection(self, position):
        """The highlight peaks when the eye sits on the reflection."""
        light = PointLight(point(0, 10, -10), WHITE)
        result = lighting(Material(), None, light, position, vector(0, -SQRT2_2, -SQRT2_2), vector(0, 0, -1))
        assert_color_close(result, color(1.6364, 1.6364, 1.6364))

    def test_light_behind_surface(self, position):
        """A light behind the surface leaves ambient only."""
        light = PointLight(point(0, 0, 10), WHITE)
        result = lighting(Material(), None, light, position, vector(0, 0, -1), vector(0, 0, -1))
        assert_color_close(result, color(0.1, 0.1, 0.1))

    def test_surface_in_shadow(self, position):
        """A shadowed point gets ambient only."""
        light = PointLight(point(0, 0, -10), WHITE)
        result = lighting(Material(), None, light, position, vector(0, 0, -1), vector(0, 0, -1), 0.0)
        assert_color_close(result, color(0.1, 0.1, 0.1))

    def test_partial_shadow_scales_diffuse_and_specular(self, position):
        """A shadow factor scales diffuse and specular but not ambient."""
        light = PointLight(point(0, 0, -10), WHITE)
        result = lighting(Material(), None, light, position, vector(0, 0, -1), vector(0, 0, -1), 0.5)
        assert_color_close(result, color(1.0, 1.0, 1.0))

    def test_lighting_with_pattern(self):
        """Lighting samples the pattern at the point."""
        m = Material(
            pattern=Pattern(PatternType.STRIPE, WHITE, BLACK),
            ambient=1.0,
            diffuse=0.0,
            specular=0.0,
        )
        light = PointLight(point(0, 0, -10), WHITE)
        eyev = vector(0, 0, -1)
        normalv = vector(0, 0, -1)
        assert lighting(m, None, light, point(0.9, 0, 0), eyev, normalv) == WHITE
        assert lighting(m, None, light, point(1.1, 0, 0), eyev, normalv) == BLACK

    def test_light_intensity_tints_result(self, position):
        """The light's color tints the result."""
        light = PointLight(point(0, 0, -10), color(1, 0, 0))
        m = Material(specular=0.0)
        result = lighting(m, None, light, position, vector(0, 0, -1), vector(0, 0, -1))
        assert_color_close(result, color(1.0, 0.0, 0.0))

    def test_light_position_must_be_point(self):
        """A light needs a point for its position."""
        with pytest.raises(ValueError):
            PointLight(vector(0, 0, 1), WHITE)
