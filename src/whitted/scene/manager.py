"""Scene manager for assembling worlds from code or configuration.

This module provides a mutable builder on top of the immutable World. The
SceneManager collects shapes, groups, lights and a camera, and ``build``
freezes them into a World (flattening groups along the way).

Scenes can also be described as plain dictionaries, which makes them easy to
store as JSON:

    {
        "lights": [{"position": [-10, 10, -10], "intensity": [1, 1, 1]}],
        "shapes": [
            {
                "type": "sphere",
                "transform": [{"scale": [0.5, 0.5, 0.5]}, {"translate": [0, 1, 0]}],
                "material": {"color": [1, 0.2, 0.2], "reflective": 0.3},
            },
            {
                "type": "plane",
                "material": {
                    "pattern": {"type": "checker", "a": [1, 1, 1], "b": [0, 0, 0]},
                },
            },
        ],
        "camera": {
            "hsize": 320, "vsize": 240, "field_of_view": 1.0472,
            "from": [0, 1.5, -5], "to": [0, 1, 0], "up": [0, 1, 0],
        },
    }

Transform steps are applied in the order listed. Supported steps are
``translate``, ``scale``, ``rotate_x``, ``rotate_y``, ``rotate_z``,
``shear`` (six values) and ``matrix`` (4x4 rows, as written by ``to_dict``).
Groups are shapes of type ``group`` with a ``children`` list.

Example:
    >>> from whitted.scene.manager import SceneManager
    >>> scene = SceneManager()
    >>> scene.add_light((-10, 10, -10))
    >>> scene.add_shape(Shape(Sphere()))
    >>> world = scene.build()
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from whitted.camera.camera import Camera
from whitted.core.matrix import IDENTITY, Matrix
from whitted.core.transforms import (
    chain,
    rotation_x,
    rotation_y,
    rotation_z,
    scaling,
    shearing,
    translation,
    view_transform,
)
from whitted.core.tuples import WHITE, Color, point, vector
from whitted.geometry import Cone, Cube, Cylinder, Plane, Shape, SmoothTriangle, Sphere, Triangle
from whitted.materials.material import DEFAULT_MATERIAL, Material
from whitted.materials.pattern import Pattern, PatternType
from whitted.scene.group import Group
from whitted.scene.light import PointLight
from whitted.scene.world import World

logger = logging.getLogger(__name__)

# =============================================================================
# Config <-> Object Conversion
# =============================================================================

_GEOMETRY_NAMES: dict[type, str] = {
    Sphere: "sphere",
    Plane: "plane",
    Cube: "cube",
    Cylinder: "cylinder",
    Cone: "cone",
    Triangle: "triangle",
    SmoothTriangle: "smooth_triangle",
}

_MATERIAL_SCALARS = (
    "ambient",
    "diffuse",
    "specular",
    "shininess",
    "reflective",
    "transparency",
    "refractive_index",
)


def _xyz(values: Sequence[float], what: str) -> tuple[float, float, float]:
    if len(values) != 3:
        raise ValueError(f"{what} needs 3 values, got {len(values)}")
    return float(values[0]), float(values[1]), float(values[2])


def _color(values: Sequence[float]) -> Color:
    return Color(*_xyz(values, "Color"))


def transform_from_steps(steps: Sequence[dict[str, Any]]) -> Matrix:
    """Build a matrix from transform steps, applied in listed order.

    Raises:
        ValueError: If a step is not a single known operation.
    """
    matrices: list[Matrix] = []
    for step in steps:
        if len(step) != 1:
            raise ValueError(f"Transform step must have exactly one key, got {sorted(step)}")
        op, args = next(iter(step.items()))
        if op == "translate":
            matrices.append(translation(*_xyz(args, "translate")))
        elif op == "scale":
            matrices.append(scaling(*_xyz(args, "scale")))
        elif op == "rotate_x":
            matrices.append(rotation_x(float(args)))
        elif op == "rotate_y":
            matrices.append(rotation_y(float(args)))
        elif op == "rotate_z":
            matrices.append(rotation_z(float(args)))
        elif op == "shear":
            if len(args) != 6:
                raise ValueError(f"shear needs 6 values, got {len(args)}")
            matrices.append(shearing(*(float(a) for a in args)))
        elif op == "matrix":
            matrices.append(Matrix(args))
        else:
            raise ValueError(f"Unknown transform step: {op}")
    return chain(*matrices) if matrices else IDENTITY


def _transform_to_steps(matrix: Matrix) -> list[dict[str, Any]]:
    if matrix == IDENTITY:
        return []
    return [{"matrix": [list(row) for row in matrix.rows]}]


def pattern_from_dict(data: dict[str, Any]) -> Pattern:
    """Create a Pattern from its config dictionary.

    Raises:
        ValueError: If the pattern type is unknown.
    """
    kind_name = str(data.get("type", "")).upper()
    try:
        kind = PatternType[kind_name]
    except KeyError:
        raise ValueError(f"Unknown pattern type: {data.get('type')}") from None
    return Pattern(
        kind,
        _color(data.get("a", [1.0, 1.0, 1.0])),
        _color(data.get("b", [0.0, 0.0, 0.0])),
        transform_from_steps(data.get("transform", [])),
    )


def pattern_to_dict(pattern: Pattern) -> dict[str, Any]:
    return {
        "type": pattern.kind.name.lower(),
        "a": list(pattern.a),
        "b": list(pattern.b),
        "transform": _transform_to_steps(pattern.transform),
    }


def material_from_dict(data: dict[str, Any]) -> Material:
    """Create a Material from its config dictionary; missing keys keep defaults."""
    params: dict[str, Any] = {name: float(data[name]) for name in _MATERIAL_SCALARS if name in data}
    if "color" in data:
        params["color"] = _color(data["color"])
    if data.get("pattern") is not None:
        params["pattern"] = pattern_from_dict(data["pattern"])
    return Material(**params)


def material_to_dict(material: Material) -> dict[str, Any]:
    data: dict[str, Any] = {"color": list(material.color)}
    for name in _MATERIAL_SCALARS:
        data[name] = getattr(material, name)
    if material.pattern is not None:
        data["pattern"] = pattern_to_dict(material.pattern)
    return data


def _geometry_from_dict(kind: str, data: dict[str, Any]):
    if kind == "sphere":
        return Sphere()
    if kind == "plane":
        return Plane()
    if kind == "cube":
        return Cube()
    if kind in ("cylinder", "cone"):
        cls = Cylinder if kind == "cylinder" else Cone
        return cls(
            minimum=float(data.get("minimum", -math.inf)),
            maximum=float(data.get("maximum", math.inf)),
            closed=bool(data.get("closed", False)),
        )
    if kind in ("triangle", "smooth_triangle"):
        try:
            vertices = [point(*_xyz(data[name], name)) for name in ("p1", "p2", "p3")]
            if kind == "triangle":
                return Triangle(*vertices)
            normals = [vector(*_xyz(data[name], name)) for name in ("n1", "n2", "n3")]
        except KeyError as exc:
            raise ValueError(f"{kind} config is missing {exc.args[0]!r}") from None
        return SmoothTriangle(*vertices, *normals)
    raise ValueError(f"Unknown shape type: {kind}")


def shape_from_dict(data: dict[str, Any]) -> Shape | Group:
    """Create a Shape (or a Group, for type ``group``) from a config dictionary.

    Raises:
        ValueError: If the shape type or a transform step is unknown.
    """
    kind = str(data.get("type", "")).lower()
    transform = transform_from_steps(data.get("transform", []))

    if kind == "group":
        group = Group(transform=transform, name=data.get("name"))
        for child in data.get("children", []):
            group.add_child(shape_from_dict(child))
        return group

    geometry = _geometry_from_dict(kind, data)
    material = material_from_dict(data["material"]) if "material" in data else DEFAULT_MATERIAL
    return Shape(geometry, transform=transform, material=material)


def shape_to_dict(obj: Shape | Group) -> dict[str, Any]:
    if isinstance(obj, Group):
        data: dict[str, Any] = {
            "type": "group",
            "transform": _transform_to_steps(obj.transform),
            "children": [shape_to_dict(child) for child in obj.children],
        }
        if obj.name is not None:
            data["name"] = obj.name
        return data

    geometry = obj.geometry
    data = {
        "type": _GEOMETRY_NAMES[type(geometry)],
        "transform": _transform_to_steps(obj.transform),
        "material": material_to_dict(obj.material),
    }
    if isinstance(geometry, (Cylinder, Cone)):
        data.update(minimum=geometry.minimum, maximum=geometry.maximum, closed=geometry.closed)
    elif isinstance(geometry, Triangle):
        data.update(p1=list(geometry.p1)[:3], p2=list(geometry.p2)[:3], p3=list(geometry.p3)[:3])
    elif isinstance(geometry, SmoothTriangle):
        for name in ("p1", "p2", "p3", "n1", "n2", "n3"):
            data[name] = list(getattr(geometry, name))[:3]
    return data


def camera_from_dict(data: dict[str, Any]) -> Camera:
    """Create a Camera from its config dictionary.

    The camera is placed either with ``from``/``to``/``up`` (a view
    transform) or with explicit ``transform`` steps.
    """
    if "from" in data:
        transform = view_transform(
            point(*_xyz(data["from"], "from")),
            point(*_xyz(data.get("to", [0.0, 0.0, 0.0]), "to")),
            vector(*_xyz(data.get("up", [0.0, 1.0, 0.0]), "up")),
        )
    else:
        transform = transform_from_steps(data.get("transform", []))
    return Camera(
        hsize=int(data.get("hsize", 100)),
        vsize=int(data.get("vsize", 100)),
        field_of_view=float(data.get("field_of_view", math.pi / 3.0)),
        transform=transform,
    )


def camera_to_dict(camera: Camera) -> dict[str, Any]:
    return {
        "hsize": camera.hsize,
        "vsize": camera.vsize,
        "field_of_view": camera.field_of_view,
        "transform": _transform_to_steps(camera.transform),
    }


# =============================================================================
# Scene Manager
# =============================================================================


@dataclass
class SceneConfig:
    """Configuration for scene serialization.

    Attributes:
        lights: List of light configurations.
        shapes: List of shape and group configurations.
        camera: Camera configuration, if a camera is set.
    """

    lights: list[dict[str, Any]] = field(default_factory=list)
    shapes: list[dict[str, Any]] = field(default_factory=list)
    camera: dict[str, Any] | None = None


class SceneManager:
    """Mutable scene builder that produces immutable Worlds.

    Attributes:
        objects: Shapes and groups, in the order they were added.
        lights: Point lights, in the order they were added.
        camera: The scene camera, or None if not set.

    Example:
        >>> scene = SceneManager()
        >>> scene.add_light((-10, 10, -10))
        >>> scene.add_shape(Shape(Plane(), material=Material(reflective=0.5)))
        >>> scene.set_camera(Camera(320, 240, math.pi / 3))
        >>> world = scene.build()
    """

    def __init__(self) -> None:
        """Initialize an empty scene."""
        self.objects: list[Shape | Group] = []
        self.lights: list[PointLight] = []
        self.camera: Camera | None = None

    def clear(self) -> None:
        """Remove all shapes, groups, lights and the camera."""
        self.objects.clear()
        self.lights.clear()
        self.camera = None

    # =========================================================================
    # Scene Construction
    # =========================================================================

    def add_light(
        self,
        position: Sequence[float],
        intensity: Sequence[float] | Color = WHITE,
    ) -> PointLight:
        """Add a point light.

        Args:
            position: Light position (x, y, z).
            intensity: Light color, as a Color or (r, g, b).

        Returns:
            The new PointLight.
        """
        if not isinstance(intensity, Color):
            intensity = _color(intensity)
        light = PointLight(point(*_xyz(position, "Light position")), intensity)
        self.lights.append(light)
        return light

    def add_shape(self, shape: Shape) -> Shape:
        """Add a shape to the scene.

        Raises:
            TypeError: If ``shape`` is not a Shape.
        """
        if not isinstance(shape, Shape):
            raise TypeError(f"Expected a Shape, got {type(shape).__name__}")
        self.objects.append(shape)
        return shape

    def add_group(self, group: Group) -> Group:
        """Add a group; it is flattened when the world is built.

        Raises:
            TypeError: If ``group`` is not a Group.
        """
        if not isinstance(group, Group):
            raise TypeError(f"Expected a Group, got {type(group).__name__}")
        self.objects.append(group)
        return group

    def set_camera(self, camera: Camera) -> None:
        self.camera = camera

    def get_shape_count(self) -> int:
        """Number of leaf shapes, counting every shape inside groups."""
        return sum(len(o.flatten()) if isinstance(o, Group) else 1 for o in self.objects)

    def get_light_count(self) -> int:
        return len(self.lights)

    def build(self) -> World:
        """Freeze the current scene into a World."""
        world = World.from_objects(self.objects, self.lights)
        logger.info("Built world with %d shapes and %d lights", len(world.shapes), len(world.lights))
        if not world.lights:
            logger.warning("World has no lights; only the background will be visible")
        return world

    # =========================================================================
    # Scene Serialization
    # =========================================================================

    def to_config(self) -> SceneConfig:
        """Export the scene to a configuration object."""
        return SceneConfig(
            lights=[
                {"position": list(light.position)[:3], "intensity": list(light.intensity)}
                for light in self.lights
            ],
            shapes=[shape_to_dict(obj) for obj in self.objects],
            camera=camera_to_dict(self.camera) if self.camera is not None else None,
        )

    def from_config(self, config: SceneConfig) -> None:
        """Load a scene from a configuration object.

        Clears the current scene and loads the configuration.

        Raises:
            ValueError: If the configuration contains invalid data.
        """
        self.clear()
        for light_config in config.lights:
            self.add_light(
                light_config.get("position", [0.0, 0.0, 0.0]),
                light_config.get("intensity", [1.0, 1.0, 1.0]),
            )
        for shape_config in config.shapes:
            self.objects.append(shape_from_dict(shape_config))
        if config.camera is not None:
            self.camera = camera_from_dict(config.camera)
        logger.debug(
            "Loaded scene config: %d objects, %d lights, camera=%s",
            len(self.objects),
            len(self.lights),
            self.camera is not None,
        )

    def to_dict(self) -> dict[str, Any]:
        """Export the scene to a dictionary (for JSON serialization)."""
        config = self.to_config()
        data: dict[str, Any] = {"lights": config.lights, "shapes": config.shapes}
        if config.camera is not None:
            data["camera"] = config.camera
        return data

    def from_dict(self, data: dict[str, Any]) -> None:
        """Load a scene from a dictionary.

        Args:
            data: Dictionary with 'lights', 'shapes' and optional 'camera' keys.
        """
        config = SceneConfig(
            lights=data.get("lights", []),
            shapes=data.get("shapes", []),
            camera=data.get("camera"),
        )
        self.from_config(config)
