"""Scene module for scene description and ray-scene queries.

Components:
    light: Point light source
    intersection: Intersection records, hit selection, shading precomputation
    world: Immutable collection of shapes and lights
    group: Transform hierarchy used while building scenes
    obj_file: Wavefront OBJ mesh loading
    manager: Scene builder with dictionary/JSON configuration

Scenes are built with mutable helpers (SceneManager, Group) and frozen into
a World before rendering. Groups are flattened at that point, so a World
only ever holds plain shapes in world space.
"""

from .group import Group
from .intersection import (
    Computations,
    Intersection,
    hit,
    intersections,
    prepare_computations,
    schlick,
)
from .light import PointLight
from .manager import SceneConfig, SceneManager
from .obj_file import ObjFile, load_obj, parse_obj
from .world import World, default_world

__all__ = [
    # Lights
    "PointLight",
    # Intersections
    "Intersection",
    "Computations",
    "intersections",
    "hit",
    "prepare_computations",
    "schlick",
    # World
    "World",
    "default_world",
    "Group",
    # Meshes
    "ObjFile",
    "parse_obj",
    "load_obj",
    # Scene manager
    "SceneConfig",
    "SceneManager",
]
