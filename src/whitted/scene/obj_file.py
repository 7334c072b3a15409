"""Wavefront OBJ mesh loading.

Only the geometric subset of the format is understood:

    v x y z          vertex position
    vn x y z         vertex normal
    f a b c ...      face; each vertex is ``v``, ``v/vt``, ``v/vt/vn`` or ``v//vn``
    g name           start a named group

Indices are 1-based. Faces with more than three vertices are split into a
fan of triangles around their first vertex. A face whose vertices all carry
normals becomes a SmoothTriangle, otherwise a flat Triangle. Every other
line (comments, texture coordinates, materials, free text) is counted in
``ObjFile.ignored_lines`` and otherwise skipped.

Example:
    >>> from whitted.scene.obj_file import parse_obj
    >>> obj = parse_obj("v 0 1 0\\nv -1 0 0\\nv 1 0 0\\nf 1 2 3\\n")
    >>> group = obj.to_group()
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Union

from whitted.core.matrix import IDENTITY, Matrix
from whitted.core.tuples import Tuple, point, vector
from whitted.geometry import Shape, SmoothTriangle, Triangle
from whitted.materials.material import DEFAULT_MATERIAL, Material
from whitted.scene.group import Group

logger = logging.getLogger(__name__)

DEFAULT_GROUP = "default"

MeshTriangle = Union[Triangle, SmoothTriangle]


@dataclass
class ObjFile:
    """Result of parsing an OBJ document.

    Attributes:
        vertices: Vertex positions, in file order (index 0 is OBJ index 1).
        normals: Vertex normals, in file order.
        groups: Triangles per group name. Faces before any ``g`` line go to
            DEFAULT_GROUP.
        ignored_lines: Number of lines that were not understood.
        skipped_faces: Number of degenerate triangles dropped.
    """

    vertices: list[Tuple] = field(default_factory=list)
    normals: list[Tuple] = field(default_factory=list)
    groups: dict[str, list[MeshTriangle]] = field(default_factory=dict)
    ignored_lines: int = 0
    skipped_faces: int = 0

    def vertex(self, index: int) -> Tuple:
        """Return the vertex with 1-based OBJ ``index``."""
        return _lookup(self.vertices, index, "vertex")

    def normal(self, index: int) -> Tuple:
        """Return the normal with 1-based OBJ ``index``."""
        return _lookup(self.normals, index, "normal")

    @property
    def triangles(self) -> list[MeshTriangle]:
        """All triangles across every group."""
        return [t for tris in self.groups.values() for t in tris]

    def to_group(self, material: Material = DEFAULT_MATERIAL, transform: Matrix = IDENTITY) -> Group:
        """Convert the mesh into a Group with one child Group per OBJ group.

        Args:
            material: Material given to every triangle.
            transform: Transform of the returned top-level group.

        Returns:
            A Group ready to be added to a scene.
        """
        root = Group(transform=transform)
        for name, tris in self.groups.items():
            child = Group(name=name)
            for tri in tris:
                child.add_child(Shape(tri, material=material))
            root.add_child(child)
        return root


def _lookup(items: list[Tuple], index: int, kind: str) -> Tuple:
    if not 1 <= index <= len(items):
        raise ValueError(f"OBJ {kind} index {index} out of range (1..{len(items)})")
    return items[index - 1]


def _parse_xyz(args: list[str], lineno: int, keyword: str) -> tuple[float, float, float]:
    if len(args) < 3:
        raise ValueError(f"Line {lineno}: '{keyword}' needs 3 coordinates, got {len(args)}")
    try:
        return float(args[0]), float(args[1]), float(args[2])
    except ValueError as exc:
        raise ValueError(f"Line {lineno}: invalid '{keyword}' coordinates {args[:3]}") from exc


def _parse_face_vertex(token: str, lineno: int) -> tuple[int, int | None]:
    # v, v/vt, v/vt/vn or v//vn
    parts = token.split("/")
    try:
        v = int(parts[0])
        vn = int(parts[2]) if len(parts) >= 3 and parts[2] else None
    except ValueError as exc:
        raise ValueError(f"Line {lineno}: invalid face vertex '{token}'") from exc
    return v, vn


def parse_obj(text: str) -> ObjFile:
    """Parse OBJ text into vertices, normals and grouped triangles.

    Args:
        text: The OBJ document.

    Returns:
        The parsed ObjFile.

    Raises:
        ValueError: If a vertex, normal or face line is malformed, or a face
            refers to a vertex or normal that does not exist.
    """
    obj = ObjFile()
    current = DEFAULT_GROUP

    for lineno, raw in enumerate(text.splitlines(), start=1):
        tokens = raw.split()
        if not tokens:
            continue
        keyword, args = tokens[0], tokens[1:]

        if keyword == "v":
            obj.vertices.append(point(*_parse_xyz(args, lineno, keyword)))
        elif keyword == "vn":
            obj.normals.append(vector(*_parse_xyz(args, lineno, keyword)))
        elif keyword == "g" and args:
            current = " ".join(args)
        elif keyword == "f":
            if len(args) < 3:
                raise ValueError(f"Line {lineno}: face needs at least 3 vertices, got {len(args)}")
            refs = [_parse_face_vertex(token, lineno) for token in args]
            points = [obj.vertex(v) for v, _ in refs]
            smooth = all(vn is not None for _, vn in refs)
            normals = [obj.normal(vn) for _, vn in refs] if smooth else []

            tris = obj.groups.setdefault(current, [])
            # Fan triangulation around the first vertex
            for i in range(1, len(points) - 1):
                try:
                    if smooth:
                        tri: MeshTriangle = SmoothTriangle(
                            points[0], points[i], points[i + 1],
                            normals[0], normals[i], normals[i + 1],
                        )
                    else:
                        tri = Triangle(points[0], points[i], points[i + 1])
                except ValueError:
                    logger.warning("Line %d: skipping degenerate triangle", lineno)
                    obj.skipped_faces += 1
                    continue
                tris.append(tri)
        else:
            obj.ignored_lines += 1

    logger.debug(
        "Parsed OBJ: %d vertices, %d normals, %d triangles in %d groups, %d ignored lines",
        len(obj.vertices),
        len(obj.normals),
        len(obj.triangles),
        len(obj.groups),
        obj.ignored_lines,
    )
    return obj


def load_obj(filepath: Union[str, os.PathLike]) -> ObjFile:
    """Read and parse an OBJ file from disk."""
    with open(filepath, encoding="utf-8") as f:
        obj = parse_obj(f.read())
    logger.info("Loaded %s (%d triangles)", filepath, len(obj.triangles))
    return obj
