"""Whitted-style recursive ray tracer.

This package renders scenes of analytic shapes with Phong shading, hard
shadows from point lights, mirror reflection and refraction through
transparent materials. Rendering is deterministic and CPU-only.

Subpackages:
    core: Tuples, matrices, transforms, rays, light transport and the renderer
    geometry: Shape primitives and intersection algorithms
    materials: Materials, patterns and Phong lighting
    scene: Lights, intersections, worlds, groups, OBJ meshes, scene manager
    camera: Pinhole camera with pixel ray generation
    preview: PPM and PNG export
"""

__version__ = "0.1.0"
