"""Camera module for view and ray generation.

Components:
    camera: Pinhole camera mapping pixel centers to world-space rays

Pixel coordinates follow image convention: column 0 is the left edge and
row 0 is the top edge. The camera is positioned with a view transform
(see ``whitted.core.transforms.view_transform``).
"""

from .camera import Camera

__all__ = [
    "Camera",
]
