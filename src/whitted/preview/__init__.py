"""Preview module for output of rendered images.

Components:
    export: PPM and PNG export of canvases (Pillow for PNG)

Example:
    >>> from whitted.preview import save_png
    >>> save_png(canvas, "output.png", gamma=2.2)
"""

from whitted.preview.export import canvas_to_ppm, image_to_uint8, save_png, save_ppm

__all__ = [
    "canvas_to_ppm",
    "image_to_uint8",
    "save_ppm",
    "save_png",
]
