"""Image export utilities for rendered canvases.

Supported formats:
    - PPM (plain-text P3, 8-bit)
    - PNG (8-bit via Pillow)

Canvas colors are linear and unclamped. On export every channel is clamped
to [0, 1], optionally gamma encoded, scaled to 0..255 and rounded half up.

Example:
    >>> from whitted.core.renderer import render
    >>> from whitted.preview.export import save_png, save_ppm
    >>> canvas = render(world, camera)
    >>> save_ppm(canvas, "output.ppm")
    >>> save_png(canvas, "output.png", gamma=2.2)
"""

from __future__ import annotations

import logging
import os
from typing import Union

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

from whitted.core.canvas import Canvas

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]

# Maximum line length of a plain PPM file
PPM_LINE_LENGTH = 70
PPM_MAX_VALUE = 255


def image_to_uint8(
    image: npt.NDArray[np.floating],
    *,
    gamma: float = 1.0,
) -> npt.NDArray[np.uint8]:
    """Convert a linear float image to uint8 for display/export.

    Args:
        image: Linear image array of shape (H, W, 3).
        gamma: Gamma encoding value. 1.0 (default) leaves values linear;
            use 2.2 for sRGB-like output.

    Returns:
        8-bit image array of shape (H, W, 3) with dtype uint8.

    Raises:
        ValueError: If ``gamma`` is not positive.
    """
    if gamma <= 0.0:
        raise ValueError(f"Gamma must be positive, got {gamma}")

    clamped = np.clip(np.asarray(image, dtype=np.float64), 0.0, 1.0)
    if gamma != 1.0:
        clamped = np.power(clamped, 1.0 / gamma)

    return np.floor(clamped * PPM_MAX_VALUE + 0.5).astype(np.uint8)


def canvas_to_ppm(canvas: Canvas, *, gamma: float = 1.0) -> str:
    """Serialize a canvas as a plain (P3) PPM document.

    Each image row starts on a new line, and no line exceeds 70 characters.
    The document ends with a newline.

    Args:
        canvas: The canvas to serialize.
        gamma: Gamma encoding value (1.0 keeps values linear).

    Returns:
        The PPM text.
    """
    pixels = image_to_uint8(canvas.to_numpy(), gamma=gamma)

    lines = ["P3", f"{canvas.width} {canvas.height}", str(PPM_MAX_VALUE)]
    for row in pixels:
        line = ""
        for value in row.reshape(-1):
            token = str(int(value))
            if not line:
                line = token
            elif len(line) + 1 + len(token) > PPM_LINE_LENGTH:
                lines.append(line)
                line = token
            else:
                line = f"{line} {token}"
        lines.append(line)

    return "\n".join(lines) + "\n"


def save_ppm(canvas: Canvas, filepath: PathLike, *, gamma: float = 1.0) -> None:
    """Write a canvas to ``filepath`` as a plain PPM file."""
    with open(filepath, "w", encoding="ascii", newline="\n") as f:
        f.write(canvas_to_ppm(canvas, gamma=gamma))
    logger.info("Saved %dx%d PPM to %s", canvas.width, canvas.height, filepath)


def save_png(canvas: Canvas, filepath: PathLike, *, gamma: float = 1.0) -> None:
    """Write a canvas to ``filepath`` as an 8-bit RGB PNG.

    Args:
        canvas: The canvas to save.
        filepath: Output file path (should end in .png).
        gamma: Gamma encoding value (use 2.2 for display-ready output).
    """
    image_uint8 = image_to_uint8(canvas.to_numpy(), gamma=gamma)

    # Save using Pillow
    pil_image = PILImage.fromarray(image_uint8)
    pil_image.save(filepath)
    logger.info("Saved %dx%d PNG to %s", canvas.width, canvas.height, filepath)
