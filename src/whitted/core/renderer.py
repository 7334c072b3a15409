"""Row-by-row renderer producing a Canvas.

This module drives the camera and the integrator over every pixel of the
image. It supports:
- A one-call ``render(world, camera)`` function
- A Renderer object with progress callbacks after each row
- Generator-based rendering that yields progress per row
- Cooperative cancellation checked between pixels

Pixels are visited in row-major order (top row first, left to right). The
World and Camera are only read; the Canvas is the only thing written.

Example:
    >>> from whitted.core.renderer import Renderer
    >>> renderer = Renderer(world, camera)
    >>> canvas = renderer.render(callback=lambda done, total: print(f"{done}/{total}"))
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Generator

from whitted.camera.camera import Camera
from whitted.core.canvas import Canvas
from whitted.core.integrator import DEFAULT_RENDER_CONFIG, RenderConfig, color_at
from whitted.scene.world import World

logger = logging.getLogger(__name__)

# Type alias for progress callback
# Callback receives (rows_done, total_rows)
ProgressCallback = Callable[[int, int], None]


class RenderCancelledError(RuntimeError):
    """Raised when a render is stopped with ``Renderer.cancel()``."""


class Renderer:
    """Renders a World through a Camera into a Canvas.

    The renderer owns the output canvas, which is recreated at the start of
    every render. A render can be stopped from a callback (or another
    thread) with ``cancel()``; the running render raises
    RenderCancelledError at the next pixel.

    Attributes:
        world: The scene to render.
        camera: The camera to render through.
        config: Render settings (bounce budget, Schlick blending, background).
    """

    def __init__(
        self,
        world: World,
        camera: Camera,
        config: RenderConfig = DEFAULT_RENDER_CONFIG,
    ) -> None:
        self.world = world
        self.camera = camera
        self.config = config
        self._canvas = Canvas(camera.hsize, camera.vsize)
        self._cancelled = False

    @property
    def canvas(self) -> Canvas:
        """The canvas of the current or most recent render."""
        return self._canvas

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        """Ask the running render to stop before its next pixel.

        The flag is cleared when a render starts, so a cancel requested
        before ``render()`` (or before the first ``next()`` on
        ``render_rows()``) has no effect on that render.
        """
        self._cancelled = True

    def render_rows(self) -> Generator[tuple[int, int], None, None]:
        """Render the image, yielding progress after each completed row.

        Yields:
            Tuple of (rows_done, total_rows).

        Raises:
            RenderCancelledError: If ``cancel()`` was called during the render.

        Example:
            >>> for done, total in renderer.render_rows():
            ...     if user_pressed_escape():
            ...         renderer.cancel()
        """
        camera = self.camera
        world = self.world
        config = self.config
        self._canvas = Canvas(camera.hsize, camera.vsize)
        self._cancelled = False

        logger.info(
            "Rendering %dx%d image (%d shapes, %d lights, max_bounces=%d)",
            camera.hsize,
            camera.vsize,
            len(world.shapes),
            len(world.lights),
            config.max_bounces,
        )
        start = time.perf_counter()

        for y in range(camera.vsize):
            for x in range(camera.hsize):
                if self._cancelled:
                    logger.info("Render cancelled at pixel (%d, %d)", x, y)
                    raise RenderCancelledError(f"Render cancelled at pixel ({x}, {y})")
                ray = camera.ray_for_pixel(x, y)
                self._canvas.write_pixel(x, y, color_at(world, ray, config.max_bounces, config))
            yield (y + 1, camera.vsize)

        logger.info("Render finished in %.2fs", time.perf_counter() - start)

    def render(self, callback: ProgressCallback | None = None) -> Canvas:
        """Render the whole image.

        Args:
            callback: Optional function called after each row with
                (rows_done, total_rows).

        Returns:
            The finished canvas.

        Raises:
            RenderCancelledError: If ``cancel()`` was called during the render.
        """
        for done, total in self.render_rows():
            if callback is not None:
                callback(done, total)
        return self._canvas

    def __repr__(self) -> str:
        return (
            f"Renderer(width={self.camera.hsize}, height={self.camera.vsize}, "
            f"max_bounces={self.config.max_bounces})"
        )


def render(
    world: World,
    camera: Camera,
    config: RenderConfig = DEFAULT_RENDER_CONFIG,
) -> Canvas:
    """Render ``world`` through ``camera`` and return the canvas."""
    return Renderer(world, camera, config).render()
