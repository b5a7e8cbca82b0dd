"""Per-pixel render loop.

Each pixel (x, y) is mapped to image-plane coordinates

    half_pixel = 1 / width
    cx = (x - width / 2) * 2 / width + half_pixel
    cy = (y - height / 2) * 2 / width + half_pixel

so x spans [-1, 1] across the image, y uses the same scale, and each
sample lands on a pixel centre. The camera turns (cx, cy) into a ray and
the scene's Shader turns the ray into a colour. One sample per pixel, no
anti-aliasing.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from csgtrace.core.render import render_scene
    >>> from csgtrace.scene.reader import read_scene
    >>> scene = read_scene("examples/scenes/spheres.txt")
    >>> target = render_scene(scene)
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

import numpy as np

from csgtrace.core.render_target import RenderTarget
from csgtrace.scene.scene import Scene

logger = logging.getLogger(__name__)

# Called after every finished row with (rows_done, total_rows)
ProgressCallback = Callable[[int, int], None]


def pixel_to_plane(x: int, y: int, width: int, height: int) -> tuple[float, float]:
    """Map pixel indices to image-plane coordinates for the camera.

    Args:
        x: Column index, 0 at the left.
        y: Row index, 0 at the top.
        width: Image width in pixels.
        height: Image height in pixels.

    Returns:
        The (cx, cy) pair passed to Camera.cast_ray.
    """
    half_pixel = 1.0 / width
    cx = (x - 0.5 * width) * 2.0 / width + half_pixel
    cy = (y - 0.5 * height) * 2.0 / width + half_pixel
    return cx, cy


def render_row(scene: Scene, y: int) -> np.ndarray:
    """Compute the colours of one image row.

    Returns:
        Array of shape (width, 3), dtype float32.
    """
    settings = scene.settings
    camera = scene.camera
    if camera is None:
        raise RuntimeError("Cannot render a scene with no camera!")

    width, height = settings.render_width, settings.render_height
    row = np.empty((width, 3), dtype=np.float32)
    for x in range(width):
        cx, cy = pixel_to_plane(x, y, width, height)
        ray = camera.cast_ray(cx, cy)
        colour = scene.shader.compute_colour(ray, settings.max_ray_depth)
        row[x] = colour.as_tuple()
    return row


def render_scene(
    scene: Scene,
    target: RenderTarget | None = None,
    callback: ProgressCallback | None = None,
) -> RenderTarget:
    """Render every pixel of a scene, top row first.

    Args:
        scene: The scene to render. Its settings give the image size and
            ray depth.
        target: Frame buffer to draw into. A new grey-filled one of the
            scene's render size is created if omitted.
        callback: Called as callback(rows_done, height) after each row.

    Returns:
        The render target holding the finished image.

    Raises:
        RuntimeError: If the scene has no camera.
        ValueError: If the target size does not match the scene's settings.
    """
    if not scene.has_camera():
        raise RuntimeError("Cannot render a scene with no camera!")

    settings = scene.settings
    width, height = settings.render_width, settings.render_height
    if target is None:
        target = RenderTarget(width, height)
    elif (target.width, target.height) != (width, height):
        raise ValueError(
            f"Render target is {target.width}x{target.height} but the scene "
            f"renders at {width}x{height}"
        )

    logger.info(
        "Rendering a scene with %d objects at %dx%d, ray depth %d",
        len(scene.object_indices),
        width,
        height,
        settings.max_ray_depth,
    )
    start_time = time.perf_counter()

    for y in range(height):
        target.store_row(y, render_row(scene, y))
        if callback is not None:
            callback(y + 1, height)

    logger.info("Render finished in %.2fs", time.perf_counter() - start_time)
    return target
