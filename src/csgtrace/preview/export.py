"""Image export for rendered images.

Images are written with Pillow, which picks the file format from the
extension (PNG, PPM, BMP, ...). Colours are quantised as int(255 * c); the
render target already holds clipped linear values, so no tone mapping or
gamma correction is applied.

Example:
    >>> from csgtrace.core.render import render_scene
    >>> from csgtrace.preview.export import save_image
    >>>
    >>> target = render_scene(scene)
    >>> save_image(target, "render.png")
"""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

if TYPE_CHECKING:
    from csgtrace.core.render_target import RenderTarget

logger = logging.getLogger(__name__)


def image_to_uint8(image: npt.NDArray[np.floating]) -> npt.NDArray[np.uint8]:
    """Convert a float image in [0, 1] to 8 bits per channel.

    Values outside [0, 1] are clipped first.

    Args:
        image: Image array of shape (H, W, 3).

    Returns:
        Array of shape (H, W, 3) with dtype uint8.

    Raises:
        ValueError: If the array is not an (H, W, 3) image.
    """
    if image.ndim != 3 or image.shape[2] != 3:
        raise ValueError(f"Expected an (H, W, 3) image, got shape {image.shape}")
    clipped = np.clip(image.astype(np.float32), 0.0, 1.0)
    return (clipped * 255).astype(np.uint8)


def save_image_array(image: npt.NDArray[np.floating], filepath: str | os.PathLike[str]) -> None:
    """Save a float (H, W, 3) image array to a file.

    The format is taken from the file extension.

    Raises:
        ValueError: If the image shape is wrong or the extension is not a
            format Pillow can write.
    """
    pil_image = PILImage.fromarray(image_to_uint8(image), mode="RGB")
    pil_image.save(os.fspath(filepath))
    logger.info("Saved %dx%d image to %s", image.shape[1], image.shape[0], filepath)


def save_image(target: RenderTarget, filepath: str | os.PathLike[str]) -> None:
    """Save the contents of a render target to a file.

    Args:
        target: The render target to save.
        filepath: Output path. The extension selects the format.

    Raises:
        ValueError: If the extension is not a format Pillow can write.
    """
    save_image_array(target.get_image_numpy(), filepath)
