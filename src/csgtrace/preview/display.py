"""Matplotlib-based preview of finished renders.

Example:
    >>> from csgtrace.preview.display import show_preview
    >>> show_preview(target.get_image_numpy(), title="spheres.txt")
"""

from __future__ import annotations

import numpy as np
import numpy.typing as npt


def show_preview(
    image: npt.NDArray[np.floating],
    *,
    title: str | None = None,
    figsize: tuple[float, float] = (8, 6),
    block: bool = True,
) -> None:
    """Display a rendered image as a Matplotlib figure.

    Args:
        image: Image array of shape (H, W, 3) with values in [0, 1], row 0
            at the top.
        title: Figure title (default shows the image size).
        figsize: Figure size in inches (width, height).
        block: Whether to block execution until the figure is closed.

    Raises:
        ValueError: If the array is not an (H, W, 3) image.
    """
    import matplotlib.pyplot as plt

    if image.ndim != 3 or image.shape[2] != 3:
        raise ValueError(f"Expected an (H, W, 3) image, got shape {image.shape}")

    fig, ax = plt.subplots(1, 1, figsize=figsize)

    # imshow puts row 0 at the top, matching the render target
    ax.imshow(np.clip(image, 0.0, 1.0))
    ax.axis("off")

    if title is None:
        title = f"Render Preview - {image.shape[1]}x{image.shape[0]}"
    ax.set_title(title)

    plt.tight_layout()
    plt.show(block=block)
