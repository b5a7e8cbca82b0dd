"""Preview module for output and visualization.

Components:
    export: Pillow image export (format from the file extension)
    display: Matplotlib static preview of a finished render
    interactive: Taichi GGUI window that refreshes while rendering

Example:
    >>> from csgtrace.preview import save_image, show_preview
    >>> save_image(target, "render.png")
    >>> show_preview(target.get_image_numpy())
"""

from csgtrace.preview.display import show_preview
from csgtrace.preview.export import image_to_uint8, save_image, save_image_array
from csgtrace.preview.interactive import RenderWindow

__all__ = [
    # Live window
    "RenderWindow",
    # Display functions
    "show_preview",
    # Export functions
    "save_image",
    "save_image_array",
    "image_to_uint8",
]
