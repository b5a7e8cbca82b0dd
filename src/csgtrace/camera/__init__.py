"""Camera module for primary ray generation.

Components:
    pinhole: Camera base class and the PinholeCamera perspective model
"""

from .pinhole import Camera, PinholeCamera

__all__ = [
    "Camera",
    "PinholeCamera",
]
