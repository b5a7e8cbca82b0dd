"""Scene module for scene assembly and ray-scene queries.

Components:
    scene: Scene aggregate (camera, primitive arena, lights) and
        SceneSettings
    lights: LightSource base class and PointLight
    intersection: Nearest-hit search over top-level primitives
    reader: Plain-text scene description reader
"""

from .intersection import intersect_nearest
from .lights import LightSource, PointLight
from .scene import (
    DEFAULT_FILENAME,
    DEFAULT_RAY_DEPTH,
    DEFAULT_RENDER_HEIGHT,
    DEFAULT_RENDER_WIDTH,
    Scene,
    SceneSettings,
)
from .reader import SceneReader, SceneReadError, read_scene

__all__ = [
    # Scene aggregate
    "Scene",
    "SceneSettings",
    "DEFAULT_FILENAME",
    "DEFAULT_RAY_DEPTH",
    "DEFAULT_RENDER_WIDTH",
    "DEFAULT_RENDER_HEIGHT",
    # Lights
    "LightSource",
    "PointLight",
    # Queries
    "intersect_nearest",
    # Reader
    "SceneReader",
    "SceneReadError",
    "read_scene",
]
