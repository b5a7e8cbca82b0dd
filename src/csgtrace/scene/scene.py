"""Scene aggregate: camera, primitives, lights and render settings.

The Scene owns a PrimitiveArena holding every primitive, including CSG
children, plus the ordered list of arena indices that are visible at the
top level. Only top-level primitives are queried directly by the Shader;
CSG children are reached through their parent node.

Example:
    >>> from csgtrace.camera.pinhole import PinholeCamera
    >>> from csgtrace.core.transform import AffineTransform
    >>> from csgtrace.geometry.csg import CsgOperation
    >>> from csgtrace.geometry.sphere import Sphere
    >>> from csgtrace.scene.lights import PointLight
    >>> from csgtrace.scene.scene import Scene
    >>>
    >>> scene = Scene()
    >>> scene.set_camera(PinholeCamera())
    >>> a = scene.add_primitive(Sphere())
    >>> b = scene.add_primitive(Sphere(AffineTransform().translated(0.5, 0.0, 0.0)))
    >>> scene.new_csg(CsgOperation.DIFFERENCE, a, b,
    ...               transform=AffineTransform().translated(0.0, 0.0, 5.0))
    2
    >>> scene.add_light(PointLight(location=(0.0, -5.0, 0.0)))
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass

from csgtrace.camera.pinhole import Camera
from csgtrace.core.colour import BLACK, Colour
from csgtrace.core.transform import AffineTransform
from csgtrace.geometry.arena import PrimitiveArena
from csgtrace.geometry.csg import CsgOperation
from csgtrace.geometry.primitive import Primitive
from csgtrace.materials.material import DEFAULT_MATERIAL, Material
from csgtrace.scene.lights import LightSource

logger = logging.getLogger(__name__)

# =============================================================================
# Scene Defaults
# =============================================================================

DEFAULT_RAY_DEPTH = 3
DEFAULT_RENDER_WIDTH = 800
DEFAULT_RENDER_HEIGHT = 600
DEFAULT_FILENAME = "render.png"


@dataclass
class SceneSettings:
    """Rendering settings for a scene.

    Attributes:
        ambient_light: Colour of the ambient light. Default is black.
        background_colour: Colour returned by rays that hit nothing.
            Default is black.
        max_ray_depth: Number of ray levels traced per pixel. 1 means
            primary rays only, so mirrors need at least 2. 0 renders the
            background. Default is 3.
        render_width: Image width in pixels. Default is 800.
        render_height: Image height in pixels. Default is 600.
        filename: Default output image path. Default is "render.png".

    Raises:
        ValueError: If the ray depth is negative or the image size is not
            positive.
    """

    ambient_light: Colour = BLACK
    background_colour: Colour = BLACK
    max_ray_depth: int = DEFAULT_RAY_DEPTH
    render_width: int = DEFAULT_RENDER_WIDTH
    render_height: int = DEFAULT_RENDER_HEIGHT
    filename: str = DEFAULT_FILENAME

    def __post_init__(self) -> None:
        if self.max_ray_depth < 0:
            raise ValueError(f"Ray depth must be non-negative, got {self.max_ray_depth}")
        if self.render_width <= 0 or self.render_height <= 0:
            raise ValueError(
                f"Render size must be positive, got {self.render_width}x{self.render_height}"
            )


class Scene:
    """Container for everything needed to render an image.

    Attributes:
        settings: Rendering settings.
        arena: Storage for every primitive in the scene.
        lights: Lights in the order they were added.
        shader: Shading pipeline bound to this scene.
    """

    def __init__(self, settings: SceneSettings | None = None) -> None:
        # Imported here to avoid a circular import with the integrator
        from csgtrace.core.integrator import Shader

        self.settings = settings if settings is not None else SceneSettings()
        self.arena = PrimitiveArena()
        self.lights: list[LightSource] = []
        self._roots: list[int] = []
        self._camera: Camera | None = None
        self.shader = Shader(self)

    def __repr__(self) -> str:
        return (
            f"Scene(objects={len(self._roots)}, primitives={len(self.arena)}, "
            f"lights={len(self.lights)}, camera={self._camera!r})"
        )

    # =========================================================================
    # Camera
    # =========================================================================

    @property
    def camera(self) -> Camera | None:
        return self._camera

    def set_camera(self, camera: Camera) -> None:
        """Set the scene's camera, replacing any previous one."""
        if self._camera is not None:
            logger.info("Replacing camera %r with %r", self._camera, camera)
        self._camera = camera

    def has_camera(self) -> bool:
        return self._camera is not None

    # =========================================================================
    # Primitives
    # =========================================================================

    def add_primitive(self, primitive: Primitive) -> int:
        """Store a primitive without making it visible.

        Use this for CSG operands; the returned index is passed to
        new_csg().
        """
        return self.arena.add(primitive)

    def new_object(self, primitive: Primitive) -> int:
        """Store a primitive and add it to the top level of the scene.

        Returns:
            The primitive's arena index.
        """
        index = self.arena.add(primitive)
        self._roots.append(index)
        return index

    def new_csg(
        self,
        operation: CsgOperation,
        left: int,
        right: int,
        *,
        transform: AffineTransform | None = None,
        material: Material = DEFAULT_MATERIAL,
    ) -> int:
        """Combine two stored primitives and add the result to the top level.

        Raises:
            IndexError: If either index is not in the arena.
        """
        index = self.arena.combine(
            operation, left, right, transform=transform, material=material
        )
        self._roots.append(index)
        return index

    def show(self, index: int) -> None:
        """Add an already stored primitive to the top level.

        Raises:
            IndexError: If the index is not in the arena.
        """
        self.arena.check_index(index)
        self._roots.append(index)

    @property
    def object_indices(self) -> tuple[int, ...]:
        """Arena indices of the top-level primitives, in scene order."""
        return tuple(self._roots)

    def top_level_primitives(self) -> Iterator[Primitive]:
        """Iterate over the top-level primitives in scene order."""
        for index in self._roots:
            yield self.arena[index]

    # =========================================================================
    # Lights
    # =========================================================================

    def add_light(self, light: LightSource) -> None:
        self.lights.append(light)
