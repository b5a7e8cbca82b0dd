"""Cameras for primary ray generation.

A camera sits at its local origin looking down local +z. Image-plane
coordinates (x, y) come from the render loop, scaled so that x spans
[-1, 1] across the image width and y uses the same scale; larger y values
are further down the image. The camera's AffineTransform places it in the
world, so turning or moving a camera is done exactly like turning or moving
an object.

Example:
    >>> from csgtrace.camera.pinhole import PinholeCamera
    >>> camera = PinholeCamera(focal_length=2.0)
    >>> camera.transform = camera.transform.translated(0.0, 0.0, -5.0)
    >>> ray = camera.cast_ray(0.0, 0.0)
    >>> ray.origin.tolist(), ray.direction.tolist()
    ([0.0, 0.0, -5.0], [0.0, 0.0, 2.0])
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from csgtrace.core.ray import Ray, vec3
from csgtrace.core.transform import AffineTransform


class Camera(ABC):
    """Abstract base class for cameras.

    Attributes:
        transform: Places the camera in the world.
    """

    def __init__(self, transform: AffineTransform | None = None) -> None:
        self.transform = transform if transform is not None else AffineTransform()

    @abstractmethod
    def cast_ray(self, x: float, y: float) -> Ray:
        """Generate the world-space ray through image-plane point (x, y)."""


class PinholeCamera(Camera):
    """A pinhole (perspective) camera.

    Rays leave the local origin through the point (x, y, focal_length). A
    longer focal length gives a narrower field of view: with the default
    of 1 the image width spans 90 degrees.

    Attributes:
        focal_length: Distance from the pinhole to the image plane.
    """

    def __init__(
        self,
        focal_length: float = 1.0,
        transform: AffineTransform | None = None,
    ) -> None:
        """Create a pinhole camera.

        Raises:
            ValueError: If focal_length is not positive.
        """
        if focal_length <= 0:
            raise ValueError(f"Focal length must be positive, got {focal_length}")
        super().__init__(transform)
        self.focal_length = float(focal_length)

    def __repr__(self) -> str:
        return f"PinholeCamera(focal_length={self.focal_length})"

    def cast_ray(self, x: float, y: float) -> Ray:
        local = Ray(vec3(0.0, 0.0, 0.0), vec3(x, y, self.focal_length))
        return self.transform.apply_ray(local)
