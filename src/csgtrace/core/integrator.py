"""Whitted-style shading for the ray tracer.

The Shader answers two questions for a Scene: what is the nearest surface
along a ray, and what colour does the ray carry back to its origin. The
colour is built from

    - ambient light times the material's ambient colour,
    - for each point light that is not blocked, a Lambertian diffuse term
      max(0, n.l) and a Phong specular term max(0, r.l)^exponent, both
      scaled by the light's colour and intensity at the hit point,
    - for mirrored materials, the colour seen along the reflected ray,
      traced with one less level of depth,

and finally clipped to [0, 1].

Example:
    >>> from csgtrace.camera.pinhole import PinholeCamera
    >>> from csgtrace.scene.scene import Scene
    >>> scene = Scene()
    >>> scene.set_camera(PinholeCamera())
    >>> ray = scene.camera.cast_ray(0.0, 0.0)
    >>> scene.shader.compute_colour(ray, scene.settings.max_ray_depth)
    Colour(red=0.0, green=0.0, blue=0.0)
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from csgtrace.core.colour import Colour
from csgtrace.core.ray import EPSILON, Ray, Vec3, dot, length, normalize, reflect
from csgtrace.geometry.hit import Hit
from csgtrace.scene.intersection import intersect_nearest

if TYPE_CHECKING:
    from csgtrace.scene.scene import Scene


class Shader:
    """Nearest-hit search and local illumination for a scene.

    The shader holds a reference to its scene and reads the scene's
    primitives, lights and settings on every call; it keeps no state of its
    own.
    """

    def __init__(self, scene: Scene) -> None:
        self._scene = scene

    def intersect_nearest(self, ray: Ray) -> Hit | None:
        """Nearest forward hit among the scene's top-level primitives.

        Returns:
            The closest hit with distance greater than EPSILON, or None.
        """
        return intersect_nearest(ray, self._scene.top_level_primitives())

    def compute_colour(self, ray: Ray, depth: int) -> Colour:
        """Colour carried back along a ray.

        Args:
            ray: The ray in world space. Need not be normalized.
            depth: Remaining recursion depth. Zero returns the background.

        Returns:
            The clipped colour, or the background colour unchanged when the
            depth is exhausted or nothing is hit.
        """
        settings = self._scene.settings
        if depth <= 0:
            return settings.background_colour

        hit = self.intersect_nearest(ray)
        if hit is None:
            return settings.background_colour

        material = hit.material
        normal = hit.normal
        view = normalize(ray.direction)
        reflected = reflect(view, normal)

        colour = settings.ambient_light * material.ambient

        for light in self._scene.lights:
            to_light = light.location - hit.point
            light_distance = length(to_light)
            if light_distance < EPSILON:
                continue
            light_dir = to_light / light_distance

            if not self._is_lit(hit, light_dir, light_distance):
                continue

            strength = light.colour * light.intensity_at(hit.point)
            diffuse = max(0.0, dot(normal, light_dir))
            colour = colour + strength * material.diffuse * diffuse

            if not material.specular.is_black():
                specular = math.pow(max(0.0, dot(reflected, light_dir)), material.specular_exponent)
                colour = colour + strength * material.specular * specular

        if material.is_reflective and depth > 1:
            mirror_ray = Ray(hit.point, reflected)
            colour = colour + material.mirror * self.compute_colour(mirror_ray, depth - 1)

        return colour.clipped()

    def _is_lit(self, hit: Hit, light_dir: Vec3, light_distance: float) -> bool:
        """Whether nothing blocks the segment from the hit point to a light."""
        blocker = self.intersect_nearest(Ray(hit.point, light_dir))
        return blocker is None or blocker.distance >= light_distance
