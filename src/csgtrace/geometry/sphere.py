"""Sphere primitive.

The sphere is the unit sphere centred on its local origin. Position, radius
and squash/stretch all come from the primitive's transform, so an ellipsoid
is just a sphere with a non-uniform scale.

In the local frame the ray o + t d, with d normalized, meets |p|^2 = 1 where

    a = d.d = 1,  b = 2 d.o,  c = o.o - 1

Example:
    >>> from csgtrace.core.ray import Ray, vec3
    >>> from csgtrace.core.transform import AffineTransform
    >>> from csgtrace.geometry.sphere import Sphere
    >>> sphere = Sphere(AffineTransform().translated(0.0, 0.0, 5.0))
    >>> hits = sphere.intersect(Ray(vec3(0, 0, 0), vec3(0, 0, 1)))
    >>> [round(h.distance, 6) for h in hits]
    [4.0, 6.0]
"""

from __future__ import annotations

from csgtrace.core.ray import Ray, dot
from csgtrace.geometry.hit import Hit
from csgtrace.geometry.primitive import Primitive, solve_quadratic


class Sphere(Primitive):
    """A unit sphere at the local origin, placed by its transform."""

    def intersect(self, ray: Ray) -> list[Hit]:
        """Intersect a ray with the sphere.

        Args:
            ray: The ray in the parent frame.

        Returns:
            Zero, one (tangent) or two hits, nearest first. Roots behind the
            ray origin are dropped.
        """
        o, d = self._local_frame_ray(ray)

        b = 2.0 * dot(d, o)
        c = dot(o, o) - 1.0

        hits = []
        for t in solve_quadratic(1.0, b, c):
            if t <= 0.0:
                continue
            p = o + t * d
            # Gradient of |p|^2 - 1 is the point itself
            hits.append(self._world_hit(ray, p, p, t))
        return hits
