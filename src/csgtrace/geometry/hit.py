"""Ray-surface intersection record."""

from __future__ import annotations

from dataclasses import dataclass

from csgtrace.core.ray import Vec3
from csgtrace.materials.material import Material


@dataclass(eq=False)
class Hit:
    """Record of a ray-surface intersection.

    Attributes:
        point: The intersection point in world space.
        normal: The unit surface normal in world space, always facing the
            incoming ray.
        material: The material of the surface that was hit.
        distance: Signed distance along the ray from its origin to the
            point. Only values greater than EPSILON are forward hits.
    """

    point: Vec3
    normal: Vec3
    material: Material
    distance: float

    def __lt__(self, other: Hit) -> bool:
        return self.distance < other.distance
