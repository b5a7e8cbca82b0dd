"""Base class for ray-intersectable primitives.

Every primitive is defined in its own local frame (the unit sphere at the
origin, the unit cone along +z, ...) and placed in its parent frame by an
AffineTransform. intersect() receives a ray in the parent frame, maps it to
the local frame, solves there, and maps the resulting hits back.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod

from csgtrace.core.ray import EPSILON, Ray, Vec3, dot, length, normalize, sign
from csgtrace.core.transform import AffineTransform
from csgtrace.geometry.hit import Hit
from csgtrace.materials.material import DEFAULT_MATERIAL, Material


class Primitive(ABC):
    """Abstract base class for everything a ray can hit.

    Attributes:
        transform: Places the primitive's local frame in its parent frame.
        material: Surface material copied onto every hit.
    """

    def __init__(
        self,
        transform: AffineTransform | None = None,
        material: Material = DEFAULT_MATERIAL,
    ) -> None:
        self.transform = transform if transform is not None else AffineTransform()
        self.material = material

    @abstractmethod
    def intersect(self, ray: Ray) -> list[Hit]:
        """Find every point where the ray crosses this primitive's surface.

        Args:
            ray: The ray, expressed in the primitive's parent frame.

        Returns:
            Hits in front of the ray origin. May be empty.
        """

    def __repr__(self) -> str:
        return f"{type(self).__name__}(material={self.material!r})"

    def _local_frame_ray(self, ray: Ray) -> tuple[Vec3, Vec3]:
        """Map a ray into the local frame as (origin, unit direction).

        Roots found along the unit direction are local lengths; they have
        the same sign as the parameter along the original ray.
        """
        local = self.transform.apply_inverse_ray(ray)
        return local.origin, local.direction / length(local.direction)

    def _world_hit(
        self,
        ray: Ray,
        local_point: Vec3,
        local_normal: Vec3,
        t: float,
        material: Material | None = None,
    ) -> Hit:
        """Map a local-frame intersection back into the ray's frame.

        The normal is mapped with the inverse transpose, normalized and
        flipped to face the incoming ray. The distance is measured in the
        ray's frame and carries the sign of t, however small t is.
        """
        point = self.transform.apply_point(local_point)
        normal = normalize(self.transform.apply_normal(local_normal))
        if dot(normal, ray.direction) > 0.0:
            normal = -normal
        distance = math.copysign(length(point - ray.origin), t)
        return Hit(
            point=point,
            normal=normal,
            material=self.material if material is None else material,
            distance=distance,
        )


def solve_quadratic(a: float, b: float, c: float, *, allow_linear: bool = False) -> list[float]:
    """Solve a t^2 + b t + c = 0 with the standard quadratic formula.

    The coefficients must come from a ray whose local direction has been
    normalized, so t is a length in the primitive's own frame and |a| is at
    most 1. The EPSILON tolerances below are therefore relative to the
    direction and do not depend on the caller's direction length or on how
    far the primitive is scaled.

    A discriminant within EPSILON of zero is treated as a single tangent
    root. With allow_linear set, |a| < EPSILON means the ray runs parallel
    to the surface and the equation is solved as the linear b t + c = 0.

    Returns:
        The real roots in ascending order (0, 1 or 2 of them).
    """
    if abs(a) < EPSILON:
        if not allow_linear or abs(b) < EPSILON:
            return []
        return [-c / b]

    discriminant = b * b - 4.0 * a * c
    kind = sign(discriminant)
    if kind < 0:
        return []
    if kind == 0:
        return [-b / (2.0 * a)]

    root = math.sqrt(discriminant)
    t0 = (-b - root) / (2.0 * a)
    t1 = (-b + root) / (2.0 * a)
    return [t0, t1] if t0 <= t1 else [t1, t0]
