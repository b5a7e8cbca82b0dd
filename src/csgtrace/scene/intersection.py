"""Scene-level nearest-hit search.

Every top-level primitive is tested against the ray; the closest hit in
front of the origin wins. There is no acceleration structure, so the cost is
linear in the number of top-level primitives.
"""

from __future__ import annotations

from collections.abc import Iterable

from csgtrace.core.ray import EPSILON, Ray
from csgtrace.geometry.hit import Hit
from csgtrace.geometry.primitive import Primitive


def intersect_nearest(ray: Ray, primitives: Iterable[Primitive]) -> Hit | None:
    """Find the closest forward hit among a set of primitives.

    Args:
        ray: The ray in world space.
        primitives: The top-level primitives to test, in scene order.

    Returns:
        The hit with the smallest distance greater than EPSILON, or None if
        nothing is hit. On an exact tie the earlier primitive's hit is kept.
    """
    nearest: Hit | None = None
    for primitive in primitives:
        for hit in primitive.intersect(ray):
            if hit.distance <= EPSILON:
                continue
            if nearest is None or hit.distance < nearest.distance:
                nearest = hit
    return nearest
