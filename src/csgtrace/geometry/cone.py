"""Cone primitive.

The cone has its apex at the local origin and opens along +z to a rim of
radius 1 at z = 1, where it is closed by a flat circular cap. It is a
closed solid, so CSG parity counting works on it.

Curved surface, x^2 + y^2 = z^2 with 0 <= z <= 1, for a normalized local
direction d:

    a = dx^2 + dy^2 - dz^2
    b = 2 (ox dx + oy dy - oz dz)
    c = ox^2 + oy^2 - oz^2

When a vanishes (the ray runs parallel to the surface) the equation drops
to the linear b t + c = 0. The cap is the disc x^2 + y^2 <= 1 on z = 1.
"""

from __future__ import annotations

import numpy as np

from csgtrace.core.ray import EPSILON, Ray, length, vec3
from csgtrace.geometry.hit import Hit
from csgtrace.geometry.primitive import Primitive, solve_quadratic

# Local-frame normals where the surface gradient is not usable
_APEX_NORMAL = vec3(0.0, 0.0, -1.0)
_CAP_NORMAL = vec3(0.0, 0.0, 1.0)

# Height of the rim/cap plane in the local frame
CAP_HEIGHT = 1.0


class Cone(Primitive):
    """A closed unit cone, apex at the local origin, cap at z = 1."""

    def intersect(self, ray: Ray) -> list[Hit]:
        """Intersect a ray with the curved surface and the cap.

        Args:
            ray: The ray in the parent frame.

        Returns:
            Up to three hits in ascending distance. A ray through the apex
            region may touch the curved surface twice as well as the cap.
        """
        o, d = self._local_frame_ray(ray)

        a = d[0] * d[0] + d[1] * d[1] - d[2] * d[2]
        b = 2.0 * (o[0] * d[0] + o[1] * d[1] - o[2] * d[2])
        c = o[0] * o[0] + o[1] * o[1] - o[2] * o[2]

        hits = []
        for t in solve_quadratic(a, b, c, allow_linear=True):
            if t <= 0.0:
                continue
            p = o + t * d
            if p[2] < 0.0 or p[2] > CAP_HEIGHT:
                continue
            normal = np.array([p[0], p[1], -p[2]])
            if length(normal) < EPSILON:
                normal = _APEX_NORMAL
            hits.append(self._world_hit(ray, p, normal, t))

        if abs(d[2]) >= EPSILON:
            t = (CAP_HEIGHT - o[2]) / d[2]
            if t > 0.0:
                p = o + t * d
                if p[0] * p[0] + p[1] * p[1] <= 1.0:
                    hits.append(self._world_hit(ray, p, _CAP_NORMAL, t))

        hits.sort(key=lambda hit: hit.distance)
        return hits
