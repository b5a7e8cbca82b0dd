"""Affine transforms for placing objects and cameras.

An AffineTransform keeps a 4x4 homogeneous matrix together with its inverse.
Every composer builds an elementary transform whose inverse is known in
closed form and multiplies it onto both matrices, so the pair stays in
lock-step without ever calling a general matrix inversion.

Transforms are immutable values: the composers return a new transform and
leave the receiver untouched. Composition order follows the order of the
calls, so

    AffineTransform().scaled(2.0).translated(0.0, 0.0, 5.0)

first scales about the origin and then moves the result along z.

Example:
    >>> from csgtrace.core.transform import AffineTransform
    >>> from csgtrace.core.ray import vec3
    >>> t = AffineTransform().rotated_z(90.0).translated(1.0, 0.0, 0.0)
    >>> t.apply_point(vec3(1.0, 0.0, 0.0)).round(6)
    array([1., 1., 0.])
"""

from __future__ import annotations

import math

import numpy as np
import numpy.typing as npt

from csgtrace.core.ray import Ray, Vec3, as_vec3

Matrix4 = npt.NDArray[np.float64]


class AffineTransform:
    """A 4x4 affine transform and its inverse.

    Points are mapped with homogeneous w = 1 and divided by the resulting w.
    Directions and normals are mapped with w = 0. Normals go through the
    transpose of the inverse so that they stay perpendicular to transformed
    surfaces; they are not renormalized here.

    Attributes:
        matrix: The forward (object to world) matrix. Read-only copy.
        inverse: The inverse (world to object) matrix. Read-only copy.
    """

    __slots__ = ("_matrix", "_inverse")

    def __init__(
        self,
        matrix: Matrix4 | None = None,
        inverse: Matrix4 | None = None,
    ) -> None:
        """Create a transform, the identity by default.

        The matrix and inverse must be supplied together. No check is made
        that they actually invert each other; use the composers to build
        transforms from elementary operations.

        Raises:
            ValueError: If only one of matrix/inverse is given, or a matrix
                is not 4x4.
        """
        if (matrix is None) != (inverse is None):
            raise ValueError("matrix and inverse must be given together")
        if matrix is None:
            forward = np.eye(4, dtype=np.float64)
            backward = np.eye(4, dtype=np.float64)
        else:
            forward = np.array(matrix, dtype=np.float64)
            backward = np.array(inverse, dtype=np.float64)
            if forward.shape != (4, 4) or backward.shape != (4, 4):
                raise ValueError("Transform matrices must be 4x4")
        forward.setflags(write=False)
        backward.setflags(write=False)
        self._matrix = forward
        self._inverse = backward

    @property
    def matrix(self) -> Matrix4:
        return self._matrix

    @property
    def inverse(self) -> Matrix4:
        return self._inverse

    def __repr__(self) -> str:
        return f"AffineTransform(matrix={self._matrix.tolist()})"

    # =========================================================================
    # Elementary transforms
    # =========================================================================

    @classmethod
    def rotation_x(cls, degrees: float) -> AffineTransform:
        """Rotation about the x axis. The inverse is the transpose."""
        c, s = _cos_sin(degrees)
        r = np.eye(4, dtype=np.float64)
        r[1, 1], r[1, 2], r[2, 1], r[2, 2] = c, -s, s, c
        return cls(r, r.T)

    @classmethod
    def rotation_y(cls, degrees: float) -> AffineTransform:
        """Rotation about the y axis. The inverse is the transpose."""
        c, s = _cos_sin(degrees)
        r = np.eye(4, dtype=np.float64)
        r[0, 0], r[0, 2], r[2, 0], r[2, 2] = c, s, -s, c
        return cls(r, r.T)

    @classmethod
    def rotation_z(cls, degrees: float) -> AffineTransform:
        """Rotation about the z axis. The inverse is the transpose."""
        c, s = _cos_sin(degrees)
        r = np.eye(4, dtype=np.float64)
        r[0, 0], r[0, 1], r[1, 0], r[1, 1] = c, -s, s, c
        return cls(r, r.T)

    @classmethod
    def scaling(cls, sx: float, sy: float, sz: float) -> AffineTransform:
        """Non-uniform scale about the origin.

        Raises:
            ValueError: If any factor is zero.
        """
        if sx == 0 or sy == 0 or sz == 0:
            raise ValueError(f"Scale factors must be non-zero, got ({sx}, {sy}, {sz})")
        s = np.diag([sx, sy, sz, 1.0]).astype(np.float64)
        s_inv = np.diag([1.0 / sx, 1.0 / sy, 1.0 / sz, 1.0]).astype(np.float64)
        return cls(s, s_inv)

    @classmethod
    def translation(cls, tx: float, ty: float, tz: float) -> AffineTransform:
        """Translation by (tx, ty, tz)."""
        t = np.eye(4, dtype=np.float64)
        t[:3, 3] = [tx, ty, tz]
        t_inv = np.eye(4, dtype=np.float64)
        t_inv[:3, 3] = [-tx, -ty, -tz]
        return cls(t, t_inv)

    # =========================================================================
    # Composers
    # =========================================================================

    def composed_with(self, elementary: AffineTransform) -> AffineTransform:
        """Apply another transform after this one.

        The forward matrix is left-multiplied by the other's matrix and the
        inverse right-multiplied by the other's inverse.

        Args:
            elementary: The transform to apply after this one.

        Returns:
            A new transform equivalent to "this, then elementary".
        """
        return AffineTransform(
            elementary._matrix @ self._matrix,
            self._inverse @ elementary._inverse,
        )

    def rotated_x(self, degrees: float) -> AffineTransform:
        return self.composed_with(AffineTransform.rotation_x(degrees))

    def rotated_y(self, degrees: float) -> AffineTransform:
        return self.composed_with(AffineTransform.rotation_y(degrees))

    def rotated_z(self, degrees: float) -> AffineTransform:
        return self.composed_with(AffineTransform.rotation_z(degrees))

    def scaled(
        self,
        sx: float,
        sy: float | None = None,
        sz: float | None = None,
    ) -> AffineTransform:
        """Scale uniformly by sx, or per axis when all three factors are given.

        Raises:
            ValueError: If any factor is zero, or only two factors are given.
        """
        if sy is None and sz is None:
            return self.composed_with(AffineTransform.scaling(sx, sx, sx))
        if sy is None or sz is None:
            raise ValueError("Give either one uniform factor or all three")
        return self.composed_with(AffineTransform.scaling(sx, sy, sz))

    def translated(self, tx: float, ty: float, tz: float) -> AffineTransform:
        return self.composed_with(AffineTransform.translation(tx, ty, tz))

    # =========================================================================
    # Local to world
    # =========================================================================

    def apply_point(self, point: Vec3) -> Vec3:
        return _map_point(self._matrix, point)

    def apply_direction(self, direction: Vec3) -> Vec3:
        return self._matrix[:3, :3] @ as_vec3(direction)

    def apply_normal(self, normal: Vec3) -> Vec3:
        return self._inverse[:3, :3].T @ as_vec3(normal)

    def apply_ray(self, ray: Ray) -> Ray:
        return Ray(self.apply_point(ray.origin), self.apply_direction(ray.direction))

    # =========================================================================
    # World to local
    # =========================================================================

    def apply_inverse_point(self, point: Vec3) -> Vec3:
        return _map_point(self._inverse, point)

    def apply_inverse_direction(self, direction: Vec3) -> Vec3:
        return self._inverse[:3, :3] @ as_vec3(direction)

    def apply_inverse_normal(self, normal: Vec3) -> Vec3:
        return self._matrix[:3, :3].T @ as_vec3(normal)

    def apply_inverse_ray(self, ray: Ray) -> Ray:
        return Ray(
            self.apply_inverse_point(ray.origin),
            self.apply_inverse_direction(ray.direction),
        )


def _cos_sin(degrees: float) -> tuple[float, float]:
    radians = math.radians(degrees)
    return math.cos(radians), math.sin(radians)


def _map_point(m: Matrix4, point: Vec3) -> Vec3:
    p = as_vec3(point)
    h = m @ np.append(p, 1.0)
    return h[:3] / h[3]
