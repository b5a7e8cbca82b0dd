"""Ray data structure and vector utilities.

This module provides the fundamental Ray dataclass and the small set of
vector helpers used throughout the tracer. Vectors are plain NumPy arrays of
shape (3,) with dtype float64; points and directions share that
representation and are told apart by the functions that consume them.

Example:
    >>> from csgtrace.core.ray import Ray, ray_at, vec3
    >>> ray = Ray(origin=vec3(0.0, 0.0, 0.0), direction=vec3(0.0, 0.0, 1.0))
    >>> ray_at(ray, 5.0)
    array([0., 0., 5.])
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np
import numpy.typing as npt

# Type alias for 3D vectors
Vec3 = npt.NDArray[np.float64]

# =============================================================================
# Numeric Tolerances
# =============================================================================

# Small number for checking when things are almost zero
EPSILON = 1e-6

# Larger than any sensible distance in a scene
INFINITY = float("inf")


def vec3(x: float, y: float, z: float) -> Vec3:
    """Create a 3D vector."""
    return np.array([x, y, z], dtype=np.float64)


def as_vec3(value: npt.ArrayLike) -> Vec3:
    """Coerce a sequence of three numbers into a float64 vector.

    Raises:
        ValueError: If the value does not have exactly three components.
    """
    result = np.asarray(value, dtype=np.float64).reshape(-1)
    if result.shape != (3,):
        raise ValueError(f"Expected 3 components, got shape {result.shape}")
    return result


@dataclass(frozen=True, eq=False)
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray.
        direction: The direction of the ray. It does not need to be unit
            length, but it must not be zero.

    Raises:
        ValueError: If the direction is zero or not finite. Short
            directions are fine; intersection tests normalize them.
    """

    origin: Vec3
    direction: Vec3

    def __post_init__(self) -> None:
        origin = as_vec3(self.origin)
        direction = as_vec3(self.direction)
        if not np.all(np.isfinite(direction)) or length_squared(direction) == 0.0:
            raise ValueError(f"Ray direction must be non-zero, got {direction}")
        object.__setattr__(self, "origin", origin)
        object.__setattr__(self, "direction", direction)

    def __repr__(self) -> str:
        return f"Ray(origin={self.origin.tolist()}, direction={self.direction.tolist()})"


def ray_at(ray: Ray, t: float) -> Vec3:
    """Compute the point along the ray at parameter t.

    Args:
        ray: The ray to evaluate.
        t: The parameter value. Positive values are in front of the origin.

    Returns:
        The point ray.origin + t * ray.direction.
    """
    return ray.origin + t * ray.direction


# =============================================================================
# Vector Utility Functions
# =============================================================================


def dot(a: Vec3, b: Vec3) -> float:
    """Compute the dot product of two vectors."""
    return float(np.dot(a, b))


def cross(a: Vec3, b: Vec3) -> Vec3:
    """Compute the cross product of two vectors."""
    return np.cross(a, b)


def length_squared(v: Vec3) -> float:
    """Compute the squared length of a vector.

    Cheaper than length() when only comparing magnitudes.
    """
    return float(np.dot(v, v))


def length(v: Vec3) -> float:
    """Compute the Euclidean length of a vector."""
    return math.sqrt(length_squared(v))


def normalize(v: Vec3) -> Vec3:
    """Normalize a vector to unit length.

    Returns:
        A unit vector in the same direction as v. A zero-length input is
        returned unchanged.
    """
    n = length(v)
    if n < EPSILON:
        return v
    return v / n


def reflect(incident: Vec3, normal: Vec3) -> Vec3:
    """Reflect an incident vector about a normal.

    Args:
        incident: The incoming direction (pointing toward the surface).
        normal: The surface normal (should be unit length).

    Returns:
        The reflected direction, incident - 2 (incident . normal) normal.
    """
    return incident - 2.0 * dot(incident, normal) * normal


def sign(value: float) -> int:
    """Sign of a value, treating anything within EPSILON of zero as zero."""
    if abs(value) < EPSILON:
        return 0
    return -1 if value < 0.0 else 1
