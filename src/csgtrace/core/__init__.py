"""Core rendering module.

This module contains the fundamental building blocks for ray tracing:

Components:
    ray: Ray data structure, vector helpers and numeric tolerances
    colour: RGB colour value type
    transform: Affine transforms with a lock-step inverse
    integrator: Whitted-style Shader (nearest hit, lighting, mirrors)
    render: Per-pixel render loop
    render_target: Taichi field frame buffer

The geometric work is plain Python and NumPy; Taichi backs the frame
buffer and the preview window.
"""

from .colour import BLACK, WHITE, Colour
from .ray import (
    EPSILON,
    INFINITY,
    Ray,
    Vec3,
    as_vec3,
    cross,
    dot,
    length,
    length_squared,
    normalize,
    ray_at,
    reflect,
    sign,
    vec3,
)
from .transform import AffineTransform

# Note: integrator, render and render_target are NOT imported here to avoid
# circular imports. Import them directly from their modules.

__all__ = [
    "EPSILON",
    "INFINITY",
    "Ray",
    "Vec3",
    "ray_at",
    "vec3",
    "as_vec3",
    "dot",
    "cross",
    "length",
    "length_squared",
    "normalize",
    "reflect",
    "sign",
    "Colour",
    "BLACK",
    "WHITE",
    "AffineTransform",
]
