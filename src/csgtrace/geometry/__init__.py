"""Geometry module for ray-intersectable primitives.

Components:
    hit: Hit record returned by every intersection
    primitive: Primitive base class and quadratic solver
    sphere: Unit sphere
    cone: Closed unit cone
    csg: Boolean combination of two primitives
    arena: Index-addressed primitive storage used by CSG nodes

All primitives are defined in a local frame and placed by an
AffineTransform.
"""

from .arena import PrimitiveArena
from .cone import Cone
from .csg import Csg, CsgOperation, CsgState
from .hit import Hit
from .primitive import Primitive, solve_quadratic
from .sphere import Sphere

__all__ = [
    "Hit",
    "Primitive",
    "solve_quadratic",
    "Sphere",
    "Cone",
    "Csg",
    "CsgOperation",
    "CsgState",
    "PrimitiveArena",
]
