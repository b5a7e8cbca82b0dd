"""Constructive solid geometry combinator.

A Csg node combines two child primitives with a boolean operation. The
children live in a PrimitiveArena and are referred to by index; the node
owns its own transform, which places both children together.

Intersection works by walking the two children's hit lists in distance
order while tracking whether the ray is OUTSIDE or INSIDE each child. A
child that is being crossed is momentarily on its BORDER. For each crossing
the operation's table is consulted with the crossing child in BORDER; a
BORDER result means the boundary of the combined solid is crossed there and
the hit is kept.

The starting state of each child is guessed from the parity of its hit
count (odd means the ray starts inside). Rays that graze a child and touch
it twice at one point can be misclassified; this is accepted.

Example:
    >>> from csgtrace.core.transform import AffineTransform
    >>> from csgtrace.geometry.arena import PrimitiveArena
    >>> from csgtrace.geometry.csg import CsgOperation
    >>> from csgtrace.geometry.sphere import Sphere
    >>> arena = PrimitiveArena()
    >>> a = arena.add(Sphere())
    >>> b = arena.add(Sphere(AffineTransform().translated(1.0, 0.0, 0.0)))
    >>> lens = arena.combine(CsgOperation.INTERSECTION, a, b)
"""

from __future__ import annotations

import enum
from typing import TYPE_CHECKING

from csgtrace.core.ray import Ray
from csgtrace.core.transform import AffineTransform
from csgtrace.geometry.hit import Hit
from csgtrace.geometry.primitive import Primitive
from csgtrace.materials.material import DEFAULT_MATERIAL, Material

if TYPE_CHECKING:
    from csgtrace.geometry.arena import PrimitiveArena


class CsgOperation(enum.Enum):
    """Boolean operation applied by a Csg node."""

    UNION = "UNION"
    INTERSECTION = "INTERSECTION"
    DIFFERENCE = "DIFFERENCE"

    @classmethod
    def parse(cls, name: str) -> CsgOperation:
        """Look up an operation by name, ignoring case.

        Raises:
            ValueError: If the name is not a known operation.
        """
        try:
            return cls(name.upper())
        except ValueError:
            valid = ", ".join(op.value for op in cls)
            raise ValueError(f"Unknown CSG operation '{name}' (expected one of {valid})") from None


class CsgState(enum.IntEnum):
    """Where the ray currently is relative to a solid."""

    OUTSIDE = 0
    BORDER = 1
    INSIDE = 2


# =============================================================================
# Operation Tables
# =============================================================================

_O, _B, _I = CsgState.OUTSIDE, CsgState.BORDER, CsgState.INSIDE


def _table(cells: dict[tuple[CsgState, CsgState], CsgState]) -> tuple[tuple[CsgState, ...], ...]:
    """Build a 3x3 table indexed [left][right], defaulting to OUTSIDE."""
    return tuple(tuple(cells.get((left, right), _O) for right in CsgState) for left in CsgState)


CSG_TABLES: dict[CsgOperation, tuple[tuple[CsgState, ...], ...]] = {
    CsgOperation.UNION: _table(
        {
            (_I, _O): _I,
            (_B, _O): _B,
            (_I, _I): _I,
            (_O, _I): _I,
            (_B, _I): _I,
            (_I, _B): _I,
            (_O, _B): _B,
            (_B, _B): _B,
        }
    ),
    CsgOperation.INTERSECTION: _table(
        {
            (_I, _B): _B,
            (_I, _I): _I,
            (_B, _I): _B,
        }
    ),
    CsgOperation.DIFFERENCE: _table(
        {
            (_I, _O): _I,
            (_B, _O): _B,
            (_I, _B): _B,
        }
    ),
}


def classify(operation: CsgOperation, left: CsgState, right: CsgState) -> CsgState:
    """Look up the combined state for a pair of child states."""
    return CSG_TABLES[operation][left][right]


def _opposite(state: CsgState) -> CsgState:
    return CsgState.OUTSIDE if state == CsgState.INSIDE else CsgState.INSIDE


def _initial_state(hits: list[Hit]) -> CsgState:
    return CsgState.INSIDE if len(hits) % 2 == 1 else CsgState.OUTSIDE


class Csg(Primitive):
    """Boolean combination of two primitives stored in an arena.

    Attributes:
        arena: The arena holding the children.
        operation: The boolean operation.
        left: Arena index of the left operand.
        right: Arena index of the right operand.
    """

    def __init__(
        self,
        arena: PrimitiveArena,
        operation: CsgOperation,
        left: int,
        right: int,
        transform: AffineTransform | None = None,
        material: Material = DEFAULT_MATERIAL,
    ) -> None:
        """Create a CSG node over two existing arena entries.

        Raises:
            IndexError: If either child index is not in the arena.
            ValueError: If the operation is not a CsgOperation.
        """
        super().__init__(transform, material)
        if not isinstance(operation, CsgOperation):
            raise ValueError(f"Expected a CsgOperation, got {operation!r}")
        arena.check_index(left)
        arena.check_index(right)
        self.arena = arena
        self.operation = operation
        self.left = left
        self.right = right

    def __repr__(self) -> str:
        return f"Csg({self.operation.value}, left={self.left}, right={self.right})"

    def intersect(self, ray: Ray) -> list[Hit]:
        """Intersect a ray with the combined solid.

        Args:
            ray: The ray in the parent frame.

        Returns:
            The boundary crossings of the combined solid, in the order they
            are met along the ray. Each hit keeps the material of the child
            surface that produced it.
        """
        local = self.transform.apply_inverse_ray(ray)

        left_hits = sorted(self.arena[self.left].intersect(local), key=lambda h: h.distance)
        right_hits = sorted(self.arena[self.right].intersect(local), key=lambda h: h.distance)

        left_state = _initial_state(left_hits)
        right_state = _initial_state(right_hits)
        table = CSG_TABLES[self.operation]

        result = []
        li = ri = 0
        while li < len(left_hits) or ri < len(right_hits):
            take_left = ri == len(right_hits) or (
                li < len(left_hits) and left_hits[li].distance <= right_hits[ri].distance
            )
            if take_left:
                crossing = left_hits[li]
                li += 1
                combined = table[CsgState.BORDER][right_state]
                left_state = _opposite(left_state)
            else:
                crossing = right_hits[ri]
                ri += 1
                combined = table[left_state][CsgState.BORDER]
                right_state = _opposite(right_state)

            if combined == CsgState.BORDER:
                result.append(
                    self._world_hit(
                        ray,
                        crossing.point,
                        crossing.normal,
                        crossing.distance,
                        material=crossing.material,
                    )
                )
        return result
