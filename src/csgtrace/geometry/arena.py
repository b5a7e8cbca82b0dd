"""Index-addressed storage for primitives.

Every primitive in a scene, including CSG children, is stored once in a
PrimitiveArena and referred to by its integer index. A Csg node can only
be created over indices that already exist, so a node can never refer to
itself or to a node created after it and the primitive graph stays acyclic.
"""

from __future__ import annotations

from collections.abc import Iterator

from csgtrace.core.transform import AffineTransform
from csgtrace.geometry.csg import Csg, CsgOperation
from csgtrace.geometry.primitive import Primitive
from csgtrace.materials.material import DEFAULT_MATERIAL, Material


class PrimitiveArena:
    """Append-only list of primitives addressed by index."""

    def __init__(self) -> None:
        self._primitives: list[Primitive] = []

    def __len__(self) -> int:
        return len(self._primitives)

    def __iter__(self) -> Iterator[Primitive]:
        return iter(self._primitives)

    def __getitem__(self, index: int) -> Primitive:
        self.check_index(index)
        return self._primitives[index]

    def check_index(self, index: int) -> None:
        """Validate an arena index.

        Raises:
            IndexError: If the index does not refer to a stored primitive.
        """
        if not isinstance(index, int) or isinstance(index, bool):
            raise IndexError(f"Arena index must be an int, got {index!r}")
        if index < 0 or index >= len(self._primitives):
            raise IndexError(
                f"Primitive index {index} out of range (arena holds {len(self._primitives)})"
            )

    def add(self, primitive: Primitive) -> int:
        """Store a primitive and return its index."""
        if not isinstance(primitive, Primitive):
            raise TypeError(f"Expected a Primitive, got {type(primitive).__name__}")
        self._primitives.append(primitive)
        return len(self._primitives) - 1

    def combine(
        self,
        operation: CsgOperation,
        left: int,
        right: int,
        *,
        transform: AffineTransform | None = None,
        material: Material = DEFAULT_MATERIAL,
    ) -> int:
        """Create a Csg node over two stored primitives and store it.

        Args:
            operation: The boolean operation.
            left: Index of the left operand.
            right: Index of the right operand.
            transform: Placement of the combined solid.
            material: Material of the node itself. Hits keep the material of
                the child surface they come from.

        Returns:
            The index of the new node.

        Raises:
            IndexError: If either index is not in the arena.
        """
        return self.add(Csg(self, operation, left, right, transform, material))
