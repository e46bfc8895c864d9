"""Interface expected from mesh entities handed to a manifold."""

from __future__ import annotations

from typing import Any, Protocol

# Reference hypercube counts, indexed by topological dimension.
VERTICES_PER_CELL = {1: 2, 2: 4, 3: 8}
LINES_PER_CELL = {1: 1, 2: 4, 3: 12}
FACES_PER_CELL = {1: 2, 2: 4, 3: 6}


class GeometricEntity(Protocol):
    """
    Protocol for a line, quad or hex of a mesh.

    Implementations belong to the mesh layer. Only the accessors used to
    assemble default quadratures are required; ``line`` is needed for quads
    and hexes, ``face`` and ``isotropic_child`` only for hexes and their faces.
    """

    def vertex(self, index: int) -> Any: ...

    def vertex_count(self) -> int: ...

    def has_children(self) -> bool: ...

    def child(self, index: int) -> GeometricEntity: ...

    def center(self) -> Any: ...

    def line(self, index: int) -> GeometricEntity: ...

    def face(self, index: int) -> GeometricEntity: ...

    def isotropic_child(self, index: int) -> GeometricEntity: ...


__all__ = [
    "GeometricEntity",
    "VERTICES_PER_CELL",
    "LINES_PER_CELL",
    "FACES_PER_CELL",
]
