"""Fixed 3D edge store.

Every pair of axis-adjacent cells owns exactly one :class:`CellEdge`. The
three directional edge arrays (sized ``(W-1, L, F)``, ``(W, L-1, F)`` and
``(W, L, F-1)``) are flattened into a single arena, X edges first, then Y,
then Z, each walked x-major / z-minor. Edges are addressed by arena index and
all state changes go through the lattice so the Door-is-terminal rule holds.
"""
from __future__ import annotations

from collections import Counter
from typing import Dict, Iterable, Iterator, List, Tuple

from .cells import Alignment, CellEdge, EdgeState, InvalidDimension, InvariantViolation, NeighborCell, Room, Size3D


def validate_dimensions(width, length, floors) -> Size3D:
    for field, value in (("width", width), ("length", length), ("floors", floors)):
        if isinstance(value, bool) or not isinstance(value, int) or value < 1:
            raise InvalidDimension(field, value)
    return width, length, floors


class Lattice:
    def __init__(self, width: int, length: int, floors: int):
        self.width, self.length, self.floors = validate_dimensions(width, length, floors)
        w, l, f = self.width, self.length, self.floors  # noqa: E741
        self._shape: Dict[Alignment, Tuple[int, int, int]] = {
            Alignment.X: (w - 1, l, f),
            Alignment.Y: (w, l - 1, f),
            Alignment.Z: (w, l, f - 1),
        }
        self._offset: Dict[Alignment, int] = {}
        self.edges: List[CellEdge] = []
        for alignment in (Alignment.X, Alignment.Y, Alignment.Z):
            self._offset[alignment] = len(self.edges)
            sx, sy, sz = self._shape[alignment]
            for x in range(sx):
                for y in range(sy):
                    for z in range(sz):
                        self.edges.append(CellEdge(x, y, z, alignment))

    @property
    def size(self) -> Size3D:
        return self.width, self.length, self.floors

    def __len__(self) -> int:
        return len(self.edges)

    def shape(self, alignment: Alignment) -> Tuple[int, int, int]:
        return self._shape[alignment]

    def edge_index(self, alignment: Alignment, x: int, y: int, z: int) -> int:
        sx, sy, sz = self._shape[alignment]
        if not (0 <= x < sx and 0 <= y < sy and 0 <= z < sz):
            raise IndexError(f"no {alignment.name} edge anchored at {(x, y, z)}")
        return self._offset[alignment] + (x * sy + y) * sz + z

    def edge(self, index: int) -> CellEdge:
        return self.edges[index]

    def faces(self, room: Room) -> Iterator[NeighborCell]:
        """Yield every in-bounds cell touching ``room`` together with the shared edge.

        Order: north (y-1), south (y+l), west (x-1), east (x+w), down (z-1), up (z+1).
        """
        x, y, z, w, l = room.x, room.y, room.z, room.w, room.l  # noqa: E741
        if y > 0:
            for i in range(x, x + w):
                yield NeighborCell(i, y - 1, z, self.edge_index(Alignment.Y, i, y - 1, z))
        if y + l < self.length:
            for i in range(x, x + w):
                yield NeighborCell(i, y + l, z, self.edge_index(Alignment.Y, i, y + l - 1, z))
        if x > 0:
            for j in range(y, y + l):
                yield NeighborCell(x - 1, j, z, self.edge_index(Alignment.X, x - 1, j, z))
        if x + w < self.width:
            for j in range(y, y + l):
                yield NeighborCell(x + w, j, z, self.edge_index(Alignment.X, x + w - 1, j, z))
        if z > 0:
            for ix in range(x, x + w):
                for iy in range(y, y + l):
                    yield NeighborCell(ix, iy, z - 1, self.edge_index(Alignment.Z, ix, iy, z - 1))
        if z + 1 < self.floors:
            for ix in range(x, x + w):
                for iy in range(y, y + l):
                    yield NeighborCell(ix, iy, z + 1, self.edge_index(Alignment.Z, ix, iy, z))

    def edges_bordering(self, room: Room) -> List[int]:
        return [n.edge for n in self.faces(room)]

    # -- state changes -------------------------------------------------
    def reset(self) -> None:
        for e in self.edges:
            e.state = EdgeState.UNUSED

    def open_door(self, index: int) -> None:
        edge = self.edges[index]
        if edge.state is EdgeState.DOOR:
            raise InvariantViolation(f"door opened twice on {edge!r}")
        edge.state = EdgeState.DOOR

    def seal(self, indices: Iterable[int]) -> int:
        """Turn Unused edges into walls; Wall and Door edges are left alone.

        Returns the number of edges that changed.
        """
        changed = 0
        for i in indices:
            edge = self.edges[i]
            if edge.state is EdgeState.UNUSED:
                edge.state = EdgeState.WALL
                changed += 1
        return changed

    def counts(self) -> Dict[EdgeState, int]:
        c = Counter(e.state for e in self.edges)
        return {state: c.get(state, 0) for state in EdgeState}


def expected_edge_count(width: int, length: int, floors: int) -> int:
    return (width - 1) * length * floors + width * (length - 1) * floors + width * length * (floors - 1)


__all__ = ["Lattice", "expected_edge_count", "validate_dimensions"]
