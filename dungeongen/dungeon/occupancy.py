"""Cell -> room lookup used for clearance checks and growth candidates."""
from __future__ import annotations

from typing import List, Optional

from .cells import InvariantViolation, NeighborCell, Room
from .lattice import Lattice


class OccupancyGrid:
    """W x L x F grid of room indices (``None`` = vacant).

    Holds indices into the generator's room list, never the rooms themselves.
    """

    __slots__ = ("width", "length", "floors", "_cells")

    def __init__(self, width: int, length: int, floors: int):
        self.width = width
        self.length = length
        self.floors = floors
        self._cells: List[Optional[int]] = [None] * (width * length * floors)

    def _index(self, x: int, y: int, z: int) -> int:
        return (x * self.length + y) * self.floors + z

    def in_bounds(self, x: int, y: int, z: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.length and 0 <= z < self.floors

    def room_at(self, x: int, y: int, z: int) -> Optional[int]:
        return self._cells[self._index(x, y, z)]

    def is_occupied(self, x: int, y: int, z: int) -> bool:
        return self._cells[self._index(x, y, z)] is not None

    def is_area_clear(self, x: int, y: int, z: int, w: int, l: int) -> bool:  # noqa: E741
        if x < 0 or y < 0 or not 0 <= z < self.floors:
            return False
        if self.width - x < w or self.length - y < l:
            return False
        for ix in range(x, x + w):
            for iy in range(y, y + l):
                if self._cells[self._index(ix, iy, z)] is not None:
                    return False
        return True

    def place(self, room: Room, room_id: int) -> None:
        if not self.is_area_clear(room.x, room.y, room.z, room.w, room.l):
            raise InvariantViolation(f"cannot place {room} over occupied or out-of-bounds cells")
        for cell in room.cells():
            self._cells[self._index(*cell)] = room_id

    def neighbor_of(self, room: Room, lattice: Lattice) -> List[NeighborCell]:
        """Vacant cells bordering ``room`` with the edge each one shares with it."""
        return [n for n in lattice.faces(room) if self._cells[self._index(n.x, n.y, n.z)] is None]

    def vacant_count(self) -> int:
        return sum(1 for c in self._cells if c is None)


__all__ = ["OccupancyGrid"]
