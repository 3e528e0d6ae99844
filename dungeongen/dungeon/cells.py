"""Value types shared by the lattice, occupancy grid and generator."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, NamedTuple, Tuple

Coord3D = Tuple[int, int, int]
Size3D = Tuple[int, int, int]


class Alignment(str, Enum):
    """Axis along which the two cells sharing an edge differ."""

    X = "x"
    Y = "y"
    Z = "z"


class EdgeState(str, Enum):
    UNUSED = "unused"
    WALL = "wall"
    DOOR = "door"


class InvalidDimension(ValueError):
    """Raised when a lattice dimension is not a positive integer."""

    def __init__(self, field: str, value):
        super().__init__(f"{field} must be a positive integer, got {value!r}")
        self.field = field
        self.value = value


class InvariantViolation(RuntimeError):
    """Programming error inside the generator (never a recoverable condition)."""


@dataclass(frozen=True)
class Room:
    x: int
    y: int
    z: int
    w: int
    l: int  # noqa: E741

    def cells(self) -> Iterator[Coord3D]:
        for ix in range(self.x, self.x + self.w):
            for iy in range(self.y, self.y + self.l):
                yield ix, iy, self.z

    def covers(self, x: int, y: int, z: int) -> bool:
        return z == self.z and self.x <= x < self.x + self.w and self.y <= y < self.y + self.l

    @property
    def area(self) -> int:
        return self.w * self.l

    def to_dict(self):
        return {"x": self.x, "y": self.y, "z": self.z, "width": self.w, "length": self.l}


def _far_cell(x: int, y: int, z: int, alignment: Alignment) -> Coord3D:
    if alignment is Alignment.X:
        return x + 1, y, z
    if alignment is Alignment.Y:
        return x, y + 1, z
    return x, y, z + 1


class CellEdge:
    """Boundary between the cell at (x, y, z) and its +1 neighbour along ``alignment``.

    Only the owning :class:`~dungeongen.dungeon.lattice.Lattice` mutates ``state``;
    callers outside the lattice get :class:`EdgeView` snapshots instead.
    """

    __slots__ = ("x", "y", "z", "alignment", "state")

    def __init__(self, x: int, y: int, z: int, alignment: Alignment):
        self.x = x
        self.y = y
        self.z = z
        self.alignment = alignment
        self.state = EdgeState.UNUSED

    @property
    def far_cell(self) -> Coord3D:
        return _far_cell(self.x, self.y, self.z, self.alignment)

    def view(self) -> "EdgeView":
        return EdgeView(self.x, self.y, self.z, self.alignment, self.state)

    def __repr__(self):
        return f"CellEdge({self.x}, {self.y}, {self.z}, {self.alignment.name}, {self.state.name})"


class EdgeView(NamedTuple):
    """Read-only copy of a :class:`CellEdge` at the time it was taken."""

    x: int
    y: int
    z: int
    alignment: Alignment
    state: EdgeState

    @property
    def far_cell(self) -> Coord3D:
        return _far_cell(self.x, self.y, self.z, self.alignment)

    def to_dict(self):
        return {
            "x": self.x,
            "y": self.y,
            "z": self.z,
            "alignment": self.alignment.value,
            "state": self.state.value,
        }


class NeighborCell(NamedTuple):
    x: int
    y: int
    z: int
    edge: int  # arena index of the shared edge


__all__ = [
    "Alignment",
    "CellEdge",
    "Coord3D",
    "EdgeState",
    "EdgeView",
    "InvalidDimension",
    "InvariantViolation",
    "NeighborCell",
    "Room",
    "Size3D",
]
