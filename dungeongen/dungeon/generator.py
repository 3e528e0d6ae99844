"""Randomized backtracking room placement over a 3D lattice.

Growth starts from a 1x1 seed room. While the current room has vacant
neighbour cells, one is chosen, the shared edge becomes a door and a randomly
sized room is placed over the chosen cell; the new room's remaining boundary
is sealed and it becomes current (the old one is pushed). With no vacant
neighbours the stack is popped; an empty stack ends the run. Every room after
the seed therefore arrives through exactly one door, so the doors form a
spanning tree over the rooms.

All randomness comes from one ``random.Random(seed)`` threaded through each
drawing call in a fixed order, which is what makes a seed reproducible.
"""
from __future__ import annotations

import random
import time
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from ..logging_utils import get_logger
from .cells import EdgeState, EdgeView, Room, Size3D
from .config import GenerationConfig
from .connectivity import reachable_rooms
from .lattice import Lattice
from .metrics import init_metrics
from .occupancy import OccupancyGrid
from .rooms import pick_room_size, try_room_placement

log = get_logger("dungeongen.generator")


class GenerationState(str, Enum):
    IDLE = "idle"
    GROWING = "growing"
    BACKTRACKING = "backtracking"
    DONE = "done"


class DungeonGraph:
    """A dungeon of variable-sized rooms spread over several floors."""

    def __init__(self, width: int, length: int, floors: int, enable_metrics: bool = True):
        self.lattice = Lattice(width, length, floors)
        self.enable_metrics = enable_metrics
        self.seed: Optional[int] = None
        self.state = GenerationState.IDLE
        self.metrics: Dict[str, Any] = {}
        self._rooms: List[Room] = []
        self._grid: Optional[OccupancyGrid] = None

    @classmethod
    def from_config(cls, config: GenerationConfig) -> "DungeonGraph":
        return cls(config.width, config.length, config.floors, enable_metrics=config.enable_metrics)

    @property
    def size(self) -> Size3D:
        return self.lattice.size

    @property
    def width(self) -> int:
        return self.lattice.width

    @property
    def length(self) -> int:
        return self.lattice.length

    @property
    def floors(self) -> int:
        return self.lattice.floors

    def rooms(self) -> Tuple[Room, ...]:
        return tuple(self._rooms)

    def edges(self) -> Tuple[EdgeView, ...]:
        """Read-only copies of every edge in lattice order; empty before the first run."""
        if self._grid is None:
            return ()
        return tuple(e.view() for e in self.lattice.edges)

    def room_at(self, x: int, y: int, z: int) -> Optional[Room]:
        if self._grid is None or not self._grid.in_bounds(x, y, z):
            return None
        idx = self._grid.room_at(x, y, z)
        return None if idx is None else self._rooms[idx]

    def room_index_at(self, x: int, y: int, z: int) -> Optional[int]:
        if self._grid is None or not self._grid.in_bounds(x, y, z):
            return None
        return self._grid.room_at(x, y, z)

    def generate(self, seed: int) -> None:
        """Discard any previous layout and grow a new one from ``seed``."""
        started = time.perf_counter()
        rng = random.Random(seed)
        lattice = self.lattice
        self.seed = seed
        self._rooms = []
        self._grid = grid = OccupancyGrid(*self.size)
        lattice.reset()
        metrics = init_metrics()

        start_room = Room(
            rng.randrange(self.width), rng.randrange(self.length), rng.randrange(self.floors), 1, 1
        )
        self._add_room(start_room)

        stack: List[Room] = []
        current = start_room
        self.state = GenerationState.GROWING
        while self.state is not GenerationState.DONE:
            candidates = grid.neighbor_of(current, lattice)
            if candidates:
                self.state = GenerationState.GROWING
                target = candidates[rng.randrange(len(candidates))]
                lattice.open_door(target.edge)
                # (1, 1) always fits because the target cell is vacant.
                new_room = None
                while new_room is None:
                    size = pick_room_size(rng)
                    metrics['size_draws'] += 1
                    new_room = try_room_placement(grid, rng, target.x, target.y, target.z, size.w, size.l)
                    if new_room is None:
                        metrics['placement_failures'] += 1
                self._add_room(new_room)
                stack.append(current)
                current = new_room
            elif stack:
                self.state = GenerationState.BACKTRACKING
                current = stack.pop()
                metrics['backtracks'] += 1
            else:
                self.state = GenerationState.DONE
                log.debug(
                    event="growth_exhausted",
                    seed=seed,
                    backtracks=metrics['backtracks'],
                    placement_failures=metrics['placement_failures'],
                )

        counts = lattice.counts()
        runtime_ms = int((time.perf_counter() - started) * 1000)
        if self.enable_metrics:
            metrics['rooms'] = len(self._rooms)
            metrics['doors'] = counts[EdgeState.DOOR]
            metrics['walls'] = counts[EdgeState.WALL]
            metrics['unused_edges'] = counts[EdgeState.UNUSED]
            metrics['swallowed_targets'] = sum(1 for r in self._rooms[1:] if r.area > 1)
            metrics['unreachable_rooms'] = len(self._rooms) - len(reachable_rooms(self))
            metrics['runtime_ms'] = runtime_ms
            self.metrics = metrics
        else:
            self.metrics = {}
        log.info(
            event="dungeon_generated",
            seed=seed,
            size="x".join(str(d) for d in self.size),
            rooms=len(self._rooms),
            doors=counts[EdgeState.DOOR],
            runtime_ms=runtime_ms,
        )

    def _add_room(self, room: Room) -> None:
        self._grid.place(room, len(self._rooms))
        self._rooms.append(room)
        self.lattice.seal(self.lattice.edges_bordering(room))

    def snapshot(self) -> Tuple[Tuple[Tuple[int, ...], ...], Tuple[str, ...]]:
        """Hashable view of the layout: rooms in creation order and every edge state."""
        rooms = tuple((r.x, r.y, r.z, r.w, r.l) for r in self._rooms)
        states = tuple(e.state.value for e in self.edges())
        return rooms, states

    def to_dict(self, edge_state: Optional[EdgeState] = None) -> Dict[str, Any]:
        edges = self.edges()
        if edge_state is not None:
            edges = tuple(e for e in edges if e.state is edge_state)
        return {
            "seed": self.seed,
            "size": list(self.size),
            "rooms": [r.to_dict() for r in self._rooms],
            "edges": [e.to_dict() for e in edges],
            "metrics": dict(self.metrics),
        }


__all__ = ["DungeonGraph", "GenerationState"]
