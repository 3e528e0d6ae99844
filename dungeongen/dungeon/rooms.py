"""Room footprint selection and placement search."""
from __future__ import annotations

import random
from typing import List, NamedTuple, Optional, Tuple

from .cells import Room
from .occupancy import OccupancyGrid


class RoomSize(NamedTuple):
    w: int
    l: int  # noqa: E741
    weight: int


# Order matters: draws are resolved against the cumulative weights in this order.
ROOM_SIZES: Tuple[RoomSize, ...] = (
    RoomSize(1, 1, 2),
    RoomSize(2, 2, 1),
    RoomSize(1, 2, 2),
    RoomSize(2, 1, 2),
    RoomSize(3, 1, 1),
    RoomSize(1, 3, 1),
    RoomSize(3, 2, 1),
    RoomSize(2, 3, 1),
)
TOTAL_WEIGHT = sum(s.weight for s in ROOM_SIZES)


def size_for_draw(draw: int) -> RoomSize:
    """Map a draw in ``[0, TOTAL_WEIGHT)`` to the first entry whose cumulative weight exceeds it."""
    if not 0 <= draw < TOTAL_WEIGHT:
        raise ValueError(f"draw {draw} outside [0, {TOTAL_WEIGHT})")
    cumulative = 0
    for size in ROOM_SIZES:
        cumulative += size.weight
        if draw < cumulative:
            return size
    return ROOM_SIZES[-1]


def pick_room_size(rng: random.Random) -> RoomSize:
    return size_for_draw(rng.randrange(TOTAL_WEIGHT))


def find_anchors(grid: OccupancyGrid, x: int, y: int, z: int, w: int, l: int) -> List[Tuple[int, int]]:  # noqa: E741
    """All clear anchors for a ``w`` x ``l`` room that would cover cell (x, y, z)."""
    anchors = []
    for ix in range(max(0, x - w + 1), min(grid.width - 1, x) + 1):
        for iy in range(max(0, y - l + 1), min(grid.length - 1, y) + 1):
            if grid.is_area_clear(ix, iy, z, w, l):
                anchors.append((ix, iy))
    return anchors


def try_room_placement(
    grid: OccupancyGrid, rng: random.Random, x: int, y: int, z: int, w: int, l: int  # noqa: E741
) -> Optional[Room]:
    """Pick one clear anchor uniformly; ``None`` when the size cannot cover the target.

    The returned room is not yet placed on ``grid``.
    """
    anchors = find_anchors(grid, x, y, z, w, l)
    if not anchors:
        return None
    ax, ay = anchors[rng.randrange(len(anchors))]
    return Room(ax, ay, z, w, l)


__all__ = ["ROOM_SIZES", "TOTAL_WEIGHT", "RoomSize", "find_anchors", "pick_room_size", "size_for_draw", "try_room_placement"]
