"""Text floor plans for the CLI and diagnostics.

Each floor is drawn on a (2W+1) x (2L+1) character grid, row-major with y
growing downwards: cells sit on odd rows/columns, X edges between
horizontally adjacent cells, Y edges between vertically adjacent ones.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, List

from .cells import Alignment, EdgeState
from .tiles import (
    BORDER_X,
    BORDER_Y,
    CORNER,
    DOOR,
    OPEN,
    STAIR_BOTH,
    STAIR_DOWN,
    STAIR_UP,
    VACANT,
    WALL_X,
    WALL_Y,
)

if TYPE_CHECKING:
    from .generator import DungeonGraph

_EDGE_CHARS = {
    Alignment.X: {EdgeState.WALL: WALL_X, EdgeState.DOOR: DOOR, EdgeState.UNUSED: OPEN},
    Alignment.Y: {EdgeState.WALL: WALL_Y, EdgeState.DOOR: DOOR, EdgeState.UNUSED: OPEN},
}


def render_floor(graph: "DungeonGraph", z: int) -> List[str]:
    w, l, f = graph.size  # noqa: E741
    if not 0 <= z < f:
        raise IndexError(f"floor {z} outside [0, {f})")
    rows = [[OPEN] * (2 * w + 1) for _ in range(2 * l + 1)]
    for r in range(0, 2 * l + 1, 2):
        for c in range(0, 2 * w + 1, 2):
            rows[r][c] = CORNER
    for c in range(1, 2 * w, 2):
        rows[0][c] = BORDER_Y
        rows[2 * l][c] = BORDER_Y
    for r in range(1, 2 * l, 2):
        rows[r][0] = BORDER_X
        rows[r][2 * w] = BORDER_X

    lattice = graph.lattice
    generated = bool(graph.rooms())
    for x in range(w):
        for y in range(l):
            if generated and graph.room_index_at(x, y, z) is None:
                rows[2 * y + 1][2 * x + 1] = VACANT
                continue
            up = z + 1 < f and lattice.edge(lattice.edge_index(Alignment.Z, x, y, z)).state is EdgeState.DOOR
            down = z > 0 and lattice.edge(lattice.edge_index(Alignment.Z, x, y, z - 1)).state is EdgeState.DOOR
            if up and down:
                rows[2 * y + 1][2 * x + 1] = STAIR_BOTH
            elif up:
                rows[2 * y + 1][2 * x + 1] = STAIR_UP
            elif down:
                rows[2 * y + 1][2 * x + 1] = STAIR_DOWN
    for e in graph.edges():
        if e.z != z or e.alignment is Alignment.Z:
            continue
        ch = _EDGE_CHARS[e.alignment][e.state]
        if e.alignment is Alignment.X:
            rows[2 * e.y + 1][2 * e.x + 2] = ch
        else:
            rows[2 * e.y + 2][2 * e.x + 1] = ch
    return ["".join(r) for r in rows]


def render_plan(graph: "DungeonGraph") -> str:
    out = []
    for z in range(graph.floors):
        out.append(f"floor {z}")
        out.extend(render_floor(graph, z))
    return "\n".join(out)


__all__ = ["render_floor", "render_plan"]
