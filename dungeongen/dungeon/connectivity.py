"""Door connectivity and structural checks over a generated dungeon.

Used by the generation metrics, the seed diagnostics script and the tests.
"""
from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING, Any, Dict, List, Set

from .cells import EdgeState

if TYPE_CHECKING:
    from .generator import DungeonGraph


def door_adjacency(graph: "DungeonGraph") -> Dict[int, Set[int]]:
    """Room index -> indices of rooms reachable through a single door."""
    adj: Dict[int, Set[int]] = {i: set() for i in range(len(graph.rooms()))}
    for e in graph.edges():
        if e.state is not EdgeState.DOOR:
            continue
        a = graph.room_index_at(e.x, e.y, e.z)
        b = graph.room_index_at(*e.far_cell)
        if a is None or b is None or a == b:
            continue
        adj[a].add(b)
        adj[b].add(a)
    return adj


def reachable_rooms(graph: "DungeonGraph", start: int = 0) -> Set[int]:
    if not graph.rooms():
        return set()
    adj = door_adjacency(graph)
    visited = {start}
    q = deque([start])
    while q:
        cur = q.popleft()
        for nxt in adj[cur]:
            if nxt not in visited:
                visited.add(nxt)
                q.append(nxt)
    return visited


def analyze(graph: "DungeonGraph") -> Dict[str, List[Any]]:
    """Collect structural issues; every list is empty for a well-formed layout."""
    w, l, f = graph.size  # noqa: E741
    rooms = graph.rooms()
    claims: Dict[tuple, int] = {}
    out_of_bounds = []
    for idx, room in enumerate(rooms):
        for (x, y, z) in room.cells():
            if not (0 <= x < w and 0 <= y < l and 0 <= z < f):
                out_of_bounds.append(idx)
                break
            claims[(x, y, z)] = claims.get((x, y, z), 0) + 1
    overlapping = sorted(c for c, n in claims.items() if n > 1)
    vacant = sorted(
        (x, y, z) for x in range(w) for y in range(l) for z in range(f) if (x, y, z) not in claims
    ) if rooms else []

    unused_between_rooms = []
    interior_boundaries = []
    doors = 0
    for e in graph.edges():
        a = graph.room_index_at(e.x, e.y, e.z)
        b = graph.room_index_at(*e.far_cell)
        if e.state is EdgeState.DOOR:
            doors += 1
        if a is not None and a == b:
            if e.state is not EdgeState.UNUSED:
                interior_boundaries.append((e.alignment.value, e.x, e.y, e.z))
        elif e.state is EdgeState.UNUSED:
            unused_between_rooms.append((e.alignment.value, e.x, e.y, e.z))

    unreachable = sorted(set(range(len(rooms))) - reachable_rooms(graph))
    mismatch = [] if not rooms or doors == len(rooms) - 1 else [doors, len(rooms) - 1]
    return {
        "out_of_bounds_rooms": out_of_bounds,
        "overlapping_cells": overlapping,
        "vacant_cells": vacant,
        "unreachable_rooms": unreachable,
        "unused_between_rooms": unused_between_rooms,
        "interior_boundaries": interior_boundaries,
        "door_count_mismatch": mismatch,
    }


__all__ = ["analyze", "door_adjacency", "reachable_rooms"]
