"""Structural invariants of generated dungeons.

Invariants covered:
1. Room footprints lie inside the grid and never overlap.
2. Every cell ends up covered by some room (growth only stops when no room has a vacant neighbour).
3. Every room is reachable from the seed room through doors only.
4. Exactly rooms - 1 doors exist (spanning tree over rooms).
5. Unused edges only remain inside multi-cell rooms.
6. An edge that became a door is never changed again.
"""

from __future__ import annotations

import pytest

from dungeongen.dungeon import DungeonGraph, EdgeState, GenerationState, Room
from dungeongen.dungeon.connectivity import analyze, door_adjacency, reachable_rooms
from dungeongen.dungeon.lattice import Lattice

from tests.dungeon_test_utils import bfs_cells, covered_cells, generated

SIZES = [(1, 1, 1), (2, 1, 1), (1, 1, 5), (1, 7, 1), (3, 3, 1), (5, 1, 3), (4, 3, 2), (8, 8, 8)]
SEEDS = [0, 1, 2, 42, 31337, 2**31 - 1]


@pytest.mark.parametrize("size", SIZES)
@pytest.mark.parametrize("seed", SEEDS)
def test_generation_is_structurally_sound(size, seed):
    g = generated(*size, seed)
    assert g.state is GenerationState.DONE
    issues = analyze(g)
    assert issues == {k: [] for k in issues}, f"size={size} seed={seed}: {issues}"

    w, l, f = size
    cells = covered_cells(g)
    assert len(cells) == w * l * f
    assert all(len(owners) == 1 for owners in cells.values())

    doors = [e for e in g.edges() if e.state is EdgeState.DOOR]
    assert len(doors) == len(g.rooms()) - 1


@pytest.mark.parametrize("seed", [3, 77, 1045790396])
def test_every_cell_reachable_from_seed_room_through_doors(seed):
    g = generated(6, 5, 3, seed)
    seed_room = g.rooms()[0]
    reach = bfs_cells(g, (seed_room.x, seed_room.y, seed_room.z))
    assert len(reach) == 6 * 5 * 3
    assert reachable_rooms(g) == set(range(len(g.rooms())))


def test_seed_room_is_unit_sized():
    for seed in range(10):
        g = generated(5, 5, 2, seed)
        first = g.rooms()[0]
        assert (first.w, first.l) == (1, 1)


def test_each_room_after_seed_has_exactly_one_door_to_an_earlier_room():
    g = generated(8, 8, 4, 99)
    adj = door_adjacency(g)
    for idx in range(1, len(g.rooms())):
        parents = [n for n in adj[idx] if n < idx]
        assert len(parents) == 1, f"room {idx} joined to earlier rooms {parents}"


def test_larger_rooms_can_swallow_the_growth_target():
    """Rooms bigger than 1x1 cover the target cell and extend past it; the door count still holds."""
    swallowed = 0
    for seed in range(5):
        g = generated(8, 8, 8, seed)
        big = [r for r in g.rooms()[1:] if r.area > 1]
        swallowed += len(big)
        assert g.metrics["swallowed_targets"] == len(big)
        assert g.metrics["doors"] == len(g.rooms()) - 1
        adj = door_adjacency(g)
        for idx, room in enumerate(g.rooms()):
            if room.area > 1 and idx > 0:
                assert any(n < idx for n in adj[idx])
    assert swallowed > 0


def test_door_is_never_overwritten(monkeypatch):
    history = []
    real_open, real_seal = Lattice.open_door, Lattice.seal

    def snapshot(lat):
        return [e.state for e in lat.edges]

    def open_door(self, index):
        before = snapshot(self)
        real_open(self, index)
        history.append((before, snapshot(self)))

    def seal(self, indices):
        before = snapshot(self)
        changed = real_seal(self, indices)
        history.append((before, snapshot(self)))
        return changed

    monkeypatch.setattr(Lattice, "open_door", open_door)
    monkeypatch.setattr(Lattice, "seal", seal)
    generated(4, 4, 3, 5150)
    assert history
    for before, after in history:
        for b, a in zip(before, after):
            if b is EdgeState.DOOR:
                assert a is EdgeState.DOOR
            if b is EdgeState.WALL:
                assert a in (EdgeState.WALL, EdgeState.DOOR)


def test_nothing_enumerated_before_first_generate():
    g = DungeonGraph(4, 4, 2)
    assert g.state is GenerationState.IDLE
    assert g.rooms() == ()
    assert g.edges() == ()
    assert g.room_at(0, 0, 0) is None
    assert g.metrics == {}


def test_enumeration_is_restartable():
    g = generated(4, 4, 2, 8)
    assert g.rooms() == g.rooms()
    assert [e.to_dict() for e in g.edges()] == [e.to_dict() for e in g.edges()]


def test_regenerate_replaces_previous_layout():
    g = generated(6, 6, 3, 1)
    first = g.snapshot()
    g.generate(2)
    fresh = generated(6, 6, 3, 2)
    assert g.snapshot() == fresh.snapshot()
    assert g.snapshot() != first
    assert g.seed == 2
    assert len(g.rooms()) == len(fresh.rooms())
    assert g.metrics["rooms"] == len(g.rooms())


def test_single_cell_grid():
    g = generated(1, 1, 1, 123)
    assert g.rooms() == (Room(0, 0, 0, 1, 1),)
    assert g.edges() == ()
    assert g.metrics["doors"] == 0
    assert g.metrics["backtracks"] == 0


@pytest.mark.parametrize("seed", range(12))
def test_two_cell_grid_covers_both_cells(seed):
    g = generated(2, 1, 1, seed)
    assert {c for r in g.rooms() for c in r.cells()} == {(0, 0, 0), (1, 0, 0)}
    (edge,) = g.edges()
    assert edge.state in (EdgeState.WALL, EdgeState.DOOR)
    # Only a 1x1 room fits next to the seed room, so the two rooms share the door
    assert len(g.rooms()) == 2
    assert edge.state is EdgeState.DOOR


def test_room_at_maps_cells_back_to_rooms():
    g = generated(5, 4, 2, 11)
    for room in g.rooms():
        for c in room.cells():
            assert g.room_at(*c) is room
    assert g.room_at(5, 0, 0) is None


def test_metrics_reflect_edge_counts():
    g = generated(6, 6, 2, 404)
    m = g.metrics
    counts = g.lattice.counts()
    assert m["rooms"] == len(g.rooms())
    assert m["walls"] == counts[EdgeState.WALL]
    assert m["unused_edges"] == counts[EdgeState.UNUSED]
    assert m["walls"] + m["doors"] + m["unused_edges"] == len(g.edges())
    assert m["unreachable_rooms"] == 0
    assert m["size_draws"] == len(g.rooms()) - 1 + m["placement_failures"]
    assert m["runtime_ms"] >= 0


def test_metrics_can_be_disabled():
    g = DungeonGraph(4, 4, 2, enable_metrics=False)
    g.generate(1)
    assert g.metrics == {}
    assert len(g.rooms()) > 0


def test_enumerated_edges_are_read_only_copies():
    g = generated(2, 1, 1, 6)
    (edge,) = g.edges()
    with pytest.raises(AttributeError):
        edge.state = EdgeState.UNUSED
    assert edge.far_cell == (1, 0, 0)
    assert g.lattice.edge(0).state is EdgeState.DOOR
    assert g.edges()[0] == edge
