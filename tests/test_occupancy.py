import pytest

from dungeongen.dungeon import InvariantViolation, Room
from dungeongen.dungeon.lattice import Lattice
from dungeongen.dungeon.occupancy import OccupancyGrid


def make(w=4, l=4, f=2):
    return OccupancyGrid(w, l, f), Lattice(w, l, f)


def test_area_clear_respects_bounds():
    grid, _ = make()
    assert grid.is_area_clear(0, 0, 0, 4, 4)
    assert grid.is_area_clear(2, 1, 1, 2, 3)
    assert not grid.is_area_clear(3, 0, 0, 2, 1)  # runs off the east side
    assert not grid.is_area_clear(0, 2, 0, 1, 3)  # runs off the south side
    assert not grid.is_area_clear(-1, 0, 0, 1, 1)
    assert not grid.is_area_clear(0, 0, 2, 1, 1)  # no such floor


def test_place_marks_footprint_with_room_index():
    grid, _ = make()
    grid.place(Room(1, 1, 0, 2, 2), 7)
    assert grid.room_at(1, 1, 0) == 7
    assert grid.room_at(2, 2, 0) == 7
    assert grid.room_at(2, 2, 1) is None
    assert grid.room_at(0, 0, 0) is None
    assert not grid.is_area_clear(0, 0, 0, 2, 2)
    assert grid.is_area_clear(0, 0, 0, 1, 4)
    assert grid.vacant_count() == 4 * 4 * 2 - 4


def test_place_over_occupied_cell_is_an_invariant_violation():
    grid, _ = make()
    grid.place(Room(0, 0, 0, 2, 1), 0)
    with pytest.raises(InvariantViolation):
        grid.place(Room(1, 0, 0, 1, 2), 1)
    # Nothing from the rejected room leaked into the grid
    assert grid.room_at(1, 1, 0) is None


def test_place_out_of_bounds_is_an_invariant_violation():
    grid, _ = make()
    with pytest.raises(InvariantViolation):
        grid.place(Room(3, 3, 0, 2, 2), 0)


def test_neighbor_of_lists_vacant_cells_with_shared_edges():
    grid, lat = make(3, 3, 2)
    room = Room(1, 1, 0, 1, 1)
    grid.place(room, 0)
    neighbours = grid.neighbor_of(room, lat)
    assert [(n.x, n.y, n.z) for n in neighbours] == [(1, 0, 0), (1, 2, 0), (0, 1, 0), (2, 1, 0), (1, 1, 1)]
    assert [n.edge for n in neighbours] == lat.edges_bordering(room)


def test_neighbor_of_excludes_occupied_cells():
    grid, lat = make(3, 3, 1)
    room = Room(1, 1, 0, 1, 1)
    grid.place(room, 0)
    grid.place(Room(0, 0, 0, 3, 1), 1)  # whole north row
    grid.place(Room(2, 1, 0, 1, 2), 2)  # east column below it
    cells = [(n.x, n.y, n.z) for n in grid.neighbor_of(room, lat)]
    assert cells == [(1, 2, 0), (0, 1, 0)]


def test_neighbor_of_multi_cell_room_on_top_floor():
    grid, lat = make(4, 4, 2)
    room = Room(0, 0, 1, 2, 2)
    grid.place(room, 0)
    cells = [(n.x, n.y, n.z) for n in grid.neighbor_of(room, lat)]
    # south (2), east (2), down (4); no north/west/up
    assert len(cells) == 8
    assert cells[:2] == [(0, 2, 1), (1, 2, 1)]
    assert cells[2:4] == [(2, 0, 1), (2, 1, 1)]
    assert all(z == 0 for _, _, z in cells[4:])
