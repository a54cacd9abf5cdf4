import pytest

from tlib2d.astar import AStar2D, AStarCell, RaycastResult


def _adjacent(a, b):
    return max(abs(a[0] - b[0]), abs(a[1] - b[1])) == 1


def test_default_size():
    grid = AStar2D()
    assert grid.size() == (10, 10)
    assert grid.width() == 10
    assert grid.height() == 10


def test_in_bounds_and_at():
    grid = AStar2D(4, 3)
    assert grid.in_bounds((3, 2))
    assert not grid.in_bounds((4, 0))
    assert not grid.in_bounds((-1, 0))
    with pytest.raises(IndexError):
        grid.at((0, 3))


def test_resize_keeps_existing_cells():
    grid = AStar2D(3, 3)
    grid.at((1, 1)).passable = False
    grid.resize(5, 4)
    assert grid.size() == (5, 4)
    assert not grid.passable((1, 1))
    assert grid.passable((4, 3))


def test_clear_with_cell():
    grid = AStar2D(3, 3)
    grid.clear(AStarCell(False, 2.0))
    assert not grid.passable((2, 2))
    assert grid.at((0, 0)).move_cost == 2.0
    grid.at((0, 0)).passable = True
    assert not grid.passable((1, 0))


def test_neighbors_of_corner_in_direction_order():
    grid = AStar2D(5, 5)
    assert grid.neighbors((0, 0)) == [(1, 0), (0, 1), (1, 1)]


def test_neighbors_skip_impassable():
    grid = AStar2D(5, 5)
    grid.at((1, 0)).passable = False
    assert (1, 0) not in grid.neighbors((0, 0))
    assert len(grid.neighbors((2, 2))) == 8


def test_path_on_open_grid_is_diagonal():
    grid = AStar2D(5, 5)
    path = grid.compute_path((0, 0), (4, 4))
    assert path == [(1, 1), (2, 2), (3, 3), (4, 4)]


def test_path_include_start():
    grid = AStar2D(5, 5)
    path = grid.compute_path((0, 0), (3, 0), include_start=True)
    assert path[0] == (0, 0)
    assert path[-1] == (3, 0)
    assert all(_adjacent(a, b) for a, b in zip(path, path[1:]))


def test_path_around_wall():
    grid = AStar2D(5, 5)
    for y in range(4):
        grid.at((2, y)).passable = False
    path = grid.compute_path((0, 0), (4, 0))
    assert path[-1] == (4, 0)
    assert all(grid.passable(p) for p in path)
    assert any(p[1] == 4 for p in path)
    full = [(0, 0)] + path
    assert all(_adjacent(a, b) for a, b in zip(full, full[1:]))


def test_unreachable_goal_gives_empty_path():
    grid = AStar2D(5, 5)
    for y in range(5):
        grid.at((2, y)).passable = False
    assert grid.compute_path((0, 0), (4, 4)) == []


def test_out_of_bounds_gives_empty_path():
    grid = AStar2D(5, 5)
    assert grid.compute_path((-1, 0), (4, 4)) == []
    assert grid.compute_path((0, 0), (5, 5)) == []


def test_impassable_goal_path_stops_next_to_it():
    grid = AStar2D(5, 5)
    grid.at((4, 0)).passable = False
    path = grid.compute_path((0, 0), (4, 0))
    assert path[-1] == (3, 0)
    assert not grid.passable((4, 0))


def test_same_start_and_goal():
    grid = AStar2D(5, 5)
    assert grid.compute_path((2, 2), (2, 2)) == []
    assert grid.compute_path((2, 2), (2, 2), include_start=True) == [(2, 2)]


def test_debug_maps_are_filled():
    grid = AStar2D(5, 5)
    came_from = {(9, 9): (9, 9)}
    cost_so_far = {}
    grid.compute_path((0, 0), (2, 0), came_from=came_from, cost_so_far=cost_so_far)
    assert (9, 9) not in came_from
    assert came_from[(0, 0)] == (0, 0)
    assert cost_so_far[(0, 0)] == 0.0
    assert came_from[(2, 0)] == (1, 0)


def test_expensive_cells_are_avoided():
    grid = AStar2D(5, 3)
    for x in range(1, 4):
        grid.at((x, 1)).move_cost = 100.0
    path = grid.compute_path((0, 1), (4, 1))
    assert path[-1] == (4, 1)
    assert all(p[1] != 1 for p in path[:-1])


def test_line_horizontal():
    grid = AStar2D(5, 5)
    assert grid.line((0, 0), (3, 0)) == [(0, 0), (1, 0), (2, 0), (3, 0)]


def test_line_endpoints_and_length():
    grid = AStar2D(10, 10)
    points = grid.line((1, 2), (7, 5))
    assert points[0] == (1, 2)
    assert points[-1] == (7, 5)
    assert len(points) == 7
    assert all(_adjacent(a, b) for a, b in zip(points, points[1:]))


def test_line_single_point():
    grid = AStar2D(5, 5)
    assert grid.line((2, 3), (2, 3)) == [(2, 3)]


def test_raycast_clear():
    grid = AStar2D(5, 5)
    visited = []
    result = grid.raycast((0, 0), (4, 4), visited)
    assert result == RaycastResult(False, (4, 4))
    assert visited == grid.line((0, 0), (4, 4))


def test_raycast_hits_wall():
    grid = AStar2D(5, 5)
    grid.at((2, 0)).passable = False
    visited = [(9, 9)]
    result = grid.raycast((0, 0), (4, 0), visited)
    assert result.hit
    assert result.pos == (2, 0)
    assert visited == [(0, 0), (1, 0), (2, 0)]


def test_raycast_leaving_grid_hits():
    grid = AStar2D(3, 3)
    result = grid.raycast((0, 0), (5, 0))
    assert result.hit
    assert result.pos == (3, 0)