import networkx as nx
import numpy as np
import pytest

from maze_generator import CellState, MazeGenerator
from maze_runner import build_graph
from pathfinder import Node, Pathfinder, manhattan

W, P = int(CellState.WALL), int(CellState.PATH)


def _assert_contiguous(path):
    for (x1, y1), (x2, y2) in zip(path, path[1:]):
        assert abs(x2 - x1) + abs(y2 - y1) == 1


@pytest.mark.parametrize("height,width,seed", [(5, 5, 0), (9, 13, 1), (21, 21, 2), (31, 17, 3)])
def test_path_runs_entrance_to_exit(height, width, seed):
    grid = MazeGenerator(height, width, seed=seed).generate()
    path = Pathfinder(grid).find_path()
    assert path
    assert path[0] == (1, 0)
    assert path[-1] == (width - 2, height - 1)
    _assert_contiguous(path)
    for x, y in path:
        assert grid[y, x] == CellState.PATH
    assert len(set(path)) == len(path)


def test_five_by_five_scenario():
    gen = MazeGenerator(5, 5, seed=42)
    grid = gen.generate()
    assert grid[0, 1] == CellState.PATH
    assert grid[4, 3] == CellState.PATH
    path = Pathfinder(grid).find_path()
    assert path[0] == gen.entrance
    assert path[-1] == gen.exit


def test_minimal_maze_path():
    grid = MazeGenerator(3, 3, seed=0).generate()
    path = Pathfinder(grid).find_path()
    assert path == [(1, 0), (1, 1), (1, 2)]


@pytest.mark.parametrize("seed", range(5))
def test_matches_unique_tree_path(seed):
    grid = MazeGenerator(25, 25, seed=seed).generate()
    expected = nx.shortest_path(build_graph(grid), (1, 0), (23, 24))
    assert Pathfinder(grid).find_path() == expected


def test_all_wall_grid_has_no_path():
    grid = np.zeros((7, 7), dtype=np.int8)
    pf = Pathfinder(grid)
    assert pf.find_path() is None
    assert pf.runs == 0


def test_unreachable_exit_has_no_path():
    grid = np.array([
        [W, P, W, W, W],
        [W, P, P, P, W],
        [W, W, W, W, W],
        [W, P, P, P, W],
        [W, W, W, P, W],
    ], dtype=np.int8)
    pf = Pathfinder(grid)
    assert pf.find_path() is None
    # the open set drained after visiting the top corridor
    assert pf.runs == 3


def test_open_room_takes_shortest_route():
    """Without the tree structure A* still returns a shortest path."""
    grid = np.full((7, 7), P, dtype=np.int8)
    path = Pathfinder(grid).find_path()
    assert path[0] == (1, 0) and path[-1] == (5, 6)
    _assert_contiguous(path)
    assert len(path) == manhattan(Node(1, 0), Node(5, 6)) + 1


def test_detour_around_wall():
    grid = np.array([
        [W, P, W, W, W],
        [W, P, P, P, W],
        [W, W, W, P, W],
        [W, P, P, P, W],
        [W, P, W, P, W],
    ], dtype=np.int8)
    path = Pathfinder(grid).find_path()
    assert path == [(1, 0), (1, 1), (2, 1), (3, 1), (3, 2), (3, 3), (3, 4)]


def test_grid_is_not_mutated():
    grid = MazeGenerator(15, 15, seed=4).generate()
    before = grid.copy()
    Pathfinder(grid).find_path()
    assert np.array_equal(grid, before)


def test_accepts_nested_lists():
    grid = [[W, P, W], [W, P, W], [W, P, W]]
    assert Pathfinder(grid).find_path() == [(1, 0), (1, 1), (1, 2)]


def test_repeat_search_gives_same_path():
    grid = MazeGenerator(21, 21, seed=6).generate()
    pf = Pathfinder(grid)
    first = pf.find_path()
    assert pf.find_path() == first


def test_node_table_and_adjacency():
    grid = [[W, P, W], [W, P, W], [W, P, W]]
    pf = Pathfinder(grid)
    assert len(pf.nodes) == 9
    middle = pf.nodes[pf.index(1, 1)]
    assert (middle.x, middle.y) == (1, 1)
    # above then below
    assert middle.adjacent == [pf.index(1, 0), pf.index(1, 2)]
    # a wall cell next to open cells still links into them
    assert pf.nodes[pf.index(0, 1)].adjacent == [pf.index(1, 1)]


def test_parent_links_after_search():
    grid = [[W, P, W], [W, P, W], [W, P, W]]
    pf = Pathfinder(grid)
    pf.find_path()
    end = pf.nodes[pf.end_index]
    assert end.parent == pf.index(1, 1)
    assert pf.nodes[pf.start_index].parent is None
    assert (end.g, end.h, end.f) == (2, 0, 2)


@pytest.mark.parametrize("grid", [np.zeros(5), np.zeros((2, 2, 2)), np.zeros((1, 5)), np.zeros((5, 2))])
def test_bad_grid_shape_rejected(grid):
    with pytest.raises(ValueError):
        Pathfinder(grid)
