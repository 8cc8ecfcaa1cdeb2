# maze_runner.py
import time
from typing import Dict, List, Optional, Tuple, Any

import networkx as nx
import numpy as np

from maze_generator import CellState, MazeGenerator
from pathfinder import Pathfinder

Coord = Tuple[int, int]

# ----------------- helpers -----------------
def _path_len_steps(coords: List[Coord]) -> Tuple[int, int]:
    if len(coords) < 2:
        return 0, 0
    d = 0
    for (x1, y1), (x2, y2) in zip(coords, coords[1:]):
        d += abs(x2 - x1) + abs(y2 - y1)
    return d, len(coords) - 1

def _manhattan(a: Coord, b: Coord) -> int:
    ax, ay = a; bx, by = b
    return abs(bx - ax) + abs(by - ay)

def build_graph(grid: np.ndarray) -> nx.Graph:
    """
    Undirected 4-neighbour graph over the open cells of a grid.
    Nodes are (x, y) tuples, every edge has weight 1.
    """
    open_cells = np.asarray(grid) == CellState.PATH
    G = nx.Graph()
    rows, cols = np.nonzero(open_cells)
    G.add_nodes_from((int(x), int(y)) for y, x in zip(rows, cols))
    h, w = open_cells.shape
    for y, x in zip(rows, cols):
        x, y = int(x), int(y)
        if x + 1 < w and open_cells[y, x + 1]:
            G.add_edge((x, y), (x + 1, y), weight=1)
        if y + 1 < h and open_cells[y + 1, x]:
            G.add_edge((x, y), (x, y + 1), weight=1)
    return G

# ----------------- finders -----------------
def _solve_astar(grid: np.ndarray) -> Tuple[Optional[List[Coord]], int]:
    pf = Pathfinder(grid)
    path = pf.find_path()
    return path, pf.runs

def _solve_nx(method: str):
    def solve(G: nx.Graph, start: Coord, end: Coord) -> Tuple[Optional[List[Coord]], Optional[int]]:
        calls = [0]

        def heuristic(a, b):
            calls[0] += 1
            return _manhattan(a, b)

        try:
            if method == "astar":
                path = nx.astar_path(G, start, end, heuristic=heuristic, weight="weight")
                return path, calls[0]
            if method == "dijkstra":
                return nx.dijkstra_path(G, start, end, weight="weight"), None
            return nx.shortest_path(G, start, end), None
        except (nx.NetworkXNoPath, nx.NodeNotFound):
            return None, calls[0] if method == "astar" else None
    return solve

REFERENCE_FINDERS = [
    ("A* (networkx)", _solve_nx("astar")),
    ("Dijkstra", _solve_nx("dijkstra")),
    ("Breadth-First", _solve_nx("bfs")),
]

def solve_all(grid: np.ndarray, start: Coord, end: Coord) -> Dict[str, Dict[str, Any]]:
    """
    Solve one grid with the in-house A* and every reference finder.
    Each entry holds success, timing, operations, path length and the path itself.
    """
    dist = _manhattan(start, end)
    G = build_graph(grid)

    runs = [("A*", lambda: _solve_astar(grid))]
    for name, finder in REFERENCE_FINDERS:
        runs.append((name, lambda finder=finder: finder(G, start, end)))

    results: Dict[str, Dict[str, Any]] = {}
    for name, run in runs:
        t0 = time.time()
        path, ops = run()
        elapsed = time.time() - t0

        if path:
            coords = [(int(x), int(y)) for x, y in path]
            plen, steps = _path_len_steps(coords)
            success = coords[0] == start and coords[-1] == end
        else:
            coords = []
            plen, steps = 0, 0
            success = False

        eff = (dist / plen) if (success and plen > 0) else 0.0

        results[name] = {
            "success": success,
            "execution_time": elapsed,
            "operations": ops,
            "path_length": plen,
            "steps": steps,
            "path_efficiency": eff,
            "path": coords
        }
    return results

# ----------------- main API -----------------
def build_maze_and_run(height: int,
                       width: int,
                       seed: Optional[int] = None) -> Dict[str, Any]:
    """
    Generate a height x width maze with Wilson's algorithm and solve it.
    Entrance is (1, 0), exit is (width-2, height-1) in (x, y) after forcing odd sizes.
    Returns the grid, the end points and per-algorithm results.
    """
    gen = MazeGenerator(height, width, seed=seed)

    t0 = time.time()
    grid = gen.generate()
    gen_time = time.time() - t0

    start, end = gen.entrance, gen.exit
    results = solve_all(grid, start, end)

    return {
        "grid": grid,
        "height": gen.height,
        "width": gen.width,
        "start": start,
        "end": end,
        "manhattan_distance": _manhattan(start, end),
        "generation_time": gen_time,
        "results": results
    }
