# pathfinder.py
import heapq
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import numpy as np

from maze_generator import CellState

log = logging.getLogger(__name__)


@dataclass
class Node:
    x: int
    y: int
    adjacent: List[int] = field(default_factory=list)  # indices into the node table
    parent: Optional[int] = None
    g: int = 0
    h: int = 0
    f: int = 0


def manhattan(a: Node, b: Node) -> int:
    return abs(a.x - b.x) + abs(a.y - b.y)


class Pathfinder:
    """
    A* solver for a finished maze grid.

    One Node per grid cell, stored row-major in self.nodes; parent and adjacency
    links are indices into that table. The entrance is (x=1, y=0) and the exit is
    (x=width-2, y=height-1). The grid itself is only read.
    """

    def __init__(self, grid):
        g = np.asarray(grid)
        if g.ndim != 2:
            raise ValueError(f"grid must be 2-dimensional, got shape {g.shape}")
        if g.shape[0] < 2 or g.shape[1] < 3:
            raise ValueError(f"grid of shape {g.shape} has no room for an entrance and exit")

        self.grid = g
        self.height, self.width = g.shape
        self.nodes: List[Node] = []
        self.runs = 0
        self._build_nodes()

    @property
    def start_index(self) -> int:
        return 1

    @property
    def end_index(self) -> int:
        return self.height * self.width - 2

    def index(self, x: int, y: int) -> int:
        return y * self.width + x

    def _build_nodes(self) -> None:
        h, w = self.height, self.width
        is_path = self.grid == CellState.PATH
        self.nodes = [Node(x=col, y=row) for row in range(h) for col in range(w)]

        for row in range(h):
            for col in range(w):
                adj = self.nodes[self.index(col, row)].adjacent
                # left, right, above, below
                if col > 0 and is_path[row, col - 1]:
                    adj.append(self.index(col - 1, row))
                if col < w - 1 and is_path[row, col + 1]:
                    adj.append(self.index(col + 1, row))
                if row > 0 and is_path[row - 1, col]:
                    adj.append(self.index(col, row - 1))
                if row < h - 1 and is_path[row + 1, col]:
                    adj.append(self.index(col, row + 1))

    def _reset(self) -> None:
        for node in self.nodes:
            node.parent = None
            node.g = node.h = node.f = 0

    def find_path(self) -> Optional[List[Tuple[int, int]]]:
        """
        Run A* from the entrance to the exit.

        Returns the path as (x, y) tuples from entrance to exit inclusive, or None
        when the exit cannot be reached.
        """
        self._reset()
        self.runs = 0

        nodes = self.nodes
        start, end = self.start_index, self.end_index
        for i in (start, end):
            if self.grid[nodes[i].y, nodes[i].x] != CellState.PATH:
                log.debug("no path: cell %s is not open", (nodes[i].x, nodes[i].y))
                return None

        end_node = nodes[end]
        closed = {start}
        # (f, seq, node, parent, g, h); seq keeps equal-f entries in insertion order
        open_heap: List[Tuple[int, int, int, int, int, int]] = []
        seq = 0
        current = start

        while current != end:
            cur = nodes[current]
            for nb in cur.adjacent:
                if nb in closed:
                    continue
                node = nodes[nb]
                h = manhattan(node, end_node)
                g = cur.g + manhattan(node, cur)
                heapq.heappush(open_heap, (g + h, seq, nb, current, g, h))
                seq += 1

            # skip stale entries for nodes closed through a cheaper entry
            while open_heap and open_heap[0][2] in closed:
                heapq.heappop(open_heap)
            if not open_heap:
                log.debug("no path: open set exhausted after %d expansions", self.runs)
                return None

            f, _, current, parent, g, h = heapq.heappop(open_heap)
            node = nodes[current]
            node.parent, node.g, node.h, node.f = parent, g, h, f
            closed.add(current)
            self.runs += 1

        path = []
        i: Optional[int] = end
        while i is not None:
            path.append((nodes[i].x, nodes[i].y))
            i = nodes[i].parent
        path.reverse()
        log.debug("found path of %d cells after %d expansions", len(path), self.runs)
        return path
