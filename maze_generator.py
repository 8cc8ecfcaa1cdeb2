# maze_generator.py
import logging
from enum import IntEnum
from typing import List, Optional, Tuple

import numpy as np

log = logging.getLogger(__name__)

DEFAULT_HEIGHT = 63
DEFAULT_WIDTH = 63
MIN_DIMENSION = 3


class CellState(IntEnum):
    WALL = 0
    PATH = 1
    WORKING_PATH = 2  # part of the random walk currently in progress


class MazeDimensionError(ValueError):
    """Raised when the requested grid is too small to hold a maze."""


# ----------------- helpers -----------------
def _force_odd(n: int) -> int:
    return n + 1 if n % 2 == 0 else n


def _midpoint(a: Tuple[int, int], b: Tuple[int, int]) -> Tuple[int, int]:
    return (a[0] + b[0]) // 2, (a[1] + b[1]) // 2


def count_passages(grid: np.ndarray) -> int:
    """
    Number of opened walls between odd-coordinate cells.
    For a perfect maze this is (cells - 1).
    """
    g = np.asarray(grid)
    opened = 0
    # horizontal openings sit on odd rows / even interior columns, vertical ones the other way round
    opened += int((g[1:-1:2, 2:-1:2] == CellState.PATH).sum())
    opened += int((g[2:-1:2, 1:-1:2] == CellState.PATH).sum())
    return opened


# ----------------- Wilson's algorithm -----------------
class MazeGenerator:
    """
    Perfect maze generator using Wilson's algorithm (loop-erased random walks).

    The grid is an odd x odd int8 array of CellState values indexed [row, col].
    Cells at odd row and odd column are the maze positions; everything else is
    either a wall or an opening between two positions. Coordinates handled by the
    walk are (x, y) = (col, row).
    """

    def __init__(self,
                 height: int = DEFAULT_HEIGHT,
                 width: int = DEFAULT_WIDTH,
                 rng: Optional[np.random.Generator] = None,
                 seed: Optional[int] = None):
        for name, value in (("height", height), ("width", width)):
            if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
                raise MazeDimensionError(f"{name} must be an integer, got {value!r}")

        self.height = _force_odd(int(height))
        self.width = _force_odd(int(width))
        if self.height < MIN_DIMENSION or self.width < MIN_DIMENSION:
            raise MazeDimensionError(
                f"maze must be at least {MIN_DIMENSION}x{MIN_DIMENSION}, "
                f"got {self.height}x{self.width} after forcing odd dimensions"
            )

        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.grid = np.full((self.height, self.width), CellState.WALL, dtype=np.int8)

    @property
    def entrance(self) -> Tuple[int, int]:
        return 1, 0

    @property
    def exit(self) -> Tuple[int, int]:
        return self.width - 2, self.height - 1

    def is_complete(self) -> bool:
        return bool(np.all(self.grid[1::2, 1::2] == CellState.PATH))

    def generate(self) -> np.ndarray:
        """
        Carve a new maze into self.grid and return it.
        Every call starts from an all-wall grid, so each call yields a fresh maze.
        """
        self.grid.fill(CellState.WALL)

        x, y = self._random_cell()
        self.grid[y, x] = CellState.PATH

        walks = 0
        while not self.is_complete():
            self._walk(self._random_wall_cell())
            walks += 1

        # entrance top-left, exit bottom-right
        self.grid[0, 1] = CellState.PATH
        self.grid[self.height - 1, self.width - 2] = CellState.PATH

        log.debug("generated %dx%d maze in %d walks", self.height, self.width, walks)
        return self.grid

    # ----------------- walk -----------------
    def _walk(self, start: Tuple[int, int]) -> None:
        """
        Loop-erased random walk from start until it hits the existing maze,
        then commit the walk as path.
        """
        g = self.grid
        g[start[1], start[0]] = CellState.WORKING_PATH
        walk: List[Tuple[int, int]] = [start]
        position = {start: 0}  # cell -> index in walk

        while True:
            last = walk[-1]
            moves = self._valid_moves(last)
            nxt = moves[int(self.rng.integers(len(moves)))]
            wx, wy = _midpoint(last, nxt)
            g[wy, wx] = CellState.WORKING_PATH

            if g[nxt[1], nxt[0]] == CellState.PATH:
                g[g == CellState.WORKING_PATH] = CellState.PATH
                log.debug("committed walk of %d cells from %s", len(walk), start)
                return

            loc = position.get(nxt)
            if loc is None:
                g[nxt[1], nxt[0]] = CellState.WORKING_PATH
                position[nxt] = len(walk)
                walk.append(nxt)
                continue

            # walk ran into itself: drop the loop, keep going from nxt
            g[wy, wx] = CellState.WALL
            erased = walk[loc + 1:]
            del walk[loc + 1:]
            for i in range(len(erased) - 1, -1, -1):
                cell = erased[i]
                prev = erased[i - 1] if i > 0 else nxt
                g[cell[1], cell[0]] = CellState.WALL
                px, py = _midpoint(cell, prev)
                g[py, px] = CellState.WALL
                del position[cell]
            log.debug("erased loop of %d cells at %s", len(erased), nxt)

    def _valid_moves(self, cell: Tuple[int, int]) -> List[Tuple[int, int]]:
        # east, west, north, south; 2-cell stride keeps the walk on odd coordinates
        x, y = cell
        moves = []
        if x + 2 < self.width:
            moves.append((x + 2, y))
        if x - 2 > 0:
            moves.append((x - 2, y))
        if y - 2 > 0:
            moves.append((x, y - 2))
        if y + 2 < self.height:
            moves.append((x, y + 2))
        return moves

    def _random_cell(self) -> Tuple[int, int]:
        x = int(self.rng.integers(self.width // 2)) * 2 + 1
        y = int(self.rng.integers(self.height // 2)) * 2 + 1
        return x, y

    def _random_wall_cell(self) -> Tuple[int, int]:
        rows, cols = np.nonzero(self.grid[1::2, 1::2] == CellState.WALL)
        i = int(self.rng.integers(len(rows)))
        return int(cols[i]) * 2 + 1, int(rows[i]) * 2 + 1
