# gridpath/core/maze.py
#!/usr/bin/env python3
"""
Maze generation by randomized recursive backtracking.

The board is filled with walls, then corridors are carved two cells at a
time from the seed (1, 1). Every carved cell sits on the same odd/odd
lattice, so the carve is a spanning tree over that lattice: any two carved
cells are joined by exactly one corridor path.

Start and end may sit off that lattice (e.g. on an even row). Clearing the
3x3 block around each marker usually meets a corridor; a marker in the last
row or column of an even-sized board lies beyond the lattice, so a straight
corridor is carved from it to the nearest lattice cell.
"""

import logging
import random
from collections import deque
from typing import List, Optional, Set

from gridpath.core.types import Grid, Cell, Coord, EMPTY, WALL, START, END

logger = logging.getLogger(__name__)

SEED: Coord = (1, 1)
DIRECTIONS = [(-2, 0), (2, 0), (0, -2), (0, 2)]


def _carvable(grid: Grid, r: int, c: int) -> bool:
    # strictly inside the outer border
    return 0 < r < grid.rows - 1 and 0 < c < grid.cols - 1


def _clear_around(grid: Grid, center: Coord) -> None:
    cr, cc = center
    for dr in (-1, 0, 1):
        for dc in (-1, 0, 1):
            n = (cr + dr, cc + dc)
            if grid.in_bounds(n) and grid.at(n).kind == WALL:
                grid.at(n).kind = EMPTY


def _last_odd(n: int) -> int:
    # largest odd index strictly inside the border
    return n - 2 if (n - 2) % 2 else n - 3


def _nearest_lattice(grid: Grid, c: Coord) -> Coord:
    r, col = c
    r = max(1, min(r if r % 2 else r - 1, _last_odd(grid.rows)))
    col = max(1, min(col if col % 2 else col - 1, _last_odd(grid.cols)))
    return (r, col)


def _reachable(grid: Grid, origin: Coord) -> Set[Coord]:
    seen = {origin}
    queue = deque([origin])
    while queue:
        r, c = queue.popleft()
        for n in ((r - 1, c), (r + 1, c), (r, c - 1), (r, c + 1)):
            if grid.in_bounds(n) and n not in seen and not grid.is_block(n):
                seen.add(n)
                queue.append(n)
    return seen


def _connect(grid: Grid, marker: Coord) -> None:
    """Carve an L-shaped corridor (rows first) from marker to the lattice if it is cut off."""
    if marker in _reachable(grid, SEED):
        return
    tr, tc = _nearest_lattice(grid, marker)
    r, c = marker
    while (r, c) != (tr, tc):
        if r != tr:
            r += 1 if tr > r else -1
        else:
            c += 1 if tc > c else -1
        if grid.cells[r][c].kind == WALL:
            grid.cells[r][c].kind = EMPTY
    logger.debug("maze: corridor from %s to lattice cell %s", marker, (tr, tc))


def generate_maze(grid: Grid, rng: Optional[random.Random] = None) -> Grid:
    """Return a new grid of the same size and markers with a carved maze."""
    rng = rng or random
    rows, cols = grid.rows, grid.cols
    cells = [[Cell(r, c, WALL) for c in range(cols)] for r in range(rows)]
    maze = Grid(rows, cols, cells, grid.start, grid.end)

    carved = 0
    if _carvable(maze, *SEED):
        maze.at(SEED).kind = EMPTY
        carved = 1
        stack: List[Coord] = [SEED]
        while stack:
            r, c = stack[-1]
            shuffled = list(DIRECTIONS)
            rng.shuffle(shuffled)
            for dr, dc in shuffled:
                nr, nc = r + dr, c + dc
                if _carvable(maze, nr, nc) and maze.cells[nr][nc].kind == WALL:
                    maze.cells[nr][nc].kind = EMPTY
                    maze.cells[r + dr // 2][c + dc // 2].kind = EMPTY
                    stack.append((nr, nc))
                    carved += 1
                    break
            else:
                stack.pop()

    _clear_around(maze, maze.start)
    _clear_around(maze, maze.end)
    if carved:
        _connect(maze, maze.start)
        _connect(maze, maze.end)
    maze.at(maze.start).kind = START
    maze.at(maze.end).kind = END

    logger.debug("maze %dx%d: carved %d lattice cells", rows, cols, carved)
    return maze
