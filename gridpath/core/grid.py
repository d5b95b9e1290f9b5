# gridpath/core/grid.py
#!/usr/bin/env python3
"""
Board construction and editing.

All edits happen in place on the given grid and never raise for a bad
target: an edit that would break the start/end/wall invariants is logged
and ignored (the function returns False).
"""

import logging
from typing import List

from gridpath.core.types import (
    Grid, Cell, Coord, InvalidPosition,
    EMPTY, WALL, START, END, MARKERS, OVERLAYS,
)

logger = logging.getLogger(__name__)

DEFAULT_ROWS = 20
DEFAULT_COLS = 40


def _check_dims(rows: int, cols: int) -> None:
    if rows <= 0 or cols <= 0:
        raise ValueError(f"grid must be at least 1x1, got {rows}x{cols}")
    if rows * cols < 2:
        raise ValueError("grid needs room for both start and end")


def create_grid(rows: int, cols: int, start: Coord, end: Coord) -> Grid:
    """Empty board with the two markers stamped on it."""
    _check_dims(rows, cols)
    start = tuple(start)
    end = tuple(end)
    for label, pos in (("start", start), ("end", end)):
        r, c = pos
        if not (0 <= r < rows and 0 <= c < cols):
            raise InvalidPosition(f"{label} {pos} outside {rows}x{cols} grid")
    if start == end:
        raise InvalidPosition(f"start and end both at {start}")

    cells = [[Cell(r, c) for c in range(cols)] for r in range(rows)]
    cells[start[0]][start[1]].kind = START
    cells[end[0]][end[1]].kind = END
    return Grid(rows, cols, cells, start, end)


def build_grid(rows: int = DEFAULT_ROWS, cols: int = DEFAULT_COLS) -> Grid:
    """Default board: markers on the middle row, an eighth in from each side."""
    _check_dims(rows, cols)
    mid = rows // 2
    start = (mid, min(cols - 1, cols // 8))
    end = (mid, min(cols - 1, cols - cols // 8))
    if start == end:
        # too narrow for the usual layout, fall back to opposite corners
        start, end = (0, 0), (rows - 1, cols - 1)
    return create_grid(rows, cols, start, end)


def in_bounds(grid: Grid, row: int, col: int) -> bool:
    return grid.in_bounds((row, col))


def cell_at(grid: Grid, c: Coord) -> Cell:
    return grid.at(c)


def neighbors(grid: Grid, cell: Cell) -> List[Cell]:
    """4-connected, in-bounds, non-wall neighbours: up, down, left, right."""
    r, c = cell.row, cell.col
    out: List[Cell] = []
    for n in ((r - 1, c), (r + 1, c), (r, c - 1), (r, c + 1)):
        if grid.in_bounds(n) and not grid.is_block(n):
            out.append(grid.at(n))
    return out


def toggle_wall(grid: Grid, row: int, col: int) -> bool:
    if not grid.in_bounds((row, col)):
        logger.debug("toggle_wall: (%d, %d) out of bounds", row, col)
        return False
    cell = grid.cells[row][col]
    if cell.kind in MARKERS:
        logger.debug("toggle_wall: (%d, %d) holds the %s marker", row, col, cell.kind)
        return False
    cell.kind = EMPTY if cell.kind == WALL else WALL
    cell.reset_search()
    return True


def _move_marker(grid: Grid, marker: str, row: int, col: int) -> bool:
    dest = (row, col)
    if not grid.in_bounds(dest):
        logger.debug("move %s: %s out of bounds", marker, dest)
        return False
    current = grid.start if marker == START else grid.end
    if dest == current:
        return True
    target = grid.at(dest)
    if target.kind == WALL or target.kind in MARKERS:
        logger.debug("move %s: %s is %s", marker, dest, target.kind)
        return False

    grid.at(current).kind = EMPTY
    target.kind = marker
    if marker == START:
        grid.start = dest
    else:
        grid.end = dest
    return True


def move_start(grid: Grid, row: int, col: int) -> bool:
    return _move_marker(grid, START, row, col)


def move_end(grid: Grid, row: int, col: int) -> bool:
    return _move_marker(grid, END, row, col)


def clear_path(grid: Grid) -> None:
    """Wipe visited/path/current overlays and search state, keep walls and markers."""
    for cell in grid.iter_cells():
        if cell.kind in OVERLAYS:
            cell.kind = EMPTY
        cell.reset_search()
    # markers are re-stamped so a stray overlay can never hide them
    grid.at(grid.start).kind = START
    grid.at(grid.end).kind = END


def clear_all(grid: Grid) -> Grid:
    return create_grid(grid.rows, grid.cols, grid.start, grid.end)


def clone_grid(grid: Grid) -> Grid:
    cells = [
        [Cell(c.row, c.col, c.kind, c.distance, c.heuristic, c.total_cost,
              c.previous, c.visited) for c in row]
        for row in grid.cells
    ]
    return Grid(grid.rows, grid.cols, cells, grid.start, grid.end)


def count_kind(grid: Grid, kind: str) -> int:
    return sum(1 for c in grid.iter_cells() if c.kind == kind)


def wall_count(grid: Grid) -> int:
    return count_kind(grid, WALL)
