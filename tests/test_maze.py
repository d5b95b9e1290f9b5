# tests/test_maze.py
import random
from collections import deque

import pytest

from gridpath.core.grid import build_grid, create_grid, count_kind
from gridpath.core.maze import SEED, generate_maze
from gridpath.core.search import run_search
from gridpath.core.types import WALL, START, END


def _flood(grid, origin):
    """All non-wall cells reachable from origin (4-connected)."""
    seen = {origin}
    queue = deque([origin])
    while queue:
        r, c = queue.popleft()
        for n in ((r - 1, c), (r + 1, c), (r, c - 1), (r, c + 1)):
            if grid.in_bounds(n) and n not in seen and not grid.is_block(n):
                seen.add(n)
                queue.append(n)
    return seen


def _open_cells(grid):
    return {c.coord for c in grid.iter_cells() if c.kind != WALL}


@pytest.mark.parametrize("seed", [0, 1, 7, 42, 1234])
def test_maze_is_fully_connected(board, seed):
    maze = generate_maze(board, random.Random(seed))
    assert _flood(maze, SEED) == _open_cells(maze)


def test_maze_returns_new_grid_with_same_markers(board):
    maze = generate_maze(board, random.Random(3))
    assert maze is not board
    assert (maze.rows, maze.cols) == (board.rows, board.cols)
    assert maze.start == board.start and maze.end == board.end
    assert count_kind(maze, START) == 1 and count_kind(maze, END) == 1
    # the source board is untouched
    assert count_kind(board, WALL) == 0


def test_maze_keeps_outer_border_walled_away_from_markers(board):
    maze = generate_maze(board, random.Random(5))
    for c in range(maze.cols):
        assert maze.cells[0][c].kind == WALL
        assert maze.cells[maze.rows - 1][c].kind == WALL


def test_maze_clears_block_around_markers(board):
    maze = generate_maze(board, random.Random(9))
    for cr, cc in (maze.start, maze.end):
        for dr in (-1, 0, 1):
            for dc in (-1, 0, 1):
                assert maze.cells[cr + dr][cc + dc].kind != WALL


def test_maze_is_reproducible_with_same_seed(board):
    a = generate_maze(board, random.Random(11))
    b = generate_maze(board, random.Random(11))
    assert [[c.kind for c in row] for row in a.cells] == [[c.kind for c in row] for row in b.cells]


def test_markers_off_lattice_still_connect():
    # even row/col markers are never carved directly
    g = create_grid(21, 31, (10, 10), (18, 28))
    maze = generate_maze(g, random.Random(2))
    assert _flood(maze, SEED) == _open_cells(maze)
    assert run_search(maze, "bfs").found


@pytest.mark.parametrize("start, end", [
    ((10, 5), (19, 39)),
    ((0, 0), (19, 39)),
    ((19, 0), (0, 39)),
])
@pytest.mark.parametrize("seed", range(3))
def test_markers_in_far_corners_of_even_board_connect(start, end, seed):
    # row 19 and column 39 lie past the last carvable lattice row and column
    g = create_grid(20, 40, start, end)
    maze = generate_maze(g, random.Random(seed))
    assert _flood(maze, SEED) == _open_cells(maze)
    assert run_search(maze, "bfs").found


def test_tiny_grid_skips_carving():
    g = create_grid(2, 2, (0, 0), (1, 1))
    maze = generate_maze(g, random.Random(0))
    assert count_kind(maze, WALL) == 0


@pytest.mark.parametrize("seed", range(5))
def test_maze_always_solvable(seed):
    maze = generate_maze(build_grid(), random.Random(seed))
    assert run_search(maze, "astar").found
