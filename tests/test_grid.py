# tests/test_grid.py
import pytest

from gridpath.core.grid import (
    build_grid, create_grid, toggle_wall, move_start, move_end, neighbors,
    clear_path, clear_all, clone_grid, count_kind, wall_count,
)
from gridpath.core.types import InvalidPosition, EMPTY, WALL, START, END, VISITED, PATH


def _snapshot(g):
    return [[(c.kind, c.distance, c.previous, c.visited) for c in row] for row in g.cells]


def test_build_grid_default_layout(board):
    assert (board.rows, board.cols) == (20, 40)
    assert board.start == (10, 5)
    assert board.end == (10, 35)
    assert count_kind(board, START) == 1
    assert count_kind(board, END) == 1
    assert count_kind(board, EMPTY) == 20 * 40 - 2


def test_create_grid_rejects_bad_positions():
    with pytest.raises(InvalidPosition):
        create_grid(5, 5, (2, 2), (2, 2))
    with pytest.raises(InvalidPosition):
        create_grid(5, 5, (0, 0), (5, 0))
    with pytest.raises(InvalidPosition):
        create_grid(5, 5, (-1, 0), (1, 1))


def test_create_grid_rejects_bad_dimensions():
    with pytest.raises(ValueError):
        create_grid(0, 10, (0, 0), (0, 1))
    with pytest.raises(ValueError):
        build_grid(1, 1)


def test_toggle_wall_flips_and_restores(small_board):
    assert toggle_wall(small_board, 2, 2)
    assert small_board.cells[2][2].kind == WALL
    assert toggle_wall(small_board, 2, 2)
    assert small_board.cells[2][2].kind == EMPTY


def test_toggle_wall_on_start_is_rejected(board):
    before = _snapshot(board)
    assert not toggle_wall(board, *board.start)
    assert _snapshot(board) == before
    assert board.at((10, 5)).kind == START
    assert board.start == (10, 5)


def test_toggle_wall_out_of_bounds_is_noop(small_board):
    assert not toggle_wall(small_board, 9, 9)
    assert wall_count(small_board) == 0


def test_move_start_relocates_marker(small_board):
    assert move_start(small_board, 2, 3)
    assert small_board.start == (2, 3)
    assert small_board.cells[2][3].kind == START
    assert small_board.cells[0][0].kind == EMPTY
    assert count_kind(small_board, START) == 1


def test_move_markers_rejected_on_wall_or_other_marker(small_board):
    toggle_wall(small_board, 1, 1)
    assert not move_start(small_board, 1, 1)
    assert not move_start(small_board, 4, 4)
    assert not move_end(small_board, 0, 0)
    assert small_board.start == (0, 0)
    assert small_board.end == (4, 4)


def test_neighbors_are_orthogonal_and_skip_walls(small_board):
    center = small_board.cells[2][2]
    assert [c.coord for c in neighbors(small_board, center)] == [(1, 2), (3, 2), (2, 1), (2, 3)]
    toggle_wall(small_board, 1, 2)
    assert (1, 2) not in [c.coord for c in neighbors(small_board, center)]
    corner = small_board.cells[0][0]
    assert sorted(c.coord for c in neighbors(small_board, corner)) == [(0, 1), (1, 0)]


def test_clear_path_is_idempotent(small_board):
    toggle_wall(small_board, 2, 2)
    small_board.cells[1][1].kind = VISITED
    small_board.cells[1][1].visited = True
    small_board.cells[1][1].distance = 3
    small_board.cells[3][3].kind = PATH

    clear_path(small_board)
    once = _snapshot(small_board)
    clear_path(small_board)
    assert _snapshot(small_board) == once

    assert small_board.cells[2][2].kind == WALL
    assert count_kind(small_board, VISITED) == 0
    assert count_kind(small_board, PATH) == 0
    assert not any(c.visited for c in small_board.iter_cells())


def test_clear_all_keeps_markers_and_drops_walls(small_board):
    move_end(small_board, 3, 4)
    toggle_wall(small_board, 2, 2)
    fresh = clear_all(small_board)
    assert fresh is not small_board
    assert wall_count(fresh) == 0
    assert (fresh.start, fresh.end) == ((0, 0), (3, 4))


def test_clone_grid_is_independent(small_board):
    copy = clone_grid(small_board)
    toggle_wall(copy, 2, 2)
    copy.cells[1][1].distance = 7
    assert small_board.cells[2][2].kind == EMPTY
    assert small_board.cells[1][1].distance == float("inf")
