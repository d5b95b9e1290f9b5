# tests/test_search.py
import random

import pytest

from gridpath.core.astar import AStarAlgo, manhattan
from gridpath.core.dfs import DFSAlgo
from gridpath.core.dijkstra import DijkstraAlgo
from gridpath.core.grid import build_grid, create_grid, toggle_wall, count_kind
from gridpath.core.maze import generate_maze
from gridpath.core.search import ALGORITHMS, iter_events, make_algo, run_search
from gridpath.core.types import WALL, VISITED, StepResult

SHORTEST = ("dijkstra", "astar", "bfs")


def _assert_valid_path(grid, path):
    assert path[0] == grid.start
    assert path[-1] == grid.end
    for (r1, c1), (r2, c2) in zip(path, path[1:]):
        assert abs(r1 - r2) + abs(c1 - c2) == 1
    assert not any(grid.is_block(p) for p in path)
    assert len(set(path)) == len(path)


@pytest.mark.parametrize("algo", SHORTEST)
def test_open_board_path_length_is_manhattan_plus_one(board, algo):
    result = run_search(board, algo)
    assert result.found
    assert result.path_length == 31
    assert result.path_length == manhattan(board.start, board.end) + 1
    _assert_valid_path(board, result.path)


def test_astar_visits_no_more_than_bfs_on_open_board(board):
    astar = run_search(board, "astar")
    bfs = run_search(board, "bfs")
    assert astar.visited_count <= bfs.visited_count
    # straight corridor: only the cells on the path get finalized
    assert astar.visited_count == 31


@pytest.mark.parametrize("seed", range(6))
def test_astar_never_visits_more_than_dijkstra(seed):
    grid = build_grid()
    rng = random.Random(seed)
    for _ in range(250):
        toggle_wall(grid, rng.randrange(grid.rows), rng.randrange(grid.cols))
    d = run_search(grid, "dijkstra")
    a = run_search(grid, "astar")
    assert a.found == d.found
    assert a.visited_count <= d.visited_count
    if d.found:
        assert a.path_length == d.path_length


@pytest.mark.parametrize("seed", range(4))
def test_all_algorithms_agree_on_maze(seed):
    maze = generate_maze(build_grid(), random.Random(seed))
    results = {name: run_search(maze, name) for name in ALGORITHMS}
    assert all(r.found for r in results.values())
    lengths = {results[n].path_length for n in SHORTEST}
    assert len(lengths) == 1
    assert results["dfs"].path_length >= lengths.pop()
    for r in results.values():
        _assert_valid_path(maze, r.path)


def test_dfs_finds_a_path_but_not_the_shortest(board):
    dfs = run_search(board, "dfs")
    bfs = run_search(board, "bfs")
    assert dfs.found
    _assert_valid_path(board, dfs.path)
    assert dfs.path_length > bfs.path_length


@pytest.mark.parametrize("algo", sorted(ALGORITHMS))
def test_enclosed_end_reports_no_path(walled_in_end, algo):
    result = run_search(walled_in_end, algo)
    assert not result.found
    assert result.status == "no_path"
    assert result.path == []
    assert result.path_length == 0
    reachable = 10 * 10 - count_kind(walled_in_end, WALL) - 1
    assert result.visited_count == reachable


@pytest.mark.parametrize("algo", sorted(ALGORITHMS))
def test_events_are_ordered_and_match_visited_count(small_board, algo):
    seen = []
    result = run_search(small_board, algo, on_event=seen.append)
    assert [e.index for e in seen] == list(range(len(seen)))
    assert [e.visited_count for e in seen] == list(range(1, len(seen) + 1))
    assert len(seen) == result.visited_count
    assert seen[0].cell == small_board.start
    assert seen[-1].cell == small_board.end
    assert len({e.cell for e in seen}) == len(seen)


def test_walls_are_never_visited():
    g = create_grid(6, 6, (0, 0), (5, 5))
    for r in range(0, 5):
        toggle_wall(g, r, 3)
    for algo in ALGORITHMS:
        cells = []
        run_search(g, algo, on_event=lambda e: cells.append(e.cell))
        assert not any(g.is_block(c) for c in cells)


def test_run_search_does_not_touch_the_board(board):
    run_search(board, "dijkstra")
    assert count_kind(board, VISITED) == 0
    assert not any(c.visited or c.previous for c in board.iter_cells())


def test_is_cancelled_stops_the_run(board):
    seen = []
    result = run_search(board, "bfs", on_event=seen.append,
                        is_cancelled=lambda: len(seen) >= 5)
    assert result.status == "cancelled"
    assert not result.found
    assert result.path_length == 0
    assert len(seen) == 5
    assert result.visited_count == 5


def test_iter_events_returns_result(board):
    gen = iter_events(board, "astar")
    events = []
    while True:
        try:
            events.append(next(gen))
        except StopIteration as stop:
            result = stop.value
            break
    assert result.found
    assert len(events) == result.visited_count == 31


def test_unknown_algorithm_raises(board):
    with pytest.raises(ValueError):
        make_algo("greedy")
    with pytest.raises(ValueError):
        run_search(board, "greedy")


def test_step_api_yields_one_event_per_step(small_board):
    algo = DijkstraAlgo()
    algo.init(small_board)
    res = algo.step()
    assert isinstance(res, StepResult)
    assert res.status == "running"
    assert res.event.cell == small_board.start
    assert sorted(res.opened) == [(0, 1), (1, 0)]
    while res.status == "running":
        res = algo.step()
        assert res.event is not None
    assert res.status == "done"
    # terminal status is sticky
    again = algo.step()
    assert again.status == "done" and again.event is None
    assert again.path == res.path


def test_reset_replays_identically(board):
    algo = AStarAlgo()
    algo.init(board)
    first = []
    while True:
        res = algo.step()
        if res.event:
            first.append(res.event.cell)
        if res.status != "running":
            break
    algo.reset()
    second = []
    while True:
        res = algo.step()
        if res.event:
            second.append(res.event.cell)
        if res.status != "running":
            break
    assert first == second


def test_dfs_follows_neighbour_order(small_board):
    # order is up, down, left, right; from (0, 0) only down and right exist
    algo = DFSAlgo()
    algo.init(small_board)
    algo.step()
    assert algo.step().event.cell == (1, 0)


def test_idle_before_init():
    assert DijkstraAlgo().step().status == "idle"
