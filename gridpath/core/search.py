# gridpath/core/search.py
#!/usr/bin/env python3
"""
Algorithm registry and one-shot runners.

run_search() drives an algorithm to the end, handing every visitation
event to a callback and checking a cancel predicate before each step.
iter_events() exposes the same run as a generator whose return value is
the RunResult.
"""

import logging
from typing import Callable, Dict, Generator, Optional, Type

from gridpath.core.algo_base import SearchAlgo
from gridpath.core.astar import AStarAlgo
from gridpath.core.bfs import BFSAlgo
from gridpath.core.dfs import DFSAlgo
from gridpath.core.dijkstra import DijkstraAlgo
from gridpath.core.types import Grid, RunResult, SearchEvent

logger = logging.getLogger(__name__)

ALGORITHMS: Dict[str, Type[SearchAlgo]] = {
    "dijkstra": DijkstraAlgo,
    "astar":    AStarAlgo,
    "bfs":      BFSAlgo,
    "dfs":      DFSAlgo,
}

ALGORITHM_INFO: Dict[str, Dict[str, object]] = {
    "dijkstra": {
        "name": "Dijkstra's Algorithm",
        "short": "Dijkstra",
        "description": "Guarantees shortest path. Explores in order of distance from start.",
        "optimal": True,
    },
    "astar": {
        "name": "A* Search",
        "short": "A*",
        "description": "Uses a Manhattan heuristic to head for the goal. "
                       "Shortest path since the heuristic is admissible.",
        "optimal": True,
    },
    "bfs": {
        "name": "Breadth-First Search",
        "short": "BFS",
        "description": "Explores all neighbors before going deeper. "
                       "Shortest path on an unweighted grid.",
        "optimal": True,
    },
    "dfs": {
        "name": "Depth-First Search",
        "short": "DFS",
        "description": "Goes as deep as possible before backtracking. "
                       "Does NOT guarantee the shortest path.",
        "optimal": False,
    },
}


def make_algo(algorithm: str) -> SearchAlgo:
    key = algorithm.lower()
    if key not in ALGORITHMS:
        raise ValueError(f"unknown algorithm {algorithm!r}, expected one of {sorted(ALGORITHMS)}")
    return ALGORITHMS[key]()


def iter_events(grid: Grid, algorithm: str) -> Generator[SearchEvent, None, RunResult]:
    algo = make_algo(algorithm)
    algo.init(grid)
    while True:
        res = algo.step()
        if res.event is not None:
            yield res.event
        if res.status in ("done", "no_path"):
            return RunResult(algorithm=algorithm.lower(), status=res.status,
                             path=res.path or [], visited_count=algo.visited_count)


def run_search(grid: Grid, algorithm: str,
               on_event: Optional[Callable[[SearchEvent], None]] = None,
               is_cancelled: Optional[Callable[[], bool]] = None) -> RunResult:
    """Run one algorithm over a private copy of `grid`; the grid itself is untouched."""
    algo = make_algo(algorithm)
    algo.init(grid)
    name = algorithm.lower()
    logger.info("run %s from %s to %s", name, grid.start, grid.end)

    while True:
        if is_cancelled is not None and is_cancelled():
            logger.info("run %s cancelled after %d visits", name, algo.visited_count)
            return RunResult(algorithm=name, status="cancelled",
                             visited_count=algo.visited_count)
        res = algo.step()
        if res.event is not None and on_event is not None:
            on_event(res.event)
        if res.status in ("done", "no_path"):
            result = RunResult(algorithm=name, status=res.status,
                               path=res.path or [], visited_count=algo.visited_count)
            logger.info("run %s: %s, visited=%d path_len=%d",
                        name, result.status, result.visited_count, result.path_length)
            return result
