# gridpath/core/playback.py
#!/usr/bin/env python3
"""
Paced, cancellable replay of a search onto the board.

State machine:
    idle -> running -> completed | cancelled

While running the controller is the only writer of the board: edits made
through it are rejected, and the search itself works on a private copy.
Every advance() applies exactly one visitation event (or one path cell
during the trace phase) and returns how long to wait before the next call.
Nothing here sleeps on its own: the caller's loop does the waiting, either
a frame loop through tick() or play() with an injectable sleep.

Cancellation is checked at the top of each advance(), so a pending delay
always runs out before the stop is observed. Markers already applied stay
on the board.

A start() while a run is active is rejected; the running run carries on.
"""

import logging
import random
import time
from typing import Callable, List, Optional

from gridpath.core import grid as board_ops
from gridpath.core.algo_base import SearchAlgo
from gridpath.core.maze import generate_maze
from gridpath.core.search import ALGORITHMS, make_algo
from gridpath.core.types import Grid, Coord, RunResult, SearchEvent, MARKERS, VISITED, PATH

logger = logging.getLogger(__name__)

IDLE      = "idle"
RUNNING   = "running"
COMPLETED = "completed"
CANCELLED = "cancelled"

SEARCH_PHASE = "search"
TRACE_PHASE  = "trace"

SPEED_MIN = 0
SPEED_MAX = 100
DEFAULT_SPEED = 50
TRACE_DELAY = 0.030  # seconds per path cell, independent of speed


def clamp_speed(speed: int) -> int:
    return int(max(SPEED_MIN, min(SPEED_MAX, speed)))


def delay_for_speed(speed: int) -> float:
    """speed 0..100 -> seconds between visitation events (101 ms .. 1 ms)."""
    return (101 - clamp_speed(speed)) / 1000.0


class PlaybackController:
    def __init__(self, grid: Grid, algorithm: str = "dijkstra", speed: int = DEFAULT_SPEED):
        self.grid = grid
        self.algorithm = self._check_algorithm(algorithm)
        self.speed = clamp_speed(speed)

        self.state = IDLE
        self.phase: Optional[str] = None
        self.current: Optional[Coord] = None
        self.result: Optional[RunResult] = None
        self.visited_count = 0
        self.path_length = 0
        self.events_applied = 0

        self._algo: Optional[SearchAlgo] = None
        self._cancel_requested = False
        self._trace: List[Coord] = []
        self._trace_i = 0
        self._next_due = 0.0

    @staticmethod
    def _check_algorithm(name: str) -> str:
        key = name.lower()
        if key not in ALGORITHMS:
            raise ValueError(f"unknown algorithm {name!r}")
        return key

    # -------------------- settings --------------------

    @property
    def running(self) -> bool:
        return self.state == RUNNING

    @property
    def search_delay(self) -> float:
        return delay_for_speed(self.speed)

    def set_speed(self, speed: int) -> None:
        # allowed mid-run, takes effect from the next event
        self.speed = clamp_speed(speed)

    def set_algorithm(self, algorithm: str) -> bool:
        if self.running:
            logger.debug("algorithm change rejected while running")
            return False
        self.algorithm = self._check_algorithm(algorithm)
        return True

    # -------------------- run control --------------------

    def start(self, algorithm: Optional[str] = None) -> bool:
        if self.running:
            logger.warning("start rejected: a %s run is already active", self.algorithm)
            return False
        if algorithm is not None:
            self.algorithm = self._check_algorithm(algorithm)

        self._reset_run()
        self._algo = make_algo(self.algorithm)
        self._algo.init(self.grid)
        self.state = RUNNING
        self.phase = SEARCH_PHASE
        self._next_due = 0.0
        logger.info("playback start: %s, speed=%d", self.algorithm, self.speed)
        return True

    def cancel(self) -> bool:
        if not self.running:
            return False
        self._cancel_requested = True
        return True

    def is_cancelled(self) -> bool:
        return self._cancel_requested or self.state == CANCELLED

    def advance(self) -> Optional[float]:
        """Apply one step. Returns the delay before the next call, None once finished."""
        if self.state != RUNNING:
            return None
        if self._cancel_requested:
            self._finish(CANCELLED)
            return None
        if self.phase == SEARCH_PHASE:
            return self._advance_search()
        return self._advance_trace()

    def tick(self, now: Optional[float] = None) -> bool:
        """Frame-loop adapter: advance once if the last delay has run out."""
        if self.state != RUNNING:
            return False
        now = time.monotonic() if now is None else now
        if now < self._next_due:
            return False
        delay = self.advance()
        if delay is not None:
            self._next_due = now + delay
        return True

    def play(self, sleep: Callable[[float], None] = time.sleep) -> Optional[RunResult]:
        """Blocking driver: start if needed, then advance/sleep until finished."""
        if self.state != RUNNING and not self.start():
            return None
        while True:
            delay = self.advance()
            if delay is None:
                break
            sleep(delay)
        return self.result

    # -------------------- phases --------------------

    def _advance_search(self) -> Optional[float]:
        res = self._algo.step()
        if res.event is not None:
            self._apply_visit(res.event)

        if res.status == "running":
            return self.search_delay

        self.result = RunResult(algorithm=self.algorithm, status=res.status,
                                path=res.path or [], visited_count=self._algo.visited_count)
        self.current = None
        if not self.result.found:
            self._finish(COMPLETED)
            return None

        self.path_length = self.result.path_length
        self._trace = list(self.result.path)
        self._trace_i = 0
        self.phase = TRACE_PHASE
        return self.search_delay

    def _advance_trace(self) -> Optional[float]:
        # markers keep their kind and cost no delay
        while self._trace_i < len(self._trace):
            cell = self.grid.at(self._trace[self._trace_i])
            self._trace_i += 1
            if cell.kind not in MARKERS:
                cell.kind = PATH
                return TRACE_DELAY
        self._finish(COMPLETED)
        return None

    def _apply_visit(self, event: SearchEvent) -> None:
        cell = self.grid.at(event.cell)
        cell.visited = True
        if cell.kind not in MARKERS:
            cell.kind = VISITED
        self.current = event.cell
        self.visited_count = event.visited_count
        self.events_applied += 1

    def _finish(self, state: str) -> None:
        self.state = state
        self.phase = None
        self.current = None
        self._cancel_requested = False
        if state == CANCELLED:
            logger.info("playback cancelled after %d events", self.events_applied)
        else:
            logger.info("playback %s: %s, visited=%d path_len=%d", self.algorithm,
                        self.result.status if self.result else "?",
                        self.visited_count, self.path_length)

    def _reset_run(self) -> None:
        board_ops.clear_path(self.grid)
        self.state = IDLE
        self.phase = None
        self.current = None
        self.result = None
        self.visited_count = 0
        self.path_length = 0
        self.events_applied = 0
        self._algo = None
        self._cancel_requested = False
        self._trace = []
        self._trace_i = 0

    # -------------------- guarded edits --------------------

    def toggle_wall(self, row: int, col: int) -> bool:
        if self.running:
            return False
        return board_ops.toggle_wall(self.grid, row, col)

    def move_start(self, row: int, col: int) -> bool:
        if self.running:
            return False
        return board_ops.move_start(self.grid, row, col)

    def move_end(self, row: int, col: int) -> bool:
        if self.running:
            return False
        return board_ops.move_end(self.grid, row, col)

    def clear_path(self) -> bool:
        if self.running:
            return False
        self._reset_run()
        return True

    def clear_all(self) -> bool:
        if self.running:
            return False
        self.grid = board_ops.clear_all(self.grid)
        self._reset_run()
        return True

    def generate_maze(self, rng: Optional[random.Random] = None) -> bool:
        if self.running:
            return False
        self.grid = generate_maze(self.grid, rng)
        self._reset_run()
        return True
