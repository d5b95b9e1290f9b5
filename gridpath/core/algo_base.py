# gridpath/core/algo_base.py
#!/usr/bin/env python3
"""
Shared plumbing for the step-wise search algorithms.

Algorithm API (what the playback controller and run_search rely on):
- init(grid)  -> clone the grid and seed the frontier
- reset()     -> start over from the same source grid
- step()      -> ONE visitation (finalized cell) per call, as a StepResult

Each subclass fills in:
- _seed(start_cell)      push the start cell onto its frontier
- _next_cell()           pop until a cell can be finalized, or None when empty
- _expand(cell)          push/relax neighbours, return the newly opened coords
- _frontier_size()
"""

from dataclasses import dataclass, field
from typing import List, Optional

from gridpath.core.grid import clone_grid, neighbors
from gridpath.core.types import Grid, Cell, Coord, StepResult, SearchEvent


@dataclass
class SearchAlgo:
    name: str = "search"

    source: Optional[Grid] = None      # board handed to init(); never mutated
    grid: Optional[Grid] = None        # private working copy
    visited_count: int = 0
    events: int = 0
    done: bool = False
    no_path: bool = False
    path: List[Coord] = field(default_factory=list)

    # -------------------- lifecycle --------------------

    def init(self, grid: Grid) -> None:
        self.source = grid
        self.reset()

    def reset(self) -> None:
        if self.source is None:
            return
        self.grid = clone_grid(self.source)
        for cell in self.grid.iter_cells():
            cell.reset_search()
        self.visited_count = 0
        self.events = 0
        self.done = False
        self.no_path = False
        self.path = []
        self._clear_frontier()
        self._seed(self.grid.at(self.grid.start))

    # -------------------- hooks --------------------

    def _clear_frontier(self) -> None:
        raise NotImplementedError

    def _seed(self, start: Cell) -> None:
        raise NotImplementedError

    def _next_cell(self) -> Optional[Cell]:
        raise NotImplementedError

    def _expand(self, cell: Cell) -> List[Coord]:
        raise NotImplementedError

    def _frontier_size(self) -> int:
        raise NotImplementedError

    # -------------------- helpers --------------------

    def _neighbors4(self, cell: Cell) -> List[Cell]:
        return neighbors(self.grid, cell)

    def _reconstruct_path(self, end: Cell) -> List[Coord]:
        path: List[Coord] = []
        cur: Optional[Coord] = end.coord
        while cur is not None:
            path.append(cur)
            if cur == self.grid.start:
                break
            cur = self.grid.at(cur).previous
        path.reverse()
        return path

    # -------------------- stepping --------------------

    def step(self) -> StepResult:
        if self.grid is None:
            return StepResult(status="idle", metrics={"algo": self.name})

        if self.done:
            return StepResult(status="done", path=list(self.path),
                              metrics=self._metrics(path_len=len(self.path)))
        if self.no_path:
            return StepResult(status="no_path", metrics=self._metrics())

        u = self._next_cell()
        if u is None:
            self.no_path = True
            return StepResult(status="no_path", metrics=self._metrics())

        self.visited_count += 1

        if u.coord == self.grid.end:
            self.done = True
            self.path = self._reconstruct_path(u)
            return StepResult(status="done", event=self._event(u), current=u.coord,
                              path=list(self.path),
                              metrics=self._metrics(path_len=len(self.path)))

        opened_now = self._expand(u)
        return StepResult(status="running", event=self._event(u), opened=opened_now,
                          current=u.coord, metrics=self._metrics())

    def _event(self, u: Cell) -> SearchEvent:
        ev = SearchEvent(cell=u.coord, visited_count=self.visited_count,
                         frontier_size=self._frontier_size(), index=self.events)
        self.events += 1
        return ev

    def _metrics(self, path_len: int = 0) -> dict:
        return {
            "algo": self.name,
            "visited": self.visited_count,
            "open_size": self._frontier_size() if self.grid is not None else 0,
            "path_len": path_len,
        }
