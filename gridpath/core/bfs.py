# gridpath/core/bfs.py
#!/usr/bin/env python3
"""
Breadth-first search, one dequeued cell per step().

Cells are marked visited when they are enqueued, so each one enters the
queue at most once. Level order gives the shortest path in hops.
"""

from collections import deque
from dataclasses import dataclass, field
from typing import Deque, List, Optional

from gridpath.core.algo_base import SearchAlgo
from gridpath.core.types import Cell, Coord


@dataclass
class BFSAlgo(SearchAlgo):
    name: str = "BFS"

    queue: Deque[Coord] = field(default_factory=deque)

    def _clear_frontier(self) -> None:
        self.queue.clear()

    def _seed(self, start: Cell) -> None:
        start.distance = 0
        start.visited = True
        self.queue.append(start.coord)

    def _next_cell(self) -> Optional[Cell]:
        if not self.queue:
            return None
        return self.grid.at(self.queue.popleft())

    def _expand(self, u: Cell) -> List[Coord]:
        opened_now: List[Coord] = []
        for v in self._neighbors4(u):
            if v.visited:
                continue
            v.visited = True
            v.distance = u.distance + 1
            v.previous = u.coord
            self.queue.append(v.coord)
            opened_now.append(v.coord)
        return opened_now

    def _frontier_size(self) -> int:
        return len(self.queue)
