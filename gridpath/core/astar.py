# gridpath/core/astar.py
#!/usr/bin/env python3
"""
A*, one finalized cell per step() for animation.

Heuristic:
- Manhattan distance to the end cell. Every move costs 1 and there are no
  diagonal moves, so it never overestimates and the path found is shortest.

Open set:
- heap of (f, h, row, col): lower f, then lower h (closer to the goal),
  then row-major.
- relaxing a cell pushes a fresh entry instead of updating the old one, so
  a cell can sit in the heap more than once. Pops of already finalized
  cells are skipped.
"""

from dataclasses import dataclass, field
from math import inf
from typing import List, Optional, Tuple
import heapq

from gridpath.core.algo_base import SearchAlgo
from gridpath.core.types import Cell, Coord


def manhattan(a: Coord, b: Coord) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


@dataclass
class AStarAlgo(SearchAlgo):
    name: str = "A*"

    open_pq: List[Tuple[float, int, int, int]] = field(default_factory=list)  # (f, h, row, col)

    def _h(self, c: Cell) -> int:
        return manhattan(c.coord, self.grid.end)

    def _clear_frontier(self) -> None:
        self.open_pq.clear()

    def _seed(self, start: Cell) -> None:
        start.distance = 0
        start.heuristic = self._h(start)
        start.total_cost = start.heuristic
        heapq.heappush(self.open_pq, (start.total_cost, start.heuristic, start.row, start.col))

    def _next_cell(self) -> Optional[Cell]:
        while self.open_pq:
            _, _, r, c = heapq.heappop(self.open_pq)
            u = self.grid.cells[r][c]
            if u.visited:
                continue
            u.visited = True
            return u
        return None

    def _expand(self, u: Cell) -> List[Coord]:
        opened_now: List[Coord] = []
        for v in self._neighbors4(u):
            if v.visited:
                continue
            alt = u.distance + 1
            if alt < v.distance:
                if v.distance == inf:
                    opened_now.append(v.coord)
                v.distance = alt
                v.heuristic = self._h(v)
                v.total_cost = v.distance + v.heuristic
                v.previous = u.coord
                heapq.heappush(self.open_pq, (v.total_cost, v.heuristic, v.row, v.col))
        return opened_now

    def _frontier_size(self) -> int:
        return len(self.open_pq)
