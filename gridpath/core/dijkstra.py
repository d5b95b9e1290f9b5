# gridpath/core/dijkstra.py
#!/usr/bin/env python3
"""
Dijkstra, one finalized cell per step() for animation.

The heap holds (distance, row, col). Unreached cells are never pushed, so
they stay at distance inf; an empty heap means the smallest remaining
distance is inf and the search stops. Ties break row-major.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple
import heapq

from gridpath.core.algo_base import SearchAlgo
from gridpath.core.types import Cell, Coord


@dataclass
class DijkstraAlgo(SearchAlgo):
    name: str = "Dijkstra"

    open_pq: List[Tuple[float, int, int]] = field(default_factory=list)   # (g, row, col)

    def _clear_frontier(self) -> None:
        self.open_pq.clear()

    def _seed(self, start: Cell) -> None:
        start.distance = 0
        heapq.heappush(self.open_pq, (0, start.row, start.col))

    def _next_cell(self) -> Optional[Cell]:
        while self.open_pq:
            g_u, r, c = heapq.heappop(self.open_pq)
            u = self.grid.cells[r][c]
            # stale entry: a shorter distance was pushed later, or already done
            if u.visited or g_u != u.distance:
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
                if v.distance == float("inf"):
                    opened_now.append(v.coord)
                v.distance = alt
                v.previous = u.coord
                heapq.heappush(self.open_pq, (alt, v.row, v.col))
        return opened_now

    def _frontier_size(self) -> int:
        return len(self.open_pq)
